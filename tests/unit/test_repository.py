"""Unit tests for the loan repository and its persistence"""

import json
import pytest
from tredgate_loan.domain.decisions import approve, auto_decide, reject
from tredgate_loan.domain.exceptions import InvalidTransitionError, LoanNotFoundError, PersistenceError
from tredgate_loan.domain.models import LoanStatus
from tredgate_loan.infrastructure.database.repositories import DEFAULT_STORAGE_KEY, LoanRepository
from tredgate_loan.infrastructure.database.stores import InMemoryKeyValueStore


class FailingWriteStore(InMemoryKeyValueStore):
    """In-memory store whose writes can be switched off"""

    fail_writes = False

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise PersistenceError("disk full")
        super().set(key, value)


def test_load_without_entry_starts_empty(repository, store):
    assert repository.list() == ()
    assert store.get(DEFAULT_STORAGE_KEY) is None


def test_create_assigns_id_timestamp_and_pending(repository, loan_input, clock):
    loan = repository.create(loan_input())

    assert loan.id == "loan-1"
    assert loan.status is LoanStatus.PENDING
    assert loan.created_at.year == 2024
    assert repository.get("loan-1") == loan


def test_create_persists_record_shape(repository, store, loan_input):
    repository.create(loan_input())

    records = json.loads(store.get(DEFAULT_STORAGE_KEY))

    assert len(records) == 1
    assert set(records[0]) == {
        "id", "applicantName", "amount", "termMonths", "interestRate", "status", "createdAt",
    }
    assert records[0]["status"] == "pending"
    assert records[0]["termMonths"] == 24


def test_round_trip_preserves_order_and_fields(repository, store, loan_input):
    for i in range(5):
        repository.create(loan_input(applicant_name=f"Applicant {i}", amount=1000 * (i + 1)))
    repository.apply_transition("loan-2", approve)
    repository.apply_transition("loan-4", reject)

    reloaded = LoanRepository(store)
    reloaded.load()

    assert reloaded.list() == repository.list()
    assert [loan.id for loan in reloaded.list()] == ["loan-1", "loan-2", "loan-3", "loan-4", "loan-5"]


def test_apply_transition_keeps_position(repository, loan_input):
    for _ in range(3):
        repository.create(loan_input())

    updated = repository.apply_transition("loan-2", auto_decide)

    assert updated.status is LoanStatus.APPROVED
    assert [loan.id for loan in repository.list()] == ["loan-1", "loan-2", "loan-3"]
    assert repository.list()[1] == updated


def test_apply_transition_on_decided_loan_changes_nothing(repository, store, loan_input):
    repository.create(loan_input())
    repository.apply_transition("loan-1", reject)
    snapshot = store.get(DEFAULT_STORAGE_KEY)

    with pytest.raises(InvalidTransitionError):
        repository.apply_transition("loan-1", approve)

    assert repository.get("loan-1").status is LoanStatus.REJECTED
    assert store.get(DEFAULT_STORAGE_KEY) == snapshot


@pytest.mark.parametrize("position", [0, 1, 2])
def test_delete_preserves_relative_order(repository, loan_input, position):
    for _ in range(3):
        repository.create(loan_input())
    ids = [loan.id for loan in repository.list()]

    repository.delete(ids[position])

    remaining = [loan.id for loan in repository.list()]
    assert len(remaining) == 2
    assert remaining == [loan_id for loan_id in ids if loan_id != ids[position]]


def test_delete_ignores_status(repository, loan_input):
    repository.create(loan_input())
    repository.apply_transition("loan-1", approve)

    removed = repository.delete("loan-1")

    assert removed.status is LoanStatus.APPROVED
    assert repository.list() == ()


def test_unknown_id_raises_not_found(repository):
    with pytest.raises(LoanNotFoundError):
        repository.get("missing")
    with pytest.raises(LoanNotFoundError):
        repository.apply_transition("missing", approve)
    with pytest.raises(LoanNotFoundError):
        repository.delete("missing")


def test_duplicate_generated_id_is_skipped(store, clock, loan_input):
    ids = iter(["a", "a", "b"])
    repo = LoanRepository(store, id_factory=lambda: next(ids), clock=clock)
    repo.load()

    repo.create(loan_input())
    second = repo.create(loan_input())

    assert second.id == "b"


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        '{"id": "x"}',
        '[{"id": "x", "applicantName": "A", "amount": -5, "termMonths": 12,'
        ' "interestRate": 0.1, "status": "pending", "createdAt": "2024-01-01T00:00:00Z"}]',
        '[{"id": "x", "applicantName": "A", "amount": 5, "termMonths": 12,'
        ' "interestRate": 0.1, "status": "archived", "createdAt": "2024-01-01T00:00:00Z"}]',
    ],
)
def test_malformed_store_falls_back_to_empty(payload):
    store = InMemoryKeyValueStore({DEFAULT_STORAGE_KEY: payload})
    repo = LoanRepository(store)

    repo.load()

    assert repo.list() == ()


def test_save_failure_leaves_memory_unchanged(clock, id_factory, loan_input):
    store = FailingWriteStore()
    repo = LoanRepository(store, id_factory=id_factory, clock=clock)
    repo.load()
    repo.create(loan_input())

    store.fail_writes = True
    with pytest.raises(PersistenceError):
        repo.create(loan_input())
    with pytest.raises(PersistenceError):
        repo.apply_transition("loan-1", approve)
    with pytest.raises(PersistenceError):
        repo.delete("loan-1")

    assert [loan.id for loan in repo.list()] == ["loan-1"]
    assert repo.get("loan-1").status is LoanStatus.PENDING
