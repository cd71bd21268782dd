"""Data access layer for loan applications"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from tredgate_loan.domain.exceptions import LoanNotFoundError, PersistenceError
from tredgate_loan.domain.models import CreateLoanInput, LoanApplication, LoanStatus
from tredgate_loan.domain.decisions import Transition
from tredgate_loan.infrastructure.database.serialization import decode_loans, encode_loans
from tredgate_loan.infrastructure.database.stores import KeyValueStore
from tredgate_loan.infrastructure.observability.metrics import store_load_failures_counter

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "tredgate_loans"

IdFactory = Callable[[], str]
Clock = Callable[[], datetime]


def _uuid_id() -> str:
    return str(uuid.uuid4())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LoanRepository:
    """
    Ordered in-memory collection of loans, mirrored to a key-value store.

    The whole collection is saved under one key after every mutation. A
    mutation builds the new collection, saves it, and only then replaces the
    in-memory copy, so a failed save leaves memory equal to the last
    persisted snapshot.
    """

    def __init__(
        self,
        store: KeyValueStore,
        storage_key: str = DEFAULT_STORAGE_KEY,
        id_factory: Optional[IdFactory] = None,
        clock: Optional[Clock] = None,
    ):
        self.store = store
        self.storage_key = storage_key
        self.id_factory = id_factory or _uuid_id
        self.clock = clock or _utc_now
        self._loans: List[LoanApplication] = []
        self._lock = threading.Lock()

    def load(self) -> None:
        """Restore the collection; missing or unreadable data yields an empty one"""
        with self._lock:
            try:
                payload = self.store.get(self.storage_key)
                self._loans = decode_loans(payload) if payload is not None else []
            except PersistenceError as e:
                store_load_failures_counter.inc()
                logger.warning(
                    f"Falling back to empty loan collection: {e}",
                    extra={"storage_key": self.storage_key},
                )
                self._loans = []

    def list(self) -> Tuple[LoanApplication, ...]:
        """All loans in insertion order"""
        return tuple(self._loans)

    def get(self, loan_id: str) -> LoanApplication:
        for loan in self._loans:
            if loan.id == loan_id:
                return loan
        raise LoanNotFoundError(loan_id)

    def create(self, data: CreateLoanInput) -> LoanApplication:
        """
        Append a new pending loan built from an already-validated request.

        Raises:
            PersistenceError: save failed; the loan is not added
        """
        with self._lock:
            loan = LoanApplication(
                id=self._next_id(),
                applicant_name=data.applicant_name,
                amount=data.amount,
                term_months=data.term_months,
                interest_rate=data.interest_rate,
                status=LoanStatus.PENDING,
                created_at=self.clock(),
            )
            self._commit(self._loans + [loan])
            return loan

    def apply_transition(self, loan_id: str, transition: Transition) -> LoanApplication:
        """
        Replace a loan with the result of a decision transition, keeping its position.

        Raises:
            LoanNotFoundError: unknown id
            InvalidTransitionError: raised by the transition for non-pending loans
            PersistenceError: save failed; the loan keeps its previous status
        """
        with self._lock:
            index = self._index_of(loan_id)
            updated = transition(self._loans[index])
            loans = list(self._loans)
            loans[index] = updated
            self._commit(loans)
            return updated

    def delete(self, loan_id: str) -> LoanApplication:
        """Remove a loan regardless of status; returns the removed loan"""
        with self._lock:
            index = self._index_of(loan_id)
            removed = self._loans[index]
            self._commit(self._loans[:index] + self._loans[index + 1:])
            return removed

    def _index_of(self, loan_id: str) -> int:
        for index, loan in enumerate(self._loans):
            if loan.id == loan_id:
                return index
        raise LoanNotFoundError(loan_id)

    def _next_id(self) -> str:
        existing = {loan.id for loan in self._loans}
        loan_id = self.id_factory()
        while loan_id in existing:
            loan_id = self.id_factory()
        return loan_id

    def _commit(self, loans: List[LoanApplication]) -> None:
        self.store.set(self.storage_key, encode_loans(loans))
        self._loans = loans
