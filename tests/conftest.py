"""Pytest fixtures for testing"""

import itertools
import pytest
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
from fastapi.testclient import TestClient
from tredgate_loan.api.main import create_app
from tredgate_loan.api.dependencies import get_loan_service
from tredgate_loan.domain.models import CreateLoanInput, LoanApplication, LoanStatus, PaymentMethod
from tredgate_loan.infrastructure.database.repositories import LoanRepository
from tredgate_loan.infrastructure.database.stores import InMemoryKeyValueStore
from tredgate_loan.services.loans import LoanService


BASE_TIME = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Deterministic ids: loan-1, loan-2, ..."""
    counter = itertools.count(1)
    return lambda: f"loan-{next(counter)}"


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Each call advances one minute from BASE_TIME"""
    counter = itertools.count()
    return lambda: BASE_TIME + timedelta(minutes=next(counter))


@pytest.fixture
def repository(store, id_factory, clock) -> LoanRepository:
    repo = LoanRepository(store, id_factory=id_factory, clock=clock)
    repo.load()
    return repo


@pytest.fixture
def service(repository: LoanRepository) -> LoanService:
    return LoanService(repository, payment_method=PaymentMethod.FLAT)


@pytest.fixture
def client(service: LoanService) -> TestClient:
    """Create FastAPI test client backed by the in-memory service"""
    app = create_app()
    app.dependency_overrides[get_loan_service] = lambda: service
    return TestClient(app)


@pytest.fixture
def loan_input() -> Callable[..., CreateLoanInput]:
    def _make(
        applicant_name: Optional[str] = "Jane Doe",
        amount: Optional[float] = 50000,
        term_months: Optional[int] = 24,
        interest_rate: Optional[float] = 0.08,
    ) -> CreateLoanInput:
        return CreateLoanInput(
            applicant_name=applicant_name,
            amount=amount,
            term_months=term_months,
            interest_rate=interest_rate,
        )

    return _make


@pytest.fixture
def make_loan() -> Callable[..., LoanApplication]:
    return _make_loan


def _make_loan(
    loan_id: str = "default-id",
    amount: float = 50000,
    term_months: int = 24,
    interest_rate: float = 0.08,
    status: LoanStatus = LoanStatus.PENDING,
) -> LoanApplication:
    """Loan built directly, bypassing the repository"""
    return LoanApplication(
        id=loan_id,
        applicant_name="Test User",
        amount=amount,
        term_months=term_months,
        interest_rate=interest_rate,
        status=status,
        created_at=BASE_TIME,
    )
