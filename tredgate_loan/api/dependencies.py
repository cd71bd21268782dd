"""Dependency injection for FastAPI endpoints"""

from functools import lru_cache

from fastapi import Request

from tredgate_loan.config import settings
from tredgate_loan.infrastructure.database.repositories import LoanRepository
from tredgate_loan.infrastructure.database.session import build_engine, build_session_factory
from tredgate_loan.infrastructure.database.stores import SqlKeyValueStore
from tredgate_loan.services.loans import LoanService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


@lru_cache(maxsize=1)
def get_loan_service() -> LoanService:
    """Provide the process-wide loan service backed by the SQL key-value store"""
    engine = build_engine(settings.database_url)
    store = SqlKeyValueStore(build_session_factory(engine))
    repository = LoanRepository(store, storage_key=settings.storage_key)
    repository.load()
    return LoanService(repository, payment_method=settings.payment_method)
