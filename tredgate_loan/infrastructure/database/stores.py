"""Durable key-value store adapters (load-all / save-all, no partial updates)"""

from typing import Dict, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from tredgate_loan.domain.exceptions import PersistenceError
from tredgate_loan.infrastructure.database.models import KeyValueEntry


class KeyValueStore(Protocol):
    """Capability consumed by the repository"""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryKeyValueStore:
    """Dict-backed store for tests and throwaway sessions"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class SqlKeyValueStore:
    """Store backed by the key_value_entry table (SQLite file by default)"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        """
        Raises:
            PersistenceError: database unreachable or query failed
        """
        try:
            with self.session_factory() as db:
                entry = db.get(KeyValueEntry, key)
                return entry.value if entry is not None else None
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to read '{key}' from store: {e}") from e

    def set(self, key: str, value: str) -> None:
        """
        Upsert the value under key in its own transaction.

        Raises:
            PersistenceError: write failed (the transaction is rolled back)
        """
        db: Session = self.session_factory()
        try:
            entry = db.get(KeyValueEntry, key)
            if entry is None:
                db.add(KeyValueEntry(key=key, value=value))
            else:
                entry.value = value
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Failed to write '{key}' to store: {e}") from e
        finally:
            db.close()
