"""SQLAlchemy repository implementations."""

from cashflow.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    init_db,
    init_db_with_url,
    reset_database,
    Base,
)
from cashflow.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "init_db",
    "init_db_with_url",
    "reset_database",
    "Base",
    "SqlAlchemyTransactionRepository",
]
