"""
Pytest configuration and fixtures for the cashflow ledger tests.

This module provides:
- In-memory SQLite database fixtures
- A deterministic ticking clock
- Service and repository fixtures
- Factory helpers for transactions
- API test client wired to the test database
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from cashflow.main import app
from cashflow.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from cashflow.repositories.sqlalchemy import orm_models  # noqa: F401
from cashflow.repositories.sqlalchemy import SqlAlchemyTransactionRepository
from cashflow.services import LedgerService, TransactionQueryService, SummaryService
from cashflow.csv import CsvExporter
from cashflow.domain.models import Transaction, TransactionData, TransactionKind
from cashflow.core.clock import UTC_TZ
from cashflow.config.settings import Settings, set_settings, reset_settings

OWNER = "user-u"
OTHER_OWNER = "user-v"


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a timezone-aware UTC datetime."""
    return UTC_TZ.localize(datetime(year, month, day, hour, minute, second))


class TickingClock:
    """Clock that advances by one second on every read."""

    def __init__(self, start: datetime):
        self._now = start

    def __call__(self) -> datetime:
        current = self._now
        self._now = self._now + timedelta(seconds=1)
        return current


@pytest.fixture
def clock() -> TickingClock:
    """Deterministic clock starting 2024-06-15 14:30 UTC."""
    return TickingClock(utc_datetime(2024, 6, 15, 14, 30, 0))


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY AND SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def transaction_repo(test_session) -> SqlAlchemyTransactionRepository:
    """Provide test TransactionRepository."""
    return SqlAlchemyTransactionRepository(test_session)


@pytest.fixture
def ledger_service(transaction_repo, clock) -> LedgerService:
    """Provide test LedgerService with a deterministic clock."""
    return LedgerService(transaction_repo=transaction_repo, clock=clock)


@pytest.fixture
def query_service(transaction_repo) -> TransactionQueryService:
    """Provide test TransactionQueryService."""
    return TransactionQueryService(transaction_repo=transaction_repo)


@pytest.fixture
def summary_service(transaction_repo) -> SummaryService:
    """Provide test SummaryService."""
    return SummaryService(transaction_repo=transaction_repo)


@pytest.fixture
def csv_exporter(query_service) -> CsvExporter:
    """Provide test CsvExporter."""
    return CsvExporter(query_service=query_service)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


def make_data(
    txn_date: date,
    amount: str,
    kind: TransactionKind,
    merchant: str,
    account: str = "Checking",
    category: Optional[str] = None,
    notes: Optional[str] = None,
) -> TransactionData:
    """Helper to build TransactionData."""
    return TransactionData(
        date=txn_date,
        amount=Decimal(amount),
        kind=kind,
        merchant=merchant,
        account=account,
        category=category,
        notes=notes,
    )


def build_transaction(**overrides) -> Transaction:
    """Helper to build an in-memory Transaction without touching the store."""
    fields = dict(
        txn_id="txn-1",
        owner_id=OWNER,
        date=date(2024, 1, 10),
        amount=Decimal("12.50"),
        kind=TransactionKind.EXPENSE,
        merchant="Blue Cafe",
        account="Checking",
        category="Food",
    )
    fields.update(overrides)
    return Transaction(**fields)


@pytest.fixture
def transaction_factory(ledger_service) -> Callable[..., Transaction]:
    """Factory for creating test transactions through the ledger service."""

    def _create_transaction(
        txn_date: date,
        amount: str,
        kind: TransactionKind = TransactionKind.EXPENSE,
        merchant: str = "Cafe",
        account: str = "Checking",
        category: Optional[str] = None,
        notes: Optional[str] = None,
        owner_id: str = OWNER,
    ) -> Transaction:
        return ledger_service.create_transaction(
            owner_id,
            make_data(txn_date, amount, kind, merchant, account, category, notes),
        )

    return _create_transaction


# =============================================================================
# PRESET DATA FIXTURES
# =============================================================================


@pytest.fixture
def january_ledger(transaction_factory) -> list[Transaction]:
    """Three January 2024 transactions for OWNER: two expenses and a paycheck."""
    return [
        transaction_factory(date(2024, 1, 5), "100.00", TransactionKind.EXPENSE,
                            "Cafe", "Checking", category="Food"),
        transaction_factory(date(2024, 1, 10), "50.00", TransactionKind.EXPENSE,
                            "Bus", "Checking", category="Transport"),
        transaction_factory(date(2024, 1, 15), "2000.00", TransactionKind.INCOME,
                            "Employer", "Checking", category=None),
    ]


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine) -> TestClient:
    """Provide FastAPI test client with test database."""
    reset_database()
    set_settings(Settings(database_url="sqlite://"))
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()
