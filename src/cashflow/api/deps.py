"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from cashflow.repositories.sqlalchemy.database import get_db
from cashflow.repositories.sqlalchemy import SqlAlchemyTransactionRepository
from cashflow.services import LedgerService, TransactionQueryService, SummaryService
from cashflow.csv import CsvExporter
from cashflow.config.settings import get_settings


def get_owner_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Resolve the calling user from the X-User-Id header."""
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    return get_settings().default_user_id


def get_transaction_repo(db: Session = Depends(get_db)) -> SqlAlchemyTransactionRepository:
    """Provide TransactionRepository instance."""
    return SqlAlchemyTransactionRepository(db)


def get_ledger_service(
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
) -> LedgerService:
    """Provide LedgerService instance."""
    return LedgerService(transaction_repo=transaction_repo)


def get_query_service(
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
) -> TransactionQueryService:
    """Provide TransactionQueryService instance."""
    return TransactionQueryService(transaction_repo=transaction_repo)


def get_summary_service(
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
) -> SummaryService:
    """Provide SummaryService instance."""
    return SummaryService(transaction_repo=transaction_repo)


def get_csv_exporter(
    query_service: TransactionQueryService = Depends(get_query_service),
) -> CsvExporter:
    """Provide CsvExporter instance."""
    return CsvExporter(query_service=query_service)
