"""Service layer - business logic orchestration."""

from cashflow.services.ledger_service import LedgerService
from cashflow.services.query_service import TransactionQueryService, MAX_PAGE_SIZE
from cashflow.services.summary_service import SummaryService

__all__ = [
    "LedgerService",
    "TransactionQueryService",
    "MAX_PAGE_SIZE",
    "SummaryService",
]
