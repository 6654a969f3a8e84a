"""Domain layer - pure business models with no external dependencies."""

from cashflow.domain.models import (
    Transaction,
    TransactionData,
    TransactionKind,
    CategorySource,
)
from cashflow.domain.filters import TransactionFilter
from cashflow.domain.views import TransactionPage, TransactionSummary

__all__ = [
    "Transaction",
    "TransactionData",
    "TransactionKind",
    "CategorySource",
    "TransactionFilter",
    "TransactionPage",
    "TransactionSummary",
]
