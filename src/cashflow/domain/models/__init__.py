"""Domain models package."""

from cashflow.domain.models.enums import TransactionKind, CategorySource
from cashflow.domain.models.transaction import (
    CENT,
    Transaction,
    TransactionData,
    derive_category_source,
    to_money,
)

__all__ = [
    "TransactionKind",
    "CategorySource",
    "CENT",
    "Transaction",
    "TransactionData",
    "derive_category_source",
    "to_money",
]
