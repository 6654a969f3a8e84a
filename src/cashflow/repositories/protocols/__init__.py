"""Repository protocol definitions (interfaces)."""

from cashflow.repositories.protocols.transaction_repo import TransactionRepository

__all__ = [
    "TransactionRepository",
]
