"""Repository layer - data access abstractions and implementations."""

from cashflow.repositories.protocols import TransactionRepository

__all__ = [
    "TransactionRepository",
]
