"""View models package."""

from cashflow.domain.views.ledger import TransactionPage, TransactionSummary

__all__ = [
    "TransactionPage",
    "TransactionSummary",
]
