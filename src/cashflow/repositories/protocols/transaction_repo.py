"""Transaction store protocol."""

from datetime import date, datetime
from typing import Protocol, Optional

from cashflow.domain.filters import TransactionFilter
from cashflow.domain.models import Transaction


class TransactionRepository(Protocol):
    """
    Interface for owner-scoped transaction data access.

    Every read returns live rows only (deleted_at is null). Listings are
    ordered newest date first, then most recently created first.
    """

    def add(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        ...

    def get_by_id(self, owner_id: str, txn_id: str) -> Optional[Transaction]:
        """Retrieve a live transaction owned by owner_id."""
        ...

    def count(self, owner_id: str, flt: TransactionFilter) -> int:
        """Count live transactions matching the filter."""
        ...

    def query_page(
        self,
        owner_id: str,
        flt: TransactionFilter,
        skip: int,
        limit: int,
    ) -> list[Transaction]:
        """Return one ordered slice of the live transactions matching the filter."""
        ...

    def query_all(
        self,
        owner_id: str,
        start_date: date,
        end_date: date,
    ) -> list[Transaction]:
        """Return every live transaction dated within [start_date, end_date]."""
        ...

    def update(
        self,
        transaction: Transaction,
        expected_version: Optional[int] = None,
    ) -> Optional[Transaction]:
        """
        Replace the mutable fields of a live transaction.

        Returns None if the row is gone or its version differs from expected_version.
        """
        ...

    def soft_delete(self, owner_id: str, txn_id: str, deleted_at: datetime) -> bool:
        """Mark a live transaction deleted. Returns False if there was nothing to delete."""
        ...
