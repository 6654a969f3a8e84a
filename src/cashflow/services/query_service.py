"""Query service for paginated, filtered transaction listings."""

from typing import Iterator

from cashflow.core.exceptions import InvalidArgumentError
from cashflow.domain.filters import TransactionFilter
from cashflow.domain.models import Transaction
from cashflow.domain.views import TransactionPage
from cashflow.repositories.protocols import TransactionRepository

MAX_PAGE_SIZE = 100


class TransactionQueryService:
    """
    Applies a TransactionFilter and pagination against the transaction store.

    Pages are ordered by date descending, then creation time descending, so
    walking pages with an unchanged data set never repeats or skips a row.
    """

    def __init__(self, transaction_repo: TransactionRepository):
        self._transaction_repo = transaction_repo

    def page(
        self,
        owner_id: str,
        flt: TransactionFilter,
        page: int,
        page_size: int,
    ) -> TransactionPage:
        """
        Return one page of matching transactions plus the total match count.

        Args:
            owner_id: Owner whose transactions are listed
            flt: Constraints to apply
            page: 1-based page number
            page_size: Rows per page, between 1 and 100

        Raises:
            InvalidArgumentError: page < 1 or page_size out of range
        """
        if page < 1:
            raise InvalidArgumentError(f"page must be >= 1, got {page}")
        if page_size < 1 or page_size > MAX_PAGE_SIZE:
            raise InvalidArgumentError(
                f"page_size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}"
            )

        skip = (page - 1) * page_size
        total_count = self._transaction_repo.count(owner_id, flt)
        items = self._transaction_repo.query_page(owner_id, flt, skip, page_size)

        return TransactionPage(
            items=items,
            page=page,
            page_size=page_size,
            total_count=total_count,
        )

    def iter_all(
        self,
        owner_id: str,
        flt: TransactionFilter,
        page_size: int = MAX_PAGE_SIZE,
    ) -> Iterator[Transaction]:
        """Yield every matching transaction in listing order, one page at a time."""
        page_number = 1
        while True:
            result = self.page(owner_id, flt, page_number, page_size)
            yield from result.items
            if page_number >= result.total_pages:
                return
            page_number += 1
