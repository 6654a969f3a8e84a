"""Summary service for cash-flow aggregation over a date range."""

from collections import defaultdict
from datetime import date
from decimal import Decimal

from cashflow.core.exceptions import InvalidArgumentError
from cashflow.domain.models import TransactionKind, to_money
from cashflow.domain.views import TransactionSummary
from cashflow.repositories.protocols import TransactionRepository


class SummaryService:
    """
    Computes income, expense and breakdown totals for a date range.

    All sums are exact Decimal arithmetic over the full range; nothing is
    sampled or paginated.
    """

    def __init__(self, transaction_repo: TransactionRepository):
        self._transaction_repo = transaction_repo

    def summarize(
        self,
        owner_id: str,
        start_date: date,
        end_date: date,
    ) -> TransactionSummary:
        """
        Summarize owner_id's live transactions dated within [start_date, end_date].

        - category_breakdown: unsigned sum of amount per category; uncategorized
          rows are left out
        - account_breakdown: signed net per account (+income, -expense)
        """
        if start_date > end_date:
            raise InvalidArgumentError(
                f"start_date {start_date.isoformat()} is after end_date {end_date.isoformat()}"
            )

        transactions = self._transaction_repo.query_all(owner_id, start_date, end_date)

        total_income = Decimal("0")
        total_expenses = Decimal("0")
        by_category: dict[str, Decimal] = defaultdict(Decimal)
        by_account: dict[str, Decimal] = defaultdict(Decimal)

        for txn in transactions:
            if txn.kind == TransactionKind.INCOME:
                total_income += txn.amount
            else:
                total_expenses += txn.amount

            if txn.category is not None:
                by_category[txn.category] += txn.amount
            by_account[txn.account] += txn.signed_amount

        return TransactionSummary(
            start_date=start_date,
            end_date=end_date,
            total_income=to_money(total_income),
            total_expenses=to_money(total_expenses),
            net_cash_flow=to_money(total_income - total_expenses),
            transaction_count=len(transactions),
            category_breakdown={k: to_money(by_category[k]) for k in sorted(by_category)},
            account_breakdown={k: to_money(by_account[k]) for k in sorted(by_account)},
        )
