"""View models for listing and summary outputs."""

import math
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from cashflow.domain.models import Transaction


@dataclass
class TransactionPage:
    """One page of a filtered transaction listing."""

    items: list[Transaction]
    page: int
    page_size: int
    total_count: int

    @property
    def total_pages(self) -> int:
        """Number of pages needed for total_count rows (0 when nothing matches)."""
        return math.ceil(self.total_count / self.page_size)


@dataclass
class TransactionSummary:
    """Aggregated cash-flow figures over an inclusive date range."""

    start_date: date
    end_date: date
    total_income: Decimal = field(default_factory=lambda: Decimal("0.00"))
    total_expenses: Decimal = field(default_factory=lambda: Decimal("0.00"))
    net_cash_flow: Decimal = field(default_factory=lambda: Decimal("0.00"))
    transaction_count: int = 0
    category_breakdown: dict[str, Decimal] = field(default_factory=dict)
    account_breakdown: dict[str, Decimal] = field(default_factory=dict)
