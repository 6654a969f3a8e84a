"""Transaction domain model."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from cashflow.domain.models.enums import TransactionKind, CategorySource

CENT = Decimal("0.01")


def to_money(value: Union[Decimal, int, str]) -> Decimal:
    """Normalize a monetary value to exactly two fractional digits."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def derive_category_source(category: Optional[str]) -> CategorySource:
    """Category source is USER whenever the caller supplied a category."""
    return CategorySource.USER if category is not None else CategorySource.NONE


@dataclass
class TransactionData:
    """Caller-supplied fields of a transaction, used for create and full replacement."""

    date: date
    amount: Decimal
    kind: TransactionKind
    merchant: str
    account: str
    category: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, TransactionKind):
            self.kind = TransactionKind.parse(self.kind)


@dataclass
class Transaction:
    """
    Ledger entry owned by a single user.

    - amount is always positive; direction is carried by kind
    - category_source is derived from category on every write
    - deleted_at set means the row is soft-deleted and invisible to reads
    - version increments on every update
    """

    txn_id: str
    owner_id: str
    date: date
    amount: Decimal
    kind: TransactionKind
    merchant: str
    account: str
    category: Optional[str] = None
    category_confidence: Optional[int] = None
    category_source: CategorySource = CategorySource.NONE
    notes: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)
    deleted_at: Optional[datetime] = field(default=None)
    version: int = 1

    def __post_init__(self) -> None:
        if isinstance(self.kind, str) and not isinstance(self.kind, TransactionKind):
            self.kind = TransactionKind(self.kind)
        if isinstance(self.category_source, str) and not isinstance(
            self.category_source, CategorySource
        ):
            self.category_source = CategorySource(self.category_source)

    @property
    def is_deleted(self) -> bool:
        """Return True if this transaction has been soft-deleted."""
        return self.deleted_at is not None

    @property
    def signed_amount(self) -> Decimal:
        """
        Amount with direction applied.

        Positive = income, Negative = expense.
        """
        if self.kind == TransactionKind.INCOME:
            return self.amount
        return -self.amount

    def apply(self, data: TransactionData) -> None:
        """Replace every mutable field from ``data`` and re-derive the category source."""
        self.date = data.date
        self.amount = to_money(data.amount)
        self.kind = data.kind
        self.merchant = data.merchant
        self.account = data.account
        self.category = data.category
        self.category_source = derive_category_source(data.category)
        self.category_confidence = None
        self.notes = data.notes
