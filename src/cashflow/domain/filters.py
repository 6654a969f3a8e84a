"""Filter specification for transaction listings."""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from cashflow.domain.models import Transaction, TransactionKind


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value


@dataclass(frozen=True)
class TransactionFilter:
    """
    Optional listing constraints, combined with logical AND.

    - start_date / end_date: inclusive bounds on the transaction date
    - account / category: exact, case-sensitive
    - merchant: case-insensitive substring
    - kind: exact
    An absent constraint does not restrict its field.
    """

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    account: Optional[str] = None
    category: Optional[str] = None
    merchant: Optional[str] = None
    kind: Optional[TransactionKind] = None

    @classmethod
    def build(
        cls,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account: Optional[str] = None,
        category: Optional[str] = None,
        merchant: Optional[str] = None,
        kind: Union[TransactionKind, str, None] = None,
    ) -> "TransactionFilter":
        """
        Build a filter from raw query values.

        Blank strings are treated as "not set" rather than "match empty".
        """
        resolved_kind: Optional[TransactionKind] = None
        if isinstance(kind, TransactionKind):
            resolved_kind = kind
        elif kind is not None and kind.strip():
            resolved_kind = TransactionKind.parse(kind)

        return cls(
            start_date=start_date,
            end_date=end_date,
            account=_blank_to_none(account),
            category=_blank_to_none(category),
            merchant=_blank_to_none(merchant),
            kind=resolved_kind,
        )

    @property
    def is_empty(self) -> bool:
        """Return True if no constraint is set."""
        return all(
            value is None
            for value in (
                self.start_date,
                self.end_date,
                self.account,
                self.category,
                self.merchant,
                self.kind,
            )
        )

    def matches(self, txn: Transaction) -> bool:
        """Evaluate the filter against a single transaction in memory."""
        if self.start_date is not None and txn.date < self.start_date:
            return False
        if self.end_date is not None and txn.date > self.end_date:
            return False
        if self.account is not None and txn.account != self.account:
            return False
        if self.category is not None and txn.category != self.category:
            return False
        if self.merchant is not None and self.merchant.lower() not in txn.merchant.lower():
            return False
        if self.kind is not None and txn.kind != self.kind:
            return False
        return True
