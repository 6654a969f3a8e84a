"""Enumerations for domain models."""

from enum import Enum
from typing import Union

from cashflow.core.exceptions import InvalidArgumentError


class TransactionKind(str, Enum):
    """Direction of a transaction. Amounts are always positive."""

    INCOME = "Income"
    EXPENSE = "Expense"

    @classmethod
    def parse(cls, value: Union[str, "TransactionKind"]) -> "TransactionKind":
        """Resolve a kind from its value or name, case-insensitively."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for member in cls:
            if text.lower() in (member.value.lower(), member.name.lower()):
                return member
        raise InvalidArgumentError(f"Unsupported transaction kind: {value!r}")


class CategorySource(str, Enum):
    """Provenance of a transaction's category."""

    NONE = "None"
    USER = "User"
    AUTOMATED = "Automated"  # reserved for automatic categorization
