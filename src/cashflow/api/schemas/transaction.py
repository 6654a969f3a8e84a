"""Pydantic schemas for transaction endpoints."""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from cashflow.core.clock import today_utc
from cashflow.domain.models import CategorySource, TransactionData, TransactionKind


class TransactionRequest(BaseModel):
    """Request schema for creating a transaction or replacing all of its fields."""

    date: dt.date = Field(..., description="Day the transaction occurred")
    amount: Decimal = Field(..., gt=0, max_digits=18, decimal_places=2, description="Positive amount")
    kind: TransactionKind = Field(..., description="Income or Expense")
    merchant: str = Field(..., min_length=1, max_length=200)
    account: str = Field(..., min_length=1, max_length=100)
    category: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("date")
    @classmethod
    def not_in_future(cls, v: dt.date) -> dt.date:
        if v > today_utc():
            raise ValueError("Date cannot be in the future")
        return v

    @field_validator("merchant", "account")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("category", "notes")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v if v and v.strip() else None

    def to_data(self) -> TransactionData:
        return TransactionData(
            date=self.date,
            amount=self.amount,
            kind=self.kind,
            merchant=self.merchant,
            account=self.account,
            category=self.category,
            notes=self.notes,
        )


class TransactionUpdateRequest(TransactionRequest):
    """Request schema for a full update; expected_version opts into a conflict check."""

    expected_version: Optional[int] = Field(default=None, ge=1)


class TransactionResponse(BaseModel):
    """Response schema for a single transaction."""

    id: str
    date: dt.date
    amount: Decimal
    kind: TransactionKind
    merchant: str
    account: str
    category: Optional[str] = None
    category_confidence: Optional[int] = None
    category_source: CategorySource
    notes: Optional[str] = None
    version: int
    created_at: dt.datetime
    updated_at: Optional[dt.datetime] = None


class TransactionListResponse(BaseModel):
    """Response schema for one page of transactions."""

    items: list[TransactionResponse]
    page: int
    page_size: int
    total_count: int
    total_pages: int
