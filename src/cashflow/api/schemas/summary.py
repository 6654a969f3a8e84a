"""Pydantic schemas for summary endpoints."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel


class SummaryResponse(BaseModel):
    """Response schema for a cash-flow summary."""

    model_config = {"from_attributes": True}

    start_date: date
    end_date: date
    total_income: Decimal
    total_expenses: Decimal
    net_cash_flow: Decimal
    transaction_count: int
    category_breakdown: dict[str, Decimal]
    account_breakdown: dict[str, Decimal]
