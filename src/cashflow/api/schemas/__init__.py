"""Pydantic schemas for API request/response."""

from cashflow.api.schemas.transaction import (
    TransactionRequest,
    TransactionUpdateRequest,
    TransactionResponse,
    TransactionListResponse,
)
from cashflow.api.schemas.summary import SummaryResponse

__all__ = [
    "TransactionRequest",
    "TransactionUpdateRequest",
    "TransactionResponse",
    "TransactionListResponse",
    "SummaryResponse",
]
