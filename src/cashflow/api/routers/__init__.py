"""API routers package."""

from cashflow.api.routers.transactions import router as transactions_router

__all__ = [
    "transactions_router",
]
