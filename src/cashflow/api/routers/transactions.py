"""Transaction endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from cashflow.api.deps import (
    get_csv_exporter,
    get_ledger_service,
    get_owner_id,
    get_query_service,
    get_summary_service,
)
from cashflow.api.schemas import (
    SummaryResponse,
    TransactionListResponse,
    TransactionRequest,
    TransactionResponse,
    TransactionUpdateRequest,
)
from cashflow.config.settings import get_settings
from cashflow.core.clock import month_bounds, one_month_from, today_utc
from cashflow.core.exceptions import NotFoundError
from cashflow.csv import CsvExporter
from cashflow.domain.filters import TransactionFilter
from cashflow.domain.models import Transaction
from cashflow.services import LedgerService, SummaryService, TransactionQueryService

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


def _to_response(txn: Transaction) -> TransactionResponse:
    return TransactionResponse(
        id=txn.txn_id,
        date=txn.date,
        amount=txn.amount,
        kind=txn.kind,
        merchant=txn.merchant,
        account=txn.account,
        category=txn.category,
        category_confidence=txn.category_confidence,
        category_source=txn.category_source,
        notes=txn.notes,
        version=txn.version,
        created_at=txn.created_at,
        updated_at=txn.updated_at,
    )


def _clamp_paging(page: int, page_size: Optional[int]) -> tuple[int, int]:
    """Pull out-of-range paging values back into range instead of rejecting them."""
    settings = get_settings()
    if page < 1:
        page = 1
    if page_size is None or page_size < 1:
        page_size = settings.default_page_size
    if page_size > settings.max_page_size:
        page_size = settings.max_page_size
    return page, page_size


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    data: TransactionRequest,
    owner_id: str = Depends(get_owner_id),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Create a new transaction."""
    return _to_response(ledger.create_transaction(owner_id, data.to_data()))


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    page: int = Query(1),
    page_size: Optional[int] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    account: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    merchant: Optional[str] = Query(None),
    kind: Optional[str] = Query(None),
    owner_id: str = Depends(get_owner_id),
    query_service: TransactionQueryService = Depends(get_query_service),
):
    """
    List transactions, newest first, with optional filters and pagination.

    Blank filter values are ignored. merchant matches case-insensitively as a
    substring; account and category must match exactly.
    """
    page, page_size = _clamp_paging(page, page_size)
    flt = TransactionFilter.build(
        start_date=start_date,
        end_date=end_date,
        account=account,
        category=category,
        merchant=merchant,
        kind=kind,
    )
    result = query_service.page(owner_id, flt, page, page_size)
    return TransactionListResponse(
        items=[_to_response(t) for t in result.items],
        page=result.page,
        page_size=result.page_size,
        total_count=result.total_count,
        total_pages=result.total_pages,
    )


@router.get("/summary", response_model=SummaryResponse)
def get_summary(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    owner_id: str = Depends(get_owner_id),
    summary_service: SummaryService = Depends(get_summary_service),
):
    """
    Summarize income, expenses and breakdowns over a date range.

    Defaults to the current month when start_date is omitted.
    """
    start = start_date or month_bounds(today_utc())[0]
    end = end_date or one_month_from(start)
    summary = summary_service.summarize(owner_id, start, end)
    return SummaryResponse.model_validate(summary)


@router.get("/export")
def export_transactions(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    account: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    merchant: Optional[str] = Query(None),
    kind: Optional[str] = Query(None),
    owner_id: str = Depends(get_owner_id),
    exporter: CsvExporter = Depends(get_csv_exporter),
):
    """Download matching transactions as a CSV file."""
    flt = TransactionFilter.build(
        start_date=start_date,
        end_date=end_date,
        account=account,
        category=category,
        merchant=merchant,
        kind=kind,
    )
    return Response(
        content=exporter.export_csv(owner_id, flt),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="transactions.csv"'},
    )


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: str,
    owner_id: str = Depends(get_owner_id),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Get a single transaction."""
    return _to_response(ledger.require_transaction(owner_id, transaction_id))


@router.put("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: str,
    data: TransactionUpdateRequest,
    owner_id: str = Depends(get_owner_id),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Replace every field of an existing transaction."""
    txn = ledger.update_transaction(
        owner_id,
        transaction_id,
        data.to_data(),
        expected_version=data.expected_version,
    )
    return _to_response(txn)


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: str,
    owner_id: str = Depends(get_owner_id),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Soft delete a transaction. Deleting twice yields 404 the second time."""
    if not ledger.delete_transaction(owner_id, transaction_id):
        raise NotFoundError("Transaction", transaction_id)
    return Response(status_code=204)
