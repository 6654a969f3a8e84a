"""CSV export functionality."""

import csv
import io
from pathlib import Path
from typing import Optional, TextIO

from cashflow.domain.filters import TransactionFilter
from cashflow.services.query_service import TransactionQueryService

CSV_COLUMNS = [
    "date",
    "kind",
    "amount",
    "merchant",
    "account",
    "category",
    "notes",
]


class CsvExporter:
    """
    CSV exporter for transaction data.

    Exports the caller's live transactions, in listing order, for backup/transfer.
    """

    def __init__(self, query_service: TransactionQueryService):
        self._query = query_service

    def export_csv(
        self,
        owner_id: str,
        flt: Optional[TransactionFilter] = None,
    ) -> str:
        """Return matching transactions as CSV text."""
        buffer = io.StringIO()
        self._write(buffer, owner_id, flt or TransactionFilter())
        return buffer.getvalue()

    def write_csv(
        self,
        path: str,
        owner_id: str,
        flt: Optional[TransactionFilter] = None,
    ) -> None:
        """
        Export matching transactions to a CSV file.

        Args:
            path: Output file path
            owner_id: Owner whose transactions are exported
            flt: Optional constraints (None = everything)
        """
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "w", newline="", encoding="utf-8") as csvfile:
            self._write(csvfile, owner_id, flt or TransactionFilter())

    def _write(self, stream: TextIO, owner_id: str, flt: TransactionFilter) -> None:
        writer = csv.DictWriter(stream, fieldnames=CSV_COLUMNS)
        writer.writeheader()

        for txn in self._query.iter_all(owner_id, flt):
            writer.writerow({
                "date": txn.date.isoformat(),
                "kind": txn.kind.value,
                "amount": f"{txn.amount:.2f}",
                "merchant": txn.merchant,
                "account": txn.account,
                "category": txn.category or "",
                "notes": txn.notes or "",
            })
