"""CSV export utilities."""

from cashflow.csv.exporter import CsvExporter, CSV_COLUMNS

__all__ = [
    "CsvExporter",
    "CSV_COLUMNS",
]
