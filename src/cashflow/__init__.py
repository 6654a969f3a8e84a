"""Personal transaction ledger with filtered listing and cash-flow summaries."""

__version__ = "0.1.0"
