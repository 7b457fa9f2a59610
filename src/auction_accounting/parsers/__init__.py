"""Loaders for purchase and expense data files."""

from auction_accounting.parsers.record_loader import RecordLoadError, load_records

__all__ = [
    "RecordLoadError",
    "load_records",
]
