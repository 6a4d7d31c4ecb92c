"""Application ports package."""

from .records_source import LedgerRecordsSourcePort

__all__ = ["LedgerRecordsSourcePort"]
