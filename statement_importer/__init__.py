"""
Statement Importer

Imports transactions from spreadsheet and PDF statements into a normalized list.
"""

__version__ = "1.0.0"

from .models import FileType, ImportMetadata, TransactionImportResult, TransactionRecord
from .pipeline import (
    NoParserAvailableError,
    detect_file_type,
    import_into_store,
    import_transactions,
    summarize_transactions
)
from .store import TransactionStore
from .loaders import UnsupportedSourceError, WorkbookLoadError
from .extractors import normalize_amount, normalize_date

__all__ = [
    "FileType",
    "ImportMetadata",
    "TransactionImportResult",
    "TransactionRecord",
    "NoParserAvailableError",
    "detect_file_type",
    "import_into_store",
    "import_transactions",
    "summarize_transactions",
    "TransactionStore",
    "UnsupportedSourceError",
    "WorkbookLoadError",
    "normalize_amount",
    "normalize_date",
]
