"""
Statement Importer - Main Pipeline
Detects the input format, routes it to the matching extractor and wraps the
records with import metadata.
"""

import asyncio
import logging
import re
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime, timezone
from typing import Any, Optional

from .config import config
from .extractors.normalizers import format_timestamp
from .extractors.tabular_extractor import extract_transactions_from_rows
from .extractors.text_extractor import extract_transactions_from_lines
from .loaders.excel_loader import load_workbook_rows
from .loaders.pdf_loader import load_pdf_lines
from .loaders.source import describe_source, read_source_bytes
from .models import FileType, ImportMetadata, TransactionImportResult, TransactionRecord
from .store import TransactionStore
from .validators.record_validator import validate_transactions

logger = logging.getLogger(__name__)

SPREADSHEET_EXTENSION_PATTERN = re.compile(r'\.(xlsx|xlsm|xls)$', re.IGNORECASE)
SPREADSHEET_MIME_PATTERN = re.compile(r'spreadsheet|excel', re.IGNORECASE)
PDF_EXTENSION_PATTERN = re.compile(r'\.pdf$', re.IGNORECASE)
PDF_MIME_TYPE = 'application/pdf'

# (format, extension test, MIME test) in priority order
_DETECTION_RULES: tuple[tuple[FileType, Callable[[str], bool], Callable[[str], bool]], ...] = (
    (
        FileType.EXCEL,
        lambda name: bool(SPREADSHEET_EXTENSION_PATTERN.search(name)),
        lambda mime: bool(SPREADSHEET_MIME_PATTERN.search(mime)),
    ),
    (
        FileType.PDF,
        lambda name: bool(PDF_EXTENSION_PATTERN.search(name)),
        lambda mime: mime == PDF_MIME_TYPE,
    ),
)


class NoParserAvailableError(LookupError):
    """Raised when no extractor accepts the input file."""
    pass


def detect_file_type(file_name: Optional[str] = None, content_type: Optional[str] = None) -> FileType:
    """
    Classify a file from its name and MIME hint without reading it.

    Extensions are checked for every format before any MIME type is
    consulted, so "report.xlsx" sent as application/pdf is still excel.

    Args:
        file_name: File name, extension matched case-insensitively
        content_type: MIME type hint

    Returns:
        FileType.EXCEL, FileType.PDF or FileType.UNKNOWN
    """
    if file_name:
        for file_type, extension_matches, _ in _DETECTION_RULES:
            if extension_matches(file_name):
                return file_type

    if content_type:
        for file_type, _, mime_matches in _DETECTION_RULES:
            if mime_matches(content_type):
                return file_type

    return FileType.UNKNOWN


async def parse_excel_file(source: Any) -> list[TransactionRecord]:
    """Read a workbook source and extract its first sheet's transactions."""
    data = await read_source_bytes(source)
    rows = await asyncio.to_thread(load_workbook_rows, data)
    # Extraction stays on the loop thread; normalize_date is not thread-safe
    return extract_transactions_from_rows(rows)


async def parse_pdf_file(source: Any) -> list[TransactionRecord]:
    """Read a PDF source and extract transactions from its text lines."""
    data = await read_source_bytes(source)
    lines = await asyncio.to_thread(load_pdf_lines, data)
    return extract_transactions_from_lines(lines)


PARSERS: dict[FileType, Callable[[Any], Awaitable[list[TransactionRecord]]]] = {
    FileType.EXCEL: parse_excel_file,
    FileType.PDF: parse_pdf_file,
}


async def import_transactions(
    source: Any,
    file_name: Optional[str] = None,
    content_type: Optional[str] = None,
    strict: Optional[bool] = None
) -> TransactionImportResult:
    """
    Import transactions from a single spreadsheet or PDF.

    An empty transaction list is a successful import, not an error.

    Args:
        source: Bytes, a pathlib.Path, or an object with read() (sync or async)
        file_name: Display name; defaults to the source's own name
        content_type: MIME type hint; defaults to the source's content_type
        strict: Raise on records breaking invariants (defaults to config.STRICT_MODE)

    Returns:
        TransactionImportResult with records, source name and metadata

    Raises:
        NoParserAvailableError: If the format cannot be detected
        UnsupportedSourceError: If the source kind is not recognized
        WorkbookLoadError: If a workbook has no worksheet
    """
    info = describe_source(source, file_name=file_name, content_type=content_type)

    # Step 1: Detect format
    file_type = detect_file_type(info.name, info.content_type)
    parser = PARSERS.get(file_type)
    if parser is None:
        logger.error(f"No parser available for file: {info.name} (content type: {info.content_type})")
        raise NoParserAvailableError(f"No parser available for file: {info.name}")

    # Step 2: Extract
    logger.info(f"Importing {info.name} as {file_type.value}")
    transactions = await parser(source)

    # Step 3: Guard record invariants
    if strict is None:
        strict = config.STRICT_MODE
    transactions = validate_transactions(transactions, strict_mode=strict)

    if not transactions:
        logger.warning(f"No transactions found in {info.name}")

    metadata = ImportMetadata(
        imported_at=format_timestamp(datetime.now(timezone.utc)),
        file_size=info.size,
        file_type=file_type,
        content_type=info.content_type
    )

    logger.info(f"Imported {len(transactions)} transactions from {info.name}")
    return TransactionImportResult(
        transactions=tuple(transactions),
        source_name=info.name,
        metadata=metadata
    )


async def import_into_store(store: TransactionStore, source: Any, **kwargs) -> TransactionImportResult:
    """
    Import a file and publish its records to the store.

    The store is only replaced after a successful import; a failed import
    leaves the previous contents in place.

    Args:
        store: Store to update
        source: Byte source passed to import_transactions
        **kwargs: file_name, content_type, strict

    Returns:
        The import result
    """
    result = await import_transactions(source, **kwargs)
    store.set_transactions(result.transactions)
    return result


def summarize_transactions(transactions: Sequence[TransactionRecord], preview_rows: Optional[int] = None) -> dict:
    """
    Summarize an imported list: count, total amount and the first few records.

    Args:
        transactions: Imported records
        preview_rows: Number of records to include (defaults to config.PREVIEW_ROWS)

    Returns:
        Dictionary with count, total and preview
    """
    if preview_rows is None:
        preview_rows = config.PREVIEW_ROWS

    return {
        "count": len(transactions),
        "total": round(sum(txn.amount for txn in transactions), 2),
        "preview": [txn.to_dict() for txn in transactions[:preview_rows]],
    }
