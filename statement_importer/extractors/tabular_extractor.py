"""
Tabular Extractor Module
Maps spreadsheet rows onto transactions by matching heterogeneous header names.
"""

import logging
import re
from collections.abc import Sequence
from typing import Any, Optional

from ..models import TransactionRecord
from .normalizers import normalize_amount, normalize_date

logger = logging.getLogger(__name__)

# Header keys per field, checked in priority order (first key present wins)
DATE_KEYS = ('date', 'transaction date', 'posted date')
DESCRIPTION_KEYS = ('description', 'memo', 'details', 'transaction')
AMOUNT_KEYS = ('amount', 'transaction amount', 'debit', 'credit', 'value')
CATEGORY_KEYS = ('category', 'type')
ACCOUNT_KEYS = ('account', 'account number', 'card')

_NON_ALPHANUMERIC = re.compile(r'[^a-z0-9]')
_WHITESPACE_RUN = re.compile(r'\s+')

# Marker for a cell that does not exist at all (no column, or row too short)
_ABSENT = object()


def normalize_header(header: str) -> str:
    """
    Canonicalize a header for lookup.

    "Transaction Date", "transaction-date" and "TRANSACTION  DATE" all
    become "transaction date".
    """
    lowered = _NON_ALPHANUMERIC.sub(' ', header.lower())
    return _WHITESPACE_RUN.sub(' ', lowered).strip()


def build_header_map(headers: Sequence[Any]) -> dict[str, int]:
    """Map normalized header text to column index. Later duplicates win."""
    positions: dict[str, int] = {}
    for index, header in enumerate(headers):
        positions[normalize_header('' if header is None else str(header))] = index
    return positions


def _is_empty_cell(cell: Any) -> bool:
    return cell is None or cell == ''


def _cell_text(cell: Any) -> str:
    if isinstance(cell, float) and cell.is_integer():
        return str(int(cell))
    return str(cell)


class TabularExtractor:
    """
    Extracts transactions from a header row followed by data rows.

    A fresh header map is built for every call, so one instance may be
    reused across sheets.
    """

    def __init__(self):
        self.stats = {
            "rows_processed": 0,
            "blank_rows": 0,
            "rows_skipped": 0,
            "transactions_found": 0
        }

    def extract_transactions(self, rows: Sequence[Sequence[Any]]) -> list[TransactionRecord]:
        """
        Extract all transactions from a grid of cells.

        Args:
            rows: Header row followed by data rows; None marks a missing cell

        Returns:
            List of TransactionRecord objects in row order
        """
        if not rows:
            logger.warning("Empty grid provided for extraction")
            return []

        header_row, *data_rows = rows
        header_map = build_header_map(header_row or [])
        logger.info(f"Starting extraction from {len(data_rows)} rows with headers: {sorted(header_map)}")

        transactions = []
        for row_num, row in enumerate(data_rows, 2):
            self.stats["rows_processed"] += 1
            record = self._process_row(row or [], header_map)
            if record is None:
                logger.debug(f"Row {row_num} skipped")
                continue
            transactions.append(record)

        self.stats["transactions_found"] = len(transactions)
        logger.info(
            f"Extraction complete: {len(transactions)} transactions found, "
            f"{self.stats['rows_skipped']} rows skipped, {self.stats['blank_rows']} blank rows"
        )
        return transactions

    def _process_row(self, row: Sequence[Any], header_map: dict[str, int]) -> Optional[TransactionRecord]:
        """Build one record from a data row, or None if the row must be dropped."""
        if all(_is_empty_cell(cell) for cell in row):
            self.stats["blank_rows"] += 1
            return None

        date_value = self._pick_value(row, header_map, DATE_KEYS)
        description_value = self._pick_value(row, header_map, DESCRIPTION_KEYS)
        amount_value = self._pick_value(row, header_map, AMOUNT_KEYS)

        if amount_value is _ABSENT or amount_value is None:
            amount_value = 0

        date = normalize_date(date_value) if self._truthy(date_value) else None
        description = _cell_text(description_value).strip() if self._truthy(description_value) else ''
        amount = normalize_amount(amount_value)

        if not date or not description or amount is None:
            self.stats["rows_skipped"] += 1
            return None

        category = self._pick_value(row, header_map, CATEGORY_KEYS)
        account = self._pick_value(row, header_map, ACCOUNT_KEYS)

        return TransactionRecord(
            date=date,
            description=description,
            amount=amount,
            category=_cell_text(category) if self._truthy(category) else None,
            account=_cell_text(account) if self._truthy(account) else None
        )

    @staticmethod
    def _pick_value(row: Sequence[Any], header_map: dict[str, int], keys: Sequence[str]) -> Any:
        """Return the cell under the first matching header, even if that cell is empty."""
        for key in keys:
            index = header_map.get(key)
            if index is not None:
                return row[index] if index < len(row) else _ABSENT
        return _ABSENT

    @staticmethod
    def _truthy(value: Any) -> bool:
        return value is not _ABSENT and bool(value)

    def get_stats(self) -> dict:
        """Get extraction statistics."""
        return self.stats.copy()


def extract_transactions_from_rows(rows: Sequence[Sequence[Any]]) -> list[TransactionRecord]:
    """
    Convenience function to extract transactions from a spreadsheet grid.

    Args:
        rows: Header row followed by data rows

    Returns:
        List of TransactionRecord objects
    """
    extractor = TabularExtractor()
    return extractor.extract_transactions(rows)
