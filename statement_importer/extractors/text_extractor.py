"""
Text Extractor Module
Parses statement text lines into transactions using date and amount patterns.
Used for documents that carry no column schema (PDF statements).
"""

import logging
import re
from collections.abc import Iterable
from typing import Optional

from ..models import TransactionRecord
from .normalizers import normalize_amount, normalize_date

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r'\s{2,}')


def clean_lines(text: str) -> list[str]:
    """
    Split raw page text into extraction-ready lines.

    Runs of two or more whitespace characters collapse to one space and
    empty lines are dropped.
    """
    lines = []
    for segment in re.split(r'\n+', text):
        cleaned = _WHITESPACE_RUN.sub(' ', segment).strip()
        if cleaned:
            lines.append(cleaned)
    return lines


class TextExtractor:
    """
    Extracts transactions from free-text lines.

    A line becomes a transaction when it contains both a date and an amount
    anywhere; whatever text remains is the description.
    """

    # Date patterns:
    # - YYYY-MM-DD (e.g., 2024-01-05)
    # - DD/MM/YY[YY] shaped, with / . or - separators (e.g., 03/15/2024, 15.03.24)
    DATE_PATTERN = re.compile(
        r'(?:'
        r'\d{4}-\d{2}-\d{2}|'
        r'\d{2}[/.-]\d{2}[/.-]\d{2,4}'
        r')'
    )

    # Amount pattern: optional sign and $ prefix, then either comma-grouped
    # thousands or a plain digit run, exactly two decimal digits
    # (e.g., "$52.13", "-1,200.00", "1234.56", "+ 5.00"). The lookbehind keeps
    # a match from starting partway through a longer number.
    AMOUNT_PATTERN = re.compile(r'[+-]?\$?\s?-?(?<![\d,.])(?:\d{1,3}(?:,\d{3})+|\d+)\.\d{2}')

    def __init__(self):
        self.stats = {
            "lines_processed": 0,
            "lines_without_match": 0,
            "lines_skipped": 0,
            "transactions_found": 0
        }

    def extract_transactions(self, lines: Iterable[str]) -> list[TransactionRecord]:
        """
        Extract all transactions from cleaned statement lines.

        Args:
            lines: Lines in document order

        Returns:
            List of TransactionRecord objects in line order
        """
        transactions = []

        for line_num, line in enumerate(lines, 1):
            self.stats["lines_processed"] += 1
            record = self._process_line(line)
            if record is None:
                continue
            transactions.append(record)
            logger.debug(f"Line {line_num}: {record.date} | {record.description[:50]} | {record.amount:+.2f}")

        self.stats["transactions_found"] = len(transactions)
        logger.info(
            f"Extraction complete: {len(transactions)} transactions found in "
            f"{self.stats['lines_processed']} lines"
        )

        if not transactions and self.stats["lines_processed"]:
            logger.warning(
                f"No transactions found in {self.stats['lines_processed']} lines. "
                "Possible issues: date format mismatch or amounts without two decimals"
            )

        return transactions

    def _process_line(self, line: str) -> Optional[TransactionRecord]:
        """Process a single line of statement text."""
        date_match = self.DATE_PATTERN.search(line)
        amount_match = self.AMOUNT_PATTERN.search(line)

        if not date_match or not amount_match:
            self.stats["lines_without_match"] += 1
            return None

        date_text = date_match.group(0)
        amount_text = amount_match.group(0)

        date = normalize_date(date_text)
        amount = normalize_amount(amount_text)
        if date is None or amount is None:
            self.stats["lines_skipped"] += 1
            logger.debug(f"Unparseable date '{date_text}' or amount '{amount_text}'")
            return None

        # Literal removal: the first occurrence of each matched text goes,
        # which may not be the occurrence the pattern matched
        description = line.replace(date_text, '', 1).replace(amount_text, '', 1)
        description = _WHITESPACE_RUN.sub(' ', description).strip()

        if not description:
            self.stats["lines_skipped"] += 1
            logger.debug(f"Skipping: no description left in line: {line[:50]}")
            return None

        return TransactionRecord(date=date, description=description, amount=amount)

    def get_stats(self) -> dict:
        """Get extraction statistics."""
        return self.stats.copy()


def extract_transactions_from_lines(lines: Iterable[str]) -> list[TransactionRecord]:
    """
    Convenience function to extract transactions from statement lines.

    Args:
        lines: Cleaned statement lines

    Returns:
        List of TransactionRecord objects
    """
    extractor = TextExtractor()
    return extractor.extract_transactions(lines)
