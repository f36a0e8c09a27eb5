"""Shared pytest fixtures for statement-importer tests.

Workbooks are written with openpyxl and PDFs with PyMuPDF, so loader and
pipeline tests run against real file bytes rather than mocks.
"""

import io
from collections.abc import Sequence
from typing import Any

import fitz
import pytest
from openpyxl import Workbook

from statement_importer.store import TransactionStore


# =============================================================================
# File Builders
# =============================================================================


def build_workbook(rows: Sequence[Sequence[Any]], title: str = "Transactions") -> bytes:
    """Write rows into a single-sheet .xlsx and return its bytes."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = title
    for row in rows:
        sheet.append(list(row))
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def build_pdf(pages: Sequence[Sequence[str]]) -> bytes:
    """Write one PDF page per entry, each holding the given text lines."""
    doc = fitz.open()
    for lines in pages:
        page = doc.new_page()
        if lines:
            page.insert_text((72, 72), "\n".join(lines), fontsize=10)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def make_workbook():
    """Factory building .xlsx bytes from a list of rows."""
    return build_workbook


@pytest.fixture
def make_pdf():
    """Factory building PDF bytes from a list of pages of lines."""
    return build_pdf


# =============================================================================
# Sample Files
# =============================================================================


@pytest.fixture
def bank_export_rows() -> list[list[Any]]:
    """A typical bank export: mixed header spellings and one blank row."""
    return [
        ["Transaction Date", "Details", "Transaction Amount", "Category", "Account Number"],
        ["2024-01-05", "Coffee Shop", "-4.50", "Dining", "Checking"],
        ["2024-01-06", "Salary", "2,500.00", "Income", "Checking"],
        [None, None, None, None, None],
        ["2024-01-07", "Grocery Store", "-52.13", None, "Credit Card"],
    ]


@pytest.fixture
def bank_export_xlsx(make_workbook, bank_export_rows) -> bytes:
    return make_workbook(bank_export_rows)


@pytest.fixture
def statement_pdf(make_pdf) -> bytes:
    """Two-page statement with transactions, headers and footers."""
    return make_pdf([
        [
            "ACME BANK STATEMENT",
            "03/15/2024  Grocery Store  $52.13",
            "03/16/2024 Coffee Shop -4.50",
            "Statement continued on next page",
        ],
        [
            "2024-03-20 Rent payment -1,200.00",
            "Closing balance",
        ],
    ])


@pytest.fixture
def store() -> TransactionStore:
    return TransactionStore()
