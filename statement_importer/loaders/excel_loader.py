"""
Excel Loader Module
Decodes spreadsheet workbooks (.xlsx, .xlsm, .xls) into a grid of cells using pandas.
"""

import io
import logging
from typing import Any, Optional

import pandas as pd

from ..config import config

logger = logging.getLogger(__name__)


class WorkbookLoadError(ValueError):
    """Raised when a workbook decodes but holds no usable worksheet."""
    pass


def _is_blank_row(row: list[Any]) -> bool:
    return all(cell is None or cell == '' for cell in row)


def load_workbook_rows(file_content: bytes, sheet_index: Optional[int] = None) -> list[list[Any]]:
    """
    Read one worksheet as a list of rows, header row first.

    Missing cells come back as None. Leading blank rows are dropped so the
    first row is the first one holding any value. Decoder errors for
    malformed bytes propagate unchanged.

    Args:
        file_content: Raw workbook bytes
        sheet_index: Worksheet position (defaults to config.SHEET_INDEX)

    Returns:
        Rows of cell values

    Raises:
        WorkbookLoadError: If the workbook has no worksheet at that position
    """
    if sheet_index is None:
        sheet_index = config.SHEET_INDEX

    try:
        # Engine is picked from the content: openpyxl for OOXML, xlrd for legacy .xls
        workbook = pd.ExcelFile(io.BytesIO(file_content))
    except Exception as e:
        logger.error(f"Invalid or corrupted workbook: {e}", exc_info=True)
        raise

    with workbook:
        if not workbook.sheet_names or sheet_index >= len(workbook.sheet_names):
            logger.error("No worksheets found in workbook")
            raise WorkbookLoadError("No worksheets found in workbook")

        sheet_name = workbook.sheet_names[sheet_index]
        df = workbook.parse(sheet_name, header=None, dtype=object)

    logger.info(f"Loaded worksheet '{sheet_name}': {df.shape[0]} rows x {df.shape[1]} columns")

    df = df.astype(object).where(pd.notna(df), None)
    rows = df.values.tolist()

    while rows and _is_blank_row(rows[0]):
        rows.pop(0)

    return rows
