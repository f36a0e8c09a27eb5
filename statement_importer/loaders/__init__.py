"""
Loaders Module - Byte sources and workbook/PDF decoding.
"""

from .source import (
    SourceInfo,
    UnsupportedSourceError,
    describe_source,
    read_source_bytes
)

from .excel_loader import (
    load_workbook_rows,
    WorkbookLoadError
)

from .pdf_loader import load_pdf_lines

__all__ = [
    'SourceInfo',
    'UnsupportedSourceError',
    'describe_source',
    'read_source_bytes',
    'load_workbook_rows',
    'WorkbookLoadError',
    'load_pdf_lines',
]
