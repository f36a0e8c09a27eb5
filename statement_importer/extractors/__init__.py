"""
Extractors Module - Field normalization and transaction extraction.
"""

from .normalizers import (
    normalize_amount,
    normalize_date,
    format_timestamp
)

from .tabular_extractor import (
    TabularExtractor,
    normalize_header,
    build_header_map,
    extract_transactions_from_rows
)

from .text_extractor import (
    TextExtractor,
    clean_lines,
    extract_transactions_from_lines
)

__all__ = [
    'normalize_amount',
    'normalize_date',
    'format_timestamp',
    'TabularExtractor',
    'normalize_header',
    'build_header_map',
    'extract_transactions_from_rows',
    'TextExtractor',
    'clean_lines',
    'extract_transactions_from_lines',
]
