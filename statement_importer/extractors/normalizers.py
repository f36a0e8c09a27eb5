"""
Field Normalizers Module
Converts raw date-like and amount-like values into their canonical forms.

Both functions are pure: they return None instead of raising when a value
cannot be interpreted, so extractors can skip the row or line.
"""

import datetime
import math
import numbers
import re
import warnings
from typing import Any, Optional

import pandas as pd

# Anything that is not a digit, sign or separator is noise (currency symbols, spaces, letters)
_NON_NUMERIC_PATTERN = re.compile(r'[^0-9+\-.,]')

# A comma followed by exactly three digits and then a boundary is a thousands separator
_GROUPING_COMMA_PATTERN = re.compile(r',(?=\d{3}(?:\D|$))')


def normalize_amount(raw: Any) -> Optional[float]:
    """
    Convert a raw amount to a signed float.

    Numbers pass through unchanged. Strings are stripped of currency symbols
    and grouping commas; a remaining comma is read as a decimal comma.

    Note: "1.234,56" becomes "1.234.56" and is rejected. Decimal-comma
    amounts with dot grouping are not disambiguated.

    Args:
        raw: Number or string such as "$1,234.50", "-4.50", "12,5"

    Returns:
        Parsed amount, or None if the residue is not a valid number
    """
    if isinstance(raw, bool):
        return None

    if isinstance(raw, numbers.Real):
        value = float(raw)
        return value if math.isfinite(value) else None

    if not isinstance(raw, str):
        return None

    sanitized = _GROUPING_COMMA_PATTERN.sub('', _NON_NUMERIC_PATTERN.sub('', raw))
    try:
        value = float(sanitized.replace(',', '.'))
    except ValueError:
        return None

    return value if math.isfinite(value) else None


def format_timestamp(value: Any) -> str:
    """
    Format a datetime as an ISO-8601 UTC instant with millisecond precision.

    Naive values are taken to be UTC already.
    """
    timestamp = pd.Timestamp(value)
    if timestamp.tzinfo is None:
        timestamp = timestamp.tz_localize('UTC')
    else:
        timestamp = timestamp.tz_convert('UTC')
    return f"{timestamp.strftime('%Y-%m-%dT%H:%M:%S')}.{timestamp.microsecond // 1000:03d}Z"


def normalize_date(raw: Any) -> Optional[str]:
    """
    Convert a raw date-like value to the canonical timestamp string.

    Strings go through pandas' general-purpose parser. Numbers are read as
    epoch milliseconds. The parser is month-first for ambiguous input, so
    "03/04/05" means March 4th 2005, and it silently swaps day and month
    when the first field is above 12. Both behaviours are kept as-is.

    Args:
        raw: Date string, datetime/date/Timestamp, or epoch milliseconds

    Returns:
        Timestamp such as "2024-01-05T00:00:00.000Z", or None if unparseable
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, str):
        raw = raw.strip()
        # Digit-free words like "now" or "today" would resolve to the clock
        if not any(ch.isdigit() for ch in raw):
            return None
    elif not isinstance(raw, (datetime.date, numbers.Real)):
        return None

    try:
        # catch_warnings swaps the process-wide filter list, so normalization
        # runs on the event loop thread only; loaders are what go to_thread.
        with warnings.catch_warnings():
            # dayfirst/format inference warnings are noise for single values
            warnings.simplefilter('ignore', UserWarning)
            if isinstance(raw, numbers.Real):
                if not math.isfinite(raw):
                    return None
                parsed = pd.to_datetime(raw, unit='ms', utc=True)
            else:
                parsed = pd.to_datetime(raw, errors='coerce')
    except (ValueError, TypeError, OverflowError):
        return None

    if parsed is None or pd.isna(parsed):
        return None

    return format_timestamp(parsed)
