"""
Statistical utilities for table-qa.
Provides numeric cell parsing and answer formatting shared by the stages and verifiers.
"""

import re
from typing import Optional

# Optional sign, ASCII digits with optional fraction (or a bare fraction), optional exponent.
NUMERIC_PATTERN = r'[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?'

_NUMERIC_RE = re.compile(NUMERIC_PATTERN, re.ASCII)


def parse_numeric(value: str) -> Optional[float]:
    """
    Parse a trimmed cell value as a 64-bit float.

    Only plain decimal notation is accepted. Thousands separators, currency
    symbols, underscores, ``inf``/``nan`` and hex literals all return None.

    Args:
        value: Cell text, already stripped of surrounding whitespace

    Returns:
        Parsed float, or None if the value is not numeric

    Example:
        >>> parse_numeric("-1.5e3")
        -1500.0
        >>> parse_numeric("1,000") is None
        True
    """
    if not _NUMERIC_RE.fullmatch(value):
        return None
    return float(value)


def format_decimal(value: float) -> str:
    """Format a total or average with exactly two decimal digits."""
    return f"{value:.2f}"


def format_count(value: int) -> str:
    return str(int(value))
