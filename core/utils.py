from __future__ import annotations

import math
from typing import Any, Optional

_TRUE_STRINGS = {"true", "1", "yes", "y", "on"}


def parse_or_none(value: Any) -> Optional[float]:
    """Parse a form value to float; None for missing, blank or unparseable input."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "").replace("$", "").rstrip("%")
        if not value:
            return None
    try:
        out = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(out) or math.isinf(out):
        return None
    return out


def parse_or_zero(value: Any) -> float:
    """Parse-or-zero: the coercion rule used for every numeric engine input."""
    out = parse_or_none(value)
    return 0.0 if out is None else out


def parse_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def normalize_rate(value: float) -> float:
    """Read values above 1 as percentages (10 -> 0.10), leave fractions alone."""
    return value / 100.0 if value > 1 else value


def safe_div(num: float, den: float) -> float:
    return num / den if den else 0.0


def format_currency(value: float) -> str:
    """US currency style, two decimals: 1234.5 -> '$1,234.50'."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_percent(value: float, decimals: int = 2) -> str:
    """Format a value already expressed in percent: 12.345 -> '12.35%'."""
    return f"{value:.{decimals}f}%"
