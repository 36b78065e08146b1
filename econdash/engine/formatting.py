"""Label and number formatting shared by the dashboards."""

import math
from datetime import date

MONTH_ABBR = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def month_label(d: date, short_year: bool = True) -> str:
    """'Jan 25' (chart axes) or 'Jan 2025' (period captions)."""
    year = f"{d.year % 100:02d}" if short_year else str(d.year)
    return f"{MONTH_ABBR[d.month - 1]} {year}"


def quarter_of(d: date) -> int:
    return (d.month - 1) // 3 + 1


def quarter_label(d: date, year_first: bool = True) -> str:
    """'2025-Q1' (history axes) or 'Q1 2025' (period captions)."""
    if year_first:
        return f"{d.year}-Q{quarter_of(d)}"
    return f"Q{quarter_of(d)} {d.year}"


def round_or_none(value: float | None, digits: int) -> float | None:
    if value is None or not math.isfinite(value):
        return None
    return round(value, digits)


def scale(value: float | None, divisor: float) -> float | None:
    return value / divisor if value is not None else None


def format_currency(value: float, decimals: int = 2) -> str:
    """Compact dollar amount with T/B/M suffix, e.g. 36.21T."""
    for threshold, suffix in ((1e12, "T"), (1e9, "B"), (1e6, "M")):
        if value >= threshold:
            return f"{value / threshold:.{decimals}f}{suffix}"
    return f"{value:.{decimals}f}"
