"""Duration formatting helpers shared by tables and metrics."""

from __future__ import annotations

import math

import pandas as pd

from client_portal.core.config import NO_DATA_MARKER


def round_half_up(value: float) -> int:
    # round() is banker's rounding: round(0.5) == 0, round(2.5) == 2
    return int(math.floor(value + 0.5))


def format_hours_rounded(seconds: float) -> str:
    """Compact form: whole hours, e.g. ``5400 -> "2h"``.

    >>> format_hours_rounded(3600)
    '1h'
    """
    return f"{round_half_up(float(seconds) / 3600)}h"


def format_hours_detailed(seconds: float) -> str:
    """Hours and minutes, dropping the minutes when they round to zero.

    >>> format_hours_detailed(5400)
    '1h 30m'
    >>> format_hours_detailed(3600)
    '1h'
    """
    seconds = float(seconds)
    hours = int(seconds // 3600)
    minutes = round_half_up((seconds % 3600) / 60)
    return f"{hours}h {minutes}m" if minutes > 0 else f"{hours}h"


def format_pivot_cell(seconds: float | None) -> str:
    """Rounded hours, or the no-data marker for an empty cell."""
    if seconds is None or pd.isna(seconds) or not seconds:
        return NO_DATA_MARKER
    return format_hours_rounded(seconds)


def seconds_to_hours(seconds: float, digits: int = 2) -> float:
    return round(float(seconds) / 3600, digits)
