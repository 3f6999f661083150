"""
Calendar windows for trend comparison.

Windows are generated per year, quarter or month and only for periods that
have already completed, so counts from different windows stay comparable.
"""

import calendar
from collections.abc import Sequence
from datetime import date

from ghindex.exceptions import ValidationError
from ghindex.types.trends import TimeWindow

GRANULARITIES = ("year", "quarter", "month")


def is_leap_year(year: int) -> bool:
    return calendar.isleap(year)


def month_end_day(year: int, month: int) -> int:
    """Last day of ``month`` in ``year``."""
    return calendar.monthrange(year, month)[1]


def _span(year: int, first_month: int, last_month: int) -> TimeWindow:
    return TimeWindow(
        start=date(year, first_month, 1),
        end=date(year, last_month, month_end_day(year, last_month)),
    )


def generate_windows(
    start_year: int | str,
    end_year: int | str,
    granularity: str = "year",
    today: date | None = None,
) -> list[TimeWindow]:
    """
    Split ``[start_year, end_year]`` into contiguous calendar windows.

    Args:
        start_year: First year (inclusive)
        end_year: Last year (inclusive)
        granularity: "year", "quarter" or "month"
        today: Reference date for excluding incomplete periods (default: today)

    Returns:
        Chronological windows. A window is omitted unless it ended before
        ``today``, so the in-progress period never appears. An inverted
        year range gives an empty list.

    Raises:
        ValidationError: If granularity is unknown
    """
    if granularity not in GRANULARITIES:
        raise ValidationError(
            f"Invalid granularity: {granularity}. Must be one of {', '.join(GRANULARITIES)}"
        )

    today = today or date.today()
    first, last = int(start_year), int(end_year)

    windows: list[TimeWindow] = []
    for year in range(first, last + 1):
        if granularity == "year":
            candidates = [_span(year, 1, 12)]
        elif granularity == "quarter":
            candidates = [_span(year, 3 * q - 2, 3 * q) for q in range(1, 5)]
        else:
            candidates = [_span(year, m, m) for m in range(1, 13)]

        windows.extend(w for w in candidates if w.end < today)

    return windows


def format_period_label(window: TimeWindow) -> str:
    """
    Human-readable label: "Mar 2021", "Q2 2021", "2021", or the date range.
    """
    start, end = window.start, window.end

    if start.year == end.year and start.month == end.month:
        return f"{calendar.month_abbr[start.month]} {start.year}"

    if start.year == end.year and (start.month - 1) // 3 == (end.month - 1) // 3:
        return f"Q{(start.month - 1) // 3 + 1} {start.year}"

    if (start.month, start.day) == (1, 1) and (end.month, end.day) == (12, 31):
        if start.year == end.year:
            return str(start.year)

    return f"{start.isoformat()} - {end.isoformat()}"


def infer_granularity(windows: Sequence[TimeWindow]) -> str:
    """Guess the granularity of ``windows`` from the first one."""
    if not windows:
        return "unknown"

    start, end = windows[0].start, windows[0].end

    if (
        start.year == end.year
        and (start.month, start.day) == (1, 1)
        and (end.month, end.day) == (12, 31)
    ):
        return "year"

    month_diff = (end.year - start.year) * 12 + end.month - start.month
    if month_diff == 2 and start.day == 1:
        return "quarter"

    if month_diff == 0 and start.day == 1:
        return "month"

    return "custom"
