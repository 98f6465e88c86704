"""
Calendar period keys used by the summary rollups

Weeks start on Monday. Keys are ISO strings so they sort lexicographically.
"""
from datetime import date, timedelta
from typing import Union

DateLike = Union[str, date]


def parse_day(value: DateLike) -> date:
    """Accept a date or a "YYYY-MM-DD" string"""
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def week_start(value: DateLike) -> str:
    """Monday of the week containing the day; a Sunday maps six days back"""
    day = parse_day(value)
    weekday = day.isoweekday()  # Monday=1 .. Sunday=7
    if weekday == 7:
        monday = day - timedelta(days=6)
    else:
        monday = day - timedelta(days=weekday - 1)
    return monday.isoformat()


def week_end(value: DateLike) -> str:
    """Sunday closing the week; a Sunday is its own week end"""
    day = parse_day(value)
    weekday = day.isoweekday()
    if weekday == 7:
        return day.isoformat()
    return (day + timedelta(days=7 - weekday)).isoformat()


def month_key(value: DateLike) -> str:
    """Month key "YYYY-MM" for the day"""
    return parse_day(value).isoformat()[:7]


def month_bounds(month: str) -> tuple[str, str]:
    """
    Naive string range covering a month: ("2025-02-01", "2025-02-31").

    Only valid for lexicographic comparison against zero-padded day keys.
    """
    return f"{month}-01", f"{month}-31"
