from datetime import date

import pytest

from chaifi.core.periods import month_bounds, month_key, week_end, week_start


@pytest.mark.parametrize("day, monday", [
    ("2025-01-06", "2025-01-06"),  # Monday
    ("2025-01-08", "2025-01-06"),  # Wednesday
    ("2025-01-11", "2025-01-06"),  # Saturday
    ("2025-01-12", "2025-01-06"),  # Sunday goes six days back
    ("2025-03-02", "2025-02-24"),  # Sunday across a month boundary
    ("2025-01-01", "2024-12-30"),  # Across a year boundary
])
def test_week_start(day, monday):
    assert week_start(day) == monday


def test_week_end_is_the_following_sunday():
    assert week_end("2025-01-06") == "2025-01-12"
    assert week_end("2025-01-10") == "2025-01-12"


def test_sunday_is_its_own_week_end():
    assert week_end("2025-01-12") == "2025-01-12"


def test_accepts_date_objects():
    assert week_start(date(2025, 1, 12)) == "2025-01-06"
    assert month_key(date(2025, 1, 12)) == "2025-01"


def test_month_key_and_bounds():
    assert month_key("2025-02-14") == "2025-02"
    assert month_bounds("2025-02") == ("2025-02-01", "2025-02-31")
