from __future__ import annotations

import calendar

import pytest

from shift_roster.models.shift import Weekday
from shift_roster.utils.date_helper import (
    day_label,
    day_labels,
    days_in_month,
    shift_month,
    week_index,
    weekday_of,
)


@pytest.mark.parametrize(
    "year,month,expected",
    [(2024, 2, 29), (2023, 2, 28), (2000, 2, 29), (1900, 2, 28), (2025, 4, 30), (2025, 12, 31)],
)
def test_days_in_month(year, month, expected):
    assert days_in_month(year, month) == expected


def test_days_in_month_covers_every_month():
    assert [days_in_month(2025, m) for m in range(1, 13)] == [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


def test_first_day_is_always_week_zero():
    for year in range(2020, 2031):
        for month in range(1, 13):
            assert week_index(year, month, 1) == 0


def test_week_index_is_monday_anchored():
    # 2025-08-01 is a Friday
    assert week_index(2025, 8, 3) == 0     # Sunday
    assert week_index(2025, 8, 4) == 1     # Monday
    assert week_index(2025, 8, 10) == 1
    assert week_index(2025, 8, 11) == 2
    assert week_index(2025, 8, 31) == 4


def test_week_index_month_starting_monday_and_sunday():
    # 2025-09-01 is a Monday
    assert week_index(2025, 9, 7) == 0
    assert week_index(2025, 9, 8) == 1
    # 2025-06-01 is a Sunday: a one-day first bucket
    assert week_index(2025, 6, 1) == 0
    assert week_index(2025, 6, 2) == 1
    assert week_index(2025, 6, 30) == 5


def test_week_index_buckets_are_seven_days_wide():
    for year, month in [(2024, 2), (2025, 6), (2025, 8), (2026, 3)]:
        counts = {}
        for d in range(1, days_in_month(year, month) + 1):
            counts[week_index(year, month, d)] = counts.get(week_index(year, month, d), 0) + 1
        inner = sorted(counts)[1:-1]
        assert all(counts[i] == 7 for i in inner)


def test_weekday_of_matches_calendar():
    assert weekday_of(2025, 8, 1) is Weekday.FRI
    assert weekday_of(2025, 6, 1) is Weekday.SUN
    for d in range(1, 32):
        py = calendar.weekday(2025, 8, d)
        assert weekday_of(2025, 8, d).value == (py + 1) % 7


def test_day_labels():
    assert day_label(2025, 8, 1) == "8/1(Fri)"
    labels = day_labels(2025, 2)
    assert len(labels) == 28
    assert labels[0] == "2/1(Sat)"
    assert labels[-1] == "2/28(Fri)"


def test_shift_month_wraps_year():
    assert shift_month(2025, 12, 1) == (2026, 1)
    assert shift_month(2025, 1, -1) == (2024, 12)
    assert shift_month(2025, 5, 0) == (2025, 5)
