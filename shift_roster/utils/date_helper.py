# utils/date_helper.py
import calendar
from datetime import date

from shift_roster.models.shift import Weekday


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def weekday_of(year: int, month: int, day: int) -> Weekday:
    return Weekday.from_python(date(year, month, day).weekday())


def monday_offset(year: int, month: int) -> int:
    """1일이 월요일로부터 며칠 떨어져 있는지 (월=0 .. 일=6)"""
    return (weekday_of(year, month, 1).value + 6) % 7


def week_index(year: int, month: int, day: int) -> int:
    """
    월요일 시작 7일 단위 주차 (0부터).
    - 1일은 요일과 무관하게 항상 0주차
    - 예: 2025-08 (1일=금) → 1~3일: 0, 4~10일: 1, ... 25~31일: 4
    """
    return (day + monday_offset(year, month) - 1) // 7


def day_label(year: int, month: int, day: int) -> str:
    """'8/1(Fri)' 형태의 표시용 라벨"""
    return f"{month}/{day}({weekday_of(year, month, day).label})"


def day_labels(year: int, month: int) -> list[str]:
    return [day_label(year, month, d) for d in range(1, days_in_month(year, month) + 1)]


def month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """(year, month)에서 delta개월 이동"""
    idx = year * 12 + (month - 1) + delta
    return idx // 12, idx % 12 + 1
