from __future__ import annotations

from datetime import date
from typing import Iterable

import pytest

from shift_roster.data import data_manager
from shift_roster.models.shift import ShiftCode, Weekday
from shift_roster.models.worker import ALL_WEEKDAYS, Worker

_CODES = {"E": ShiftCode.EARLY, "D": ShiftCode.DAY, "L": ShiftCode.LATE_DAY, "N": ShiftCode.NIGHT}


def make_worker(
    worker_id: int,
    shifts: str = "EDN",
    max_week: int = 5,
    exact: int = 20,
    weekdays: Iterable[Weekday] = ALL_WEEKDAYS,
    days_off: Iterable[date] = (),
    name: str | None = None,
) -> Worker:
    return Worker(
        id=worker_id,
        name=name or f"worker{worker_id}",
        available_weekdays=frozenset(weekdays),
        available_shifts=frozenset(_CODES[c] for c in shifts),
        max_shifts_per_week=max_week,
        exact_shifts_per_month=exact,
        requested_days_off=frozenset(days_off),
    )


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(data_manager, "DATA_DIR", tmp_path)
    return tmp_path
