from __future__ import annotations

from datetime import date

import pytest

from conftest import make_worker
from shift_roster.exceptions import CellAlreadyAssigned, WorkerValidationError
from shift_roster.models.roster import Roster
from shift_roster.models.shift import OFF, REST, ShiftCode, Weekday
from shift_roster.models.worker import Worker, validate_workers
from shift_roster.utils.parse_utils import (
    format_shift_codes,
    format_weekdays,
    parse_day_list,
    parse_shift_codes,
    parse_weekdays,
)


def test_roster_cells_start_empty_and_are_write_once():
    r = Roster(2024, 2, [1, 2])
    assert r.num_days == 29
    assert r.row(1) == [""] * 29
    r.assign(1, 3, ShiftCode.NIGHT)
    r.assign(1, 4, REST)
    assert r.get(1, 3) == "Night"
    assert r.get(1, 0) == "" and r.get(1, 30) == ""
    with pytest.raises(CellAlreadyAssigned):
        r.assign(1, 3, OFF)
    assert r.count(1, "Night", REST) == 2


def test_roster_dict_round_trip():
    r = Roster(2025, 6, [7])
    r.assign(7, 1, ShiftCode.EARLY)
    again = Roster.from_dict(r.to_dict())
    assert again.to_dict() == r.to_dict()
    assert (again.year, again.month) == (2025, 6)


def test_worker_from_dict_defaults_to_every_weekday():
    w = Worker.from_dict({"id": "3", "name": "Park", "available_shifts": ["early", "Night"]})
    assert w.id == 3
    assert w.available_weekdays == frozenset(Weekday)
    assert w.available_shifts == {ShiftCode.EARLY, ShiftCode.NIGHT}
    assert w.can_cover_day() is False


def test_with_days_off_returns_new_worker():
    w = make_worker(1)
    w2 = w.with_days_off([date(2025, 6, 3)])
    assert w.requested_days_off == frozenset()
    assert w2.requested_days_off == {date(2025, 6, 3)}


def test_validation_names_worker_and_field():
    with pytest.raises(WorkerValidationError) as exc:
        validate_workers([make_worker(1), make_worker(5, "E", exact=-2)])
    assert exc.value.worker_id == 5
    assert exc.value.field == "exact_shifts_per_month"
    assert "worker 5" in str(exc.value)


def test_parse_helpers():
    assert parse_day_list("3, 10-12, 1", 30) == [1, 3, 10, 11, 12]
    with pytest.raises(ValueError):
        parse_day_list("0, 5", 30)
    assert parse_weekdays("all") == frozenset(Weekday)
    assert parse_weekdays("Mon, fri") == {Weekday.MON, Weekday.FRI}
    assert parse_shift_codes("Early, lateday") == {ShiftCode.EARLY, ShiftCode.LATE_DAY}
    assert format_weekdays(frozenset(Weekday)) == "all"
    assert format_weekdays({Weekday.SAT, Weekday.MON}) == "Mon,Sat"
    assert format_shift_codes({ShiftCode.NIGHT, ShiftCode.EARLY}) == "Early,Night"
