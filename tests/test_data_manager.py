from __future__ import annotations

import json
from datetime import date

import pytest

from conftest import make_worker
from shift_roster.data import data_manager as dm
from shift_roster.exceptions import WorkerValidationError
from shift_roster.logic.demand import build_demand_table
from shift_roster.logic.scheduler import generate_roster
from shift_roster.models.shift import ShiftCode, Weekday


def test_workers_round_trip(data_dir):
    workers = [make_worker(1, "EDN"), make_worker(2, "L", weekdays=[Weekday.SAT, Weekday.SUN], exact=8)]
    dm.save_workers(workers)
    loaded = dm.load_workers()
    assert loaded == workers
    raw = json.loads((data_dir / dm.WORKERS_NAME).read_text(encoding="utf-8"))
    assert raw[1]["available_weekdays"] == ["Sun", "Sat"]
    assert raw[1]["available_shifts"] == ["LateDay"]


def test_missing_or_corrupt_files_fall_back(data_dir):
    assert dm.load_workers() == []
    (data_dir / dm.WORKERS_NAME).write_text("{not json", encoding="utf-8")
    assert dm.load_workers() == []
    assert dm.load_settings() == {"demand": None, "seed": None}


def test_add_worker_assigns_next_id(data_dir):
    first = dm.add_worker(make_worker(0, "E"))
    second = dm.add_worker(make_worker(0, "D"))
    assert (first.id, second.id) == (1, 2)
    with pytest.raises(ValueError):
        dm.add_worker(make_worker(2, "E"))


def test_add_worker_validates(data_dir):
    with pytest.raises(WorkerValidationError):
        dm.add_worker(make_worker(0, "E", max_week=0))
    assert dm.load_workers() == []


def test_update_worker(data_dir):
    w = dm.add_worker(make_worker(0, "E", exact=10))
    dm.update_worker(make_worker(w.id, "EN", exact=12))
    assert dm.load_workers()[0].exact_shifts_per_month == 12
    with pytest.raises(KeyError):
        dm.update_worker(make_worker(99, "E"))


def test_days_off_are_per_month(data_dir):
    dm.set_days_off(2025, 6, 1, [15, 3, 3])
    dm.set_days_off(2025, 7, 1, [1])
    assert dm.load_days_off(2025, 6) == {1: [3, 15]}
    assert dm.load_days_off(2025, 7) == {1: [1]}
    assert dm.load_days_off(2025, 8) == {}
    with pytest.raises(ValueError):
        dm.set_days_off(2025, 6, 1, [31])
    dm.set_days_off(2025, 7, 1, [])
    assert dm.load_days_off(2025, 7) == {}


def test_delete_worker_drops_days_off(data_dir):
    dm.add_worker(make_worker(0, "E"))
    dm.add_worker(make_worker(0, "D"))
    dm.set_days_off(2025, 6, 1, [2])
    dm.set_days_off(2025, 6, 2, [4])
    dm.delete_worker(1)
    assert [w.id for w in dm.load_workers()] == [2]
    assert dm.load_days_off(2025, 6) == {2: [4]}


def test_workers_for_month_merges_requests(data_dir):
    dm.save_workers([make_worker(1, "EDN"), make_worker(2, "EDN")])
    dm.set_days_off(2025, 6, 2, [10, 11])
    dm.set_days_off(2025, 7, 1, [5])
    merged = {w.id: w for w in dm.load_workers_for_month(2025, 6)}
    assert merged[1].requested_days_off == frozenset()
    assert merged[2].requested_days_off == {date(2025, 6, 10), date(2025, 6, 11)}

    result = generate_roster(list(merged.values()), 2025, 6, seed=0)
    assert result.roster.get(2, 10) == "OFF"
    assert result.roster.get(2, 11) == "OFF"


def test_demand_settings_round_trip(data_dir):
    assert dm.load_demand() == build_demand_table(None)
    table = build_demand_table({"Mon": {"Night": 2}})
    dm.save_demand(table)
    assert dm.load_demand() == table
    assert dm.load_demand()[Weekday.MON][ShiftCode.NIGHT] == 2


def test_roster_save_and_load(data_dir):
    workers = [make_worker(1, "EDN"), make_worker(2, "N", exact=6)]
    result = generate_roster(workers, 2025, 6, seed=1)
    dm.save_roster(result.roster)
    loaded = dm.load_roster(2025, 6)
    assert loaded.to_dict() == result.roster.to_dict()
    assert dm.load_roster(2025, 7) is None


def test_invalid_stored_demand_falls_back_to_default(data_dir, caplog):
    (data_dir / dm.SETTINGS_NAME).write_text(
        json.dumps({"demand": {"Mon": {"LateDay": 1}}}), encoding="utf-8")
    with caplog.at_level("WARNING"):
        table = dm.load_demand()
    assert table == build_demand_table(None)
    assert "LateDay" in caplog.text

    dm.save_workers([make_worker(1, "EDN")])
    result = generate_roster(dm.load_workers_for_month(2025, 6), 2025, 6, dm.load_demand(), seed=0)
    assert result.roster.get(1, 1) != ""


def test_days_off_skip_bad_keys_and_values(data_dir, caplog):
    (data_dir / dm.DAYS_OFF_NAME).write_text(
        json.dumps({"2025-06": {"1": [3, True, "4", 31, 5], "abc": [7], "2": [False]}}),
        encoding="utf-8")
    with caplog.at_level("WARNING"):
        assert dm.load_days_off(2025, 6) == {1: [3, 5]}
    assert "abc" in caplog.text
