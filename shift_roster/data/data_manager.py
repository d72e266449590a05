# data/data_manager.py
from __future__ import annotations
import json
import logging
import os
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import List, Dict, Any, Iterable, Optional
from shift_roster.exceptions import DemandTableError
from shift_roster.logic.demand import DemandTable, build_demand_table, demand_to_dict
from shift_roster.models.roster import Roster
from shift_roster.models.worker import Worker
from shift_roster.utils.date_helper import days_in_month, month_key

logger = logging.getLogger(__name__)

# 프로젝트 루트 = .../shift_roster
BASE_DIR = Path(__file__).resolve().parents[1]
DATA_DIR = Path(os.environ.get("SHIFT_ROSTER_DATA_DIR") or (BASE_DIR / "data"))

WORKERS_NAME = "workers.json"
DAYS_OFF_NAME = "days_off.json"
SETTINGS_NAME = "settings.json"
ROSTERS_NAME = "rosters.json"

DEFAULT_SETTINGS = {"demand": None, "seed": None}

def _path(name: str) -> Path:
    return DATA_DIR / name

def _ensure_data_dir():
    DATA_DIR.mkdir(parents=True, exist_ok=True)

def _safe_json_load(path: Path, default):
    if not path.exists():
        return default
    try:
        raw = path.read_text(encoding="utf-8").strip()
        if not raw:
            return default
        return json.loads(raw)
    except (OSError, ValueError) as e:
        logger.warning("%s 읽기 실패, 기본값 사용: %s", path.name, e)
        return default

def _safe_json_save(path: Path, data):
    _ensure_data_dir()
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    tmp.replace(path)

# ---------- 직원 ----------
def load_workers() -> List[Worker]:
    data = _safe_json_load(_path(WORKERS_NAME), default=[])
    return [Worker.from_dict(item) for item in data]

def save_workers(workers: List[Worker]):
    payload = [w.to_dict() for w in workers]
    _safe_json_save(_path(WORKERS_NAME), payload)

def next_worker_id(workers: List[Worker]) -> int:
    return max([w.id for w in workers], default=0) + 1

def add_worker(worker: Worker) -> Worker:
    """id가 0 이하이면 자동 부여. 저장 전에 검증."""
    workers = load_workers()
    if worker.id <= 0:
        worker = replace(worker, id=next_worker_id(workers))
    worker.validate()
    if any(w.id == worker.id for w in workers):
        raise ValueError(f"이미 존재하는 직원 ID: {worker.id}")
    workers.append(worker)
    save_workers(workers)
    logger.info("직원 추가: %s (id=%s)", worker.name, worker.id)
    return worker

def update_worker(worker: Worker) -> Worker:
    worker.validate()
    workers = load_workers()
    for i, w in enumerate(workers):
        if w.id == worker.id:
            workers[i] = worker
            save_workers(workers)
            logger.info("직원 수정: %s (id=%s)", worker.name, worker.id)
            return worker
    raise KeyError(worker.id)

def delete_worker(worker_id: int) -> None:
    """직원 삭제 + 모든 달의 신청 휴무 정리"""
    workers = [w for w in load_workers() if w.id != worker_id]
    save_workers(workers)

    data = _safe_json_load(_path(DAYS_OFF_NAME), default={})
    changed = False
    for month in list(data):
        if str(worker_id) in data[month]:
            data[month].pop(str(worker_id))
            changed = True
        if not data[month]:
            data.pop(month)
    if changed:
        _safe_json_save(_path(DAYS_OFF_NAME), data)
    logger.info("직원 삭제: id=%s", worker_id)

# ---------- 신청 휴무 (월별) ----------
def load_days_off(year: int, month: int) -> Dict[int, List[int]]:
    """
    return 구조: {worker_id: [일, ...]}
    파일 구조:
    {
      "2025-08": {"1": [4, 15], "3": [20]},
      ...
    }
    """
    data = _safe_json_load(_path(DAYS_OFF_NAME), default={})
    raw = data.get(month_key(year, month), {})
    if not isinstance(raw, dict):
        return {}
    n = days_in_month(year, month)
    result = {}
    for wid, days in raw.items():
        if not isinstance(days, list):
            continue
        try:
            worker_id = int(wid)
        except ValueError:
            logger.warning("%s: 잘못된 직원 키 무시: %r", DAYS_OFF_NAME, wid)
            continue
        # 보정: 월 범위 밖/숫자 아닌 값 제거 (bool은 int 취급하지 않음)
        valid = sorted({
            d for d in days
            if isinstance(d, int) and not isinstance(d, bool) and 1 <= d <= n
        })
        if valid:
            result[worker_id] = valid
    return result

def set_days_off(year: int, month: int, worker_id: int, days: Iterable[int]) -> List[int]:
    n = days_in_month(year, month)
    clean = sorted({int(d) for d in days})
    bad = [d for d in clean if not 1 <= d <= n]
    if bad:
        raise ValueError(f"{month_key(year, month)}에 없는 날짜: {bad}")

    data = _safe_json_load(_path(DAYS_OFF_NAME), default={})
    key = month_key(year, month)
    month_data = data.setdefault(key, {})
    if clean:
        month_data[str(worker_id)] = clean
    else:
        month_data.pop(str(worker_id), None)
    if not month_data:
        data.pop(key, None)
    _safe_json_save(_path(DAYS_OFF_NAME), data)
    return clean

def load_workers_for_month(year: int, month: int) -> List[Worker]:
    """직원 프로필 + 해당 월 신청 휴무를 합쳐 배정용 목록을 만든다."""
    days_off = load_days_off(year, month)
    return [
        w.with_days_off(date(year, month, d) for d in days_off.get(w.id, []))
        for w in load_workers()
    ]

# ---------- 설정 ----------
def load_settings() -> Dict[str, Any]:
    data = _safe_json_load(_path(SETTINGS_NAME), default={})
    if not isinstance(data, dict):
        data = {}
    for k, v in DEFAULT_SETTINGS.items():
        data.setdefault(k, v)
    return data

def save_settings(settings: Dict[str, Any]) -> None:
    _safe_json_save(_path(SETTINGS_NAME), settings)

def load_demand(settings: Optional[Dict[str, Any]] = None) -> DemandTable:
    """저장된 수요표가 잘못되어 있으면 경고 후 기본 수요표 사용"""
    settings = settings if settings is not None else load_settings()
    try:
        return build_demand_table(settings.get("demand"))
    except DemandTableError as e:
        logger.warning("%s 수요표 오류, 기본값 사용: %s", SETTINGS_NAME, e)
        return build_demand_table(None)

def save_demand(table: DemandTable) -> None:
    settings = load_settings()
    settings["demand"] = demand_to_dict(table)
    save_settings(settings)

# ---------- 배정표 ----------
def load_roster(year: int, month: int) -> Optional[Roster]:
    data = _safe_json_load(_path(ROSTERS_NAME), default={})
    raw = data.get(month_key(year, month))
    if not isinstance(raw, dict):
        return None
    return Roster.from_dict(raw)

def save_roster(roster: Roster) -> None:
    data = _safe_json_load(_path(ROSTERS_NAME), default={})
    data[month_key(roster.year, roster.month)] = roster.to_dict()
    _safe_json_save(_path(ROSTERS_NAME), data)
