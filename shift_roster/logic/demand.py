# logic/demand.py
from __future__ import annotations

from typing import Any, Dict, Mapping

from shift_roster.exceptions import DemandTableError
from shift_roster.models.shift import DEMAND_KINDS, ShiftCode, Weekday

DemandTable = Dict[Weekday, Dict[ShiftCode, int]]

_WEEKDAY_NEED = {ShiftCode.EARLY: 2, ShiftCode.DAY: 2, ShiftCode.NIGHT: 1}
_WEEKEND_NEED = {ShiftCode.EARLY: 1, ShiftCode.DAY: 1, ShiftCode.NIGHT: 1}

DEFAULT_DEMAND: DemandTable = {
    w: dict(_WEEKEND_NEED if w in (Weekday.SAT, Weekday.SUN) else _WEEKDAY_NEED)
    for w in Weekday
}


def build_demand_table(raw: Mapping[Any, Mapping[Any, Any]] | None) -> DemandTable:
    """
    설정값(JSON) → DemandTable
    - 키는 요일 라벨("Mon") 또는 Weekday, 근무 유형은 "Early"/"Day"/"Night"
    - 빠진 요일/유형은 0
    - LateDay는 독립 수요가 없으므로 거부
    """
    if raw is None:
        return {w: dict(need) for w, need in DEFAULT_DEMAND.items()}

    if not isinstance(raw, Mapping):
        raise DemandTableError(f"수요표 형식이 올바르지 않음: {raw!r}")

    table: DemandTable = {w: {k: 0 for k in DEMAND_KINDS} for w in Weekday}
    for wkey, needs in raw.items():
        try:
            wd = wkey if isinstance(wkey, Weekday) else Weekday.parse(str(wkey))
        except ValueError as e:
            raise DemandTableError(str(e)) from None
        if needs is not None and not isinstance(needs, Mapping):
            raise DemandTableError(f"{wd.label} 수요 형식이 올바르지 않음: {needs!r}")
        for kkey, value in (needs or {}).items():
            try:
                kind = kkey if isinstance(kkey, ShiftCode) else ShiftCode.parse(str(kkey))
            except ValueError as e:
                raise DemandTableError(str(e)) from None
            if kind not in DEMAND_KINDS:
                raise DemandTableError(f"{kind.value}는 독립 수요를 가질 수 없습니다 ({wd.label})")
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise DemandTableError(f"{wd.label}/{kind.value} 수요가 올바르지 않음: {value!r}")
            table[wd][kind] = value
    return table


def demand_to_dict(table: DemandTable) -> Dict[str, Dict[str, int]]:
    return {w.label: {k.value: table[w].get(k, 0) for k in DEMAND_KINDS} for w in Weekday}
