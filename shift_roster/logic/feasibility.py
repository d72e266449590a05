# logic/feasibility.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from shift_roster.logic.demand import DemandTable, build_demand_table
from shift_roster.models.shift import DEMAND_KINDS, ShiftCode
from shift_roster.models.worker import Worker
from shift_roster.utils.date_helper import days_in_month, weekday_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeasibilityWarning:
    kind: ShiftCode
    demand: int
    supply: int

    @property
    def shortfall(self) -> int:
        return self.demand - self.supply

    def __str__(self):
        return f"{self.kind.value}: 수요 {self.demand} > 공급 {self.supply} ({self.shortfall} 부족)"


@dataclass
class FeasibilityReport:
    demand: Dict[ShiftCode, int]
    supply: Dict[ShiftCode, int]
    warnings: List[FeasibilityWarning] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.warnings


def monthly_demand(year: int, month: int, demand: DemandTable) -> Dict[ShiftCode, int]:
    total = {k: 0 for k in DEMAND_KINDS}
    for d in range(1, days_in_month(year, month) + 1):
        need = demand[weekday_of(year, month, d)]
        for k in DEMAND_KINDS:
            total[k] += need.get(k, 0)
    return total


def theoretical_supply(workers: Sequence[Worker]) -> Dict[ShiftCode, int]:
    """
    직원별 이론상 최대 공급량 (상한 확인용, 실제 배분 아님)
    - 야간 가능: exact // 2 를 야간에 (야간 1회 = 2슬롯)
    - 나머지 슬롯은 Early, Day 각각에 중복 집계
    """
    total = {k: 0 for k in DEMAND_KINDS}
    for w in workers:
        night = w.exact_shifts_per_month // 2 if w.can(ShiftCode.NIGHT) else 0
        rest = w.exact_shifts_per_month - 2 * night
        total[ShiftCode.NIGHT] += night
        if w.can(ShiftCode.EARLY):
            total[ShiftCode.EARLY] += rest
        if w.can_cover_day():
            total[ShiftCode.DAY] += rest
    return total


def check_feasibility(workers: Sequence[Worker], year: int, month: int,
                      demand: Optional[DemandTable] = None) -> FeasibilityReport:
    """배정 전 수요/공급 사전 점검. 경고만 하고 배정을 막지는 않는다."""
    if demand is None:
        demand = build_demand_table(None)
    need = monthly_demand(year, month, demand)
    have = theoretical_supply(workers)
    report = FeasibilityReport(demand=need, supply=have)
    for k in DEMAND_KINDS:
        if need[k] > have[k]:
            w = FeasibilityWarning(k, need[k], have[k])
            report.warnings.append(w)
            logger.warning("%04d-%02d 공급 부족 예상 - %s", year, month, w)
    return report
