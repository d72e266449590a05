# logic/scheduler.py
from __future__ import annotations

import logging
import random
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from shift_roster.logic.demand import DemandTable, build_demand_table
from shift_roster.models.roster import Roster
from shift_roster.models.shift import DEMAND_KINDS, OFF, REST, ShiftCode
from shift_roster.models.worker import Worker, validate_workers
from shift_roster.utils.date_helper import day_label, day_labels, week_index, weekday_of

logger = logging.getLogger(__name__)

_DAY_CODES = (ShiftCode.DAY.value, ShiftCode.LATE_DAY.value)


@dataclass(frozen=True)
class WorkerShortfall:
    worker_id: int
    worker_name: str
    deficit: int


@dataclass(frozen=True)
class DemandShortfall:
    day: int
    label: str
    kind: ShiftCode
    deficit: int


@dataclass(frozen=True)
class AssignmentEvent:
    pass_no: int
    day: int
    kind: ShiftCode
    worker_id: int
    code: str
    demand_left: int     # 배정 직후 (day, kind) 잔여 수요


@dataclass
class ScheduleResult:
    roster: Roster
    day_labels: List[str]
    worker_shortfalls: List[WorkerShortfall]
    demand_shortfalls: List[DemandShortfall]
    demand_remaining: Dict[Tuple[int, ShiftCode], int]
    monthly_counts: Dict[int, int]
    events: List[AssignmentEvent] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return not self.worker_shortfalls and not self.demand_shortfalls


class _RunState:
    """
    한 번의 배정 실행이 독점하는 상태 (배정표 + 카운터).
    실행마다 새로 만들고, 실행 간 공유하지 않는다.
    """
    def __init__(self, workers: Sequence[Worker], year: int, month: int,
                 demand: DemandTable, rng):
        self.workers = list(workers)
        self.year = year
        self.month = month
        self.rng = rng
        self.roster = Roster(year, month, [w.id for w in self.workers])
        self.num_days = self.roster.num_days
        self.week_of = {d: week_index(year, month, d) for d in range(1, self.num_days + 1)}
        self.weekday = {d: weekday_of(year, month, d) for d in range(1, self.num_days + 1)}

        # 주차별 소모 슬롯: key=(worker_id, week_idx)
        self.weekly = defaultdict(int)
        # 월간 소모 슬롯: key=worker_id
        self.monthly = defaultdict(int)
        # 잔여 수요: key=(day, kind)
        self.remaining = {
            (d, k): demand[self.weekday[d]].get(k, 0)
            for d in range(1, self.num_days + 1) for k in DEMAND_KINDS
        }
        self.events: List[AssignmentEvent] = []
        self.pass_no = 0

    # ---- 카운터 헬퍼 ----
    def month_left(self, w: Worker) -> int:
        return w.exact_shifts_per_month - self.monthly[w.id]

    def week_left(self, w: Worker, day: int) -> int:
        return w.max_shifts_per_week - self.weekly[(w.id, self.week_of[day])]

    def any_quota_left(self) -> bool:
        return any(self.month_left(w) > 0 for w in self.workers)

    # ---- 신청 휴무 선반영 ----
    def mark_days_off(self) -> None:
        for d in range(1, self.num_days + 1):
            for w in self.workers:
                if date(self.year, self.month, d) in w.requested_days_off:
                    self.roster.assign(w.id, d, OFF)

    # ---- 후보 필터 ----
    def _eligible(self, w: Worker, day: int, kind: ShiftCode) -> bool:
        if not self.roster.is_empty(w.id, day):
            return False
        if self.weekday[day] not in w.available_weekdays:
            return False
        if self.month_left(w) <= 0:
            return False

        if kind is ShiftCode.EARLY:
            if not w.can(ShiftCode.EARLY):
                return False
            # Day → 다음날 Early 금지
            if self.roster.get(w.id, day - 1) in _DAY_CODES:
                return False
        elif kind is ShiftCode.DAY:
            if not w.can_cover_day():
                return False
            # 2차에서 앞날짜를 다시 채울 때도 Day → Early 순서가 생기지 않게
            if self.roster.get(w.id, day + 1) == ShiftCode.EARLY.value:
                return False
        elif kind is ShiftCode.NIGHT:
            if not w.can(ShiftCode.NIGHT):
                return False
            # 말일 야간 불가 (다음날 휴식이 월 안에 있어야 함)
            if day >= self.num_days:
                return False
            if not self.roster.is_empty(w.id, day + 1):
                return False
            if self.month_left(w) < 2:
                return False
            if self.week_of[day + 1] == self.week_of[day]:
                # 같은 주차면 야간+휴식 2슬롯이 모두 들어가야 함
                if self.week_left(w, day) < 2:
                    return False
            elif self.week_left(w, day + 1) <= 0:
                return False
        else:
            return False

        return self.week_left(w, day) > 0

    def candidates(self, day: int, kind: ShiftCode) -> List[Worker]:
        return [w for w in self.workers if self._eligible(w, day, kind)]

    # ---- 선택 + 배정 ----
    def select_and_assign(self, day: int, kind: ShiftCode) -> bool:
        pool = self.candidates(day, kind)
        if not pool:
            return False

        # 1) 월 잔여 많은 순 2) 주 잔여 많은 순 3) 동률이면 무작위
        best = max((self.month_left(w), self.week_left(w, day)) for w in pool)
        tied = [w for w in pool if (self.month_left(w), self.week_left(w, day)) == best]
        chosen = tied[0] if len(tied) == 1 else self.rng.choice(tied)

        code = kind
        if kind is ShiftCode.DAY and not chosen.can(ShiftCode.DAY):
            code = ShiftCode.LATE_DAY

        self.roster.assign(chosen.id, day, code)
        self.weekly[(chosen.id, self.week_of[day])] += 1
        self.monthly[chosen.id] += 1

        if kind is ShiftCode.NIGHT:
            self.roster.assign(chosen.id, day + 1, REST)
            self.weekly[(chosen.id, self.week_of[day + 1])] += 1
            self.monthly[chosen.id] += 1

        if self.remaining[(day, kind)] > 0:
            self.remaining[(day, kind)] -= 1

        self.events.append(AssignmentEvent(
            self.pass_no, day, kind, chosen.id, code.value, self.remaining[(day, kind)]
        ))
        logger.debug("day %d %s -> %s (%s)", day, kind.value, chosen.name, code.value)
        return True

    # ---- 1차: 수요 기준 ----
    def fill_demand(self) -> None:
        self.pass_no = 1
        for d in range(1, self.num_days + 1):
            for kind in DEMAND_KINDS:
                while self.remaining[(d, kind)] > 0:
                    if not self.select_and_assign(d, kind):
                        break

    # ---- 2차: 월 정원 채우기 (수요 무시) ----
    def fill_quota(self) -> None:
        self.pass_no = 2
        for d in range(1, self.num_days + 1):
            for kind in DEMAND_KINDS:
                while self.any_quota_left():
                    if not self.select_and_assign(d, kind):
                        break

    # ---- 결과 ----
    def result(self) -> ScheduleResult:
        worker_short = [
            WorkerShortfall(w.id, w.name, self.month_left(w))
            for w in self.workers if self.month_left(w) > 0
        ]
        demand_short = [
            DemandShortfall(d, day_label(self.year, self.month, d), k, self.remaining[(d, k)])
            for d in range(1, self.num_days + 1) for k in DEMAND_KINDS
            if self.remaining[(d, k)] > 0
        ]
        for s in worker_short:
            logger.warning("정원 미달: %s (id=%s) %d슬롯 부족", s.worker_name, s.worker_id, s.deficit)
        for s in demand_short:
            logger.warning("수요 미충족: %s %s %d명 부족", s.label, s.kind.value, s.deficit)

        return ScheduleResult(
            roster=self.roster,
            day_labels=day_labels(self.year, self.month),
            worker_shortfalls=worker_short,
            demand_shortfalls=demand_short,
            demand_remaining=dict(self.remaining),
            monthly_counts={w.id: self.monthly[w.id] for w in self.workers},
            events=self.events,
        )


def generate_roster(workers: Sequence[Worker], year: int, month: int,
                    demand: Optional[DemandTable] = None,
                    rng: Optional[random.Random] = None,
                    seed: Optional[int] = None) -> ScheduleResult:
    """
    월간 자동 배정
    - 신청 휴무(OFF) 먼저 고정, 이후 절대 덮어쓰지 않음
    - 1차: 날짜순 × (Early → Day → Night) 수요만큼 배정, 후보 없으면 다음 칸
    - 2차: 월 정원이 남은 직원이 있으면 수요와 무관하게 같은 순서로 추가 배정
    - 야간은 다음날 AK(휴식)까지 2슬롯 소모
    - 미충족 수요/정원은 예외가 아니라 결과 리포트로 반환
    - rng 또는 seed를 주면 동률 처리 결과가 재현됨
    """
    validate_workers(list(workers), year, month)
    if demand is None:
        demand = build_demand_table(None)
    if rng is None:
        rng = random.Random(seed)

    state = _RunState(workers, year, month, demand, rng)
    state.mark_days_off()

    logger.info("%04d-%02d 배정 시작: 직원 %d명, %d일", year, month, len(state.workers), state.num_days)
    state.fill_demand()
    if state.any_quota_left():
        logger.info("1차 후 정원 미달 직원 있음 → 2차 배정")
        state.fill_quota()

    result = state.result()
    logger.info("%04d-%02d 배정 완료: 배정 %d건, 정원 미달 %d명, 수요 미충족 %d칸",
                year, month, len(result.events),
                len(result.worker_shortfalls), len(result.demand_shortfalls))
    return result
