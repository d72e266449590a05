# models/worker.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict, FrozenSet, Iterable, List

from shift_roster.exceptions import WorkerValidationError
from shift_roster.models.shift import ShiftCode, Weekday

ALL_WEEKDAYS = frozenset(Weekday)


@dataclass(frozen=True)
class Worker:
    id: int
    name: str
    available_weekdays: FrozenSet[Weekday] = ALL_WEEKDAYS
    available_shifts: FrozenSet[ShiftCode] = frozenset()
    max_shifts_per_week: int = 5
    exact_shifts_per_month: int = 20
    requested_days_off: FrozenSet[date] = field(default_factory=frozenset)

    def can(self, code: ShiftCode) -> bool:
        return code in self.available_shifts

    def can_cover_day(self) -> bool:
        # Day 수요는 Day 또는 LateDay 가능자가 채움
        return ShiftCode.DAY in self.available_shifts or ShiftCode.LATE_DAY in self.available_shifts

    def with_days_off(self, days_off: Iterable[date]) -> "Worker":
        return replace(self, requested_days_off=frozenset(days_off))

    def validate(self, year: int | None = None, month: int | None = None) -> None:
        """스케줄 실행 전 사전 검증. 문제 있으면 WorkerValidationError."""
        if not str(self.name).strip():
            raise WorkerValidationError(self.id, "name", "must not be empty")
        if not isinstance(self.max_shifts_per_week, int) or self.max_shifts_per_week < 1:
            raise WorkerValidationError(self.id, "max_shifts_per_week",
                                        f"must be >= 1 (got {self.max_shifts_per_week!r})")
        if not isinstance(self.exact_shifts_per_month, int) or self.exact_shifts_per_month < 0:
            raise WorkerValidationError(self.id, "exact_shifts_per_month",
                                        f"must be >= 0 (got {self.exact_shifts_per_month!r})")
        if not self.available_shifts:
            raise WorkerValidationError(self.id, "available_shifts", "must not be empty")
        bad = [s for s in self.available_shifts if not isinstance(s, ShiftCode)]
        if bad:
            raise WorkerValidationError(self.id, "available_shifts", f"has unknown values {bad!r}")
        bad = [w for w in self.available_weekdays if not isinstance(w, Weekday)]
        if bad:
            raise WorkerValidationError(self.id, "available_weekdays", f"has unknown values {bad!r}")
        if year is not None and month is not None:
            outside = sorted(d for d in self.requested_days_off if (d.year, d.month) != (year, month))
            if outside:
                raise WorkerValidationError(self.id, "requested_days_off",
                                            f"has dates outside {year:04d}-{month:02d}: {outside}")

    # ---------- 직렬화 (신청 휴무는 월별로 따로 저장) ----------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "available_weekdays": [w.label for w in sorted(self.available_weekdays, key=lambda w: w.value)],
            "available_shifts": [s.value for s in ShiftCode if s in self.available_shifts],
            "max_shifts_per_week": self.max_shifts_per_week,
            "exact_shifts_per_month": self.exact_shifts_per_month,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Worker":
        weekdays = data.get("available_weekdays")
        return Worker(
            id=int(data["id"]),
            name=data["name"],
            available_weekdays=(ALL_WEEKDAYS if weekdays is None
                                else frozenset(Weekday.parse(w) for w in weekdays)),
            available_shifts=frozenset(ShiftCode.parse(s) for s in data.get("available_shifts", [])),
            max_shifts_per_week=data.get("max_shifts_per_week", 5),
            exact_shifts_per_month=data.get("exact_shifts_per_month", 20),
        )


def validate_workers(workers: List[Worker], year: int | None = None, month: int | None = None) -> None:
    seen = set()
    for w in workers:
        if w.id in seen:
            raise WorkerValidationError(w.id, "id", "is duplicated")
        seen.add(w.id)
        w.validate(year, month)
