# models/shift.py
from enum import Enum


class Weekday(Enum):
    # 일요일 = 0 (달력 표기 순서)
    SUN = 0
    MON = 1
    TUE = 2
    WED = 3
    THU = 4
    FRI = 5
    SAT = 6

    @property
    def label(self) -> str:
        return WEEKDAY_LABELS[self.value]

    @classmethod
    def from_python(cls, py_weekday: int) -> "Weekday":
        """date.weekday()(0=월..6=일) → Weekday"""
        return cls((py_weekday + 1) % 7)

    @classmethod
    def parse(cls, text: str) -> "Weekday":
        key = text.strip()
        if key in WEEKDAY_LABELS:
            return cls(WEEKDAY_LABELS.index(key))
        try:
            return cls[key.upper()[:3]]
        except KeyError:
            raise ValueError(f"알 수 없는 요일: {text!r}") from None


WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


class ShiftCode(str, Enum):
    EARLY = "Early"
    DAY = "Day"
    LATE_DAY = "LateDay"   # Day 수요를 대신 채우는 변형
    NIGHT = "Night"

    @classmethod
    def parse(cls, text: str) -> "ShiftCode":
        key = text.strip()
        for code in cls:
            if key.lower() in (code.value.lower(), code.name.lower()):
                return code
        raise ValueError(f"알 수 없는 근무 유형: {text!r}")


# 수요가 있는 근무 유형 (배정 우선순위 순서)
DEMAND_KINDS = (ShiftCode.EARLY, ShiftCode.DAY, ShiftCode.NIGHT)

EMPTY = ""
OFF = "OFF"    # 신청 휴무
REST = "AK"    # 야간 다음날 강제 휴식

CELL_CODES = (EMPTY, OFF, REST) + tuple(c.value for c in ShiftCode)
