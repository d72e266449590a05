# utils/parse_utils.py
from shift_roster.models.shift import ShiftCode, Weekday

def parse_day_list(text: str, last_day: int) -> list[int]:
    """
    '3, 10-12' -> [3, 10, 11, 12]
    범위(1..last_day) 밖은 ValueError
    """
    days = set()
    for tok in text.split(","):
        tok = tok.strip()
        if not tok:
            continue
        if "-" in tok:
            a, b = (int(x) for x in tok.split("-", 1))
            days.update(range(min(a, b), max(a, b) + 1))
        else:
            days.add(int(tok))
    bad = sorted(d for d in days if not 1 <= d <= last_day)
    if bad:
        raise ValueError(f"1~{last_day} 범위를 벗어난 날짜: {bad}")
    return sorted(days)

def parse_weekdays(text: str) -> frozenset[Weekday]:
    """'Mon,Wed,Fri' -> {MON, WED, FRI}, 'all' 또는 빈값 -> 전체"""
    if not text.strip() or text.strip().lower() == "all":
        return frozenset(Weekday)
    return frozenset(Weekday.parse(t) for t in text.split(",") if t.strip())

def parse_shift_codes(text: str) -> frozenset[ShiftCode]:
    """'Early, Night' -> {EARLY, NIGHT}"""
    return frozenset(ShiftCode.parse(t) for t in text.split(",") if t.strip())

def format_weekdays(weekdays) -> str:
    if set(weekdays) == set(Weekday):
        return "all"
    return ",".join(w.label for w in sorted(weekdays, key=lambda w: w.value))

def format_shift_codes(codes) -> str:
    return ",".join(c.value for c in ShiftCode if c in codes)
