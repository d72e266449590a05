# cli/roster_menu.py
from shift_roster.data.data_manager import (
    load_workers, load_workers_for_month, load_settings, load_demand, save_demand,
    load_roster, save_roster
)
from shift_roster.data.exporter import export_csv
from shift_roster.exceptions import CancelAction, GoBackAction, ScheduleError
from shift_roster.logic.feasibility import check_feasibility
from shift_roster.logic.scheduler import generate_roster
from shift_roster.models.shift import DEMAND_KINDS, OFF, REST, ShiftCode, Weekday
from shift_roster.utils.date_helper import day_labels, month_key
from shift_roster.utils.input_handler import get_input, get_int

_SHORT = {"": ".", OFF: "x", REST: "r",
          ShiftCode.EARLY.value: "E", ShiftCode.DAY.value: "D",
          ShiftCode.LATE_DAY.value: "L", ShiftCode.NIGHT.value: "N"}


def feasibility_menu(year: int, month: int):
    workers = load_workers_for_month(year, month)
    report = check_feasibility(workers, year, month, load_demand())
    print(f"\n[{month_key(year, month)} 수요/공급 점검]")
    print("유형      수요   공급")
    for k in DEMAND_KINDS:
        print(f"{k.value:<8} {report.demand[k]:>5} {report.supply[k]:>6}")
    if report.ok:
        print("공급 부족 예상 없음.")
    for w in report.warnings:
        print(f"⚠ {w}")


def generate_menu(year: int, month: int, seed=None):
    workers = load_workers_for_month(year, month)
    if not workers:
        print("직원 데이터가 없습니다. 먼저 직원을 등록해주세요.")
        return None

    feasibility_menu(year, month)
    if seed is None:
        seed = load_settings().get("seed")
    try:
        result = generate_roster(workers, year, month, load_demand(), seed=seed)
    except ScheduleError as e:
        print(f"배정 실패: {e}")
        return None

    save_roster(result.roster)
    print_roster(result.roster, workers)
    print_reports(result)
    print(f"{month_key(year, month)} 자동 배정 완료 (저장됨)")
    return result


def print_roster(roster, workers):
    labels = day_labels(roster.year, roster.month)
    # 일자만 두 자리로 표시 (라벨 전체는 너무 길다)
    print("\n이름        " + "".join(f"{d:>3}" for d in range(1, len(labels) + 1)))
    print("            " + "".join(f"{lbl.split('(')[1][:2]:>3}" for lbl in labels))
    for w in workers:
        if w.id not in roster.cells:
            continue
        cells = "".join(f"{_SHORT.get(v, '?'):>3}" for v in roster.row(w.id))
        print(f"{w.name[:10]:<12}{cells}")
    print("E=Early D=Day L=LateDay N=Night r=AK(휴식) x=OFF(신청휴무) .=미배정")


def print_reports(result):
    if result.is_complete:
        print("\n모든 수요와 월 정원을 채웠습니다.")
        return
    if result.worker_shortfalls:
        print("\n[월 정원 미달]")
        for s in result.worker_shortfalls:
            print(f"{s.worker_name} (ID {s.worker_id}): {s.deficit}슬롯 부족")
    if result.demand_shortfalls:
        print("\n[수요 미충족]")
        for s in result.demand_shortfalls:
            print(f"{s.label} {s.kind.value}: {s.deficit}명 부족")


def show_saved_roster(year: int, month: int):
    roster = load_roster(year, month)
    if roster is None:
        print(f"{month_key(year, month)} 배정표가 없습니다. 먼저 자동 배정을 실행하세요.")
        return
    workers = load_workers()
    print_roster(roster, workers)

    print("\n[직원별 합계]")
    for w in workers:
        if w.id not in roster.cells:
            continue
        used = roster.count(w.id, REST, *(c.value for c in ShiftCode))
        off = roster.count(w.id, OFF)
        print(f"{w.name}: 소모 {used}/{w.exact_shifts_per_month}  "
              f"(야간 {roster.count(w.id, ShiftCode.NIGHT.value)}, 신청휴무 {off})")


def export_menu(year: int, month: int):
    roster = load_roster(year, month)
    if roster is None:
        print(f"{month_key(year, month)} 배정표가 없습니다. 먼저 자동 배정을 실행하세요.")
        return
    path = export_csv(roster, load_workers())
    print(f"CSV 저장 완료: {path}")


def demand_menu():
    try:
        table = load_demand()
        print("\n[요일별 필요 인원]")
        print("요일  " + "  ".join(f"{k.value:>5}" for k in DEMAND_KINDS))
        for w in Weekday:
            print(f"{w.label:<4}  " + "  ".join(f"{table[w][k]:>5}" for k in DEMAND_KINDS))

        raw = get_input("\n수정할 요일(빈값=종료)", allow_empty=True)
        if not raw:
            return
        wd = Weekday.parse(raw)
        for k in DEMAND_KINDS:
            table[wd][k] = get_int(f"{wd.label} {k.value}", default=table[wd][k], minimum=0)
        save_demand(table)
        print("저장되었습니다.")
    except ValueError as e:
        print(f"입력 오류: {e}")
    except GoBackAction:
        print("이전 메뉴로 이동")
    except CancelAction:
        print("메인 메뉴로 이동")
