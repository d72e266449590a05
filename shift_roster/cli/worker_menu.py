# cli/worker_menu.py
from shift_roster.data.data_manager import (
    load_workers, add_worker, update_worker, delete_worker,
    load_days_off, set_days_off
)
from shift_roster.exceptions import CancelAction, GoBackAction, WorkerValidationError
from shift_roster.models.worker import Worker
from shift_roster.utils.date_helper import days_in_month, month_key
from shift_roster.utils.input_handler import get_input, get_int
from shift_roster.utils.parse_utils import (
    parse_day_list, parse_weekdays, parse_shift_codes, format_weekdays, format_shift_codes
)

def worker_menu():
    while True:
        print("\n[직원 관리]")
        print("1. 직원 목록 보기")
        print("2. 직원 추가")
        print("3. 직원 수정")
        print("4. 직원 삭제")
        print("0. 메인 메뉴로")

        try:
            choice = get_input("선택")
            if choice == "1":
                show_workers()
            elif choice == "2":
                add_worker_cli()
            elif choice == "3":
                edit_worker_cli()
            elif choice == "4":
                delete_worker_cli()
            elif choice == "0":
                break
            else:
                print("잘못된 선택입니다.")
        except GoBackAction:
            print("이전 메뉴로 이동")
        except CancelAction:
            print("메인 메뉴로 이동")
            break

def show_workers():
    workers = load_workers()
    print("\n[직원 목록]")
    if not workers:
        print("(등록된 직원이 없습니다.)")
        return
    print("ID | 이름 | 요일 | 근무유형 | 주최대 | 월정원")
    for w in workers:
        print(f"{w.id} | {w.name} | {format_weekdays(w.available_weekdays)} | "
              f"{format_shift_codes(w.available_shifts)} | {w.max_shifts_per_week} | {w.exact_shifts_per_month}")

def _prompt_worker(worker_id: int, cur: Worker | None = None) -> Worker:
    name = get_input("이름", default=cur.name if cur else None)
    days = get_input("근무 가능 요일(Mon,Tue,.. 또는 all)",
                     default=format_weekdays(cur.available_weekdays) if cur else "all")
    shifts = get_input("근무 가능 유형(Early,Day,LateDay,Night)",
                       default=format_shift_codes(cur.available_shifts) if cur else None)
    max_w = get_int("주간 최대 근무", default=cur.max_shifts_per_week if cur else 5, minimum=1)
    exact_m = get_int("월 근무 정원", default=cur.exact_shifts_per_month if cur else 20, minimum=0)
    return Worker(
        id=worker_id, name=name,
        available_weekdays=parse_weekdays(days),
        available_shifts=parse_shift_codes(shifts),
        max_shifts_per_week=max_w,
        exact_shifts_per_month=exact_m,
    )

def add_worker_cli():
    try:
        w = add_worker(_prompt_worker(0))
        print(f"직원이 추가되었습니다. (ID {w.id})")
    except (ValueError, WorkerValidationError) as e:
        print(f"추가 실패: {e}")

def _find(workers, worker_id):
    return next((w for w in workers if w.id == worker_id), None)

def edit_worker_cli():
    workers = load_workers()
    cur = _find(workers, get_int("수정할 직원 ID"))
    if not cur:
        print("해당 ID의 직원이 없습니다.")
        return
    try:
        update_worker(_prompt_worker(cur.id, cur))
        print("직원 정보가 수정되었습니다.")
    except (ValueError, WorkerValidationError) as e:
        print(f"수정 실패: {e}")

def delete_worker_cli():
    workers = load_workers()
    cur = _find(workers, get_int("삭제할 직원 ID"))
    if not cur:
        print("해당 ID의 직원이 없습니다.")
        return
    if get_input(f"[{cur.name}]을(를) 삭제할까요? (Y/N)", default="N").upper().startswith("Y"):
        delete_worker(cur.id)
        print("직원이 삭제되었습니다.")

def days_off_menu(year: int, month: int):
    """해당 월의 직원별 신청 휴무 보기/수정"""
    try:
        workers = load_workers()
        if not workers:
            print("직원이 없습니다. 먼저 직원을 추가해주세요.")
            return
        days_off = load_days_off(year, month)
        print(f"\n[{month_key(year, month)} 신청 휴무]")
        for w in workers:
            days = ",".join(str(d) for d in days_off.get(w.id, [])) or "-"
            print(f"{w.id} | {w.name} | {days}")

        cur = _find(workers, get_int("\n수정할 직원 ID"))
        if not cur:
            print("해당 ID의 직원이 없습니다.")
            return
        current = ",".join(str(d) for d in days_off.get(cur.id, []))
        raw = get_input("휴무일(예: 3,10-12 / 빈값=없음)", allow_empty=True)
        if raw == "" and current and not get_input(
                "기존 휴무를 모두 지울까요? (Y/N)", default="N").upper().startswith("Y"):
            return
        days = parse_day_list(raw, days_in_month(year, month))
        set_days_off(year, month, cur.id, days)
        print(f"{cur.name}: {days or '휴무 없음'} 저장 완료")
    except ValueError as e:
        print(f"입력 오류: {e}")
    except GoBackAction:
        print("이전 메뉴로 이동")
    except CancelAction:
        print("메인 메뉴로 이동")
