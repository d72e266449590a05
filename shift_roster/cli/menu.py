# cli/menu.py
from datetime import date

from shift_roster.cli.worker_menu import worker_menu, days_off_menu
from shift_roster.cli.roster_menu import (
    feasibility_menu, generate_menu, show_saved_roster, export_menu, demand_menu
)
from shift_roster.utils.date_helper import month_key, shift_month
from shift_roster.utils.input_handler import get_input
from shift_roster.exceptions import CancelAction, GoBackAction

def main_menu(seed=None):
    today = date.today()
    year, month = shift_month(today.year, today.month, 1)   # 기본: 다음 달

    while True:
        print(f"\n[월간 근무 배정]  대상 월: {month_key(year, month)}")
        print("1. 직원 관리")
        print("2. 신청 휴무 입력")
        print("3. 요일별 필요 인원")
        print("4. 수요/공급 점검")
        print("5. 자동 배정")
        print("6. 배정표 보기")
        print("7. CSV 내보내기")
        print("8. 대상 월 변경")
        print("0. 종료")

        try:
            choice = get_input("선택")
            if choice == "1":
                worker_menu()
            elif choice == "2":
                days_off_menu(year, month)
            elif choice == "3":
                demand_menu()
            elif choice == "4":
                feasibility_menu(year, month)
            elif choice == "5":
                generate_menu(year, month, seed=seed)
            elif choice == "6":
                show_saved_roster(year, month)
            elif choice == "7":
                export_menu(year, month)
            elif choice == "8":
                raw = get_input("대상 월(YYYY-MM)", default=month_key(year, month))
                y, m = (int(x) for x in raw.split("-"))
                if not 1 <= m <= 12:
                    raise ValueError(raw)
                year, month = y, m
            elif choice == "0":
                print("프로그램을 종료합니다.")
                break
            else:
                print("잘못된 선택.")
        except ValueError:
            print("형식이 올바르지 않습니다.")
        except GoBackAction:
            print("이전 메뉴로 이동")
        except CancelAction:
            print("메인 메뉴로 이동")
