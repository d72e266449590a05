# main.py
import argparse
import logging
import os
import sys


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="월간 근무 자동 배정 (GUI 기본, --cli로 콘솔 메뉴)")
    parser.add_argument("--cli", action="store_true", help="콘솔 메뉴로 실행")
    parser.add_argument("--seed", type=int, default=None, help="동률 처리 난수 시드 (재현용)")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("SHIFT_ROSTER_LOG_LEVEL", "INFO"),
        help="로그 레벨 (DEBUG/INFO/WARNING...)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cli:
        from shift_roster.cli.menu import main_menu
        main_menu(seed=args.seed)
        return 0

    from PySide6.QtWidgets import QApplication
    from shift_roster.gui.main_window import MainWindow

    app = QApplication(sys.argv[:1])
    win = MainWindow(seed=args.seed)
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
