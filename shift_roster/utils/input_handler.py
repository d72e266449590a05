# utils/input_handler.py
from shift_roster.exceptions import CancelAction, GoBackAction

def get_input(prompt: str, allow_empty: bool = False, default: str | None = None) -> str:
    label = prompt
    if default is not None:
        label += f" [{default}]"
    label += ": "

    while True:
        v = input(label).strip()

        low = v.lower()
        if low in ("취소", "cancel"):
            raise CancelAction()
        if low in ("뒤로", "back"):
            raise GoBackAction()

        if not v and default is not None:
            return default
        if not v and allow_empty:
            return ""   # 명시적 빈값 허용
        if not v:
            print("값을 입력하거나 '취소/뒤로'를 입력하세요.")
            continue
        return v

def get_int(prompt: str, default: int | None = None, minimum: int | None = None) -> int:
    while True:
        raw = get_input(prompt, default=None if default is None else str(default))
        try:
            n = int(raw)
        except ValueError:
            print("숫자를 입력하세요.")
            continue
        if minimum is not None and n < minimum:
            print(f"{minimum} 이상이어야 합니다.")
            continue
        return n
