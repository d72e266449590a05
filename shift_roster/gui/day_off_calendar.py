# gui/day_off_calendar.py
import calendar
from PySide6.QtWidgets import QWidget, QVBoxLayout, QGridLayout, QLabel, QPushButton
from PySide6.QtCore import Qt, Signal

from shift_roster.models.shift import WEEKDAY_LABELS


class DayOffCalendar(QWidget):
    """
    선택한 직원의 신청 휴무 입력용 달력.
    날짜 버튼을 눌러 휴무 on/off → changed(list[int]) 시그널
    """
    changed = Signal(list)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.vbox = QVBoxLayout(self)
        self.vbox.setContentsMargins(0, 0, 0, 0)

        header = QGridLayout()
        self.vbox.addLayout(header)
        for c, w in enumerate(WEEKDAY_LABELS):   # 일~토
            lbl = QLabel(w); lbl.setAlignment(Qt.AlignCenter)
            header.addWidget(lbl, 0, c)

        self.grid = QGridLayout()
        self.vbox.addLayout(self.grid)
        self._buttons = {}

    def clear_grid(self):
        while self.grid.count():
            item = self.grid.takeAt(0)
            w = item.widget()
            if w is not None:
                w.setParent(None)
        self._buttons = {}

    def render_month(self, year, month, days_off=(), enabled=True):
        self.clear_grid()
        cal = calendar.Calendar(firstweekday=6)  # Sunday
        selected = set(days_off)
        for r, week in enumerate(cal.monthdayscalendar(year, month)):
            for c, day in enumerate(week):
                if day == 0:
                    continue
                btn = QPushButton(str(day))
                btn.setCheckable(True)
                btn.setChecked(day in selected)
                btn.setEnabled(enabled)
                btn.setFixedWidth(36)
                btn.setStyleSheet("QPushButton:checked { background:#f4b6b6; font-weight:600; }")
                btn.toggled.connect(lambda _checked: self.changed.emit(self.selected_days()))
                self._buttons[day] = btn
                self.grid.addWidget(btn, r, c)

    def selected_days(self):
        return sorted(d for d, b in self._buttons.items() if b.isChecked())
