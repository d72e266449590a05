# gui/worker_editor.py
from PySide6.QtWidgets import (
    QGroupBox, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QPushButton,
    QCheckBox, QSpinBox, QGridLayout
)

from shift_roster.models.shift import ShiftCode, Weekday
from shift_roster.models.worker import Worker


class WorkerEditor(QGroupBox):
    """
    직원 추가/편집 패널
    (이름 / 근무 가능 요일 / 근무 가능 유형 / 주간 최대 / 월 정원)
    """
    def __init__(self, parent=None):
        super().__init__("직원 추가/편집", parent)
        self._editing_id = None

        form = QGridLayout()
        r = 0
        self.txt_id = QLineEdit()
        self.txt_id.setReadOnly(True)
        self.txt_id.setPlaceholderText("ID는 자동 부여됩니다.")
        form.addWidget(QLabel("ID"), r, 0); form.addWidget(self.txt_id, r, 1); r += 1

        self.txt_name = QLineEdit()
        form.addWidget(QLabel("이름*"), r, 0); form.addWidget(self.txt_name, r, 1); r += 1

        self.spin_week = QSpinBox(); self.spin_week.setRange(1, 7); self.spin_week.setValue(5)
        form.addWidget(QLabel("주간 최대"), r, 0); form.addWidget(self.spin_week, r, 1); r += 1

        self.spin_month = QSpinBox(); self.spin_month.setRange(0, 31); self.spin_month.setValue(20)
        form.addWidget(QLabel("월 정원"), r, 0); form.addWidget(self.spin_month, r, 1); r += 1

        root = QVBoxLayout(self)
        root.addLayout(form)

        # 근무 가능 요일(체크박스 7개, 일~토)
        gb_days = QGroupBox("근무 가능 요일")
        daybox = QHBoxLayout(gb_days)
        self.chk_days = []
        for wd in Weekday:
            cb = QCheckBox(wd.label)
            cb.setChecked(True)
            cb.setProperty("weekday", wd.value)
            self.chk_days.append(cb)
            daybox.addWidget(cb)
        root.addWidget(gb_days)

        # 근무 가능 유형
        gb_shift = QGroupBox("근무 가능 유형")
        shiftbox = QHBoxLayout(gb_shift)
        self.chk_shifts = []
        for code in ShiftCode:
            cb = QCheckBox(code.value)
            cb.setProperty("code", code.value)
            self.chk_shifts.append(cb)
            shiftbox.addWidget(cb)
        root.addWidget(gb_shift)

        btn_bar = QHBoxLayout()
        self.btn_new = QPushButton("초기화")
        self.btn_save = QPushButton("저장")
        self.btn_delete = QPushButton("직원 삭제")
        btn_bar.addWidget(self.btn_new)
        btn_bar.addWidget(self.btn_save)
        btn_bar.addWidget(self.btn_delete)
        root.addLayout(btn_bar)

        self.btn_new.clicked.connect(self.clear)

    @property
    def editing_id(self):
        return self._editing_id

    def bind(self, w: Worker):
        self._editing_id = w.id
        self.txt_id.setText(str(w.id))
        self.txt_name.setText(w.name)
        self.spin_week.setValue(w.max_shifts_per_week)
        self.spin_month.setValue(w.exact_shifts_per_month)
        for cb in self.chk_days:
            cb.setChecked(Weekday(cb.property("weekday")) in w.available_weekdays)
        for cb in self.chk_shifts:
            cb.setChecked(ShiftCode(cb.property("code")) in w.available_shifts)

    def clear(self):
        self._editing_id = None
        self.txt_id.clear()
        self.txt_name.clear()
        self.spin_week.setValue(5)
        self.spin_month.setValue(20)
        for cb in self.chk_days:
            cb.setChecked(True)
        for cb in self.chk_shifts:
            cb.setChecked(False)

    def collect(self) -> Worker:
        """폼 → Worker (신규면 id=0, 저장 시 자동 부여)"""
        return Worker(
            id=self._editing_id or 0,
            name=self.txt_name.text().strip(),
            available_weekdays=frozenset(
                Weekday(cb.property("weekday")) for cb in self.chk_days if cb.isChecked()),
            available_shifts=frozenset(
                ShiftCode(cb.property("code")) for cb in self.chk_shifts if cb.isChecked()),
            max_shifts_per_week=int(self.spin_week.value()),
            exact_shifts_per_month=int(self.spin_month.value()),
        )
