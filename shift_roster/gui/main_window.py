# gui/main_window.py
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout, QToolBar, QPushButton,
    QLabel, QTableWidget, QTableWidgetItem, QSizePolicy, QMessageBox,
    QHeaderView, QAbstractItemView, QSplitter, QTextEdit, QGroupBox, QFileDialog
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QColor, QBrush
from datetime import date

from shift_roster.data.data_manager import (
    load_workers, load_workers_for_month, add_worker, update_worker, delete_worker,
    load_days_off, set_days_off, load_demand, load_settings, load_roster, save_roster
)
from shift_roster.data.exporter import default_export_path, export_csv
from shift_roster.exceptions import ScheduleError
from shift_roster.logic.feasibility import check_feasibility
from shift_roster.logic.scheduler import generate_roster
from shift_roster.models.shift import OFF, REST, ShiftCode
from shift_roster.utils.date_helper import day_labels, days_in_month, month_key, shift_month
from shift_roster.utils.parse_utils import format_shift_codes
from shift_roster.gui.day_off_calendar import DayOffCalendar
from shift_roster.gui.worker_editor import WorkerEditor

CELL_COLORS = {
    ShiftCode.EARLY.value: "#fff2b3",
    ShiftCode.DAY.value: "#cfe8ff",
    ShiftCode.LATE_DAY.value: "#b9d4f0",
    ShiftCode.NIGHT.value: "#c9c2f2",
    REST: "#e4e4e4",
    OFF: "#f4b6b6",
}

class MainWindow(QMainWindow):
    def __init__(self, seed=None):
        super().__init__()
        self.setWindowTitle("월간 근무 배정")
        self.resize(1400, 900)

        self.year, self.month = shift_month(date.today().year, date.today().month, 1)
        self.seed = seed
        self.workers = load_workers()
        self.roster = None
        self._selected_id = None

        self._build_ui()
        self.refresh()

    # ---------------- UI ----------------
    def _build_ui(self):
        tb = QToolBar()
        self.addToolBar(tb)

        btn_prev = QPushButton("◀ 이전달")
        btn_prev.clicked.connect(self.prev_month)
        tb.addWidget(btn_prev)

        self.month_label = QLabel("")
        self.month_label.setStyleSheet("font-weight:600; padding:0 8px;")
        tb.addWidget(self.month_label)

        btn_next = QPushButton("다음달 ▶")
        btn_next.clicked.connect(self.next_month)
        tb.addWidget(btn_next)

        tb.addSeparator()

        btn_check = QPushButton("수요/공급 점검")
        btn_check.clicked.connect(self.run_feasibility)
        tb.addWidget(btn_check)

        btn_auto = QPushButton("자동 배정")
        btn_auto.setToolTip("보이는 달의 1일부터 말일까지 새로 배정")
        btn_auto.clicked.connect(self.run_auto_assign)
        tb.addWidget(btn_auto)

        btn_export = QPushButton("CSV 내보내기")
        btn_export.clicked.connect(self.export_current)
        tb.addWidget(btn_export)

        self.act_toggle_left = QAction("관리 패널 보기", self)
        self.act_toggle_left.setCheckable(True)
        self.act_toggle_left.setChecked(True)
        self.act_toggle_left.toggled.connect(self.toggle_left_panel)
        tb.addAction(self.act_toggle_left)

        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)
        root.setContentsMargins(0, 0, 0, 0)

        splitter = QSplitter(Qt.Horizontal)
        splitter.setHandleWidth(2)
        root.addWidget(splitter)

        # ----- 좌측: 직원 편집 / 목록 / 신청 휴무 -----
        left_container = QWidget()
        left = QVBoxLayout(left_container)

        self.editor = WorkerEditor()
        left.addWidget(self.editor)

        left.addWidget(QLabel("직원 목록"))
        self.worker_table = QTableWidget(0, 4)
        self.worker_table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.worker_table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.worker_table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.worker_table.setHorizontalHeaderLabels(["이름", "유형", "주최대", "월정원"])
        self.worker_table.setSizePolicy(QSizePolicy.Preferred, QSizePolicy.Expanding)
        self.worker_table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        left.addWidget(self.worker_table)

        self.days_off_box = QGroupBox("신청 휴무")
        dv = QVBoxLayout(self.days_off_box)
        self.days_off_calendar = DayOffCalendar()
        dv.addWidget(self.days_off_calendar)
        left.addWidget(self.days_off_box)

        left_container.setMinimumWidth(380)
        left_container.setMaximumWidth(420)

        # ----- 우측: 배정표 + 리포트 -----
        right_container = QWidget()
        right = QVBoxLayout(right_container)

        self.roster_table = QTableWidget(0, 0)
        self.roster_table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.roster_table.setSelectionMode(QAbstractItemView.NoSelection)
        right.addWidget(self.roster_table, 4)

        self.report = QTextEdit()
        self.report.setReadOnly(True)
        self.report.setPlaceholderText("자동 배정 후 미충족 수요/정원이 여기에 표시됩니다.")
        right.addWidget(self.report, 1)

        splitter.addWidget(left_container)
        splitter.addWidget(right_container)
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)
        splitter.setCollapsible(0, True)
        splitter.setCollapsible(1, False)
        splitter.setSizes([left_container.minimumWidth(), 10_000])
        self._splitter = splitter
        self._left_container = left_container

        # 시그널
        self.worker_table.itemSelectionChanged.connect(self._on_worker_selected)
        self.editor.btn_new.clicked.connect(self._on_clear_selection)
        self.editor.btn_save.clicked.connect(self._save_worker)
        self.editor.btn_delete.clicked.connect(self._delete_worker)
        self.days_off_calendar.changed.connect(self._on_days_off_changed)

        self.status = self.statusBar()

    # ---------------- 데이터/바인딩 ----------------
    def _fill_worker_table(self):
        self.worker_table.blockSignals(True)
        self.worker_table.setRowCount(0)
        for w in self.workers:
            r = self.worker_table.rowCount()
            self.worker_table.insertRow(r)
            values = [w.name, format_shift_codes(w.available_shifts),
                      str(w.max_shifts_per_week), str(w.exact_shifts_per_month)]
            for c, v in enumerate(values):
                item = QTableWidgetItem(v)
                item.setData(Qt.UserRole, w.id)   # 행 히든 데이터로 ID 저장
                self.worker_table.setItem(r, c, item)
            if w.id == self._selected_id:
                self.worker_table.selectRow(r)
        self.worker_table.blockSignals(False)

    def _fill_roster_table(self):
        labels = day_labels(self.year, self.month)
        t = self.roster_table
        t.clear()
        t.setColumnCount(len(labels))
        t.setHorizontalHeaderLabels([lbl.replace("(", "\n(") for lbl in labels])
        rows = [w for w in self.workers if self.roster and w.id in self.roster.cells]
        t.setRowCount(len(rows))
        t.setVerticalHeaderLabels([w.name for w in rows])
        for r, w in enumerate(rows):
            for c, v in enumerate(self.roster.row(w.id)):
                item = QTableWidgetItem(v)
                item.setTextAlignment(Qt.AlignCenter)
                if v in CELL_COLORS:
                    item.setBackground(QBrush(QColor(CELL_COLORS[v])))
                t.setItem(r, c, item)
        t.resizeColumnsToContents()

    def _render_days_off(self):
        if self._selected_id is None:
            self.days_off_box.setTitle("신청 휴무 (직원을 선택하세요)")
            self.days_off_calendar.render_month(self.year, self.month, enabled=False)
            return
        w = next((x for x in self.workers if x.id == self._selected_id), None)
        name = w.name if w else ""
        self.days_off_box.setTitle(f"신청 휴무 - {name} ({month_key(self.year, self.month)})")
        days = load_days_off(self.year, self.month).get(self._selected_id, [])
        self.days_off_calendar.blockSignals(True)
        self.days_off_calendar.render_month(self.year, self.month, days)
        self.days_off_calendar.blockSignals(False)

    def _on_worker_selected(self):
        row = self.worker_table.currentRow()
        if row < 0:
            return
        wid = self.worker_table.item(row, 0).data(Qt.UserRole)
        w = next((x for x in self.workers if x.id == wid), None)
        if not w:
            return
        self._selected_id = w.id
        self.editor.bind(w)
        self._render_days_off()

    def _on_clear_selection(self):
        self._selected_id = None
        self.worker_table.clearSelection()
        self._render_days_off()

    def _on_days_off_changed(self, days):
        if self._selected_id is None:
            return
        set_days_off(self.year, self.month, self._selected_id, days)
        self.status.showMessage(f"신청 휴무 저장: {', '.join(map(str, days)) or '없음'}", 2000)

    def _save_worker(self):
        w = self.editor.collect()
        try:
            if self.editor.editing_id is None:
                w = add_worker(w)
                msg = "추가 완료."
            else:
                update_worker(w)
                msg = "수정 완료."
        except (ValueError, KeyError, ScheduleError) as e:
            QMessageBox.warning(self, "확인", str(e))
            return
        self._selected_id = w.id
        self.editor.bind(w)
        self.refresh()
        self.status.showMessage(msg, 2000)

    def _delete_worker(self):
        if self._selected_id is None:
            QMessageBox.information(self, "안내", "삭제할 직원을 선택해주세요.")
            return
        w = next((x for x in self.workers if x.id == self._selected_id), None)
        name = w.name if w else str(self._selected_id)
        if QMessageBox.question(self, "확인", f"[{name}]을(를) 삭제하시겠습니까?") != QMessageBox.Yes:
            return
        delete_worker(self._selected_id)
        self._selected_id = None
        self.editor.clear()
        self.refresh()
        QMessageBox.information(self, "완료", f"[{name}] 삭제 및 신청 휴무 정리 완료.")

    # ---------------- 동작 ----------------
    def refresh(self):
        self.workers = load_workers()
        if self._selected_id is not None and not any(w.id == self._selected_id for w in self.workers):
            self._selected_id = None
        self.roster = load_roster(self.year, self.month)
        self._fill_worker_table()
        self._fill_roster_table()
        self._render_days_off()

        self.month_label.setText(f"{month_key(self.year, self.month)}  (일수: {days_in_month(self.year, self.month)}일)")
        state = "배정표 있음" if self.roster else "배정표 없음"
        self.status.showMessage(f"직원 {len(self.workers)}명, {state}")

    def run_feasibility(self):
        workers = load_workers_for_month(self.year, self.month)
        report = check_feasibility(workers, self.year, self.month, load_demand())
        lines = [f"[{month_key(self.year, self.month)} 수요/공급 점검]"]
        for k in report.demand:
            lines.append(f"{k.value}: 수요 {report.demand[k]} / 공급 {report.supply[k]}")
        lines += [f"⚠ {w}" for w in report.warnings] or ["공급 부족 예상 없음."]
        self.report.setPlainText("\n".join(lines))
        return report

    def run_auto_assign(self):
        workers = load_workers_for_month(self.year, self.month)
        if not workers:
            QMessageBox.information(self, "안내", "직원 데이터가 없습니다. 먼저 직원을 등록해주세요.")
            return

        report = self.run_feasibility()
        msg = f"{month_key(self.year, self.month)} 자동 배정을 실행할까요?\n※ 기존 배정표는 새로 덮어씁니다."
        if report.warnings:
            msg += "\n\n공급 부족 예상:\n" + "\n".join(str(w) for w in report.warnings)

        mb = QMessageBox(self)
        mb.setIcon(QMessageBox.Question)
        mb.setWindowTitle("자동 배정 확인")
        mb.setText(msg)
        mb.setStandardButtons(QMessageBox.Yes | QMessageBox.No)
        mb.setDefaultButton(QMessageBox.No)
        if mb.exec() != QMessageBox.Yes:
            self.status.showMessage("자동 배정을 취소했습니다.", 3000)
            return

        seed = self.seed if self.seed is not None else load_settings().get("seed")
        try:
            result = generate_roster(workers, self.year, self.month, load_demand(), seed=seed)
        except ScheduleError as e:
            QMessageBox.warning(self, "배정 실패", str(e))
            return

        save_roster(result.roster)
        self.refresh()
        self.report.setPlainText(self._format_result(result))

    @staticmethod
    def _format_result(result):
        if result.is_complete:
            return "모든 수요와 월 정원을 채웠습니다."
        lines = []
        if result.worker_shortfalls:
            lines.append("[월 정원 미달]")
            lines += [f"{s.worker_name} (ID {s.worker_id}): {s.deficit}슬롯 부족" for s in result.worker_shortfalls]
        if result.demand_shortfalls:
            lines.append("[수요 미충족]")
            lines += [f"{s.label} {s.kind.value}: {s.deficit}명 부족" for s in result.demand_shortfalls]
        return "\n".join(lines)

    def export_current(self):
        if self.roster is None:
            QMessageBox.information(self, "안내", "배정표가 없습니다. 먼저 자동 배정을 실행하세요.")
            return
        path, _ = QFileDialog.getSaveFileName(
            self, "CSV 저장", str(default_export_path(self.roster)), "CSV (*.csv)")
        if not path:
            return
        saved = export_csv(self.roster, self.workers, path)
        self.status.showMessage(f"CSV 저장 완료: {saved}", 4000)

    def prev_month(self):
        self.year, self.month = shift_month(self.year, self.month, -1)
        self.refresh()

    def next_month(self):
        self.year, self.month = shift_month(self.year, self.month, 1)
        self.refresh()

    def toggle_left_panel(self, visible: bool):
        sizes = self._splitter.sizes()
        total = sum(sizes) if sizes else 1400
        self._left_container.setVisible(visible)
        if visible:
            left_min = self._left_container.minimumWidth()
            self._splitter.setSizes([left_min, max(total - left_min, 500)])
        else:
            self._splitter.setSizes([0, total])
