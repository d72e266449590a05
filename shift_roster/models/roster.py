# models/roster.py
from shift_roster.exceptions import CellAlreadyAssigned
from shift_roster.models.shift import EMPTY, ShiftCode
from shift_roster.utils.date_helper import days_in_month, month_key


class Roster:
    """
    월간 배정표: 직원 ID → 일(1..N) → 셀 값
    - 모든 (직원, 일)은 빈 문자열로 시작
    - 한 번 채워진 셀은 다시 쓰지 않음 (assign이 예외)
    """
    def __init__(self, year, month, worker_ids):
        self.year = year
        self.month = month
        self.num_days = days_in_month(year, month)
        self.cells = {wid: {d: EMPTY for d in range(1, self.num_days + 1)} for wid in worker_ids}

    def get(self, worker_id, day):
        # 월 범위 밖 날짜는 빈 칸 취급 (전날/다음날 조회용)
        if day < 1 or day > self.num_days:
            return EMPTY
        return self.cells[worker_id][day]

    def is_empty(self, worker_id, day):
        return self.cells[worker_id][day] == EMPTY

    def assign(self, worker_id, day, value):
        if isinstance(value, ShiftCode):
            value = value.value
        current = self.cells[worker_id][day]
        if current != EMPTY:
            raise CellAlreadyAssigned(worker_id, day, current)
        self.cells[worker_id][day] = value

    def row(self, worker_id):
        return [self.cells[worker_id][d] for d in range(1, self.num_days + 1)]

    def count(self, worker_id, *values):
        return sum(1 for v in self.cells[worker_id].values() if v in values)

    def to_dict(self):
        return {
            'month': month_key(self.year, self.month),
            'cells': {str(wid): self.row(wid) for wid in self.cells},
        }

    @staticmethod
    def from_dict(data):
        year, month = (int(x) for x in data['month'].split('-'))
        cells = data['cells']
        r = Roster(year, month, [int(k) for k in cells])
        for k, row in cells.items():
            for d, v in enumerate(row, start=1):
                r.cells[int(k)][d] = v
        return r
