# exceptions.py


class CancelAction(Exception):
    """입력 도중 'cancel' → 메인 메뉴로."""


class GoBackAction(Exception):
    """입력 도중 'back' → 이전 메뉴로."""


class ScheduleError(Exception):
    pass


class WorkerValidationError(ScheduleError):
    def __init__(self, worker_id, field, message):
        self.worker_id = worker_id
        self.field = field
        super().__init__(f"worker {worker_id}: {field} {message}")


class DemandTableError(ScheduleError):
    pass


class CellAlreadyAssigned(ScheduleError):
    def __init__(self, worker_id, day, current):
        self.worker_id = worker_id
        self.day = day
        self.current = current
        super().__init__(f"worker {worker_id} day {day} is already '{current}'")
