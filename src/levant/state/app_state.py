"""In-memory application state with optimistic writes against the record store.

Every mutation follows one of two patterns:

* optimistic insert: build the record with a ``tmp-`` id, append it, insert it
  at the store, then swap in the stored row (durable id, server fields);
* optimistic update: change the record in place, then update the store scoped
  by ``id``.

When the store call fails the error is logged, local changes since the last
confirmed state are dropped and everything is reloaded from the store.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import (
    DEFAULT_ADMIN_NAME,
    TABLE_EMPLOYEES,
    TABLE_SETTINGS,
    TABLE_TIME_LOGS,
)
from ..core.enums import LogStatus, Role
from ..core.exceptions import ConflictError, NotFoundError, StoreError
from ..employees.model import Employee
from ..settings.model import Settings
from ..store.model import eq, gte, lt, neq
from ..store.repository import RecordStore
from ..timelogs import lifecycle
from ..timelogs.model import TimeLog

logger = logging.getLogger(__name__)

# Matches every uuid row; used to delete whole tables.
NIL_UUID = "00000000-0000-0000-0000-000000000000"


class TimeClockState:
    def __init__(
        self,
        store: RecordStore,
        *,
        admin_name: str = DEFAULT_ADMIN_NAME,
        clock: Callable[[], datetime] = now_local,
    ):
        self._store = store
        self._admin_name = admin_name
        self._clock = clock

        self.employees: list[Employee] = []
        self.logs: list[TimeLog] = []
        self.settings: Optional[Settings] = None
        self.needs_setup = False
        self.loaded = False

        self._confirmed: tuple[list[Employee], list[TimeLog]] = ([], [])

    # --- loading ---------------------------------------------------------

    def load(self, *, today: Optional[date] = None) -> bool:
        """Refresh settings, employees and logs from the store.

        Logs older than the retention window are deleted at the store first.
        Returns ``False`` (and keeps the last confirmed collections) on failure.
        """

        try:
            settings_rows = self._store.select(TABLE_SETTINGS)
            if not settings_rows:
                self.settings = None
                self.needs_setup = True
                self.loaded = True
                return True

            self.settings = Settings.from_row(settings_rows[0])
            self.needs_setup = False

            self._purge_expired(today or self._clock().date())

            employees = [Employee.from_row(r) for r in self._store.select(TABLE_EMPLOYEES)]
            logs = [TimeLog.from_row(r) for r in self._store.select(TABLE_TIME_LOGS)]
        except StoreError as e:
            logger.error("Loading state from the store failed: %s", e)
            self._restore_confirmed()
            return False

        self.employees = employees
        self.logs = logs
        self.loaded = True
        self._mark_confirmed()
        return True

    def _purge_expired(self, today: date) -> None:
        cutoff = lifecycle.retention_cutoff(today)
        try:
            self._store.delete(TABLE_TIME_LOGS, [lt("date", cutoff.strftime("%Y-%m-%d"))])
        except StoreError as e:
            logger.warning("Retention cleanup before %s failed: %s", cutoff, e)

    def _mark_confirmed(self) -> None:
        self._confirmed = (list(self.employees), list(self.logs))

    def _restore_confirmed(self) -> None:
        self.employees = list(self._confirmed[0])
        self.logs = list(self._confirmed[1])

    def _reconcile(self, operation: str, error: StoreError) -> None:
        logger.error("%s failed, reloading from store: %s", operation, error)
        self._restore_confirmed()
        self.load()

    # --- lookups ---------------------------------------------------------

    @property
    def admin_name(self) -> str:
        return self._admin_name

    def now(self) -> datetime:
        return self._clock()

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        return next((e for e in self.employees if e.id == employee_id), None)

    def get_log(self, log_id: str) -> Optional[TimeLog]:
        return next((log for log in self.logs if log.id == log_id), None)

    def active_log_for(self, employee_id: str) -> Optional[TimeLog]:
        return lifecycle.find_active_log(self.logs, employee_id)

    def _require_employee(self, employee_id: str) -> Employee:
        employee = self.get_employee(employee_id)
        if not employee:
            raise NotFoundError("Medewerker niet gevonden")
        return employee

    def _require_log(self, log_id: str) -> TimeLog:
        log = self.get_log(log_id)
        if not log:
            raise NotFoundError("Registratie niet gevonden")
        return log

    def _require_no_other_active(self, employee_id: str, log_id: Optional[str] = None) -> None:
        active = self.active_log_for(employee_id)
        if active is not None and active.id != log_id:
            raise ConflictError("Medewerker is al ingeklokt")

    def _replace_log(self, log_id: str, new: TimeLog) -> None:
        self.logs = [new if log.id == log_id else log for log in self.logs]

    def _replace_employee(self, employee_id: str, new: Employee) -> None:
        self.employees = [new if e.id == employee_id else e for e in self.employees]

    # --- time logs -------------------------------------------------------

    def _insert_log(self, log: TimeLog, operation: str) -> TimeLog:
        self.logs = self.logs + [log]
        try:
            stored = self._store.insert(TABLE_TIME_LOGS, [log.to_row()])
        except StoreError as e:
            self._reconcile(operation, e)
            return log

        durable = TimeLog.from_row(stored[0])
        self._replace_log(log.id, durable)
        self._mark_confirmed()
        return durable

    def _update_log(self, log_id: str, new: TimeLog, patch: dict, operation: str) -> TimeLog:
        self._replace_log(log_id, new)
        try:
            self._store.update(TABLE_TIME_LOGS, patch, [eq("id", log_id)])
        except StoreError as e:
            self._reconcile(operation, e)
            return new

        self._mark_confirmed()
        return new

    def clock_in(self, employee_id: str, *, now: Optional[datetime] = None) -> Optional[TimeLog]:
        """Start a shift. Returns ``None`` when the employee is already clocked in."""

        employee = self._require_employee(employee_id)
        if not employee.is_active:
            raise ConflictError("Medewerker is niet actief")
        if self.active_log_for(employee_id):
            return None

        log = lifecycle.start_log(employee_id, now or self._clock())
        return self._insert_log(log, f"Clock-in for {employee_id}")

    def clock_out(self, employee_id: str, *, now: Optional[datetime] = None) -> Optional[TimeLog]:
        """Close the employee's active log; a no-op when there is none."""

        log = self.active_log_for(employee_id)
        if not log:
            return None

        closed = lifecycle.close_log(log, now or self._clock())
        patch = {"clock_out": closed.to_row()["clock_out"], "status": LogStatus.COMPLETED.value}
        return self._update_log(log.id, closed, patch, f"Clock-out for {employee_id}")

    def add_log(
        self,
        employee_id: str,
        work_date: date,
        clock_in: datetime,
        clock_out: Optional[datetime],
        reason: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> TimeLog:
        self._require_employee(employee_id)
        if clock_out is None:
            self._require_no_other_active(employee_id)
        log = lifecycle.manual_log(
            employee_id,
            work_date,
            clock_in,
            clock_out,
            reason,
            admin_name=self._admin_name,
            now=now or self._clock(),
        )
        return self._insert_log(log, f"Manual log for {employee_id}")

    def edit_log(
        self,
        log_id: str,
        new_in: datetime,
        new_out: Optional[datetime],
        reason: Optional[str],
        *,
        now: Optional[datetime] = None,
    ) -> TimeLog:
        log = self._require_log(log_id)
        if new_out is None:
            self._require_no_other_active(log.employee_id, log_id)
        edited = lifecycle.apply_edit(
            log,
            new_in,
            new_out,
            reason,
            admin_name=self._admin_name,
            now=now or self._clock(),
        )
        row = edited.to_row()
        patch = {k: row[k] for k in ("clock_in", "clock_out", "status", "edits")}
        return self._update_log(log_id, edited, patch, f"Edit of log {log_id}")

    def delete_completed_logs(self) -> bool:
        """Delete every completed log; active logs stay. All-or-nothing."""

        try:
            self._store.delete(TABLE_TIME_LOGS, [eq("status", LogStatus.COMPLETED.value)])
        except StoreError as e:
            logger.error("Deleting completed logs failed: %s", e)
            return False

        logger.info("Deleted %d completed logs", len(lifecycle.completed_logs(self.logs)))
        self.logs = lifecycle.without_completed(self.logs)
        self._mark_confirmed()
        return True

    # --- employees -------------------------------------------------------

    def add_employee(self, name: str, role: Role) -> Employee:
        name = require_non_empty(name, "Naam")
        employee = Employee(id=lifecycle.temp_id(), name=name, role=Role(role), is_active=True)
        self.employees = self.employees + [employee]
        try:
            stored = self._store.insert(TABLE_EMPLOYEES, [employee.to_row()])
        except StoreError as e:
            self._reconcile(f"Adding employee {name!r}", e)
            return employee

        durable = Employee.from_row(stored[0])
        self._replace_employee(employee.id, durable)
        self._mark_confirmed()
        return durable

    def _update_employee(self, employee_id: str, new: Employee, patch: dict, operation: str) -> Employee:
        self._replace_employee(employee_id, new)
        try:
            self._store.update(TABLE_EMPLOYEES, patch, [eq("id", employee_id)])
        except StoreError as e:
            self._reconcile(operation, e)
            return new

        self._mark_confirmed()
        return new

    def edit_employee(self, employee_id: str, name: str, role: Role) -> Employee:
        name = require_non_empty(name, "Naam")
        employee = self._require_employee(employee_id)
        updated = replace(employee, name=name, role=Role(role))
        patch = {"name": updated.name, "role": updated.role.value}
        return self._update_employee(employee_id, updated, patch, f"Editing employee {employee_id}")

    def remove_employee(self, employee_id: str) -> Employee:
        """Soft delete: the employee disappears from the board, its logs stay."""

        employee = self._require_employee(employee_id)
        updated = replace(employee, is_active=False)
        return self._update_employee(employee_id, updated, {"is_active": False}, f"Deactivating employee {employee_id}")

    # --- admin -----------------------------------------------------------

    def verify_pin(self, pin: str) -> bool:
        return self.settings is not None and pin == self.settings.pin_code

    def set_pin(self, pin: str) -> None:
        if self.settings is not None:
            self.settings = replace(self.settings, pin_code=pin)

    def full_reset(self) -> bool:
        """Delete all logs, then all employees, then settings.

        Stops at the first failing step and reloads what the store still holds;
        earlier deletions are not rolled back.
        """

        steps = (
            (TABLE_TIME_LOGS, [neq("id", NIL_UUID)]),
            (TABLE_EMPLOYEES, [neq("id", NIL_UUID)]),
            (TABLE_SETTINGS, [gte("id", 0)]),
        )
        for table, filters in steps:
            try:
                self._store.delete(table, filters)
            except StoreError as e:
                logger.error("Reset of %s failed: %s", table, e)
                self.load()
                return False

        self.logs = []
        self.employees = []
        self.settings = None
        self.needs_setup = True
        self._mark_confirmed()
        return True
