from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_ADMIN_NAME
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import HoursReportService
from .settings.service import AdminService
from .shifts.service import ScheduleService
from .state.app_state import TimeClockState
from .store.memory_record_store import InMemoryRecordStore
from .store.mysql_record_store import MySQLRecordStore
from .store.repository import RecordStore

logger = logging.getLogger(__name__)

STORE_BACKENDS = ("mysql", "memory")


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    store: RecordStore

    state: TimeClockState
    admin_service: AdminService
    hours_service: HoursReportService
    schedule_service: ScheduleService


def build_container(
    *,
    db_config: Optional[dict] = None,
    store_backend: str = "mysql",
    admin_name: str = DEFAULT_ADMIN_NAME,
    store: Optional[RecordStore] = None,
) -> Container:
    """Wire the store, the state controller and the services.

    An explicit ``store`` wins over ``store_backend``.
    """

    conn = None
    if store is None:
        if store_backend not in STORE_BACKENDS:
            raise ValueError(f"Unknown STORE_BACKEND {store_backend!r}, expected one of {STORE_BACKENDS}")
        if store_backend == "memory":
            store = InMemoryRecordStore()
        else:
            conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))
            store = MySQLRecordStore(conn)
    logger.info("Record store: %s", type(store).__name__)

    state = TimeClockState(store, admin_name=admin_name)

    return Container(
        conn=conn,
        store=store,
        state=state,
        admin_service=AdminService(store, state),
        hours_service=HoursReportService(state),
        schedule_service=ScheduleService(store),
    )
