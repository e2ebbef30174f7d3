from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Staff roles. Values are the labels stored in the employees table."""

    SERVER = "Bediening"
    KITCHEN = "Keuken"
    BAR = "Bar"
    MANAGER = "Manager"


class LogStatus(str, Enum):
    """Time-log lifecycle state: active until a clock-out is recorded."""

    ACTIVE = "active"
    COMPLETED = "completed"


class BoardStatus(str, Enum):
    """Per-day classification shown on the clock-in board."""

    NOT_STARTED = "not_started"
    WORKING = "working"
    FINISHED = "finished"
