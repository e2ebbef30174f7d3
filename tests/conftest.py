from __future__ import annotations

from datetime import datetime, timezone

import pytest

from levant.core.enums import Role
from levant.state.app_state import TimeClockState
from levant.store.memory_record_store import InMemoryRecordStore


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 15, 18, 0, tzinfo=timezone.utc)


@pytest.fixture
def store() -> InMemoryRecordStore:
    """Store with a configured PIN (``1234``) and no employees."""

    s = InMemoryRecordStore()
    s.insert("settings", [{"pin_code": "1234", "admin_user_id": None}])
    return s


@pytest.fixture
def state(store, fixed_now) -> TimeClockState:
    st = TimeClockState(store, admin_name="Admin", clock=lambda: fixed_now)
    assert st.load()
    return st


@pytest.fixture
def employee(state):
    return state.add_employee("Sara de Vries", Role.KITCHEN)
