from __future__ import annotations

import pytest

from levant.core.exceptions import AuthenticationError, ConflictError, StoreError, ValidationError
from levant.settings.service import AdminService
from levant.state.app_state import TimeClockState
from levant.store.memory_record_store import InMemoryRecordStore


@pytest.fixture
def fresh(fixed_now):
    store = InMemoryRecordStore()
    state = TimeClockState(store, clock=lambda: fixed_now)
    state.load()
    return store, state, AdminService(store, state)


def test_setup_creates_identity_and_settings(fresh):
    store, state, service = fresh

    identity = service.setup(email="owner@levant.nl", password="geheim", pin="1234")

    assert not state.needs_setup
    assert state.settings.admin_user_id == identity.id
    assert store.rows("settings")[0]["pin_code"] == "1234"
    service.login("1234")


def test_setup_only_once(fresh):
    _, _, service = fresh
    service.setup(email="owner@levant.nl", password="geheim", pin="1234")

    with pytest.raises(ConflictError):
        service.setup(email="other@levant.nl", password="x", pin="9999")


@pytest.mark.parametrize("pin", ["123", "1234567", "", None])
def test_setup_rejects_bad_pin(fresh, pin):
    store, state, service = fresh

    with pytest.raises(ValidationError):
        service.setup(email="owner@levant.nl", password="geheim", pin=pin)
    assert state.needs_setup
    assert store.rows("settings") == []


def test_login_with_wrong_pin(state, store):
    service = AdminService(store, state)

    with pytest.raises(AuthenticationError, match="Onjuiste pincode"):
        service.login("9999")


def test_change_pin_requires_credentials(fresh):
    store, state, service = fresh
    service.setup(email="owner@levant.nl", password="geheim", pin="1234")

    with pytest.raises(AuthenticationError):
        service.change_pin(email="owner@levant.nl", password="fout", new_pin="5678")
    assert state.verify_pin("1234")

    service.change_pin(email="owner@levant.nl", password="geheim", new_pin="5678")

    assert state.verify_pin("5678")
    assert store.rows("settings")[0]["pin_code"] == "5678"


def test_change_pin_needs_all_fields(state, store):
    with pytest.raises(AuthenticationError):
        AdminService(store, state).change_pin(email="", password="geheim", new_pin="5678")


def test_setup_can_be_retried_after_settings_insert_failed(fresh):
    store, state, service = fresh
    store.fail_on("settings", "insert", times=1)

    with pytest.raises(StoreError):
        service.setup(email="owner@levant.nl", password="geheim", pin="1234")
    assert state.needs_setup

    identity = service.setup(email="owner@levant.nl", password="geheim", pin="1234")

    assert not state.needs_setup
    assert state.settings.admin_user_id == identity.id


def test_setup_retry_with_other_password_keeps_failing(fresh):
    store, _, service = fresh
    store.fail_on("settings", "insert", times=1)
    with pytest.raises(StoreError):
        service.setup(email="owner@levant.nl", password="geheim", pin="1234")

    with pytest.raises(StoreError, match="Gebruiker bestaat al"):
        service.setup(email="owner@levant.nl", password="anders", pin="1234")


def test_change_pin_rejects_non_text_fields(fresh):
    _, _, service = fresh
    service.setup(email="owner@levant.nl", password="geheim", pin="1234")

    with pytest.raises(ValidationError):
        service.change_pin(email="owner@levant.nl", password=1234, new_pin="5678")
