from __future__ import annotations

import pytest

from levant.core.exceptions import AuthenticationError, StoreError
from levant.store.memory_record_store import InMemoryRecordStore
from levant.store.model import eq, gt, gte, lt, neq


def test_insert_assigns_ids_and_returns_stored_rows():
    s = InMemoryRecordStore()

    [row] = s.insert("employees", [{"name": "Ali", "role": "Bar", "is_active": True}])
    [settings] = s.insert("settings", [{"pin_code": "1234"}])

    assert row["id"] and row["created_at"]
    assert settings["id"] == 1
    assert s.select("employees", [eq("id", row["id"])]) == [row]


def test_filters_follow_sql_semantics():
    s = InMemoryRecordStore(
        {
            "time_logs": [
                {"id": "a", "date": "2024-01-01", "status": "completed"},
                {"id": "b", "date": "2024-02-01", "status": "active"},
                {"id": "c", "date": None, "status": "completed"},
            ]
        }
    )

    assert [r["id"] for r in s.select("time_logs", [lt("date", "2024-01-15")])] == ["a"]
    assert [r["id"] for r in s.select("time_logs", [gte("date", "2024-01-15")])] == ["b"]
    assert [r["id"] for r in s.select("time_logs", [neq("status", "completed")])] == ["b"]
    assert s.select("time_logs", [gt("date", "2000-01-01"), eq("status", "completed")]) == [
        {"id": "a", "date": "2024-01-01", "status": "completed"}
    ]


def test_update_and_delete_are_scoped_by_filters():
    s = InMemoryRecordStore({"employees": [{"id": "e1", "name": "A"}, {"id": "e2", "name": "B"}]})

    s.update("employees", {"name": "Z"}, [eq("id", "e2")])
    s.delete("employees", [eq("id", "e1")])

    assert s.rows("employees") == [{"id": "e2", "name": "Z"}]


def test_returned_rows_are_copies():
    s = InMemoryRecordStore({"time_logs": [{"id": "a", "edits": []}]})

    s.select("time_logs")[0]["edits"].append({"reason": "x"})

    assert s.rows("time_logs") == [{"id": "a", "edits": []}]


def test_fail_on_raises_store_error_for_given_times():
    s = InMemoryRecordStore()
    s.fail_on("employees", "select", times=1)

    with pytest.raises(StoreError) as exc:
        s.select("employees")

    assert exc.value.table == "employees"
    assert exc.value.operation == "select"
    assert s.select("employees") == []


def test_identities():
    s = InMemoryRecordStore()
    identity = s.create_identity("Owner@Levant.nl", "geheim")

    assert s.verify_credentials("owner@levant.nl", "geheim").id == identity.id
    with pytest.raises(AuthenticationError):
        s.verify_credentials("owner@levant.nl", "fout")
    with pytest.raises(StoreError):
        s.create_identity("owner@levant.nl", "nog-een")
