from __future__ import annotations

import copy
import uuid
from datetime import datetime, timezone
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.constants import TABLE_SETTINGS
from ..core.exceptions import AuthenticationError, StoreError
from .model import Filter, Identity
from .repository import RecordStore

INTEGER_ID_TABLES = frozenset({TABLE_SETTINGS})


class InMemoryRecordStore(RecordStore):
    """Process-local record store.

    Backs ``STORE_BACKEND=memory`` (offline development) and the test-suite. Ids,
    ``created_at`` and filter semantics follow the MySQL store so the state
    controller cannot tell the two apart. ``fail_on`` injects ``StoreError``s.
    """

    def __init__(self, tables: Optional[dict[str, list[dict]]] = None):
        self._tables: dict[str, list[dict]] = {name: copy.deepcopy(rows) for name, rows in (tables or {}).items()}
        self._identities: dict[str, dict] = {}
        self._next_int_id: dict[str, int] = {}
        self._failures: dict[tuple[str, str], Optional[int]] = {}
        self.calls: list[tuple[str, str]] = []

    # --- fault injection -------------------------------------------------

    def fail_on(self, table: str, operation: str, *, times: Optional[int] = None) -> None:
        """Make ``operation`` on ``table`` raise; ``times=None`` keeps failing."""

        self._failures[(table, operation)] = times

    def clear_failures(self) -> None:
        self._failures.clear()

    def _check(self, table: str, operation: str) -> None:
        self.calls.append((table, operation))
        key = (table, operation)
        if key not in self._failures:
            return
        remaining = self._failures[key]
        if remaining is not None:
            if remaining <= 1:
                del self._failures[key]
            else:
                self._failures[key] = remaining - 1
        raise StoreError(f"{operation} on {table} failed", table=table, operation=operation)

    # --- helpers ---------------------------------------------------------

    def rows(self, table: str) -> list[dict]:
        """Snapshot of a table, for assertions."""

        return copy.deepcopy(self._tables.get(table, []))

    def _table(self, table: str) -> list[dict]:
        return self._tables.setdefault(table, [])

    def _new_id(self, table: str):
        if table in INTEGER_ID_TABLES:
            next_id = self._next_int_id.get(table, 0) + 1
            self._next_int_id[table] = next_id
            return next_id
        return str(uuid.uuid4())

    @staticmethod
    def _matches(row: dict, filters: Sequence[Filter]) -> bool:
        return all(f.matches(row) for f in filters)

    # --- RecordStore -----------------------------------------------------

    def select(self, table: str, filters: Sequence[Filter] = ()) -> list[dict]:
        self._check(table, "select")
        return [copy.deepcopy(r) for r in self._table(table) if self._matches(r, filters)]

    def insert(self, table: str, rows: Sequence[dict]) -> list[dict]:
        self._check(table, "insert")
        stored: list[dict] = []
        for row in rows:
            record = copy.deepcopy(dict(row))
            record["id"] = self._new_id(table)
            if table not in INTEGER_ID_TABLES:
                record.setdefault("created_at", datetime.now(timezone.utc).isoformat())
            self._table(table).append(record)
            stored.append(copy.deepcopy(record))
        return stored

    def update(self, table: str, patch: dict, filters: Sequence[Filter]) -> None:
        self._check(table, "update")
        for row in self._table(table):
            if self._matches(row, filters):
                row.update(copy.deepcopy(patch))

    def delete(self, table: str, filters: Sequence[Filter]) -> None:
        self._check(table, "delete")
        self._tables[table] = [r for r in self._table(table) if not self._matches(r, filters)]

    def create_identity(self, email: str, password: str) -> Identity:
        self._check("auth", "create_identity")
        key = email.strip().lower()
        if key in self._identities:
            raise StoreError("Gebruiker bestaat al", table="auth", operation="create_identity")
        record = {
            "id": str(uuid.uuid4()),
            "email": key,
            "password_hash": generate_password_hash(password),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self._identities[key] = record
        return Identity(id=record["id"], email=record["email"], created_at=record["created_at"])

    def verify_credentials(self, email: str, password: str) -> Identity:
        self._check("auth", "verify_credentials")
        record = self._identities.get(email.strip().lower())
        if not record or not check_password_hash(record["password_hash"], password):
            raise AuthenticationError("Wachtwoord of email onjuist")
        return Identity(id=record["id"], email=record["email"], created_at=record["created_at"])
