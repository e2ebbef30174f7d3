from __future__ import annotations

import logging
import uuid
from typing import Any, Sequence

import mysql.connector
from werkzeug.security import check_password_hash, generate_password_hash

from ..core.constants import TABLE_ADMIN_USERS, TABLE_EMPLOYEES, TABLE_SETTINGS, TABLE_SHIFTS, TABLE_TIME_LOGS
from ..core.exceptions import AuthenticationError, StoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    from_mysql_date,
    from_mysql_datetime,
    from_mysql_json,
    normalize_mysql_time,
    to_mysql_datetime,
    to_mysql_json,
)
from .model import SQL_OPERATORS, Filter, Identity, eq
from .repository import RecordStore

logger = logging.getLogger(__name__)

# Column kinds per table. Only listed columns may appear in SQL.
TABLE_COLUMNS: dict[str, dict[str, str]] = {
    TABLE_SETTINGS: {"id": "int", "pin_code": "str", "admin_user_id": "str"},
    TABLE_EMPLOYEES: {"id": "str", "name": "str", "role": "str", "is_active": "bool", "created_at": "datetime"},
    TABLE_TIME_LOGS: {
        "id": "str",
        "employee_id": "str",
        "date": "date",
        "clock_in": "datetime",
        "clock_out": "datetime",
        "status": "str",
        "edits": "json",
        "created_at": "datetime",
    },
    TABLE_SHIFTS: {"id": "str", "employee_id": "str", "date": "date", "start_time": "time", "end_time": "time"},
}

AUTO_INCREMENT_TABLES = frozenset({TABLE_SETTINGS})
SERVER_COLUMNS = frozenset({"id", "created_at"})


class MySQLRecordStore(RecordStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    # --- value conversion ------------------------------------------------

    @staticmethod
    def _columns(table: str) -> dict[str, str]:
        try:
            return TABLE_COLUMNS[table]
        except KeyError:
            raise StoreError(f"Onbekende tabel: {table}", table=table) from None

    def _to_db(self, table: str, column: str, value: Any) -> Any:
        kind = self._columns(table).get(column)
        if kind is None:
            raise StoreError(f"Onbekende kolom: {table}.{column}", table=table)
        if kind == "datetime":
            return to_mysql_datetime(value)
        if kind == "json":
            return to_mysql_json(value)
        if kind == "bool":
            return 1 if value else 0
        return value

    def _from_db(self, table: str, row: dict) -> dict:
        columns = self._columns(table)
        out: dict = {}
        for column, value in row.items():
            kind = columns.get(column)
            if kind == "datetime":
                out[column] = from_mysql_datetime(value)
            elif kind == "date":
                out[column] = from_mysql_date(value)
            elif kind == "time":
                out[column] = normalize_mysql_time(value)
            elif kind == "json":
                out[column] = from_mysql_json(value)
            elif kind == "bool":
                out[column] = bool(value)
            else:
                out[column] = value
        return out

    def _where(self, table: str, filters: Sequence[Filter]) -> tuple[str, list]:
        if not filters:
            return "", []
        clauses: list[str] = []
        params: list = []
        for f in filters:
            clauses.append(f"`{f.column}` {SQL_OPERATORS[f.op]} %s")
            params.append(self._to_db(table, f.column, f.value))
        return " WHERE " + " AND ".join(clauses), params

    def _run(self, table: str, operation: str, fn):
        try:
            return fn()
        except mysql.connector.Error as e:
            logger.error("MySQL %s on %s failed: %s", operation, table, e)
            raise StoreError(f"{operation} op {table} mislukt", table=table, operation=operation) from e

    # --- RecordStore -----------------------------------------------------

    def select(self, table: str, filters: Sequence[Filter] = ()) -> list[dict]:
        columns = ", ".join(f"`{c}`" for c in self._columns(table))
        where, params = self._where(table, filters)

        def _select():
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT {columns} FROM `{table}`{where}", tuple(params))
                return [self._from_db(table, r) for r in fetchall(cur)]

        return self._run(table, "select", _select)

    def insert(self, table: str, rows: Sequence[dict]) -> list[dict]:
        self._columns(table)

        def _insert():
            ids: list = []
            with db_cursor(self._conn_factory) as (_, cur):
                for row in rows:
                    values = {k: v for k, v in row.items() if k not in SERVER_COLUMNS}
                    if table not in AUTO_INCREMENT_TABLES:
                        values["id"] = str(uuid.uuid4())
                    names = list(values)
                    cur.execute(
                        f"INSERT INTO `{table}` ({', '.join(f'`{n}`' for n in names)}) "
                        f"VALUES ({', '.join(['%s'] * len(names))})",
                        tuple(self._to_db(table, n, values[n]) for n in names),
                    )
                    ids.append(int(cur.lastrowid) if table in AUTO_INCREMENT_TABLES else values["id"])
            return ids

        stored: list[dict] = []
        for row_id in self._run(table, "insert", _insert):
            stored.extend(self.select(table, [eq("id", row_id)]))
        return stored

    def update(self, table: str, patch: dict, filters: Sequence[Filter]) -> None:
        if not patch:
            return
        assignments = ", ".join(f"`{c}`=%s" for c in patch)
        values = [self._to_db(table, c, v) for c, v in patch.items()]
        where, params = self._where(table, filters)

        def _update():
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"UPDATE `{table}` SET {assignments}{where}", tuple(values + params))

        self._run(table, "update", _update)

    def delete(self, table: str, filters: Sequence[Filter]) -> None:
        where, params = self._where(table, filters)

        def _delete():
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"DELETE FROM `{table}`{where}", tuple(params))

        self._run(table, "delete", _delete)

    def create_identity(self, email: str, password: str) -> Identity:
        email = email.strip().lower()
        identity_id = str(uuid.uuid4())

        def _create():
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(f"SELECT id FROM `{TABLE_ADMIN_USERS}` WHERE email=%s", (email,))
                if fetchone(cur):
                    raise StoreError("Gebruiker bestaat al", table=TABLE_ADMIN_USERS, operation="create_identity")
                cur.execute(
                    f"INSERT INTO `{TABLE_ADMIN_USERS}` (id, email, password_hash) VALUES (%s, %s, %s)",
                    (identity_id, email, generate_password_hash(password)),
                )

        self._run(TABLE_ADMIN_USERS, "create_identity", _create)
        return Identity(id=identity_id, email=email)

    def verify_credentials(self, email: str, password: str) -> Identity:
        def _fetch():
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"SELECT id, email, password_hash, created_at FROM `{TABLE_ADMIN_USERS}` WHERE email=%s",
                    (email.strip().lower(),),
                )
                return fetchone(cur)

        row = self._run(TABLE_ADMIN_USERS, "verify_credentials", _fetch)
        if not row:
            raise AuthenticationError("Wachtwoord of email onjuist")
        try:
            ok = check_password_hash(row["password_hash"], password)
        except Exception:
            # e.g. placeholder or corrupted hashes
            ok = False
        if not ok:
            raise AuthenticationError("Wachtwoord of email onjuist")
        return Identity(id=row["id"], email=row["email"], created_at=from_mysql_datetime(row.get("created_at")))
