from __future__ import annotations

from typing import Protocol, Sequence

from .model import Filter, Identity


class RecordStore(Protocol):
    """Generic remote table access plus the admin identity calls.

    Rows are plain dicts with snake_case keys and JSON-ready values: dates as
    ``YYYY-MM-DD``, instants as ISO-8601 strings, embedded sequences as lists.
    Every failure raises ``StoreError``; ``verify_credentials`` raises
    ``AuthenticationError`` on a credential mismatch.
    """

    def select(self, table: str, filters: Sequence[Filter] = ()) -> list[dict]:
        raise NotImplementedError

    def insert(self, table: str, rows: Sequence[dict]) -> list[dict]:
        """Store ``rows`` and return them as stored (durable ``id`` and server fields included)."""

        raise NotImplementedError

    def update(self, table: str, patch: dict, filters: Sequence[Filter]) -> None:
        raise NotImplementedError

    def delete(self, table: str, filters: Sequence[Filter]) -> None:
        raise NotImplementedError

    def verify_credentials(self, email: str, password: str) -> Identity:
        raise NotImplementedError

    def create_identity(self, email: str, password: str) -> Identity:
        raise NotImplementedError
