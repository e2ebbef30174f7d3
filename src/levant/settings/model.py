from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """Singleton settings row: admin PIN and the linked admin identity."""

    id: int
    pin_code: str
    admin_user_id: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "Settings":
        return cls(
            id=int(row["id"]),
            pin_code=str(row["pin_code"]),
            admin_user_id=row.get("admin_user_id"),
        )
