from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Staff member shown on the clock-in board.

    Never hard-deleted once logs reference it: removal sets ``is_active=False``.
    """

    id: str
    name: str
    role: Role
    is_active: bool = True

    @classmethod
    def from_row(cls, row: dict) -> "Employee":
        return cls(
            id=str(row["id"]),
            name=row["name"],
            role=Role(row["role"]),
            is_active=bool(row.get("is_active", True)),
        )

    def to_row(self) -> dict:
        return {"name": self.name, "role": self.role.value, "is_active": self.is_active}

    def to_dict(self) -> dict:
        return {"id": self.id, **self.to_row()}
