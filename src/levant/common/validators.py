from __future__ import annotations

from typing import Any

from ..core.constants import PIN_MAX_LENGTH, PIN_MIN_LENGTH
from ..core.exceptions import ValidationError


def optional_text(value: Any, field_name: str) -> str:
    """Stripped text, ``""`` for a missing value. JSON numbers, lists etc. are rejected."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} moet tekst zijn")
    return value.strip()


def require_non_empty(value: Any, field_name: str) -> str:
    text = optional_text(value, field_name)
    if not text:
        raise ValidationError(f"{field_name} is verplicht")
    return text


def require_pin(value: Any) -> str:
    pin = optional_text(value, "Pincode")
    if not PIN_MIN_LENGTH <= len(pin) <= PIN_MAX_LENGTH:
        raise ValidationError(f"Pincode moet {PIN_MIN_LENGTH} tot {PIN_MAX_LENGTH} tekens zijn")
    return pin
