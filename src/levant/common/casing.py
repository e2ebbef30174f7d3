"""Key-style conversion at the record store / JSON API boundary.

Store rows use snake_case keys, API payloads use camelCase. Both transforms walk
dicts and lists recursively (embedded edit sequences included) and leave scalar
values untouched.
"""

from __future__ import annotations

import re
from typing import Any

_SNAKE_PART = re.compile(r"_([a-z])")
_CAMEL_UPPER = re.compile(r"[A-Z]")


def camel_key(key: str) -> str:
    return _SNAKE_PART.sub(lambda m: m.group(1).upper(), key)


def snake_key(key: str) -> str:
    return _CAMEL_UPPER.sub(lambda m: "_" + m.group(0).lower(), key)


def to_camel_case(obj: Any) -> Any:
    if isinstance(obj, list):
        return [to_camel_case(item) for item in obj]
    if isinstance(obj, dict):
        return {camel_key(str(k)): to_camel_case(v) for k, v in obj.items()}
    return obj


def to_snake_case(obj: Any) -> Any:
    if isinstance(obj, list):
        return [to_snake_case(item) for item in obj]
    if isinstance(obj, dict):
        return {snake_key(str(k)): to_snake_case(v) for k, v in obj.items()}
    return obj
