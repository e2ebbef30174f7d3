from __future__ import annotations

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional


class FilterOp(str, Enum):
    EQ = "eq"
    NEQ = "neq"
    LT = "lt"
    LTE = "lte"
    GT = "gt"
    GTE = "gte"


SQL_OPERATORS = {
    FilterOp.EQ: "=",
    FilterOp.NEQ: "<>",
    FilterOp.LT: "<",
    FilterOp.LTE: "<=",
    FilterOp.GT: ">",
    FilterOp.GTE: ">=",
}

_PY_OPERATORS: dict[FilterOp, Callable[[Any, Any], bool]] = {
    FilterOp.EQ: operator.eq,
    FilterOp.NEQ: operator.ne,
    FilterOp.LT: operator.lt,
    FilterOp.LTE: operator.le,
    FilterOp.GT: operator.gt,
    FilterOp.GTE: operator.ge,
}


@dataclass(frozen=True)
class Filter:
    """Column predicate understood by every record store."""

    column: str
    op: FilterOp
    value: Any

    def matches(self, row: dict) -> bool:
        actual = row.get(self.column)
        if actual is None:
            # SQL semantics: comparisons with NULL are never true.
            return False
        return _PY_OPERATORS[self.op](actual, self.value)


def eq(column: str, value: Any) -> Filter:
    return Filter(column, FilterOp.EQ, value)


def neq(column: str, value: Any) -> Filter:
    return Filter(column, FilterOp.NEQ, value)


def lt(column: str, value: Any) -> Filter:
    return Filter(column, FilterOp.LT, value)


def gt(column: str, value: Any) -> Filter:
    return Filter(column, FilterOp.GT, value)


def gte(column: str, value: Any) -> Filter:
    return Filter(column, FilterOp.GTE, value)


@dataclass(frozen=True)
class Identity:
    """Backing admin account, referenced from the settings row."""

    id: str
    email: str
    created_at: Optional[str] = None
