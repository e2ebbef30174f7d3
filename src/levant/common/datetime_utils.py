from __future__ import annotations

import calendar
from datetime import date, datetime, timezone


def now_local() -> datetime:
    """Current local time, timezone-aware.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now().astimezone()


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 instant. A trailing ``Z`` and naive values are read as UTC."""
    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def coerce_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(str(value)[:10])


def coerce_datetime(value) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    return parse_iso_datetime(str(value))


def to_iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def months_before(day: date, months: int) -> date:
    """Same calendar day ``months`` months earlier, clamped to the month's last day."""
    index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


def year_month(day: date) -> str:
    return day.strftime("%Y-%m")


def format_duration(start: datetime, now: datetime) -> str:
    """Live shift duration as ``"<h>u <m>m"``; negative spans count as zero."""
    seconds = max(0, int((now - start).total_seconds()))
    hours, rest = divmod(seconds, 3600)
    return f"{hours}u {rest // 60}m"
