"""Helpers shared by the Flask controllers."""

from __future__ import annotations

import logging
from datetime import date, datetime
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.exceptions import AuthenticationError, DomainError, ValidationError
from .casing import to_camel_case, to_snake_case
from .datetime_utils import parse_iso_date, parse_iso_datetime

logger = logging.getLogger(__name__)

ADMIN_SESSION_KEY = "is_admin"


def json_ok(payload=None, status: int = 200):
    body = {"success": True}
    if payload is not None:
        body["data"] = to_camel_case(payload)
    return jsonify(body), status


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def request_payload() -> dict:
    """JSON body of the current request with snake_case keys."""
    data = request.get_json(silent=True) or {}
    return to_snake_case(data) if isinstance(data, dict) else {}


def api_view(view):
    """Translate domain errors into JSON responses; anything else is a 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            if e.status_code >= 500:
                logger.error("%s %s failed: %s", request.method, request.path, e)
            return json_error(str(e), e.status_code)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.path)
            return json_error("Er is een onverwachte fout opgetreden", 500)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not session.get(ADMIN_SESSION_KEY):
            raise AuthenticationError("Beheerder niet ingelogd")
        return view(*args, **kwargs)

    return wrapper


def payload_date(data: dict, key: str, field_name: str) -> date:
    value = data.get(key)
    if not value:
        raise ValidationError(f"{field_name} is verplicht")
    try:
        return parse_iso_date(str(value)[:10])
    except ValueError:
        raise ValidationError(f"{field_name} is geen geldige datum") from None


def payload_datetime(data: dict, key: str, field_name: str, *, required: bool = True) -> Optional[datetime]:
    value = data.get(key)
    if not value:
        if required:
            raise ValidationError(f"{field_name} is verplicht")
        return None
    try:
        return parse_iso_datetime(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} is geen geldig tijdstip") from None
