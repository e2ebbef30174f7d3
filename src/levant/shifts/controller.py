from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import admin_required, api_view, json_ok, payload_date, request_payload
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    schedule_service = container.schedule_service

    @app.route("/api/shifts", methods=["GET"], endpoint="api_shifts")
    @api_view
    @admin_required
    def list_shifts():
        raw = request.args.get("start")
        try:
            start = parse_iso_date(raw) if raw else container.state.now().date()
        except ValueError:
            raise ValidationError("Startdatum is geen geldige datum") from None

        shifts = schedule_service.list_week(start)
        days = [
            {
                "date": day.strftime("%Y-%m-%d"),
                "shifts": [s.to_dict() for s in schedule_service.shifts_for_day(shifts, day)],
            }
            for day in schedule_service.week_days(start)
        ]
        return json_ok(days)

    @app.route("/api/shifts", methods=["POST"], endpoint="api_add_shift")
    @api_view
    @admin_required
    def add_shift():
        data = request_payload()
        shift = schedule_service.add_shift(
            employee_id=data.get("employee_id"),
            work_date=payload_date(data, "date", "Datum"),
            start_time=data.get("start_time") or "17:00",
            end_time=data.get("end_time") or "23:00",
        )
        return json_ok(shift.to_dict(), 201)

    @app.route("/api/shifts/<shift_id>", methods=["DELETE"], endpoint="api_remove_shift")
    @api_view
    @admin_required
    def remove_shift(shift_id: str):
        schedule_service.remove_shift(shift_id)
        return json_ok()
