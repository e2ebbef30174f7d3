from __future__ import annotations

from flask import Flask, request

from ..common.validators import require_non_empty
from ..common.web import admin_required, api_view, json_ok, payload_date, payload_datetime, request_payload
from ..container import Container
from ..core.exceptions import ConflictError, StoreError
from ..reports import aggregation


def register(app: Flask, container: Container) -> None:
    state = container.state

    @app.route("/api/clock-in", methods=["POST"], endpoint="api_clock_in")
    @api_view
    def clock_in():
        employee_id = require_non_empty(request_payload().get("employee_id"), "Medewerker")
        log = state.clock_in(employee_id)
        if log is None:
            raise ConflictError("Medewerker is al ingeklokt")
        return json_ok(log.to_dict(), 201)

    @app.route("/api/clock-out", methods=["POST"], endpoint="api_clock_out")
    @api_view
    def clock_out():
        employee_id = require_non_empty(request_payload().get("employee_id"), "Medewerker")
        log = state.clock_out(employee_id)
        return json_ok(log.to_dict() if log else None)

    @app.route("/api/admin/logs", methods=["GET"], endpoint="api_admin_logs")
    @api_view
    @admin_required
    def list_logs():
        employee_id = request.args.get("employeeId")
        logs = aggregation.completed_logs_recent_first(state.logs)
        if employee_id:
            logs = [log for log in logs if log.employee_id == employee_id]
        return json_ok([log.to_dict() for log in logs])

    @app.route("/api/admin/logs", methods=["POST"], endpoint="api_admin_add_log")
    @api_view
    @admin_required
    def add_log():
        data = request_payload()
        log = state.add_log(
            require_non_empty(data.get("employee_id"), "Medewerker"),
            payload_date(data, "date", "Datum"),
            payload_datetime(data, "clock_in", "Starttijd"),
            payload_datetime(data, "clock_out", "Eindtijd", required=False),
            data.get("reason"),
        )
        return json_ok(log.to_dict(), 201)

    @app.route("/api/admin/logs/<log_id>", methods=["PUT"], endpoint="api_admin_edit_log")
    @api_view
    @admin_required
    def edit_log(log_id: str):
        data = request_payload()
        log = state.edit_log(
            log_id,
            payload_datetime(data, "clock_in", "Starttijd"),
            payload_datetime(data, "clock_out", "Eindtijd", required=False),
            data.get("reason"),
        )
        return json_ok(log.to_dict())

    @app.route("/api/admin/logs/completed", methods=["DELETE"], endpoint="api_admin_delete_completed")
    @api_view
    @admin_required
    def delete_completed():
        if not state.delete_completed_logs():
            raise StoreError("Verwijderen van registraties mislukt")
        return json_ok()

    @app.route("/api/admin/audit", methods=["GET"], endpoint="api_admin_audit")
    @api_view
    @admin_required
    def audit():
        return json_ok([item.to_dict() for item in aggregation.audit_trail(state.logs)])
