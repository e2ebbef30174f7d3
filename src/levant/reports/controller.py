from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.validators import require_non_empty
from ..common.web import api_view, json_ok
from ..container import Container
from . import aggregation
from .pdf import render_monthly_report


def register(app: Flask, container: Container) -> None:
    state = container.state
    hours_service = container.hours_service

    @app.route("/api/board", methods=["GET"], endpoint="api_board")
    @api_view
    def board():
        now = state.now()
        rows = aggregation.employee_board(state.employees, state.logs, now.date(), now)
        return json_ok([row.to_dict() for row in rows])

    @app.route("/api/hours", methods=["GET"], endpoint="api_hours")
    @api_view
    def hours():
        report = hours_service.build_monthly_report(
            employee_id=require_non_empty(request.args.get("employeeId"), "Medewerker"),
            year_month=request.args.get("month"),
        )
        return json_ok(report.to_dict())

    @app.route("/api/hours.pdf", methods=["GET"], endpoint="api_hours_pdf")
    @api_view
    def hours_pdf():
        report = hours_service.build_monthly_report(
            employee_id=require_non_empty(request.args.get("employeeId"), "Medewerker"),
            year_month=request.args.get("month"),
        )
        return send_file(
            io.BytesIO(render_monthly_report(report)),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=report.filename,
        )
