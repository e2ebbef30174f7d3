from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, api_view, json_ok, request_payload
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def _role(value) -> Role:
    try:
        return Role(value or Role.SERVER.value)
    except ValueError:
        raise ValidationError(f"Onbekende functie: {value}") from None


def register(app: Flask, container: Container) -> None:
    state = container.state

    @app.route("/api/admin/employees", methods=["POST"], endpoint="api_admin_add_employee")
    @api_view
    @admin_required
    def add_employee():
        data = request_payload()
        employee = state.add_employee(data.get("name"), _role(data.get("role")))
        return json_ok(employee.to_dict(), 201)

    @app.route("/api/admin/employees/<employee_id>", methods=["PUT"], endpoint="api_admin_edit_employee")
    @api_view
    @admin_required
    def edit_employee(employee_id: str):
        data = request_payload()
        employee = state.edit_employee(employee_id, data.get("name"), _role(data.get("role")))
        return json_ok(employee.to_dict())

    @app.route("/api/admin/employees/<employee_id>", methods=["DELETE"], endpoint="api_admin_remove_employee")
    @api_view
    @admin_required
    def remove_employee(employee_id: str):
        return json_ok(state.remove_employee(employee_id).to_dict())
