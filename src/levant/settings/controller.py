from __future__ import annotations

import logging

from flask import Flask, session

from ..common.web import ADMIN_SESSION_KEY, admin_required, api_view, json_ok, request_payload
from ..container import Container
from ..core.exceptions import StoreError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    state = container.state
    admin_service = container.admin_service

    @app.route("/api/state", methods=["GET"], endpoint="api_state")
    @api_view
    def get_state():
        return json_ok(
            {
                "needs_setup": state.needs_setup,
                "loaded": state.loaded,
                "employees": [e.to_dict() for e in state.employees],
                "logs": [log.to_dict() for log in state.logs],
            }
        )

    @app.route("/api/setup", methods=["POST"], endpoint="api_setup")
    @api_view
    def setup():
        data = request_payload()
        identity = admin_service.setup(email=data.get("email"), password=data.get("password"), pin=data.get("pin"))
        return json_ok({"email": identity.email}, 201)

    @app.route("/api/admin/login", methods=["POST"], endpoint="api_admin_login")
    @api_view
    def login():
        admin_service.login(request_payload().get("pin"))
        session[ADMIN_SESSION_KEY] = True
        return json_ok()

    @app.route("/api/admin/logout", methods=["POST"], endpoint="api_admin_logout")
    @api_view
    def logout():
        session.pop(ADMIN_SESSION_KEY, None)
        return json_ok()

    @app.route("/api/admin/pin", methods=["POST"], endpoint="api_admin_change_pin")
    @api_view
    @admin_required
    def change_pin():
        data = request_payload()
        admin_service.change_pin(email=data.get("email"), password=data.get("password"), new_pin=data.get("new_pin"))
        return json_ok()

    @app.route("/api/admin/reset", methods=["POST"], endpoint="api_admin_reset")
    @api_view
    @admin_required
    def reset():
        if not state.full_reset():
            raise StoreError("Reset mislukt")
        logger.warning("Full reset executed")
        session.pop(ADMIN_SESSION_KEY, None)
        return json_ok()
