from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees
from .reports.controller import register as register_reports
from .settings.controller import register as register_settings
from .shifts.controller import register as register_shifts
from .store.repository import RecordStore
from .timelogs.controller import register as register_timelogs

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None, *, store: Optional[RecordStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format=LOG_FORMAT)

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    db_config = getattr(settings, "DB_CONFIG")
    store_backend = getattr(settings, "STORE_BACKEND", "mysql")

    container = build_container(
        db_config=db_config,
        store_backend=store_backend,
        admin_name=getattr(settings, "ADMIN_DISPLAY_NAME", "Admin"),
        store=store,
    )
    logger.info("settings=%s store=%s", settings_module, store_backend if store is None else "injected")

    if container.conn is not None:
        logger.info("db=%s", container.conn.config.describe())
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)
            logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))

    if not container.state.load():
        logger.warning("Initial load failed; serving an empty state until the next successful load")

    register_settings(app, container)
    register_employees(app, container)
    register_timelogs(app, container)
    register_reports(app, container)
    register_shifts(app, container)

    app.extensions["levant"] = container
    return app
