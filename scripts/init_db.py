from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from config import get_settings_module

from levant.database.bootstrap import apply_schema, list_tables
from levant.database.connection import DBConfig, DatabaseConnection

logger = logging.getLogger("levant.init_db")


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(settings.DB_CONFIG))

    apply_schema(conn)
    tables = list_tables(conn)
    logger.info("Applied schema.sql -> %s (tables=%d)", conn.config.describe(), len(tables))


if __name__ == "__main__":
    main()
