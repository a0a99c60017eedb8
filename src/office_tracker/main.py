from __future__ import annotations

import atexit
import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.cli import register as register_cli
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.logger import configure_logging, get_logger
from .core.settings import TrackerSettings
from .database.bootstrap import apply_schema, list_tables

logger = get_logger(__name__)


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    raw_settings = importlib.import_module(settings_module)
    settings = TrackerSettings.from_module(raw_settings)
    app.secret_key = settings.secret_key
    app.config["DEBUG"] = settings.debug
    app.config["TESTING"] = bool(getattr(raw_settings, "TESTING", False))

    configure_logging(settings.log_level, settings.log_file or None)
    logger.info(f"settings={settings_module} storage={settings.storage_backend}")

    if container is None:
        if settings.storage_backend == "mysql" and bool(getattr(raw_settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[2] / "database" / "schema.sql"
            apply_schema(settings.db_config, schema_path=schema_path)
            logger.info(f"schema ready (tables={len(list_tables(settings.db_config))})")
        container = build_container(settings)

    app.extensions["office_tracker"] = container

    register_attendance(app, container)
    register_cli(app, container)

    if settings.start_scheduler:
        # Started by the first served request; `flask tracker ...` commands never serve one
        @app.before_request
        def start_rollover_scheduler():
            if container.scheduler.start():
                atexit.register(container.scheduler.stop)

    return app
