from __future__ import annotations

import importlib
import logging
from pathlib import Path
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.log_setup import register_error_handlers, setup_logging
from .container import Container, build_container
from .database.bootstrap import apply_schema
from .database.connection import DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def load_settings(settings_module: Optional[str] = None) -> ModuleType:
    load_dotenv(override=False)
    return importlib.import_module(settings_module or get_settings_module())


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    settings = load_settings(settings_module)

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["LOG_LEVEL"] = getattr(settings, "LOG_LEVEL", "INFO")
    setup_logging(app)

    store_backend = str(getattr(settings, "STORE_BACKEND", "memory")).lower()
    if container is None and store_backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(DBConfig.from_dict(getattr(settings, "DB_CONFIG")), schema_path=SCHEMA_PATH)

    container = container or build_container(settings)
    app.extensions["attendance_engine"] = container

    register_error_handlers(app)
    register_attendance(app, container)

    logger.info(
        "attendance engine ready (settings=%s, store=%s, late>=%s, end=%s, standard_day=%sh)",
        settings.__name__,
        store_backend,
        container.policy.late_threshold.strftime("%H:%M"),
        container.policy.standard_end.strftime("%H:%M"),
        container.policy.standard_day_hours,
    )
    return app
