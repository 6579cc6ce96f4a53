from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .clock.controller import register as register_clock
from .common.logging import configure_logging
from .container import build_container
from .core.exceptions import ConcurrentUpdateError, DomainError, NotFoundError, ValidationError
from .database.bootstrap import apply_schema, list_tables
from .payroll.controller import register as register_payroll

logger = logging.getLogger("timecard")


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def handle_validation(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(NotFoundError)
    def handle_not_found(e: NotFoundError):
        return jsonify({"success": False, "message": str(e)}), 404

    @app.errorhandler(ConcurrentUpdateError)
    def handle_conflict(e: ConcurrentUpdateError):
        return jsonify({"success": False, "message": str(e)}), 409

    @app.errorhandler(DomainError)
    def handle_domain(e: DomainError):
        return jsonify({"success": False, "message": str(e)}), 400


def create_app(settings_module: str | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    storage_backend = getattr(settings, "STORAGE_BACKEND", "mysql")
    db_config = getattr(settings, "DB_CONFIG", None)
    logger.info("settings=%s storage=%s", settings_module, storage_backend)

    container = build_container(
        db_config=db_config,
        storage_backend=storage_backend,
        day_boundary=getattr(settings, "DAY_BOUNDARY", "jst_midnight"),
        holiday_source=getattr(settings, "HOLIDAY_SOURCE", "jpholiday"),
    )

    if container.conn is not None and bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(container.conn, schema_path=schema_path)
        logger.info("schema ready (tables=%s)", len(list_tables(container.conn)))

    app.extensions["timecard"] = container

    register_error_handlers(app)
    register_clock(app, container)
    register_payroll(app, container)

    return app
