from __future__ import annotations

import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module, load_settings

from .admins.controller import register as register_admins
from .attendance.controller import register as register_attendance
from .classes.controller import register as register_classes
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_demo_admin, list_tables
from .payments.controller import register as register_payments
from .reports.controller import register as register_reports
from .students.controller import register as register_students
from .teachers.controller import register as register_teachers
from .web_sessions.controller import register as register_web_sessions

logger = logging.getLogger(__name__)


def _configure_logging(level: str, debug: bool) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    if not debug:
        logging.getLogger("werkzeug").setLevel(logging.WARNING)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = load_settings()
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), app.config["DEBUG"])

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        container = build_container(db_config=db_config, settings=settings)
        logger.info("settings=%s db=%s", settings_module, container.conn.config.describe())

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(container.conn)
            logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))
        if getattr(settings, "AUTO_SEED_DB", False):
            ensure_demo_admin(
                container.conn,
                email=getattr(settings, "DEMO_ADMIN_EMAIL"),
                password=getattr(settings, "DEMO_ADMIN_PASSWORD"),
            )

    app.extensions["container"] = container

    register_admins(app, container)
    register_teachers(app, container)
    register_classes(app, container)
    register_students(app, container)
    register_attendance(app, container)
    register_payments(app, container)
    register_reports(app, container)
    register_web_sessions(app, container)

    @app.errorhandler(404)
    def not_found(_e):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return jsonify({"error": "Method not allowed"}), 405

    return app
