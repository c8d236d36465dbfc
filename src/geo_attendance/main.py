from __future__ import annotations

import importlib
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, request

from . import __version__
from .attendance.controller import register as register_attendance
from .common.datetime_utils import parse_time_of_day
from .common.http import failure, success
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_employees, list_tables
from .employees.controller import register as register_employees
from .locations.controller import register as register_locations

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[2]


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _work_start(settings):
    raw = str(getattr(settings, "WORK_START_TIME", "08:00:00"))
    try:
        return parse_time_of_day(raw)
    except ValueError:
        raise RuntimeError(f"WORK_START_TIME must look like HH:MM[:SS], got {raw!r}")


def _bootstrap_database(settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        ensure_demo_employees(db_config)


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    Pass a prebuilt `container` to run against other repository
    implementations; the database bootstrap is skipped in that case.
    """
    load_dotenv(override=False)
    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    if container is None:
        db_config = dict(getattr(settings, "DB_CONFIG"))
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        _bootstrap_database(settings, db_config)
        container = build_container(
            db_config=db_config,
            jwt_secret=getattr(settings, "JWT_SECRET", app.secret_key),
            jwt_expires_hours=int(getattr(settings, "JWT_EXPIRES_HOURS", 24)),
            work_start=_work_start(settings),
            default_location_id=getattr(settings, "DEFAULT_LOCATION_ID", None),
            timezone=getattr(settings, "ATTENDANCE_TIMEZONE", None),
        )

    app.extensions["geo_attendance"] = container

    register_employees(app, container)
    register_attendance(app, container)
    register_locations(app, container)

    if app.config["DEBUG"]:

        @app.before_request
        def _log_request():
            logger.debug("%s %s", request.method, request.path)

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return success(
            None,
            message="Employee Attendance API",
            version=__version__,
            timestamp=datetime.now().isoformat(timespec="seconds"),
            endpoints={
                "auth": "/api/auth",
                "attendance": "/api/attendance",
                "locations": "/api/locations",
            },
        )

    @app.errorhandler(404)
    def _not_found(_e):
        return failure("Route not found", status=404, path=request.path)

    @app.errorhandler(405)
    def _method_not_allowed(_e):
        return failure("Method not allowed", status=405, path=request.path)

    @app.errorhandler(500)
    def _internal(e):
        logger.error("Unhandled error on %s %s: %s", request.method, request.path, e)
        return failure("Internal server error", status=500)

    return app
