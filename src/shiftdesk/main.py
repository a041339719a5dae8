from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logger import DEFAULT_LOG_FORMAT, configure_logging
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_demo_users, list_tables
from .leaves.controller import register as register_leaves
from .notifications.controller import register as register_notifications

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(
        getattr(settings, "LOG_LEVEL", "INFO"),
        getattr(settings, "LOG_FORMAT", DEFAULT_LOG_FORMAT),
    )
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    db_config = getattr(settings, "DB_CONFIG", None)
    backend = str(getattr(settings, "STORAGE_BACKEND", "mysql")).lower()
    timezone = str(getattr(settings, "TIMEZONE", "UTC"))
    auto_seed_db = bool(getattr(settings, "AUTO_SEED_DB", False))
    logger.info("settings=%s backend=%s timezone=%s", settings_module, backend, timezone)

    if container is None:
        if backend == "mysql":
            if bool(getattr(settings, "AUTO_INIT_DB", False)):
                apply_schema(db_config)
                logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
            if auto_seed_db:
                ensure_demo_users(db_config)
        container = build_container(
            db_config=db_config,
            backend=backend,
            timezone=timezone,
            seed_demo=auto_seed_db,
        )

    app.extensions["shiftdesk"] = container
    register_attendance(app, container)
    register_leaves(app, container)
    register_notifications(app, container)

    return app
