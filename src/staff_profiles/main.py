from __future__ import annotations

import logging
from types import ModuleType
from typing import Optional

from .config import get_settings_module, load_settings
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_demo_profiles, list_tables
from .logging_config import configure_logging

log = logging.getLogger(__name__)


def create_container(settings: Optional[ModuleType] = None) -> Container:
    """Startup: logging, optional schema/seed, then the wired container."""
    if settings is None:
        settings = load_settings()

    debug = bool(getattr(settings, "DEBUG", False))
    configure_logging("DEBUG" if debug else getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(settings=settings)
    log.info("settings=%s db=%s", getattr(settings, "__name__", get_settings_module()), container.conn.describe())

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(container.conn)
        log.debug("schema ready (tables=%d)", len(list_tables(container.conn)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        ensure_demo_profiles(container.conn)

    return container
