from __future__ import annotations

import importlib
import os
from types import ModuleType

from dotenv import load_dotenv


def get_settings_module() -> str:
    # APP_ENV selects the settings module, 'development' by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "staff_profiles.config.production"

    if env in {"test", "testing"}:
        return "staff_profiles.config.testing"

    return "staff_profiles.config.development"


def load_settings() -> ModuleType:
    """Load ``.env`` (without overriding the real environment) and import the settings module."""
    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())
