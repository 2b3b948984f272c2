"""
Runtime settings.

Values come from environment variables (optionally from a .env file):

    TERMWEEK_STORE         json | memory            (default: json)
    TERMWEEK_DATA_FILE     path of the calendars JSON file
    TERMWEEK_CATALOG_URL   URL of a remote template catalog (JSON)
    TERMWEEK_HTTP_TIMEOUT  seconds for catalog requests  (default: 30)
    TERMWEEK_LOG_LEVEL     DEBUG | INFO | WARNING | ERROR (default: WARNING)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

STORE_BACKENDS = ("json", "memory")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _default_data_file() -> Path:
    """
    Return the default calendars file inside the package data directory.
    """
    base_dir = Path(__file__).resolve().parent
    return base_dir / "data" / "calendars.json"


@dataclass
class Settings:
    store_backend: str = "json"
    data_file: Path = _default_data_file()
    catalog_url: Optional[str] = None
    http_timeout: float = 30.0
    log_level: str = "WARNING"


def _env(name: str) -> str:
    return os.environ.get(name, "").strip()


def load_settings() -> Settings:
    """
    Build Settings from the environment. Invalid values fall back to defaults.
    """
    load_dotenv()
    settings = Settings()

    backend = _env("TERMWEEK_STORE").lower()
    if backend in STORE_BACKENDS:
        settings.store_backend = backend

    data_file = _env("TERMWEEK_DATA_FILE")
    if data_file:
        settings.data_file = Path(data_file).expanduser()

    settings.catalog_url = _env("TERMWEEK_CATALOG_URL") or None

    timeout = _env("TERMWEEK_HTTP_TIMEOUT")
    if timeout:
        try:
            value = float(timeout)
        except ValueError:
            value = 0.0
        if value > 0:
            settings.http_timeout = value
        else:
            logger.warning("Ignoring invalid TERMWEEK_HTTP_TIMEOUT=%r", timeout)

    level = _env("TERMWEEK_LOG_LEVEL").upper()
    if level in LOG_LEVELS:
        settings.log_level = level

    return settings
