"""Settings and logging for versioned JSON:API rendering.

Settings are read from the environment (prefix ``JSONAPI_``) or a ``.env``
file through ``pydantic-settings``:

- ``JSONAPI_OPTIMIZE_RELATIONSHIPS``: only render relationship linkage for
  associations that were explicitly included
- ``JSONAPI_ISOLATED_NAMESPACE``: namespace segment (e.g. an application
  mount point) left out of versioned names
- ``JSONAPI_LOG_LEVEL``: level of the package logger
"""

from __future__ import annotations

import logging
import sys
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class JSONAPISettings(BaseSettings):
    """Global rendering configuration."""

    model_config = SettingsConfigDict(
        env_prefix="JSONAPI_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    optimize_relationships: bool = Field(default=False)
    isolated_namespace: str | None = Field(default=None)
    log_level: str = Field(default="WARNING")


@lru_cache(maxsize=1)
def get_settings() -> JSONAPISettings:
    """Return the process-wide settings (cached, call ``cache_clear`` to reload)."""
    return JSONAPISettings()


def resolve_settings(settings: JSONAPISettings | None = None) -> JSONAPISettings:
    return settings if settings is not None else get_settings()


def init_logging(loglevel: int | str = logging.WARNING) -> logging.Logger:
    """
    Specify the log format of the package logger.
    A handler is only attached the first time so repeated calls don't duplicate output.
    """
    logger = logging.getLogger("fastapi_jsonapi_versioned")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    if isinstance(loglevel, str):
        loglevel = logging.getLevelName(loglevel.upper())
        if not isinstance(loglevel, int):
            loglevel = logging.WARNING
    logger.setLevel(loglevel)
    return logger


log = init_logging(get_settings().log_level)
