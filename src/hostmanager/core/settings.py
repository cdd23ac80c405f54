"""Centralized application configuration using Pydantic Settings (v2).

``load_settings()`` returns a cached ``Settings`` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the working directory: .env, .env.local, .env.dev/.env.test/.env.prod

Loggers are built from an explicit ``Settings`` value and handed to the
components that need them; nothing in the package reconfigures a shared
logger behind the caller's back.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class Settings(BaseSettings):
    """Typed application configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `HOSTMANAGER_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    log_file : Path | None
        Optional rotating log file. When unset, logs only go to stderr.
    hostname_file, resolv_conf : Path
        The two managed files.
    hostname_command : str
        Executable invoked to change the live hostname.
    hostname_timeout : float
        Deadline in seconds for one invocation of ``hostname_command``.
    snapshot_retention : int
        Snapshots kept per managed file; ``0`` keeps every snapshot.
    """

    environment: EnvName = Field(default="dev", alias="HOSTMANAGER_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Path | None = Field(default=None, alias="HOSTMANAGER_LOG_FILE")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, ge=0, alias="HOSTMANAGER_LOG_MAX_BYTES")
    log_backup_count: int = Field(default=5, ge=0, alias="HOSTMANAGER_LOG_BACKUPS")

    hostname_file: Path = Field(default=Path("/etc/hostname"), alias="HOSTMANAGER_HOSTNAME_FILE")
    resolv_conf: Path = Field(default=Path("/etc/resolv.conf"), alias="HOSTMANAGER_RESOLV_CONF")
    hostname_command: str = Field(default="hostname", alias="HOSTMANAGER_HOSTNAME_COMMAND")
    hostname_timeout: float = Field(default=10.0, gt=0, alias="HOSTMANAGER_HOSTNAME_TIMEOUT")
    snapshot_retention: int = Field(default=20, ge=0, alias="HOSTMANAGER_SNAPSHOT_RETENTION")

    http_host: str = Field(default="0.0.0.0", alias="HOSTMANAGER_HOST")
    http_port: int = Field(default=8080, alias="HOSTMANAGER_PORT")
    server_url: str = Field(default="http://localhost:8080", alias="HOSTMANAGER_SERVER_URL")
    request_timeout: float = Field(default=10.0, gt=0, alias="HOSTMANAGER_REQUEST_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def is_dev(self) -> bool:
        """Return True if running in the development environment."""
        return self.environment == "dev"

    @property
    def is_test(self) -> bool:
        """Return True if running in the test environment."""
        return self.environment == "test"

    @property
    def is_prod(self) -> bool:
        """Return True if running in the production environment."""
        return self.environment == "prod"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    We keep this behind an LRU cache so tests can force a rebuild via
    `load_settings.cache_clear()` after mutating `os.environ`.
    """
    os.environ.setdefault("HOSTMANAGER_ENV", "dev")
    return Settings()


def get_logger(name: str, settings: Settings) -> logging.Logger:
    """Return a logger configured from ``settings``.

    A stream handler is always attached; a size-rotating file handler is added
    when ``settings.log_file`` is set. Handlers are attached once per logger
    name, the level is refreshed on every call.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT)
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        if settings.log_file is not None:
            settings.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                settings.log_file,
                maxBytes=settings.log_max_bytes,
                backupCount=settings.log_backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
    logger.setLevel(settings.log_level_numeric())
    logger.propagate = False
    return logger


__all__ = ["Settings", "get_logger", "load_settings"]
