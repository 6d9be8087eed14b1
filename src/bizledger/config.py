"""Runtime configuration and logging setup."""

import logging
import os
from dataclasses import dataclass, replace
from datetime import timedelta
from pathlib import Path
from typing import Mapping, Optional

ENV_PREFIX = "BIZLEDGER_"
DEFAULT_TOKEN_TTL_DAYS = 30
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ConfigError(RuntimeError):
    """Missing or malformed configuration."""


def default_database_url(environ: Optional[Mapping[str, str]] = None) -> str:
    """Resolve the database URL.

    Checks BIZLEDGER_DATABASE_URL, then BIZLEDGER_DB_PATH (a SQLite file),
    then defaults to ~/.bizledger/bizledger.db.
    """
    environ = os.environ if environ is None else environ

    url = environ.get(f"{ENV_PREFIX}DATABASE_URL")
    if url:
        return url

    path = environ.get(f"{ENV_PREFIX}DB_PATH")
    if not path:
        db_dir = Path.home() / ".bizledger"
        db_dir.mkdir(exist_ok=True)
        path = str(db_dir / "bizledger.db")
    return f"sqlite:///{path}"


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, read once at startup."""

    database_url: str
    jwt_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"
    token_ttl: timedelta = timedelta(days=DEFAULT_TOKEN_TTL_DAYS)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from BIZLEDGER_* environment variables."""
        environ = os.environ if environ is None else environ

        ttl_raw = environ.get(f"{ENV_PREFIX}TOKEN_TTL_DAYS", str(DEFAULT_TOKEN_TTL_DAYS))
        try:
            ttl_days = int(ttl_raw)
        except ValueError as e:
            raise ConfigError(f"{ENV_PREFIX}TOKEN_TTL_DAYS must be an integer, got {ttl_raw!r}") from e
        if ttl_days <= 0:
            raise ConfigError(f"{ENV_PREFIX}TOKEN_TTL_DAYS must be positive, got {ttl_days}")

        return cls(
            database_url=default_database_url(environ),
            jwt_secret=environ.get(f"{ENV_PREFIX}JWT_SECRET") or None,
            token_ttl=timedelta(days=ttl_days),
            log_level=environ.get(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper(),
        )

    def with_overrides(self, **changes) -> "Settings":
        """Return a copy with the non-None values in changes applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def require_jwt_secret(self) -> str:
        """Return the JWT signing secret.

        Raises:
            ConfigError: If no secret is configured
        """
        if not self.jwt_secret:
            raise ConfigError(f"Missing {ENV_PREFIX}JWT_SECRET environment variable")
        return self.jwt_secret


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ConfigError(f"Unknown log level {level!r}")
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
