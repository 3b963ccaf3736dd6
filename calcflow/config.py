"""
Runtime configuration read from the environment.

Environment Variables:
    CALCFLOW_ENV: development | production - default: development
    CALCFLOW_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR - default: WARNING
    CALCFLOW_SESSION_TTL: seconds before an idle session is stale - default: 3600
"""

from __future__ import annotations
from dataclasses import dataclass
import os

DEFAULT_ENV = "development"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_SESSION_TTL = 3600

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Process-wide settings. Build with Settings.from_env()."""
    env: str = DEFAULT_ENV
    log_level: str = DEFAULT_LOG_LEVEL
    session_ttl: int = DEFAULT_SESSION_TTL

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """
        Read settings from the environment.

        Unknown log levels and non-numeric TTLs fall back to defaults.
        """
        environ = os.environ if environ is None else environ

        env = environ.get("CALCFLOW_ENV", DEFAULT_ENV).strip().lower() or DEFAULT_ENV

        log_level = environ.get("CALCFLOW_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
        if log_level not in LOG_LEVELS:
            log_level = DEFAULT_LOG_LEVEL

        try:
            session_ttl = int(environ.get("CALCFLOW_SESSION_TTL", DEFAULT_SESSION_TTL))
        except ValueError:
            session_ttl = DEFAULT_SESSION_TTL
        if session_ttl <= 0:
            session_ttl = DEFAULT_SESSION_TTL

        return cls(env=env, log_level=log_level, session_ttl=session_ttl)
