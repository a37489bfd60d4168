"""Simplified configuration management for the easyfetch SDK."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ._http import TimeoutConfig
from ._version import __version__


class ClientConfig(BaseModel):
    """Unified configuration for the easyfetch SDK."""

    model_config = ConfigDict(frozen=True)

    # Timeouts in seconds; None disables the timeout
    connect_timeout: Optional[float] = Field(default=None, gt=0)
    read_timeout: Optional[float] = Field(default=None, gt=0)
    write_timeout: Optional[float] = Field(default=None, gt=0)
    pool_timeout: Optional[float] = Field(default=None, gt=0)

    # Transport behaviour
    follow_redirects: bool = Field(default=False)
    verify_tls: bool = Field(default=True)
    user_agent: str = Field(default=f"easyfetch/{__version__}")

    # Runtime settings
    log_level: str = Field(default="WARNING")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level {value!r}")
        return level

    @classmethod
    def from_environment(cls) -> "ClientConfig":
        """Create configuration from environment variables."""
        config_data = {
            "connect_timeout": _get_float("EASYFETCH_CONNECT_TIMEOUT"),
            "read_timeout": _get_float("EASYFETCH_READ_TIMEOUT"),
            "write_timeout": _get_float("EASYFETCH_WRITE_TIMEOUT"),
            "pool_timeout": _get_float("EASYFETCH_POOL_TIMEOUT"),
            "follow_redirects": _get_bool("EASYFETCH_FOLLOW_REDIRECTS", False),
            "verify_tls": _get_bool("EASYFETCH_VERIFY_TLS", True),
            "log_level": _get_env_var(["EASYFETCH_LOG_LEVEL", "LOG_LEVEL"], "WARNING").upper(),
        }
        if user_agent := os.getenv("EASYFETCH_USER_AGENT"):
            config_data["user_agent"] = user_agent

        return cls(**config_data)

    def timeout_config(self) -> TimeoutConfig:
        """Return the timeouts as a :class:`TimeoutConfig`."""
        return TimeoutConfig(
            read=self.read_timeout,
            connect=self.connect_timeout,
            write=self.write_timeout,
            pool=self.pool_timeout,
        )


def _get_env_var(keys: list[str], default: str = "") -> str:
    """Get first available environment variable from a list of keys."""
    for key in keys:
        if value := os.getenv(key):
            return value
    return default


def _get_bool(key: str, default: bool = False) -> bool:
    """Get boolean environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_float(key: str) -> Optional[float]:
    """Get float environment variable; unset or empty means None."""
    value = os.getenv(key)
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {value!r}") from exc


# Global configuration instance
_config: Optional[ClientConfig] = None


def get_config(*, reload: bool = False) -> ClientConfig:
    """Get the global configuration instance."""
    global _config

    if _config is None or reload:
        _config = ClientConfig.from_environment()

    return _config


def load_dotenv_for_sdk(path: Optional[Path] = None, *, override: bool = False) -> bool:
    """Load environment variables from a .env file.

    Looks for ``.env`` in the current working directory when no path is
    given. Returns whether a file was loaded.
    """
    if path is None:
        path = Path.cwd() / ".env"

    if path.exists():
        load_dotenv(path, override=override)
        return True
    return False
