"""Settings for the weather commands."""
from __future__ import annotations

import os
from typing import Dict, Mapping, Optional, Protocol

from oweather.providers.openweather import DEFAULT_BASE_URL


API_KEY_SETTING = "oweather_api_key"
API_KEY_LENGTH = 32


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing or invalid."""


def env(name: str, default: str = "") -> str:
    """Fetch an environment variable, ``default`` when it is unset."""

    return os.environ.get(name, default)


class SettingsStore(Protocol):
    """Host settings, one string value per setting name."""

    def get(self, name: str) -> str:
        ...


class EnvironmentSettings:
    """Read settings from the environment, ``oweather_api_key`` from ``OWEATHER_API_KEY``."""

    def get(self, name: str) -> str:
        return env(name.upper())


class DictSettings:
    def __init__(self, values: Optional[Mapping[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(values or {})

    def get(self, name: str) -> str:
        return self._values.get(name, "")

    def set(self, name: str, value: str) -> None:
        self._values[name] = value


def validate_api_key(value: Optional[str]) -> str:
    """Return the key when it has the length of an OpenWeatherMap key.

    Only the length is checked, the provider rejects keys it does not know.
    """
    if value is None or len(value) != API_KEY_LENGTH:
        raise ConfigurationError("There is either no API key or an invalid one was set.")
    return value


def base_url() -> str:
    return env("OWEATHER_BASE_URL", DEFAULT_BASE_URL)


def http_timeout() -> Optional[float]:
    value = env("OWEATHER_HTTP_TIMEOUT")
    if not value:
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigurationError(f"OWEATHER_HTTP_TIMEOUT must be a number, got {value!r}") from exc


def log_level() -> str:
    return env("OWEATHER_LOG_LEVEL", "WARNING").upper()


__all__ = [
    "API_KEY_SETTING",
    "API_KEY_LENGTH",
    "ConfigurationError",
    "env",
    "SettingsStore",
    "EnvironmentSettings",
    "DictSettings",
    "validate_api_key",
    "base_url",
    "http_timeout",
    "log_level",
]
