"""The ``oweather`` and ``forecast`` chat commands."""
from __future__ import annotations

import logging
import re
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional, TypeVar

from oweather import settings as config
from oweather.providers.base import (
    DecodeError,
    LocationNotFound,
    ProviderError,
    RequestConfig,
    TransportError,
)
from oweather.providers.openweather import OpenWeatherProvider
from oweather.render import WeatherFormatter
from oweather.settings import ConfigurationError, SettingsStore


logger = logging.getLogger(__name__)

WEATHER_PATTERN = re.compile(r"^oweather (.+)$", re.IGNORECASE)
FORECAST_PATTERN = re.compile(r"^forecast (.+)$", re.IGNORECASE)

INVALID_KEY_MESSAGE = "There is either no API key or an invalid one was set."
UNKNOWN_ERROR_MESSAGE = "Unknown error while looking up the weather."
NOT_FOUND_MESSAGE = "Location not found in the weather database."
CONFIGURATION_ERROR_MESSAGE = "The weather lookup is not configured correctly."

ProviderFactory = Callable[[str], OpenWeatherProvider]
Reply = Callable[[str], None]
T = TypeVar("T")


def default_provider_factory(api_key: str) -> OpenWeatherProvider:
    return OpenWeatherProvider(
        api_key=api_key,
        base_url=config.base_url(),
        request_config=RequestConfig(timeout=config.http_timeout()),
    )


class WeatherController:
    """Handles the weather commands for one bot.

    Every command call performs at most one provider request and produces
    exactly one reply string; failures are turned into user-facing messages
    and never raised to the host.
    """

    def __init__(
        self,
        settings: SettingsStore,
        *,
        formatter: Optional[WeatherFormatter] = None,
        provider_factory: ProviderFactory = default_provider_factory,
        executor: Optional[ThreadPoolExecutor] = None,
    ) -> None:
        self.settings = settings
        self.formatter = formatter or WeatherFormatter()
        self._provider_factory = provider_factory
        self._executor = executor
        self._owns_executor = executor is None
        self._executor_lock = threading.Lock()

    # Commands -----------------------------------------------------------
    def weather_command(self, location: str) -> str:
        return self._lookup(
            lambda provider: provider.current(location),
            self.formatter.weather_summary,
        )

    def forecast_command(self, location: str) -> str:
        return self._lookup(
            lambda provider: provider.forecast(location),
            self.formatter.forecast_message,
        )

    def handle(self, line: str) -> Optional[str]:
        """Run the command in ``line``; ``None`` when it is not one of ours."""
        line = line.strip()
        match = WEATHER_PATTERN.match(line)
        if match:
            return self.weather_command(match.group(1))
        match = FORECAST_PATTERN.match(line)
        if match:
            return self.forecast_command(match.group(1))
        return None

    def submit(self, line: str, reply: Reply) -> "Future[Optional[str]]":
        """Handle ``line`` in the background and pass the text to ``reply`` once done."""
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(thread_name_prefix="oweather")
            future = self._executor.submit(self.handle, line)

        def _deliver(done: "Future[Optional[str]]") -> None:
            if done.cancelled():
                return
            exc = done.exception()
            if exc is not None:
                logger.error("Weather command %r failed", line, exc_info=exc)
                reply(UNKNOWN_ERROR_MESSAGE)
                return
            result = done.result()
            if result is not None:
                reply(result)

        future.add_done_callback(_deliver)
        return future

    def close(self) -> None:
        if not self._owns_executor:
            return
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self) -> "WeatherController":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # Helpers ------------------------------------------------------------
    def api_key(self) -> str:
        return config.validate_api_key(self.settings.get(config.API_KEY_SETTING))

    def _lookup(self, fetch: Callable[[OpenWeatherProvider], T], render: Callable[[T], str]) -> str:
        try:
            api_key = self.api_key()
        except ConfigurationError:
            return INVALID_KEY_MESSAGE

        try:
            provider = self._provider_factory(api_key)
        except ConfigurationError as exc:
            logger.error("Weather provider is misconfigured: %s", exc)
            return CONFIGURATION_ERROR_MESSAGE

        try:
            record = fetch(provider)
        except ProviderError as exc:
            logger.warning("Provider %s returned an error: %s", provider.name, exc)
            if exc.message:
                return f"Error looking up the weather: {self.formatter.text.highlight(exc.message)}."
            return UNKNOWN_ERROR_MESSAGE
        except LocationNotFound as exc:
            logger.warning("Location %s has no country in the provider response", exc)
            return NOT_FOUND_MESSAGE
        except (TransportError, DecodeError) as exc:
            logger.error("Weather lookup failed", exc_info=exc)
            return UNKNOWN_ERROR_MESSAGE
        return render(record)


__all__ = [
    "WeatherController",
    "default_provider_factory",
    "INVALID_KEY_MESSAGE",
    "UNKNOWN_ERROR_MESSAGE",
    "NOT_FOUND_MESSAGE",
    "CONFIGURATION_ERROR_MESSAGE",
]
