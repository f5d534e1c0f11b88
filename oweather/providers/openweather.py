"""OpenWeatherMap current weather and forecast provider."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Optional, Union

from requests import Response

from oweather.entities import Coordinates, CurrentWeather, Forecast, ForecastEntry
from oweather.providers.base import DecodeError, HttpProvider, LocationNotFound, ProviderError


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://api.openweathermap.org/data/2.5"
SUCCESS_CODE = 200
# 8 samples per day at 3 hour resolution, i.e. 3 days.
FORECAST_SAMPLES = 24


class OpenWeatherProvider(HttpProvider):
    """Integration with the OpenWeatherMap ``weather`` and ``forecast`` endpoints."""

    name = "openweather"

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")

    def fetch(
        self,
        location: str,
        endpoint: str = "weather",
        extra_params: Optional[Mapping[str, Any]] = None,
    ) -> Response:
        """Issue the GET request and return the raw response, whatever its status."""
        params: Dict[str, Any] = {
            "q": location,
            "appid": self.api_key,
            "units": "metric",
            "mode": "json",
        }
        params.update(extra_params or {})
        return self._request("GET", f"{self.base_url}/{endpoint}", params=params)

    def current(self, location: str) -> CurrentWeather:
        response = self.fetch(location)
        # decode_payload takes the raw body rather than the response so the
        # decoders can be used on bodies that did not come through requests.
        return decode_current(decode_payload(response.content))

    def forecast(self, location: str) -> Forecast:
        response = self.fetch(location, "forecast", {"cnt": FORECAST_SAMPLES})
        return decode_forecast(decode_payload(response.content))


def decode_payload(body: Union[str, bytes]) -> Dict[str, Any]:
    """Parse a response body and check the provider's own status code.

    Raises :class:`DecodeError` for bodies that are not JSON objects or carry
    no ``cod`` field and :class:`ProviderError` for any status but 200.
    """
    try:
        data = json.loads(body)
    except ValueError as exc:
        logger.error("Failed to decode JSON", exc_info=exc)
        raise DecodeError("invalid json") from exc
    if not isinstance(data, dict) or "cod" not in data:
        raise DecodeError("unknown error")
    if not _is_success(data["cod"]):
        message = data.get("message")
        raise ProviderError(str(message) if message is not None else None, code=data["cod"])
    return data


def decode_current(payload: Mapping[str, Any]) -> CurrentWeather:
    try:
        sys_info = payload.get("sys") or {}
        country = sys_info.get("country")
        if not country:
            raise LocationNotFound(payload.get("name") or "unknown location")
        main = payload["main"]
        wind = payload["wind"]
        return CurrentWeather(
            observed_at=int(payload["dt"]),
            name=str(payload["name"]),
            country=str(country),
            coord=_coordinates(payload["coord"]),
            temperature_c=float(main["temp"]),
            feels_like_c=float(main["feels_like"]),
            description=str(payload["weather"][0]["description"]),
            clouds_percent=int(payload["clouds"]["all"]),
            humidity_percent=int(main["humidity"]),
            pressure_hpa=float(main["pressure"]),
            visibility_m=_optional_float(payload.get("visibility")),
            wind_speed_ms=float(wind["speed"]),
            wind_deg=float(wind["deg"]),
            utc_offset=int(payload["timezone"]),
            sunrise=int(sys_info["sunrise"]),
            sunset=int(sys_info["sunset"]),
        )
    except (AttributeError, KeyError, IndexError, TypeError, ValueError) as exc:
        raise DecodeError(f"malformed weather payload: {exc!r}") from exc


def decode_forecast(payload: Mapping[str, Any]) -> Forecast:
    try:
        city = payload["city"]
        return Forecast(
            name=str(city["name"]),
            country=str(city["country"]),
            coord=_coordinates(city["coord"]),
            population=int(city["population"]),
            utc_offset=int(city["timezone"]),
            entries=tuple(_forecast_entry(item) for item in payload["list"]),
        )
    except (AttributeError, KeyError, IndexError, TypeError, ValueError) as exc:
        raise DecodeError(f"malformed forecast payload: {exc!r}") from exc


def _forecast_entry(item: Mapping[str, Any]) -> ForecastEntry:
    clouds = item.get("clouds")
    rain = item.get("rain")
    return ForecastEntry(
        timestamp=int(item["dt"]),
        temperature_c=float(item["main"]["temp"]),
        feels_like_c=float(item["main"]["feels_like"]),
        description=str(item["weather"][0]["description"]),
        clouds_percent=int(clouds["all"]) if clouds is not None else None,
        rain_mm=float(rain.get("3h", 0.0)) if rain is not None else None,
    )


def _coordinates(value: Mapping[str, Any]) -> Coordinates:
    return Coordinates(latitude=float(value["lat"]), longitude=float(value["lon"]))


def _is_success(code: object) -> bool:
    # "cod" is an int for /weather and a string for /forecast.
    try:
        return int(code) == SUCCESS_CODE
    except (TypeError, ValueError):
        return False


def _optional_float(value: Optional[object]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


__all__ = [
    "DEFAULT_BASE_URL",
    "FORECAST_SAMPLES",
    "OpenWeatherProvider",
    "decode_payload",
    "decode_current",
    "decode_forecast",
]
