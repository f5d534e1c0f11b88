from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class CurrentWeather:
    """Current conditions for one location as reported by OpenWeatherMap.

    Values keep the provider's metric units:
    - temperature in Celsius
    - pressure in hectopascal (hPa)
    - wind speed in metres per second (m/s), direction in degrees
    - visibility in metres, ``None`` when the provider sent nothing

    Timestamps are UTC epoch seconds and ``utc_offset`` is the location's
    offset from UTC in seconds.
    """

    observed_at: int
    name: str
    country: str
    coord: Coordinates
    temperature_c: float
    feels_like_c: float
    description: str
    clouds_percent: int
    humidity_percent: int
    pressure_hpa: float
    visibility_m: Optional[float]
    wind_speed_ms: float
    wind_deg: float
    utc_offset: int
    sunrise: int
    sunset: int


@dataclass(frozen=True)
class ForecastEntry:
    """A single 3-hour forecast sample."""

    timestamp: int
    temperature_c: float
    feels_like_c: float
    description: str
    clouds_percent: Optional[int] = None
    rain_mm: Optional[float] = None


@dataclass(frozen=True)
class Forecast:
    name: str
    country: str
    coord: Coordinates
    population: int
    utc_offset: int
    entries: Tuple[ForecastEntry, ...]


__all__ = ["Coordinates", "CurrentWeather", "ForecastEntry", "Forecast"]
