"""Unit conversions and lookup tables for weather values.

Inputs are the provider's metric values: Celsius, hPa, m/s, metres and
degrees. Display helpers return strings ready to be dropped into a message.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from oweather.entities import Coordinates


# Compass points at roughly 22.5 degree steps; 360 repeats north.
WIND_DIRECTIONS = (
    (0, "N"),
    (22, "NNE"),
    (45, "NE"),
    (67, "ENE"),
    (90, "E"),
    (112, "ESE"),
    (135, "SE"),
    (157, "SSE"),
    (180, "S"),
    (202, "SSW"),
    (225, "SW"),
    (247, "WSW"),
    (270, "W"),
    (292, "WNW"),
    (315, "NW"),
    (337, "NNW"),
    (360, "N"),
)

# Lower bound in m/s of each Beaufort band, strongest first.
BEAUFORT_SCALE = (
    (32.7, "hurricane"),
    (28.5, "violent storm"),
    (24.5, "storm"),
    (20.8, "strong gale"),
    (17.2, "gale"),
    (13.9, "high wind"),
    (10.8, "strong breeze"),
    (8.0, "fresh breeze"),
    (5.5, "moderate breeze"),
    (3.4, "gentle breeze"),
    (1.6, "light breeze"),
    (0.5, "light air"),
    (0.0, "calm"),
)

UNKNOWN = "unknown"
NO_DATA = "no data"

METRES_PER_MILE = 1609.3
INHG_PER_HPA = 0.02952997
OSM_ZOOM = 12  # 1 (world) to 20 (street)


def wind_direction(degrees: float) -> str:
    """Return the compass point closest to ``degrees``; the first entry wins ties."""
    current = UNKNOWN
    current_diff = 360.0
    for table_degrees, name in WIND_DIRECTIONS:
        diff = abs(degrees - table_degrees)
        if diff < current_diff:
            current = name
            current_diff = diff
    return current


def beaufort(speed: float) -> str:
    for lower_bound, label in BEAUFORT_SCALE:
        if speed >= lower_bound:
            return label
    return UNKNOWN


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 1.8 + 32


def hpa_to_inhg(hpa: float) -> float:
    return hpa * INHG_PER_HPA


def ms_to_kmh(speed: float) -> float:
    return speed * 3.6


def ms_to_mph(speed: float) -> float:
    return speed * 3600 / METRES_PER_MILE


def format_number(value: float, decimals: int = 0) -> str:
    """Format with a fixed number of decimals and thousands separators."""
    return f"{value:,.{decimals}f}"


def format_plain(value: float) -> str:
    """Render a float the short way, ``13.0`` as ``13`` and ``52.52`` unchanged."""
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def format_visibility(metres: Optional[float]) -> str:
    if metres is None or metres <= 0:
        return NO_DATA
    km = format_number(metres / 1000, 1)
    miles = format_number(metres / METRES_PER_MILE, 1)
    return f"{km} km ({miles} miles)"


def format_utc_offset(seconds: int) -> str:
    prefix = "-" if seconds < 0 else "+"
    hours, remainder = divmod(abs(int(seconds)), 3600)
    return f"{prefix}{hours % 24:02d}:{remainder // 60:02d}"


def format_local_time(timestamp: float, utc_offset: int, fmt: str = "%H:%M:%S") -> str:
    """Shift a UTC epoch timestamp by ``utc_offset`` seconds and format it."""
    shifted = datetime.fromtimestamp(int(timestamp) + int(utc_offset), tz=timezone.utc)
    return shifted.strftime(fmt)


def format_latitude(latitude: float) -> str:
    if latitude > 0:
        return f"N{format_plain(latitude)}"
    return f"S{format_plain(abs(latitude))}"


def format_longitude(longitude: float) -> str:
    if longitude > 0:
        return f"E{format_plain(longitude)}"
    return f"W{format_plain(abs(longitude))}"


def osm_link(coord: Coordinates, zoom: int = OSM_ZOOM) -> str:
    return f"https://www.openstreetmap.org/#map={zoom}/{coord.latitude:.4f}/{coord.longitude:.4f}"


CountryResolver = Callable[[str], Optional[str]]


def country_name(code: str, resolver: Optional[CountryResolver] = None) -> str:
    """Return a display name for a two letter country code, or the code itself."""
    if resolver is None:
        return code
    return resolver(code) or code


__all__ = [
    "WIND_DIRECTIONS",
    "BEAUFORT_SCALE",
    "NO_DATA",
    "UNKNOWN",
    "CountryResolver",
    "wind_direction",
    "beaufort",
    "celsius_to_fahrenheit",
    "hpa_to_inhg",
    "ms_to_kmh",
    "ms_to_mph",
    "format_number",
    "format_plain",
    "format_visibility",
    "format_utc_offset",
    "format_local_time",
    "format_latitude",
    "format_longitude",
    "osm_link",
    "country_name",
]
