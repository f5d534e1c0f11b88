"""Turn weather records into chat messages."""
from __future__ import annotations

import time
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from oweather import units
from oweather.entities import Coordinates, CurrentWeather, Forecast, ForecastEntry
from oweather.text import MarkupText, TextRenderer


# A full day of 3-hour samples.
SAMPLES_PER_DAY = 8

DayBucket = Tuple[date, List[ForecastEntry]]


def local_date(timestamp: int, utc_offset: int) -> date:
    return (datetime.fromtimestamp(int(timestamp), tz=timezone.utc) + timedelta(seconds=int(utc_offset))).date()


def bucket_by_day(entries: Iterable[ForecastEntry], utc_offset: int) -> List[DayBucket]:
    """Group samples by local calendar day, keeping encounter order.

    Only the last bucket is dropped, and only when it holds fewer than
    :data:`SAMPLES_PER_DAY` samples.
    """
    buckets: Dict[date, List[ForecastEntry]] = {}
    for entry in entries:
        buckets.setdefault(local_date(entry.timestamp, utc_offset), []).append(entry)
    days = list(buckets.items())
    if days and len(days[-1][1]) < SAMPLES_PER_DAY:
        days.pop()
    return days


class WeatherFormatter:
    """Render :class:`CurrentWeather` and :class:`Forecast` records as text.

    ``clock`` returns the current UTC epoch time and is only used for the
    "Local time" line of the forecast.
    """

    def __init__(
        self,
        text: Optional[TextRenderer] = None,
        country_resolver: Optional[units.CountryResolver] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.text = text or MarkupText()
        self.country_resolver = country_resolver
        self._clock = clock

    def country(self, code: str) -> str:
        return units.country_name(code, self.country_resolver)

    # Current weather ----------------------------------------------------
    def weather_summary(self, weather: CurrentWeather) -> str:
        hl = self.text.highlight
        temperature = units.format_number(weather.temperature_c, 1)
        details = self.text.make_blob("Details", self.weather_blob(weather))
        return (
            f"The weather for {hl(weather.name)}, {self.country(weather.country)} is "
            f"{hl(temperature + '°C')} with {weather.description} [{details}]"
        )

    def weather_blob(self, weather: CurrentWeather) -> str:
        hl = self.text.highlight
        fmt = units.format_number
        offset = units.format_utc_offset(weather.utc_offset)
        temp_f = fmt(units.celsius_to_fahrenheit(weather.temperature_c), 1)
        feels_f = fmt(units.celsius_to_fahrenheit(weather.feels_like_c), 1)
        pressure_hg = fmt(units.hpa_to_inhg(weather.pressure_hpa), 2) + '" Hg'
        wind_speed = (
            f"{fmt(units.ms_to_kmh(weather.wind_speed_ms), 1)} km/h"
            f" ({fmt(units.ms_to_mph(weather.wind_speed_ms), 1)} mph)"
        )
        sunrise = units.format_local_time(weather.sunrise, weather.utc_offset)
        sunset = units.format_local_time(weather.sunset, weather.utc_offset)
        updated = units.format_local_time(weather.observed_at, 0, "%a, %Y-%m-%d %H:%M:%S")
        forecast_link = self.text.make_chatcmd(
            "Forecast for the next 3 days",
            f"/tell <myname> forecast {weather.name},{weather.country}",
        )
        lines = [
            f"Last Updated: {hl(updated + ' UTC')}",
            "",
            *self._location_lines(weather.name, weather.country, weather.utc_offset, weather.coord),
            "",
            f"Currently: {hl(fmt(weather.temperature_c, 1) + '°C')} ({hl(temp_f + '°F')}), {hl(weather.description)}",
            f"Feels like: {hl(fmt(weather.feels_like_c, 1) + '°C')} ({hl(feels_f + '°F')})",
            f"Clouds: {hl(str(weather.clouds_percent) + '%')}",
            f"Humidity: {hl(str(weather.humidity_percent) + '%')}",
            f"Visibility: {hl(units.format_visibility(weather.visibility_m))}",
            f"Pressure: {hl(units.format_plain(weather.pressure_hpa) + ' hPa')} ({hl(pressure_hg)})",
            f"Wind: {hl(units.beaufort(weather.wind_speed_ms))} - {hl(wind_speed)}"
            f" from the {hl(units.wind_direction(weather.wind_deg))}",
            "",
            f"Sunrise: {hl(sunrise + ' UTC ' + offset)}",
            f"Sunset: {hl(sunset + ' UTC ' + offset)}",
            "",
            forecast_link,
        ]
        return self.text.newline.join(lines)

    # Forecast -----------------------------------------------------------
    def forecast_message(self, forecast: Forecast) -> str:
        title = f"Weather forecast for {forecast.name}, {self.country(forecast.country)}"
        return self.text.make_blob(title, self.forecast_blob(forecast))

    def forecast_blob(self, forecast: Forecast) -> str:
        hl = self.text.highlight
        offset = units.format_utc_offset(forecast.utc_offset)
        now = units.format_local_time(self._clock(), forecast.utc_offset, "%A, %H:%M:%S")
        lines = [
            *self._location_lines(forecast.name, forecast.country, forecast.utc_offset, forecast.coord),
            f"Population: {hl(units.format_number(forecast.population))}",
            f"Local time: {hl(now)}",
            "",
            f"All times are UTC {offset}.",
        ]
        for day, entries in bucket_by_day(forecast.entries, forecast.utc_offset):
            lines.append("")
            lines.append(self.text.header(day.strftime("%A")))
            lines.extend(self.forecast_line(entry, forecast.utc_offset) for entry in entries)
        return self.text.newline.join(lines)

    def forecast_line(self, entry: ForecastEntry, utc_offset: int) -> str:
        hl = self.text.highlight
        when = units.format_local_time(entry.timestamp, utc_offset, "%H:%M")
        line = (
            f"{self.text.tab}{when}: {hl(self.pad_temperature(entry.temperature_c) + '°C')}, "
            f"feels like {hl(self.pad_temperature(entry.feels_like_c) + '°C')}"
        )
        if entry.clouds_percent is not None:
            line += f", {hl(self.pad_clouds(entry.clouds_percent) + '%')} clouds"
        if entry.rain_mm is not None:
            line += f", {hl(self.pad_rain(entry.rain_mm) + 'mm')} rain"
        return line

    # Column alignment ---------------------------------------------------
    def pad_temperature(self, celsius: float) -> str:
        """Right-align a temperature to ``-00.0`` width with an invisible filler.

        Positive values reserve a column for the minus sign.
        """
        value = units.format_number(abs(celsius), 1)
        negative = celsius < 0 and value != "0.0"
        if len(value) == 3:
            if negative:
                return self.text.filler("_") + "-" + value
            return self.text.filler("-_") + value
        if negative:
            return "-" + value
        return self.text.filler("-") + value

    def pad_clouds(self, percent: int) -> str:
        if percent < 10:
            return self.text.filler("00") + str(percent)
        if percent < 100:
            return self.text.filler("0") + str(percent)
        return str(percent)

    def pad_rain(self, millimetres: float) -> str:
        value = units.format_number(millimetres, 1)
        if len(value) < 4:
            return self.text.filler("0") + value
        return value

    # Helpers ------------------------------------------------------------
    def _location_lines(self, name: str, country: str, utc_offset: int, coord: Coordinates) -> Sequence[str]:
        hl = self.text.highlight
        map_link = self.text.make_chatcmd("OpenStreetMap", "/start " + units.osm_link(coord))
        lat_lon = f"{units.format_latitude(coord.latitude)}° {units.format_longitude(coord.longitude)}°"
        return (
            f"Location: {hl(name)}, {hl(self.country(country))}",
            f"Timezone: {hl('UTC ' + units.format_utc_offset(utc_offset))}",
            f"Lat/Lon: {hl(lat_lon)} {map_link}",
        )


__all__ = ["SAMPLES_PER_DAY", "WeatherFormatter", "bucket_by_day", "local_date"]
