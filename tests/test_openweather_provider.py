from __future__ import annotations

import json

import pytest
import requests

from oweather.entities import Coordinates
from oweather.providers.base import DecodeError, LocationNotFound, ProviderError, TransportError
from oweather.providers.openweather import decode_current, decode_forecast, decode_payload
from payloads import API_KEY, FORECAST_URL, OBSERVED_AT, WEATHER_URL


def test_current_sends_metric_json_query(requests_mock, provider, current_payload):
    requests_mock.get(WEATHER_URL, json=current_payload)

    provider.current("berlin,de")

    assert requests_mock.call_count == 1
    assert requests_mock.last_request.qs == {
        "q": ["berlin,de"],
        "appid": [API_KEY],
        "units": ["metric"],
        "mode": ["json"],
    }


def test_current_normalization(requests_mock, provider, current_payload):
    requests_mock.get(WEATHER_URL, json=current_payload)

    weather = provider.current("berlin")

    assert weather.observed_at == OBSERVED_AT
    assert weather.name == "Berlin"
    assert weather.country == "DE"
    assert weather.coord == Coordinates(latitude=52.52, longitude=13.41)
    assert weather.temperature_c == 21.5
    assert weather.feels_like_c == 20.0
    assert weather.description == "clear sky"
    assert weather.clouds_percent == 20
    assert weather.humidity_percent == 40
    assert weather.pressure_hpa == 1013
    assert weather.visibility_m == 5000
    assert weather.wind_speed_ms == 10.0
    assert weather.wind_deg == 250
    assert weather.utc_offset == 3600
    assert weather.sunrise == 1699943400
    assert weather.sunset == 1699976400


def test_forecast_requests_24_samples(requests_mock, provider, forecast_payload):
    requests_mock.get(FORECAST_URL, json=forecast_payload)

    forecast = provider.forecast("berlin")

    assert requests_mock.last_request.qs["cnt"] == ["24"]
    assert forecast.name == "Berlin"
    assert forecast.population == 1000000
    assert forecast.utc_offset == 3600
    assert len(forecast.entries) == 24
    first, second = forecast.entries[:2]
    assert first.clouds_percent == 0
    assert first.rain_mm == 0.5
    assert second.clouds_percent is None
    assert second.rain_mm is None


def test_http_error_status_is_decoded_not_raised(requests_mock, provider):
    requests_mock.get(WEATHER_URL, status_code=404, json={"cod": "404", "message": "city not found"})

    with pytest.raises(ProviderError) as excinfo:
        provider.current("atlantis")

    assert excinfo.value.message == "city not found"
    assert excinfo.value.code == "404"


def test_connection_failure_is_transport_error(requests_mock, provider):
    requests_mock.get(WEATHER_URL, exc=requests.exceptions.ConnectionError)

    with pytest.raises(TransportError):
        provider.current("berlin")


def test_html_body_is_decode_error(requests_mock, provider):
    requests_mock.get(WEATHER_URL, status_code=502, text="<html>Bad Gateway</html>")

    with pytest.raises(DecodeError):
        provider.current("berlin")


def test_decode_payload_outcomes():
    assert decode_payload(json.dumps({"cod": 200, "name": "Berlin"}))["name"] == "Berlin"
    assert decode_payload(b'{"cod": "200"}') == {"cod": "200"}

    with pytest.raises(DecodeError):
        decode_payload("not json")
    with pytest.raises(DecodeError):
        decode_payload("")
    with pytest.raises(DecodeError):
        decode_payload("[1, 2, 3]")
    with pytest.raises(DecodeError, match="unknown error"):
        decode_payload('{"message": "no status"}')


def test_decode_payload_provider_error_without_message():
    with pytest.raises(ProviderError) as excinfo:
        decode_payload('{"cod": 401}')

    assert excinfo.value.message is None
    assert str(excinfo.value) == "unknown error"


def test_missing_visibility_is_absent_not_zero(current_payload):
    del current_payload["visibility"]

    assert decode_current(current_payload).visibility_m is None


def test_missing_country_is_location_not_found(current_payload):
    del current_payload["sys"]["country"]

    with pytest.raises(LocationNotFound):
        decode_current(current_payload)


def test_missing_required_field_is_decode_error(current_payload, forecast_payload):
    del current_payload["main"]["feels_like"]
    del forecast_payload["list"][3]["main"]

    with pytest.raises(DecodeError):
        decode_current(current_payload)
    with pytest.raises(DecodeError):
        decode_forecast(forecast_payload)


@pytest.mark.parametrize(
    "field, value",
    [("sys", "oops"), ("main", [1, 2]), ("weather", [None])],
)
def test_wrong_typed_current_field_is_decode_error(current_payload, field, value):
    current_payload[field] = value

    with pytest.raises(DecodeError):
        decode_current(current_payload)


def test_wrong_typed_forecast_sample_is_decode_error(forecast_payload):
    forecast_payload["list"] = [1]

    with pytest.raises(DecodeError):
        decode_forecast(forecast_payload)


def test_wrong_typed_forecast_rain_is_decode_error(forecast_payload):
    forecast_payload["list"][0]["rain"] = "heavy"

    with pytest.raises(DecodeError):
        decode_forecast(forecast_payload)
