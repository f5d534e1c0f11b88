from __future__ import annotations

import copy
from typing import Any, Dict

import pytest

from oweather.providers.openweather import OpenWeatherProvider
from payloads import API_KEY, BASE_URL, CURRENT_PAYLOAD, make_forecast


@pytest.fixture()
def current_payload() -> Dict[str, Any]:
    return copy.deepcopy(CURRENT_PAYLOAD)


@pytest.fixture()
def forecast_payload() -> Dict[str, Any]:
    return make_forecast()


@pytest.fixture()
def provider() -> OpenWeatherProvider:
    return OpenWeatherProvider(api_key=API_KEY, base_url=BASE_URL)
