from __future__ import annotations

import pytest

from oweather.__main__ import main
from oweather.commands import INVALID_KEY_MESSAGE
from payloads import API_KEY, BASE_URL, WEATHER_URL


@pytest.fixture()
def environment(monkeypatch):
    monkeypatch.setenv("OWEATHER_BASE_URL", BASE_URL)
    monkeypatch.delenv("OWEATHER_API_KEY", raising=False)
    monkeypatch.delenv("OWEATHER_HTTP_TIMEOUT", raising=False)
    return monkeypatch


def test_cli_without_api_key(environment, requests_mock, capsys):
    assert main(["oweather", "Berlin,DE"]) == 0

    assert capsys.readouterr().out == f"{INVALID_KEY_MESSAGE}\n"
    assert requests_mock.call_count == 0


def test_cli_prints_plain_text(environment, requests_mock, current_payload, capsys):
    environment.setenv("OWEATHER_API_KEY", API_KEY)
    requests_mock.get(WEATHER_URL, json=current_payload)

    assert main(["oweather", "new", "york"]) == 0

    out = capsys.readouterr().out
    assert out.startswith("The weather for Berlin, DE is 21.5°C with clear sky [Details\n")
    assert "Wind: fresh breeze - 36.0 km/h (22.4 mph) from the WSW\n" in out
    assert requests_mock.last_request.qs["q"] == ["new york"]


def test_cli_markup_flag(environment, requests_mock, current_payload, capsys):
    environment.setenv("OWEATHER_API_KEY", API_KEY)
    requests_mock.get(WEATHER_URL, json=current_payload)

    main(["oweather", "berlin", "--markup"])

    assert capsys.readouterr().out.startswith("The weather for <highlight>Berlin<end>")


def test_cli_rejects_unknown_command():
    with pytest.raises(SystemExit):
        main(["weather", "berlin"])
