"""OpenWeatherMap chat commands: current weather and 3 day forecasts."""

__version__ = "1.0.0"
