"""Run a single weather command from the command line.

    OWEATHER_API_KEY=... python -m oweather oweather Berlin,DE
    OWEATHER_API_KEY=... python -m oweather forecast Berlin,DE --markup
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from oweather import settings as config
from oweather.commands import WeatherController
from oweather.render import WeatherFormatter
from oweather.text import MarkupText, PlainText


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="oweather", description="Look up the weather on OpenWeatherMap")
    parser.add_argument("command", choices=("oweather", "forecast"), help="Current weather or 3 day forecast")
    parser.add_argument("location", nargs="+", help="Location, e.g. Berlin,DE")
    parser.add_argument("--markup", action="store_true", help="Print chat markup instead of plain text")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=config.log_level(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    text = MarkupText() if args.markup else PlainText()
    controller = WeatherController(config.EnvironmentSettings(), formatter=WeatherFormatter(text=text))
    reply = controller.handle(f"{args.command} {' '.join(args.location)}")
    if reply is None:
        parser.error("a location is required")
    sys.stdout.write(f"{reply}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
