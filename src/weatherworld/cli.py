"""Command-line interface for weatherworld.

Examples:
  python -m weatherworld.cli search "Lagos,NG"
  python -m weatherworld.cli reverse 9.07 7.49
  python -m weatherworld.cli forecast 9.07 7.49 --units imperial
  python -m weatherworld.cli saved
  python -m weatherworld.cli saved --remove 9.07 7.49
  python -m weatherworld.cli serve --port 8000
"""

import argparse
import json
import logging
import sys
from typing import Optional

from weatherworld.api.schemas import ForecastBundle, PlaceCandidate
from weatherworld.client.state import remove_saved_place
from weatherworld.client.storage import JsonFileStore, load_preferences, save_places
from weatherworld.config import Settings, setup_logging
from weatherworld.errors import WeatherWorldError
from weatherworld.forecast.normalizer import fetch_forecast
from weatherworld.providers.openweather import OpenWeatherClient
from weatherworld.services.geocoding import forward_geocode, reverse_geocode
from weatherworld.utils.formatters import (
    EMPTY,
    UNITS,
    format_day,
    format_time,
    location_label,
    temperature_label,
    wind_label,
)

logger = logging.getLogger(__name__)


def print_places(places: list[PlaceCandidate], empty_message: str = "No results found.") -> None:
    if not places:
        print(empty_message)
        return
    for i, place in enumerate(places, 1):
        print(f"{i}. {location_label(place)}  ({place.lat:.4f}, {place.lon:.4f})")


def print_forecast(bundle: ForecastBundle, units: str, tz=None) -> None:
    """Print a forecast bundle as three short text sections."""
    current = bundle.current
    condition = current.weather[0].description if current.weather else None
    print("=" * 50)
    print("CURRENT")
    print("=" * 50)
    print(f"  Temperature: {temperature_label(current.temp, units)}")
    print(f"  Feels like:  {temperature_label(current.feels_like, units)}")
    humidity = f"{current.humidity:.0f}%" if current.humidity is not None else EMPTY
    print(f"  Humidity:    {humidity}")
    print(f"  Wind:        {wind_label(units, current.wind_speed)}")
    print(f"  Conditions:  {condition or EMPTY}")

    print("\nNEXT 12 HOURS")
    for sample in bundle.hourly:
        time = format_time(sample.dt, tz) if sample.dt is not None else EMPTY
        print(f"  {time:<5}  {temperature_label(sample.temp, units)}")

    print("\nDAILY OUTLOOK")
    for day in bundle.daily:
        low = temperature_label(day.temp.min, units)
        high = temperature_label(day.temp.max, units)
        print(f"  {format_day(day.dt, tz):<12} {low} / {high}")


def cmd_search(args, settings: Settings) -> int:
    print_places(forward_geocode(OpenWeatherClient(settings), args.query))
    return 0


def cmd_reverse(args, settings: Settings) -> int:
    print_places(reverse_geocode(OpenWeatherClient(settings), args.lat, args.lon, settings.default_country))
    return 0


def cmd_forecast(args, settings: Settings) -> int:
    tz = settings.tz()
    bundle = fetch_forecast(OpenWeatherClient(settings), args.lat, args.lon, args.units, tz)
    if args.json:
        print(bundle.model_dump_json(indent=2))
    else:
        print_forecast(bundle, args.units, tz)
    return 0


def cmd_saved(args, settings: Settings) -> int:
    store = JsonFileStore(settings.store_path)
    _, places = load_preferences(store)
    if args.remove:
        lat, lon = args.remove
        target = PlaceCandidate(name="", lat=lat, lon=lon, country="")
        remaining = remove_saved_place(tuple(places), target)
        if len(remaining) == len(places):
            logger.warning(f"No saved place at ({lat}, {lon})")
        save_places(store, remaining)
        places = list(remaining)
    print_places(places, "No saved places.")
    return 0


def cmd_serve(args, settings: Settings) -> int:
    import uvicorn

    uvicorn.run("weatherworld.api.app:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weatherworld",
        description="Search places and show normalized OpenWeather forecasts",
        epilog=__doc__.split("\n", 1)[1],
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress output except errors",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Geocode a free-text place query")
    search.add_argument("query", help='Place name, e.g. "Abuja,NG"')
    search.set_defaults(func=cmd_search)

    reverse = sub.add_parser("reverse", help="Name the place at a coordinate")
    reverse.add_argument("lat", type=float)
    reverse.add_argument("lon", type=float)
    reverse.set_defaults(func=cmd_reverse)

    forecast = sub.add_parser("forecast", help="Show the forecast at a coordinate")
    forecast.add_argument("lat", type=float)
    forecast.add_argument("lon", type=float)
    forecast.add_argument("--units", choices=UNITS, default="metric", help="Unit system (default: metric)")
    forecast.add_argument("--json", action="store_true", help="Print the raw forecast bundle")
    forecast.set_defaults(func=cmd_forecast)

    saved = sub.add_parser("saved", help="List or remove saved places")
    saved.add_argument("--remove", nargs=2, type=float, metavar=("LAT", "LON"), help="Remove a saved place")
    saved.set_defaults(func=cmd_saved)

    serve = sub.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()

    if args.quiet:
        level = "ERROR"
    elif args.verbose:
        level = "DEBUG"
    else:
        level = settings.log_level
    setup_logging(level)

    try:
        return args.func(args, settings)
    except WeatherWorldError as e:
        logger.error(f"{args.command} failed: {e.message}")
        print(json.dumps(e.to_payload(), indent=2), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
