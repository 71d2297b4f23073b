"""Comfort index ranking of configured cities, printed to the terminal."""
import argparse
import logging
import os
import signal
import sys
import time
from typing import Optional, Tuple

from dotenv import load_dotenv

from city_service import CityService, CityDataError
from comfort_index import ComfortScorer
from layout import format_cache_status, format_ranking_table
from openweather_provider import OpenWeatherProvider
from ranking_service import RankingService
from result_cache import DEFAULT_TTL_SECONDS, ResultCache
from weather_provider import WeatherProviderError

DEFAULT_LOG_FILE = "comfort-index.log"


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("City comfort index ranking")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE)
    parser.add_argument("--cities-file", default=None, help="Path to cities.json")
    parser.add_argument("--units", choices=["metric"], default="metric")
    parser.add_argument("--refresh", type=float, default=60.0, help="Seconds between refreshes")
    parser.add_argument("--cache-ttl", type=int, default=DEFAULT_TTL_SECONDS)
    parser.add_argument("--max-retries", type=int, default=3)
    parser.add_argument("--retry-delay", type=float, default=1.0)
    parser.add_argument("--timeout", type=int, default=10, help="HTTP timeout in seconds")
    parser.add_argument("--once", action="store_true", help="Print the ranking once and exit")
    parser.add_argument("--cache-status", action="store_true", help="Print cache status after each ranking")
    parser.add_argument("--no-color", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: str, verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file)
        ]
    )


def load_config(cities_file: Optional[str]) -> Tuple[str, str, Optional[str]]:
    load_dotenv()
    api_key = os.getenv("OPENWEATHER_API_KEY")
    lang = os.getenv("WEATHER_LANG", "en")
    cities_file = cities_file or os.getenv("CITIES_FILE")

    if not api_key:
        raise SystemExit("Missing OPENWEATHER_API_KEY in environment")

    logging.info("Configuration loaded: lang=%s cities_file=%s", lang, cities_file or "default")
    return api_key, lang, cities_file


def build_ranking_service(
    api_key: str,
    lang: str,
    cities_file: Optional[str],
    args: argparse.Namespace
) -> RankingService:
    try:
        city_service = CityService(cities_file)
    except CityDataError as exc:
        raise SystemExit(str(exc)) from exc

    provider = OpenWeatherProvider(
        api_key=api_key,
        units=args.units,
        lang=lang,
        timeout=args.timeout,
        city_names={city["CityCode"]: city["CityName"] for city in city_service.get_cities()},
    )
    service = RankingService(
        provider=provider,
        city_service=city_service,
        cache=ResultCache(ttl_seconds=args.cache_ttl),
        scorer=ComfortScorer(),
        max_retries=args.max_retries,
        retry_delay_seconds=args.retry_delay,
    )
    logging.info(
        "Ranking service ready (%s cities, cache ttl=%ss)",
        city_service.get_city_count(),
        args.cache_ttl,
    )
    return service


def print_lines(lines) -> None:
    for line in lines:
        print(line)
    sys.stdout.flush()


def show_rankings(service: RankingService, args: argparse.Namespace) -> None:
    response = service.get_rankings()
    print_lines(format_ranking_table(response, color=not args.no_color and sys.stdout.isatty()))
    if args.cache_status:
        print_lines(format_cache_status(service.cache_status()))


def ranking_loop(service: RankingService, args: argparse.Namespace) -> None:
    last_error = None
    frame = 0
    while True:
        frame += 1
        logging.info("Refresh %s: building rankings", frame)
        try:
            show_rankings(service, args)
            last_error = None
        except WeatherProviderError as err:
            logging.error("Weather fetch failed: %s", err)
            if last_error != str(err):
                print(f"WEATHER API ERROR: {err}")
            last_error = str(err)
        except Exception as exc:
            logging.exception("Unexpected error: %s", exc)
            print("FATAL ERROR")

        time.sleep(max(args.refresh, 1.0))


def signal_handler(signum, frame):
    logging.info("Received signal %s, shutting down", signum)
    raise KeyboardInterrupt()


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    api_key, lang, cities_file = load_config(args.cities_file)
    service = build_ranking_service(api_key, lang, cities_file, args)

    if args.once:
        try:
            show_rankings(service, args)
        except WeatherProviderError as err:
            logging.error("Weather fetch failed: %s", err)
            print(f"WEATHER API ERROR: {err}")
            return 1
        return 0

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        ranking_loop(service, args)
    except KeyboardInterrupt:
        logging.info("Stopping")
    return 0


if __name__ == "__main__":
    sys.exit(main())
