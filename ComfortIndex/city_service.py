"""City list loaded from a static JSON file."""
import json
import logging
import os
import site
import sys
from typing import Dict, List, Optional

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
CITIES_FILENAME = "cities.json"
# Installed copy, shipped as setuptools data-files
SHARE_DIR = os.path.join("share", "comfort-index")


def resolve_default_cities_file(base_dir: str = BASE_DIR, prefixes: Optional[List[str]] = None) -> str:
    """
    Locate the bundled cities.json.

    A checkout keeps it beside the modules; an install puts it under
    <prefix>/share/comfort-index for sys.prefix or the user base.
    """
    local = os.path.join(base_dir, CITIES_FILENAME)
    if os.path.exists(local):
        return local
    if prefixes is None:
        prefixes = [sys.prefix, site.getuserbase()]
    candidates = [os.path.join(prefix, SHARE_DIR, CITIES_FILENAME) for prefix in prefixes]
    for candidate in candidates:
        if os.path.exists(candidate):
            return candidate
    return candidates[0]


DEFAULT_CITIES_FILE = resolve_default_cities_file()
MIN_CITY_COUNT = 10


class CityDataError(Exception):
    """Exception raised when the city list cannot be loaded."""
    pass


class CityService:
    """
    Provides the configured cities for weather fetching.

    cities.json has the shape {"List": [{"CityCode": "...", "CityName": "..."}]}.
    """

    def __init__(self, cities_file: Optional[str] = None):
        self.cities_file = cities_file or DEFAULT_CITIES_FILE
        self._cities: List[Dict[str, str]] = []
        self._load_cities()

    def _load_cities(self) -> None:
        try:
            with open(self.cities_file, encoding="utf-8") as fh:
                data = json.load(fh)
            cities = data["List"]
            for city in cities:
                if "CityCode" not in city or "CityName" not in city:
                    raise KeyError(f"city entry missing CityCode/CityName: {city}")
        except (OSError, ValueError, KeyError, TypeError) as e:
            logging.error(f"Error loading {self.cities_file}: {e}")
            raise CityDataError(f"Failed to load city data: {e}") from e

        self._cities = [
            {"CityCode": str(city["CityCode"]), "CityName": city["CityName"]}
            for city in cities
        ]
        logging.info(f"Loaded {len(self._cities)} cities from {self.cities_file}")

        if len(self._cities) < MIN_CITY_COUNT:
            logging.warning(
                f"Only {len(self._cities)} cities loaded, at least {MIN_CITY_COUNT} expected"
            )

    def get_cities(self) -> List[Dict[str, str]]:
        return self._cities

    def get_city_codes(self) -> List[str]:
        return [city["CityCode"] for city in self._cities]

    def get_city_name(self, city_code: str) -> str:
        for city in self._cities:
            if city["CityCode"] == city_code:
                return city["CityName"]
        return "Unknown"

    def get_city_count(self) -> int:
        return len(self._cities)
