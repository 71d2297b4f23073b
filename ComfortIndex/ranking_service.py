"""Comfort index rankings with caching and retries."""
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from city_service import CityService
from comfort_index import ComfortScorer
from result_cache import ResultCache
from weather_data import ComfortIndexResponse, RankedCity, WeatherObservation
from weather_provider import WeatherProviderBase, WeatherProviderError

COMFORT_INDEX_CACHE_KEY = "comfort-index-results"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def rank_observations(
    observations: Iterable[WeatherObservation],
    scorer: ComfortScorer
) -> List[RankedCity]:
    """
    Score a batch of observations and rank them by descending comfort score.

    Ranks are 1-based. Ties keep their input order.
    """
    cities = [
        RankedCity(
            rank=0,  # assigned after sorting
            city=obs.city_name,
            temperature=obs.temperature,
            humidity=obs.humidity,
            wind_speed=obs.wind_speed,
            description=obs.description,
            comfort_score=scorer.calculate_comfort_index(obs),
        )
        for obs in observations
    ]
    cities.sort(key=lambda city: city.comfort_score, reverse=True)
    for index, city in enumerate(cities):
        city.rank = index + 1
    return cities


class RankingService:
    """
    Builds the ranked city list, memoized in a ResultCache.

    On a cache miss every configured city is fetched from the provider,
    scored and ranked; the result is cached under COMFORT_INDEX_CACHE_KEY.
    """

    def __init__(
        self,
        provider: WeatherProviderBase,
        city_service: CityService,
        cache: ResultCache,
        scorer: Optional[ComfortScorer] = None,
        max_retries: int = 3,
        retry_delay_seconds: float = 1.0
    ):
        """
        Initialize ranking service.

        Args:
            provider: Weather provider to use
            city_service: Source of the city ids to rank
            cache: Cache holding the latest ranked result
            scorer: Comfort scorer (a new ComfortScorer if omitted)
            max_retries: Maximum number of attempts per city on transient errors
            retry_delay_seconds: Base delay between retries
        """
        self.provider = provider
        self.city_service = city_service
        self.cache = cache
        self.scorer = scorer or ComfortScorer()
        self.max_retries = max_retries
        self.retry_delay_seconds = retry_delay_seconds

    def get_rankings(self) -> ComfortIndexResponse:
        """
        Get the ranked city list, using the cache if still fresh.

        Raises:
            WeatherProviderError: If any city cannot be fetched
        """
        cached = self.cache.get(COMFORT_INDEX_CACHE_KEY)
        if cached is not None:
            logging.info("Returning cached comfort index results")
            return cached

        logging.info("Fetching fresh weather data...")
        observations = self.fetch_all_cities()

        response = ComfortIndexResponse(
            generated_at=_utc_now_iso(),
            cities=rank_observations(observations, self.scorer),
        )
        self.cache.set(COMFORT_INDEX_CACHE_KEY, response)

        logging.info(f"Comfort index calculated for {len(response.cities)} cities")
        return response

    def fetch_all_cities(self) -> List[WeatherObservation]:
        """Fetch every configured city; any failure fails the whole batch."""
        city_codes = self.city_service.get_city_codes()
        logging.info(f"Fetching weather data for {len(city_codes)} cities...")
        results = [self.fetch_city(city_id) for city_id in city_codes]
        logging.info(f"Successfully fetched weather data for {len(results)} cities")
        return results

    def fetch_city(self, city_id: str) -> WeatherObservation:
        """
        Fetch one city, retrying transient errors.

        Raises:
            WeatherProviderError: If all retries fail or the error is a 4xx
        """
        last_error = None
        for attempt in range(self.max_retries):
            try:
                logging.debug(f"Weather fetch for city {city_id}, attempt {attempt + 1}/{self.max_retries}")
                return self.provider.get_current(city_id)
            except WeatherProviderError as e:
                last_error = e
                logging.warning(f"Weather fetch for city {city_id} attempt {attempt + 1} failed: {e}")
                # Don't retry on 4xx errors (bad request, auth, unknown city)
                if e.is_client_error():
                    logging.error("Non-retryable error (4xx), stopping retries")
                    break
                if attempt < self.max_retries - 1:
                    retry_delay = self.retry_delay_seconds * (attempt + 1)
                    logging.info(f"Retrying in {retry_delay}s...")
                    time.sleep(retry_delay)

        logging.error(f"Failed to fetch weather for city {city_id} after {self.max_retries} attempts")
        raise WeatherProviderError(
            f"Failed to fetch weather data for city {city_id}: {last_error}",
            status_code=last_error.status_code if last_error else None,
        )

    def cache_status(self) -> Dict[str, Any]:
        """Describe what the cache currently holds for the rankings."""
        has_cached_data = self.cache.has(COMFORT_INDEX_CACHE_KEY)
        ttl_remaining = self.cache.get_ttl(COMFORT_INDEX_CACHE_KEY)
        stats = self.cache.get_stats()

        cached_city_count = 0
        if has_cached_data:
            cached = self.cache.get(COMFORT_INDEX_CACHE_KEY)
            cached_city_count = len(cached.cities) if cached is not None else 0

        return {
            "status": "HIT" if has_cached_data else "MISS",
            "timestamp": _utc_now_iso(),
            "cached_city_count": cached_city_count,
            "ttl_remaining": ttl_remaining,
            "stats": stats,
        }
