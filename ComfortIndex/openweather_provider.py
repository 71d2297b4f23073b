"""OpenWeather Current Weather API provider implementation."""
import logging
import math
import requests
from typing import Dict, Optional
from weather_provider import WeatherProviderBase, WeatherProviderError
from weather_data import WeatherObservation


def _round_one_decimal(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using OpenWeather Current Weather API, looked up by city id.

    Uses the free Current Weather API: https://openweathermap.org/current
    """

    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(
        self,
        api_key: str,
        units: str = "metric",
        lang: str = "en",
        timeout: int = 10,
        city_names: Optional[Dict[str, str]] = None
    ):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            units: Temperature units; scoring expects "metric" (°C, m/s)
            lang: Language code for descriptions (e.g., "en", "de")
            timeout: HTTP request timeout in seconds
            city_names: Fallback display names by city id, used when the
                response carries no name
        """
        self.api_key = api_key
        self.units = units
        self.lang = lang
        self.timeout = timeout
        self.city_names = city_names or {}

    def get_current(self, city_id: str) -> WeatherObservation:
        """
        Fetch current weather for one city from OpenWeather.

        Returns:
            WeatherObservation: Current weather information

        Raises:
            WeatherProviderError: If the API request fails
        """
        params = {
            "id": city_id,
            "appid": self.api_key,
            "units": self.units,
            "lang": self.lang,
        }

        try:
            logging.debug(f"Making OpenWeather API request for city {city_id}: {self.BASE_URL}")

            response = requests.get(self.BASE_URL, params=params, timeout=self.timeout)

            logging.debug(f"API response status for city {city_id}: {response.status_code}")

            if not response.ok:
                logging.error(f"API request for city {city_id} failed with status {response.status_code}")
                self._handle_error_response(response, city_id)

            data = response.json()
            logging.debug(f"API response (truncated): {str(data)[:500]}...")
            if not isinstance(data, dict):
                raise TypeError(f"expected JSON object, got {type(data).__name__}")

            main_data = data.get("main", {})
            if not main_data:
                raise WeatherProviderError(f"Response for city {city_id} missing 'main' block")

            weather_array = data.get("weather") or [{}]
            wind_data = data.get("wind") or {}
            clouds_data = data.get("clouds") or {}
            weather = weather_array[0]

            temperature = float(main_data["temp"])
            humidity = float(main_data["humidity"])
            wind_speed = float(wind_data.get("speed", 0.0))
            for name, value in (("temp", temperature), ("humidity", humidity), ("wind speed", wind_speed)):
                if not math.isfinite(value):
                    raise ValueError(f"non-finite {name}: {value}")

            observation = WeatherObservation(
                city_id=str(city_id),
                city_name=data.get("name") or self.city_names.get(str(city_id), "Unknown"),
                temperature=_round_one_decimal(temperature),
                humidity=humidity,
                wind_speed=_round_one_decimal(wind_speed),
                description=weather.get("description") or "Unknown",
                cloudiness=float(clouds_data.get("all") or 0),
                pressure=float(main_data.get("pressure") or 0),
            )

            logging.debug(
                f"Parsed weather for {observation.city_name}: {observation.temperature}°C, "
                f"{observation.humidity}%, {observation.wind_speed}m/s"
            )
            return observation

        except requests.exceptions.RequestException as e:
            logging.error(f"Network error fetching weather for city {city_id}: {e}")
            raise WeatherProviderError(f"Network error: {str(e)}")
        except (KeyError, ValueError, TypeError, AttributeError, IndexError) as e:
            logging.error(f"Failed to parse API response for city {city_id}: {e}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse response: {str(e)}")

    def _handle_error_response(self, response: requests.Response, city_id: str) -> None:
        """Parse and raise error from OpenWeather error response."""
        if response.status_code == 401:
            raise WeatherProviderError("Invalid OpenWeatherMap API key (401)", status_code=401)
        if response.status_code == 404:
            raise WeatherProviderError(f"City with ID {city_id} not found (404)", status_code=404)

        try:
            error_data = response.json()
            if not isinstance(error_data, dict):
                raise ValueError("error body is not a JSON object")
        except ValueError:
            # Not JSON, use HTTP status
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
            raise WeatherProviderError(
                f"HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        cod = error_data.get("cod", response.status_code)
        message = error_data.get("message", "Unknown error")
        logging.error(f"OpenWeather API error response: {error_data}")
        raise WeatherProviderError(
            f"OpenWeather API error {cod}: {message}", status_code=response.status_code
        )
