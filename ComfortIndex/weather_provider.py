"""Weather provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from typing import Optional
from weather_data import WeatherObservation


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self, city_id: str) -> WeatherObservation:
        """
        Fetch current weather for a single city.

        Args:
            city_id: Provider-specific city identifier

        Returns:
            WeatherObservation: Current weather information

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code  # HTTP status, when the API answered

    def is_client_error(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500
