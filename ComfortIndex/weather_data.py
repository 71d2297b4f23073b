"""Comfort index domain model - pure data structures independent of any API."""
from dataclasses import dataclass, field, asdict
from typing import List


@dataclass(frozen=True)
class WeatherObservation:
    """Current weather for one city, independent of any specific API."""
    city_id: str
    city_name: str
    temperature: float  # °C
    humidity: float  # relative humidity, %
    wind_speed: float  # m/s
    description: str  # e.g., "broken clouds", "light rain"
    cloudiness: float = 0.0  # percentage
    pressure: float = 0.0  # hPa


@dataclass(frozen=True)
class ComfortBreakdown:
    """Per-factor sub-scores and the combined comfort score (all 0-100)."""
    temperature_score: int
    humidity_score: int
    wind_speed_score: int
    final_score: int


@dataclass
class RankedCity:
    """A city's display fields plus its position in a scored batch."""
    rank: int
    city: str
    temperature: float
    humidity: float
    wind_speed: float
    description: str
    comfort_score: int


@dataclass
class ComfortIndexResponse:
    """Ranked list of cities, as cached and displayed."""
    generated_at: str  # ISO-8601, UTC
    cities: List[RankedCity] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)
