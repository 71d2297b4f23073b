"""Comfort index scoring - pure functions over a weather observation.

Final Score = (Temperature Score x 0.45) + (Humidity Score x 0.30) + (Wind Score x 0.25)

Each factor is a linear deviation-from-optimum penalty floored at 0:

    Temperature: optimum 22°C, 10 points per °C
    Humidity:    optimum 50%,  2.5 points per percentage point
    Wind speed:  optimum 3 m/s, 20 points per m/s

Inputs must be finite; the scorer does not validate them.
"""
import math

from weather_data import ComfortBreakdown, WeatherObservation

# Weights (must sum to 1.0)
TEMP_WEIGHT = 0.45
HUMIDITY_WEIGHT = 0.30
WIND_WEIGHT = 0.25

OPTIMAL_TEMP = 22  # °C
OPTIMAL_HUMIDITY = 50  # %
OPTIMAL_WIND = 3  # m/s

TEMP_PENALTY = 10
HUMIDITY_PENALTY = 2.5
WIND_PENALTY = 20

# (lower bound, explanation), highest bound first
SCORE_BANDS = (
    (80, "Excellent comfort conditions"),
    (60, "Good comfort, minor issues"),
    (40, "Moderate comfort, noticeable issues"),
    (20, "Poor comfort conditions"),
)
LOWEST_BAND = "Very uncomfortable conditions"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def calculate_temperature_score(temp: float) -> float:
    deviation = abs(temp - OPTIMAL_TEMP)
    return max(0, 100 - deviation * TEMP_PENALTY)


def calculate_humidity_score(humidity: float) -> float:
    deviation = abs(humidity - OPTIMAL_HUMIDITY)
    return max(0, 100 - deviation * HUMIDITY_PENALTY)


def calculate_wind_speed_score(wind_speed: float) -> float:
    deviation = abs(wind_speed - OPTIMAL_WIND)
    return max(0, 100 - deviation * WIND_PENALTY)


class ComfortScorer:
    """
    Scores weather observations on a 0-100 comfort scale.

    Stateless; one instance is created at startup and shared by whoever
    builds the rankings.
    """

    def score(self, observation: WeatherObservation) -> ComfortBreakdown:
        """
        Calculate the comfort index with its per-factor breakdown.

        Args:
            observation: Weather for a single city

        Returns:
            ComfortBreakdown: Rounded sub-scores and the clamped final score
        """
        temp_score = calculate_temperature_score(observation.temperature)
        humidity_score = calculate_humidity_score(observation.humidity)
        wind_score = calculate_wind_speed_score(observation.wind_speed)

        final_score = (
            temp_score * TEMP_WEIGHT +
            humidity_score * HUMIDITY_WEIGHT +
            wind_score * WIND_WEIGHT
        )

        # Clamp after rounding so future weight changes cannot escape 0-100
        clamped_score = max(0, min(100, round_half_up(final_score)))

        return ComfortBreakdown(
            temperature_score=round_half_up(temp_score),
            humidity_score=round_half_up(humidity_score),
            wind_speed_score=round_half_up(wind_score),
            final_score=clamped_score,
        )

    def calculate_comfort_index(self, observation: WeatherObservation) -> int:
        """Calculate the final comfort score only."""
        return self.score(observation).final_score

    @staticmethod
    def get_score_explanation(score: float) -> str:
        """Get a short human-readable explanation for a comfort score."""
        for lower_bound, explanation in SCORE_BANDS:
            if score >= lower_bound:
                return explanation
        return LOWEST_BAND
