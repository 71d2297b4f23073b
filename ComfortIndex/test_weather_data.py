"""Tests for weather_data module."""
import dataclasses
import pytest
from weather_data import ComfortIndexResponse, RankedCity, WeatherObservation


def test_weather_observation_creation():
    """Test creating WeatherObservation with required fields."""
    weather = WeatherObservation(
        city_id="2988507",
        city_name="Paris",
        temperature=20.5,
        humidity=65.0,
        wind_speed=5.2,
        description="broken clouds",
    )

    assert weather.city_id == "2988507"
    assert weather.city_name == "Paris"
    assert weather.temperature == 20.5
    assert weather.humidity == 65.0
    assert weather.wind_speed == 5.2
    assert weather.description == "broken clouds"
    assert weather.cloudiness == 0.0
    assert weather.pressure == 0.0


def test_weather_observation_is_immutable():
    weather = WeatherObservation("1", "Test", 20.0, 50.0, 3.0, "clear sky", 0.0, 1013.0)

    with pytest.raises(dataclasses.FrozenInstanceError):
        weather.temperature = 30.0


def test_response_to_dict():
    response = ComfortIndexResponse(
        generated_at="2024-05-24T12:00:00Z",
        cities=[RankedCity(1, "Paris", 21.5, 55.0, 3.2, "clear sky", 93)],
    )

    assert response.to_dict() == {
        "generated_at": "2024-05-24T12:00:00Z",
        "cities": [{
            "rank": 1,
            "city": "Paris",
            "temperature": 21.5,
            "humidity": 55.0,
            "wind_speed": 3.2,
            "description": "clear sky",
            "comfort_score": 93,
        }],
    }
