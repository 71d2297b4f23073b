"""Tests for CLI wiring in main."""
import os
import pytest
from unittest.mock import patch
import main
from ranking_service import RankingService
from result_cache import DEFAULT_TTL_SECONDS
from weather_data import WeatherObservation


def test_parse_args_defaults():
    args = main.parse_args([])

    assert args.cache_ttl == DEFAULT_TTL_SECONDS
    assert args.units == "metric"
    assert args.once is False


def test_load_config_requires_api_key(monkeypatch):
    monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)

    with patch("main.load_dotenv"):
        with pytest.raises(SystemExit) as exc_info:
            main.load_config(None)

    assert "OPENWEATHER_API_KEY" in str(exc_info.value)


def test_load_config_reads_environment(monkeypatch):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "abc")
    monkeypatch.setenv("WEATHER_LANG", "de")
    monkeypatch.setenv("CITIES_FILE", "/tmp/cities.json")

    with patch("main.load_dotenv"):
        api_key, lang, cities_file = main.load_config(None)

    assert (api_key, lang, cities_file) == ("abc", "de", "/tmp/cities.json")


def test_build_ranking_service_uses_bundled_cities():
    args = main.parse_args(["--cache-ttl", "120", "--max-retries", "5"])

    service = main.build_ranking_service("key", "en", None, args)

    assert isinstance(service, RankingService)
    assert service.cache.ttl_seconds == 120
    assert service.max_retries == 5
    assert service.provider.city_names["2988507"] == "Paris"


def test_build_ranking_service_bad_cities_file(tmp_path):
    args = main.parse_args([])

    with pytest.raises(SystemExit):
        main.build_ranking_service("key", "en", str(tmp_path / "missing.json"), args)


def test_main_once_prints_table(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "abc")

    def fake_get_current(self, city_id):
        return WeatherObservation(city_id, self.city_names[city_id], 22.0, 50.0, 3.0, "clear sky")

    with patch("main.load_dotenv"), \
            patch("openweather_provider.OpenWeatherProvider.get_current", fake_get_current):
        exit_code = main.main([
            "--once",
            "--cache-status",
            "--log-file", str(tmp_path / "test.log"),
        ])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Most comfortable: Colombo (100) - Excellent comfort conditions" in out
    assert "Cache: HIT" in out


def test_default_log_file_is_relative_to_working_directory():
    args = main.parse_args([])

    assert args.log_file == "comfort-index.log"
    assert not os.path.isabs(args.log_file)
