"""Tests for city_service module."""
import json
import logging
import os
import pytest
from city_service import (
    BASE_DIR,
    CityDataError,
    CityService,
    DEFAULT_CITIES_FILE,
    resolve_default_cities_file,
)


def write_cities(tmp_path, cities):
    path = tmp_path / "cities.json"
    path.write_text(json.dumps({"List": cities}))
    return str(path)


def test_default_cities_file_loads():
    """The bundled cities.json has at least ten cities."""
    service = CityService()

    assert service.cities_file == DEFAULT_CITIES_FILE
    assert service.get_city_count() >= 10
    assert len(set(service.get_city_codes())) == service.get_city_count()


def test_city_lookups(tmp_path):
    path = write_cities(tmp_path, [
        {"CityCode": "1248991", "CityName": "Colombo"},
        {"CityCode": 1850147, "CityName": "Tokyo"},
    ])
    service = CityService(path)

    assert service.get_city_codes() == ["1248991", "1850147"]
    assert service.get_city_name("1850147") == "Tokyo"
    assert service.get_city_name("0") == "Unknown"
    assert service.get_cities()[0] == {"CityCode": "1248991", "CityName": "Colombo"}


def test_warns_when_fewer_than_ten_cities(tmp_path, caplog):
    path = write_cities(tmp_path, [{"CityCode": "1", "CityName": "Solo"}])

    with caplog.at_level(logging.WARNING):
        CityService(path)

    assert "Only 1 cities loaded" in caplog.text


def test_missing_file_raises(tmp_path):
    with pytest.raises(CityDataError):
        CityService(str(tmp_path / "nope.json"))


def test_malformed_file_raises(tmp_path):
    path = tmp_path / "cities.json"
    path.write_text("{not json")

    with pytest.raises(CityDataError):
        CityService(str(path))


def test_entry_missing_fields_raises(tmp_path):
    path = write_cities(tmp_path, [{"CityCode": "1"}])

    with pytest.raises(CityDataError):
        CityService(path)


def test_default_cities_file_found_beside_modules(tmp_path):
    (tmp_path / "cities.json").write_text("{}")

    assert resolve_default_cities_file(str(tmp_path), prefixes=["/nonexistent"]) == \
        str(tmp_path / "cities.json")


def test_default_cities_file_from_installed_share_dir(tmp_path):
    """An installed copy lives under <prefix>/share/comfort-index, not beside the modules."""
    site_packages = tmp_path / "lib" / "site-packages"
    site_packages.mkdir(parents=True)
    user_base = tmp_path / "user"
    share = user_base / "share" / "comfort-index"
    share.mkdir(parents=True)
    installed = write_cities(share, [
        {"CityCode": str(code), "CityName": f"City {code}"} for code in range(10)
    ])

    path = resolve_default_cities_file(str(site_packages), prefixes=[str(tmp_path / "venv"), str(user_base)])

    assert path == installed
    assert CityService(path).get_city_count() == 10


def test_default_cities_file_missing_everywhere(tmp_path):
    path = resolve_default_cities_file(str(tmp_path), prefixes=[str(tmp_path / "venv")])

    assert path == str(tmp_path / "venv" / "share" / "comfort-index" / "cities.json")
    with pytest.raises(CityDataError):
        CityService(path)


def test_pyproject_ships_cities_json():
    pyproject = os.path.join(os.path.dirname(BASE_DIR), "pyproject.toml")
    with open(pyproject, encoding="utf-8") as fh:
        text = fh.read()

    section = text.split("[tool.setuptools.data-files]", 1)[1].split("\n[", 1)[0]
    assert '"share/comfort-index" = ["ComfortIndex/cities.json"]' in section
