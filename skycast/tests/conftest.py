"""Shared test fixtures."""

import json
from datetime import date
from pathlib import Path

import pytest
import yaml

from skycast.config.schema import AppConfig, ApiConfig
from skycast.ingest.parsers import parse_current, parse_forecast
from skycast.models.weather import CurrentConditions, ForecastSample
from skycast.tests.fakes import FakeWeatherSource

FIXTURE_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict:
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURE_DIR


@pytest.fixture
def current_payload() -> dict:
    return load_fixture("current_paris.json")


@pytest.fixture
def forecast_payload() -> dict:
    return load_fixture("forecast_paris.json")


@pytest.fixture
def paris_current(current_payload: dict) -> CurrentConditions:
    return parse_current(current_payload)


@pytest.fixture
def paris_samples(forecast_payload: dict) -> list[ForecastSample]:
    return parse_forecast(forecast_payload)


@pytest.fixture
def fake_source(
    paris_current: CurrentConditions, paris_samples: list[ForecastSample]
) -> FakeWeatherSource:
    return FakeWeatherSource(current=paris_current, samples=paris_samples)


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(api=ApiConfig(api_key="test-key"))


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "api": {"timeout_seconds": 5.0},
        "display": {"default_units": "imperial"},
    }
    path = tmp_path / "skycast.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixed_day() -> date:
    return date(2026, 10, 18)
