"""OpenWeatherMap data models."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class ForecastSample:
    timestamp: datetime  # provider-local, naive
    min_temp: float
    max_temp: float
    icon_code: str
    condition_label: str


@dataclass(frozen=True)
class DailySummary:
    date: date
    min_temp: int
    max_temp: int
    icon_code: str
    condition_label: str


@dataclass(frozen=True)
class CurrentConditions:
    city_name: str
    country_code: str
    temperature: float
    wind_speed: float
    humidity: int
    icon_code: str
    condition_label: str
    description: str = ""
