"""Derived display values and the view model rendered by the widget and CLI."""

from datetime import date
from typing import Protocol

from pydantic import BaseModel

from skycast.config.schema import OPENWEATHER_ICON_URL
from skycast.display.regions import RegionNameResolver, StaticRegionNames
from skycast.forecast.aggregator import round_half_up
from skycast.models.common import UnitSystem, local_today
from skycast.models.state import Error, Idle, Loading, SearchState, Success
from skycast.models.weather import CurrentConditions, DailySummary

IDLE_MESSAGE = "Search any city to see current weather & 5-day forecast."
LOADING_MESSAGE = "Loading…"

WEEKDAYS = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)
MONTHS = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)


class DateFormatter(Protocol):
    def long_date(self, day: date) -> str: ...

    def short_weekday(self, day: date) -> str: ...


class EnglishDateFormatter:
    """Locale-independent English date labels."""

    def long_date(self, day: date) -> str:
        weekday = WEEKDAYS[day.weekday()]
        return f"{weekday}, {MONTHS[day.month - 1]} {day.day}, {day.year}"

    def short_weekday(self, day: date) -> str:
        return WEEKDAYS[day.weekday()][:3]


def unit_symbol(units: UnitSystem) -> str:
    return "°C" if units == UnitSystem.METRIC else "°F"


def wind_unit(units: UnitSystem) -> str:
    return "m/s" if units == UnitSystem.METRIC else "mph"


def icon_url(code: str, large: bool = False, base_url: str = OPENWEATHER_ICON_URL) -> str:
    suffix = "@2x" if large else ""
    return f"{base_url.rstrip('/')}/{code}{suffix}.png"


def city_title(current: CurrentConditions, regions: RegionNameResolver) -> str:
    return f"{current.city_name}, {regions.region_name(current.country_code)}"


class CurrentView(BaseModel):
    title: str
    date_label: str
    icon_url: str
    icon_alt: str
    temperature: int
    temperature_text: str
    description: str
    wind_speed_text: str
    humidity_text: str


class ForecastCardView(BaseModel):
    date: str
    day: str
    icon_url: str
    label: str
    min_temp: int
    max_temp: int
    min_max_text: str


class ViewModel(BaseModel):
    status: str
    units: UnitSystem
    unit_symbol: str
    wind_unit: str
    query: str = ""
    message: str = ""
    current: CurrentView | None = None
    forecast: list[ForecastCardView] = []


class ViewRenderer:
    """Turns a SearchState into a ViewModel.

    Region names and date labels go through injectable collaborators so the
    output does not depend on host locale data.
    """

    def __init__(
        self,
        icon_base_url: str = OPENWEATHER_ICON_URL,
        regions: RegionNameResolver | None = None,
        dates: DateFormatter | None = None,
        clock=local_today,
    ):
        self.icon_base_url = icon_base_url
        self.regions = regions or StaticRegionNames()
        self.dates = dates or EnglishDateFormatter()
        self.clock = clock

    def render(self, state: SearchState) -> ViewModel:
        units = state.unit_system
        view = ViewModel(
            status="idle",
            units=units,
            unit_symbol=unit_symbol(units),
            wind_unit=wind_unit(units),
            query=state.query_text,
        )
        match state.status:
            case Idle():
                view.message = IDLE_MESSAGE
            case Loading():
                view.status = "loading"
                view.message = LOADING_MESSAGE
            case Error(message=message):
                view.status = "error"
                view.message = message
            case Success(current=current, daily=daily):
                view.status = "success"
                view.current = self._current(current, units)
                view.forecast = [self._card(d) for d in daily]
        return view

    def _current(self, current: CurrentConditions, units: UnitSystem) -> CurrentView:
        temperature = round_half_up(current.temperature)
        return CurrentView(
            title=city_title(current, self.regions),
            date_label=self.dates.long_date(self.clock()),
            icon_url=icon_url(current.icon_code, large=True, base_url=self.icon_base_url),
            icon_alt=current.description or "weather",
            temperature=temperature,
            temperature_text=f"{temperature}{unit_symbol(units)}",
            description=current.description,
            wind_speed_text=f"{current.wind_speed:.2f} {wind_unit(units)}",
            humidity_text=f"{current.humidity}%",
        )

    def _card(self, day: DailySummary) -> ForecastCardView:
        return ForecastCardView(
            date=day.date.isoformat(),
            day=self.dates.short_weekday(day.date),
            icon_url=icon_url(day.icon_code, base_url=self.icon_base_url),
            label=day.condition_label,
            min_temp=day.min_temp,
            max_temp=day.max_temp,
            min_max_text=f"{day.min_temp}° / {day.max_temp}°",
        )


def render_text(view: ViewModel) -> str:
    """Plain-text rendering used by the CLI."""
    if view.current is None:
        return view.message
    c = view.current
    lines = [
        c.title,
        c.date_label,
        f"{c.temperature_text}  {c.description}".rstrip(),
        f"Wind speed: {c.wind_speed_text}",
        f"Humidity: {c.humidity_text}",
        "",
        "5-Day Forecast:",
    ]
    for card in view.forecast:
        lines.append(f"  {card.day}  {card.min_max_text}  {card.label}")
    return "\n".join(lines)
