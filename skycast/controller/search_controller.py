"""Search/view controller: drives lookups and owns the widget's search state."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import replace
from typing import Protocol

from skycast.forecast.aggregator import build_daily
from skycast.ingest.openweather_client import WeatherLookupError
from skycast.models.common import UnitSystem
from skycast.models.state import Error, Loading, SearchState, Success
from skycast.models.weather import CurrentConditions, ForecastSample

logger = logging.getLogger(__name__)

MISSING_API_KEY_MESSAGE = "Missing API key configuration."
CITY_NOT_FOUND_MESSAGE = "City not found. Try another name."

StateListener = Callable[[SearchState], None]


class WeatherSource(Protocol):
    async def get_current(self, city: str, units: UnitSystem) -> CurrentConditions: ...

    async def get_forecast(self, city: str, units: UnitSystem) -> list[ForecastSample]: ...


class SearchController:
    """Handles submit and unit-toggle actions.

    Every fetch issues the current-conditions and forecast requests together
    and leaves the Loading state only once both have settled. Each fetch is
    tagged with a request token; a result that arrives after a newer fetch
    has started is dropped.
    """

    def __init__(
        self,
        client: WeatherSource,
        api_key: str,
        units: UnitSystem = UnitSystem.METRIC,
    ):
        self.client = client
        self.api_key = api_key
        self._state = SearchState(unit_system=units)
        self._listeners: list[StateListener] = []
        self._latest_token = 0

    @property
    def state(self) -> SearchState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener for state changes. Returns an unsubscribe callable."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def set_query(self, text: str) -> None:
        self._set_state(replace(self._state, query_text=text))

    async def submit(self, query: str | None = None) -> SearchState:
        """Look up a city. Blank queries are ignored."""
        text = self._state.query_text if query is None else query
        city = text.strip()
        if not city:
            return self._state
        return await self._fetch(city, self._state.unit_system)

    async def toggle_units(self) -> SearchState:
        """Flip metric/imperial and refetch under the new units.

        A lookup still in flight is restarted for its city; otherwise the last
        successful city, if any, is refetched.
        """
        pending = self._state.status
        units = self._state.unit_system.toggled()
        self._set_state(replace(self._state, unit_system=units))
        logger.info("Units switched to %s", units.value)

        if isinstance(pending, Loading):
            city = pending.city
        else:
            city = self._state.last_searched_city
        if not city:
            return self._state
        return await self._fetch(city, units)

    async def _fetch(self, city: str, units: UnitSystem) -> SearchState:
        if not self.api_key.strip():
            logger.warning("Lookup for %s skipped: no API key configured", city)
            self._set_state(
                replace(self._state, status=Error(MISSING_API_KEY_MESSAGE))
            )
            return self._state

        self._latest_token += 1
        token = self._latest_token
        self._set_state(replace(self._state, status=Loading(city=city, units=units)))

        try:
            current, samples = await self._fetch_pair(city, units)
        except WeatherLookupError as e:
            if self._is_stale(token, city):
                return self._state
            logger.warning("Lookup failed for %s (%s): %s", city, units.value, e)
            self._set_state(
                replace(self._state, status=Error(CITY_NOT_FOUND_MESSAGE))
            )
            return self._state

        if self._is_stale(token, city):
            return self._state

        daily = build_daily(samples)
        logger.info(
            "Loaded %s, %s (%s): %d forecast days",
            current.city_name, current.country_code, units.value, len(daily),
        )
        self._set_state(
            replace(
                self._state,
                last_searched_city=city,
                status=Success(current=current, daily=daily),
            )
        )
        return self._state

    async def _fetch_pair(
        self, city: str, units: UnitSystem
    ) -> tuple[CurrentConditions, list[ForecastSample]]:
        """Run both requests; a failure in one cancels the other."""
        tasks = (
            asyncio.ensure_future(self.client.get_current(city, units)),
            asyncio.ensure_future(self.client.get_forecast(city, units)),
        )
        try:
            current, samples = await asyncio.gather(*tasks)
        except Exception:
            for task in tasks:
                task.cancel()
            raise
        return current, samples

    def _is_stale(self, token: int, city: str) -> bool:
        if token == self._latest_token:
            return False
        logger.info(
            "Discarding stale response for %s (request %d, latest %d)",
            city, token, self._latest_token,
        )
        return True

    def _set_state(self, state: SearchState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
