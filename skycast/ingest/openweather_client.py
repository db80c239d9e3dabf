"""OpenWeatherMap API client for current conditions and 5-day/3-hour forecasts."""

import logging

import httpx

from skycast.config.schema import OPENWEATHER_BASE_URL
from skycast.ingest.parsers import WeatherParseError, parse_current, parse_forecast
from skycast.models.common import UnitSystem
from skycast.models.weather import CurrentConditions, ForecastSample

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "skycast/0.1.0"


class WeatherLookupError(Exception):
    """Any failure looking a city up: transport, HTTP status or payload."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class OpenWeatherClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_BASE_URL,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport

    async def get_current(self, city: str, units: UnitSystem) -> CurrentConditions:
        raw = await self._get_json("weather", city, units)
        return _parsed(parse_current, raw, city)

    async def get_forecast(self, city: str, units: UnitSystem) -> list[ForecastSample]:
        raw = await self._get_json("forecast", city, units)
        return _parsed(parse_forecast, raw, city)

    async def _get_json(self, endpoint: str, city: str, units: UnitSystem) -> dict:
        url = f"{self.base_url}/{endpoint}"
        params = {"q": city, "units": units.value, "appid": self.api_key}
        headers = {"User-Agent": self.user_agent}
        logger.debug("GET %s q=%s units=%s", url, city, units.value)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.get(url, params=params, headers=headers)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "OpenWeather %s returned %d for city=%s",
                endpoint, e.response.status_code, city,
            )
            raise WeatherLookupError(
                f"{endpoint} lookup failed for {city!r}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.error("OpenWeather request failed for city=%s: %s", city, e)
            raise WeatherLookupError(f"{endpoint} request failed for {city!r}") from e
        except ValueError as e:
            raise WeatherLookupError(f"{endpoint} returned invalid JSON") from e


def _parsed(parse, raw, city: str):
    try:
        return parse(raw)
    except WeatherParseError as e:
        logger.error("Unparseable OpenWeather payload for city=%s: %s", city, e)
        raise WeatherLookupError(str(e)) from e
