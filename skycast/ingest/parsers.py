"""Parse OpenWeatherMap JSON payloads into weather models."""

from datetime import datetime

from skycast.models.weather import CurrentConditions, ForecastSample

DT_TXT_FORMAT = "%Y-%m-%d %H:%M:%S"


class WeatherParseError(ValueError):
    """Raised when a provider payload is missing required fields."""


def parse_current(raw: dict) -> CurrentConditions:
    """Parse a /weather response."""
    try:
        main = raw["main"]
        weather = _first_weather(raw)
        return CurrentConditions(
            city_name=str(raw["name"]),
            country_code=str(raw.get("sys", {}).get("country", "")),
            temperature=float(main["temp"]),
            wind_speed=float(raw.get("wind", {}).get("speed", 0.0)),
            humidity=int(main.get("humidity", 0)),
            icon_code=str(weather.get("icon", "")),
            condition_label=str(weather.get("main", "")),
            description=str(weather.get("description", "")),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise WeatherParseError(f"Malformed current conditions payload: {e}") from e


def parse_forecast(raw: dict) -> list[ForecastSample]:
    """Parse a /forecast response into samples, in provider order."""
    try:
        entries = raw["list"]
        return [_parse_sample(entry) for entry in entries]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise WeatherParseError(f"Malformed forecast payload: {e}") from e


def _parse_sample(entry: dict) -> ForecastSample:
    main = entry["main"]
    weather = _first_weather(entry)
    return ForecastSample(
        # dt_txt is "2026-10-18 12:00:00"
        timestamp=datetime.strptime(entry["dt_txt"], DT_TXT_FORMAT),
        min_temp=float(main["temp_min"]),
        max_temp=float(main["temp_max"]),
        icon_code=str(weather.get("icon", "")),
        condition_label=str(weather.get("main", "")),
    )


def _first_weather(raw: dict) -> dict:
    weather = raw.get("weather") or [{}]
    return weather[0]
