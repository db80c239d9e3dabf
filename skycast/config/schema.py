"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from skycast.models.common import UnitSystem

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
OPENWEATHER_ICON_URL = "https://openweathermap.org/img/wn"


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api_key: str = ""
    base_url: str = OPENWEATHER_BASE_URL
    icon_base_url: str = OPENWEATHER_ICON_URL
    timeout_seconds: float = Field(default=10.0, gt=0.0)


class DisplayConfig(BaseModel):
    model_config = {"extra": "forbid"}

    default_units: UnitSystem = UnitSystem.METRIC


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api: ApiConfig = ApiConfig()
    display: DisplayConfig = DisplayConfig()
    server: ServerConfig = ServerConfig()

    @property
    def has_api_key(self) -> bool:
        return bool(self.api.api_key.strip())
