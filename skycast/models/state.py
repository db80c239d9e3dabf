"""Search state for the lookup widget.

Display status is a tagged union so that impossible combinations (loading with
an error, data alongside an error) cannot be represented.
"""

from dataclasses import dataclass, field
from typing import TypeAlias

from skycast.models.common import UnitSystem
from skycast.models.weather import CurrentConditions, DailySummary


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    city: str
    units: UnitSystem


@dataclass(frozen=True)
class Success:
    current: CurrentConditions
    daily: list[DailySummary] = field(default_factory=list)


@dataclass(frozen=True)
class Error:
    message: str


Status: TypeAlias = Idle | Loading | Success | Error


@dataclass(frozen=True)
class SearchState:
    query_text: str = ""
    unit_system: UnitSystem = UnitSystem.METRIC
    last_searched_city: str = ""
    status: Status = Idle()

    @property
    def is_loading(self) -> bool:
        return isinstance(self.status, Loading)

    @property
    def error_message(self) -> str:
        if isinstance(self.status, Error):
            return self.status.message
        return ""

    @property
    def current(self) -> CurrentConditions | None:
        if isinstance(self.status, Success):
            return self.status.current
        return None

    @property
    def daily(self) -> list[DailySummary]:
        if isinstance(self.status, Success):
            return self.status.daily
        return []
