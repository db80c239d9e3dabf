"""Common types and helpers shared across models."""

from datetime import date
from enum import StrEnum


class UnitSystem(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"

    def toggled(self) -> "UnitSystem":
        if self is UnitSystem.METRIC:
            return UnitSystem.IMPERIAL
        return UnitSystem.METRIC


def local_today() -> date:
    """The host's local calendar date, as shown on the current-conditions panel."""
    return date.today()
