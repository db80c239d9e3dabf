"""Forecast aggregator: collapses 3-hour forecast samples into daily summaries."""

import math
from collections.abc import Iterable
from datetime import date

from skycast.models.weather import DailySummary, ForecastSample

MAX_DAYS = 5
REPRESENTATIVE_HOUR = 12


def build_daily(samples: Iterable[ForecastSample]) -> list[DailySummary]:
    """Build at most MAX_DAYS daily summaries, ordered by date.

    Samples are grouped by the calendar date of their timestamp. Each day's
    icon and condition come from the sample closest to noon.
    """
    groups: dict[date, list[ForecastSample]] = {}
    for sample in samples:
        groups.setdefault(sample.timestamp.date(), []).append(sample)

    days = [
        _summarize(day, items)
        for day, items in sorted(groups.items(), key=lambda kv: kv[0])
    ]
    return days[:MAX_DAYS]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def _summarize(day: date, items: list[ForecastSample]) -> DailySummary:
    best = representative_sample(items)
    return DailySummary(
        date=day,
        min_temp=round_half_up(min(i.min_temp for i in items)),
        max_temp=round_half_up(max(i.max_temp for i in items)),
        icon_code=best.icon_code,
        condition_label=best.condition_label,
    )


def representative_sample(items: list[ForecastSample]) -> ForecastSample:
    """Return the sample closest to noon; the first one wins a tie."""
    best = items[0]
    for item in items[1:]:
        if _distance_from_noon(item) < _distance_from_noon(best):
            best = item
    return best


def _distance_from_noon(sample: ForecastSample) -> int:
    return abs(sample.timestamp.hour - REPRESENTATIVE_HOUR)
