"""Tests for the daily forecast aggregator."""

from datetime import date, datetime

from skycast.forecast.aggregator import (
    MAX_DAYS,
    build_daily,
    representative_sample,
    round_half_up,
)
from skycast.models.weather import ForecastSample


def _sample(
    ts: str,
    min_temp: float = 10.0,
    max_temp: float = 15.0,
    icon: str = "01d",
    label: str = "Clear",
) -> ForecastSample:
    return ForecastSample(
        timestamp=datetime.strptime(ts, "%Y-%m-%d %H:%M"),
        min_temp=min_temp,
        max_temp=max_temp,
        icon_code=icon,
        condition_label=label,
    )


class TestBuildDaily:
    def test_empty_input(self):
        assert build_daily([]) == []

    def test_single_day_min_max_rounded(self):
        samples = [
            _sample("2026-10-18 09:00", min_temp=10.4, max_temp=14.2),
            _sample("2026-10-18 12:00", min_temp=9.6, max_temp=16.7),
            _sample("2026-10-18 15:00", min_temp=11.0, max_temp=15.1),
        ]
        days = build_daily(samples)
        assert len(days) == 1
        assert days[0].date == date(2026, 10, 18)
        assert days[0].min_temp == 10
        assert days[0].max_temp == 17

    def test_noon_sample_is_representative(self):
        samples = [
            _sample("2026-10-18 09:00", icon="10d", label="Rain"),
            _sample("2026-10-18 12:00", icon="01d", label="Clear"),
            _sample("2026-10-18 15:00", icon="04d", label="Clouds"),
        ]
        day = build_daily(samples)[0]
        assert day.icon_code == "01d"
        assert day.condition_label == "Clear"

    def test_tie_goes_to_first_listed(self):
        samples = [
            _sample("2026-10-18 10:00", icon="10d", label="Rain"),
            _sample("2026-10-18 14:00", icon="01d", label="Clear"),
        ]
        day = build_daily(samples)[0]
        assert day.icon_code == "10d"
        assert day.condition_label == "Rain"

    def test_groups_by_date_and_sorts(self):
        samples = [
            _sample("2026-10-20 12:00", icon="c"),
            _sample("2026-10-18 12:00", icon="a"),
            _sample("2026-10-19 12:00", icon="b"),
            _sample("2026-10-18 21:00", icon="z"),
        ]
        days = build_daily(samples)
        assert [d.date for d in days] == [
            date(2026, 10, 18),
            date(2026, 10, 19),
            date(2026, 10, 20),
        ]
        assert [d.icon_code for d in days] == ["a", "b", "c"]

    def test_truncated_to_five_days(self):
        samples = [_sample(f"2026-10-{day:02d} 12:00") for day in range(18, 25)]
        days = build_daily(samples)
        assert len(days) == MAX_DAYS
        assert days[-1].date == date(2026, 10, 22)

    def test_dates_strictly_increasing(self, paris_samples):
        days = build_daily(paris_samples)
        assert len(days) <= MAX_DAYS
        dates = [d.date for d in days]
        assert all(a < b for a, b in zip(dates, dates[1:]))

    def test_provider_feed(self, paris_samples):
        days = build_daily(paris_samples)
        assert len(days) == 5
        assert days[0].date == date(2026, 10, 18)
        # Partial first day has only 15:00, 18:00 and 21:00 samples
        assert (days[0].min_temp, days[0].max_temp) == (8, 10)
        assert days[0].icon_code == "10d"
        assert (days[1].min_temp, days[1].max_temp) == (8, 13)
        assert days[1].icon_code == "01d"
        assert days[1].condition_label == "Clear"

    def test_negative_temperatures(self):
        samples = [
            _sample("2026-01-05 06:00", min_temp=-7.6, max_temp=-3.2),
            _sample("2026-01-05 12:00", min_temp=-5.0, max_temp=-2.5),
        ]
        day = build_daily(samples)[0]
        assert day.min_temp == -8
        assert day.max_temp == -2


class TestRoundHalfUp:
    def test_halves_round_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(-2.5) == -2

    def test_nearest(self):
        assert round_half_up(9.6) == 10
        assert round_half_up(10.4) == 10
        assert round_half_up(-0.4) == 0


class TestRepresentativeSample:
    def test_single_sample(self):
        only = _sample("2026-10-18 21:00")
        assert representative_sample([only]) is only

    def test_midnight_vs_evening(self):
        early = _sample("2026-10-18 00:00", icon="early")
        late = _sample("2026-10-18 21:00", icon="late")
        assert representative_sample([early, late]).icon_code == "late"
