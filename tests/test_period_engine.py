"""Tests for PeriodCalculator - pure logic, no HA fixtures needed.

These tests validate calendar-aligned interval arithmetic: boundaries,
labels, shifting with month clamping, day counts and the zero-length
fallback for unrepresentable dates.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from custom_components.babycare import const
from custom_components.babycare.engines.period_engine import PeriodCalculator

UTC_ZONE = ZoneInfo("UTC")


@pytest.fixture
def calc() -> PeriodCalculator:
    """Return a calculator pinned to UTC."""
    return PeriodCalculator(UTC_ZONE)


def _utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=UTC_ZONE)


# =============================================================================
# TEST: INTERVAL BOUNDARIES
# =============================================================================


class TestDateRange:
    """Test [start, end) boundaries per granularity."""

    def test_daily_range_is_local_midnight_to_midnight(
        self, calc: PeriodCalculator
    ) -> None:
        """Daily interval covers exactly one calendar day."""
        start, end = calc.date_range(const.PERIOD_DAILY, _utc(2026, 1, 2, 12, 30))
        assert start == _utc(2026, 1, 2)
        assert end == _utc(2026, 1, 3)

    def test_weekly_range_starts_monday(self, calc: PeriodCalculator) -> None:
        """A Wednesday anchor belongs to the week starting on Monday."""
        start, end = calc.date_range(const.PERIOD_WEEKLY, date(2026, 1, 21))
        assert start == _utc(2026, 1, 19)
        assert start.weekday() == 0
        assert end == _utc(2026, 1, 26)

    def test_weekly_sunday_anchor_rolls_back_six_days(
        self, calc: PeriodCalculator
    ) -> None:
        """Sunday is the last day of the week, not the first."""
        sunday = date(2026, 1, 4)
        assert sunday.weekday() == 6

        start, end = calc.date_range(const.PERIOD_WEEKLY, sunday)
        assert start == _utc(2025, 12, 29)
        assert end == _utc(2026, 1, 5)

    def test_monthly_range(self, calc: PeriodCalculator) -> None:
        """Monthly interval runs from the 1st to the 1st of the next month."""
        start, end = calc.date_range(const.PERIOD_MONTHLY, date(2024, 2, 15))
        assert start == _utc(2024, 2, 1)
        assert end == _utc(2024, 3, 1)

    def test_monthly_range_december_rolls_into_next_year(
        self, calc: PeriodCalculator
    ) -> None:
        """December ends on January 1 of the following year."""
        start, end = calc.date_range(const.PERIOD_MONTHLY, date(2025, 12, 31))
        assert start == _utc(2025, 12, 1)
        assert end == _utc(2026, 1, 1)

    def test_yearly_range(self, calc: PeriodCalculator) -> None:
        """Yearly interval runs from January 1 to January 1."""
        start, end = calc.date_range(const.PERIOD_YEARLY, _utc(2024, 7, 4, 8))
        assert start == _utc(2024, 1, 1)
        assert end == _utc(2025, 1, 1)

    def test_aware_anchor_is_converted_to_local_day(self) -> None:
        """An anchor is placed by its local calendar date."""
        calc = PeriodCalculator(ZoneInfo("America/New_York"))
        # 03:00 UTC on Jan 2 is still Jan 1 in New York
        start, _ = calc.date_range(
            const.PERIOD_DAILY, datetime(2026, 1, 2, 3, 0, tzinfo=UTC)
        )
        assert start.date() == date(2026, 1, 1)

    def test_dst_day_is_23_hours_long(self) -> None:
        """Boundaries are wall-clock midnights, so DST days are short."""
        tz = ZoneInfo("Europe/Berlin")
        calc = PeriodCalculator(tz)
        start, end = calc.date_range(const.PERIOD_DAILY, date(2026, 3, 29))

        assert start == datetime(2026, 3, 29, tzinfo=tz)
        assert end == datetime(2026, 3, 30, tzinfo=tz)
        assert end.astimezone(UTC) - start.astimezone(UTC) == timedelta(hours=23)

    def test_unknown_granularity_raises(self, calc: PeriodCalculator) -> None:
        """Unsupported granularities are rejected."""
        with pytest.raises(ValueError):
            calc.date_range("hourly", date(2026, 1, 1))

    def test_overflow_degrades_to_zero_length_interval(
        self, calc: PeriodCalculator
    ) -> None:
        """The last representable day cannot have an end boundary."""
        start, end = calc.date_range(const.PERIOD_DAILY, date(9999, 12, 31))
        assert start == end == _utc(9999, 12, 31)

    def test_yearly_overflow_degrades_to_zero_length_interval(
        self, calc: PeriodCalculator
    ) -> None:
        """Year 10000 does not exist."""
        anchor = _utc(9999, 6, 1, 10)
        start, end = calc.date_range(const.PERIOD_YEARLY, anchor)
        assert start == end == anchor


# =============================================================================
# TEST: SHIFTING
# =============================================================================


class TestShift:
    """Test calendar-aware anchor shifting."""

    def test_shift_month_clamps_day(self, calc: PeriodCalculator) -> None:
        """Jan 31 + 1 month is the last day of February."""
        shifted = calc.shift(const.PERIOD_MONTHLY, date(2026, 1, 31), 1)
        assert shifted.date() == date(2026, 2, 28)

    def test_shift_leap_day_by_year(self, calc: PeriodCalculator) -> None:
        """Feb 29 + 1 year is Feb 28."""
        shifted = calc.shift(const.PERIOD_YEARLY, date(2024, 2, 29), 1)
        assert shifted.date() == date(2025, 2, 28)

    def test_shift_weeks_backwards(self, calc: PeriodCalculator) -> None:
        """Weekly shift moves by seven days."""
        shifted = calc.shift(const.PERIOD_WEEKLY, date(2026, 1, 21), -2)
        assert shifted.date() == date(2026, 1, 7)

    def test_shift_out_of_range_returns_anchor(self, calc: PeriodCalculator) -> None:
        """Shifting past the last representable date keeps the anchor."""
        shifted = calc.shift(const.PERIOD_DAILY, date(9999, 12, 31), 1)
        assert shifted == _utc(9999, 12, 31)


# =============================================================================
# TEST: LABELS AND DAY COUNTS
# =============================================================================


class TestLabelsAndDays:
    """Test labels and calendar day counts."""

    @pytest.mark.parametrize(
        ("granularity", "anchor", "expected"),
        [
            (const.PERIOD_DAILY, date(2026, 1, 19), "2026-01-19"),
            (const.PERIOD_WEEKLY, date(2026, 1, 21), "2026-W04"),
            (const.PERIOD_WEEKLY, date(2026, 1, 4), "2026-W01"),
            (const.PERIOD_MONTHLY, date(2026, 1, 19), "2026-01"),
            (const.PERIOD_YEARLY, date(2026, 1, 19), "2026"),
        ],
    )
    def test_labels(
        self,
        calc: PeriodCalculator,
        granularity: str,
        anchor: date,
        expected: str,
    ) -> None:
        """Labels identify the interval, not the anchor."""
        assert calc.label(granularity, anchor) == expected

    @pytest.mark.parametrize(
        ("granularity", "anchor", "expected"),
        [
            (const.PERIOD_DAILY, date(2026, 1, 19), 1),
            (const.PERIOD_WEEKLY, date(2026, 1, 19), 7),
            (const.PERIOD_MONTHLY, date(2024, 2, 15), 29),
            (const.PERIOD_MONTHLY, date(2025, 2, 15), 28),
            (const.PERIOD_MONTHLY, date(2026, 1, 15), 31),
            (const.PERIOD_YEARLY, date(2024, 6, 1), 366),
            (const.PERIOD_YEARLY, date(2025, 6, 1), 365),
        ],
    )
    def test_days_count(
        self,
        calc: PeriodCalculator,
        granularity: str,
        anchor: date,
        expected: int,
    ) -> None:
        """days_count is the true number of calendar days."""
        assert calc.days_count(granularity, anchor) == expected

    def test_days_count_is_zero_on_overflow(self, calc: PeriodCalculator) -> None:
        """An interval that cannot be computed has no days."""
        assert calc.days_count(const.PERIOD_DAILY, date(9999, 12, 31)) == 0

    def test_is_current_period(self, calc: PeriodCalculator) -> None:
        """Anchors in the same week as now are current."""
        now = _utc(2026, 1, 21, 9)
        assert calc.is_current_period(const.PERIOD_WEEKLY, date(2026, 1, 19), now)
        assert not calc.is_current_period(const.PERIOD_WEEKLY, date(2026, 1, 18), now)


# =============================================================================
# TEST: WINDOWS
# =============================================================================


class TestWindow:
    """Test consecutive period windows."""

    def test_window_is_oldest_first_and_contiguous(
        self, calc: PeriodCalculator
    ) -> None:
        """Each period ends where the next one starts."""
        periods = calc.window(const.PERIOD_DAILY, 7, date(2026, 1, 19))

        assert len(periods) == 7
        assert periods[0].label == "2026-01-13"
        assert periods[-1].label == "2026-01-19"
        for earlier, later in zip(periods, periods[1:]):
            assert earlier.end == later.start

    def test_monthly_window_steps_from_original_anchor(
        self, calc: PeriodCalculator
    ) -> None:
        """Clamping to Feb 28 does not drift the January step to the 28th."""
        periods = calc.window(const.PERIOD_MONTHLY, 3, date(2026, 3, 31))

        assert [period.label for period in periods] == ["2026-01", "2026-02", "2026-03"]
        assert [period.days_count for period in periods] == [31, 28, 31]

    def test_window_labels_are_unique(self, calc: PeriodCalculator) -> None:
        """No two periods of a window share a label."""
        periods = calc.window(const.PERIOD_WEEKLY, 60, date(2026, 1, 4))
        labels = [period.label for period in periods]
        assert len(set(labels)) == len(labels)

    @pytest.mark.parametrize("size", [0, -3])
    def test_non_positive_window_raises(self, calc: PeriodCalculator, size: int) -> None:
        """Window size must be positive."""
        with pytest.raises(ValueError):
            calc.window(const.PERIOD_DAILY, size, date(2026, 1, 1))

    def test_default_zone_follows_integration_setting(self) -> None:
        """Without a fixed zone, the integration default is used."""
        assert PeriodCalculator().tz == UTC_ZONE
