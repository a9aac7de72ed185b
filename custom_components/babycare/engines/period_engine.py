"""Period Engine - Calendar-aligned interval arithmetic.

Computes the half-open `[start, end)` interval that contains an anchor for
each supported granularity, shifts anchors by whole periods, and labels
intervals.

Granularities:
    - daily: local midnight to the next local midnight
    - weekly: Monday 00:00 to the following Monday 00:00
    - monthly: first of the month to first of the next month
    - yearly: January 1 to the next January 1

Design Principles:
    - Stateless: Operates only on the anchor it is given
    - Calendar-aware: Month/year arithmetic uses relativedelta, never a
      fixed number of seconds
    - Graceful: Date arithmetic that overflows degrades to a zero-length
      interval at the anchor instead of raising
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Final

from dateutil.relativedelta import relativedelta

from .. import const
from ..utils.dt_utils import (
    TIME_UNIT_DAYS,
    TIME_UNIT_MONTHS,
    TIME_UNIT_WEEKS,
    TIME_UNIT_YEARS,
    as_local,
    dt_add_interval,
    dt_now_local,
    get_default_timezone,
    start_of_local_day,
)

if TYPE_CHECKING:
    from zoneinfo import ZoneInfo


# Granularity -> interval unit used for shifting anchors
PERIOD_UNITS: Final[dict[str, str]] = {
    const.PERIOD_DAILY: TIME_UNIT_DAYS,
    const.PERIOD_WEEKLY: TIME_UNIT_WEEKS,
    const.PERIOD_MONTHLY: TIME_UNIT_MONTHS,
    const.PERIOD_YEARLY: TIME_UNIT_YEARS,
}


@dataclass(frozen=True, slots=True)
class Period:
    """One calendar interval of a retrieval window."""

    label: str
    start: datetime
    end: datetime
    days_count: int


class PeriodCalculator:
    """Calendar interval arithmetic for daily/weekly/monthly/yearly buckets.

    All boundaries are local midnights in the calculator's time zone. When
    no zone is given, the integration default (set from the Home Assistant
    configuration at setup) is read on every call.

    Example:
        calc = PeriodCalculator(ZoneInfo("Europe/Berlin"))
        start, end = calc.date_range(const.PERIOD_WEEKLY, datetime(2026, 1, 4))
        # start = Mon 2025-12-29 00:00, end = Mon 2026-01-05 00:00
    """

    def __init__(self, tz: ZoneInfo | None = None) -> None:
        """Initialize the calculator.

        Args:
            tz: Fixed time zone for boundaries, or None to follow the
                integration default.
        """
        self._tz = tz

    @property
    def tz(self) -> ZoneInfo:
        """Return the effective time zone."""
        return self._tz or get_default_timezone()

    # ────────────────────────────────────────────────────────────────
    # Validation
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def validate_granularity(granularity: str) -> None:
        """Raise ValueError for an unsupported granularity."""
        if granularity not in PERIOD_UNITS:
            raise ValueError(
                f"Unsupported granularity '{granularity}', "
                f"expected one of {list(PERIOD_UNITS)}"
            )

    def _local_date(self, anchor: date | datetime) -> date:
        """Return the local calendar date of an anchor."""
        if isinstance(anchor, datetime):
            return as_local(anchor, self.tz).date()
        return anchor

    # ────────────────────────────────────────────────────────────────
    # Interval Computation
    # ────────────────────────────────────────────────────────────────

    def _date_bounds(self, granularity: str, anchor: date | datetime) -> tuple[date, date]:
        """Return the first day and the exclusive last day of the interval.

        Raises:
            ValueError: Unsupported granularity or unrepresentable date.
            OverflowError: Result outside the supported date range.
        """
        self.validate_granularity(granularity)
        day = self._local_date(anchor)

        if granularity == const.PERIOD_DAILY:
            start = day
            end = start + timedelta(days=1)
        elif granularity == const.PERIOD_WEEKLY:
            # weekday(): Monday == 0, Sunday == 6 rolls back six days
            start = day - timedelta(days=day.weekday())
            end = start + timedelta(days=7)
        elif granularity == const.PERIOD_MONTHLY:
            start = day.replace(day=1)
            end = start + relativedelta(months=1)
        else:
            start = date(day.year, 1, 1)
            end = start + relativedelta(years=1)

        return start, end

    def date_range(
        self, granularity: str, anchor: date | datetime
    ) -> tuple[datetime, datetime]:
        """Return the half-open interval `[start, end)` containing the anchor.

        Args:
            granularity: One of const.PERIODS
            anchor: Date or datetime inside the requested interval

        Returns:
            (start, end) as timezone-aware local midnights. When the calendar
            arithmetic cannot produce a valid date, both values are the
            anchor itself (zero-length interval).

        Raises:
            ValueError: Unsupported granularity.
        """
        self.validate_granularity(granularity)
        try:
            start_day, end_day = self._date_bounds(granularity, anchor)
            return (
                start_of_local_day(start_day, self.tz),
                start_of_local_day(end_day, self.tz),
            )
        except (OverflowError, ValueError) as err:
            const.LOGGER.warning(
                "WARNING: Period range for %s anchor %s could not be computed: %s",
                granularity,
                anchor,
                err,
            )
            fallback = self._fallback_anchor(anchor)
            return fallback, fallback

    def _fallback_anchor(self, anchor: date | datetime) -> datetime:
        """Return the anchor as an aware datetime without further arithmetic."""
        if isinstance(anchor, datetime):
            if anchor.tzinfo is None:
                return anchor.replace(tzinfo=self.tz)
            return anchor
        return datetime(anchor.year, anchor.month, anchor.day, tzinfo=self.tz)

    def shift(
        self, granularity: str, anchor: date | datetime, delta: int
    ) -> datetime:
        """Move the anchor by whole periods using calendar arithmetic.

        Shifting 2026-01-31 by +1 month lands on 2026-02-28; the day is
        clamped to the target month length.

        Args:
            granularity: One of const.PERIODS
            anchor: Starting point
            delta: Number of periods (negative to go back)

        Returns:
            The shifted anchor as a local aware datetime, or the unshifted
            anchor when the result would be out of range.

        Raises:
            ValueError: Unsupported granularity.
        """
        self.validate_granularity(granularity)
        base = self._fallback_anchor(anchor)
        try:
            return dt_add_interval(
                as_local(base, self.tz), PERIOD_UNITS[granularity], delta
            )
        except (OverflowError, ValueError) as err:
            const.LOGGER.warning(
                "WARNING: Cannot shift %s anchor %s by %s: %s",
                granularity,
                anchor,
                delta,
                err,
            )
            return base

    # ────────────────────────────────────────────────────────────────
    # Labels and Metadata
    # ────────────────────────────────────────────────────────────────

    def label(self, granularity: str, anchor: date | datetime) -> str:
        """Return a stable label for the interval containing the anchor.

        Formats:
            daily: "2026-01-19"
            weekly: "2026-W04" (ISO week of the Monday start)
            monthly: "2026-01"
            yearly: "2026"
        """
        start, _ = self.date_range(granularity, anchor)
        start_day = start.date()

        if granularity == const.PERIOD_DAILY:
            return start_day.isoformat()
        if granularity == const.PERIOD_WEEKLY:
            iso = start_day.isocalendar()
            return f"{iso.year}-W{iso.week:02d}"
        if granularity == const.PERIOD_MONTHLY:
            return f"{start_day.year}-{start_day.month:02d}"
        return f"{start_day.year}"

    def days_count(self, granularity: str, anchor: date | datetime) -> int:
        """Return the number of calendar days in the interval.

        Used as the divisor for daily averages: 29 for February 2024, 366
        for 2024, 7 for any week. Returns 0 when the interval cannot be
        computed.
        """
        self.validate_granularity(granularity)
        try:
            start_day, end_day = self._date_bounds(granularity, anchor)
        except (OverflowError, ValueError):
            return 0
        return (end_day - start_day).days

    def is_current_period(
        self,
        granularity: str,
        anchor: date | datetime,
        now: datetime | None = None,
    ) -> bool:
        """Return True if the anchor falls in the same interval as now."""
        reference = now or dt_now_local(self.tz)
        return (
            self.date_range(granularity, anchor)[0]
            == self.date_range(granularity, reference)[0]
        )

    def window(
        self,
        granularity: str,
        window_size: int,
        anchor: date | datetime,
    ) -> list[Period]:
        """Return `window_size` consecutive periods ending with the anchor's.

        Each step is computed from the original anchor (`shift(-i)`) so month
        clamping never accumulates. Output is oldest-first.

        Raises:
            ValueError: window_size <= 0 or unsupported granularity.
        """
        if window_size <= 0:
            raise ValueError(f"window_size must be positive, got {window_size}")
        self.validate_granularity(granularity)

        periods: list[Period] = []
        for offset in range(window_size):
            stepped = self.shift(granularity, anchor, -offset)
            start, end = self.date_range(granularity, stepped)
            periods.append(
                Period(
                    label=self.label(granularity, stepped),
                    start=start,
                    end=end,
                    days_count=self.days_count(granularity, stepped),
                )
            )

        periods.reverse()
        return periods
