"""Statistics Engine - Period aggregation over time-stamped baby-care records.

This engine reduces sleep sessions, meals, water intake and milestones into
calendar-aligned summaries:
- Windowed summaries (last N days/weeks/months/years)
- Single range summaries ("today", "this week", custom ranges)
- Category distributions (meal types, milestone categories)
- Chart projections (hours per period)

Design Principles:
    - Stateless: No coordinator reference, operates on passed snapshots
    - Single entry point: Granularity differences live in PeriodCalculator
    - Pluggable attribution: Each record type chooses which timestamp
      places it in a bucket (sleep uses wake time)
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Final

from .. import const
from ..utils.dt_utils import as_local, dt_now_local, dt_to_utc
from ..utils.math_utils import safe_average, seconds_to_hours
from .period_engine import PeriodCalculator

# ────────────────────────────────────────────────────────────────
# Data Shapes
# ────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class TimedEvent:
    """Read-only view of a record used for bucketing."""

    id: str
    occurred_at: datetime | None
    ended_at: datetime | None = None
    quantity: float | None = None
    category: str | None = None

    @property
    def duration(self) -> float:
        """Return the duration in seconds (0 for instantaneous or open events)."""
        if self.occurred_at is None or self.ended_at is None:
            return 0.0
        return max((self.ended_at - self.occurred_at).total_seconds(), 0.0)


@dataclass(frozen=True, slots=True)
class PeriodSummary:
    """Aggregate of the events attributed to one interval."""

    label: str
    start: datetime
    end: datetime
    total_duration: float
    average_duration: float
    count: int
    days_count: int = 0
    total_quantity: float = 0.0

    @property
    def daily_average_duration(self) -> float:
        """Return total duration divided by the calendar days of the interval."""
        return safe_average(self.total_duration, self.days_count)

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "label": self.label,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "total_duration": self.total_duration,
            "average_duration": self.average_duration,
            "count": self.count,
            "days_count": self.days_count,
            "total_quantity": self.total_quantity,
        }


@dataclass(frozen=True, slots=True)
class ChartPoint:
    """Chart-ready projection of a PeriodSummary."""

    label: str
    value: float
    date: datetime

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "label": self.label,
            "value": self.value,
            "date": self.date.isoformat(),
        }


AttributionRule = Callable[[TimedEvent], datetime | None]


# ────────────────────────────────────────────────────────────────
# Attribution Rules
# ────────────────────────────────────────────────────────────────


def attribute_by_end(event: TimedEvent) -> datetime | None:
    """Attribute an event to the moment it ended.

    Overnight sleep counts entirely on the day the baby wakes up. Events
    still in progress have no end and are excluded.
    """
    return event.ended_at


def attribute_by_occurrence(event: TimedEvent) -> datetime | None:
    """Attribute an event to its primary timestamp."""
    return event.occurred_at


ATTRIBUTION_RULES: Final[dict[str, AttributionRule]] = {
    const.RECORD_TYPE_SLEEP: attribute_by_end,
    const.RECORD_TYPE_MEAL: attribute_by_occurrence,
    const.RECORD_TYPE_WATER: attribute_by_occurrence,
    const.RECORD_TYPE_MILESTONE: attribute_by_occurrence,
}


# ────────────────────────────────────────────────────────────────
# Record Converters
# ────────────────────────────────────────────────────────────────


def sleep_record_to_event(record: Mapping[str, Any]) -> TimedEvent:
    """Build a TimedEvent from a stored sleep record."""
    return TimedEvent(
        id=str(record.get(const.DATA_RECORD_ID, "")),
        occurred_at=dt_to_utc(record.get(const.DATA_SLEEP_TIME)),
        ended_at=dt_to_utc(record.get(const.DATA_WAKE_TIME)),
    )


def meal_record_to_event(record: Mapping[str, Any]) -> TimedEvent:
    """Build a TimedEvent from a stored meal record (category = meal type)."""
    water = record.get(const.DATA_MEAL_WATER_AMOUNT_ML)
    return TimedEvent(
        id=str(record.get(const.DATA_RECORD_ID, "")),
        occurred_at=dt_to_utc(record.get(const.DATA_MEAL_DATE)),
        quantity=float(water) if water is not None else None,
        category=record.get(const.DATA_MEAL_TYPE),
    )


def milestone_to_event(record: Mapping[str, Any]) -> TimedEvent:
    """Build a TimedEvent from a stored milestone (category = milestone category)."""
    return TimedEvent(
        id=str(record.get(const.DATA_RECORD_ID, "")),
        occurred_at=dt_to_utc(record.get(const.DATA_MILESTONE_DATE)),
        category=record.get(const.DATA_MILESTONE_CATEGORY),
    )


def records_to_events(
    record_type: str, records: Iterable[Mapping[str, Any]]
) -> list[TimedEvent]:
    """Convert stored records of one type into TimedEvents.

    Water events are the meal records that carry a positive water amount.

    Raises:
        ValueError: Unknown record type.
    """
    if record_type == const.RECORD_TYPE_SLEEP:
        return [sleep_record_to_event(record) for record in records]
    if record_type == const.RECORD_TYPE_MEAL:
        return [meal_record_to_event(record) for record in records]
    if record_type == const.RECORD_TYPE_WATER:
        events = (meal_record_to_event(record) for record in records)
        return [event for event in events if event.quantity and event.quantity > 0]
    if record_type == const.RECORD_TYPE_MILESTONE:
        return [milestone_to_event(record) for record in records]
    raise ValueError(f"Unsupported record type '{record_type}'")


# ────────────────────────────────────────────────────────────────
# Engine
# ────────────────────────────────────────────────────────────────


class StatisticsEngine:
    """Reduce TimedEvents into period summaries.

    All methods are pure: they read the snapshot passed in and return new
    frozen objects. Caching belongs to StatisticsManager.

    Example:
        engine = StatisticsEngine()
        events = records_to_events(const.RECORD_TYPE_SLEEP, sleep_records)
        summaries = engine.aggregate(
            events, const.PERIOD_DAILY, 7, attribution=attribute_by_end
        )
        chart = engine.chart_points(summaries)
    """

    def __init__(self, calculator: PeriodCalculator | None = None) -> None:
        """Initialize the engine.

        Args:
            calculator: Period calculator to use; a default one following the
                integration time zone is created when omitted.
        """
        self.periods = calculator or PeriodCalculator()

    def _dt_now_local(self) -> datetime:
        """Return the current local time."""
        return dt_now_local(self.periods.tz)

    def _localize(self, value: datetime) -> datetime:
        """Return an aware datetime; naive values are read as local time."""
        return as_local(value, self.periods.tz)

    def _attribute(
        self, events: Iterable[TimedEvent], attribution: AttributionRule
    ) -> list[tuple[datetime, TimedEvent]]:
        """Pair events with their attribution timestamp, dropping unusable ones."""
        attributed: list[tuple[datetime, TimedEvent]] = []
        for event in events:
            timestamp = attribution(event)
            if timestamp is None:
                continue
            attributed.append((self._localize(timestamp), event))
        return attributed

    @staticmethod
    def _reduce(
        label: str,
        start: datetime,
        end: datetime,
        attributed: Iterable[tuple[datetime, TimedEvent]],
        days_count: int,
    ) -> PeriodSummary:
        """Summarize the attributed events that fall inside `[start, end)`."""
        total_duration = 0.0
        total_quantity = 0.0
        count = 0
        for timestamp, event in attributed:
            if not start <= timestamp < end:
                continue
            count += 1
            total_duration += event.duration
            total_quantity += event.quantity or 0.0

        return PeriodSummary(
            label=label,
            start=start,
            end=end,
            total_duration=total_duration,
            average_duration=safe_average(total_duration, count),
            count=count,
            days_count=days_count,
            total_quantity=total_quantity,
        )

    # ────────────────────────────────────────────────────────────────
    # Aggregation
    # ────────────────────────────────────────────────────────────────

    def aggregate(
        self,
        events: Iterable[TimedEvent],
        granularity: str,
        window_size: int,
        anchor: date | datetime | None = None,
        attribution: AttributionRule = attribute_by_occurrence,
    ) -> list[PeriodSummary]:
        """Summarize events into `window_size` consecutive periods.

        Args:
            events: Snapshot of TimedEvents (not modified)
            granularity: One of const.PERIODS
            window_size: Number of periods, ending with the anchor's period
            anchor: Reference point, defaults to now
            attribution: Rule that places each event in a bucket

        Returns:
            Exactly `window_size` summaries, oldest first.

        Raises:
            ValueError: window_size <= 0 or unsupported granularity.
        """
        if window_size <= 0:
            raise ValueError(f"window_size must be positive, got {window_size}")

        reference = anchor if anchor is not None else self._dt_now_local()
        attributed = self._attribute(events, attribution)

        return [
            self._reduce(
                period.label, period.start, period.end, attributed, period.days_count
            )
            for period in self.periods.window(granularity, window_size, reference)
        ]

    def summary_for_range(
        self,
        events: Iterable[TimedEvent],
        start: datetime,
        end: datetime,
        attribution: AttributionRule = attribute_by_occurrence,
    ) -> PeriodSummary:
        """Summarize events attributed inside an explicit `[start, end)` range.

        An empty or inverted range yields a zero summary. Naive bounds are
        read as local time.
        """
        start = self._localize(start)
        end = self._localize(end)
        start_day = start.date()
        end_day = end.date()
        days_count = max((end_day - start_day).days, 0)

        return self._reduce(
            f"{start_day.isoformat()}/{end_day.isoformat()}",
            start,
            end,
            self._attribute(events, attribution),
            days_count,
        )

    def category_distribution(
        self,
        events: Iterable[TimedEvent],
        start: datetime | None = None,
        end: datetime | None = None,
        attribution: AttributionRule = attribute_by_occurrence,
    ) -> dict[str, int]:
        """Count events per category inside an optional `[start, end)` range.

        Only categories with at least one event are returned, ordered by
        count (descending) then name.
        """
        if start is not None:
            start = self._localize(start)
        if end is not None:
            end = self._localize(end)

        counts: Counter[str] = Counter()
        for timestamp, event in self._attribute(events, attribution):
            if event.category is None:
                continue
            if start is not None and timestamp < start:
                continue
            if end is not None and timestamp >= end:
                continue
            counts[event.category] += 1

        return dict(sorted(counts.items(), key=lambda item: (-item[1], item[0])))

    @staticmethod
    def top_category(distribution: Mapping[str, int]) -> str | None:
        """Return the most frequent category of a distribution, if any."""
        if not distribution:
            return None
        return min(distribution.items(), key=lambda item: (-item[1], item[0]))[0]

    # ────────────────────────────────────────────────────────────────
    # Projection
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def chart_points(summaries: Iterable[PeriodSummary]) -> list[ChartPoint]:
        """Project summaries onto chart points (value in hours)."""
        return [
            ChartPoint(
                label=summary.label,
                value=seconds_to_hours(summary.total_duration),
                date=summary.start,
            )
            for summary in summaries
        ]
