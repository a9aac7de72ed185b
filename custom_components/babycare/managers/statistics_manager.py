"""Statistics Manager - Cached, event-invalidated statistics service.

This manager is the one place sensors and services ask for statistics:
- Windowed period summaries (daily/weekly/monthly/yearly)
- Range summaries (today, yesterday, custom ranges)
- Chart series (hours per period)
- Category distributions (meal types, milestone categories)

Cache Architecture:
- _stats_cache maps (kind, params..., generation) to a computed result
- _generation is bumped and the dict cleared by invalidate_cache()
- Record managers emit SIGNAL_SUFFIX_RECORDS_CHANGED after every mutation;
  this manager listens and invalidates
- A local-midnight listener also invalidates so "today" rolls over

All access happens on the Home Assistant event loop, so no locking is used.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Any, TypeVar

from homeassistant.core import callback
from homeassistant.helpers.event import async_track_time_change

from .. import const
from ..engines.statistics_engine import (
    ATTRIBUTION_RULES,
    ChartPoint,
    PeriodSummary,
    StatisticsEngine,
    TimedEvent,
    records_to_events,
)
from ..utils.dt_utils import dt_now_local, start_of_local_day
from ..utils.math_utils import safe_average
from .base_manager import BaseManager

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from ..coordinator import BabyCareDataCoordinator


__all__ = ["StatisticsManager"]

_T = TypeVar("_T")


class StatisticsManager(BaseManager):
    """Service object owning the statistics cache for one config entry.

    Responsibilities:
    - Convert stored records into TimedEvents for the engine
    - Memoize engine results per generation
    - Invalidate on record mutations and at local midnight

    NOT responsible for:
    - Storing records (record managers)
    - Date arithmetic (PeriodCalculator)
    """

    def __init__(
        self,
        hass: HomeAssistant,
        coordinator: BabyCareDataCoordinator,
        engine: StatisticsEngine | None = None,
    ) -> None:
        """Initialize the StatisticsManager.

        Args:
            hass: Home Assistant instance
            coordinator: The main BabyCare coordinator
            engine: Statistics engine, injectable for tests
        """
        super().__init__(hass, coordinator)
        self._engine = engine or StatisticsEngine()
        self._generation = 0
        self._stats_cache: dict[tuple[Hashable, ...], Any] = {}
        self.cache_hits = 0
        self.cache_misses = 0

    async def async_setup(self) -> None:
        """Subscribe to record changes and the midnight rollover."""
        self.listen(const.SIGNAL_SUFFIX_RECORDS_CHANGED, self._on_records_changed)

        @callback
        def _on_midnight_rollover(now: Any) -> None:
            """Invalidate at midnight so 'today' values start from zero."""
            const.LOGGER.info("INFO: StatisticsManager: Midnight rollover - clearing cache")
            self.invalidate_cache()

        # second=1 so the new local day has started
        self.coordinator.config_entry.async_on_unload(
            async_track_time_change(
                self.hass, _on_midnight_rollover, hour=0, minute=0, second=1
            )
        )
        const.LOGGER.debug("DEBUG: StatisticsManager: Event subscriptions initialized")

    # ────────────────────────────────────────────────────────────────
    # Cache
    # ────────────────────────────────────────────────────────────────

    @property
    def engine(self) -> StatisticsEngine:
        """Return the statistics engine."""
        return self._engine

    @property
    def generation(self) -> int:
        """Return the current cache generation."""
        return self._generation

    @property
    def cache_size(self) -> int:
        """Return the number of cached results."""
        return len(self._stats_cache)

    def invalidate_cache(self) -> None:
        """Drop every cached result and start a new generation."""
        self._generation += 1
        self._stats_cache.clear()
        const.LOGGER.debug(
            "DEBUG: StatisticsManager: Cache invalidated (generation %s)",
            self._generation,
        )

    @callback
    def _on_records_changed(self, payload: dict[str, Any]) -> None:
        """Handle a record mutation event."""
        const.LOGGER.debug(
            "DEBUG: StatisticsManager: %s %s -> invalidating",
            payload.get("action"),
            payload.get("record_type"),
        )
        self.invalidate_cache()

    def _cached(self, key: tuple[Hashable, ...], compute: Callable[[], _T]) -> _T:
        """Return the cached value for key, computing it on a miss."""
        full_key = (*key, self._generation)
        if full_key in self._stats_cache:
            self.cache_hits += 1
            return self._stats_cache[full_key]

        self.cache_misses += 1
        value = compute()
        self._stats_cache[full_key] = value
        return value

    # ────────────────────────────────────────────────────────────────
    # Inputs
    # ────────────────────────────────────────────────────────────────

    def _records(self, record_type: str) -> list[dict[str, Any]]:
        """Return the stored records backing a record type."""
        if record_type == const.RECORD_TYPE_SLEEP:
            return self.coordinator.sleep_records
        if record_type in (const.RECORD_TYPE_MEAL, const.RECORD_TYPE_WATER):
            return self.coordinator.meal_records
        if record_type == const.RECORD_TYPE_MILESTONE:
            return self.coordinator.milestones
        raise ValueError(f"Unsupported record type '{record_type}'")

    def _events(self, record_type: str) -> list[TimedEvent]:
        """Return the records of a type as TimedEvents (cached per generation)."""
        return self._cached(
            ("events", record_type),
            lambda: records_to_events(record_type, self._records(record_type)),
        )

    def _anchor_key(self, anchor: date | datetime) -> str:
        """Return the local day of an anchor; results only depend on it."""
        return start_of_local_day(anchor, self._engine.periods.tz).date().isoformat()

    def default_window(self, granularity: str) -> int:
        """Return the configured window size for a granularity."""
        self._engine.periods.validate_granularity(granularity)
        option_key, default = const.PERIOD_WINDOW_OPTIONS[granularity]
        return int(self.coordinator.config_entry.options.get(option_key, default))

    def _resolve_window(
        self,
        granularity: str,
        window_size: int | None,
        anchor: date | datetime | None,
    ) -> tuple[int, date | datetime]:
        """Fill in the configured window size and the current time."""
        size = window_size if window_size is not None else self.default_window(granularity)
        if size <= 0:
            raise ValueError(f"window_size must be positive, got {size}")
        reference = anchor if anchor is not None else dt_now_local(self._engine.periods.tz)
        return size, reference

    # ────────────────────────────────────────────────────────────────
    # Public API
    # ────────────────────────────────────────────────────────────────

    def get_period_statistics(
        self,
        record_type: str,
        granularity: str,
        window_size: int | None = None,
        anchor: date | datetime | None = None,
    ) -> list[PeriodSummary]:
        """Return `window_size` summaries ending with the anchor's period.

        Raises:
            ValueError: window_size <= 0, unknown granularity or record type.
        """
        size, reference = self._resolve_window(granularity, window_size, anchor)
        summaries = self._cached(
            (
                const.STATS_KIND_PERIODS,
                record_type,
                granularity,
                size,
                self._anchor_key(reference),
            ),
            lambda: tuple(
                self._engine.aggregate(
                    self._events(record_type),
                    granularity,
                    size,
                    reference,
                    ATTRIBUTION_RULES[record_type],
                )
            ),
        )
        return list(summaries)

    def get_chart_series(
        self,
        record_type: str,
        granularity: str,
        window_size: int | None = None,
        anchor: date | datetime | None = None,
    ) -> list[ChartPoint]:
        """Return the chart projection of get_period_statistics()."""
        size, reference = self._resolve_window(granularity, window_size, anchor)
        points = self._cached(
            (
                const.STATS_KIND_CHART,
                record_type,
                granularity,
                size,
                self._anchor_key(reference),
            ),
            lambda: tuple(
                self._engine.chart_points(
                    self.get_period_statistics(record_type, granularity, size, reference)
                )
            ),
        )
        return list(points)

    def get_range_summary(
        self, record_type: str, start: datetime, end: datetime
    ) -> PeriodSummary:
        """Return one summary for an explicit `[start, end)` range."""
        return self._cached(
            (const.STATS_KIND_RANGE, record_type, start.isoformat(), end.isoformat()),
            lambda: self._engine.summary_for_range(
                self._events(record_type), start, end, ATTRIBUTION_RULES[record_type]
            ),
        )

    def get_category_distribution(
        self,
        record_type: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> dict[str, int]:
        """Return per-category counts (non-zero only) for an optional range."""
        distribution = self._cached(
            (
                const.STATS_KIND_DISTRIBUTION,
                record_type,
                start.isoformat() if start else None,
                end.isoformat() if end else None,
            ),
            lambda: self._engine.category_distribution(
                self._events(record_type), start, end, ATTRIBUTION_RULES[record_type]
            ),
        )
        return dict(distribution)

    # ────────────────────────────────────────────────────────────────
    # Convenience Wrappers
    # ────────────────────────────────────────────────────────────────

    def daily_statistics(
        self,
        days: int = const.DEFAULT_DAILY_WINDOW,
        anchor: date | datetime | None = None,
        record_type: str = const.RECORD_TYPE_SLEEP,
    ) -> list[PeriodSummary]:
        """Return the last `days` daily summaries."""
        return self.get_period_statistics(record_type, const.PERIOD_DAILY, days, anchor)

    def weekly_statistics(
        self,
        weeks: int = const.DEFAULT_WEEKLY_WINDOW,
        anchor: date | datetime | None = None,
        record_type: str = const.RECORD_TYPE_SLEEP,
    ) -> list[PeriodSummary]:
        """Return the last `weeks` weekly summaries."""
        return self.get_period_statistics(record_type, const.PERIOD_WEEKLY, weeks, anchor)

    def monthly_statistics(
        self,
        months: int = const.DEFAULT_MONTHLY_WINDOW,
        anchor: date | datetime | None = None,
        record_type: str = const.RECORD_TYPE_SLEEP,
    ) -> list[PeriodSummary]:
        """Return the last `months` monthly summaries."""
        return self.get_period_statistics(
            record_type, const.PERIOD_MONTHLY, months, anchor
        )

    def yearly_statistics(
        self,
        years: int = const.DEFAULT_YEARLY_WINDOW,
        anchor: date | datetime | None = None,
        record_type: str = const.RECORD_TYPE_SLEEP,
    ) -> list[PeriodSummary]:
        """Return the last `years` yearly summaries."""
        return self.get_period_statistics(record_type, const.PERIOD_YEARLY, years, anchor)

    def day_summary(
        self,
        record_type: str,
        day: date | datetime | None = None,
    ) -> PeriodSummary:
        """Return the summary for one local calendar day (default today)."""
        tz = self._engine.periods.tz
        start = start_of_local_day(day if day is not None else dt_now_local(tz), tz)
        end = start_of_local_day(start.date() + timedelta(days=1), tz)
        return self.get_range_summary(record_type, start, end)

    # ────────────────────────────────────────────────────────────────
    # Insights
    # ────────────────────────────────────────────────────────────────

    def sleep_overview(self, now: datetime | None = None) -> dict[str, float | int]:
        """Compare today's sleep (by wake day) with yesterday's.

        Returns:
            Dict with today/yesterday totals in seconds, today's count and
            average, and the difference in seconds.
        """
        reference = now or dt_now_local(self._engine.periods.tz)
        today = self.day_summary(const.RECORD_TYPE_SLEEP, reference)
        yesterday = self.day_summary(
            const.RECORD_TYPE_SLEEP, reference - timedelta(days=1)
        )
        return {
            "today_total": today.total_duration,
            "today_count": today.count,
            "today_average": today.average_duration,
            "yesterday_total": yesterday.total_duration,
            "difference": today.total_duration - yesterday.total_duration,
        }

    def meal_frequency(
        self,
        days: int = const.MEAL_FREQUENCY_DAYS,
        anchor: date | datetime | None = None,
    ) -> dict[str, Any]:
        """Return per-day meal counts for the last `days` days and their average."""
        summaries = self.daily_statistics(days, anchor, const.RECORD_TYPE_MEAL)
        counts = {summary.label: summary.count for summary in summaries}
        return {
            "daily_counts": counts,
            "average": safe_average(sum(counts.values()), days),
        }

    def meal_type_distribution(
        self,
        days: int = const.MEAL_FREQUENCY_DAYS,
        anchor: date | datetime | None = None,
    ) -> dict[str, int]:
        """Return meal counts per type over the last `days` days."""
        summaries = self.daily_statistics(days, anchor, const.RECORD_TYPE_MEAL)
        return self.get_category_distribution(
            const.RECORD_TYPE_MEAL, summaries[0].start, summaries[-1].end
        )

    def top_meal_type(
        self,
        days: int = const.MEAL_FREQUENCY_DAYS,
        anchor: date | datetime | None = None,
    ) -> str | None:
        """Return the most frequent meal type over the last `days` days."""
        return self._engine.top_category(self.meal_type_distribution(days, anchor))
