"""Engine modules for BabyCare integration.

Contains pure computation engines:
- period_engine: Calendar interval arithmetic (day/week/month/year)
- statistics_engine: Period aggregation, distributions and chart series
"""

# Use relative imports within package to avoid mypy module resolution issues
from .period_engine import Period, PeriodCalculator
from .statistics_engine import (
    ATTRIBUTION_RULES,
    ChartPoint,
    PeriodSummary,
    StatisticsEngine,
    TimedEvent,
    attribute_by_end,
    attribute_by_occurrence,
    records_to_events,
)

__all__ = [
    "ATTRIBUTION_RULES",
    "ChartPoint",
    "Period",
    "PeriodCalculator",
    "PeriodSummary",
    "StatisticsEngine",
    "TimedEvent",
    "attribute_by_end",
    "attribute_by_occurrence",
    "records_to_events",
]
