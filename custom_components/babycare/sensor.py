# File: sensor.py
"""Sensors for the BabyCare integration.

Sensors Defined in This File (7 classes, 10 entities):

# Sleep (3)
01. SleepTodaySensor
02. SleepStatusSensor
03. SleepPeriodSensor (one per period: daily, weekly, monthly, yearly)

# Meals / Water (2)
04. MealsTodaySensor
05. WaterTodaySensor

# Other (2)
06. MilestonesSensor
07. NotesSensor

All statistics come from the coordinator's StatisticsManager, so repeated
reads between record changes are served from its cache.
"""

from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorStateClass,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import UnitOfTime, UnitOfVolume
from homeassistant.core import HomeAssistant

from . import const
from .coordinator import BabyCareDataCoordinator
from .entity import BabyCareCoordinatorEntity
from .utils.dt_utils import dt_format_duration, dt_now_utc, dt_to_utc
from .utils.math_utils import calculate_percentage, round_value, seconds_to_hours


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities
):
    """Set up sensors for BabyCare integration."""
    coordinator: BabyCareDataCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]

    entities: list[SensorEntity] = [
        SleepTodaySensor(coordinator, entry),
        SleepStatusSensor(coordinator, entry),
    ]
    entities.extend(
        SleepPeriodSensor(coordinator, entry, period) for period in const.PERIODS
    )
    entities.extend(
        [
            MealsTodaySensor(coordinator, entry),
            WaterTodaySensor(coordinator, entry),
            MilestonesSensor(coordinator, entry),
            NotesSensor(coordinator, entry),
        ]
    )

    async_add_entities(entities)


def _hours(seconds: float) -> float:
    """Return seconds as hours rounded for display."""
    return round_value(seconds_to_hours(seconds))


# ------------------------------------------------------------------------------------------
# SLEEP
# ------------------------------------------------------------------------------------------


class SleepTodaySensor(BabyCareCoordinatorEntity, SensorEntity):
    """Hours slept in sessions that ended today.

    Overnight sleep is counted on the day the baby woke up, so the value
    only grows when a session ends.
    """

    _attr_translation_key = const.TRANS_KEY_SENSOR_SLEEP_TODAY
    _attr_device_class = SensorDeviceClass.DURATION
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_native_unit_of_measurement = UnitOfTime.HOURS
    _attr_icon = "mdi:sleep"

    def __init__(self, coordinator: BabyCareDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_SLEEP_TODAY)

    @property
    def native_value(self) -> float:
        """Return today's total sleep in hours."""
        overview = self.coordinator.statistics_manager.sleep_overview()
        return _hours(overview["today_total"])

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Compare today with yesterday."""
        overview = self.coordinator.statistics_manager.sleep_overview()
        return {
            const.ATTR_COUNT: overview["today_count"],
            const.ATTR_FORMATTED_DURATION: dt_format_duration(overview["today_total"]),
            const.ATTR_AVERAGE_HOURS: _hours(overview["today_average"]),
            const.ATTR_YESTERDAY_HOURS: _hours(overview["yesterday_total"]),
            const.ATTR_DIFFERENCE_HOURS: _hours(overview["difference"]),
        }


class SleepStatusSensor(BabyCareCoordinatorEntity, SensorEntity):
    """Whether a sleep session is in progress."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_SLEEP_STATUS
    _attr_device_class = SensorDeviceClass.ENUM
    _attr_options = [const.SLEEP_STATE_SLEEPING, const.SLEEP_STATE_AWAKE]

    def __init__(self, coordinator: BabyCareDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_SLEEP_STATUS)

    @property
    def native_value(self) -> str:
        """Return sleeping or awake."""
        if self.coordinator.sleep_manager.is_sleeping:
            return const.SLEEP_STATE_SLEEPING
        return const.SLEEP_STATE_AWAKE

    @property
    def icon(self) -> str:
        """Return an icon matching the state."""
        if self.coordinator.sleep_manager.is_sleeping:
            return "mdi:sleep"
        return "mdi:baby-face-outline"

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the session in progress, if any."""
        sleep_manager = self.coordinator.sleep_manager
        current = sleep_manager.current_record
        sleep_start = None
        elapsed_minutes = None
        if current is not None:
            started = dt_to_utc(current.get(const.DATA_SLEEP_TIME))
            if started is not None:
                sleep_start = started.isoformat()
                elapsed_minutes = int(
                    max((dt_now_utc() - started).total_seconds(), 0) // 60
                )

        return {
            const.ATTR_SLEEP_START: sleep_start,
            const.ATTR_ELAPSED_MINUTES: elapsed_minutes,
            const.ATTR_COMPLETED_RECORDS: len(sleep_manager.completed_records),
        }


class SleepPeriodSensor(BabyCareCoordinatorEntity, SensorEntity):
    """Sleep hours for the current day, week, month or year.

    The state is the current period's total; the `chart` attribute holds the
    configured window of periods, oldest first.
    """

    _attr_device_class = SensorDeviceClass.DURATION
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_native_unit_of_measurement = UnitOfTime.HOURS
    _attr_icon = "mdi:chart-bar"

    def __init__(
        self,
        coordinator: BabyCareDataCoordinator,
        entry: ConfigEntry,
        period: str,
    ):
        """Initialize the sensor.

        Args:
            coordinator: BabyCareDataCoordinator instance for data access.
            entry: ConfigEntry for this integration instance.
            period: One of const.PERIODS.
        """
        super().__init__(
            coordinator,
            entry,
            const.SENSOR_UID_SUFFIX_SLEEP_PERIOD.format(period=period),
        )
        self._period = period
        self._attr_translation_key = const.TRANS_KEY_SENSOR_SLEEP_PERIOD.format(
            period=period
        )

    @property
    def native_value(self) -> float:
        """Return the current period's total hours."""
        summaries = self.coordinator.statistics_manager.get_period_statistics(
            const.RECORD_TYPE_SLEEP, self._period
        )
        return _hours(summaries[-1].total_duration)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the chart window and the current period's figures."""
        stats = self.coordinator.statistics_manager
        summaries = stats.get_period_statistics(const.RECORD_TYPE_SLEEP, self._period)
        chart = stats.get_chart_series(const.RECORD_TYPE_SLEEP, self._period)
        current = summaries[-1]
        return {
            const.ATTR_CHART: [
                {**point.as_dict(), "value": round_value(point.value)}
                for point in chart
            ],
            const.ATTR_COUNT: current.count,
            const.ATTR_AVERAGE_HOURS: _hours(current.average_duration),
            const.ATTR_DAILY_AVERAGE_HOURS: _hours(current.daily_average_duration),
            const.ATTR_PERIOD_START: current.start.isoformat(),
            const.ATTR_PERIOD_END: current.end.isoformat(),
            const.ATTR_WINDOW_SIZE: len(summaries),
        }


# ------------------------------------------------------------------------------------------
# MEALS / WATER
# ------------------------------------------------------------------------------------------


class MealsTodaySensor(BabyCareCoordinatorEntity, SensorEntity):
    """Number of meals today, with last-week frequency attributes."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_MEALS_TODAY
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:food-apple"

    def __init__(self, coordinator: BabyCareDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_MEALS_TODAY)

    @property
    def native_value(self) -> int:
        """Return the number of meals eaten today."""
        return self.coordinator.statistics_manager.day_summary(
            const.RECORD_TYPE_MEAL
        ).count

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose meal frequency and meal type breakdown for the last week."""
        stats = self.coordinator.statistics_manager
        frequency = stats.meal_frequency()
        return {
            const.ATTR_WEEKLY_AVERAGE: round_value(frequency["average"]),
            const.ATTR_TOP_MEAL_TYPE: stats.top_meal_type(),
            const.ATTR_MEAL_TYPE_DISTRIBUTION: stats.meal_type_distribution(),
            const.ATTR_DAILY_COUNTS: frequency["daily_counts"],
        }


class WaterTodaySensor(BabyCareCoordinatorEntity, SensorEntity):
    """Water intake today, in millilitres."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_WATER_TODAY
    _attr_device_class = SensorDeviceClass.VOLUME
    _attr_state_class = SensorStateClass.TOTAL_INCREASING
    _attr_native_unit_of_measurement = UnitOfVolume.MILLILITERS
    _attr_icon = "mdi:cup-water"

    def __init__(self, coordinator: BabyCareDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_WATER_TODAY)

    @property
    def native_value(self) -> float:
        """Return today's water intake."""
        return self.coordinator.statistics_manager.day_summary(
            const.RECORD_TYPE_WATER
        ).total_quantity

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the goal and the progress toward it."""
        goal = self.coordinator.daily_water_goal_ml
        return {
            const.ATTR_GOAL_ML: goal,
            const.ATTR_PROGRESS: calculate_percentage(self.native_value, goal),
        }


# ------------------------------------------------------------------------------------------
# MILESTONES / NOTES
# ------------------------------------------------------------------------------------------


class MilestonesSensor(BabyCareCoordinatorEntity, SensorEntity):
    """Number of recorded milestones."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_MILESTONES
    _attr_state_class = SensorStateClass.TOTAL
    _attr_icon = "mdi:star-circle"

    def __init__(self, coordinator: BabyCareDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_MILESTONES)

    @property
    def native_value(self) -> int:
        """Return the number of milestones."""
        return len(self.coordinator.milestones)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the latest milestone and the per-category counts."""
        latest = self.coordinator.milestone_manager.latest or {}
        return {
            const.ATTR_LATEST_TITLE: latest.get(const.DATA_MILESTONE_TITLE),
            const.ATTR_LATEST_DATE: latest.get(const.DATA_MILESTONE_DATE),
            const.ATTR_CATEGORY_DISTRIBUTION: (
                self.coordinator.statistics_manager.get_category_distribution(
                    const.RECORD_TYPE_MILESTONE
                )
            ),
        }


class NotesSensor(BabyCareCoordinatorEntity, SensorEntity):
    """Free-text notes; the state is a preview, the full text an attribute."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_NOTES
    _attr_icon = "mdi:note-text"

    def __init__(self, coordinator: BabyCareDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_NOTES)

    @property
    def native_value(self) -> str:
        """Return the first line of the notes, cut to the preview length."""
        notes = self.coordinator.notes.strip()
        first_line = notes.splitlines()[0] if notes else ""
        if len(first_line) > const.NOTES_PREVIEW_LENGTH:
            return first_line[: const.NOTES_PREVIEW_LENGTH - 1] + "…"
        return first_line

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the full notes text."""
        return {const.ATTR_NOTES: self.coordinator.notes}
