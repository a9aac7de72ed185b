# File: coordinator.py
"""Coordinator for the BabyCare integration.

Owns the in-memory storage blob, the record managers (sleep, meals,
milestones) and the statistics service. Entities read through it; record
changes go through the managers, which persist via `_persist_and_update()`.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from . import const
from .managers import MealManager, MilestoneManager, SleepManager, StatisticsManager
from .storage_manager import BabyCareStorageManager


class BabyCareDataCoordinator(DataUpdateCoordinator):
    """Coordinator for BabyCare integration.

    The periodic refresh only re-renders entities: records change through
    services, and elapsed-time values (sleep in progress, "today") need a
    tick to stay current.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        storage_manager: BabyCareStorageManager,
    ):
        """Initialize the BabyCareDataCoordinator."""
        update_interval_minutes = config_entry.options.get(
            const.CONF_UPDATE_INTERVAL, const.DEFAULT_UPDATE_INTERVAL
        )

        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}{const.COORDINATOR_SUFFIX}",
            update_interval=timedelta(minutes=update_interval_minutes),
        )
        self.config_entry = config_entry
        self.storage_manager = storage_manager
        self._data: dict[str, Any] = {}

        self.statistics_manager = StatisticsManager(hass, self)
        self.sleep_manager = SleepManager(hass, self)
        self.meal_manager = MealManager(hass, self)
        self.milestone_manager = MilestoneManager(hass, self)

    # -------------------------------------------------------------------------------------
    # Setup / Refresh
    # -------------------------------------------------------------------------------------

    async def _async_update_data(self):
        """Periodic update."""
        try:
            for key in (
                const.DATA_SLEEP_RECORDS,
                const.DATA_MEAL_RECORDS,
                const.DATA_MILESTONES,
            ):
                if not isinstance(self._data.setdefault(key, []), list):
                    raise TypeError(f"Storage section '{key}' is not a list")
            return self._data
        except Exception as err:  # pylint: disable=broad-exception-caught
            raise UpdateFailed(f"Error updating BabyCare data: {err}") from err

    async def async_config_entry_first_refresh(self):
        """Load from storage and set up managers."""
        self._data = self.storage_manager.get_data()

        schema_version = self._data.get(const.DATA_META, {}).get(
            const.DATA_META_SCHEMA_VERSION, const.DEFAULT_ZERO
        )
        const.LOGGER.debug(
            "DEBUG: Storage at schema version %s (current %s)",
            schema_version,
            const.SCHEMA_VERSION_CURRENT,
        )

        for manager in (
            self.statistics_manager,
            self.sleep_manager,
            self.meal_manager,
            self.milestone_manager,
        ):
            await manager.async_setup()

        await super().async_config_entry_first_refresh()

    # -------------------------------------------------------------------------------------
    # Data Access
    # -------------------------------------------------------------------------------------

    @property
    def sleep_records(self) -> list[dict[str, Any]]:
        """Return stored sleep records."""
        return self._data.get(const.DATA_SLEEP_RECORDS, [])

    @property
    def meal_records(self) -> list[dict[str, Any]]:
        """Return stored meal records."""
        return self._data.get(const.DATA_MEAL_RECORDS, [])

    @property
    def milestones(self) -> list[dict[str, Any]]:
        """Return stored milestones."""
        return self._data.get(const.DATA_MILESTONES, [])

    @property
    def notes(self) -> str:
        """Return the notes text."""
        return self._data.get(const.DATA_NOTES, const.DEFAULT_NOTES)

    @property
    def daily_water_goal_ml(self) -> int:
        """Return the configured daily water goal."""
        return int(
            self.config_entry.options.get(
                const.CONF_DAILY_WATER_GOAL_ML,
                self.config_entry.data.get(
                    const.CONF_DAILY_WATER_GOAL_ML, const.DEFAULT_DAILY_WATER_GOAL_ML
                ),
            )
        )

    # -------------------------------------------------------------------------------------
    # Notes / Bulk Operations
    # -------------------------------------------------------------------------------------

    def set_notes(self, notes: str) -> None:
        """Replace the notes text."""
        self._data[const.DATA_NOTES] = notes
        self._persist_and_update()
        const.LOGGER.info("INFO: Notes updated (%s characters)", len(notes))

    def clear_all_data(self, record_type: str = const.RECORD_TYPE_ALL) -> None:
        """Clear one record type, or every record type."""
        managers = {
            const.RECORD_TYPE_SLEEP: self.sleep_manager,
            const.RECORD_TYPE_MEAL: self.meal_manager,
            const.RECORD_TYPE_MILESTONE: self.milestone_manager,
        }
        targets = (
            list(managers.values())
            if record_type == const.RECORD_TYPE_ALL
            else [managers[record_type]]
        )
        for manager in targets:
            manager.clear_all()
        const.LOGGER.warning("WARNING: Cleared BabyCare records: %s", record_type)

    # -------------------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------------------

    def _persist(self):
        """Save to persistent storage."""
        self.storage_manager.set_data(self._data)
        self.hass.add_job(self.storage_manager.async_save)

    def _persist_and_update(self):
        """Save to persistent storage and push the new data to entities."""
        self._persist()
        self.async_set_updated_data(self._data)
