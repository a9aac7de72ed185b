# File: storage_manager.py
"""Handles persistent data storage for the BabyCare integration.

Uses Home Assistant's Storage helper to save and load baby-care records,
ensuring the state is preserved across restarts. This includes sleep
sessions, meals, milestones and the free-text notes.
"""

from __future__ import annotations

from typing import Any

from homeassistant.core import HomeAssistant
from homeassistant.helpers.storage import Store

from . import const
from .utils.dt_utils import dt_now_utc


class BabyCareStorageManager:
    """Manages loading, saving, and accessing data from Home Assistant's storage."""

    def __init__(
        self, hass: HomeAssistant, storage_key: str = const.STORAGE_KEY
    ) -> None:
        """Initialize the storage manager.

        Args:
            hass: Home Assistant core object.
            storage_key: Key to identify storage location (default: const.STORAGE_KEY).

        """
        self.hass = hass
        self._storage_key = storage_key
        self._store: Store = Store(hass, const.STORAGE_VERSION, storage_key)
        self._data: dict[str, Any] = {}  # In-memory data cache for quick access.

    def _get_default_structure(self) -> dict[str, Any]:
        """Get the default empty data structure.

        Returns:
            dict: Default structure with all data keys initialized.
        """
        return {
            const.DATA_META: {
                const.DATA_META_SCHEMA_VERSION: const.SCHEMA_VERSION_CURRENT,
                const.DATA_META_CREATED: dt_now_utc().isoformat(),
            },
            const.DATA_SLEEP_RECORDS: [],
            const.DATA_MEAL_RECORDS: [],
            const.DATA_MILESTONES: [],
            const.DATA_NOTES: const.DEFAULT_NOTES,
        }

    def _ensure_structure(self) -> None:
        """Add any section missing from loaded data."""
        for key, value in self._get_default_structure().items():
            if key not in self._data:
                const.LOGGER.debug("DEBUG: Adding missing storage section '%s'", key)
                self._data[key] = value

    def _summary(self, data: dict[str, Any]) -> dict[str, int]:
        """Return record counts for debug logging."""
        return {
            "sleep_records": len(data.get(const.DATA_SLEEP_RECORDS, [])),
            "meal_records": len(data.get(const.DATA_MEAL_RECORDS, [])),
            "milestones": len(data.get(const.DATA_MILESTONES, [])),
            "total_keys": len(data.keys()),
        }

    async def async_initialize(self) -> None:
        """Load data from storage during startup.

        If no data exists, initializes with an empty structure.
        """
        const.LOGGER.debug("DEBUG: BabyCareStorageManager: Loading data from storage")
        existing_data = await self._store.async_load()

        if existing_data is None:
            const.LOGGER.info("INFO: No existing storage found. Initializing new data")
            self._data = self._get_default_structure()
        else:
            self._data = existing_data
            self._ensure_structure()
            const.LOGGER.debug(
                "DEBUG: Loaded existing data from storage: %s",
                self._summary(self._data),
            )

    @property
    def data(self) -> dict[str, Any]:
        """Retrieve the in-memory data cache."""
        return self._data

    def get_data(self) -> dict[str, Any]:
        """Retrieve the in-memory data cache."""
        return self._data

    def set_data(self, new_data: dict[str, Any]) -> None:
        """Replace the entire in-memory data structure."""
        const.LOGGER.debug(
            "DEBUG: Storage manager set_data called with: %s", self._summary(new_data)
        )
        self._data = new_data

    async def async_save(self) -> None:
        """Save the current data structure to storage asynchronously.

        Raises:
            No exceptions raised - errors are logged but do not stop execution.
            OSError: Logged when file system issues prevent saving.
            TypeError: Logged when data contains non-serializable types.
            ValueError: Logged when data is invalid for JSON serialization.
        """
        try:
            await self._store.async_save(self._data)
            const.LOGGER.debug("DEBUG: Data saved successfully to storage")
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to file system error: %s. "
                "Check disk space and file permissions for %s",
                err,
                self._store.path,
            )
        except TypeError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to non-serializable data: %s. "
                "Data contains types that cannot be converted to JSON",
                err,
            )
        except ValueError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to invalid data format: %s. "
                "Data structure may be corrupted",
                err,
            )

    async def async_delete_storage(self) -> None:
        """Delete the storage file completely from disk.

        This clears all in-memory data and removes the storage file using
        Home Assistant's Store API for proper file handling.
        """
        self._data.clear()

        try:
            await self._store.async_remove()
            const.LOGGER.info(
                "INFO: Storage file removed successfully: %s",
                self._store.path,
            )
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to remove storage file %s: %s. Check file permissions",
                self._store.path,
                err,
            )
