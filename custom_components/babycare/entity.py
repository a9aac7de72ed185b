"""Base entity classes for BabyCare integration."""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .coordinator import BabyCareDataCoordinator
from .helpers.device_helpers import create_baby_device_info


class BabyCareCoordinatorEntity(CoordinatorEntity[BabyCareDataCoordinator]):
    """Base entity class for BabyCare sensors with typed coordinator access.

    Every entity belongs to the single baby device of its config entry and
    builds its unique id as `{entry_id}{suffix}`.
    """

    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: BabyCareDataCoordinator,
        entry: ConfigEntry,
        unique_id_suffix: str,
    ) -> None:
        """Initialize the entity.

        Args:
            coordinator: BabyCareDataCoordinator instance for data access.
            entry: ConfigEntry for this integration instance.
            unique_id_suffix: const.SENSOR_UID_SUFFIX_* value for this entity.
        """
        super().__init__(coordinator)
        self._entry = entry
        self._attr_unique_id = f"{entry.entry_id}{unique_id_suffix}"
        self._attr_device_info = create_baby_device_info(entry)

    @property
    def coordinator(self) -> BabyCareDataCoordinator:
        """Return typed coordinator.

        Uses object.__getattribute__ to access the private _coordinator attribute
        set by the parent CoordinatorEntity class.
        """
        return object.__getattribute__(self, "_coordinator")

    @coordinator.setter
    def coordinator(self, value: BabyCareDataCoordinator) -> None:
        """Set coordinator with proper typing."""
        object.__setattr__(self, "_coordinator", value)
