# File: __init__.py
"""Initialization file for the BabyCare integration.

Handles setting up the integration, including loading configuration entries,
initializing data storage, and preparing the coordinator for data handling.

Key Features:
- Config entry setup and unload support.
- Coordinator initialization for data synchronization.
- Storage management for persistent data handling.
"""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady

from . import const
from .coordinator import BabyCareDataCoordinator
from .services import async_setup_services, async_unload_services
from .storage_manager import BabyCareStorageManager


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the integration from a config entry."""
    const.LOGGER.info("INFO: Starting setup for BabyCare entry: %s", entry.entry_id)

    # Must be done before any component uses the datetime helpers
    const.set_default_timezone(hass)

    storage_manager = BabyCareStorageManager(hass, const.STORAGE_KEY)
    await storage_manager.async_initialize()

    coordinator = BabyCareDataCoordinator(hass, entry, storage_manager)

    try:
        await coordinator.async_config_entry_first_refresh()
    except ConfigEntryNotReady as e:
        const.LOGGER.error("ERROR: Failed to refresh coordinator data: %s", e)
        raise ConfigEntryNotReady from e

    hass.data.setdefault(const.DOMAIN, {})[entry.entry_id] = {
        const.COORDINATOR: coordinator,
        const.STORAGE_MANAGER: storage_manager,
    }

    async_setup_services(hass)

    await hass.config_entries.async_forward_entry_setups(entry, const.PLATFORMS)

    # Window sizes and the update interval are read at setup; reload on change
    entry.async_on_unload(entry.add_update_listener(async_update_options))

    const.LOGGER.info("INFO: BabyCare setup complete for entry: %s", entry.entry_id)
    return True


async def async_update_options(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the entry after its options changed."""
    const.LOGGER.debug("DEBUG: Options changed for entry %s, reloading", entry.entry_id)
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass, entry):
    """Unload a config entry."""
    const.LOGGER.info("INFO: Unloading BabyCare entry: %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, const.PLATFORMS)

    if unload_ok:
        hass.data[const.DOMAIN].pop(entry.entry_id)

        await async_unload_services(hass)

    return unload_ok


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle removal of a config entry."""
    const.LOGGER.info("INFO: Removing BabyCare entry: %s", entry.entry_id)

    if const.DOMAIN in hass.data and entry.entry_id in hass.data[const.DOMAIN]:
        storage_manager: BabyCareStorageManager = hass.data[const.DOMAIN][
            entry.entry_id
        ][const.STORAGE_MANAGER]
        await storage_manager.async_delete_storage()
    else:
        storage_manager = BabyCareStorageManager(hass, const.STORAGE_KEY)
        await storage_manager.async_delete_storage()

    const.LOGGER.info("INFO: BabyCare entry data cleared: %s", entry.entry_id)
