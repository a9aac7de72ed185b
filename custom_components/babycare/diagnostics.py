"""Diagnostics support for BabyCare integration.

Returns the raw storage data, identical to the babycare_data file, plus the
state of the statistics cache.
"""

from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from . import const
from .coordinator import BabyCareDataCoordinator


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator: BabyCareDataCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]
    stats = coordinator.statistics_manager

    return {
        "storage": coordinator.storage_manager.data,
        "statistics_cache": {
            "generation": stats.generation,
            "size": stats.cache_size,
            "hits": stats.cache_hits,
            "misses": stats.cache_misses,
        },
    }
