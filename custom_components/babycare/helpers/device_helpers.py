# File: helpers/device_helpers.py
"""Device registry helper functions for BabyCare.

Functions that construct DeviceInfo objects for Home Assistant's device registry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.helpers.device_registry import DeviceEntryType, DeviceInfo

from .. import const

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry


def create_baby_device_info(config_entry: ConfigEntry) -> DeviceInfo:
    """Create device info for the baby tracked by a config entry.

    Args:
        config_entry: Config entry for this integration instance

    Returns:
        DeviceInfo dict for the baby device
    """
    baby_name = config_entry.data.get(const.CONF_BABY_NAME, const.DEFAULT_BABY_NAME)

    return DeviceInfo(
        identifiers={(const.DOMAIN, config_entry.entry_id)},
        name=baby_name,
        manufacturer=const.BABYCARE_TITLE,
        model="Baby Profile",
        entry_type=DeviceEntryType.SERVICE,
    )
