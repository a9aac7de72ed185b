# File: helpers/__init__.py
"""Home Assistant-bound helper functions for BabyCare.

This module contains functions that REQUIRE Home Assistant dependencies.

NOTE: Functions that need `hass` object belong here, NOT in utils/.

Submodules:
    - entity_helpers: Event signal naming, config entry and coordinator lookup
    - device_helpers: DeviceInfo construction

Usage:
    from . import entity_helpers
    from .device_helpers import create_baby_device_info
"""

from . import device_helpers, entity_helpers

__all__ = [
    "device_helpers",
    "entity_helpers",
]
