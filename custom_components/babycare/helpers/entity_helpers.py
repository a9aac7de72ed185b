# File: helpers/entity_helpers.py
"""Entry and signal helper functions for BabyCare.

All functions here require a `hass` object or produce names scoped to a
config entry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.exceptions import ServiceValidationError

from .. import const

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from ..coordinator import BabyCareDataCoordinator


# ==============================================================================
# Event Signal Helpers (Manager Communication)
# ==============================================================================


def get_event_signal(entry_id: str, suffix: str) -> str:
    """Build instance-scoped event signal name for dispatcher.

    Format: 'babycare_{entry_id}_{suffix}'

    Args:
        entry_id: ConfigEntry.entry_id from coordinator
        suffix: Signal suffix constant from const.py (e.g., SIGNAL_SUFFIX_RECORDS_CHANGED)

    Returns:
        Fully qualified signal name scoped to this integration instance

    Example:
        >>> get_event_signal("abc123", const.SIGNAL_SUFFIX_RECORDS_CHANGED)
        'babycare_abc123_records_changed'
    """
    return f"{const.DOMAIN}_{entry_id}_{suffix}"


# ==============================================================================
# Config Entry Lookup
# ==============================================================================


def get_first_babycare_entry(hass: HomeAssistant) -> str | None:
    """Retrieve the first set-up BabyCare config entry ID."""
    domain_entries = hass.data.get(const.DOMAIN)
    if not domain_entries:
        return None
    return next(iter(domain_entries.keys()), None)


def get_coordinator(hass: HomeAssistant) -> BabyCareDataCoordinator:
    """Return the coordinator of the first BabyCare entry.

    Raises:
        ServiceValidationError: No BabyCare entry is set up.
    """
    entry_id = get_first_babycare_entry(hass)
    if not entry_id:
        const.LOGGER.warning("WARNING: %s", const.MSG_NO_ENTRY_FOUND)
        raise ServiceValidationError(
            translation_domain=const.DOMAIN,
            translation_key=const.TRANS_KEY_ERROR_NO_ENTRY,
        )
    return hass.data[const.DOMAIN][entry_id][const.COORDINATOR]
