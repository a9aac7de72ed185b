"""Tests for BabyCare setup, unload and removal."""

from unittest.mock import AsyncMock, patch

from homeassistant.config_entries import ConfigEntryState
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.babycare import const
from custom_components.babycare.utils import dt_utils


async def test_setup_entry(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Setup stores the coordinator and registers services."""
    assert init_integration.state is ConfigEntryState.LOADED
    assert const.COORDINATOR in hass.data[const.DOMAIN][init_integration.entry_id]
    assert hass.services.has_service(const.DOMAIN, const.SERVICE_GET_STATISTICS)
    assert str(dt_utils.get_default_timezone()) == hass.config.time_zone


async def test_unload_entry(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Unloading removes services and runtime data."""
    assert await hass.config_entries.async_unload(init_integration.entry_id)
    await hass.async_block_till_done()

    assert init_integration.state is ConfigEntryState.NOT_LOADED
    assert init_integration.entry_id not in hass.data[const.DOMAIN]
    assert not hass.services.has_service(const.DOMAIN, const.SERVICE_START_SLEEP)


async def test_reload_keeps_records(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Records saved before a reload are loaded again."""
    await hass.services.async_call(
        const.DOMAIN, const.SERVICE_SET_NOTES, {const.FIELD_NOTES: "Keep me"}, blocking=True
    )
    await hass.async_block_till_done()

    assert await hass.config_entries.async_reload(init_integration.entry_id)
    await hass.async_block_till_done()

    coordinator = hass.data[const.DOMAIN][init_integration.entry_id][const.COORDINATOR]
    assert coordinator.notes == "Keep me"


async def test_remove_entry_deletes_storage(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Removing the entry deletes the storage file."""
    with patch(
        "homeassistant.helpers.storage.Store.async_remove", new=AsyncMock()
    ) as mock_remove:
        await hass.config_entries.async_remove(init_integration.entry_id)
        await hass.async_block_till_done()

    mock_remove.assert_awaited_once()
