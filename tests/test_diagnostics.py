"""Tests for BabyCare diagnostics."""

from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.babycare import const
from custom_components.babycare.diagnostics import async_get_config_entry_diagnostics
from tests.helpers import call_service


async def test_config_entry_diagnostics(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Diagnostics return the raw storage and the cache counters."""
    await call_service(
        hass,
        const.SERVICE_ADD_MILESTONE,
        {const.FIELD_TITLE: "First word"},
    )

    result = await async_get_config_entry_diagnostics(hass, init_integration)

    storage = result["storage"]
    assert storage[const.DATA_MILESTONES][0][const.DATA_MILESTONE_TITLE] == "First word"
    assert storage[const.DATA_SLEEP_RECORDS] == []
    assert set(result["statistics_cache"]) == {"generation", "size", "hits", "misses"}
    assert result["statistics_cache"]["generation"] >= 1
