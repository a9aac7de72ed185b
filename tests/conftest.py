"""Shared fixtures for BabyCare tests."""

from collections.abc import Generator
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch
from zoneinfo import ZoneInfo

import pytest
from homeassistant.config_entries import ConfigEntryState
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.babycare import const
from custom_components.babycare.coordinator import BabyCareDataCoordinator
from custom_components.babycare.utils import dt_utils

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name

UTC_ZONE = ZoneInfo("UTC")


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


@pytest.fixture(autouse=True)
def reset_default_timezone() -> Generator[None]:
    """Start every test in UTC and undo any zone set by integration setup."""
    previous = dt_utils.get_default_timezone()
    dt_utils.set_default_timezone(UTC_ZONE)
    yield
    dt_utils.set_default_timezone(previous)


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Return a mock config entry."""
    return MockConfigEntry(
        domain=const.DOMAIN,
        title="BabyCare (Mia)",
        data={
            const.CONF_BABY_NAME: "Mia",
            const.CONF_DAILY_WATER_GOAL_ML: 800,
        },
        options={},
        entry_id="test_entry_id",
        unique_id="test_unique_id",
    )


@pytest.fixture
def mock_storage_data() -> dict[str, Any]:
    """Return mock storage data structure."""
    return {
        const.DATA_META: {const.DATA_META_SCHEMA_VERSION: const.SCHEMA_VERSION_CURRENT},
        const.DATA_SLEEP_RECORDS: [],
        const.DATA_MEAL_RECORDS: [],
        const.DATA_MILESTONES: [],
        const.DATA_NOTES: "",
    }


@pytest.fixture
def mock_storage_manager(
    mock_storage_data: dict[str, Any],  # pylint: disable=redefined-outer-name
) -> MagicMock:
    """Return a mock storage manager."""
    mock = MagicMock()
    mock.data = mock_storage_data
    mock.get_data = MagicMock(return_value=mock_storage_data)
    mock.async_save = AsyncMock()
    return mock


@pytest.fixture
async def coordinator(
    hass: HomeAssistant,
    mock_config_entry: MockConfigEntry,  # pylint: disable=redefined-outer-name
    mock_storage_manager: MagicMock,  # pylint: disable=redefined-outer-name
    mock_storage_data: dict[str, Any],  # pylint: disable=redefined-outer-name
) -> BabyCareDataCoordinator:
    """Return a coordinator with real managers and mocked storage.

    The managers are set up without a config entry setup, so the midnight
    timer is patched out.
    """
    mock_config_entry.add_to_hass(hass)
    coord = BabyCareDataCoordinator(hass, mock_config_entry, mock_storage_manager)
    # pylint: disable=protected-access
    coord._data = mock_storage_data
    # pylint: enable=protected-access

    with patch(
        "custom_components.babycare.managers.statistics_manager.async_track_time_change",
        return_value=MagicMock(),
    ):
        for manager in (
            coord.statistics_manager,
            coord.sleep_manager,
            coord.meal_manager,
            coord.milestone_manager,
        ):
            await manager.async_setup()

    return coord


@pytest.fixture
async def init_integration(
    hass: HomeAssistant,
    mock_config_entry: MockConfigEntry,  # pylint: disable=redefined-outer-name
    mock_storage_data: dict[str, Any],  # pylint: disable=redefined-outer-name
):
    """Set up the BabyCare integration for testing with mocked storage."""
    mock_config_entry.add_to_hass(hass)

    with patch(
        "homeassistant.helpers.storage.Store.async_load",
        return_value=mock_storage_data,
    ):
        assert await hass.config_entries.async_setup(mock_config_entry.entry_id)
        await hass.async_block_till_done()

    yield mock_config_entry

    # Cancels the midnight timer and dispatcher subscriptions
    if mock_config_entry.state is ConfigEntryState.LOADED:
        await hass.config_entries.async_unload(mock_config_entry.entry_id)
        await hass.async_block_till_done()
