"""Direct unit tests for BabyCareStorageManager.

Tests loading (fresh and existing), structure repair, saving with error
handling, and storage removal.
"""

# pylint: disable=protected-access  # Accessing _store, _data for testing
# pylint: disable=redefined-outer-name  # Pytest fixtures redefine names

from unittest.mock import AsyncMock, patch

import pytest
from homeassistant.core import HomeAssistant

from custom_components.babycare import const
from custom_components.babycare.storage_manager import BabyCareStorageManager


@pytest.fixture
def storage_manager(hass: HomeAssistant) -> BabyCareStorageManager:
    """Return a storage manager instance."""
    return BabyCareStorageManager(hass)


async def test_async_initialize_creates_default_structure(
    storage_manager: BabyCareStorageManager,
) -> None:
    """Fresh installs get every section with defaults."""
    with patch.object(storage_manager._store, "async_load", return_value=None):
        await storage_manager.async_initialize()

    data = storage_manager.data

    assert data[const.DATA_SLEEP_RECORDS] == []
    assert data[const.DATA_MEAL_RECORDS] == []
    assert data[const.DATA_MILESTONES] == []
    assert data[const.DATA_NOTES] == const.DEFAULT_NOTES
    assert (
        data[const.DATA_META][const.DATA_META_SCHEMA_VERSION]
        == const.SCHEMA_VERSION_CURRENT
    )
    assert const.DATA_META_CREATED in data[const.DATA_META]


async def test_async_initialize_loads_existing_data(
    storage_manager: BabyCareStorageManager,
) -> None:
    """Existing data is kept and missing sections are added."""
    existing_data = {
        const.DATA_SLEEP_RECORDS: [
            {
                const.DATA_RECORD_ID: "s1",
                const.DATA_SLEEP_TIME: "2026-01-18T20:00:00+00:00",
                const.DATA_WAKE_TIME: "2026-01-19T06:00:00+00:00",
            }
        ],
        const.DATA_NOTES: "Allergic to peanuts",
    }

    with patch.object(storage_manager._store, "async_load", return_value=existing_data):
        await storage_manager.async_initialize()

    data = storage_manager.get_data()
    assert data[const.DATA_SLEEP_RECORDS][0][const.DATA_RECORD_ID] == "s1"
    assert data[const.DATA_NOTES] == "Allergic to peanuts"
    assert data[const.DATA_MEAL_RECORDS] == []
    assert data[const.DATA_MILESTONES] == []
    assert const.DATA_META in data


async def test_set_data_and_save(storage_manager: BabyCareStorageManager) -> None:
    """set_data replaces the cache and async_save writes it."""
    new_data = {const.DATA_SLEEP_RECORDS: [], const.DATA_NOTES: "x"}
    storage_manager.set_data(new_data)

    with patch.object(storage_manager._store, "async_save", new=AsyncMock()) as mock_save:
        await storage_manager.async_save()

    assert storage_manager.data is new_data
    mock_save.assert_awaited_once_with(new_data)


@pytest.mark.parametrize(
    "error",
    [OSError("disk full"), TypeError("not serializable"), ValueError("bad data")],
)
async def test_async_save_logs_errors(
    storage_manager: BabyCareStorageManager,
    error: Exception,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Save failures are logged, not raised."""
    with patch.object(
        storage_manager._store, "async_save", new=AsyncMock(side_effect=error)
    ):
        await storage_manager.async_save()

    assert "ERROR: Failed to save storage" in caplog.text


async def test_async_delete_storage(storage_manager: BabyCareStorageManager) -> None:
    """Deleting clears memory and removes the file."""
    storage_manager.set_data({const.DATA_NOTES: "x"})

    with patch.object(
        storage_manager._store, "async_remove", new=AsyncMock()
    ) as mock_remove:
        await storage_manager.async_delete_storage()

    mock_remove.assert_awaited_once()
    assert storage_manager.data == {}


async def test_async_delete_storage_handles_os_error(
    storage_manager: BabyCareStorageManager,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A removal failure is logged."""
    with patch.object(
        storage_manager._store,
        "async_remove",
        new=AsyncMock(side_effect=OSError("denied")),
    ):
        await storage_manager.async_delete_storage()

    assert "ERROR: Failed to remove storage file" in caplog.text
