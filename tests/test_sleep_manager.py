"""Tests for SleepManager - session lifecycle, manual edits and sample data."""

from __future__ import annotations

from datetime import datetime, timedelta
import random
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ServiceValidationError
import pytest

from custom_components.babycare import const
from custom_components.babycare.coordinator import BabyCareDataCoordinator
from custom_components.babycare.managers import SleepManager

UTC_ZONE = ZoneInfo("UTC")
NOW = datetime(2026, 1, 19, 12, 0, tzinfo=UTC_ZONE)


class TestSessionLifecycle:
    """start_sleep / end_sleep."""

    async def test_start_sleep_creates_open_record(
        self, coordinator: BabyCareDataCoordinator
    ) -> None:
        """A started session has no wake time and is current."""
        manager = coordinator.sleep_manager

        record = manager.start_sleep(now=NOW)

        assert record[const.DATA_SLEEP_TIME] == NOW.isoformat()
        assert record[const.DATA_WAKE_TIME] is None
        assert record[const.DATA_RECORD_ID]
        assert manager.is_sleeping
        assert manager.current_record is record

    async def test_start_sleep_minutes_ago(
        self, coordinator: BabyCareDataCoordinator
    ) -> None:
        """minutes_ago moves the start back in time."""
        record = coordinator.sleep_manager.start_sleep(minutes_ago=15, now=NOW)

        assert record[const.DATA_SLEEP_TIME] == (NOW - timedelta(minutes=15)).isoformat()

    async def test_second_start_is_rejected(
        self, coordinator: BabyCareDataCoordinator
    ) -> None:
        """Only one session can be in progress."""
        coordinator.sleep_manager.start_sleep(now=NOW)

        with pytest.raises(ServiceValidationError):
            coordinator.sleep_manager.start_sleep(now=NOW)

        assert len(coordinator.sleep_records) == 1

    async def test_end_sleep_completes_session(
        self, coordinator: BabyCareDataCoordinator
    ) -> None:
        """Ending sets the wake time on the current session."""
        manager = coordinator.sleep_manager
        manager.start_sleep(minutes_ago=90, now=NOW)

        record = manager.end_sleep(now=NOW)

        assert record[const.DATA_WAKE_TIME] == NOW.isoformat()
        assert not manager.is_sleeping
        assert manager.completed_records == [record]

    async def test_end_without_session_is_rejected(
        self, coordinator: BabyCareDataCoordinator
    ) -> None:
        """Cannot end a session that was never started."""
        with pytest.raises(ServiceValidationError):
            coordinator.sleep_manager.end_sleep(now=NOW)

    async def test_end_before_start_is_rejected(
        self, coordinator: BabyCareDataCoordinator
    ) -> None:
        """A wake time before the sleep time leaves the session open."""
        manager = coordinator.sleep_manager
        manager.start_sleep(now=NOW)

        with pytest.raises(ServiceValidationError):
            manager.end_sleep(minutes_ago=30, now=NOW + timedelta(minutes=10))

        assert manager.is_sleeping


class TestManualEdits:
    """add_record / update_record / delete_record."""

    async def test_add_completed_record(
        self, coordinator: BabyCareDataCoordinator
    ) -> None:
        """Times are normalized to UTC ISO strings."""
        record = coordinator.sleep_manager.add_record(
            "2026-01-18T21:00:00+01:00", "2026-01-19T06:30:00+01:00"
        )

        assert record[const.DATA_SLEEP_TIME] == "2026-01-18T20:00:00+00:00"
        assert record[const.DATA_WAKE_TIME] == "2026-01-19T05:30:00+00:00"

    async def test_add_rejects_wake_before_sleep(
        self, coordinator: BabyCareDataCoordinator
    ) -> None:
        """Equal or inverted times are invalid."""
        with pytest.raises(ServiceValidationError):
            coordinator.sleep_manager.add_record(NOW, NOW)

        assert coordinator.sleep_records == []

    async def test_add_open_record_while_sleeping_is_rejected(
        self, coordinator: BabyCareDataCoordinator
    ) -> None:
        """A manual open session conflicts with the current one."""
        manager = coordinator.sleep_manager
        manager.start_sleep(now=NOW)

        with pytest.raises(ServiceValidationError):
            manager.add_record(NOW - timedelta(hours=3))

        # A completed session is still allowed
        manager.add_record(NOW - timedelta(hours=5), NOW - timedelta(hours=4))
        assert len(coordinator.sleep_records) == 2

    async def test_update_only_changes_given_fields(
        self, coordinator: BabyCareDataCoordinator
    ) -> None:
        """Updating the wake time keeps the sleep time."""
        manager = coordinator.sleep_manager
        record = manager.add_record(NOW - timedelta(hours=2), NOW - timedelta(hours=1))

        updated = manager.update_record(record[const.DATA_RECORD_ID], wake_time=NOW)

        assert updated[const.DATA_SLEEP_TIME] == (NOW - timedelta(hours=2)).isoformat()
        assert updated[const.DATA_WAKE_TIME] == NOW.isoformat()

    async def test_update_rejects_invalid_ordering(
        self, coordinator: BabyCareDataCoordinator
    ) -> None:
        """An update that inverts the session is refused without changes."""
        manager = coordinator.sleep_manager
        record = manager.add_record(NOW - timedelta(hours=2), NOW - timedelta(hours=1))

        with pytest.raises(ServiceValidationError):
            manager.update_record(record[const.DATA_RECORD_ID], sleep_time=NOW)

        assert record[const.DATA_SLEEP_TIME] == (NOW - timedelta(hours=2)).isoformat()

    async def test_update_unknown_id(self, coordinator: BabyCareDataCoordinator) -> None:
        """Unknown ids raise a user-facing error."""
        with pytest.raises(ServiceValidationError):
            coordinator.sleep_manager.update_record("missing", wake_time=NOW)

    async def test_delete_record(self, coordinator: BabyCareDataCoordinator) -> None:
        """Deleting removes the record."""
        manager = coordinator.sleep_manager
        record = manager.add_record(NOW - timedelta(hours=2), NOW)

        manager.delete_record(record[const.DATA_RECORD_ID])

        assert coordinator.sleep_records == []
        with pytest.raises(ServiceValidationError):
            manager.delete_record(record[const.DATA_RECORD_ID])

    async def test_completed_records_newest_first(
        self, coordinator: BabyCareDataCoordinator
    ) -> None:
        """Completed sessions are ordered by sleep time, newest first."""
        manager = coordinator.sleep_manager
        older = manager.add_record(NOW - timedelta(days=2), NOW - timedelta(days=2, hours=-8))
        newer = manager.add_record(NOW - timedelta(days=1), NOW - timedelta(days=1, hours=-8))
        manager.start_sleep(now=NOW)

        assert manager.completed_records == [newer, older]


class TestPersistence:
    """Every mutation persists and notifies."""

    async def test_mutation_persists_and_updates(
        self,
        hass: HomeAssistant,
        coordinator: BabyCareDataCoordinator,
        mock_storage_manager: MagicMock,
    ) -> None:
        """Storage is written and entities receive the new data."""
        coordinator.sleep_manager.start_sleep(now=NOW)
        await hass.async_block_till_done()

        mock_storage_manager.set_data.assert_called()
        mock_storage_manager.async_save.assert_awaited()
        assert coordinator.data is coordinator._data  # pylint: disable=protected-access

    async def test_mutation_invalidates_statistics(
        self, coordinator: BabyCareDataCoordinator
    ) -> None:
        """The statistics cache moves to a new generation synchronously."""
        generation = coordinator.statistics_manager.generation

        coordinator.sleep_manager.add_record(NOW - timedelta(hours=1), NOW)

        assert coordinator.statistics_manager.generation == generation + 1

    async def test_failed_mutation_does_not_invalidate(
        self, coordinator: BabyCareDataCoordinator
    ) -> None:
        """Rejected input leaves the cache alone."""
        generation = coordinator.statistics_manager.generation

        with pytest.raises(ServiceValidationError):
            coordinator.sleep_manager.end_sleep(now=NOW)

        assert coordinator.statistics_manager.generation == generation


class TestSampleData:
    """Sample data generation."""

    def test_build_sample_records_are_plausible(self) -> None:
        """Sessions are completed, in the past, at night and at most 11.5 hours."""
        records = SleepManager.build_sample_records(3, NOW, random.Random(42))

        assert 0 < len(records) <= 3 * const.SAMPLE_RECORDS_PER_MONTH_MAX
        for record in records:
            sleep_time = datetime.fromisoformat(record[const.DATA_SLEEP_TIME])
            wake_time = datetime.fromisoformat(record[const.DATA_WAKE_TIME])
            assert sleep_time < wake_time <= NOW
            assert const.SAMPLE_SLEEP_HOUR_MIN <= sleep_time.hour <= const.SAMPLE_SLEEP_HOUR_MAX
            assert wake_time - sleep_time <= timedelta(
                hours=const.SAMPLE_SLEEP_DURATION_HOURS_MAX
            )

        months = {
            datetime.fromisoformat(record[const.DATA_SLEEP_TIME]).strftime("%Y-%m")
            for record in records
        }
        assert months <= {"2025-11", "2025-12", "2026-01"}
        assert "2025-11" in months

    async def test_generate_replaces_existing_records(
        self, coordinator: BabyCareDataCoordinator
    ) -> None:
        """Generation is a bulk reload that replaces existing sessions."""
        manager = coordinator.sleep_manager
        manual = manager.add_record(NOW - timedelta(hours=2), NOW - timedelta(hours=1))
        generation = coordinator.statistics_manager.generation

        count = manager.generate_sample_data(2, NOW, random.Random(7))

        assert count == len(coordinator.sleep_records)
        assert manual not in coordinator.sleep_records
        assert not manager.is_sleeping
        assert coordinator.statistics_manager.generation == generation + 1
