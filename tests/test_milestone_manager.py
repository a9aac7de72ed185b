"""Tests for MilestoneManager."""

from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from homeassistant.exceptions import ServiceValidationError
import pytest

from custom_components.babycare import const
from custom_components.babycare.coordinator import BabyCareDataCoordinator

UTC_ZONE = ZoneInfo("UTC")
NOW = datetime(2026, 1, 19, 12, 0, tzinfo=UTC_ZONE)


async def test_add_milestone(coordinator: BabyCareDataCoordinator) -> None:
    """Milestones default to the 'other' category and an empty description."""
    record = coordinator.milestone_manager.add_milestone("Said mama", when=NOW)

    assert record[const.DATA_MILESTONE_TITLE] == "Said mama"
    assert record[const.DATA_MILESTONE_CATEGORY] == const.MILESTONE_CATEGORY_OTHER
    assert record[const.DATA_MILESTONE_DESCRIPTION] == ""
    assert record[const.DATA_MILESTONE_DATE] == NOW.isoformat()


async def test_update_milestone(coordinator: BabyCareDataCoordinator) -> None:
    """Only provided fields change."""
    manager = coordinator.milestone_manager
    record = manager.add_milestone("Said mama", when=NOW, description="At breakfast")

    updated = manager.update_milestone(
        record[const.DATA_RECORD_ID],
        category=const.MILESTONE_CATEGORY_FIRST_WORD,
    )

    assert updated[const.DATA_MILESTONE_CATEGORY] == const.MILESTONE_CATEGORY_FIRST_WORD
    assert updated[const.DATA_MILESTONE_TITLE] == "Said mama"
    assert updated[const.DATA_MILESTONE_DESCRIPTION] == "At breakfast"


async def test_update_unknown_milestone(coordinator: BabyCareDataCoordinator) -> None:
    """Unknown ids raise a user-facing error."""
    with pytest.raises(ServiceValidationError):
        coordinator.milestone_manager.update_milestone("missing", title="x")


async def test_latest_and_by_category(coordinator: BabyCareDataCoordinator) -> None:
    """latest is the most recent by date, not by insertion."""
    manager = coordinator.milestone_manager
    assert manager.latest is None

    recent = manager.add_milestone(
        "First steps", const.MILESTONE_CATEGORY_FIRST_WALK, when=NOW
    )
    older = manager.add_milestone(
        "First tooth", const.MILESTONE_CATEGORY_FIRST_TOOTH, when=NOW - timedelta(days=30)
    )

    assert manager.latest is recent
    assert manager.records_by_category(const.MILESTONE_CATEGORY_FIRST_TOOTH) == [older]
    assert coordinator.statistics_manager.get_category_distribution(
        const.RECORD_TYPE_MILESTONE
    ) == {
        const.MILESTONE_CATEGORY_FIRST_TOOTH: 1,
        const.MILESTONE_CATEGORY_FIRST_WALK: 1,
    }


async def test_delete_milestone(coordinator: BabyCareDataCoordinator) -> None:
    """Deleting removes the milestone."""
    manager = coordinator.milestone_manager
    record = manager.add_milestone("First smile", when=NOW)

    manager.delete_record(record[const.DATA_RECORD_ID])

    assert coordinator.milestones == []
    assert manager.latest is None
