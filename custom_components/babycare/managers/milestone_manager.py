"""Milestone Manager - Developmental milestones."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from .. import const
from ..utils.dt_utils import dt_now_utc, dt_to_utc
from .record_manager import RecordManager

if TYPE_CHECKING:
    from ..type_defs import RecordData


__all__ = ["MilestoneManager"]

_UPDATABLE_FIELDS = {
    const.FIELD_TITLE: const.DATA_MILESTONE_TITLE,
    const.FIELD_DESCRIPTION: const.DATA_MILESTONE_DESCRIPTION,
    const.FIELD_CATEGORY: const.DATA_MILESTONE_CATEGORY,
}


class MilestoneManager(RecordManager):
    """Manager for milestones."""

    record_type = const.RECORD_TYPE_MILESTONE
    data_key = const.DATA_MILESTONES
    sort_field = const.DATA_MILESTONE_DATE

    def add_milestone(
        self,
        title: str,
        category: str = const.MILESTONE_CATEGORY_OTHER,
        when: datetime | str | None = None,
        description: str = "",
    ) -> RecordData:
        """Record a milestone (defaults to now)."""
        occurred = dt_to_utc(when) or dt_now_utc()
        return self._insert(
            {
                const.DATA_MILESTONE_DATE: occurred.isoformat(),
                const.DATA_MILESTONE_TITLE: title,
                const.DATA_MILESTONE_DESCRIPTION: description,
                const.DATA_MILESTONE_CATEGORY: category,
            }
        )

    def update_milestone(
        self, record_id: str, when: datetime | str | None = None, **fields: Any
    ) -> RecordData:
        """Change fields of an existing milestone; unknown keys are ignored."""
        changes: dict[str, Any] = {
            _UPDATABLE_FIELDS[key]: value
            for key, value in fields.items()
            if key in _UPDATABLE_FIELDS
        }
        if when is not None:
            changes[const.DATA_MILESTONE_DATE] = self._iso(when)
        return self._update(record_id, changes)

    def records_by_category(self, category: str) -> list[RecordData]:
        """Return milestones of one category, newest first."""
        return [
            record
            for record in self.sorted_records()
            if record.get(const.DATA_MILESTONE_CATEGORY) == category
        ]

    @property
    def latest(self) -> RecordData | None:
        """Return the most recent milestone, if any."""
        ordered = self.sorted_records()
        return ordered[0] if ordered else None
