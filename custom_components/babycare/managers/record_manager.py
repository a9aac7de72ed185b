"""Record Manager - Shared CRUD over one list of stored records.

Each record type (sleep, meal, milestone) lives in its own list inside the
storage blob and is keyed by a uuid4 hex `id`. Every successful mutation:
1. Emits SIGNAL_SUFFIX_RECORDS_CHANGED, which the StatisticsManager uses to
   invalidate its cache
2. Persists the blob and pushes the new data to entities
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar
import uuid

from homeassistant.exceptions import ServiceValidationError

from .. import const
from ..utils.dt_utils import dt_to_iso_utc
from .base_manager import BaseManager

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..type_defs import RecordData


class RecordManager(BaseManager):
    """Base class for managers that own one record list.

    Subclasses set:
    - record_type: const.RECORD_TYPE_* value reported in change events
    - data_key: storage section holding the list
    - sort_field: timestamp field used for newest-first ordering
    """

    record_type: ClassVar[str] = ""
    data_key: ClassVar[str] = ""
    sort_field: ClassVar[str] = ""

    async def async_setup(self) -> None:
        """Ensure the storage section exists."""
        self.coordinator._data.setdefault(self.data_key, [])
        const.LOGGER.debug(
            "DEBUG: %s ready with %s records",
            self.__class__.__name__,
            len(self.records),
        )

    # ────────────────────────────────────────────────────────────────
    # Read
    # ────────────────────────────────────────────────────────────────

    @property
    def records(self) -> list[RecordData]:
        """Return the live record list (storage order)."""
        return self.coordinator._data.setdefault(self.data_key, [])

    def sorted_records(self) -> list[RecordData]:
        """Return records newest first by their timestamp field."""
        return sorted(
            self.records,
            key=lambda record: record.get(self.sort_field) or "",
            reverse=True,
        )

    def get_record(self, record_id: str) -> RecordData | None:
        """Return the record with the given id, or None."""
        for record in self.records:
            if record.get(const.DATA_RECORD_ID) == record_id:
                return record
        return None

    def _require_record(self, record_id: str) -> RecordData:
        """Return the record with the given id.

        Raises:
            ServiceValidationError: No record with that id exists.
        """
        record = self.get_record(record_id)
        if record is None:
            const.LOGGER.warning(
                "WARNING: %s",
                const.ERROR_RECORD_NOT_FOUND_FMT.format(self.record_type, record_id),
            )
            raise ServiceValidationError(
                translation_domain=const.DOMAIN,
                translation_key=const.TRANS_KEY_ERROR_RECORD_NOT_FOUND,
                translation_placeholders={
                    "record_type": self.record_type,
                    "record_id": record_id,
                },
            )
        return record

    # ────────────────────────────────────────────────────────────────
    # Mutations
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def _new_id() -> str:
        """Return a new record id."""
        return uuid.uuid4().hex

    @staticmethod
    def _iso(value: Any) -> str | None:
        """Normalize a datetime or string to a UTC ISO string."""
        return dt_to_iso_utc(value)

    def _insert(self, record: RecordData) -> RecordData:
        """Add a record (an id is assigned when missing)."""
        record.setdefault(const.DATA_RECORD_ID, self._new_id())
        self.records.insert(0, record)
        self._commit(const.RECORD_ACTION_INSERT, record[const.DATA_RECORD_ID])
        return record

    def _update(self, record_id: str, changes: dict[str, Any]) -> RecordData:
        """Apply field changes to an existing record."""
        record = self._require_record(record_id)
        record.update(changes)
        self._commit(const.RECORD_ACTION_UPDATE, record_id)
        return record

    def delete_record(self, record_id: str) -> None:
        """Delete a record by id.

        Raises:
            ServiceValidationError: No record with that id exists.
        """
        record = self._require_record(record_id)
        self.records.remove(record)
        self._commit(const.RECORD_ACTION_DELETE, record_id)

    def replace_all(self, records: Iterable[RecordData]) -> None:
        """Replace every record at once (bulk reload)."""
        self.coordinator._data[self.data_key] = list(records)
        self._commit(const.RECORD_ACTION_RELOAD)

    def clear_all(self) -> None:
        """Remove every record of this type."""
        self.coordinator._data[self.data_key] = []
        self._commit(const.RECORD_ACTION_CLEAR)

    def _commit(self, action: str, record_id: str | None = None) -> None:
        """Announce the mutation, then persist and refresh entities.

        Listeners (statistics cache) run before entities re-read state.
        """
        const.LOGGER.debug(
            "DEBUG: %s %s record %s", action, self.record_type, record_id or "*"
        )
        self.emit(
            const.SIGNAL_SUFFIX_RECORDS_CHANGED,
            record_type=self.record_type,
            action=action,
            record_id=record_id,
        )
        self.coordinator._persist_and_update()
