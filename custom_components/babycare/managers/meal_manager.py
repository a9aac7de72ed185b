"""Meal Manager - Meals and water intake."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from .. import const
from ..utils.dt_utils import as_local, dt_now_utc, dt_to_utc, dt_today_local
from .record_manager import RecordManager

if TYPE_CHECKING:
    from ..type_defs import RecordData


__all__ = ["MealManager"]

# Service field -> stored field for partial updates
_UPDATABLE_FIELDS = {
    const.FIELD_MEAL_TYPE: const.DATA_MEAL_TYPE,
    const.FIELD_FOOD_ITEMS: const.DATA_MEAL_FOOD_ITEMS,
    const.FIELD_AMOUNT: const.DATA_MEAL_AMOUNT,
    const.FIELD_NOTES: const.DATA_MEAL_NOTES,
    const.FIELD_WATER_AMOUNT_ML: const.DATA_MEAL_WATER_AMOUNT_ML,
}


class MealManager(RecordManager):
    """Manager for meal records (water intake rides along on a meal)."""

    record_type = const.RECORD_TYPE_MEAL
    data_key = const.DATA_MEAL_RECORDS
    sort_field = const.DATA_MEAL_DATE

    def add_meal(
        self,
        meal_type: str,
        when: datetime | str | None = None,
        food_items: list[str] | None = None,
        amount: str = "",
        notes: str = "",
        water_amount_ml: int | None = None,
    ) -> RecordData:
        """Record a meal (defaults to now)."""
        occurred = dt_to_utc(when) or dt_now_utc()
        return self._insert(
            {
                const.DATA_MEAL_DATE: occurred.isoformat(),
                const.DATA_MEAL_TYPE: meal_type,
                const.DATA_MEAL_FOOD_ITEMS: list(food_items or []),
                const.DATA_MEAL_AMOUNT: amount,
                const.DATA_MEAL_NOTES: notes,
                const.DATA_MEAL_WATER_AMOUNT_ML: water_amount_ml,
            }
        )

    def update_meal(
        self, record_id: str, when: datetime | str | None = None, **fields: Any
    ) -> RecordData:
        """Change fields of an existing meal; unknown keys are ignored."""
        changes: dict[str, Any] = {
            _UPDATABLE_FIELDS[key]: value
            for key, value in fields.items()
            if key in _UPDATABLE_FIELDS
        }
        if when is not None:
            changes[const.DATA_MEAL_DATE] = self._iso(when)
        return self._update(record_id, changes)

    def records_by_type(self, meal_type: str) -> list[RecordData]:
        """Return meals of one type, newest first."""
        return [
            record
            for record in self.sorted_records()
            if record.get(const.DATA_MEAL_TYPE) == meal_type
        ]

    def records_for_day(self, day: date | None = None) -> list[RecordData]:
        """Return meals eaten on a local calendar day (default today), newest first."""
        target = day or dt_today_local()
        result: list[RecordData] = []
        for record in self.sorted_records():
            occurred = dt_to_utc(record.get(const.DATA_MEAL_DATE))
            if occurred is not None and as_local(occurred).date() == target:
                result.append(record)
        return result
