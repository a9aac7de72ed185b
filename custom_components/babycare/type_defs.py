"""Type definitions for BabyCare data structures.

TypedDict describes the fixed-key records persisted in storage; the
storage blob itself stays `dict[str, Any]` because sections are looked up
through constants at runtime.

IMPORTANT: This file must NOT import from coordinator.py or any file that
imports coordinator to avoid circular dependencies.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime checks (.get() defaults,
None handling) stay in the managers.
"""

from typing import Any, Literal, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

RecordId = str  # uuid4 hex string
ISODatetime = str  # ISO 8601 UTC datetime string "2026-01-02T07:00:00+00:00"

MealType = Literal["breakfast", "lunch", "dinner", "snack", "milk"]

MilestoneCategory = Literal[
    "first_smile",
    "first_roll",
    "first_sit",
    "first_crawl",
    "first_stand",
    "first_walk",
    "first_word",
    "first_tooth",
    "first_solid",
    "sleep",
    "health",
    "other",
]


# =============================================================================
# Stored Records
# =============================================================================


class SleepRecordData(TypedDict):
    """A sleep session; wake_time is None while the baby is still asleep."""

    id: RecordId
    sleep_time: ISODatetime
    wake_time: ISODatetime | None


class MealRecordData(TypedDict):
    """A meal, optionally carrying the water drunk with it."""

    id: RecordId
    date: ISODatetime
    meal_type: MealType
    food_items: list[str]
    amount: str
    notes: str
    water_amount_ml: NotRequired[int | None]


class MilestoneData(TypedDict):
    """A developmental milestone."""

    id: RecordId
    date: ISODatetime
    title: str
    description: str
    category: MilestoneCategory


class MetaData(TypedDict):
    """Storage metadata section."""

    schema_version: int
    created: ISODatetime


class BabyCareData(TypedDict):
    """Top-level storage structure."""

    meta: MetaData
    sleep_records: list[SleepRecordData]
    meal_records: list[MealRecordData]
    milestones: list[MilestoneData]
    notes: str


# Generic record dict used by the shared record manager
RecordData = dict[str, Any]
