"""Sleep Manager - Sleep session lifecycle and storage.

Handles:
- Starting and ending the in-progress session (optionally "N minutes ago")
- Manual add/update/delete of sessions
- Sample data generation (bulk reload) and clear-all

At most one session may be in progress (no wake time) at a time.
"""

from __future__ import annotations

from datetime import datetime, timedelta
import random
from typing import TYPE_CHECKING, Any

from homeassistant.exceptions import ServiceValidationError

from .. import const
from ..utils.dt_utils import (
    TIME_UNIT_MONTHS,
    as_local,
    dt_add_interval,
    dt_minutes_ago,
    dt_now_utc,
    dt_to_utc,
    get_default_timezone,
)
from .record_manager import RecordManager

if TYPE_CHECKING:
    from ..type_defs import RecordData


__all__ = ["SleepManager"]


class SleepManager(RecordManager):
    """Manager for sleep sessions."""

    record_type = const.RECORD_TYPE_SLEEP
    data_key = const.DATA_SLEEP_RECORDS
    sort_field = const.DATA_SLEEP_TIME

    # ────────────────────────────────────────────────────────────────
    # Read
    # ────────────────────────────────────────────────────────────────

    @property
    def current_record(self) -> RecordData | None:
        """Return the session in progress, if any."""
        for record in self.records:
            if not record.get(const.DATA_WAKE_TIME):
                return record
        return None

    @property
    def is_sleeping(self) -> bool:
        """Return True while a session is in progress."""
        return self.current_record is not None

    @property
    def completed_records(self) -> list[RecordData]:
        """Return finished sessions, newest first."""
        return [
            record
            for record in self.sorted_records()
            if record.get(const.DATA_WAKE_TIME)
        ]

    # ────────────────────────────────────────────────────────────────
    # Validation
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def _validate_times(sleep_time: datetime | None, wake_time: datetime | None) -> None:
        """Reject a wake time that is not after the sleep time."""
        if sleep_time is not None and wake_time is not None and wake_time <= sleep_time:
            const.LOGGER.warning(
                "WARNING: %s (sleep=%s, wake=%s)",
                const.ERROR_WAKE_BEFORE_SLEEP,
                sleep_time,
                wake_time,
            )
            raise ServiceValidationError(
                translation_domain=const.DOMAIN,
                translation_key=const.TRANS_KEY_ERROR_WAKE_BEFORE_SLEEP,
            )

    def _ensure_not_sleeping(self, ignore_id: str | None = None) -> None:
        """Reject a second in-progress session."""
        current = self.current_record
        if current is not None and current.get(const.DATA_RECORD_ID) != ignore_id:
            const.LOGGER.warning("WARNING: %s", const.ERROR_SLEEP_IN_PROGRESS)
            raise ServiceValidationError(
                translation_domain=const.DOMAIN,
                translation_key=const.TRANS_KEY_ERROR_SLEEP_IN_PROGRESS,
            )

    # ────────────────────────────────────────────────────────────────
    # Session Lifecycle
    # ────────────────────────────────────────────────────────────────

    def start_sleep(self, minutes_ago: int = 0, now: datetime | None = None) -> RecordData:
        """Start a new session.

        Args:
            minutes_ago: The baby fell asleep this many minutes before now
            now: Reference time (defaults to the system clock)

        Raises:
            ServiceValidationError: A session is already in progress.
        """
        self._ensure_not_sleeping()
        sleep_time = dt_minutes_ago(minutes_ago, now)
        record = self._insert(
            {
                const.DATA_SLEEP_TIME: sleep_time.isoformat(),
                const.DATA_WAKE_TIME: None,
            }
        )
        const.LOGGER.info("INFO: Sleep started at %s", sleep_time.isoformat())
        return record

    def end_sleep(self, minutes_ago: int = 0, now: datetime | None = None) -> RecordData:
        """End the session in progress.

        Args:
            minutes_ago: The baby woke up this many minutes before now
            now: Reference time (defaults to the system clock)

        Raises:
            ServiceValidationError: No session in progress, or the wake time
                would not be after the sleep time.
        """
        current = self.current_record
        if current is None:
            const.LOGGER.warning("WARNING: %s", const.ERROR_NO_SLEEP_IN_PROGRESS)
            raise ServiceValidationError(
                translation_domain=const.DOMAIN,
                translation_key=const.TRANS_KEY_ERROR_NO_SLEEP_IN_PROGRESS,
            )

        wake_time = dt_minutes_ago(minutes_ago, now)
        self._validate_times(dt_to_utc(current.get(const.DATA_SLEEP_TIME)), wake_time)
        record = self._update(
            current[const.DATA_RECORD_ID],
            {const.DATA_WAKE_TIME: wake_time.isoformat()},
        )
        const.LOGGER.info("INFO: Sleep ended at %s", wake_time.isoformat())
        return record

    # ────────────────────────────────────────────────────────────────
    # Manual Edits
    # ────────────────────────────────────────────────────────────────

    def add_record(
        self, sleep_time: datetime | str, wake_time: datetime | str | None = None
    ) -> RecordData:
        """Add a session with explicit times.

        Raises:
            ServiceValidationError: Invalid ordering, or an open session while
                another one is in progress.
        """
        sleep_dt = dt_to_utc(sleep_time)
        wake_dt = dt_to_utc(wake_time)
        self._validate_times(sleep_dt, wake_dt)
        if wake_dt is None:
            self._ensure_not_sleeping()

        return self._insert(
            {
                const.DATA_SLEEP_TIME: self._iso(sleep_dt),
                const.DATA_WAKE_TIME: self._iso(wake_dt),
            }
        )

    def update_record(
        self,
        record_id: str,
        sleep_time: datetime | str | None = None,
        wake_time: datetime | str | None = None,
    ) -> RecordData:
        """Change the times of an existing session.

        Only the provided fields change.

        Raises:
            ServiceValidationError: Unknown id or invalid ordering.
        """
        record = self._require_record(record_id)
        changes: dict[str, Any] = {}
        if sleep_time is not None:
            changes[const.DATA_SLEEP_TIME] = self._iso(sleep_time)
        if wake_time is not None:
            changes[const.DATA_WAKE_TIME] = self._iso(wake_time)

        merged = {**record, **changes}
        self._validate_times(
            dt_to_utc(merged.get(const.DATA_SLEEP_TIME)),
            dt_to_utc(merged.get(const.DATA_WAKE_TIME)),
        )
        return self._update(record_id, changes)

    # ────────────────────────────────────────────────────────────────
    # Sample Data
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def build_sample_records(
        months: int = const.DEFAULT_SAMPLE_MONTHS,
        now: datetime | None = None,
        rng: random.Random | None = None,
    ) -> list[RecordData]:
        """Build random but plausible completed sessions.

        For each of the last `months` calendar months, 25-30 nights with a
        bedtime between 20:00 and 23:59 and 7-11.5 hours of sleep. Nothing
        starts or ends after `now`.
        """
        rng = rng or random.Random()
        tz = get_default_timezone()
        reference = as_local(now or dt_now_utc(), tz)
        this_month = reference.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

        records: list[RecordData] = []
        for month_offset in range(months):
            month_start = dt_add_interval(this_month, TIME_UNIT_MONTHS, -month_offset)
            next_month = dt_add_interval(month_start, TIME_UNIT_MONTHS, 1)
            days_in_month = (next_month.date() - month_start.date()).days
            max_day = reference.day if month_offset == 0 else days_in_month

            for _ in range(
                rng.randint(
                    const.SAMPLE_RECORDS_PER_MONTH_MIN,
                    const.SAMPLE_RECORDS_PER_MONTH_MAX,
                )
            ):
                sleep_time = month_start.replace(
                    day=rng.randint(1, max_day),
                    hour=rng.randint(
                        const.SAMPLE_SLEEP_HOUR_MIN, const.SAMPLE_SLEEP_HOUR_MAX
                    ),
                    minute=rng.randint(0, 59),
                )
                if sleep_time > reference:
                    sleep_time -= timedelta(days=1)

                duration_hours = rng.uniform(
                    const.SAMPLE_SLEEP_DURATION_HOURS_MIN,
                    const.SAMPLE_SLEEP_DURATION_HOURS_MAX,
                )
                wake_time = min(
                    sleep_time + timedelta(seconds=int(duration_hours * 3600)),
                    reference,
                )
                if wake_time <= sleep_time:
                    continue

                records.append(
                    {
                        const.DATA_RECORD_ID: RecordManager._new_id(),
                        const.DATA_SLEEP_TIME: dt_to_utc(sleep_time).isoformat(),
                        const.DATA_WAKE_TIME: dt_to_utc(wake_time).isoformat(),
                    }
                )

        records.sort(key=lambda record: record[const.DATA_SLEEP_TIME], reverse=True)
        return records

    def generate_sample_data(
        self,
        months: int = const.DEFAULT_SAMPLE_MONTHS,
        now: datetime | None = None,
        rng: random.Random | None = None,
    ) -> int:
        """Replace all sessions with sample data and return how many were made."""
        records = self.build_sample_records(months, now, rng)
        self.replace_all(records)
        const.LOGGER.info(
            "INFO: Generated %s sample sleep records over %s months",
            len(records),
            months,
        )
        return len(records)
