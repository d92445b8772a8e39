"""Calendar snapshot models consumed by the query engine."""

from datetime import date, datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from availability_engine.time_slots import ALL_SLOTS
from availability_engine.utils import format_date, parse_iso_date


class DayStatus(BaseModel):
    """
    Hourly blocked/available status for one calendar date.

    Slots missing from ``slots`` are available. The legacy whole-day
    AM/PM shape is rejected here; callers normalise it before building
    a snapshot.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    slots: dict[str, bool] = Field(default_factory=dict)
    full_day_block: bool = Field(default=False, alias="fullDayBlock")
    event_name: Optional[str] = Field(default=None, alias="eventName", max_length=200)

    @field_validator("slots", mode="before")
    @classmethod
    def _coerce_slot_pairs(cls, value: Any) -> Any:
        # Serialized form is a list of [slot, blocked] pairs.
        if isinstance(value, list):
            try:
                return dict(value)
            except (TypeError, ValueError):
                raise ValueError("slots must be a list of [slot, blocked] pairs") from None
        return value

    def is_blocked(self, slot: str) -> bool:
        return self.full_day_block or self.slots.get(slot) is True

    def has_blocked_slots(self) -> bool:
        """True if any of the 16 daily slots is blocked."""
        return any(self.is_blocked(slot) for slot in ALL_SLOTS)


class CalendarSnapshot(BaseModel):
    """
    Immutable view of one instructor's calendar.

    ``blocked_dates`` only holds dates with some blocking recorded;
    a date with no entry is fully available.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    owner_id: str = Field(alias="instructorId", min_length=1)
    blocked_dates: dict[str, DayStatus] = Field(default_factory=dict, alias="blockedDates")
    last_modified: Optional[datetime] = Field(default=None, alias="lastModified")
    version: Literal[2] = 2

    @field_validator("blocked_dates")
    @classmethod
    def _validate_date_keys(cls, value: dict[str, DayStatus]) -> dict[str, DayStatus]:
        # Keys are stored zero-padded so day_status lookups always hit.
        canonical: dict[str, DayStatus] = {}
        for key, status in value.items():
            try:
                normalized = format_date(parse_iso_date(key))
            except ValueError:
                raise ValueError(f"Invalid date key {key!r}, expected YYYY-MM-DD") from None
            if normalized in canonical:
                raise ValueError(f"Duplicate date key {key!r} for {normalized}")
            canonical[normalized] = status
        return canonical

    def day_status(self, day: date) -> Optional[DayStatus]:
        """Status recorded for ``day``, or None when the day is fully open."""
        return self.blocked_dates.get(format_date(day))
