"""Structured query and result models for the availability query engine."""

import datetime as dt
from enum import Enum
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from availability_engine.config import settings


class QueryValidationError(ValueError):
    """Raised when a query is malformed or outside the allowed bounds."""


class QueryIntent(str, Enum):
    FIND_DAYS = "find_days"
    FIND_SLOTS = "find_slots"
    SUGGEST_TIMES = "suggest_times"


class TimePreference(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    ANY = "any"


class SlotDuration(str, Enum):
    ONE_HOUR = "1hour"
    HALF_DAY = "half-day"
    FULL_DAY = "full-day"

    @property
    def required_hours(self) -> int:
        return SLOT_DURATION_HOURS[self]


SLOT_DURATION_HOURS: dict[SlotDuration, int] = {
    SlotDuration.ONE_HOUR: 1,
    SlotDuration.HALF_DAY: 6,
    SlotDuration.FULL_DAY: 16,
}


class DateRange(BaseModel):
    """Inclusive date range. Bounds are checked by the engine."""

    model_config = ConfigDict(frozen=True)

    start: dt.date
    end: dt.date


class AvailabilityQuery(BaseModel):
    """Structured availability query, usually produced by a text-to-query translator."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    intent: QueryIntent
    date_range: DateRange = Field(alias="dateRange")
    time_preference: TimePreference = Field(default=TimePreference.ANY, alias="timePreference")
    slot_duration: SlotDuration = Field(default=SlotDuration.ONE_HOUR, alias="slotDuration")
    count: Optional[int] = Field(default=None, gt=0)

    @field_validator("count")
    @classmethod
    def _cap_count(cls, value: Optional[int]) -> Optional[int]:
        limit = settings.query.max_result_count
        if value is not None and value > limit:
            raise ValueError(f"count cannot exceed {limit}")
        return value


class TimeSlotResult(BaseModel):
    """A specific available hour on a specific date."""

    date: dt.date
    time: str
    period: str


class MeetingSuggestion(TimeSlotResult):
    """A ranked meeting candidate with its score in [0, 1]."""

    score: float = Field(ge=0.0, le=1.0)
    reason: str


ResultItem = Annotated[
    Union[MeetingSuggestion, TimeSlotResult, dt.date], Field(union_mode="left_to_right")
]


class QueryResult(BaseModel):
    """
    Outcome of a single query.

    ``items`` holds dates for find_days, TimeSlotResult records for
    find_slots and MeetingSuggestion records for suggest_times.
    ``suggestions`` is only populated when ``items`` is empty.
    """

    intent: QueryIntent
    items: list[ResultItem] = Field(default_factory=list)
    query: AvailabilityQuery
    suggestions: Optional[list[str]] = None


def is_dates_result(result: QueryResult) -> bool:
    return result.intent == QueryIntent.FIND_DAYS


def is_slots_result(result: QueryResult) -> bool:
    return result.intent == QueryIntent.FIND_SLOTS


def is_suggestions_result(result: QueryResult) -> bool:
    return result.intent == QueryIntent.SUGGEST_TIMES


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(loc) for loc in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "Invalid query: " + "; ".join(parts)


def parse_query(payload: dict[str, Any]) -> AvailabilityQuery:
    """
    Validate a JSON-shaped query payload.

    Accepts either snake_case or the camelCase keys used by the web
    client (``dateRange``, ``timePreference``, ``slotDuration``).

    Raises:
        QueryValidationError: If any field is missing or malformed.
    """
    try:
        return AvailabilityQuery.model_validate(payload)
    except ValidationError as exc:
        raise QueryValidationError(_format_validation_error(exc)) from None
