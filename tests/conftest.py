"""Shared test fixtures and helpers."""

import random
from datetime import date, timedelta
from typing import Iterable, Optional, Union

import pytest

from availability_engine.engine.query_engine import AvailabilityQueryEngine
from availability_engine.schemas.calendar_schema import CalendarSnapshot, DayStatus
from availability_engine.schemas.query_schema import (
    AvailabilityQuery,
    DateRange,
    QueryIntent,
    SlotDuration,
    TimePreference,
)
from availability_engine.time_slots import (
    AFTERNOON_SLOTS,
    ALL_SLOTS,
    EVENING_SLOTS,
    MORNING_SLOTS,
)


def blocked_day(
    slots: Iterable[str],
    event_name: Optional[str] = None,
    full_day_block: bool = False,
) -> DayStatus:
    """Helper to create a DayStatus with the given slots blocked."""
    return DayStatus(
        slots={slot: True for slot in slots},
        event_name=event_name,
        full_day_block=full_day_block,
    )


def make_snapshot(
    blocked_dates: Optional[dict[str, DayStatus]] = None,
    owner_id: str = "test-instructor",
) -> CalendarSnapshot:
    """Helper to create a CalendarSnapshot with sensible defaults."""
    return CalendarSnapshot(owner_id=owner_id, blocked_dates=blocked_dates or {})


def make_query(
    intent: Union[QueryIntent, str],
    start: date,
    end: date,
    time_preference: Union[TimePreference, str] = TimePreference.ANY,
    slot_duration: Union[SlotDuration, str] = SlotDuration.ONE_HOUR,
    count: Optional[int] = None,
) -> AvailabilityQuery:
    """Helper to create a validated AvailabilityQuery."""
    return AvailabilityQuery(
        intent=intent,
        date_range=DateRange(start=start, end=end),
        time_preference=time_preference,
        slot_duration=slot_duration,
        count=count,
    )


def make_random_snapshot(
    seed: int,
    start: date,
    days: int,
    block_probability: float = 0.3,
    day_probability: float = 0.6,
) -> CalendarSnapshot:
    """Seeded snapshot with a mix of absent, empty, partial and full days."""
    rng = random.Random(seed)
    blocked: dict[str, DayStatus] = {}
    for offset in range(days):
        if rng.random() >= day_probability:
            continue
        day = start + timedelta(days=offset)
        slots = {slot: rng.random() < block_probability for slot in ALL_SLOTS}
        blocked[day.isoformat()] = DayStatus(slots=slots)
    return make_snapshot(blocked)


@pytest.fixture
def sample_snapshot():
    return make_snapshot({
        "2026-01-02": blocked_day(ALL_SLOTS, "Conference", full_day_block=True),
        "2026-01-03": blocked_day(MORNING_SLOTS, "Morning Meeting"),
        "2026-01-04": blocked_day(AFTERNOON_SLOTS, "Afternoon Workshop"),
        "2026-01-05": blocked_day(["09:00"], "Quick Call"),
        "2026-01-06": blocked_day(["09:00", "14:00", "18:00"], "Scattered Meetings"),
        "2026-01-07": blocked_day(MORNING_SLOTS + EVENING_SLOTS, "Afternoon Free"),
    })


@pytest.fixture
def engine(sample_snapshot):
    return AvailabilityQueryEngine(sample_snapshot)


@pytest.fixture
def empty_engine():
    return AvailabilityQueryEngine(make_snapshot())
