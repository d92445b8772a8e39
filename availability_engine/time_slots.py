"""
Fixed hourly time slots for the availability calendar.

Sixteen one-hour slots from 06:00 to 21:00 (the last slot ends at 22:00),
grouped into three periods: morning, afternoon and evening.
"""

from typing import Optional

MORNING_SLOTS: tuple[str, ...] = ("06:00", "07:00", "08:00", "09:00", "10:00", "11:00")
AFTERNOON_SLOTS: tuple[str, ...] = ("12:00", "13:00", "14:00", "15:00", "16:00", "17:00")
EVENING_SLOTS: tuple[str, ...] = ("18:00", "19:00", "20:00", "21:00")

ALL_SLOTS: tuple[str, ...] = MORNING_SLOTS + AFTERNOON_SLOTS + EVENING_SLOTS

SLOTS_PER_DAY = len(ALL_SLOTS)

TIME_PERIODS: dict[str, tuple[str, ...]] = {
    "morning": MORNING_SLOTS,
    "afternoon": AFTERNOON_SLOTS,
    "evening": EVENING_SLOTS,
    "any": ALL_SLOTS,
}

TIME_PERIOD_LABELS: dict[str, str] = {
    "morning": "Morning (6am - 12pm)",
    "afternoon": "Afternoon (12pm - 6pm)",
    "evening": "Evening (6pm - 10pm)",
    "any": "Any Time",
}

BUSINESS_HOURS_START = 9
BUSINESS_HOURS_END = 17

_SLOT_POSITIONS: dict[str, int] = {slot: i for i, slot in enumerate(ALL_SLOTS)}


def slot_hour(slot: str) -> int:
    return int(slot.split(":")[0])


def slot_index(slot: str) -> int:
    """Position of a slot in the fixed daily order, or -1 if unknown."""
    return _SLOT_POSITIONS.get(slot, -1)


def get_period_for_slot(slot: str) -> str:
    """Classify a slot by its hour: before noon, before 18:00, or later."""
    hour = slot_hour(slot)
    if hour < 12:
        return "morning"
    if hour < 18:
        return "afternoon"
    return "evening"


def format_time_slot(slot: str) -> str:
    """Format a slot label for display.

    Examples:
        >>> format_time_slot("09:00")
        '9:00 AM'
        >>> format_time_slot("14:00")
        '2:00 PM'
    """
    hour = slot_hour(slot)
    suffix = "PM" if hour >= 12 else "AM"
    display_hour = hour - 12 if hour > 12 else (12 if hour == 0 else hour)
    return f"{display_hour}:00 {suffix}"


def is_business_hours(slot: str) -> bool:
    return BUSINESS_HOURS_START <= slot_hour(slot) < BUSINESS_HOURS_END


def get_next_slot(slot: str) -> Optional[str]:
    """The slot immediately after ``slot``, or None at the end of the day."""
    index = slot_index(slot)
    if index == -1 or index == SLOTS_PER_DAY - 1:
        return None
    return ALL_SLOTS[index + 1]


def get_previous_slot(slot: str) -> Optional[str]:
    """The slot immediately before ``slot``, or None at the start of the day."""
    index = slot_index(slot)
    if index <= 0:
        return None
    return ALL_SLOTS[index - 1]
