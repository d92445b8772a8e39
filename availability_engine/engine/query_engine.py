"""
Availability query engine.

Answers structured queries against one calendar snapshot:

- find_days:     dates with no blocked slot at all
- find_slots:    open hourly slots, filtered by time of day and duration
- suggest_times: open slots ranked by contiguous availability

The engine never mutates its snapshot and performs no I/O. Callers swap
in fresh data with ``update_data`` between queries.

Usage:
    engine = AvailabilityQueryEngine(snapshot)
    result = engine.execute(parse_query({
        "intent": "find_slots",
        "dateRange": {"start": "2026-01-05", "end": "2026-01-09"},
        "timePreference": "morning",
    }))
"""

from datetime import date, datetime
from typing import Callable, Optional

from availability_engine.config import AppConfig, settings
from availability_engine.engine.suggestions import generate_suggestions
from availability_engine.logging_context import get_query_logger, new_query_id, set_query_id
from availability_engine.schemas.calendar_schema import CalendarSnapshot, DayStatus
from availability_engine.schemas.query_schema import (
    AvailabilityQuery,
    DateRange,
    MeetingSuggestion,
    QueryIntent,
    QueryResult,
    QueryValidationError,
    SlotDuration,
    TimePreference,
    TimeSlotResult,
)
from availability_engine.time_slots import (
    ALL_SLOTS,
    SLOTS_PER_DAY,
    get_period_for_slot,
    slot_index,
)
from availability_engine.utils import inclusive_span_days, iter_dates

logger = get_query_logger(__name__)


def _is_slot_open(status: Optional[DayStatus], slot: str) -> bool:
    return status is None or not status.is_blocked(slot)


def _consecutive_open_hours(
    status: Optional[DayStatus], slot: str, limit: Optional[int] = None
) -> int:
    """Count open slots from ``slot`` (inclusive) until a blocked slot or day end."""
    index = slot_index(slot)
    if index == -1:
        return 0
    count = 0
    for candidate in ALL_SLOTS[index:]:
        if not _is_slot_open(status, candidate):
            break
        count += 1
        if limit is not None and count >= limit:
            break
    return count


def _as_date(value: object) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return None


class AvailabilityQueryEngine:
    """
    Executes availability queries against a calendar snapshot.

    Each ``execute`` call reads a single snapshot reference for its whole
    run, so replacing the snapshot mid-way never mixes old and new data.
    """

    def __init__(self, snapshot: CalendarSnapshot, config: Optional[AppConfig] = None) -> None:
        self._snapshot = snapshot
        self._config = config or settings

    @property
    def snapshot(self) -> CalendarSnapshot:
        return self._snapshot

    def update_data(self, snapshot: CalendarSnapshot) -> None:
        """Replace the calendar snapshot used by subsequent queries."""
        self._snapshot = snapshot
        logger.debug(
            "Snapshot replaced for owner '%s' (%d blocked date(s))",
            snapshot.owner_id, len(snapshot.blocked_dates),
        )

    def execute(self, query: AvailabilityQuery) -> QueryResult:
        """
        Validate and run a query.

        Returns:
            A QueryResult. Empty results carry remediation suggestions.

        Raises:
            QueryValidationError: If the date range is malformed, reversed,
                longer than the configured maximum, the count exceeds the
                configured limit, or the intent is unknown.
        """
        set_query_id(new_query_id())
        start, end = self._validate_date_range(query.date_range)
        self._validate_count(query.count)

        try:
            intent = QueryIntent(query.intent)
        except ValueError:
            raise QueryValidationError(f"Unknown query intent: {query.intent!r}") from None

        handlers: dict[QueryIntent, Callable[..., QueryResult]] = {
            QueryIntent.FIND_DAYS: self._find_available_days,
            QueryIntent.FIND_SLOTS: self._find_available_slots,
            QueryIntent.SUGGEST_TIMES: self._suggest_meeting_times,
        }
        handler = handlers[intent]

        logger.debug("Dispatching %s for %s..%s", intent.value, start, end)
        result = handler(query, self._snapshot, start, end)
        logger.info(
            "Query %s returned %d item(s)", result.intent.value, len(result.items)
        )
        return result

    def _validate_date_range(self, date_range: DateRange) -> tuple[date, date]:
        start = _as_date(getattr(date_range, "start", None))
        end = _as_date(getattr(date_range, "end", None))
        if start is None or end is None:
            raise QueryValidationError(
                "Invalid date range: start and end must be valid dates"
            )
        if end < start:
            raise QueryValidationError(
                "Invalid date range: end date must not be before start date"
            )

        span = inclusive_span_days(start, end)
        max_days = self._config.query.max_range_days
        if span > max_days:
            raise QueryValidationError(
                f"Invalid date range: {span} days exceeds maximum of {max_days} days"
            )
        return start, end

    def _validate_count(self, count: Optional[int]) -> None:
        limit = self._config.query.max_result_count
        if count is not None and count > limit:
            raise QueryValidationError(f"Invalid count: {count} exceeds maximum of {limit}")

    # --- find_days ---

    def _find_available_days(
        self, query: AvailabilityQuery, snapshot: CalendarSnapshot, start: date, end: date
    ) -> QueryResult:
        open_days = []
        for day in iter_dates(start, end):
            status = snapshot.day_status(day)
            if status is None or not status.has_blocked_slots():
                open_days.append(day)

        items = open_days[: query.count] if query.count else open_days
        return QueryResult(
            intent=QueryIntent.FIND_DAYS,
            items=items,
            query=query,
            suggestions=None if items else generate_suggestions(query, len(open_days), "days"),
        )

    # --- find_slots ---

    def _collect_open_slots(
        self, snapshot: CalendarSnapshot, start: date, end: date
    ) -> list[TimeSlotResult]:
        """Every open slot in the range, in date-then-time order."""
        open_slots = []
        for day in iter_dates(start, end):
            status = snapshot.day_status(day)
            for slot in ALL_SLOTS:
                if _is_slot_open(status, slot):
                    open_slots.append(
                        TimeSlotResult(date=day, time=slot, period=get_period_for_slot(slot))
                    )
        return open_slots

    def _filter_by_duration(
        self,
        snapshot: CalendarSnapshot,
        slots: list[TimeSlotResult],
        duration: SlotDuration,
    ) -> list[TimeSlotResult]:
        """Keep slots that start a contiguous open run of the required length."""
        required = SlotDuration(duration).required_hours
        if required <= 1:
            return slots
        return [
            slot
            for slot in slots
            if _consecutive_open_hours(snapshot.day_status(slot.date), slot.time, required)
            >= required
        ]

    def _match_slots(
        self, query: AvailabilityQuery, snapshot: CalendarSnapshot, start: date, end: date
    ) -> tuple[list[TimeSlotResult], list[TimeSlotResult]]:
        """Return (all open slots, slots matching preference and duration)."""
        universe = self._collect_open_slots(snapshot, start, end)

        preference = TimePreference(query.time_preference or TimePreference.ANY)
        if preference == TimePreference.ANY:
            preferred = universe
        else:
            preferred = [slot for slot in universe if slot.period == preference.value]

        duration = query.slot_duration or SlotDuration.ONE_HOUR
        return universe, self._filter_by_duration(snapshot, preferred, duration)

    def _find_available_slots(
        self, query: AvailabilityQuery, snapshot: CalendarSnapshot, start: date, end: date
    ) -> QueryResult:
        universe, matched = self._match_slots(query, snapshot, start, end)
        items = matched[: query.count] if query.count else matched
        return QueryResult(
            intent=QueryIntent.FIND_SLOTS,
            items=items,
            query=query,
            suggestions=None if items else generate_suggestions(query, len(universe)),
        )

    # --- suggest_times ---

    def _score_slot(
        self,
        slot: TimeSlotResult,
        query: AvailabilityQuery,
        snapshot: CalendarSnapshot,
        start: date,
        range_days: int,
    ) -> MeetingSuggestion:
        scoring = self._config.scoring
        consecutive = _consecutive_open_hours(snapshot.day_status(slot.date), slot.time)
        base_score = min(consecutive / SLOTS_PER_DAY, 1.0)

        preference = TimePreference(query.time_preference or TimePreference.ANY)
        matches_preference = (
            preference != TimePreference.ANY and slot.period == preference.value
        )
        preference_bonus = scoring.preference_bonus if matches_preference else 0.0

        recency_bonus = 0.0
        if range_days > 0:
            days_from_start = (slot.date - start).days
            recency_bonus = (1 - days_from_start / range_days) * scoring.recency_bonus

        score = min(base_score + preference_bonus + recency_bonus, 1.0)

        reason = f"{consecutive} consecutive hour{'s' if consecutive != 1 else ''} available"
        if matches_preference:
            reason += f", matches {preference.value} preference"

        return MeetingSuggestion(
            date=slot.date, time=slot.time, period=slot.period, score=score, reason=reason
        )

    def _suggest_meeting_times(
        self, query: AvailabilityQuery, snapshot: CalendarSnapshot, start: date, end: date
    ) -> QueryResult:
        universe, matched = self._match_slots(query, snapshot, start, end)
        range_days = (end - start).days

        ranked = [self._score_slot(slot, query, snapshot, start, range_days) for slot in matched]
        # Ties go to the soonest date, then the earliest slot of that day.
        ranked.sort(key=lambda s: (-s.score, s.date, slot_index(s.time)))

        items = ranked[: query.count] if query.count else ranked
        return QueryResult(
            intent=QueryIntent.SUGGEST_TIMES,
            items=items,
            query=query,
            suggestions=None if items else generate_suggestions(query, len(universe)),
        )


def create_query_engine(snapshot: CalendarSnapshot) -> AvailabilityQueryEngine:
    """Factory for an engine bound to ``snapshot``."""
    return AvailabilityQueryEngine(snapshot)
