"""
Fallback hints for queries that matched nothing.

Explains why a well-formed query came back empty and which constraint
to relax. Hints are additive: every filter that could have removed
results gets its own line.
"""

import logging

from availability_engine.schemas.query_schema import (
    AvailabilityQuery,
    SlotDuration,
    TimePreference,
)

logger = logging.getLogger(__name__)

WIDEN_RANGE_HINT = "Try expanding your date range - no availability found in the current period"
SHORTER_DURATION_HINT = "Try 1-hour slots instead - longer blocks may not be available"


def generate_suggestions(
    query: AvailabilityQuery, universe_size: int, unit: str = "slots"
) -> list[str]:
    """
    Build remediation hints for an empty result.

    Args:
        query: The query that returned no items.
        universe_size: Open days or slots in the range before any
            preference, duration or count filtering.
        unit: Noun used when reporting ``universe_size``.
    """
    if universe_size == 0:
        logger.debug("Nothing open in range, suggesting a wider range")
        return [WIDEN_RANGE_HINT]

    suggestions: list[str] = []

    preference = query.time_preference
    if preference and preference != TimePreference.ANY:
        suggestions.append(
            f"Try removing the {TimePreference(preference).value} time preference"
            " - availability exists at other times"
        )

    if query.slot_duration in (SlotDuration.HALF_DAY, SlotDuration.FULL_DAY):
        suggestions.append(SHORTER_DURATION_HINT)

    if query.count and universe_size > query.count:
        suggestions.append(
            f"{universe_size} open {unit} found, but limited to {query.count} results"
            " - remove the count limit to see all"
        )

    logger.debug("Generated %d suggestion(s) for empty result", len(suggestions))
    return suggestions
