from availability_engine.engine.query_engine import AvailabilityQueryEngine, create_query_engine
from availability_engine.engine.suggestions import generate_suggestions
from availability_engine.schemas.query_schema import QueryValidationError

__all__ = [
    "AvailabilityQueryEngine",
    "create_query_engine",
    "generate_suggestions",
    "QueryValidationError",
]
