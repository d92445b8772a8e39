"""
Centralized configuration with environment variable overrides.

Query limits and suggestion scoring weights are configurable here.
Nothing is hardcoded in the engine logic.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class QueryConfig:
    """Bounds applied to every incoming query."""

    max_range_days: int = _safe_int("MAX_QUERY_RANGE_DAYS", "90")
    max_result_count: int = _safe_int("MAX_RESULT_COUNT", "1000")


@dataclass(frozen=True)
class ScoringConfig:
    """Bonus weights used when ranking meeting suggestions."""

    preference_bonus: float = _safe_float("PREFERENCE_BONUS", "0.10")
    recency_bonus: float = _safe_float("RECENCY_BONUS", "0.10")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    query: QueryConfig = field(default_factory=QueryConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.query.max_range_days < 1:
        raise ValueError(
            f"MAX_QUERY_RANGE_DAYS must be >= 1, got {config.query.max_range_days}"
        )
    if config.query.max_result_count < 1:
        raise ValueError(
            f"MAX_RESULT_COUNT must be >= 1, got {config.query.max_result_count}"
        )

    for bonus_name, bonus_value in [
        ("PREFERENCE_BONUS", config.scoring.preference_bonus),
        ("RECENCY_BONUS", config.scoring.recency_bonus),
    ]:
        if not 0.0 <= bonus_value <= 1.0:
            raise ValueError(f"{bonus_name} must be between 0.0 and 1.0, got {bonus_value}")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info(
        "Configuration loaded (max range %d days)", config.query.max_range_days
    )
    return config


# Singleton instance
settings = load_config()
