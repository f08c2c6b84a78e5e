"""
Core enums, configuration and errors.
"""

from .leagues import (
    LeagueCode,
    RoundName,
    Decision,
    SeriesState,
    PLAYING_LEAGUES,
    SERIES_LENGTHS,
    HOME_FIELD_PATTERNS,
)
from .errors import EngineError, ValidationError, NotFoundError
from .config import ScheduleConfig, load_schedule_config, configure_logging

__all__ = [
    "LeagueCode",
    "RoundName",
    "Decision",
    "SeriesState",
    "PLAYING_LEAGUES",
    "SERIES_LENGTHS",
    "HOME_FIELD_PATTERNS",
    "EngineError",
    "ValidationError",
    "NotFoundError",
    "ScheduleConfig",
    "load_schedule_config",
    "configure_logging",
]
