"""
Boundary contracts: simulator payloads in, persistence rows out.
"""

from .schemas import (
    BattingLinePayload,
    PitchingLinePayload,
    GameResultPayload,
    DayResultPayload,
    parse_day_result,
    ScheduleRow,
    schedule_to_rows,
    SeasonStatRow,
    season_stat_rows,
)

__all__ = [
    "BattingLinePayload",
    "PitchingLinePayload",
    "GameResultPayload",
    "DayResultPayload",
    "parse_day_result",
    "ScheduleRow",
    "schedule_to_rows",
    "SeasonStatRow",
    "season_stat_rows",
]
