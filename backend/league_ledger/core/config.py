"""
Engine configuration.

Defaults are read from the environment once at import time.
"""

import logging
import os
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from .errors import ValidationError


TARGET_GAMES = int(os.getenv("LEDGER_TARGET_GAMES", "162"))
INTRA_DIVISION_WEIGHT = float(os.getenv("LEDGER_INTRA_DIVISION_WEIGHT", "2.0"))
REGULAR_SEASON_DAYS = int(os.getenv("LEDGER_REGULAR_SEASON_DAYS", "162"))
WILD_CARD_SLOTS = int(os.getenv("LEDGER_WILD_CARD_SLOTS", "3"))
LOG_LEVEL = os.getenv("LEDGER_LOG_LEVEL", "WARNING").upper()


class ScheduleConfig(BaseModel):
    """Schedule generation settings."""
    target_games_per_team: int = Field(default=TARGET_GAMES, ge=1)
    intra_division_weight: float = Field(default=INTRA_DIVISION_WEIGHT, gt=0)


def load_schedule_config(
    target_games_per_team: Optional[int] = None,
    intra_division_weight: Optional[float] = None
) -> ScheduleConfig:
    """
    Build a ScheduleConfig, falling back to defaults for omitted values.

    Raises:
        ValidationError: If an override is out of range
    """
    overrides = {}
    if target_games_per_team is not None:
        overrides["target_games_per_team"] = target_games_per_team
    if intra_division_weight is not None:
        overrides["intra_division_weight"] = intra_division_weight

    try:
        return ScheduleConfig(**overrides)
    except PydanticValidationError as e:
        raise ValidationError(
            "SCHEDULE_INVALID_CONFIG",
            "Invalid schedule configuration",
            details=[
                {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                for err in e.errors()
            ]
        ) from e


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Apply a level to the package logger and return it."""
    logger = logging.getLogger("league_ledger")
    logger.setLevel((level or LOG_LEVEL).upper())
    return logger
