"""
League, round and decision enums for the season engine.
"""

from enum import Enum


class LeagueCode(str, Enum):
    """League scopes. MLB is only used for the World Series."""
    AL = "AL"
    NL = "NL"
    MLB = "MLB"


class RoundName(str, Enum):
    """Postseason rounds, in the order they are played."""
    WILD_CARD = "WildCard"
    DIVISION_SERIES = "DivisionSeries"
    CHAMPIONSHIP_SERIES = "ChampionshipSeries"
    WORLD_SERIES = "WorldSeries"


class Decision(str, Enum):
    """Pitching decisions a box-score line may carry."""
    WIN = "W"
    LOSS = "L"
    SAVE = "SV"
    HOLD = "HLD"
    BLOWN_SAVE = "BS"


class SeriesState(str, Enum):
    """Lifecycle of a playoff series."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


# Regular-season leagues (teams never belong to MLB)
PLAYING_LEAGUES = (LeagueCode.AL, LeagueCode.NL)

# Series length per round
SERIES_LENGTHS = {
    RoundName.WILD_CARD: 3,
    RoundName.DIVISION_SERIES: 5,
    RoundName.CHAMPIONSHIP_SERIES: 7,
    RoundName.WORLD_SERIES: 7,
}

# Home team per game for the higher seed ("H") and lower seed ("A")
HOME_FIELD_PATTERNS = {
    3: ("H", "A", "H"),
    5: ("H", "A", "A", "H", "H"),
    7: ("H", "A", "A", "H", "H", "A", "H"),
}
