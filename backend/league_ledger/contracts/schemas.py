"""
Pydantic schemas for data crossing the engine boundary.

Inbound: the game simulator's per-day results (camelCase keys and box-score
abbreviations such as AB, HR, IP). Outbound: flat rows for the caller's
persistence layer.
"""

import math
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from ..core.errors import ValidationError
from ..core.leagues import Decision
from ..season.models import (
    BattingLine,
    BattingStats,
    DayResult,
    GameResult,
    PitchingLine,
    PitchingStats,
    ScheduleDay,
)


# ============== Simulator payloads ==============

class BattingLinePayload(BaseModel):
    """One batting line from the simulator's box score."""
    model_config = ConfigDict(populate_by_name=True)

    player_id: str = Field(..., alias="playerId", min_length=1)
    player_name: Optional[str] = Field(None, alias="playerName")
    at_bats: int = Field(0, alias="AB", ge=0)
    runs: int = Field(0, alias="R", ge=0)
    hits: int = Field(0, alias="H", ge=0)
    doubles: int = Field(0, ge=0)
    triples: int = Field(0, ge=0)
    home_runs: int = Field(0, alias="HR", ge=0)
    rbi: int = Field(0, alias="RBI", ge=0)
    walks: int = Field(0, alias="BB", ge=0)
    strikeouts: int = Field(0, alias="SO", ge=0)
    stolen_bases: int = Field(0, alias="SB", ge=0)
    caught_stealing: int = Field(0, alias="CS", ge=0)
    hit_by_pitch: int = Field(0, alias="HBP", ge=0)
    sacrifice_flies: int = Field(0, alias="SF", ge=0)
    sacrifice_hits: int = Field(0, alias="SH", ge=0)
    intentional_walks: int = Field(0, alias="IBB", ge=0)
    gidp: int = Field(0, alias="GIDP", ge=0)

    def to_domain(self) -> BattingLine:
        return BattingLine(**self.model_dump())


class PitchingLinePayload(BaseModel):
    """One pitching line. IP uses baseball notation (6.2 = six and two-thirds)."""
    model_config = ConfigDict(populate_by_name=True)

    player_id: str = Field(..., alias="playerId", min_length=1)
    player_name: Optional[str] = Field(None, alias="playerName")
    ip: float = Field(0.0, alias="IP", ge=0)
    hits: int = Field(0, alias="H", ge=0)
    runs: int = Field(0, alias="R", ge=0)
    earned_runs: int = Field(0, alias="ER", ge=0)
    walks: int = Field(0, alias="BB", ge=0)
    strikeouts: int = Field(0, alias="SO", ge=0)
    home_runs: int = Field(0, alias="HR", ge=0)
    batters_faced: int = Field(0, alias="BF", ge=0)
    hit_by_pitch: int = Field(0, alias="HBP", ge=0)
    wild_pitches: int = Field(0, alias="WP", ge=0)
    balks: int = Field(0, alias="BK", ge=0)
    complete_games: int = Field(0, alias="CG", ge=0)
    shutouts: int = Field(0, alias="SHO", ge=0)
    decision: Optional[Decision] = None

    @field_validator("ip")
    @classmethod
    def check_ip_thirds(cls, v: float) -> float:
        whole = math.floor(v)
        thirds = round((v - whole) * 10)
        if thirds > 2 or abs(v - (whole + thirds / 10)) > 1e-6:
            raise ValueError("IP fraction must be .0, .1 or .2")
        return v

    def to_domain(self) -> PitchingLine:
        data = self.model_dump()
        data["decision"] = self.decision.value if self.decision else None
        return PitchingLine(**data)


class GameResultPayload(BaseModel):
    """A finished game as reported by the simulator."""
    model_config = ConfigDict(populate_by_name=True)

    game_id: Optional[str] = Field(None, alias="gameId")
    home_team_id: str = Field(..., alias="homeTeamId", min_length=1)
    away_team_id: str = Field(..., alias="awayTeamId", min_length=1)
    home_score: int = Field(..., alias="homeScore", ge=0)
    away_score: int = Field(..., alias="awayScore", ge=0)
    batting_lines: List[BattingLinePayload] = Field(default_factory=list, alias="playerBattingLines")
    pitching_lines: List[PitchingLinePayload] = Field(default_factory=list, alias="playerPitchingLines")
    starter_ids: List[str] = Field(default_factory=list, alias="starterIds")

    @model_validator(mode="after")
    def check_not_tied(self) -> "GameResultPayload":
        if self.home_score == self.away_score:
            raise ValueError("Game cannot end tied")
        return self

    def to_domain(self) -> GameResult:
        return GameResult(
            home_team_id=self.home_team_id,
            away_team_id=self.away_team_id,
            home_score=self.home_score,
            away_score=self.away_score,
            batting_lines=tuple(line.to_domain() for line in self.batting_lines),
            pitching_lines=tuple(line.to_domain() for line in self.pitching_lines),
            starter_ids=frozenset(self.starter_ids),
            game_id=self.game_id
        )


class DayResultPayload(BaseModel):
    """Every game result for one simulated day."""
    model_config = ConfigDict(populate_by_name=True)

    day_number: int = Field(..., alias="dayNumber", ge=1)
    games: List[GameResultPayload] = Field(default_factory=list)

    def to_domain(self) -> DayResult:
        return DayResult(
            day_number=self.day_number,
            games=tuple(game.to_domain() for game in self.games)
        )


def parse_day_result(data: Mapping[str, Any]) -> DayResult:
    """
    Validate a raw day-result mapping and convert it to engine values.

    Raises:
        ValidationError: PAYLOAD_INVALID with one detail per failing field
    """
    try:
        payload = DayResultPayload.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            "PAYLOAD_INVALID",
            "Invalid day result payload",
            details=[
                {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                for err in e.errors()
            ]
        ) from e
    return payload.to_domain()


# ============== Persistence rows ==============

class ScheduleRow(BaseModel):
    """One scheduled game, flattened for storage."""
    league_id: str
    day_number: int
    home_team_id: str
    away_team_id: str


def schedule_to_rows(league_id: str, days: Iterable[ScheduleDay]) -> List[ScheduleRow]:
    """Flatten a schedule in day order, then game order within a day."""
    return [
        ScheduleRow(
            league_id=league_id,
            day_number=day.day_number,
            home_team_id=game.home_team_id,
            away_team_id=game.away_team_id
        )
        for day in sorted(days, key=lambda d: d.day_number)
        for game in day.games
    ]


class SeasonStatRow(BaseModel):
    """Season totals for one player, ready to upsert."""
    league_id: str
    player_id: str
    team_id: str
    batting_stats: Optional[Dict[str, Any]] = None
    pitching_stats: Optional[Dict[str, Any]] = None


def season_stat_rows(
    league_id: str,
    batting: Mapping[str, BattingStats],
    pitching: Mapping[str, PitchingStats],
    player_teams: Mapping[str, str]
) -> List[SeasonStatRow]:
    """
    Build one upsert row per player with batting and/or pitching totals.

    Players without a team mapping are skipped.
    """
    player_ids = list(batting)
    player_ids += [pid for pid in pitching if pid not in batting]

    rows = []
    for player_id in player_ids:
        team_id = player_teams.get(player_id)
        if team_id is None:
            continue
        batting_stats = batting.get(player_id)
        pitching_stats = pitching.get(player_id)
        rows.append(SeasonStatRow(
            league_id=league_id,
            player_id=player_id,
            team_id=team_id,
            batting_stats=batting_stats.to_dict() if batting_stats else None,
            pitching_stats=pitching_stats.to_dict() if pitching_stats else None
        ))
    return rows
