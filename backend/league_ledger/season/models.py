"""
Data models for the season engine.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from .derived import compute_derived_batting, compute_derived_pitching


@dataclass
class Team:
    """A team with its cumulative record and run totals."""

    id: str
    name: str
    league: str
    division: str
    city: str = ""
    wins: int = 0
    losses: int = 0
    runs_scored: int = 0
    runs_allowed: int = 0
    home_wins: int = 0
    home_losses: int = 0
    away_wins: int = 0
    away_losses: int = 0

    @property
    def record_str(self) -> str:
        return f"{self.wins}-{self.losses}"

    @property
    def win_pct(self) -> float:
        total = self.wins + self.losses
        if total == 0:
            return 0.0
        return self.wins / total

    @property
    def run_differential(self) -> int:
        return self.runs_scored - self.runs_allowed

    @property
    def display_name(self) -> str:
        return f"{self.city} {self.name}".strip()

    def copy(self) -> 'Team':
        """Create a copy of this team."""
        return Team(
            id=self.id,
            name=self.name,
            league=self.league,
            division=self.division,
            city=self.city,
            wins=self.wins,
            losses=self.losses,
            runs_scored=self.runs_scored,
            runs_allowed=self.runs_allowed,
            home_wins=self.home_wins,
            home_losses=self.home_losses,
            away_wins=self.away_wins,
            away_losses=self.away_losses
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "city": self.city,
            "league": self.league,
            "division": self.division,
            "wins": self.wins,
            "losses": self.losses,
            "runs_scored": self.runs_scored,
            "runs_allowed": self.runs_allowed,
            "home_wins": self.home_wins,
            "home_losses": self.home_losses,
            "away_wins": self.away_wins,
            "away_losses": self.away_losses,
            "record": self.record_str,
            "win_pct": self.win_pct,
            "run_differential": self.run_differential
        }


# ============== Schedule ==============

@dataclass
class ScheduleGame:
    """One scheduled regular-season game."""

    id: str
    home_team_id: str
    away_team_id: str
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    is_complete: bool = False
    game_log_id: Optional[str] = None

    def copy(self) -> 'ScheduleGame':
        return ScheduleGame(
            id=self.id,
            home_team_id=self.home_team_id,
            away_team_id=self.away_team_id,
            home_score=self.home_score,
            away_score=self.away_score,
            is_complete=self.is_complete,
            game_log_id=self.game_log_id
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "home_team_id": self.home_team_id,
            "away_team_id": self.away_team_id,
            "home_score": self.home_score,
            "away_score": self.away_score,
            "is_complete": self.is_complete,
            "game_log_id": self.game_log_id
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScheduleGame':
        return cls(
            id=data["id"],
            home_team_id=data["home_team_id"],
            away_team_id=data["away_team_id"],
            home_score=data.get("home_score"),
            away_score=data.get("away_score"),
            is_complete=bool(data.get("is_complete", False)),
            game_log_id=data.get("game_log_id")
        )


@dataclass
class ScheduleDay:
    """All games played on one day of the season."""

    day_number: int
    games: List[ScheduleGame] = field(default_factory=list)

    @property
    def team_ids(self) -> List[str]:
        ids = []
        for game in self.games:
            ids.append(game.home_team_id)
            ids.append(game.away_team_id)
        return ids

    def copy(self) -> 'ScheduleDay':
        return ScheduleDay(
            day_number=self.day_number,
            games=[g.copy() for g in self.games]
        )

    def to_dict(self) -> dict:
        return {
            "day_number": self.day_number,
            "games": [g.to_dict() for g in self.games]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScheduleDay':
        return cls(
            day_number=int(data["day_number"]),
            games=[ScheduleGame.from_dict(g) for g in data.get("games", [])]
        )


# ============== Box-score lines ==============

@dataclass(frozen=True)
class BattingLine:
    """One player's batting line for a single game."""

    player_id: str
    at_bats: int = 0
    runs: int = 0
    hits: int = 0
    doubles: int = 0
    triples: int = 0
    home_runs: int = 0
    rbi: int = 0
    walks: int = 0
    strikeouts: int = 0
    stolen_bases: int = 0
    caught_stealing: int = 0
    hit_by_pitch: int = 0
    sacrifice_flies: int = 0
    sacrifice_hits: int = 0
    intentional_walks: int = 0
    gidp: int = 0
    player_name: Optional[str] = None


@dataclass(frozen=True)
class PitchingLine:
    """One pitcher's line for a single game. IP is in baseball notation."""

    player_id: str
    ip: float = 0.0
    hits: int = 0
    runs: int = 0
    earned_runs: int = 0
    walks: int = 0
    strikeouts: int = 0
    home_runs: int = 0
    batters_faced: int = 0
    hit_by_pitch: int = 0
    wild_pitches: int = 0
    balks: int = 0
    complete_games: Optional[int] = None
    shutouts: Optional[int] = None
    decision: Optional[str] = None
    player_name: Optional[str] = None


@dataclass(frozen=True)
class GameResult:
    """A finished game as reported by the game simulator."""

    home_team_id: str
    away_team_id: str
    home_score: int
    away_score: int
    batting_lines: Tuple[BattingLine, ...] = ()
    pitching_lines: Tuple[PitchingLine, ...] = ()
    starter_ids: FrozenSet[str] = frozenset()
    game_id: Optional[str] = None

    @property
    def winner_id(self) -> str:
        if self.home_score > self.away_score:
            return self.home_team_id
        return self.away_team_id


@dataclass(frozen=True)
class DayResult:
    """Every game result reported for one day."""

    day_number: int
    games: Tuple[GameResult, ...] = ()


# ============== Season stats ==============

# Derived fields are recomputed, never read back from storage
_BATTING_DERIVED = ("ba", "obp", "slg", "ops")
_PITCHING_DERIVED = ("era", "whip", "fip")


@dataclass
class BattingStats:
    """Season batting totals plus derived rate stats."""

    games: int = 0
    at_bats: int = 0
    runs: int = 0
    hits: int = 0
    doubles: int = 0
    triples: int = 0
    home_runs: int = 0
    rbi: int = 0
    stolen_bases: int = 0
    caught_stealing: int = 0
    walks: int = 0
    strikeouts: int = 0
    intentional_walks: int = 0
    hit_by_pitch: int = 0
    sacrifice_hits: int = 0
    sacrifice_flies: int = 0
    gidp: int = 0
    ba: float = 0.0
    obp: float = 0.0
    slg: float = 0.0
    ops: float = 0.0

    @property
    def plate_appearances(self) -> int:
        return (self.at_bats + self.walks + self.hit_by_pitch
                + self.sacrifice_flies + self.sacrifice_hits)

    def copy(self) -> 'BattingStats':
        return BattingStats(**{f.name: getattr(self, f.name) for f in fields(self)})

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BattingStats':
        counting = {
            f.name: data.get(f.name, 0)
            for f in fields(cls)
            if f.name not in _BATTING_DERIVED
        }
        return compute_derived_batting(cls(**counting))


@dataclass
class PitchingStats:
    """Season pitching totals plus derived rate stats. IP is in baseball notation."""

    games: int = 0
    games_started: int = 0
    wins: int = 0
    losses: int = 0
    saves: int = 0
    holds: int = 0
    blown_saves: int = 0
    ip: float = 0.0
    hits: int = 0
    runs: int = 0
    earned_runs: int = 0
    home_runs: int = 0
    walks: int = 0
    strikeouts: int = 0
    hit_by_pitch: int = 0
    batters_faced: int = 0
    wild_pitches: int = 0
    balks: int = 0
    complete_games: int = 0
    shutouts: int = 0
    era: float = 0.0
    whip: float = 0.0
    fip: float = 0.0

    def copy(self) -> 'PitchingStats':
        return PitchingStats(**{f.name: getattr(self, f.name) for f in fields(self)})

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PitchingStats':
        counting = {
            f.name: data.get(f.name, 0)
            for f in fields(cls)
            if f.name not in _PITCHING_DERIVED
        }
        return compute_derived_pitching(cls(**counting))


# ============== Standings ==============

@dataclass
class DivisionStandings:
    """A division's teams in standings order."""

    league: str
    division: str
    teams: List[Team] = field(default_factory=list)

    @property
    def leader(self) -> Optional[Team]:
        return self.teams[0] if self.teams else None

    def to_dict(self) -> dict:
        return {
            "league": self.league,
            "division": self.division,
            "teams": [t.to_dict() for t in self.teams]
        }


@dataclass
class StandingsEntry:
    """One row of a standings table."""

    team: Team
    win_pct: float
    games_behind: float
    run_differential: int
    pythagorean_win_pct: float

    def to_dict(self) -> dict:
        return {
            "team_id": self.team.id,
            "record": self.team.record_str,
            "win_pct": self.win_pct,
            "games_behind": self.games_behind,
            "run_differential": self.run_differential,
            "pythagorean_win_pct": self.pythagorean_win_pct
        }


# ============== Leaderboards ==============

@dataclass
class BattingLeaderEntry:
    """A batter's season line tagged with team and league."""

    player_id: str
    team_id: str
    league: str
    stats: BattingStats
    player_name: Optional[str] = None
    team_name: Optional[str] = None


@dataclass
class PitchingLeaderEntry:
    """A pitcher's season line tagged with team and league."""

    player_id: str
    team_id: str
    league: str
    stats: PitchingStats
    player_name: Optional[str] = None
    team_name: Optional[str] = None


@dataclass
class RankedLeader:
    """A leaderboard row."""

    rank: int
    value: float
    player_id: str
    team_id: str
    league: str
    player_name: Optional[str] = None
    team_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "rank": self.rank,
            "value": self.value,
            "player_id": self.player_id,
            "player_name": self.player_name,
            "team_id": self.team_id,
            "team_name": self.team_name,
            "league": self.league
        }


@dataclass
class TeamAggregateStats:
    """Team-level totals built from its players' season stats."""

    team_id: str
    runs_scored: int
    runs_allowed: int
    run_differential: int
    total_hr: int
    total_sb: int
    total_errors: int
    team_ba: float
    team_obp: float
    team_slg: float
    team_era: float
    pythagorean_win_pct: float

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


# ============== Playoffs ==============

@dataclass
class PlayoffTeamSeed:
    """A seeded playoff team with its regular-season record."""

    team_id: str
    seed: int
    wins: int
    losses: int

    @property
    def win_pct(self) -> float:
        total = self.wins + self.losses
        if total == 0:
            return 0.0
        return self.wins / total

    def copy(self) -> 'PlayoffTeamSeed':
        return PlayoffTeamSeed(
            team_id=self.team_id,
            seed=self.seed,
            wins=self.wins,
            losses=self.losses
        )

    def to_dict(self) -> dict:
        return {
            "team_id": self.team_id,
            "seed": self.seed,
            "record": {"wins": self.wins, "losses": self.losses}
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayoffTeamSeed':
        record = data.get("record", {})
        return cls(
            team_id=data["team_id"],
            seed=int(data["seed"]),
            wins=int(record.get("wins", 0)),
            losses=int(record.get("losses", 0))
        )


@dataclass
class PlayoffGame:
    """A completed postseason game."""

    game_number: int
    home_team_id: str
    away_team_id: str
    home_score: int
    away_score: int
    is_complete: bool = True

    def copy(self) -> 'PlayoffGame':
        return PlayoffGame(
            game_number=self.game_number,
            home_team_id=self.home_team_id,
            away_team_id=self.away_team_id,
            home_score=self.home_score,
            away_score=self.away_score,
            is_complete=self.is_complete
        )

    def to_dict(self) -> dict:
        return {
            "game_number": self.game_number,
            "home_team_id": self.home_team_id,
            "away_team_id": self.away_team_id,
            "home_score": self.home_score,
            "away_score": self.away_score,
            "is_complete": self.is_complete
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayoffGame':
        return cls(
            game_number=int(data["game_number"]),
            home_team_id=data["home_team_id"],
            away_team_id=data["away_team_id"],
            home_score=int(data["home_score"]),
            away_score=int(data["away_score"]),
            is_complete=bool(data.get("is_complete", True))
        )


@dataclass
class PlayoffSeries:
    """A best-of-N series between two seeds."""

    id: str
    round: str
    league: str
    best_of: int
    higher_seed: Optional[PlayoffTeamSeed] = None
    lower_seed: Optional[PlayoffTeamSeed] = None
    games: List[PlayoffGame] = field(default_factory=list)
    higher_seed_wins: int = 0
    lower_seed_wins: int = 0
    is_complete: bool = False
    winner_id: Optional[str] = None

    @property
    def wins_needed(self) -> int:
        return (self.best_of + 1) // 2

    @property
    def has_both_seeds(self) -> bool:
        return self.higher_seed is not None and self.lower_seed is not None

    def seed_for(self, team_id: Optional[str]) -> Optional[PlayoffTeamSeed]:
        """Return the seed entry for a participating team."""
        for seed in (self.higher_seed, self.lower_seed):
            if seed is not None and seed.team_id == team_id:
                return seed
        return None

    def copy(self) -> 'PlayoffSeries':
        return PlayoffSeries(
            id=self.id,
            round=self.round,
            league=self.league,
            best_of=self.best_of,
            higher_seed=self.higher_seed.copy() if self.higher_seed else None,
            lower_seed=self.lower_seed.copy() if self.lower_seed else None,
            games=[g.copy() for g in self.games],
            higher_seed_wins=self.higher_seed_wins,
            lower_seed_wins=self.lower_seed_wins,
            is_complete=self.is_complete,
            winner_id=self.winner_id
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "round": self.round,
            "league": self.league,
            "best_of": self.best_of,
            "higher_seed": self.higher_seed.to_dict() if self.higher_seed else None,
            "lower_seed": self.lower_seed.to_dict() if self.lower_seed else None,
            "games": [g.to_dict() for g in self.games],
            "higher_seed_wins": self.higher_seed_wins,
            "lower_seed_wins": self.lower_seed_wins,
            "is_complete": self.is_complete,
            "winner_id": self.winner_id
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayoffSeries':
        higher = data.get("higher_seed")
        lower = data.get("lower_seed")
        return cls(
            id=data["id"],
            round=data["round"],
            league=data["league"],
            best_of=int(data["best_of"]),
            higher_seed=PlayoffTeamSeed.from_dict(higher) if higher else None,
            lower_seed=PlayoffTeamSeed.from_dict(lower) if lower else None,
            games=[PlayoffGame.from_dict(g) for g in data.get("games", [])],
            higher_seed_wins=int(data.get("higher_seed_wins", 0)),
            lower_seed_wins=int(data.get("lower_seed_wins", 0)),
            is_complete=bool(data.get("is_complete", False)),
            winner_id=data.get("winner_id")
        )


@dataclass
class PlayoffRound:
    """One round of the postseason."""

    name: str
    best_of: int
    series: List[PlayoffSeries] = field(default_factory=list)

    def copy(self) -> 'PlayoffRound':
        return PlayoffRound(
            name=self.name,
            best_of=self.best_of,
            series=[s.copy() for s in self.series]
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "best_of": self.best_of,
            "series": [s.to_dict() for s in self.series]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayoffRound':
        return cls(
            name=data["name"],
            best_of=int(data["best_of"]),
            series=[PlayoffSeries.from_dict(s) for s in data.get("series", [])]
        )


@dataclass
class PlayoffBracket:
    """One league's postseason bracket."""

    league_id: str
    rounds: List[PlayoffRound] = field(default_factory=list)
    champion_id: Optional[str] = None

    def get_round(self, name: str) -> Optional[PlayoffRound]:
        for playoff_round in self.rounds:
            if playoff_round.name == name:
                return playoff_round
        return None

    def find_series(self, series_id: str) -> Optional[PlayoffSeries]:
        for playoff_round in self.rounds:
            for series in playoff_round.series:
                if series.id == series_id:
                    return series
        return None

    def copy(self) -> 'PlayoffBracket':
        return PlayoffBracket(
            league_id=self.league_id,
            rounds=[r.copy() for r in self.rounds],
            champion_id=self.champion_id
        )

    def to_dict(self) -> dict:
        return {
            "league_id": self.league_id,
            "rounds": [r.to_dict() for r in self.rounds],
            "champion_id": self.champion_id
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayoffBracket':
        return cls(
            league_id=data["league_id"],
            rounds=[PlayoffRound.from_dict(r) for r in data.get("rounds", [])],
            champion_id=data.get("champion_id")
        )


@dataclass
class FullPlayoffBracket:
    """AL and NL brackets plus the World Series."""

    league_id: str
    al: PlayoffBracket
    nl: PlayoffBracket
    world_series: PlayoffSeries
    world_series_champion_id: Optional[str] = None

    def copy(self) -> 'FullPlayoffBracket':
        return FullPlayoffBracket(
            league_id=self.league_id,
            al=self.al.copy(),
            nl=self.nl.copy(),
            world_series=self.world_series.copy(),
            world_series_champion_id=self.world_series_champion_id
        )

    def to_dict(self) -> dict:
        return {
            "league_id": self.league_id,
            "al": self.al.to_dict(),
            "nl": self.nl.to_dict(),
            "world_series": self.world_series.to_dict(),
            "world_series_champion_id": self.world_series_champion_id
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FullPlayoffBracket':
        return cls(
            league_id=data["league_id"],
            al=PlayoffBracket.from_dict(data["al"]),
            nl=PlayoffBracket.from_dict(data["nl"]),
            world_series=PlayoffSeries.from_dict(data["world_series"]),
            world_series_champion_id=data.get("world_series_champion_id")
        )


@dataclass(frozen=True)
class NextPlayoffGame:
    """The next postseason game to simulate."""

    series_id: str
    round: str
    game_number: int
    home_team_id: str
    away_team_id: str

    def to_dict(self) -> dict:
        return {
            "series_id": self.series_id,
            "round": self.round,
            "game_number": self.game_number,
            "home_team_id": self.home_team_id,
            "away_team_id": self.away_team_id
        }
