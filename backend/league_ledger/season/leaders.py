"""
League leaderboards and team aggregates.

Rate categories (BA/OBP/SLG/OPS, ERA/WHIP) only include qualified players:
- Batters need 3.1 plate appearances per team game.
- Pitchers need 1 inning pitched per team game.

Counting categories include everyone. Pitching rate stats sort ascending;
everything else sorts descending.
"""

from enum import Enum
from typing import Callable, Iterable, List, Sequence, Type, TypeVar, Union

from ..core.errors import ValidationError
from .derived import (
    compute_ba,
    compute_obp,
    compute_slg,
    ip_to_decimal,
)
from .models import (
    BattingLeaderEntry,
    BattingStats,
    PitchingLeaderEntry,
    PitchingStats,
    RankedLeader,
    TeamAggregateStats,
)
from .standings import compute_pythagorean


PA_PER_TEAM_GAME = 3.1
IP_PER_TEAM_GAME = 1.0


class BattingCategory(Enum):
    """Batting leaderboard categories: (accessor, is_rate)."""

    BA = (lambda s: s.ba, True)
    OBP = (lambda s: s.obp, True)
    SLG = (lambda s: s.slg, True)
    OPS = (lambda s: s.ops, True)
    HR = (lambda s: s.home_runs, False)
    RBI = (lambda s: s.rbi, False)
    R = (lambda s: s.runs, False)
    H = (lambda s: s.hits, False)
    DOUBLES = (lambda s: s.doubles, False)
    TRIPLES = (lambda s: s.triples, False)
    SB = (lambda s: s.stolen_bases, False)
    BB = (lambda s: s.walks, False)

    def __init__(self, accessor: Callable[[BattingStats], float], is_rate: bool):
        self.accessor = accessor
        self.is_rate = is_rate
        self.ascending = False


class PitchingCategory(Enum):
    """Pitching leaderboard categories: (accessor, is_rate). Rate stats sort ascending."""

    ERA = (lambda s: s.era, True)
    WHIP = (lambda s: s.whip, True)
    W = (lambda s: s.wins, False)
    SO = (lambda s: s.strikeouts, False)
    SV = (lambda s: s.saves, False)
    CG = (lambda s: s.complete_games, False)
    SHO = (lambda s: s.shutouts, False)
    IP = (lambda s: ip_to_decimal(s.ip), False)

    def __init__(self, accessor: Callable[[PitchingStats], float], is_rate: bool):
        self.accessor = accessor
        self.is_rate = is_rate
        self.ascending = is_rate


CategoryT = TypeVar("CategoryT", BattingCategory, PitchingCategory)


def _resolve_category(category: Union[str, CategoryT], enum_cls: Type[CategoryT]) -> CategoryT:
    if isinstance(category, enum_cls):
        return category
    key = str(category).upper()
    try:
        return enum_cls[key]
    except KeyError:
        raise ValidationError(
            "LEADERBOARD_UNKNOWN_CATEGORY",
            f"Unknown {enum_cls.__name__} category: {category}"
        ) from None


# ============== Qualification ==============

def is_batting_qualified(stats: BattingStats, team_games: int) -> bool:
    """PA = AB + BB + HBP + SF + SH must reach 3.1 per team game."""
    # 100 * 3.1 is 310.00000000000006 in floating point
    return stats.plate_appearances >= round(team_games * PA_PER_TEAM_GAME, 6)


def is_pitching_qualified(stats: PitchingStats, team_games: int) -> bool:
    return ip_to_decimal(stats.ip) >= team_games * IP_PER_TEAM_GAME


# ============== Ranking ==============

def _rank(
    entries: Sequence[Union[BattingLeaderEntry, PitchingLeaderEntry]],
    accessor: Callable,
    ascending: bool,
    limit: int
) -> List[RankedLeader]:
    valued = [(accessor(entry.stats), entry) for entry in entries]
    valued.sort(key=lambda pair: pair[0], reverse=not ascending)

    # Positional ranks: equal values still get distinct ranks
    return [
        RankedLeader(
            rank=i + 1,
            value=value,
            player_id=entry.player_id,
            team_id=entry.team_id,
            league=entry.league,
            player_name=entry.player_name,
            team_name=entry.team_name
        )
        for i, (value, entry) in enumerate(valued[:limit])
    ]


def get_batting_leaders(
    players: Iterable[BattingLeaderEntry],
    category: Union[str, BattingCategory],
    team_games: int,
    limit: int
) -> List[RankedLeader]:
    """
    Top batters for a category.

    Args:
        players: Candidate batters
        category: Category enum or its name ("BA", "HR", ...)
        team_games: Games played by each team, for qualification
        limit: Maximum rows returned

    Raises:
        ValidationError: If the category is unknown
    """
    cat = _resolve_category(category, BattingCategory)
    eligible = [
        p for p in players
        if not cat.is_rate or is_batting_qualified(p.stats, team_games)
    ]
    return _rank(eligible, cat.accessor, cat.ascending, limit)


def get_pitching_leaders(
    players: Iterable[PitchingLeaderEntry],
    category: Union[str, PitchingCategory],
    team_games: int,
    limit: int
) -> List[RankedLeader]:
    """Top pitchers for a category. ERA and WHIP rank lowest first."""
    cat = _resolve_category(category, PitchingCategory)
    eligible = [
        p for p in players
        if not cat.is_rate or is_pitching_qualified(p.stats, team_games)
    ]
    return _rank(eligible, cat.accessor, cat.ascending, limit)


EntryT = TypeVar("EntryT", BattingLeaderEntry, PitchingLeaderEntry)


def filter_by_league(entries: Iterable[EntryT], league: str) -> List[EntryT]:
    """Keep entries from one league, or all of them for "combined"."""
    if league == "combined":
        return list(entries)
    return [e for e in entries if e.league == league]


# ============== Team aggregates ==============

def compute_team_aggregate_stats(
    team_id: str,
    batters: Iterable[BattingStats],
    pitchers: Iterable[PitchingStats],
    runs_scored: int,
    runs_allowed: int,
    total_errors: int
) -> TeamAggregateStats:
    """Sum a roster's counting stats and derive team rates from the sums."""
    at_bats = hits = doubles = triples = home_runs = 0
    stolen_bases = walks = hit_by_pitch = sacrifice_flies = 0

    for b in batters:
        at_bats += b.at_bats
        hits += b.hits
        doubles += b.doubles
        triples += b.triples
        home_runs += b.home_runs
        stolen_bases += b.stolen_bases
        walks += b.walks
        hit_by_pitch += b.hit_by_pitch
        sacrifice_flies += b.sacrifice_flies

    innings = 0.0
    earned_runs = 0
    for p in pitchers:
        innings += ip_to_decimal(p.ip)
        earned_runs += p.earned_runs

    return TeamAggregateStats(
        team_id=team_id,
        runs_scored=runs_scored,
        runs_allowed=runs_allowed,
        run_differential=runs_scored - runs_allowed,
        total_hr=home_runs,
        total_sb=stolen_bases,
        total_errors=total_errors,
        team_ba=compute_ba(hits, at_bats),
        team_obp=compute_obp(hits, walks, hit_by_pitch, at_bats, sacrifice_flies),
        team_slg=compute_slg(hits, doubles, triples, home_runs, at_bats),
        team_era=0.0 if innings == 0 else earned_runs * 9 / innings,
        pythagorean_win_pct=compute_pythagorean(runs_scored, runs_allowed)
    )
