"""
Season stats accumulation.

Folds single-game batting/pitching lines into season totals. Every function
returns new objects; inputs are never mutated.
"""

from typing import Dict, Iterable, Mapping, Set, Tuple

from ..core.errors import ValidationError
from ..core.leagues import Decision
from .derived import add_ip, compute_derived_batting, compute_derived_pitching
from .models import BattingLine, BattingStats, PitchingLine, PitchingStats


def create_empty_batting_stats() -> BattingStats:
    return BattingStats()


def create_empty_pitching_stats() -> PitchingStats:
    return PitchingStats()


def accumulate_batting(season: BattingStats, line: BattingLine) -> BattingStats:
    """Add one game's batting line to season totals."""
    updated = BattingStats(
        games=season.games + 1,
        at_bats=season.at_bats + line.at_bats,
        runs=season.runs + line.runs,
        hits=season.hits + line.hits,
        doubles=season.doubles + line.doubles,
        triples=season.triples + line.triples,
        home_runs=season.home_runs + line.home_runs,
        rbi=season.rbi + line.rbi,
        stolen_bases=season.stolen_bases + line.stolen_bases,
        caught_stealing=season.caught_stealing + line.caught_stealing,
        walks=season.walks + line.walks,
        strikeouts=season.strikeouts + line.strikeouts,
        intentional_walks=season.intentional_walks + line.intentional_walks,
        hit_by_pitch=season.hit_by_pitch + line.hit_by_pitch,
        sacrifice_hits=season.sacrifice_hits + line.sacrifice_hits,
        sacrifice_flies=season.sacrifice_flies + line.sacrifice_flies,
        gidp=season.gidp + line.gidp
    )
    return compute_derived_batting(updated)


def accumulate_pitching(season: PitchingStats, line: PitchingLine, is_starter: bool) -> PitchingStats:
    """
    Add one game's pitching line to season totals.

    The decision (if any) increments exactly one of W/L/SV/HLD/BS, and innings
    are combined with thirds carry.

    Raises:
        ValidationError: If the line carries an unknown decision code
    """
    try:
        decision = Decision(line.decision) if line.decision else None
    except ValueError as e:
        raise ValidationError(
            "PAYLOAD_INVALID",
            f"Unknown pitching decision for {line.player_id}: {line.decision}",
            details=[{"field": "decision", "message": str(e)}]
        ) from e

    updated = PitchingStats(
        games=season.games + 1,
        games_started=season.games_started + (1 if is_starter else 0),
        wins=season.wins + (1 if decision is Decision.WIN else 0),
        losses=season.losses + (1 if decision is Decision.LOSS else 0),
        saves=season.saves + (1 if decision is Decision.SAVE else 0),
        holds=season.holds + (1 if decision is Decision.HOLD else 0),
        blown_saves=season.blown_saves + (1 if decision is Decision.BLOWN_SAVE else 0),
        ip=add_ip(season.ip, line.ip),
        hits=season.hits + line.hits,
        runs=season.runs + line.runs,
        earned_runs=season.earned_runs + line.earned_runs,
        home_runs=season.home_runs + line.home_runs,
        walks=season.walks + line.walks,
        strikeouts=season.strikeouts + line.strikeouts,
        hit_by_pitch=season.hit_by_pitch + line.hit_by_pitch,
        batters_faced=season.batters_faced + line.batters_faced,
        wild_pitches=season.wild_pitches + line.wild_pitches,
        balks=season.balks + line.balks,
        complete_games=season.complete_games + (line.complete_games or 0),
        shutouts=season.shutouts + (line.shutouts or 0)
    )
    return compute_derived_pitching(updated)


def accumulate_game_stats(
    season_batting: Mapping[str, BattingStats],
    season_pitching: Mapping[str, PitchingStats],
    batting_lines: Iterable[BattingLine],
    pitching_lines: Iterable[PitchingLine],
    starter_ids: Set[str]
) -> Tuple[Dict[str, BattingStats], Dict[str, PitchingStats]]:
    """
    Fold every line from one game into fresh copies of the season maps.

    Players seen for the first time start from zero-initialized stats.

    Args:
        season_batting: Player ID -> batting totals so far
        season_pitching: Player ID -> pitching totals so far
        batting_lines: Batting lines from the game
        pitching_lines: Pitching lines from the game
        starter_ids: IDs of the pitchers who started the game

    Returns:
        Tuple of (new batting map, new pitching map)
    """
    batting = dict(season_batting)
    pitching = dict(season_pitching)

    for line in batting_lines:
        existing = batting.get(line.player_id) or create_empty_batting_stats()
        batting[line.player_id] = accumulate_batting(existing, line)

    for line in pitching_lines:
        existing = pitching.get(line.player_id) or create_empty_pitching_stats()
        pitching[line.player_id] = accumulate_pitching(existing, line, line.player_id in starter_ids)

    return batting, pitching
