"""
Season pipeline.

Glues the pure pieces together the way a season advances:

    day results -> team records + season stats -> standings
    regular season complete -> playoff bracket
    playoff game -> bracket update -> advancement -> champion

The game simulator itself is a black box passed in by the caller.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple, Union

from ..core.config import REGULAR_SEASON_DAYS
from .accumulator import accumulate_game_stats
from .models import (
    BattingStats,
    DayResult,
    FullPlayoffBracket,
    GameResult,
    NextPlayoffGame,
    PitchingStats,
    ScheduleDay,
    Team,
)
from .playoffs import (
    advance_full_bracket_winners,
    generate_full_playoff_bracket,
    get_next_full_bracket_game,
    record_full_bracket_game_result,
)
from .schedule import is_regular_season_complete
from .standings import apply_game_results, compute_standings


logger = logging.getLogger("league_ledger.engine")

# (next game) -> (home score, away score)
GameSimulator = Callable[[NextPlayoffGame], Tuple[int, int]]


@dataclass
class SeasonSnapshot:
    """Team records and season stat maps at a point in the season."""

    teams: Dict[str, Team]
    batting: Dict[str, BattingStats] = field(default_factory=dict)
    pitching: Dict[str, PitchingStats] = field(default_factory=dict)

    def copy(self) -> 'SeasonSnapshot':
        return SeasonSnapshot(
            teams={tid: t.copy() for tid, t in self.teams.items()},
            batting={pid: s.copy() for pid, s in self.batting.items()},
            pitching={pid: s.copy() for pid, s in self.pitching.items()}
        )

    def to_dict(self) -> dict:
        return {
            "teams": {tid: t.to_dict() for tid, t in self.teams.items()},
            "batting": {pid: s.to_dict() for pid, s in self.batting.items()},
            "pitching": {pid: s.to_dict() for pid, s in self.pitching.items()}
        }


def apply_day(
    snapshot: SeasonSnapshot,
    results: Union[Iterable[GameResult], DayResult]
) -> SeasonSnapshot:
    """
    Apply one day's finished games to a snapshot.

    Args:
        snapshot: Current season state
        results: The day's game results, or a DayResult wrapping them

    Returns:
        New snapshot; the input snapshot is not modified
    """
    games = list(getattr(results, "games", results))

    batting, pitching = snapshot.batting, snapshot.pitching
    for result in games:
        batting, pitching = accumulate_game_stats(
            batting,
            pitching,
            result.batting_lines,
            result.pitching_lines,
            set(result.starter_ids)
        )

    teams = apply_game_results(snapshot.teams, games)

    logger.debug("Applied %d game results", len(games))
    return SeasonSnapshot(teams=teams, batting=batting, pitching=pitching)


def check_playoff_transition(
    league_id: str,
    current_day: int,
    days: Sequence[ScheduleDay],
    teams: Iterable[Team],
    season_days: int = REGULAR_SEASON_DAYS
) -> Optional[FullPlayoffBracket]:
    """
    Build the playoff bracket once the regular season is over.

    Returns:
        A fresh FullPlayoffBracket, or None while regular-season games remain
    """
    if not is_regular_season_complete(current_day, days, season_days):
        return None

    logger.info("Regular season complete for league %s on day %d", league_id, current_day)
    return generate_full_playoff_bracket(league_id, compute_standings(teams))


def play_next_playoff_game(
    bracket: FullPlayoffBracket,
    simulate_game: GameSimulator
) -> Tuple[FullPlayoffBracket, Optional[NextPlayoffGame]]:
    """
    Advance the bracket by one game.

    Winners are advanced first, the next playable game is simulated and
    recorded, and winners are advanced again so a clinch is reflected
    immediately.

    Returns:
        Tuple of (updated bracket, game that was played), or
        (bracket, None) when no game is playable
    """
    bracket = advance_full_bracket_winners(bracket)
    next_game = get_next_full_bracket_game(bracket)
    if next_game is None:
        return bracket, None

    home_score, away_score = simulate_game(next_game)
    bracket = record_full_bracket_game_result(
        bracket, next_game.series_id, next_game.game_number, home_score, away_score
    )
    return advance_full_bracket_winners(bracket), next_game
