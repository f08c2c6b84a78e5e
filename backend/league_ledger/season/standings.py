"""
Standings calculations.

Tie-break order used everywhere teams are ranked:
1. Win percentage (descending)
2. Run differential (descending)
3. Runs scored (descending)
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Set, Tuple

from ..core.config import WILD_CARD_SLOTS
from ..core.errors import NotFoundError, ValidationError
from .models import DivisionStandings, GameResult, StandingsEntry, Team


def compute_win_pct(wins: int, losses: int) -> float:
    """Win percentage; 0 when no games have been played."""
    total = wins + losses
    if total == 0:
        return 0.0
    return wins / total


def compute_games_behind(leader_wins: int, leader_losses: int, team_wins: int, team_losses: int) -> float:
    """GB = ((leader W - team W) + (team L - leader L)) / 2"""
    return ((leader_wins - team_wins) + (team_losses - leader_losses)) / 2


def compute_pythagorean(runs_scored: int, runs_allowed: int) -> float:
    """Pythagorean expected win percentage: RS^2 / (RS^2 + RA^2)."""
    rs2 = runs_scored ** 2
    ra2 = runs_allowed ** 2
    if rs2 + ra2 == 0:
        return 0.5
    return rs2 / (rs2 + ra2)


def standings_sort_key(team: Team) -> Tuple[float, int, int]:
    return (
        -compute_win_pct(team.wins, team.losses),
        -(team.runs_scored - team.runs_allowed),
        -team.runs_scored,
    )


def sort_standings(teams: Iterable[Team]) -> List[Team]:
    """Return teams in tie-break order. Input order breaks any remaining tie."""
    return sorted(teams, key=standings_sort_key)


def compute_standings(teams: Iterable[Team]) -> List[DivisionStandings]:
    """
    Group teams by (league, division) and sort each group.

    Divisions are returned in order of first appearance in `teams`.
    """
    groups: Dict[Tuple[str, str], List[Team]] = defaultdict(list)
    for team in teams:
        groups[(team.league, team.division)].append(team)

    return [
        DivisionStandings(league=league, division=division, teams=sort_standings(group))
        for (league, division), group in groups.items()
    ]


def build_standings_entries(division: DivisionStandings) -> List[StandingsEntry]:
    """Standings rows for a division, with games behind measured from the leader."""
    leader = division.leader
    if leader is None:
        return []

    return [
        StandingsEntry(
            team=team,
            win_pct=compute_win_pct(team.wins, team.losses),
            games_behind=compute_games_behind(leader.wins, leader.losses, team.wins, team.losses),
            run_differential=team.runs_scored - team.runs_allowed,
            pythagorean_win_pct=compute_pythagorean(team.runs_scored, team.runs_allowed)
        )
        for team in division.teams
    ]


def get_division_winners(standings: Iterable[DivisionStandings]) -> Dict[str, Team]:
    """Map "<league>-<division>" to the first-place team of each division."""
    winners = {}
    for division in standings:
        if division.teams:
            winners[f"{division.league}-{division.division}"] = division.teams[0]
    return winners


def get_wild_card_teams(
    league: str,
    standings: Iterable[DivisionStandings],
    division_winner_ids: Set[str],
    slots: int = WILD_CARD_SLOTS
) -> List[Team]:
    """Best `slots` non-division-winners in a league, in tie-break order."""
    candidates = [
        team
        for division in standings
        if division.league == league
        for team in division.teams
        if team.id not in division_winner_ids
    ]
    return sort_standings(candidates)[:slots]


# ============== Result application ==============

def update_team_record(team: Team, runs_for: int, runs_against: int, is_home: bool) -> Team:
    """
    Return a copy of the team with one game's result applied.

    Raises:
        ValidationError: If the game ended tied
    """
    if runs_for == runs_against:
        raise ValidationError(
            "GAME_INVALID_SCORE", f"Game cannot end tied ({runs_for}-{runs_against})"
        )

    updated = team.copy()
    updated.runs_scored += runs_for
    updated.runs_allowed += runs_against

    if runs_for > runs_against:
        updated.wins += 1
        if is_home:
            updated.home_wins += 1
        else:
            updated.away_wins += 1
    else:
        updated.losses += 1
        if is_home:
            updated.home_losses += 1
        else:
            updated.away_losses += 1

    return updated


def apply_game_results(teams: Mapping[str, Team], results: Iterable[GameResult]) -> Dict[str, Team]:
    """
    Apply a batch of game results to the standings.

    Args:
        teams: Current teams by ID
        results: Finished games

    Returns:
        New dict of team copies with records updated

    Raises:
        NotFoundError: If a result names a team that is not in `teams`
        ValidationError: If a result is tied
    """
    results = list(results)
    for result in results:
        for team_id in (result.home_team_id, result.away_team_id):
            if team_id not in teams:
                raise NotFoundError("TEAM_NOT_FOUND", f"Team not found: {team_id}")
        if result.home_score == result.away_score:
            raise ValidationError(
                "GAME_INVALID_SCORE",
                f"Game {result.game_id or '?'} cannot end tied ({result.home_score}-{result.away_score})"
            )

    updated = {tid: t.copy() for tid, t in teams.items()}
    for result in results:
        updated[result.home_team_id] = update_team_record(
            updated[result.home_team_id], result.home_score, result.away_score, is_home=True
        )
        updated[result.away_team_id] = update_team_record(
            updated[result.away_team_id], result.away_score, result.home_score, is_home=False
        )

    return updated
