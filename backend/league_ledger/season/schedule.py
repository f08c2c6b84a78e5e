"""
Regular-season schedule generation.

- Teams only play opponents from their own league.
- Intra-division opponents meet more often than inter-division opponents.
- Every team plays at most once per day.
- Pairings come from the circle method; with an odd team count one team
  sits out each round.

All randomness comes from the caller's seeded `random.Random`, so a fixed
seed and team layout always produce the same schedule.
"""

import logging
import math
import random
from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..core.config import REGULAR_SEASON_DAYS, ScheduleConfig
from ..core.errors import NotFoundError, ValidationError
from .models import ScheduleDay, ScheduleGame, Team


logger = logging.getLogger("league_ledger.schedule")

BYE = "BYE"

Pairing = Tuple[str, str]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def generate_round_robin_pairings(team_ids: Sequence[str]) -> List[List[Pairing]]:
    """
    Generate round-robin pairings with the circle method.

    For an even team count this yields N-1 rounds of N/2 pairings. An odd
    count gets a BYE placeholder, which yields N rounds; BYE pairings are
    dropped so each real team sits out exactly one round.

    Returns:
        List of rounds, each a list of (home, away) pairs
    """
    ids = list(team_ids)
    if len(ids) % 2 != 0:
        ids.append(BYE)

    n = len(ids)
    rounds = []

    # Fix ids[0] and rotate the rest one position per round
    for _ in range(n - 1):
        pairings = []
        for i in range(n // 2):
            home = ids[i]
            away = ids[n - 1 - i]
            if home == BYE or away == BYE:
                continue
            pairings.append((home, away))
        rounds.append(pairings)

        ids = [ids[0], ids[-1]] + ids[1:-1]

    return rounds


def compute_matchup_targets(
    teams_in_div: int,
    divs_in_league: int,
    total_teams_in_league: int,
    target_games: int,
    weight: float
) -> Tuple[int, int]:
    """
    Work out how often each intra- and inter-division opponent is played.

    Solves intra_opponents * intra + inter_opponents * inter = target_games
    with intra = weight * inter, rounds, and then re-derives the inter count
    from whatever the rounded intra count leaves over.

    Returns:
        Tuple of (games per intra-division opponent, games per inter-division opponent)
    """
    intra_opponents = teams_in_div - 1
    inter_opponents = total_teams_in_league - teams_in_div

    if intra_opponents <= 0 and inter_opponents <= 0:
        return 0, 0

    if intra_opponents <= 0:
        return 0, _round_half_up(target_games / inter_opponents)

    if inter_opponents <= 0:
        return _round_half_up(target_games / intra_opponents), 0

    inter_games = _round_half_up(target_games / (inter_opponents + intra_opponents * weight))
    intra_games = _round_half_up(weight * inter_games)

    total = intra_opponents * intra_games + inter_opponents * inter_games
    if total != target_games:
        remaining = target_games - intra_opponents * intra_games
        inter_games = max(0, _round_half_up(remaining / inter_opponents))

    logger.debug(
        "Matchup targets for %d-team league (%d divisions): intra=%d inter=%d",
        total_teams_in_league, divs_in_league, intra_games, inter_games
    )
    return intra_games, inter_games


def _repeat_pairing(home: str, away: str, times: int) -> List[Pairing]:
    """Repeat a pairing, alternating home and away by occurrence."""
    return [(home, away) if g % 2 == 0 else (away, home) for g in range(times)]


def _round_robin_matchups(team_ids: Sequence[str], games_per_opponent: int) -> List[Pairing]:
    matchups = []
    for rnd in generate_round_robin_pairings(team_ids):
        for home, away in rnd:
            matchups.extend(_repeat_pairing(home, away, games_per_opponent))
    return matchups


def _generate_league_matchups(
    league_teams: Sequence[Team],
    target_games: int,
    intra_division_weight: float,
    rng: random.Random
) -> List[Pairing]:
    """Build and shuffle the full matchup multiset for one league."""
    divisions: Dict[str, List[str]] = defaultdict(list)
    for team in league_teams:
        divisions[team.division].append(team.id)

    team_ids = [t.id for t in league_teams]

    if len(divisions) <= 1:
        if len(team_ids) < 2:
            return []
        per_opponent = _round_half_up(target_games / (len(team_ids) - 1))
        matchups = _round_robin_matchups(team_ids, per_opponent)
    else:
        teams_per_div = math.ceil(len(league_teams) / len(divisions))
        intra_games, inter_games = compute_matchup_targets(
            teams_per_div, len(divisions), len(league_teams), target_games, intra_division_weight
        )

        matchups = []
        for div_team_ids in divisions.values():
            matchups.extend(_round_robin_matchups(div_team_ids, intra_games))

        div_lists = list(divisions.values())
        for i, div_a in enumerate(div_lists):
            for div_b in div_lists[i + 1:]:
                for a in div_a:
                    for b in div_b:
                        matchups.extend(_repeat_pairing(a, b, inter_games))

    rng.shuffle(matchups)
    return matchups


def _schedule_league_day(
    queue: List[Pairing],
    league_size: int,
    teams_used_today: set,
    rng: random.Random
) -> Tuple[List[Pairing], List[Pairing]]:
    """
    Greedily pick one day's games for a league from its queue.

    Returns:
        Tuple of (games scheduled today, matchups left in the queue)
    """
    scheduled = []
    remaining = []
    used = set(teams_used_today)
    max_games = league_size // 2

    for home, away in queue:
        if len(scheduled) < max_games and home not in used and away not in used:
            if rng.random() < 0.5:
                scheduled.append((home, away))
            else:
                scheduled.append((away, home))
            used.add(home)
            used.add(away)
        else:
            remaining.append((home, away))

    return scheduled, remaining


def generate_schedule(
    teams: Sequence[Team],
    rng: random.Random,
    config: Optional[ScheduleConfig] = None
) -> List[ScheduleDay]:
    """
    Generate a full regular-season schedule.

    Args:
        teams: Every team in the league
        rng: Seeded random generator
        config: Optional target games per team and intra-division weight

    Returns:
        ScheduleDay list with day numbers 1..N

    Raises:
        ValidationError: If no teams are given
    """
    if not teams:
        raise ValidationError("SCHEDULE_NO_TEAMS", "Cannot generate schedule with no teams")

    config = config or ScheduleConfig()

    leagues: Dict[str, List[Team]] = defaultdict(list)
    for team in teams:
        leagues[team.league].append(team)

    queues = {
        league: _generate_league_matchups(
            league_teams, config.target_games_per_team, config.intra_division_weight, rng
        )
        for league, league_teams in leagues.items()
    }

    days: List[ScheduleDay] = []
    while any(queues.values()):
        day_number = len(days) + 1
        games: List[ScheduleGame] = []
        teams_used_today: set = set()

        for league, league_teams in leagues.items():
            scheduled, queues[league] = _schedule_league_day(
                queues[league], len(league_teams), teams_used_today, rng
            )
            for home, away in scheduled:
                games.append(ScheduleGame(
                    id=f"g-{day_number}-{len(games)}",
                    home_team_id=home,
                    away_team_id=away
                ))
                teams_used_today.update((home, away))

        if games:
            days.append(ScheduleDay(day_number=day_number, games=games))

    logger.info(
        "Generated schedule for %d teams: %d days, %d games",
        len(teams), len(days), sum(len(d.games) for d in days)
    )
    return days


# ============== Schedule queries ==============

def games_per_team(days: Iterable[ScheduleDay]) -> Dict[str, int]:
    """Count scheduled games for every team."""
    counts: Counter = Counter()
    for day in days:
        for game in day.games:
            counts[game.home_team_id] += 1
            counts[game.away_team_id] += 1
    return dict(counts)


def find_team_conflicts(days: Iterable[ScheduleDay]) -> List[Tuple[int, str]]:
    """Return (day_number, team_id) for every team booked twice on one day."""
    conflicts = []
    for day in days:
        for team_id, count in Counter(day.team_ids).items():
            if count > 1:
                conflicts.append((day.day_number, team_id))
    return conflicts


def apply_schedule_result(
    days: Sequence[ScheduleDay],
    game_id: str,
    home_score: int,
    away_score: int,
    game_log_id: Optional[str] = None
) -> List[ScheduleDay]:
    """
    Record a final score on a scheduled game.

    Returns:
        A new schedule; the input is not modified

    Raises:
        NotFoundError: If no game has that ID
    """
    updated = [d.copy() for d in days]
    for day in updated:
        for game in day.games:
            if game.id == game_id:
                game.home_score = home_score
                game.away_score = away_score
                game.is_complete = True
                game.game_log_id = game_log_id
                return updated

    raise NotFoundError("SCHEDULE_GAME_NOT_FOUND", f"Scheduled game not found: {game_id}")


def is_regular_season_complete(
    current_day: int,
    days: Iterable[ScheduleDay],
    season_days: int = REGULAR_SEASON_DAYS
) -> bool:
    """The season is over once the day counter reaches its length and every game is final."""
    if current_day < season_days:
        return False
    return all(game.is_complete for day in days for game in day.games)
