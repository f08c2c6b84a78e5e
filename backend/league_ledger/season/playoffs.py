"""
Playoff seeding, bracket construction and series state.

Format per league (six qualifiers):
- Division winners take the top seeds, ordered by record.
- Up to three wild cards take the next seeds, ordered by record.
- Wild Card round (best of 3): seed 3 vs 6, seed 4 vs 5.
- Division Series (best of 5): seed 1 and seed 2 wait for the wild card winners.
- Championship Series (best of 7): the two Division Series winners.
- World Series (best of 7): AL champion vs NL champion.

Four or five qualifiers skip the Wild Card round (1 vs 4, 2 vs 3); two or
three play a single best-of-7 for the pennant.

Home-field patterns for the higher seed:
    best of 3: H-A-H
    best of 5: H-A-A-H-H
    best of 7: H-A-A-H-H-A-H

A series is pending until both seeds are known, in progress until one side
reaches ceil(best_of / 2) wins, and complete after that. Complete is final.
"""

import logging
from typing import Iterable, List, Optional

from ..core.config import WILD_CARD_SLOTS
from ..core.errors import NotFoundError, ValidationError
from ..core.leagues import (
    HOME_FIELD_PATTERNS,
    PLAYING_LEAGUES,
    SERIES_LENGTHS,
    LeagueCode,
    RoundName,
    SeriesState,
)
from .models import (
    DivisionStandings,
    FullPlayoffBracket,
    NextPlayoffGame,
    PlayoffBracket,
    PlayoffGame,
    PlayoffRound,
    PlayoffSeries,
    PlayoffTeamSeed,
    Team,
)
from .standings import sort_standings


logger = logging.getLogger("league_ledger.playoffs")


# ============== Seeding ==============

def _to_seed(team: Team, seed: int) -> PlayoffTeamSeed:
    return PlayoffTeamSeed(team_id=team.id, seed=seed, wins=team.wins, losses=team.losses)


def seed_playoff_teams(
    standings: Iterable[DivisionStandings],
    league: str,
    wild_card_slots: int = WILD_CARD_SLOTS
) -> List[PlayoffTeamSeed]:
    """
    Seed one league's playoff field.

    Division winners get seeds 1..D; the best remaining teams get wild-card
    seeds D+1..D+W, W = min(wild_card_slots, teams left).
    """
    division_winners: List[Team] = []
    non_winners: List[Team] = []

    for division in standings:
        if division.league != league or not division.teams:
            continue
        division_winners.append(division.teams[0])
        non_winners.extend(division.teams[1:])

    ordered = sort_standings(division_winners)
    ordered += sort_standings(non_winners)[:min(wild_card_slots, len(non_winners))]

    return [_to_seed(team, i + 1) for i, team in enumerate(ordered)]


def get_home_field_schedule(higher_seed_id: str, lower_seed_id: str, best_of: int) -> List[str]:
    """
    Home team for every game of a series.

    Raises:
        ValidationError: If best_of is not 3, 5 or 7
    """
    pattern = HOME_FIELD_PATTERNS.get(best_of)
    if pattern is None:
        raise ValidationError("PLAYOFF_INVALID_SERIES_LENGTH", f"Unsupported series length: {best_of}")
    return [higher_seed_id if side == "H" else lower_seed_id for side in pattern]


def series_state(series: PlayoffSeries) -> SeriesState:
    if series.is_complete:
        return SeriesState.COMPLETE
    if not series.has_both_seeds:
        return SeriesState.PENDING
    return SeriesState.IN_PROGRESS


# ============== Bracket construction ==============

def _create_series(
    round_name: RoundName,
    scope: str,
    index: int,
    higher_seed: Optional[PlayoffTeamSeed] = None,
    lower_seed: Optional[PlayoffTeamSeed] = None
) -> PlayoffSeries:
    return PlayoffSeries(
        id=f"{scope}-{round_name.value}-{index}",
        round=round_name.value,
        league=scope,
        best_of=SERIES_LENGTHS[round_name],
        higher_seed=higher_seed,
        lower_seed=lower_seed
    )


def _create_round(round_name: RoundName, series: List[PlayoffSeries]) -> PlayoffRound:
    return PlayoffRound(name=round_name.value, best_of=SERIES_LENGTHS[round_name], series=series)


def _world_series_round() -> PlayoffRound:
    return _create_round(
        RoundName.WORLD_SERIES,
        [_create_series(RoundName.WORLD_SERIES, LeagueCode.MLB.value, 0)]
    )


def build_bracket_rounds(
    seeds: List[PlayoffTeamSeed],
    league: str,
    include_world_series: bool
) -> List[PlayoffRound]:
    """Pick a round structure for the number of seeds and create its series."""
    wc, ds, cs = RoundName.WILD_CARD, RoundName.DIVISION_SERIES, RoundName.CHAMPIONSHIP_SERIES
    rounds: List[PlayoffRound] = []

    if len(seeds) >= 6:
        rounds.append(_create_round(wc, [
            _create_series(wc, league, 0, seeds[2], seeds[5]),
            _create_series(wc, league, 1, seeds[3], seeds[4]),
        ]))
        # Lower seeds are filled by the wild card winners
        rounds.append(_create_round(ds, [
            _create_series(ds, league, 0, seeds[0]),
            _create_series(ds, league, 1, seeds[1]),
        ]))
        rounds.append(_create_round(cs, [_create_series(cs, league, 0)]))
    elif len(seeds) >= 4:
        rounds.append(_create_round(ds, [
            _create_series(ds, league, 0, seeds[0], seeds[3]),
            _create_series(ds, league, 1, seeds[1], seeds[2]),
        ]))
        rounds.append(_create_round(cs, [_create_series(cs, league, 0)]))
    elif len(seeds) >= 2:
        rounds.append(_create_round(cs, [_create_series(cs, league, 0, seeds[0], seeds[1])]))
    else:
        return rounds

    if include_world_series:
        rounds.append(_world_series_round())

    return rounds


def generate_playoff_bracket(
    league_id: str,
    standings: Iterable[DivisionStandings],
    league: str
) -> PlayoffBracket:
    """Seed one league and build its bracket, World Series round included."""
    seeds = seed_playoff_teams(standings, league)
    return PlayoffBracket(
        league_id=league_id,
        rounds=build_bracket_rounds(seeds, league, include_world_series=True)
    )


def generate_full_playoff_bracket(
    league_id: str,
    standings: Iterable[DivisionStandings]
) -> FullPlayoffBracket:
    """Build the AL and NL brackets plus a pending World Series."""
    standings = list(standings)
    brackets = {}
    for league in PLAYING_LEAGUES:
        seeds = seed_playoff_teams(standings, league.value)
        logger.info(
            "Playoff field for league %s: %s %s",
            league_id, league.value, [s.team_id for s in seeds]
        )
        brackets[league] = PlayoffBracket(
            league_id=league_id,
            rounds=build_bracket_rounds(seeds, league.value, include_world_series=False)
        )

    return FullPlayoffBracket(
        league_id=league_id,
        al=brackets[LeagueCode.AL],
        nl=brackets[LeagueCode.NL],
        world_series=_create_series(RoundName.WORLD_SERIES, LeagueCode.MLB.value, 0)
    )


# ============== Game results ==============

def _validate_result(series: PlayoffSeries, game_number: int, home_score: int, away_score: int) -> None:
    if not 1 <= game_number <= series.best_of:
        raise ValidationError(
            "PLAYOFF_INVALID_GAME_NUMBER",
            f"Game {game_number} is outside a best-of-{series.best_of} series"
        )
    if home_score < 0 or away_score < 0 or home_score == away_score:
        raise ValidationError(
            "PLAYOFF_INVALID_SCORE",
            f"Playoff games need a winner: {home_score}-{away_score}"
        )


def _apply_series_result(
    series: PlayoffSeries,
    game_number: int,
    home_score: int,
    away_score: int
) -> PlayoffSeries:
    """Return a copy of the series with one game upserted and wins recounted."""
    updated = series.copy()

    if series_state(series) is not SeriesState.IN_PROGRESS:
        logger.warning(
            "Ignoring game %d for series %s in state %s",
            game_number, series.id, series_state(series).value
        )
        return updated

    _validate_result(series, game_number, home_score, away_score)

    higher_id = series.higher_seed.team_id
    lower_id = series.lower_seed.team_id
    home_id = get_home_field_schedule(higher_id, lower_id, series.best_of)[game_number - 1]
    away_id = lower_id if home_id == higher_id else higher_id

    game = PlayoffGame(
        game_number=game_number,
        home_team_id=home_id,
        away_team_id=away_id,
        home_score=home_score,
        away_score=away_score
    )
    games = [g for g in updated.games if g.game_number != game_number]
    games.append(game)
    games.sort(key=lambda g: g.game_number)
    updated.games = games

    higher_wins = 0
    for g in games:
        winner = g.home_team_id if g.home_score > g.away_score else g.away_team_id
        if winner == higher_id:
            higher_wins += 1
    updated.higher_seed_wins = higher_wins
    updated.lower_seed_wins = len(games) - higher_wins

    logger.debug(
        "Series %s game %d: %s %d, %s %d",
        series.id, game_number, home_id, home_score, away_id, away_score
    )

    if updated.higher_seed_wins >= updated.wins_needed:
        updated.is_complete = True
        updated.winner_id = higher_id
    elif updated.lower_seed_wins >= updated.wins_needed:
        updated.is_complete = True
        updated.winner_id = lower_id

    if updated.is_complete:
        logger.info(
            "Series %s clinched by %s (%d-%d)",
            series.id, updated.winner_id,
            max(updated.higher_seed_wins, updated.lower_seed_wins),
            min(updated.higher_seed_wins, updated.lower_seed_wins)
        )

    return updated


def record_playoff_game_result(
    bracket: PlayoffBracket,
    series_id: str,
    game_number: int,
    home_score: int,
    away_score: int
) -> PlayoffBracket:
    """
    Record a playoff game and return the updated bracket.

    The home team is taken from the series' home-field pattern. Recording the
    same game number again replaces the earlier result. Results for pending
    or already-decided series are ignored.

    Raises:
        NotFoundError: If the bracket has no series with that ID
        ValidationError: If the game number or score is invalid
    """
    if bracket.find_series(series_id) is None:
        raise NotFoundError("PLAYOFF_SERIES_NOT_FOUND", f"Playoff series not found: {series_id}")

    updated = bracket.copy()
    for playoff_round in updated.rounds:
        playoff_round.series = [
            _apply_series_result(s, game_number, home_score, away_score) if s.id == series_id else s
            for s in playoff_round.series
        ]
    return updated


def _next_game_in_series(series: PlayoffSeries) -> Optional[NextPlayoffGame]:
    if series_state(series) is not SeriesState.IN_PROGRESS:
        return None

    next_game_number = sum(1 for g in series.games if g.is_complete) + 1
    if next_game_number > series.best_of:
        return None

    higher_id = series.higher_seed.team_id
    lower_id = series.lower_seed.team_id
    home_id = get_home_field_schedule(higher_id, lower_id, series.best_of)[next_game_number - 1]

    return NextPlayoffGame(
        series_id=series.id,
        round=series.round,
        game_number=next_game_number,
        home_team_id=home_id,
        away_team_id=lower_id if home_id == higher_id else higher_id
    )


def get_next_playoff_game(bracket: PlayoffBracket) -> Optional[NextPlayoffGame]:
    """
    The next unplayed game, scanning rounds and series in order.

    Complete series and series still waiting on a seed are skipped. Returns
    None when nothing is playable.
    """
    for playoff_round in bracket.rounds:
        for series in playoff_round.series:
            next_game = _next_game_in_series(series)
            if next_game is not None:
                return next_game
    return None


# ============== Advancement ==============

def _winner_seeds(series_list: Iterable[PlayoffSeries]) -> List[PlayoffTeamSeed]:
    winners = []
    for series in series_list:
        if series.is_complete and series.winner_id:
            seed = series.seed_for(series.winner_id)
            if seed is not None:
                winners.append(seed)
    return winners


def advance_winners(bracket: PlayoffBracket) -> PlayoffBracket:
    """
    Move series winners into the next round.

    - Both Wild Card winners known: the higher seed number plays seed 1,
      the other plays seed 2.
    - Both Division Series winners known: the better seed hosts the
      Championship Series.
    - Championship Series decided: its winner is the league champion.
    """
    updated = bracket.copy()

    wc_round = updated.get_round(RoundName.WILD_CARD.value)
    ds_round = updated.get_round(RoundName.DIVISION_SERIES.value)
    cs_round = updated.get_round(RoundName.CHAMPIONSHIP_SERIES.value)

    if wc_round and ds_round:
        wc_winners = _winner_seeds(wc_round.series)
        if len(wc_winners) == 2:
            wc_winners.sort(key=lambda s: s.seed, reverse=True)
            for series, seed in zip(ds_round.series, wc_winners):
                if series.lower_seed is None:
                    series.lower_seed = seed.copy()
                    logger.info("Advanced %s to %s", seed.team_id, series.id)

    if ds_round and cs_round and cs_round.series:
        ds_winners = _winner_seeds(ds_round.series)
        if len(ds_winners) == 2:
            ds_winners.sort(key=lambda s: s.seed)
            cs_series = cs_round.series[0]
            if cs_series.higher_seed is None:
                cs_series.higher_seed = ds_winners[0].copy()
            if cs_series.lower_seed is None:
                cs_series.lower_seed = ds_winners[1].copy()

    if cs_round and cs_round.series:
        cs_series = cs_round.series[0]
        if cs_series.is_complete and cs_series.winner_id and updated.champion_id is None:
            updated.champion_id = cs_series.winner_id
            logger.info("League champion: %s", updated.champion_id)

    return updated


def is_bracket_complete(bracket: PlayoffBracket) -> bool:
    return bracket.champion_id is not None


# ============== Full bracket (AL + NL + World Series) ==============

def _champion_seed(bracket: PlayoffBracket) -> Optional[PlayoffTeamSeed]:
    cs_round = bracket.get_round(RoundName.CHAMPIONSHIP_SERIES.value)
    if not cs_round or not cs_round.series:
        return None
    return cs_round.series[0].seed_for(bracket.champion_id)


def record_full_bracket_game_result(
    bracket: FullPlayoffBracket,
    series_id: str,
    game_number: int,
    home_score: int,
    away_score: int
) -> FullPlayoffBracket:
    """
    Record a game anywhere in the full bracket (AL, then NL, then World Series).

    Raises:
        NotFoundError: If no series has that ID
    """
    updated = bracket.copy()

    if bracket.al.find_series(series_id):
        updated.al = record_playoff_game_result(bracket.al, series_id, game_number, home_score, away_score)
    elif bracket.nl.find_series(series_id):
        updated.nl = record_playoff_game_result(bracket.nl, series_id, game_number, home_score, away_score)
    elif bracket.world_series.id == series_id:
        updated.world_series = _apply_series_result(bracket.world_series, game_number, home_score, away_score)
    else:
        raise NotFoundError("PLAYOFF_SERIES_NOT_FOUND", f"Playoff series not found: {series_id}")

    return updated


def get_next_full_bracket_game(bracket: FullPlayoffBracket) -> Optional[NextPlayoffGame]:
    """The next playable game: AL first, then NL, then the World Series."""
    return (
        get_next_playoff_game(bracket.al)
        or get_next_playoff_game(bracket.nl)
        or _next_game_in_series(bracket.world_series)
    )


def advance_full_bracket_winners(bracket: FullPlayoffBracket) -> FullPlayoffBracket:
    """
    Advance both leagues, then fill and resolve the World Series.

    The pennant winner with the better regular-season record hosts the World
    Series; the AL champion hosts on an equal record. When only one league
    fields a bracket, its champion is crowned without a World Series.
    """
    updated = bracket.copy()
    updated.al = advance_winners(bracket.al)
    updated.nl = advance_winners(bracket.nl)
    ws = updated.world_series

    if updated.al.champion_id and updated.nl.champion_id and not ws.higher_seed and not ws.lower_seed:
        al_champ = _champion_seed(updated.al)
        nl_champ = _champion_seed(updated.nl)
        if al_champ and nl_champ:
            if al_champ.win_pct >= nl_champ.win_pct:
                ws.higher_seed, ws.lower_seed = al_champ.copy(), nl_champ.copy()
            else:
                ws.higher_seed, ws.lower_seed = nl_champ.copy(), al_champ.copy()
            logger.info("World Series set: %s hosts %s", ws.higher_seed.team_id, ws.lower_seed.team_id)

    if updated.world_series_champion_id is None:
        if ws.is_complete and ws.winner_id:
            updated.world_series_champion_id = ws.winner_id
        elif not updated.al.rounds and updated.nl.champion_id:
            updated.world_series_champion_id = updated.nl.champion_id
        elif not updated.nl.rounds and updated.al.champion_id:
            updated.world_series_champion_id = updated.al.champion_id

        if updated.world_series_champion_id:
            logger.info("Champion crowned: %s", updated.world_series_champion_id)

    return updated


def is_full_bracket_complete(bracket: FullPlayoffBracket) -> bool:
    return bracket.world_series_champion_id is not None
