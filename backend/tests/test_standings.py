"""
Tests for standings, tie-breaks and result application.
"""

import pytest

from league_ledger.core.errors import NotFoundError, ValidationError
from league_ledger.season.models import GameResult
from league_ledger.season.standings import (
    apply_game_results,
    build_standings_entries,
    compute_games_behind,
    compute_pythagorean,
    compute_standings,
    compute_win_pct,
    get_division_winners,
    get_wild_card_teams,
    sort_standings,
    update_team_record,
)


class TestFormulas:
    """Tests for the standings formulas."""

    def test_win_pct_no_games(self):
        """Test that 0-0 is a .000 record."""
        assert compute_win_pct(0, 0) == 0

    def test_win_pct(self):
        """Test a normal record."""
        assert compute_win_pct(90, 72) == pytest.approx(90 / 162)

    def test_games_behind(self):
        """Test GB from the leader."""
        assert compute_games_behind(95, 67, 90, 72) == 5.0
        assert compute_games_behind(10, 5, 9, 5) == 0.5

    def test_pythagorean_no_runs(self):
        """Test that no runs either way is .500."""
        assert compute_pythagorean(0, 0) == 0.5

    def test_pythagorean(self):
        """Test RS^2 / (RS^2 + RA^2)."""
        assert compute_pythagorean(800, 600) == pytest.approx(640000 / 1000000)


class TestSortStandings:
    """Tests for the shared tie-break order."""

    def test_win_pct_first(self, make_team):
        """Test that the better record ranks first."""
        a = make_team("a", wins=10, losses=5)
        b = make_team("b", wins=11, losses=4)
        assert [t.id for t in sort_standings([a, b])] == ["b", "a"]

    def test_run_differential_breaks_tie(self, make_team):
        """Test that equal records fall back to run differential."""
        a = make_team("a", wins=10, losses=5, runs_scored=50, runs_allowed=40)
        b = make_team("b", wins=10, losses=5, runs_scored=60, runs_allowed=45)
        assert [t.id for t in sort_standings([a, b])] == ["b", "a"]

    def test_runs_scored_breaks_tie(self, make_team):
        """Test that equal record and differential fall back to runs scored."""
        a = make_team("a", wins=10, losses=5, runs_scored=50, runs_allowed=40)
        b = make_team("b", wins=10, losses=5, runs_scored=70, runs_allowed=60)
        assert [t.id for t in sort_standings([a, b])] == ["b", "a"]

    def test_full_tie_keeps_input_order(self, make_team):
        """Test that a complete tie keeps the input order."""
        a = make_team("a", wins=5, losses=5)
        b = make_team("b", wins=5, losses=5)
        assert [t.id for t in sort_standings([a, b])] == ["a", "b"]


class TestComputeStandings:
    """Tests for grouping into divisions."""

    def test_groups_by_league_and_division(self, al_league, nl_league):
        """Test one group per (league, division), each sorted."""
        standings = compute_standings(al_league + nl_league)
        keys = [(d.league, d.division) for d in standings]
        assert keys == [("AL", "East"), ("AL", "Central"), ("AL", "West"), ("NL", "East")]

        east = standings[0]
        assert [t.id for t in east.teams] == ["e1", "e2", "e3"]
        assert east.leader.id == "e1"

    def test_division_winners(self, al_league):
        """Test the first-place team of each division."""
        winners = get_division_winners(compute_standings(al_league))
        assert {k: t.id for k, t in winners.items()} == {
            "AL-East": "e1",
            "AL-Central": "c1",
            "AL-West": "w1",
        }

    def test_wild_card_teams(self, al_league):
        """Test the best three non-winners in the league."""
        standings = compute_standings(al_league)
        winner_ids = {t.id for t in get_division_winners(standings).values()}
        wild_cards = get_wild_card_teams("AL", standings, winner_ids)
        assert [t.id for t in wild_cards] == ["e2", "c2", "w2"]

    def test_standings_entries(self, al_league):
        """Test games behind and run differential per row."""
        east = compute_standings(al_league)[0]
        entries = build_standings_entries(east)
        assert entries[0].games_behind == 0
        assert entries[1].games_behind == 10.0
        assert entries[1].run_differential == 60

    def test_empty(self):
        """Test that no teams gives no divisions."""
        assert compute_standings([]) == []


class TestApplyResults:
    """Tests for applying game results to team records."""

    def test_update_team_record_home_win(self, make_team):
        """Test a home win updates W, home W and runs."""
        team = make_team("a")
        updated = update_team_record(team, 5, 3, is_home=True)
        assert (updated.wins, updated.losses) == (1, 0)
        assert updated.home_wins == 1
        assert (updated.runs_scored, updated.runs_allowed) == (5, 3)
        assert team.wins == 0

    def test_update_team_record_away_loss(self, make_team):
        """Test a road loss updates L and away L."""
        updated = update_team_record(make_team("a"), 2, 6, is_home=False)
        assert updated.losses == 1
        assert updated.away_losses == 1

    def test_apply_game_results(self, make_team):
        """Test both teams in every game are updated."""
        teams = {"a": make_team("a"), "b": make_team("b")}
        results = [
            GameResult(home_team_id="a", away_team_id="b", home_score=4, away_score=2),
            GameResult(home_team_id="b", away_team_id="a", home_score=7, away_score=1),
        ]
        updated = apply_game_results(teams, results)

        assert updated["a"].record_str == "1-1"
        assert updated["b"].record_str == "1-1"
        assert updated["a"].runs_scored == 5
        assert updated["b"].runs_allowed == 5
        assert teams["a"].wins == 0

    def test_update_team_record_rejects_tie(self, make_team):
        """Test that a tied score is not turned into a result."""
        with pytest.raises(ValidationError) as exc_info:
            update_team_record(make_team("a"), 3, 3, is_home=True)
        assert exc_info.value.code == "GAME_INVALID_SCORE"

    def test_apply_game_results_rejects_tie(self, make_team):
        """Test that a tied game fails the batch before any team is updated."""
        teams = {"a": make_team("a"), "b": make_team("b")}
        results = [
            GameResult(home_team_id="a", away_team_id="b", home_score=4, away_score=2),
            GameResult(home_team_id="b", away_team_id="a", home_score=3, away_score=3),
        ]
        with pytest.raises(ValidationError) as exc_info:
            apply_game_results(teams, results)
        assert exc_info.value.code == "GAME_INVALID_SCORE"
        assert teams["a"].wins == 0

    def test_wins_equal_losses(self, make_team):
        """Test that every applied game adds one win and one loss league-wide."""
        teams = {t: make_team(t) for t in ("a", "b", "c")}
        results = [
            GameResult(home_team_id="a", away_team_id="b", home_score=1, away_score=0),
            GameResult(home_team_id="c", away_team_id="a", home_score=2, away_score=9),
            GameResult(home_team_id="b", away_team_id="c", home_score=0, away_score=5),
        ]
        updated = apply_game_results(teams, results)
        assert sum(t.wins for t in updated.values()) == 3
        assert sum(t.losses for t in updated.values()) == 3
        assert updated["a"].record_str == "2-0"

    @pytest.mark.parametrize("home_id,away_id", [("zzz", "b"), ("a", "zzz")])
    def test_unknown_team(self, make_team, home_id, away_id):
        """Test that a result for a team outside the league is not found."""
        teams = {"a": make_team("a"), "b": make_team("b")}
        result = GameResult(home_team_id=home_id, away_team_id=away_id, home_score=4, away_score=2)
        with pytest.raises(NotFoundError) as exc_info:
            apply_game_results(teams, [result])
        assert exc_info.value.code == "TEAM_NOT_FOUND"
