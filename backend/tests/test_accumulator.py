"""
Tests for season stats accumulation.
"""

import pytest

from league_ledger.core.errors import ValidationError
from league_ledger.season.accumulator import (
    accumulate_batting,
    accumulate_game_stats,
    accumulate_pitching,
    create_empty_batting_stats,
    create_empty_pitching_stats,
)
from league_ledger.season.models import BattingLine, PitchingLine


@pytest.fixture
def batting_line():
    """Two hits, a homer and three RBI in four at-bats."""
    return BattingLine(player_id="b1", at_bats=4, hits=2, home_runs=1, rbi=3, runs=1)


@pytest.fixture
def starter_line():
    """A winning start over six and two-thirds."""
    return PitchingLine(
        player_id="p1", ip=6.2, hits=5, runs=2, earned_runs=2,
        walks=1, strikeouts=7, batters_faced=26, decision="W"
    )


class TestAccumulateBatting:
    """Tests for accumulate_batting."""

    def test_first_game(self, batting_line):
        """Test a single line into empty stats."""
        stats = accumulate_batting(create_empty_batting_stats(), batting_line)
        assert stats.games == 1
        assert stats.at_bats == 4
        assert stats.hits == 2
        assert stats.home_runs == 1
        assert stats.rbi == 3
        assert stats.ba == pytest.approx(0.5)

    def test_input_not_mutated(self, batting_line):
        """Test that the season totals passed in are untouched."""
        season = create_empty_batting_stats()
        accumulate_batting(season, batting_line)
        assert season.games == 0
        assert season.at_bats == 0

    def test_two_games(self, batting_line):
        """Test that counting stats sum and rates are recomputed."""
        second = BattingLine(player_id="b1", at_bats=4, hits=0, walks=1)
        stats = accumulate_batting(create_empty_batting_stats(), batting_line)
        stats = accumulate_batting(stats, second)
        assert stats.games == 2
        assert stats.at_bats == 8
        assert stats.walks == 1
        assert stats.ba == pytest.approx(0.25)
        assert stats.obp == pytest.approx(3 / 9)


class TestAccumulatePitching:
    """Tests for accumulate_pitching."""

    def test_starter_with_win(self, starter_line):
        """Test games, starts and a win decision."""
        stats = accumulate_pitching(create_empty_pitching_stats(), starter_line, is_starter=True)
        assert stats.games == 1
        assert stats.games_started == 1
        assert stats.wins == 1
        assert stats.losses == 0
        assert stats.ip == 6.2
        assert stats.era == pytest.approx(2 * 9 / (6 + 2 / 3))

    def test_reliever_has_no_start(self):
        """Test that a relief appearance does not count as a start."""
        line = PitchingLine(player_id="p2", ip=1.0, decision="SV")
        stats = accumulate_pitching(create_empty_pitching_stats(), line, is_starter=False)
        assert stats.games_started == 0
        assert stats.saves == 1

    @pytest.mark.parametrize("decision,field", [
        ("W", "wins"),
        ("L", "losses"),
        ("SV", "saves"),
        ("HLD", "holds"),
        ("BS", "blown_saves"),
    ])
    def test_decision_increments_one_counter(self, decision, field):
        """Test that each decision bumps exactly one counter."""
        line = PitchingLine(player_id="p1", ip=1.0, decision=decision)
        stats = accumulate_pitching(create_empty_pitching_stats(), line, is_starter=False)
        counters = ["wins", "losses", "saves", "holds", "blown_saves"]
        assert getattr(stats, field) == 1
        assert sum(getattr(stats, c) for c in counters) == 1

    def test_no_decision(self):
        """Test that a line without a decision leaves W/L/SV/HLD/BS alone."""
        line = PitchingLine(player_id="p1", ip=2.0)
        stats = accumulate_pitching(create_empty_pitching_stats(), line, is_starter=False)
        assert (stats.wins, stats.losses, stats.saves, stats.holds, stats.blown_saves) == (0, 0, 0, 0, 0)

    def test_innings_carry(self, starter_line):
        """Test that innings add with thirds carry across games."""
        stats = accumulate_pitching(create_empty_pitching_stats(), starter_line, is_starter=True)
        stats = accumulate_pitching(stats, PitchingLine(player_id="p1", ip=0.1), is_starter=False)
        assert stats.ip == 7.0

    def test_missing_complete_games_default_to_zero(self):
        """Test that absent CG/SHO count as zero."""
        line = PitchingLine(player_id="p1", ip=9.0, complete_games=None, shutouts=None)
        stats = accumulate_pitching(create_empty_pitching_stats(), line, is_starter=True)
        assert stats.complete_games == 0
        assert stats.shutouts == 0

    def test_complete_game_shutout(self):
        """Test that CG and SHO are summed when present."""
        line = PitchingLine(player_id="p1", ip=9.0, complete_games=1, shutouts=1)
        stats = accumulate_pitching(create_empty_pitching_stats(), line, is_starter=True)
        assert stats.complete_games == 1
        assert stats.shutouts == 1


class TestAccumulateGameStats:
    """Tests for folding a whole game into season maps."""

    def test_new_players_start_from_zero(self, batting_line, starter_line):
        """Test that unseen players get fresh entries."""
        batting, pitching = accumulate_game_stats({}, {}, [batting_line], [starter_line], {"p1"})
        assert batting["b1"].games == 1
        assert pitching["p1"].games_started == 1

    def test_input_maps_not_mutated(self, batting_line, starter_line):
        """Test that new maps are returned and the inputs keep their contents."""
        season_batting = {"b1": accumulate_batting(create_empty_batting_stats(), batting_line)}
        season_pitching = {}

        batting, pitching = accumulate_game_stats(
            season_batting, season_pitching, [batting_line], [starter_line], {"p1"}
        )

        assert batting is not season_batting
        assert season_batting["b1"].games == 1
        assert batting["b1"].games == 2
        assert season_pitching == {}
        assert "p1" in pitching

    def test_starter_flag_from_starter_ids(self, starter_line):
        """Test that only pitchers in starter_ids get a start."""
        reliever = PitchingLine(player_id="p9", ip=2.1, decision="HLD")
        _, pitching = accumulate_game_stats({}, {}, [], [starter_line, reliever], {"p1"})
        assert pitching["p1"].games_started == 1
        assert pitching["p9"].games_started == 0
        assert pitching["p9"].holds == 1

    def test_unknown_decision(self):
        """Test that a decision code outside W/L/SV/HLD/BS is a validation error."""
        line = PitchingLine(player_id="p1", ip=1.0, decision="ND")
        with pytest.raises(ValidationError) as exc_info:
            accumulate_pitching(create_empty_pitching_stats(), line, is_starter=False)
        assert exc_info.value.code == "PAYLOAD_INVALID"
        assert exc_info.value.details[0]["field"] == "decision"
