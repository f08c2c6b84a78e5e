"""
Tests for boundary payloads and persistence rows.
"""

import random

import pytest

from league_ledger.contracts.schemas import (
    PitchingLinePayload,
    parse_day_result,
    schedule_to_rows,
    season_stat_rows,
)
from league_ledger.core.config import ScheduleConfig
from league_ledger.core.errors import ValidationError
from league_ledger.season.accumulator import accumulate_batting, accumulate_pitching
from league_ledger.season.models import BattingLine, BattingStats, PitchingLine, PitchingStats
from league_ledger.season.schedule import generate_schedule


@pytest.fixture
def day_payload():
    """A simulator day result with one game, as raw JSON."""
    return {
        "dayNumber": 3,
        "games": [
            {
                "gameId": "game-1",
                "homeTeamId": "team-1",
                "awayTeamId": "team-2",
                "homeScore": 4,
                "awayScore": 3,
                "playerBattingLines": [
                    {"playerId": "batter-1", "AB": 4, "R": 1, "H": 2, "doubles": 1, "triples": 0,
                     "HR": 1, "RBI": 3, "BB": 0, "SO": 1, "SB": 0, "CS": 0, "HBP": 0, "SF": 0},
                ],
                "playerPitchingLines": [
                    {"playerId": "pitcher-1", "IP": 6.2, "H": 5, "R": 3, "ER": 3, "BB": 2,
                     "SO": 7, "HR": 1, "BF": 27, "CG": 0, "SHO": 0, "decision": "W"},
                    {"playerId": "pitcher-2", "IP": 2.1, "H": 1, "R": 0, "ER": 0, "BB": 0,
                     "SO": 3, "HR": 0, "BF": 8, "decision": None},
                ],
                "starterIds": ["pitcher-1"],
            }
        ],
    }


class TestParseDayResult:
    """Tests for parse_day_result."""

    def test_valid_payload(self, day_payload):
        """Test conversion of camelCase and box-score keys to engine values."""
        day = parse_day_result(day_payload)
        assert day.day_number == 3

        game = day.games[0]
        assert game.game_id == "game-1"
        assert (game.home_team_id, game.away_team_id) == ("team-1", "team-2")
        assert game.winner_id == "team-1"
        assert game.starter_ids == frozenset({"pitcher-1"})

        batting = game.batting_lines[0]
        assert (batting.at_bats, batting.hits, batting.home_runs, batting.rbi) == (4, 2, 1, 3)

        starter, reliever = game.pitching_lines
        assert starter.ip == 6.2
        assert starter.decision == "W"
        assert reliever.decision is None
        assert reliever.complete_games == 0

    def test_lines_feed_accumulator(self, day_payload):
        """Test that parsed lines accumulate without further conversion."""
        game = parse_day_result(day_payload).games[0]
        stats = accumulate_batting(BattingStats(), game.batting_lines[0])
        assert stats.ba == pytest.approx(0.5)
        pitching = accumulate_pitching(PitchingStats(), game.pitching_lines[0], is_starter=True)
        assert pitching.wins == 1

    def test_missing_field(self, day_payload):
        """Test that a missing score is reported with its location."""
        del day_payload["games"][0]["homeScore"]
        with pytest.raises(ValidationError) as exc_info:
            parse_day_result(day_payload)
        assert exc_info.value.code == "PAYLOAD_INVALID"
        assert exc_info.value.details[0]["field"] == "games.0.homeScore"

    def test_unknown_decision(self, day_payload):
        """Test that decisions outside W/L/SV/HLD/BS are rejected."""
        day_payload["games"][0]["playerPitchingLines"][0]["decision"] = "ND"
        with pytest.raises(ValidationError):
            parse_day_result(day_payload)

    def test_tied_game(self, day_payload):
        """Test that a game reported as a tie is rejected."""
        day_payload["games"][0]["awayScore"] = 4
        with pytest.raises(ValidationError) as exc_info:
            parse_day_result(day_payload)
        assert exc_info.value.code == "PAYLOAD_INVALID"
        detail = exc_info.value.details[0]
        assert detail["field"] == "games.0"
        assert "tied" in detail["message"]

    def test_negative_count(self, day_payload):
        """Test that negative counting stats are rejected."""
        day_payload["games"][0]["playerBattingLines"][0]["H"] = -1
        with pytest.raises(ValidationError):
            parse_day_result(day_payload)

    @pytest.mark.parametrize("ip", [6.3, 6.25, 0.5])
    def test_invalid_innings_fraction(self, ip):
        """Test that IP fractions other than .0/.1/.2 are rejected."""
        with pytest.raises(Exception, match="IP fraction"):
            PitchingLinePayload(playerId="p1", IP=ip)

    @pytest.mark.parametrize("ip", [0.0, 6.1, 6.2, 9.0])
    def test_valid_innings_fraction(self, ip):
        """Test that thirds notation is accepted."""
        assert PitchingLinePayload(playerId="p1", IP=ip).ip == ip

    def test_field_names_accepted(self):
        """Test that snake_case field names also populate the model."""
        payload = PitchingLinePayload(player_id="p1", ip=1.0, strikeouts=2)
        assert payload.to_domain() == PitchingLine(player_id="p1", ip=1.0, strikeouts=2, complete_games=0, shutouts=0)


class TestRows:
    """Tests for persistence rows."""

    def test_schedule_rows(self, make_team):
        """Test that every game becomes one row in day order."""
        teams = [make_team(t) for t in ("a", "b", "c", "d")]
        days = generate_schedule(teams, random.Random(1), ScheduleConfig(target_games_per_team=6))

        rows = schedule_to_rows("lg-1", days)

        assert len(rows) == 12
        assert all(r.league_id == "lg-1" for r in rows)
        assert [r.day_number for r in rows] == sorted(r.day_number for r in rows)
        assert (rows[0].home_team_id, rows[0].away_team_id) == (
            days[0].games[0].home_team_id, days[0].games[0].away_team_id
        )

    def test_season_stat_rows(self):
        """Test one row per mapped player, with two-way players merged."""
        batting = {
            "p1": accumulate_batting(BattingStats(), BattingLine(player_id="p1", at_bats=4, hits=1)),
            "p2": accumulate_batting(BattingStats(), BattingLine(player_id="p2", at_bats=3)),
        }
        pitching = {
            "p2": accumulate_pitching(PitchingStats(), PitchingLine(player_id="p2", ip=5.0), True),
            "p3": accumulate_pitching(PitchingStats(), PitchingLine(player_id="p3", ip=1.0), False),
        }
        player_teams = {"p1": "t1", "p2": "t2"}

        rows = season_stat_rows("lg-1", batting, pitching, player_teams)

        assert [r.player_id for r in rows] == ["p1", "p2"]
        assert rows[0].pitching_stats is None
        assert rows[0].batting_stats["hits"] == 1
        assert rows[1].team_id == "t2"
        assert rows[1].pitching_stats["games_started"] == 1
