"""
Shared fixtures.
"""

import pytest

from league_ledger.season.models import Team


@pytest.fixture
def make_team():
    """Factory for teams with a given record."""
    def _make(team_id, league="AL", division="East", wins=0, losses=0, runs_scored=0, runs_allowed=0):
        return Team(
            id=team_id,
            name=f"Team {team_id}",
            city="City",
            league=league,
            division=division,
            wins=wins,
            losses=losses,
            runs_scored=runs_scored,
            runs_allowed=runs_allowed
        )
    return _make


@pytest.fixture
def al_league(make_team):
    """Three AL divisions of three teams with distinct records.

    Seeds: 1 e1, 2 c1, 3 w1 (division winners), 4 e2, 5 c2, 6 w2 (wild cards).
    """
    return [
        make_team("e1", division="East", wins=100, losses=62, runs_scored=820, runs_allowed=640),
        make_team("e2", division="East", wins=90, losses=72, runs_scored=760, runs_allowed=700),
        make_team("e3", division="East", wins=70, losses=92, runs_scored=640, runs_allowed=760),
        make_team("c1", division="Central", wins=96, losses=66, runs_scored=790, runs_allowed=660),
        make_team("c2", division="Central", wins=88, losses=74, runs_scored=740, runs_allowed=700),
        make_team("c3", division="Central", wins=75, losses=87, runs_scored=680, runs_allowed=720),
        make_team("w1", division="West", wins=89, losses=73, runs_scored=770, runs_allowed=690),
        make_team("w2", division="West", wins=86, losses=76, runs_scored=720, runs_allowed=710),
        make_team("w3", division="West", wins=84, losses=78, runs_scored=700, runs_allowed=705),
    ]


@pytest.fixture
def nl_league(make_team):
    """A single four-team NL division."""
    return [
        make_team("n1", league="NL", wins=98, losses=64, runs_scored=800, runs_allowed=650),
        make_team("n2", league="NL", wins=91, losses=71, runs_scored=750, runs_allowed=690),
        make_team("n3", league="NL", wins=85, losses=77, runs_scored=700, runs_allowed=690),
        make_team("n4", league="NL", wins=80, losses=82, runs_scored=690, runs_allowed=700),
    ]
