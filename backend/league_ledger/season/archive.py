"""
End-of-season archive.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

from .leaders import BattingCategory, PitchingCategory, get_batting_leaders, get_pitching_leaders
from .models import (
    BattingLeaderEntry,
    FullPlayoffBracket,
    PitchingLeaderEntry,
    RankedLeader,
    Team,
)


logger = logging.getLogger("league_ledger.archive")

ARCHIVE_LEADER_LIMIT = 5

ARCHIVE_BATTING_CATEGORIES = (
    BattingCategory.HR,
    BattingCategory.RBI,
    BattingCategory.BA,
    BattingCategory.H,
    BattingCategory.SB,
)

ARCHIVE_PITCHING_CATEGORIES = (
    PitchingCategory.W,
    PitchingCategory.SO,
    PitchingCategory.ERA,
    PitchingCategory.SV,
    PitchingCategory.WHIP,
)


@dataclass
class SeasonArchive:
    """Snapshot of a finished season."""

    league_id: str
    champion_id: Optional[str]
    champion_name: Optional[str]
    bracket: FullPlayoffBracket
    batting_leaders: Dict[str, List[RankedLeader]] = field(default_factory=dict)
    pitching_leaders: Dict[str, List[RankedLeader]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "league_id": self.league_id,
            "champion_id": self.champion_id,
            "champion_name": self.champion_name,
            "bracket": self.bracket.to_dict(),
            "batting_leaders": {
                cat: [leader.to_dict() for leader in leaders]
                for cat, leaders in self.batting_leaders.items()
            },
            "pitching_leaders": {
                cat: [leader.to_dict() for leader in leaders]
                for cat, leaders in self.pitching_leaders.items()
            }
        }


def build_season_archive(
    teams: Mapping[str, Team],
    bracket: FullPlayoffBracket,
    batting_entries: Iterable[BattingLeaderEntry],
    pitching_entries: Iterable[PitchingLeaderEntry],
    team_games: int
) -> SeasonArchive:
    """
    Collect the champion, the final bracket and the top-5 leaders.

    Args:
        teams: Teams by ID, for the champion's display name
        bracket: Final playoff bracket
        batting_entries: Every batter's season line
        pitching_entries: Every pitcher's season line
        team_games: Games per team, for rate-stat qualification
    """
    batting_entries = list(batting_entries)
    pitching_entries = list(pitching_entries)

    champion_id = bracket.world_series_champion_id
    champion = teams.get(champion_id) if champion_id else None

    archive = SeasonArchive(
        league_id=bracket.league_id,
        champion_id=champion_id,
        champion_name=champion.display_name if champion else None,
        bracket=bracket.copy(),
        batting_leaders={
            cat.name: get_batting_leaders(batting_entries, cat, team_games, ARCHIVE_LEADER_LIMIT)
            for cat in ARCHIVE_BATTING_CATEGORIES
        },
        pitching_leaders={
            cat.name: get_pitching_leaders(pitching_entries, cat, team_games, ARCHIVE_LEADER_LIMIT)
            for cat in ARCHIVE_PITCHING_CATEGORIES
        }
    )

    logger.info("Archived season for league %s (champion: %s)", archive.league_id, archive.champion_name)
    return archive
