"""
Season bookkeeping.

Schedule generation, stat accumulation, standings, leaderboards and
playoff brackets.
"""

from .models import (
    Team,
    ScheduleGame,
    ScheduleDay,
    BattingLine,
    PitchingLine,
    GameResult,
    DayResult,
    BattingStats,
    PitchingStats,
    DivisionStandings,
    StandingsEntry,
    BattingLeaderEntry,
    PitchingLeaderEntry,
    RankedLeader,
    TeamAggregateStats,
    PlayoffTeamSeed,
    PlayoffGame,
    PlayoffSeries,
    PlayoffRound,
    PlayoffBracket,
    FullPlayoffBracket,
    NextPlayoffGame,
)
from .derived import (
    add_ip,
    ip_to_decimal,
    ip_to_outs,
    compute_ba,
    compute_obp,
    compute_slg,
    compute_ops,
    compute_era,
    compute_whip,
    compute_k9,
    compute_bb9,
    compute_fip,
    compute_derived_batting,
    compute_derived_pitching,
)
from .accumulator import (
    create_empty_batting_stats,
    create_empty_pitching_stats,
    accumulate_batting,
    accumulate_pitching,
    accumulate_game_stats,
)
from .standings import (
    compute_win_pct,
    compute_games_behind,
    compute_pythagorean,
    sort_standings,
    compute_standings,
    build_standings_entries,
    get_division_winners,
    get_wild_card_teams,
    update_team_record,
    apply_game_results,
)
from .schedule import (
    generate_round_robin_pairings,
    compute_matchup_targets,
    generate_schedule,
    games_per_team,
    find_team_conflicts,
    apply_schedule_result,
    is_regular_season_complete,
)
from .leaders import (
    BattingCategory,
    PitchingCategory,
    is_batting_qualified,
    is_pitching_qualified,
    get_batting_leaders,
    get_pitching_leaders,
    filter_by_league,
    compute_team_aggregate_stats,
)
from .playoffs import (
    seed_playoff_teams,
    get_home_field_schedule,
    series_state,
    generate_playoff_bracket,
    generate_full_playoff_bracket,
    record_playoff_game_result,
    get_next_playoff_game,
    advance_winners,
    is_bracket_complete,
    record_full_bracket_game_result,
    get_next_full_bracket_game,
    advance_full_bracket_winners,
    is_full_bracket_complete,
)
from .engine import SeasonSnapshot, apply_day, check_playoff_transition, play_next_playoff_game
from .archive import SeasonArchive, build_season_archive

__all__ = [
    # Models
    "Team",
    "ScheduleGame",
    "ScheduleDay",
    "BattingLine",
    "PitchingLine",
    "GameResult",
    "DayResult",
    "BattingStats",
    "PitchingStats",
    "DivisionStandings",
    "StandingsEntry",
    "BattingLeaderEntry",
    "PitchingLeaderEntry",
    "RankedLeader",
    "TeamAggregateStats",
    "PlayoffTeamSeed",
    "PlayoffGame",
    "PlayoffSeries",
    "PlayoffRound",
    "PlayoffBracket",
    "FullPlayoffBracket",
    "NextPlayoffGame",
    # Derived stats
    "add_ip",
    "ip_to_decimal",
    "ip_to_outs",
    "compute_ba",
    "compute_obp",
    "compute_slg",
    "compute_ops",
    "compute_era",
    "compute_whip",
    "compute_k9",
    "compute_bb9",
    "compute_fip",
    "compute_derived_batting",
    "compute_derived_pitching",
    # Accumulation
    "create_empty_batting_stats",
    "create_empty_pitching_stats",
    "accumulate_batting",
    "accumulate_pitching",
    "accumulate_game_stats",
    # Standings
    "compute_win_pct",
    "compute_games_behind",
    "compute_pythagorean",
    "sort_standings",
    "compute_standings",
    "build_standings_entries",
    "get_division_winners",
    "get_wild_card_teams",
    "update_team_record",
    "apply_game_results",
    # Schedule
    "generate_round_robin_pairings",
    "compute_matchup_targets",
    "generate_schedule",
    "games_per_team",
    "find_team_conflicts",
    "apply_schedule_result",
    "is_regular_season_complete",
    # Leaders
    "BattingCategory",
    "PitchingCategory",
    "is_batting_qualified",
    "is_pitching_qualified",
    "get_batting_leaders",
    "get_pitching_leaders",
    "filter_by_league",
    "compute_team_aggregate_stats",
    # Playoffs
    "seed_playoff_teams",
    "get_home_field_schedule",
    "series_state",
    "generate_playoff_bracket",
    "generate_full_playoff_bracket",
    "record_playoff_game_result",
    "get_next_playoff_game",
    "advance_winners",
    "is_bracket_complete",
    "record_full_bracket_game_result",
    "get_next_full_bracket_game",
    "advance_full_bracket_winners",
    "is_full_bracket_complete",
    # Pipeline
    "SeasonSnapshot",
    "apply_day",
    "check_playoff_transition",
    "play_next_playoff_game",
    # Archive
    "SeasonArchive",
    "build_season_archive",
]
