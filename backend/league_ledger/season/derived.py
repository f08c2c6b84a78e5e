"""
Derived statistics.

Formulas:
    BA   = H / AB
    OBP  = (H + BB + HBP) / (AB + BB + HBP + SF)
    SLG  = (1B + 2*2B + 3*3B + 4*HR) / AB
    OPS  = OBP + SLG
    ERA  = ER * 9 / IP
    WHIP = (BB + H) / IP
    K/9  = SO * 9 / IP
    BB/9 = BB * 9 / IP
    FIP  = (13*HR + 3*(BB + HBP) - 2*SO) / IP + 3.15

Every rate returns 0 when its denominator is zero.

Innings pitched use baseball notation: the tenths digit counts thirds of an
inning, so 6.1 is 6 1/3 and 6.2 is 6 2/3. A stored IP never ends in .3.
"""

import math
from dataclasses import replace
from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from .models import BattingStats, PitchingStats


FIP_CONSTANT = 3.15


def _split_ip(ip: float) -> Tuple[int, int]:
    """Split baseball-notation IP into (whole innings, thirds)."""
    whole = math.floor(ip)
    thirds = int(round((ip - whole) * 10))
    return whole, thirds


def ip_to_decimal(ip: float) -> float:
    """Convert baseball-notation IP to true innings (6.2 -> 6.667)."""
    whole, thirds = _split_ip(ip)
    return whole + thirds / 3


def ip_to_outs(ip: float) -> int:
    """Convert baseball-notation IP to outs recorded."""
    whole, thirds = _split_ip(ip)
    return whole * 3 + thirds


def add_ip(a: float, b: float) -> float:
    """
    Add two baseball-notation IP values, carrying thirds into whole innings.

    6.2 + 0.1 = 7.0, and 5.2 + 2.2 = 8.1.
    """
    a_whole, a_thirds = _split_ip(a)
    b_whole, b_thirds = _split_ip(b)

    total_thirds = a_thirds + b_thirds
    total_whole = a_whole + b_whole + total_thirds // 3
    total_thirds = total_thirds % 3

    return round(total_whole + total_thirds / 10, 1)


# ============== Batting ==============

def compute_ba(hits: int, at_bats: int) -> float:
    if at_bats == 0:
        return 0.0
    return hits / at_bats


def compute_obp(hits: int, walks: int, hit_by_pitch: int, at_bats: int, sacrifice_flies: int) -> float:
    denom = at_bats + walks + hit_by_pitch + sacrifice_flies
    if denom == 0:
        return 0.0
    return (hits + walks + hit_by_pitch) / denom


def compute_slg(hits: int, doubles: int, triples: int, home_runs: int, at_bats: int) -> float:
    if at_bats == 0:
        return 0.0
    singles = hits - doubles - triples - home_runs
    total_bases = singles + doubles * 2 + triples * 3 + home_runs * 4
    return total_bases / at_bats


def compute_ops(obp: float, slg: float) -> float:
    return obp + slg


# ============== Pitching ==============

def compute_era(earned_runs: int, ip: float) -> float:
    innings = ip_to_decimal(ip)
    if innings == 0:
        return 0.0
    return earned_runs * 9 / innings


def compute_whip(walks: int, hits: int, ip: float) -> float:
    innings = ip_to_decimal(ip)
    if innings == 0:
        return 0.0
    return (walks + hits) / innings


def compute_k9(strikeouts: int, ip: float) -> float:
    innings = ip_to_decimal(ip)
    if innings == 0:
        return 0.0
    return strikeouts * 9 / innings


def compute_bb9(walks: int, ip: float) -> float:
    innings = ip_to_decimal(ip)
    if innings == 0:
        return 0.0
    return walks * 9 / innings


def compute_fip(home_runs: int, walks: int, hit_by_pitch: int, strikeouts: int, ip: float) -> float:
    innings = ip_to_decimal(ip)
    if innings == 0:
        return 0.0
    return (13 * home_runs + 3 * (walks + hit_by_pitch) - 2 * strikeouts) / innings + FIP_CONSTANT


# ============== Whole-record derivation ==============

def compute_derived_batting(stats: 'BattingStats') -> 'BattingStats':
    """Return a copy of stats with BA/OBP/SLG/OPS recomputed from its totals."""
    ba = compute_ba(stats.hits, stats.at_bats)
    obp = compute_obp(stats.hits, stats.walks, stats.hit_by_pitch, stats.at_bats, stats.sacrifice_flies)
    slg = compute_slg(stats.hits, stats.doubles, stats.triples, stats.home_runs, stats.at_bats)
    return replace(stats, ba=ba, obp=obp, slg=slg, ops=compute_ops(obp, slg))


def compute_derived_pitching(stats: 'PitchingStats') -> 'PitchingStats':
    """Return a copy of stats with ERA/WHIP/FIP recomputed from its totals."""
    return replace(
        stats,
        era=compute_era(stats.earned_runs, stats.ip),
        whip=compute_whip(stats.walks, stats.hits, stats.ip),
        fip=compute_fip(stats.home_runs, stats.walks, stats.hit_by_pitch, stats.strikeouts, stats.ip)
    )
