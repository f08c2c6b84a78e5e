"""
League Ledger

Season bookkeeping engine for a simulated baseball league: schedule
generation, stat accumulation, standings, leaderboards and playoffs.
"""

__version__ = "1.0.0"
