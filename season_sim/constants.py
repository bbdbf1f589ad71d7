from __future__ import annotations

from typing import Dict

# Scheduled matches per team in a 20-team double round robin.
SEASON_LENGTH: int = 38

ATTACK_XGD_WEIGHT: float = -0.82
DEFENSE_XGD_WEIGHT: float = 1.0

GOAL_TRIALS: int = 2
NEGBIN_DISPERSION: float = 2.0

POINTS_FOR_WIN: int = 3
POINTS_FOR_DRAW: int = 1

RELEGATION_PLACES: int = 3

LEAGUE_TABLE_COLUMNS: Dict[str, str] = {
    "season": "Season",
    "team": "Squad",
    "matches_played": "MP",
    "goals_for": "GF",
    "goals_against": "GA",
    "xgd_per_90": "xGD/90",
}

FIXTURE_COLUMNS: Dict[str, str] = {
    "season": "Season",
    "home": "Home Team",
    "away": "Away Team",
}
