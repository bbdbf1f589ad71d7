"""CSV providers for season statistics and fixtures.

League tables follow the layout
``Season,Rk,Squad,MP,W,D,L,GF,GA,GD,Pts,Pts/MP,xG,xGA,xGD,xGD/90`` and
fixture lists ``Season,Home Team,Home xG,Home Score,Away Score,Away xG,Away Team``.
Only the columns the simulator consumes are read; historical scores are ignored.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import pandas as pd

from season_sim.constants import FIXTURE_COLUMNS, LEAGUE_TABLE_COLUMNS
from season_sim.models import Fixture, MalformedStatRow, TeamAggregateStats
from season_sim.strength import validate_row

logger = logging.getLogger(__name__)


def _skip_bad_line(bad_line: list[str]) -> None:
    logger.warning("Skipping malformed CSV line: %s", ",".join(bad_line))
    return None


def _read_season_csv(
    path: str | Path, columns: dict[str, str], season: str | None
) -> pd.DataFrame:
    """Read a CSV as strings, check required columns, and filter by season."""
    frame = pd.read_csv(
        path,
        dtype=str,
        skipinitialspace=True,
        engine="python",
        on_bad_lines=_skip_bad_line,
    )
    missing = set(columns.values()) - set(frame.columns)
    if missing:
        raise ValueError(f"{path} missing columns: {sorted(missing)}")

    if season is not None:
        season_col = columns["season"]
        frame = frame[frame[season_col].fillna("").str.strip() == season.strip()]
    return frame


def _text(value: object) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value).strip()


def _number(row: pd.Series, column: str) -> float:
    raw = _text(row[column])
    if not raw:
        raise MalformedStatRow(f"missing {column}")
    try:
        return float(raw)
    except ValueError:
        raise MalformedStatRow(f"{column} is not numeric ({raw!r})") from None


def parse_stat_row(row: pd.Series) -> TeamAggregateStats:
    """Convert one league-table row into TeamAggregateStats.

    Raises:
        MalformedStatRow: on a missing team or a missing/non-numeric field
    """
    cols = LEAGUE_TABLE_COLUMNS
    stats = TeamAggregateStats(
        team=_text(row[cols["team"]]),
        matches_played=_number(row, cols["matches_played"]),
        goals_for=_number(row, cols["goals_for"]),
        goals_against=_number(row, cols["goals_against"]),
        xgd_per_90=_number(row, cols["xgd_per_90"]),
    )
    return validate_row(stats)


def load_team_stats(
    path: str | Path, season: str | None = None
) -> list[TeamAggregateStats]:
    """Load season-aggregate team statistics from a league-table CSV.

    Malformed rows are logged and skipped.

    Args:
        path: CSV file path
        season: Season label to keep (e.g. "2024 2025"); None keeps all rows

    Returns:
        Parsed rows in file order
    """
    frame = _read_season_csv(path, LEAGUE_TABLE_COLUMNS, season)
    stats = []
    for line_no, row in frame.iterrows():
        try:
            stats.append(parse_stat_row(row))
        except MalformedStatRow as exc:
            logger.warning("Skipping stats row %s: %s", line_no, exc)
    return stats


def load_fixtures(path: str | Path, season: str | None = None) -> list[Fixture]:
    """Load the ordered fixture list for a season.

    Rows with an empty home or away team are logged and skipped.
    """
    frame = _read_season_csv(path, FIXTURE_COLUMNS, season)
    fixtures = []
    for line_no, row in frame.iterrows():
        home = _text(row[FIXTURE_COLUMNS["home"]])
        away = _text(row[FIXTURE_COLUMNS["away"]])
        if not home or not away:
            logger.warning("Skipping fixture row %s: missing team", line_no)
            continue
        fixtures.append(Fixture(home=home, away=away))
    return fixtures
