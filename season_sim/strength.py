"""Team strength estimation for the season simulator.

Turns season-aggregate rows into per-team attack and defense coefficients
relative to the league average, with an expected-goal-differential correction.
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import Iterable

from season_sim.constants import (
    ATTACK_XGD_WEIGHT,
    DEFENSE_XGD_WEIGHT,
    SEASON_LENGTH,
)
from season_sim.models import (
    DegenerateAverage,
    MalformedStatRow,
    NoTeamDataError,
    StrengthTable,
    TeamAggregateStats,
    TeamStrength,
)

logger = logging.getLogger(__name__)

_NUMERIC_FIELDS = ("matches_played", "goals_for", "goals_against", "xgd_per_90")


def validate_row(row: TeamAggregateStats) -> TeamAggregateStats:
    """Check that a stats row can take part in the league sums.

    Raises:
        MalformedStatRow: if the team id is empty or a numeric field is
            missing, not a number, or not finite.
    """
    if not isinstance(row.team, str) or not row.team.strip():
        raise MalformedStatRow(f"Missing team identifier in {row!r}")
    for name in _NUMERIC_FIELDS:
        value = getattr(row, name)
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise MalformedStatRow(f"{row.team}: {name} is not numeric ({value!r})")
        if not math.isfinite(value):
            raise MalformedStatRow(f"{row.team}: {name} is not finite ({value!r})")
    return row


def _ratio(numerator: float, denominator: float, what: str) -> float:
    if denominator == 0:
        raise DegenerateAverage(f"{what}: division by zero")
    return numerator / denominator


def league_averages(rows: list[TeamAggregateStats]) -> tuple[float, float]:
    """League goals-for and goals-against per match.

    Returns:
        (league_avg_gf, league_avg_ga)

    Raises:
        DegenerateAverage: if the league has no matches played.
    """
    total_matches = sum(row.matches_played for row in rows)
    total_gf = sum(row.goals_for for row in rows)
    total_ga = sum(row.goals_against for row in rows)
    league_avg_gf = _ratio(total_gf, total_matches, "league goals-for average")
    league_avg_ga = _ratio(total_ga, total_matches, "league goals-against average")
    return league_avg_gf, league_avg_ga


def team_strength(
    row: TeamAggregateStats,
    league_avg_gf: float,
    league_avg_ga: float,
    season_length: int = SEASON_LENGTH,
) -> TeamStrength:
    """Compute one team's attack and defense coefficients.

    attack  = (GF / season_length) / league_avg_gf + xGD/90 * -0.82
    defense = league_avg_ga / (GA / season_length) + xGD/90

    Either value may come out non-positive; that is passed through unchanged.

    Raises:
        DegenerateAverage: on any zero denominator.
    """
    if row.matches_played == 0:
        raise DegenerateAverage(f"{row.team}: no matches played")
    team_avg_gf = _ratio(row.goals_for, season_length, f"{row.team} goals-for average")
    team_avg_ga = _ratio(
        row.goals_against, season_length, f"{row.team} goals-against average"
    )
    attack = _ratio(team_avg_gf, league_avg_gf, f"{row.team} attack ratio")
    defense = _ratio(league_avg_ga, team_avg_ga, f"{row.team} defense ratio")
    return TeamStrength(
        team=row.team,
        attack=attack + row.xgd_per_90 * ATTACK_XGD_WEIGHT,
        defense=defense + row.xgd_per_90 * DEFENSE_XGD_WEIGHT,
    )


def _merge_team_rows(
    rows: Iterable[TeamAggregateStats],
) -> tuple[dict[str, TeamAggregateStats], list[TeamAggregateStats]]:
    """Sum valid rows per team, keeping first-appearance order."""
    merged: dict[str, TeamAggregateStats] = {}
    valid: list[TeamAggregateStats] = []
    for row in rows:
        try:
            validate_row(row)
        except MalformedStatRow as exc:
            logger.warning("Skipping stats row: %s", exc)
            continue
        valid.append(row)
        previous = merged.get(row.team)
        if previous is None:
            merged[row.team] = row
        else:
            merged[row.team] = TeamAggregateStats(
                team=row.team,
                matches_played=previous.matches_played + row.matches_played,
                goals_for=previous.goals_for + row.goals_for,
                goals_against=previous.goals_against + row.goals_against,
                xgd_per_90=previous.xgd_per_90 + row.xgd_per_90,
            )
    return merged, valid


def estimate_strengths(
    rows: Iterable[TeamAggregateStats], season_length: int = SEASON_LENGTH
) -> StrengthTable:
    """Estimate strengths for every team in one season's aggregate rows.

    Malformed rows are dropped from every sum. Teams whose averages cannot be
    computed are reported in ``StrengthTable.failures`` instead of aborting.

    Args:
        rows: Season-aggregate statistics, one or more rows per team
        season_length: Scheduled matches per team

    Returns:
        StrengthTable with strengths in first-appearance team order

    Raises:
        NoTeamDataError: if no team ends up with a strength
    """
    merged, valid = _merge_team_rows(rows)
    table = StrengthTable(team_order=list(merged))
    if not merged:
        raise NoTeamDataError()

    try:
        league_avg_gf, league_avg_ga = league_averages(valid)
    except DegenerateAverage as exc:
        logger.warning("Cannot compute league averages: %s", exc)
        raise NoTeamDataError() from exc

    for team, row in merged.items():
        try:
            table.strengths[team] = team_strength(
                row, league_avg_gf, league_avg_ga, season_length
            )
        except DegenerateAverage as exc:
            logger.warning("No strength for %s: %s", team, exc)
            table.failures[team] = exc

    if not table.strengths:
        raise NoTeamDataError()
    return table
