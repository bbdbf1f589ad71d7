"""Ranking of final standings."""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from season_sim.models import StandingsRow


def ranking_key(row: StandingsRow, order_index: int) -> tuple[int, int, int, int]:
    """Sort key: points, goal difference, goals for (all desc), then team order."""
    return (-row.points, -row.goal_difference, -row.goals_for, order_index)


def standings_sort_key(
    team_order: Sequence[str],
) -> Callable[[StandingsRow], tuple[tuple[int, int, int, int], str]]:
    """Full sort key for a team order.

    Teams missing from ``team_order`` sit after every listed team on a full
    tie and are then ordered by team id.
    """
    position = {team: idx for idx, team in enumerate(team_order)}
    fallback = len(position)

    def key(row: StandingsRow) -> tuple[tuple[int, int, int, int], str]:
        if row.team in position:
            return ranking_key(row, position[row.team]), ""
        return ranking_key(row, fallback), row.team

    return key


def rank_standings(
    rows: Iterable[StandingsRow], team_order: Sequence[str] | None = None
) -> list[StandingsRow]:
    """Order standings rows from first place to last.

    Ties on points, goal difference and goals for are broken by position in
    ``team_order`` (defaults to the order of ``rows``). Teams missing from
    ``team_order`` rank after all listed teams on a full tie, by team id.

    Returns:
        New list of the same row objects; rows are not modified.
    """
    rows = list(rows)
    if team_order is None:
        team_order = [row.team for row in rows]
    return sorted(rows, key=standings_sort_key(team_order))


def is_ranked(rows: Sequence[StandingsRow], team_order: Sequence[str]) -> bool:
    """Check that rows are in the order ``rank_standings`` produces."""
    key = standings_sort_key(team_order)
    keys = [key(row) for row in rows]
    return all(a <= b for a, b in zip(keys, keys[1:]))
