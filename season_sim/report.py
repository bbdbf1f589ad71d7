"""Plain-text and record output for ranked standings."""

from __future__ import annotations

from typing import Any, Sequence

from season_sim.models import StandingsRow

_HEADER = ("Rank", "Team", "MP", "W", "D", "L", "Pts", "GF", "GA", "GD")


def standings_records(standings: Sequence[StandingsRow]) -> list[dict[str, Any]]:
    """JSON-ready dicts, one per row, with a 1-based rank."""
    return [
        {
            "rank": rank,
            "team": row.team,
            "matches_played": row.matches_played,
            "wins": row.wins,
            "draws": row.draws,
            "losses": row.losses,
            "points": row.points,
            "goals_for": row.goals_for,
            "goals_against": row.goals_against,
            "goal_difference": row.goal_difference,
        }
        for rank, row in enumerate(standings, start=1)
    ]


def format_table(
    standings: Sequence[StandingsRow], title: str | None = None
) -> str:
    """Render ranked standings as a fixed-width table."""
    team_width = max([20] + [len(row.team) for row in standings])
    line = "{:>5} {:>%d} {:>5} {:>5} {:>5} {:>5} {:>5} {:>5} {:>5} {:>5}" % team_width

    lines = []
    if title:
        lines.append(f"--- {title} ---")
    lines.append(line.format(*_HEADER))
    for rank, row in enumerate(standings, start=1):
        lines.append(
            line.format(
                rank,
                row.team,
                row.matches_played,
                row.wins,
                row.draws,
                row.losses,
                row.points,
                row.goals_for,
                row.goals_against,
                row.goal_difference,
            )
        )
    return "\n".join(lines)
