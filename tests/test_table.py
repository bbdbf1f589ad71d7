"""Tests for table module."""

import pytest

from season_sim.models import (
    Fixture,
    MatchResult,
    Scoreline,
    StandingsRow,
    UnknownFixtureTeam,
)
from season_sim.table import LeagueTable


def test_table_starts_at_zero():
    """Test every team gets a zeroed row in original order."""
    table = LeagueTable(["B", "A", "C"])

    assert [row.team for row in table.rows()] == ["B", "A", "C"]
    assert all(row == StandingsRow(team=row.team) for row in table)
    assert len(table) == 3
    assert "A" in table
    assert "Z" not in table


def test_duplicate_team_rejected():
    """Test duplicate team ids are refused."""
    with pytest.raises(ValueError, match="Duplicate team in league table: A"):
        LeagueTable(["A", "B", "A"])


def test_home_win():
    """Test a home win updates both rows."""
    table = LeagueTable(["A", "B"])

    table.record(Fixture("A", "B"), Scoreline(3, 1))

    home = table.row("A")
    away = table.row("B")
    assert (home.matches_played, home.wins, home.draws, home.losses) == (1, 1, 0, 0)
    assert (away.matches_played, away.wins, away.draws, away.losses) == (1, 0, 0, 1)
    assert home.points == 3
    assert away.points == 0
    assert (home.goals_for, home.goals_against, home.goal_difference) == (3, 1, 2)
    assert (away.goals_for, away.goals_against, away.goal_difference) == (1, 3, -2)


def test_away_win():
    """Test an away win credits the away side."""
    table = LeagueTable(["A", "B"])

    table.record(Fixture("A", "B"), Scoreline(0, 2))

    assert table.row("B").wins == 1
    assert table.row("B").points == 3
    assert table.row("A").losses == 1
    assert table.row("A").goal_difference == -2


def test_draw():
    """Test a draw gives both sides a point."""
    table = LeagueTable(["A", "B"])

    table.record_result(MatchResult(Fixture("A", "B"), Scoreline(1, 1)))

    for team in ("A", "B"):
        row = table.row(team)
        assert row.draws == 1
        assert row.points == 1
        assert row.goal_difference == 0


def test_accumulates_over_matches():
    """Test totals across several results."""
    table = LeagueTable(["A", "B", "C"])
    results = [
        (Fixture("A", "B"), Scoreline(2, 0)),
        (Fixture("C", "A"), Scoreline(1, 1)),
        (Fixture("B", "C"), Scoreline(2, 1)),
        (Fixture("B", "A"), Scoreline(0, 1)),
    ]

    for fixture, scoreline in results:
        table.record(fixture, scoreline)

    a = table.row("A")
    assert (a.matches_played, a.wins, a.draws, a.losses, a.points) == (3, 2, 1, 0, 7)
    assert (a.goals_for, a.goals_against, a.goal_difference) == (4, 1, 3)
    for row in table:
        assert row.points == 3 * row.wins + row.draws
        assert row.goal_difference == row.goals_for - row.goals_against


def test_unknown_team_is_atomic():
    """Test an unknown team leaves both rows untouched."""
    table = LeagueTable(["A", "B"])

    with pytest.raises(UnknownFixtureTeam):
        table.record(Fixture("A", "Z"), Scoreline(1, 0))
    with pytest.raises(UnknownFixtureTeam):
        table.record(Fixture("Z", "B"), Scoreline(1, 0))

    assert table.row("A") == StandingsRow(team="A")
    assert table.row("B") == StandingsRow(team="B")
