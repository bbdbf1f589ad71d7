"""Tests for ranking module."""

import copy

from season_sim.models import Fixture, MatchResult, Scoreline, StandingsRow
from season_sim.ranking import is_ranked, rank_standings
from season_sim.simulator import tabulate_results


def _row(team, points=0, gd=0, gf=0):
    return StandingsRow(
        team=team,
        points=points,
        goal_difference=gd,
        goals_for=gf,
        goals_against=gf - gd,
    )


def test_points_first():
    """Test points decide before anything else."""
    rows = [_row("A", points=3, gd=10, gf=10), _row("B", points=4, gd=-5, gf=0)]

    ranked = rank_standings(rows)

    assert [r.team for r in ranked] == ["B", "A"]


def test_goal_difference_breaks_points_tie():
    """Test goal difference is the first tie-break."""
    rows = [_row("A", points=4, gd=1, gf=9), _row("B", points=4, gd=2, gf=2)]

    assert [r.team for r in rank_standings(rows)] == ["B", "A"]


def test_goals_for_breaks_goal_difference_tie():
    """Test goals for is the second tie-break."""
    rows = [_row("A", points=4, gd=1, gf=3), _row("B", points=4, gd=1, gf=5)]

    assert [r.team for r in rank_standings(rows)] == ["B", "A"]


def test_team_order_breaks_full_tie():
    """Test the original team order decides a full tie."""
    rows = [_row("A", points=4, gd=1, gf=3), _row("B", points=4, gd=1, gf=3)]

    assert [r.team for r in rank_standings(rows, ["B", "A"])] == ["B", "A"]
    assert [r.team for r in rank_standings(rows, ["A", "B"])] == ["A", "B"]
    # Defaults to the order rows are given in
    assert [r.team for r in rank_standings(list(reversed(rows)))] == ["B", "A"]


def test_teams_missing_from_order_rank_last_on_tie():
    """Test teams outside the order list lose full ties, by team id."""
    rows = [_row("Z"), _row("Y"), _row("A")]

    ranked = rank_standings(rows, ["A"])

    assert [r.team for r in ranked] == ["A", "Y", "Z"]
    assert is_ranked(ranked, ["A"])
    assert not is_ranked([rows[2], rows[0], rows[1]], ["A"])


def test_ranking_does_not_mutate():
    """Test rows and their values are left alone."""
    rows = [_row("A", points=1), _row("B", points=3), _row("C", points=2)]
    before = copy.deepcopy(rows)

    ranked = rank_standings(rows)

    assert rows == before
    assert [r.team for r in rows] == ["A", "B", "C"]
    assert ranked is not rows
    assert ranked[0] is rows[1]


def test_is_ranked():
    """Test the ordering check."""
    rows = [_row("A", points=3), _row("B", points=3), _row("C", points=1)]

    assert is_ranked(rows, ["A", "B", "C"])
    assert not is_ranked(rows, ["B", "A", "C"])
    assert not is_ranked(list(reversed(rows)), ["A", "B", "C"])


def test_three_team_injected_scorelines():
    """Test X/Y/Z league built from fixed results."""
    results = [
        MatchResult(Fixture("X", "Y"), Scoreline(2, 1)),
        MatchResult(Fixture("Y", "Z"), Scoreline(0, 0)),
        MatchResult(Fixture("Z", "X"), Scoreline(1, 3)),
    ]

    season = tabulate_results(["X", "Y", "Z"], results)

    by_team = {row.team: row for row in season.standings}
    assert by_team["X"].points == 6
    assert by_team["Y"].points == 1
    assert by_team["Z"].points == 1
    # Y and Z level on points; Y has GD -1 against Z's -2
    assert (by_team["Y"].goal_difference, by_team["Z"].goal_difference) == (-1, -2)
    assert [row.team for row in season.standings] == ["X", "Y", "Z"]
    assert season.position_of("Z") == 3


def test_three_team_full_tie_uses_team_order():
    """Test equal points, goal difference and goals for fall back to team order."""
    results = [
        MatchResult(Fixture("X", "Y"), Scoreline(2, 0)),
        MatchResult(Fixture("Y", "Z"), Scoreline(1, 1)),
        MatchResult(Fixture("Z", "X"), Scoreline(0, 2)),
    ]

    season = tabulate_results(["X", "Z", "Y"], results)

    # Y and Z: 1 point, GD -2, GF 1 each
    assert [row.team for row in season.standings] == ["X", "Z", "Y"]
