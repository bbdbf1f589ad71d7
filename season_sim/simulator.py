"""Simulation engine for the season simulator.

Contains the season loop and the Monte Carlo driver that repeats it.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

import numpy as np

from season_sim.constants import SEASON_LENGTH
from season_sim.models import (
    Fixture,
    MatchResult,
    MissingTeamStrength,
    SeasonResult,
    StrengthTable,
    TeamAggregateStats,
    UnknownFixtureTeam,
)
from season_sim.ranking import rank_standings
from season_sim.sampling import GoalModel, RandomSource, sample_scoreline
from season_sim.strength import estimate_strengths
from season_sim.table import LeagueTable

logger = logging.getLogger(__name__)


def tabulate_results(
    teams: Iterable[str], results: Iterable[MatchResult]
) -> SeasonResult:
    """Build ranked standings from already known results.

    Results naming a team outside ``teams`` are skipped whole and reported in
    ``SeasonResult.skipped``.
    """
    table = LeagueTable(teams)
    played: list[MatchResult] = []
    skipped = []
    for result in results:
        fixture = result.fixture
        try:
            table.record_result(result)
        except UnknownFixtureTeam as exc:
            logger.warning(
                "Skipping %s v %s: unknown team %s",
                fixture.home,
                fixture.away,
                exc.args[0],
            )
            skipped.append((fixture, exc))
            continue
        played.append(result)

    return SeasonResult(
        standings=rank_standings(table.rows(), table.team_order),
        results=played,
        skipped=skipped,
    )


class SeasonSimulator:
    """Main simulation engine."""

    def __init__(
        self,
        goal_model: GoalModel | None = None,
        season_length: int = SEASON_LENGTH,
    ) -> None:
        self.goal_model = goal_model
        self.season_length = season_length

    def estimate(self, stats: Iterable[TeamAggregateStats]) -> StrengthTable:
        """Estimate team strengths for one season."""
        return estimate_strengths(stats, self.season_length)

    def simulate_once(
        self,
        rng: RandomSource,
        strengths: StrengthTable,
        fixtures: Iterable[Fixture],
    ) -> SeasonResult:
        """Simulate every fixture once and rank the final table.

        Fixtures with a team lacking a strength or a table row are skipped
        whole. Skipped fixtures draw no random numbers.
        """
        table = LeagueTable(strengths.teams())
        played: list[MatchResult] = []
        skipped = []

        for fixture in fixtures:
            try:
                home = strengths.get(fixture.home)
                away = strengths.get(fixture.away)
                table.row(fixture.home)
                table.row(fixture.away)
            except (MissingTeamStrength, UnknownFixtureTeam) as exc:
                logger.warning(
                    "Skipping %s v %s: no strength or row for %s",
                    fixture.home,
                    fixture.away,
                    exc.args[0],
                )
                skipped.append((fixture, exc))
                continue

            scoreline = sample_scoreline(rng, home, away, self.goal_model)
            table.record(fixture, scoreline)
            played.append(MatchResult(fixture=fixture, scoreline=scoreline))

        return SeasonResult(
            standings=rank_standings(table.rows(), table.team_order),
            results=played,
            skipped=skipped,
            strength_failures=dict(strengths.failures),
        )

    def simulate(
        self,
        rng: RandomSource,
        stats: Iterable[TeamAggregateStats],
        fixtures: Iterable[Fixture],
    ) -> SeasonResult:
        """Estimate strengths and simulate one season.

        Raises:
            NoTeamDataError: if no team in ``stats`` can be resolved
        """
        strengths = self.estimate(stats)
        return self.simulate_once(rng, strengths, fixtures)


def run_monte_carlo(
    rng: RandomSource,
    simulator: SeasonSimulator,
    runs: int,
    stats: Iterable[TeamAggregateStats],
    fixtures: Iterable[Fixture],
) -> dict[str, Any]:
    """Run Monte Carlo simulation.

    Strengths are estimated once and every season is drawn from the same
    generator, so the whole batch is reproducible from one seed.

    Args:
        rng: Random source
        simulator: Season simulator
        runs: Number of simulated seasons
        stats: Season-aggregate statistics
        fixtures: Fixture list

    Returns:
        Dictionary with the team order, per-run points and positions, and the
        summary from ``metrics.summary``
    """
    if runs < 0:
        raise ValueError("Number of runs must be non-negative")

    strengths = simulator.estimate(stats)
    fixtures = list(fixtures)
    teams = strengths.teams()
    column = {team: idx for idx, team in enumerate(teams)}

    points = np.zeros((runs, len(teams)), dtype=int)
    positions = np.zeros((runs, len(teams)), dtype=int)

    for i in range(runs):
        result = simulator.simulate_once(rng, strengths, fixtures)
        for place, row in enumerate(result.standings, start=1):
            points[i, column[row.team]] = row.points
            positions[i, column[row.team]] = place

        # Lightweight progress logging every ~5% or on last
        if runs >= 20:
            step = max(1, runs // 20)
            if (i + 1) % step == 0 or i + 1 == runs:
                logger.info("Progress: %d/%d", i + 1, runs)

    from season_sim.metrics import summary

    return {
        "runs": runs,
        "teams": teams,
        "fixtures": len(fixtures),
        "points": points,
        "positions": positions,
        "summary": summary(teams, points, positions),
    }
