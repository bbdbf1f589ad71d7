"""Cumulative league table for the season simulator."""

from __future__ import annotations

from typing import Iterable, Iterator

from season_sim.models import (
    Fixture,
    MatchResult,
    Scoreline,
    StandingsRow,
    UnknownFixtureTeam,
)


class LeagueTable:
    """Owns one StandingsRow per team and folds match results into them."""

    def __init__(self, teams: Iterable[str]) -> None:
        self.team_order: list[str] = []
        self._rows: dict[str, StandingsRow] = {}
        for team in teams:
            if team in self._rows:
                raise ValueError(f"Duplicate team in league table: {team}")
            self.team_order.append(team)
            self._rows[team] = StandingsRow(team=team)

    def __contains__(self, team: str) -> bool:
        return team in self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[StandingsRow]:
        return iter(self.rows())

    def row(self, team: str) -> StandingsRow:
        """Row for a team, raising UnknownFixtureTeam if it has none."""
        try:
            return self._rows[team]
        except KeyError:
            raise UnknownFixtureTeam(team) from None

    def rows(self) -> list[StandingsRow]:
        """Rows in original team order."""
        return [self._rows[team] for team in self.team_order]

    def record(self, fixture: Fixture, scoreline: Scoreline) -> None:
        """Apply one result to both teams, or to neither.

        Raises:
            UnknownFixtureTeam: if either team has no row; nothing is changed.
        """
        home = self.row(fixture.home)
        away = self.row(fixture.away)
        home.register_game(scoreline.home_goals, scoreline.away_goals)
        away.register_game(scoreline.away_goals, scoreline.home_goals)

    def record_result(self, result: MatchResult) -> None:
        """Apply an already known match result."""
        self.record(result.fixture, result.scoreline)
