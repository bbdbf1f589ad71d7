"""Data models for the season simulator.

Contains the team statistics, strength, fixture and standings records plus the
error kinds raised while simulating a season.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from season_sim.constants import POINTS_FOR_DRAW, POINTS_FOR_WIN


class SimulationError(Exception):
    """Base class for season simulation errors."""


class MalformedStatRow(SimulationError, ValueError):
    """A season statistics row is short, missing a field, or not numeric."""


class DegenerateAverage(SimulationError, ArithmeticError):
    """A team or league average would divide by zero."""


class MissingTeamStrength(SimulationError, KeyError):
    """A fixture references a team with no strength estimate."""


class UnknownFixtureTeam(SimulationError, KeyError):
    """A fixture references a team with no standings row."""


class NoTeamDataError(SimulationError, ValueError):
    """No team in the season data could be resolved."""

    def __init__(self, message: str = "cannot simulate: no team data") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class TeamAggregateStats:
    """Season totals for one team."""

    team: str
    matches_played: float
    goals_for: float
    goals_against: float
    xgd_per_90: float


@dataclass(frozen=True)
class TeamStrength:
    """Attack and defense coefficients relative to the league average."""

    team: str
    attack: float
    defense: float


@dataclass(frozen=True)
class Fixture:
    """A scheduled match, home team first."""

    home: str
    away: str


@dataclass(frozen=True)
class Scoreline:
    """Goals scored by each side of one match."""

    home_goals: int
    away_goals: int

    @property
    def is_draw(self) -> bool:
        """True if both sides scored the same number of goals."""
        return self.home_goals == self.away_goals


@dataclass(frozen=True)
class MatchResult:
    """A fixture together with its final scoreline."""

    fixture: Fixture
    scoreline: Scoreline


@dataclass
class StandingsRow:
    """One team's cumulative record for the season."""

    team: str
    matches_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    points: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0

    def register_game(self, goals_for: int, goals_against: int) -> None:
        """Fold one match, seen from this team's side, into the record."""
        self.matches_played += 1
        self.goals_for += goals_for
        self.goals_against += goals_against
        if goals_for > goals_against:
            self.wins += 1
            self.points += POINTS_FOR_WIN
        elif goals_for < goals_against:
            self.losses += 1
        else:
            self.draws += 1
            self.points += POINTS_FOR_DRAW
        self.goal_difference = self.goals_for - self.goals_against


@dataclass
class StrengthTable:
    """Strengths for every resolvable team of one season.

    ``team_order`` is the order in which teams first appear in the season data
    and is the final ranking tie-break.
    """

    strengths: dict[str, TeamStrength] = field(default_factory=dict)
    team_order: list[str] = field(default_factory=list)
    failures: dict[str, SimulationError] = field(default_factory=dict)

    def __contains__(self, team: str) -> bool:
        return team in self.strengths

    def __len__(self) -> int:
        return len(self.strengths)

    def get(self, team: str) -> TeamStrength:
        """Look up a team's strength, raising MissingTeamStrength if absent."""
        try:
            return self.strengths[team]
        except KeyError:
            raise MissingTeamStrength(team) from None

    def teams(self) -> list[str]:
        """Teams with a strength, in original order.

        Teams with a strength but no place in ``team_order`` follow, in the
        order they were added.
        """
        ordered = [team for team in self.team_order if team in self.strengths]
        listed = set(ordered)
        return ordered + [team for team in self.strengths if team not in listed]


@dataclass
class SeasonResult:
    """Outcome of one simulated season."""

    standings: list[StandingsRow]
    results: list[MatchResult] = field(default_factory=list)
    skipped: list[tuple[Fixture, SimulationError]] = field(default_factory=list)
    strength_failures: dict[str, SimulationError] = field(default_factory=dict)

    def position_of(self, team: str) -> int:
        """1-based finishing position of a team."""
        for idx, row in enumerate(self.standings):
            if row.team == team:
                return idx + 1
        raise KeyError(team)
