"""Sampling utilities for the season simulator.

Centralized, reproducible randomness and the per-match goal models.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol

import numpy as np

from season_sim.constants import GOAL_TRIALS, NEGBIN_DISPERSION
from season_sim.models import Scoreline, TeamStrength


class RandomSource(Protocol):
    """Anything that can draw a uniform value in [0, 1)."""

    def random(self) -> float: ...


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Create a seeded random number generator.

    Args:
        seed: Random seed. If None, uses system entropy.

    Returns:
        NumPy Generator instance
    """
    return np.random.default_rng(seed)


def expected_goals(home: TeamStrength, away: TeamStrength) -> tuple[float, float]:
    """Expected goals for each side: own attack times opponent defense."""
    return home.attack * away.defense, away.attack * home.defense


def trial_success_probability(mean: float) -> float:
    """Per-trial success probability 1 / (1 + mean), clipped to [0, 1].

    A mean of exactly -1 gives +inf before clipping, so every trial succeeds.
    Clipping does not change any outcome of ``u < p`` for u in [0, 1).
    """
    denominator = 1.0 + mean
    if denominator == 0:
        return 1.0
    return min(1.0, max(0.0, 1.0 / denominator))


def bounded_trials_goals(
    rng: RandomSource, mean: float, trials: int = GOAL_TRIALS
) -> int:
    """Count successes over a fixed number of Bernoulli trials.

    Each trial succeeds with probability 1 / (1 + mean). The result is bounded
    to [0, trials]; this is not the unbounded negative binomial distribution.

    Args:
        rng: Random source
        mean: Expected goals for the side
        trials: Number of Bernoulli trials

    Returns:
        Goal count in [0, trials]
    """
    if trials < 0:
        raise ValueError("Number of trials must be non-negative")

    p = trial_success_probability(mean)
    goals = 0
    for _ in range(trials):
        if rng.random() < p:
            goals += 1
    return goals


def negative_binomial_goals(
    rng: np.random.Generator, mean: float, dispersion: float = NEGBIN_DISPERSION
) -> int:
    """Draw goals from a negative binomial with the given mean.

    Failures before ``dispersion`` successes with p = r / (r + mean). Negative
    means are treated as zero.
    """
    if dispersion <= 0:
        raise ValueError("Dispersion must be positive")

    mean = max(0.0, mean)
    p = dispersion / (mean + dispersion)
    return int(rng.negative_binomial(dispersion, p))


class GoalModel(ABC):
    """Abstract base class for goal models."""

    @abstractmethod
    def sample_goals(self, rng: RandomSource, mean: float) -> int:
        """Sample one side's goals given its expected goals."""
        pass


class BoundedTrialsGoalModel(GoalModel):
    """Default model: successes over ``trials`` Bernoulli(1 / (1 + mean)) draws."""

    def __init__(self, trials: int = GOAL_TRIALS) -> None:
        if trials < 0:
            raise ValueError("Number of trials must be non-negative")
        self.trials = trials

    def sample_goals(self, rng: RandomSource, mean: float) -> int:
        return bounded_trials_goals(rng, mean, self.trials)


class NegativeBinomialGoalModel(GoalModel):
    """Unbounded negative binomial goals. Needs a NumPy Generator."""

    def __init__(self, dispersion: float = NEGBIN_DISPERSION) -> None:
        if dispersion <= 0:
            raise ValueError("Dispersion must be positive")
        self.dispersion = dispersion

    def sample_goals(self, rng: RandomSource, mean: float) -> int:
        if not isinstance(rng, np.random.Generator):
            raise TypeError("NegativeBinomialGoalModel requires a numpy Generator")
        return negative_binomial_goals(rng, mean, self.dispersion)


def sample_scoreline(
    rng: RandomSource,
    home: TeamStrength,
    away: TeamStrength,
    goal_model: GoalModel | None = None,
) -> Scoreline:
    """Simulate one match between two teams.

    The home side is sampled first, then the away side, so a seeded run
    consumes random draws in a fixed order.
    """
    if goal_model is None:
        goal_model = BoundedTrialsGoalModel()

    home_xg, away_xg = expected_goals(home, away)
    home_goals = goal_model.sample_goals(rng, home_xg)
    away_goals = goal_model.sample_goals(rng, away_xg)
    return Scoreline(home_goals=home_goals, away_goals=away_goals)
