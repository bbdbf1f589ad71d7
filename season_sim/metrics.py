"""Metrics and analysis utilities for the season simulator.

Functions for summarising finishing positions and points across many
simulated seasons.
"""

from __future__ import annotations

import numpy as np

from season_sim.constants import RELEGATION_PLACES


def quantiles(
    arr: np.ndarray, qs: tuple[float, ...] = (0.05, 0.5, 0.95)
) -> dict[float, float]:
    """Compute quantiles of an array.

    Args:
        arr: Input array
        qs: Quantile values to compute

    Returns:
        Dictionary mapping quantile values to computed quantiles
    """
    if len(arr) == 0:
        return {q: 0.0 for q in qs}

    computed_quantiles = np.quantile(arr, qs)
    return {q: float(v) for q, v in zip(qs, computed_quantiles)}


def position_probabilities(positions: np.ndarray) -> np.ndarray:
    """Probability of each team finishing in each place.

    Args:
        positions: Array of shape (runs, teams) with 1-based finishing places

    Returns:
        Array of shape (teams, teams); row i is team i, column j is place j + 1
    """
    runs, n_teams = positions.shape if positions.ndim == 2 else (0, 0)
    probs = np.zeros((n_teams, n_teams))
    if runs == 0:
        return probs

    for team_idx in range(n_teams):
        counts = np.bincount(positions[:, team_idx] - 1, minlength=n_teams)
        probs[team_idx] = counts / runs
    return probs


def prob_finish_within(positions: np.ndarray, places: int) -> np.ndarray:
    """Per-team probability of finishing in the top ``places``."""
    if positions.size == 0:
        return np.zeros(positions.shape[1] if positions.ndim == 2 else 0)
    return np.mean(positions <= places, axis=0)


def prob_relegation(
    positions: np.ndarray, relegation_places: int = RELEGATION_PLACES
) -> np.ndarray:
    """Per-team probability of finishing in the bottom ``relegation_places``."""
    if positions.size == 0:
        return np.zeros(positions.shape[1] if positions.ndim == 2 else 0)
    n_teams = positions.shape[1]
    return np.mean(positions > n_teams - relegation_places, axis=0)


def summary(
    teams: list[str], points: np.ndarray, positions: np.ndarray
) -> dict[str, dict[str, float | dict[float, float] | list[float]]]:
    """Generate per-team summary statistics for Monte Carlo results.

    Args:
        teams: Team ids, one per column
        points: Array of shape (runs, teams) with final points
        positions: Array of shape (runs, teams) with 1-based finishing places

    Returns:
        Dictionary keyed by team with summary statistics
    """
    if len(points) == 0:
        return {
            team: {
                "points_mean": 0.0,
                "points_sd": 0.0,
                "points_quantiles": {0.05: 0.0, 0.5: 0.0, 0.95: 0.0},
                "position_mean": 0.0,
                "prob_title": 0.0,
                "prob_top_4": 0.0,
                "prob_relegation": 0.0,
                "position_probs": [0.0] * len(teams),
            }
            for team in teams
        }

    place_probs = position_probabilities(positions)
    top_4 = prob_finish_within(positions, 4)
    relegation = prob_relegation(positions)

    result = {}
    for idx, team in enumerate(teams):
        result[team] = {
            "points_mean": float(np.mean(points[:, idx])),
            "points_sd": float(np.std(points[:, idx])),
            "points_quantiles": quantiles(points[:, idx]),
            "position_mean": float(np.mean(positions[:, idx])),
            "prob_title": float(place_probs[idx, 0]),
            "prob_top_4": float(top_4[idx]),
            "prob_relegation": float(relegation[idx]),
            "position_probs": [float(p) for p in place_probs[idx]],
        }
    return result
