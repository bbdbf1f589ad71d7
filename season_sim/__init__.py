"""Season Simulator

A small, readable engine that turns season-aggregate team statistics and a
fixture list into a simulated, fully tie-broken league table.
Uses NumPy for deterministic, reproducible Monte Carlo simulations.
"""

__version__ = "0.1.0"
