"""AWS cost estimator — elasticity-based projection and growth forecast."""

__version__ = "1.0.0"
