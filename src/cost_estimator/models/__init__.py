"""Result models — engine output contracts."""

from cost_estimator.models.results import (
    ForecastPoint,
    ForecastResult,
    ProjectedRow,
    ProjectionSummary,
    ScenarioDerived,
)

__all__ = [
    "ForecastPoint",
    "ForecastResult",
    "ProjectedRow",
    "ProjectionSummary",
    "ScenarioDerived",
]
