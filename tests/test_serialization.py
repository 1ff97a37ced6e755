"""Result models survive JSON encode/decode as downstream consumers read them."""

from __future__ import annotations

from cost_estimator.config import EstimatorState, ServiceCatalog
from cost_estimator.engine.forecast import forecast_for_state
from cost_estimator.engine.projection import summarize
from cost_estimator.models.results import ForecastResult, ProjectionSummary


def test_projection_summary_round_trip(default_catalog: ServiceCatalog, state: EstimatorState):
    original = summarize(default_catalog, state, ["rds", "dt"])
    restored = ProjectionSummary.model_validate_json(original.model_dump_json())
    assert restored == original


def test_forecast_result_round_trip(default_catalog: ServiceCatalog, state: EstimatorState):
    original = forecast_for_state(default_catalog, state)
    restored = ForecastResult.model_validate_json(original.model_dump_json())
    assert restored == original
    assert len(restored.points) == state.months + 1
