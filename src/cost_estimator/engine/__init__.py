"""Engine — projection, forecast and scenario derivation."""

from cost_estimator.engine.projection import (
    TRAFFIC_BOOST,
    project,
    project_catalog,
    scale_factor,
    summarize,
    traffic_boost,
)
from cost_estimator.engine.forecast import forecast_for_state, simulate
from cost_estimator.engine.scenario import apply_scenario, derive_scenario, suggest_usage_weight

__all__ = [
    "TRAFFIC_BOOST",
    "project",
    "project_catalog",
    "scale_factor",
    "summarize",
    "traffic_boost",
    "simulate",
    "forecast_for_state",
    "derive_scenario",
    "suggest_usage_weight",
    "apply_scenario",
]
