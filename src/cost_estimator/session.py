"""Estimator session — owns the live state and recomputes on demand.

The engine functions are pure; this class is the host that holds one
``EstimatorState``, one ``ServiceCatalog``, the scenario inputs and the
service filter.  Every mutation replaces a whole object, so ``summary``,
``forecast`` and ``export_csv`` always read a consistent snapshot.
"""

from __future__ import annotations

import logging
from typing import Any

from cost_estimator.config.estimator import Currency, EstimatorState
from cost_estimator.config.loader import EstimatorConfig, coerce_int, coerce_number
from cost_estimator.config.scenario import ScenarioInputs
from cost_estimator.config.service import ServiceCatalog
from cost_estimator.engine.forecast import forecast_for_state
from cost_estimator.engine.projection import summarize
from cost_estimator.engine.scenario import apply_scenario, derive_scenario
from cost_estimator.finance.report import (
    FORECAST_REPORT_STEM,
    build_forecast_report,
    build_report,
    report_filename,
)
from cost_estimator.models.results import ForecastResult, ProjectionSummary, ScenarioDerived

logger = logging.getLogger(__name__)


class EstimatorSession:
    """In-memory estimator session for one operator."""

    def __init__(self, config: EstimatorConfig | None = None) -> None:
        config = config or EstimatorConfig()
        self.state: EstimatorState = config.state
        self.catalog: ServiceCatalog = config.catalog
        self.scenario: ScenarioInputs = config.scenario
        self.selected_keys: list[str] = []

    # ── State edits ─────────────────────────────────────────────────────

    def update_state(self, **changes: Any) -> EstimatorState:
        """Validate and replace the state with ``changes`` applied."""
        self.state = EstimatorState(**{**self.state.model_dump(), **changes})
        return self.state

    def enter_state(self, **raw: Any) -> EstimatorState:
        """Apply free-text numeric entries, then validate like ``update_state``.

        Empty or garbage text becomes 0 (1 for ``months``); values are
        pulled back into range instead of rejected.
        """
        changes = dict(raw)
        if "fx_rate" in changes:
            changes["fx_rate"] = max(0.0, coerce_number(changes["fx_rate"]))
        for name in ("current_users", "future_users"):
            if name in changes:
                changes[name] = max(0, coerce_int(changes[name]))
        if "monthly_growth_pct" in changes:
            changes["monthly_growth_pct"] = max(-100.0, coerce_number(changes["monthly_growth_pct"]))
        if "months" in changes:
            changes["months"] = max(1, coerce_int(changes["months"], default=1))
        return self.update_state(**changes)

    def set_scale(self, scale: float) -> EstimatorState:
        self.state = self.state.with_scale(scale)
        return self.state

    def edit_service(
        self,
        key: str,
        baseline: float | None = None,
        elasticity: float | None = None,
    ) -> ServiceCatalog:
        """Edit one service, clamping out-of-range values.

        Elasticity is clamped to [0, 1] and baseline to ≥ 0.  Raises
        ``KeyError`` for an unknown service key.
        """
        if elasticity is not None and not 0.0 <= elasticity <= 1.0:
            clamped = min(max(elasticity, 0.0), 1.0)
            logger.warning("Elasticity %r for %s clamped to %.2f", elasticity, key, clamped)
            elasticity = clamped
        if baseline is not None and baseline < 0:
            logger.warning("Negative baseline %r for %s clamped to 0", baseline, key)
            baseline = 0.0
        self.catalog = self.catalog.update(key, baseline=baseline, elasticity=elasticity)
        return self.catalog

    # ── Service filter ──────────────────────────────────────────────────

    def toggle_service(self, key: str) -> list[str]:
        self.catalog.get(key)
        if key in self.selected_keys:
            self.selected_keys = [k for k in self.selected_keys if k != key]
        else:
            self.selected_keys = [*self.selected_keys, key]
        return self.selected_keys

    def clear_filter(self) -> None:
        self.selected_keys = []

    # ── Scenario ────────────────────────────────────────────────────────

    def set_scenario(self, **changes: Any) -> ScenarioInputs:
        self.scenario = ScenarioInputs(**{**self.scenario.model_dump(), **changes})
        return self.scenario

    def enter_scenario(self, **raw: Any) -> ScenarioInputs:
        """Free-text variant of ``set_scenario``; bad or negative entries become 0."""
        return self.set_scenario(**{k: max(0.0, coerce_number(v)) for k, v in raw.items()})

    def derive(self) -> ScenarioDerived:
        return derive_scenario(self.scenario)

    def apply_scenario(self) -> EstimatorState:
        """Copy the derived user count and usage weight into the state."""
        derived = self.derive()
        self.state = apply_scenario(self.state, derived)
        logger.info(
            "Applied scenario: future_users=%d usage_weight=%s",
            self.state.future_users, self.state.usage_weight,
        )
        return self.state

    # ── Reset ───────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Restore default state and catalog and clear the filter.

        Scenario inputs are left as entered.
        """
        self.state = EstimatorState()
        self.catalog = ServiceCatalog.default()
        self.selected_keys = []

    # ── Recomputation ───────────────────────────────────────────────────

    def summary(self) -> ProjectionSummary:
        return summarize(self.catalog, self.state, self.selected_keys)

    def forecast(self) -> ForecastResult:
        return forecast_for_state(self.catalog, self.state)

    def export_csv(self, currency: Currency | None = None) -> tuple[str, str]:
        """Return ``(filename, csv_text)`` for the current projection."""
        currency = currency or self.state.currency
        s = self.summary()
        text = build_report(s.rows, s.baseline_total, s.projected_total, currency, self.state.fx_rate)
        return report_filename(currency), text

    def export_forecast_csv(self, currency: Currency | None = None) -> tuple[str, str]:
        """Return ``(filename, csv_text)`` for the month-by-month forecast."""
        currency = currency or self.state.currency
        text = build_forecast_report(self.forecast(), currency, self.state.fx_rate)
        return report_filename(currency, FORECAST_REPORT_STEM), text
