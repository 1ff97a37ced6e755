"""FastAPI server — HTTP access to the cost estimator.

Run with:
    uvicorn cost_estimator.api.server:app --reload --port 8000

Or:
    python -m cost_estimator.api.server

Endpoints:
    GET  /health            — liveness probe
    GET  /defaults          — default state, service catalog and scenario inputs
    GET  /defaults/services/{key} — one default service definition (404 if unknown)
    POST /project           — per-service projection + totals at the target users
    POST /forecast          — month-by-month compounding-growth forecast
    POST /scenario/derive   — dealership inputs → derived users / usage weight
    POST /scenario/apply    — derive and copy the result into a state
    POST /export/csv        — projection snapshot as a CSV download
    POST /export/forecast-csv — forecast table as a CSV download
    POST /reset             — documented default state and catalog

The server keeps no session: each request carries the state it needs.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field

from cost_estimator.config.estimator import EstimatorState
from cost_estimator.config.loader import EstimatorConfig
from cost_estimator.config.scenario import ScenarioInputs
from cost_estimator.config.service import ServiceCatalog, ServiceDefinition
from cost_estimator.engine.forecast import forecast_for_state
from cost_estimator.engine.projection import summarize
from cost_estimator.engine.scenario import apply_scenario, derive_scenario
from cost_estimator.finance.currency import format_amount
from cost_estimator.finance.report import (
    FORECAST_REPORT_STEM,
    REPORT_MEDIA_TYPE,
    build_forecast_report,
    build_report,
    report_filename,
)
from cost_estimator.models.results import ForecastResult, ProjectionSummary, ScenarioDerived

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="AWS Cost Estimator API",
    version="1.0",
    description=(
        "Estimate monthly AWS spend at a target user count and forecast it "
        "month by month under compounding user growth. Start with "
        "GET /defaults for a complete, editable starting point."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class EstimateRequest(BaseModel):
    """State plus optional catalog.  Missing fields use defaults."""
    state: EstimatorState = Field(default_factory=EstimatorState)
    services: list[ServiceDefinition] | None = Field(
        default=None,
        description="Full service catalog. Omit to use the 17-service default catalog.",
    )
    selected_keys: list[str] = Field(
        default_factory=list,
        description="Limit rows and projected total to these service keys. Empty = all.",
    )


class ExportRequest(EstimateRequest):
    """Request body for /export/csv and /export/forecast-csv."""
    currency: Literal["USD", "INR"] | None = Field(
        default=None,
        description="Export currency. Defaults to state.currency.",
    )


class ScenarioApplyRequest(BaseModel):
    """Request body for /scenario/apply."""
    state: EstimatorState = Field(default_factory=EstimatorState)
    scenario: ScenarioInputs = Field(default_factory=ScenarioInputs)


class ProjectResponse(BaseModel):
    """Response from /project."""
    summary: ProjectionSummary
    display: dict[str, str]


class ScenarioApplyResponse(BaseModel):
    """Response from /scenario/apply."""
    state: EstimatorState
    derived: ScenarioDerived


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _build_catalog(services: list[ServiceDefinition] | None) -> ServiceCatalog:
    """Catalog from the request, or the defaults when none was sent."""
    if services is None:
        return ServiceCatalog.default()
    try:
        return ServiceCatalog(services=services)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _csv_response(text: str, filename: str) -> Response:
    return Response(
        content=text.encode("utf-8"),
        media_type=REPORT_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _display_totals(summary: ProjectionSummary, state: EstimatorState) -> dict[str, str]:
    """Formatted headline figures in the state's display currency."""
    fields = ("baseline_total", "projected_total", "cost_per_user_now", "cost_per_user_future")
    return {
        name: format_amount(getattr(summary, name), state.currency, state.fx_rate)
        for name in fields
    }


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/")
def root():
    """API root — welcome message and pointer to /defaults."""
    return {
        "name": "AWS Cost Estimator API",
        "version": "1.0",
        "start_here": "GET /defaults",
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/defaults")
def get_defaults() -> dict[str, Any]:
    """Default state, service catalog and scenario inputs as JSON."""
    return EstimatorConfig().model_dump()


@app.get("/defaults/services/{key}", response_model=ServiceDefinition)
def get_default_service(key: str):
    """One entry of the default catalog; 404 for an unknown key."""
    try:
        return ServiceCatalog.default().get(key)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"Unknown service key: {key}") from exc


@app.post("/project", response_model=ProjectResponse)
def project_costs(req: EstimateRequest):
    """Project every service at ``state.future_users`` and total it up."""
    catalog = _build_catalog(req.services)
    summary = summarize(catalog, req.state, req.selected_keys)
    return ProjectResponse(summary=summary, display=_display_totals(summary, req.state))


@app.post("/forecast", response_model=ForecastResult)
def forecast(req: EstimateRequest):
    """Month-by-month totals from today over ``state.months`` of compounding growth."""
    catalog = _build_catalog(req.services)
    return forecast_for_state(catalog, req.state)


@app.post("/scenario/derive", response_model=ScenarioDerived)
def scenario_derive(inputs: ScenarioInputs):
    """Derive monthly users, SMS and media volumes and a usage weight."""
    return derive_scenario(inputs)


@app.post("/scenario/apply", response_model=ScenarioApplyResponse)
def scenario_apply(req: ScenarioApplyRequest):
    """Derive from the scenario and overwrite ``future_users`` + ``usage_weight``."""
    derived = derive_scenario(req.scenario)
    return ScenarioApplyResponse(state=apply_scenario(req.state, derived), derived=derived)


@app.post("/export/csv")
def export_csv(req: ExportRequest):
    """Projection snapshot as a CSV attachment in the requested currency."""
    catalog = _build_catalog(req.services)
    summary = summarize(catalog, req.state, req.selected_keys)
    currency = req.currency or req.state.currency
    text = build_report(
        summary.rows, summary.baseline_total, summary.projected_total,
        currency, req.state.fx_rate,
    )
    filename = report_filename(currency)
    logger.info("Exporting %d rows as %s", len(summary.rows), filename)
    return _csv_response(text, filename)


@app.post("/export/forecast-csv")
def export_forecast_csv(req: ExportRequest):
    """Month-by-month forecast as a CSV attachment in the requested currency."""
    catalog = _build_catalog(req.services)
    result = forecast_for_state(catalog, req.state)
    currency = req.currency or req.state.currency
    text = build_forecast_report(result, currency, req.state.fx_rate)
    filename = report_filename(currency, FORECAST_REPORT_STEM)
    logger.info("Exporting %d forecast points as %s", len(result.points), filename)
    return _csv_response(text, filename)


@app.post("/reset")
def reset() -> dict[str, Any]:
    """Documented defaults for state and catalog."""
    return {
        "state": EstimatorState().model_dump(),
        "services": ServiceCatalog.default().model_dump()["services"],
    }


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(
        "cost_estimator.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
