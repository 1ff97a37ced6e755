"""YAML scenario files and lenient numeric entry.

A scenario file has up to three top-level sections, each optional::

    state:     {current_users: 50000, monthly_growth_pct: 10, ...}
    services:  [{key: rds, name: Amazon RDS, baseline: 879.10, elasticity: 0.6}, ...]
    scenario:  {dealers: 10, seats_per_dealer: 12, ...}

Missing sections fall back to the defaults.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from cost_estimator.config.estimator import EstimatorState
from cost_estimator.config.scenario import ScenarioInputs
from cost_estimator.config.service import ServiceCatalog

logger = logging.getLogger(__name__)


class EstimatorConfig(BaseModel):
    """Complete input bundle: state + catalog + scenario inputs."""

    state: EstimatorState = Field(default_factory=EstimatorState)
    catalog: ServiceCatalog = Field(default_factory=ServiceCatalog)
    scenario: ScenarioInputs = Field(default_factory=ScenarioInputs)


def config_from_dict(data: dict[str, Any] | None) -> EstimatorConfig:
    """Build an ``EstimatorConfig`` from parsed YAML/JSON data."""
    data = data or {}
    bundle: dict[str, Any] = {}
    if data.get("state") is not None:
        bundle["state"] = data["state"]
    if data.get("services") is not None:
        bundle["catalog"] = {"services": data["services"]}
    if data.get("scenario") is not None:
        bundle["scenario"] = data["scenario"]
    return EstimatorConfig(**bundle)


def load_config(path: str | Path) -> EstimatorConfig:
    """Load a scenario YAML file.  Raises ``pydantic.ValidationError`` on bad values."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    logger.debug("Loaded estimator config from %s", path)
    return config_from_dict(data)


# ═══════════════════════════════════════════════════════════════════════════
# Free-text numeric entry
# ═══════════════════════════════════════════════════════════════════════════

def coerce_number(raw: Any, default: float = 0.0) -> float:
    """Parse an operator-typed number; empty or garbage input gives ``default``."""
    if raw is None or isinstance(raw, bool):
        return default
    try:
        value = float(str(raw).strip().replace(",", ""))
    except ValueError:
        return default
    if math.isnan(value) or math.isinf(value):
        return default
    return value


def coerce_int(raw: Any, default: int = 0) -> int:
    """Integer variant of :func:`coerce_number`; fractional input truncates."""
    value = coerce_number(raw, float("nan"))
    if math.isnan(value):
        return default
    return int(value)
