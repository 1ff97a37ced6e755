"""Elasticity-based cost projection.

Every service cost splits into a fixed part and a variable part::

    projected = baseline × (1 − elasticity)                       # fixed
              + baseline × elasticity × scale_factor × boost      # variable

``boost`` is the usage-weight multiplier for traffic-sensitive services
and 1 for everything else.  Pure arithmetic; works on floats and
broadcasts over NumPy arrays.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import TypeVar

import numpy as np

from cost_estimator.config.estimator import EstimatorState, UsageWeight
from cost_estimator.config.service import ServiceCatalog, ServiceDefinition
from cost_estimator.models.results import ProjectedRow, ProjectionSummary

logger = logging.getLogger(__name__)

Number = TypeVar("Number", float, np.ndarray)

TRAFFIC_BOOST: dict[str, float] = {"light": 0.8, "medium": 1.0, "heavy": 1.4}
"""Usage weight → multiplier on the variable cost of traffic-sensitive services."""


def project(
    baseline: Number,
    elasticity: Number,
    scale_factor: Number,
    traffic_boost: Number = 1.0,
) -> Number:
    """Projected monthly cost of one service (or an array of services).

    elasticity = 0 returns ``baseline`` unchanged; elasticity = 1 returns
    ``baseline × scale_factor × traffic_boost``.  Inputs are not range
    checked here.
    """
    fixed = baseline * (1 - elasticity)
    variable = baseline * elasticity * scale_factor * traffic_boost
    return fixed + variable


def round_half_up(value: float) -> int:
    """Round halves up (2.5 → 3, where ``round`` gives 2)."""
    return int(math.floor(value + 0.5))


def traffic_boost(service: ServiceDefinition, usage_weight: UsageWeight) -> float:
    """Boost for ``service`` under ``usage_weight`` (1.0 if not traffic-sensitive)."""
    if not service.is_traffic_sensitive:
        return 1.0
    return TRAFFIC_BOOST.get(usage_weight, 1.0)


def scale_factor(current_users: float, future_users: float) -> float:
    """future / current, falling back to 1 when either side is ≤ 0."""
    if current_users > 0 and future_users > 0:
        return future_users / current_users
    logger.debug(
        "Degenerate user counts (current=%r, future=%r); scale factor = 1",
        current_users, future_users,
    )
    return 1.0


def catalog_arrays(
    catalog: ServiceCatalog,
    usage_weight: UsageWeight,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Baselines, elasticities and boosts as aligned float arrays."""
    services = catalog.services
    baselines = np.array([s.baseline for s in services], dtype=np.float64)
    elasticities = np.array([s.elasticity for s in services], dtype=np.float64)
    boosts = np.array([traffic_boost(s, usage_weight) for s in services], dtype=np.float64)
    return baselines, elasticities, boosts


def project_catalog(
    catalog: ServiceCatalog,
    factor: float,
    usage_weight: UsageWeight,
) -> list[ProjectedRow]:
    """Project every service at ``factor``, in catalog order."""
    rows: list[ProjectedRow] = []
    for s in catalog.services:
        boost = traffic_boost(s, usage_weight)
        rows.append(ProjectedRow(
            key=s.key,
            name=s.name,
            baseline=s.baseline,
            elasticity=s.elasticity,
            notes=s.notes,
            is_traffic_sensitive=s.is_traffic_sensitive,
            traffic_boost=boost,
            projected=project(s.baseline, s.elasticity, factor, boost),
        ))
    return rows


def summarize(
    catalog: ServiceCatalog,
    state: EstimatorState,
    selected_keys: Iterable[str] | None = None,
) -> ProjectionSummary:
    """Project the catalog at the state's target users and total it up.

    ``selected_keys`` narrows the rows (and the projected total) to a subset
    of services; ``None`` or empty means no filter.  The baseline total is
    always taken over the full catalog.
    """
    factor = scale_factor(state.current_users, state.future_users)
    rows = project_catalog(catalog, factor, state.usage_weight)

    requested = list(dict.fromkeys(selected_keys or []))
    known = set(catalog.keys())
    unknown = [k for k in requested if k not in known]
    if unknown:
        logger.warning("Ignoring unknown service keys in selection: %s", unknown)
    selection = [k for k in requested if k in known]
    if selection:
        wanted = set(selection)
        rows = [r for r in rows if r.key in wanted]

    baseline_total = catalog.baseline_total()
    projected_total = sum(r.projected for r in rows)

    return ProjectionSummary(
        rows=rows,
        scale_factor=factor,
        usage_weight=state.usage_weight,
        baseline_total=baseline_total,
        projected_total=projected_total,
        cost_per_user_now=baseline_total / max(1, state.current_users),
        cost_per_user_future=projected_total / max(1, state.future_users),
        selected_keys=selection,
    )
