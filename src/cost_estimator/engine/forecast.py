"""Compounding-growth forecast — month-by-month total spend.

Month 0 is today.  After each month the user base compounds:

    users[m + 1] = users[m] × (1 + monthly_growth_pct / 100)

and each month's total is the catalog projected at
``factor = users[m] / current_users``.  Users are floored at zero, so a
steep decline bottoms out instead of flipping sign; at zero users the
factor falls back to 1 like any other degenerate user count.
"""

from __future__ import annotations

import logging

import numpy as np

from cost_estimator.config.estimator import EstimatorState, UsageWeight
from cost_estimator.config.service import ServiceCatalog
from cost_estimator.engine.projection import catalog_arrays, project, round_half_up
from cost_estimator.models.results import ForecastPoint, ForecastResult

logger = logging.getLogger(__name__)


def simulate(
    catalog: ServiceCatalog,
    current_users: float,
    monthly_growth_pct: float,
    months: int,
    usage_weight: UsageWeight,
    round_users: bool = False,
) -> ForecastResult:
    """Run the forecast over ``months`` steps, returning ``months + 1`` points.

    ``round_users`` only affects ``ForecastPoint.display_users``; the factor
    and total always use the unrounded user count.
    """
    baselines, elasticities, boosts = catalog_arrays(catalog, usage_weight)
    growth = 1.0 + monthly_growth_pct / 100.0
    horizon = max(int(months), 0)

    points: list[ForecastPoint] = []
    users = float(current_users)

    for m in range(horizon + 1):
        if users > 0 and current_users > 0:
            factor = users / current_users
        else:
            factor = 1.0

        total = float(np.sum(project(baselines, elasticities, factor, boosts)))

        points.append(ForecastPoint(
            month_index=m,
            label=f"M{m}",
            users=users,
            display_users=float(round_half_up(users)) if round_users else users,
            factor=factor,
            total=total,
        ))

        users = users * growth
        if users < 0:
            logger.warning("Users went negative at month %d (growth %.2f%%); flooring at 0", m + 1, monthly_growth_pct)
            users = 0.0

    totals = [p.total for p in points]
    logger.debug("Forecast: %d points, %s users start, %.2f%%/month", len(points), current_users, monthly_growth_pct)

    return ForecastResult(
        points=points,
        current_users=float(current_users),
        monthly_growth_pct=monthly_growth_pct,
        months=horizon,
        usage_weight=usage_weight,
        start_total=totals[0],
        end_total=totals[-1],
        peak_total=max(totals),
        total_spend=sum(totals),
    )


def forecast_for_state(catalog: ServiceCatalog, state: EstimatorState) -> ForecastResult:
    """Forecast using the growth, horizon and display settings in ``state``."""
    return simulate(
        catalog,
        state.current_users,
        state.monthly_growth_pct,
        state.months,
        state.usage_weight,
        round_users=state.round_users,
    )
