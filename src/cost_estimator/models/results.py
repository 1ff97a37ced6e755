"""Result types — the contract between engine, exporter, session and API.

All amounts are USD.  Currency conversion is a display / export concern
and happens later, in ``cost_estimator.finance``.
"""

from __future__ import annotations

from pydantic import BaseModel

from cost_estimator.config.estimator import UsageWeight


# ═══════════════════════════════════════════════════════════════════════════
# Single evaluation point
# ═══════════════════════════════════════════════════════════════════════════

class ProjectedRow(BaseModel):
    """One service with its projected cost at a given scale + usage weight."""

    key: str
    name: str
    baseline: float
    elasticity: float
    notes: str = ""
    is_traffic_sensitive: bool = False

    traffic_boost: float = 1.0
    """Multiplier applied to the variable portion (1.0 unless traffic-sensitive)."""

    projected: float
    """baseline × (1 − e) + baseline × e × scale × boost."""


class ProjectionSummary(BaseModel):
    """Catalog-wide projection at the state's target user count."""

    rows: list[ProjectedRow]
    """Projected rows, in catalog order, limited to the selection if one is active."""

    scale_factor: float
    usage_weight: UsageWeight

    baseline_total: float
    """Sum of baselines over the whole catalog (unfiltered)."""

    projected_total: float
    """Sum of ``projected`` over the rows shown."""

    cost_per_user_now: float
    """baseline_total / max(1, current_users)."""

    cost_per_user_future: float
    """projected_total / max(1, future_users)."""

    selected_keys: list[str] = []
    """Active service filter; empty = all services."""


# ═══════════════════════════════════════════════════════════════════════════
# Forecast time series
# ═══════════════════════════════════════════════════════════════════════════

class ForecastPoint(BaseModel):
    """One month of the compounding-growth forecast."""

    month_index: int
    """0 = today (no growth applied yet)."""

    label: str
    """Chart label, ``M<month_index>``."""

    users: float
    """Unrounded user count; the value ``factor`` is computed from."""

    display_users: float
    """``users`` rounded when the state asks for rounded display, else identical."""

    factor: float
    """users / current_users (1 when either is ≤ 0)."""

    total: float
    """Projected monthly spend across the full catalog (USD)."""


class ForecastResult(BaseModel):
    """Month-by-month projection over the forecast horizon."""

    points: list[ForecastPoint]
    """``months + 1`` points, month 0 first."""

    current_users: float
    monthly_growth_pct: float
    months: int
    usage_weight: UsageWeight

    start_total: float
    end_total: float
    peak_total: float

    total_spend: float
    """Sum of every point's monthly total, month 0 included."""


# ═══════════════════════════════════════════════════════════════════════════
# Scenario derivation
# ═══════════════════════════════════════════════════════════════════════════

class ScenarioDerived(BaseModel):
    """Engine inputs derived from dealership activity."""

    staff_mau: float
    """dealers × seats_per_dealer."""

    leads_per_listing: float
    """visits_per_listing × lead_rate_pct / 100."""

    buyer_mau: float
    """dealers × inventory_per_dealer × leads_per_listing.
    Treats every lead-listing interaction as a unique buyer (approximation)."""

    derived_mau: int
    sms_per_month: int
    media_photos_per_month: int
    media_video_minutes_per_month: int
    suggested_weight: UsageWeight
