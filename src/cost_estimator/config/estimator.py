"""Estimator state — the live session configuration.

Users today, target users, compounding growth, forecast horizon, usage
intensity and the display currency.  The engine reads this by value; the
session layer owns it and replaces it whole on every change.
"""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

UsageWeight = Literal["light", "medium", "heavy"]
Currency = Literal["USD", "INR"]


class EstimatorState(BaseModel):
    """User counts, growth and display settings for one estimate."""

    currency: Currency = Field(default="USD", description="Display / export currency")
    fx_rate: float = Field(
        default=85.0, ge=0,
        description="USD → INR conversion rate (display only). 0 renders with the default rate.",
    )
    current_users: int = Field(default=50_000, ge=0, description="Monthly active users today")
    future_users: int = Field(default=100_000, ge=0, description="Target user count for this estimate")
    monthly_growth_pct: float = Field(
        default=10.0, ge=-100.0,
        description="Compounded monthly user growth (%). Negative = decline. "
                    "-100 takes the user base to zero; lower values are rejected.",
    )
    months: int = Field(default=12, ge=1, description="Forecast horizon (months)")
    usage_weight: UsageWeight = Field(
        default="light",
        description="Per-user activity intensity; drives the traffic boost "
                    "on traffic-sensitive services.",
    )
    round_users: bool = Field(default=True, description="Round user counts in the forecast display")

    @property
    def scale_factor(self) -> float:
        """future_users / current_users, or 1 when either endpoint is ≤ 0."""
        if self.current_users > 0 and self.future_users > 0:
            return self.future_users / self.current_users
        return 1.0

    def with_scale(self, scale: float) -> "EstimatorState":
        """Return a copy whose target users sit at ``scale`` × today's users."""
        if not scale or scale <= 0:
            logger.warning("Non-positive scale %r; using 1.0", scale)
            scale = 1.0
        from cost_estimator.engine.projection import round_half_up

        base = self.current_users or 1
        return self.model_copy(update={"future_users": round_half_up(base * scale)})
