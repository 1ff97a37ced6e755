"""Scenario derivation — dealership activity → estimator inputs.

Pure arithmetic over ``ScenarioInputs``:

    staff_mau         = dealers × seats_per_dealer
    leads_per_listing = visits_per_listing × lead_rate_pct / 100
    buyer_mau         = dealers × inventory_per_dealer × leads_per_listing
    derived_mau       = round(staff_mau + buyer_mau)

Applying the result to an ``EstimatorState`` is a separate, explicit step
(:func:`apply_scenario`).
"""

from __future__ import annotations

import logging

from cost_estimator.config.estimator import EstimatorState, UsageWeight
from cost_estimator.config.scenario import ScenarioInputs
from cost_estimator.engine.projection import round_half_up
from cost_estimator.models.results import ScenarioDerived

logger = logging.getLogger(__name__)

# Heavy if any threshold is reached; light only if all are under.
HEAVY_PHOTOS_PER_LISTING = 15
HEAVY_VIDEO_MIN_PER_LISTING = 1
HEAVY_VISITS_PER_LISTING = 100
LIGHT_MAX_PHOTOS_PER_LISTING = 6
LIGHT_MAX_VISITS_PER_LISTING = 30


def suggest_usage_weight(inputs: ScenarioInputs) -> UsageWeight:
    """Classify media and traffic intensity.  Heavy is checked first."""
    if (
        inputs.photos_per_listing >= HEAVY_PHOTOS_PER_LISTING
        or inputs.video_min_per_listing >= HEAVY_VIDEO_MIN_PER_LISTING
        or inputs.visits_per_listing >= HEAVY_VISITS_PER_LISTING
    ):
        return "heavy"
    if (
        inputs.photos_per_listing <= LIGHT_MAX_PHOTOS_PER_LISTING
        and inputs.video_min_per_listing == 0
        and inputs.visits_per_listing < LIGHT_MAX_VISITS_PER_LISTING
    ):
        return "light"
    return "medium"


def derive_scenario(inputs: ScenarioInputs) -> ScenarioDerived:
    """Derive user count, SMS/media volumes and a usage weight."""
    staff_mau = inputs.dealers * inputs.seats_per_dealer
    leads_per_listing = inputs.visits_per_listing * (inputs.lead_rate_pct / 100)
    buyer_mau = inputs.dealers * inputs.inventory_per_dealer * leads_per_listing

    listings_per_month = inputs.dealers * inputs.new_listings_per_dealer

    return ScenarioDerived(
        staff_mau=staff_mau,
        leads_per_listing=leads_per_listing,
        buyer_mau=buyer_mau,
        derived_mau=round_half_up(staff_mau + buyer_mau),
        sms_per_month=round_half_up(buyer_mau * inputs.sms_per_lead),
        media_photos_per_month=round_half_up(listings_per_month * inputs.photos_per_listing),
        media_video_minutes_per_month=round_half_up(listings_per_month * inputs.video_min_per_listing),
        suggested_weight=suggest_usage_weight(inputs),
    )


def apply_scenario(state: EstimatorState, derived: ScenarioDerived) -> EstimatorState:
    """Copy the derived user count and usage weight into a new state.

    A derived count of zero leaves ``future_users`` as it was.
    """
    future_users = derived.derived_mau or state.future_users
    if not derived.derived_mau:
        logger.info("Scenario derived 0 users; keeping future_users=%d", state.future_users)
    return state.model_copy(update={
        "future_users": future_users,
        "usage_weight": derived.suggested_weight,
    })
