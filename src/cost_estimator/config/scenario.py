"""Dealership scenario inputs.

Business-domain counts the operator knows (dealers, listings, visits,
leads).  Scenario derivation turns them into a user count and a usage
weight; nothing here is bound to the estimator state.
"""

from pydantic import BaseModel, Field


class ScenarioInputs(BaseModel):
    """Monthly activity of a dealership marketplace."""

    dealers: float = Field(default=10, ge=0, description="Number of dealerships")
    seats_per_dealer: float = Field(default=12, ge=0, description="Staff logins per dealership")
    inventory_per_dealer: float = Field(default=150, ge=0, description="Live listings per dealership")
    new_listings_per_dealer: float = Field(default=80, ge=0, description="New listings per dealer per month")
    photos_per_listing: float = Field(default=12, ge=0, description="Photos uploaded per new listing")
    video_min_per_listing: float = Field(default=0.5, ge=0, description="Video minutes per new listing")
    visits_per_listing: float = Field(default=50, ge=0, description="Buyer visits per listing per month")
    lead_rate_pct: float = Field(default=2, ge=0, description="Visits that turn into a lead (%)")
    sms_per_lead: float = Field(default=2, ge=0, description="SMS sent per lead (OTP, follow-up)")
