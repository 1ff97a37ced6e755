"""Shared test fixtures — default catalog, a small hand-checkable catalog, states."""

from __future__ import annotations

import pytest

from cost_estimator.config import (
    EstimatorState,
    ScenarioInputs,
    ServiceCatalog,
    ServiceDefinition,
)
from cost_estimator.session import EstimatorSession


@pytest.fixture
def default_catalog() -> ServiceCatalog:
    return ServiceCatalog.default()


@pytest.fixture
def small_catalog() -> ServiceCatalog:
    """Three services: fully fixed, half elastic, traffic-sensitive fully elastic."""
    return ServiceCatalog(services=[
        ServiceDefinition(key="secrets", name="Secrets", baseline=10.0, elasticity=0.0),
        ServiceDefinition(key="rds", name="Database", baseline=100.0, elasticity=0.5),
        ServiceDefinition(key="dt", name="Data Transfer", baseline=50.0, elasticity=1.0),
    ])


@pytest.fixture
def state() -> EstimatorState:
    return EstimatorState()


@pytest.fixture
def medium_state() -> EstimatorState:
    """Doubling users with a neutral traffic boost."""
    return EstimatorState(current_users=1_000, future_users=2_000, usage_weight="medium")


@pytest.fixture
def dealer_scenario() -> ScenarioInputs:
    return ScenarioInputs(
        dealers=10,
        seats_per_dealer=12,
        inventory_per_dealer=150,
        new_listings_per_dealer=80,
        photos_per_listing=12,
        video_min_per_listing=0.5,
        visits_per_listing=50,
        lead_rate_pct=2,
        sms_per_lead=2,
    )


@pytest.fixture
def session() -> EstimatorSession:
    return EstimatorSession()
