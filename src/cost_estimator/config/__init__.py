"""Configuration models — estimator inputs."""

from cost_estimator.config.service import (
    DEFAULT_SERVICES,
    TRAFFIC_SENSITIVE_KEYS,
    ServiceCatalog,
    ServiceDefinition,
)
from cost_estimator.config.estimator import Currency, EstimatorState, UsageWeight
from cost_estimator.config.scenario import ScenarioInputs
from cost_estimator.config.loader import (
    EstimatorConfig,
    coerce_int,
    coerce_number,
    config_from_dict,
    load_config,
)

__all__ = [
    "DEFAULT_SERVICES",
    "TRAFFIC_SENSITIVE_KEYS",
    "ServiceDefinition",
    "ServiceCatalog",
    "Currency",
    "UsageWeight",
    "EstimatorState",
    "ScenarioInputs",
    "EstimatorConfig",
    "config_from_dict",
    "load_config",
    "coerce_number",
    "coerce_int",
]
