"""Service catalog — the billable line items the projection runs over.

Each ``ServiceDefinition`` carries its own baseline (observed monthly USD
spend) and elasticity (share of that spend that follows the user count).
Traffic sensitivity is resolved once, when the definition is built, from
the fixed ``TRAFFIC_SENSITIVE_KEYS`` set.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, Field, model_validator


TRAFFIC_SENSITIVE_KEYS: frozenset[str] = frozenset({"dt", "cloudwatch", "alb", "apigw"})
"""Services whose variable cost also follows per-user activity (usage weight)."""


class ServiceDefinition(BaseModel):
    """One billable AWS line item."""

    key: str = Field(min_length=1, description="Stable short identifier (map key)")
    name: str = Field(description="Display label")
    baseline: float = Field(default=0.0, ge=0, description="Current observed monthly cost (USD)")
    elasticity: float = Field(
        default=0.0, ge=0, le=1.0,
        description="Share of the cost that scales with users. "
                    "0 = fully fixed, 1 = grows linearly with the scale factor.",
    )
    notes: str = Field(default="", description="Free-text description, display only")
    is_traffic_sensitive: bool = Field(
        default=False,
        description="Whether the usage-weight multiplier applies. "
                    "Resolved from TRAFFIC_SENSITIVE_KEYS when not given.",
    )

    @model_validator(mode="before")
    @classmethod
    def _resolve_traffic_sensitivity(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("is_traffic_sensitive") is None:
            data = dict(data)
            data["is_traffic_sensitive"] = data.get("key") in TRAFFIC_SENSITIVE_KEYS
        return data


# ═══════════════════════════════════════════════════════════════════════════
# Default catalog (observed monthly bill, USD)
# ═══════════════════════════════════════════════════════════════════════════

DEFAULT_SERVICES: tuple[dict[str, Any], ...] = (
    {"key": "rds", "name": "Amazon RDS", "baseline": 879.10, "elasticity": 0.6,
     "notes": "Amazon RDS: managed databases (like PostgreSQL/MySQL). Cost = instance size + storage + backups."},
    {"key": "savings", "name": "Savings Plans (EC2)", "baseline": 853.97, "elasticity": 0.2,
     "notes": "Discount program: mostly fixed monthly commitment."},
    {"key": "ec2", "name": "Amazon EC2", "baseline": 411.22, "elasticity": 0.9,
     "notes": "Amazon EC2: virtual servers that run your application code."},
    {"key": "ebs", "name": "Amazon EBS", "baseline": 171.31, "elasticity": 0.5,
     "notes": "Amazon EBS: disk storage attached to EC2 servers (and snapshots)."},
    {"key": "vpc", "name": "Amazon VPC", "baseline": 99.80, "elasticity": 0.2,
     "notes": "Amazon VPC: your private network in AWS (IPs, NAT gateways, etc.)."},
    {"key": "dt", "name": "Data Transfer / Bandwidth", "baseline": 50.87, "elasticity": 1.0,
     "notes": "Data Transfer: bandwidth out to the internet or between services; scales with traffic."},
    {"key": "cloudwatch", "name": "Amazon CloudWatch", "baseline": 49.71, "elasticity": 0.9,
     "notes": "CloudWatch: metrics, dashboards, and log storage for monitoring."},
    {"key": "alb", "name": "Elastic Load Balancer (ALB)", "baseline": 36.35, "elasticity": 0.8,
     "notes": "Application Load Balancer: splits traffic across servers; cost grows with connections/bandwidth/rules."},
    {"key": "sms", "name": "End User Messaging (SMS)", "baseline": 29.67, "elasticity": 1.0,
     "notes": "End-user SMS (e.g., OTP): more sign-ins = more texts."},
    {"key": "waf", "name": "AWS WAF", "baseline": 8.00, "elasticity": 0.3,
     "notes": "AWS WAF: web firewall to block bad traffic."},
    {"key": "s3", "name": "Amazon S3", "baseline": 4.72, "elasticity": 0.5,
     "notes": "Amazon S3: object storage (files, images, backups)."},
    {"key": "kms", "name": "AWS KMS", "baseline": 2.00, "elasticity": 0.2,
     "notes": "AWS KMS: encryption keys used by other services."},
    {"key": "ecr", "name": "Amazon ECR", "baseline": 0.78, "elasticity": 0.1,
     "notes": "Amazon ECR: Docker image storage for your deployments."},
    {"key": "ce", "name": "AWS Cost Explorer", "baseline": 0.51, "elasticity": 0.0,
     "notes": "AWS Cost Explorer: small fee to analyze billing data."},
    {"key": "r53", "name": "Amazon Route 53", "baseline": 0.50, "elasticity": 0.1,
     "notes": "Amazon Route 53: DNS and health checks for your domains."},
    {"key": "secrets", "name": "AWS Secrets Manager", "baseline": 0.40, "elasticity": 0.0,
     "notes": "AWS Secrets Manager: stores API keys/passwords securely."},
    {"key": "apigw", "name": "Amazon API Gateway", "baseline": 0.01, "elasticity": 0.7,
     "notes": "Amazon API Gateway: front door for serverless APIs; charged per request."},
)


class ServiceCatalog(BaseModel):
    """Ordered, key-unique collection of service definitions.

    Edits never mutate in place: ``update`` and ``reset`` hand back a new
    catalog, so a reader holding the old one always sees a whole snapshot.
    """

    services: list[ServiceDefinition] = Field(
        default_factory=lambda: [ServiceDefinition(**s) for s in DEFAULT_SERVICES],
    )

    @model_validator(mode="after")
    def _keys_unique(self) -> "ServiceCatalog":
        seen: set[str] = set()
        for s in self.services:
            if s.key in seen:
                raise ValueError(f"duplicate service key: {s.key!r}")
            seen.add(s.key)
        return self

    @classmethod
    def default(cls) -> "ServiceCatalog":
        return cls()

    def __len__(self) -> int:
        return len(self.services)

    def __iter__(self) -> Iterator[ServiceDefinition]:  # type: ignore[override]
        return iter(self.services)

    def keys(self) -> list[str]:
        return [s.key for s in self.services]

    def get(self, key: str) -> ServiceDefinition:
        for s in self.services:
            if s.key == key:
                return s
        raise KeyError(key)

    def baseline_total(self) -> float:
        return sum(s.baseline for s in self.services)

    def update(
        self,
        key: str,
        baseline: float | None = None,
        elasticity: float | None = None,
    ) -> "ServiceCatalog":
        """Return a new catalog with one entry's baseline/elasticity replaced.

        Values are validated against the ``ServiceDefinition`` constraints;
        raises ``KeyError`` for an unknown key.
        """
        self.get(key)
        changes: dict[str, float] = {}
        if baseline is not None:
            changes["baseline"] = baseline
        if elasticity is not None:
            changes["elasticity"] = elasticity
        services = [
            ServiceDefinition(**{**s.model_dump(), **changes}) if s.key == key else s.model_copy()
            for s in self.services
        ]
        return ServiceCatalog(services=services)

    def reset(self) -> "ServiceCatalog":
        return ServiceCatalog.default()
