"""CSV report of a projection snapshot.

Layout (``n`` services → ``n + 4`` lines, no trailing newline)::

    Service,BaselineUSD,Elasticity,ProjectedUSD
    Amazon RDS,879.10,0.60,1406.56
    ...
    <blank>
    Baseline Total,, ,2598.92
    Projected Total,, ,3882.66

Money columns are converted to the export currency; every number has two
decimals.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from cost_estimator.config.estimator import Currency
from cost_estimator.finance.currency import DEFAULT_FX_RATE, to_display
from cost_estimator.models.results import ForecastResult, ProjectedRow

logger = logging.getLogger(__name__)

REPORT_MEDIA_TYPE = "text/csv; charset=utf-8"
REPORT_STEM = "aws-cost-projection"
FORECAST_REPORT_STEM = "aws-cost-forecast"


def _field(row: ProjectedRow | Mapping[str, Any], name: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(name)
    return getattr(row, name, None)


def report_filename(currency: Currency, stem: str = REPORT_STEM) -> str:
    """``<stem>-usd.csv`` or ``<stem>-inr.csv``."""
    return f"{stem}-{currency.lower()}.csv"


def build_report(
    rows: Iterable[ProjectedRow | Mapping[str, Any]],
    baseline_total: float,
    projected_total: float,
    currency: Currency = "USD",
    fx_rate: float | None = DEFAULT_FX_RATE,
) -> str:
    """Serialize projected rows and totals as CSV text in ``currency``.

    Rows may be ``ProjectedRow`` models or plain mappings with ``name``,
    ``baseline``, ``elasticity`` and ``projected`` (missing → 0).
    """
    def money(usd: float | None) -> str:
        return f"{to_display(usd or 0.0, currency, fx_rate):.2f}"

    lines = [",".join(["Service", f"Baseline{currency}", "Elasticity", f"Projected{currency}"])]
    for row in rows:
        lines.append(",".join([
            str(_field(row, "name")),
            money(_field(row, "baseline")),
            f"{_field(row, 'elasticity') or 0.0:.2f}",
            money(_field(row, "projected")),
        ]))
    lines.append("")
    lines.append(f"Baseline Total,, ,{money(baseline_total)}")
    lines.append(f"Projected Total,, ,{money(projected_total)}")

    logger.debug("Built %s report with %d lines", currency, len(lines))
    return "\n".join(lines)


def build_forecast_report(
    forecast: ForecastResult,
    currency: Currency = "USD",
    fx_rate: float | None = DEFAULT_FX_RATE,
) -> str:
    """Month-by-month forecast as CSV: ``Month,Users,Total<CUR>``."""
    lines = [f"Month,Users,Total{currency}"]
    for p in forecast.points:
        users = p.display_users
        users_text = str(int(users)) if float(users).is_integer() else f"{users:.2f}"
        lines.append(f"{p.label},{users_text},{to_display(p.total, currency, fx_rate):.2f}")
    return "\n".join(lines)
