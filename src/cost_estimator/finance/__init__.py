"""Currency display and report export."""

from cost_estimator.finance.currency import (
    CURRENCY_SYMBOLS,
    DEFAULT_FX_RATE,
    effective_fx_rate,
    format_amount,
    to_display,
)
from cost_estimator.finance.report import (
    FORECAST_REPORT_STEM,
    REPORT_MEDIA_TYPE,
    build_forecast_report,
    build_report,
    report_filename,
)

__all__ = [
    "CURRENCY_SYMBOLS",
    "DEFAULT_FX_RATE",
    "effective_fx_rate",
    "format_amount",
    "to_display",
    "FORECAST_REPORT_STEM",
    "REPORT_MEDIA_TYPE",
    "build_report",
    "build_forecast_report",
    "report_filename",
]
