"""USD → display currency conversion and money formatting.

Every engine amount is USD.  INR is a display view: amount × fx_rate,
with a non-positive rate replaced by ``DEFAULT_FX_RATE`` so a bad rate
never zeroes out or flips the numbers.
"""

from __future__ import annotations

import logging

from cost_estimator.config.estimator import Currency

logger = logging.getLogger(__name__)

DEFAULT_FX_RATE = 85.0
CURRENCY_SYMBOLS: dict[str, str] = {"USD": "$", "INR": "₹"}


def effective_fx_rate(fx_rate: float | None) -> float:
    """``fx_rate`` if positive, else ``DEFAULT_FX_RATE``."""
    if fx_rate is not None and fx_rate > 0:
        return float(fx_rate)
    logger.warning("Invalid fx rate %r; using default %.2f", fx_rate, DEFAULT_FX_RATE)
    return DEFAULT_FX_RATE


def to_display(amount_usd: float, currency: Currency, fx_rate: float | None = DEFAULT_FX_RATE) -> float:
    """Convert a USD amount into ``currency``."""
    if currency == "INR":
        return amount_usd * effective_fx_rate(fx_rate)
    return amount_usd


def format_amount(
    amount_usd: float,
    currency: Currency = "USD",
    fx_rate: float | None = DEFAULT_FX_RATE,
    digits: int = 2,
) -> str:
    """``$1,234.50`` / ``₹8,500.00`` — converted, grouped, ``digits`` decimals."""
    local = to_display(amount_usd, currency, fx_rate)
    symbol = CURRENCY_SYMBOLS.get(currency, "$")
    digits = max(int(digits), 0)
    sign = "-" if local < 0 else ""
    return f"{sign}{symbol}{abs(local):,.{digits}f}"
