"""
Display Formatter - renders estimates as text.

Rounding happens here and only here; the engine keeps full precision, so
formatting the same estimate twice always gives the same text.
"""
import math

from ..engine.coercion import to_comparable_string
from ..engine.models import (
    PriceEstimate,
    DEFAULT_CURRENCY,
    MODE_DISABLED,
    MODE_RANGE,
    MODE_STARTING_FROM,
)

CURRENCY_SYMBOLS = {
    'AUD': '$',
    'USD': '$',
    'GBP': '£',
    'EUR': '€',
    'NZD': '$',
}

EN_DASH = '–'


def currency_symbol(currency: str) -> str:
    """Symbol for a currency code; unknown codes print as themselves."""
    return CURRENCY_SYMBOLS.get(currency) or currency


def format_amount(value: float, symbol: str) -> str:
    """Round half up to whole units and group thousands, e.g. $1,235."""
    if not math.isfinite(value):
        return f"{symbol}{to_comparable_string(value)}"
    return f"{symbol}{math.floor(value + 0.5):,}"


def for_customer(estimate: PriceEstimate, currency: str = DEFAULT_CURRENCY) -> str:
    """
    Customer-facing text for an estimate.

    Returns '' whenever the estimate must not be shown; callers should then
    render nothing at all. starting_from never shows the upper bound.
    """
    if estimate.mode == MODE_DISABLED or not estimate.show_to_customer:
        return ''

    symbol = currency_symbol(currency)
    min_text = format_amount(estimate.min, symbol)
    max_text = format_amount(estimate.max, symbol)

    if estimate.mode == MODE_RANGE:
        if estimate.min == estimate.max:
            return f"Estimated: {min_text}"
        return f"Estimated range: {min_text} {EN_DASH} {max_text}"

    elif estimate.mode == MODE_STARTING_FROM:
        return f"Starting from {min_text}"

    return ''


def for_internal(estimate: PriceEstimate, currency: str = DEFAULT_CURRENCY) -> str:
    """Business owner's view: always the numbers, whatever the mode."""
    symbol = currency_symbol(currency)
    min_text = format_amount(estimate.min, symbol)

    if estimate.min == estimate.max:
        return min_text
    return f"{min_text} {EN_DASH} {format_amount(estimate.max, symbol)}"
