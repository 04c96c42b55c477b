"""
Currency rounding and formatting helpers.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

CENT = Decimal("0.01")

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "CAD": "$",
}


def to_decimal(value: Union[Decimal, int, float, str]) -> Decimal:
    """Convert a numeric value to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_money(value: Union[Decimal, int, float, str]) -> Decimal:
    """Round half-up to cents. Only call this at display boundaries."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_price(value: Union[Decimal, int, float, str], currency: str = "USD") -> str:
    """Format an amount for display, e.g. ``$1,250.00``."""
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), "")
    amount = round_money(value)
    sign = "-" if amount < 0 else ""
    text = f"{abs(amount):,.2f}"
    if symbol:
        return f"{sign}{symbol}{text}"
    return f"{sign}{text} {currency.upper()}"
