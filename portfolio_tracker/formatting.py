"""Display helpers for money and percentages."""

from decimal import Decimal
from typing import Literal

GainClass = Literal["positive", "negative", "neutral"]


def format_currency(value: Decimal | int | float, symbol: str = "£") -> str:
    """Two-decimal money with thousands separators, e.g. ``-£1,234.50``."""
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_percent(value: Decimal | int | float) -> str:
    """Signed two-decimal percentage, e.g. ``+9.09%``."""
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.2f}%"


def gain_class(value: Decimal | int | float) -> GainClass:
    if value > 0:
        return "positive"
    if value < 0:
        return "negative"
    return "neutral"
