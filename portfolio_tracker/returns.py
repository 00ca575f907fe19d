"""Annualized return (CAGR) calculations.

Both functions are pure: they take plain values and return Decimal or int,
with no I/O.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from .config import TrackerConfig
from .models import ZERO, as_decimal

_CONFIG = TrackerConfig()


def days_between(start: date, end: date) -> int:
    """Whole days separating two dates, regardless of their order."""
    return abs((end - start).days)


def annualized_gain(
    initial_value: Decimal | int | float,
    current_value: Decimal | int | float,
    elapsed_days: int,
    config: Optional[TrackerConfig] = None,
) -> Decimal:
    """Compound annual growth rate, as a percent, of a two-point return.

    Args:
        initial_value: Value at the start of the period (e.g. book cost).
        current_value: Value now.
        elapsed_days: Length of the period in days.
        config: Supplies the day-count basis and the loss floor.

    Returns:
        Annualized gain percent. 0 when no time has passed or the initial
        value is 0. A total loss (or worse) saturates at the loss floor
        instead of producing a non-real power.
    """
    config = config or _CONFIG
    initial = as_decimal(initial_value)
    current = as_decimal(current_value)

    if elapsed_days == 0 or initial == 0:
        return ZERO

    years = Decimal(elapsed_days) / config.DAYS_PER_YEAR
    total_return = (current - initial) / initial
    growth = 1 + total_return

    if growth <= 0:
        return config.LOSS_FLOOR_PERCENT

    return (growth ** (1 / years) - 1) * 100
