"""Portfolio-wide aggregation of valued holdings."""

from decimal import Decimal
from typing import Sequence

import numpy as np

from .models import ZERO, Holding, PortfolioSummary


def _weighted_annualized_gain(holdings: Sequence[Holding], total_value: Decimal) -> Decimal:
    """Average of each holding's annualized gain, weighted by its share of total value."""
    if total_value <= 0:
        return ZERO

    # dtype=object keeps Decimal precision and range.
    gains = np.array([h.annualized_gain_percent for h in holdings], dtype=object)
    weights = np.array([h.current_value for h in holdings], dtype=object)
    weighted = Decimal(np.average(gains, weights=weights))
    return weighted if weighted.is_finite() else ZERO


def summarize(holdings: Sequence[Holding]) -> PortfolioSummary:
    """Reduce valued holdings to portfolio totals.

    Args:
        holdings: Holdings as returned by build_holdings.

    Returns:
        PortfolioSummary. An empty sequence gives all zeros. Every percentage
        falls back to 0 when its denominator is not positive.
    """
    total_value = sum((h.current_value for h in holdings), start=ZERO)
    total_book_cost = sum((h.book_cost for h in holdings), start=ZERO)
    total_gain = sum((h.gain for h in holdings), start=ZERO)
    total_day_gain = sum((h.day_gain for h in holdings), start=ZERO)

    # Value at the previous close.
    opening_value = total_value - total_day_gain

    return PortfolioSummary(
        total_value=total_value,
        total_book_cost=total_book_cost,
        total_gain=total_gain,
        total_gain_percent=(
            total_gain / total_book_cost * 100 if total_book_cost > 0 else ZERO
        ),
        total_day_gain=total_day_gain,
        total_day_gain_percent=(
            total_day_gain / opening_value * 100 if opening_value > 0 else ZERO
        ),
        annualized_gain_percent=_weighted_annualized_gain(holdings, total_value),
    )
