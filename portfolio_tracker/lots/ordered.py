"""First-in-first-out and last-in-first-out lot selection."""

from decimal import Decimal

from ..models import Lot
from .base import LotSelectionStrategy


class FifoStrategy(LotSelectionStrategy):
    """Sell the oldest lots first."""

    def reduce(self, lots: list[Lot], quantity: Decimal) -> list[Lot]:
        return self._consume_in_order(lots, quantity)


class LifoStrategy(LotSelectionStrategy):
    """Sell the newest lots first."""

    def reduce(self, lots: list[Lot], quantity: Decimal) -> list[Lot]:
        kept = self._consume_in_order(list(reversed(lots)), quantity)
        kept.reverse()
        return kept
