"""Abstract base class for lot-selection strategies."""

from abc import ABC, abstractmethod
from decimal import Decimal

from ..models import Lot


class LotSelectionStrategy(ABC):
    """Decides which open lots a SELL draws down."""

    @abstractmethod
    def reduce(self, lots: list[Lot], quantity: Decimal) -> list[Lot]:
        """Return the lots left open after selling part of a position.

        Args:
            lots: Open lots in the order they were bought.
            quantity: Units sold; strictly less than the units held.

        Returns:
            New list of open lots, still in purchase order. The input lots
            are not modified.
        """
        pass

    def _consume_in_order(self, lots: list[Lot], quantity: Decimal) -> list[Lot]:
        """Sell whole lots front to back, splitting the last one at its unit cost."""
        remaining = quantity
        kept: list[Lot] = []

        for lot in lots:
            if remaining <= 0:
                kept.append(Lot(lot.quantity, lot.cost, lot.acquired))
            elif lot.quantity <= remaining:
                remaining -= lot.quantity
            else:
                left = lot.quantity - remaining
                kept.append(Lot(left, lot.unit_cost * left, lot.acquired))
                remaining = Decimal("0")

        return kept
