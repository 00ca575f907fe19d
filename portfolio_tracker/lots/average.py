"""Weighted-average cost basis."""

from decimal import Decimal

from ..models import Lot
from .base import LotSelectionStrategy


class AverageCostStrategy(LotSelectionStrategy):
    """Reduce every lot by the fraction of the position sold.

    Book cost drops by ``book_cost * sold / held``, so the average cost per
    unit is unchanged by a sale and no lot is ever closed early. The earliest
    purchase date therefore survives any partial sale.
    """

    def reduce(self, lots: list[Lot], quantity: Decimal) -> list[Lot]:
        if not lots:
            return []

        held = sum((lot.quantity for lot in lots), start=Decimal("0"))
        book_cost = sum((lot.cost for lot in lots), start=Decimal("0"))
        sell_ratio = quantity / held

        kept = [
            Lot(
                quantity=lot.quantity - lot.quantity * sell_ratio,
                cost=lot.cost - lot.cost * sell_ratio,
                acquired=lot.acquired,
            )
            for lot in lots[:-1]
        ]

        # Last lot absorbs rounding so the totals stay exact.
        kept_quantity = sum((lot.quantity for lot in kept), start=Decimal("0"))
        kept_cost = sum((lot.cost for lot in kept), start=Decimal("0"))
        kept.append(
            Lot(
                quantity=held - quantity - kept_quantity,
                cost=book_cost - book_cost * sell_ratio - kept_cost,
                acquired=lots[-1].acquired,
            )
        )
        return kept
