"""Lot-selection strategies for reducing a position on SELL."""

from .base import LotSelectionStrategy
from .average import AverageCostStrategy
from .ordered import FifoStrategy, LifoStrategy

__all__ = [
    "LotSelectionStrategy",
    "AverageCostStrategy",
    "FifoStrategy",
    "LifoStrategy",
]
