"""Configuration constants for the portfolio tracker."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class ValidationPolicy(Enum):
    """How the holdings builder treats irregular transactions."""

    LENIENT = "lenient"
    STRICT = "strict"


@dataclass(frozen=True)
class TrackerConfig:
    """Configuration for holdings valuation and reporting."""

    DAYS_PER_YEAR: Decimal = Decimal("365.25")
    LOSS_FLOOR_PERCENT: Decimal = Decimal("-100")
    CURRENCY_SYMBOL: str = "£"
    DEFAULT_LOT_METHOD: str = "average"
    DEFAULT_POLICY: ValidationPolicy = ValidationPolicy.LENIENT
