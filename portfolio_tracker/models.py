"""Data models for the portfolio tracker."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Literal

ZERO = Decimal("0")


def as_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class Transaction:
    """A single BUY or SELL from the transaction log."""

    symbol: str
    action: Literal["BUY", "SELL"]
    quantity: Decimal
    price_per_share: Decimal
    total_cost: Decimal
    date: date
    exchange: str = ""
    name: str = ""
    id: str = ""

    def __str__(self) -> str:
        return f"{self.action} {self.quantity} {self.symbol} on {self.date.isoformat()}"


@dataclass(frozen=True)
class Quote:
    """Latest price and previous close for a symbol."""

    price: Decimal
    previous_close: Decimal = ZERO


@dataclass
class Lot:
    """Units opened by one BUY and still held."""

    quantity: Decimal
    cost: Decimal
    acquired: date

    @property
    def unit_cost(self) -> Decimal:
        if self.quantity == 0:
            return ZERO
        return self.cost / self.quantity


@dataclass(frozen=True)
class Holding:
    """Net position in a symbol, valued against the latest quote."""

    symbol: str
    name: str
    quantity: Decimal
    book_cost: Decimal
    average_cost: Decimal
    first_purchase_date: date
    exchange: str = ""
    current_price: Decimal = ZERO
    current_value: Decimal = ZERO
    gain: Decimal = ZERO
    gain_percent: Decimal = ZERO
    day_gain: Decimal = ZERO
    day_gain_percent: Decimal = ZERO
    annualized_gain_percent: Decimal = ZERO


@dataclass(frozen=True)
class PortfolioSummary:
    """Portfolio-wide totals."""

    total_value: Decimal = ZERO
    total_book_cost: Decimal = ZERO
    total_gain: Decimal = ZERO
    total_gain_percent: Decimal = ZERO
    total_day_gain: Decimal = ZERO
    total_day_gain_percent: Decimal = ZERO
    annualized_gain_percent: Decimal = ZERO


@dataclass(frozen=True)
class WatchlistItem:
    """A symbol tracked against the price it had when added."""

    symbol: str
    date_added: date
    price_when_added: Decimal
    name: str = ""
    exchange: str = ""
    current_price: Decimal = ZERO
    gain_since_added: Decimal = ZERO
    gain_since_added_percent: Decimal = ZERO
    day_gain: Decimal = ZERO
    day_gain_percent: Decimal = ZERO
    annualized_gain_percent: Decimal = ZERO


class OutcomeStatus(Enum):
    APPLIED = "applied"
    CLOSED = "closed"
    OVERSOLD = "oversold"
    UNMATCHED_SELL = "unmatched_sell"
    INVALID = "invalid"


@dataclass(frozen=True)
class TransactionOutcome:
    """What happened when a transaction was folded into the holdings."""

    transaction: Transaction
    status: OutcomeStatus
    reason: str = field(default="")

    @property
    def ok(self) -> bool:
        return self.status in (OutcomeStatus.APPLIED, OutcomeStatus.CLOSED)

    def __str__(self) -> str:
        text = f"{self.status.value}: {self.transaction}"
        return f"{text} ({self.reason})" if self.reason else text
