import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, Literal, Mapping, Optional

from .config import TrackerConfig, ValidationPolicy
from .lots import AverageCostStrategy, FifoStrategy, LifoStrategy, LotSelectionStrategy
from .models import (
    ZERO,
    Holding,
    Lot,
    OutcomeStatus,
    Quote,
    Transaction,
    TransactionOutcome,
)
from .returns import annualized_gain, days_between

logger = logging.getLogger(__name__)

LotMethodName = Literal["average", "fifo", "lifo"]

STRATEGIES: dict[str, type[LotSelectionStrategy]] = {
    "average": AverageCostStrategy,
    "fifo": FifoStrategy,
    "lifo": LifoStrategy,
}

_IRREGULAR = (OutcomeStatus.OVERSOLD, OutcomeStatus.UNMATCHED_SELL, OutcomeStatus.INVALID)


class TransactionRejectedError(ValueError):
    """Raised under the strict policy when a transaction cannot be applied cleanly."""

    def __init__(self, outcome: TransactionOutcome):
        self.outcome = outcome
        super().__init__(f"Transaction rejected: {outcome}")


def lot_strategy(method: str) -> LotSelectionStrategy:
    strategy_cls = STRATEGIES.get(method)
    if strategy_cls is None:
        raise ValueError(
            f"Unknown lot method: {method}. Valid methods are: {', '.join(STRATEGIES)}"
        )
    return strategy_cls()


@dataclass
class _OpenPosition:
    symbol: str
    name: str
    exchange: str
    average_cost: Decimal
    lots: list[Lot] = field(default_factory=list)

    @property
    def quantity(self) -> Decimal:
        return sum((lot.quantity for lot in self.lots), start=ZERO)

    @property
    def book_cost(self) -> Decimal:
        return sum((lot.cost for lot in self.lots), start=ZERO)

    @property
    def first_purchase_date(self) -> date:
        return min(lot.acquired for lot in self.lots)


class HoldingsBuilder:
    """Folds an ordered transaction log into open positions and values them.

    Transactions are applied strictly in the order given. Each call to
    ``apply`` returns a TransactionOutcome, and every outcome is kept in
    ``outcomes`` so callers can see what was skipped or cleared.
    """

    def __init__(
        self,
        method: Optional[LotMethodName] = None,
        policy: Optional[ValidationPolicy] = None,
        config: Optional[TrackerConfig] = None,
    ) -> None:
        self.config = config or TrackerConfig()
        self.strategy = lot_strategy(method or self.config.DEFAULT_LOT_METHOD)
        self.policy = policy or self.config.DEFAULT_POLICY
        self.outcomes: list[TransactionOutcome] = []
        self._positions: dict[str, _OpenPosition] = {}

    def apply(self, transaction: Transaction) -> TransactionOutcome:
        """Fold one transaction into the working positions.

        Raises:
            TransactionRejectedError: Under the strict policy, for an oversell,
                a SELL with no open position, or a non-positive quantity.
                Nothing is mutated in that case.
        """
        outcome = self._classify(transaction)

        if outcome.status in _IRREGULAR:
            if self.policy is ValidationPolicy.STRICT:
                raise TransactionRejectedError(outcome)
            logger.warning("Irregular transaction %s", outcome)

        if outcome.status not in (OutcomeStatus.INVALID, OutcomeStatus.UNMATCHED_SELL):
            if transaction.action == "BUY":
                self._buy(transaction)
            else:
                self._sell(transaction, outcome.status)

        self.outcomes.append(outcome)
        return outcome

    def apply_all(self, transactions: Iterable[Transaction]) -> list[TransactionOutcome]:
        return [self.apply(txn) for txn in transactions]

    def build(
        self,
        current_prices: Mapping[str, Quote],
        as_of: Optional[date] = None,
    ) -> list[Holding]:
        """Value every open position and return them, largest first.

        Args:
            current_prices: Latest quote by symbol. Positions without a quote
                keep zero live fields.
            as_of: Valuation date for the annualized gain (defaults to today).

        Returns:
            Holdings sorted by current value, descending.
        """
        as_of = as_of or date.today()
        holdings = [
            self._value(position, current_prices.get(symbol), as_of)
            for symbol, position in self._positions.items()
        ]
        return sorted(holdings, key=lambda h: h.current_value, reverse=True)

    def _classify(self, txn: Transaction) -> TransactionOutcome:
        if txn.action not in ("BUY", "SELL"):
            return TransactionOutcome(txn, OutcomeStatus.INVALID, f"unknown action {txn.action!r}")
        if txn.quantity <= 0:
            return TransactionOutcome(txn, OutcomeStatus.INVALID, "quantity must be positive")
        if txn.action == "BUY":
            return TransactionOutcome(txn, OutcomeStatus.APPLIED)

        position = self._positions.get(txn.symbol)
        if position is None:
            return TransactionOutcome(txn, OutcomeStatus.UNMATCHED_SELL, "no open position")

        held = position.quantity
        if txn.quantity > held:
            return TransactionOutcome(
                txn, OutcomeStatus.OVERSOLD, f"sold {txn.quantity}, held {held}"
            )
        if txn.quantity == held:
            return TransactionOutcome(txn, OutcomeStatus.CLOSED)
        return TransactionOutcome(txn, OutcomeStatus.APPLIED)

    def _buy(self, txn: Transaction) -> None:
        lot = Lot(quantity=txn.quantity, cost=txn.total_cost, acquired=txn.date)
        position = self._positions.get(txn.symbol)

        if position is None:
            self._positions[txn.symbol] = _OpenPosition(
                symbol=txn.symbol,
                name=txn.name,
                exchange=txn.exchange,
                average_cost=txn.price_per_share,
                lots=[lot],
            )
            return

        position.lots.append(lot)
        position.average_cost = position.book_cost / position.quantity

    def _sell(self, txn: Transaction, status: OutcomeStatus) -> None:
        if status in (OutcomeStatus.CLOSED, OutcomeStatus.OVERSOLD):
            del self._positions[txn.symbol]
            logger.debug("Closed position in %s", txn.symbol)
            return

        position = self._positions[txn.symbol]
        position.lots = self.strategy.reduce(position.lots, txn.quantity)
        position.average_cost = position.book_cost / position.quantity

    def _value(self, position: _OpenPosition, quote: Optional[Quote], as_of: date) -> Holding:
        quantity = position.quantity
        book_cost = position.book_cost
        first_purchase_date = position.first_purchase_date

        if quote is None:
            return Holding(
                symbol=position.symbol,
                name=position.name,
                quantity=quantity,
                book_cost=book_cost,
                average_cost=position.average_cost,
                first_purchase_date=first_purchase_date,
                exchange=position.exchange,
            )

        current_value = quantity * quote.price
        gain = current_value - book_cost
        previous_value = quantity * quote.previous_close
        day_gain = current_value - previous_value

        return Holding(
            symbol=position.symbol,
            name=position.name,
            quantity=quantity,
            book_cost=book_cost,
            average_cost=position.average_cost,
            first_purchase_date=first_purchase_date,
            exchange=position.exchange,
            current_price=quote.price,
            current_value=current_value,
            gain=gain,
            gain_percent=gain / book_cost * 100 if book_cost != 0 else ZERO,
            day_gain=day_gain,
            day_gain_percent=day_gain / previous_value * 100 if previous_value > 0 else ZERO,
            annualized_gain_percent=annualized_gain(
                book_cost,
                current_value,
                days_between(first_purchase_date, as_of),
                self.config,
            ),
        )


def build_holdings(
    transactions: Iterable[Transaction],
    current_prices: Mapping[str, Quote],
    method: Optional[LotMethodName] = None,
    policy: Optional[ValidationPolicy] = None,
    as_of: Optional[date] = None,
    config: Optional[TrackerConfig] = None,
) -> list[Holding]:
    """Rebuild current holdings from a chronological transaction log.

    Args:
        transactions: Transactions in the order they happened.
        current_prices: Latest quote by symbol.
        method: Lot-selection method for SELLs ("average", "fifo" or "lifo").
        policy: LENIENT skips irregular transactions with a warning;
            STRICT raises TransactionRejectedError.
        as_of: Valuation date (defaults to today).
        config: Day-count basis, loss floor and the method and policy used
            when those are not given.

    Returns:
        Open holdings sorted by current value, descending.
    """
    builder = HoldingsBuilder(method=method, policy=policy, config=config)
    builder.apply_all(transactions)
    return builder.build(current_prices, as_of=as_of)
