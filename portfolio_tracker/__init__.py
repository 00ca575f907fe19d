"""
Portfolio Tracker - Rebuilds holdings and performance from a transaction log.

Exports:
    Transaction: Dataclass for a BUY or SELL from the transaction log
    Quote: Dataclass holding a symbol's latest price and previous close
    Holding: Dataclass for a valued net position
    PortfolioSummary: Dataclass with portfolio-wide totals
    WatchlistItem: Dataclass for a tracked-but-unowned symbol
    TransactionOutcome: Result of folding one transaction into the holdings
    HoldingsBuilder: Folds transactions into positions and values them
    build_holdings: One-shot transaction log -> holdings
    summarize: Holdings -> PortfolioSummary
    enrich: Values watchlist items against quotes
    annualized_gain: Compound annual growth rate of a two-point return
    LotSelectionStrategy: Abstract base class for SELL lot selection
    AverageCostStrategy: Weighted-average cost basis (default)
    FifoStrategy: Oldest lots sold first
    LifoStrategy: Newest lots sold first
"""

from .config import TrackerConfig, ValidationPolicy
from .formatting import format_currency, format_percent, gain_class
from .holdings import HoldingsBuilder, TransactionRejectedError, build_holdings
from .lots import AverageCostStrategy, FifoStrategy, LifoStrategy, LotSelectionStrategy
from .models import (
    Holding,
    Lot,
    OutcomeStatus,
    PortfolioSummary,
    Quote,
    Transaction,
    TransactionOutcome,
    WatchlistItem,
)
from .portfolio import summarize
from .returns import annualized_gain, days_between
from .watchlist import enrich

__all__ = [
    "TrackerConfig",
    "ValidationPolicy",
    "format_currency",
    "format_percent",
    "gain_class",
    "HoldingsBuilder",
    "TransactionRejectedError",
    "build_holdings",
    "AverageCostStrategy",
    "FifoStrategy",
    "LifoStrategy",
    "LotSelectionStrategy",
    "Holding",
    "Lot",
    "OutcomeStatus",
    "PortfolioSummary",
    "Quote",
    "Transaction",
    "TransactionOutcome",
    "WatchlistItem",
    "summarize",
    "annualized_gain",
    "days_between",
    "enrich",
]
