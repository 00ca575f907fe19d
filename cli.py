#!/usr/bin/env python3
import argparse
import logging
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Sequence

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from portfolio_tracker import (
    HoldingsBuilder,
    Holding,
    PortfolioSummary,
    TrackerConfig,
    TransactionOutcome,
    TransactionRejectedError,
    ValidationPolicy,
    WatchlistItem,
    enrich,
    format_currency,
    format_percent,
    gain_class,
    summarize,
)
from portfolio_tracker.holdings import STRATEGIES
from portfolio_tracker.loaders import load_snapshot

logger = logging.getLogger(__name__)
console = Console()

DEFAULT_SNAPSHOT = str(Path(__file__).resolve().parent / "data" / "sample_snapshot.json")
QUANTITY_STEP = Decimal("0.0001")

GAIN_STYLES: dict[str, str] = {
    "positive": "green",
    "negative": "red",
    "neutral": "dim",
}

METHOD_LABELS: dict[str, str] = {
    "average": "Average cost",
    "fifo": "First in, first out",
    "lifo": "Last in, first out",
}


def _money(value: Decimal, config: TrackerConfig) -> str:
    return format_currency(value, config.CURRENCY_SYMBOL)


def _quantity(value: Decimal) -> str:
    return f"{value.quantize(QUANTITY_STEP).normalize():,f}"


def _gain_text(text: str, value: Decimal) -> Text:
    return Text(text, style=GAIN_STYLES[gain_class(value)])


def holdings_table(holdings: Sequence[Holding], config: TrackerConfig, title: str) -> Table:
    """Build a Rich table of valued holdings."""
    t = Table(title=title, box=box.ROUNDED, title_style="bold white")
    t.add_column("Symbol", style="cyan", no_wrap=True)
    t.add_column("Name", style="dim")
    t.add_column("Qty", justify="right")
    t.add_column("Avg cost", justify="right")
    t.add_column("Price", justify="right")
    t.add_column("Value", justify="right")
    t.add_column("Gain", justify="right")
    t.add_column("Day", justify="right")
    t.add_column("Annualized", justify="right")

    for h in holdings:
        t.add_row(
            h.symbol,
            h.name,
            _quantity(h.quantity),
            _money(h.average_cost, config),
            _money(h.current_price, config),
            _money(h.current_value, config),
            _gain_text(
                f"{_money(h.gain, config)} ({format_percent(h.gain_percent)})", h.gain
            ),
            _gain_text(format_percent(h.day_gain_percent), h.day_gain),
            _gain_text(format_percent(h.annualized_gain_percent), h.annualized_gain_percent),
        )
    return t


def summary_panel(summary: PortfolioSummary, config: TrackerConfig) -> Panel:
    """Build a Rich panel with the portfolio totals."""
    t = Table.grid(padding=(0, 2))
    t.add_column(style="bold")
    t.add_column(justify="right")

    t.add_row("Value", _money(summary.total_value, config))
    t.add_row("Book cost", _money(summary.total_book_cost, config))
    t.add_row(
        "Gain",
        _gain_text(
            f"{_money(summary.total_gain, config)} ({format_percent(summary.total_gain_percent)})",
            summary.total_gain,
        ),
    )
    t.add_row(
        "Day",
        _gain_text(
            f"{_money(summary.total_day_gain, config)} "
            f"({format_percent(summary.total_day_gain_percent)})",
            summary.total_day_gain,
        ),
    )
    t.add_row(
        "Annualized",
        _gain_text(
            format_percent(summary.annualized_gain_percent), summary.annualized_gain_percent
        ),
    )
    return Panel(t, title="Portfolio", box=box.ROUNDED, expand=False)


def watchlist_table(items: Sequence[WatchlistItem], config: TrackerConfig) -> Table:
    """Build a Rich table of watchlist items and their gain since added."""
    t = Table(title="Watchlist", box=box.ROUNDED, title_style="bold white")
    t.add_column("Symbol", style="cyan", no_wrap=True)
    t.add_column("Added", style="dim")
    t.add_column("Then", justify="right")
    t.add_column("Now", justify="right")
    t.add_column("Since added", justify="right")
    t.add_column("Day", justify="right")
    t.add_column("Annualized", justify="right")

    for item in items:
        t.add_row(
            item.symbol,
            item.date_added.isoformat(),
            _money(item.price_when_added, config),
            _money(item.current_price, config),
            _gain_text(format_percent(item.gain_since_added_percent), item.gain_since_added),
            _gain_text(format_percent(item.day_gain_percent), item.day_gain),
            _gain_text(
                format_percent(item.annualized_gain_percent), item.annualized_gain_percent
            ),
        )
    return t


def outcomes_table(outcomes: Sequence[TransactionOutcome]) -> Table:
    """Build a Rich table listing transactions that were skipped or cleared a position."""
    t = Table(title="Irregular transactions", box=box.ROUNDED, title_style="bold yellow")
    t.add_column("Date", style="dim")
    t.add_column("Transaction")
    t.add_column("Status", style="yellow")
    t.add_column("Reason", style="dim")

    for o in outcomes:
        txn = o.transaction
        t.add_row(
            txn.date.isoformat(),
            f"{txn.action} {txn.quantity} {txn.symbol}",
            o.status.value,
            o.reason,
        )
    return t


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Rebuild holdings and performance from a transaction snapshot"
    )
    parser.add_argument(
        "snapshot", nargs="?", default=DEFAULT_SNAPSHOT, help="Snapshot JSON file path"
    )
    parser.add_argument(
        "--method",
        choices=list(STRATEGIES),
        default=TrackerConfig.DEFAULT_LOT_METHOD,
        help="Lot-selection method applied to SELLs",
    )
    parser.add_argument(
        "--strict", action="store_true", help="Reject oversells and unmatched SELLs"
    )
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=None,
        help="Valuation date (YYYY-MM-DD), defaults to today",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the CLI application."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    config = TrackerConfig()
    policy = ValidationPolicy.STRICT if args.strict else config.DEFAULT_POLICY
    as_of = args.as_of or date.today()

    try:
        snapshot = load_snapshot(args.snapshot)
    except (OSError, ValueError) as e:
        console.print(
            f"Could not load snapshot {args.snapshot}: {e}", style="bold red", markup=False
        )
        return 1

    builder = HoldingsBuilder(method=args.method, policy=policy, config=config)

    try:
        builder.apply_all(snapshot.transactions)
    except TransactionRejectedError as e:
        console.print(str(e), style="bold red", markup=False)
        return 1

    holdings = builder.build(snapshot.quotes, as_of=as_of)
    missing = sorted({h.symbol for h in holdings} - set(snapshot.quotes))
    if missing:
        logger.warning("No quote for %s; live figures left at zero", ", ".join(missing))

    console.print()
    console.print(
        Panel(
            f"[bold]Portfolio Tracker[/bold] · {METHOD_LABELS[args.method]} · {as_of.isoformat()}",
            box=box.DOUBLE,
        )
    )
    console.print(holdings_table(holdings, config, "Holdings"))
    console.print(summary_panel(summarize(holdings), config))

    if snapshot.watchlist:
        console.print()
        console.print(
            watchlist_table(enrich(snapshot.watchlist, snapshot.quotes, as_of, config), config)
        )

    irregular = [o for o in builder.outcomes if not o.ok]
    if irregular:
        console.print()
        console.print(outcomes_table(irregular))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
