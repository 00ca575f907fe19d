"""Loaders turning external feed records into tracker models."""

import json
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Mapping, Sequence

from .models import Quote, Transaction, WatchlistItem

# Trailing exchange cell is optional; the sheets API drops empty trailing cells.
TRANSACTION_COLUMNS = 8
WATCHLIST_COLUMNS = 4


@dataclass(frozen=True)
class Snapshot:
    """Everything the tracker needs for one report."""

    transactions: list[Transaction] = field(default_factory=list)
    watchlist: list[WatchlistItem] = field(default_factory=list)
    quotes: dict[str, Quote] = field(default_factory=dict)


def _parse_decimal(raw: Any, row: Sequence[Any]) -> Decimal:
    try:
        return Decimal(str(raw).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid number {raw!r} in row {list(row)}") from None


def _parse_date(raw: Any, row: Sequence[Any]) -> date:
    """Accept ``YYYY-MM-DD`` or a full ISO timestamp, keeping only the date."""
    try:
        return date.fromisoformat(str(raw).strip()[:10])
    except ValueError:
        raise ValueError(f"Invalid date {raw!r} in row {list(row)}") from None


def _optional_cell(row: Sequence[Any], index: int) -> str:
    if len(row) <= index or row[index] is None:
        return ""
    return str(row[index])


def parse_transaction_row(row: Sequence[Any]) -> Transaction:
    """Parse a transaction sheet row.

    Args:
        row: ``[id, symbol, name, type, quantity, price_per_share,
            total_cost, date, exchange]``. The exchange cell may be missing.

    Returns:
        Transaction built from the row.

    Raises:
        ValueError: If the row is short, the type is not BUY/SELL, or a
            number or date does not parse.
    """
    if len(row) < TRANSACTION_COLUMNS:
        raise ValueError(
            f"Transaction row needs {TRANSACTION_COLUMNS} columns, got {len(row)}: {list(row)}"
        )

    action = str(row[3]).strip().upper()
    if action not in ("BUY", "SELL"):
        raise ValueError(f"Unknown transaction type {row[3]!r} in row {list(row)}")

    return Transaction(
        id=str(row[0]),
        symbol=str(row[1]).strip(),
        name=str(row[2]),
        action=action,  # type: ignore[arg-type]
        quantity=_parse_decimal(row[4], row),
        price_per_share=_parse_decimal(row[5], row),
        total_cost=_parse_decimal(row[6], row),
        date=_parse_date(row[7], row),
        exchange=_optional_cell(row, 8),
    )


def parse_watchlist_row(row: Sequence[Any]) -> WatchlistItem:
    """Parse a watchlist sheet row: ``[symbol, name, date_added, price_when_added, exchange]``.

    The exchange cell may be missing.
    """
    if len(row) < WATCHLIST_COLUMNS:
        raise ValueError(
            f"Watchlist row needs {WATCHLIST_COLUMNS} columns, got {len(row)}: {list(row)}"
        )

    return WatchlistItem(
        symbol=str(row[0]).strip(),
        name=str(row[1]),
        date_added=_parse_date(row[2], row),
        price_when_added=_parse_decimal(row[3], row),
        exchange=_optional_cell(row, 4),
    )


def parse_quote(payload: Mapping[str, Any]) -> Quote:
    """Build a Quote from a market-data payload.

    The price comes from ``close``, falling back to ``price``. A missing
    ``previous_close`` counts as 0, which zeroes the day-gain percentage.
    """
    raw_price = payload.get("close")
    if raw_price in (None, ""):
        raw_price = payload.get("price")
    if raw_price in (None, ""):
        raise ValueError(f"Quote has no price: {dict(payload)}")

    raw_previous = payload.get("previous_close")
    if raw_previous in (None, ""):
        raw_previous = "0"
    try:
        return Quote(price=Decimal(str(raw_price)), previous_close=Decimal(str(raw_previous)))
    except InvalidOperation:
        raise ValueError(f"Invalid quote: {dict(payload)}") from None


def load_snapshot(path: str | Path) -> Snapshot:
    """Load transactions, watchlist and quotes from a JSON snapshot file.

    Expected shape::

        {
            "transactions": [[id, symbol, name, type, qty, price, total, date, exchange], ...],
            "watchlist": [[symbol, name, date_added, price_when_added, exchange], ...],
            "quotes": {"SHEL": {"close": "27.10", "previous_close": "26.95"}, ...}
        }

    All keys are optional.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))

    return Snapshot(
        transactions=[parse_transaction_row(row) for row in data.get("transactions", [])],
        watchlist=[parse_watchlist_row(row) for row in data.get("watchlist", [])],
        quotes={
            symbol: parse_quote(payload)
            for symbol, payload in data.get("quotes", {}).items()
        },
    )
