"""Tests for feed loaders."""

import json
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from portfolio_tracker.loaders import (
    Snapshot,
    load_snapshot,
    parse_quote,
    parse_transaction_row,
    parse_watchlist_row,
)
from portfolio_tracker.models import Quote

SAMPLE = Path(__file__).resolve().parent.parent / "data" / "sample_snapshot.json"


class TestParseTransactionRow:
    def test_valid_row(self):
        txn = parse_transaction_row(
            ["t1", "SHEL", "Shell PLC", "BUY", "40", "24.10", "964.00", "2023-03-14", "LSE"]
        )

        assert txn.id == "t1"
        assert txn.symbol == "SHEL"
        assert txn.name == "Shell PLC"
        assert txn.action == "BUY"
        assert txn.quantity == Decimal("40")
        assert txn.price_per_share == Decimal("24.10")
        assert txn.total_cost == Decimal("964.00")
        assert txn.date == date(2023, 3, 14)
        assert txn.exchange == "LSE"

    def test_lowercase_type_and_timestamp(self):
        txn = parse_transaction_row(
            ["t2", "AZN", "AstraZeneca", "sell", 2, 110.5, 221, "2024-02-01T09:30:00.000Z", "LSE"]
        )

        assert txn.action == "SELL"
        assert txn.quantity == 2
        assert txn.price_per_share == Decimal("110.5")
        assert txn.date == date(2024, 2, 1)

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown transaction type"):
            parse_transaction_row(["t1", "SHEL", "Shell", "HOLD", "1", "1", "1", "2024-01-01", "LSE"])

    def test_short_row(self):
        with pytest.raises(ValueError, match="needs 8 columns"):
            parse_transaction_row(["t1", "SHEL", "Shell", "BUY"])

    def test_missing_exchange_cell(self):
        txn = parse_transaction_row(
            ["t1", "SHEL", "Shell PLC", "BUY", "10", "5", "50", "2024-01-01"]
        )

        assert txn.exchange == ""
        assert txn.quantity == 10

    def test_bad_number(self):
        with pytest.raises(ValueError, match="Invalid number"):
            parse_transaction_row(["t1", "SHEL", "Shell", "BUY", "ten", "1", "10", "2024-01-01", "LSE"])

    def test_bad_date(self):
        with pytest.raises(ValueError, match="Invalid date"):
            parse_transaction_row(["t1", "SHEL", "Shell", "BUY", "1", "1", "1", "14/03/2023", "LSE"])


class TestParseWatchlistRow:
    def test_valid_row(self):
        item = parse_watchlist_row(["RIO", "Rio Tinto PLC", "2024-11-05", "48.90", "LSE"])

        assert item.symbol == "RIO"
        assert item.name == "Rio Tinto PLC"
        assert item.date_added == date(2024, 11, 5)
        assert item.price_when_added == Decimal("48.90")
        assert item.current_price == 0
        assert item.annualized_gain_percent == 0

    def test_missing_exchange_cell(self):
        item = parse_watchlist_row(["RIO", "Rio Tinto PLC", "2024-11-05", "48.90"])

        assert item.exchange == ""
        assert item.price_when_added == Decimal("48.90")

    def test_short_row(self):
        with pytest.raises(ValueError, match="needs 4 columns"):
            parse_watchlist_row(["RIO", "Rio Tinto PLC"])


class TestParseQuote:
    def test_close_preferred(self):
        assert parse_quote({"close": "27.35", "price": "1", "previous_close": "27.10"}) == Quote(
            Decimal("27.35"), Decimal("27.10")
        )

    def test_price_fallback(self):
        assert parse_quote({"price": "3.62", "previous_close": "3.58"}).price == Decimal("3.62")

    def test_missing_previous_close(self):
        assert parse_quote({"close": "10"}).previous_close == 0

    def test_zero_close_not_replaced_by_price(self):
        quote = parse_quote({"close": 0, "price": "5", "previous_close": 0})

        assert quote.price == 0
        assert quote.previous_close == 0

    def test_empty_close_falls_back_to_price(self):
        assert parse_quote({"close": "", "price": "5"}).price == 5

    def test_no_price(self):
        with pytest.raises(ValueError, match="no price"):
            parse_quote({"previous_close": "10"})

    def test_invalid_number(self):
        with pytest.raises(ValueError, match="Invalid quote"):
            parse_quote({"close": "n/a"})


class TestLoadSnapshot:
    def test_round_trip_file(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text(
            json.dumps(
                {
                    "transactions": [
                        ["t1", "SHEL", "Shell PLC", "BUY", "10", "5", "50", "2024-01-02", "LSE"]
                    ],
                    "watchlist": [["RIO", "Rio Tinto PLC", "2024-11-05", "48.90", "LSE"]],
                    "quotes": {"SHEL": {"close": "6", "previous_close": "5.50"}},
                }
            )
        )

        snapshot = load_snapshot(path)

        assert len(snapshot.transactions) == 1
        assert snapshot.watchlist[0].symbol == "RIO"
        assert snapshot.quotes == {"SHEL": Quote(Decimal("6"), Decimal("5.50"))}

    def test_rows_without_exchange(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text(
            json.dumps(
                {
                    "transactions": [["t1", "SHEL", "Shell PLC", "BUY", "10", "5", "50", "2024-01-02"]],
                    "watchlist": [["RIO", "Rio Tinto PLC", "2024-11-05", "48.90"]],
                }
            )
        )

        snapshot = load_snapshot(path)

        assert snapshot.transactions[0].exchange == ""
        assert snapshot.watchlist[0].exchange == ""

    def test_missing_keys(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("{}")
        assert load_snapshot(path) == Snapshot()

    def test_sample_snapshot(self):
        snapshot = load_snapshot(SAMPLE)

        assert len(snapshot.transactions) == 9
        assert len(snapshot.watchlist) == 3
        assert "SHEL" in snapshot.quotes
