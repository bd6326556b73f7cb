"""Tests for per-person balances."""

from datetime import date

from splitdash.balances import describe_balance, person_balances
from splitdash.rows import DateRange, TransactionRow

from conftest import make_row


class TestPersonBalances:
    def test_sums_signed_shares_including_settle_ups(self):
        rows = [
            make_row("2024-01-01", "Food", 20.0, Alice=10.0, Bob=-10.0),
            make_row("2024-01-02", "Food", 8.0, Alice=-4.0, Bob=4.0),
            make_row("2024-01-03", "Payment", 6.0, Alice=-6.0, Bob=6.0),
        ]
        assert person_balances(rows) == {"Alice": 0.0, "Bob": 0.0}

    def test_largest_creditor_first(self):
        rows = [make_row("2024-01-01", "Food", 30.0, Alice=-10.0, Bob=20.0, Cara=-10.0)]
        assert list(person_balances(rows)) == ["Bob", "Alice", "Cara"]

    def test_date_range_applies(self):
        rows = [
            make_row("2024-01-01", "Food", 20.0, Alice=10.0, Bob=-10.0),
            make_row("2024-03-01", "Food", 20.0, Alice=-10.0, Bob=10.0),
            TransactionRow(None, "undated", "Food", 5.0, person_shares={"Alice": 100.0}),
        ]
        rng = DateRange(date(2024, 1, 1), date(2024, 1, 31))
        assert person_balances(rows, rng) == {"Alice": 10.0, "Bob": -10.0}

    def test_no_shares(self):
        assert person_balances([make_row("2024-01-01", "Food", 1.0)]) == {}


class TestDescribeBalance:
    def test_owed(self):
        assert describe_balance("Alice", 12.5) == "Alice is owed $12.50"

    def test_owes(self):
        assert describe_balance("Bob", -1234.5) == "Bob owes $1,234.50"

    def test_settled(self):
        assert describe_balance("Cara", 0.001) == "Cara is settled up"

    def test_currency_format(self):
        assert describe_balance("Dan", 5, "{amount} zł") == "Dan is owed 5.00 zł"
