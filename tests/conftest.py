"""Shared fixtures: small row builders and a sample Splitwise export."""

from datetime import date
from pathlib import Path

import pytest

from splitdash.rows import TransactionRow


def make_row(day, category, cost, description="", **shares) -> TransactionRow:
    return TransactionRow(
        date=date.fromisoformat(day) if isinstance(day, str) else day,
        description=description or category,
        category=category,
        cost=cost,
        currency="USD",
        person_shares=shares,
    )


@pytest.fixture
def scenario_rows():
    """Four January rows, one of them a settle-up payment."""
    return [
        make_row("2024-01-01", "Food", 10.0),
        make_row("2024-01-01", "Payment", 50.0),
        make_row("2024-01-08", "Food", 5.0),
        make_row("2024-01-15", "Transport", 20.0),
    ]


SPLITWISE_EXPORT = """Date,Description,Category,Cost,Currency,Alice Smith,Bob Jones

2024-01-03,Weekly shop,Groceries,42.10,USD,21.05,-21.05
2024-01-05,Pizza night,Dining out,30.00,USD,-15.00,15.00
2024-01-09,Settle up,Payment,6.05,USD,-6.05,6.05
2024-01-12,Bus passes,Transportation,not-a-number,USD,5.00,-5.00
2024-13-40,Broken date,Groceries,8.00,USD,4.00,-4.00

2024-01-31,Total balance, , ,USD,0.00,0.00
"""


@pytest.fixture
def splitwise_csv(tmp_path: Path) -> Path:
    path = tmp_path / "export.csv"
    path.write_text(SPLITWISE_EXPORT, encoding="utf-8")
    return path
