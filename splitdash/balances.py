"""
balances.py - Who owes whom, from the per-person share columns.

In a Splitwise export each person column holds that person's signed share of
the row: positive means they are owed, negative means they owe. Settle-up
rows are included here because they are what brings balances back to zero.
"""

from collections import defaultdict
from typing import Iterable, Optional

from .rows import DateRange, TransactionRow, in_date_range


def person_balances(
    rows: Iterable[TransactionRow],
    date_range: Optional[DateRange] = None,
) -> dict[str, float]:
    """Net signed balance per person, largest creditor first."""
    date_range = date_range or DateRange()
    totals: dict[str, float] = defaultdict(float)
    for row in rows:
        if not in_date_range(row.date, date_range):
            continue
        for person, share in row.person_shares.items():
            totals[person] += share
    ranked = sorted(totals.items(), key=lambda item: -item[1])
    return {person: round(amount, 2) for person, amount in ranked}


def describe_balance(person: str, amount: float, currency_format: str = "${amount}") -> str:
    """Human-readable balance line, e.g. 'Alice is owed $12.50'."""
    formatted = currency_format.format(amount=f"{abs(amount):,.2f}")
    if round(amount, 2) > 0:
        return f"{person} is owed {formatted}"
    if round(amount, 2) < 0:
        return f"{person} owes {formatted}"
    return f"{person} is settled up"
