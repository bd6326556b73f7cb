"""
aggregate.py - Fold transaction rows into per-category time series.

The result maps category -> bucket key -> summed cost. Categories appear in
the order they are first encountered; buckets within a category are
chronological.
"""

import logging
from typing import Iterable

import pandas as pd

from .buckets import Granularity, period_freq, period_key
from .rows import (
    DateRange,
    TransactionRow,
    drop_unparsable_costs,
    filter_by_date_range,
    rows_to_frame,
)


logger = logging.getLogger(__name__)

# Splitwise records settle-ups between people under this category
EXCLUDED_CATEGORY = "Payment"

CategoryTimeSeries = dict[str, dict[str, float]]


def is_excluded(category: str, excluded_category: str = EXCLUDED_CATEGORY) -> bool:
    return category == excluded_category


def filter_expenses(
    df: pd.DataFrame,
    date_range: DateRange,
    excluded_category: str = EXCLUDED_CATEGORY,
) -> pd.DataFrame:
    """
    Reduce a row frame to the expenses that count towards totals.

    Drops rows outside the date window, rows in the excluded category and rows
    whose cost did not parse.
    """
    df = filter_by_date_range(df, date_range)
    excluded = df["category"].map(lambda c: is_excluded(c, excluded_category)).astype(bool)
    df = df[~excluded]
    return drop_unparsable_costs(df)


def aggregate_by_category(
    rows: Iterable[TransactionRow],
    date_range: DateRange,
    excluded_category: str,
    granularity: Granularity,
) -> CategoryTimeSeries:
    """
    Sum costs per category and bucket.

    Args:
        rows: Parsed transaction rows.
        date_range: Inclusive window rows must fall in.
        excluded_category: Category whose rows never count (settle-ups).
        granularity: Resolved bucket size (not AUTO).

    Returns:
        New nested dict; only categories with at least one contributing row.
    """
    df = filter_expenses(rows_to_frame(rows), date_range, excluded_category)
    if df.empty:
        return {}

    df = df.copy()
    df["period"] = df["date"].dt.to_period(period_freq(granularity))
    summary = df.groupby(["category", "period"], sort=False)["cost"].sum()

    by_period: dict[str, dict[pd.Period, float]] = {}
    for (category, period), cost in summary.items():
        by_period.setdefault(category, {})[period] = float(cost)

    logger.debug(
        "Aggregated %d rows into %d categories (%s)",
        len(df), len(by_period), granularity.value,
    )
    return {
        category: {period_key(p, granularity): cost for p, cost in sorted(buckets.items())}
        for category, buckets in by_period.items()
    }
