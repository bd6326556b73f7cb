"""
buckets.py - Time bucketing for chart axes.

Responsibilities:
- Resolve the bucket granularity (explicit, or automatic from the range span)
- Map a date to its bucket key (day, ISO week, or month)
- Enumerate the gap-free bucket axis covering a date window

Bucket keys are zero-padded strings so that keys of one granularity sort
chronologically:

    daily    2024-01-31
    weekly   2024-W05   (ISO week-numbering year and week)
    monthly  2024-01
"""

from datetime import date
from enum import Enum
from typing import Optional

import pandas as pd

from .rows import DateRange


# Ranges shorter than this many days are bucketed by week, longer ones by month
AUTO_WEEKLY_MAX_DAYS = 30


class Granularity(str, Enum):
    AUTO = "auto"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


# pandas period frequencies; W-SUN periods run Monday..Sunday like ISO weeks
_PERIOD_FREQ = {
    Granularity.DAILY: "D",
    Granularity.WEEKLY: "W-SUN",
    Granularity.MONTHLY: "M",
}


def select_granularity(
    date_range: DateRange,
    explicit: Optional[Granularity] = None,
) -> Granularity:
    """
    Resolve the granularity to bucket by.

    An explicit choice other than AUTO is used as-is. Otherwise the span of the
    date range decides: under ``AUTO_WEEKLY_MAX_DAYS`` days is weekly, anything
    longer is monthly. A range with a missing bound has span 0 and is weekly.
    Daily buckets are only ever produced on request.
    """
    if explicit is not None and explicit is not Granularity.AUTO:
        return explicit
    if date_range.span_days() < AUTO_WEEKLY_MAX_DAYS:
        return Granularity.WEEKLY
    return Granularity.MONTHLY


def period_freq(granularity: Granularity) -> str:
    if granularity is Granularity.AUTO:
        raise ValueError("Granularity must be resolved before bucketing")
    return _PERIOD_FREQ[granularity]


def period_key(period: pd.Period, granularity: Granularity) -> str:
    """Format a pandas Period as the bucket key for ``granularity``."""
    start = period.start_time
    if granularity is Granularity.DAILY:
        return start.strftime("%Y-%m-%d")
    if granularity is Granularity.WEEKLY:
        iso_year, iso_week, _ = start.isocalendar()
        return f"{iso_year:04d}-W{iso_week:02d}"
    return start.strftime("%Y-%m")


def bucket_key(value: date, granularity: Granularity) -> str:
    """Return the key of the bucket containing ``value``."""
    period = pd.Period(pd.Timestamp(value), freq=period_freq(granularity))
    return period_key(period, granularity)


def bucket_axis(start: date, end: date, granularity: Granularity) -> list[str]:
    """
    Enumerate every bucket touching the inclusive window [start, end].

    Buckets with no transactions are included so all series share one
    continuous axis. An inverted window yields an empty axis.
    """
    if start > end:
        return []
    periods = pd.period_range(
        start=pd.Timestamp(start),
        end=pd.Timestamp(end),
        freq=period_freq(granularity),
    )
    return [period_key(p, granularity) for p in periods]
