"""
rows.py - Normalized transaction rows and the date window they are filtered by.

A row arrives as a mapping of text fields (Date, Description, Category, Cost,
Currency, plus one column per person). Parsing is tolerant: a bad date or
cost is kept as ``None`` so the row can be dropped later instead of failing
the whole load.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Mapping, Optional

import numpy as np
import pandas as pd


logger = logging.getLogger(__name__)

DATE_FORMATS = ["%Y-%m-%d", "%m/%d/%Y", "%d/%m/%Y", "%Y/%m/%d"]

# Columns every Splitwise export carries before the per-person columns
BASE_COLUMNS = ["Date", "Description", "Category", "Cost", "Currency"]


def parse_cost(value) -> Optional[float]:
    """Convert a cost cell to float, or None when it is not a finite number."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        result = float(value)
    else:
        s = str(value).strip().replace(",", "").replace("$", "")
        if not s:
            return None
        try:
            result = float(s)
        except ValueError:
            return None
    return result if math.isfinite(result) else None


def parse_date(value) -> Optional[date]:
    """Parse a date cell, trying each known format. Returns None if none match."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    # Splitwise sometimes appends a time component
    s = s.split(" ")[0].split("T")[0]
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    return None


@dataclass(frozen=True)
class DateRange:
    """Inclusive date window. A missing bound is unbounded on that side."""

    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_inverted(self) -> bool:
        return self.start is not None and self.end is not None and self.start > self.end

    def span_days(self) -> int:
        """Whole days between start and end (ceiling), 0 when a bound is missing."""
        if self.start is None or self.end is None:
            return 0
        delta = pd.Timestamp(self.end) - pd.Timestamp(self.start)
        return math.ceil(delta / pd.Timedelta(days=1))


@dataclass(frozen=True)
class TransactionRow:
    date: Optional[date]
    description: str
    category: str
    cost: Optional[float]
    currency: str = ""
    person_shares: Mapping[str, float] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> "TransactionRow":
        """
        Build a row from a CSV record.

        Every key that is not one of the base Splitwise columns is read as a
        person's signed share. Share cells that do not parse are skipped.
        """
        shares: dict[str, float] = {}
        for key, value in record.items():
            if key in BASE_COLUMNS:
                continue
            share = parse_cost(value)
            if share is not None:
                shares[str(key).strip()] = share

        return cls(
            date=parse_date(record.get("Date")),
            description=_text(record.get("Description")),
            category=_text(record.get("Category")),
            cost=parse_cost(record.get("Cost")),
            currency=_text(record.get("Currency")),
            person_shares=shares,
        )


def _text(value) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value).strip()


def in_date_range(value: Optional[date], date_range: DateRange) -> bool:
    """True when ``value`` lies inside the inclusive window. Missing dates never match."""
    if value is None:
        return False
    if date_range.start is not None and value < date_range.start:
        return False
    if date_range.end is not None and value > date_range.end:
        return False
    return True


def rows_to_frame(rows: Iterable[TransactionRow]) -> pd.DataFrame:
    """
    Lay rows out as a DataFrame for vectorized filtering and grouping.

    Columns:
        date        - pd.Timestamp (NaT when the row had no usable date)
        description - str
        category    - str
        cost        - float (NaN when the row had no usable cost)
        currency    - str
    """
    records = [
        {
            "date": row.date,
            "description": row.description,
            "category": row.category,
            "cost": row.cost,
            "currency": row.currency,
        }
        for row in rows
    ]
    df = pd.DataFrame(records, columns=["date", "description", "category", "cost", "currency"])
    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    df["cost"] = pd.to_numeric(df["cost"], errors="coerce").astype(float)
    return df


def filter_by_date_range(df: pd.DataFrame, date_range: DateRange) -> pd.DataFrame:
    """Keep rows whose date lies in the inclusive window; NaT rows are dropped."""
    mask = df["date"].notna()
    if date_range.start is not None:
        mask &= df["date"] >= pd.Timestamp(date_range.start)
    if date_range.end is not None:
        mask &= df["date"] <= pd.Timestamp(date_range.end)
    return df[mask]


def drop_unparsable_costs(df: pd.DataFrame) -> pd.DataFrame:
    mask = np.isfinite(df["cost"].to_numpy(dtype=float))
    dropped = int((~mask).sum())
    if dropped:
        logger.debug("Skipping %d rows with unparsable cost", dropped)
    return df[mask]
