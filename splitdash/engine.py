"""
engine.py - Recompute the dashboard view from rows and view parameters.

``recompute`` is a pure function: the host calls it again whenever the rows
or any view parameter change, and gets back a brand-new ``EngineResult``.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from .aggregate import EXCLUDED_CATEGORY, aggregate_by_category, is_excluded
from .buckets import Granularity, bucket_axis, select_granularity
from .compose import (
    CategoryTotal,
    ChartSeries,
    align_series,
    build_chart_series,
    category_totals,
)
from .rows import DateRange, TransactionRow, in_date_range


@dataclass(frozen=True)
class ViewParams:
    date_range: DateRange = field(default_factory=DateRange)
    granularity: Granularity = Granularity.AUTO
    excluded_category: str = EXCLUDED_CATEGORY
    # None means every category
    selected_categories: Optional[frozenset[str]] = None
    show_total: bool = True


@dataclass(frozen=True)
class EngineResult:
    granularity: Optional[Granularity]
    axis: tuple[str, ...] = ()
    category_totals: tuple[CategoryTotal, ...] = ()
    series: tuple[ChartSeries, ...] = ()
    grand_total: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.category_totals

    def get_series(self, label: str) -> Optional[ChartSeries]:
        return next((s for s in self.series if s.label == label), None)


def _axis_bounds(
    rows: list[TransactionRow],
    date_range: DateRange,
    excluded_category: str,
) -> tuple[Optional[date], Optional[date]]:
    """Fill missing range bounds from the earliest/latest counted row."""
    start, end = date_range.start, date_range.end
    if start is not None and end is not None:
        return start, end
    dates = [
        row.date
        for row in rows
        if row.cost is not None
        and not is_excluded(row.category, excluded_category)
        and in_date_range(row.date, date_range)
    ]
    if not dates:
        return start, end
    return start or min(dates), end or max(dates)


def recompute(rows: Iterable[TransactionRow], view: ViewParams = ViewParams()) -> EngineResult:
    """
    Build table and chart data for one view of the rows.

    Steps:
    1. Resolve the granularity (explicit or from the range span)
    2. Aggregate costs per category and bucket
    3. Build the gap-filled axis and align every series to it
    4. Rank category totals and synthesize the TOTAL line

    Never raises for bad rows or ranges: no rows, an inverted range or an open
    range with no counted rows yields an empty result.
    """
    rows = list(rows)
    granularity = select_granularity(view.date_range, view.granularity)
    if not rows or view.date_range.is_inverted:
        return EngineResult(granularity=granularity)

    series = aggregate_by_category(rows, view.date_range, view.excluded_category, granularity)
    start, end = _axis_bounds(rows, view.date_range, view.excluded_category)
    if start is None or end is None:
        return EngineResult(granularity=granularity)

    axis = bucket_axis(start, end, granularity)
    aligned = align_series(series, axis)
    totals = category_totals(series)
    charts = build_chart_series(aligned, view.selected_categories, view.show_total)

    return EngineResult(
        granularity=granularity,
        axis=tuple(axis),
        category_totals=tuple(totals),
        series=tuple(charts),
        grand_total=round(sum(sum(b.values()) for b in series.values()), 2),
    )
