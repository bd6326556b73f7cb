"""
compose.py - Shape aggregated series into table and chart data.

Produces:
- Category totals, largest first
- Per-category series aligned to one gap-filled bucket axis
- A synthesized TOTAL series across every category
"""

from dataclasses import dataclass
from typing import Iterable, Optional

import pandas as pd

from .aggregate import CategoryTimeSeries


TOTAL_LABEL = "TOTAL"

# Label for a category that happens to be named like the synthesized line
CATEGORY_TOTAL_LABEL = "TOTAL (category)"


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    total_cost: float


@dataclass(frozen=True)
class ChartSeries:
    label: str
    points: tuple[tuple[str, float], ...]

    @property
    def labels(self) -> list[str]:
        return [key for key, _ in self.points]

    @property
    def values(self) -> list[float]:
        return [value for _, value in self.points]


def category_totals(series: CategoryTimeSeries) -> list[CategoryTotal]:
    """Sum each category over all buckets, sorted by total descending.

    Ties keep first-encountered order (sorted() is stable).
    """
    totals = [
        CategoryTotal(category, round(sum(buckets.values()), 2))
        for category, buckets in series.items()
    ]
    return sorted(totals, key=lambda t: -t.total_cost)


def align_series(series: CategoryTimeSeries, axis: list[str]) -> pd.DataFrame:
    """
    Overlay category sums onto the bucket axis.

    Returns:
        DataFrame indexed by bucket key (in axis order) with one float column
        per category; buckets without transactions hold 0.0.
    """
    aligned = pd.DataFrame(index=pd.Index(axis, name="bucket"), dtype=float)
    for category, buckets in series.items():
        aligned[category] = pd.Series(buckets, dtype=float).reindex(axis, fill_value=0.0).to_numpy()
    return aligned


def total_series(aligned: pd.DataFrame) -> pd.Series:
    """Bucket-by-bucket sum over every category column."""
    return aligned.sum(axis=1).astype(float)


def category_label(category: str) -> str:
    return CATEGORY_TOTAL_LABEL if category == TOTAL_LABEL else category


def _to_chart_series(label: str, values: pd.Series) -> ChartSeries:
    return ChartSeries(
        label=label,
        points=tuple((str(key), round(float(v), 2)) for key, v in values.items()),
    )


def build_chart_series(
    aligned: pd.DataFrame,
    selected: Optional[Iterable[str]] = None,
    show_total: bool = True,
) -> list[ChartSeries]:
    """
    Build the line-chart series for the selected categories.

    ``selected=None`` charts every category. Selected names with no data in
    the aligned frame are not charted. The TOTAL line, when enabled, always
    sums all categories, whatever the selection. A category literally named
    TOTAL is charted as ``CATEGORY_TOTAL_LABEL`` so labels stay unique.
    """
    wanted = None if selected is None else set(selected)
    charts = [
        _to_chart_series(category_label(category), aligned[category])
        for category in aligned.columns
        if wanted is None or category in wanted
    ]
    if show_total:
        charts.append(_to_chart_series(TOTAL_LABEL, total_series(aligned)))
    return charts
