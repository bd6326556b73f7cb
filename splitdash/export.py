"""
export.py - Write engine results as plain data files for a chart/table frontend.
"""

import json
from pathlib import Path
from typing import Optional

import pandas as pd

from .engine import EngineResult


def _j(v) -> str:
    return json.dumps(v, default=str, indent=2)


def category_totals_frame(result: EngineResult) -> pd.DataFrame:
    return pd.DataFrame(
        [{"category": t.category, "total_cost": t.total_cost} for t in result.category_totals],
        columns=["category", "total_cost"],
    )


def series_frame(result: EngineResult) -> pd.DataFrame:
    """One row per bucket, one column per chart series."""
    df = pd.DataFrame(index=pd.Index(list(result.axis), name="bucket"))
    for s in result.series:
        df[s.label] = s.values
    return df.reset_index()


def chart_payload(result: EngineResult) -> dict:
    return {
        "granularity": result.granularity.value if result.granularity else None,
        "labels": list(result.axis),
        "datasets": [{"label": s.label, "data": s.values} for s in result.series],
        "grand_total": result.grand_total,
    }


def export(
    result: EngineResult,
    output_dir: Path,
    balances: Optional[dict[str, float]] = None,
) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    exports = {
        "category_totals.csv": category_totals_frame(result),
        "series.csv":          series_frame(result),
    }
    if balances is not None:
        exports["balances.csv"] = pd.DataFrame(
            list(balances.items()), columns=["person", "balance"]
        )
    for filename, df in exports.items():
        df.to_csv(output_dir / filename, index=False)
        print(f"  Saved {filename} ({len(df)} rows)")

    (output_dir / "chart.json").write_text(_j(chart_payload(result)), encoding="utf-8")
    print(f"  Saved chart.json ({len(result.series)} series)")
