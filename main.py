"""
main.py - CLI entry point for the Splitwise expense dashboard.

Usage:
    python main.py --input export.csv --output output/
    python main.py --input export.csv --start 2024-01-01 --end 2024-03-31
    python main.py --input exports/ --granularity weekly --categories Groceries,Dining
"""

import argparse
import logging
import sys
from datetime import date, datetime
from pathlib import Path

from splitdash.config import load_settings, parse_granularity


def _iso_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from None


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="splitdash",
        description="Aggregate a Splitwise expense export into chart and table data.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --input export.csv --output output/
  python main.py --input export.csv --start 2024-01-01 --end 2024-01-21
  python main.py --input exports/ --granularity monthly --no-total
        """,
    )
    parser.add_argument(
        "--input", "-i",
        type=Path,
        required=True,
        help="Splitwise CSV export, or a directory of exports",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=Path("output"),
        help="Directory for output files (default: output/)",
    )
    parser.add_argument(
        "--start",
        type=_iso_date,
        default=None,
        metavar="YYYY-MM-DD",
        help="First day to include (inclusive)",
    )
    parser.add_argument(
        "--end",
        type=_iso_date,
        default=None,
        metavar="YYYY-MM-DD",
        help="Last day to include (inclusive)",
    )
    parser.add_argument(
        "--granularity", "-g",
        type=str,
        default=None,
        choices=["auto", "daily", "weekly", "monthly"],
        help="Bucket size for the time series (default: from config, else auto)",
    )
    parser.add_argument(
        "--categories",
        type=str,
        default=None,
        metavar="A,B,...",
        help="Comma-separated categories to chart as separate lines (default: all)",
    )
    parser.add_argument(
        "--exclude",
        type=str,
        default=None,
        metavar="CATEGORY",
        help="Category that is not spending (default: from config, else Payment)",
    )
    parser.add_argument(
        "--no-total",
        action="store_true",
        help="Do not add the TOTAL series",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="PATH",
        help="Path to a custom dashboard.yaml (default: config/dashboard.yaml)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log row-level diagnostics",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.config)
        granularity = parse_granularity(args.granularity or settings.granularity.value)
    except (FileNotFoundError, ValueError) as e:
        print(f"\nError loading settings: {e}", file=sys.stderr)
        return 1

    print("=" * 60)
    print("  Splitwise Expense Dashboard")
    print("=" * 60)
    print(f"  Input:   {args.input.resolve()}")
    print(f"  Output:  {args.output.resolve()}")
    if args.start or args.end:
        print(f"  Range:   {args.start or 'beginning'} → {args.end or 'end'}")
    print()

    # --- Ingest ---
    from splitdash.ingest import load_csv, load_directory

    try:
        print("Step 1/3  Loading export...")
        if args.input.is_dir():
            rows = load_directory(args.input)
        else:
            rows = load_csv(args.input)
    except (FileNotFoundError, ValueError) as e:
        print(f"\nError during ingestion: {e}", file=sys.stderr)
        return 1

    if not rows:
        print("No transactions found. Exiting.", file=sys.stderr)
        return 1
    print(f"  Rows loaded: {len(rows)}")

    # --- Aggregate ---
    from splitdash.balances import describe_balance, person_balances
    from splitdash.engine import ViewParams, recompute
    from splitdash.rows import DateRange

    if args.categories:
        selected = frozenset(c.strip() for c in args.categories.split(",") if c.strip())
    elif settings.selected_categories:
        selected = frozenset(settings.selected_categories)
    else:
        selected = None

    view = ViewParams(
        date_range=DateRange(args.start, args.end),
        granularity=granularity,
        excluded_category=args.exclude or settings.excluded_category,
        selected_categories=selected,
        show_total=settings.show_total and not args.no_total,
    )

    print("\nStep 2/3  Aggregating...")
    result = recompute(rows, view)
    if view.date_range.is_inverted:
        print("  Start date is after end date; nothing to aggregate.", file=sys.stderr)
    balances = person_balances(rows, view.date_range)

    fmt = settings.currency_format
    print(f"  Granularity: {result.granularity.value}")
    print(f"  Buckets:     {len(result.axis)}")
    print("  Spending by category:")
    for total in result.category_totals:
        print(f"    {total.category:<24} {fmt.format(amount=f'{total.total_cost:,.2f}'):>12}")
    print(f"  Grand total: {fmt.format(amount=f'{result.grand_total:,.2f}')}")
    if balances:
        print("  Balances:")
        for person, amount in balances.items():
            print(f"    {describe_balance(person, amount, fmt)}")

    # --- Export ---
    from splitdash.export import export

    print("\nStep 3/3  Exporting...")
    try:
        export(result, args.output, balances=balances)
    except OSError as e:
        print(f"\nError during export: {e}", file=sys.stderr)
        return 1

    print("\n" + "=" * 60)
    print(f"  Done! Chart data written to {args.output / 'chart.json'}")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
