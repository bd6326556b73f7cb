"""
ingest.py - Load a Splitwise CSV export into transaction rows.

A Splitwise export looks like:

    Date,Description,Category,Cost,Currency,Alice,Bob
    <blank line>
    2024-01-03,Groceries,Groceries,42.10,USD,21.05,-21.05
    ...
    <blank line>
    2024-02-01,Total balance, , ,USD,12.40,-12.40

Every column after Currency is one person's signed share.
"""

from pathlib import Path

import pandas as pd

from .rows import BASE_COLUMNS, TransactionRow


REQUIRED_COLUMNS = {"Date", "Category", "Cost"}

# Summary line Splitwise appends below the transactions
_TOTAL_BALANCE_DESCRIPTION = "total balance"


def _read_raw(filepath: Path) -> pd.DataFrame:
    try:
        raw = pd.read_csv(filepath, encoding="utf-8", dtype=str, skip_blank_lines=True)
    except UnicodeDecodeError:
        raw = pd.read_csv(filepath, encoding="latin-1", dtype=str, skip_blank_lines=True)
    # Strip BOM and whitespace from column names
    raw.columns = raw.columns.str.strip().str.lstrip("\ufeff")
    return raw


def person_columns(columns) -> list[str]:
    """Columns that hold per-person shares (everything that is not a base column)."""
    return [c for c in columns if c not in BASE_COLUMNS and not str(c).startswith("Unnamed")]


def load_csv(filepath: str | Path) -> list[TransactionRow]:
    """
    Load a Splitwise CSV export.

    Args:
        filepath: Path to the CSV file.

    Returns:
        Parsed rows in file order. Rows with a bad date or cost are kept with
        ``None`` in that field; the engine drops them from the sums.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the Date, Category or Cost column is missing.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    raw = _read_raw(filepath)
    missing = REQUIRED_COLUMNS - set(raw.columns)
    if missing:
        raise ValueError(
            f"Not a Splitwise export, missing columns {sorted(missing)}. Found: {list(raw.columns)}"
        )

    raw = raw.dropna(how="all")
    if "Description" in raw.columns:
        is_summary = raw["Description"].fillna("").str.strip().str.lower() == _TOTAL_BALANCE_DESCRIPTION
        raw = raw[~is_summary]

    keep = [c for c in BASE_COLUMNS if c in raw.columns] + person_columns(raw.columns)
    raw = raw[keep].reset_index(drop=True)
    return [TransactionRow.from_record(record) for record in raw.to_dict(orient="records")]


def load_directory(directory: str | Path, pattern: str = "*.csv") -> list[TransactionRow]:
    """
    Load every Splitwise export in a directory, concatenated in file-name order.

    Files that fail to load are reported and skipped.

    Raises:
        FileNotFoundError: If the directory does not exist.
        ValueError: If no file could be loaded.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Directory not found: {directory}")

    csv_files = sorted(directory.glob(pattern))
    if not csv_files:
        raise ValueError(f"No CSV files found in {directory} matching pattern '{pattern}'")

    rows: list[TransactionRow] = []
    errors = []
    for f in csv_files:
        try:
            loaded = load_csv(f)
        except (ValueError, pd.errors.ParserError) as e:
            errors.append(f"  Skipped {f.name}: {e}")
            continue
        rows.extend(loaded)
        print(f"  Loaded {f.name}: {len(loaded)} rows")

    if errors:
        print("\nWarnings during ingestion:")
        for err in errors:
            print(err)

    if not rows and errors:
        raise ValueError("No valid CSV files could be loaded.")
    return rows
