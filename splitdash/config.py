"""
config.py - Load dashboard settings from YAML.

Example config/dashboard.yaml:

    excluded_category: Payment
    granularity: auto
    show_total: true
    selected_categories: []      # empty = chart every category
    currency_format: "${amount}"
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from .aggregate import EXCLUDED_CATEGORY
from .buckets import Granularity


SETTINGS_FILE = Path(__file__).parent.parent / "config" / "dashboard.yaml"


@dataclass(frozen=True)
class Settings:
    excluded_category: str = EXCLUDED_CATEGORY
    granularity: Granularity = Granularity.AUTO
    show_total: bool = True
    selected_categories: tuple[str, ...] = field(default_factory=tuple)
    currency_format: str = "${amount}"


def parse_granularity(value) -> Granularity:
    try:
        return Granularity(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(g.value for g in Granularity)
        raise ValueError(f"Unknown granularity {value!r}; expected one of: {choices}") from None


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from a YAML file.

    Args:
        path: Path to a settings file. Defaults to config/dashboard.yaml, which
              may be absent (defaults are used then).

    Returns:
        Settings with file values applied over the defaults.

    Raises:
        FileNotFoundError: If an explicit ``path`` does not exist.
        ValueError: If a value is of the wrong shape.
    """
    if path is None:
        if not SETTINGS_FILE.exists():
            return Settings()
        path = SETTINGS_FILE
    elif not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a mapping: {path}")

    defaults = Settings()
    selected = data.get("selected_categories") or []
    if not isinstance(selected, list):
        raise ValueError("selected_categories must be a list")
    currency_format = str(data.get("currency_format", defaults.currency_format))
    if "{amount}" not in currency_format:
        raise ValueError("currency_format must contain an {amount} placeholder")

    return Settings(
        excluded_category=str(data.get("excluded_category", defaults.excluded_category)),
        granularity=parse_granularity(data.get("granularity", defaults.granularity.value)),
        show_total=bool(data.get("show_total", defaults.show_total)),
        selected_categories=tuple(str(c) for c in selected),
        currency_format=currency_format,
    )
