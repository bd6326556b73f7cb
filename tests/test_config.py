"""Tests for YAML settings loading."""

from pathlib import Path

import pytest

from splitdash import config
from splitdash.buckets import Granularity
from splitdash.config import Settings, load_settings, parse_granularity


class TestParseGranularity:
    def test_names(self):
        assert parse_granularity("weekly") is Granularity.WEEKLY
        assert parse_granularity(" Monthly ") is Granularity.MONTHLY

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown granularity"):
            parse_granularity("hourly")


class TestLoadSettings:
    def test_full_file(self, tmp_path: Path):
        path = tmp_path / "dashboard.yaml"
        path.write_text(
            "excluded_category: Settle up\n"
            "granularity: daily\n"
            "show_total: false\n"
            "selected_categories: [Food, Rent]\n"
            "currency_format: '{amount} EUR'\n"
        )
        settings = load_settings(path)
        assert settings == Settings(
            excluded_category="Settle up",
            granularity=Granularity.DAILY,
            show_total=False,
            selected_categories=("Food", "Rent"),
            currency_format="{amount} EUR",
        )

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "dashboard.yaml"
        path.write_text("")
        assert load_settings(path) == Settings()

    def test_missing_explicit_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "nope.yaml")

    def test_missing_default_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(config, "SETTINGS_FILE", tmp_path / "absent.yaml")
        assert load_settings() == Settings()

    def test_bundled_default_file(self):
        settings = load_settings(config.SETTINGS_FILE)
        assert settings.excluded_category == "Payment"
        assert settings.granularity is Granularity.AUTO

    @pytest.mark.parametrize("body, message", [
        ("- just\n- a list\n", "mapping"),
        ("selected_categories: Food\n", "selected_categories"),
        ("currency_format: '$'\n", "currency_format"),
        ("granularity: yearly\n", "Unknown granularity"),
    ])
    def test_invalid_values(self, tmp_path: Path, body, message):
        path = tmp_path / "dashboard.yaml"
        path.write_text(body)
        with pytest.raises(ValueError, match=message):
            load_settings(path)
