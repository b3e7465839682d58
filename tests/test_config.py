"""
Unit tests for configuration loading utilities.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from schooladmin.backend.core.utils.config import get_default_config, load_config, save_config

DEFAULT_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "default_config.yaml"


class TestLoadConfig:
    def test_load_valid_config(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            yaml.dump({"storage": {"backend": "rest"}, "listing": {"page_size": 25}, "api": {}})
        )
        loaded = load_config(path)

        assert loaded["storage"]["backend"] == "rest"
        assert loaded["listing"]["page_size"] == 25

    def test_missing_file_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_config("/nonexistent/path/config.yaml")

    def test_missing_sections_get_defaults(self, tmp_path: Path) -> None:
        """Config with missing sections or keys should be completed from defaults."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({"listing": {"page_size": 20}}))
        loaded = load_config(path)

        assert loaded["storage"]["backend"] == "local"
        assert loaded["listing"]["page_window"] == 5
        assert loaded["listing"]["page_size"] == 20
        assert "cors_origins" in loaded["api"]

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path)["listing"]["page_size"] == 10

    def test_default_config_loads(self) -> None:
        """The shipped default_config.yaml should load without errors."""
        config = load_config(DEFAULT_CONFIG)
        assert config["storage"]["backend"] == "local"
        assert config["listing"]["page_size"] == 10


class TestSaveConfig:
    def test_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "out.yaml"
        save_config(get_default_config(), path)
        assert load_config(path) == get_default_config()
