"""Tests for AdapterConfig helpers."""

from __future__ import annotations

from pathlib import Path

from dbconnect.config import AdapterConfig, load_config, save_config


def test_load_config_returns_defaults_when_missing() -> None:
    result = load_config()

    assert result == AdapterConfig()
    assert result.section == "database"


def test_load_config_reads_values(isolated_config_file: Path) -> None:
    isolated_config_file.parent.mkdir(parents=True, exist_ok=True)
    isolated_config_file.write_text(
        """
section = "db"

[param_names]
Oracle = "sid"
Broken = 3

[drivers]
CSV = true
legacy = false
"""
    )

    result = load_config()

    assert result.section == "db"
    assert result.param_names == {"Oracle": "sid"}
    assert result.drivers == {"CSV": True, "legacy": False}


def test_load_config_handles_toml_errors(isolated_config_file: Path) -> None:
    isolated_config_file.parent.mkdir(parents=True, exist_ok=True)
    isolated_config_file.write_text("section = [unterminated")

    result = load_config()

    assert result == AdapterConfig()


def test_driver_filters_with_allowlist() -> None:
    config = AdapterConfig(drivers={"CSV": True, "legacy": False})

    assert config.is_driver_enabled("CSV")
    assert not config.is_driver_enabled("other")


def test_driver_filters_with_blocklist_only() -> None:
    config = AdapterConfig(drivers={"legacy": False})

    assert config.driver_filters() == (None, {"legacy"})
    assert config.is_driver_enabled("CSV")
    assert not config.is_driver_enabled("legacy")


def test_with_param_name_returns_copy() -> None:
    config = AdapterConfig()

    updated = config.with_param_name("Oracle", "sid")

    assert updated.param_names == {"Oracle": "sid"}
    assert config.param_names == {}


def test_save_config_round_trips(isolated_config_file: Path) -> None:
    save_config(AdapterConfig(section="db", param_names={"Oracle": "sid"}, drivers={"legacy": False}))

    content = isolated_config_file.read_text()
    assert 'section = "db"' in content
    assert "[param_names]" in content
    assert 'Oracle = "sid"' in content
    assert "legacy = false" in content
    assert load_config() == AdapterConfig(section="db", param_names={"Oracle": "sid"}, drivers={"legacy": False})
