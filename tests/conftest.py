"""Shared fixtures for the dbconnect test-suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from dbconnect import config as config_module


@pytest.fixture(autouse=True)
def isolated_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep tests away from the real ~/.config/dbconnect/config.toml."""

    path = tmp_path / "dbconnect" / "config.toml"
    monkeypatch.setattr(config_module, "CONFIG_FILE", path)
    return path


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
