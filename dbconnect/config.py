"""Adapter configuration loading helpers."""

from __future__ import annotations

from pathlib import Path

import tomllib

from pydantic import BaseModel, Field

CONFIG_FILE = Path.home() / ".config" / "dbconnect" / "config.toml"

DEFAULT_SECTION = "database"


class AdapterConfig(BaseModel):
    """Shape of the adapter configuration file."""

    section: str = DEFAULT_SECTION
    param_names: dict[str, str] = Field(default_factory=dict)
    drivers: dict[str, bool] = Field(default_factory=dict)

    def driver_filters(self) -> tuple[set[str] | None, set[str]]:
        """Return allow/block lists for discovered drivers."""

        allowed = {name for name, flag in self.drivers.items() if flag}
        disabled = {name for name, flag in self.drivers.items() if not flag}
        allowlist: set[str] | None = allowed or None
        return allowlist, disabled

    def is_driver_enabled(self, name: str) -> bool:
        allowlist, disabled = self.driver_filters()
        if allowlist is not None:
            return name in allowlist
        return name not in disabled

    def with_param_name(self, driver: str, keyword: str) -> AdapterConfig:
        """Return a copy mapping ``driver`` to a database parameter keyword."""

        param_names = dict(self.param_names)
        param_names[driver] = keyword
        return self.model_copy(update={"param_names": param_names})


def load_config() -> AdapterConfig:
    """Load configuration from disk; fall back to defaults if missing."""

    try:
        data = _read_config_file()
    except FileNotFoundError:
        return AdapterConfig()
    except (tomllib.TOMLDecodeError, OSError):
        return AdapterConfig()

    return AdapterConfig(
        section=data.get("section", DEFAULT_SECTION),
        param_names=data.get("param_names", {}),
        drivers=data.get("drivers", {}),
    )


def save_config(config: AdapterConfig) -> None:
    """Persist configuration to disk."""

    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    lines: list[str] = [f'section = "{config.section}"']
    if config.param_names:
        lines.append("")
        lines.append("[param_names]")
        for driver in sorted(config.param_names):
            lines.append(f'{driver} = "{config.param_names[driver]}"')
    if config.drivers:
        lines.append("")
        lines.append("[drivers]")
        for name in sorted(config.drivers):
            flag = "true" if config.drivers[name] else "false"
            lines.append(f"{name} = {flag}")
    CONFIG_FILE.write_text("\n".join(lines) + "\n")


def _read_config_file() -> dict[str, object]:
    with CONFIG_FILE.open("rb") as handle:
        raw = tomllib.load(handle)
    data: dict[str, object] = {}
    section = raw.get("section")
    if isinstance(section, str) and section:
        data["section"] = section
    param_names = raw.get("param_names")
    if isinstance(param_names, dict):
        data["param_names"] = {
            str(driver): keyword
            for driver, keyword in param_names.items()
            if isinstance(keyword, str) and keyword
        }
    drivers = raw.get("drivers")
    if isinstance(drivers, dict):
        data["drivers"] = {str(name): bool(enabled) for name, enabled in drivers.items()}
    return data


__all__ = ["AdapterConfig", "CONFIG_FILE", "DEFAULT_SECTION", "load_config", "save_config"]
