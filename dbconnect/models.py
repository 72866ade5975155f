"""Shared dataclasses describing settings and rendered data sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

SETTING_NAMES: tuple[str, ...] = ("driver", "host", "port", "database", "options", "username", "password")

DEFAULT_PARAM_NAMES: Mapping[str, str] = {
    "CSV": "f_dir",
    "Mock": "dbname",
    "mysql": "database",
    "Pg": "dbname",
    "SQLite": "dbname",
}


def _coerce(value: object) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True, slots=True)
class ConnectionSettings:
    """The fixed set of settings read from a config section."""

    driver: str | None = None
    host: str | None = None
    port: str | None = None
    database: str | None = None
    options: str | None = None
    username: str | None = None
    password: str | None = None

    @classmethod
    def from_lookup(cls, lookup) -> ConnectionSettings:
        """Build settings by calling ``lookup(name)`` for every setting name."""

        return cls(**{name: _coerce(lookup(name)) for name in SETTING_NAMES})


@dataclass(frozen=True, slots=True)
class DataSource:
    """Rendered connection string plus the credentials to send with it."""

    dsn: str
    username: str | None = None
    password: str | None = field(default=None, repr=False)


__all__ = ["ConnectionSettings", "DataSource", "DEFAULT_PARAM_NAMES", "SETTING_NAMES"]
