"""Connectivity layer: driver registry, extension hook and built-in drivers."""

from __future__ import annotations

import functools
import importlib.metadata as metadata
import logging
import sqlite3
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping

import asyncpg

from .config import AdapterConfig, load_config
from .dsn import parse_data_source
from .errors import ConnectivityError, DriverNotFound

LOG = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "dbconnect.drivers"

DriverFactory = Callable[[Mapping[str, str], "str | None", "str | None"], Any]
ExtensionHandler = Callable[..., Any]


class DriverManager:
    """Maps driver names to connection factories and exposes extension hooks."""

    def __init__(self, drivers: Mapping[str, DriverFactory] | None = None) -> None:
        self._drivers: dict[str, DriverFactory] = dict(drivers or {})
        self._extensions: dict[str, ExtensionHandler] = {}

    def register_driver(self, name: str, factory: DriverFactory) -> None:
        """Register (or replace) the factory used for ``dbi:<name>:`` strings."""

        if not callable(factory):
            raise ValueError(f"Driver '{name}' factory is not callable")
        self._drivers[name] = factory

    def drivers(self) -> tuple[str, ...]:
        return tuple(sorted(self._drivers))

    def connect(self, data_source: str, username: str | None = None, password: str | None = None) -> Any:
        """Open a connection for ``data_source`` and return the driver's handle.

        Errors raised by the driver propagate unchanged.
        """

        driver, attributes = parse_data_source(data_source)
        factory = self._drivers.get(driver)
        if factory is None:
            raise DriverNotFound(driver, self.drivers())
        LOG.debug(
            "Connecting",
            extra={
                "driver": driver,
                "host": attributes.get("host"),
                "port": attributes.get("port"),
                "username": username,
            },
        )
        return factory(attributes, username, password)

    def register_extension(self, name: str, handler: ExtensionHandler) -> None:
        """Expose ``handler`` as a named extension; it receives the manager first."""

        if not callable(handler):
            raise ValueError(f"Extension '{name}' handler is not callable")
        self._extensions[name] = handler

    def list_extensions(self) -> list[str]:
        return sorted(self._extensions)

    def extension(self, name: str) -> Callable[..., Any]:
        """Return the named extension bound to this manager."""

        try:
            handler = self._extensions[name]
        except KeyError:
            raise KeyError(f"Extension '{name}' is not installed") from None
        return functools.partial(handler, self)

    def invoke(self, name: str, *args: object, **kwargs: object) -> Any:
        return self.extension(name)(*args, **kwargs)

    def discover(
        self,
        config: AdapterConfig | None = None,
        *,
        entry_point_group: str = ENTRY_POINT_GROUP,
    ) -> list[str]:
        """Register driver factories advertised through entry points.

        Built-in and explicitly registered drivers are kept; entry points only
        fill in names that are not registered yet.
        """

        config = config or AdapterConfig()
        registered: list[str] = []
        group = metadata.entry_points().select(group=entry_point_group)
        for entry_point in sorted(group, key=lambda ep: ep.name):
            if not config.is_driver_enabled(entry_point.name):
                LOG.debug("Skipping disabled driver", extra={"driver": entry_point.name})
                continue
            if entry_point.name in self._drivers:
                continue
            try:
                factory = entry_point.load()
            except Exception as exc:
                LOG.exception("Driver entry point failed to load", extra={"driver": entry_point.name})
                raise ConnectivityError(f"Failed to load driver '{entry_point.name}'") from exc
            self.register_driver(entry_point.name, factory)
            registered.append(entry_point.name)
        return registered


@dataclass(frozen=True, slots=True)
class MockConnection:
    """Handle returned by the ``Mock`` driver describing the request."""

    attributes: Mapping[str, str]
    username: str | None = None
    password: str | None = field(default=None, repr=False)

    @property
    def database(self) -> str | None:
        return self.attributes.get("dbname")


def mock_driver(attributes: Mapping[str, str], username: str | None, password: str | None) -> MockConnection:
    return MockConnection(attributes=dict(attributes), username=username, password=password)


def sqlite_driver(attributes: Mapping[str, str], username: str | None, password: str | None) -> sqlite3.Connection:
    """Open a SQLite database file; credentials are ignored."""

    kwargs: dict[str, Any] = {}
    if "timeout" in attributes:
        kwargs["timeout"] = float(attributes["timeout"])
    _warn_ignored("SQLite", attributes, {"dbname", "timeout"})
    return sqlite3.connect(attributes.get("dbname", ""), **kwargs)


def pg_driver(attributes: Mapping[str, str], username: str | None, password: str | None):
    """Return the ``asyncpg.connect`` awaitable for a PostgreSQL data source."""

    kwargs: dict[str, Any] = {}
    if attributes.get("host"):
        kwargs["host"] = attributes["host"]
    if attributes.get("port"):
        kwargs["port"] = int(attributes["port"])
    if attributes.get("dbname"):
        kwargs["database"] = attributes["dbname"]
    if attributes.get("sslmode"):
        kwargs["ssl"] = attributes["sslmode"]
    if attributes.get("connect_timeout"):
        kwargs["timeout"] = float(attributes["connect_timeout"])
    if username:
        kwargs["user"] = username
    if password:
        kwargs["password"] = password
    _warn_ignored("Pg", attributes, {"host", "port", "dbname", "sslmode", "connect_timeout"})
    return asyncpg.connect(**kwargs)


BUILTIN_DRIVERS: Mapping[str, DriverFactory] = {
    "Mock": mock_driver,
    "Pg": pg_driver,
    "SQLite": sqlite_driver,
}


def _warn_ignored(driver: str, attributes: Mapping[str, str], known: Iterable[str]) -> None:
    ignored = sorted(set(attributes) - set(known))
    if ignored:
        LOG.warning("Ignoring unsupported driver options", extra={"driver": driver, "options": ignored})


_default: DriverManager | None = None


def default_manager() -> DriverManager:
    """Return the process-wide manager with built-in and entry point drivers.

    Entry points are discovered once, honoring the `[drivers]` flags of the
    adapter config file.
    """

    global _default
    if _default is None:
        manager = DriverManager(BUILTIN_DRIVERS)
        manager.discover(load_config())
        _default = manager
    return _default


__all__ = [
    "BUILTIN_DRIVERS",
    "DriverFactory",
    "DriverManager",
    "ENTRY_POINT_GROUP",
    "MockConnection",
    "default_manager",
    "mock_driver",
    "pg_driver",
    "sqlite_driver",
]
