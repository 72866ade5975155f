"""Exceptions raised while turning configuration into a connection."""

from __future__ import annotations


class ConfigAdapterError(ValueError):
    """Base error for invalid input handed to the adapter."""


class NoParameters(ConfigAdapterError):
    """Raised when connect is called without any configuration."""

    def __init__(self) -> None:
        super().__init__("error: No parameter given")


class OddArgumentCount(ConfigAdapterError):
    """Raised when a flattened key/value argument list has an unpaired key."""

    def __init__(self, count: int) -> None:
        super().__init__(f"error: Odd number of arguments ({count}); expected key/value pairs")
        self.count = count


class UnknownConfigType(ConfigAdapterError, TypeError):
    """Raised when the config object matches none of the supported shapes."""

    def __init__(self, config: object) -> None:
        super().__init__(f"error: Unknown type of configuration: {type(config).__name__}")
        self.config_type = type(config)


class MissingDriver(ConfigAdapterError):
    """Raised when the driver setting is empty or absent."""

    def __init__(self, section: str) -> None:
        super().__init__(f"error: Database driver not specified in section '{section}'")
        self.section = section


class UnknownDriver(ConfigAdapterError):
    """Raised when no database parameter keyword is known for a driver."""

    def __init__(self, driver: str, known: tuple[str, ...]) -> None:
        super().__init__(
            f"error: No database parameter name known for driver '{driver}'"
            f" (known drivers: {', '.join(known)}); pass param_names to map it"
        )
        self.driver = driver


class ConnectivityError(RuntimeError):
    """Base error for connectivity layer lookups."""


class DataSourceError(ConnectivityError):
    """Raised when a connection string cannot be parsed."""


class DriverNotFound(ConnectivityError):
    """Raised when the connectivity layer has no driver registered for a name."""

    def __init__(self, driver: str, available: tuple[str, ...]) -> None:
        listing = ", ".join(available) or "none"
        super().__init__(f"No driver registered for '{driver}' (available: {listing})")
        self.driver = driver


__all__ = [
    "ConfigAdapterError",
    "ConnectivityError",
    "DataSourceError",
    "DriverNotFound",
    "MissingDriver",
    "NoParameters",
    "OddArgumentCount",
    "UnknownConfigType",
    "UnknownDriver",
]
