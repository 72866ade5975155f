"""Connect to a database using settings read from a configuration object."""

from __future__ import annotations

__version__ = "0.3.0"

from .adapter import aconnect, build_data_source, connect, connect_from_pairs, install
from .drivers import DriverManager, MockConnection, default_manager
from .errors import (
    ConfigAdapterError,
    ConnectivityError,
    DataSourceError,
    DriverNotFound,
    MissingDriver,
    NoParameters,
    OddArgumentCount,
    UnknownConfigType,
    UnknownDriver,
)
from .models import DEFAULT_PARAM_NAMES, SETTING_NAMES, ConnectionSettings, DataSource
from .sources import (
    ConfigSource,
    MappingSource,
    NestedMappingSource,
    SectionBlockSource,
    SectionValueSource,
    detect_source,
)

__all__ = [
    "ConfigAdapterError",
    "ConfigSource",
    "ConnectionSettings",
    "ConnectivityError",
    "DEFAULT_PARAM_NAMES",
    "DataSource",
    "DataSourceError",
    "DriverManager",
    "DriverNotFound",
    "MappingSource",
    "MissingDriver",
    "MockConnection",
    "NestedMappingSource",
    "NoParameters",
    "OddArgumentCount",
    "SETTING_NAMES",
    "SectionBlockSource",
    "SectionValueSource",
    "UnknownConfigType",
    "UnknownDriver",
    "aconnect",
    "build_data_source",
    "connect",
    "connect_from_pairs",
    "default_manager",
    "detect_source",
    "install",
]
