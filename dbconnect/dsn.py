"""Rendering and parsing of ``dbi:`` connection strings."""

from __future__ import annotations

from typing import Mapping

from .errors import DataSourceError
from .models import ConnectionSettings

PREFIX = "dbi"


def render_data_source(settings: ConnectionSettings, param_names: Mapping[str, str]) -> str:
    """Render ``dbi:<driver>:[host=..;][port=..;]<param>=<database>[;<options>]``.

    The caller guarantees ``settings.driver`` is set and mapped in
    ``param_names``.
    """

    driver = settings.driver
    host = f"host={settings.host};" if settings.host else ""
    port = f"port={settings.port};" if settings.port else ""
    options = f";{settings.options}" if settings.options else ""
    return f"{PREFIX}:{driver}:{host}{port}{param_names[driver]}={settings.database or ''}{options}"


def parse_data_source(text: str) -> tuple[str, dict[str, str]]:
    """Split a connection string into its driver and attribute mapping.

    Attributes are ``key=value`` pairs separated by ``;``. A bare word keeps
    an empty value. Later duplicates win.

    Raises:
        DataSourceError: If the ``dbi`` prefix or the driver is missing.
    """

    prefix, sep, rest = text.partition(":")
    if not sep or prefix.lower() != PREFIX:
        raise DataSourceError(
            f"Invalid data source '{text}': expected format dbi:<driver>:<attributes>"
        )
    driver, _, attributes = rest.partition(":")
    if not driver:
        raise DataSourceError(f"Invalid data source '{text}': driver name is missing")
    parsed: dict[str, str] = {}
    for chunk in attributes.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        key, _, value = chunk.partition("=")
        parsed[key.strip()] = value.strip()
    return driver, parsed


__all__ = ["PREFIX", "parse_data_source", "render_data_source"]
