"""Configuration source variants and shape detection."""

from __future__ import annotations

import configparser
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol, runtime_checkable

from .errors import UnknownConfigType
from .models import ConnectionSettings

LOG = logging.getLogger(__name__)


@runtime_checkable
class SectionValueLookup(Protocol):
    """Objects answering ``get_value(section, key)``."""

    def get_value(self, section: str, key: str) -> Any: ...


@runtime_checkable
class SectionBlockLookup(Protocol):
    """Objects answering ``get_block(section)`` with a sub-mapping."""

    def get_block(self, section: str) -> Mapping[str, Any] | None: ...


@dataclass(frozen=True, slots=True)
class MappingSource:
    """Settings stored as top-level keys of a plain mapping."""

    config: Mapping[str, Any]

    def read(self, section: str) -> ConnectionSettings:
        return ConnectionSettings.from_lookup(self.config.get)


@dataclass(frozen=True, slots=True)
class SectionValueSource:
    """Settings fetched one at a time through ``get_value(section, key)``."""

    config: SectionValueLookup

    def read(self, section: str) -> ConnectionSettings:
        return ConnectionSettings.from_lookup(lambda key: self.config.get_value(section, key))


@dataclass(frozen=True, slots=True)
class SectionBlockSource:
    """Settings fetched as a whole block through ``get_block(section)``."""

    config: SectionBlockLookup

    def read(self, section: str) -> ConnectionSettings:
        block = self.config.get_block(section) or {}
        return ConnectionSettings.from_lookup(block.get)


@dataclass(frozen=True, slots=True)
class NestedMappingSource:
    """Settings stored as ``config[section][key]``.

    Works for ``configparser`` objects as well as nested dicts such as the
    ones ``tomllib`` produces.
    """

    config: Mapping[str, Mapping[str, Any]]

    def read(self, section: str) -> ConnectionSettings:
        if section not in self.config:
            return ConnectionSettings()
        block = self.config[section]
        return ConnectionSettings.from_lookup(block.get)


ConfigSource = MappingSource | SectionValueSource | SectionBlockSource | NestedMappingSource

_VARIANTS = (MappingSource, SectionValueSource, SectionBlockSource, NestedMappingSource)


def detect_source(config: object, section: str = "database") -> ConfigSource:
    """Wrap ``config`` in the first matching source variant.

    Probes run in a fixed order: section-value objects, section-block
    objects, nested mappings, then plain mappings. A value that already is a
    source variant is returned unchanged.
    """

    if isinstance(config, _VARIANTS):
        return config
    source: ConfigSource
    if callable(getattr(config, "get_value", None)):
        source = SectionValueSource(config)  # type: ignore[arg-type]
    elif callable(getattr(config, "get_block", None)):
        source = SectionBlockSource(config)  # type: ignore[arg-type]
    elif _is_nested_mapping(config, section):
        source = NestedMappingSource(config)  # type: ignore[arg-type]
    elif isinstance(config, Mapping):
        source = MappingSource(config)
    else:
        raise UnknownConfigType(config)
    LOG.debug("Detected config source", extra={"source": type(source).__name__, "section": section})
    return source


def _is_nested_mapping(config: object, section: str) -> bool:
    if isinstance(config, configparser.RawConfigParser):
        return True
    if not isinstance(config, Mapping):
        return False
    return isinstance(config.get(section), Mapping)


__all__ = [
    "ConfigSource",
    "MappingSource",
    "NestedMappingSource",
    "SectionBlockLookup",
    "SectionBlockSource",
    "SectionValueLookup",
    "SectionValueSource",
    "detect_source",
]
