"""Build a connection string from configuration and hand it to the connectivity layer."""

from __future__ import annotations

import getpass
import inspect
import logging
import os
from typing import Any, Mapping

from .config import AdapterConfig, load_config
from .drivers import DriverManager, default_manager
from .dsn import render_data_source
from .errors import MissingDriver, NoParameters, OddArgumentCount, UnknownDriver
from .models import DEFAULT_PARAM_NAMES, DataSource
from .sources import detect_source

LOG = logging.getLogger(__name__)

EXTENSION_NAME = "connect_from_config"

_MISSING: Any = object()


def build_data_source(
    config: object = _MISSING,
    section: str | None = None,
    *,
    param_names: Mapping[str, str] | None = None,
    adapter_config: AdapterConfig | None = None,
) -> DataSource:
    """Read settings from ``config`` and render the connection string.

    Raises:
        NoParameters: If no config was given.
        UnknownConfigType: If ``config`` matches no supported shape.
        MissingDriver: If the section has no driver.
        UnknownDriver: If no database parameter keyword is known for the driver.
    """

    if config is _MISSING:
        raise NoParameters()
    adapter_config = adapter_config or load_config()
    section = section or adapter_config.section
    settings = detect_source(config, section).read(section)

    if not settings.driver:
        raise MissingDriver(section)
    names = {**DEFAULT_PARAM_NAMES, **adapter_config.param_names, **(param_names or {})}
    if settings.driver not in names:
        raise UnknownDriver(settings.driver, tuple(sorted(names)))

    username = settings.username or _current_user()
    dsn = render_data_source(settings, names)
    LOG.debug(
        "Rendered data source",
        extra={
            "section": section,
            "driver": settings.driver,
            "host": settings.host,
            "port": settings.port,
            "username": username,
        },
    )
    return DataSource(dsn=dsn, username=username, password=settings.password)


def _current_user() -> str:
    """Name of the OS account running this process, looked up by uid."""

    if hasattr(os, "getuid"):
        import pwd

        return pwd.getpwuid(os.getuid()).pw_name
    return getpass.getuser()


def connect(
    config: object = _MISSING,
    section: str | None = None,
    *,
    param_names: Mapping[str, str] | None = None,
    manager: DriverManager | None = None,
    adapter_config: AdapterConfig | None = None,
) -> Any:
    """Connect using the settings stored in ``config``.

    ``config`` may be a plain mapping holding the settings as top-level keys,
    or an object exposing the ``section`` through ``get_value(section, key)``,
    ``get_block(section)`` or ``config[section][key]`` (``configparser`` and
    parsed TOML both qualify). ``section`` defaults to ``"database"``.

    Settings: ``driver`` (mandatory), ``database``, ``host``, ``port``,
    ``options`` (raw driver options), ``username`` (defaults to the current
    user) and ``password``.

    Returns whatever the driver returns; driver errors are not wrapped.
    """

    source = build_data_source(config, section, param_names=param_names, adapter_config=adapter_config)
    manager = manager or default_manager()
    return manager.connect(source.dsn, source.username, source.password)


async def aconnect(
    config: object = _MISSING,
    section: str | None = None,
    *,
    param_names: Mapping[str, str] | None = None,
    manager: DriverManager | None = None,
    adapter_config: AdapterConfig | None = None,
) -> Any:
    """Async variant of :func:`connect` that awaits drivers returning awaitables."""

    handle = connect(
        config,
        section,
        param_names=param_names,
        manager=manager,
        adapter_config=adapter_config,
    )
    if inspect.isawaitable(handle):
        return await handle
    return handle


def connect_from_pairs(*args: Any) -> Any:
    """Flattened form: ``connect_from_pairs("config", cfg, "section", "db")``."""

    if not args:
        raise NoParameters()
    if len(args) % 2 != 0:
        raise OddArgumentCount(len(args))
    kwargs = dict(zip(args[::2], args[1::2]))
    kwargs.setdefault("config", None)
    return connect(**kwargs)


def _connect_from_config(manager: DriverManager, *args: Any, **kwargs: Any) -> Any:
    kwargs.setdefault("manager", manager)
    return connect(*args, **kwargs)


def install(manager: DriverManager | None = None) -> DriverManager:
    """Register ``connect_from_config`` as an extension of the connectivity layer.

    Opt-in: nothing is registered until this is called.
    """

    manager = manager or default_manager()
    manager.register_extension(EXTENSION_NAME, _connect_from_config)
    LOG.debug("Installed extension", extra={"extension": EXTENSION_NAME})
    return manager


__all__ = [
    "EXTENSION_NAME",
    "aconnect",
    "build_data_source",
    "connect",
    "connect_from_pairs",
    "install",
]
