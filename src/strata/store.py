"""
Store: the public face of a layered config.

A Store combines:
- an alias table and three layers (overrides > config > defaults),
- a KeyResolver answering lookups across them,
- the config file search (name, paths, explicit file and type),
- typed accessors that re-cast the resolved value to the requested type.

Every lookup is soft: a missing or mistyped key yields None or the target
type's zero value. Only loading and decoding raise.

Example:
    >>> store = Store()
    >>> store.set_default("server", {"port": 8080, "host": "localhost"})
    >>> store.set("Server.Port", "9090")
    >>> store.get_int("server.port")
    9090
    >>> store.get_string("server.host")
    'localhost'
"""

from __future__ import annotations

import datetime as _datetime
import logging as _logging
import pathlib as _pathlib
import threading as _threading
import typing as _typing

import rich.console as _rich_console
import rich.pretty as _rich_pretty

import strata.config.settings as settings
import strata.config.sources as sources
import strata.core.layers as layers
import strata.core.resolver as resolver
import strata.decode as decode
import strata.logs as logs
import strata.utils.cast as cast
import strata.utils.sizes as sizes

_logger = _logging.getLogger(__name__)

T = _typing.TypeVar("T")


class Store:
    """
    A layered, dynamic configuration store.

    Not designed for concurrent mutation, but every operation holds one
    re-entrant lock covering all layers and the alias table, so concurrent
    readers and writers see consistent state.

    Args:
        options: Store options. Defaults to StoreSettings(), which reads
            STRATA_* environment variables.
    """

    def __init__(self, options: settings.StoreSettings | None = None) -> None:
        self._options = options if options is not None else settings.StoreSettings()
        self._lock = _threading.RLock()
        self._layers = layers.LayeredStore()
        self._resolver = resolver.KeyResolver(
            self._layers,
            delimiter=self._options.key_delimiter,
            type_by_default_value=self._options.type_by_default_value,
        )

        self._config_name = self._options.config_name
        self._config_file: _pathlib.Path | None = None
        self._config_type = self._options.config_type or ""
        self._config_paths: list[_pathlib.Path] = []

        if self._options.config_file:
            self.set_config_file(self._options.config_file)
        for path in self._options.config_paths:
            self.add_config_path(path)
        if self._options.verbose:
            self.set_verbosity(True)
        if self._options.log_file:
            self.set_log_file(self._options.log_file)

    @classmethod
    def from_settings(cls, options: settings.StoreSettings) -> Store:
        """Create a store from explicit options."""
        return cls(options)

    @property
    def options(self) -> settings.StoreSettings:
        """The options this store was created with."""
        return self._options

    @property
    def key_delimiter(self) -> str:
        """Separator for nested key paths."""
        return self._resolver.delimiter

    @property
    def type_by_default_value(self) -> bool:
        """Whether values are coerced to the kind of the key's default."""
        return self._resolver.type_by_default_value

    @type_by_default_value.setter
    def type_by_default_value(self, enabled: bool) -> None:
        with self._lock:
            self._resolver.type_by_default_value = enabled

    # =========================================================================
    # Logging
    # =========================================================================

    def set_verbosity(self, verbose: bool) -> None:
        """Trace lookups at DEBUG level when verbose."""
        logs.set_verbosity(verbose)

    def set_log_file(self, path: str | _pathlib.Path) -> None:
        """Write the strata log to path (the directory must exist)."""
        logs.set_log_file(path)

    # =========================================================================
    # Writing values
    # =========================================================================

    def set(self, key: str, value: _typing.Any) -> None:
        """Set an override. Overrides win over config and defaults."""
        with self._lock:
            self._layers.set_override(key, value)

    def set_default(self, key: str, value: _typing.Any) -> None:
        """Set a default, used when neither overrides nor config have the key."""
        with self._lock:
            self._layers.set_default(key, value)

    def register_alias(self, alias: str, key: str) -> bool:
        """
        Make alias another name for key.

        Values already stored under alias move to key. Circular aliases are
        logged and skipped.

        Returns:
            True if the alias was registered.
        """
        with self._lock:
            return self._layers.register_alias(alias, key)

    # =========================================================================
    # Resolution
    # =========================================================================

    def get(self, key: str) -> _typing.Any:
        """
        Resolve key across all layers and coerce the result.

        Returns:
            The value, or None if the key is not set anywhere.
        """
        with self._lock:
            return self._resolver.get(key)

    def is_set(self, key: str) -> bool:
        """Check whether get(key) resolves to anything."""
        return self.get(key) is not None

    def in_config(self, key: str) -> bool:
        """Check whether the loaded config (not overrides or defaults) has key."""
        with self._lock:
            return self._layers.in_config(key)

    def all_keys(self) -> list[str]:
        """Canonical keys present in any layer, without duplicates."""
        with self._lock:
            return list(self._layers.keys())

    def all_settings(self) -> dict[str, _typing.Any]:
        """Every known key mapped to its resolved value."""
        with self._lock:
            return {key: self.get(key) for key in self.all_keys()}

    # =========================================================================
    # Typed accessors
    # =========================================================================

    def get_string(self, key: str) -> str:
        """Resolve key as a str ("" when unset)."""
        return cast.to_string(self.get(key))

    def get_bool(self, key: str) -> bool:
        """Resolve key as a bool (False when unset)."""
        return cast.to_bool(self.get(key))

    def get_int(self, key: str) -> int:
        """Resolve key as an int (0 when unset)."""
        return cast.to_int(self.get(key))

    def get_float64(self, key: str) -> float:
        """Resolve key as a float (0.0 when unset)."""
        return cast.to_float(self.get(key))

    get_float = get_float64

    def get_time(self, key: str) -> _datetime.datetime:
        """Resolve key as a datetime (cast.ZERO_TIME when unset)."""
        return cast.to_time(self.get(key))

    def get_duration(self, key: str) -> _datetime.timedelta:
        """Resolve key as a timedelta (zero when unset)."""
        return cast.to_duration(self.get(key))

    def get_string_slice(self, key: str) -> list[str]:
        """Resolve key as a list of strings."""
        return cast.to_string_slice(self.get(key))

    def get_string_map(self, key: str) -> dict[str, _typing.Any]:
        """Resolve key as a dict with string keys."""
        return cast.to_string_map(self.get(key))

    def get_string_map_string(self, key: str) -> dict[str, str]:
        """Resolve key as a dict of strings."""
        return cast.to_string_map_string(self.get(key))

    def get_string_map_string_slice(self, key: str) -> dict[str, list[str]]:
        """Resolve key as a dict of string lists."""
        return cast.to_string_map_string_slice(self.get(key))

    def get_size_in_bytes(self, key: str) -> int:
        """Resolve key as a byte count, parsing sizes such as "10MB"."""
        return sizes.parse_size_in_bytes(cast.to_string(self.get(key)))

    # =========================================================================
    # Structured decode
    # =========================================================================

    def unmarshal(self, target: type[T]) -> T:
        """
        Decode all settings into target.

        Raises:
            decode.DecodeError: If the settings do not fit target.
        """
        return decode.decode(self.all_settings(), target)

    def unmarshal_key(self, key: str, target: type[T]) -> T:
        """
        Decode the value resolved for key into target.

        Raises:
            decode.DecodeError: If the value does not fit target.
        """
        return decode.decode(self.get(key), target)

    # =========================================================================
    # Config file
    # =========================================================================

    def set_config_file(self, path: str | _pathlib.Path) -> None:
        """Use this file instead of searching the config paths. Empty is ignored."""
        if path:
            self._config_file = _pathlib.Path(path)

    def set_config_name(self, name: str) -> None:
        """File name (without extension) to search for. Empty is ignored."""
        if name:
            self._config_name = name

    def set_config_type(self, config_type: str) -> None:
        """Format of the config file, overriding its extension. Empty is ignored."""
        if config_type:
            self._config_type = config_type.lstrip(".").lower()

    def add_config_path(self, path: str) -> None:
        """
        Append a directory to the config search path.

        Paths are searched in the order added. "~" and environment variables
        are expanded; the directory is not checked for existence.
        """
        if not path:
            return
        directory = sources.abs_pathify(path)
        _logger.info("Adding %s to search paths", directory)
        if directory not in self._config_paths:
            self._config_paths.append(directory)

    @property
    def config_paths(self) -> list[_pathlib.Path]:
        """Directories searched for the config file, in order."""
        return list(self._config_paths)

    def config_file_used(self) -> str:
        """Path of the config file in use, or "" if none has been resolved."""
        return str(self._config_file) if self._config_file is not None else ""

    def _resolve_config_file(self) -> _pathlib.Path:
        if self._config_file is None:
            self._config_file = sources.find_config_file(self._config_paths, self._config_name)
        return self._config_file

    def read_in_config(self) -> None:
        """
        Find, read and parse the config file, replacing the config layer.

        The previous config layer is kept if anything fails.

        Raises:
            sources.UnsupportedConfigError: The config type is not supported.
            sources.ConfigFileNotFoundError: No config file on the search paths.
            sources.ConfigFileError: The file cannot be read or parsed.
        """
        _logger.info("Attempting to read in config file")
        if self._config_type and not sources.is_supported(self._config_type):
            raise sources.UnsupportedConfigError(self._config_type)

        path = self._resolve_config_file()
        config_type = self._config_type or sources.config_type_from_path(path)
        data = sources.load_config_file(path, config_type)

        with self._lock:
            self._layers.replace_config(data)

    def read_config(self, content: str | bytes, config_type: str | None = None) -> None:
        """
        Parse in-memory content and replace the config layer with it.

        Args:
            content: Config text or bytes.
            config_type: Format name. Defaults to the configured type.

        Raises:
            sources.UnsupportedConfigError: The config type is not supported.
            sources.ConfigFileError: The content cannot be parsed.
        """
        config_type = config_type or self._config_type
        data = sources.parse_config(content, config_type)
        with self._lock:
            self._layers.replace_config(data)

    def replace_config(self, mapping: _typing.Mapping[str, _typing.Any]) -> None:
        """Replace the config layer with an already-parsed mapping."""
        with self._lock:
            self._layers.replace_config(mapping)

    # =========================================================================
    # Debugging
    # =========================================================================

    def debug(self, console: _rich_console.Console | None = None) -> None:
        """Pretty-print the aliases and the raw contents of every layer."""
        console = console or _rich_console.Console()
        with self._lock:
            snapshot = self._layers.snapshot()
        for name, contents in snapshot.items():
            console.print(f"{name.capitalize()}:")
            console.print(_rich_pretty.Pretty(contents))
