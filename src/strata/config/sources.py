"""
Locating and parsing config sources.

This module provides:

- find_config_file(): search an ordered list of directories for
  "<name>.<ext>" with any supported extension.
- parse_config(): turn raw bytes/text of a declared format into a plain
  dict, the data model the config layer is built from.
- load_config_file(): read and parse one file.

Supported formats: TOML (tomllib), YAML (PyYAML), JSON.

Errors:
- UnsupportedConfigError: the format name is not one of the above.
- ConfigFileNotFoundError: no candidate file exists on any search path.
- ConfigFileError: a file could not be read, is malformed, or its top
  level is not a mapping.
"""

import json as _json
import logging as _logging
import os as _os
import pathlib as _pathlib
import tomllib as _tomllib
import typing as _typing

import yaml as _yaml

_logger = _logging.getLogger(__name__)

SUPPORTED_EXTENSIONS: tuple[str, ...] = ("toml", "yaml", "yml", "json")
"""Config formats, in the order they are probed on each search path."""


class ConfigError(Exception):
    """Base class for errors raised while loading config."""


class UnsupportedConfigError(ConfigError):
    """The config type is not a supported format."""

    def __init__(self, config_type: str) -> None:
        self.config_type = config_type
        super().__init__(f"Unsupported config type {config_type!r}")


class ConfigFileNotFoundError(ConfigError):
    """No config file with the configured name exists on any search path."""

    def __init__(self, name: str, locations: _typing.Sequence[_pathlib.Path]) -> None:
        self.name = name
        self.locations = list(locations)
        searched = ", ".join(str(p) for p in self.locations) or "<no search paths>"
        super().__init__(f"Config file {name!r} not found in [{searched}]")


class ConfigFileError(ConfigError):
    """Error loading or parsing a configuration source."""

    def __init__(self, path: _pathlib.Path | None, message: str) -> None:
        self.path = path
        if path is None:
            super().__init__(f"Error in config data: {message}")
        else:
            super().__init__(f"Error in config file {path}: {message}")


def is_supported(config_type: str) -> bool:
    """Check whether config_type names a supported format."""
    return config_type.lower() in SUPPORTED_EXTENSIONS


def config_type_from_path(path: _pathlib.Path) -> str:
    """Derive the config type from a file extension ("" if there is none)."""
    return path.suffix[1:].lower()


def abs_pathify(path: str) -> _pathlib.Path:
    """
    Turn a user-supplied search path into an absolute path.

    Expands environment variables ($HOME, ${XDG_CONFIG_HOME}) and a leading
    "~" before making the path absolute. The path need not exist.
    """
    expanded = _os.path.expanduser(_os.path.expandvars(path))
    return _pathlib.Path(expanded).absolute()


def search_in_path(
    directory: _pathlib.Path,
    name: str,
    extensions: _typing.Sequence[str] = SUPPORTED_EXTENSIONS,
) -> _pathlib.Path | None:
    """
    Look for "<name>.<ext>" in directory, trying extensions in order.

    Returns:
        The first existing file, or None.
    """
    _logger.debug("Searching for config in %s", directory)
    for ext in extensions:
        candidate = directory / f"{name}.{ext}"
        _logger.debug("Checking for %s", candidate)
        if candidate.is_file():
            _logger.debug("Found: %s", candidate)
            return candidate
    return None


def find_config_file(
    paths: _typing.Sequence[_pathlib.Path],
    name: str,
    extensions: _typing.Sequence[str] = SUPPORTED_EXTENSIONS,
) -> _pathlib.Path:
    """
    Search paths in order and return the first matching config file.

    Args:
        paths: Directories to search, highest priority first.
        name: File name without extension.
        extensions: Extensions to try in each directory.

    Returns:
        Path to the config file.

    Raises:
        ConfigFileNotFoundError: If no directory holds a matching file.
    """
    _logger.info("Searching for config in %s", [str(p) for p in paths])
    for directory in paths:
        found = search_in_path(directory, name, extensions)
        if found is not None:
            return found
    raise ConfigFileNotFoundError(name, paths)


def parse_config(
    content: str | bytes,
    config_type: str,
    *,
    path: _pathlib.Path | None = None,
) -> dict[str, _typing.Any]:
    """
    Parse config content of the given format into a dict.

    Args:
        content: Raw text or bytes (bytes are decoded as UTF-8).
        config_type: Format name, one of SUPPORTED_EXTENSIONS.
        path: Source file, used only in error messages.

    Returns:
        The parsed mapping. Empty content yields an empty dict.

    Raises:
        UnsupportedConfigError: If config_type is not supported.
        ConfigFileError: If the content is malformed or not a mapping.
    """
    config_type = config_type.lower()
    if not is_supported(config_type):
        raise UnsupportedConfigError(config_type)

    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ConfigFileError(path, f"not valid UTF-8: {e}") from e

    if config_type in ("yaml", "yml"):
        try:
            parsed = _yaml.safe_load(content)
        except _yaml.YAMLError as e:
            raise ConfigFileError(path, f"invalid YAML: {e}") from e
    elif config_type == "toml":
        try:
            parsed = _tomllib.loads(content)
        except _tomllib.TOMLDecodeError as e:
            raise ConfigFileError(path, f"invalid TOML: {e}") from e
    else:
        if not content.strip():
            return {}
        try:
            parsed = _json.loads(content)
        except _json.JSONDecodeError as e:
            raise ConfigFileError(path, f"invalid JSON: {e}") from e

    # Empty YAML document
    if parsed is None:
        return {}

    if not isinstance(parsed, dict):
        type_name = type(parsed).__name__
        raise ConfigFileError(path, f"config must be a mapping, got {type_name}")

    return parsed


def load_config_file(
    path: _pathlib.Path,
    config_type: str | None = None,
) -> dict[str, _typing.Any]:
    """
    Read and parse a config file.

    Args:
        path: File to read.
        config_type: Format name. Derived from the extension when omitted.

    Raises:
        UnsupportedConfigError: If the format is not supported.
        ConfigFileError: If the file cannot be read or parsed.
    """
    config_type = config_type or config_type_from_path(path)
    if not is_supported(config_type):
        raise UnsupportedConfigError(config_type)

    try:
        content = path.read_bytes()
    except PermissionError as e:
        raise ConfigFileError(path, f"permission denied: {e}") from e
    except OSError as e:
        raise ConfigFileError(path, f"cannot read file: {e}") from e

    return parse_config(content, config_type, path=path)
