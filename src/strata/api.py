"""
Module-level convenience API backed by one process-wide Store.

    import strata

    strata.set_default("port", 8080)
    strata.add_config_path("/etc/myapp")
    strata.read_in_config()
    port = strata.get_int("port")

Use strata.Store directly for isolated instances (tests, libraries).
"""

import datetime as _datetime
import pathlib as _pathlib
import typing as _typing

import strata.store as store

T = _typing.TypeVar("T")

_default_store = store.Store()


def default_store() -> store.Store:
    """Return the process-wide Store."""
    return _default_store


def reset() -> store.Store:
    """Replace the process-wide Store with a fresh one and return it."""
    global _default_store
    _default_store = store.Store()
    return _default_store


def get(key: str) -> _typing.Any:
    return _default_store.get(key)


def get_string(key: str) -> str:
    return _default_store.get_string(key)


def get_bool(key: str) -> bool:
    return _default_store.get_bool(key)


def get_int(key: str) -> int:
    return _default_store.get_int(key)


def get_float64(key: str) -> float:
    return _default_store.get_float64(key)


def get_time(key: str) -> _datetime.datetime:
    return _default_store.get_time(key)


def get_duration(key: str) -> _datetime.timedelta:
    return _default_store.get_duration(key)


def get_string_slice(key: str) -> list[str]:
    return _default_store.get_string_slice(key)


def get_string_map(key: str) -> dict[str, _typing.Any]:
    return _default_store.get_string_map(key)


def get_string_map_string(key: str) -> dict[str, str]:
    return _default_store.get_string_map_string(key)


def get_string_map_string_slice(key: str) -> dict[str, list[str]]:
    return _default_store.get_string_map_string_slice(key)


def get_size_in_bytes(key: str) -> int:
    return _default_store.get_size_in_bytes(key)


def set(key: str, value: _typing.Any) -> None:  # noqa: A001 - mirrors Store.set
    _default_store.set(key, value)


def set_default(key: str, value: _typing.Any) -> None:
    _default_store.set_default(key, value)


def register_alias(alias: str, key: str) -> bool:
    return _default_store.register_alias(alias, key)


def is_set(key: str) -> bool:
    return _default_store.is_set(key)


def in_config(key: str) -> bool:
    return _default_store.in_config(key)


def all_keys() -> list[str]:
    return _default_store.all_keys()


def all_settings() -> dict[str, _typing.Any]:
    return _default_store.all_settings()


def unmarshal(target: type[T]) -> T:
    return _default_store.unmarshal(target)


def unmarshal_key(key: str, target: type[T]) -> T:
    return _default_store.unmarshal_key(key, target)


def set_config_file(path: str | _pathlib.Path) -> None:
    _default_store.set_config_file(path)


def set_config_name(name: str) -> None:
    _default_store.set_config_name(name)


def set_config_type(config_type: str) -> None:
    _default_store.set_config_type(config_type)


def add_config_path(path: str) -> None:
    _default_store.add_config_path(path)


def config_file_used() -> str:
    return _default_store.config_file_used()


def read_in_config() -> None:
    _default_store.read_in_config()


def read_config(content: str | bytes, config_type: str | None = None) -> None:
    _default_store.read_config(content, config_type)


def set_verbosity(verbose: bool) -> None:
    _default_store.set_verbosity(verbose)


def set_log_file(path: str | _pathlib.Path) -> None:
    _default_store.set_log_file(path)


def debug() -> None:
    _default_store.debug()
