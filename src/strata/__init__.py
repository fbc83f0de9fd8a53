"""
Strata - layered dynamic configuration

Resolves config keys across runtime overrides, a loaded config file and
application defaults, with aliases, dotted paths into nested values, and
best-effort type coercion.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("strata")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "Strata Contributors"

from strata.api import (  # noqa: E402
    add_config_path,
    all_keys,
    all_settings,
    config_file_used,
    debug,
    default_store,
    get,
    get_bool,
    get_duration,
    get_float64,
    get_int,
    get_size_in_bytes,
    get_string,
    get_string_map,
    get_string_map_string,
    get_string_map_string_slice,
    get_string_slice,
    get_time,
    in_config,
    is_set,
    read_config,
    read_in_config,
    register_alias,
    reset,
    set,
    set_config_file,
    set_config_name,
    set_config_type,
    set_default,
    set_log_file,
    set_verbosity,
    unmarshal,
    unmarshal_key,
)
from strata.config import (  # noqa: E402
    ConfigError,
    ConfigFileError,
    ConfigFileNotFoundError,
    StoreSettings,
    UnsupportedConfigError,
)
from strata.decode import DecodeError  # noqa: E402
from strata.store import Store  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "ConfigError",
    "ConfigFileError",
    "ConfigFileNotFoundError",
    "DecodeError",
    "Store",
    "StoreSettings",
    "UnsupportedConfigError",
    "add_config_path",
    "all_keys",
    "all_settings",
    "config_file_used",
    "debug",
    "default_store",
    "get",
    "get_bool",
    "get_duration",
    "get_float64",
    "get_int",
    "get_size_in_bytes",
    "get_string",
    "get_string_map",
    "get_string_map_string",
    "get_string_map_string_slice",
    "get_string_slice",
    "get_time",
    "in_config",
    "is_set",
    "read_config",
    "read_in_config",
    "register_alias",
    "reset",
    "set",
    "set_config_file",
    "set_config_name",
    "set_config_type",
    "set_default",
    "set_log_file",
    "set_verbosity",
    "unmarshal",
    "unmarshal_key",
]
