"""
Config sources and store options for Strata.

Uses pydantic-settings for the store's own options and PyYAML / tomllib /
json for parsing config files.
"""

from strata.config.settings import DEFAULT_CONFIG_NAME, StoreSettings
from strata.config.sources import (
    SUPPORTED_EXTENSIONS,
    ConfigError,
    ConfigFileError,
    ConfigFileNotFoundError,
    UnsupportedConfigError,
)

__all__ = [
    "DEFAULT_CONFIG_NAME",
    "SUPPORTED_EXTENSIONS",
    "ConfigError",
    "ConfigFileError",
    "ConfigFileNotFoundError",
    "StoreSettings",
    "UnsupportedConfigError",
]
