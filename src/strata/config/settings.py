"""
Options of a Store, loaded with pydantic-settings.

These configure the store itself (where to look for the config file, which
delimiter splits nested keys, logging), not the config values it holds.
They can come from constructor arguments or STRATA_* environment variables:

  STRATA_CONFIG_NAME=myapp
  STRATA_CONFIG_PATHS='["/etc/myapp", "~/.myapp"]'
  STRATA_TYPE_BY_DEFAULT_VALUE=true
"""

import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import strata.core.paths as paths

DEFAULT_CONFIG_NAME = "config"
"""File name (without extension) searched for on the config paths."""


class StoreSettings(_pydantic_settings.BaseSettings):
    """
    Store options.

    Precedence: constructor arguments, then STRATA_* environment variables,
    then the defaults below.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="STRATA_",
        extra="ignore",
    )

    key_delimiter: str = _pydantic.Field(default=paths.DEFAULT_KEY_DELIMITER, min_length=1)
    """Separator for nested key paths. Fixed for the store's lifetime."""

    config_name: str = _pydantic.Field(default=DEFAULT_CONFIG_NAME, min_length=1)
    """File name searched for on config_paths."""

    config_file: str | None = None
    """Explicit config file. Skips the search when set."""

    config_type: str | None = None
    """Explicit format name. Derived from the file extension when unset."""

    config_paths: list[str] = _pydantic.Field(default_factory=list)
    """Directories searched for the config file, in order."""

    type_by_default_value: bool = False
    """Coerce values to the kind of the key's default, when one exists."""

    verbose: bool = False
    """Log lookup tracing at DEBUG level."""

    log_file: str | None = None
    """Also write the strata log to this file."""

    @_pydantic.field_validator("config_type")
    @classmethod
    def _normalize_config_type(cls, value: str | None) -> str | None:
        """Accept ".yaml" and "YAML" as "yaml"; treat "" as unset."""
        if value is None:
            return None
        value = value.strip().lstrip(".").lower()
        return value or None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[_pydantic_settings.BaseSettings],
        init_settings: _pydantic_settings.PydanticBaseSettingsSource,
        env_settings: _pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: _pydantic_settings.PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: _pydantic_settings.PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[_pydantic_settings.PydanticBaseSettingsSource, ...]:
        """Only constructor arguments and environment variables are read."""
        return (init_settings, env_settings)

    def with_overrides(self, **changes: _typing.Any) -> "StoreSettings":
        """Return a validated copy with some fields replaced."""
        data = self.model_dump()
        data.update(changes)
        return type(self).model_validate(data)
