"""
The three precedence-ordered layers of config values.

Layers (highest precedence first):
1. overrides: values set programmatically at runtime
2. config: the contents of the last loaded source, replaced wholesale
3. defaults: fallback values supplied by the application

A key may hold different values in several layers at once. Nothing here
merges them; picking a winner is the resolver's job.

All keys are stored in canonical form: lowercased, then resolved through
the alias table.
"""

from __future__ import annotations

import collections.abc as _abc
import enum as _enum
import typing as _typing

import strata.core.aliases as aliases
import strata.core.paths as paths
import strata.core.values as values


class Layer(_enum.Enum):
    """Config layers, declared in precedence order (highest first)."""

    OVERRIDES = "overrides"
    CONFIG = "config"
    DEFAULTS = "defaults"


class LayeredStore:
    """
    Holds the overrides, config and defaults layers plus the alias table.

    Example:
        >>> store = LayeredStore()
        >>> store.set_default("Port", 8080)
        >>> store.set_override("port", 9090)
        >>> store.lookup(Layer.OVERRIDES, "port"), store.lookup(Layer.DEFAULTS, "port")
        (9090, 8080)
    """

    def __init__(self, alias_table: aliases.AliasTable | None = None) -> None:
        self._aliases = alias_table if alias_table is not None else aliases.AliasTable()
        self._layers: dict[Layer, dict[str, values.Value]] = {layer: {} for layer in Layer}

    @property
    def aliases(self) -> aliases.AliasTable:
        """The alias table used to canonicalize keys."""
        return self._aliases

    def canonical(self, key: str) -> str:
        """Lowercase key and resolve it through the alias table."""
        return self._aliases.resolve(key.lower())

    def set(self, layer: Layer, key: str, value: values.Value) -> None:
        """
        Store value under the canonical form of key in layer.

        Nested mappings in value get lowercase keys so that dotted lookups
        stay case-insensitive.
        """
        self._layers[layer][self.canonical(key)] = paths.insensitivise_value(value)

    def set_default(self, key: str, value: values.Value) -> None:
        """Store a value in the defaults layer."""
        self.set(Layer.DEFAULTS, key, value)

    def set_override(self, key: str, value: values.Value) -> None:
        """Store a value in the overrides layer."""
        self.set(Layer.OVERRIDES, key, value)

    def replace_config(self, mapping: _abc.Mapping[_typing.Any, values.Value]) -> None:
        """
        Replace the whole config layer with the contents of mapping.

        The previous config layer is discarded, not merged. Keys at every
        depth are lowercased and top-level keys are canonicalized.
        """
        normalized = paths.insensitivise(mapping)
        self._layers[Layer.CONFIG] = {
            self._aliases.resolve(key): value for key, value in normalized.items()
        }

    def lookup(self, layer: Layer, key: str) -> values.Value:
        """
        Return the value stored for an already-canonical key in layer.

        Returns:
            The stored value, or values.MISSING when layer has no entry.
        """
        return self._layers[layer].get(key, values.MISSING)

    def in_config(self, key: str) -> bool:
        """Check whether the config layer (only) has an entry for key."""
        return self.canonical(key) in self._layers[Layer.CONFIG]

    def register_alias(self, alias: str, key: str) -> bool:
        """
        Register alias for key and move existing alias entries to the target.

        Values already stored under the alias name in any layer would become
        unreachable once lookups are redirected, so each is moved to the
        alias's resolved target, replacing whatever was stored there.

        Returns:
            True if the alias was registered, False if rejected.
        """
        alias = alias.lower()
        if not self._aliases.register(alias, key):
            return False

        target = self._aliases.resolve(alias)
        for entries in self._layers.values():
            if alias in entries:
                entries[target] = entries.pop(alias)
        return True

    def keys(self) -> set[str]:
        """Union of the keys stored in all layers."""
        result: set[str] = set()
        for entries in self._layers.values():
            result.update(entries)
        return result

    def snapshot(self) -> dict[str, dict[str, _typing.Any]]:
        """
        Shallow copies of every layer and of the alias table.

        Returns:
            Dict with keys "aliases", "overrides", "config", "defaults".
        """
        result: dict[str, dict[str, _typing.Any]] = {"aliases": self._aliases.as_dict()}
        for layer in Layer:
            result[layer.value] = dict(self._layers[layer])
        return result
