"""
Key resolution across the layered store.

find() answers a key in strict precedence order, first hit wins:

1. canonicalize the key (lowercase, alias chain)
2. exact match in overrides
3. exact match in config
4. dotted fallback: resolve the first path segment on its own (through
   this same lookup, so any layer may supply it) and, if it is a mapping,
   descend into it with the remaining segments; a scalar prefix does not
   count as a hit
5. exact match in defaults
6. otherwise absent

get() runs find(), and on a miss retries the dotted fallback in its looser
form, where a scalar prefix is the answer ({"a": 5} gives 5 for "a.b.c").
The result is coerced to the kind of a witness value (see strata.core.values).
"""

from __future__ import annotations

import collections.abc as _abc
import logging as _logging

import strata.core.layers as layers
import strata.core.paths as paths
import strata.core.values as values

_logger = _logging.getLogger(__name__)


class KeyResolver:
    """
    Resolves keys against a LayeredStore.

    Args:
        store: The layers to read from.
        delimiter: Separator for nested key paths. Must not change once
            values have been stored.
        type_by_default_value: Coerce found values to the kind of the key's
            default (when one exists) instead of their own kind.
    """

    def __init__(
        self,
        store: layers.LayeredStore,
        *,
        delimiter: str = paths.DEFAULT_KEY_DELIMITER,
        type_by_default_value: bool = False,
    ) -> None:
        if not delimiter:
            raise ValueError("key delimiter must not be empty")
        self._store = store
        self._delimiter = delimiter
        self.type_by_default_value = type_by_default_value

    @property
    def delimiter(self) -> str:
        """Separator for nested key paths."""
        return self._delimiter

    def find(self, key: str) -> values.Value:
        """
        Look up key in precedence order without any coercion.

        Returns:
            The raw value, or None if no layer provides one.
        """
        value = self._find(key, frozenset())
        return None if value is values.MISSING else value

    def _find(self, key: str, visiting: frozenset[str]) -> values.Value:
        key = self._store.canonical(key)
        if key in visiting:
            # An alias pointed a path prefix back at a key being resolved
            return values.MISSING
        visiting = visiting | {key}

        for layer in (layers.Layer.OVERRIDES, layers.Layer.CONFIG):
            value = self._store.lookup(layer, key)
            if value is not values.MISSING:
                _logger.debug("%s found in %s: %r", key, layer.value, value)
                return value

        if self._delimiter in key:
            value = self._find_nested(key, visiting, scalar_prefix=False)
            if value is not None:
                _logger.debug("%s found in nested config: %r", key, value)
                return value

        value = self._store.lookup(layers.Layer.DEFAULTS, key)
        if value is not values.MISSING:
            _logger.debug("%s found in defaults: %r", key, value)
            return value

        return values.MISSING

    def _find_nested(
        self,
        key: str,
        visiting: frozenset[str],
        *,
        scalar_prefix: bool,
    ) -> values.Value:
        """
        Resolve the first path segment, then descend with the rest.

        With scalar_prefix, a non-mapping prefix is returned as-is, ignoring
        the remaining segments, the same way search_map() treats a scalar
        reached mid-path. Otherwise it yields None.
        """
        head, *rest = paths.split_key(key, self._delimiter)
        source = self._find(head, visiting)
        if source is values.MISSING:
            return None
        if isinstance(source, _abc.Mapping):
            return paths.search_map(source, rest)
        return source if scalar_prefix else None

    def get(self, key: str) -> values.Value:
        """
        Resolve key and coerce the result.

        Returns:
            The coerced value, or None if the key resolves nowhere.
        """
        key = key.lower()
        value = self._find(key, frozenset())
        if value is values.MISSING:
            value = self._find_nested(key, frozenset(), scalar_prefix=True)

        if value is None or value is values.MISSING:
            return None

        witness = value
        if self.type_by_default_value:
            default = self._store.lookup(layers.Layer.DEFAULTS, self._store.canonical(key))
            if default is not values.MISSING:
                witness = default

        return values.coerce(value, witness)
