"""
Dotted key paths and descent into nested mappings.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import strata.utils.cast as cast

DEFAULT_KEY_DELIMITER = "."


def split_key(key: str, delimiter: str = DEFAULT_KEY_DELIMITER) -> list[str]:
    """Split a composite key into path segments."""
    return key.split(delimiter)


def search_map(
    root: _abc.Mapping[str, _typing.Any],
    path: _abc.Sequence[str],
) -> _typing.Any:
    """
    Descend into root following path.

    - An empty path returns root itself.
    - A missing segment returns None.
    - A non-mapping value is returned as soon as it is reached, even when
      path segments remain; the leftover segments are ignored.

    Args:
        root: The mapping to search.
        path: Remaining key segments.

    Returns:
        The value found, or None.
    """
    if not path:
        return root

    head = path[0]
    if head not in root:
        return None

    child = root[head]
    if isinstance(child, _abc.Mapping):
        return search_map(cast.to_string_map(child), path[1:])
    return child


def insensitivise(mapping: _abc.Mapping[_typing.Any, _typing.Any]) -> dict[str, _typing.Any]:
    """
    Return a copy of mapping with every key, at every depth, as a lowercase str.

    Lists are copied and mappings inside them are normalized too.
    """
    return {str(key).lower(): insensitivise_value(value) for key, value in mapping.items()}


def insensitivise_value(value: _typing.Any) -> _typing.Any:
    """Apply insensitivise() to value if it is a mapping or a list of them."""
    if isinstance(value, _abc.Mapping):
        return insensitivise(value)
    if isinstance(value, list):
        return [insensitivise_value(item) for item in value]
    return value
