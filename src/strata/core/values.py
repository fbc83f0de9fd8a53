"""
Value kinds and the coercion-on-read table.

Config values are untyped: scalars, lists, or nested mappings as produced
by a file parser or passed to set(). Rather than dispatching on arbitrary
runtime types, every value is first classified into a closed ValueKind,
and the coercion applied on read is chosen from that kind:

    BOOL         -> cast.to_bool
    STRING       -> cast.to_string
    INTEGER      -> cast.to_int
    FLOAT        -> cast.to_float
    TIMESTAMP    -> cast.to_time
    DURATION     -> cast.to_duration
    STRING_LIST  -> cast.to_string_slice
    LIST, MAPPING, OTHER -> returned unchanged
"""

from __future__ import annotations

import collections.abc as _abc
import datetime as _datetime
import enum as _enum
import typing as _typing

import strata.utils.cast as cast

Value: _typing.TypeAlias = _typing.Any
"""A dynamic config value (scalar, list, or nested mapping)."""


class _MissingType:
    """Sentinel type marking a key with no entry in a layer."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"

    def __bool__(self) -> bool:
        return False


MISSING = _MissingType()
"""Marks "no entry", as distinct from an entry whose value is None."""


class ValueKind(_enum.Enum):
    """Closed set of value shapes the resolver knows how to coerce."""

    BOOL = "bool"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    TIMESTAMP = "timestamp"
    DURATION = "duration"
    STRING_LIST = "string_list"
    LIST = "list"
    MAPPING = "mapping"
    OTHER = "other"


def classify(value: Value) -> ValueKind:
    """
    Classify a value into its ValueKind.

    bool is tested before int since it is an int subclass. A list counts as
    STRING_LIST when every element is a str (including the empty list).
    """
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, _datetime.datetime):
        return ValueKind.TIMESTAMP
    if isinstance(value, _datetime.timedelta):
        return ValueKind.DURATION
    if isinstance(value, _abc.Mapping):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        if all(isinstance(item, str) for item in value):
            return ValueKind.STRING_LIST
        return ValueKind.LIST
    return ValueKind.OTHER


_COERCIONS: dict[ValueKind, _typing.Callable[[Value], Value]] = {
    ValueKind.BOOL: cast.to_bool,
    ValueKind.STRING: cast.to_string,
    ValueKind.INTEGER: cast.to_int,
    ValueKind.FLOAT: cast.to_float,
    ValueKind.TIMESTAMP: cast.to_time,
    ValueKind.DURATION: cast.to_duration,
    ValueKind.STRING_LIST: cast.to_string_slice,
}


def coerce(value: Value, witness: Value) -> Value:
    """
    Coerce value to the kind of witness.

    Kinds without an entry in the coercion table (lists of mixed items,
    mappings, anything unrecognized) leave value untouched.

    Args:
        value: The raw value found for a key.
        witness: The value whose kind decides the conversion. Usually value
            itself, or the key's default when typing by default value.

    Returns:
        The converted value. Never raises.
    """
    convert = _COERCIONS.get(classify(witness))
    if convert is None:
        return value
    return convert(value)
