"""
Decoding resolved config into structured records.

Any type pydantic can validate works as a target: BaseModel subclasses,
dataclasses, TypedDicts, or plain annotated types such as dict[str, int].
Validation runs in lax mode, so "8080" fills an int field and "true" a
bool field. Keys are lowercased before decoding, which makes matching
case-insensitive for lowercase field names.
"""

import typing as _typing

import pydantic as _pydantic

import strata.core.paths as paths

T = _typing.TypeVar("T")


class DecodeError(Exception):
    """Config data could not be decoded into the requested type."""

    def __init__(self, target: _typing.Any, error: _pydantic.ValidationError) -> None:
        self.target = target
        self.errors = error.errors()
        name = getattr(target, "__name__", repr(target))
        super().__init__(f"Cannot decode config into {name}: {error}")


def decode(data: _typing.Any, target: type[T]) -> T:
    """
    Decode data into an instance of target.

    Args:
        data: A resolved value, usually a mapping from all_settings() or get().
        target: The type to produce.

    Returns:
        The validated instance.

    Raises:
        DecodeError: If data does not fit target.
    """
    adapter = _pydantic.TypeAdapter(target)
    try:
        return adapter.validate_python(paths.insensitivise_value(data))
    except _pydantic.ValidationError as e:
        raise DecodeError(target, e) from e
