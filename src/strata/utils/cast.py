"""
Best-effort conversions between dynamic config values and concrete types.

Every function here returns the target type's zero value when a value
cannot be converted. Nothing in this module raises for bad input: lookups
are expected to tolerate mistyped config, so the policy is to degrade.

String parsing goes through pydantic ``TypeAdapter`` instances in lax mode,
which already understands the common spellings ("yes", "1", ISO-8601
timestamps, "PT1H" durations, and so on).
"""

from __future__ import annotations

import collections.abc as _abc
import datetime as _datetime
import re as _re
import typing as _typing

import pydantic as _pydantic

ZERO_TIME = _datetime.datetime(1, 1, 1, tzinfo=_datetime.timezone.utc)
"""Zero value returned by to_time() when a value cannot be converted."""

ZERO_DURATION = _datetime.timedelta(0)
"""Zero value returned by to_duration() when a value cannot be converted."""

_BOOL = _pydantic.TypeAdapter(bool)
_INT = _pydantic.TypeAdapter(int)
_FLOAT = _pydantic.TypeAdapter(float)
_DATETIME = _pydantic.TypeAdapter(_datetime.datetime)
_TIMEDELTA = _pydantic.TypeAdapter(_datetime.timedelta)

# Unit-suffixed durations: "300ms", "1h30m", "-1.5h"
_DURATION_RE = _re.compile(r"^[-+]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|μs|ms|s|m|h))+$")
_DURATION_PART_RE = _re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

_UNIT_SECONDS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def _is_number(value: _typing.Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_bool(value: _typing.Any) -> bool:
    """Convert to bool. Numbers are true when non-zero."""
    if isinstance(value, bool):
        return value
    if _is_number(value):
        return value != 0
    if isinstance(value, str):
        try:
            return _BOOL.validate_python(value.strip())
        except _pydantic.ValidationError:
            return False
    return False


def to_string(value: _typing.Any) -> str:
    """Convert to str. Containers and None become the empty string."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if _is_number(value):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (_datetime.datetime, _datetime.date)):
        return value.isoformat()
    if isinstance(value, _datetime.timedelta):
        return format_duration(value)
    return ""


def to_int(value: _typing.Any) -> int:
    """Convert to int. Floats are truncated toward zero."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        try:
            return int(value)
        except (OverflowError, ValueError):
            # inf / nan
            return 0
    if isinstance(value, str):
        text = value.strip()
        try:
            return _INT.validate_python(text)
        except _pydantic.ValidationError:
            pass
        try:
            # Base-prefixed literals: 0x1f, 0o17, 0b101
            return int(text, 0)
        except ValueError:
            return 0
    return 0


def to_float(value: _typing.Any) -> float:
    """Convert to float."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if _is_number(value):
        return float(value)
    if isinstance(value, str):
        try:
            return _FLOAT.validate_python(value.strip())
        except _pydantic.ValidationError:
            return 0.0
    return 0.0


def to_time(value: _typing.Any) -> _datetime.datetime:
    """
    Convert to a datetime.

    Numbers are read as Unix seconds (UTC). Plain dates are placed at
    midnight UTC. Strings accept anything pydantic parses as a datetime.
    """
    if isinstance(value, _datetime.datetime):
        return value
    if isinstance(value, _datetime.date):
        return _datetime.datetime.combine(value, _datetime.time(), tzinfo=_datetime.timezone.utc)
    if _is_number(value):
        try:
            return _datetime.datetime.fromtimestamp(value, tz=_datetime.timezone.utc)
        except (OverflowError, OSError, ValueError):
            return ZERO_TIME
    if isinstance(value, str):
        try:
            return _DATETIME.validate_python(value.strip())
        except _pydantic.ValidationError:
            return ZERO_TIME
    return ZERO_TIME


def to_duration(value: _typing.Any) -> _datetime.timedelta:
    """
    Convert to a timedelta.

    Numbers are read as seconds. Strings may use unit suffixes
    ("300ms", "1h30m", "-2.5s"), ISO-8601 ("PT1H"), or "HH:MM:SS".
    """
    if isinstance(value, _datetime.timedelta):
        return value
    if _is_number(value):
        try:
            return _datetime.timedelta(seconds=value)
        except (OverflowError, ValueError):
            return ZERO_DURATION
    if isinstance(value, str):
        text = value.strip()
        if _DURATION_RE.match(text):
            return _parse_unit_duration(text)
        try:
            return _TIMEDELTA.validate_python(text)
        except _pydantic.ValidationError:
            return ZERO_DURATION
    return ZERO_DURATION


def _parse_unit_duration(text: str) -> _datetime.timedelta:
    sign = -1 if text.startswith("-") else 1
    seconds = sum(
        float(number) * _UNIT_SECONDS[unit]
        for number, unit in _DURATION_PART_RE.findall(text)
    )
    try:
        return _datetime.timedelta(seconds=sign * seconds)
    except OverflowError:
        return ZERO_DURATION


def format_duration(value: _datetime.timedelta) -> str:
    """
    Render a timedelta with unit suffixes, e.g. "1h30m0s" or "250ms".

    The output is accepted back by to_duration().
    """
    micros = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    if micros == 0:
        return "0s"

    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < 1_000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        whole, frac = divmod(micros, 1_000)
        return f"{sign}{_join_fraction(whole, frac, 3)}ms"

    hours, rest = divmod(micros, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    whole, frac = divmod(rest, 1_000_000)
    seconds = f"{_join_fraction(whole, frac, 6)}s"

    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}"
    if minutes:
        return f"{sign}{minutes}m{seconds}"
    return f"{sign}{seconds}"


def _join_fraction(whole: int, frac: int, width: int) -> str:
    if not frac:
        return str(whole)
    return f"{whole}.{frac:0{width}d}".rstrip("0")


def to_string_slice(value: _typing.Any) -> list[str]:
    """Convert to a list of strings. A plain string is split on whitespace."""
    if isinstance(value, str):
        return value.split()
    if isinstance(value, (list, tuple)):
        return [to_string(item) for item in value]
    return []


def to_string_map(value: _typing.Any) -> dict[str, _typing.Any]:
    """Convert any mapping to a dict with string keys."""
    if isinstance(value, _abc.Mapping):
        return {str(key): item for key, item in value.items()}
    return {}


def to_string_map_string(value: _typing.Any) -> dict[str, str]:
    """Convert any mapping to a dict of string keys and string values."""
    return {key: to_string(item) for key, item in to_string_map(value).items()}


def to_string_map_string_slice(value: _typing.Any) -> dict[str, list[str]]:
    """
    Convert any mapping to a dict of string keys and string-list values.

    String values become single-element lists rather than being split.
    """
    result: dict[str, list[str]] = {}
    for key, item in to_string_map(value).items():
        if isinstance(item, str):
            result[key] = [item]
        else:
            result[key] = to_string_slice(item)
    return result
