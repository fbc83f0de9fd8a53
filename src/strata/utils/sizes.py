"""Parsing of human-readable byte sizes such as "10MB"."""

import strata.utils.cast as cast

_MULTIPLIERS: dict[str, int] = {
    "k": 1 << 10,
    "m": 1 << 20,
    "g": 1 << 30,
}


def parse_size_in_bytes(text: str) -> int:
    """
    Parse a size such as "10MB", "64kb" or "4096" into a byte count.

    The suffix is case-insensitive and uses binary multiples
    (1 KB = 1024 bytes). A bare trailing "b" is ignored. Anything that does
    not parse yields 0, as do negative numbers.

    Args:
        text: Size string.

    Returns:
        Number of bytes, never negative.
    """
    text = text.strip()
    multiplier = 1

    if len(text) > 1 and text[-1] in "bB":
        unit = text[-2].lower() if len(text) > 2 else ""
        if unit in _MULTIPLIERS:
            multiplier = _MULTIPLIERS[unit]
            text = text[:-2].strip()
        else:
            text = text[:-1].strip()

    size = cast.to_int(text)
    if size < 0:
        size = 0
    return size * multiplier
