"""
Utility modules for Strata.

Conversions and parsers that don't belong to the resolution core.
"""

import strata.utils.cast as cast
import strata.utils.sizes as sizes
from strata.utils.sizes import parse_size_in_bytes

__all__ = ["cast", "parse_size_in_bytes", "sizes"]
