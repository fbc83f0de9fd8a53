"""
Key resolution core: aliases, layers, path descent and coercion.
"""

from strata.core.aliases import AliasTable
from strata.core.layers import Layer, LayeredStore
from strata.core.paths import DEFAULT_KEY_DELIMITER, search_map, split_key
from strata.core.resolver import KeyResolver
from strata.core.values import MISSING, ValueKind, classify, coerce

__all__ = [
    "DEFAULT_KEY_DELIMITER",
    "MISSING",
    "AliasTable",
    "KeyResolver",
    "Layer",
    "LayeredStore",
    "ValueKind",
    "classify",
    "coerce",
    "search_map",
    "split_key",
]
