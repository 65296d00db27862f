# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# normalize.py

"""
Numeric normalization of snarkjs proof and public signal payloads.

snarkjs writes every field element as a string ("123", "0x1f"). The calldata
exporter expects integers, so the payload is walked once and every numeral
leaf is replaced by an `int`. Nesting, key order and list order are kept as-is.

`stringify` goes the other way, for when a normalized payload has to be
written back to JSON for the snarkjs CLI.
"""

from collections.abc import Mapping
from typing import Any

from zkharness.constants import DECIMAL_RE, HEX_RE


def is_numeral(value: Any) -> bool:
    """True for decimal digit strings and 0x-prefixed hex strings."""
    return isinstance(value, str) and bool(
        DECIMAL_RE.fullmatch(value) or HEX_RE.fullmatch(value)
    )


def normalize(value: Any) -> Any:
    """
    Replace every numeral string inside a nested structure with an int.

    Node kinds:
      - null: returned as None
      - sequence (list/tuple): new list, element-wise, same order
      - mapping: new dict, same keys in the same order
      - scalar: numeral strings become int, everything else is untouched

    Args:
        value: Proof object, public signals, or any leaf of them.

    Returns:
        A structure of the same shape with numeral leaves parsed.
    """
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return [normalize(v) for v in value]
    if isinstance(value, Mapping):
        return {k: normalize(v) for k, v in value.items()}
    if is_numeral(value):
        # int(x, 0) rejects leading zeros in decimals, so pick the base here
        return int(value, 16) if value.startswith("0x") else int(value, 10)
    return value


def stringify(value: Any) -> Any:
    """
    Render every int leaf as a decimal string, preserving the shape.

    Booleans are left alone even though they are ints in Python.
    """
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return [stringify(v) for v in value]
    if isinstance(value, Mapping):
        return {k: stringify(v) for k, v in value.items()}
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value
