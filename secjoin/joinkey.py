"""Combining the join-key columns of a tuple into one 64-bit key."""

from __future__ import annotations

from typing import Sequence

__all__ = ["generate_join_key"]

_MULTIPLIER = 10000079
_M32 = 0xFFFFFFFF
_M64 = 0xFFFFFFFFFFFFFFFF


def generate_join_key(
    key_columns: Sequence[int], tuples: Sequence[Sequence[int]]
) -> list[int]:
    """One unsigned 64-bit key per tuple, mixing the chosen columns in order."""
    columns = list(key_columns)
    for col in columns:
        if col < 0:
            raise IndexError(f"negative column index: {col}")

    keys = []
    for row in tuples:
        value = 0
        for col in columns:
            value = (value * _MULTIPLIER + (row[col] & _M32)) & _M64
        keys.append(value)
    return keys