"""Reconstruction of two-party secret shares and selection of tagged rows."""

from __future__ import annotations

import enum
from typing import Sequence, TypeVar

__all__ = ["Sharing", "combine_shares", "select_tagged"]

_M32 = 0xFFFFFFFF

T = TypeVar("T")


class Sharing(enum.Enum):
    """How a 32-bit value is split between the two parties."""

    ARITH = "arith"
    """Additive shares: the value is the sum of the shares modulo 2**32."""

    BOOL = "bool"
    """XOR shares: the value is the bitwise XOR of the shares."""


def _combine(a: int, b: int, sharing: Sharing) -> int:
    if sharing is Sharing.ARITH:
        return (a + b) & _M32
    return (a ^ b) & _M32


def combine_shares(
    own: Sequence[Sequence[int]],
    other: Sequence[Sequence[int]],
    sharing: Sharing = Sharing.ARITH,
) -> list[list[int]]:
    """Rebuild the plain 32-bit rows from both parties' shares of them."""
    if not isinstance(sharing, Sharing):
        raise TypeError(f"sharing must be a Sharing, not {type(sharing).__name__}")
    if len(own) != len(other):
        raise ValueError(f"share tables differ in length: {len(own)} and {len(other)}")
    rows = []
    for index, (mine, theirs) in enumerate(zip(own, other)):
        if len(mine) != len(theirs):
            raise ValueError(
                f"row {index} has {len(mine)} shares on one side and {len(theirs)} on the other"
            )
        rows.append([_combine(a, b, sharing) for a, b in zip(mine, theirs)])
    return rows


def select_tagged(rows: Sequence[Sequence[T]], tags: Sequence[int]) -> list[list[T]]:
    """The rows whose tag is set, in their original order."""
    if len(rows) != len(tags):
        raise ValueError(f"{len(rows)} rows but {len(tags)} tags")
    return [list(row) for row, tag in zip(rows, tags) if tag]