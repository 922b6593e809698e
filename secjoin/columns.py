"""Projection of tuples onto a chosen list of columns."""

from __future__ import annotations

from typing import Sequence, TypeVar

__all__ = ["filter_columns"]

T = TypeVar("T")


def filter_columns(column_ids: Sequence[int], tuples: Sequence[Sequence[T]]) -> list[list[T]]:
    """Each tuple reduced to the given columns, in the given order."""
    ids = list(column_ids)
    for col in ids:
        if col < 0:
            raise IndexError(f"negative column index: {col}")
    return [[row[col] for col in ids] for row in tuples]