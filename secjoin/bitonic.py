"""Bitonic sorting network over plain integer sequences."""

from __future__ import annotations

import argparse
from typing import MutableSequence, Sequence

__all__ = ["bitonic_merge", "bitonic_sort", "main"]

_DEMO_VALUES = (123, 21, 435, 343, 77, 1, 199, 7)


def bitonic_merge(
    values: MutableSequence[int], start: int, length: int, ascending: bool = True
) -> None:
    """Merge the bitonic run ``values[start:start + length]`` in place."""
    if length <= 1:
        return
    half = length // 2
    for i in range(start, start + half):
        j = i + half
        if ascending == (values[i] > values[j]):
            values[i], values[j] = values[j], values[i]
    bitonic_merge(values, start, half, ascending)
    bitonic_merge(values, start + half, half, ascending)


def _sort_range(values: MutableSequence[int], start: int, length: int, ascending: bool) -> None:
    if length <= 1:
        return
    half = length // 2
    _sort_range(values, start, half, True)
    _sort_range(values, start + half, half, False)
    bitonic_merge(values, start, length, ascending)


def bitonic_sort(values: Sequence[int], ascending: bool = True) -> list[int]:
    """Return the values sorted by a bitonic network.

    The network only sorts correctly for lengths that are powers of two,
    so any other length is rejected.
    """
    result = list(values)
    n = len(result)
    if n & (n - 1):
        raise ValueError(f"bitonic sort needs a power-of-two length, got {n}")
    _sort_range(result, 0, n, ascending)
    return result


def _format(values: Sequence[int]) -> str:
    return "".join(f"{v} " for v in values)


def main(argv: Sequence[str] | None = None) -> int:
    """Sort the given integers (or a built-in sample) and print both arrays."""
    parser = argparse.ArgumentParser(description="Sort integers with a bitonic network.")
    parser.add_argument("values", nargs="*", type=int, help="values to sort (power-of-two count)")
    args = parser.parse_args(argv)
    values = args.values if args.values else list(_DEMO_VALUES)

    try:
        ordered = bitonic_sort(values)
    except ValueError as exc:
        parser.error(str(exc))

    print("Original array: ")
    print(_format(values))
    print("Sorted array: ")
    print(_format(ordered))
    return 0