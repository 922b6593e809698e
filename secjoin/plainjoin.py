"""Joins of two plaintext tables on their combined join keys."""

from __future__ import annotations

from typing import Sequence

from secjoin.joinkey import generate_join_key

__all__ = ["plaintext_join", "plaintext_inner_join"]


def _key_index(b_key_columns: Sequence[int], b_tuples: Sequence[Sequence[int]]) -> dict[int, int]:
    """Map each join key of B to the position of its last tuple."""
    return {key: pos for pos, key in enumerate(generate_join_key(b_key_columns, b_tuples))}


def plaintext_join(
    a_key_columns: Sequence[int],
    a_tuples: Sequence[Sequence[int]],
    b_key_columns: Sequence[int],
    b_tuples: Sequence[Sequence[int]],
) -> list[list[int]]:
    """Every tuple of A, with the matching tuple of B appended where one exists.

    When several tuples of B share a key, the last of them is the match.
    Tuples of A without a match are kept unchanged.
    """
    index = _key_index(b_key_columns, b_tuples)
    a_keys = generate_join_key(a_key_columns, a_tuples)
    outputs = []
    for row, key in zip(a_tuples, a_keys):
        joined = list(row)
        match = index.get(key)
        if match is not None:
            joined.extend(b_tuples[match])
        outputs.append(joined)
    return outputs


def plaintext_inner_join(
    a_key_columns: Sequence[int],
    a_tuples: Sequence[Sequence[int]],
    b_key_columns: Sequence[int],
    b_tuples: Sequence[Sequence[int]],
) -> list[list[int]]:
    """The tuples of A that have a match in B, each followed by that match.

    When several tuples of B share a key, the last of them is the match.
    The order of A is kept.
    """
    index = _key_index(b_key_columns, b_tuples)
    a_keys = generate_join_key(a_key_columns, a_tuples)
    return [
        [*row, *b_tuples[index[key]]]
        for row, key in zip(a_tuples, a_keys)
        if key in index
    ]