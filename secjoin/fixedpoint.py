"""Fixed-point two-party linear regression steps over 64-bit ring shares."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Sequence

import numpy as np

__all__ = [
    "SAMPLES",
    "FEATURES",
    "BATCH",
    "TEST_SAMPLES",
    "EPOCHS",
    "ITERATIONS",
    "PRECISION",
    "MultiplicationTriples",
    "load_train_data",
    "load_test_data",
    "read_triples",
    "next_batch",
    "compute_delta0",
    "compute_delta1",
    "test_model",
]

SAMPLES = 4950
FEATURES = 7
BATCH = 128
TEST_SAMPLES = 4950
EPOCHS = 100
ITERATIONS = 2500
PRECISION = 12

_M64 = 0xFFFFFFFFFFFFFFFF
_INT = re.compile(r"[-+]?\d+")
_FLOAT = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")


@dataclass
class MultiplicationTriples:
    """Pre-shared randomness of one party: batch order and Beaver-style triples."""

    perm: list[int]
    a: np.ndarray
    b1: np.ndarray
    c1: np.ndarray
    b2: np.ndarray
    c2: np.ndarray


def _u64(values) -> np.ndarray:
    arr = np.asarray(values)
    if arr.dtype == np.uint64:
        return arr
    if arr.dtype.kind in "iub":
        return arr.astype(np.int64).astype(np.uint64)
    if arr.dtype.kind == "O":
        return np.vectorize(lambda v: int(v) & _M64, otypes=[np.uint64])(arr)
    raise TypeError(f"ring shares must be integers, not {arr.dtype}")


def _ints(line: str) -> list[int]:
    return [int(tok) & _M64 for tok in _INT.findall(line)]


def _floats(line: str) -> list[float]:
    return [float(tok) for tok in _FLOAT.findall(line)]


def _read_lines(path) -> list[str]:
    with open(path, encoding="utf-8") as handle:
        return handle.read().splitlines()


def _fill_rows(lines: Iterator[str], out: np.ndarray) -> None:
    rows, cols = out.shape
    for i in range(rows):
        line = next(lines, None)
        if line is None:
            return
        values = _ints(line)[:cols]
        if values:
            out[i, : len(values)] = np.array(values, dtype=np.uint64)


def _trunc_div(values: np.ndarray, divisor: int) -> np.ndarray:
    """Signed division rounding toward zero, on unsigned 64-bit words."""
    signed = values.astype(np.int64)
    quotient = signed // divisor
    remainder = signed % divisor
    quotient = quotient + ((signed < 0) & (remainder != 0))
    return quotient.astype(np.uint64)


def load_train_data(data_path, xa_path, n: int = SAMPLES, d: int = FEATURES):
    """Read one party's training shares, label shares and mask shares.

    The data file holds ``n`` feature rows followed by ``n`` label rows.
    Missing rows are left as zeros.
    """
    data = np.zeros((n, d), dtype=np.uint64)
    labels = np.zeros((n, 1), dtype=np.uint64)
    masks = np.zeros((n, d), dtype=np.uint64)

    lines = iter(_read_lines(data_path))
    _fill_rows(lines, data)
    _fill_rows(lines, labels)
    _fill_rows(iter(_read_lines(xa_path)), masks)
    return data, labels, masks


def load_test_data(path, n: int = TEST_SAMPLES, d: int = FEATURES):
    """Read up to ``n`` plaintext test rows: label first, then ``d - 1`` features.

    A constant 1 is appended as the last feature and every row is divided by 32.
    """
    data_rows: list[np.ndarray] = []
    label_rows: list[float] = []
    for line in _read_lines(path):
        if len(data_rows) >= n:
            break
        values = _floats(line)
        row = np.zeros(d, dtype=np.float64)
        label = values[0] if values else 0.0
        features = values[1:d]
        row[: len(features)] = features
        row[d - 1] = 1.0
        data_rows.append(row / 32)
        label_rows.append(label)

    data = np.array(data_rows, dtype=np.float64).reshape(len(data_rows), d)
    labels = np.array(label_rows, dtype=np.float64).reshape(len(label_rows), 1)
    return data, labels


def read_triples(
    path,
    n: int = SAMPLES,
    d: int = FEATURES,
    batch: int = BATCH,
    iterations: int = ITERATIONS,
    epochs: int = EPOCHS,
) -> MultiplicationTriples:
    """Read the batch order and the triple shares of one party."""
    lines = iter(_read_lines(path))

    first = next(lines, "")
    perm = [int(tok) for tok in _INT.findall(first)][: epochs * n]
    perm.extend([0] * (epochs * n - len(perm)))

    a = np.zeros((n, d), dtype=np.uint64)
    b1 = np.zeros((d, iterations), dtype=np.uint64)
    b2 = np.zeros((batch, iterations), dtype=np.uint64)
    c1 = np.zeros((batch, iterations), dtype=np.uint64)
    c2 = np.zeros((d, iterations), dtype=np.uint64)
    for block in (a, b1, b2, c1, c2):
        _fill_rows(lines, block)

    return MultiplicationTriples(perm=perm, a=a, b1=b1, c1=c1, b2=b2, c2=c2)


def next_batch(matrix, start: int, perm: Sequence[int], batch: int = BATCH) -> np.ndarray:
    """The rows of ``matrix`` picked by ``perm[start:start + batch]``."""
    picks = list(perm[start : start + batch])
    if len(picks) != batch:
        raise IndexError(
            f"permutation holds {len(picks)} entries from {start}, batch needs {batch}"
        )
    return np.asarray(matrix)[np.array(picks, dtype=np.intp)]


def compute_delta0(w0, x0, y0, e, b0, c0, wb1, precision: int = PRECISION) -> np.ndarray:
    """First party's share of the prediction error ``X @ W - Y``."""
    w0, x0, y0, e, b0, c0, wb1 = map(_u64, (w0, x0, y0, e, b0, c0, wb1))
    with np.errstate(over="ignore"):
        f = w0 - b0 + wb1
        product = x0 @ f + e @ w0 + c0
        return _trunc_div(product, 1 << precision) - y0


def compute_delta1(w1, x1, y1, e, b1, c1, wb0, precision: int = PRECISION) -> np.ndarray:
    """Second party's share of the prediction error ``X @ W - Y``."""
    w1, x1, y1, e, b1, c1, wb0 = map(_u64, (w1, x1, y1, e, b1, c1, wb0))
    with np.errstate(over="ignore"):
        f = w1 - b1 + wb0
        product = x1 @ f + e @ (w1 - f) + c1
        return _trunc_div(product, 1 << precision) - y1


def _round_half_away(values: np.ndarray) -> np.ndarray:
    return np.sign(values) * np.floor(np.abs(values) + 0.5)


def test_model(w0, w1, x, y, precision: int = PRECISION) -> float:
    """Accuracy of the model whose weights are the sum of the two shares."""
    with np.errstate(over="ignore"):
        weights = (_u64(w0) + _u64(w1)).reshape(-1)
    scaled = weights.astype(np.int64).astype(np.float32).astype(np.float64)
    scaled = (scaled / (1 << precision)).astype(np.float32).astype(np.float64)

    features = np.asarray(x, dtype=np.float64)
    labels = np.asarray(y, dtype=np.float64).reshape(-1)
    if labels.size == 0:
        raise ValueError("no test rows to score")

    predictions = _round_half_away(features[: labels.size, : scaled.size] @ scaled)
    return float(np.count_nonzero(predictions == labels)) / labels.size