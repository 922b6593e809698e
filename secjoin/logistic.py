"""Plaintext logistic-regression baseline trained with mini-batch gradient steps."""

from __future__ import annotations

import argparse
import random
from itertools import islice
from typing import Sequence

import numpy as np

__all__ = [
    "N_TRAIN",
    "N_PADDED",
    "DIMENSION",
    "BATCH",
    "N_TEST",
    "ITERATIONS",
    "LEARNING_RATE",
    "CHECK_EVERY",
    "load_train_data",
    "load_test_data",
    "next_batch",
    "linear_function",
    "logistic_function",
    "test_model",
    "train",
    "main",
]

N_TRAIN = 1234
N_PADDED = 10000
DIMENSION = 784
BATCH = 128
N_TEST = 1000
ITERATIONS = 5000
LEARNING_RATE = 0.0024 / 2.7 / 2.4
CHECK_EVERY = 10


def _parse_line(line: str, d: int) -> tuple[int, np.ndarray] | None:
    """Split ``label,f1,...`` into the label and a row ending in the constant 1."""
    fields = [field.strip() for field in line.split(",")]
    if not fields[0]:
        return None
    label = int(float(fields[0]))
    row = np.zeros(d, dtype=np.float64)
    features = [float(f) if f else 0.0 for f in fields[1:d]]
    row[: len(features)] = features
    row[d - 1] = 1.0
    return label, row


def _as_matrices(rows: list[np.ndarray], labels: list[float], d: int):
    data = np.array(rows, dtype=np.float64).reshape(len(rows), d)
    targets = np.array(labels, dtype=np.float64).reshape(len(labels), 1)
    return data, targets


def load_train_data(path, n: int = N_TRAIN, d: int = DIMENSION):
    """Read a class-balanced training set: up to ``n // 2`` zeros and ``n // 2`` non-zeros.

    Labels become 0 for digit 0 and 1 otherwise; each row gets a trailing bias of 1.
    """
    quota = n // 2
    counts = [0, 0]
    rows: list[np.ndarray] = []
    labels: list[float] = []
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            if len(rows) >= n:
                break
            parsed = _parse_line(line, d)
            if parsed is None:
                continue
            label, row = parsed
            cls = 0 if label == 0 else 1
            if counts[cls] < quota:
                counts[cls] += 1
                rows.append(row)
                labels.append(float(cls))
    return _as_matrices(rows, labels, d)


def load_test_data(path, n: int = N_TEST, d: int = DIMENSION):
    """Read up to ``n`` test rows with labels 0 for digit 0 and 1 otherwise."""
    rows: list[np.ndarray] = []
    labels: list[float] = []
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            if len(rows) >= n:
                break
            parsed = _parse_line(line, d)
            if parsed is None:
                continue
            label, row = parsed
            rows.append(row)
            labels.append(float(label != 0))
    return _as_matrices(rows, labels, d)


def next_batch(matrix, start: int, perm: Sequence[int] | None = None, batch: int = BATCH):
    """Take ``batch`` rows cyclically from position ``start``.

    With ``perm`` the positions index into the permutation and an entry of -1
    yields a zero row; without it rows are taken in order. Returns the batch
    and the position to continue from.
    """
    m = np.asarray(matrix, dtype=np.float64)
    if m.ndim == 1:
        m = m.reshape(-1, 1)
    order = None if perm is None else np.asarray(perm, dtype=np.int64)
    period = m.shape[0] if order is None else order.size
    if period == 0:
        raise ValueError("cannot draw a batch from an empty source")

    positions = (start + np.arange(batch)) % period
    picks = positions if order is None else order[positions]
    out = np.zeros((batch, m.shape[1]), dtype=np.float64)
    real = picks != -1
    out[real] = m[picks[real]]
    return out, int((start + batch) % period)


def linear_function(x, w) -> np.ndarray:
    """The linear scores ``x @ w``."""
    return np.asarray(x, dtype=np.float64) @ np.asarray(w, dtype=np.float64)


def logistic_function(x, w) -> np.ndarray:
    """The scores mapped through ``1 / (1 + exp(x @ w))``."""
    scores = linear_function(x, w)
    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.exp(scores))


def test_model(w, x, y) -> float:
    """Fraction of rows whose output is above 0.5 for label 1 or below 0.5 for label 0."""
    labels = np.asarray(y, dtype=np.float64).reshape(-1)
    if labels.size == 0:
        raise ValueError("no test rows to score")
    outputs = logistic_function(x, w).reshape(-1)
    correct = ((outputs > 0.5) & (labels == 1)) | ((outputs < 0.5) & (labels == 0))
    return float(np.count_nonzero(correct)) / labels.size


def train(
    train_x,
    train_y,
    test_x,
    test_y,
    perm: Sequence[int],
    iterations: int = ITERATIONS,
    batch: int = BATCH,
    lr: float = LEARNING_RATE,
    check_every: int = CHECK_EVERY,
):
    """Run the gradient steps from zero weights.

    Returns the final weights and the test accuracy taken every ``check_every``
    iterations, starting with the first.
    """
    features = np.asarray(train_x, dtype=np.float64)
    weights = np.zeros((features.shape[1], 1), dtype=np.float64)
    accuracies: list[float] = []
    start = 0
    for iteration in range(iterations):
        x_batch, following = next_batch(features, start, perm, batch)
        y_batch, _ = next_batch(train_y, start, perm, batch)
        start = following
        outputs = logistic_function(x_batch, weights)
        weights = weights - (x_batch.T @ (outputs - y_batch)) * lr
        if iteration % check_every == 0:
            accuracies.append(test_model(weights, test_x, test_y))
    return weights, accuracies


def _normalize_rows(matrix: np.ndarray) -> np.ndarray:
    norms = np.linalg.norm(matrix, axis=1, keepdims=True)
    safe = np.where(norms > 0, norms, 1.0)
    return matrix / safe


def main(argv: Sequence[str] | None = None) -> int:
    """Train on shuffled, dummy-padded and repeated orders and log the accuracies."""
    parser = argparse.ArgumentParser(description="Plaintext logistic-regression baseline.")
    parser.add_argument("--train", default="../data/mnist_train.csv", help="training CSV")
    parser.add_argument("--test", default="../data/mnist_test.csv", help="test CSV")
    parser.add_argument("--log", default="train_log.log", help="accuracy log to write")
    parser.add_argument("--train-size", type=int, default=N_TRAIN)
    parser.add_argument("--test-size", type=int, default=N_TEST)
    parser.add_argument("--padded-size", type=int, default=N_PADDED)
    parser.add_argument("--dimension", type=int, default=DIMENSION)
    parser.add_argument("--iterations", type=int, default=ITERATIONS)
    parser.add_argument("--batch", type=int, default=BATCH)
    parser.add_argument("--check-every", type=int, default=CHECK_EVERY)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    print("load training data.......")
    train_x, train_y = load_train_data(args.train, args.train_size, args.dimension)
    print(f"n= {train_x.shape[0]}")
    print("load testing data.......")
    test_x, test_y = load_test_data(args.test, args.test_size, args.dimension)
    print(f"n={test_x.shape[0]}")
    if train_x.shape[0] == 0 or test_x.shape[0] == 0:
        parser.error("training and test data must not be empty")

    train_x = _normalize_rows(train_x)
    test_x = _normalize_rows(test_x)

    rng = random.Random(args.seed)
    n = train_x.shape[0]
    shuffled = list(range(n))
    rng.shuffle(shuffled)
    padded = [i if i < n else -1 for i in range(args.padded_size)]
    rng.shuffle(padded)
    repeated = [i % n for i in range(args.padded_size)]

    runs = []
    for order in (shuffled, padded, repeated):
        _, accuracies = train(
            train_x, train_y, test_x, test_y, order,
            args.iterations, args.batch, LEARNING_RATE, args.check_every,
        )
        for k, accuracy in enumerate(accuracies):
            print(f"{k * args.check_every} {accuracy:g}")
        runs.append(accuracies)

    with open(args.log, "w", encoding="utf-8") as log:
        for k, (plain, dummy, purified) in islice(enumerate(zip(*runs)), 1, None):
            log.write(f"{k * args.check_every} {plain:g} {dummy:g} {purified:g}\n")
    return 0