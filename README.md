# secjoin

Plaintext building blocks that sit around two-party secure join protocols:
combining join-key columns into 64-bit keys, projecting columns, plaintext
reference joins, rebuilding values from two parties' shares, a bitonic sorting
network, fixed-point regression steps over 64-bit ring shares, and a plaintext
logistic-regression baseline.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | What it gives you |
| --- | --- |
| `secjoin.joinkey` | `generate_join_key`: one unsigned 64-bit key per row from the chosen columns |
| `secjoin.columns` | `filter_columns`: every row reduced to the chosen columns, in the given order |
| `secjoin.plainjoin` | `plaintext_join` and `plaintext_inner_join` |
| `secjoin.sharing` | `Sharing`, `combine_shares` and `select_tagged` |
| `secjoin.bitonic` | `bitonic_merge`, `bitonic_sort` and the `secjoin-bitonic` command |
| `secjoin.fixedpoint` | fixed-point linear-regression helpers over two-party 64-bit shares |
| `secjoin.logistic` | plaintext logistic regression and the `secjoin-logistic` command |

## Join keys and plaintext joins

`generate_join_key(key_columns, tuples)` folds the chosen columns of each row,
in order, as `key = key * 10000079 + column` modulo 2^64 (each column taken as
an unsigned 32-bit value). A negative column index raises `IndexError`.

```python
from secjoin.joinkey import generate_join_key
from secjoin.columns import filter_columns
from secjoin.plainjoin import plaintext_join, plaintext_inner_join

a = [[1, 11, 2], [2, 22, 2], [3, 33, 1], [4, 44, 7]]
b = [[1, 10], [2, 20], [3, 30]]

keys = generate_join_key([0], a)                # [1, 2, 3, 4]
filter_columns([2, 0], a)                       # [[2, 1], [2, 2], [1, 3], [7, 4]]

plaintext_inner_join([2], a, [0], b)
# [[1, 11, 2, 2, 20], [2, 22, 2, 2, 20], [3, 33, 1, 1, 10]]

plaintext_join([2], a, [0], b)
# same three rows, plus [4, 44, 7] kept unchanged
```

`plaintext_join` keeps every row of the left table and appends the matching
right-hand row where there is one; `plaintext_inner_join` keeps only matched
rows. When several right-hand rows share a key, the last one is the match.
The order of the left table is kept.

## Shares

`combine_shares(own, other, sharing)` rebuilds 32-bit rows from both parties'
shares: by addition modulo 2^32 for `Sharing.ARITH` (the default) or by XOR for
`Sharing.BOOL`. Tables or rows of different lengths raise `ValueError`, and a
`sharing` that is not a `Sharing` raises `TypeError`.

```python
from secjoin.sharing import Sharing, combine_shares, select_tagged

combine_shares([[5, 1]], [[2**32 - 1, 2]])          # [[4, 3]]
combine_shares([[6]], [[3]], Sharing.BOOL)          # [[5]]
select_tagged([[1], [2], [3]], [1, 0, 1])           # [[1], [3]]
```

`select_tagged` raises `ValueError` when rows and tags differ in number.

## Bitonic sorting

`bitonic_sort(values, ascending=True)` returns a sorted copy using a bitonic
compare-and-swap network; the length must be a power of two, otherwise
`ValueError` is raised. `bitonic_merge(values, start, length, ascending)` is
the in-place merge step on its own.

```
secjoin-bitonic                 # sorts 123 21 435 343 77 1 199 7
secjoin-bitonic 4 3 2 1
```

The command prints the original and the sorted array, and rejects a count of
values that is not a power of two.

## Fixed-point regression over shares

`secjoin.fixedpoint` holds the per-party steps of a two-party linear
regression on unsigned 64-bit ring shares with `PRECISION` (12) fractional
bits. Default sizes are the module constants `SAMPLES`, `FEATURES`, `BATCH`,
`TEST_SAMPLES`, `EPOCHS` and `ITERATIONS`.

- `load_train_data(data_path, xa_path, n, d)` reads a party's feature shares
  and label shares (one file, features first) and mask shares; missing rows
  stay zero.
- `load_test_data(path, n, d)` reads plaintext rows of label then `d - 1`
  features, appends a constant 1 and divides each row by 32.
- `read_triples(path, ...)` returns a `MultiplicationTriples` with the batch
  order `perm` and the arrays `a`, `b1`, `c1`, `b2`, `c2`.
- `next_batch(matrix, start, perm, batch)` picks rows by
  `perm[start:start + batch]`, raising `IndexError` if too few remain.
- `compute_delta0` and `compute_delta1` give each party's share of the
  prediction error, truncating the product by `2**precision` toward zero.
- `test_model(w0, w1, x, y, precision)` adds the weight shares, reads them as
  signed fixed-point numbers and returns the fraction of rows whose rounded
  prediction equals the label.

## Logistic-regression baseline

`secjoin.logistic` loads CSV files of the form `label,f1,f2,...`, turns the
labels into 0 (digit 0) and 1 (anything else) and adds a bias column.
`load_train_data` keeps a class-balanced set of at most `n // 2` rows per
class. `train(...)` runs mini-batch gradient steps from zero weights using
`next_batch` over a given order (an entry of -1 gives a zero row) and returns
the weights together with the test accuracy from `test_model`, taken every
`check_every` iterations.

```
secjoin-logistic --train mnist_train.csv --test mnist_test.csv --log train_log.log
```

The command normalises rows, trains three times (shuffled order, order padded
with dummy rows, and repeated order), prints the accuracies and writes them
side by side to the log. Further options: `--train-size`, `--test-size`,
`--padded-size`, `--dimension`, `--iterations`, `--batch`, `--check-every`
and `--seed`.

## What this package does not do

Everything here runs locally on plain values. The package does not open
connections between parties, does not run private set intersection,
oblivious permutation or garbled/Boolean circuits, and so does not carry out
a secure join itself; it provides the plaintext pieces, references and
reconstruction helpers that such a protocol uses and is checked against.