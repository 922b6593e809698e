import numpy as np
import pytest

from secjoin.fixedpoint import (
    MultiplicationTriples,
    compute_delta0,
    compute_delta1,
    load_test_data,
    load_train_data,
    next_batch,
    read_triples,
    test_model as score_model,
)

SCALE = 1 << 12


def _rand_u64(rng, shape):
    return rng.integers(0, 2**63, size=shape, dtype=np.uint64) * np.uint64(2) + rng.integers(
        0, 2, size=shape, dtype=np.uint64
    )


def test_delta0_plain_case():
    zeros_col = np.zeros((2, 1), dtype=np.uint64)
    d = compute_delta0(
        w0=np.array([[SCALE], [0]]),
        x0=np.array([[1, 2]]),
        y0=np.array([[1]]),
        e=np.zeros((1, 2), dtype=np.uint64),
        b0=zeros_col,
        c0=np.zeros((1, 1), dtype=np.uint64),
        wb1=np.array([[0], [SCALE]]),
    )
    assert d.dtype == np.uint64
    assert d.tolist() == [[2]]


def test_delta0_truncates_toward_zero():
    d = compute_delta0(
        w0=np.array([[-(SCALE + 1)]]),
        x0=np.array([[1]]),
        y0=np.array([[0]]),
        e=np.array([[0]]),
        b0=np.array([[0]]),
        c0=np.array([[0]]),
        wb1=np.array([[0]]),
    )
    assert d.astype(np.int64).tolist() == [[-1]]


def test_delta_label_shift():
    rng = np.random.default_rng(1)
    args = dict(
        w0=rng.integers(-SCALE, SCALE, size=(3, 1)),
        x0=rng.integers(0, 50, size=(4, 3)),
        e=rng.integers(0, 50, size=(4, 3)),
        b0=rng.integers(0, 50, size=(3, 1)),
        c0=rng.integers(0, 50, size=(4, 1)),
        wb1=rng.integers(0, 50, size=(3, 1)),
    )
    y = rng.integers(0, 100, size=(4, 1))
    base = compute_delta0(y0=y, **args)
    shifted = compute_delta0(y0=y + 5, **args)
    assert ((base - shifted).astype(np.int64) == 5).all()


def test_delta1_equals_delta0_without_mask():
    rng = np.random.default_rng(2)
    w = rng.integers(-SCALE, SCALE, size=(3, 1))
    x = rng.integers(0, 50, size=(5, 3))
    y = rng.integers(0, 50, size=(5, 1))
    e = np.zeros((5, 3), dtype=np.int64)
    b = rng.integers(0, 50, size=(3, 1))
    c = rng.integers(0, 50, size=(5, 1))
    wb = rng.integers(0, 50, size=(3, 1))
    assert np.array_equal(
        compute_delta1(w, x, y, e, b, c, wb), compute_delta0(w, x, y, e, b, c, wb)
    )


def test_delta_rejects_float_input():
    with pytest.raises(TypeError):
        compute_delta0(
            np.array([[0.5]]), [[1]], [[0]], [[0]], [[0]], [[0]], [[0]]
        )


def test_model_perfect_accuracy():
    rng = np.random.default_rng(3)
    weights = np.array([2, -1, 3])
    x = rng.integers(-5, 6, size=(20, 3)).astype(np.float64)
    y = (x @ weights).reshape(-1, 1)
    w = (weights * SCALE).reshape(-1, 1)
    assert score_model(w, np.zeros_like(w), x, y) == 1.0


def test_model_is_share_invariant():
    rng = np.random.default_rng(4)
    weights = np.array([1, 4, -2])
    x = rng.integers(-5, 6, size=(30, 3)).astype(np.float64)
    y = rng.integers(-10, 10, size=(30, 1)).astype(np.float64)
    w = (weights * SCALE).astype(np.int64).astype(np.uint64).reshape(-1, 1)
    mask = _rand_u64(rng, (3, 1))
    with np.errstate(over="ignore"):
        share = w - mask
    assert score_model(mask, share, x, y) == score_model(w, np.zeros_like(w), x, y)


def test_model_requires_rows():
    with pytest.raises(ValueError):
        score_model(np.zeros((3, 1)), np.zeros((3, 1)), np.zeros((0, 3)), np.zeros((0, 1)))


def test_next_batch_selects_rows():
    matrix = np.arange(20).reshape(10, 2)
    perm = [3, 1, 4, 1, 5, 9, 2, 6]
    batch = next_batch(matrix, 2, perm, 3)
    assert np.array_equal(batch, matrix[[4, 1, 5]])


def test_next_batch_short_permutation():
    with pytest.raises(IndexError):
        next_batch(np.zeros((4, 2)), 2, [0, 1, 2], 3)


def test_load_train_data_round_trip(tmp_path):
    rng = np.random.default_rng(5)
    data = rng.integers(0, 1000, size=(3, 2))
    labels = rng.integers(0, 1000, size=(3, 1))
    masks = rng.integers(0, 1000, size=(3, 2))
    data_file = tmp_path / "data0.txt"
    xa_file = tmp_path / "xa.txt"
    rows = [",".join(map(str, r)) + "," for r in data] + [f"{v}," for v in labels[:, 0]]
    data_file.write_text("\n".join(rows) + "\n")
    xa_file.write_text("\n".join(",".join(map(str, r)) for r in masks) + "\n")

    got_data, got_labels, got_masks = load_train_data(data_file, xa_file, n=3, d=2)
    assert np.array_equal(got_data, data.astype(np.uint64))
    assert np.array_equal(got_labels, labels.astype(np.uint64))
    assert np.array_equal(got_masks, masks.astype(np.uint64))


def test_load_train_data_missing_rows_stay_zero(tmp_path):
    data_file = tmp_path / "data0.txt"
    xa_file = tmp_path / "xa.txt"
    data_file.write_text("7,8\n")
    xa_file.write_text("")
    got_data, got_labels, got_masks = load_train_data(data_file, xa_file, n=2, d=2)
    assert got_data.tolist() == [[7, 8], [0, 0]]
    assert not got_labels.any()
    assert not got_masks.any()


def test_load_test_data_scales_rows(tmp_path):
    path = tmp_path / "test.dat"
    path.write_text("1,32,64,96\n0,16,8,4\n5,1,1,1\n")
    data, labels = load_test_data(path, n=2, d=4)
    assert data.shape == (2, 4)
    assert np.allclose(data[0], np.array([32, 64, 96, 1]) / 32)
    assert np.allclose(data[1], np.array([16, 8, 4, 1]) / 32)
    assert labels[:, 0].tolist() == [1.0, 0.0]


def test_read_triples_round_trip(tmp_path):
    rng = np.random.default_rng(6)
    n, d, batch, iterations, epochs = 3, 2, 2, 4, 2
    perm = rng.permutation(n * epochs).tolist()
    a = rng.integers(0, 100, size=(n, d))
    b1 = rng.integers(0, 100, size=(d, iterations))
    b2 = rng.integers(0, 100, size=(batch, iterations))
    c1 = rng.integers(0, 100, size=(batch, iterations))
    c2 = rng.integers(0, 100, size=(d, iterations))
    lines = [",".join(map(str, perm))]
    for block in (a, b1, b2, c1, c2):
        lines += [",".join(map(str, r)) for r in block]
    path = tmp_path / "MT0.txt"
    path.write_text("\n".join(lines) + "\n")

    triples = read_triples(path, n, d, batch, iterations, epochs)
    assert isinstance(triples, MultiplicationTriples)
    assert triples.perm == perm
    for got, want in ((triples.a, a), (triples.b1, b1), (triples.b2, b2),
                      (triples.c1, c1), (triples.c2, c2)):
        assert np.array_equal(got, want.astype(np.uint64))


def test_read_triples_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_triples(tmp_path / "absent.txt", 2, 2, 2, 2, 1)