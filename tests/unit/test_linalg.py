import numpy as np
import pytest

from tinymlp.core.errors import DimensionMismatchError, InvalidConfigurationError, OutOfRangeError
from tinymlp.core.linalg import Matrix, format_vector, hadamard_product, print_vector


def test_zero_and_random_initialisation():
    zeros = Matrix(2, 3)
    assert zeros.shape == (2, 3)
    assert np.array_equal(zeros.to_array(), np.zeros((2, 3)))

    rng = np.random.default_rng(0)
    rand = Matrix(4, 5, True, rng=rng, init_range=(-0.5, 0.5))
    values = rand.to_array()
    assert values.shape == (4, 5)
    assert np.all(values >= -0.5) and np.all(values < 0.5)
    assert not np.allclose(values, 0.0)


def test_seeded_matrices_are_identical():
    a = Matrix(3, 2, True, rng=np.random.default_rng(42))
    b = Matrix(3, 2, True, rng=np.random.default_rng(42))
    assert a == b


@pytest.mark.parametrize("rows, cols", [(0, 2), (2, 0), (-1, 3)])
def test_non_positive_shape_rejected(rows, cols):
    with pytest.raises(InvalidConfigurationError):
        Matrix(rows, cols)


def test_indexing_reads_and_writes():
    m = Matrix(2, 2)
    m[1, 0] = 3.5
    assert m[1, 0] == 3.5
    assert m[0, 1] == 0.0


@pytest.mark.parametrize("key", [(2, 0), (0, 2), (-1, 0), (0, -1)])
def test_indexing_out_of_range(key):
    m = Matrix(2, 2)
    with pytest.raises(OutOfRangeError):
        m[key]
    with pytest.raises(OutOfRangeError):
        m[key] = 1.0


def test_multiply_matches_hand_computation():
    m = Matrix.from_array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    out = m.multiply([1.0, 0.0, -1.0])
    assert out.shape == (2,)
    assert np.allclose(out, [-2.0, -2.0])
    assert np.allclose(m @ [1.0, 1.0, 1.0], [6.0, 15.0])


@pytest.mark.parametrize("length", [2, 4])
def test_multiply_dimension_mismatch(length):
    m = Matrix(2, 3)
    with pytest.raises(DimensionMismatchError):
        m.multiply([1.0] * length)


def test_transpose_shape_and_entries():
    m = Matrix.from_array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    t = m.transpose()
    assert t.shape == (3, 2)
    for j in range(2):
        for i in range(3):
            assert t[i, j] == m[j, i]


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_transpose_is_an_involution(seed):
    m = Matrix(3, 5, True, rng=np.random.default_rng(seed))
    assert m.transpose().transpose() == m
    assert m.T.T == m


def test_transpose_is_a_copy():
    m = Matrix.from_array([[1.0, 2.0]])
    t = m.transpose()
    t[0, 0] = 9.0
    assert m[0, 0] == 1.0


def test_hadamard_product():
    a = [1.0, -2.0, 0.5]
    b = [3.0, 4.0, 2.0]
    out = hadamard_product(a, b)
    for i in range(3):
        assert out[i] == a[i] * b[i]


def test_hadamard_product_dimension_mismatch():
    with pytest.raises(DimensionMismatchError):
        hadamard_product([1.0, 2.0], [1.0, 2.0, 3.0])


def test_vector_rendering(capsys):
    assert format_vector([1.0, 0.25]) == " 1.000000, 0.250000"
    print_vector([0.5])
    assert capsys.readouterr().out == " 0.500000\n"


@pytest.mark.parametrize("key", [(0.5, 0), (0, 1.0), (0,), (0, 0, 0), 1])
def test_non_integral_or_malformed_index_rejected(key):
    m = Matrix.from_array([[1.0, 2.0], [3.0, 4.0]])
    with pytest.raises(OutOfRangeError):
        m[key]
    with pytest.raises(OutOfRangeError):
        m[key] = 0.0


def test_numpy_integer_index_accepted():
    m = Matrix.from_array([[1.0, 2.0], [3.0, 4.0]])
    assert m[np.int64(1), np.int64(0)] == 3.0
