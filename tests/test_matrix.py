# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
import operator

import numpy as np
import pytest

from factor_analysis.errors import DimensionMismatch, DivisionByZero
from factor_analysis.matrix import Matrix
from factor_analysis.numeric import APPROXIMATE, EXACT, FloatField
from factor_analysis.ratio import Ratio
from factor_analysis.utils import random_rows

logger = logging.getLogger(__name__)

DOMAINS = [EXACT, APPROXIMATE]


@pytest.mark.parametrize("numeric", DOMAINS)
def test_add(numeric):
    builder = Matrix.empty(numeric)
    a = builder.add_column(1, 2, 3).add_column(4, 5, 6)
    b = builder.add_row(6, 5).add_row(4, 3).add_row(2, 1)
    expected = builder.add_row(7, 9).add_row(6, 8).add_row(5, 7)
    assert a + b == expected


@pytest.mark.parametrize("numeric", DOMAINS)
def test_times(numeric):
    builder = Matrix.empty(numeric)
    a = builder.add_column(1, 2, 3).add_column(4, 5, 6)
    b = builder.add_row(1, 2, 3).add_row(2, 1, 2)
    expected = builder.add_row(9, 6, 11).add_row(12, 9, 16).add_row(15, 12, 21)
    assert a @ b == expected


def test_matmul_matches_numpy():
    rng = np.random.default_rng(3)
    A = rng.normal(size=(4, 6))
    B = rng.normal(size=(6, 3))
    ours = Matrix.from_numpy(A) @ Matrix.from_numpy(B)
    np.testing.assert_allclose(ours.to_numpy(), A @ B, rtol=1e-12, atol=1e-12)


def test_exact_product_matches_integer_numpy():
    rows_a, rows_b = random_rows(3, 5, seed=1), random_rows(5, 2, seed=2)
    ours = Matrix(rows_a, EXACT) @ Matrix(rows_b, EXACT)
    expected = (np.array(rows_a) @ np.array(rows_b)).tolist()
    assert ours == Matrix(expected, EXACT)


def test_cross_operation_generalised_product():
    # (min, +) product: shortest two-step paths
    a = Matrix([[0, 3], [2, 0]])
    result = a.cross_operation(a, min, operator.add)
    # fold starts from zero, so min(0, ...) stays at or below zero
    assert result == Matrix([[0.0, 0.0], [0.0, 0.0]])
    result = a.cross_operation(a, max, operator.add)
    assert result == Matrix([[5.0, 3.0], [2.0, 5.0]])


def test_cross_operation_dimension_mismatch():
    a = Matrix([[1, 2, 3]])
    with pytest.raises(DimensionMismatch, match=r"Column count \(3\)"):
        a @ a


def test_ragged_rows():
    with pytest.raises(DimensionMismatch, match=r"\[2, 1\]"):
        Matrix([[1, 2], [3]])


def test_binary_operation_shape_mismatch():
    with pytest.raises(DimensionMismatch):
        Matrix([[1, 2]]) + Matrix([[1], [2]])


def test_add_row_and_column_length_checked():
    a = Matrix([[1, 2]])
    with pytest.raises(DimensionMismatch):
        a.add_row(1, 2, 3)
    with pytest.raises(DimensionMismatch):
        a.add_column(1, 2)


def test_empty():
    e = Matrix.empty()
    assert e.shape == (0, 0)
    assert e.is_empty
    assert Matrix([[], []]).shape == (0, 0)
    assert Matrix([]) == e
    assert e.transpose() == e
    assert e.to_rows() == []


def test_add_row_to_empty_sets_columns():
    a = Matrix.empty().add_row(1, 2, 3)
    assert a.shape == (1, 3)
    b = Matrix.empty().add_column(1, 2, 3)
    assert b.shape == (3, 1)


def test_add_exact_row_to_empty_adopts_exact_domain():
    a = Matrix.empty().add_row(Ratio(1, 2), 3)
    assert a.numeric is EXACT
    assert a.get(0, 1) == Ratio(3)


def test_domain_inference():
    assert Matrix([[1, 2]]).numeric is APPROXIMATE
    assert Matrix([[Ratio(1, 2), 2]]).numeric is EXACT
    assert Matrix([["1/2", "3/4"]]).get(0, 1) == Ratio(3, 4)


def test_exact_rejects_fractional_floats():
    with pytest.raises(TypeError):
        Matrix([[0.5]], EXACT)
    assert Matrix([[2.0]], EXACT).get(0, 0) == Ratio(2)


def test_transpose_involution():
    rng = np.random.default_rng(0)
    for _ in range(20):
        m, n = (int(v) for v in rng.integers(1, 7, size=2))
        A = Matrix.from_numpy(rng.normal(size=(m, n)))
        assert A.transpose().shape == (n, m)
        assert A.transpose().transpose() == A
    B = Matrix(random_rows(3, 5, seed=4), EXACT)
    assert B.T.T == B


def test_transpose():
    original = Matrix([[1, -1, 2, -1, -1], [-2, 1, 1, 1, -1], [3, -1, 2, -2, -2]])
    expected = Matrix(
        [[1, -2, 3], [-1, 1, -1], [2, 1, 2], [-1, 1, -2], [-1, -1, -2]]
    )
    assert original.transpose() == expected


def test_get_row_and_column():
    a = Matrix([[1, 2, 3], [4, 5, 6]], EXACT)
    assert a.get_row(1) == Matrix([[4, 5, 6]], EXACT)
    assert a.get_column(2) == Matrix([[3], [6]], EXACT)
    assert a.row(0) == [Ratio(1), Ratio(2), Ratio(3)]
    assert a.column(1) == [Ratio(2), Ratio(5)]
    assert a[1, 2] == Ratio(6)
    with pytest.raises(IndexError):
        a.get(2, 0)
    with pytest.raises(IndexError):
        a.get_column(3)


def test_to_rows_and_list():
    a = Matrix([[1, 2], [3, 4]])
    assert a.to_rows() == [[1.0, 2.0], [3.0, 4.0]]
    assert a.to_list() == [1.0, 2.0, 3.0, 4.0]
    assert isinstance(a.get(0, 0), float)


def test_immutable():
    a = Matrix([[1, 2]])
    with pytest.raises(AttributeError):
        a._cells = None
    with pytest.raises(ValueError):
        a._cells[0, 0] = 5.0
    b = a.replace_row(0, [7, 8])
    assert a == Matrix([[1, 2]])
    assert b == Matrix([[7, 8]])


def test_minor():
    a = Matrix([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
    assert a.minor(1, 1) == Matrix([[1, 3], [7, 9]])
    assert a.minor(0, 2) == Matrix([[4, 5], [7, 8]])
    assert Matrix([[5]]).minor(0, 0).is_empty


def test_augment_and_ranges():
    a = Matrix([[1, 2], [3, 4]])
    b = a.augment(Matrix.identity(2))
    assert b == Matrix([[1, 2, 1, 0], [3, 4, 0, 1]])
    assert b.column_range(2, 4) == Matrix.identity(2)
    assert b.row_range(1, 2) == Matrix([[3, 4, 0, 1]])
    with pytest.raises(DimensionMismatch):
        a.augment(Matrix([[1]]))


def test_scalar_operations():
    a = Matrix([[1, 2], [3, 4]], EXACT)
    assert a * 2 == Matrix([[2, 4], [6, 8]], EXACT)
    assert 2 * a == a * 2
    assert a / 4 == Matrix([["1/4", "1/2"], ["3/4", "1/1"]])
    assert -a == Matrix([[-1, -2], [-3, -4]], EXACT)
    with pytest.raises(DivisionByZero):
        a / 0
    with pytest.raises(DivisionByZero):
        Matrix([[1.0]]) / 0.0


def test_unary_operation():
    a = Matrix([[1, -2], [3, -4]])
    assert a.unary_operation(abs) == Matrix([[1, 2], [3, 4]])


def test_negative_zero_normalised():
    a = Matrix([[-0.0, 1.0]])
    assert str(a.get(0, 0)) == "0.0"
    negated = -Matrix([[0.0, 1.0]])
    assert str(negated.get(0, 0)) == "0.0"


def test_mixed_domains_meet_in_floating():
    exact = Matrix([["1/2", "1/4"]])
    approx = Matrix([[1.0, 1.0]])
    total = exact + approx
    assert total.numeric is APPROXIMATE
    assert total == Matrix([[1.5, 1.25]])


def test_convert():
    a = Matrix([["1/2", "3/1"]])
    assert a.convert(APPROXIMATE) == Matrix([[0.5, 3.0]])
    loose = FloatField(tolerance=1e-6)
    assert Matrix([[1.0]]).convert(loose).numeric is loose


def test_is_close():
    a = Matrix([[1.0, 2.0]])
    assert a.is_close(Matrix([[1.0 + 1e-15, 2.0]]))
    assert not a.is_close(Matrix([[1.1, 2.0]]))
    assert not a.is_close(Matrix([[1.0], [2.0]]))


def test_equality_and_hash():
    a = Matrix([[1, 2], [3, 4]], EXACT)
    b = Matrix([["1/1", "2/1"], ["3/1", "4/1"]])
    assert a == b
    assert hash(a) == hash(b)
    assert a != Matrix([[1, 2]], EXACT)


def test_from_columns_and_identity():
    a = Matrix.from_columns([[1, 2], [3, 4]])
    assert a == Matrix([[1, 3], [2, 4]])
    assert Matrix.identity(3, EXACT).to_rows() == [
        [Ratio(1), Ratio(0), Ratio(0)],
        [Ratio(0), Ratio(1), Ratio(0)],
        [Ratio(0), Ratio(0), Ratio(1)],
    ]
    assert Matrix.zeros(2, 3).to_rows() == [[0.0] * 3] * 2


def test_repr_and_str():
    a = Matrix([["1/2", "2/1"]])
    assert repr(a) == "Matrix([[Ratio(1, 2), Ratio(2, 1)]])"
    assert str(a) == "1/2 2"
    logger.debug(f"\n{a}")
