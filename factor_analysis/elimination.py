# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import List, Optional, Tuple

import numpy as np

from .errors import DimensionMismatch, NotSquare
from .matrix import Matrix
from .row_operations import divide_row_by, subtract_multiple_of_row, swap_rows

logger = logging.getLogger(__name__)


def _pivot_row(A: Matrix, row: int, col: int) -> Optional[int]:
    """
    Index of the row at or below ``row`` to pivot on in column ``col``,
    or None when every candidate is zero.
    """
    numeric = A.numeric
    if numeric.exact:
        for k in range(row, A.row_count):
            if not numeric.is_zero(A.get(k, col)):
                return k
        return None

    # The computation is more stable if we pick the candidate of
    # largest magnitude (partial pivoting).
    col_slice = np.abs(A.to_numpy()[row:, col])
    max_idx = int(col_slice.argmax())
    if numeric.is_zero(col_slice[max_idx]):
        return None
    return row + max_idx


def rref_with_pivots(A: Matrix) -> Tuple[Matrix, List[int]]:
    """
    Return the reduced row-echelon form R of A and the
    pivot column list. R has the same shape as A.

    Parameters
    ----------
    A : Matrix (m, n)

    Returns
    -------
    R       : Matrix         (m, n) RREF
    pivots  : list[int]      pivot column indices, len = rank(A)
    """
    numeric = A.numeric
    R = A
    pivots: List[int] = []

    row, col = 0, 0
    while row < R.row_count and col < R.column_count:
        if all(numeric.is_zero(x) for x in R.column(col)):
            col += 1
            continue

        pivot_row = _pivot_row(R, row, col)
        if pivot_row is None:
            # nonzero entries only above the cursor; rank-deficient column
            logger.debug(f"rref: no pivot at or below row {row} in column {col}")
            col += 1
            continue

        # Move the pivot row up to the cursor
        if pivot_row != row:
            R = swap_rows(R, row, pivot_row)

        # Leading coefficient becomes exactly one
        R = divide_row_by(R, row, R.get(row, col))

        # Zero out the pivot column in every other row
        for other in range(R.row_count):
            if other == row:
                continue
            factor = R.get(other, col)
            if not numeric.is_zero(factor):
                R = subtract_multiple_of_row(R, other, row, factor)

        pivots.append(col)
        row += 1
        col += 1

    if not numeric.exact:
        # zero out tiny noise
        R = R.unary_operation(lambda x: 0.0 if numeric.is_zero(x) else x)
    return R, pivots


def rref(A: Matrix) -> Matrix:
    return rref_with_pivots(A)[0]


def rank(A: Matrix) -> int:
    """Matrix rank is the number of pivot columns"""
    return len(rref_with_pivots(A)[1])


def is_identity(A: Matrix) -> bool:
    if not A.is_square:
        return False
    numeric = A.numeric
    for i in range(A.row_count):
        for j in range(A.column_count):
            expected = numeric.one if i == j else numeric.zero
            if not numeric.equal(A.get(i, j), expected):
                return False
    return True


def inverse(A: Matrix) -> Optional[Matrix]:
    """
    Invert A by reducing [A | I] to [I | A^-1].

    Returns
    -------
    The inverse, or None when A is singular.

    Raises
    ------
    NotSquare : if A is not square.
    """
    if not A.is_square:
        raise NotSquare(
            f"Only square matrices have an inverse, got {A.row_count}x{A.column_count}"
        )
    n = A.row_count
    if n == 0:
        return A

    augmented = A.augment(Matrix.identity(n, A.numeric))
    R = rref(augmented)
    if not is_identity(R.column_range(0, n)):
        logger.debug(f"inverse: {n}x{n} matrix is singular")
        return None
    return R.column_range(n, 2 * n)


def solve(A: Matrix, b: Matrix) -> Optional[Matrix]:
    """
    Solve A x = b for x.

    Parameters
    ----------
    A : Matrix (m, n)
    b : Matrix (m, k)
        One right-hand side per column.

    Returns
    -------
    x : Matrix (n, k), or None if the system is inconsistent (no
        solution) or rank deficient (infinitely many solutions).
    """
    if A.row_count != b.row_count:
        raise DimensionMismatch(
            f"Right-hand side has {b.row_count} rows, expected {A.row_count}"
        )
    n = A.column_count
    R, pivots = rref_with_pivots(A.augment(b))

    if any(p >= n for p in pivots):
        logger.debug("solve: inconsistent system (no solution)")
        return None
    if len(pivots) < n:
        logger.debug("solve: rank deficient (infinitely many solutions)")
        return None
    return R.row_range(0, n).column_range(n, R.column_count)


def nullspace(A: Matrix) -> Matrix:
    """
    Constructs a matrix N whose columns form a basis of the nullspace of A

    Returns
    -------
    N : Matrix (n, n-r)
        Columns form a basis of N(A). If A has full column rank the
        result is the empty matrix.
    """
    numeric = A.numeric
    R, pivots = rref_with_pivots(A)
    n = A.column_count
    free = [j for j in range(n) if j not in pivots]

    # construct one basis vector per free column
    basis = []
    for j in free:
        z = [numeric.zero] * n
        z[j] = numeric.one
        for r, col in enumerate(pivots):
            z[col] = numeric.negate(R.get(r, j))
        basis.append(z)
    return Matrix.from_columns(basis, numeric)
