# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import itertools
import logging
from typing import Optional

from .errors import NotSquare
from .matrix import Matrix

logger = logging.getLogger(__name__)

# Laplace expansion visits every column subset; warn above this order.
LAPLACE_WARN_ORDER: int = 12


def _require_square(A: Matrix, what: str) -> None:
    if not A.is_square:
        raise NotSquare(
            f"The {what} is undefined for non-square matrices, got {A.row_count}x{A.column_count}"
        )


def determinant(A: Matrix):
    """
    Determinant of an n-by-n matrix by Laplace expansion along the first row.

    The expansion is evaluated bottom-up: the determinant of the last k
    rows restricted to each k-subset of columns is built from the (k-1)
    subsets below it, so no recursion is needed and each sub-determinant
    is computed once. Cost is still exponential in n.
    """
    _require_square(A, "determinant")
    numeric = A.numeric
    n = A.row_count
    if n == 0:
        return numeric.one
    if n == 1:
        return A.get(0, 0)
    if n > LAPLACE_WARN_ORDER:
        logger.warning(f"determinant(): cofactor expansion of order {n} is O(2^n)")

    rows = A.to_rows()
    # sub[S] = det of rows (n - len(S)) .. n-1 restricted to columns S
    sub = {(): numeric.one}
    for i in reversed(range(n)):
        expanded = {}
        for S in itertools.combinations(range(n), n - i):
            total = numeric.zero
            for k, j in enumerate(S):
                term = numeric.multiply(rows[i][j], sub[S[:k] + S[k + 1 :]])
                if k % 2 == 0:
                    total = numeric.add(total, term)
                else:
                    total = numeric.subtract(total, term)
            expanded[S] = total
        sub = expanded
    return sub[tuple(range(n))]


def minor(A: Matrix, row: int, column: int) -> Matrix:
    return A.minor(row, column)


def cofactor(A: Matrix) -> Matrix:
    """Matrix of signed minor determinants, sign (-1)^(row + column)."""
    _require_square(A, "cofactor matrix")
    numeric = A.numeric
    n = A.row_count
    rows = []
    for i in range(n):
        row = []
        for j in range(n):
            d = determinant(A.minor(i, j))
            row.append(d if (i + j) % 2 == 0 else numeric.negate(d))
        rows.append(row)
    return Matrix(rows, numeric)


def adjugate(A: Matrix) -> Matrix:
    """Adjugate (classical adjoint): the transpose of the cofactor matrix."""
    return cofactor(A).transpose()


def inverse_cramers_rule(A: Matrix) -> Optional[Matrix]:
    """
    A^-1 = adj(A) / det(A), or None when det(A) is zero (within the
    domain tolerance for floating matrices).
    """
    _require_square(A, "inverse")
    d = determinant(A)
    if A.numeric.is_zero(d):
        logger.debug("inverse_cramers_rule(): determinant is zero, no inverse")
        return None
    return adjugate(A) / d
