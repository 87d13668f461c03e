# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Elementary row operations.

Each function returns a new ``Matrix``; the argument is left untouched.
Floating results never carry a negative zero.
"""

from .errors import DivisionByZero
from .matrix import Matrix


def swap_rows(A: Matrix, i: int, j: int) -> Matrix:
    if i == j:
        return A.replace_row(i, A.row(i))
    row_i, row_j = A.row(i), A.row(j)
    return A.replace_row(i, row_j).replace_row(j, row_i)


def multiply_row_by(A: Matrix, i: int, scalar) -> Matrix:
    """
    Scale row ``i`` by ``scalar``.

    A zero scalar is rejected for exact matrices since the operation would
    no longer be invertible; a floating matrix just gets a zero row.
    """
    numeric = A.numeric
    factor = numeric.coerce(scalar)
    if numeric.exact and numeric.is_zero(factor):
        raise ValueError(f"Cannot scale row {i} of an exact matrix by zero")
    return A.replace_row(i, [numeric.multiply(x, factor) for x in A.row(i)])


def divide_row_by(A: Matrix, i: int, scalar) -> Matrix:
    numeric = A.numeric
    divisor = numeric.coerce(scalar)
    if divisor == 0:
        raise DivisionByZero(f"Cannot divide row {i} by zero")
    return A.replace_row(i, [numeric.divide(x, divisor) for x in A.row(i)])


def add_multiple_of_row(A: Matrix, target: int, source: int, multiple) -> Matrix:
    """row[target] += multiple * row[source]"""
    numeric = A.numeric
    factor = numeric.coerce(multiple)
    updated = [
        numeric.add(t, numeric.multiply(factor, s))
        for t, s in zip(A.row(target), A.row(source))
    ]
    return A.replace_row(target, updated)


def subtract_multiple_of_row(A: Matrix, target: int, source: int, multiple) -> Matrix:
    """row[target] -= multiple * row[source]"""
    numeric = A.numeric
    factor = numeric.coerce(multiple)
    updated = [
        numeric.subtract(t, numeric.multiply(factor, s))
        for t, s in zip(A.row(target), A.row(source))
    ]
    return A.replace_row(target, updated)
