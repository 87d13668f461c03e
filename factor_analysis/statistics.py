# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Covariance, Pearson correlation and the single factor-extraction step.

``extract_factor`` holds no state: callers feed the returned residual
back in until it reports that no correlation clears the threshold.
"""

import functools
import logging
import math
from typing import NamedTuple, Optional

from .errors import DivisionByZero, NotSquare
from .matrix import Matrix
from .numeric import APPROXIMATE

logger = logging.getLogger(__name__)


class Correlation(NamedTuple):
    """Strongest off-diagonal cell of a correlation matrix."""

    value: float
    row: int
    column: int


class FactorExtraction(NamedTuple):
    correlation: Correlation
    factor: Matrix
    residual: Matrix


def covariance(A: Matrix) -> Matrix:
    """
    (A A^T) / n, treating rows as variables and the n columns as
    observations.
    """
    if A.is_empty:
        return A
    return (A @ A.transpose()) / A.column_count


def correlation_coefficients(A: Matrix) -> Matrix:
    """
    Pearson correlation coefficient between every pair of columns.

    r = (n Sxy - Sx Sy) / sqrt((n Sxx - Sx^2)(n Syy - Sy^2)), with n the
    number of rows. Sums are taken in the matrix's own domain, so exact
    input is only rounded at the final square root.

    Returns
    -------
    Symmetric floating matrix with a unit diagonal.

    Raises
    ------
    DivisionByZero : if a column is constant.
    """
    numeric = A.numeric
    result_numeric = APPROXIMATE if numeric.exact else numeric
    if A.is_empty:
        return Matrix.empty(result_numeric)

    def total(values):
        return functools.reduce(numeric.add, values, numeric.zero)

    n = numeric.from_int(A.row_count)
    columns = [A.column(j) for j in range(A.column_count)]
    sums = [total(column) for column in columns]
    spreads = []
    for j, column in enumerate(columns):
        squares = total(numeric.multiply(x, x) for x in column)
        spread = numeric.subtract(
            numeric.multiply(n, squares), numeric.multiply(sums[j], sums[j])
        )
        # spread scales with the square of the data, so no absolute
        # tolerance applies here
        if all(x == column[0] for x in column) or spread == 0:
            raise DivisionByZero(f"Column {j} is constant; its correlation is undefined")
        spreads.append(spread)

    rows = []
    for x, column_x in enumerate(columns):
        row = []
        for y, column_y in enumerate(columns):
            if x == y:
                row.append(1.0)
                continue
            products = total(numeric.multiply(a, b) for a, b in zip(column_x, column_y))
            numerator = numeric.subtract(
                numeric.multiply(n, products), numeric.multiply(sums[x], sums[y])
            )
            denominator = math.sqrt(
                numeric.to_float(numeric.multiply(spreads[x], spreads[y]))
            )
            row.append(numeric.to_float(numerator) / denominator)
        rows.append(row)
    return Matrix(rows, result_numeric)


def strongest_correlation(C: Matrix) -> Optional[Correlation]:
    """
    Off-diagonal cell of largest absolute value; the first one in
    row-major order wins ties. None if C has no off-diagonal cells.
    """
    if not C.is_square:
        raise NotSquare(
            f"A correlation matrix must be square, got {C.row_count}x{C.column_count}"
        )
    numeric = C.numeric
    best = None
    best_abs = None
    for i in range(C.row_count):
        for j in range(C.column_count):
            if i == j:
                continue
            value = C.get(i, j)
            magnitude = numeric.absolute(value)
            if best is None or magnitude > best_abs:
                best, best_abs = Correlation(value, i, j), magnitude
    return best


def extract_factor(C: Matrix, threshold: float) -> Optional[FactorExtraction]:
    """
    One step of factor extraction from a correlation matrix.

    Finds the strongest off-diagonal correlation at (r, c). If its
    magnitude meets ``threshold`` the factor is the outer product of
    row r and column c of C, and the residual is C minus that factor.

    Returns
    -------
    FactorExtraction, or None when no correlation reaches the threshold.
    """
    strongest = strongest_correlation(C)
    if strongest is None:
        return None
    magnitude = C.numeric.to_float(C.numeric.absolute(strongest.value))
    if magnitude < threshold:
        logger.debug(
            f"extract_factor: strongest correlation {magnitude} is below {threshold}"
        )
        return None

    r, c = strongest.row, strongest.column
    factor = C.get_row(r).transpose() @ C.get_column(c).transpose()
    logger.debug(f"extract_factor: factor from row {r}, column {c} ({strongest.value})")
    return FactorExtraction(strongest, factor, C - factor)
