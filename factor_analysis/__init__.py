# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
factor_analysis
===============

A small linear-algebra kernel for exploratory factor analysis. The same
algorithms run over exact rationals and over floats.

Public API
~~~~~~~~~~
- Values
    - `Ratio`, `Matrix`
    - numeric domains `EXACT`, `APPROXIMATE`, `RationalField`, `FloatField`
- Row operations
    - `swap_rows`, `multiply_row_by`, `divide_row_by`,
      `add_multiple_of_row`, `subtract_multiple_of_row`
- Elimination
    - `rref`, `rref_with_pivots`, `rank`, `inverse`, `solve`, `nullspace`
- Matrix functions
    - `determinant`, `minor`, `cofactor`, `adjugate`, `inverse_cramers_rule`
- Statistics
    - `covariance`, `correlation_coefficients`, `strongest_correlation`,
      `extract_factor`

Everything else lives in sub-modules and is **not** considered part of the
stable interface.

Example
-------
>>> import factor_analysis as fa
>>> A = fa.Matrix([[1, 1, -3], [2, 5, 1], [1, 3, 2]], fa.EXACT)
>>> fa.inverse(A) == fa.inverse_cramers_rule(A)
True
"""

from importlib.metadata import version as _pkg_version

from .elimination import inverse, is_identity, nullspace, rank, rref, rref_with_pivots, solve
from .errors import DimensionMismatch, DivisionByZero, InvalidFormat, InvalidRatio, NotSquare
from .matrix import Matrix
from .matrix_functions import adjugate, cofactor, determinant, inverse_cramers_rule, minor
from .numeric import APPROXIMATE, EXACT, FloatField, Numeric, RationalField
from .ratio import Ratio, greatest_common_factor, least_common_multiple, ratio_sum
from .row_operations import (
    add_multiple_of_row,
    divide_row_by,
    multiply_row_by,
    subtract_multiple_of_row,
    swap_rows,
)
from .statistics import (
    Correlation,
    FactorExtraction,
    correlation_coefficients,
    covariance,
    extract_factor,
    strongest_correlation,
)
from .utils import EPS

__all__ = [
    "Ratio",
    "ratio_sum",
    "greatest_common_factor",
    "least_common_multiple",
    "Matrix",
    "Numeric",
    "RationalField",
    "FloatField",
    "EXACT",
    "APPROXIMATE",
    "EPS",
    "swap_rows",
    "multiply_row_by",
    "divide_row_by",
    "add_multiple_of_row",
    "subtract_multiple_of_row",
    "rref",
    "rref_with_pivots",
    "rank",
    "is_identity",
    "inverse",
    "solve",
    "nullspace",
    "determinant",
    "minor",
    "cofactor",
    "adjugate",
    "inverse_cramers_rule",
    "covariance",
    "correlation_coefficients",
    "strongest_correlation",
    "extract_factor",
    "Correlation",
    "FactorExtraction",
    "InvalidRatio",
    "InvalidFormat",
    "DivisionByZero",
    "DimensionMismatch",
    "NotSquare",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show factor-analysis”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version("factor-analysis")
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Library logging stays silent unless the application configures it.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
