# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Error types raised by the algebra.

Structural problems (ragged rows, zero denominators, shape mismatches)
raise immediately. A singular matrix or a correlation matrix with no
factor left above threshold is not an error; those operations return
``None`` instead.
"""


class InvalidRatio(ValueError):
    """A ratio was constructed with a zero denominator."""


class InvalidFormat(ValueError):
    """Text did not match the ``<int>/<int>`` ratio syntax."""


class DivisionByZero(ZeroDivisionError):
    """A divisor, or a column's spread in a correlation, is zero."""


class DimensionMismatch(ValueError):
    """Ragged rows, or operands whose shapes do not fit the operation."""


class NotSquare(ValueError):
    """The operation is only defined for square matrices."""
