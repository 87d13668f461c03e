# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Numeric domains a ``Matrix`` can be built over.

Every algorithm in the package is written against the ``Numeric``
interface, so the same elimination, determinant and statistics code runs
on exact ``Ratio`` cells and on floats. The two domains differ in how
they decide that a value is zero:

- ``RationalField`` uses true zero.
- ``FloatField`` treats ``abs(x) <= tolerance`` as zero.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable

import numpy as np

from .errors import DivisionByZero
from .ratio import Ratio
from .utils import EPS, clean_zero


class Numeric(ABC):
    """Arithmetic primitives for one cell domain."""

    exact: bool
    dtype: Any

    @property
    @abstractmethod
    def zero(self): ...

    @property
    @abstractmethod
    def one(self): ...

    @abstractmethod
    def coerce(self, value):
        """Convert ``value`` into a cell of this domain."""

    @abstractmethod
    def is_zero(self, value) -> bool: ...

    def from_int(self, n: int):
        return self.coerce(n)

    def add(self, a, b):
        return a + b

    def subtract(self, a, b):
        return a - b

    def multiply(self, a, b):
        return a * b

    def divide(self, a, b):
        if b == 0:
            raise DivisionByZero(f"Cannot divide {a} by zero")
        return a / b

    def negate(self, a):
        return -a

    def absolute(self, a):
        return abs(a)

    def to_float(self, a) -> float:
        return float(a)

    def equal(self, a, b) -> bool:
        return self.is_zero(self.subtract(a, b))


class RationalField(Numeric):
    exact = True
    dtype = object

    @property
    def zero(self) -> Ratio:
        return Ratio.ZERO

    @property
    def one(self) -> Ratio:
        return Ratio.ONE

    def coerce(self, value) -> Ratio:
        if isinstance(value, Ratio):
            return value
        if isinstance(value, str):
            return Ratio.parse(value)
        if isinstance(value, (float, np.floating)):
            if not float(value).is_integer():
                raise TypeError(
                    f"Cannot use the floating value {value!r} as an exact cell"
                )
            return Ratio(int(value))
        return Ratio(value)

    def is_zero(self, value) -> bool:
        return value.is_zero()

    def divide(self, a, b):
        return a.divide(b)

    def __repr__(self) -> str:
        return "RationalField()"


class FloatField(Numeric):
    exact = False
    dtype = np.float64

    def __init__(self, tolerance: float = EPS):
        if tolerance < 0:
            raise ValueError("tolerance must be non-negative")
        self.tolerance = tolerance

    @property
    def zero(self) -> float:
        return 0.0

    @property
    def one(self) -> float:
        return 1.0

    def coerce(self, value) -> float:
        return clean_zero(float(value))

    def is_zero(self, value) -> bool:
        return abs(value) <= self.tolerance

    def add(self, a, b):
        return clean_zero(a + b)

    def subtract(self, a, b):
        return clean_zero(a - b)

    def multiply(self, a, b):
        return clean_zero(a * b)

    def divide(self, a, b):
        if b == 0:
            raise DivisionByZero(f"Cannot divide {a} by zero")
        return clean_zero(a / b)

    def negate(self, a):
        return clean_zero(-a)

    def __repr__(self) -> str:
        return f"FloatField(tolerance={self.tolerance!r})"


EXACT = RationalField()
APPROXIMATE = FloatField()


def infer_numeric(cells: Iterable) -> Numeric:
    """``EXACT`` if any cell is a ``Ratio`` or ratio text, else ``APPROXIMATE``."""
    for cell in cells:
        if isinstance(cell, (Ratio, str)):
            return EXACT
    return APPROXIMATE


def common_numeric(a: Numeric, b: Numeric) -> Numeric:
    """Domain two operands meet in; floating wins over exact."""
    if a is b or (a.exact and b.exact):
        return a
    return b if a.exact else a
