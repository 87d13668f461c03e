# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exact rational numbers.

A ``Ratio`` is always held in lowest terms with a positive denominator,
so two equal values always have identical fields.

>>> Ratio(3, -6)
Ratio(-1, 2)
>>> str(Ratio(4, 2))
'2'
>>> Ratio.parse("1/3") + Ratio(1, 6)
Ratio(1, 2)
"""

import functools
import operator
import re
from typing import Iterable, Tuple, Union

from .errors import DivisionByZero, InvalidFormat, InvalidRatio

RATIO_PATTERN = re.compile(r"([+-]?\d+)/([+-]?\d+)")


def greatest_common_factor(a: int, b: int) -> int:
    """Euclidean algorithm; the result is never negative."""
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


def least_common_multiple(a: int, b: int) -> int:
    if a == 0 and b == 0:
        return 0
    return abs(a * b) // greatest_common_factor(a, b)


@functools.total_ordering
class Ratio:
    """
    Immutable fraction ``numerator / denominator``.

    Parameters
    ----------
    numerator : int
    denominator : int, default 1
        Must not be zero.

    Raises
    ------
    InvalidRatio
        If ``denominator`` is zero.
    TypeError
        If either part is not an integer.
    """

    __slots__ = ("_numerator", "_denominator")

    ZERO: "Ratio"
    ONE: "Ratio"

    def __init__(self, numerator: int, denominator: int = 1):
        numerator = operator.index(numerator)
        denominator = operator.index(denominator)
        if denominator == 0:
            raise InvalidRatio(
                f"Denominator must not be zero in {numerator}/{denominator}"
            )
        gcf = greatest_common_factor(numerator, denominator)
        numerator, denominator = numerator // gcf, denominator // gcf
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        object.__setattr__(self, "_numerator", numerator)
        object.__setattr__(self, "_denominator", denominator)

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @classmethod
    def parse(cls, text: str) -> "Ratio":
        """
        Parse ``"<int>/<int>"`` (each part may carry a sign) into a
        simplified ratio.
        """
        match = RATIO_PATTERN.fullmatch(text.strip())
        if match is None:
            raise InvalidFormat(
                f"Value '{text}' did not match expression {RATIO_PATTERN.pattern}"
            )
        return cls(int(match.group(1)), int(match.group(2)))

    @classmethod
    def _coerce(cls, value) -> "Ratio":
        if isinstance(value, Ratio):
            return value
        return cls(operator.index(value))

    # -----------------------------------------------------------------
    # Arithmetic
    # -----------------------------------------------------------------
    def add(self, that: "Ratio") -> "Ratio":
        that = self._coerce(that)
        lcm = least_common_multiple(self._denominator, that._denominator)
        return Ratio(
            self._numerator * (lcm // self._denominator)
            + that._numerator * (lcm // that._denominator),
            lcm,
        )

    def subtract(self, that: "Ratio") -> "Ratio":
        return self.add(self._coerce(that).negate())

    def multiply(self, that: "Ratio") -> "Ratio":
        that = self._coerce(that)
        return Ratio(
            self._numerator * that._numerator, self._denominator * that._denominator
        )

    def divide(self, that: "Ratio") -> "Ratio":
        return self.multiply(self._coerce(that).reciprocal())

    def negate(self) -> "Ratio":
        return Ratio(-self._numerator, self._denominator)

    def reciprocal(self) -> "Ratio":
        if self._numerator == 0:
            raise DivisionByZero(f"Reciprocal of {self} is undefined")
        return Ratio(self._denominator, self._numerator)

    def simplify(self) -> "Ratio":
        # Construction already reduces; kept as an explicit operation.
        return Ratio(self._numerator, self._denominator)

    def with_denominator(self, denominator: int) -> Tuple[int, int]:
        """
        Express this value over ``denominator``, which must be a multiple
        of the reduced denominator. Returns the raw ``(numerator,
        denominator)`` pair since a ``Ratio`` is always reduced.
        """
        if denominator == 0 or denominator % self._denominator:
            raise ValueError(
                f"{denominator} is not a multiple of the denominator of {self}"
            )
        return self._numerator * denominator // self._denominator, denominator

    def compare_to(self, that: "Ratio") -> int:
        """Return -1, 0 or 1 by cross-multiplying over the common denominator."""
        that = self._coerce(that)
        lcm = least_common_multiple(self._denominator, that._denominator)
        left = self._numerator * (lcm // self._denominator)
        right = that._numerator * (lcm // that._denominator)
        return (left > right) - (left < right)

    def signum(self) -> int:
        return (self._numerator > 0) - (self._numerator < 0)

    def is_zero(self) -> bool:
        return self._numerator == 0

    def is_integer(self) -> bool:
        return self._denominator == 1

    def to_float(self) -> float:
        return self._numerator / self._denominator

    # -----------------------------------------------------------------
    # Python protocol
    # -----------------------------------------------------------------
    def __add__(self, other):
        try:
            return self.add(other)
        except TypeError:
            return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        try:
            return self.subtract(other)
        except TypeError:
            return NotImplemented

    def __rsub__(self, other):
        try:
            return self._coerce(other).subtract(self)
        except TypeError:
            return NotImplemented

    def __mul__(self, other):
        try:
            return self.multiply(other)
        except TypeError:
            return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        try:
            that = self._coerce(other)
        except TypeError:
            return NotImplemented
        return self.divide(that)

    def __rtruediv__(self, other):
        try:
            that = self._coerce(other)
        except TypeError:
            return NotImplemented
        return that.divide(self)

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self

    def __abs__(self):
        return Ratio(abs(self._numerator), self._denominator)

    def __float__(self) -> float:
        return self.to_float()

    def __bool__(self) -> bool:
        return self._numerator != 0

    def __eq__(self, other) -> bool:
        if isinstance(other, Ratio):
            return (self._numerator, self._denominator) == (
                other._numerator,
                other._denominator,
            )
        if isinstance(other, int):
            return self._denominator == 1 and self._numerator == other
        return NotImplemented

    def __lt__(self, other) -> bool:
        try:
            return self.compare_to(other) < 0
        except TypeError:
            return NotImplemented

    def __hash__(self) -> int:
        if self._denominator == 1:
            return hash(self._numerator)
        return hash((self._numerator, self._denominator))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._numerator}, {self._denominator})"

    def __str__(self) -> str:
        if self._denominator == 1:
            return f"{self._numerator}"
        return f"{self._numerator}/{self._denominator}"

    def __reduce__(self):
        return (self.__class__, (self._numerator, self._denominator))


Ratio.ZERO = Ratio(0, 1)
Ratio.ONE = Ratio(1, 1)


def ratio_sum(values: Iterable[Union[Ratio, int]]) -> Ratio:
    total = Ratio.ZERO
    for value in values:
        total = total + value
    return total
