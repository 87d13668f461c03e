# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Immutable rectangular matrices over a ``Numeric`` domain.

Cells live in a read-only NumPy array: ``object`` dtype holding ``Ratio``
values for the exact domain, ``float64`` for the floating domain. Every
operation returns a new ``Matrix``; nothing is modified in place.

>>> from factor_analysis import Matrix, EXACT
>>> A = Matrix([[1, 2], [3, 4]], EXACT)
>>> (A @ A.transpose()).to_rows()
[[Ratio(5, 1), Ratio(11, 1)], [Ratio(11, 1), Ratio(25, 1)]]
"""

import functools
from typing import Any, Callable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import DimensionMismatch, DivisionByZero
from .numeric import APPROXIMATE, EXACT, Numeric, common_numeric, infer_numeric
from .utils import EPS


def _canonical(cells: np.ndarray, numeric: Numeric) -> np.ndarray:
    """Coerce an array into the storage form of ``numeric`` and freeze it."""
    if cells.ndim != 2:
        raise DimensionMismatch(f"Expected a 2-d grid of cells, got shape {cells.shape}")
    if cells.shape[0] == 0 or cells.shape[1] == 0:
        cells = np.empty((0, 0), dtype=numeric.dtype)
    elif numeric.exact:
        if cells.dtype != object:
            cells = cells.astype(object)
        cells = np.frompyfunc(numeric.coerce, 1, 1)(cells).astype(object)
    else:
        # "+ 0.0" turns any negative zero into positive zero
        cells = np.asarray(cells, dtype=np.float64) + 0.0
    cells.flags.writeable = False
    return cells


class Matrix:
    """
    Rectangular grid of cells from a single numeric domain.

    Parameters
    ----------
    rows : sequence of sequences
        Row-major cells; every row must have the same length.
    numeric : Numeric | None
        Cell domain. When omitted it is inferred: ``EXACT`` if any cell is
        a ``Ratio`` (or ratio text), ``APPROXIMATE`` otherwise.

    Raises
    ------
    DimensionMismatch
        If the rows do not all have the same length.
    """

    __slots__ = ("_cells", "_numeric")

    def __init__(self, rows: Sequence[Sequence[Any]] = (), numeric: Optional[Numeric] = None):
        rows = [list(row) for row in rows]
        if numeric is None:
            numeric = infer_numeric(cell for row in rows for cell in row)
        lengths = [len(row) for row in rows]
        if len(set(lengths)) > 1:
            raise DimensionMismatch(
                f"All rows are required to be the same size, got row lengths {lengths}"
            )
        column_count = lengths[0] if rows else 0
        row_count = len(rows) if column_count else 0

        cells = np.empty((row_count, column_count), dtype=numeric.dtype)
        for i in range(row_count):
            for j, cell in enumerate(rows[i]):
                cells[i, j] = numeric.coerce(cell)
        object.__setattr__(self, "_numeric", numeric)
        object.__setattr__(self, "_cells", _canonical(cells, numeric))

    @classmethod
    def _wrap(cls, cells: np.ndarray, numeric: Numeric) -> "Matrix":
        matrix = cls.__new__(cls)
        object.__setattr__(matrix, "_numeric", numeric)
        object.__setattr__(matrix, "_cells", _canonical(cells, numeric))
        return matrix

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    # -----------------------------------------------------------------
    # Constructors
    # -----------------------------------------------------------------
    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]], numeric: Optional[Numeric] = None) -> "Matrix":
        return cls(rows, numeric)

    @classmethod
    def from_columns(cls, columns: Sequence[Sequence[Any]], numeric: Optional[Numeric] = None) -> "Matrix":
        return cls(columns, numeric).transpose()

    @classmethod
    def from_numpy(cls, array: np.ndarray, numeric: Optional[Numeric] = None) -> "Matrix":
        array = np.asarray(array)
        if numeric is None:
            numeric = infer_numeric(array.ravel()) if array.dtype == object else APPROXIMATE
        if array.ndim == 1:
            array = array[None, :]
        return cls._wrap(array, numeric)

    @classmethod
    def empty(cls, numeric: Numeric = APPROXIMATE) -> "Matrix":
        return cls((), numeric)

    @classmethod
    def zeros(cls, row_count: int, column_count: int, numeric: Numeric = APPROXIMATE) -> "Matrix":
        return cls._wrap(
            np.full((row_count, column_count), numeric.zero, dtype=numeric.dtype), numeric
        )

    @classmethod
    def identity(cls, size: int, numeric: Numeric = APPROXIMATE) -> "Matrix":
        cells = np.full((size, size), numeric.zero, dtype=numeric.dtype)
        for i in range(size):
            cells[i, i] = numeric.one
        return cls._wrap(cells, numeric)

    # -----------------------------------------------------------------
    # Shape and access
    # -----------------------------------------------------------------
    @property
    def numeric(self) -> Numeric:
        return self._numeric

    @property
    def row_count(self) -> int:
        return self._cells.shape[0]

    @property
    def column_count(self) -> int:
        return self._cells.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._cells.shape

    @property
    def is_empty(self) -> bool:
        return self.row_count == 0

    @property
    def is_square(self) -> bool:
        return self.row_count == self.column_count

    def _check_row(self, i: int) -> None:
        if not 0 <= i < self.row_count:
            raise IndexError(f"Row {i} out of range for {self.row_count} rows")

    def _check_column(self, j: int) -> None:
        if not 0 <= j < self.column_count:
            raise IndexError(f"Column {j} out of range for {self.column_count} columns")

    def _cell(self, value):
        return value if self._numeric.exact else float(value)

    def get(self, i: int, j: int):
        self._check_row(i)
        self._check_column(j)
        return self._cell(self._cells[i, j])

    def __getitem__(self, index: Tuple[int, int]):
        i, j = index
        return self.get(i, j)

    def row(self, i: int) -> List[Any]:
        self._check_row(i)
        return self._cells[i].tolist()

    def column(self, j: int) -> List[Any]:
        self._check_column(j)
        return self._cells[:, j].tolist()

    def get_row(self, i: int) -> "Matrix":
        """Row ``i`` as a 1-by-n matrix."""
        self._check_row(i)
        return Matrix._wrap(self._cells[i : i + 1, :], self._numeric)

    def get_column(self, j: int) -> "Matrix":
        """Column ``j`` as an m-by-1 matrix."""
        self._check_column(j)
        return Matrix._wrap(self._cells[:, j : j + 1], self._numeric)

    def to_rows(self) -> List[List[Any]]:
        return self._cells.tolist()

    def to_list(self) -> List[Any]:
        return self._cells.ravel().tolist()

    def to_numpy(self) -> np.ndarray:
        """Float64 copy of the cells."""
        return np.array(
            [[self._numeric.to_float(c) for c in row] for row in self.to_rows()],
            dtype=np.float64,
        ).reshape(self.shape)

    # -----------------------------------------------------------------
    # Incremental construction
    # -----------------------------------------------------------------
    def _extend_numeric(self, cells: Sequence[Any]) -> Numeric:
        # An empty matrix adopts the exact domain when handed exact cells.
        if self.is_empty and infer_numeric(cells).exact:
            return EXACT
        return self._numeric

    def _vector(self, cells: Sequence[Any], numeric: Numeric) -> np.ndarray:
        vector = np.empty(len(cells), dtype=numeric.dtype)
        for k, cell in enumerate(cells):
            vector[k] = numeric.coerce(cell)
        return vector

    def add_row(self, *cells) -> "Matrix":
        numeric = self._extend_numeric(cells)
        if self.is_empty:
            return Matrix([cells], numeric)
        if len(cells) != self.column_count:
            raise DimensionMismatch(
                f"Row of length {len(cells)} does not fit a {self.row_count}x{self.column_count} matrix"
            )
        base = self.convert(numeric)._cells
        return Matrix._wrap(np.vstack([base, self._vector(cells, numeric)[None, :]]), numeric)

    def add_column(self, *cells) -> "Matrix":
        numeric = self._extend_numeric(cells)
        if self.is_empty:
            return Matrix([[cell] for cell in cells], numeric)
        if len(cells) != self.row_count:
            raise DimensionMismatch(
                f"Column of length {len(cells)} does not fit a {self.row_count}x{self.column_count} matrix"
            )
        base = self.convert(numeric)._cells
        return Matrix._wrap(np.hstack([base, self._vector(cells, numeric)[:, None]]), numeric)

    # -----------------------------------------------------------------
    # Pure transforms
    # -----------------------------------------------------------------
    def replace_row(self, i: int, cells: Sequence[Any]) -> "Matrix":
        self._check_row(i)
        if len(cells) != self.column_count:
            raise DimensionMismatch(
                f"Row of length {len(cells)} does not fit a {self.row_count}x{self.column_count} matrix"
            )
        replaced = self._cells.copy()
        replaced[i] = self._vector(cells, self._numeric)
        return Matrix._wrap(replaced, self._numeric)

    def augment(self, that: "Matrix") -> "Matrix":
        """Append the columns of ``that`` to the right of this matrix."""
        numeric = common_numeric(self._numeric, that._numeric)
        if self.is_empty:
            return that.convert(numeric)
        if that.is_empty:
            return self.convert(numeric)
        if self.row_count != that.row_count:
            raise DimensionMismatch(
                f"Cannot augment a {self.row_count}x{self.column_count} matrix "
                f"with a {that.row_count}x{that.column_count} matrix"
            )
        return Matrix._wrap(
            np.hstack([self.convert(numeric)._cells, that.convert(numeric)._cells]), numeric
        )

    def row_range(self, start: int, stop: int) -> "Matrix":
        return Matrix._wrap(self._cells[start:stop, :], self._numeric)

    def column_range(self, start: int, stop: int) -> "Matrix":
        return Matrix._wrap(self._cells[:, start:stop], self._numeric)

    def minor(self, i: int, j: int) -> "Matrix":
        """This matrix with row ``i`` and column ``j`` removed."""
        self._check_row(i)
        self._check_column(j)
        cells = np.delete(np.delete(self._cells, i, axis=0), j, axis=1)
        return Matrix._wrap(cells, self._numeric)

    def transpose(self) -> "Matrix":
        return Matrix._wrap(self._cells.T.copy(), self._numeric)

    @property
    def T(self) -> "Matrix":
        return self.transpose()

    def convert(self, numeric: Numeric) -> "Matrix":
        """Re-express the cells in another numeric domain."""
        if numeric is self._numeric:
            return self
        if numeric.exact or self._numeric.exact:
            return Matrix._wrap(np.frompyfunc(numeric.coerce, 1, 1)(self._cells), numeric)
        return Matrix._wrap(self._cells, numeric)

    # -----------------------------------------------------------------
    # Element-wise and cross operations
    # -----------------------------------------------------------------
    def unary_operation(self, operation: Callable[[Any], Any]) -> "Matrix":
        if self.is_empty:
            return self
        return Matrix._wrap(np.frompyfunc(operation, 1, 1)(self._cells), self._numeric)

    def binary_operation(self, that: "Matrix", operation: Callable[[Any, Any], Any]) -> "Matrix":
        if self.shape != that.shape:
            raise DimensionMismatch(
                f"Shapes {self.row_count}x{self.column_count} and "
                f"{that.row_count}x{that.column_count} differ"
            )
        numeric = common_numeric(self._numeric, that._numeric)
        if self.is_empty:
            return Matrix.empty(numeric)
        left, right = self.convert(numeric), that.convert(numeric)
        return Matrix._wrap(np.frompyfunc(operation, 2, 1)(left._cells, right._cells), numeric)

    def cross_operation(
        self,
        that: "Matrix",
        combine: Callable[[Any, Any], Any],
        multiply: Callable[[Any, Any], Any],
    ) -> "Matrix":
        """
        Generalised matrix product.

        Cell ``(i, j)`` is ``combine`` folded, from the domain zero, over
        ``multiply(row_i[k], column_j[k])`` for every ``k``. The ordinary
        product is ``cross_operation(that, add, multiply)``.
        """
        if self.column_count != that.row_count:
            raise DimensionMismatch(
                f"Column count ({self.column_count}) of a {self.row_count}x{self.column_count} "
                f"matrix does not match the row count ({that.row_count}) of a "
                f"{that.row_count}x{that.column_count} matrix"
            )
        numeric = common_numeric(self._numeric, that._numeric)
        left, right = self.convert(numeric), that.convert(numeric)
        columns = [right.column(j) for j in range(right.column_count)]
        rows = [
            [
                functools.reduce(combine, map(multiply, left.row(i), column), numeric.zero)
                for column in columns
            ]
            for i in range(left.row_count)
        ]
        return Matrix(rows, numeric)

    # -----------------------------------------------------------------
    # Operators
    # -----------------------------------------------------------------
    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.binary_operation(other, common_numeric(self._numeric, other._numeric).add)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.binary_operation(
            other, common_numeric(self._numeric, other._numeric).subtract
        )

    def __matmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        numeric = common_numeric(self._numeric, other._numeric)
        return self.cross_operation(other, numeric.add, numeric.multiply)

    def scale(self, scalar) -> "Matrix":
        numeric = self._numeric
        factor = numeric.coerce(scalar)
        return self.unary_operation(lambda x: numeric.multiply(x, factor))

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return NotImplemented
        return self.scale(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Matrix):
            return NotImplemented
        numeric = self._numeric
        divisor = numeric.coerce(other)
        if divisor == 0:
            raise DivisionByZero(f"Cannot divide a matrix by {other}")
        return self.unary_operation(lambda x: numeric.divide(x, divisor))

    def __neg__(self):
        return self.unary_operation(self._numeric.negate)

    # -----------------------------------------------------------------
    # Comparison and display
    # -----------------------------------------------------------------
    def is_close(self, that: "Matrix", tolerance: float = EPS) -> bool:
        """True if shapes match and every cell agrees within ``tolerance``."""
        if self.shape != that.shape:
            return False
        return bool(np.allclose(self.to_numpy(), that.to_numpy(), rtol=0.0, atol=tolerance))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self.to_rows() == other.to_rows()

    def __hash__(self) -> int:
        return hash((self.shape, tuple(self.to_list())))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_rows()!r})"

    def __str__(self) -> str:
        return "\n".join(" ".join(str(cell) for cell in row) for row in self.to_rows())
