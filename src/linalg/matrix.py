"""Dense real matrix with 1-based element access.

This module provides:
- Matrix: a small dense matrix with value semantics, backed by a private
  float64 numpy array
- eye: identity matrix constructor
- linear_to_2d: the column-major linear index mapping

Indices are 1-based throughout, matching the mathematical notation used by
the optimizer (x1, x2, a_ij). Every arithmetic operator allocates and
returns a new Matrix; no two matrices ever share storage.
"""

from __future__ import annotations

import numbers
from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np

from core.errors import (
    IncompatibleDimensionsError,
    InvalidShapeError,
    OutOfRangeError,
    ShapeMismatchError,
)
from core.logging import format_value, log
from core.types import Index2D

__all__ = ["Matrix", "eye", "linear_to_2d"]


def _check_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    return int(value)


def linear_to_2d(k: int, rows: int) -> Index2D:
    """Map a 1-based column-major linear index to a 1-based (row, col) pair.

    k = 1 .. rows*cols walks down the first column, then the second, etc.:
        row = ((k - 1) mod rows) + 1
        col = ((k - 1) div rows) + 1

    The result is not bounds-checked against a column count; any k <= 0
    maps to a column <= 0, which Matrix rejects as out of range.

    Raises:
        OutOfRangeError: If rows == 0 (no linear index is valid).
    """
    k = _check_int("k", k)
    if rows <= 0:
        raise OutOfRangeError(f"linear index {k} out of range for a matrix with no rows")
    return (k - 1) % rows + 1, (k - 1) // rows + 1


class Matrix:
    """A dense rows x cols matrix of real values.

    Construction:
        Matrix(rows, cols, value)   filled with value (default 0x0, 0.0)
        Matrix.from_matrix(m)       independent copy (also m.copy())
        Matrix.column([a, b, ...])  column vector from a flat sequence
        Matrix.from_rows([[..], ..])  from a sequence of equally long rows
        Matrix.from_numpy(arr)      1-D arrays become column vectors

    Element access is 1-based, either 2-D via get(i, j) / set(i, j, v) or
    linear column-major via get(k) / set(k, v) (see linear_to_2d).

    Note:
        ``A / s`` divides the scalar by each element, i.e. its entries are
        ``s / a_ij``, not ``a_ij / s``. This keeps the long-standing
        behavior of the operator. Use ``divide_by(s)`` for ``a_ij / s`` and
        ``divide_into(s)`` to spell the ``/`` behavior explicitly.

    Example:
        >>> a = Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]])
        >>> a.get(1, 2), a.get(2)
        (2.0, 3.0)
        >>> a.det2()
        -2.0
        >>> (a * eye(2)) == a
        True
    """

    __slots__ = ("_data",)

    # numpy scalars on the left (np.float64(2) * m) defer to __rmul__.
    __array_ufunc__ = None

    def __init__(self, rows: int = 0, cols: int = 0, value: float = 0.0) -> None:
        """Create a rows x cols matrix with every element set to value.

        Raises:
            ValueError: If rows or cols is negative.
        """
        rows = _check_int("rows", rows)
        cols = _check_int("cols", cols)
        if rows < 0 or cols < 0:
            raise ValueError(f"Dimensions must be non-negative, got {rows}x{cols}")
        self._data: np.ndarray = np.full((rows, cols), float(value), dtype=np.float64)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def _wrap(cls, data: np.ndarray) -> Matrix:
        # Takes ownership of data; callers pass freshly allocated arrays only.
        out = cls.__new__(cls)
        out._data = data
        return out

    @classmethod
    def from_matrix(cls, other: Matrix) -> Matrix:
        """Return an independent copy of other."""
        return cls._wrap(other._data.copy())

    @classmethod
    def column(cls, values: Iterable[float]) -> Matrix:
        """Build a column vector from a flat ordered sequence of values."""
        data = np.array(list(values), dtype=np.float64)
        return cls._wrap(data.reshape(-1, 1))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> Matrix:
        """Build a matrix from a sequence of rows.

        An empty sequence gives the 0x0 matrix.

        Raises:
            InvalidShapeError: If the rows do not all have the same length
                or their elements are not scalars.
        """
        rows = [list(r) for r in rows]
        if not rows:
            return cls()
        width = len(rows[0])
        for idx, row in enumerate(rows, start=1):
            if len(row) != width:
                raise InvalidShapeError(
                    f"Row {idx} has {len(row)} elements, expected {width}"
                )
        try:
            data = np.array(rows, dtype=np.float64)
        except ValueError as exc:
            raise InvalidShapeError(f"Rows must contain scalars: {exc}") from exc
        if data.ndim != 2:
            raise InvalidShapeError(f"Rows must contain scalars, got ndim={data.ndim}")
        return cls._wrap(data)

    @classmethod
    def from_numpy(cls, array: Any) -> Matrix:
        """Build a matrix from a 1-D (column vector) or 2-D array-like.

        Raises:
            InvalidShapeError: If the array has more than 2 dimensions.
        """
        data = np.array(array, dtype=np.float64)
        if data.ndim == 0:
            data = data.reshape(1, 1)
        elif data.ndim == 1:
            data = data.reshape(-1, 1)
        elif data.ndim != 2:
            raise InvalidShapeError(f"Expected a 1-D or 2-D array, got ndim={data.ndim}")
        return cls._wrap(data)

    def copy(self) -> Matrix:
        return Matrix.from_matrix(self)

    def to_numpy(self) -> np.ndarray:
        """Return a copy of the elements as a 2-D float64 array."""
        return self._data.copy()

    def to_list(self) -> list[list[float]]:
        return self._data.tolist()

    # ------------------------------------------------------------------
    # Shape queries
    # ------------------------------------------------------------------

    def rows(self) -> int:
        return int(self._data.shape[0])

    def cols(self) -> int:
        return int(self._data.shape[1])

    def length(self) -> int:
        """Return the number of elements (rows * cols)."""
        return int(self._data.size)

    @property
    def shape(self) -> Index2D:
        return self.rows(), self.cols()

    def is_vector(self) -> bool:
        """Return True for row vectors and column vectors."""
        return self.rows() == 1 or self.cols() == 1

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------

    def _position(self, i: int, j: int | None) -> Index2D:
        if j is None:
            i, j = linear_to_2d(i, self.rows())
        else:
            i = _check_int("i", i)
            j = _check_int("j", j)
        if not (1 <= i <= self.rows() and 1 <= j <= self.cols()):
            raise OutOfRangeError(
                f"Index ({i}, {j}) out of range for a {self.rows()}x{self.cols()} matrix"
            )
        return i - 1, j - 1

    def get(self, i: int, j: int | None = None) -> float:
        """Return element (i, j), or the i-th element in column-major order.

        Raises:
            OutOfRangeError: If the index lies outside the matrix.
        """
        return float(self._data[self._position(i, j)])

    def set(self, *args: Any) -> None:
        """Set an element in place: ``set(i, j, value)`` or ``set(k, value)``.

        Raises:
            OutOfRangeError: If the index lies outside the matrix.
            TypeError: If called with anything but 2 or 3 arguments.
        """
        if len(args) == 3:
            i, j, value = args
        elif len(args) == 2:
            (i, value), j = args, None
        else:
            raise TypeError(f"set() takes (k, value) or (i, j, value), got {len(args)} arguments")
        self._data[self._position(i, j)] = float(value)

    def x(self) -> float:
        """Return the only element of a 1x1 matrix.

        Raises:
            InvalidShapeError: If the matrix is not 1x1.
        """
        if self.shape != (1, 1):
            raise InvalidShapeError(f"Not a 1x1 matrix: shape is {self.rows()}x{self.cols()}")
        return self.get(1, 1)

    def x1(self) -> float:
        """Return the first element of a 2x1 column vector.

        Raises:
            InvalidShapeError: If the matrix is not 2x1.
        """
        if self.shape != (2, 1):
            raise InvalidShapeError(f"Not a 2x1 column vector: shape is {self.rows()}x{self.cols()}")
        return self.get(1, 1)

    def x2(self) -> float:
        """Return the second element of a 2x1 column vector.

        Raises:
            InvalidShapeError: If the matrix is not 2x1.
        """
        if self.shape != (2, 1):
            raise InvalidShapeError(f"Not a 2x1 column vector: shape is {self.rows()}x{self.cols()}")
        return self.get(2, 1)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _check_same_shape(self, other: Matrix, op: str) -> None:
        if self.shape != other.shape:
            raise ShapeMismatchError(
                f"Cannot apply '{op}' to a {self.rows()}x{self.cols()} and a "
                f"{other.rows()}x{other.cols()} matrix"
            )

    def __add__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "+")
        return Matrix._wrap(self._data + other._data)

    def __sub__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other, "-")
        return Matrix._wrap(self._data - other._data)

    def __neg__(self) -> Matrix:
        return Matrix._wrap(-self._data)

    def __mul__(self, other: object) -> Matrix:
        if isinstance(other, Matrix):
            return self.matmul(other)
        if isinstance(other, numbers.Real):
            return self.scale(float(other))
        return NotImplemented

    def __rmul__(self, other: object) -> Matrix:
        if isinstance(other, numbers.Real):
            return self.scale(float(other))
        return NotImplemented

    def __matmul__(self, other: object) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.matmul(other)

    def __truediv__(self, other: object) -> Matrix:
        if isinstance(other, numbers.Real):
            return self.divide_into(float(other))
        return NotImplemented

    def matmul(self, other: Matrix) -> Matrix:
        """Return the matrix product self * other.

        Raises:
            IncompatibleDimensionsError: If self.cols() != other.rows().
        """
        if self.cols() != other.rows():
            raise IncompatibleDimensionsError(
                f"Invalid matrix multiplication: {self.rows()}x{self.cols()} "
                f"times {other.rows()}x{other.cols()}"
            )
        return Matrix._wrap(self._data @ other._data)

    def scale(self, s: float) -> Matrix:
        """Return s * a_ij for every element."""
        return Matrix._wrap(s * self._data)

    def divide_into(self, s: float) -> Matrix:
        """Return s / a_ij for every element (the ``/`` operator).

        Zero elements give inf (or nan when s is 0), as IEEE division does.
        """
        with np.errstate(divide="ignore", invalid="ignore"):
            return Matrix._wrap(s / self._data)

    def divide_by(self, s: float) -> Matrix:
        """Return a_ij / s for every element."""
        with np.errstate(divide="ignore", invalid="ignore"):
            return Matrix._wrap(self._data / s)

    def transpose(self) -> Matrix:
        return Matrix._wrap(self._data.T.copy())

    def t(self) -> Matrix:
        """Alias of transpose()."""
        return self.transpose()

    @property
    def T(self) -> Matrix:
        return self.transpose()

    def det2(self) -> float:
        """Return a11*a22 - a12*a21.

        Raises:
            InvalidShapeError: Unless the matrix is exactly 2x2.
        """
        if self.shape != (2, 2):
            raise InvalidShapeError(
                f"Can't apply det2 to a non 2x2 matrix: shape is {self.rows()}x{self.cols()}"
            )
        return self.get(1, 1) * self.get(2, 2) - self.get(1, 2) * self.get(2, 1)

    def mod(self) -> float:
        """Return the Euclidean norm of all elements, taken in linear order."""
        flat = self._data.ravel(order="F")
        return float(np.sqrt(np.sum(flat * flat)))

    # ------------------------------------------------------------------
    # Comparison and display
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def allclose(self, other: Matrix, *, rtol: float = 1e-9, atol: float = 1e-12) -> bool:
        """Return True if shapes match and all elements agree within tolerance."""
        if self.shape != other.shape:
            return False
        return bool(np.allclose(self._data, other._data, rtol=rtol, atol=atol))

    def __repr__(self) -> str:
        return f"Matrix({self.rows()}x{self.cols()}, {self.to_list()})"

    def debug(self, *, verbose: bool = True) -> None:
        """Print the shape and the elements row by row to stdout."""
        log("INFO: Matrix debug", verbose=verbose)
        log(f"\t#rows={self.rows()}, #cols={self.cols()}", verbose=verbose)
        for row in self._data:
            log("\t" + "".join(f"{format_value(v)} " for v in row), verbose=verbose)


def eye(n: int) -> Matrix:
    """Return the n x n identity matrix."""
    n = _check_int("n", n)
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    return Matrix._wrap(np.eye(n, dtype=np.float64))
