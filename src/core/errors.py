"""Exception hierarchy shared by the matrix and optimizer packages.

Matrix failures subclass the builtin exception a caller would naturally
catch for the same mistake (IndexError for bad indices, ValueError for bad
shapes), so generic handlers keep working. Non-convergence of the opt-in
iteration guards is reported as a RuntimeError.
"""

from __future__ import annotations

__all__ = [
    "MatrixError",
    "OutOfRangeError",
    "InvalidShapeError",
    "ShapeMismatchError",
    "IncompatibleDimensionsError",
    "NonConvergenceError",
    "LineSearchError",
]


class MatrixError(Exception):
    """Base class for all Matrix failures."""


class OutOfRangeError(MatrixError, IndexError):
    """An element or linear index lies outside the matrix bounds."""


class InvalidShapeError(MatrixError, ValueError):
    """An operation's shape precondition is violated (e.g. det2 on 3x3)."""


class ShapeMismatchError(InvalidShapeError):
    """Elementwise operands do not have identical shapes."""


class IncompatibleDimensionsError(MatrixError, ValueError):
    """Inner dimensions of a matrix product disagree."""


class NonConvergenceError(RuntimeError):
    """An iterative method exceeded its configured iteration cap.

    Attributes:
        iterations: Number of iterations performed before giving up.
    """

    def __init__(self, message: str, *, iterations: int) -> None:
        super().__init__(message)
        self.iterations = iterations


class LineSearchError(NonConvergenceError):
    """Armijo backtracking exceeded its configured number of trial steps."""
