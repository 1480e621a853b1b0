"""Synthetic quadratic objective.

This module provides a convex quadratic problem for exercising the optimizer:
    f(x) = 0.5 * x^T A x + b^T x

where A is symmetric positive definite (SPD) and b is a column vector.

It is the primary sanity check for descent methods because:
- It has a unique global minimum at x* = -A^{-1} b
- Gradients are exact: grad f(x) = Ax + b
- Its bound loss/grad methods are stateful objectives that carry (A, b)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from core.errors import InvalidShapeError
from linalg.matrix import Matrix

__all__ = [
    "QuadraticProblem",
    "make_spd_quadratic",
]


@dataclass(frozen=True)
class QuadraticProblem:
    """A convex quadratic optimization problem.

    Defines the function:
        f(x) = 0.5 * x^T A x + b^T x

    Attributes:
        A: Symmetric positive definite Matrix of shape (d, d).
        b: Linear term, column vector of shape (d, 1).

    Example:
        >>> A = Matrix.from_rows([[2.0, 0.0], [0.0, 1.0]])
        >>> b = Matrix.column([1.0, -1.0])
        >>> problem = QuadraticProblem(A, b)
        >>> problem.loss(Matrix(2, 1))
        0.0
        >>> problem.grad(Matrix(2, 1)).to_list()
        [[1.0], [-1.0]]
    """

    A: Matrix
    b: Matrix

    def __post_init__(self) -> None:
        """Validate that A is SPD and dimensions are consistent."""
        rows, cols = self.A.shape
        if rows != cols or rows == 0:
            raise InvalidShapeError(f"A must be square and non-empty, got shape {rows}x{cols}")
        if self.b.shape != (rows, 1):
            raise InvalidShapeError(
                f"Dimension mismatch: A is {rows}x{rows}, b is {self.b.rows()}x{self.b.cols()}"
            )
        if not self.A.allclose(self.A.t(), rtol=1e-10, atol=1e-10):
            raise ValueError("A must be symmetric")

        min_eig = float(np.linalg.eigvalsh(self.A.to_numpy()).min())
        if min_eig <= 0:
            raise ValueError(f"A must be positive definite, but has min eigenvalue {min_eig}")

    @classmethod
    def from_arrays(cls, A: Any, b: Any) -> QuadraticProblem:
        """Build a problem from nested lists or numpy arrays (b may be 1-D)."""
        return cls(A=Matrix.from_numpy(A), b=Matrix.from_numpy(b))

    @property
    def dim(self) -> int:
        """Dimensionality of the problem."""
        return self.A.rows()

    def loss(self, x: Matrix) -> float:
        """Compute f(x) = 0.5 * x^T A x + b^T x."""
        return 0.5 * (x.t() * self.A * x).x() + (self.b.t() * x).x()

    def grad(self, x: Matrix) -> Matrix:
        """Compute grad f(x) = Ax + b."""
        return self.A * x + self.b

    def x_star(self) -> Matrix:
        """Optimal solution x* = -A^{-1} b, as a reference value."""
        return Matrix.from_numpy(np.linalg.solve(self.A.to_numpy(), -self.b.to_numpy()))


def make_spd_quadratic(
    *,
    dim: int,
    rng: np.random.Generator,
    cond: float = 10.0,
) -> QuadraticProblem:
    """Generate a random SPD quadratic problem with controlled condition number.

    A has eigenvalues uniformly spaced between 1 and `cond`; b is standard
    normal.

    Raises:
        ValueError: If dim < 1 or cond < 1.
    """
    if dim < 1:
        raise ValueError(f"dim must be >= 1, got {dim}")
    if cond < 1.0:
        raise ValueError(f"cond must be >= 1, got {cond}")

    Q, _ = np.linalg.qr(rng.standard_normal((dim, dim)))
    if dim == 1:
        eigenvalues = np.array([1.0])
    else:
        eigenvalues = np.linspace(1.0, cond, dim)

    A = Q @ np.diag(eigenvalues) @ Q.T
    A = (A + A.T) / 2.0
    b = rng.standard_normal(dim)

    return QuadraticProblem(A=Matrix.from_numpy(A), b=Matrix.from_numpy(b))
