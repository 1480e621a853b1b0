"""Protocol definitions for the optimizer's callable inputs.

This module contains Protocol classes defining interfaces for:
- Objectives: scalar functions of a point
- Gradients: vector-valued functions of a point

Any callable with a matching signature satisfies them, including plain
functions, lambdas, bound methods and closures capturing problem data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from linalg.matrix import Matrix

__all__ = ["Objective", "Gradient"]


@runtime_checkable
class Objective(Protocol):
    """Protocol for objective functions f: R^n -> R."""

    def __call__(self, x: Matrix) -> float:
        """Evaluate the objective.

        Args:
            x: Point as a column vector.

        Returns:
            The scalar objective value.
        """
        ...


@runtime_checkable
class Gradient(Protocol):
    """Protocol for gradient functions gradf: R^n -> R^n.

    The returned column vector must have the same shape as the input point.
    """

    def __call__(self, x: Matrix) -> Matrix:
        """Evaluate the gradient.

        Args:
            x: Point as a column vector.

        Returns:
            The gradient as a column vector.
        """
        ...
