"""Example objectives and a finite-difference gradient.

fa is the two-variable test function
    fa(x) = x1^2 + (e^{x1} - x2)^2
whose unique minimizer is (0, 1) with value 0. For large x1 the
exponential overflows to inf instead of raising, so a trial point far
along a search direction is simply rejected by the line search.
"""

from __future__ import annotations

import numpy as np

from core.protocols import Objective
from linalg.matrix import Matrix

__all__ = ["fa", "grad_fa", "numerical_gradient"]


def _exp(v: float) -> float:
    with np.errstate(over="ignore"):
        return float(np.exp(v))


def fa(x: Matrix) -> float:
    x1, x2 = x.x1(), x.x2()
    return x1 * x1 + (_exp(x1) - x2) ** 2


def grad_fa(x: Matrix) -> Matrix:
    """Analytic gradient of fa.

    d/dx1 = 2 x1 + 2 e^{x1} (e^{x1} - x2)
    d/dx2 = -2 (e^{x1} - x2)
    """
    x1, x2 = x.x1(), x.x2()
    e = _exp(x1)
    r = e - x2
    return Matrix.column([2.0 * x1 + 2.0 * e * r, -2.0 * r])


def numerical_gradient(f: Objective, x: Matrix, h: float = 1e-6) -> Matrix:
    """Central-difference approximation of grad f at x.

    Args:
        f: Objective.
        x: Column vector.
        h: Perturbation size.

    Returns:
        Column vector with (f(x + h e_k) - f(x - h e_k)) / 2h in row k.
    """
    if h <= 0:
        raise ValueError(f"h must be positive, got {h}")
    grad = Matrix(x.rows(), x.cols())
    for k in range(1, x.length() + 1):
        forward = x.copy()
        backward = x.copy()
        forward.set(k, x.get(k) + h)
        backward.set(k, x.get(k) - h)
        grad.set(k, (f(forward) - f(backward)) / (2.0 * h))
    return grad
