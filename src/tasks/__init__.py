"""Example objectives for the gradient method.

Available problems:
- fa / grad_fa: x1^2 + (e^{x1} - x2)^2 and its gradient
- QuadraticProblem: f(x) = 0.5 x^T A x + b^T x with SPD A
- numerical_gradient: central differences for checking analytic gradients
"""

from __future__ import annotations

from tasks.examples import fa, grad_fa, numerical_gradient
from tasks.synthetic_quadratic import QuadraticProblem, make_spd_quadratic

__all__ = [
    "fa",
    "grad_fa",
    "numerical_gradient",
    "QuadraticProblem",
    "make_spd_quadratic",
]
