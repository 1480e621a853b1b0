"""Optimization algorithms module.

This package contains:
- Armijo backtracking line search (armijo_call, armijo_search, ArmijoRule)
- Steepest descent driven by Armijo steps (gradient_method)
"""

from __future__ import annotations

from optim.gradient_descent import (
    DEFAULT_ARMIJO_RULE,
    GradientMethodResult,
    gradient_method,
    run_gradient_method,
)
from optim.line_search import ArmijoResult, ArmijoRule, armijo_call, armijo_search

__all__ = [
    # Line search
    "ArmijoResult",
    "ArmijoRule",
    "armijo_call",
    "armijo_search",
    # Gradient method
    "DEFAULT_ARMIJO_RULE",
    "GradientMethodResult",
    "gradient_method",
    "run_gradient_method",
]
