"""Steepest descent with Armijo step lengths.

This module provides:
- run_gradient_method: the iteration loop, returning a GradientMethodResult
- gradient_method: the same loop, returning only the final point

Each iteration performs:
    d_k     = -grad f(x_k)
    t_k     = Armijo step along d_k
    x_{k+1} = x_k + t_k d_k

and the loop stops as soon as ||grad f(x_k)|| < epsilon. There is no
iteration cap unless max_iter is given.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.errors import InvalidShapeError, NonConvergenceError
from core.logging import format_point, format_value, log
from core.protocols import Gradient, Objective
from core.types import History, StepMeta, StepResult
from linalg.matrix import Matrix
from optim.line_search import ArmijoRule

__all__ = [
    "DEFAULT_ARMIJO_RULE",
    "GradientMethodResult",
    "run_gradient_method",
    "gradient_method",
]

# s = beta = sigma = 0.8, no cap on backtracking
DEFAULT_ARMIJO_RULE = ArmijoRule()


@dataclass(frozen=True)
class GradientMethodResult:
    """Outcome of a gradient-method run.

    Attributes:
        x: Approximate minimizer (column vector).
        value: Objective value at x.
        grad_norm: Gradient norm at x (below epsilon).
        iterations: Number of point updates performed.
        n_call_armijo: Number of line searches performed.
        history: One StepResult per update with metrics
            ``grad_norm`` (before the update) and ``step`` (accepted t).
    """

    x: Matrix
    value: float
    grad_norm: float
    iterations: int
    n_call_armijo: int
    history: History = field(default_factory=History)


def run_gradient_method(
    f: Objective,
    gradf: Gradient,
    x0: Matrix,
    epsilon: float,
    *,
    rule: ArmijoRule | None = None,
    max_iter: int | None = None,
    verbose: bool = True,
) -> GradientMethodResult:
    """Minimize f by steepest descent with Armijo backtracking.

    Args:
        f: Objective, maps a column vector to a float.
        gradf: Gradient of f, returns a column vector shaped like its input.
        x0: Starting point (column vector). Not modified.
        epsilon: Stop once the gradient norm drops below this value.
        rule: Line-search parameters. Defaults to DEFAULT_ARMIJO_RULE.
        max_iter: Maximum number of updates, or None for no limit.
        verbose: Print progress to stdout.

    Returns:
        GradientMethodResult for the first point passing the stopping test.

    Raises:
        ValueError: If epsilon is not positive (NaN included) or max_iter < 0.
        InvalidShapeError: If x0 is not a column vector.
        NonConvergenceError: If max_iter updates did not reach the tolerance.
        LineSearchError: If the rule's backtracking cap is exhausted.
    """
    if not epsilon > 0:
        raise ValueError(f"epsilon must be positive, got {epsilon}")
    if max_iter is not None and max_iter < 0:
        raise ValueError(f"max_iter must be >= 0 or None, got {max_iter}")
    if x0.cols() != 1 or x0.rows() == 0:
        raise InvalidShapeError(
            f"Starting point must be a non-empty column vector, got {x0.rows()}x{x0.cols()}"
        )
    if rule is None:
        rule = DEFAULT_ARMIJO_RULE

    log("INFO: gradient_method run", verbose=verbose)
    log(f"\tinitial point: {format_point(x0.to_numpy().ravel())}", verbose=verbose)
    log(f"\tepsilon: {format_value(epsilon)}", verbose=verbose)

    xk = x0.copy()
    history = History()
    iterations = 0
    n_call_armijo = 0

    while True:
        grad = gradf(xk)
        grad_norm = grad.mod()
        if grad_norm < epsilon:
            break
        if max_iter is not None and iterations >= max_iter:
            raise NonConvergenceError(
                f"Gradient norm {format_value(grad_norm)} still >= epsilon "
                f"{format_value(epsilon)} after {iterations} iterations",
                iterations=iterations,
            )
        iterations += 1

        dk = -grad
        search = rule.search(f, gradf, xk, dk, verbose=verbose)
        n_call_armijo += 1

        xk = xk + search.t * dk
        history.append(
            StepResult(loss=f(xk), metrics={"grad_norm": grad_norm, "step": search.t}),
            StepMeta(
                num_grad_evals=2,
                num_f_evals=search.f_evals + 1,
                num_backtracks=search.iterations - 1,
            ),
        )

    value = history.last().loss if len(history) else f(xk)
    log(f"\tn_iterations: {iterations + 1}", verbose=verbose)
    log(f"\tn_call_armijo: {n_call_armijo}", verbose=verbose)
    log(f"\toptimal point: {format_point(xk.to_numpy().ravel())}", verbose=verbose)
    log(f"\toptimal value: {format_value(value)}", verbose=verbose)

    return GradientMethodResult(
        x=xk,
        value=value,
        grad_norm=grad_norm,
        iterations=iterations,
        n_call_armijo=n_call_armijo,
        history=history,
    )


def gradient_method(
    f: Objective,
    gradf: Gradient,
    x0: Matrix,
    epsilon: float,
    *,
    rule: ArmijoRule | None = None,
    max_iter: int | None = None,
    verbose: bool = True,
) -> Matrix:
    """Return the approximate minimizer found by run_gradient_method."""
    return run_gradient_method(
        f, gradf, x0, epsilon, rule=rule, max_iter=max_iter, verbose=verbose
    ).x
