"""Armijo backtracking line search.

Given a point x and a descent direction d, find the largest step
t = s * beta^m (m = 0, 1, 2, ...) satisfying the sufficient-decrease test

    f(x) - f(x + t d) >= -sigma * t * grad f(x)^T d

The caller is responsible for s > 0, 0 < beta < 1, 0 < sigma < 1 and for d
being a descent direction (grad f(x)^T d < 0). With the default
``max_iter=None`` the backtracking loop is unbounded and only stops once
the test holds; pass an integer to turn a runaway search into a
LineSearchError. Near a minimizer, floating point can stop resolving any
decrease: the search then backtracks until t * slope underflows and
accepts a step that leaves x unchanged, so an unbounded driver stalls.
With an integer max_iter such a step raises LineSearchError as well.
ArmijoRule bundles validated parameters.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.errors import LineSearchError
from core.logging import format_value, log
from core.protocols import Gradient, Objective
from linalg.matrix import Matrix

__all__ = [
    "ArmijoResult",
    "ArmijoRule",
    "armijo_search",
    "armijo_call",
]


@dataclass(frozen=True, slots=True)
class ArmijoResult:
    """Outcome of one Armijo line search.

    Attributes:
        t: Accepted step length s * beta^m.
        iterations: Trial steps evaluated, including the accepted one (m + 1).
        f_evals: Objective evaluations, including f(x).
    """

    t: float
    iterations: int
    f_evals: int


def _check_max_iter(max_iter: int | None) -> None:
    if max_iter is not None and max_iter < 1:
        raise ValueError(f"max_iter must be >= 1 or None, got {max_iter}")


def armijo_search(
    s: float,
    beta: float,
    sigma: float,
    f: Objective,
    gradf: Gradient,
    x: Matrix,
    d: Matrix,
    *,
    max_iter: int | None = None,
    verbose: bool = False,
) -> ArmijoResult:
    """Run Armijo backtracking and report the accepted step with its cost.

    Args:
        s: Initial trial step (> 0).
        beta: Backtracking ratio, 0 < beta < 1.
        sigma: Sufficient-decrease fraction, 0 < sigma < 1.
        f: Objective, maps a column vector to a float.
        gradf: Gradient, maps a column vector to a column vector.
        x: Current point.
        d: Search direction at x.
        max_iter: Maximum number of trial steps, or None for no limit.
        verbose: Print progress to stdout.

    Returns:
        ArmijoResult for the first step length passing the test.

    Raises:
        LineSearchError: If max_iter is set and either max_iter trial steps
            were all rejected or the accepted step does not move x.
        ValueError: If max_iter is not None and < 1.
    """
    _check_max_iter(max_iter)
    log("INFO: armijo_call run", verbose=verbose)

    fx = f(x)
    slope = (gradf(x).t() * d).x()
    f_evals = 1

    m = 0
    while True:
        if max_iter is not None and m >= max_iter:
            raise LineSearchError(
                f"Armijo condition not met after {m} trial steps "
                f"(last t={format_value(s * beta ** (m - 1))}, slope={format_value(slope)}); "
                "is d a descent direction?",
                iterations=m,
            )
        t = s * beta**m
        trial = x + t * d
        f_evals += 1
        if fx - f(trial) >= -sigma * t * slope:
            break
        m += 1

    if max_iter is not None and trial == x:
        raise LineSearchError(
            f"Accepted step t={format_value(t)} after {m + 1} trial steps does not move x; "
            "the objective cannot be decreased at this precision",
            iterations=m + 1,
        )

    log(f"\t#iter={m + 1}, t={format_value(t)}", verbose=verbose)
    return ArmijoResult(t=t, iterations=m + 1, f_evals=f_evals)


def armijo_call(
    s: float,
    beta: float,
    sigma: float,
    f: Objective,
    gradf: Gradient,
    x: Matrix,
    d: Matrix,
    *,
    max_iter: int | None = None,
    verbose: bool = True,
) -> float:
    """Return the Armijo step length t = s * beta^m for direction d at x.

    Parameters are passed through unvalidated; see armijo_search for the
    meaning of each argument.

    Raises:
        LineSearchError: If max_iter is set and exhausted.
    """
    return armijo_search(
        s, beta, sigma, f, gradf, x, d, max_iter=max_iter, verbose=verbose
    ).t


@dataclass(frozen=True, slots=True)
class ArmijoRule:
    """Validated Armijo parameters.

    Attributes:
        s: Initial trial step.
        beta: Backtracking ratio.
        sigma: Sufficient-decrease fraction.
        max_iter: Trial-step cap per search, None for unbounded.
    """

    s: float = 0.8
    beta: float = 0.8
    sigma: float = 0.8
    max_iter: int | None = None

    def __post_init__(self) -> None:
        """Check parameter ranges.

        Raises:
            ValueError: If s <= 0, beta or sigma outside (0, 1), or max_iter < 1.
        """
        if self.s <= 0:
            raise ValueError(f"Initial step s must be positive, got {self.s}")
        if not 0 < self.beta < 1:
            raise ValueError(f"beta must lie in (0, 1), got {self.beta}")
        if not 0 < self.sigma < 1:
            raise ValueError(f"sigma must lie in (0, 1), got {self.sigma}")
        _check_max_iter(self.max_iter)

    def search(
        self,
        f: Objective,
        gradf: Gradient,
        x: Matrix,
        d: Matrix,
        *,
        verbose: bool = True,
    ) -> ArmijoResult:
        return armijo_search(
            self.s,
            self.beta,
            self.sigma,
            f,
            gradf,
            x,
            d,
            max_iter=self.max_iter,
            verbose=verbose,
        )
