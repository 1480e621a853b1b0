"""Tests for Armijo backtracking.

This module tests:
- armijo_call / armijo_search step selection and accounting
- The opt-in trial-step guard on non-descent directions
- ArmijoRule parameter validation
"""

from __future__ import annotations

import pytest

from core.errors import LineSearchError, NonConvergenceError
from linalg.matrix import Matrix
from optim.line_search import ArmijoResult, ArmijoRule, armijo_call, armijo_search
from tasks.examples import fa, grad_fa


def _sq(x: Matrix) -> float:
    """f(x) = x^T x."""
    return (x.t() * x).x()


def _grad_sq(x: Matrix) -> Matrix:
    return 2.0 * x


# For f(x) = x^2 at x = 1 with d = -2 the Armijo test reduces to t <= 1 - sigma.


class TestArmijoCall:
    """Tests for the free line-search functions."""

    def test_first_trial_accepted(self) -> None:
        """t = s is returned when it already satisfies the condition."""
        x = Matrix.column([1.0])
        d = -_grad_sq(x)
        t = armijo_call(0.5, 0.5, 0.1, _sq, _grad_sq, x, d, verbose=False)
        assert t == 0.5

    def test_backtracks_until_condition_holds(self) -> None:
        """s=1, beta=0.5, sigma=0.1 rejects t=1 and accepts t=0.5."""
        x = Matrix.column([1.0])
        d = -_grad_sq(x)
        result = armijo_search(1.0, 0.5, 0.1, _sq, _grad_sq, x, d)
        assert result == ArmijoResult(t=0.5, iterations=2, f_evals=3)

    def test_default_parameters(self) -> None:
        """With s=beta=sigma=0.8 the first accepted step is 0.8^8."""
        x = Matrix.column([1.0])
        d = -_grad_sq(x)
        result = armijo_search(0.8, 0.8, 0.8, _sq, _grad_sq, x, d)
        assert result.iterations == 8
        assert result.t == pytest.approx(0.8**8)

    def test_sufficient_decrease_holds(self) -> None:
        """The accepted step satisfies the Armijo inequality on fa."""
        x = Matrix.column([0.0, 0.0])
        g = grad_fa(x)
        d = -g
        sigma = 0.8
        t = armijo_call(0.8, 0.8, sigma, fa, grad_fa, x, d, verbose=False)
        slope = (g.t() * d).x()
        assert fa(x) - fa(x + t * d) >= -sigma * t * slope
        assert 0.0 < t <= 0.8

    def test_does_not_modify_inputs(self) -> None:
        x = Matrix.column([1.0])
        d = Matrix.column([-2.0])
        armijo_call(1.0, 0.5, 0.1, _sq, _grad_sq, x, d, verbose=False)
        assert x.get(1) == 1.0
        assert d.get(1) == -2.0

    def test_progress_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Progress lines report the trial count and the accepted step."""
        x = Matrix.column([1.0])
        d = -_grad_sq(x)
        armijo_call(0.8, 0.8, 0.8, _sq, _grad_sq, x, d)
        out = capsys.readouterr().out
        assert out == "INFO: armijo_call run\n\t#iter=8, t=0.167772\n"

    def test_quiet(self, capsys: pytest.CaptureFixture[str]) -> None:
        x = Matrix.column([1.0])
        armijo_call(0.8, 0.8, 0.8, _sq, _grad_sq, x, -_grad_sq(x), verbose=False)
        assert capsys.readouterr().out == ""

    def test_accepts_closures(self) -> None:
        """Objectives may carry state through closures."""
        center = Matrix.column([3.0])

        def f(x: Matrix) -> float:
            return _sq(x - center)

        def gradf(x: Matrix) -> Matrix:
            return 2.0 * (x - center)

        x = Matrix.column([1.0])
        t = armijo_call(1.0, 0.5, 0.1, f, gradf, x, -gradf(x), verbose=False)
        assert t == 0.5


def test_overflowing_trial_point_is_backtracked() -> None:
    """fa is inf at the first trial point; the search keeps shrinking t."""
    x = Matrix.column([0.0, 1000.0])
    d = -grad_fa(x)
    t = armijo_call(0.8, 0.8, 0.8, fa, grad_fa, x, d, verbose=False)
    assert 0.0 < t < 0.8
    assert fa(x + t * d) < fa(x)


class TestIterationGuard:
    """Tests for the max_iter guard."""

    def test_ascent_direction_fires_guard(self) -> None:
        """d = +grad f(x) is never accepted; the guard reports it."""
        x = Matrix.column([1.0])
        d = _grad_sq(x)
        with pytest.raises(LineSearchError, match="descent direction") as excinfo:
            armijo_call(0.8, 0.8, 0.8, _sq, _grad_sq, x, d, max_iter=50, verbose=False)
        assert excinfo.value.iterations == 50

    def test_guard_on_fa(self) -> None:
        x = Matrix.column([0.0, 0.0])
        with pytest.raises(NonConvergenceError):
            armijo_call(0.8, 0.8, 0.8, fa, grad_fa, x, grad_fa(x), max_iter=20, verbose=False)

    def test_guard_does_not_change_successful_search(self) -> None:
        x = Matrix.column([1.0])
        d = -_grad_sq(x)
        unbounded = armijo_search(0.8, 0.8, 0.8, _sq, _grad_sq, x, d)
        bounded = armijo_search(0.8, 0.8, 0.8, _sq, _grad_sq, x, d, max_iter=8)
        assert bounded == unbounded

    def test_step_that_does_not_move_x_is_rejected_when_bounded(self) -> None:
        """Once t * slope underflows the test holds trivially at an unchanged point."""
        x = Matrix.column([1.0])
        d = Matrix.column([-1e-300])
        with pytest.raises(LineSearchError, match="does not move x"):
            armijo_search(1.0, 0.5, 0.1, _sq, _grad_sq, x, d, max_iter=200)

    def test_step_that_does_not_move_x_is_returned_when_unbounded(self) -> None:
        x = Matrix.column([1.0])
        d = Matrix.column([-1e-300])
        result = armijo_search(1.0, 0.5, 0.1, _sq, _grad_sq, x, d)
        assert 0.0 < result.t < 1e-20
        assert x + result.t * d == x

    def test_invalid_max_iter(self) -> None:
        x = Matrix.column([1.0])
        with pytest.raises(ValueError, match="max_iter"):
            armijo_call(0.8, 0.8, 0.8, _sq, _grad_sq, x, -x, max_iter=0)


class TestArmijoRule:
    """Tests for ArmijoRule."""

    def test_defaults(self) -> None:
        rule = ArmijoRule()
        assert (rule.s, rule.beta, rule.sigma, rule.max_iter) == (0.8, 0.8, 0.8, None)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"s": 0.0},
            {"s": -1.0},
            {"beta": 0.0},
            {"beta": 1.0},
            {"sigma": 0.0},
            {"sigma": 1.5},
            {"max_iter": 0},
        ],
    )
    def test_rejects_out_of_range(self, kwargs: dict[str, float]) -> None:
        with pytest.raises(ValueError):
            ArmijoRule(**kwargs)  # type: ignore[arg-type]

    def test_search_matches_free_function(self) -> None:
        x = Matrix.column([1.0])
        d = -_grad_sq(x)
        rule = ArmijoRule(s=1.0, beta=0.5, sigma=0.1)
        assert rule.search(_sq, _grad_sq, x, d, verbose=False) == armijo_search(
            1.0, 0.5, 0.1, _sq, _grad_sq, x, d
        )
