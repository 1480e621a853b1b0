from __future__ import annotations

import math

import pytest

from core.errors import InvalidShapeError
from linalg.matrix import Matrix
from tasks.examples import fa, grad_fa, numerical_gradient


def test_fa_at_origin() -> None:
    assert fa(Matrix.column([0.0, 0.0])) == 1.0


def test_fa_minimum() -> None:
    x = Matrix.column([0.0, 1.0])
    assert fa(x) == 0.0
    assert grad_fa(x).mod() == 0.0


def test_fa_value() -> None:
    x = Matrix.column([1.0, 2.0])
    assert fa(x) == pytest.approx(1.0 + (math.e - 2.0) ** 2)


def test_grad_fa_at_origin() -> None:
    assert grad_fa(Matrix.column([0.0, 0.0])) == Matrix.column([2.0, -2.0])


@pytest.mark.parametrize("point", [(0.0, 0.0), (0.5, -1.0), (-1.3, 2.2), (1.0, 3.0)])
def test_grad_fa_matches_finite_differences(point: tuple[float, float]) -> None:
    x = Matrix.column(point)
    assert numerical_gradient(fa, x).allclose(grad_fa(x), rtol=1e-6, atol=1e-6)


def test_fa_overflows_to_inf() -> None:
    x = Matrix.column([800.0, 0.0])
    assert fa(x) == math.inf
    g = grad_fa(x)
    assert g.x1() == math.inf
    assert g.x2() == -math.inf


def test_fa_requires_2x1() -> None:
    with pytest.raises(InvalidShapeError):
        fa(Matrix.column([0.0, 0.0, 0.0]))
    with pytest.raises(InvalidShapeError):
        grad_fa(Matrix(1, 2))


def test_numerical_gradient_shape() -> None:
    x = Matrix.column([1.0, 2.0, 3.0])
    g = numerical_gradient(lambda v: (v.t() * v).x(), x)
    assert g.shape == (3, 1)
    assert g.allclose(2.0 * x, atol=1e-6)


def test_numerical_gradient_rejects_bad_step() -> None:
    with pytest.raises(ValueError):
        numerical_gradient(fa, Matrix.column([0.0, 0.0]), h=0.0)
