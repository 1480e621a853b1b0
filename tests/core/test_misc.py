from __future__ import annotations

import pytest

from core.errors import (
    IncompatibleDimensionsError,
    InvalidShapeError,
    LineSearchError,
    MatrixError,
    NonConvergenceError,
    OutOfRangeError,
    ShapeMismatchError,
)
from core.logging import format_point, format_value, log


def test_error_hierarchy() -> None:
    assert issubclass(OutOfRangeError, IndexError)
    assert issubclass(InvalidShapeError, ValueError)
    assert issubclass(ShapeMismatchError, InvalidShapeError)
    assert issubclass(IncompatibleDimensionsError, ValueError)
    for cls in (OutOfRangeError, InvalidShapeError, IncompatibleDimensionsError):
        assert issubclass(cls, MatrixError)
    assert issubclass(LineSearchError, NonConvergenceError)
    assert issubclass(NonConvergenceError, RuntimeError)


def test_non_convergence_carries_iterations() -> None:
    err = LineSearchError("stuck", iterations=12)
    assert err.iterations == 12
    assert str(err) == "stuck"


def test_log(capsys: pytest.CaptureFixture[str]) -> None:
    log("hello")
    log("hidden", verbose=False)
    assert capsys.readouterr().out == "hello\n"


def test_format_helpers() -> None:
    assert format_value(0.001) == "0.001"
    assert format_value(1.0) == "1"
    assert format_value(0.16777216) == "0.167772"
    assert format_point([0.0, -1.5]) == "(0, -1.5)"
