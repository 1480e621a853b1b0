"""Run the gradient method from a GradientMethodConfig."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from core.protocols import Gradient, Objective
from experiments.config import (
    DEFAULT_CONFIG,
    GradientMethodConfig,
    apply_overrides,
    import_object,
    load_json,
    resolve_spec,
)
from linalg.matrix import Matrix
from optim.gradient_descent import GradientMethodResult, run_gradient_method

__all__ = ["resolve_callables", "run_from_config", "run_from_file"]


def resolve_callables(config: GradientMethodConfig) -> tuple[Objective, Gradient]:
    """Return (f, gradf) named by the config.

    Raises:
        TypeError: If either resolved object is not callable.
    """
    if config.problem is not None:
        problem = resolve_spec(config.problem)
        f: Any = getattr(problem, config.objective)
        gradf: Any = getattr(problem, config.gradient)
    else:
        f = import_object(config.objective)
        gradf = import_object(config.gradient)

    for name, obj in (("objective", f), ("gradient", gradf)):
        if not callable(obj):
            raise TypeError(f"Configured {name} {obj!r} is not callable")
    return f, gradf


def run_from_config(config: GradientMethodConfig) -> GradientMethodResult:
    f, gradf = resolve_callables(config)
    return run_gradient_method(
        f,
        gradf,
        Matrix.column(config.x0),
        config.epsilon,
        rule=config.rule(),
        max_iter=config.max_iter,
        verbose=config.verbose,
    )


def run_from_file(
    path: Path | None = None,
    overrides: list[str] | None = None,
) -> GradientMethodResult:
    """Load a JSON config (or DEFAULT_CONFIG), apply overrides and run it."""
    raw = load_json(path) if path is not None else dict(DEFAULT_CONFIG)
    raw = apply_overrides(raw, overrides or [])
    return run_from_config(GradientMethodConfig.from_dict(raw))
