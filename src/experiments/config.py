"""Config loading, overrides and dynamic resolution for gradient-method runs.

A run is described by a flat JSON object, for example:

    {
        "objective": "tasks.examples:fa",
        "gradient": "tasks.examples:grad_fa",
        "x0": [0.0, 0.0],
        "epsilon": 1e-3
    }

When a ``problem`` spec ({"class": ..., "params": ...}) is present, it is
instantiated first and ``objective`` / ``gradient`` name attributes of the
resulting object instead of importable paths.
"""

from __future__ import annotations

import dataclasses
import importlib
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from optim.line_search import ArmijoRule

__all__ = [
    "DEFAULT_CONFIG",
    "GradientMethodConfig",
    "load_json",
    "import_object",
    "resolve_spec",
    "resolve_values",
    "apply_overrides",
]

DEFAULT_CONFIG: dict[str, Any] = {
    "objective": "tasks.examples:fa",
    "gradient": "tasks.examples:grad_fa",
    "x0": [0.0, 0.0],
    "epsilon": 1e-3,
}


def load_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def import_object(path: str) -> Any:
    """Import ``pkg.module:attr.sub`` or ``pkg.module.attr``."""
    if ":" in path:
        module_name, attr_path = path.split(":", 1)
    else:
        module_name, attr_path = path.rsplit(".", 1)
    obj: Any = importlib.import_module(module_name)
    for attr in attr_path.split("."):
        obj = getattr(obj, attr)
    return obj


def resolve_spec(spec: Any, **extra_kwargs: Any) -> Any:
    """Instantiate an object from a {class, params} spec or return spec as-is."""
    if isinstance(spec, dict) and "class" in spec:
        factory = import_object(spec["class"])
        params = spec.get("params", {})
        resolved = resolve_values(params)
        resolved.update(extra_kwargs)
        return factory(**resolved)
    return resolve_values(spec)


def resolve_values(value: Any) -> Any:
    if isinstance(value, dict):
        if "class" in value:
            return resolve_spec(value)
        return {key: resolve_values(val) for key, val in value.items()}
    if isinstance(value, list):
        return [resolve_values(v) for v in value]
    return value


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def apply_overrides(config: dict[str, Any], overrides: list[str]) -> dict[str, Any]:
    """Return a copy of config with ``a.b=value`` overrides applied.

    Values are parsed as JSON when possible, otherwise kept as strings.

    Raises:
        ValueError: If an override has no '='.
    """
    result = json.loads(json.dumps(config))
    for item in overrides:
        if "=" not in item:
            raise ValueError(f"Override must be key=value, got: {item}")
        path, raw_val = item.split("=", 1)
        keys = path.split(".")
        target = result
        for key in keys[:-1]:
            if key not in target or not isinstance(target[key], dict):
                target[key] = {}
            target = target[key]
        target[keys[-1]] = _parse_value(raw_val)
    return result


@dataclass(frozen=True)
class GradientMethodConfig:
    """Settings for one gradient-method run.

    Attributes:
        objective: Import path of f, or attribute name on the problem.
        gradient: Import path of gradf, or attribute name on the problem.
        x0: Starting point coordinates.
        epsilon: Gradient-norm tolerance.
        problem: Optional {class, params} spec of an object exposing f and gradf.
        s: Armijo initial step.
        beta: Armijo backtracking ratio.
        sigma: Armijo sufficient-decrease fraction.
        armijo_max_iter: Trial-step cap per line search (None = unbounded).
        max_iter: Update cap for the descent loop (None = unbounded).
        verbose: Print progress.
    """

    objective: str
    gradient: str
    x0: tuple[float, ...]
    epsilon: float = 1e-3
    problem: dict[str, Any] | None = None
    s: float = 0.8
    beta: float = 0.8
    sigma: float = 0.8
    armijo_max_iter: int | None = None
    max_iter: int | None = None
    verbose: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GradientMethodConfig:
        """Build a config from a parsed JSON object.

        Raises:
            ValueError: On unknown keys, missing required keys or an empty x0.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {unknown}")
        missing = [name for name in ("objective", "gradient", "x0") if name not in data]
        if missing:
            raise ValueError(f"Missing required config keys: {missing}")

        values = dict(data)
        values["x0"] = tuple(float(v) for v in values["x0"])
        if not values["x0"]:
            raise ValueError("x0 must contain at least one coordinate")
        values["epsilon"] = float(values.get("epsilon", cls.epsilon))
        return cls(**values)

    def rule(self) -> ArmijoRule:
        return ArmijoRule(s=self.s, beta=self.beta, sigma=self.sigma, max_iter=self.armijo_max_iter)

    def to_dict(self) -> dict[str, Any]:
        data = dataclasses.asdict(self)
        data["x0"] = list(self.x0)
        return data
