from __future__ import annotations

import argparse
import sys
from pathlib import Path

from core.errors import NonConvergenceError
from experiments.runner import run_from_file


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Minimize an objective with steepest descent and Armijo steps."
    )
    parser.add_argument("--config", type=Path, default=None, help="JSON run config (default: fa from (0, 0))")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a config value, e.g. --set epsilon=1e-6",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress per-iteration output")
    args = parser.parse_args()

    overrides = list(args.overrides)
    if args.quiet:
        overrides.append("verbose=false")

    try:
        result = run_from_file(args.config, overrides)
    except NonConvergenceError as exc:
        print(f"Did not converge after {exc.iterations} iterations: {exc}", file=sys.stderr)
        return 1

    print("Run completed")
    print(f"  iterations: {result.iterations}")
    print(f"  n_call_armijo: {result.n_call_armijo}")
    print(f"  optimal_value: {result.value:.6f}")
    print(f"  grad_norm: {result.grad_norm:.3e}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
