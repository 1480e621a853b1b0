"""Core type definitions shared by the optimizer and experiment runner.

This module contains:
- Type aliases for scalars and index pairs
- Data containers for per-iteration optimization records
- History, the trace returned by run_gradient_method
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

__all__ = [
    "Scalar",
    "Index2D",
    "StepResult",
    "StepMeta",
    "History",
]

# Type alias for real values stored in a Matrix
Scalar = float

# 1-based (row, col) pair
Index2D = tuple[int, int]


@dataclass(frozen=True, slots=True)
class StepResult:
    """Result of a single gradient-method iteration.

    Attributes:
        loss: Objective value at the updated point.
        metrics: Additional metrics for this iteration (grad_norm, step, ...).
    """

    loss: float
    metrics: Mapping[str, float] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class StepMeta:
    """Evaluation accounting for a single iteration.

    Attributes:
        num_grad_evals: Number of gradient evaluations in this iteration.
        num_f_evals: Number of objective evaluations in this iteration.
        num_backtracks: Armijo trial steps rejected before acceptance.
    """

    num_grad_evals: int = 0
    num_f_evals: int = 0
    num_backtracks: int = 0


@dataclass
class History:
    """Container for storing optimization history across iterations.

    Each entry pairs a StepResult with its StepMeta.

    Example:
        >>> history = History()
        >>> history.append(StepResult(loss=1.0, metrics={"grad_norm": 0.9}))
        >>> history.append(StepResult(loss=0.5, metrics={"grad_norm": 0.3}))
        >>> history.losses()
        [1.0, 0.5]
    """

    steps: list[tuple[StepResult, StepMeta]] = field(default_factory=list)

    def __len__(self) -> int:
        """Return the number of recorded iterations."""
        return len(self.steps)

    def append(self, record: StepResult, meta: StepMeta | None = None) -> None:
        """Append an iteration record to the history.

        Args:
            record: The iteration's StepResult.
            meta: Optional evaluation accounting. Defaults to empty StepMeta.
        """
        if meta is None:
            meta = StepMeta()
        self.steps.append((record, meta))

    def last(self) -> StepResult:
        """Return the most recent record.

        Raises:
            IndexError: If history is empty.
        """
        return self.steps[-1][0]

    def last_meta(self) -> StepMeta:
        """Return the most recent metadata.

        Raises:
            IndexError: If history is empty.
        """
        return self.steps[-1][1]

    def losses(self) -> list[float]:
        """Return the objective value of every recorded iteration."""
        return [record.loss for record, _meta in self.steps]

    def metric(self, key: str) -> list[float]:
        """Return one metric across all iterations.

        Raises:
            KeyError: If a record lacks the metric.
        """
        return [record.metrics[key] for record, _meta in self.steps]

    def mean_loss(self) -> float:
        """Compute mean objective value across all iterations.

        Raises:
            ValueError: If history is empty.
        """
        if not self.steps:
            raise ValueError("Cannot compute mean_loss on empty history")
        losses = self.losses()
        return sum(losses) / len(losses)

    def total_grad_evals(self) -> int:
        """Return total number of gradient evaluations across all iterations."""
        return sum(meta.num_grad_evals for _record, meta in self.steps)

    def total_f_evals(self) -> int:
        """Return total number of objective evaluations across all iterations."""
        return sum(meta.num_f_evals for _record, meta in self.steps)

    def total_backtracks(self) -> int:
        """Return total number of rejected Armijo trial steps."""
        return sum(meta.num_backtracks for _record, meta in self.steps)
