"""
Integer quadratic: minimize x^2 over a bounded integer range.
Smallest useful problem for exercising every metaheuristic.
"""

from typing import Iterator, Optional, Tuple

import numpy as np

from metaheur.algorithms.base import MoveOperator
from metaheur.models.solution import Solution


class IntegerQuadratic(Solution):
    """Point x in [lower, upper] with objective x^2."""

    def __init__(self, x: int, lower: int = -10, upper: int = 10):
        if lower > upper:
            raise ValueError(f"Empty range [{lower}, {upper}]")
        if not lower <= x <= upper:
            raise ValueError(f"x={x} outside [{lower}, {upper}]")
        self.x = x
        self.lower = lower
        self.upper = upper

    def objective(self) -> float:
        return float(self.x * self.x)

    def duplicate(self) -> 'IntegerQuadratic':
        return IntegerQuadratic(self.x, self.lower, self.upper)

    def moved(self, x: int) -> 'IntegerQuadratic':
        return IntegerQuadratic(x, self.lower, self.upper)

    def __repr__(self):
        return f"IntegerQuadratic(x={self.x})"


class StepMove(MoveOperator):
    """Move x by +/- step, staying inside the range. The fingerprint is the new x."""

    def __init__(self, step: int = 1):
        if step < 1:
            raise ValueError("step must be >= 1")
        self.step = step
        self.name = f"step_{step}"

    def _targets(self, solution: IntegerQuadratic):
        return [x for x in (solution.x - self.step, solution.x + self.step)
                if solution.lower <= x <= solution.upper]

    def apply(self, solution: IntegerQuadratic,
              rng: np.random.Generator) -> Optional[Tuple[IntegerQuadratic, int]]:
        targets = self._targets(solution)
        if not targets:
            return None
        x = targets[int(rng.integers(len(targets)))]
        return solution.moved(x), x

    def neighbors(self, solution: IntegerQuadratic) -> Iterator[Tuple[IntegerQuadratic, int]]:
        for x in self._targets(solution):
            yield solution.moved(x), x
