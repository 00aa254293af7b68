"""
Line search over a fixed list of numbers.

A solution is a position in the list; its objective is the number stored
there. Two neighborhood structures:
- ReachNeighborhood(n): the positions exactly n to the left and right
- NeighborSwap: one step to the left or right
"""

from typing import Iterator, List, Optional, Sequence

import numpy as np

from metaheur.algorithms.base import MoveOperator
from metaheur.models.solution import Solution


class Number(Solution):
    """Position ``index`` in an immutable sequence of values."""

    def __init__(self, values: Sequence[float], index: int = 0):
        self.values = tuple(values)
        if not 0 <= index < len(self.values):
            raise IndexError(f"index {index} outside 0..{len(self.values) - 1}")
        self.index = index

    @property
    def value(self) -> float:
        return self.values[self.index]

    def objective(self) -> float:
        return float(self.value)

    def duplicate(self) -> 'Number':
        return Number(self.values, self.index)

    def at(self, index: int) -> 'Number':
        return Number(self.values, index)

    def __eq__(self, other):
        if not isinstance(other, Number):
            return NotImplemented
        return self.index == other.index and self.values == other.values

    def __hash__(self):
        return hash((self.index, self.values))

    def __repr__(self):
        return f"Number(index={self.index}, value={self.value})"


class ReachNeighborhood(MoveOperator):
    """Neighbors at distance exactly ``n``, left one first."""

    def __init__(self, n: int):
        if n < 1:
            raise ValueError("reach must be >= 1")
        self.n = n
        self.name = f"reach_{n}"

    def _indices(self, solution: Number) -> List[int]:
        return [i for i in (solution.index - self.n, solution.index + self.n)
                if 0 <= i < len(solution.values)]

    def neighbors(self, solution: Number) -> Iterator[Number]:
        for i in self._indices(solution):
            yield solution.at(i)

    def apply(self, solution: Number, rng: np.random.Generator) -> Optional[Number]:
        indices = self._indices(solution)
        if not indices:
            return None
        return solution.at(indices[int(rng.integers(len(indices)))])


class NeighborSwap(ReachNeighborhood):
    """Step to an adjacent position."""

    def __init__(self):
        super().__init__(1)
        self.name = 'neighbor_swap'


class LineSearch:
    """Convenience wrapper holding the numbers of one instance."""

    def __init__(self, values: Sequence[float]):
        if not values:
            raise ValueError("LineSearch needs at least one value")
        self.values = tuple(values)

    def initial(self, index: int = 0) -> Number:
        return Number(self.values, index)

    def reach(self, *distances: int) -> List[ReachNeighborhood]:
        return [ReachNeighborhood(n) for n in distances]

    def optimum(self) -> Number:
        return Number(self.values, int(np.argmin(self.values)))
