"""
Solution representation consumed by the search framework.
Defines the Solution capability and the per-iteration Candidate record.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


class Solution(ABC):
    """Capability every problem-specific solution provides.

    The framework only ever calls these two methods; any object with the same
    methods works too (duck typing), subclassing is a convenience.
    """

    @abstractmethod
    def objective(self) -> float:
        """Return the cost of this solution (lower is better)."""
        pass

    @abstractmethod
    def duplicate(self) -> 'Solution':
        """Return an independently mutable copy."""
        pass


@dataclass
class Candidate:
    """A solution produced for evaluation during one iteration.

    Attributes:
        solution: The candidate solution
        objective: Its objective value, evaluated once by the generator
        move: Fingerprint of the move that produced it (used by tabu memory)
        operator: 0-based index of the operator that produced it
    """
    solution: Any
    objective: float
    move: Optional[Any] = None
    operator: Optional[int] = None

    def fingerprint(self) -> Any:
        """Move fingerprint, falling back to the solution itself."""
        return self.move if self.move is not None else self.solution


def unpack_neighbor(item: Any):
    """
    Split a neighbor produced by user code into (solution, move).

    Move operators may yield either a bare solution or a
    ``(solution, move_fingerprint)`` pair.
    """
    if isinstance(item, tuple) and len(item) == 2:
        return item[0], item[1]
    return item, None
