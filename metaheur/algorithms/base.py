"""
Abstract base classes for the search strategies.
Defines the capabilities the orchestrator composes: candidate generation,
acceptance, termination, operator selection and the user-supplied operators.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Optional

import numpy as np

from metaheur.models.solution import Candidate
from metaheur.models.state import Decision, Outcome, SearchState, StopReason


class MoveOperator(ABC):
    """
    One neighborhood structure supplied by the problem.

    Implement ``apply`` to draw a random neighbor, ``neighbors`` to enumerate
    the neighborhood, or both. Either may produce a bare solution or a
    ``(solution, move_fingerprint)`` pair. ``apply`` receives a duplicate of
    the incumbent and may mutate it.
    """

    name: str = 'move'

    def apply(self, solution: Any, rng: np.random.Generator) -> Any:
        """Return one random neighbor of ``solution``."""
        raise NotImplementedError(f"{type(self).__name__} does not draw random neighbors")

    def neighbors(self, solution: Any) -> Iterable[Any]:
        """Yield the neighbors of ``solution``; may be empty."""
        raise NotImplementedError(f"{type(self).__name__} does not enumerate neighbors")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class FunctionMove(MoveOperator):
    """Adapter turning plain callables into a move operator."""

    def __init__(self, apply: Optional[Callable] = None,
                 neighbors: Optional[Callable] = None,
                 name: Optional[str] = None):
        if apply is None and neighbors is None:
            raise ValueError("FunctionMove needs an apply or a neighbors callable")
        self._apply = apply
        self._neighbors = neighbors
        self.name = name or getattr(apply or neighbors, '__name__', 'move')

    def apply(self, solution, rng):
        if self._apply is None:
            return super().apply(solution, rng)
        return self._apply(solution, rng)

    def neighbors(self, solution):
        if self._neighbors is None:
            return super().neighbors(solution)
        return self._neighbors(solution)


class Destroyer(ABC):
    """Partially demolishes a solution (LNS)."""

    name: str = 'destroy'

    @abstractmethod
    def destroy(self, solution: Any, rng: np.random.Generator) -> Any:
        """Return a partial solution; ``solution`` is a duplicate and may be mutated."""
        pass


class Repairer(ABC):
    """Rebuilds a complete solution from a partial one (LNS)."""

    name: str = 'repair'

    @abstractmethod
    def repair(self, partial: Any, rng: np.random.Generator) -> Any:
        """Return a complete solution, optionally as (solution, move) pair."""
        pass


class FunctionDestroyer(Destroyer):
    def __init__(self, func: Callable, name: Optional[str] = None):
        self._func = func
        self.name = name or getattr(func, '__name__', 'destroy')

    def destroy(self, solution, rng):
        return self._func(solution, rng)


class FunctionRepairer(Repairer):
    def __init__(self, func: Callable, name: Optional[str] = None):
        self._func = func
        self.name = name or getattr(func, '__name__', 'repair')

    def repair(self, partial, rng):
        return self._func(partial, rng)


class OperatorSelector(ABC):
    """Chooses which of several operators to use in an iteration."""

    def __init__(self, size: int):
        if size < 1:
            raise ValueError("A selector needs at least one operator")
        self.size = size

    @abstractmethod
    def select(self, state: SearchState) -> int:
        """Return the 0-based index of the operator to use."""
        pass

    def feedback(self, outcome: Outcome):
        """Receive the outcome of the last selection."""
        pass

    def reset(self):
        pass

    def __len__(self) -> int:
        return self.size


class CandidateGenerator(ABC):
    """
    Produces one candidate per iteration from the incumbent.

    Generators that cycle through neighborhoods set ``neighborhood_count``
    (k_max); the orchestrator then owns the neighborhood index and passes it
    in ``state.neighborhood_index``.
    """

    neighborhood_count: Optional[int] = None

    @abstractmethod
    def generate(self, incumbent: Any, state: SearchState) -> Candidate:
        """
        Produce a candidate.

        Raises:
            GeneratorExhausted: If no candidate can be produced
        """
        pass

    def feedback(self, outcome: Outcome):
        """Receive the outcome of the last candidate."""
        pass

    def reset(self):
        """Prepare for a new run."""
        pass


class AcceptanceCriterion(ABC):
    """Decides whether a candidate replaces the incumbent."""

    name: str = 'acceptance'

    @abstractmethod
    def decide(self, candidate: Candidate, state: SearchState) -> Decision:
        """Return ACCEPT or REJECT; may update internal state."""
        pass

    def feedback(self, outcome: Outcome):
        pass

    def reset(self):
        """Prepare for a new run."""
        pass

    def describe(self) -> dict:
        """Internal state worth logging (temperature, tabu size...)."""
        return {}


class TerminationCriterion(ABC):
    """Decides whether the loop should stop."""

    @abstractmethod
    def check(self, state: SearchState) -> Optional[StopReason]:
        """Return a stop reason, or None to continue."""
        pass

    def reset(self):
        """Prepare for a new run."""
        pass


def is_better(objective: float, reference: float) -> bool:
    """Strict improvement under the minimization convention."""
    return objective < reference
