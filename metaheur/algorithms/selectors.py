"""
Operator selectors.

Choose which of several move (or destroy/repair) operators to use in an
iteration. The adaptive selector is the framework's hook for online operator
tuning: it learns from the outcome fed back after each iteration.
"""

from typing import Dict, List, Optional

import numpy as np

from metaheur.algorithms.base import OperatorSelector
from metaheur.config import ADAPTIVE_SCORES
from metaheur.core.exceptions import InvalidConfigurationError
from metaheur.models.state import Outcome, SearchState


class SequentialSelector(OperatorSelector):
    """Cycle through the operators, restarting at the first after a new best."""

    def __init__(self, size: int):
        super().__init__(size)
        self.reset()

    def reset(self):
        self._next = 0

    def select(self, state: SearchState) -> int:
        index = self._next
        self._next = (index + 1) % self.size
        return index

    def feedback(self, outcome: Outcome):
        if outcome is Outcome.IMPROVED_BEST:
            self._next = 0


class RandomSelector(OperatorSelector):
    """Uniform choice from an owned random source."""

    def __init__(self, size: int, rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        super().__init__(size)
        self._seed = seed
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def reset(self):
        if self._seed is not None:
            self.rng = np.random.default_rng(self._seed)

    def select(self, state: SearchState) -> int:
        return int(self.rng.integers(self.size))


class AdaptiveSelector(OperatorSelector):
    """
    Roulette-wheel selection over learned weights.

    All weights start at 1. After each iteration the weight of the last
    selected operator moves towards the score of the outcome:
    ``w = (1 - decay) * w + decay * score``.
    """

    def __init__(self, size: int, decay: float = 0.2,
                 scores: Optional[Dict[str, float]] = None,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        """
        Initialize adaptive selector.

        Args:
            size: Number of operators
            decay: Reaction factor in (0, 1]
            scores: Scores for improved_best / accepted / rejected outcomes
            rng: Random source for the roulette draw
            seed: Seed used when no rng is given
        """
        super().__init__(size)
        if decay is None or not 0 < decay <= 1:
            raise InvalidConfigurationError(parameter='adaptive_decay', value=decay,
                                            expected="(0, 1]")
        self.decay = decay
        self.scores = dict(ADAPTIVE_SCORES)
        self.scores.update(scores or {})
        self._seed = seed
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.reset()

    def reset(self):
        self.weights: List[float] = [1.0] * self.size
        self.last_selection: Optional[int] = None
        if self._seed is not None:
            self.rng = np.random.default_rng(self._seed)

    def select(self, state: SearchState) -> int:
        total = sum(self.weights)
        if total <= 0:
            index = int(self.rng.integers(self.size))
        else:
            r = self.rng.random() * total
            cumulative = 0.0
            index = self.size - 1
            for i, weight in enumerate(self.weights):
                cumulative += weight
                if r < cumulative:
                    index = i
                    break
        self.last_selection = index
        return index

    def feedback(self, outcome: Outcome):
        if self.last_selection is None:
            return
        score = self.scores[outcome.value]
        i = self.last_selection
        self.weights[i] = (1 - self.decay) * self.weights[i] + self.decay * score

    def probabilities(self) -> List[float]:
        total = sum(self.weights)
        if total <= 0:
            return [1.0 / self.size] * self.size
        return [w / total for w in self.weights]


def create_selector(kind: str, size: int, seed: Optional[int] = None,
                    decay: float = 0.2) -> OperatorSelector:
    """Build a selector by name: sequential, random or adaptive."""
    if kind == 'sequential':
        return SequentialSelector(size)
    if kind == 'random':
        return RandomSelector(size, seed=seed)
    if kind == 'adaptive':
        return AdaptiveSelector(size, decay=decay, seed=seed)
    raise InvalidConfigurationError(parameter='selector', value=kind,
                                    expected="sequential, random or adaptive")
