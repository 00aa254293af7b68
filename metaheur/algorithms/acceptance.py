"""
Acceptance criteria.

Each criterion decides whether a candidate replaces the incumbent. Stateful
criteria own their state exclusively: the annealing criterion owns its
temperature schedule and random source, the tabu criterion owns its memory.
"""

import logging
import math
from typing import Optional

import numpy as np

from metaheur.algorithms.base import AcceptanceCriterion, is_better
from metaheur.algorithms.tabu_memory import TabuMemory
from metaheur.algorithms.temperature import TemperatureSchedule
from metaheur.core.exceptions import InvalidConfigurationError
from metaheur.models.solution import Candidate
from metaheur.models.state import Decision, SearchState

logger = logging.getLogger(__name__)


def _check_hashable_solution(solution):
    """Bare solutions are tabu fingerprints, so they need value equality."""
    hash_method = type(solution).__hash__
    if hash_method is None or hash_method is object.__hash__:
        raise InvalidConfigurationError(
            parameter='fingerprint',
            value=type(solution).__name__,
            expected="move operators returning (solution, move) pairs, or a solution "
                     "type defining __eq__ and __hash__"
        )


class ImprovingAcceptance(AcceptanceCriterion):
    """Accept iff the candidate is strictly better than the incumbent."""

    name = 'improving'

    def decide(self, candidate: Candidate, state: SearchState) -> Decision:
        if is_better(candidate.objective, state.incumbent_objective):
            return Decision.ACCEPT
        return Decision.REJECT


class AnnealingAcceptance(AcceptanceCriterion):
    """
    Metropolis acceptance for Simulated Annealing.

    Better candidates are always accepted. A worse candidate is accepted with
    probability exp(-(candidate - incumbent) / T), where the delta is taken
    in the worsening direction only. The schedule cools after every decision.
    """

    name = 'annealing'

    def __init__(self, schedule: TemperatureSchedule,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        """
        Initialize annealing acceptance.

        Args:
            schedule: Temperature schedule, owned by this criterion
            rng: Random source for the acceptance draw
            seed: Seed used when no rng is given
        """
        self.schedule = schedule
        self._seed = seed
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.last_probability = 1.0

    def reset(self):
        self.schedule.reset()
        self.last_probability = 1.0
        if self._seed is not None:
            self.rng = np.random.default_rng(self._seed)

    @staticmethod
    def probability(delta: float, temperature: float) -> float:
        """Probability of accepting a move that worsens the objective by ``delta``."""
        if delta <= 0:
            return 1.0
        return math.exp(-delta / temperature)

    def decide(self, candidate: Candidate, state: SearchState) -> Decision:
        delta = candidate.objective - state.incumbent_objective
        try:
            if delta < 0:
                self.last_probability = 1.0
                return Decision.ACCEPT

            self.last_probability = self.probability(delta, self.schedule.current())
            if self.rng.random() < self.last_probability:
                return Decision.ACCEPT
            return Decision.REJECT
        finally:
            self.schedule.advance()

    def describe(self) -> dict:
        return {
            'temperature': self.schedule.current(),
            'last_probability': self.last_probability,
        }


class TabuAcceptance(AcceptanceCriterion):
    """
    Tabu-permissive acceptance.

    Any non-tabu candidate is accepted, worse ones included. A tabu candidate
    is rejected unless it beats the global best (aspiration). Accepted moves
    become tabu for ``tenure`` iterations.
    """

    name = 'tabu'

    def __init__(self, memory: TabuMemory, aspiration: bool = True):
        self.memory = memory
        self.aspiration = aspiration
        self.aspirations = 0
        self.tabu_rejections = 0

    @classmethod
    def with_tenure(cls, tenure: int, max_size: Optional[int] = None,
                    aspiration: bool = True) -> 'TabuAcceptance':
        return cls(TabuMemory(tenure, max_size=max_size), aspiration=aspiration)

    def reset(self):
        self.memory.reset()
        self.aspirations = 0
        self.tabu_rejections = 0

    def decide(self, candidate: Candidate, state: SearchState) -> Decision:
        self.memory.expire(state.iteration)
        if candidate.move is None:
            _check_hashable_solution(candidate.solution)
        fingerprint = candidate.fingerprint()

        if self.memory.contains(fingerprint):
            if self.aspiration and is_better(candidate.objective, state.best_objective):
                self.aspirations += 1
                logger.debug(f"Iter {state.iteration}: aspiration overrides tabu move {fingerprint!r}")
            else:
                self.tabu_rejections += 1
                return Decision.REJECT

        self.memory.insert(fingerprint)
        return Decision.ACCEPT

    def describe(self) -> dict:
        return {
            'tabu_size': len(self.memory),
            'aspirations': self.aspirations,
            'tabu_rejections': self.tabu_rejections,
        }


class ThresholdAcceptance(AcceptanceCriterion):
    """
    Accept candidates no worse than the incumbent by more than a threshold.

    relative: candidate <= incumbent + threshold * |incumbent|
    absolute: candidate <= incumbent + threshold
    """

    name = 'threshold'

    def __init__(self, threshold: float, mode: str = 'relative'):
        if threshold is None or threshold < 0:
            raise InvalidConfigurationError(parameter='threshold', value=threshold,
                                            expected=">= 0")
        if mode not in ('relative', 'absolute'):
            raise InvalidConfigurationError(parameter='threshold_mode', value=mode,
                                            expected="relative or absolute")
        self.threshold = threshold
        self.mode = mode

    def decide(self, candidate: Candidate, state: SearchState) -> Decision:
        incumbent = state.incumbent_objective
        if self.mode == 'relative':
            limit = incumbent + self.threshold * abs(incumbent)
        else:
            limit = incumbent + self.threshold

        if candidate.objective <= limit:
            return Decision.ACCEPT
        return Decision.REJECT
