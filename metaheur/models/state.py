"""
Run state shared between the orchestrator and its strategies.
Holds the enumerations of the search state machine and the per-run counters.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional


class Decision(Enum):
    """Acceptance decision for one candidate."""
    ACCEPT = 'accept'
    REJECT = 'reject'


class Outcome(Enum):
    """Feedback given to adaptive hooks after each iteration."""
    IMPROVED_BEST = 'improved_best'
    ACCEPTED = 'accepted'
    REJECTED = 'rejected'


class StopReason(Enum):
    """Why a run stopped."""
    MAX_ITERATIONS = 'max_iterations'
    MAX_TIME = 'max_time'
    STAGNATION = 'stagnation'
    NEIGHBORHOOD_EXHAUSTED = 'neighborhood_exhausted'
    USER_REQUESTED = 'user_requested'
    CALLBACK_FAILURE = 'callback_failure'


class RunStatus(Enum):
    """Orchestrator state machine."""
    IDLE = 'idle'
    RUNNING = 'running'
    STOPPED = 'stopped'


@dataclass
class SearchState:
    """
    Counters and solutions of one search run.

    ``iteration`` counts completed iterations; while an iteration is being
    processed it is also the 0-based index of that iteration.
    """
    incumbent: Any
    incumbent_objective: float
    best: Any
    best_objective: float
    clock: Callable[[], float] = time.perf_counter
    iteration: int = 0
    iterations_since_improvement: int = 0
    neighborhood_index: int = 1
    neighborhood_count: Optional[int] = None
    neighborhood_exhausted: bool = False
    stop_requested: bool = False
    accepted: int = 0
    improvements: int = 0
    start_time: float = field(default=0.0)

    def __post_init__(self):
        self.start_time = self.clock()

    @property
    def elapsed(self) -> float:
        """Seconds since the run started."""
        return self.clock() - self.start_time

    @property
    def uses_neighborhoods(self) -> bool:
        return self.neighborhood_count is not None

    def reset_neighborhood(self):
        """Return to the first neighborhood (after an improvement)."""
        self.neighborhood_index = 1

    def advance_neighborhood(self):
        """
        Move to the next neighborhood, flagging exhaustion past k_max.

        The index itself never leaves [1, k_max].
        """
        if self.neighborhood_index >= self.neighborhood_count:
            self.neighborhood_exhausted = True
        else:
            self.neighborhood_index += 1


@dataclass
class IterationRecord:
    """One row of run history."""
    iteration: int
    decision: Decision
    candidate_objective: Optional[float]
    incumbent_objective: float
    best_objective: float
    neighborhood_index: Optional[int] = None
    improved_best: bool = False
    elapsed: float = 0.0

    def to_dict(self) -> dict:
        return {
            'iteration': self.iteration,
            'decision': self.decision.value,
            'candidate_objective': self.candidate_objective,
            'incumbent_objective': self.incumbent_objective,
            'best_objective': self.best_objective,
            'neighborhood_index': self.neighborhood_index,
            'improved_best': self.improved_best,
            'elapsed': self.elapsed,
        }
