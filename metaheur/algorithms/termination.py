"""
Termination criteria.

A criterion inspects the run statistics once per iteration, after the
accept/reject and best-update steps, and returns a stop reason or None.
Criteria compose with OR (``AnyCriterion``, the default) or AND
(``AllCriterion``).
"""

from typing import Dict, List, Optional

from metaheur.algorithms.base import TerminationCriterion
from metaheur.core.exceptions import InvalidConfigurationError
from metaheur.models.state import SearchState, StopReason


def _require_positive(parameter: str, value, number_type=int):
    if isinstance(value, bool) or not isinstance(value, number_type) or value <= 0:
        raise InvalidConfigurationError(parameter=parameter, value=value, expected="> 0")


class MaxIterations(TerminationCriterion):
    """Stop after ``n`` iterations."""

    def __init__(self, n: int):
        _require_positive('max_iterations', n)
        self.n = n

    def check(self, state: SearchState) -> Optional[StopReason]:
        if state.iteration >= self.n:
            return StopReason.MAX_ITERATIONS
        return None

    def __repr__(self):
        return f"MaxIterations({self.n})"


class MaxTime(TerminationCriterion):
    """Stop once ``seconds`` have elapsed; the running iteration is finished."""

    def __init__(self, seconds: float):
        _require_positive('max_time', seconds, (int, float))
        self.seconds = seconds

    def check(self, state: SearchState) -> Optional[StopReason]:
        if state.elapsed >= self.seconds:
            return StopReason.MAX_TIME
        return None

    def __repr__(self):
        return f"MaxTime({self.seconds})"


class Stagnation(TerminationCriterion):
    """Stop after ``limit`` iterations without improving the best solution."""

    def __init__(self, limit: int):
        _require_positive('stagnation_limit', limit)
        self.limit = limit

    def check(self, state: SearchState) -> Optional[StopReason]:
        if state.iterations_since_improvement >= self.limit:
            return StopReason.STAGNATION
        return None

    def __repr__(self):
        return f"Stagnation({self.limit})"


class NeighborhoodExhausted(TerminationCriterion):
    """Stop when no neighborhood index remains to try."""

    def check(self, state: SearchState) -> Optional[StopReason]:
        if state.neighborhood_exhausted:
            return StopReason.NEIGHBORHOOD_EXHAUSTED
        return None

    def __repr__(self):
        return "NeighborhoodExhausted()"


class UserRequested(TerminationCriterion):
    """Stop when the caller asked for it (cooperative cancellation)."""

    def check(self, state: SearchState) -> Optional[StopReason]:
        if state.stop_requested:
            return StopReason.USER_REQUESTED
        return None

    def __repr__(self):
        return "UserRequested()"


class AnyCriterion(TerminationCriterion):
    """Stops if at least one member fires; the first firing reason wins."""

    def __init__(self, criteria: List[TerminationCriterion]):
        self.criteria = list(criteria)

    def check(self, state: SearchState) -> Optional[StopReason]:
        for criterion in self.criteria:
            reason = criterion.check(state)
            if reason is not None:
                return reason
        return None

    def reset(self):
        for criterion in self.criteria:
            criterion.reset()

    def __repr__(self):
        return f"AnyCriterion({self.criteria})"


class AllCriterion(TerminationCriterion):
    """Stops only if every member fires; reports the first member's reason."""

    def __init__(self, criteria: List[TerminationCriterion]):
        if not criteria:
            raise InvalidConfigurationError(parameter='criteria', value=[],
                                            expected="at least one criterion")
        self.criteria = list(criteria)

    def check(self, state: SearchState) -> Optional[StopReason]:
        reasons = [criterion.check(state) for criterion in self.criteria]
        if all(reason is not None for reason in reasons):
            return reasons[0]
        return None

    def reset(self):
        for criterion in self.criteria:
            criterion.reset()

    def __repr__(self):
        return f"AllCriterion({self.criteria})"


class TerminationBuilder:
    """
    Fluent construction of composite criteria.

    Example:
        >>> criterion = TerminationBuilder().iterations(500).stagnation(50).build()
    """

    def __init__(self):
        self._criteria: List[TerminationCriterion] = []
        self._all = False

    def iterations(self, n: int) -> 'TerminationBuilder':
        self._criteria.append(MaxIterations(n))
        return self

    def time_max(self, seconds: float) -> 'TerminationBuilder':
        self._criteria.append(MaxTime(seconds))
        return self

    def stagnation(self, limit: int) -> 'TerminationBuilder':
        self._criteria.append(Stagnation(limit))
        return self

    def criterion(self, criterion: TerminationCriterion) -> 'TerminationBuilder':
        self._criteria.append(criterion)
        return self

    def any(self) -> 'TerminationBuilder':
        self._all = False
        return self

    def all(self) -> 'TerminationBuilder':
        self._all = True
        return self

    def build(self) -> TerminationCriterion:
        if self._all:
            return AllCriterion(self._criteria)
        return AnyCriterion(self._criteria)


def from_config(config: Dict) -> TerminationCriterion:
    """
    Build the OR-composition of the limits present in a run config.

    Recognized keys: max_iterations, max_time, stagnation_limit.
    """
    builder = TerminationBuilder()
    if config.get('max_iterations') is not None:
        builder.iterations(config['max_iterations'])
    if config.get('max_time') is not None:
        builder.time_max(config['max_time'])
    if config.get('stagnation_limit') is not None:
        builder.stagnation(config['stagnation_limit'])
    return builder.build()
