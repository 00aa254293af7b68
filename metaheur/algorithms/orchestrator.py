"""
Generic search loop.

Composes a candidate generator, an acceptance criterion and a termination
criterion into one single-trajectory metaheuristic. The loop never inspects
which concrete strategies it was given: VNS, SA, Tabu Search and LNS are all
instances of this class with different components.

Each iteration:
    1. generate a candidate from the incumbent (GeneratorExhausted is
       recovered locally)
    2. decide accept/reject
    3. on accept, replace the incumbent; on strict improvement, update best
    4. reset or advance the neighborhood index (generators with k_max)
    5. feed the outcome back to generator and acceptance
    6. record history, notify listeners
    7. evaluate termination
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional

from metaheur.algorithms.base import (
    AcceptanceCriterion, CandidateGenerator, TerminationCriterion, is_better
)
from metaheur.algorithms.termination import (
    AnyCriterion, NeighborhoodExhausted, UserRequested, from_config
)
from metaheur.config import SEARCH_CONFIG
from metaheur.core.exceptions import (
    GeneratorExhausted, MetaheuristicError, UserCallbackFailure
)
from metaheur.core.profiler import SearchProfiler
from metaheur.core.validators import ConfigValidator
from metaheur.models.result import RunResult
from metaheur.models.state import (
    Decision, IterationRecord, Outcome, RunStatus, SearchState, StopReason
)

logger = logging.getLogger(__name__)

IterationListener = Callable[[IterationRecord, SearchState], None]


class SearchOrchestrator:
    """Runs the generic search loop over pluggable strategies."""

    def __init__(self,
                 generator: CandidateGenerator,
                 acceptance: AcceptanceCriterion,
                 termination: Optional[TerminationCriterion] = None,
                 config: Optional[Dict] = None,
                 name: str = 'custom',
                 clock: Callable[[], float] = time.perf_counter):
        """
        Initialize orchestrator.

        Args:
            generator: Candidate generator
            acceptance: Acceptance criterion
            termination: Termination criterion; built from the limits in
                ``config`` when omitted
            config: Run configuration, merged over SEARCH_CONFIG
            name: Algorithm name used in logs and results
            clock: Time source (seconds)

        Raises:
            InvalidConfigurationError: If the run configuration is invalid
        """
        self.config = SEARCH_CONFIG.copy()
        self.config.update(config or {})
        ConfigValidator.validate_search_config(self.config)

        self.generator = generator
        self.acceptance = acceptance
        self.termination = termination if termination is not None else from_config(self.config)
        # Exhaustion and stop requests are always honoured
        self._stop_check = AnyCriterion([self.termination, NeighborhoodExhausted(), UserRequested()])

        self.name = name
        self.clock = clock
        self.profiler = SearchProfiler(enabled=bool(self.config.get('profile')))
        self.status = RunStatus.IDLE
        self.stop_reason: Optional[StopReason] = None
        self.state: Optional[SearchState] = None
        self.history: List[IterationRecord] = []
        self._listeners: List[IterationListener] = []
        self._stop_pending = False

    def add_listener(self, listener: IterationListener):
        """Call ``listener(record, state)`` after every iteration."""
        self._listeners.append(listener)

    def request_stop(self):
        """Ask the run to stop at the next iteration boundary."""
        if self.state is not None and self.status is RunStatus.RUNNING:
            self.state.stop_requested = True
        else:
            self._stop_pending = True

    def run(self, initial: Any) -> RunResult:
        """
        Search from ``initial`` until a termination criterion fires.

        Args:
            initial: Initial solution; it is duplicated, never mutated

        Returns:
            RunResult with the best solution found

        Raises:
            UserCallbackFailure: If a problem-supplied capability raises; the
                exception carries the partial result
        """
        self._reset()

        try:
            incumbent = initial.duplicate()
            objective = incumbent.objective()
            best = incumbent.duplicate()
        except Exception as exc:
            logger.error(f"{self.name}: initial solution failed: {exc}", exc_info=True)
            self.status = RunStatus.STOPPED
            self.stop_reason = StopReason.CALLBACK_FAILURE
            raise UserCallbackFailure(stage='initialize', reason=str(exc)) from exc

        state = SearchState(
            incumbent=incumbent,
            incumbent_objective=objective,
            best=best,
            best_objective=objective,
            clock=self.clock,
            neighborhood_count=self.generator.neighborhood_count,
            stop_requested=self._stop_pending,
        )
        self.state = state
        self._initial_objective = objective
        self._stop_pending = False
        self.status = RunStatus.RUNNING

        logger.info(f"{self.name}: starting search (initial objective {objective})")
        logger.debug(f"{self.name}: termination {self.termination!r}")

        try:
            while True:
                self._step(state)
                with self.profiler.profile('terminate'):
                    reason = self._stop_check.check(state)
                if reason is not None:
                    break
        finally:
            self.status = RunStatus.STOPPED

        self.stop_reason = reason
        result = self._build_result(state, reason)

        logger.info(
            f"{self.name}: stopped ({reason.value}) after {state.iteration} iterations "
            f"in {result.elapsed:.2f}s; best {state.best_objective} "
            f"(initial {objective}, {state.improvements} improvements, "
            f"acceptance rate {result.acceptance_rate * 100:.1f}%)"
        )
        if self.profiler.enabled:
            logger.debug(self.profiler.format_summary())

        return result

    def _reset(self):
        self.generator.reset()
        self.acceptance.reset()
        self._stop_check.reset()
        self.profiler.reset()
        self.history = []
        self.stop_reason = None
        self.state = None

    def _step(self, state: SearchState):
        candidate = None
        exhausted = False
        decision = Decision.REJECT
        improved = False

        try:
            with self.profiler.profile('generate'), self._user_code('generate', state):
                candidate = self.generator.generate(state.incumbent, state)
        except GeneratorExhausted as exc:
            exhausted = True
            logger.debug(f"Iter {state.iteration}: {exc}")

        if candidate is not None:
            with self.profiler.profile('decide'), self._user_code('decide', state):
                decision = self.acceptance.decide(candidate, state)

            if decision is Decision.ACCEPT:
                state.incumbent = candidate.solution
                state.incumbent_objective = candidate.objective
                state.accepted += 1

                if is_better(candidate.objective, state.best_objective):
                    with self._user_code('duplicate', state):
                        state.best = candidate.solution.duplicate()
                    state.best_objective = candidate.objective
                    state.improvements += 1
                    improved = True
                    if logger.isEnabledFor(logging.DEBUG):
                        logger.debug(f"Iter {state.iteration}: new best {state.best_objective}")

        neighborhood = None
        if state.uses_neighborhoods:
            neighborhood = state.neighborhood_index
            if decision is Decision.ACCEPT:
                state.reset_neighborhood()
            else:
                state.advance_neighborhood()
        elif exhausted:
            state.neighborhood_exhausted = True

        state.iteration += 1
        if improved:
            state.iterations_since_improvement = 0
        else:
            state.iterations_since_improvement += 1

        if improved:
            outcome = Outcome.IMPROVED_BEST
        elif decision is Decision.ACCEPT:
            outcome = Outcome.ACCEPTED
        else:
            outcome = Outcome.REJECTED
        self.generator.feedback(outcome)
        self.acceptance.feedback(outcome)

        record = IterationRecord(
            iteration=state.iteration,
            decision=decision,
            candidate_objective=candidate.objective if candidate is not None else None,
            incumbent_objective=state.incumbent_objective,
            best_objective=state.best_objective,
            neighborhood_index=neighborhood,
            improved_best=improved,
            elapsed=state.elapsed,
        )
        if self.config.get('record_history'):
            self.history.append(record)

        for listener in self._listeners:
            with self._user_code('listener', state):
                listener(record, state)

        interval = self.config.get('log_interval') or 0
        if interval and state.iteration % interval == 0 and logger.isEnabledFor(logging.INFO):
            details = ", ".join(f"{k}={v:.4g}" if isinstance(v, float) else f"{k}={v}"
                                for k, v in self.acceptance.describe().items())
            logger.info(
                f"   Iter {state.iteration}: Best={state.best_objective}, "
                f"Current={state.incumbent_objective}, "
                f"Accepts={state.accepted}/{state.iteration}"
                + (f", {details}" if details else "")
            )

    @contextmanager
    def _user_code(self, stage: str, state: SearchState):
        """Turn exceptions raised by problem code into UserCallbackFailure."""
        try:
            yield
        except MetaheuristicError:
            raise
        except Exception as exc:
            self.status = RunStatus.STOPPED
            self.stop_reason = StopReason.CALLBACK_FAILURE
            partial = self._build_result(state, StopReason.CALLBACK_FAILURE)
            logger.error(
                f"{self.name}: {stage} failed at iteration {state.iteration}: {exc} "
                f"(best so far {state.best_objective})",
                exc_info=True
            )
            raise UserCallbackFailure(stage=stage, partial_result=partial,
                                      reason=str(exc)) from exc

    def _build_result(self, state: SearchState, reason: Optional[StopReason]) -> RunResult:
        return RunResult(
            best=state.best,
            best_objective=state.best_objective,
            stop_reason=reason,
            iterations=state.iteration,
            elapsed=state.elapsed,
            initial_objective=self._initial_objective,
            accepted=state.accepted,
            improvements=state.improvements,
            algorithm=self.name,
            history=list(self.history),
            profile=self.profiler.get_summary(),
        )

    def get_statistics(self) -> Dict[str, Any]:
        """Return statistics of the current or last run."""
        if self.state is None:
            return {'algorithm': self.name, 'status': self.status.value}

        stats = {
            'algorithm': self.name,
            'status': self.status.value,
            'stop_reason': self.stop_reason.value if self.stop_reason else None,
            'iterations': self.state.iteration,
            'elapsed': self.state.elapsed,
            'best_objective': self.state.best_objective,
            'incumbent_objective': self.state.incumbent_objective,
            'accepted': self.state.accepted,
            'improvements': self.state.improvements,
            'iterations_since_improvement': self.state.iterations_since_improvement,
        }
        if self.state.uses_neighborhoods:
            stats['neighborhood_index'] = self.state.neighborhood_index
            stats['neighborhood_count'] = self.state.neighborhood_count
        stats.update(self.acceptance.describe())
        return stats

