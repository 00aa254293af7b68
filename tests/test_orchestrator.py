"""
Unit tests for the generic search loop.
Tests the state machine, best tracking, neighborhood handling, cancellation,
failure propagation and determinism.
"""

import os
import sys
import unittest
from fractions import Fraction
from unittest.mock import MagicMock

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from metaheur.algorithms.acceptance import ImprovingAcceptance, ThresholdAcceptance
from metaheur.algorithms.base import FunctionMove
from metaheur.algorithms.generators import (
    MultiNeighborhoodGenerator, SingleNeighborhoodGenerator
)
from metaheur.algorithms.lns import LargeNeighborhoodSearch
from metaheur.algorithms.orchestrator import SearchOrchestrator
from metaheur.algorithms.simulated_annealing import SimulatedAnnealing
from metaheur.algorithms.tabu_search import TabuSearch
from metaheur.algorithms.termination import MaxIterations, MaxTime
from metaheur.algorithms.vns import VariableNeighborhoodSearch
from metaheur.core.exceptions import InvalidConfigurationError, UserCallbackFailure
from metaheur.models.state import RunStatus, StopReason
from metaheur.problems.quadratic import IntegerQuadratic, StepMove
from metaheur.problems.tsp import (
    GreedyInsertion, RandomRemoval, SwapMove, TSPInstance, TwoOptMove, WorstRemoval
)


class BrokenCopy(IntegerQuadratic):
    def duplicate(self):
        raise RuntimeError("cannot copy")


class ExactQuadratic(IntegerQuadratic):
    def objective(self):
        return Fraction(self.x * self.x, 1)

    def duplicate(self):
        return ExactQuadratic(self.x, self.lower, self.upper)

    def moved(self, x):
        return ExactQuadratic(x, self.lower, self.upper)


def accept_all():
    return ThresholdAcceptance(1e9, mode='absolute')


class TestSearchOrchestrator(unittest.TestCase):
    """Test the search loop."""

    def test_best_is_monotonic_and_dominates_incumbents(self):
        instance = TSPInstance.random(15, seed=1)
        search = SimulatedAnnealing([SwapMove(), TwoOptMove()],
                                    config={'max_iterations': 300, 'stagnation_limit': None,
                                            'seed': 1, 'initial_temperature': 50.0})
        result = search.run(instance.tour())

        bests = [r.best_objective for r in result.history]
        self.assertEqual(len(bests), 300)
        for previous, current in zip(bests, bests[1:]):
            self.assertLessEqual(current, previous)
        for record in result.history:
            self.assertLessEqual(record.best_objective, record.incumbent_objective)
        self.assertAlmostEqual(result.best.objective(), result.best_objective)

    def test_initial_solution_not_mutated(self):
        initial = IntegerQuadratic(10)
        result = VariableNeighborhoodSearch([StepMove(1)]).run(initial)
        self.assertEqual(initial.x, 10)
        self.assertIsNot(result.best, initial)

    def test_neighborhood_index_bounds(self):
        seen = []
        search = VariableNeighborhoodSearch([StepMove(1), StepMove(2), StepMove(5)])
        search.add_listener(lambda record, state: seen.append(state.neighborhood_index))
        result = search.run(IntegerQuadratic(10))

        self.assertTrue(seen)
        self.assertTrue(all(1 <= k <= 3 for k in seen))
        self.assertEqual(max(seen), 3)
        self.assertEqual(result.best_objective, 0.0)

    def test_exhaustion_when_every_neighborhood_fails(self):
        search = VariableNeighborhoodSearch([StepMove(1), StepMove(2)])
        result = search.run(IntegerQuadratic(0))

        self.assertEqual(result.stop_reason, StopReason.NEIGHBORHOOD_EXHAUSTED)
        self.assertEqual(result.iterations, 2)
        self.assertEqual([r.neighborhood_index for r in result.history], [1, 2])
        self.assertEqual(search.state.neighborhood_index, 2)

    def test_exhausted_generator_without_neighborhoods(self):
        generator = SingleNeighborhoodGenerator(FunctionMove(apply=lambda s, rng: None), seed=0)
        search = SearchOrchestrator(generator, ImprovingAcceptance())
        result = search.run(IntegerQuadratic(3))
        self.assertEqual(result.stop_reason, StopReason.NEIGHBORHOOD_EXHAUSTED)
        self.assertEqual(result.iterations, 1)

    def test_callback_failure_keeps_best(self):
        calls = {'n': 0}

        def flaky(solution, rng):
            calls['n'] += 1
            if calls['n'] > 2:
                raise RuntimeError("move failed")
            return solution.moved(solution.x - 1)

        generator = SingleNeighborhoodGenerator(FunctionMove(apply=flaky), seed=0)
        search = SearchOrchestrator(generator, ImprovingAcceptance())

        with self.assertRaises(UserCallbackFailure) as ctx:
            search.run(IntegerQuadratic(10))

        failure = ctx.exception
        self.assertEqual(failure.stage, 'generate')
        self.assertIsInstance(failure.__cause__, RuntimeError)
        self.assertEqual(failure.partial_result.stop_reason, StopReason.CALLBACK_FAILURE)
        self.assertEqual(failure.partial_result.best_objective, 64.0)
        self.assertEqual(failure.partial_result.best.x, 8)
        self.assertEqual(failure.partial_result.iterations, 2)
        self.assertEqual(search.status, RunStatus.STOPPED)

    def test_move_failure_is_wrapped(self):
        move = MagicMock(spec=StepMove)
        move.name = 'mock'
        move.apply.side_effect = ValueError("bad neighbor")
        generator = SingleNeighborhoodGenerator(move, seed=0)
        search = SearchOrchestrator(generator, ImprovingAcceptance())

        with self.assertRaises(UserCallbackFailure) as ctx:
            search.run(IntegerQuadratic(4))
        self.assertEqual(ctx.exception.partial_result.best_objective, 16.0)
        self.assertEqual(ctx.exception.partial_result.iterations, 0)

    def test_initial_failure(self):
        search = VariableNeighborhoodSearch([StepMove(1)])
        with self.assertRaises(UserCallbackFailure) as ctx:
            search.run(BrokenCopy(2))
        self.assertEqual(ctx.exception.stage, 'initialize')
        self.assertIsNone(ctx.exception.partial_result)

    def test_listener_failure(self):
        search = VariableNeighborhoodSearch([StepMove(1)])
        search.add_listener(MagicMock(side_effect=KeyError('boom')))
        with self.assertRaises(UserCallbackFailure) as ctx:
            search.run(IntegerQuadratic(5))
        self.assertEqual(ctx.exception.stage, 'listener')
        self.assertEqual(ctx.exception.partial_result.iterations, 1)

    def test_request_stop_from_listener(self):
        generator = SingleNeighborhoodGenerator(StepMove(1), seed=0)
        search = SearchOrchestrator(generator, accept_all(),
                                    config={'stagnation_limit': None})

        def stop_at_five(record, state):
            if record.iteration == 5:
                search.request_stop()

        search.add_listener(stop_at_five)
        result = search.run(IntegerQuadratic(0))
        self.assertEqual(result.stop_reason, StopReason.USER_REQUESTED)
        self.assertEqual(result.iterations, 5)
        self.assertEqual(search.status, RunStatus.STOPPED)

    def test_request_stop_before_run(self):
        generator = SingleNeighborhoodGenerator(StepMove(1), seed=0)
        search = SearchOrchestrator(generator, accept_all())
        search.request_stop()
        result = search.run(IntegerQuadratic(0))
        self.assertEqual(result.stop_reason, StopReason.USER_REQUESTED)
        self.assertEqual(result.iterations, 1)

    def test_max_time_with_fake_clock(self):
        ticks = {'t': 0.0}

        def clock():
            ticks['t'] += 1.0
            return ticks['t']

        generator = SingleNeighborhoodGenerator(StepMove(1), seed=0)
        search = SearchOrchestrator(generator, accept_all(), termination=MaxTime(10.0),
                                    clock=clock)
        result = search.run(IntegerQuadratic(0))
        self.assertEqual(result.stop_reason, StopReason.MAX_TIME)
        self.assertLess(result.iterations, 10)

    def test_custom_termination_replaces_config_limits(self):
        generator = SingleNeighborhoodGenerator(StepMove(1), seed=0)
        search = SearchOrchestrator(generator, accept_all(), termination=MaxIterations(7),
                                    config={'max_iterations': 3})
        self.assertEqual(search.run(IntegerQuadratic(0)).iterations, 7)

    def test_determinism(self):
        instance = TSPInstance.random(12, seed=9)
        config = {'max_iterations': 200, 'seed': 42, 'initial_temperature': 20.0}

        first = SimulatedAnnealing([SwapMove(), TwoOptMove()], config=config)
        second = SimulatedAnnealing([SwapMove(), TwoOptMove()], config=config)
        a = first.run(instance.tour())
        b = second.run(instance.tour())
        self.assertEqual(a.decisions(), b.decisions())
        self.assertEqual(a.best_objective, b.best_objective)
        self.assertEqual(a.best.order, b.best.order)

        # Re-running the same search reproduces the run as well
        c = first.run(instance.tour())
        self.assertEqual(a.decisions(), c.decisions())

    def _assert_reproducible(self, build, initial):
        first, second = build(), build()
        a = first.run(initial)
        b = second.run(initial)
        c = first.run(initial)
        for other in (b, c):
            self.assertEqual(a.decisions(), other.decisions())
            self.assertEqual(a.best_objective, other.best_objective)
            self.assertEqual(a.best.order, other.best.order)

    def test_tabu_determinism(self):
        instance = TSPInstance.random(12, seed=5)
        config = {'max_iterations': 150, 'seed': 11, 'tabu_tenure': 4,
                  'selector': 'adaptive', 'stagnation_limit': None}
        self._assert_reproducible(lambda: TabuSearch([SwapMove(), TwoOptMove()], config=config),
                                  instance.tour())

    def test_lns_determinism(self):
        instance = TSPInstance.random(15, seed=6)
        config = {'max_iterations': 150, 'seed': 13, 'acceptance': 'annealing',
                  'initial_temperature': 50.0, 'stagnation_limit': None}
        self._assert_reproducible(
            lambda: LargeNeighborhoodSearch([RandomRemoval(0.2), WorstRemoval(2)],
                                            GreedyInsertion(), config=config),
            instance.tour()
        )

    def test_exact_objectives_with_progress_logging(self):
        search = VariableNeighborhoodSearch([StepMove(1)], config={'log_interval': 1})
        with self.assertLogs('metaheur.algorithms.orchestrator', level='DEBUG') as logs:
            result = search.run(ExactQuadratic(4))

        self.assertEqual(result.best_objective, Fraction(0))
        self.assertTrue(any('Best=0' in line for line in logs.output))

    def test_failing_termination_leaves_search_stopped(self):
        termination = MagicMock(spec=MaxIterations)
        termination.check.side_effect = RuntimeError("clock unavailable")
        generator = SingleNeighborhoodGenerator(StepMove(1), seed=0)
        search = SearchOrchestrator(generator, accept_all(), termination=termination)

        with self.assertRaises(RuntimeError):
            search.run(IntegerQuadratic(2))
        self.assertEqual(search.status, RunStatus.STOPPED)

    def test_history_profile_and_statistics(self):
        search = VariableNeighborhoodSearch([StepMove(1)],
                                            config={'profile': True, 'record_history': False})
        result = search.run(IntegerQuadratic(6))

        self.assertEqual(result.history, [])
        stages = {item['stage'] for item in result.profile}
        self.assertEqual(stages, {'generate', 'decide', 'terminate'})

        stats = search.get_statistics()
        self.assertEqual(stats['status'], 'stopped')
        self.assertEqual(stats['stop_reason'], 'neighborhood_exhausted')
        self.assertEqual(stats['best_objective'], 0.0)
        self.assertEqual(stats['neighborhood_count'], 1)

    def test_invalid_config(self):
        generator = MultiNeighborhoodGenerator([StepMove(1)])
        with self.assertRaises(InvalidConfigurationError):
            SearchOrchestrator(generator, ImprovingAcceptance(), config={'max_iterations': 0})
        with self.assertRaises(InvalidConfigurationError):
            SearchOrchestrator(generator, ImprovingAcceptance(), config={'seed': -1})


if __name__ == '__main__':
    unittest.main()
