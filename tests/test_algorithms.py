"""
End-to-end tests for VNS, Simulated Annealing, Tabu Search and LNS.
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from metaheur.algorithms.acceptance import AnnealingAcceptance, ThresholdAcceptance
from metaheur.algorithms.base import FunctionMove
from metaheur.algorithms.lns import LargeNeighborhoodSearch, run_lns
from metaheur.algorithms.selectors import AdaptiveSelector
from metaheur.algorithms.simulated_annealing import (
    SimulatedAnnealing, build_simulated_annealing, run_simulated_annealing
)
from metaheur.algorithms.tabu_search import TabuSearch, run_tabu_search
from metaheur.algorithms.temperature import LinearSchedule
from metaheur.algorithms.vns import build_vns, run_vns
from metaheur.core.exceptions import InvalidConfigurationError
from metaheur.models.state import Decision, RunStatus, StopReason
from metaheur.problems.linesearch import LineSearch, NeighborSwap
from metaheur.problems.quadratic import IntegerQuadratic, StepMove
from metaheur.problems.tsp import (
    GreedyInsertion, RandomRemoval, TSPInstance, WorstRemoval
)

NUMBERS = [9.0, 8.0, 7.0, 8.0, 9.0, 7.0, 5.0, 0.0]


class TestVariableNeighborhoodSearch(unittest.TestCase):
    """Test VNS."""

    def test_quadratic_converges_to_zero(self):
        result = run_vns(IntegerQuadratic(10, -10, 10), [StepMove(1)])
        self.assertEqual(result.best.x, 0)
        self.assertEqual(result.best_objective, 0.0)
        self.assertIn(result.stop_reason,
                      (StopReason.STAGNATION, StopReason.NEIGHBORHOOD_EXHAUSTED))
        self.assertEqual(result.algorithm, 'vns')
        self.assertEqual(result.improvement, 100.0)

    def _line_search(self, *reach):
        problem = LineSearch(NUMBERS)
        return run_vns(problem.initial(0), problem.reach(*reach), config={'max_iterations': 10})

    def test_line_search_single_operator(self):
        self.assertEqual(self._line_search(1).best.index, 2)
        self.assertEqual(self._line_search(3).best.index, 6)

    def test_line_search_multiple_operators(self):
        self.assertEqual(self._line_search(1, 3).best.index, 2)
        result = self._line_search(1, 4)
        self.assertEqual(result.best.index, 7)
        self.assertEqual(result.best_objective, 0.0)

    def test_invalid_neighborhood_count(self):
        with self.assertRaises(InvalidConfigurationError):
            build_vns([StepMove(1), StepMove(2)], config={'neighborhood_count': 3})
        with self.assertRaises(InvalidConfigurationError):
            build_vns([StepMove(1)], config={'neighborhood_count': 0})
        with self.assertRaises(InvalidConfigurationError):
            build_vns([])

    def test_preset(self):
        search = build_vns([StepMove(1)], preset='fast')
        self.assertEqual(search.config['max_iterations'], 200)
        with self.assertRaises(InvalidConfigurationError):
            build_vns([StepMove(1)], preset='exhaustive')


class TestSimulatedAnnealing(unittest.TestCase):
    """Test Simulated Annealing."""

    def test_quadratic(self):
        result = run_simulated_annealing(
            IntegerQuadratic(10), StepMove(1),
            config={'max_iterations': 2000, 'stagnation_limit': None, 'seed': 7}
        )
        self.assertEqual(result.best_objective, 0.0)
        self.assertEqual(result.stop_reason, StopReason.MAX_ITERATIONS)
        self.assertEqual(result.iterations, 2000)

    def test_line_search_escapes_local_minimum(self):
        problem = LineSearch(NUMBERS)
        result = run_simulated_annealing(
            problem.initial(0), NeighborSwap(),
            config={'max_iterations': 1000, 'stagnation_limit': None, 'seed': 0,
                    'initial_temperature': 100.0, 'cooling_rate': 0.999}
        )
        self.assertEqual(result.best.index, 7)

    def test_temperature_cools_per_iteration(self):
        search = build_simulated_annealing(StepMove(1),
                                           config={'max_iterations': 10, 'seed': 1,
                                                   'initial_temperature': 100.0,
                                                   'cooling_rate': 0.5})
        search.run(IntegerQuadratic(3))
        self.assertAlmostEqual(search.temperature, 100.0 * 0.5 ** 10)

    def test_custom_schedule_and_adaptive_selector(self):
        search = SimulatedAnnealing([StepMove(1), StepMove(2)],
                                    config={'selector': 'adaptive', 'max_iterations': 50,
                                            'seed': 4},
                                    schedule=LinearSchedule(10.0, delta=0.5))
        self.assertIsInstance(search.generator.selector, AdaptiveSelector)
        self.assertIsInstance(search.acceptance, AnnealingAcceptance)
        result = search.run(IntegerQuadratic(9))
        self.assertLessEqual(result.best_objective, 81.0)

    def test_invalid_config(self):
        with self.assertRaises(InvalidConfigurationError):
            build_simulated_annealing(StepMove(1), config={'cooling_rate': 1.5})
        with self.assertRaises(InvalidConfigurationError):
            build_simulated_annealing(StepMove(1), config={'initial_temperature': -1.0})
        with self.assertRaises(InvalidConfigurationError):
            build_simulated_annealing(StepMove(1), config={'min_temperature': 0.0})


class TestTabuSearch(unittest.TestCase):
    """Test Tabu Search."""

    def test_quadratic_moves_away_from_optimum(self):
        result = run_tabu_search(IntegerQuadratic(10), StepMove(1),
                                 config={'strategy': 'best', 'tabu_tenure': 3,
                                         'max_iterations': 100, 'seed': 1})
        self.assertEqual(result.best_objective, 0.0)

        reached = next(i for i, r in enumerate(result.history) if r.best_objective == 0.0)
        later = result.history[reached + 1:]
        self.assertTrue(any(r.incumbent_objective > 0.0 for r in later))

    def test_memory_bounded_during_run(self):
        sizes = []
        search = TabuSearch(StepMove(1), config={'tabu_tenure': 4, 'max_iterations': 60,
                                                 'stagnation_limit': None, 'seed': 2})
        search.add_listener(lambda record, state: sizes.append(len(search.memory)))
        search.run(IntegerQuadratic(5))
        self.assertEqual(len(sizes), 60)
        self.assertLessEqual(max(sizes), 4)

    def test_invalid_tenure(self):
        with self.assertRaises(InvalidConfigurationError):
            TabuSearch(StepMove(1), config={'tabu_tenure': 0})

    def test_bare_solutions_without_hash_are_rejected(self):
        shake = FunctionMove(apply=lambda s, rng: s.moved(s.x - 1 if s.x > s.lower else s.x + 1))
        search = TabuSearch(shake, config={'seed': 1, 'tabu_tenure': 5, 'max_iterations': 50})

        with self.assertRaises(InvalidConfigurationError):
            search.run(IntegerQuadratic(3))
        self.assertEqual(search.status, RunStatus.STOPPED)


class TestLargeNeighborhoodSearch(unittest.TestCase):
    """Test LNS."""

    def setUp(self):
        self.instance = TSPInstance.random(20, seed=3)

    def test_best_never_regresses_with_threshold_acceptance(self):
        initial = self.instance.tour()
        result = run_lns(initial, [RandomRemoval(0.2), WorstRemoval(3)], GreedyInsertion(),
                         config={'acceptance': 'threshold', 'threshold': 0.2,
                                 'max_iterations': 200, 'stagnation_limit': None, 'seed': 3})

        bests = [r.best_objective for r in result.history]
        for previous, current in zip(bests, bests[1:]):
            self.assertLessEqual(current, previous)

        incumbents = [initial.objective()] + [r.incumbent_objective for r in result.history]
        worse_accepts = [r for r, before in zip(result.history, incumbents)
                         if r.decision is Decision.ACCEPT and r.candidate_objective > before]
        self.assertTrue(worse_accepts)
        self.assertLessEqual(result.best_objective,
                             min(r.incumbent_objective for r in result.history))
        self.assertLess(result.best_objective, initial.objective())
        self.assertTrue(result.best.is_complete())

    def test_acceptance_from_config(self):
        search = LargeNeighborhoodSearch(RandomRemoval(), GreedyInsertion(),
                                         config={'acceptance': 'annealing', 'seed': 1})
        self.assertIsInstance(search.acceptance, AnnealingAcceptance)

        search = LargeNeighborhoodSearch(RandomRemoval(), GreedyInsertion(),
                                         config={'acceptance': 'threshold', 'threshold': 0.1})
        self.assertIsInstance(search.acceptance, ThresholdAcceptance)

    def test_operator_usage(self):
        search = LargeNeighborhoodSearch([RandomRemoval(), WorstRemoval(2)], GreedyInsertion(),
                                         config={'max_iterations': 40,
                                                 'stagnation_limit': None, 'seed': 8})
        result = search.run(self.instance.nearest_neighbor_tour())
        usage = search.operator_usage()
        self.assertEqual(sum(usage['destroy']), result.iterations)
        self.assertEqual(usage['repair'], [result.iterations])

    def test_invalid_acceptance(self):
        with self.assertRaises(InvalidConfigurationError):
            LargeNeighborhoodSearch(RandomRemoval(), GreedyInsertion(),
                                    config={'acceptance': 'always'})
        with self.assertRaises(InvalidConfigurationError):
            LargeNeighborhoodSearch(RandomRemoval(), GreedyInsertion(),
                                    config={'acceptance': 'threshold', 'threshold': -0.5})


if __name__ == '__main__':
    unittest.main()
