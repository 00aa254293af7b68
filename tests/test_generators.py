"""
Unit tests for candidate generators.
"""

import os
import sys
import unittest

import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from metaheur.algorithms.base import FunctionMove
from metaheur.algorithms.generators import (
    DestroyRepairGenerator, MultiNeighborhoodGenerator, SingleNeighborhoodGenerator,
    search_neighborhood
)
from metaheur.algorithms.selectors import SequentialSelector
from metaheur.core.exceptions import GeneratorExhausted, InvalidConfigurationError
from metaheur.models.state import SearchState
from metaheur.problems.quadratic import IntegerQuadratic, StepMove
from metaheur.problems.tsp import GreedyInsertion, RandomRemoval, TSPInstance


def state_for(solution, neighborhood_count=None):
    objective = solution.objective()
    return SearchState(incumbent=solution, incumbent_objective=objective,
                       best=solution.duplicate(), best_objective=objective,
                       neighborhood_count=neighborhood_count)


class TestSearchNeighborhood(unittest.TestCase):
    """Test the three neighborhood search strategies."""

    def setUp(self):
        self.rng = np.random.default_rng(0)
        self.point = IntegerQuadratic(5)

    def test_best(self):
        candidate = search_neighborhood(StepMove(1), self.point, 25.0, 'best', self.rng)
        self.assertEqual(candidate.solution.x, 4)
        self.assertEqual(candidate.objective, 16.0)
        self.assertEqual(candidate.move, 4)

    def test_first_improving(self):
        move = FunctionMove(neighbors=lambda s: iter([(s.moved(3), 3), (s.moved(1), 1)]))
        candidate = search_neighborhood(move, self.point, 25.0, 'first', self.rng)
        self.assertEqual(candidate.solution.x, 3)

    def test_random_does_not_mutate_incumbent(self):
        for _ in range(10):
            candidate = search_neighborhood(StepMove(1), self.point, 25.0, 'random', self.rng)
            self.assertIn(candidate.solution.x, (4, 6))
        self.assertEqual(self.point.x, 5)

    def test_exhausted(self):
        empty = FunctionMove(neighbors=lambda s: iter([]), name='empty')
        with self.assertRaises(GeneratorExhausted):
            search_neighborhood(empty, self.point, 25.0, 'best', self.rng)

        nothing = FunctionMove(apply=lambda s, rng: None, name='nothing')
        with self.assertRaises(GeneratorExhausted):
            search_neighborhood(nothing, self.point, 25.0, 'random', self.rng)


class TestGenerators(unittest.TestCase):
    """Test generator construction and operator routing."""

    def test_multi_uses_neighborhood_index(self):
        generator = MultiNeighborhoodGenerator([StepMove(1), StepMove(3)])
        self.assertEqual(generator.neighborhood_count, 2)

        point = IntegerQuadratic(5)
        state = state_for(point, neighborhood_count=2)
        state.neighborhood_index = 2
        candidate = generator.generate(point, state)
        self.assertEqual(candidate.solution.x, 2)
        self.assertEqual(candidate.operator, 1)

    def test_single_with_selector(self):
        generator = SingleNeighborhoodGenerator([StepMove(1), StepMove(3)],
                                                selector=SequentialSelector(2),
                                                strategy='best')
        self.assertIsNone(generator.neighborhood_count)
        point = IntegerQuadratic(5)
        state = state_for(point)
        self.assertEqual(generator.generate(point, state).solution.x, 4)
        self.assertEqual(generator.generate(point, state).solution.x, 2)

    def test_callables_are_wrapped(self):
        generator = SingleNeighborhoodGenerator(lambda s, rng: s.moved(s.x - 1), seed=1)
        point = IntegerQuadratic(5)
        self.assertEqual(generator.generate(point, state_for(point)).solution.x, 4)

    def test_invalid_construction(self):
        with self.assertRaises(InvalidConfigurationError):
            SingleNeighborhoodGenerator([StepMove(1)], strategy='steepest')
        with self.assertRaises(InvalidConfigurationError):
            SingleNeighborhoodGenerator([StepMove(1), StepMove(2)], selector=SequentialSelector(3))
        with self.assertRaises(InvalidConfigurationError):
            MultiNeighborhoodGenerator([])
        with self.assertRaises(InvalidConfigurationError):
            DestroyRepairGenerator([], [GreedyInsertion()])


class TestDestroyRepairGenerator(unittest.TestCase):
    """Test the LNS generator."""

    def setUp(self):
        self.instance = TSPInstance.random(12, seed=4)
        self.tour = self.instance.tour()

    def test_generate_complete_tour(self):
        generator = DestroyRepairGenerator([RandomRemoval(0.3)], [GreedyInsertion()], seed=2)
        order_before = list(self.tour.order)

        candidate = generator.generate(self.tour, state_for(self.tour))

        self.assertTrue(candidate.solution.is_complete())
        self.assertAlmostEqual(candidate.objective, candidate.solution.objective())
        self.assertEqual(candidate.move, ('random_removal', 'greedy_insertion'))
        self.assertEqual(self.tour.order, order_before)
        self.assertEqual(generator.usage, {'destroy': [1], 'repair': [1]})

    def test_destroy_nothing_exhausts(self):
        generator = DestroyRepairGenerator(lambda s, rng: None, lambda p, rng: p, seed=2)
        with self.assertRaises(GeneratorExhausted):
            generator.generate(self.tour, state_for(self.tour))


if __name__ == '__main__':
    unittest.main()
