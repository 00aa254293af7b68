"""
Travelling salesman problem over 2-D cities.

Defines the tour representation and the operators the example runs use:
- Move operators: SwapMove, TwoOptMove
- Destroy operators: RandomRemoval, WorstRemoval
- Repair operator: GreedyInsertion (cheapest insertion)
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from metaheur.algorithms.base import Destroyer, MoveOperator, Repairer
from metaheur.models.solution import Solution


@dataclass
class City:
    """Represents a city of the TSP instance."""
    id: int
    x: float
    y: float


def euclidean_matrix(cities: Sequence[City]) -> np.ndarray:
    """Vectorized pairwise Euclidean distances."""
    coords = np.array([(c.x, c.y) for c in cities], dtype=float).reshape(-1, 2)
    x_diff = coords[:, 0][:, np.newaxis] - coords[:, 0][np.newaxis, :]
    y_diff = coords[:, 1][:, np.newaxis] - coords[:, 1][np.newaxis, :]
    matrix = np.sqrt(x_diff ** 2 + y_diff ** 2)
    np.fill_diagonal(matrix, 0.0)
    return matrix


class TSPInstance:
    """Cities and their distance matrix; shared by every tour of the instance."""

    def __init__(self, cities: Sequence[City]):
        if not cities:
            raise ValueError("TSP instance needs at least one city")
        self.cities = list(cities)
        self.distance_matrix = euclidean_matrix(self.cities)

    @classmethod
    def random(cls, n: int, seed: Optional[int] = None, size: float = 100.0) -> 'TSPInstance':
        """Uniformly random cities in a ``size`` x ``size`` square."""
        rng = np.random.default_rng(seed)
        points = rng.uniform(0.0, size, size=(n, 2))
        return cls([City(i, float(x), float(y)) for i, (x, y) in enumerate(points)])

    def __len__(self):
        return len(self.cities)

    def tour(self, order: Optional[Sequence[int]] = None) -> 'Tour':
        return Tour(self, list(order) if order is not None else list(range(len(self.cities))))

    def nearest_neighbor_tour(self, start: int = 0) -> 'Tour':
        """Greedy construction: always visit the closest unvisited city next."""
        unvisited = set(range(len(self.cities)))
        unvisited.discard(start)
        order = [start]
        while unvisited:
            last = order[-1]
            nearest = min(unvisited, key=lambda c: self.distance_matrix[last, c])
            order.append(nearest)
            unvisited.remove(nearest)
        return Tour(self, order)


class Tour(Solution):
    """Closed tour; ``order`` holds city indices of the instance."""

    def __init__(self, instance: TSPInstance, order: List[int]):
        self.instance = instance
        self.order = order

    def objective(self) -> float:
        if len(self.order) < 2:
            return 0.0
        idx = np.asarray(self.order)
        return float(self.instance.distance_matrix[idx, np.roll(idx, -1)].sum())

    def duplicate(self) -> 'Tour':
        return Tour(self.instance, list(self.order))

    def sequence(self) -> Iterator[City]:
        for i in self.order:
            yield self.instance.cities[i]

    def is_complete(self) -> bool:
        return sorted(self.order) == list(range(len(self.instance)))

    def __len__(self):
        return len(self.order)

    def __repr__(self):
        return f"Tour(length={self.objective():.2f}, order={self.order})"


@dataclass
class PartialTour:
    """Tour with some cities removed, waiting for repair."""
    tour: Tour
    removed: List[int]


class SwapMove(MoveOperator):
    """Exchange the positions of two cities."""

    name = 'swap'

    @staticmethod
    def _swap(tour: Tour, i: int, j: int) -> Tuple[Tour, Tuple]:
        a, b = tour.order[i], tour.order[j]
        tour.order[i], tour.order[j] = b, a
        return tour, ('swap', min(a, b), max(a, b))

    def apply(self, tour: Tour, rng: np.random.Generator):
        if len(tour) < 2:
            return None
        i, j = rng.choice(len(tour), size=2, replace=False)
        return self._swap(tour, int(i), int(j))

    def neighbors(self, tour: Tour):
        n = len(tour)
        for i in range(n - 1):
            for j in range(i + 1, n):
                yield self._swap(tour.duplicate(), i, j)


class TwoOptMove(MoveOperator):
    """Reverse the segment between two positions."""

    name = '2opt'

    @staticmethod
    def _reverse(tour: Tour, i: int, j: int) -> Tuple[Tour, Tuple]:
        a, b = tour.order[i], tour.order[j]
        tour.order[i:j + 1] = reversed(tour.order[i:j + 1])
        return tour, ('2opt', min(a, b), max(a, b))

    def apply(self, tour: Tour, rng: np.random.Generator):
        if len(tour) < 4:
            return None
        i, j = sorted(int(k) for k in rng.choice(len(tour), size=2, replace=False))
        return self._reverse(tour, i, j)

    def neighbors(self, tour: Tour):
        n = len(tour)
        for i in range(n - 1):
            for j in range(i + 1, n):
                # Reversing the whole tour yields the same cycle
                if i == 0 and j == n - 1:
                    continue
                yield self._reverse(tour.duplicate(), i, j)


class RandomRemoval(Destroyer):
    """Random removal: remove a random fraction of the cities."""

    name = 'random_removal'

    def __init__(self, removal_rate: float = 0.2):
        if not 0 < removal_rate < 1:
            raise ValueError("removal_rate must be in (0, 1)")
        self.removal_rate = removal_rate

    def destroy(self, tour: Tour, rng: np.random.Generator) -> Optional[PartialTour]:
        n = len(tour)
        if n < 2:
            return None
        num_to_remove = min(max(1, int(n * self.removal_rate)), n - 1)
        removed = [int(c) for c in rng.choice(tour.order, size=num_to_remove, replace=False)]
        removed_set = set(removed)
        tour.order = [c for c in tour.order if c not in removed_set]
        return PartialTour(tour, removed)


class WorstRemoval(Destroyer):
    """
    Worst removal: remove the most costly cities.

    Costly = city whose detour (prev -> city -> next vs. prev -> next) is largest.
    """

    name = 'worst_removal'

    def __init__(self, num_remove: int = 3):
        if num_remove < 1:
            raise ValueError("num_remove must be >= 1")
        self.num_remove = num_remove

    def destroy(self, tour: Tour, rng: np.random.Generator) -> Optional[PartialTour]:
        n = len(tour)
        if n < 3:
            return None
        d = tour.instance.distance_matrix
        order = tour.order
        savings = []
        for pos, city in enumerate(order):
            prev, nxt = order[pos - 1], order[(pos + 1) % n]
            savings.append((d[prev, city] + d[city, nxt] - d[prev, nxt], city))

        savings.sort(key=lambda item: item[0], reverse=True)
        removed = [city for _, city in savings[:min(self.num_remove, n - 1)]]
        removed_set = set(removed)
        tour.order = [c for c in order if c not in removed_set]
        return PartialTour(tour, removed)


class GreedyInsertion(Repairer):
    """Reinsert removed cities one by one (random order) at their cheapest position."""

    name = 'greedy_insertion'

    def repair(self, partial: PartialTour, rng: np.random.Generator) -> Tour:
        tour = partial.tour
        d = tour.instance.distance_matrix
        for city in rng.permutation(partial.removed):
            city = int(city)
            order = tour.order
            if len(order) < 2:
                order.append(city)
                continue
            best_pos, best_cost = 0, float('inf')
            for pos in range(len(order)):
                a, b = order[pos], order[(pos + 1) % len(order)]
                cost = d[a, city] + d[city, b] - d[a, b]
                if cost < best_cost:
                    best_pos, best_cost = pos + 1, cost
            order.insert(best_pos, city)
        return tour
