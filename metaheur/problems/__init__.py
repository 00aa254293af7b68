"""
Example problems used by the CLI and the tests.
"""

from .quadratic import IntegerQuadratic, StepMove
from .linesearch import Number, ReachNeighborhood, NeighborSwap, LineSearch
from .tsp import (
    City, TSPInstance, Tour, PartialTour, SwapMove, TwoOptMove,
    RandomRemoval, WorstRemoval, GreedyInsertion
)

__all__ = [
    'IntegerQuadratic', 'StepMove',
    'Number', 'ReachNeighborhood', 'NeighborSwap', 'LineSearch',
    'City', 'TSPInstance', 'Tour', 'PartialTour', 'SwapMove', 'TwoOptMove',
    'RandomRemoval', 'WorstRemoval', 'GreedyInsertion',
]
