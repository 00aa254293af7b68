"""
metaheur: modular single-trajectory metaheuristics.

One generic search loop composed from a candidate generator, an acceptance
criterion and a termination criterion. Variable Neighborhood Search,
Simulated Annealing, Tabu Search and Large Neighborhood Search are
compositions of these strategies.
"""

__version__ = '1.0.0'

from metaheur.core.exceptions import (
    MetaheuristicError, GeneratorExhausted, InvalidConfigurationError, UserCallbackFailure
)
from metaheur.models import (
    Solution, Candidate, Decision, Outcome, StopReason, RunStatus, SearchState,
    IterationRecord, RunResult
)
from metaheur.algorithms import (
    MoveOperator, FunctionMove, Destroyer, Repairer, SearchOrchestrator,
    TerminationBuilder, TabuMemory, GeometricSchedule, LinearSchedule, CustomSchedule,
    VariableNeighborhoodSearch, SimulatedAnnealing, TabuSearch, LargeNeighborhoodSearch,
    build_vns, build_simulated_annealing, build_tabu_search, build_lns,
    run_vns, run_simulated_annealing, run_tabu_search, run_lns
)

__all__ = [
    'MetaheuristicError', 'GeneratorExhausted', 'InvalidConfigurationError',
    'UserCallbackFailure',
    'Solution', 'Candidate', 'Decision', 'Outcome', 'StopReason', 'RunStatus',
    'SearchState', 'IterationRecord', 'RunResult',
    'MoveOperator', 'FunctionMove', 'Destroyer', 'Repairer', 'SearchOrchestrator',
    'TerminationBuilder', 'TabuMemory', 'GeometricSchedule', 'LinearSchedule',
    'CustomSchedule',
    'VariableNeighborhoodSearch', 'SimulatedAnnealing', 'TabuSearch',
    'LargeNeighborhoodSearch',
    'build_vns', 'build_simulated_annealing', 'build_tabu_search', 'build_lns',
    'run_vns', 'run_simulated_annealing', 'run_tabu_search', 'run_lns',
]
