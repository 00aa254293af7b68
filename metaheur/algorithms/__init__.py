"""
Search strategies and the generic search loop.

This package contains:
- Strategy interfaces (generators, acceptance, termination, selectors)
- Tabu memory and temperature schedules
- The search orchestrator
- VNS, Simulated Annealing, Tabu Search and LNS compositions
"""

from .base import (
    MoveOperator, FunctionMove, Destroyer, Repairer, FunctionDestroyer, FunctionRepairer,
    OperatorSelector, CandidateGenerator, AcceptanceCriterion, TerminationCriterion, is_better
)
from .temperature import (
    TemperatureSchedule, GeometricSchedule, LinearSchedule, CustomSchedule, create_schedule
)
from .tabu_memory import TabuMemory
from .acceptance import (
    ImprovingAcceptance, AnnealingAcceptance, TabuAcceptance, ThresholdAcceptance
)
from .termination import (
    MaxIterations, MaxTime, Stagnation, NeighborhoodExhausted, UserRequested,
    AnyCriterion, AllCriterion, TerminationBuilder
)
from .selectors import SequentialSelector, RandomSelector, AdaptiveSelector, create_selector
from .generators import (
    SingleNeighborhoodGenerator, MultiNeighborhoodGenerator, DestroyRepairGenerator
)
from .orchestrator import SearchOrchestrator
from .vns import VariableNeighborhoodSearch, build_vns, run_vns
from .simulated_annealing import (
    SimulatedAnnealing, build_simulated_annealing, run_simulated_annealing
)
from .tabu_search import TabuSearch, build_tabu_search, run_tabu_search
from .lns import LargeNeighborhoodSearch, build_lns, run_lns

__all__ = [
    'MoveOperator', 'FunctionMove', 'Destroyer', 'Repairer', 'FunctionDestroyer',
    'FunctionRepairer', 'OperatorSelector', 'CandidateGenerator', 'AcceptanceCriterion',
    'TerminationCriterion', 'is_better',
    'TemperatureSchedule', 'GeometricSchedule', 'LinearSchedule', 'CustomSchedule',
    'create_schedule', 'TabuMemory',
    'ImprovingAcceptance', 'AnnealingAcceptance', 'TabuAcceptance', 'ThresholdAcceptance',
    'MaxIterations', 'MaxTime', 'Stagnation', 'NeighborhoodExhausted', 'UserRequested',
    'AnyCriterion', 'AllCriterion', 'TerminationBuilder',
    'SequentialSelector', 'RandomSelector', 'AdaptiveSelector', 'create_selector',
    'SingleNeighborhoodGenerator', 'MultiNeighborhoodGenerator', 'DestroyRepairGenerator',
    'SearchOrchestrator',
    'VariableNeighborhoodSearch', 'build_vns', 'run_vns',
    'SimulatedAnnealing', 'build_simulated_annealing', 'run_simulated_annealing',
    'TabuSearch', 'build_tabu_search', 'run_tabu_search',
    'LargeNeighborhoodSearch', 'build_lns', 'run_lns',
]
