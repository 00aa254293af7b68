"""
Variable Neighborhood Search.

Composition: MultiNeighborhoodGenerator + ImprovingAcceptance. The search
moves to the next neighborhood whenever the current one fails to improve the
incumbent, returns to the first one after every improvement, and stops once
all k_max neighborhoods fail on the same incumbent.
"""

import time
from typing import Any, Dict, Optional, Sequence

from metaheur.algorithms.acceptance import ImprovingAcceptance
from metaheur.algorithms.base import MoveOperator, TerminationCriterion
from metaheur.algorithms.generators import MultiNeighborhoodGenerator
from metaheur.algorithms.orchestrator import SearchOrchestrator
from metaheur.config import VNS_CONFIG
from metaheur.core.validators import ConfigValidator
from metaheur.models.result import RunResult
from metaheur.utils.parameters import merge_config
from metaheur.utils.seeding import spawn_seeds


class VariableNeighborhoodSearch(SearchOrchestrator):
    """VNS over an ordered list of neighborhood operators."""

    def __init__(self,
                 operators: Sequence[MoveOperator],
                 config: Optional[Dict] = None,
                 termination: Optional[TerminationCriterion] = None,
                 preset: Optional[str] = None,
                 clock=time.perf_counter):
        """
        Initialize VNS.

        Args:
            operators: Neighborhood operators N_1..N_kmax, in order
            config: Overrides for VNS_CONFIG / SEARCH_CONFIG
            termination: Custom termination (replaces the configured limits)
            preset: Name of a search preset
            clock: Time source (seconds)

        Raises:
            InvalidConfigurationError: If k_max is zero or does not match the
                number of operators
        """
        config = merge_config(VNS_CONFIG, config, preset)
        operators = list(operators) if isinstance(operators, (list, tuple)) else [operators]
        ConfigValidator.validate_vns_config(config, len(operators))

        generator_seed, = spawn_seeds(config.get('seed'), 1)
        generator = MultiNeighborhoodGenerator(operators, strategy=config['strategy'],
                                               seed=generator_seed)
        super().__init__(generator, ImprovingAcceptance(), termination, config,
                         name='vns', clock=clock)


def build_vns(operators: Sequence[MoveOperator], config: Optional[Dict] = None,
              termination: Optional[TerminationCriterion] = None,
              preset: Optional[str] = None) -> VariableNeighborhoodSearch:
    return VariableNeighborhoodSearch(operators, config=config, termination=termination,
                                      preset=preset)


def run_vns(initial: Any, operators: Sequence[MoveOperator], config: Optional[Dict] = None,
            termination: Optional[TerminationCriterion] = None,
            preset: Optional[str] = None) -> RunResult:
    """Build a VNS and run it from ``initial``."""
    return build_vns(operators, config, termination, preset).run(initial)
