"""
Tabu Search.

Composition: SingleNeighborhoodGenerator + TabuAcceptance owning a
TabuMemory. Moves are identified by the fingerprint the operator returns
alongside the neighbor, or by the neighbor itself when none is given.
"""

import time
from typing import Any, Dict, Optional

from metaheur.algorithms.acceptance import TabuAcceptance
from metaheur.algorithms.base import OperatorSelector, TerminationCriterion
from metaheur.algorithms.generators import SingleNeighborhoodGenerator
from metaheur.algorithms.orchestrator import SearchOrchestrator
from metaheur.algorithms.selectors import create_selector
from metaheur.config import TABU_CONFIG
from metaheur.core.validators import ConfigValidator
from metaheur.models.result import RunResult
from metaheur.utils.parameters import merge_config
from metaheur.utils.seeding import spawn_seeds


class TabuSearch(SearchOrchestrator):
    """Tabu Search with tenure-based memory and aspiration by global best."""

    def __init__(self, operators, config: Optional[Dict] = None,
                 termination: Optional[TerminationCriterion] = None,
                 selector: Optional[OperatorSelector] = None,
                 preset: Optional[str] = None,
                 clock=time.perf_counter):
        config = merge_config(TABU_CONFIG, config, preset)
        ConfigValidator.validate_tabu_config(config)

        operators = list(operators) if isinstance(operators, (list, tuple)) else [operators]
        generator_seed, selector_seed = spawn_seeds(config.get('seed'), 2)

        if selector is None:
            selector = create_selector(config['selector'], len(operators), seed=selector_seed,
                                       decay=config['adaptive_decay'])
        generator = SingleNeighborhoodGenerator(operators, selector=selector,
                                                strategy=config['strategy'],
                                                seed=generator_seed)
        acceptance = TabuAcceptance.with_tenure(config['tabu_tenure'],
                                                max_size=config.get('tabu_max_size'),
                                                aspiration=config.get('aspiration', True))
        super().__init__(generator, acceptance, termination, config,
                         name='tabu_search', clock=clock)

    @property
    def memory(self):
        return self.acceptance.memory


def build_tabu_search(operators, config: Optional[Dict] = None,
                      termination: Optional[TerminationCriterion] = None,
                      preset: Optional[str] = None) -> TabuSearch:
    return TabuSearch(operators, config=config, termination=termination, preset=preset)


def run_tabu_search(initial: Any, operators, config: Optional[Dict] = None,
                    termination: Optional[TerminationCriterion] = None,
                    preset: Optional[str] = None) -> RunResult:
    """Build a Tabu Search and run it from ``initial``."""
    return build_tabu_search(operators, config, termination, preset).run(initial)
