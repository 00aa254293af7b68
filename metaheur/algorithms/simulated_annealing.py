"""
Simulated Annealing.

Composition: SingleNeighborhoodGenerator (one random neighbor per iteration)
+ AnnealingAcceptance owning a temperature schedule.
"""

import time
from typing import Any, Dict, Optional, Sequence, Union

from metaheur.algorithms.acceptance import AnnealingAcceptance
from metaheur.algorithms.base import MoveOperator, OperatorSelector, TerminationCriterion
from metaheur.algorithms.generators import SingleNeighborhoodGenerator
from metaheur.algorithms.orchestrator import SearchOrchestrator
from metaheur.algorithms.selectors import create_selector
from metaheur.algorithms.temperature import TemperatureSchedule, create_schedule
from metaheur.config import SA_CONFIG
from metaheur.core.validators import ConfigValidator
from metaheur.models.result import RunResult
from metaheur.utils.parameters import merge_config
from metaheur.utils.seeding import spawn_seeds


class SimulatedAnnealing(SearchOrchestrator):
    """SA over one or several move operators."""

    def __init__(self,
                 operators: Union[MoveOperator, Sequence[MoveOperator]],
                 config: Optional[Dict] = None,
                 termination: Optional[TerminationCriterion] = None,
                 schedule: Optional[TemperatureSchedule] = None,
                 selector: Optional[OperatorSelector] = None,
                 preset: Optional[str] = None,
                 clock=time.perf_counter):
        """
        Initialize Simulated Annealing.

        Args:
            operators: Move operator(s); several are chosen by the selector
            config: Overrides for SA_CONFIG / SEARCH_CONFIG
            termination: Custom termination (replaces the configured limits)
            schedule: Custom temperature schedule (default built from config)
            selector: Custom operator selector (default built from config)
            preset: Name of a search preset
            clock: Time source (seconds)

        Raises:
            InvalidConfigurationError: On invalid temperatures or cooling rate
        """
        config = merge_config(SA_CONFIG, config, preset)
        ConfigValidator.validate_sa_config(config)

        operators = list(operators) if isinstance(operators, (list, tuple)) else [operators]
        generator_seed, selector_seed, acceptance_seed = spawn_seeds(config.get('seed'), 3)

        if selector is None:
            selector = create_selector(config['selector'], len(operators), seed=selector_seed,
                                       decay=config['adaptive_decay'])
        generator = SingleNeighborhoodGenerator(operators, selector=selector,
                                                strategy=config['strategy'],
                                                seed=generator_seed)
        acceptance = AnnealingAcceptance(schedule or create_schedule(config),
                                         seed=acceptance_seed)
        super().__init__(generator, acceptance, termination, config,
                         name='simulated_annealing', clock=clock)

    @property
    def temperature(self) -> float:
        return self.acceptance.schedule.current()


def build_simulated_annealing(operators, config: Optional[Dict] = None,
                              termination: Optional[TerminationCriterion] = None,
                              schedule: Optional[TemperatureSchedule] = None,
                              preset: Optional[str] = None) -> SimulatedAnnealing:
    return SimulatedAnnealing(operators, config=config, termination=termination,
                              schedule=schedule, preset=preset)


def run_simulated_annealing(initial: Any, operators, config: Optional[Dict] = None,
                            termination: Optional[TerminationCriterion] = None,
                            schedule: Optional[TemperatureSchedule] = None,
                            preset: Optional[str] = None) -> RunResult:
    """Build a Simulated Annealing search and run it from ``initial``."""
    return build_simulated_annealing(operators, config, termination, schedule, preset).run(initial)
