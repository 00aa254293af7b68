"""
Large Neighborhood Search.

Composition: DestroyRepairGenerator + a configurable acceptance criterion:
  improving - accept only strictly better candidates
  threshold - accept candidates within a (relative or absolute) threshold
  annealing - Metropolis acceptance with its own temperature schedule

The incumbent may drift to worse solutions under threshold and annealing
acceptance; the best solution is tracked separately and never regresses.
"""

import logging
import time
from typing import Any, Dict, Optional

from metaheur.algorithms.acceptance import (
    AnnealingAcceptance, ImprovingAcceptance, ThresholdAcceptance
)
from metaheur.algorithms.base import AcceptanceCriterion, TerminationCriterion
from metaheur.algorithms.generators import DestroyRepairGenerator
from metaheur.algorithms.orchestrator import SearchOrchestrator
from metaheur.algorithms.selectors import create_selector
from metaheur.algorithms.temperature import create_schedule
from metaheur.config import LNS_CONFIG
from metaheur.core.validators import ConfigValidator
from metaheur.models.result import RunResult
from metaheur.utils.parameters import merge_config
from metaheur.utils.seeding import spawn_seeds

logger = logging.getLogger(__name__)


def _create_acceptance(config: Dict, seed: Optional[int]) -> AcceptanceCriterion:
    kind = config['acceptance']
    if kind == 'threshold':
        return ThresholdAcceptance(config['threshold'], mode=config['threshold_mode'])
    if kind == 'annealing':
        return AnnealingAcceptance(create_schedule(config), seed=seed)
    return ImprovingAcceptance()


class LargeNeighborhoodSearch(SearchOrchestrator):
    """
    Destroy-and-repair search.

    Key concept:
    1. DESTROY: remove part of a copy of the incumbent
    2. REPAIR: rebuild it into a complete solution
    3. ACCEPT: by the configured acceptance criterion
    4. REPEAT until a termination criterion fires
    """

    def __init__(self, destroyers, repairers, config: Optional[Dict] = None,
                 termination: Optional[TerminationCriterion] = None,
                 acceptance: Optional[AcceptanceCriterion] = None,
                 preset: Optional[str] = None,
                 clock=time.perf_counter):
        """
        Initialize LNS.

        Args:
            destroyers: Destroyer objects or callables (solution, rng) -> partial
            repairers: Repairer objects or callables (partial, rng) -> solution
            config: Overrides for LNS_CONFIG / SEARCH_CONFIG
            termination: Custom termination (replaces the configured limits)
            acceptance: Custom acceptance (replaces config['acceptance'])
            preset: Name of a search preset
            clock: Time source (seconds)
        """
        config = merge_config(LNS_CONFIG, config, preset)
        ConfigValidator.validate_lns_config(config)

        destroyers = list(destroyers) if isinstance(destroyers, (list, tuple)) else [destroyers]
        repairers = list(repairers) if isinstance(repairers, (list, tuple)) else [repairers]
        generator_seed, destroy_seed, repair_seed, acceptance_seed = spawn_seeds(config.get('seed'), 4)

        generator = DestroyRepairGenerator(
            destroyers, repairers,
            destroy_selector=create_selector(config['destroy_selector'], len(destroyers),
                                             seed=destroy_seed, decay=config['adaptive_decay']),
            repair_selector=create_selector(config['repair_selector'], len(repairers),
                                            seed=repair_seed, decay=config['adaptive_decay']),
            seed=generator_seed,
        )
        if acceptance is None:
            acceptance = _create_acceptance(config, acceptance_seed)
        logger.debug(f"LNS: {len(destroyers)} destroy / {len(repairers)} repair operators, "
                     f"{acceptance.name} acceptance")

        super().__init__(generator, acceptance, termination, config, name='lns', clock=clock)

    def operator_usage(self) -> Dict[str, list]:
        """How often each destroy and repair operator was used in the last run."""
        return {key: list(counts) for key, counts in self.generator.usage.items()}


def build_lns(destroyers, repairers, config: Optional[Dict] = None,
              termination: Optional[TerminationCriterion] = None,
              preset: Optional[str] = None) -> LargeNeighborhoodSearch:
    return LargeNeighborhoodSearch(destroyers, repairers, config=config,
                                   termination=termination, preset=preset)


def run_lns(initial: Any, destroyers, repairers, config: Optional[Dict] = None,
            termination: Optional[TerminationCriterion] = None,
            preset: Optional[str] = None) -> RunResult:
    """Build an LNS and run it from ``initial``."""
    return build_lns(destroyers, repairers, config, termination, preset).run(initial)
