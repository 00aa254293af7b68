"""
Candidate generators.

- SingleNeighborhoodGenerator: one move operator (or one picked by a selector
  among several) applied to the incumbent; used by SA and Tabu Search.
- MultiNeighborhoodGenerator: the operator of the current neighborhood index;
  used by VNS. The orchestrator owns and advances the index.
- DestroyRepairGenerator: destroy then repair; used by LNS.

A neighborhood is searched with one of three strategies:
  random - draw one neighbor with ``apply`` (a "shake")
  best   - scan ``neighbors`` and return the best one
  first  - scan ``neighbors`` and return the first improving one
"""

import logging
from typing import Any, List, Optional, Sequence, Union

import numpy as np

from metaheur.algorithms.base import (
    CandidateGenerator, Destroyer, FunctionDestroyer, FunctionMove, FunctionRepairer,
    MoveOperator, OperatorSelector, Repairer, is_better
)
from metaheur.algorithms.selectors import RandomSelector, SequentialSelector
from metaheur.core.exceptions import GeneratorExhausted, InvalidConfigurationError
from metaheur.models.solution import Candidate, unpack_neighbor
from metaheur.models.state import Outcome, SearchState
from metaheur.utils.seeding import spawn_seeds

logger = logging.getLogger(__name__)

STRATEGIES = ('random', 'best', 'first')


def _check_strategy(strategy: str):
    if strategy not in STRATEGIES:
        raise InvalidConfigurationError(parameter='strategy', value=strategy,
                                        expected=f"one of {list(STRATEGIES)}")


def _as_list(items) -> list:
    if items is None:
        return []
    if isinstance(items, (list, tuple)):
        return list(items)
    return [items]


def _as_operators(items, strategy: str) -> List[MoveOperator]:
    """Wrap plain callables: a shake for random search, an enumerator otherwise."""
    operators = []
    for item in _as_list(items):
        if isinstance(item, MoveOperator):
            operators.append(item)
        elif strategy == 'random':
            operators.append(FunctionMove(apply=item))
        else:
            operators.append(FunctionMove(neighbors=item))
    return operators


def search_neighborhood(operator: MoveOperator, incumbent: Any, incumbent_objective: float,
                        strategy: str, rng: np.random.Generator,
                        neighborhood: Optional[int] = None,
                        operator_index: Optional[int] = None) -> Candidate:
    """
    Produce one candidate from ``operator`` using ``strategy``.

    Raises:
        GeneratorExhausted: If the operator yields no neighbor
    """
    if strategy == 'random':
        produced = operator.apply(incumbent.duplicate(), rng)
        if produced is None:
            raise GeneratorExhausted(neighborhood=neighborhood,
                                     reason=f"{operator.name} produced no neighbor")
        solution, move = unpack_neighbor(produced)
        return Candidate(solution, solution.objective(), move, operator_index)

    best: Optional[Candidate] = None
    for item in operator.neighbors(incumbent):
        solution, move = unpack_neighbor(item)
        objective = solution.objective()
        if best is None or is_better(objective, best.objective):
            best = Candidate(solution, objective, move, operator_index)
            if strategy == 'first' and is_better(objective, incumbent_objective):
                break

    if best is None:
        raise GeneratorExhausted(neighborhood=neighborhood,
                                 reason=f"{operator.name} neighborhood is empty")
    return best


class SingleNeighborhoodGenerator(CandidateGenerator):
    """Applies one move operator per iteration to the incumbent."""

    def __init__(self, operators: Union[MoveOperator, Sequence[MoveOperator]],
                 selector: Optional[OperatorSelector] = None,
                 strategy: str = 'random',
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        """
        Initialize generator.

        Args:
            operators: One move operator or several
            selector: Chooses among several operators (uniform random by default)
            strategy: random, best or first
            rng: Random source passed to the move operators
            seed: Seed used when no rng is given
        """
        _check_strategy(strategy)
        self.operators = _as_operators(operators, strategy)
        if not self.operators:
            raise InvalidConfigurationError(parameter='operators', value=0,
                                            expected=">= 1 move operator")
        self.strategy = strategy
        own_seed, selector_seed = spawn_seeds(seed, 2)
        self._seed = own_seed
        self.rng = rng if rng is not None else np.random.default_rng(own_seed)
        if selector is None:
            selector = (SequentialSelector(1) if len(self.operators) == 1
                        else RandomSelector(len(self.operators), seed=selector_seed))
        if len(selector) != len(self.operators):
            raise InvalidConfigurationError(parameter='selector', value=len(selector),
                                            expected=f"{len(self.operators)} operators")
        self.selector = selector

    def reset(self):
        self.selector.reset()
        if self._seed is not None:
            self.rng = np.random.default_rng(self._seed)

    def generate(self, incumbent: Any, state: SearchState) -> Candidate:
        index = self.selector.select(state)
        return search_neighborhood(self.operators[index], incumbent, state.incumbent_objective,
                                   self.strategy, self.rng, operator_index=index)

    def feedback(self, outcome: Outcome):
        self.selector.feedback(outcome)


class MultiNeighborhoodGenerator(CandidateGenerator):
    """Uses the operator of neighborhood ``state.neighborhood_index`` (1-based)."""

    def __init__(self, operators: Sequence[MoveOperator], strategy: str = 'best',
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        _check_strategy(strategy)
        self.operators = _as_operators(operators, strategy)
        if not self.operators:
            raise InvalidConfigurationError(parameter='neighborhood_count', value=0,
                                            expected=">= 1")
        self.strategy = strategy
        self.neighborhood_count = len(self.operators)
        self._seed = seed
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def reset(self):
        if self._seed is not None:
            self.rng = np.random.default_rng(self._seed)

    def generate(self, incumbent: Any, state: SearchState) -> Candidate:
        k = state.neighborhood_index
        return search_neighborhood(self.operators[k - 1], incumbent, state.incumbent_objective,
                                   self.strategy, self.rng, neighborhood=k, operator_index=k - 1)


class DestroyRepairGenerator(CandidateGenerator):
    """
    LNS candidate construction: destroy part of a duplicate of the incumbent,
    then repair it into a complete candidate.
    """

    def __init__(self, destroyers, repairers,
                 destroy_selector: Optional[OperatorSelector] = None,
                 repair_selector: Optional[OperatorSelector] = None,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        """
        Initialize generator.

        Args:
            destroyers: Destroyer objects or callables (solution, rng) -> partial
            repairers: Repairer objects or callables (partial, rng) -> solution
            destroy_selector: Chooses the destroyer (uniform random by default)
            repair_selector: Chooses the repairer (uniform random by default)
            rng: Random source handed to destroy and repair
            seed: Seed used when no rng is given
        """
        self.destroyers: List[Destroyer] = [
            d if isinstance(d, Destroyer) else FunctionDestroyer(d) for d in _as_list(destroyers)
        ]
        self.repairers: List[Repairer] = [
            r if isinstance(r, Repairer) else FunctionRepairer(r) for r in _as_list(repairers)
        ]
        if not self.destroyers or not self.repairers:
            raise InvalidConfigurationError(
                parameter='destroyers/repairers',
                value=(len(self.destroyers), len(self.repairers)),
                expected="at least one of each"
            )

        own_seed, destroy_seed, repair_seed = spawn_seeds(seed, 3)
        self._seed = own_seed
        self.rng = rng if rng is not None else np.random.default_rng(own_seed)
        self.destroy_selector = destroy_selector or RandomSelector(len(self.destroyers),
                                                                   seed=destroy_seed)
        self.repair_selector = repair_selector or RandomSelector(len(self.repairers),
                                                                 seed=repair_seed)
        self.usage = {'destroy': [0] * len(self.destroyers), 'repair': [0] * len(self.repairers)}

    def reset(self):
        if self._seed is not None:
            self.rng = np.random.default_rng(self._seed)
        self.destroy_selector.reset()
        self.repair_selector.reset()
        self.usage = {'destroy': [0] * len(self.destroyers), 'repair': [0] * len(self.repairers)}

    def generate(self, incumbent: Any, state: SearchState) -> Candidate:
        d = self.destroy_selector.select(state)
        r = self.repair_selector.select(state)
        self.usage['destroy'][d] += 1
        self.usage['repair'][r] += 1

        destroyer = self.destroyers[d]
        partial = destroyer.destroy(incumbent.duplicate(), self.rng)
        if partial is None:
            raise GeneratorExhausted(reason=f"{destroyer.name} removed nothing")

        solution, move = unpack_neighbor(self.repairers[r].repair(partial, self.rng))
        if move is None:
            move = (destroyer.name, self.repairers[r].name)
        return Candidate(solution, solution.objective(), move, d)

    def feedback(self, outcome: Outcome):
        self.destroy_selector.feedback(outcome)
        self.repair_selector.feedback(outcome)
