from .solution import Solution, Candidate, unpack_neighbor
from .state import (
    Decision, Outcome, StopReason, RunStatus, SearchState, IterationRecord
)
from .result import RunResult

__all__ = [
    'Solution', 'Candidate', 'unpack_neighbor',
    'Decision', 'Outcome', 'StopReason', 'RunStatus', 'SearchState', 'IterationRecord',
    'RunResult',
]
