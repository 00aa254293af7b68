"""
Result of a search run.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from metaheur.models.state import IterationRecord, StopReason


@dataclass
class RunResult:
    """Best solution found plus run statistics."""
    best: Any
    best_objective: float
    stop_reason: Optional[StopReason]
    iterations: int
    elapsed: float = 0.0
    initial_objective: Optional[float] = None
    accepted: int = 0
    improvements: int = 0
    algorithm: str = 'custom'
    history: List[IterationRecord] = field(default_factory=list)
    profile: List[Dict] = field(default_factory=list)

    @property
    def improvement(self) -> float:
        """Absolute objective improvement over the initial solution."""
        if self.initial_objective is None:
            return 0.0
        return self.initial_objective - self.best_objective

    @property
    def acceptance_rate(self) -> float:
        return self.accepted / self.iterations if self.iterations else 0.0

    def decisions(self) -> List[str]:
        """Sequence of accept/reject decisions (requires recorded history)."""
        return [record.decision.value for record in self.history]

    def to_dict(self) -> Dict:
        """Convert result to a JSON-friendly dictionary (solution as repr)."""
        return {
            'algorithm': self.algorithm,
            'best': repr(self.best),
            'best_objective': float(self.best_objective),
            'initial_objective': (float(self.initial_objective)
                                  if self.initial_objective is not None else None),
            'improvement': float(self.improvement),
            'stop_reason': self.stop_reason.value if self.stop_reason else None,
            'iterations': int(self.iterations),
            'elapsed': float(self.elapsed),
            'accepted': int(self.accepted),
            'improvements': int(self.improvements),
            'acceptance_rate': float(self.acceptance_rate),
        }

    def __repr__(self) -> str:
        reason = self.stop_reason.value if self.stop_reason else None
        return (
            f"RunResult(algorithm={self.algorithm}, "
            f"best_objective={self.best_objective}, "
            f"stop_reason={reason}, iterations={self.iterations})"
        )
