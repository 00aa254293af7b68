"""
Short-term memory for Tabu Search.

Entries map a move fingerprint to the iteration at which it stops being tabu.
What counts as "the same move" is defined by the fingerprints the problem
supplies; the memory only manages their lifetime.
"""

from collections import OrderedDict
from typing import Any, Hashable, Optional

from metaheur.core.exceptions import InvalidConfigurationError


class TabuMemory:
    """Tenure-based tabu list with optional FIFO capacity."""

    def __init__(self, tenure: int, max_size: Optional[int] = None):
        """
        Initialize tabu memory.

        Args:
            tenure: Iterations an inserted move stays tabu (>= 1)
            max_size: Optional capacity; the oldest entry is evicted first
        """
        if isinstance(tenure, bool) or not isinstance(tenure, int) or tenure < 1:
            raise InvalidConfigurationError(
                parameter='tabu_tenure',
                value=tenure,
                expected="integer >= 1"
            )
        if max_size is not None and (not isinstance(max_size, int) or max_size < 1):
            raise InvalidConfigurationError(
                parameter='tabu_max_size',
                value=max_size,
                expected="integer >= 1"
            )

        self.tenure = tenure
        self.max_size = max_size
        self.reset()

    def reset(self):
        self._entries: 'OrderedDict[Hashable, int]' = OrderedDict()
        self._iteration = 0

    @property
    def iteration(self) -> int:
        return self._iteration

    def contains(self, fingerprint: Any) -> bool:
        """True if the fingerprint is tabu at the current iteration."""
        expiry = self._entries.get(fingerprint)
        return expiry is not None and expiry > self._iteration

    __contains__ = contains

    def insert(self, fingerprint: Any, tenure: Optional[int] = None):
        """
        Make a fingerprint tabu for ``tenure`` iterations from now.

        Re-inserting a fingerprint refreshes its expiry.
        """
        tenure = self.tenure if tenure is None else tenure
        if tenure < 1:
            raise InvalidConfigurationError(parameter='tenure', value=tenure,
                                            expected="integer >= 1")

        self._entries.pop(fingerprint, None)
        self._entries[fingerprint] = self._iteration + tenure

        if self.max_size is not None:
            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)

    def expire(self, current_iteration: int) -> int:
        """
        Advance the clock and drop entries whose expiry has passed.

        Returns:
            Number of entries removed
        """
        self._iteration = current_iteration
        expired = [key for key, expiry in self._entries.items() if expiry <= current_iteration]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def remaining(self, fingerprint: Any) -> int:
        """Iterations left before a fingerprint expires (0 if not tabu)."""
        expiry = self._entries.get(fingerprint)
        if expiry is None:
            return 0
        return max(0, expiry - self._iteration)

    def __len__(self) -> int:
        return sum(1 for expiry in self._entries.values() if expiry > self._iteration)

    def __repr__(self) -> str:
        return f"TabuMemory(tenure={self.tenure}, size={len(self)}, iteration={self._iteration})"
