"""
Lightweight per-stage timing for search runs.
"""

from __future__ import annotations

import time
from collections import defaultdict
from typing import Dict, List


class SearchProfiler:
    """Collects timing information for the named stages of one run."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.reset()

    def reset(self):
        self._durations: Dict[str, List[float]] = defaultdict(list)

    def profile(self, stage: str):
        """Context manager measuring a code block."""
        return _ProfileBlock(self, stage)

    def record(self, stage: str, duration: float):
        if self.enabled:
            self._durations[stage].append(duration)

    def get_summary(self) -> List[Dict]:
        """Return aggregated stats per stage sorted by total time desc."""
        summary = []
        for stage, durations in self._durations.items():
            total = sum(durations)
            count = len(durations)
            summary.append({
                "stage": stage,
                "count": count,
                "total_seconds": total,
                "avg_seconds": total / count if count else 0.0,
                "max_seconds": max(durations) if durations else 0.0,
            })
        summary.sort(key=lambda item: item["total_seconds"], reverse=True)
        return summary

    def format_summary(self) -> str:
        lines = ["=== Search Profiling Summary ==="]
        for item in self.get_summary():
            lines.append(
                f"{item['stage']:<12s} count={item['count']:>6} "
                f"total={item['total_seconds']:.4f}s "
                f"avg={item['avg_seconds']:.6f}s "
                f"max={item['max_seconds']:.6f}s"
            )
        return "\n".join(lines)


class _ProfileBlock:
    def __init__(self, profiler: SearchProfiler, stage: str):
        self.profiler = profiler
        self.stage = stage
        self._start = None

    def __enter__(self):
        if self.profiler.enabled:
            self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._start is not None:
            self.profiler.record(self.stage, time.perf_counter() - self._start)
        return False
