"""
Result export module for the search framework.
Exports run histories and summaries for analysis.
"""

import json
import logging
import os
from datetime import datetime
from typing import Dict, List, Optional

import pandas as pd

from metaheur.models.result import RunResult

logger = logging.getLogger(__name__)

HISTORY_COLUMNS = [
    'iteration', 'decision', 'candidate_objective', 'incumbent_objective',
    'best_objective', 'neighborhood_index', 'improved_best', 'elapsed',
]


def history_frame(result: RunResult) -> pd.DataFrame:
    """Iteration history of ``result`` as a DataFrame (one row per iteration)."""
    rows = [record.to_dict() for record in result.history]
    return pd.DataFrame(rows, columns=HISTORY_COLUMNS)


class ResultExporter:
    """Exports search results in various formats."""

    def __init__(self, output_dir: str = "results"):
        """
        Initialize result exporter.

        Args:
            output_dir: Output directory for results (created on first export)
        """
        self.output_dir = output_dir
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    def _path(self, filename: str) -> str:
        os.makedirs(self.output_dir, exist_ok=True)
        return os.path.join(self.output_dir, filename)

    def export_history(self, result: RunResult, filename: Optional[str] = None) -> str:
        """
        Export the iteration history to CSV.

        Args:
            result: Run result with recorded history
            filename: Output filename (auto-generated if None)

        Returns:
            Path to exported file
        """
        if filename is None:
            filename = f"history_{result.algorithm}_{self.timestamp}.csv"
        filepath = self._path(filename)

        history_frame(result).to_csv(filepath, index=False)

        logger.info(f"History ({len(result.history)} iterations) exported to: {filepath}")
        return filepath

    def export_summary(self, result: RunResult, filename: Optional[str] = None,
                       config: Optional[Dict] = None) -> str:
        """
        Export the run summary to JSON.

        Args:
            result: Run result
            filename: Output filename (auto-generated if None)
            config: Optional run configuration stored alongside the summary

        Returns:
            Path to exported file
        """
        if filename is None:
            filename = f"summary_{result.algorithm}_{self.timestamp}.json"
        filepath = self._path(filename)

        summary = result.to_dict()
        summary['exported_at'] = datetime.now().isoformat()
        if result.profile:
            summary['profile'] = result.profile
        if config is not None:
            summary['config'] = {k: v for k, v in config.items()
                                 if isinstance(v, (int, float, str, bool, type(None)))}

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(summary, f, indent=2)

        logger.info(f"Summary exported to: {filepath}")
        return filepath

    def export_comparison(self, results: List[RunResult],
                          filename: Optional[str] = None) -> str:
        """
        Export a side-by-side comparison of several runs to CSV.

        Args:
            results: Run results to compare
            filename: Output filename (auto-generated if None)

        Returns:
            Path to exported file
        """
        if filename is None:
            filename = f"comparison_{self.timestamp}.csv"
        filepath = self._path(filename)

        df = pd.DataFrame([r.to_dict() for r in results])
        if not df.empty:
            df = df.sort_values('best_objective', kind='stable')
        df.to_csv(filepath, index=False)

        logger.info(f"Comparison of {len(results)} runs exported to: {filepath}")
        return filepath


def export_all_results(result: RunResult, output_dir: str = "results",
                       config: Optional[Dict] = None) -> Dict[str, str]:
    """
    Export history (when recorded) and summary of one run.

    Returns:
        Mapping of export kind to file path
    """
    exporter = ResultExporter(output_dir)
    paths = {'summary': exporter.export_summary(result, config=config)}
    if result.history:
        paths['history'] = exporter.export_history(result)
    return paths
