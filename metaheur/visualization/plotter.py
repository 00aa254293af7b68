"""
Plotting utilities for search analysis.
Creates convergence plots, run comparison charts and tour drawings.
"""

from typing import Dict, List, Optional, Union

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from metaheur.config import VIZ_CONFIG
from metaheur.models.result import RunResult
from metaheur.models.state import Decision


def convergence_data(result: RunResult) -> Dict[str, List]:
    """Per-iteration series extracted from a result's history."""
    history = result.history
    return {
        'iterations': [r.iteration for r in history],
        'best_objective': [r.best_objective for r in history],
        'incumbent_objective': [r.incumbent_objective for r in history],
        'candidate_objective': [r.candidate_objective for r in history],
        'accepted': [r.decision is Decision.ACCEPT for r in history],
    }


class Plotter:
    """Creates various plots for search analysis."""

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize plotter.

        Args:
            config: Visualization configuration
        """
        self.config = VIZ_CONFIG.copy()
        self.config.update(config or {})

        plt.style.use('default')
        sns.set_palette("husl")

        self.fig_size = self.config['figure_size']
        self.dpi = self.config['dpi']
        self.font_size = self.config['font_size']
        self.line_width = self.config['line_width']
        self.colors = self.config['colors']

    def plot_convergence(self, data: Union[RunResult, Dict],
                         title: str = "Search Convergence",
                         save_path: Optional[str] = None) -> plt.Figure:
        """
        Plot objective values and acceptance rate over iterations.

        Args:
            data: Run result with history, or convergence data dict
            title: Plot title
            save_path: Optional path to save plot

        Returns:
            Matplotlib figure
        """
        if isinstance(data, RunResult):
            data = convergence_data(data)

        iterations = np.asarray(data['iterations'])
        best = np.asarray(data['best_objective'], dtype=float)
        incumbent = np.asarray(data['incumbent_objective'], dtype=float)
        accepted = np.asarray(data.get('accepted', []), dtype=bool)

        fig, axes = plt.subplots(1, 2, figsize=(self.fig_size[0] * 1.5, self.fig_size[1]))

        # Objective plot
        axes[0].plot(iterations, incumbent, color=self.colors[1], linewidth=1,
                     alpha=0.7, label='Incumbent')
        axes[0].plot(iterations, best, color=self.colors[0], linewidth=self.line_width,
                     label='Best')
        if accepted.size == iterations.size and accepted.any():
            axes[0].scatter(iterations[accepted], incumbent[accepted], s=8,
                            color=self.colors[2], label='Accepted', zorder=3)
        axes[0].set_xlabel('Iteration', fontsize=self.font_size)
        axes[0].set_ylabel('Objective', fontsize=self.font_size)
        axes[0].set_title('Objective Evolution', fontsize=self.font_size)
        axes[0].grid(True, alpha=0.3)
        axes[0].legend()

        # Acceptance rate plot
        if accepted.size == iterations.size and iterations.size:
            rate = np.cumsum(accepted) / np.arange(1, accepted.size + 1)
            axes[1].plot(iterations, rate * 100, color=self.colors[3],
                         linewidth=self.line_width, label='Cumulative acceptance')
            axes[1].set_ylim(0, 105)
            axes[1].legend()
        axes[1].set_xlabel('Iteration', fontsize=self.font_size)
        axes[1].set_ylabel('Acceptance rate (%)', fontsize=self.font_size)
        axes[1].set_title('Acceptance Rate', fontsize=self.font_size)
        axes[1].grid(True, alpha=0.3)

        fig.suptitle(title, fontsize=self.font_size + 2, fontweight='bold')
        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=self.dpi, bbox_inches='tight')

        return fig

    def plot_comparison(self, results: List[RunResult],
                        title: str = "Algorithm Comparison",
                        save_path: Optional[str] = None) -> plt.Figure:
        """Bar chart of the best objective reached by each run."""
        labels = [f"{r.algorithm}#{i + 1}" for i, r in enumerate(results)]
        values = [r.best_objective for r in results]

        fig, ax = plt.subplots(figsize=self.fig_size)
        sns.barplot(x=labels, y=values, ax=ax)
        for i, value in enumerate(values):
            ax.text(i, value, f"{value:.4g}", ha='center', va='bottom',
                    fontsize=self.font_size - 2)
        ax.set_ylabel('Best objective', fontsize=self.font_size)
        ax.set_title(title, fontsize=self.font_size + 2, fontweight='bold')
        ax.grid(True, axis='y', alpha=0.3)
        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=self.dpi, bbox_inches='tight')

        return fig

    def plot_tour(self, tour, title: Optional[str] = None,
                  save_path: Optional[str] = None) -> plt.Figure:
        """Draw a closed TSP tour (any object exposing ``sequence()`` of cities)."""
        cities = list(tour.sequence())
        xs = [c.x for c in cities] + [cities[0].x] if cities else []
        ys = [c.y for c in cities] + [cities[0].y] if cities else []

        fig, ax = plt.subplots(figsize=(self.fig_size[1], self.fig_size[1]))
        ax.plot(xs, ys, '-o', color=self.colors[0], linewidth=self.line_width, markersize=5)
        for city in cities:
            ax.annotate(str(city.id), (city.x, city.y), textcoords='offset points',
                        xytext=(3, 3), fontsize=self.font_size - 4)
        ax.set_title(title or f"Tour length {tour.objective():.2f}", fontsize=self.font_size)
        ax.set_aspect('equal', adjustable='datalim')
        ax.grid(True, alpha=0.3)
        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=self.dpi, bbox_inches='tight')

        return fig


def plot_convergence(data: Union[RunResult, Dict], title: str = "Search Convergence",
                     save_path: Optional[str] = None) -> plt.Figure:
    """
    Convenience function to plot convergence.

    Args:
        data: Run result with history, or convergence data dict
        title: Plot title
        save_path: Optional path to save plot

    Returns:
        Matplotlib figure
    """
    plotter = Plotter()
    return plotter.plot_convergence(data, title, save_path)
