from .plotter import Plotter, plot_convergence, convergence_data

__all__ = ['Plotter', 'plot_convergence', 'convergence_data']
