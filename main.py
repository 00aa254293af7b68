"""
Main application entry point for the metaheuristic search framework.
Runs VNS, Simulated Annealing, Tabu Search or LNS on the example problems.
"""

import argparse
import logging
import os
import sys
from typing import Dict, List

from metaheur.algorithms import (
    VariableNeighborhoodSearch, SimulatedAnnealing, TabuSearch, LargeNeighborhoodSearch
)
from metaheur.config import PATHS, SEARCH_PRESETS
from metaheur.core.exceptions import (
    InvalidConfigurationError, MetaheuristicError, UserCallbackFailure
)
from metaheur.core.logger import get_logger, setup_logger
from metaheur.problems import (
    IntegerQuadratic, StepMove, LineSearch, NeighborSwap, TSPInstance, SwapMove,
    TwoOptMove, RandomRemoval, WorstRemoval, GreedyInsertion
)

DEFAULT_NUMBERS = [9.0, 8.0, 7.0, 8.0, 9.0, 7.0, 5.0, 0.0]
QUADRATIC_BOUNDS = (-10, 10)


def main():
    """Main application entry point."""
    parser = create_argument_parser()
    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.INFO
    logger = setup_logger('metaheur', log_file=args.log_file, level=level,
                          log_dir=PATHS['logs'])
    logger.info("=" * 60)
    logger.info("Metaheuristic Search Starting")
    logger.info("=" * 60)

    if args.algorithm == 'lns' and args.problem != 'tsp':
        parser.error("--algorithm lns needs destroy/repair operators: use --problem tsp")
    if args.problem == 'quadratic' and not QUADRATIC_BOUNDS[0] <= args.start <= QUADRATIC_BOUNDS[1]:
        parser.error(f"--start must lie in [{QUADRATIC_BOUNDS[0]}, {QUADRATIC_BOUNDS[1]}] "
                     f"for --problem quadratic")

    try:
        run(args)
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        print("\nOperation cancelled by user.")
        sys.exit(1)
    except UserCallbackFailure as e:
        logger.error(f"Search aborted: {e}")
        if e.partial_result is not None:
            print(f"Best before failure: {e.partial_result.best_objective:.6g}")
        print(f"Error: {e}")
        sys.exit(1)
    except (InvalidConfigurationError, MetaheuristicError) as e:
        logger.error(f"Search error: {e}")
        print(f"Error: {e}")
        sys.exit(1)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        description="Modular metaheuristics: VNS, Simulated Annealing, Tabu Search and LNS",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Minimize x^2 with VNS
  python main.py --problem quadratic --algorithm vns

  # Line search with Simulated Annealing
  python main.py --problem linesearch --algorithm sa --temperature 50 --seed 1

  # TSP with LNS, exporting history and plots
  python main.py --problem tsp --cities 30 --algorithm lns --export --plot

  # Tabu Search with a preset
  python main.py --problem tsp --algorithm tabu --preset thorough --tenure 10
        """
    )

    parser.add_argument('--problem', choices=['quadratic', 'linesearch', 'tsp'],
                        default='quadratic', help='Example problem (default: quadratic)')
    parser.add_argument('--algorithm', choices=['vns', 'sa', 'tabu', 'lns'],
                        default='vns', help='Metaheuristic (default: vns)')
    parser.add_argument('--preset', choices=list(SEARCH_PRESETS),
                        help='Search preset (overridden by explicit limits)')

    # Problem options
    parser.add_argument('--start', type=int, default=10,
                        help='Initial x for quadratic, initial index for linesearch')
    parser.add_argument('--numbers', type=float, nargs='+',
                        help='Values for linesearch')
    parser.add_argument('--cities', type=int, default=20,
                        help='Number of random cities for tsp (default: 20)')

    # Termination
    parser.add_argument('--max-iterations', type=int, help='Iteration limit')
    parser.add_argument('--max-time', type=float, help='Time limit in seconds')
    parser.add_argument('--stagnation-limit', type=int,
                        help='Stop after N iterations without improvement')
    parser.add_argument('--seed', type=int, help='Master random seed')

    # Algorithm parameters
    parser.add_argument('--temperature', type=float, help='Initial temperature (SA, LNS annealing)')
    parser.add_argument('--cooling-rate', type=float, help='Cooling rate (alpha or delta)')
    parser.add_argument('--tenure', type=int, help='Tabu tenure')
    parser.add_argument('--acceptance', choices=['improving', 'threshold', 'annealing'],
                        help='LNS acceptance criterion')

    # Output
    parser.add_argument('--output', type=str, default=PATHS['results'],
                        help='Output directory (default: results/)')
    parser.add_argument('--export', action='store_true',
                        help='Export history CSV and summary JSON')
    parser.add_argument('--plot', action='store_true', help='Save convergence plot')
    parser.add_argument('--profile', action='store_true', help='Collect per-stage timings')
    parser.add_argument('--log-file', type=str, help='Also log to this file')
    parser.add_argument('--verbose', action='store_true', help='Debug logging')

    return parser


def build_overrides(args) -> Dict:
    """Config overrides from the explicitly given arguments."""
    overrides = {
        'max_iterations': args.max_iterations,
        'max_time': args.max_time,
        'stagnation_limit': args.stagnation_limit,
        'seed': args.seed,
        'initial_temperature': args.temperature,
        'cooling_rate': args.cooling_rate,
        'tabu_tenure': args.tenure,
        'acceptance': args.acceptance,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if args.profile:
        overrides['profile'] = True
    return overrides


def build_problem(args):
    """Return (initial solution, move operators, neighborhood operators, destroyers, repairers)."""
    if args.problem == 'quadratic':
        initial = IntegerQuadratic(args.start, *QUADRATIC_BOUNDS)
        return initial, [StepMove(1)], [StepMove(1), StepMove(3)], [], []

    if args.problem == 'linesearch':
        problem = LineSearch(args.numbers or DEFAULT_NUMBERS)
        start = args.start if 0 <= args.start < len(problem.values) else 0
        return problem.initial(start), [NeighborSwap()], problem.reach(1, 4), [], []

    instance = TSPInstance.random(args.cities, seed=args.seed)
    moves: List = [SwapMove(), TwoOptMove()]
    return (instance.tour(), moves, moves,
            [RandomRemoval(0.2), WorstRemoval(max(1, args.cities // 10))], [GreedyInsertion()])


def run(args):
    """Build the problem and the metaheuristic, run it and report."""
    logger = get_logger('metaheur.cli')
    initial, moves, neighborhoods, destroyers, repairers = build_problem(args)
    overrides = build_overrides(args)

    if args.algorithm == 'vns':
        search = VariableNeighborhoodSearch(neighborhoods, config=overrides, preset=args.preset)
    elif args.algorithm == 'sa':
        search = SimulatedAnnealing(moves, config=overrides, preset=args.preset)
    elif args.algorithm == 'tabu':
        search = TabuSearch(moves, config=overrides, preset=args.preset)
    else:
        search = LargeNeighborhoodSearch(destroyers, repairers, config=overrides,
                                         preset=args.preset)

    logger.info(f"Problem: {args.problem}, algorithm: {search.name}")
    print(f"\n{search.name} on {args.problem}")
    print(f"  Initial objective: {initial.objective():.6g}")

    result = search.run(initial)

    print("\nResult:")
    print(f"  Best objective: {result.best_objective:.6g}")
    print(f"  Best solution: {result.best!r}")
    print(f"  Stop reason: {result.stop_reason.value}")
    print(f"  Iterations: {result.iterations} ({result.elapsed:.2f}s)")
    print(f"  Accepted: {result.accepted} ({result.acceptance_rate * 100:.1f}%), "
          f"improvements: {result.improvements}")

    if args.export:
        from metaheur.evaluation.exporter import export_all_results
        paths = export_all_results(result, args.output, config=search.config)
        for kind, path in paths.items():
            print(f"  {kind.capitalize()} exported to: {path}")

    if args.plot:
        import matplotlib
        matplotlib.use('Agg')
        import matplotlib.pyplot as plt
        from metaheur.visualization.plotter import Plotter

        os.makedirs(args.output, exist_ok=True)
        plotter = Plotter()
        path = os.path.join(args.output, f"convergence_{search.name}_{args.problem}.png")
        plt.close(plotter.plot_convergence(result, title=f"{search.name} on {args.problem}",
                                           save_path=path))
        print(f"  Convergence plot saved to: {path}")
        if args.problem == 'tsp':
            path = os.path.join(args.output, f"tour_{search.name}.png")
            plt.close(plotter.plot_tour(result.best, save_path=path))
            print(f"  Tour plot saved to: {path}")

    return result


if __name__ == "__main__":
    main()
