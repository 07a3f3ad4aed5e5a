"""
TSP Solver - Main Application
Evolve a visiting order for the cities in a CSV file and report the best one.
"""

import argparse
import random
import sys

from tsp_core import InputError, Tour
from genetic_algorithm import ConfigurationError, Simulation
from data_generator import load_cities_csv


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return number


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return number


def rate(value: str) -> float:
    number = float(value)
    if not 0.0 <= number <= 1.0:
        raise argparse.ArgumentTypeError(f"must be within [0, 1], got {value}")
    return number


def format_report(tour: Tour) -> str:
    """Console report of the best tour: its fitness and the visiting order."""
    order = "->".join(str(i) for i in tour.order)
    return f"Solution:\nFitness {tour.fitness}\n{order}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Approximate the Traveling Salesman Problem with a genetic algorithm",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 200 generations of 50 tours on the cities in cities.csv
  python main.py 200 50 0.5 0.05 0.5 cities.csv

  # Repeatable run with a progress bar and plots
  python main.py 500 100 0.5 0.02 0.3 cities.csv --seed 7 --verbose --plot
        """
    )

    parser.add_argument('iterations', type=non_negative_int,
                        help='Number of generations to run')
    parser.add_argument('pop_size', type=positive_int,
                        help='Number of tours in every generation')
    parser.add_argument('crossover_rate', type=rate,
                        help='Fraction of the population used as breeding pool')
    parser.add_argument('mutation_rate', type=rate,
                        help='Per-tour, per-generation mutation probability')
    parser.add_argument('survival_rate', type=rate,
                        help='Fraction of the breeding pool kept unchanged')
    parser.add_argument('csv',
                        help='CSV file with a header row naming the x and y columns')

    parser.add_argument('--seed', type=int, default=None,
                        help='Seed the random source for a repeatable run')
    parser.add_argument('--verbose', action='store_true',
                        help='Show a progress bar and a run summary')
    parser.add_argument('--plot', action='store_true',
                        help='Show the best tour and the convergence history')
    parser.add_argument('--save-plot', default=None, metavar='PATH',
                        help='Save the best tour plot to PATH')
    return parser


def main(argv=None) -> int:
    """Main entry point for the TSP solver application."""
    args = build_parser().parse_args(argv)

    try:
        cities = load_cities_csv(args.csv)
        if args.verbose:
            print(f"Loaded {len(cities)} cities from {args.csv}")

        sim = Simulation(
            cities,
            population_size=args.pop_size,
            max_iterations=args.iterations,
            crossover_rate=args.crossover_rate,
            mutation_rate=args.mutation_rate,
            survival_rate=args.survival_rate,
            rng=random.Random(args.seed),
        )
    except (FileNotFoundError, InputError, ConfigurationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print("starting iterations")
    best = sim.run(verbose=args.verbose)

    print(format_report(best))

    if args.plot or args.save_plot:
        from visualization import TSPVisualizer

        visualizer = TSPVisualizer()
        visualizer.plot_tour(best, sim.cities, title="Best Tour",
                             save_path=args.save_plot, show=args.plot)
        if args.plot:
            visualizer.plot_convergence(sim.best_fitness_history)

    return 0


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
