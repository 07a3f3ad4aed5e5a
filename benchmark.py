"""
TSP Parameter Benchmark
-----------------------
Runs the genetic algorithm several times for every parameter combination
and collects Best, Average and Std. Deviation of the reported distance.

Results are printed to the console and optionally written to a CSV file.
"""

import argparse
import random
import sys
import time
from typing import Dict, List, Optional, Sequence

import pandas as pd
from tqdm import tqdm

from tsp_core import City, InputError, validate_cities
from genetic_algorithm import ConfigurationError, Simulation
from data_generator import load_cities_csv


# ================================
# CONFIGURATION
# ================================
RUNS = 10
ITERATIONS = 300

DEFAULT_GRID = [
    {"pop_size": 50, "crossover_rate": 0.5, "mutation_rate": 0.05, "survival_rate": 0.5},
    {"pop_size": 100, "crossover_rate": 0.5, "mutation_rate": 0.05, "survival_rate": 0.5},
    {"pop_size": 100, "crossover_rate": 0.3, "mutation_rate": 0.02, "survival_rate": 0.3},
    {"pop_size": 100, "crossover_rate": 0.8, "mutation_rate": 0.10, "survival_rate": 0.2},
]


def config_label(params: Dict) -> str:
    return (
        f"pop={params['pop_size']} cx={params['crossover_rate']} "
        f"mut={params['mutation_rate']} surv={params['survival_rate']}"
    )


def run_trials(
    cities: Sequence[City],
    grid: List[Dict] = None,
    runs: int = RUNS,
    iterations: int = ITERATIONS,
    seed: Optional[int] = None,
) -> pd.DataFrame:
    """
    Run every configuration in grid `runs` times.

    Returns:
        one row per run with the config label, run number, best fitness,
        its distance and the wall time
    """
    grid = DEFAULT_GRID if grid is None else grid
    rng = random.Random(seed)
    rows = []

    for params in grid:
        label = config_label(params)
        for run in tqdm(range(runs), desc=label, leave=False):
            start = time.time()
            try:
                sim = Simulation(
                    cities,
                    population_size=params["pop_size"],
                    max_iterations=iterations,
                    crossover_rate=params["crossover_rate"],
                    mutation_rate=params["mutation_rate"],
                    survival_rate=params["survival_rate"],
                    rng=random.Random(rng.getrandbits(32)),
                )
            except ConfigurationError as e:
                print(f"Warning: skipping {label}: {e}")
                break
            best = sim.run()
            rows.append({
                "config": label,
                "run": run,
                "fitness": best.fitness,
                "distance": best.get_total_distance(sim.cities),
                "time": time.time() - start,
            })

    return pd.DataFrame(rows, columns=["config", "run", "fitness", "distance", "time"])


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Per-config statistics, best average distance first."""
    summary = df.groupby("config").agg(
        best_dist=("distance", "min"),
        avg_dist=("distance", "mean"),
        std_dist=("distance", "std"),
        avg_time=("time", "mean"),
    )
    return summary.sort_values(by="avg_dist").reset_index()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Benchmark genetic algorithm parameters")
    parser.add_argument("csv", help="CSV file with a header row naming the x and y columns")
    parser.add_argument("--runs", type=int, default=RUNS)
    parser.add_argument("--iterations", type=int, default=ITERATIONS)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output", default=None, help="Write per-run results to this CSV file")
    args = parser.parse_args(argv)

    try:
        cities = load_cities_csv(args.csv)
        validate_cities(cities)
    except (FileNotFoundError, InputError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Benchmarking {len(DEFAULT_GRID)} configurations x {args.runs} runs on {len(cities)} cities")

    df = run_trials(cities, runs=args.runs, iterations=args.iterations, seed=args.seed)
    if df.empty:
        print("No valid configuration to run.")
        return 1

    print("\n=== Distance by configuration (Lower = Better) ===")
    print(summarize(df).to_string(index=False))

    if args.output:
        df.to_csv(args.output, index=False)
        print(f"\nSaved: {args.output}")
    return 0


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
