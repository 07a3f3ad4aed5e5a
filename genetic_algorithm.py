"""
Genetic Algorithm Solver
Generational simulation with ordered crossover, swap mutation,
elitism and weak-individual carry-over.
"""

import random
import numpy as np
from typing import Callable, List, Optional, Sequence
from tqdm import tqdm
from tsp_core import City, Tour, validate_cities


# Weakest individuals carried into every generation to keep genetic diversity
SURVIVING_WEAK_COUNT = 2


class ConfigurationError(ValueError):
    """Raised when simulation parameters cannot build a valid generation."""


class Population:
    """Represents a population of tour solutions."""

    def __init__(self, population_size: int, cities: Sequence[City]):
        self.population_size = population_size
        self.cities = cities
        self.tours: List[Tour] = []

    def initialize(self, rng: random.Random):
        """Initialize population with random tours."""
        self.tours = [Tour.random(self.cities, rng) for _ in range(self.population_size)]

    def rank(self):
        """Sort tours from fittest to weakest; ties keep their order."""
        self.tours.sort(key=lambda tour: tour.fitness, reverse=True)

    def get_fittest(self) -> Tour:
        return max(self.tours, key=lambda tour: tour.fitness)

    def get_average_fitness(self) -> float:
        return float(np.mean([t.fitness for t in self.tours]))

    def __len__(self):
        return len(self.tours)

    def __iter__(self):
        return iter(self.tours)


def breeding_counts(population_size: int, crossover_rate: float, survival_rate: float):
    """Return (breeding_count, surviving_parent_count) for one generation."""
    breeding_count = int(population_size * crossover_rate)
    surviving_parent_count = int(breeding_count * survival_rate)
    return breeding_count, surviving_parent_count


def validate_parameters(
    max_iterations: int,
    population_size: int,
    crossover_rate: float,
    mutation_rate: float,
    survival_rate: float,
):
    """Check that every generation can be assembled from these parameters."""
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, int) or max_iterations < 0:
        raise ConfigurationError(f"iterations must be a non-negative integer, got {max_iterations!r}")
    if isinstance(population_size, bool) or not isinstance(population_size, int) or population_size < 1:
        raise ConfigurationError(f"pop_size must be a positive integer, got {population_size!r}")

    for name, rate in (
        ("crossover_rate", crossover_rate),
        ("mutation_rate", mutation_rate),
        ("survival_rate", survival_rate),
    ):
        if not 0.0 <= rate <= 1.0:
            raise ConfigurationError(f"{name} must be within [0, 1], got {rate}")

    breeding_count, surviving_parent_count = breeding_counts(
        population_size, crossover_rate, survival_rate
    )
    if breeding_count < 1:
        raise ConfigurationError(
            f"Breeding pool is empty: pop_size={population_size} * "
            f"crossover_rate={crossover_rate} selects no parents"
        )
    if population_size < surviving_parent_count + SURVIVING_WEAK_COUNT:
        raise ConfigurationError(
            f"pop_size={population_size} cannot hold {surviving_parent_count} elite parents "
            f"and {SURVIVING_WEAK_COUNT} weak survivors"
        )


class Simulation:
    """
    Genetic Algorithm simulation for TSP

    Each generation ranks the population, breeds the fittest share
    (crossover_rate) into offspring, keeps the best share of the breeding
    pool unchanged (survival_rate) together with the weakest individuals,
    and mutates every member with probability mutation_rate.
    """

    def __init__(
        self,
        cities: Sequence[City],
        population_size: int = 100,
        max_iterations: int = 500,
        crossover_rate: float = 0.5,
        mutation_rate: float = 0.05,
        survival_rate: float = 0.5,
        rng: Optional[random.Random] = None,
    ):
        validate_cities(cities)
        validate_parameters(
            max_iterations, population_size, crossover_rate, mutation_rate, survival_rate
        )

        self.cities = tuple(cities)
        self.population_size = population_size
        self.max_iterations = max_iterations
        self.crossover_rate = crossover_rate
        self.mutation_rate = mutation_rate
        self.survival_rate = survival_rate
        self.rng = rng or random.Random()

        self.population = Population(population_size, self.cities)
        self.population.initialize(self.rng)

        self.generation = 0
        self.best_tour: Optional[Tour] = None
        self.best_fitness_history: List[float] = []

    # ---------------------------------------
    # Single generation evolution
    # ---------------------------------------

    def generate_next_generation(self):
        self.population.rank()
        ranked = self.population.tours

        breeding_count, surviving_parent_count = breeding_counts(
            self.population_size, self.crossover_rate, self.survival_rate
        )
        breeding_pool = ranked[:breeding_count]

        offspring = []
        for i in range(self.population_size - surviving_parent_count - SURVIVING_WEAK_COUNT):
            mother = breeding_pool[i % breeding_count]
            father = self.rng.choice(breeding_pool)
            offspring.append(mother.breed(father, self.cities, self.rng))

        next_generation = [t.clone() for t in ranked[:surviving_parent_count]]
        next_generation.extend(offspring)
        # Add a few weak units to keep the genetic diversity
        next_generation.extend(t.clone() for t in ranked[len(ranked) - SURVIVING_WEAK_COUNT:])

        for tour in next_generation:
            if self.rng.random() < self.mutation_rate:
                tour.mutate(self.cities, self.rng)

        self.population.tours = next_generation
        self.generation += 1

    # ---------------------------------------
    # Full run
    # ---------------------------------------

    def run(
        self,
        verbose: bool = False,
        callback: Optional[Callable[[int, Tour], None]] = None,
    ) -> Tour:
        """
        Evolve for max_iterations generations.

        Returns:
            the fittest tour seen across all generations, including the
            initial population
        """
        fittest = self.population.get_fittest().clone()
        self.best_fitness_history = [fittest.fitness]

        generations = range(self.max_iterations)
        pbar = tqdm(generations, desc="Evolving", disable=not verbose)
        for _ in pbar:
            self.generate_next_generation()

            challenger = self.population.get_fittest()
            if challenger.fitness > fittest.fitness:
                fittest = challenger.clone()
            self.best_fitness_history.append(fittest.fitness)

            if verbose:
                pbar.set_postfix(distance=f"{1.0 / fittest.fitness:.2f}")
            if callback is not None:
                callback(self.generation, fittest.clone())

        self.best_tour = fittest

        if verbose:
            initial = 1.0 / self.best_fitness_history[0]
            final = 1.0 / fittest.fitness
            print(f"Generations: {self.generation}")
            print(f"Initial best distance: {initial:.2f}")
            print(f"Final best distance:   {final:.2f}")

        return fittest.clone()

    def get_best_tour(self) -> Tour:
        if self.best_tour is not None:
            return self.best_tour.clone()
        return self.population.get_fittest().clone()
