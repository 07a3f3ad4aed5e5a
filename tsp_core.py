"""
TSP Solver - Core Module
Contains the fundamental data structures for representing the TSP problem.
"""

import numpy as np
from random import Random
from typing import List, Sequence


class InputError(ValueError):
    """Raised when the city input cannot be used to build a tour."""


class DegenerateTourError(ValueError):
    """Raised when a visiting order has no positive length to score."""


class City:
    """Represents a city with x, y coordinates."""

    __slots__ = ("_x", "_y", "_name")

    def __init__(self, x: float, y: float, name: str = None):
        object.__setattr__(self, "_x", float(x))
        object.__setattr__(self, "_y", float(y))
        object.__setattr__(self, "_name", name)

    def __setattr__(self, key, value):
        raise AttributeError("City is immutable")

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def name(self) -> str:
        return self._name

    def distance_to(self, city: 'City') -> float:
        """Calculate Euclidean distance to another city."""
        dx = self.x - city.x
        dy = self.y - city.y
        return float(np.sqrt(dx * dx + dy * dy))

    def __repr__(self):
        return f"City({self.x:.2f}, {self.y:.2f})"

    def __eq__(self, other):
        if not isinstance(other, City):
            return False
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))


def validate_cities(cities: Sequence[City]):
    """Reject city lists that cannot produce a tour of positive length."""
    if len(cities) < 2:
        raise InputError(f"At least 2 cities are required, got {len(cities)}")
    if len(set(cities)) < 2:
        raise InputError("At least 2 distinct cities are required; all cities coincide")


def path_cost(order: Sequence[int], city_list: Sequence[City]) -> float:
    """Length of the open path visiting city_list in the given order."""
    cost = 0.0
    for i in range(len(order) - 1):
        cost += city_list[order[i]].distance_to(city_list[order[i + 1]])
    return cost


def fitness_of(order: Sequence[int], city_list: Sequence[City]) -> float:
    """
    Fitness of a visiting order: the inverse of its open path cost.

    The last city does not connect back to the first. Orders with fewer
    than two cities, or whose cities all coincide, have no defined fitness.
    """
    if len(order) < 2:
        raise DegenerateTourError(f"Cannot score an order of {len(order)} cities")
    cost = path_cost(order, city_list)
    if cost == 0.0:
        raise DegenerateTourError("Cannot score an order with zero total distance")
    return 1.0 / cost


class Tour:
    """
    A candidate solution: a permutation of city indices and its fitness.

    The fitness is cached and must always match the order; every method
    that changes the order recomputes it.
    """

    def __init__(self, order: List[int], fitness: float):
        self.order = order
        self.fitness = fitness

    @classmethod
    def from_order(cls, order: List[int], city_list: Sequence[City]) -> 'Tour':
        return cls(list(order), fitness_of(order, city_list))

    @classmethod
    def random(cls, city_list: Sequence[City], rng: Random) -> 'Tour':
        """Uniformly shuffled visiting order over all cities."""
        order = list(range(len(city_list)))
        rng.shuffle(order)
        return cls(order, fitness_of(order, city_list))

    @staticmethod
    def crossover(mother: Sequence[int], father: Sequence[int], cut: int) -> List[int]:
        """
        Ordered crossover with a single cut point.

        The child keeps mother[:cut] verbatim and fills the rest with the
        remaining indices in the order they appear in father.
        """
        mother_dna = list(mother[:cut])
        taken = set(mother_dna)
        child = mother_dna + [d for d in father if d not in taken]
        assert len(child) == len(mother), "parents are not permutations of the same cities"
        return child

    def breed(self, other: 'Tour', city_list: Sequence[City], rng: Random) -> 'Tour':
        """Produce one offspring with self as mother and other as father."""
        cut = rng.randrange(len(self.order))
        order = Tour.crossover(self.order, other.order, cut)
        return Tour(order, fitness_of(order, city_list))

    def mutate(self, city_list: Sequence[City], rng: Random):
        """Swap two positions drawn with replacement, then rescore."""
        i = rng.randrange(len(self.order))
        j = rng.randrange(len(self.order))
        self.order[i], self.order[j] = self.order[j], self.order[i]
        self.fitness = fitness_of(self.order, city_list)

    def mutated(self, city_list: Sequence[City], rng: Random) -> 'Tour':
        """Like mutate, but returns a new tour and leaves this one untouched."""
        child = self.clone()
        child.mutate(city_list, rng)
        return child

    def clone(self) -> 'Tour':
        """Create an independent copy of the tour."""
        return Tour(self.order.copy(), self.fitness)

    def get_total_distance(self, city_list: Sequence[City]) -> float:
        return path_cost(self.order, city_list)

    def __len__(self):
        return len(self.order)

    def __repr__(self):
        return f"Tour(cities={len(self.order)}, fitness={self.fitness:.6f})"

    def __getitem__(self, index):
        return self.order[index]
