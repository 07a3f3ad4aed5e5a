import random

import matplotlib
import pytest

matplotlib.use("Agg")

from tsp_core import City
from data_generator import generate_random_cities


@pytest.fixture
def square_cities():
    return [City(0, 0), City(0, 1), City(1, 1), City(1, 0)]


@pytest.fixture
def random_cities():
    return generate_random_cities(12, rng=random.Random(42))


@pytest.fixture
def rng():
    return random.Random(1234)
