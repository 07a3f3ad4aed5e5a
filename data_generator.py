import os
import random
import numpy as np
import pandas as pd
from typing import List, Optional, Sequence
from tsp_core import City, InputError

COORD_COLUMNS = ["x", "y"]


def load_cities_csv(path) -> List[City]:
    """
    Load cities from a CSV file with a header row naming the x and y columns.

    Extra columns are ignored. Every record must carry finite numeric
    coordinates; the first offending record is reported by its position.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"City file not found: {path}")

    try:
        df = pd.read_csv(path, dtype=str, skipinitialspace=True, keep_default_na=False)
    except pd.errors.EmptyDataError:
        raise InputError(f"City file is empty: {path}")
    except pd.errors.ParserError as e:
        # pandas names the offending line, e.g. "Expected 2 fields in line 3, saw 3"
        raise InputError(f"Malformed record in {path}: {str(e).strip()}") from e
    except UnicodeDecodeError as e:
        raise InputError(f"City file {path} is not UTF-8 text (byte offset {e.start})") from e

    df.columns = [str(c).strip() for c in df.columns]
    missing = [c for c in COORD_COLUMNS if c not in df.columns]
    if missing:
        raise InputError(
            f"City file {path} is missing column(s) {', '.join(missing)}; "
            f"found: {', '.join(df.columns)}"
        )

    raw = df[COORD_COLUMNS]
    coords = raw.apply(lambda col: pd.to_numeric(col.str.strip(), errors="coerce"))
    bad = ~np.isfinite(coords.to_numpy(dtype=float)).all(axis=1)
    if bad.any():
        row = int(np.argmax(bad))
        x, y = raw.iloc[row]
        # Records are numbered from 1, not counting the header row
        raise InputError(f"Invalid coordinates in record {row + 1} of {path}: x={x!r}, y={y!r}")

    return [City(x, y, name=f"City_{i}") for i, (x, y) in enumerate(coords.itertuples(index=False))]


def save_cities_csv(cities: Sequence[City], path):
    """Write cities in the format read by load_cities_csv."""
    df = pd.DataFrame({"x": [c.x for c in cities], "y": [c.y for c in cities]})
    df.to_csv(path, index=False)


def generate_random_cities(
    n: int, width: float = 100, height: float = 100, rng: Optional[random.Random] = None
) -> List[City]:
    """
    Generate random cities for testing.

    Args:
        n: Number of cities to generate
        width: Width of the area
        height: Height of the area
        rng: Random source; a fresh unseeded random.Random is used otherwise

    Returns:
        List of randomly placed cities
    """
    rng = rng or random.Random()
    cities = []
    for i in range(n):
        x = rng.uniform(0, width)
        y = rng.uniform(0, height)
        cities.append(City(x, y, name=f"City_{i}"))
    return cities


def generate_circle_cities(n: int, radius: float = 50, center_x: float = 50, center_y: float = 50) -> List[City]:
    """Generate cities evenly spaced on a circle (for testing)."""
    cities = []
    for i in range(n):
        angle = 2 * np.pi * i / n
        x = center_x + radius * np.cos(angle)
        y = center_y + radius * np.sin(angle)
        cities.append(City(x, y, name=f"City_{i}"))
    return cities
