import random

import pytest

from tsp_core import City, InputError
from data_generator import (
    generate_circle_cities,
    generate_random_cities,
    load_cities_csv,
    save_cities_csv,
)


def write(tmp_path, text, name="cities.csv"):
    path = tmp_path / name
    path.write_text(text)
    return path


def test_load_cities(tmp_path):
    path = write(tmp_path, "x,y\n0,0\n0,1.5\n-2,3e2\n")
    cities = load_cities_csv(path)
    assert [(c.x, c.y) for c in cities] == [(0.0, 0.0), (0.0, 1.5), (-2.0, 300.0)]
    assert cities[2].name == "City_2"


def test_load_ignores_extra_columns_and_whitespace(tmp_path):
    path = write(tmp_path, "name, x , y\nA, 1, 2\nB, 3, 4\n")
    cities = load_cities_csv(path)
    assert cities == [City(1, 2), City(3, 4)]


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_cities_csv(tmp_path / "nope.csv")


def test_empty_file(tmp_path):
    with pytest.raises(InputError):
        load_cities_csv(write(tmp_path, ""))


def test_missing_column(tmp_path):
    with pytest.raises(InputError, match="y"):
        load_cities_csv(write(tmp_path, "x,z\n1,2\n"))


@pytest.mark.parametrize("bad", ["abc", "", "inf", "nan"])
def test_bad_record_is_reported(tmp_path, bad):
    path = write(tmp_path, f"x,y\n0,0\n1,1\n2,{bad}\n")
    with pytest.raises(InputError, match="record 3"):
        load_cities_csv(path)


def test_save_and_load(tmp_path):
    cities = generate_random_cities(5, rng=random.Random(3))
    path = tmp_path / "out.csv"
    save_cities_csv(cities, path)
    loaded = load_cities_csv(path)
    assert len(loaded) == len(cities)
    for a, b in zip(loaded, cities):
        assert a.x == pytest.approx(b.x)
        assert a.y == pytest.approx(b.y)


def test_generators():
    cities = generate_random_cities(8, width=10, height=5, rng=random.Random(0))
    assert len(cities) == 8
    assert all(0 <= c.x <= 10 and 0 <= c.y <= 5 for c in cities)

    circle = generate_circle_cities(6, radius=2, center_x=0, center_y=0)
    assert len(circle) == 6
    for c in circle:
        assert c.distance_to(City(0, 0)) == pytest.approx(2.0)


def test_ragged_record_is_reported(tmp_path):
    path = write(tmp_path, "x,y\n0,0\n1,1,9\n")
    with pytest.raises(InputError, match="line 3"):
        load_cities_csv(path)


def test_non_utf8_file_is_reported(tmp_path):
    path = tmp_path / "binary.csv"
    path.write_bytes(b"x,y\n0,0\n\xff\xfe,1\n")
    with pytest.raises(InputError, match="UTF-8"):
        load_cities_csv(path)


def test_random_cities_follow_injected_rng():
    first = generate_random_cities(5, rng=random.Random(11))
    second = generate_random_cities(5, rng=random.Random(11))
    assert first == second
    assert len(generate_random_cities(3)) == 3
