import pytest

from main import format_report, main
from tsp_core import Tour


SQUARE = "x,y\n0,0\n0,1\n1,1\n1,0\n"


@pytest.fixture
def square_csv(tmp_path):
    path = tmp_path / "square.csv"
    path.write_text(SQUARE)
    return str(path)


def test_format_report(square_cities):
    tour = Tour.from_order([0, 1, 2, 3], square_cities)
    lines = format_report(tour).splitlines()
    assert lines[0] == "Solution:"
    assert lines[1] == f"Fitness {tour.fitness}"
    assert lines[2] == "0->1->2->3"


def test_run_reports_best_tour(square_csv, capsys):
    code = main(["200", "50", "0.5", "0.05", "0.5", square_csv, "--seed", "3"])
    out = capsys.readouterr().out.splitlines()
    assert code == 0
    assert out[0] == "Solution:"
    assert float(out[1].split()[1]) == pytest.approx(1 / 3)
    assert sorted(int(i) for i in out[2].split("->")) == [0, 1, 2, 3]


def test_missing_file_exits_with_error(tmp_path, capsys):
    code = main(["10", "10", "0.5", "0.1", "0.5", str(tmp_path / "missing.csv")])
    assert code == 1
    assert "Error:" in capsys.readouterr().err


def test_empty_breeding_pool_exits_with_error(square_csv, capsys):
    code = main(["10", "10", "0.05", "0.1", "0.5", square_csv])
    assert code == 1
    assert "Breeding pool is empty" in capsys.readouterr().err


def test_bad_record_exits_with_error(tmp_path, capsys):
    path = tmp_path / "bad.csv"
    path.write_text("x,y\n0,0\none,1\n")
    assert main(["10", "10", "0.5", "0.1", "0.5", str(path)]) == 1
    assert "record 2" in capsys.readouterr().err


@pytest.mark.parametrize(
    "argv",
    [
        ["-1", "10", "0.5", "0.1", "0.5", "c.csv"],
        ["10", "0", "0.5", "0.1", "0.5", "c.csv"],
        ["10", "10", "1.5", "0.1", "0.5", "c.csv"],
        ["10", "10", "0.5", "0.1"],
    ],
)
def test_argument_errors(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2


def test_save_plot(square_csv, tmp_path):
    target = tmp_path / "tour.png"
    code = main(["5", "10", "0.5", "0.1", "0.5", square_csv, "--seed", "1",
                 "--save-plot", str(target)])
    assert code == 0
    assert target.exists()


def test_ragged_record_exits_with_error(tmp_path, capsys):
    path = tmp_path / "ragged.csv"
    path.write_text("x,y\n0,0\n1,1,9\n")
    assert main(["10", "10", "0.5", "0.1", "0.5", str(path)]) == 1
    assert "Error: Malformed record" in capsys.readouterr().err


def test_non_utf8_file_exits_with_error(tmp_path, capsys):
    path = tmp_path / "binary.csv"
    path.write_bytes(b"x,y\n0,0\n\xff\xfe,1\n")
    assert main(["10", "10", "0.5", "0.1", "0.5", str(path)]) == 1
    assert "Error:" in capsys.readouterr().err
