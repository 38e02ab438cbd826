import io
import logging

import pytest

from common.logging_config import level_from_verbosity
from common.types import Coordinate, DistanceFormula
from common.units import Q_, ensure_quantity, from_meters, to_meters
from commands import __version__
from commands.cli import main
from commands.handlers import EXIT_FAILURE, EXIT_SUCCESS, cmd_bear_dist, cmd_randpos
from commands.options import CommandOptions, parse_coordinate, string_to_float
from geospatial.spherical import haversine_distance


def _lines(capsys):
    return capsys.readouterr().out.splitlines()


def test_unit_conversions():
    assert to_meters(12.5, "km") == pytest.approx(12500.0)
    assert from_meters(12500.0, "km") == pytest.approx(12.5)
    assert to_meters(Q_(2, "km")) == pytest.approx(2000.0)
    with pytest.raises(ValueError):
        ensure_quantity(Q_(1, "second"), "m")


def test_level_from_verbosity():
    assert level_from_verbosity(2) == logging.DEBUG
    assert level_from_verbosity(0) == logging.INFO
    assert level_from_verbosity(-1) == logging.WARNING


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("12.5", 12.5),
        ("-3", -3.0),
        ("  7.25", 7.25),
        ("12.5, ", 12.5),
        ("1e3", 1000.0),
        (".5", 0.5),
    ],
)
def test_string_to_float(text, expected):
    assert string_to_float(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "nan", "inf", "-inf", "1e999", "0x10", "1_000", "12.5x"])
def test_string_to_float_rejects(text):
    with pytest.raises(ValueError):
        string_to_float(text)


def test_parse_coordinate():
    assert parse_coordinate("59.91,10.75") == Coordinate(59.91, 10.75)
    assert parse_coordinate("-33.5, 151.25") == Coordinate(-33.5, 151.25)
    assert parse_coordinate("91,0") == Coordinate(91.0, 0.0)


@pytest.mark.parametrize("text", ["59.91", "a,b", ",10", "1,2,3"])
def test_parse_coordinate_rejects(text):
    with pytest.raises(ValueError):
        parse_coordinate(text)


def test_command_options_km():
    opts = CommandOptions(km=True)
    assert opts.distance_in(1.5) == pytest.approx(1500.0)
    assert opts.distance_out(1500.0) == pytest.approx(1.5)
    assert CommandOptions().distance_in(1.5) == 1.5


def test_handler_writes_to_stream():
    out = io.StringIO()
    assert cmd_bear_dist("bear", CommandOptions(), "0,0", "0,1", out=out) == EXIT_SUCCESS
    assert out.getvalue() == "90.000000\n"


def test_dist(capsys):
    assert main(["dist", "0,0", "0,1"]) == EXIT_SUCCESS
    assert _lines(capsys) == ["111194.926645"]


def test_dist_in_km(capsys):
    assert main(["--km", "dist", "0,0", "0,1"]) == EXIT_SUCCESS
    assert _lines(capsys) == ["111.194927"]


def test_dist_with_negative_coordinates(capsys):
    assert main(["dist", "-33.8688,151.2093", "51.47,-0.4543"]) == EXIT_SUCCESS
    assert 16_000_000 < float(_lines(capsys)[0]) < 18_000_000


def test_dist_ellipsoidal(capsys):
    assert main(["-K", "dist", "90,0", "-90,0"]) == EXIT_SUCCESS
    assert float(_lines(capsys)[0]) == pytest.approx(20003931.459, abs=1e-3)


def test_dist_sql(capsys):
    assert main(["-F", "sql", "dist", "0,0", "0,1"]) == EXIT_SUCCESS
    assert _lines(capsys) == ["INSERT INTO dist (value) VALUES (111194.926645);"]


def test_bear(capsys):
    assert main(["bear", "0,0", "0,1"]) == EXIT_SUCCESS
    assert _lines(capsys) == ["90.000000"]


def test_bear_ellipsoidal_selected_by_long_option(capsys):
    assert main(["--karney", "bear", "0,0", "1,0"]) == EXIT_SUCCESS
    assert _lines(capsys) == ["0.00000000"]


@pytest.mark.parametrize(
    ("argv", "message"),
    [
        (["bear", "0,0", "0,180"], "Bearing is undefined"),
        (["dist", "91,0", "0,0"], "Value out of range"),
        (["dist", "abc", "0,0"], "Invalid number specified"),
        (["-K", "dist", "0,0", "0,180"], "Formula did not converge"),
        (["dist", "0,0"], "Missing arguments"),
        (["dist", "0,0", "1,1", "2,2"], "Too many arguments"),
        (["-F", "xml", "dist", "0,0", "0,1"], "xml: Unknown output format"),
        (["bpos", "0,0", "400", "1000"], "Value out of range"),
        (["course", "0,0", "0,10", "2.5"], "Invalid number specified"),
        (["-n", "-1", "randpos"], "Value out of range"),
        ([], "No arguments specified"),
    ],
)
def test_failures_are_logged(caplog, capsys, argv, message):
    with caplog.at_level(logging.ERROR):
        assert main(argv) == EXIT_FAILURE
    assert message in caplog.text
    assert capsys.readouterr().out == ""


def test_gpx_not_supported_for_scalar_results(caplog):
    with caplog.at_level(logging.ERROR):
        assert main(["-F", "gpx", "dist", "0,0", "0,1"]) == EXIT_FAILURE
    assert "not supported" in caplog.text


def test_unknown_command_exits():
    with pytest.raises(SystemExit):
        main(["frobnicate"])


def test_bpos(capsys):
    assert main(["bpos", "0,0", "90", "1000000"]) == EXIT_SUCCESS
    assert _lines(capsys) == ["0.000000,8.993216"]


def test_bpos_gpx(capsys):
    assert main(["-F", "gpx", "bpos", "0,0", "90", "1000000"]) == EXIT_SUCCESS
    out = capsys.readouterr().out
    assert '<wpt lat="0" lon="8.993216">' in out


def test_course(capsys):
    assert main(["course", "0,0", "0,10", "4"]) == EXIT_SUCCESS
    lines = _lines(capsys)
    assert len(lines) == 6
    assert lines[0] == "0.000000,0.000000"
    assert lines[-1] == "0.000000,10.000000"


def test_course_gpx_is_a_route(capsys):
    assert main(["-F", "gpx", "course", "0,0", "0,10", "4"]) == EXIT_SUCCESS
    out = capsys.readouterr().out
    assert out.count("<rtept ") == 6
    assert "<name>course</name>" in out


def test_lpos(capsys):
    assert main(["lpos", "45,0", "45,180", "0.5"]) == EXIT_SUCCESS
    assert _lines(capsys) == ["90.000000,0.000000"]


def test_randpos_is_reproducible_with_seed(capsys):
    assert main(["--seed", "42", "-n", "3", "randpos"]) == EXIT_SUCCESS
    first = _lines(capsys)
    assert main(["--seed", "42", "-n", "3", "randpos"]) == EXIT_SUCCESS
    assert _lines(capsys) == first
    assert len(first) == 3


def test_randpos_around_center(capsys):
    assert main(["--seed", "7", "-n", "20", "--km", "randpos", "59.91,10.75", "5"]) == EXIT_SUCCESS
    for line in _lines(capsys):
        lat, lon = (float(v) for v in line.split(","))
        assert haversine_distance(59.91, 10.75, lat, lon).unwrap() <= 5000.0 + 1.0


def test_randpos_sql(capsys):
    assert main(["--seed", "1", "-n", "2", "-F", "sql", "randpos"]) == EXIT_SUCCESS
    lines = _lines(capsys)
    assert lines[0] == "BEGIN;"
    assert lines[-1] == "COMMIT;"
    assert sum(line.startswith("INSERT INTO randpos (coor)") for line in lines) == 2


def test_randpos_handler_defaults_to_whole_sphere():
    out = io.StringIO()
    opts = CommandOptions(count=4, seed=5)
    assert cmd_randpos(opts, out=out) == EXIT_SUCCESS
    assert len(out.getvalue().splitlines()) == 4


def test_version(capsys):
    assert main(["--version"]) == EXIT_SUCCESS
    assert _lines(capsys) == [f"geocalc {__version__}"]


def test_license(capsys):
    assert main(["--license"]) == EXIT_SUCCESS
    assert "GNU General Public License" in capsys.readouterr().out


def test_formula_option_defaults_to_spherical():
    assert CommandOptions().formula is DistanceFormula.SPHERICAL


def test_randpos_seed_is_logged_once_by_the_command(caplog, capsys):
    with caplog.at_level(logging.DEBUG):
        assert main(["-v", "randpos"]) == EXIT_SUCCESS
    seed_records = [r for r in caplog.records if "seed" in r.getMessage().lower()
                    and not r.getMessage().startswith("Options:")]
    assert [r.name for r in seed_records] == ["commands.handlers"]
    assert len(_lines(capsys)) == 1
