"""Tests for the CLI."""

import re

from click.testing import CliRunner

from randomlib import __version__
from randomlib.cli import main

_INT = re.compile(r"^-?\d+$")


def _ints(output):
    return [int(line) for line in output.splitlines() if _INT.match(line.strip())]


def _floats(output):
    values = []
    for line in output.splitlines():
        try:
            values.append(float(line))
        except ValueError:
            continue
    return values


class TestCLI:
    def test_version(self):
        r = CliRunner().invoke(main, ["--version"])
        assert r.exit_code == 0
        assert __version__ in r.output

    def test_ints(self):
        r = CliRunner().invoke(main, ["ints", "--min", "3", "--max", "9", "--num", "25"])
        assert r.exit_code == 0
        values = _ints(r.output)
        assert len(values) == 25
        assert all(3 <= v <= 9 for v in values)

    def test_unique_ints(self):
        r = CliRunner().invoke(main, ["ints", "--min", "0", "--max", "9", "--num", "10", "--unique"])
        assert r.exit_code == 0
        assert sorted(_ints(r.output)) == list(range(10))

    def test_too_many_unique_ints(self):
        r = CliRunner().invoke(main, ["ints", "--min", "3", "--max", "9", "--num", "10", "--unique"])
        assert r.exit_code == 1
        assert "Error" in r.output

    def test_floats(self):
        r = CliRunner().invoke(main, ["floats", "--num", "5"])
        assert r.exit_code == 0
        values = _floats(r.output)
        assert len(values) == 5
        assert all(0.0 <= v < 1.0 for v in values)

    def test_bad_buffer_size(self):
        r = CliRunner().invoke(main, ["--buffer-size", "10", "ints"])
        assert r.exit_code != 0

    def test_report(self):
        r = CliRunner().invoke(main, ["report", "--num", "2000"])
        assert r.exit_code == 0
        assert "Grade" in r.output
        assert "Shannon entropy" in r.output
