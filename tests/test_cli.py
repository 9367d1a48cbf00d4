"""
Behavioral tests for the bomparse command-line tool.

The tool is driven through main(argv) with stdin, stdout and stderr captured.
"""

import io
import json
import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from bomparse.cli import main

FIXTURES = Path(__file__).parent / "fixtures"
INPUT = (FIXTURES / "file.input").read_text()
OUTPUT = (FIXTURES / "file.output").read_text()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    for name in ["BOMPARSE_SPACES", "BOMPARSE_LOG_LEVEL", "BOMPARSE_ENCODING"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def run(monkeypatch, capsys, argv, stdin=""):
    monkeypatch.setattr("sys.stdin", io.StringIO(stdin))
    code = main(argv)
    captured = capsys.readouterr()
    return code, captured.out, captured.err


class TestStdin:

    def test_parses_input_from_stdin(self, monkeypatch, capsys):
        code, out, _ = run(monkeypatch, capsys, [], stdin=f"2\n{INPUT}")

        assert code == 0
        assert out == OUTPUT

    def test_leading_blank_lines_before_count(self, monkeypatch, capsys):
        code, out, _ = run(monkeypatch, capsys, [], stdin=f"\n\n1\n{INPUT}")

        assert code == 0
        assert len(json.loads(out)) == 1

    def test_count_must_be_a_number(self, monkeypatch, capsys):
        code, out, err = run(monkeypatch, capsys, [], stdin=f"two\n{INPUT}")

        assert code == 1
        assert out == ""
        assert err == 'Expected a positive number N; got "two" instead!\n'

    def test_count_must_not_be_negative(self, monkeypatch, capsys):
        code, _, err = run(monkeypatch, capsys, [], stdin="-3\n")

        assert code == 1
        assert "Expected a positive number N" in err

    def test_unparseable_lines_reported(self, monkeypatch, capsys):
        # Reported even when logging is restricted to errors
        monkeypatch.setenv("BOMPARSE_LOG_LEVEL", "ERROR")
        code, out, err = run(monkeypatch, capsys, [], stdin=f"2\n{INPUT}")

        assert code == 0
        assert out == OUTPUT
        assert err == 'error parsing "bad input"\n'

    @pytest.mark.parametrize("count,expected", [("2.5", 2), ("1e1", 5), ("0.9", 0)])
    def test_fractional_count_truncated(self, monkeypatch, capsys, count, expected):
        code, out, _ = run(monkeypatch, capsys, [], stdin=f"{count}\n{INPUT}")

        assert code == 0
        assert len(json.loads(out)) == expected

    @pytest.mark.parametrize("count", ["-0.5", "nan", "inf"])
    def test_invalid_float_counts(self, monkeypatch, capsys, count):
        code, _, err = run(monkeypatch, capsys, [], stdin=f"{count}\n{INPUT}")

        assert code == 1
        assert err == f'Expected a positive number N; got "{count}" instead!\n'

    def test_number_option_forbidden(self, monkeypatch, capsys):
        code, _, err = run(monkeypatch, capsys, ["--number", "2"], stdin=INPUT)

        assert code == 1
        assert err == "must not specify --number/-n when reading from stdin!\n"

    def test_empty_input(self, monkeypatch, capsys):
        code, out, _ = run(monkeypatch, capsys, [], stdin="")

        assert code == 0
        assert json.loads(out) == []


class TestCheck:

    def test_check_prints_entry(self, monkeypatch, capsys):
        code, out, _ = run(monkeypatch, capsys, ["--check", "Z1,Z3,Z8;40001;Keystone"])

        assert code == 0
        obj = json.loads(out)
        assert obj["MPN"] == "40001"
        assert obj["Manufacturer"] == "Keystone"
        assert obj["ReferenceDesignators"] == ["Z1", "Z3", "Z8"]
        assert obj["NumOccurrences"] == 1

    def test_check_bad_input(self, monkeypatch, capsys):
        code, out, err = run(monkeypatch, capsys, ["--check", "bad input"])

        assert code == 1
        assert out == ""
        assert err == "failed to parse!\n"

    def test_check_empty_string(self, monkeypatch, capsys):
        code, _, err = run(monkeypatch, capsys, ["-c", ""])

        assert code == 1
        assert err == "must specify a string to check!\n"


class TestFile:

    def test_parses_input_from_file(self, monkeypatch, capsys):
        code, out, _ = run(monkeypatch, capsys, [
            "--file", str(FIXTURES / "file.input"),
            "--number", "2",
        ])

        assert code == 0
        assert out == OUTPUT

    @pytest.mark.parametrize("name", ["bom.csv", "export.dat"])
    def test_any_file_name_is_read(self, monkeypatch, capsys, tmp_path, name):
        path = tmp_path / name
        path.write_text("Z1,Z3;40001;Keystone\n")
        code, out, err = run(monkeypatch, capsys, ["-f", str(path), "-n", "1"])

        assert code == 0
        assert err == ""
        assert json.loads(out)[0]["MPN"] == "40001"

    def test_number_required(self, monkeypatch, capsys):
        code, _, err = run(monkeypatch, capsys, ["--file", str(FIXTURES / "file.input")])

        assert code == 1
        assert err == "must specify --number/-n when reading from a file!\n"

    def test_missing_file(self, monkeypatch, capsys, tmp_path):
        code, out, err = run(monkeypatch, capsys, ["-f", str(tmp_path / "nope.txt"), "-n", "1"])

        assert code == 1
        assert out == ""
        assert "File not found" in err

    def test_export_output(self, monkeypatch, capsys, tmp_path):
        target = tmp_path / "result.csv"
        code, _, _ = run(monkeypatch, capsys, [
            "-f", str(FIXTURES / "file.input"), "-n", "2", "-o", str(target),
        ])

        assert code == 0
        assert target.read_text(encoding="utf-8").splitlines()[0] == (
            "MPN,Manufacturer,ReferenceDesignators,NumOccurrences"
        )


class TestFormatting:

    def test_two_spaces_by_default(self, monkeypatch, capsys):
        expected = json.dumps(json.loads(OUTPUT), indent=2) + "\n"
        code, out, _ = run(monkeypatch, capsys, [], stdin=f"2\n{INPUT}")

        assert code == 0
        assert out == expected

    def test_spaces_option(self, monkeypatch, capsys):
        expected = json.dumps(json.loads(OUTPUT), indent=4) + "\n"
        code, out, _ = run(monkeypatch, capsys, ["--spaces", "4"], stdin=f"2\n{INPUT}")

        assert code == 0
        assert out == expected

    def test_spaces_from_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("BOMPARSE_SPACES", "3")
        expected = json.dumps(json.loads(OUTPUT), indent=3) + "\n"
        code, out, _ = run(monkeypatch, capsys, [], stdin=f"2\n{INPUT}")

        assert code == 0
        assert out == expected

    def test_invalid_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("BOMPARSE_SPACES", "wide")
        code, _, err = run(monkeypatch, capsys, [], stdin=f"2\n{INPUT}")

        assert code == 1
        assert "BOMPARSE_SPACES" in err

    def test_spaces_clamped_to_ten(self, monkeypatch, capsys):
        expected = json.dumps(json.loads(OUTPUT), indent=10) + "\n"
        code, out, _ = run(monkeypatch, capsys, ["--spaces", "12"], stdin=f"2\n{INPUT}")

        assert code == 0
        assert out == expected
