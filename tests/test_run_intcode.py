"""
Command-line runner tests.
"""

import argparse

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

import run_intcode
from intcode.search import SearchConfig
from visualize import plot_sweep_heatmap

from tests.test_search import LINEAR_PROGRAM, OFFSET


@pytest.fixture
def program_file(tmp_path):
    def write(program):
        path = tmp_path / "program.txt"
        path.write_text(",".join(str(word) for word in program) + "\n")
        return str(path)
    return write


class TestRun:
    def test_pokes_and_dump(self, program_file, capsys):
        path = program_file(LINEAR_PROGRAM)
        code = run_intcode.main([path, "--set", "1=12", "--set", "2=2"])

        assert code == run_intcode.EXIT_OK
        assert f"[0] = {1202 + OFFSET}" in capsys.readouterr().out

    def test_inputs_and_outputs(self, program_file, capsys):
        path = program_file([3, 0, 4, 0, 99])
        code = run_intcode.main([path, "--input", "7", "--dump", "0", "--dump", "4"])

        out = capsys.readouterr().out.splitlines()
        assert code == run_intcode.EXIT_OK
        assert out == ["7", "[0] = 7", "[4] = 99"]

    def test_suspended_without_input(self, program_file, capsys):
        path = program_file([3, 0, 4, 0, 99])
        code = run_intcode.main([path])

        assert code == run_intcode.EXIT_SUSPENDED
        assert "waiting for input at 0" in capsys.readouterr().out

    def test_interactive(self, program_file, capsys, monkeypatch):
        answers = iter(["oops", "9"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

        path = program_file([3, 0, 4, 0, 99])
        code = run_intcode.main([path, "--interactive"])

        out = capsys.readouterr().out
        assert code == run_intcode.EXIT_OK
        assert "Not an integer: 'oops'" in out
        assert "9\n" in out

    def test_interactive_end_of_input(self, program_file, monkeypatch):
        def closed(prompt=""):
            raise EOFError

        monkeypatch.setattr("builtins.input", closed)
        path = program_file([3, 0, 99])
        assert run_intcode.main([path, "--interactive"]) == run_intcode.EXIT_SUSPENDED

    def test_invalid_program(self, program_file, capsys):
        path = program_file([42, 0, 0, 0])
        assert run_intcode.main([path]) == run_intcode.EXIT_ERROR
        assert "Invalid opcode 42" in capsys.readouterr().err

    def test_unparseable_file(self, tmp_path, capsys):
        path = tmp_path / "bad.txt"
        path.write_text("1,two,3")
        assert run_intcode.main([str(path)]) == run_intcode.EXIT_ERROR
        assert "'two'" in capsys.readouterr().err

    def test_missing_file(self, tmp_path):
        assert run_intcode.main([str(tmp_path / "nope.txt")]) == run_intcode.EXIT_ERROR


class TestModes:
    def test_disassemble(self, program_file, capsys):
        path = program_file([1101, 1, 2, 0, 99])
        assert run_intcode.main([path, "--disassemble"]) == run_intcode.EXIT_OK
        assert capsys.readouterr().out.splitlines() == ["0: ADD #1, #2, 0", "4: HLT"]

    def test_search(self, program_file, capsys):
        path = program_file(LINEAR_PROGRAM)
        assert run_intcode.main([path, "--search"]) == run_intcode.EXIT_OK
        assert capsys.readouterr().out.splitlines()[-1] == "3376"

    def test_search_unreachable(self, program_file):
        path = program_file([99])
        assert run_intcode.main([path, "--search", "5"]) == run_intcode.EXIT_ERROR

    def test_search_plot_overflow(self, program_file, tmp_path, capsys):
        # [9] := noun * verb, then [0] := [9] * 10**18
        path = program_file([1102, 0, 0, 9, 1002, 9, 10 ** 18, 0, 99])
        plot = tmp_path / "sweep.png"

        code = run_intcode.main([path, "--search", "--plot", str(plot)])

        assert code == run_intcode.EXIT_ERROR
        assert "does not fit in int64" in capsys.readouterr().err
        assert not plot.exists()

    def test_plot_requires_search(self, program_file, tmp_path):
        path = program_file([99])
        with pytest.raises(SystemExit) as exc:
            run_intcode.main([path, "--plot", str(tmp_path / "sweep.png")])
        assert exc.value.code == 2


class TestParsePoke:
    def test_valid(self):
        assert run_intcode.parse_poke("1=12") == (1, 12)

    @pytest.mark.parametrize("text", ["1", "a=2", "1=b"])
    def test_invalid(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            run_intcode.parse_poke(text)


def test_plot_sweep_heatmap(tmp_path):
    config = SearchConfig(nouns=range(3), verbs=range(4), target=5)
    grid = np.arange(12, dtype=np.int64).reshape(3, 4)

    path = tmp_path / "sweep.png"
    plot_sweep_heatmap(grid, config, save_path=str(path))

    assert path.exists()
    assert path.stat().st_size > 0


def test_plot_empty_sweep(tmp_path, capsys):
    config = SearchConfig(nouns=range(0), verbs=range(5))
    path = tmp_path / "sweep.png"

    plot_sweep_heatmap(np.zeros((0, 5), dtype=np.int64), config, save_path=str(path))

    assert not path.exists()
    assert "grid is empty" in capsys.readouterr().out
