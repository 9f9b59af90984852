"""
Tests for the command line entry point.

Usage:
    pytest tests/test_main.py
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from main import Application, parse_args, render_state
from nonogram.seeds import encode_image_seed
from nonogram.session import initial_state, new_game
from nonogram.solver import Difficulty, GridSize, to_solution_grid


PLUS = to_solution_grid([
    [0, 1, 0],
    [1, 1, 1],
    [0, 1, 0],
])


def test_parse_args():
    args = parse_args(["--rows", "8", "--cols", "6", "--difficulty", "hard",
                       "--seed", "abc", "--solve", "--speed", "10"])
    assert (args.rows, args.cols) == (8, 6)
    assert args.difficulty == "hard"
    assert args.seed == "abc"
    assert args.solve
    assert args.speed == 10
    assert args.strategy is None

    with pytest.raises(SystemExit):
        parse_args(["--difficulty", "custom"])
    with pytest.raises(SystemExit):
        parse_args(["--strategy", "does_not_exist"])


def test_render_state():
    state = new_game(initial_state(), GridSize(5, 5), Difficulty.MEDIUM,
                     seed=encode_image_seed(PLUS, 128))
    text = render_state(state)

    print("\n" + text)
    lines = text.splitlines()
    assert lines[0] == ". . .   | 1"
    assert lines[1] == ". . .   | 3"
    assert "col  1: 3" in lines


def test_setup_saves_settings(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    app = Application(parse_args(["--rows", "4", "--cols", "6", "--seed", "abc",
                                  "--difficulty", "easy"]))
    assert app.setup()

    out = capsys.readouterr().out
    assert "Seed: abc" in out
    assert app.state.size == GridSize(4, 6)
    assert (tmp_path / "config.json").exists()
    assert app.settings["rows"] == 4
    assert app.settings["difficulty"] == "easy"
    # No --solve: nothing to run
    assert app.run() == 0


def test_setup_reports_bad_image(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    app = Application(parse_args(["--image", str(tmp_path / "missing.png")]))
    assert not app.setup()


@pytest.mark.parametrize("argv", [
    ["--rows", "0"],
    ["--cols", "-3"],
    ["--image", "picture.png", "--threshold", "300"],
    ["--threshold", "-1"],
])
def test_setup_rejects_bad_options(tmp_path, monkeypatch, caplog, argv):
    monkeypatch.chdir(tmp_path)
    app = Application(parse_args(argv))

    assert not app.setup()
    assert "Invalid option" in caplog.text
    assert not app.state.has_game
    assert not (tmp_path / "config.json").exists()
