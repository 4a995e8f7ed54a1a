"""Tests for the command-line interface (src/console/app.py), driven through typer's test runner"""

import pytest
from typer.testing import CliRunner

from src.console.app import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ["HUMAN_COLOR", "AI_THINK_SECONDS", "SEED", "LOG_LEVEL", "LOG_FILE"]:
        monkeypatch.delenv(f"CHESS_{name}", raising=False)


def test_play_and_quit() -> None:
    result = runner.invoke(app, ["play", "--think", "0", "--seed", "1"], input="exit\n")

    assert result.exit_code == 0
    assert "Human (WHITE) vs. AI (BLACK)" in result.output
    assert "8| r | n | b | q | k | b | n | r |8" in result.output
    assert "Goodbye" in result.output


def test_human_move_and_computer_reply() -> None:
    result = runner.invoke(
        app, ["play", "--think", "0", "--seed", "1"], input="e4\nquit\n"
    )

    assert result.exit_code == 0
    assert "4|   |   |   |   | P |   |   |   |4" in result.output
    assert "AI played" in result.output


def test_invalid_move_is_retried() -> None:
    result = runner.invoke(app, ["play", "--think", "0"], input="e5\nexit\n")

    assert result.exit_code == 0
    assert "Invalid move: 'e5'" in result.output


def test_computer_moves_first_for_black_player() -> None:
    result = runner.invoke(
        app, ["play", "--color", "black", "--think", "0", "--seed", "3"], input="exit\n"
    )

    assert result.exit_code == 0
    assert "Human (BLACK) vs. AI (WHITE)" in result.output
    assert "AI played" in result.output


def test_invalid_color() -> None:
    result = runner.invoke(app, ["play", "--color", "green"])

    assert result.exit_code == 1
    assert "Invalid settings" in result.output


def test_setup_into_stalemate() -> None:
    result = runner.invoke(
        app,
        ["play", "--setup", "--think", "0"],
        input="Ka3\nRb3\nka1\nKh1\ndone\nblack\n",
    )

    assert result.exit_code == 0
    assert "Could not place 'Kh1'" in result.output
    assert "Stalemate!" in result.output


def test_setup_requires_both_kings() -> None:
    result = runner.invoke(
        app,
        ["play", "--setup", "--think", "0"],
        input="Ke1\ndone\nke8\ndone\nwhite\nexit\n",
    )

    assert result.exit_code == 0
    assert "no black king" in result.output
    assert "Goodbye" in result.output


def test_promotion_prompt() -> None:
    result = runner.invoke(
        app,
        ["play", "--setup", "--think", "0", "--seed", "2"],
        input="Ke1\nkh8\nPa7\ndone\nwhite\na8\nx\nq\nexit\n",
    )

    assert result.exit_code == 0
    assert "Promote the pawn on a8" in result.output
    assert "Pick one of n/b/r/q" in result.output
    assert "8| Q |" in result.output


def test_list_moves_from_start() -> None:
    result = runner.invoke(app, ["moves"])

    assert result.exit_code == 0
    assert "WHITE has 20 legal moves" in result.output
    assert "g1f3" in result.output


def test_list_moves_after_opening() -> None:
    result = runner.invoke(app, ["moves", "e4", "e5", "Nf3", "Nc6", "Bc4", "Nf6"])

    assert result.exit_code == 0
    assert result.output.startswith("WHITE has")
    assert "O-O" in result.output


def test_list_moves_with_illegal_move() -> None:
    result = runner.invoke(app, ["moves", "e5"])

    assert result.exit_code == 1
    assert "Cannot play 'e5'" in result.output
