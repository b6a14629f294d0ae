"""Tests for the terminal adapters."""

from __future__ import annotations

from colorama import Fore, Style
from seabattle.engine.attack import AttackOutcome
from seabattle.engine.board import Board, BoardView, Cell, Coordinate
from seabattle.engine.game import SeaBattleGame, Side
from seabattle.ui.console import (
    ConsoleCoordinateSource,
    ConsoleObserver,
    offer_tutorial,
    render_board,
)


def scripted_input(*answers: str):
    pending = list(answers)
    prompts: list[str] = []

    def _input(prompt: str) -> str:
        prompts.append(prompt)
        return pending.pop(0)

    return _input, prompts


def test_render_board_reveals_ships_only_when_asked() -> None:
    board = Board.from_ships(2, [Coordinate(0, 0), Coordinate(1, 1)])
    board.strike(Coordinate(1, 1))
    board.strike(Coordinate(0, 1))

    assert render_board(board, reveal_ships=True, color=False) == "S M\n0 X"
    assert render_board(board, reveal_ships=False, color=False) == "0 M\n0 X"


def test_render_board_distinguishes_view_cells() -> None:
    view = BoardView(size=2)
    view.record(Coordinate(0, 1), Cell.HIT)
    assert render_board(view, reveal_ships=False, color=False) == "0 X\n0 0"


def test_render_board_colours_cells() -> None:
    board = Board.from_ships(1, [Coordinate(0, 0)])
    assert render_board(board, reveal_ships=True) == f"{Fore.GREEN}S{Style.RESET_ALL}"
    assert render_board(board, reveal_ships=False) == f"{Fore.CYAN}0{Style.RESET_ALL}"


def test_coordinate_source_converts_to_zero_based() -> None:
    input_fn, prompts = scripted_input("2", "4")
    source = ConsoleCoordinateSource(4, input_fn=input_fn, output=lambda _: None)
    assert source.get_coordinate() == Coordinate(1, 3)
    assert prompts == ["Enter row (1-4): ", "Enter column (1-4): "]


def test_coordinate_source_reprompts_on_bad_input() -> None:
    input_fn, _ = scripted_input("x", "5", "1", "0", "3", "3", "1")
    messages: list[str] = []
    source = ConsoleCoordinateSource(4, input_fn=input_fn, output=messages.append)

    assert source.get_coordinate() == Coordinate(2, 0)
    assert messages == [
        "Invalid input. Enter a number 1-4.",
        "Invalid coordinates. Try again.",
        "Invalid coordinates. Try again.",
    ]


def test_tutorial_shown_only_on_yes() -> None:
    shown: list[str] = []
    input_fn, _ = scripted_input("Y")
    assert offer_tutorial(4, input_fn=input_fn, output=shown.append, color=False) is True
    assert shown[0] == "Welcome to Battleship!"
    assert "You and the computer each get a 4x4 grid." in shown[1]

    skipped: list[str] = []
    input_fn, _ = scripted_input("no")
    assert offer_tutorial(4, input_fn=input_fn, output=skipped.append) is False
    assert skipped == ["Welcome to Battleship!"]


def test_observer_prints_boards_and_results() -> None:
    lines: list[str] = []
    observer = ConsoleObserver(output=lines.append, color=False)
    game = SeaBattleGame(
        human_board=Board.from_ships(2, [Coordinate(0, 0)]),
        enemy_board=Board.from_ships(2, [Coordinate(1, 1)]),
        source=ConsoleCoordinateSource(2),
    )

    observer.round_started(game)
    observer.shot_resolved(
        Side.COMPUTER, Coordinate(0, 1), AttackOutcome(hit=False, all_ships_destroyed=False)
    )
    observer.shot_resolved(
        Side.HUMAN, Coordinate(1, 1), AttackOutcome(hit=True, all_ships_destroyed=True)
    )
    observer.game_over(Side.HUMAN)

    assert lines == [
        "\nYour grid:",
        "S 0\n0 0",
        "\nEnemy grid:",
        "0 0\n0 0",
        "Enemy fires at (1, 2)",
        "Miss!",
        "Hit!",
        "You win!",
    ]


def test_observer_reports_repeats_and_defeat() -> None:
    lines: list[str] = []
    observer = ConsoleObserver(output=lines.append, color=False)
    observer.shot_resolved(
        Side.COMPUTER,
        Coordinate(0, 0),
        AttackOutcome(hit=True, all_ships_destroyed=False, repeated=True),
    )
    observer.game_over(Side.COMPUTER)
    assert lines == [
        "Enemy fires at (1, 1)",
        "That cell was already targeted.",
        "The enemy has sunk all your ships. Game over!",
    ]
