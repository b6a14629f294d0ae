"""Text rendering and keyboard input for playing in a terminal."""

from __future__ import annotations

from typing import Callable

from colorama import Fore, Style

from seabattle.engine.attack import AttackOutcome
from seabattle.engine.board import Board, BoardView, Cell, Coordinate
from seabattle.engine.game import GameObserver, SeaBattleGame, Side

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]

CELL_COLORS = {
    Cell.EMPTY: Fore.CYAN,
    Cell.SHIP: Fore.GREEN,
    Cell.HIT: Fore.RED,
    Cell.MISS: Fore.YELLOW,
}


def paint(text: str, color: str, enabled: bool = True) -> str:
    return f"{color}{text}{Style.RESET_ALL}" if enabled else text


def render_board(grid: Board | BoardView, reveal_ships: bool, color: bool = True) -> str:
    """Render ``grid`` one row per line; ships show only when ``reveal_ships``."""
    lines = []
    for row in grid.rows():
        symbols = []
        for cell in row:
            if cell is Cell.SHIP and not reveal_ships:
                cell = Cell.EMPTY
            symbols.append(paint(cell.value, CELL_COLORS[cell], color))
        lines.append(" ".join(symbols))
    return "\n".join(lines)


def tutorial_text(size: int, color: bool = True) -> str:
    legend = ", ".join(
        [
            "S = Ship",
            paint("X = Hit", Fore.RED, color),
            paint("M = Miss", Fore.YELLOW, color),
            paint("0 = Empty", Fore.CYAN, color) + ".",
        ]
    )
    return "\n".join(
        [
            "\nTutorial:",
            f"You and the computer each get a {size}x{size} grid.",
            legend,
            "Take turns guessing enemy positions until all ships are sunk.",
            "Good luck!\n",
        ]
    )


def offer_tutorial(
    size: int, input_fn: InputFn | None = None, output: OutputFn = print, color: bool = True
) -> bool:
    """Greet the player and print the tutorial if they answer ``y``."""
    output("Welcome to Battleship!")
    choice = (input_fn or input)("Would you like to see the tutorial? (y/n): ")
    if choice.strip().lower() != "y":
        return False
    output(tutorial_text(size, color))
    return True


class ConsoleCoordinateSource:
    """Prompts for a one-based row and column until both are on the board."""

    def __init__(
        self, size: int, input_fn: InputFn | None = None, output: OutputFn = print
    ) -> None:
        self.size = size
        self._input = input_fn or input
        self._output = output

    def get_coordinate(self) -> Coordinate:
        while True:
            try:
                row = int(self._input(f"Enter row (1-{self.size}): ")) - 1
                col = int(self._input(f"Enter column (1-{self.size}): ")) - 1
            except ValueError:
                self._output(f"Invalid input. Enter a number 1-{self.size}.")
                continue
            if 0 <= row < self.size and 0 <= col < self.size:
                return Coordinate(row, col)
            self._output("Invalid coordinates. Try again.")


class ConsoleObserver(GameObserver):
    """Prints boards, shot results and the final verdict."""

    def __init__(self, output: OutputFn = print, color: bool = True) -> None:
        self._output = output
        self.color = color

    def round_started(self, game: SeaBattleGame) -> None:
        self._output("\nYour grid:")
        self._output(render_board(game.human_board, reveal_ships=True, color=self.color))
        self._output("\nEnemy grid:")
        self._output(render_board(game.human_view, reveal_ships=False, color=self.color))

    def shot_resolved(self, side: Side, coord: Coordinate, outcome: AttackOutcome) -> None:
        if side is Side.COMPUTER:
            self._output(f"Enemy fires at {coord}")
        if outcome.repeated:
            self._output("That cell was already targeted.")
        elif outcome.hit:
            self._output(paint("Hit!", Fore.RED, self.color))
        else:
            self._output(paint("Miss!", Fore.YELLOW, self.color))

    def game_over(self, winner: Side) -> None:
        if winner is Side.HUMAN:
            self._output(paint("You win!", Fore.GREEN, self.color))
        else:
            self._output(
                paint("The enemy has sunk all your ships. Game over!", Fore.RED, self.color)
            )
