"""Grid model for one side of a SeaBattle match."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Protocol

from seabattle.telemetry import get_meter, get_tracer

from .errors import InvalidConfigurationError, OutOfBoundsError

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.engine.board")
meter = get_meter("seabattle.engine.board")

DEFAULT_BOARD_SIZE = 4
DEFAULT_SHIP_COUNT = 4

PLACEMENT_COUNTER = meter.create_counter(
    "seabattle_engine_ship_placements",
    unit="1",
    description="Random placement draws, split by whether the cell was free",
)


class RandomSource(Protocol):
    """The slice of :class:`random.Random` the engine draws from."""

    def randrange(self, stop: int) -> int:
        ...


class Cell(Enum):
    """State of a single board cell; values are the display symbols."""

    EMPTY = "0"
    SHIP = "S"
    HIT = "X"
    MISS = "M"

    @property
    def is_resolved(self) -> bool:
        """True once a shot has landed on the cell."""
        return self in (Cell.HIT, Cell.MISS)


# Allowed transitions once play has started.
_STRIKE_RESULT = {Cell.EMPTY: Cell.MISS, Cell.SHIP: Cell.HIT}


@dataclass(frozen=True)
class Coordinate:
    """Immutable zero-indexed board coordinate."""

    row: int
    col: int

    def __str__(self) -> str:
        return f"({self.row + 1}, {self.col + 1})"


@dataclass
class _Grid:
    size: int = DEFAULT_BOARD_SIZE
    cells: list[list[Cell]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.size < 1:
            raise InvalidConfigurationError(f"Board size must be positive, got {self.size}.")
        self.cells = [[Cell.EMPTY] * self.size for _ in range(self.size)]

    def is_valid_coordinate(self, coord: Coordinate) -> bool:
        """Check whether a coordinate lies inside the board boundaries."""
        return 0 <= coord.row < self.size and 0 <= coord.col < self.size

    def cell(self, coord: Coordinate) -> Cell:
        if not self.is_valid_coordinate(coord):
            raise OutOfBoundsError(f"{coord!r} is outside a {self.size}x{self.size} board.")
        return self.cells[coord.row][coord.col]

    def rows(self) -> tuple[tuple[Cell, ...], ...]:
        """Snapshot of the grid, row by row."""
        return tuple(tuple(row) for row in self.cells)

    def coordinates(self) -> Iterator[Coordinate]:
        for row in range(self.size):
            for col in range(self.size):
                yield Coordinate(row, col)

    def count(self, state: Cell) -> int:
        return sum(row.count(state) for row in self.cells)


@dataclass
class Board(_Grid):
    """Authoritative grid of one side, holding true ship/empty/hit/miss state."""

    owner: str = "unknown"

    @classmethod
    def from_ships(
        cls, size: int, ships: Iterable[Coordinate], owner: str = "unknown"
    ) -> Board:
        """Build a board with ships at fixed coordinates."""
        board = cls(size=size, owner=owner)
        for coord in ships:
            if not board.is_valid_coordinate(coord):
                raise InvalidConfigurationError(f"Ship at {coord!r} is off the board.")
            if not board.place_ship(coord):
                raise InvalidConfigurationError(f"Duplicate ship at {coord!r}.")
        return board

    def place_ship(self, coord: Coordinate) -> bool:
        """Put a ship on an empty cell; returns False when the cell is taken."""
        if self.cell(coord) is not Cell.EMPTY:
            return False
        self.cells[coord.row][coord.col] = Cell.SHIP
        return True

    def strike(self, coord: Coordinate) -> Cell:
        """Resolve a shot on an unresolved cell and return the new state."""
        current = self.cell(coord)
        try:
            result = _STRIKE_RESULT[current]
        except KeyError:
            raise ValueError(f"Cell {coord!r} has already been resolved as {current.name}.") from None
        self.cells[coord.row][coord.col] = result
        return result

    def remaining_ships(self) -> int:
        return self.count(Cell.SHIP)

    def is_destroyed(self) -> bool:
        return self.remaining_ships() == 0


@dataclass
class BoardView(_Grid):
    """What an attacker knows about an opponent's board; never holds ships."""

    def record(self, coord: Coordinate, state: Cell) -> None:
        if not state.is_resolved:
            raise ValueError(f"A view only records hits and misses, not {state.name}.")
        self.cell(coord)
        self.cells[coord.row][coord.col] = state


def remaining_ships(board: Board) -> int:
    """Number of ship cells not yet struck."""
    return board.remaining_ships()


def create_board(
    size: int = DEFAULT_BOARD_SIZE,
    ship_count: int = DEFAULT_SHIP_COUNT,
    rng: RandomSource | None = None,
    owner: str = "unknown",
) -> Board:
    """Create a board with ``ship_count`` ships at distinct random cells."""
    with tracer.start_as_current_span("board.create") as span:
        span.set_attribute("board.size", size)
        span.set_attribute("board.ship_count", ship_count)
        span.set_attribute("board.owner", owner)
        if size < 1 or ship_count < 0 or ship_count > size * size:
            logger.error(
                "board_configuration_invalid",
                extra={"size": size, "ship_count": ship_count, "owner": owner},
            )
            raise InvalidConfigurationError(
                f"Cannot place {ship_count} ships on a {size}x{size} board."
            )

        rng = rng or random.Random()
        board = Board(size=size, owner=owner)
        placed = 0
        attempts = 0
        while placed < ship_count:
            coord = Coordinate(rng.randrange(size), rng.randrange(size))
            attempts += 1
            if board.place_ship(coord):
                placed += 1
                PLACEMENT_COUNTER.add(1, attributes={"result": "placed", "owner": owner})
            else:
                PLACEMENT_COUNTER.add(1, attributes={"result": "occupied", "owner": owner})

        span.set_attribute("board.placement_attempts", attempts)
        logger.info(
            "board_created",
            extra={"size": size, "ship_count": ship_count, "attempts": attempts, "owner": owner},
        )
        return board
