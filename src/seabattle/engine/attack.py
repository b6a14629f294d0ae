"""Applies a single guess to a board and reports the outcome."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from seabattle.telemetry import get_meter, get_tracer

from .board import Board, BoardView, Cell, Coordinate
from .errors import OutOfBoundsError

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.engine.attack")
meter = get_meter("seabattle.engine.attack")

ATTACK_COUNTER = meter.create_counter(
    "seabattle_engine_attacks",
    unit="1",
    description="Attacks resolved against a board",
)


@dataclass(frozen=True)
class AttackOutcome:
    """Result of one resolved guess.

    ``repeated`` marks a guess on a cell that was already hit or missed; such a
    guess changes nothing and reports the cell's existing state.
    """

    hit: bool
    all_ships_destroyed: bool
    repeated: bool = False
    cell: Cell | None = None

    @property
    def label(self) -> str:
        if self.repeated:
            return "repeat_hit" if self.hit else "repeat_miss"
        return "hit" if self.hit else "miss"


def resolve_attack(target: Board, view: BoardView | None, coord: Coordinate) -> AttackOutcome:
    """Fire at ``coord`` on ``target``, mirroring the result into ``view``.

    ``view`` is None when the attacked board doubles as its own view, as for
    the computer firing on the human's board.
    """
    with tracer.start_as_current_span("attack.resolve") as span:
        span.set_attribute("attack.row", coord.row)
        span.set_attribute("attack.col", coord.col)
        span.set_attribute("board.owner", target.owner)
        if not target.is_valid_coordinate(coord):
            logger.error(
                "attack_out_of_bounds",
                extra={"row": coord.row, "col": coord.col, "owner": target.owner},
            )
            raise OutOfBoundsError(
                f"{coord!r} is outside a {target.size}x{target.size} board."
            )

        current = target.cell(coord)
        repeated = current.is_resolved
        result = current if repeated else target.strike(coord)
        if view is not None:
            view.record(coord, result)

        outcome = AttackOutcome(
            hit=result is Cell.HIT,
            all_ships_destroyed=target.is_destroyed(),
            repeated=repeated,
            cell=result,
        )
        span.set_attribute("attack.outcome", outcome.label)
        span.set_attribute("board.remaining_ships", target.remaining_ships())
        ATTACK_COUNTER.add(1, attributes={"outcome": outcome.label, "owner": target.owner})
        event = "attack_repeated" if repeated else f"attack_{outcome.label}"
        logger.info(
            event,
            extra={
                "row": coord.row,
                "col": coord.col,
                "owner": target.owner,
                "remaining_ships": target.remaining_ships(),
            },
        )
        return outcome
