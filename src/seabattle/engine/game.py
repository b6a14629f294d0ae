"""Human vs. computer turn controller."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from seabattle.telemetry import get_meter, get_tracer

from .attack import AttackOutcome, resolve_attack
from .board import Board, BoardView, Coordinate, RandomSource, create_board
from .errors import GameOverError, OutOfBoundsError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from seabattle.config import GameConfig

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.engine.game")
meter = get_meter("seabattle.engine.game")

ROUND_COUNTER = meter.create_counter(
    "seabattle_engine_rounds",
    unit="1",
    description="Rounds played in SeaBattleGame",
)


class GamePhase(Enum):
    """Where the turn loop currently stands."""

    AWAITING_HUMAN_MOVE = "awaiting_human_move"
    RESOLVING_HUMAN_ATTACK = "resolving_human_attack"
    AWAITING_COMPUTER_MOVE = "awaiting_computer_move"
    RESOLVING_COMPUTER_ATTACK = "resolving_computer_attack"
    GAME_OVER = "game_over"


class Side(Enum):
    """The two players."""

    HUMAN = "human"
    COMPUTER = "computer"

    def opponent(self) -> Side:
        return Side.COMPUTER if self is Side.HUMAN else Side.HUMAN


class CoordinateSource(Protocol):
    """Supplies the human's validated, zero-indexed guesses."""

    def get_coordinate(self) -> Coordinate:
        ...


class GameObserver:
    """Hooks for presenting the game; every method is a no-op by default."""

    def round_started(self, game: SeaBattleGame) -> None:
        pass

    def shot_resolved(self, side: Side, coord: Coordinate, outcome: AttackOutcome) -> None:
        pass

    def game_over(self, winner: Side) -> None:
        pass


@dataclass(frozen=True)
class ShotRecord:
    """One resolved attack, in the order it happened."""

    side: Side
    coordinate: Coordinate
    outcome: AttackOutcome


@dataclass(frozen=True)
class RoundResult:
    """The human's shot and, unless the human won, the computer's reply."""

    human_shot: ShotRecord
    computer_shot: ShotRecord | None = None
    winner: Side | None = None


@dataclass
class SeaBattleGame:
    """Alternates human and computer attacks until one fleet is gone."""

    human_board: Board
    enemy_board: Board
    source: CoordinateSource
    rng: RandomSource = field(default_factory=random.Random)
    observer: GameObserver = field(default_factory=GameObserver)
    human_view: BoardView = field(init=False)
    phase: GamePhase = field(init=False, default=GamePhase.AWAITING_HUMAN_MOVE)
    winner: Side | None = field(init=False, default=None)
    rounds: int = field(init=False, default=0)
    history: list[ShotRecord] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        self.human_view = BoardView(size=self.enemy_board.size)

    @classmethod
    def new(
        cls,
        config: GameConfig,
        source: CoordinateSource,
        rng: RandomSource | None = None,
        observer: GameObserver | None = None,
    ) -> SeaBattleGame:
        """Build both boards from ``config`` and return a game ready to play."""
        rng = rng or random.Random(config.seed)
        human_board = create_board(
            config.board_size, config.ship_count, rng=rng, owner=Side.HUMAN.value
        )
        enemy_board = create_board(
            config.board_size, config.ship_count, rng=rng, owner=Side.COMPUTER.value
        )
        return cls(
            human_board=human_board,
            enemy_board=enemy_board,
            source=source,
            rng=rng,
            observer=observer or GameObserver(),
        )

    @property
    def is_over(self) -> bool:
        return self.phase is GamePhase.GAME_OVER

    def play(self) -> Side:
        """Run rounds until a winner is declared and return it."""
        while self.winner is None:
            self.play_round()
        return self.winner

    def play_round(self) -> RoundResult:
        """Resolve one human attack and, if the game goes on, one computer attack."""
        with tracer.start_as_current_span("game.play_round") as span:
            if self.is_over:
                logger.error(
                    "round_rejected_game_over",
                    extra={"winner": self.winner.value if self.winner else None},
                )
                raise GameOverError("The game is already over.")

            self.observer.round_started(self)
            coord = self.source.get_coordinate()
            self._check_target(Side.HUMAN, self.enemy_board, coord)

            self.rounds += 1
            span.set_attribute("round", self.rounds)
            self.phase = GamePhase.RESOLVING_HUMAN_ATTACK
            human_shot = self._fire(Side.HUMAN, self.enemy_board, self.human_view, coord)
            if human_shot.outcome.all_ships_destroyed:
                self._finish(Side.HUMAN)
                span.set_attribute("game.winner", Side.HUMAN.value)
                ROUND_COUNTER.add(1, attributes={"winner": Side.HUMAN.value})
                return RoundResult(human_shot=human_shot, winner=Side.HUMAN)

            self.phase = GamePhase.AWAITING_COMPUTER_MOVE
            size = self.human_board.size
            coord = Coordinate(self.rng.randrange(size), self.rng.randrange(size))
            self.phase = GamePhase.RESOLVING_COMPUTER_ATTACK
            computer_shot = self._fire(Side.COMPUTER, self.human_board, None, coord)
            if computer_shot.outcome.all_ships_destroyed:
                self._finish(Side.COMPUTER)
                span.set_attribute("game.winner", Side.COMPUTER.value)
            else:
                self.phase = GamePhase.AWAITING_HUMAN_MOVE

            ROUND_COUNTER.add(
                1, attributes={"winner": self.winner.value if self.winner else "none"}
            )
            return RoundResult(
                human_shot=human_shot, computer_shot=computer_shot, winner=self.winner
            )

    def _fire(
        self, side: Side, target: Board, view: BoardView | None, coord: Coordinate
    ) -> ShotRecord:
        self._check_target(side, target, coord)
        outcome = resolve_attack(target, view, coord)
        record = ShotRecord(side=side, coordinate=coord, outcome=outcome)
        self.history.append(record)
        self.observer.shot_resolved(side, coord, outcome)
        return record

    def _check_target(self, side: Side, target: Board, coord: Coordinate) -> None:
        if not target.is_valid_coordinate(coord):
            logger.error(
                "move_rejected_out_of_bounds",
                extra={"side": side.value, "row": coord.row, "col": coord.col},
            )
            raise OutOfBoundsError(f"{side.value} targeted {coord!r}, outside the board.")

    def _finish(self, winner: Side) -> None:
        self.winner = winner
        self.phase = GamePhase.GAME_OVER
        logger.info(
            "game_finished",
            extra={"winner": winner.value, "rounds": self.rounds, "shots": len(self.history)},
        )
        self.observer.game_over(winner)
