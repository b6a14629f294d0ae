"""SeaBattle game with telemetry hooks."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

from seabattle.engine.game import RoundResult, SeaBattleGame, ShotRecord
from seabattle.telemetry import get_logger, get_tracer, record_game_metric


@dataclass
class InstrumentedSeaBattleGame(SeaBattleGame):
    """Wraps SeaBattleGame rounds with tracing, metrics, and logging."""

    _game_span_cm: Any = field(init=False, default=None, repr=False)
    _game_span: Any = field(init=False, default=None, repr=False)
    _game_start_time: float | None = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        self._logger = get_logger("seabattle.engine")
        self._tracer = get_tracer("seabattle.engine")

    def play_round(self) -> RoundResult:
        if self._game_span_cm is None and not self.is_over:
            self._start_game_span()

        try:
            with self._tracer.start_as_current_span("seabattle.engine.play_round") as span:
                span.set_attribute("round", self.rounds + 1)
                result = super().play_round()
                for shot in (result.human_shot, result.computer_shot):
                    if shot is not None:
                        self._record_shot(shot)
                if result.winner is not None:
                    span.set_attribute("winner", result.winner.value)
        except Exception as exc:
            record_game_metric("seabattle_game_errors_total", 1, {"error": type(exc).__name__})
            self._logger.error("Round %d failed: %s", self.rounds, exc)
            self._close_game_span()
            raise
        except BaseException:
            self._logger.warning("Round %d interrupted", self.rounds + 1)
            self._close_game_span()
            raise

        # The game span is closed only after the round span has left the context.
        if result.winner is not None:
            self._finish_game()
        return result

    def _record_shot(self, shot: ShotRecord) -> None:
        record_game_metric("seabattle_shots_total", 1, {"side": shot.side.value})
        record_game_metric(
            "seabattle_shots_by_result_total",
            1,
            {"side": shot.side.value, "result": shot.outcome.label},
        )
        self._logger.info(
            "shot side=%s coord=(%d,%d) outcome=%s",
            shot.side.value,
            shot.coordinate.row,
            shot.coordinate.col,
            shot.outcome.label,
        )

    def _start_game_span(self) -> None:
        self._game_start_time = time.perf_counter()
        self._game_span_cm = self._tracer.start_as_current_span("seabattle.engine.game")
        self._game_span = self._game_span_cm.__enter__()
        self._game_span.set_attribute("board.size", self.human_board.size)
        self._game_span.set_attribute("human.ships", self.human_board.remaining_ships())
        self._game_span.set_attribute("computer.ships", self.enemy_board.remaining_ships())

    def _finish_game(self) -> None:
        duration = (time.perf_counter() - self._game_start_time) if self._game_start_time else 0.0
        winner = self.winner.value if self.winner else "unknown"

        record_game_metric("seabattle_game_completed_total", 1, {"winner": winner})
        record_game_metric("seabattle_game_duration_seconds", duration, {"winner": winner})

        with self._tracer.start_as_current_span("seabattle.engine.game_complete") as span:
            span.set_attribute("winner", winner)
            span.set_attribute("rounds", self.rounds)
            span.set_attribute("duration_ms", duration * 1000)

        if self._game_span is not None:
            self._game_span.set_attribute("winner", winner)
            self._game_span.set_attribute("rounds", self.rounds)

        self._logger.info(
            "Game finished. Winner=%s rounds=%d duration_s=%.3f", winner, self.rounds, duration
        )
        self._close_game_span()

    def _close_game_span(self) -> None:
        if self._game_span_cm is not None:
            self._game_span_cm.__exit__(None, None, None)
            self._game_span_cm = None
            self._game_span = None
