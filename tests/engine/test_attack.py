"""Tests for attack resolution."""

import random

import pytest
from seabattle.engine.attack import AttackOutcome, resolve_attack
from seabattle.engine.board import Board, BoardView, Cell, Coordinate, create_board
from seabattle.engine.errors import OutOfBoundsError


def test_hit_marks_board_and_view() -> None:
    board = Board.from_ships(4, [Coordinate(1, 2), Coordinate(3, 3)])
    view = BoardView(size=4)

    outcome = resolve_attack(board, view, Coordinate(1, 2))

    assert outcome == AttackOutcome(hit=True, all_ships_destroyed=False, cell=Cell.HIT)
    assert board.cell(Coordinate(1, 2)) is Cell.HIT
    assert view.cell(Coordinate(1, 2)) is Cell.HIT
    assert board.remaining_ships() == 1


def test_miss_marks_board_and_view_without_touching_ships() -> None:
    board = Board.from_ships(4, [Coordinate(0, 0)])
    view = BoardView(size=4)

    outcome = resolve_attack(board, view, Coordinate(2, 1))

    assert outcome.hit is False
    assert outcome.all_ships_destroyed is False
    assert board.cell(Coordinate(2, 1)) is Cell.MISS
    assert view.cell(Coordinate(2, 1)) is Cell.MISS
    assert board.remaining_ships() == 1


def test_repeat_hit_is_a_no_op() -> None:
    board = Board.from_ships(4, [Coordinate(0, 0), Coordinate(0, 1)])

    first = resolve_attack(board, None, Coordinate(0, 0))
    assert first.hit and not first.repeated
    assert board.remaining_ships() == 1

    second = resolve_attack(board, None, Coordinate(0, 0))
    assert second.hit
    assert second.repeated
    assert second.label == "repeat_hit"
    assert board.remaining_ships() == 1
    assert board.count(Cell.HIT) == 1


def test_repeat_miss_is_a_no_op() -> None:
    board = Board.from_ships(4, [Coordinate(0, 0)])
    resolve_attack(board, None, Coordinate(3, 3))
    before = board.rows()

    outcome = resolve_attack(board, None, Coordinate(3, 3))

    assert outcome == AttackOutcome(
        hit=False, all_ships_destroyed=False, repeated=True, cell=Cell.MISS
    )
    assert board.rows() == before


def test_last_ship_reports_destruction() -> None:
    board = Board.from_ships(4, [Coordinate(2, 2)])
    outcome = resolve_attack(board, BoardView(size=4), Coordinate(2, 2))
    assert outcome.hit is True
    assert outcome.all_ships_destroyed is True


def test_self_owned_board_without_view_keeps_ships_visible() -> None:
    board = Board.from_ships(4, [Coordinate(0, 0), Coordinate(1, 1)])
    resolve_attack(board, None, Coordinate(0, 0))
    assert board.cell(Coordinate(0, 0)) is Cell.HIT
    assert board.cell(Coordinate(1, 1)) is Cell.SHIP


def test_view_hides_untouched_ships() -> None:
    board = Board.from_ships(4, [Coordinate(0, 0), Coordinate(1, 1)])
    view = BoardView(size=4)
    resolve_attack(board, view, Coordinate(0, 0))
    resolve_attack(board, view, Coordinate(2, 2))
    assert view.count(Cell.SHIP) == 0
    assert view.cell(Coordinate(1, 1)) is Cell.EMPTY


@pytest.mark.parametrize("coord", [Coordinate(-1, 0), Coordinate(0, 4), Coordinate(4, 4)])
def test_out_of_bounds_attack_fails_fast(coord: Coordinate) -> None:
    board = Board.from_ships(4, [Coordinate(0, 0)])
    with pytest.raises(OutOfBoundsError):
        resolve_attack(board, None, coord)
    assert board.count(Cell.MISS) == 0


def test_hits_plus_remaining_ships_is_conserved() -> None:
    rng = random.Random(2024)
    board = create_board(4, 4, rng=rng)
    view = BoardView(size=4)

    for _ in range(40):
        coord = Coordinate(rng.randrange(4), rng.randrange(4))
        resolve_attack(board, view, coord)
        assert board.remaining_ships() + board.count(Cell.HIT) == 4
        assert view.count(Cell.HIT) == board.count(Cell.HIT)
        assert view.count(Cell.MISS) == board.count(Cell.MISS)
