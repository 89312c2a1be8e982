import pytest

from territory.domain.board import Board, Coordinate, Corner, PlayerColor
from territory.domain.corner_tracker import (
    frontier_cells,
    is_frontier,
    owned_corner,
    resolve_anchor,
)
from territory.domain.move_rules import RuleViolation


@pytest.mark.parametrize("corner", list(Corner))
def test_first_move_may_take_any_corner(corner: Corner) -> None:
    board = Board()
    assert resolve_anchor(board, PlayerColor.red, corner.coordinate) == corner


def test_first_move_off_corner_is_rejected() -> None:
    board = Board()
    with pytest.raises(RuleViolation):
        resolve_anchor(board, PlayerColor.red, Coordinate(1, 0))


def test_second_player_takes_opposite_corner() -> None:
    board = Board()
    board.claim(Coordinate(0, 29), Coordinate(2, 28), PlayerColor.red)

    assert resolve_anchor(board, PlayerColor.blue, Coordinate(29, 0)) == Corner.BOTTOM_LEFT
    with pytest.raises(RuleViolation):
        resolve_anchor(board, PlayerColor.blue, Coordinate(29, 29))
    with pytest.raises(RuleViolation):
        resolve_anchor(board, PlayerColor.blue, Coordinate(3, 29))


def test_later_moves_start_on_frontier() -> None:
    board = Board()
    board.claim(Coordinate(0, 0), Coordinate(2, 1), PlayerColor.red)
    board.claim(Coordinate(29, 29), Coordinate(27, 28), PlayerColor.blue)

    assert resolve_anchor(board, PlayerColor.red, Coordinate(3, 0)) == Corner.TOP_LEFT
    assert resolve_anchor(board, PlayerColor.red, Coordinate(0, 2)) == Corner.TOP_LEFT
    assert resolve_anchor(board, PlayerColor.blue, Coordinate(26, 29)) == Corner.BOTTOM_RIGHT
    with pytest.raises(RuleViolation):
        resolve_anchor(board, PlayerColor.red, Coordinate(10, 10))
    with pytest.raises(RuleViolation):
        # Owned cell, not a frontier cell.
        resolve_anchor(board, PlayerColor.red, Coordinate(1, 1))
    with pytest.raises(RuleViolation):
        # Frontier of the opponent.
        resolve_anchor(board, PlayerColor.red, Coordinate(26, 29))


def test_color_without_corner_is_rejected() -> None:
    board = Board()
    board.claim(Coordinate(0, 0), Coordinate(0, 0), PlayerColor.red)
    board.claim(Coordinate(29, 29), Coordinate(29, 29), PlayerColor.red)
    with pytest.raises(RuleViolation):
        resolve_anchor(board, PlayerColor.blue, Coordinate(1, 0))


def test_frontier_of_single_corner_cell() -> None:
    board = Board()
    board.claim(Coordinate(0, 0), Coordinate(0, 0), PlayerColor.red)
    assert frontier_cells(board, PlayerColor.red) == {Coordinate(0, 1), Coordinate(1, 0)}
    assert frontier_cells(board, PlayerColor.blue) == set()


def test_frontier_excludes_claimed_cells() -> None:
    board = Board()
    board.claim(Coordinate(0, 0), Coordinate(1, 1), PlayerColor.red)
    board.claim(Coordinate(2, 0), Coordinate(2, 0), PlayerColor.blue)

    cells = frontier_cells(board, PlayerColor.red)
    assert cells == {Coordinate(0, 2), Coordinate(1, 2), Coordinate(2, 1)}
    assert not is_frontier(board, PlayerColor.red, Coordinate(2, 0))
    assert not is_frontier(board, PlayerColor.red, Coordinate(2, 2))


def test_owned_corner() -> None:
    board = Board()
    assert owned_corner(board, PlayerColor.red) is None
    board.claim(Coordinate(29, 0), Coordinate(28, 0), PlayerColor.red)
    assert owned_corner(board, PlayerColor.red) == Corner.BOTTOM_LEFT


def test_recorded_anchor_survives_reaching_another_corner() -> None:
    board = Board()
    board.claim(Coordinate(29, 29), Coordinate(27, 28), PlayerColor.red)
    board.claim(Coordinate(0, 0), Coordinate(2, 1), PlayerColor.blue)
    board.claim(Coordinate(0, 29), Coordinate(26, 29), PlayerColor.red)

    anchor = resolve_anchor(board, PlayerColor.red, Coordinate(26, 28), Corner.BOTTOM_RIGHT)

    assert anchor == Corner.BOTTOM_RIGHT
    assert anchor.signs == (-1, -1)


def test_recorded_anchor_still_requires_frontier_start() -> None:
    board = Board()
    board.claim(Coordinate(29, 29), Coordinate(27, 28), PlayerColor.red)
    board.claim(Coordinate(0, 0), Coordinate(2, 1), PlayerColor.blue)
    with pytest.raises(RuleViolation):
        resolve_anchor(board, PlayerColor.red, Coordinate(15, 15), Corner.BOTTOM_RIGHT)
