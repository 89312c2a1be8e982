import pytest

from territory.domain.board import (
    BOARD_SIZE,
    Board,
    CellState,
    Coordinate,
    Corner,
    PlayerColor,
    normalize_rectangle,
)


def test_new_board_is_unclaimed() -> None:
    board = Board()
    assert board.size == BOARD_SIZE
    assert board.is_empty()
    assert board.is_unclaimed(Coordinate(0, 0), Coordinate(29, 29))
    assert board.count(CellState.UNCLAIMED) == BOARD_SIZE * BOARD_SIZE


def test_claim_marks_inclusive_rectangle_in_either_order() -> None:
    board = Board()

    claimed = board.claim(Coordinate(4, 6), Coordinate(2, 3), PlayerColor.red)

    assert claimed == 3 * 4
    assert board.count(CellState.RED) == 12
    assert board.cell_state(Coordinate(2, 3)) == CellState.RED
    assert board.cell_state(Coordinate(4, 6)) == CellState.RED
    assert board.cell_state(Coordinate(5, 6)) == CellState.UNCLAIMED
    assert not board.is_unclaimed(Coordinate(0, 0), Coordinate(2, 3))
    assert board.is_unclaimed(Coordinate(5, 0), Coordinate(9, 9))


def test_is_empty_only_looks_at_corners() -> None:
    board = Board()
    board.claim(Coordinate(10, 10), Coordinate(11, 11), PlayerColor.blue)
    assert board.is_empty()

    board.claim(Coordinate(29, 29), Coordinate(28, 28), PlayerColor.blue)
    assert not board.is_empty()
    assert board.corner_state(Corner.BOTTOM_RIGHT) == CellState.BLUE
    assert board.claimed_corners() == [Corner.BOTTOM_RIGHT]


def test_reset_clears_every_cell() -> None:
    board = Board()
    board.claim(Coordinate(0, 0), Coordinate(5, 5), PlayerColor.red)
    board.reset()
    assert board.count(CellState.UNCLAIMED) == BOARD_SIZE * BOARD_SIZE


def test_snapshot_is_a_copy() -> None:
    board = Board()
    snapshot = board.snapshot()
    snapshot[0, 0] = CellState.RED
    assert board.cell_state(Coordinate(0, 0)) == CellState.UNCLAIMED


def test_normalize_rectangle() -> None:
    rows, cols = normalize_rectangle(Coordinate(7, 1), Coordinate(3, 5))
    assert (rows.start, rows.stop) == (3, 8)
    assert (cols.start, cols.stop) == (1, 6)


@pytest.mark.parametrize(
    "corner, signs, opposite",
    [
        (Corner.TOP_LEFT, (1, 1), Corner.BOTTOM_RIGHT),
        (Corner.TOP_RIGHT, (1, -1), Corner.BOTTOM_LEFT),
        (Corner.BOTTOM_LEFT, (-1, 1), Corner.TOP_RIGHT),
        (Corner.BOTTOM_RIGHT, (-1, -1), Corner.TOP_LEFT),
    ],
)
def test_corner_signs_point_inward(corner: Corner, signs: tuple[int, int], opposite: Corner) -> None:
    assert corner.signs == signs
    assert corner.opposite == opposite
    assert Corner.at(corner.coordinate) == corner


def test_corner_at_rejects_non_corner() -> None:
    assert Corner.at(Coordinate(1, 0)) is None
    assert Corner.at(Coordinate(0, 15)) is None


def test_cell_state_for_color() -> None:
    assert CellState.for_color(PlayerColor.red) == CellState.RED
    assert CellState.for_color(PlayerColor.blue) == CellState.BLUE
