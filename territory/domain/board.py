"""Board state for the territory game.

The board is a fixed square grid of cell ownership states. It only changes
through `Board.claim`; every read goes through query helpers or copies.
"""

from enum import Enum, IntEnum
from typing import NamedTuple

import numpy as np

BOARD_SIZE = 30
LAST_INDEX = BOARD_SIZE - 1


class PlayerColor(str, Enum):
    red = "r"  # red is always the first seated player
    blue = "b"


class CellState(IntEnum):
    UNCLAIMED = 0
    RED = 1
    BLUE = 2

    @classmethod
    def for_color(cls, color: PlayerColor) -> "CellState":
        return cls.RED if color is PlayerColor.red else cls.BLUE


class Coordinate(NamedTuple):
    row: int
    col: int


class Corner(Enum):
    """The four board corners, each with its inward expansion signs."""

    TOP_LEFT = Coordinate(0, 0)
    TOP_RIGHT = Coordinate(0, LAST_INDEX)
    BOTTOM_LEFT = Coordinate(LAST_INDEX, 0)
    BOTTOM_RIGHT = Coordinate(LAST_INDEX, LAST_INDEX)

    @property
    def coordinate(self) -> Coordinate:
        return self.value

    @property
    def signs(self) -> tuple[int, int]:
        row_sign = 1 if self.value.row == 0 else -1
        col_sign = 1 if self.value.col == 0 else -1
        return row_sign, col_sign

    @property
    def opposite(self) -> "Corner":
        return _OPPOSITE_CORNERS[self]

    @classmethod
    def at(cls, coordinate: Coordinate) -> "Corner | None":
        """Return the corner located at `coordinate`, or None."""
        for corner in cls:
            if corner.value == coordinate:
                return corner
        return None


_OPPOSITE_CORNERS = {
    Corner.TOP_LEFT: Corner.BOTTOM_RIGHT,
    Corner.BOTTOM_RIGHT: Corner.TOP_LEFT,
    Corner.TOP_RIGHT: Corner.BOTTOM_LEFT,
    Corner.BOTTOM_LEFT: Corner.TOP_RIGHT,
}


def normalize_rectangle(a: Coordinate, b: Coordinate) -> tuple[slice, slice]:
    """Return row/col slices covering the inclusive rectangle between a and b."""
    top, bottom = min(a.row, b.row), max(a.row, b.row)
    left, right = min(a.col, b.col), max(a.col, b.col)
    return slice(top, bottom + 1), slice(left, right + 1)


class Board:
    def __init__(self, size: int = BOARD_SIZE):
        self.size = size
        self._cells = np.full((size, size), CellState.UNCLAIMED, dtype=np.int8)

    def reset(self) -> None:
        self._cells.fill(CellState.UNCLAIMED)

    def cell_state(self, coordinate: Coordinate) -> CellState:
        return CellState(int(self._cells[coordinate.row, coordinate.col]))

    def is_unclaimed(self, a: Coordinate, b: Coordinate) -> bool:
        """Check that every cell of the rectangle between a and b is unclaimed.

        Args:
            a (Coordinate): One corner of the rectangle
            b (Coordinate): The opposite corner, in any order relative to a

        Returns:
            bool: True if no cell in the rectangle is owned
        """
        rows, cols = normalize_rectangle(a, b)
        return bool(np.all(self._cells[rows, cols] == CellState.UNCLAIMED))

    def claim(self, a: Coordinate, b: Coordinate, color: PlayerColor) -> int:
        """Mark the rectangle between a and b as owned by `color`.

        Returns:
            int: Number of cells in the claimed rectangle
        """
        rows, cols = normalize_rectangle(a, b)
        region = self._cells[rows, cols]
        region[...] = CellState.for_color(color)
        return int(region.size)

    def corner_state(self, corner: Corner) -> CellState:
        return self.cell_state(corner.coordinate)

    def is_empty(self) -> bool:
        # Only corners are inspected: every first move starts on one.
        return all(self.corner_state(corner) == CellState.UNCLAIMED for corner in Corner)

    def claimed_corners(self) -> list[Corner]:
        return [corner for corner in Corner if self.corner_state(corner) != CellState.UNCLAIMED]

    def mask(self, state: CellState) -> np.ndarray:
        """Boolean copy of the grid marking cells in `state`."""
        return self._cells == state

    def count(self, state: CellState) -> int:
        return int(np.count_nonzero(self._cells == state))

    def snapshot(self) -> np.ndarray:
        return self._cells.copy()
