"""Resolve which corner a color plays from, and where it may start a move."""

from typing import Set

import numpy as np

from territory.domain.board import Board, CellState, Coordinate, Corner, PlayerColor
from territory.domain.move_rules import RuleViolation


def frontier_mask(board: Board, color: PlayerColor) -> np.ndarray:
    """Unclaimed cells sharing an edge with at least one cell owned by `color`."""
    owned = board.mask(CellState.for_color(color))
    adjacent = np.zeros_like(owned)
    adjacent[1:, :] |= owned[:-1, :]
    adjacent[:-1, :] |= owned[1:, :]
    adjacent[:, 1:] |= owned[:, :-1]
    adjacent[:, :-1] |= owned[:, 1:]
    return adjacent & board.mask(CellState.UNCLAIMED)


def frontier_cells(board: Board, color: PlayerColor) -> Set[Coordinate]:
    rows, cols = np.nonzero(frontier_mask(board, color))
    return {Coordinate(int(row), int(col)) for row, col in zip(rows, cols)}


def is_frontier(board: Board, color: PlayerColor, cell: Coordinate) -> bool:
    return bool(frontier_mask(board, color)[cell.row, cell.col])


def owned_corner(board: Board, color: PlayerColor) -> Corner | None:
    state = CellState.for_color(color)
    for corner in Corner:
        if board.corner_state(corner) == state:
            return corner
    return None


def resolve_anchor(
    board: Board, color: PlayerColor, start: Coordinate, anchor: Corner | None = None
) -> Corner:
    """Return the corner whose signs govern a move by `color` starting at `start`.

    A color keeps the corner of its first accepted move for the whole game,
    even after its territory reaches another corner.

    Args:
        board (Board): Current board of the session
        color (PlayerColor): Color of the mover
        start (Coordinate): First cell of the requested rectangle
        anchor (Corner | None): Corner recorded for `color` by an earlier accepted move

    Raises:
        RuleViolation: The start cell is not allowed for this mover

    Returns:
        Corner: The mover's anchor corner
    """
    if anchor is not None:
        if not is_frontier(board, color, start):
            raise RuleViolation(f"{tuple(start)} is not adjacent to territory of {color.value}")
        return anchor

    if board.is_empty():
        # Very first move of the game: any corner may be taken.
        corner = Corner.at(start)
        if corner is None:
            raise RuleViolation(f"first move must start on a corner, got {tuple(start)}")
        return corner

    claimed = board.claimed_corners()
    if len(claimed) == 1:
        # The opponent has moved, this color has not: it takes the opposite corner.
        corner = claimed[0].opposite
        if start != corner.coordinate:
            raise RuleViolation(
                f"first move must start on corner {tuple(corner.coordinate)}, got {tuple(start)}"
            )
        return corner

    corner = owned_corner(board, color)
    if corner is None:
        raise RuleViolation(f"color {color.value} owns no corner")
    if not is_frontier(board, color, start):
        raise RuleViolation(f"{tuple(start)} is not adjacent to territory of {color.value}")
    return corner
