"""Dice-driven move geometry, independent from transport and sessions.

A dice sum `n` allows every rectangle whose corner-to-corner cell span
multiplies to `n`. The span is expressed as a displacement from the move
start, and a corner's signs turn it into a target cell on the board.

Rule of thumb:
- OK: arithmetic on coordinates, emptiness checks through the Board.
- Not OK: deciding whose turn it is, scoring, sending messages.
"""

from typing import Iterable, List, Tuple

from territory.domain.board import Board, Coordinate

DICE_FACES = (1, 2, 3, 4, 5, 6)


class RuleViolation(ValueError):
    """A move request that breaks the game rules."""


def dice_total(dices: Iterable[int]) -> int:
    """Sum a dice roll, checking every face is a real die value."""
    total = 0
    for face in dices:
        if face not in DICE_FACES:
            raise ValueError(f"dice face must be between 1 and 6, got {face}")
        total += face
    return total


def displacements(dice_sum: int) -> List[Tuple[int, int]]:
    """Return every (row, col) displacement allowed by a dice sum.

    Each pair is a factorization `i * (n / i)` of the sum, reduced by one on
    both sides because a span of k cells is k - 1 steps away from its start.

    Args:
        dice_sum (int): Total shown by the dice

    Returns:
        List[Tuple[int, int]]: Displacements ordered by row offset
    """
    if dice_sum < 1:
        raise ValueError("dice_sum must be a positive integer")
    return [
        (factor - 1, dice_sum // factor - 1)
        for factor in range(1, dice_sum + 1)
        if dice_sum % factor == 0
    ]


def reachable_targets(
    anchor: Coordinate, signs: Tuple[int, int], dice_sum: int
) -> List[Coordinate]:
    """Apply a corner's sign convention to every displacement of `dice_sum`."""
    row_sign, col_sign = signs
    return [
        Coordinate(anchor.row + row_sign * row_offset, anchor.col + col_sign * col_offset)
        for row_offset, col_offset in displacements(dice_sum)
    ]


def is_reachable(
    anchor: Coordinate, target: Coordinate, signs: Tuple[int, int], dice_sum: int
) -> bool:
    return target in reachable_targets(anchor, signs, dice_sum)


def is_legal_move(
    board: Board,
    start: Coordinate,
    end: Coordinate,
    signs: Tuple[int, int],
    dice_sum: int,
) -> bool:
    """Check a rectangle claim from `start` to `end` against the dice and board.

    A start equal to the end only happens for a dice sum of 1 and is never a
    legal claim.
    """
    if start == end:
        return False
    if not is_reachable(start, end, signs, dice_sum):
        return False
    return board.is_unclaimed(start, end)
