from typing import Dict, List
from uuid import UUID

from territory.domain.board import Board, CellState, Coordinate, PlayerColor
from territory.models.messages import MoveModel

CELL_TAGS: Dict[CellState, str] = {
    CellState.UNCLAIMED: "default__cell",
    CellState.RED: "red__cell",
    CellState.BLUE: "blue__cell",
}


class DataConverter:
    """This class is used to convert data between domain objects and wire formats."""

    def convert_board_to_field(self, board: Board) -> List[List[str]]:
        """Convert the Board to the field matrix sent to the clients

        Args:
            board (Board): The board of the session

        Returns:
            List[List[str]]: One string tag per cell, row by row
        """
        return [
            [CELL_TAGS[CellState(int(cell))] for cell in row]
            for row in board.snapshot()
        ]

    def convert_move_model_to_rectangle(self, move: MoveModel) -> tuple[Coordinate, Coordinate]:
        """Convert the MoveModel sent by a client to the two corners of its rectangle

        Args:
            move (MoveModel): The move received from the client

        Returns:
            tuple[Coordinate, Coordinate]: Start and end cell of the requested rectangle
        """
        return move.from_.to_coordinate(), move.to.to_coordinate()

    def convert_scores_to_colors(
        self, scores: Dict[UUID, int], colors: Dict[UUID, PlayerColor]
    ) -> Dict[PlayerColor, int]:
        """Re-key a participant score map by participant color"""
        return {colors[participant_id]: score for participant_id, score in scores.items()}
