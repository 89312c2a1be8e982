from typing import List

from territory.domain.move_rules import dice_total

WIN_SCORE = 450


class ScoreUtils:
    def get_move_score(self, dices: List[int]) -> int:
        """calculate the score earned by one accepted move

        Args:
            dices (List[int]): The two dice faces rolled for the move

        Returns:
            int: Sum of the dice, which is what a move scores (not the claimed area)
        """
        return dice_total(dices)

    def add_move_score(self, current_score: int, dices: List[int]) -> int:
        """Add the score of one accepted move to a cumulative score

        Args:
            current_score (int): Score of the participant before the move
            dices (List[int]): The two dice faces rolled for the move

        Returns:
            int: Updated cumulative score
        """
        return current_score + self.get_move_score(dices)

    def is_winner(self, score: int) -> bool:
        """Check whether a cumulative score reaches the winning threshold

        Args:
            score (int): Cumulative score of a participant

        Returns:
            bool: True if the participant has won
        """
        return score >= WIN_SCORE
