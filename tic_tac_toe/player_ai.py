import random
from abc import ABC

from tic_tac_toe.board import Board, Coordinate, Mark
from tic_tac_toe.heuristic import Difficulty, choose_easy_move, choose_hard_move
from tic_tac_toe.player import Player


class AiPlayer(Player, ABC):
    difficulty: Difficulty

    @property
    def automated(self) -> bool:
        return True

    def start_turn(self) -> None:
        # The game engine schedules automated moves itself.
        pass


class RandomAiPlayer(AiPlayer):
    difficulty = Difficulty.EASY

    def __init__(self, name: str, mark: Mark, rng: random.Random | None = None) -> None:
        super().__init__(name, mark)
        self._rng = rng or random.Random()

    def find_move(self, board: Board) -> Coordinate:
        return choose_easy_move(board, self._rng)


class HardAiPlayer(AiPlayer):
    difficulty = Difficulty.HARD

    def find_move(self, board: Board) -> Coordinate:
        return choose_hard_move(board, self._mark)
