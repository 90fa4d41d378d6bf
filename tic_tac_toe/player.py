from abc import ABC, abstractmethod

from tic_tac_toe.board import Board, Coordinate, Mark


class Player(ABC):
    def __init__(self, name: str, mark: Mark) -> None:
        if mark is Mark.EMPTY:
            raise ValueError("A player needs a non-empty mark.")
        self._name = name
        self._mark = mark

    @property
    def name(self) -> str:
        return self._name

    @property
    def mark(self) -> Mark:
        return self._mark

    @property
    @abstractmethod
    def automated(self) -> bool:
        pass

    @abstractmethod
    def start_turn(self) -> None:
        pass

    def find_move(self, board: Board) -> Coordinate:
        msg = f"{self._name} does not choose moves automatically."
        raise NotImplementedError(msg)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, {self._mark})"
