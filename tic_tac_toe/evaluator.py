import logging
from enum import Enum

from tic_tac_toe.board import Board, Mark
from tic_tac_toe.line_scanner import Line, lines_through, scan_line

logger = logging.getLogger(__name__)


class Outcome(Enum):
    ONGOING = "ongoing"
    WIN = "win"
    TIE = "tie"

    @property
    def is_terminal(self) -> bool:
        return self is not Outcome.ONGOING


def winning_line(board: Board, x: int, y: int, mark: Mark) -> Line | None:
    """Return the line through (x, y) completed by `mark`, if there is one.

    A move can only complete a line it lies on, so the row, the column and
    the diagonals through the last move are the only lines worth checking.
    """
    for line in lines_through(x, y):
        if scan_line(board, line).is_complete(mark):
            return line
    return None


def evaluate(board: Board, x: int, y: int, mark: Mark) -> Outcome:
    line = winning_line(board, x, y, mark)
    if line is not None:
        logger.debug("%s completed line %s", mark, line)
        return Outcome.WIN
    if not board.unmarked_cells():
        return Outcome.TIE
    return Outcome.ONGOING
