import logging
import random
from enum import Enum

from tic_tac_toe.board import CENTER, Board, Coordinate, Mark
from tic_tac_toe.exception import LogicError
from tic_tac_toe.line_scanner import all_lines, on_back_diagonal, on_forward_diagonal, scan_line

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    EASY = "easy"
    HARD = "hard"


def choose_easy_move(board: Board, rng: random.Random | None = None) -> Coordinate:
    choices = board.unmarked_cells()
    if not choices:
        raise LogicError("No unmarked cell left to choose from.")
    rng = rng or random.Random()
    return choices[rng.randrange(len(choices))]


def choose_hard_move(board: Board, mark: Mark) -> Coordinate:
    """Pick a move for `mark` with a fixed rule cascade.

    1. Complete one of our own lines.
    2. Block a line the opponent is about to complete, center first.
    3. Take the center.
    4. Take a corner, scanning row by row.
    5. Take whatever is left, scanning row by row.

    Lines are scanned rows first, then columns, then the back and forward
    diagonals. A win always beats a block, even if the block was found first.
    """
    unmarked = board.unmarked_cells()
    if not unmarked:
        raise LogicError("No unmarked cell left to choose from.")

    opponent = mark.opponent()
    defense: list[Coordinate] = []
    for line in all_lines():
        tally = scan_line(board, line)
        winning_cell = tally.one_move_from(mark)
        if winning_cell is not None:
            logger.debug("%s wins at %s", mark, winning_cell)
            return winning_cell
        blocking_cell = tally.one_move_from(opponent)
        if blocking_cell is not None:
            defense.append(blocking_cell)

    if defense:
        move = CENTER if CENTER in defense else defense[0]
        logger.debug("%s blocks at %s (candidates: %s)", mark, move, defense)
        return move

    if CENTER in unmarked:
        logger.debug("%s takes the center", mark)
        return CENTER

    for x, y in unmarked:
        if on_back_diagonal(x, y) or on_forward_diagonal(x, y):
            logger.debug("%s takes corner %s", mark, (x, y))
            return x, y

    logger.debug("%s falls back to %s", mark, unmarked[0])
    return unmarked[0]
