from dataclasses import dataclass, field
from typing import TypeAlias

from tic_tac_toe.board import BOARD_SIZE, Board, Coordinate, Mark

Line: TypeAlias = tuple[Coordinate, ...]


@dataclass(frozen=True, slots=True)
class LineTally:
    """How the cells of one line are split between unmarked, X and O."""

    line: Line
    unmarked: list[Coordinate] = field(default_factory=list)
    x_count: int = 0
    o_count: int = 0

    def count(self, mark: Mark) -> int:
        match mark:
            case Mark.X:
                return self.x_count
            case Mark.O:
                return self.o_count
            case Mark.EMPTY:
                return len(self.unmarked)

    def is_complete(self, mark: Mark) -> bool:
        return self.count(mark) == len(self.line)

    def one_move_from(self, mark: Mark) -> Coordinate | None:
        """The only unmarked cell of a line already holding two of `mark`, if any."""
        if len(self.unmarked) == 1 and self.count(mark) == len(self.line) - 1:
            return self.unmarked[0]
        return None


def row_line(y: int) -> Line:
    return tuple((x, y) for x in range(BOARD_SIZE))


def column_line(x: int) -> Line:
    return tuple((x, y) for y in range(BOARD_SIZE))


def back_diagonal() -> Line:
    # Top-left to bottom-right: row == column.
    return tuple((i, i) for i in range(BOARD_SIZE))


def forward_diagonal() -> Line:
    # Top-right to bottom-left: row + column == BOARD_SIZE - 1.
    return tuple((BOARD_SIZE - 1 - i, i) for i in range(BOARD_SIZE))


def on_back_diagonal(x: int, y: int) -> bool:
    return x == y


def on_forward_diagonal(x: int, y: int) -> bool:
    return x + y == BOARD_SIZE - 1


def all_lines() -> list[Line]:
    """Every line in scan order: rows, columns, back diagonal, forward diagonal."""
    lines = [row_line(y) for y in range(BOARD_SIZE)]
    lines.extend(column_line(x) for x in range(BOARD_SIZE))
    lines.append(back_diagonal())
    lines.append(forward_diagonal())
    return lines


def lines_through(x: int, y: int) -> list[Line]:
    lines = [row_line(y), column_line(x)]
    if on_back_diagonal(x, y):
        lines.append(back_diagonal())
    if on_forward_diagonal(x, y):
        lines.append(forward_diagonal())
    return lines


def scan_line(board: Board, line: Line) -> LineTally:
    unmarked: list[Coordinate] = []
    x_count = 0
    o_count = 0
    for x, y in line:
        match board.get(x, y):
            case Mark.EMPTY:
                unmarked.append((x, y))
            case Mark.X:
                x_count += 1
            case Mark.O:
                o_count += 1
    return LineTally(line, unmarked, x_count, o_count)
