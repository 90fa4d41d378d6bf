from enum import Enum
from typing import Final, TypeAlias

from tic_tac_toe.exception import InvalidCoordinateError

BOARD_SIZE: Final = 3
CENTER: Final = (1, 1)

Coordinate: TypeAlias = tuple[int, int]


class Mark(Enum):
    EMPTY = " "
    X = "X"
    O = "O"  # noqa: E741

    def opponent(self) -> "Mark":
        if self is Mark.EMPTY:
            raise ValueError("An empty cell has no opponent.")
        return Mark.O if self is Mark.X else Mark.X

    def __str__(self) -> str:
        return self.value


class Cell:
    """One square of the board. Only the owning Board writes to it."""

    __slots__ = ("_value",)

    def __init__(self) -> None:
        self._value = Mark.EMPTY

    @property
    def value(self) -> Mark:
        return self._value

    @property
    def is_empty(self) -> bool:
        return self._value is Mark.EMPTY

    def add_symbol(self, mark: Mark) -> None:
        self._value = mark

    def clear(self) -> None:
        self._value = Mark.EMPTY


class Board:
    """A 3x3 grid addressed by (x, y): x is the column, y the row, y=0 is the top row."""

    def __init__(self, rows: int = BOARD_SIZE, columns: int = BOARD_SIZE) -> None:
        self._rows = rows
        self._columns = columns
        self._cells: list[list[Cell]] = [[Cell() for _ in range(columns)] for _ in range(rows)]
        self._unmarked_count = rows * columns

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def unmarked_count(self) -> int:
        return self._unmarked_count

    def get(self, x: int, y: int) -> Mark:
        return self._cell(x, y).value

    def is_unmarked(self, x: int, y: int) -> bool:
        return self._cell(x, y).is_empty

    def draw_symbol(self, x: int, y: int, mark: Mark) -> bool:
        """Mark an empty cell. Drawing over a marked cell leaves the board untouched and returns False."""
        if mark is Mark.EMPTY:
            raise ValueError("Cannot draw an empty mark.")
        cell = self._cell(x, y)
        if not cell.is_empty:
            return False
        cell.add_symbol(mark)
        self._unmarked_count -= 1
        return True

    def reset(self) -> None:
        for row in self._cells:
            for cell in row:
                cell.clear()
        self._unmarked_count = self._rows * self._columns

    def unmarked_cells(self) -> list[Coordinate]:
        return [
            (x, y) for y in range(self._rows) for x in range(self._columns) if self._cells[y][x].is_empty
        ]

    def snapshot(self) -> tuple[tuple[Mark, ...], ...]:
        return tuple(tuple(cell.value for cell in row) for row in self._cells)

    def _cell(self, x: int, y: int) -> Cell:
        if not (0 <= x < self._columns) or not (0 <= y < self._rows):
            msg = f"Coordinate ({x}, {y}) out of bounds."
            raise InvalidCoordinateError(msg)
        return self._cells[y][x]

    def __str__(self) -> str:
        rows = [" | ".join(str(cell.value) for cell in row) for row in self._cells]
        separator = "\n" + "-" * (4 * self._columns - 3) + "\n"
        return separator.join(rows)
