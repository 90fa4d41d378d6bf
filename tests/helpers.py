from tic_tac_toe.board import Board, Mark


def board_from(*rows: str) -> Board:
    """Build a board from row strings, top row first, e.g. board_from("XO ", " X ", "  O")."""
    board = Board()
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            if char != " ":
                board.draw_symbol(x, y, Mark(char))
    return board


def count_marked(board: Board) -> int:
    return sum(1 for row in board.snapshot() for mark in row if mark is not Mark.EMPTY)
