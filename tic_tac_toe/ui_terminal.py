# ruff: noqa: T201

from tic_tac_toe.board import BOARD_SIZE, Mark
from tic_tac_toe.ui import Ui


class TerminalUi(Ui):
    def run(self) -> None:
        super().run()
        self._game_engine.start()
        while self._running:
            self._get_input()
        print("Terminal UI stopped", flush=True)

    def enable_input(self) -> None:
        super().enable_input()
        if not self._running:
            return
        self._ask_for_move()

    def _ask_for_move(self) -> None:
        max_move = BOARD_SIZE * BOARD_SIZE
        player = self._game_engine.query_active_player()
        print(f"{player.name} ({player.mark}), your move (1-{max_move}): ", end="", flush=True)

    def _get_input(self) -> None:
        try:
            input_str = input().strip()
        except (KeyboardInterrupt, EOFError):
            self._stop()
            return

        if input_str == "exit":
            self._stop()
            return

        if input_str == "r":
            self._restart()
            return

        if not self._input_enabled or not self._running:
            return

        try:
            board_position = int(input_str)
        except ValueError:
            self._on_input_error(ValueError("Not an integer"))
            self._ask_for_move()
            return

        max_move = BOARD_SIZE * BOARD_SIZE
        if not (1 <= board_position <= max_move):
            self._on_input_error(ValueError(f"Not between 1 and {max_move}"))
            self._ask_for_move()
            return

        y, x = divmod(board_position - 1, BOARD_SIZE)
        self._apply_move(x, y)

    def _render_board(self) -> None:
        board = self._snapshot.board

        def _cell_value(x: int, y: int) -> str:
            value = board[y][x]
            return str(value) if value is not Mark.EMPTY else str(y * BOARD_SIZE + x + 1)

        rows = [" " + " | ".join(_cell_value(x, y) for x in range(BOARD_SIZE)) + " " for y in range(BOARD_SIZE)]
        separator = "\n-----------\n"
        output = separator.join(rows)
        print(f"\n{output}\n", flush=True)

    def _show_end_message(self, msg: str) -> None:
        print(msg, flush=True)
        print("Type 'r' to play again or 'exit' to quit: ", end="", flush=True)

    def _on_input_error(self, exception: Exception) -> None:
        if not self._running:
            return
        print(str(exception), flush=True)
