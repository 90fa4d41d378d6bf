from abc import ABC, abstractmethod

from tic_tac_toe.game_engine import GameEngine, GameSnapshot, Phase


class Ui(ABC):
    def __init__(self, game_engine: GameEngine) -> None:
        self._game_engine = game_engine
        self._snapshot = game_engine.query_board_snapshot()
        self._running = False
        self._input_enabled = False

    @property
    def running(self) -> bool:
        return self._running

    def run(self) -> None:
        self._running = True

    def _stop(self) -> None:
        self._running = False

    def _apply_move(self, x: int, y: int) -> None:
        # Disable own input first so a second click can't sneak in while the move is processed.
        # The engine re-enables it through enable_input() when a human is up next.
        self._disable_input()
        result = self._game_engine.submit_move(x, y)
        if not result.accepted and self._game_engine.phase is Phase.AWAITING_MOVE:
            self.enable_input()

    def _restart(self) -> None:
        self._game_engine.reset()

    def enable_input(self) -> None:
        if not self._running:
            return
        self._input_enabled = True

    def _disable_input(self) -> None:
        self._input_enabled = False

    def on_board_updated(self, snapshot: GameSnapshot) -> None:
        self._snapshot = snapshot
        if not self._running:
            return
        # An update means the turn is over, whoever played it.
        # The next human turn enables input again.
        self._disable_input()
        self._render_board()
        if snapshot.outcome.is_terminal:
            self._show_end_message(snapshot.status)

    def on_error(self, exception: Exception) -> None:
        if not self._running:
            return
        self._on_input_error(exception)

    @abstractmethod
    def _render_board(self) -> None:
        pass

    @abstractmethod
    def _show_end_message(self, message: str) -> None:
        pass

    @abstractmethod
    def _on_input_error(self, exception: Exception) -> None:
        pass
