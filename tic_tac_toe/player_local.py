from collections.abc import Callable

from tic_tac_toe.board import Mark
from tic_tac_toe.player import Player


class LocalPlayer(Player):
    """A human whose moves arrive from the presentation layer."""

    def __init__(self, name: str, mark: Mark) -> None:
        super().__init__(name, mark)
        self._enable_input_cbs: list[Callable[[], None]] = []

    @property
    def automated(self) -> bool:
        return False

    def add_enable_input_cb(self, callback: Callable[[], None]) -> None:
        self._enable_input_cbs.append(callback)

    def start_turn(self) -> None:
        for callback in list(self._enable_input_cbs):
            callback()
