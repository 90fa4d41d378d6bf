import logging
from dataclasses import dataclass

from tic_tac_toe.board import Board, Coordinate
from tic_tac_toe.evaluator import Outcome, evaluate
from tic_tac_toe.exception import CellOccupiedError, InvalidStateError
from tic_tac_toe.player import Player

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveResult:
    accepted: bool
    outcome: Outcome
    active_player: Player
    winner: Player | None = None


class GameState:
    """Board, players and turn bookkeeping of a single game."""

    def __init__(self, player_one: Player, player_two: Player) -> None:
        if player_one.mark is player_two.mark:
            raise ValueError("Players must use distinct marks.")
        self._board = Board()
        self._players = (player_one, player_two)
        self._active_player_index = 0
        self._locked = False
        self._outcome = Outcome.ONGOING
        self._winner: Player | None = None
        self._last_move: Coordinate | None = None

    @property
    def board(self) -> Board:
        return self._board

    @property
    def players(self) -> tuple[Player, Player]:
        return self._players

    @property
    def active_player_index(self) -> int:
        return self._active_player_index

    @property
    def active_player(self) -> Player:
        return self._players[self._active_player_index]

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def winner(self) -> Player | None:
        return self._winner

    @property
    def last_move(self) -> Coordinate | None:
        return self._last_move

    def lock(self) -> None:
        self._locked = True

    def unlock(self) -> None:
        if self._outcome.is_terminal:
            raise InvalidStateError("Game over.")
        self._locked = False

    def apply_move(self, x: int, y: int) -> Outcome:
        """Mark (x, y) for the active player and advance the turn.

        Raises InvalidStateError once the game is over and CellOccupiedError if
        the cell already holds a mark. Lock checks are left to the caller so an
        automated player can move while the board is locked for everyone else.
        """
        if self._outcome.is_terminal:
            raise InvalidStateError("Game over.")

        player = self.active_player
        if not self._board.draw_symbol(x, y, player.mark):
            raise CellOccupiedError("Cell occupied.")
        self._last_move = (x, y)

        self._outcome = evaluate(self._board, x, y, player.mark)
        if self._outcome is Outcome.WIN:
            self._winner = player
        if self._outcome.is_terminal:
            self._locked = True
        else:
            self._active_player_index = 1 - self._active_player_index
        logger.debug("Board after %s played (%d, %d):\n%s", player.name, x, y, self._board)
        return self._outcome

    def reset(self) -> None:
        self._board.reset()
        self._active_player_index = 0
        self._locked = False
        self._outcome = Outcome.ONGOING
        self._winner = None
        self._last_move = None

    def result(self, *, accepted: bool) -> MoveResult:
        return MoveResult(accepted, self._outcome, self.active_player, self._winner)
