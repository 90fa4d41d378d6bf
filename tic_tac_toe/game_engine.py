import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from tic_tac_toe.board import Coordinate, Mark
from tic_tac_toe.evaluator import Outcome
from tic_tac_toe.exception import InvalidMoveError, InvalidStateError, LogicError
from tic_tac_toe.game import GameState, MoveResult
from tic_tac_toe.player import Player

logger = logging.getLogger(__name__)


class Phase(Enum):
    AWAITING_MOVE = "awaiting_move"
    LOCKED = "locked"
    GAME_OVER = "game_over"


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    board: tuple[tuple[Mark, ...], ...]
    active_player: Player
    outcome: Outcome
    winner: Player | None
    phase: Phase
    unmarked_count: int
    last_move: Coordinate | None = None

    @property
    def status(self) -> str:
        match self.outcome:
            case Outcome.WIN if self.winner is not None:
                return f"{self.winner.name} wins!"
            case Outcome.TIE:
                return "It's a tie."
            case _:
                return f"{self.active_player.name}'s turn."


class GameEngine:
    """Turn controller: accepts moves, evaluates them and drives the automated player.

    Automated moves are played `auto_move_delay` seconds after the turn starts,
    on a timer the engine owns. With a delay of 0 they are played right away,
    inside the call that ended the previous turn. A reset cancels any pending
    automated move.
    """

    def __init__(self, player_one: Player, player_two: Player, *, auto_move_delay: float = 0.0) -> None:
        self._game = GameState(player_one, player_two)
        self._auto_move_delay = auto_move_delay
        self._board_updated_cbs: list[Callable[[GameSnapshot], None]] = []
        self._on_error_cbs: list[Callable[[Exception], None]] = []
        self._lock = threading.RLock()
        self._pending_timer: threading.Timer | None = None
        self._pending_generation: int | None = None
        self._generation = 0
        if player_one.automated:
            self._game.lock()

    @property
    def game(self) -> GameState:
        return self._game

    @property
    def phase(self) -> Phase:
        if self._game.outcome.is_terminal:
            return Phase.GAME_OVER
        if self._game.locked:
            return Phase.LOCKED
        return Phase.AWAITING_MOVE

    @property
    def has_pending_move(self) -> bool:
        return self._pending_generation is not None

    def add_board_updated_cb(self, callback: Callable[[GameSnapshot], None]) -> None:
        self._board_updated_cbs.append(callback)

    def add_on_error_cb(self, callback: Callable[[Exception], None]) -> None:
        self._on_error_cbs.append(callback)

    def start(self) -> GameSnapshot:
        """Publish the initial board and start the first turn."""
        with self._lock:
            player_one, player_two = self._game.players
            logger.info(
                "New game: %s (%s) vs %s (%s)",
                player_one.name,
                player_one.mark,
                player_two.name,
                player_two.mark,
            )
            self._notify_board_updated()
            self._start_turn()
            return self.query_board_snapshot()

    def submit_move(self, x: int, y: int) -> MoveResult:
        """Submit a move for the active player.

        Returns a rejected result when the board is locked, the game is over or
        the cell is taken. Coordinates off the board raise InvalidCoordinateError.
        When the next player is automated and there is no delay, its reply has
        already been played when this returns.
        """
        with self._lock:
            if self._game.locked:
                message = "Game over." if self._game.outcome.is_terminal else "Waiting for the automated player."
                return self._reject(InvalidStateError(message), x, y)
            return self._accept(x, y)

    def tick(self) -> bool:
        """Play the pending automated move now instead of waiting for its timer."""
        with self._lock:
            generation = self._pending_generation
            if generation is None:
                return False
            if self._pending_timer is not None:
                self._pending_timer.cancel()
            self._play_automated_move(generation)
            return True

    def reset(self) -> GameSnapshot:
        with self._lock:
            self._cancel_pending_move()
            self._game.reset()
            logger.info("Game reset")
            self._notify_board_updated()
            self._start_turn()
            return self.query_board_snapshot()

    def close(self) -> None:
        with self._lock:
            self._cancel_pending_move()

    def query_unmarked_cells(self) -> list[Coordinate]:
        with self._lock:
            return self._game.board.unmarked_cells()

    def query_active_player(self) -> Player:
        return self._game.active_player

    def query_board_snapshot(self) -> GameSnapshot:
        with self._lock:
            return GameSnapshot(
                board=self._game.board.snapshot(),
                active_player=self._game.active_player,
                outcome=self._game.outcome,
                winner=self._game.winner,
                phase=self.phase,
                unmarked_count=self._game.board.unmarked_count,
                last_move=self._game.last_move,
            )

    def _accept(self, x: int, y: int) -> MoveResult:
        player = self._game.active_player
        try:
            outcome = self._game.apply_move(x, y)
        except InvalidMoveError as e:
            return self._reject(e, x, y)

        logger.info("%s played (%d, %d): %s", player.name, x, y, outcome.value)
        self._notify_board_updated()
        if not outcome.is_terminal:
            self._start_turn()
        return self._game.result(accepted=True)

    def _reject(self, error: InvalidMoveError, x: int, y: int) -> MoveResult:
        logger.warning("Rejected move (%d, %d) by %s: %s", x, y, self._game.active_player.name, error)
        self._notify_on_error(error)
        return self._game.result(accepted=False)

    def _start_turn(self) -> None:
        player = self._game.active_player
        if player.automated:
            self._game.lock()
            self._schedule_automated_move()
            return
        self._game.unlock()
        player.start_turn()

    def _schedule_automated_move(self) -> None:
        self._generation += 1
        generation = self._generation
        self._pending_generation = generation
        if self._auto_move_delay <= 0:
            self._play_automated_move(generation)
            return
        timer = threading.Timer(self._auto_move_delay, self._play_automated_move, args=(generation,))
        timer.daemon = True
        self._pending_timer = timer
        timer.start()

    def _play_automated_move(self, generation: int) -> None:
        with self._lock:
            if generation != self._pending_generation:
                logger.debug("Dropping stale automated move (generation %d)", generation)
                return
            self._pending_generation = None
            self._pending_timer = None

            player = self._game.active_player
            x, y = player.find_move(self._game.board)
            result = self._accept(x, y)
            if not result.accepted:
                msg = f"{player.name} chose an unplayable cell ({x}, {y})."
                raise LogicError(msg)

    def _cancel_pending_move(self) -> None:
        if self._pending_timer is not None:
            self._pending_timer.cancel()
        self._pending_timer = None
        self._pending_generation = None

    def _notify_board_updated(self) -> None:
        snapshot = self.query_board_snapshot()
        for callback in list(self._board_updated_cbs):
            callback(snapshot)

    def _notify_on_error(self, exception: Exception) -> None:
        for callback in list(self._on_error_cbs):
            callback(exception)
