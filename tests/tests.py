import random
import threading
import time

import pytest

from helpers import count_marked
from tic_tac_toe.board import Board, Mark
from tic_tac_toe.evaluator import Outcome
from tic_tac_toe.exception import CellOccupiedError, InvalidCoordinateError, InvalidStateError, LogicError
from tic_tac_toe.factories import GameMode, config_game_engine, create_player, new_game
from tic_tac_toe.game_engine import GameEngine, Phase
from tic_tac_toe.player_ai import HardAiPlayer, RandomAiPlayer
from tic_tac_toe.player_local import LocalPlayer
from tic_tac_toe.ui import Ui


class FakeUI(Ui):
    """Fake UI implementation for testing."""

    def __init__(self, game_engine: GameEngine) -> None:
        super().__init__(game_engine)
        self.board_updated_count = 0
        self.end_message: str | None = None
        self.input_errors: list[Exception] = []
        self.game_finished = False

    def run(self) -> None:
        """Start the game."""
        super().run()
        self._game_engine.start()

    def _render_board(self) -> None:
        """Track board updates."""
        self.board_updated_count += 1

    def _show_end_message(self, message: str) -> None:
        """Track end game message."""
        self.end_message = message
        self.game_finished = True

    def _on_input_error(self, exception: Exception) -> None:
        """Track rejected moves."""
        self.input_errors.append(exception)

    def get_board_state(self) -> tuple[tuple[Mark, ...], ...]:
        """Get the board as last rendered."""
        return self._snapshot.board

    def simulate_move(self, x: int, y: int) -> None:
        """Simulate a click on cell (x, y)."""
        if not self._input_enabled:
            raise RuntimeError("Input is not enabled - cannot move now")
        self._apply_move(x, y)


def create_game(mode: GameMode = GameMode.HUMAN_VS_HUMAN, **kwargs: object) -> tuple[GameEngine, FakeUI]:
    game_engine = new_game("Alice", "Bob", mode, **kwargs)  # type: ignore[arg-type]
    ui = FakeUI(game_engine)
    config_game_engine(game_engine, [ui])
    return game_engine, ui


def play_diagonal_win(ui: FakeUI) -> None:
    # X: (0, 0), (1, 1), (2, 2). O: (0, 1), (1, 0).
    for x, y in [(0, 0), (0, 1), (1, 1), (1, 0), (2, 2)]:
        ui.simulate_move(x, y)


# ============================================================================
# HAPPY PATH TESTS
# ============================================================================


class TestLocalHumanVsHuman:
    """Test local human vs human game."""

    def test_initial_state(self) -> None:
        game_engine, _ui = create_game()

        snapshot = game_engine.query_board_snapshot()
        assert snapshot.phase is Phase.AWAITING_MOVE
        assert snapshot.outcome is Outcome.ONGOING
        assert snapshot.unmarked_count == 9
        assert snapshot.status == "Alice's turn."
        assert game_engine.query_active_player().name == "Alice"
        assert game_engine.query_active_player().mark is Mark.X
        assert len(game_engine.query_unmarked_cells()) == 9

    def test_complete_game_human_vs_human(self) -> None:
        """Play a full game where X wins on the back diagonal."""
        game_engine, ui = create_game()

        ui.run()
        assert ui._input_enabled

        ui.simulate_move(0, 0)
        assert ui._input_enabled
        assert ui.get_board_state()[0][0] is Mark.X
        assert game_engine.query_active_player().name == "Bob"

        ui.simulate_move(1, 0)
        assert ui.get_board_state()[0][1] is Mark.O

        ui.simulate_move(1, 1)
        ui.simulate_move(2, 0)
        ui.simulate_move(2, 2)

        assert ui.game_finished
        assert ui.end_message == "Alice wins!"
        assert not ui._input_enabled
        assert len(ui.input_errors) == 0
        assert game_engine.phase is Phase.GAME_OVER
        assert game_engine.game.winner is not None
        assert game_engine.game.winner.name == "Alice"

    def test_submit_move_result(self) -> None:
        game_engine, _ui = create_game()

        result = game_engine.submit_move(0, 0)

        assert result.accepted
        assert result.outcome is Outcome.ONGOING
        assert result.active_player.name == "Bob"
        assert result.winner is None

    def test_top_row_win(self) -> None:
        game_engine, _ui = create_game()

        for x, y in [(0, 0), (0, 1), (1, 0), (1, 1)]:
            game_engine.submit_move(x, y)
        result = game_engine.submit_move(2, 0)

        assert result.accepted
        assert result.outcome is Outcome.WIN
        assert result.winner is not None
        assert result.winner.mark is Mark.X

    def test_tie(self) -> None:
        """O,X,O / X,O,X / X,O,X fills the board without a line."""
        game_engine, ui = create_game()
        ui.run()

        moves = [(1, 0), (0, 0), (0, 1), (1, 1), (2, 1), (2, 0), (0, 2), (1, 2), (2, 2)]
        results = [game_engine.submit_move(x, y) for x, y in moves]

        assert all(result.accepted for result in results)
        assert results[-1].outcome is Outcome.TIE
        assert results[-1].winner is None
        assert ui.end_message == "It's a tie."
        assert game_engine.phase is Phase.GAME_OVER

    def test_marked_plus_unmarked_is_always_nine(self) -> None:
        game_engine, _ui = create_game()
        rng = random.Random(99)

        while game_engine.phase is Phase.AWAITING_MOVE:
            x, y = rng.choice(game_engine.query_unmarked_cells())
            game_engine.submit_move(x, y)
            board = game_engine.game.board
            assert count_marked(board) + board.unmarked_count == 9


class TestLocalHumanVsAI:
    """Test local human vs AI games."""

    def test_human_vs_random_ai(self) -> None:
        game_engine, ui = create_game(GameMode.HUMAN_VS_EASY_AI, rng=random.Random(5))

        ui.run()
        ui.simulate_move(0, 0)

        # The bot answers right away when there is no delay.
        board = ui.get_board_state()
        assert sum(1 for row in board for cell in row if cell is Mark.X) == 1
        assert sum(1 for row in board for cell in row if cell is Mark.O) == 1
        assert ui._input_enabled

        while not ui.game_finished:
            x, y = game_engine.query_unmarked_cells()[0]
            ui.simulate_move(x, y)

        assert ui.end_message is not None
        assert "wins" in ui.end_message or "tie" in ui.end_message
        assert len(ui.input_errors) == 0

    def test_hard_ai_blocks(self) -> None:
        game_engine, _ui = create_game(GameMode.HUMAN_VS_HARD_AI)

        game_engine.submit_move(0, 0)  # Bot takes the center.
        assert game_engine.game.board.get(1, 1) is Mark.O

        game_engine.submit_move(1, 0)  # Threatens (2, 0).
        assert game_engine.game.board.get(2, 0) is Mark.O

    def test_hard_ai_takes_the_win(self) -> None:
        game_engine, _ui = create_game(GameMode.HUMAN_VS_HARD_AI)

        # X (0,0) -> O center; X (1,0) -> O blocks (2,0); O now threatens (0,2).
        game_engine.submit_move(0, 0)
        game_engine.submit_move(1, 0)
        result = game_engine.submit_move(2, 2)

        assert result.outcome is Outcome.WIN
        assert result.winner is not None
        assert result.winner.name == "Bob"
        assert game_engine.game.board.get(0, 2) is Mark.O

    def test_hard_ai_vs_hard_ai(self) -> None:
        game_engine = GameEngine(HardAiPlayer("A", Mark.X), HardAiPlayer("B", Mark.O))
        ui = FakeUI(game_engine)
        config_game_engine(game_engine, [ui])

        ui.run()

        assert ui.game_finished
        assert game_engine.game.board.unmarked_count == 0 or game_engine.game.winner is not None
        assert ui.board_updated_count == 1 + 9 - game_engine.game.board.unmarked_count

    def test_random_ai_vs_random_ai(self) -> None:
        game_engine = GameEngine(
            RandomAiPlayer("A", Mark.X, random.Random(1)),
            RandomAiPlayer("B", Mark.O, random.Random(2)),
        )
        ui = FakeUI(game_engine)
        config_game_engine(game_engine, [ui])

        assert game_engine.phase is Phase.LOCKED
        ui.run()

        assert ui.game_finished
        assert len(ui.input_errors) == 0


class TestAutomatedMoveTimer:
    """Automated moves scheduled with a delay."""

    def test_board_locked_while_bot_thinks(self) -> None:
        game_engine, ui = create_game(GameMode.HUMAN_VS_HARD_AI, auto_move_delay=60.0)
        ui.run()
        try:
            ui.simulate_move(0, 0)
            assert game_engine.phase is Phase.LOCKED
            assert game_engine.has_pending_move

            result = game_engine.submit_move(2, 2)

            assert not result.accepted
            assert isinstance(ui.input_errors[-1], InvalidStateError)
            assert game_engine.game.board.is_unmarked(2, 2)

            assert game_engine.tick()
            assert game_engine.game.board.get(1, 1) is Mark.O
            assert game_engine.phase is Phase.AWAITING_MOVE
            assert not game_engine.tick()
        finally:
            game_engine.close()

    def test_timer_plays_the_move(self) -> None:
        game_engine, _ui = create_game(GameMode.HUMAN_VS_HARD_AI, auto_move_delay=0.01)
        played = threading.Event()
        game_engine.add_board_updated_cb(lambda snapshot: snapshot.unmarked_count == 7 and played.set())
        try:
            game_engine.submit_move(0, 0)
            assert played.wait(timeout=5)
            assert game_engine.game.board.get(1, 1) is Mark.O
        finally:
            game_engine.close()

    def test_reset_cancels_pending_move(self) -> None:
        game_engine, _ui = create_game(GameMode.HUMAN_VS_HARD_AI, auto_move_delay=0.05)
        try:
            game_engine.submit_move(0, 0)
            assert game_engine.has_pending_move

            game_engine.reset()
            time.sleep(0.2)

            assert not game_engine.has_pending_move
            assert game_engine.game.board.unmarked_count == 9
            assert game_engine.phase is Phase.AWAITING_MOVE
        finally:
            game_engine.close()

    def test_stale_callback_is_ignored(self) -> None:
        game_engine, _ui = create_game(GameMode.HUMAN_VS_HARD_AI, auto_move_delay=60.0)
        try:
            game_engine.submit_move(0, 0)
            stale_generation = game_engine._pending_generation
            assert stale_generation is not None

            game_engine.reset()
            game_engine._play_automated_move(stale_generation)

            assert game_engine.game.board.unmarked_count == 9
        finally:
            game_engine.close()


class TestReset:
    def test_reset_after_win(self) -> None:
        game_engine, ui = create_game()
        ui.run()
        play_diagonal_win(ui)
        assert game_engine.phase is Phase.GAME_OVER
        board = game_engine.game.board

        snapshot = game_engine.reset()

        assert game_engine.game.board is board
        assert board.unmarked_count == 9
        assert all(mark is Mark.EMPTY for row in snapshot.board for mark in row)
        assert game_engine.query_active_player().name == "Alice"
        assert snapshot.phase is Phase.AWAITING_MOVE
        assert snapshot.winner is None
        assert ui._input_enabled

        result = game_engine.submit_move(1, 1)
        assert result.accepted

    def test_reset_mid_game(self) -> None:
        game_engine, _ui = create_game()
        game_engine.submit_move(0, 0)

        game_engine.reset()

        assert game_engine.query_active_player().mark is Mark.X
        assert game_engine.query_unmarked_cells() == [(x, y) for y in range(3) for x in range(3)]


# ============================================================================
# ERROR HANDLING TESTS
# ============================================================================


class TestErrorHandling:
    """Rejected and invalid moves."""

    def test_illegal_move_occupied_cell(self) -> None:
        game_engine, ui = create_game()
        ui.run()

        ui.simulate_move(0, 0)
        ui.simulate_move(0, 0)

        assert len(ui.input_errors) == 1
        assert isinstance(ui.input_errors[0], CellOccupiedError)
        assert "Cell occupied" in str(ui.input_errors[0])
        assert ui.get_board_state()[0][0] is Mark.X
        # Bob keeps the turn and can still play.
        assert game_engine.query_active_player().name == "Bob"
        assert ui._input_enabled

    def test_illegal_move_out_of_bounds(self) -> None:
        game_engine, ui = create_game()
        ui.run()

        with pytest.raises(InvalidCoordinateError, match="out of bounds"):
            game_engine.submit_move(5, 5)
        with pytest.raises(IndexError):
            game_engine.submit_move(-1, 0)
        assert game_engine.game.board.unmarked_count == 9

    def test_cannot_move_when_input_disabled(self) -> None:
        _game_engine, ui = create_game()
        ui.run()

        ui.simulate_move(0, 0)
        ui._disable_input()

        with pytest.raises(RuntimeError, match="Input is not enabled"):
            ui.simulate_move(1, 1)

    def test_cannot_move_after_game_ends(self) -> None:
        game_engine, ui = create_game()
        ui.run()
        play_diagonal_win(ui)
        before = game_engine.query_board_snapshot().board

        result = game_engine.submit_move(2, 0)

        assert not result.accepted
        assert result.outcome is Outcome.WIN
        assert isinstance(ui.input_errors[-1], InvalidStateError)
        assert game_engine.query_board_snapshot().board == before

    def test_ai_choosing_marked_cell_is_a_logic_error(self) -> None:
        class BrokenAiPlayer(HardAiPlayer):
            def find_move(self, board: Board) -> tuple[int, int]:  # noqa: ARG002
                return 0, 0

        game_engine = GameEngine(LocalPlayer("Alice", Mark.X), BrokenAiPlayer("Bot", Mark.O))

        with pytest.raises(LogicError):
            game_engine.submit_move(0, 0)

    def test_players_need_distinct_marks(self) -> None:
        with pytest.raises(ValueError, match="distinct marks"):
            GameEngine(LocalPlayer("A", Mark.X), LocalPlayer("B", Mark.X))

    def test_unknown_player_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown player type"):
            create_player("robot", "R2", Mark.O)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
