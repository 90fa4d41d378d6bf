"""Factory functions for creating game components.

Provides factories for creating:
- Players (local human, easy AI, hard AI)
- Game engines wired to their UIs
"""

import random
from enum import Enum

from tic_tac_toe.board import Mark
from tic_tac_toe.game_engine import GameEngine
from tic_tac_toe.player import Player
from tic_tac_toe.player_ai import HardAiPlayer, RandomAiPlayer
from tic_tac_toe.player_local import LocalPlayer
from tic_tac_toe.ui import Ui


class GameMode(Enum):
    HUMAN_VS_HUMAN = "human"
    HUMAN_VS_EASY_AI = "easy-ai"
    HUMAN_VS_HARD_AI = "hard-ai"


def create_player(player_type: str, name: str, mark: Mark, rng: random.Random | None = None) -> Player:
    match player_type:
        case "human":
            return LocalPlayer(name, mark)
        case "easy-ai":
            return RandomAiPlayer(name, mark, rng)
        case "hard-ai":
            return HardAiPlayer(name, mark)
        case _:
            msg = f"Unknown player type: {player_type}. Choose from 'human', 'easy-ai', 'hard-ai'."
            raise ValueError(msg)


def new_game(
    player_one_name: str = "Player One",
    player_two_name: str = "Player Two",
    mode: GameMode = GameMode.HUMAN_VS_HUMAN,
    *,
    auto_move_delay: float = 0.0,
    rng: random.Random | None = None,
) -> GameEngine:
    """Build a game where player one (X) is human and player two (O) is picked by `mode`."""
    player_one = create_player("human", player_one_name, Mark.X)
    player_two = create_player(mode.value, player_two_name, Mark.O, rng)
    return GameEngine(player_one, player_two, auto_move_delay=auto_move_delay)


def config_game_engine(game_engine: GameEngine, uis: list[Ui]) -> GameEngine:
    for player in game_engine.game.players:
        if isinstance(player, LocalPlayer):
            for ui in uis:
                player.add_enable_input_cb(ui.enable_input)
    for ui in uis:
        game_engine.add_board_updated_cb(ui.on_board_updated)
        game_engine.add_on_error_cb(ui.on_error)

    return game_engine
