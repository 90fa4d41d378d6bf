import argparse
import logging

from tic_tac_toe.factories import GameMode, config_game_engine, new_game
from tic_tac_toe.ui import Ui
from tic_tac_toe.ui_terminal import TerminalUi


def main() -> None:
    args = _parse_args()

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s: %(message)s")

    game_engine = new_game(
        args.player_one,
        args.player_two,
        GameMode(args.mode),
        auto_move_delay=args.delay,
    )

    ui: Ui
    match args.ui:
        case "pygame":
            # Imported lazily so the terminal UI works without pygame's display dependencies.
            from tic_tac_toe.ui_pygame import PygameUi  # noqa: PLC0415

            ui = PygameUi(game_engine)
        case _:
            ui = TerminalUi(game_engine)

    config_game_engine(game_engine, [ui])
    try:
        ui.run()
    finally:
        game_engine.close()


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="tic_tac_toe")

    parser.add_argument("--mode", choices=[mode.value for mode in GameMode], default=GameMode.HUMAN_VS_HUMAN.value)
    parser.add_argument("--player-one", default="Player One")
    parser.add_argument("--player-two", default="Player Two")
    parser.add_argument("--ui", choices=("terminal", "pygame"), default="terminal")
    parser.add_argument("--delay", type=float, default=0.5, help="seconds before the bot moves")
    parser.add_argument("--log-level", default="WARNING", choices=("DEBUG", "INFO", "WARNING", "ERROR"))

    return parser.parse_args()


if __name__ == "__main__":
    main()
