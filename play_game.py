"""
Play the game in command line.

"""

import logging
import sys

from merge2048.config import GameConfig
from merge2048.game import STEP_DOWN, STEP_LEFT, STEP_RIGHT, STEP_UP
from merge2048.session import STATUS_PLAYING, STATUS_WON, Session
from merge2048.snapshot import format_board

_STEP_LETTERS = {
    "W": STEP_UP,
    "A": STEP_LEFT,
    "S": STEP_DOWN,
    "D": STEP_RIGHT,
}


def setup_logger(level: str, log_file=None) -> logging.Logger:
    logger = logging.getLogger("merge2048")
    logger.setLevel(level.upper())

    if log_file is not None:
        stream = logging.FileHandler(str(log_file), encoding="utf-8")
    else:
        stream = logging.StreamHandler(sys.stderr)
    logger.addHandler(stream)
    return logger


def main():
    p = GameConfig.parser()
    ns = p.parse_args()

    logger = setup_logger(ns.log_level, ns.log_file)
    session = Session(GameConfig.from_namespace(ns), logger=logger)

    while True:
        state = session.state
        print(f"Score: {state.score}  Best: {state.best_score}")
        print(format_board(state.grid))

        if state.status != STATUS_PLAYING:
            print("You win!" if state.status == STATUS_WON else "Game over")
            ans = input("Play again? [y/N] ").strip().upper()
            if ans != "Y":
                return
            session.reset()
            continue

        ans = input("Move (WASD, Q to quit): ").strip().upper()

        if ans == "Q":
            print("Bye")
            return

        try:
            direction = _STEP_LETTERS[ans]
        except KeyError:
            print("Bad action, try again")
            continue

        if not session.handle_move(direction):
            print("Nothing moved, try again")


if __name__ == "__main__":
    main()
