import logging
from dataclasses import dataclass, field

from merge2048.config import GameConfig
from merge2048.event import EventEmitter
from merge2048.game import Grid, create_empty_grid, move
from merge2048.snapshot import describe_state
from merge2048.spawn import Spawner
from merge2048.storage import BestScoreStore
from merge2048.terminal import check_game_over, check_win

STATUS_PLAYING = "PLAYING"
STATUS_WON = "WON"
STATUS_LOST = "LOST"


@dataclass
class GameState:
    grid: Grid = field(default_factory=create_empty_grid)
    score: int = 0
    best_score: int = 0
    status: str = STATUS_PLAYING
    move_count: int = 0


class Session:
    """
    Drive one game: spawn, move, score and detect the end.

    The board itself is never mutated; each turn replaces `state.grid`.
    """

    EVENT_RESET: str = "reset"
    """
    args: (state,)
    """

    EVENT_MOVED: str = "moved"
    """
    args: (state, direction, score_delta)
    """

    EVENT_FINISHED: str = "finished"
    """
    args: (state,)
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        spawner: Spawner | None = None,
        store: BestScoreStore | None = None,
        logger: logging.Logger | None = None,
    ):
        if config is None:
            config = GameConfig()

        self.config = config
        self._logger = logger or logging.getLogger("merge2048")

        if spawner is None:
            spawner = Spawner(two_prob=config.two_prob, seed=config.seed)
        self._spawner = spawner

        if store is None and config.best_score_path is not None:
            store = BestScoreStore(config.best_score_path, logger=self._logger)
        self._store = store

        self._emitter = EventEmitter(
            frozenset({self.EVENT_RESET, self.EVENT_MOVED, self.EVENT_FINISHED})
        )

        self.state = GameState()
        if self._store is not None:
            self.state.best_score = self._store.load()

        self.reset()

    def add_callback(self, event: str, fn):
        self._emitter.add_listener(event, fn)

    def reset(self):
        grid = create_empty_grid()
        grid = self._spawner.add_random_tile(grid)
        grid = self._spawner.add_random_tile(grid)

        self.state.grid = grid
        self.state.score = 0
        self.state.status = STATUS_PLAYING
        self.state.move_count = 0

        self._logger.info("New game, best score %d", self.state.best_score)
        self._emitter.emit(self.EVENT_RESET, self.state)

    def handle_move(self, direction: str) -> bool:
        """
        Apply a direction.

        Return True if the board changed. Moves after the game ended are
        ignored.
        """
        state = self.state

        if state.status != STATUS_PLAYING:
            self._logger.debug("Ignore %s, game is %s", direction, state.status)
            return False

        grid, gained, moved = move(state.grid, direction)
        if not moved:
            self._logger.debug("%s changed nothing", direction)
            return False

        state.grid = self._spawner.add_random_tile(grid)
        state.score += gained
        state.move_count += 1

        if state.score > state.best_score:
            state.best_score = state.score
            if self._store is not None:
                self._store.save(state.best_score)

        if check_win(state.grid, self.config.win_value):
            state.status = STATUS_WON
        elif check_game_over(state.grid):
            state.status = STATUS_LOST

        self._logger.debug(
            "Move %d %s +%d score=%d", state.move_count, direction, gained, state.score
        )
        self._emitter.emit(self.EVENT_MOVED, state, direction, gained)

        if state.status != STATUS_PLAYING:
            self._logger.info(
                "Game %s after %d moves, score %d",
                state.status,
                state.move_count,
                state.score,
            )
            self._emitter.emit(self.EVENT_FINISHED, state)

        return True

    def snapshot(self) -> str:
        return describe_state(self.state.grid, self.state.score)
