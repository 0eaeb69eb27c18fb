from typing import Optional

import numpy as np

from merge2048.game import TILE_IDS, Grid, Tile, TileCounter, empty_positions

TWO_PROB = 0.9


class Spawner:
    _rand: np.random.Generator

    def __init__(
        self,
        two_prob: float = TWO_PROB,
        seed: Optional[int] = None,
        counter: TileCounter | None = None,
    ):
        """
        :param two_prob: probability to spawn 2. otherwise 4.
        """
        if not 0 <= two_prob <= 1:
            raise ValueError(f"two_prob must be in [0, 1]: {two_prob!r}")

        self.two_prob = two_prob
        self.counter = counter if counter is not None else TILE_IDS
        self.reset(seed)

    def reset(self, seed: Optional[int] = None):
        self._rand = np.random.default_rng(seed)

    def add_random_tile(self, board: Grid) -> Grid:
        empty = empty_positions(board)
        if not empty:
            return board

        if len(empty) == 1:
            r, c = empty[0]
        else:
            r, c = empty[self._rand.integers(len(empty))]

        # drawn separately from the cell choice
        chance = self._rand.uniform()
        value = 2 if chance < self.two_prob else 4

        tile = Tile(
            id=self.counter.next_id(),
            value=value,
            row=r,
            col=c,
            is_new=True,
        )

        rows = [list(row) for row in board]
        rows[r][c] = tile
        return tuple(tuple(row) for row in rows)


_default_spawner = Spawner()


def default_spawner() -> Spawner:
    return _default_spawner


def add_random_tile(board: Grid) -> Grid:
    return default_spawner().add_random_tile(board)
