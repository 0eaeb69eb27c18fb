import pytest

from merge2048.game import Grid, TileCounter
from merge2048.spawn import Spawner
from merge2048.terminal import to_values


def values_of(board: Grid) -> list[list[int]]:
    return to_values(board).tolist()


def positions_synced(board: Grid) -> bool:
    return all(
        tile.row == r and tile.col == c
        for r, row in enumerate(board)
        for c, tile in enumerate(row)
        if tile is not None
    )


@pytest.fixture
def spawner():
    return Spawner(seed=2048, counter=TileCounter())
