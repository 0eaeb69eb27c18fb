"""
Terminal state detection implemented with numpy and numba
"""

import numpy as np
from numba import njit

from merge2048.game import BOARD_SIZE, Grid

WIN_VALUE = 2048

"""
The kernels read the value matrix of a board:

+------+------+------+------+
|    2 |    0 |    0 |    4 |
|    0 |    8 |    0 |    0 |
|    0 |    0 |   16 |    0 |
|    0 |    0 |    0 | 2048 |
+------+------+------+------+
"""


def to_values(board: Grid) -> np.ndarray:
    """Value matrix of the board, 0 for empty cells"""
    values = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int32)
    for r, row in enumerate(board):
        for c, tile in enumerate(row):
            if tile is not None:
                values[r, c] = tile.value
    return values


@njit
def _has_empty(values: np.ndarray) -> bool:
    rows, cols = values.shape
    for r in range(rows):
        for c in range(cols):
            if values[r, c] == 0:
                return True
    return False


@njit
def _has_adjacent_pair(values: np.ndarray) -> bool:
    rows, cols = values.shape

    # horizontal neighbours
    for r in range(rows):
        for c in range(cols - 1):
            if values[r, c] == values[r, c + 1]:
                return True

    # vertical neighbours
    for c in range(cols):
        for r in range(rows - 1):
            if values[r, c] == values[r + 1, c]:
                return True

    return False


@njit
def _reached(values: np.ndarray, target: int) -> bool:
    rows, cols = values.shape
    for r in range(rows):
        for c in range(cols):
            if values[r, c] >= target:
                return True
    return False


def check_win(board: Grid, win_value: int = WIN_VALUE) -> bool:
    return bool(_reached(to_values(board), win_value))


def check_game_over(board: Grid) -> bool:
    values = to_values(board)

    if _has_empty(values):
        return False

    return not _has_adjacent_pair(values)
