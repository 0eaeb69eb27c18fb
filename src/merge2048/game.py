"""
Board model and the transition engine.

Every direction is reduced to a slide to the left by rotating the board
clockwise, sliding, and rotating back.

"""

import dataclasses
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import NamedTuple, Optional

BOARD_SIZE = 4

STEP_UP = "UP"
STEP_DOWN = "DOWN"
STEP_LEFT = "LEFT"
STEP_RIGHT = "RIGHT"

DIRECTIONS = (STEP_UP, STEP_DOWN, STEP_LEFT, STEP_RIGHT)

# Clockwise quarter turns that make a left slide act in the direction.
_ROTATIONS: dict[str, int] = {
    STEP_LEFT: 0,
    STEP_DOWN: 1,
    STEP_RIGHT: 2,
    STEP_UP: 3,
}


@dataclass(frozen=True)
class Tile:
    id: int
    value: int
    row: int
    col: int
    is_new: bool = False
    is_merged: bool = False


Cell = Optional[Tile]
Row = tuple[Cell, ...]
Grid = tuple[Row, ...]


class MoveResult(NamedTuple):
    board: Grid
    score: int
    moved: bool


class TileCounter:
    """
    Source of tile identities.

    Each call of next_id() hands out a new integer exactly once.
    """

    def __init__(self, start: int = 0):
        self._next = start
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
        return value

    def peek(self) -> int:
        with self._lock:
            return self._next


# Shared by grid_from_values and every Spawner not given its own counter.
TILE_IDS = TileCounter()


def create_empty_grid() -> Grid:
    return tuple((None,) * BOARD_SIZE for _ in range(BOARD_SIZE))


def empty_positions(board: Grid) -> list[tuple[int, int]]:
    return [
        (r, c)
        for r, row in enumerate(board)
        for c, cell in enumerate(row)
        if cell is None
    ]


def grid_from_values(
    values: Sequence[Sequence[int]],
    next_id: Callable[[], int] | None = None,
) -> Grid:
    """
    Build a board from a 4x4 matrix of values, 0 meaning empty.

    :param next_id: identity source, TILE_IDS when omitted
    """
    if len(values) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in values):
        raise ValueError(f"Expect a {BOARD_SIZE}x{BOARD_SIZE} matrix")

    for row in values:
        for v in row:
            v = int(v)
            # 0 or a power of two from 2 up
            if v != 0 and (v < 2 or v & (v - 1)):
                raise ValueError(f"Bad tile value {v}")

    if next_id is None:
        next_id = TILE_IDS.next_id

    return tuple(
        tuple(
            Tile(id=next_id(), value=int(v), row=r, col=c) if v else None
            for c, v in enumerate(row)
        )
        for r, row in enumerate(values)
    )


def rotate_clockwise(board: Grid) -> Grid:
    # (r, c) -> (c, N - 1 - r)
    size = BOARD_SIZE
    return tuple(
        tuple(board[size - 1 - c][r] for c in range(size)) for r in range(size)
    )


def _rotate(board: Grid, times: int) -> Grid:
    for _ in range(times):
        board = rotate_clockwise(board)
    return board


def _slide_row(row: Row) -> tuple[Row, int]:
    tiles = [t for t in row if t is not None]
    out: list[Cell] = []
    score = 0

    i = 0
    while i < len(tiles):
        tile = tiles[i]
        if i + 1 < len(tiles) and tile.value == tiles[i + 1].value:
            # the left tile survives, the right one is absorbed
            value = tile.value * 2
            out.append(dataclasses.replace(tile, value=value, is_merged=True))
            score += value
            i += 2
        else:
            out.append(tile)
            i += 1

    out += [None] * (BOARD_SIZE - len(out))
    return tuple(out), score


def _row_values(row: Row) -> list[int]:
    return [t.value if t is not None else 0 for t in row]


def _place(board: Grid) -> Grid:
    return tuple(
        tuple(
            dataclasses.replace(t, row=r, col=c)
            if t is not None and (t.row, t.col) != (r, c)
            else t
            for c, t in enumerate(row)
        )
        for r, row in enumerate(board)
    )


def _clear_flags(board: Grid) -> Grid:
    return tuple(
        tuple(
            dataclasses.replace(t, is_new=False, is_merged=False)
            if t is not None and (t.is_new or t.is_merged)
            else t
            for t in row
        )
        for row in board
    )


def move(board: Grid, direction: str) -> MoveResult:
    try:
        rotations = _ROTATIONS[direction]
    except KeyError:
        raise ValueError(f"Invalid direction: {direction!r}") from None

    cells = _rotate(_clear_flags(board), rotations)

    score = 0
    moved = False
    rows = []

    for row in cells:
        new_row, gained = _slide_row(row)
        score += gained
        if _row_values(new_row) != _row_values(row):
            moved = True
        rows.append(new_row)

    if not moved:
        # nothing happened this turn, keep the previous snapshot untouched
        return MoveResult(board, 0, False)

    result = _rotate(tuple(rows), (4 - rotations) % 4)

    return MoveResult(_place(result), score, moved)
