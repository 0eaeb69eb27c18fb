import threading

import pytest
from conftest import values_of

from merge2048.game import (
    STEP_LEFT,
    TileCounter,
    create_empty_grid,
    empty_positions,
    grid_from_values,
    move,
)
from merge2048.spawn import Spawner, add_random_tile, default_spawner

FULL = [
    [2, 4, 2, 4],
    [4, 2, 4, 2],
    [2, 4, 2, 4],
    [4, 2, 4, 2],
]


def _tiles(board):
    return [t for row in board for t in row if t is not None]


def test_full_board_unchanged(spawner):
    board = grid_from_values(FULL)
    result = spawner.add_random_tile(board)
    assert values_of(result) == FULL
    assert spawner.counter.peek() == 0


def test_single_empty_cell(spawner):
    for r in range(4):
        for c in range(4):
            values = [row[:] for row in FULL]
            values[r][c] = 0
            board = grid_from_values(values)

            result = spawner.add_random_tile(board)

            tile = result[r][c]
            assert tile is not None
            assert tile.value in (2, 4)
            assert tile.is_new
            assert (tile.row, tile.col) == (r, c)
            assert not empty_positions(result)


def test_spawn_does_not_touch_input(spawner):
    board = create_empty_grid()
    result = spawner.add_random_tile(board)

    assert len(empty_positions(board)) == 16
    assert len(empty_positions(result)) == 15


@pytest.mark.parametrize("two_prob, value", [(1.0, 2), (0.0, 4)])
def test_spawn_value(two_prob, value):
    spawner = Spawner(two_prob=two_prob, seed=1)
    board = create_empty_grid()
    for _ in range(16):
        board = spawner.add_random_tile(board)

    assert {t.value for t in _tiles(board)} == {value}


def test_spawn_probability():
    spawner = Spawner(seed=7)
    board = create_empty_grid()

    fours = 0
    for _ in range(2000):
        tile = _tiles(spawner.add_random_tile(board))[0]
        fours += tile.value == 4

    # about 10%
    assert 120 < fours < 280


def test_spawn_fills_every_cell():
    spawner = Spawner(seed=3)
    seen = set()
    for _ in range(500):
        tile = _tiles(spawner.add_random_tile(create_empty_grid()))[0]
        seen.add((tile.row, tile.col))
    assert len(seen) == 16


def test_unique_ids(spawner):
    board = create_empty_grid()
    for _ in range(16):
        board = spawner.add_random_tile(board)

    ids = [t.id for t in _tiles(board)]
    assert sorted(ids) == list(range(16))
    assert spawner.counter.peek() == 16


def test_seed_is_reproducible():
    a = Spawner(seed=42)
    b = Spawner(seed=42)

    board_a = create_empty_grid()
    board_b = create_empty_grid()
    for _ in range(5):
        board_a = a.add_random_tile(board_a)
        board_b = b.add_random_tile(board_b)

    assert board_a == board_b


def test_shared_counter():
    counter = TileCounter(start=100)
    a = Spawner(seed=1, counter=counter)
    b = Spawner(seed=2, counter=counter)

    tile_a = _tiles(a.add_random_tile(create_empty_grid()))[0]
    tile_b = _tiles(b.add_random_tile(create_empty_grid()))[0]

    assert (tile_a.id, tile_b.id) == (100, 101)


def test_counter_threads():
    counter = TileCounter()
    ids = []
    lock = threading.Lock()

    def work():
        got = [counter.next_id() for _ in range(1000)]
        with lock:
            ids.extend(got)

    threads = [threading.Thread(target=work) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(set(ids)) == 8000
    assert counter.peek() == 8000


def test_bad_two_prob():
    with pytest.raises(ValueError):
        Spawner(two_prob=1.5)


def test_module_level_spawn():
    board = add_random_tile(create_empty_grid())
    assert len(_tiles(board)) == 1
    assert _tiles(board)[0].is_new


def test_default_spawner_shares_builder_ids():
    board = grid_from_values([[2, 4, 8, 0]] + [[0] * 4] * 3)
    board = add_random_tile(move(board, STEP_LEFT).board)

    ids = [t.id for t in _tiles(board)]
    assert len(ids) == 4
    assert len(set(ids)) == 4


def test_new_spawners_share_ids():
    board = grid_from_values([[2, 0, 0, 0]] + [[0] * 4] * 3)
    board = Spawner(seed=1).add_random_tile(board)
    board = Spawner(seed=1).add_random_tile(board)

    ids = [t.id for t in _tiles(board)]
    assert len(set(ids)) == 3


def test_default_spawner_threads():
    ids = []
    lock = threading.Lock()
    start = threading.Barrier(8)

    def work():
        start.wait()
        got = [
            _tiles(add_random_tile(create_empty_grid()))[0].id for _ in range(100)
        ]
        with lock:
            ids.extend(got)

    threads = [threading.Thread(target=work) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(set(ids)) == 800
    assert default_spawner() is default_spawner()
