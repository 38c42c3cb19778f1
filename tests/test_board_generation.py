import random

import pytest

from match3.components.board import Board
from match3.components.tile_types import TileTypes
from match3.constants import EMPTY, NUM_TYPES
from match3.events.bus import EVENT_BOARD_INITIALIZED, EVENT_SCORE_CHANGED, EventBus
from match3.systems.board import initialize_board
from match3.systems.board_ops import (creates_run_at, fill_initial, find_matches, get_board, random_type,
                                      refill_empties)
from match3.systems.state_utils import get_or_create_score
from match3.world import create_world

from helpers import ScriptedRandom, record


@pytest.mark.parametrize('seed', range(25))
def test_initial_board_has_no_matches(seed):
    bus = EventBus(); world = create_world(bus, rng=random.Random(seed))
    board = initialize_board(world, bus)
    assert find_matches(board) == [], 'Initial board should not contain any matches'
    assert all(1 <= board.get(pos) <= NUM_TYPES for pos in board.positions())


def test_same_seed_builds_identical_boards():
    bus = EventBus()
    first = initialize_board(create_world(bus, rng=random.Random(42)), bus)
    second = initialize_board(create_world(bus, rng=random.Random(42)), bus)
    assert first.snapshot() == second.snapshot()


def test_initialize_resets_score_and_announces_board(bus, world):
    initialized = record(bus, EVENT_BOARD_INITIALIZED)
    score_events = record(bus, EVENT_SCORE_CHANGED)
    get_or_create_score(world).total = 120
    board = initialize_board(world, bus)
    assert get_or_create_score(world).total == 0
    assert initialized[-1]['cells'] == board.snapshot()
    assert initialized[-1]['rows'] == 8 and initialized[-1]['cols'] == 8
    assert score_events[-1] == {'total': 0, 'delta': 0}


def test_random_type_covers_range():
    rng = random.Random(3)
    draws = {random_type(rng, 5) for _ in range(500)}
    assert draws == {1, 2, 3, 4, 5}


def test_creates_run_at_only_looks_left_and_up():
    board = Board.from_rows([
        [1, 1, EMPTY],
        [2, 3, EMPTY],
        [2, EMPTY, EMPTY],
    ])
    assert creates_run_at(board, (0, 2), 1)
    assert not creates_run_at(board, (0, 2), 2)
    # (2,0) already holds a value; the check looks at (1,0) and (0,0) above it
    board.set((2, 0), EMPTY)
    assert not creates_run_at(board, (2, 0), 2)
    board.set((0, 0), 2)
    assert creates_run_at(board, (2, 0), 2)


def test_fill_initial_rejects_candidates_that_complete_runs():
    board = Board(rows=1, cols=3)
    # Third cell draws 1 (rejected: 1,1 to the left) and then 2
    rng = ScriptedRandom(values=[1, 1, 1, 2])
    fill_initial(board, rng, 3)
    assert board.snapshot() == ((1, 1, 2),)
    assert rng.calls == 4


def test_fill_initial_requires_three_types():
    board = Board(rows=4, cols=4)
    with pytest.raises(ValueError):
        fill_initial(board, random.Random(0), 2)
    with pytest.raises(ValueError):
        TileTypes(count=2)


def test_refill_leaves_no_empty_cells():
    board = Board.from_rows([
        [EMPTY, EMPTY, 3],
        [EMPTY, 2, 1],
        [4, 5, 1],
    ])
    spawned = refill_empties(board, ScriptedRandom(values=[5, 4, 3]), 5)
    assert board.is_filled()
    # Column-major, top to bottom
    assert spawned == [(0, 0, 5), (1, 0, 4), (0, 1, 3)]
    assert board.snapshot() == ((5, 3, 3), (4, 2, 1), (4, 5, 1))


def test_refill_does_not_filter_matches():
    board = Board.from_rows([[EMPTY, 2, 2]])
    refill_empties(board, ScriptedRandom(values=[2]), 5)
    assert find_matches(board) == [(0, 0), (0, 1), (0, 2)]


def test_world_board_uses_configured_types():
    bus = EventBus(); world = create_world(bus, rows=5, cols=6, num_types=3, rng=random.Random(9))
    initialize_board(world, bus)
    board = get_board(world)
    assert {board.get(pos) for pos in board.positions()} <= {1, 2, 3}
    assert find_matches(board) == []
