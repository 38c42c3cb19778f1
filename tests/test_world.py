import logging
import random

import pytest
from rich.logging import RichHandler

from match3.components.board import Board
from match3.components.tile_types import DEFAULT_PALETTE, TileTypes
from match3.constants import GRID_COLS, GRID_ROWS, NUM_TYPES
from match3.events.bus import EventBus
from match3.systems.board_ops import get_board, get_tile_registry, world_rng
from match3.systems.state_utils import get_or_create_resolution_state, get_or_create_score
from match3.utils.logging import setup_logger
from match3.world import create_world


def test_world_defaults():
    world = create_world(EventBus())
    board = get_board(world)
    assert (board.rows, board.cols) == (GRID_ROWS, GRID_COLS)
    assert get_tile_registry(world).count == NUM_TYPES
    assert get_or_create_score(world).total == 0
    assert not get_or_create_resolution_state(world).busy


def test_world_keeps_supplied_rng():
    rng = random.Random(3)
    world = create_world(EventBus(), rng=rng)
    assert world_rng(world) is rng


def test_world_rejects_too_few_types():
    with pytest.raises(ValueError):
        create_world(EventBus(), num_types=2)


def test_world_rejects_empty_board():
    with pytest.raises(ValueError):
        create_world(EventBus(), rows=0, cols=4)


def test_tile_types_palette():
    types = TileTypes(count=8)
    assert types.all_types() == [1, 2, 3, 4, 5, 6, 7, 8]
    assert types.color_for(1) == DEFAULT_PALETTE[0]
    assert types.color_for(8) == DEFAULT_PALETTE[0], 'Palette wraps past its last color'


def test_single_board_entity():
    world = create_world(EventBus())
    assert len(list(world.get_component(Board))) == 1


def test_setup_logger_installs_one_handler():
    logger = setup_logger(name="match3.test", level="debug")
    logger = setup_logger(name="match3.test", level="debug")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert not logger.propagate
    assert setup_logger(name="match3.test", level="bogus").level == logging.INFO


def test_setup_logger_uses_rich_handler_by_default():
    logger = setup_logger(name="match3.rich_test")
    assert isinstance(logger.handlers[0], RichHandler)
    plain = setup_logger(name="match3.plain_test", use_rich=False)
    assert type(plain.handlers[0]) is logging.StreamHandler


def test_world_rng_rejects_foreign_random_source():
    world = create_world(EventBus())
    world.random = object()
    with pytest.raises(TypeError):
        world_rng(world)
