import random

import pytest

from samegame.config import GameOptions
from samegame.events.bus import EventBus, EVENT_ANIMATION_START, EVENT_TILE_CLICK
from samegame.systems.board import BoardSystem
from samegame.world import create_world
from tests.helpers import complete_animations, install_board


@pytest.fixture
def setup_env():
    bus = EventBus(); world = create_world(bus, rng=random.Random(3))
    board = BoardSystem(world, bus, GameOptions(width=4, height=4, nb_colors=1))
    install_board(board, [[0, 0], [1, 1], [2, 2]], nb_colors=3)
    return bus, world, board


def test_tile_click_ignored_while_move_pending(setup_env):
    bus, world, board = setup_env
    starts = []
    bus.subscribe(EVENT_ANIMATION_START, lambda s, **k: starts.append(k['kind']))
    bus.emit(EVENT_TILE_CLICK, x=0, y=0)
    pending = board.pending_move()
    assert pending is not None and pending.color == 0
    bus.emit(EVENT_TILE_CLICK, x=1, y=0)
    assert board.pending_move() is pending, 'Second click should not replace the pending move'
    assert starts == ['vanish']
    complete_animations(bus)
    assert board.pending_move() is None
    bus.emit(EVENT_TILE_CLICK, x=0, y=0)
    assert board.pending_move() is not None and board.pending_move().color == 1, 'Input should work again after the move'
