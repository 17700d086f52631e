import random

from esper import World

from samegame.components.game_state import GameMode, GameState
from samegame.events.bus import EventBus


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.PLAYING,
    *,
    rng: random.Random | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())

    # Register the global game state resource.
    world.create_entity(GameState(mode=initial_mode))
    return world
