from __future__ import annotations

from esper import World

from samegame.components.game_state import GameMode, GameState
from samegame.events.bus import EVENT_GAME_MODE_CHANGED, EventBus


def get_game_state(world: World) -> GameState | None:
    for _, state in world.get_component(GameState):
        return state
    return None


def set_game_mode(world: World, event_bus: EventBus, mode: GameMode) -> bool:
    """Update the global game mode; returns True and emits a change event when it differs.

    Worlds without a GameState resource are left untouched.
    """
    state = get_game_state(world)
    if state is None or state.mode == mode:
        return False
    previous_mode = state.mode
    state.mode = mode
    event_bus.emit(EVENT_GAME_MODE_CHANGED, previous_mode=previous_mode, new_mode=mode)
    return True
