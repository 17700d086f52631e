from typing import Callable, Dict

from blinker import Signal

Handler = Callable[..., None]


class EventBus:
    """Named blinker signals connecting the board system to the presentation layer.

    Input arrives as EVENT_TILE_HOVER / EVENT_TILE_CLICK, move phases leave as
    EVENT_ANIMATION_START and come back as EVENT_ANIMATION_COMPLETE. Handlers
    are called as ``fn(sender, **payload)`` with the bus as sender.
    """
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def _signal(self, name: str) -> Signal:
        return self._signals.setdefault(name, Signal(name))

    def subscribe(self, name: str, fn: Handler):
        # Strong reference: systems are often constructed without being stored.
        self._signal(name).connect(fn, weak=False)

    def unsubscribe(self, name: str, fn: Handler):
        if name in self._signals:
            self._signals[name].disconnect(fn)

    def emit(self, name: str, **payload):
        if name in self._signals:
            self._signals[name].send(self, **payload)


# ============================================================================
# GAME LIFECYCLE
# ============================================================================
EVENT_NEW_GAME = "new_game"                        # payload: (none)
EVENT_OPTIONS_CHANGED = "options_changed"          # payload: grid_size=str, width=int, height=int, nb_colors=int, animation=bool (all optional)
EVENT_BOARD_GENERATED = "board_generated"          # payload: columns=tuple, width=int, height=int, nb_colors=int
EVENT_GAME_MODE_CHANGED = "game_mode_changed"      # payload: previous_mode=GameMode, new_mode=GameMode
EVENT_GAME_OVER = "game_over"                      # payload: outcome='win'|'loss', remaining_tiles=int, remaining_columns=int


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_TILE_HOVER = "tile_hover"                    # payload: x, y
EVENT_TILE_HOVER_EXIT = "tile_hover_exit"          # payload: (none)
EVENT_TILE_CLICK = "tile_click"                    # payload: x, y


# ============================================================================
# TILE & BOARD MECHANICS
# ============================================================================
EVENT_REGION_PREVIEW = "region_preview"            # payload: x, y, positions=[(x,y),...]
EVENT_REGION_REMOVED = "region_removed"            # payload: positions=[(x,y),...], color=int, size=int
EVENT_GRAVITY_COMPUTED = "gravity_computed"        # payload: plan=GravityPlan
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str, columns=tuple


# ============================================================================
# ANIMATION
# ============================================================================
EVENT_ANIMATION_START = "animation_start"          # payload: kind='vanish'|'fall'|'slide', items=positions|GravityPlan
EVENT_ANIMATION_COMPLETE = "animation_complete"    # payload: kind=str
