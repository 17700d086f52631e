import logging
import random
from typing import FrozenSet, Optional, Tuple

from esper import World

from samegame.components.board import Board
from samegame.components.game_state import GameMode
from samegame.components.pending_move import PendingMove
from samegame.config import GameOptions
from samegame.events.bus import (EventBus, EVENT_NEW_GAME, EVENT_OPTIONS_CHANGED, EVENT_BOARD_GENERATED,
                                 EVENT_GAME_OVER, EVENT_TILE_HOVER, EVENT_TILE_HOVER_EXIT, EVENT_TILE_CLICK,
                                 EVENT_REGION_PREVIEW, EVENT_REGION_REMOVED, EVENT_GRAVITY_COMPUTED,
                                 EVENT_BOARD_CHANGED, EVENT_ANIMATION_START, EVENT_ANIMATION_COMPLETE)
from samegame.systems import board_ops
from samegame.utils.game_state import get_game_state, set_game_mode

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class BoardSystem:
    """Runs a round: hover preview, click removal, phased gravity and end detection.

    The presentation layer reports the end of each animation phase with
    EVENT_ANIMATION_COMPLETE; while a move is pending further clicks are ignored.
    """
    def __init__(self, world: World, event_bus: EventBus, options: Optional[GameOptions] = None, *, animate: Optional[bool] = None, rng: Optional[random.Random] = None):
        self.world = world
        self.event_bus = event_bus
        self.options = options or GameOptions()
        if animate is not None:
            self.options = self.options.with_changes(animation=animate)
        self.rng = rng or getattr(world, "random", None)
        self.board_entity = self.world.create_entity(Board())
        self.hovered: Optional[Position] = None
        self.hover_region: FrozenSet[Position] = frozenset()
        self.event_bus.subscribe(EVENT_NEW_GAME, self.on_new_game)
        self.event_bus.subscribe(EVENT_OPTIONS_CHANGED, self.on_options_changed)
        self.event_bus.subscribe(EVENT_TILE_HOVER, self.on_tile_hover)
        self.event_bus.subscribe(EVENT_TILE_HOVER_EXIT, self.on_tile_hover_exit)
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_ANIMATION_COMPLETE, self.on_animation_complete)
        self.new_game()

    @property
    def board(self) -> Board:
        return board_ops.get_board(self.world)

    def pending_move(self) -> Optional[PendingMove]:
        return self.world.try_component(self.board_entity, PendingMove)

    def mode(self) -> Optional[GameMode]:
        state = get_game_state(self.world)
        return state.mode if state else None

    # ------------------------------------------------------------------
    # Game lifecycle
    # ------------------------------------------------------------------
    def new_game(self):
        if self.pending_move() is not None:
            self.world.remove_component(self.board_entity, PendingMove)
        self._clear_hover()
        opts = self.options
        board_ops.generate(self.board, opts.width, opts.height, opts.nb_colors, rng=self.rng)
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        self.event_bus.emit(
            EVENT_BOARD_GENERATED,
            columns=board_ops.get_columns(self.board),
            width=opts.width,
            height=opts.height,
            nb_colors=opts.nb_colors,
        )
        # A freshly dealt board may already be stuck; it is not reshuffled.
        self._check_end()

    def on_new_game(self, sender, **kwargs):
        self.new_game()

    def on_options_changed(self, sender, **kwargs):
        previous = self.options
        self.options = previous.with_changes(
            grid_size=kwargs.get('grid_size'),
            width=kwargs.get('width'),
            height=kwargs.get('height'),
            nb_colors=kwargs.get('nb_colors'),
            animation=kwargs.get('animation'),
        )
        if (self.options.width, self.options.height, self.options.nb_colors) != (previous.width, previous.height, previous.nb_colors):
            self.new_game()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def on_tile_hover(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        if self.mode() != GameMode.PLAYING or self.pending_move() is not None:
            return
        if self.hovered == (x, y):
            return
        self.hovered = (x, y)
        self.hover_region = board_ops.compute_region(self.board, x, y)
        self.event_bus.emit(EVENT_REGION_PREVIEW, x=x, y=y, positions=sorted(self.hover_region))

    def on_tile_hover_exit(self, sender, **kwargs):
        if self.hovered is None:
            return
        self._clear_hover()
        self.event_bus.emit(EVENT_REGION_PREVIEW, x=None, y=None, positions=[])

    def on_tile_click(self, sender, **kwargs):
        mode = self.mode()
        if mode in (GameMode.WON, GameMode.LOST):
            self.new_game()
            return
        if self.pending_move() is not None:
            return
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        if not board_ops.is_destroyable(self.board, x, y):
            return
        if self.hovered == (x, y) and self.hover_region:
            region = self.hover_region
        else:
            region = board_ops.compute_region(self.board, x, y)
        self._clear_hover()
        logger.debug("removing region of %d tiles seeded at (%d, %d)", len(region), x, y)
        self.world.add_component(self.board_entity, PendingMove(region=region, color=self.board.columns[x][y]))
        set_game_mode(self.world, self.event_bus, GameMode.RESOLVING)
        self._start_phase('vanish', sorted(region))

    # ------------------------------------------------------------------
    # Move phases
    # ------------------------------------------------------------------
    def on_animation_complete(self, sender, **kwargs):
        pending = self.pending_move()
        if pending is None or kwargs.get('kind') != pending.phase:
            return
        self._finish_phase(pending)

    def _start_phase(self, kind: str, items):
        pending = self.pending_move()
        pending.phase = kind
        if self.options.animation:
            self.event_bus.emit(EVENT_ANIMATION_START, kind=kind, items=items)
        else:
            self._finish_phase(pending)

    def _finish_phase(self, pending: PendingMove):
        board = self.board
        logger.debug("move phase %s complete", pending.phase)
        if pending.phase == 'vanish':
            board_ops.apply_removal(board, pending.region)
            self.event_bus.emit(EVENT_REGION_REMOVED, positions=sorted(pending.region), color=pending.color, size=len(pending.region))
            pending.plan = board_ops.compute_gravity(board)
            self.event_bus.emit(EVENT_GRAVITY_COMPUTED, plan=pending.plan)
            self._start_phase('fall', pending.plan)
        elif pending.phase == 'fall':
            board_ops.apply_vertical_gravity(board)
            self._start_phase('slide', pending.plan)
        elif pending.phase == 'slide':
            board_ops.apply_horizontal_gravity(board)
            self.world.remove_component(self.board_entity, PendingMove)
            set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
            self.event_bus.emit(EVENT_BOARD_CHANGED, reason='gravity', columns=board_ops.get_columns(board))
            self._check_end()

    def _check_end(self):
        board = self.board
        if not board_ops.no_more_destroyable(board):
            return
        won = board_ops.is_cleared(board)
        remaining = board_ops.tile_count(board)
        set_game_mode(self.world, self.event_bus, GameMode.WON if won else GameMode.LOST)
        logger.info("round over: %s with %d tiles left", 'win' if won else 'loss', remaining)
        self.event_bus.emit(
            EVENT_GAME_OVER,
            outcome='win' if won else 'loss',
            remaining_tiles=remaining,
            remaining_columns=len(board.columns),
        )

    def _clear_hover(self):
        self.hovered = None
        self.hover_region = frozenset()
