from __future__ import annotations

from typing import Optional, Sequence

from samegame.components.board import Board
from samegame.events.bus import EVENT_ANIMATION_COMPLETE, EventBus


def board_from_columns(columns: Sequence[Sequence[Optional[int]]], nb_colors: int = 1) -> Board:
    """Build a Board from literal columns (bottom first); copies the input."""
    cols = [list(column) for column in columns]
    height = max((len(column) for column in cols), default=0)
    return Board(columns=cols, nb_colors=nb_colors, width=len(cols), height=height)


def install_board(board_system, columns: Sequence[Sequence[Optional[int]]], nb_colors: int = 1) -> Board:
    """Replace the live board of a BoardSystem with fixed columns."""
    board = board_system.board
    fixed = board_from_columns(columns, nb_colors)
    board.columns = fixed.columns
    board.nb_colors = fixed.nb_colors
    board.width = fixed.width
    board.height = fixed.height
    return board


def complete_animations(bus: EventBus, kinds: Sequence[str] = ('vanish', 'fall', 'slide')) -> None:
    for kind in kinds:
        bus.emit(EVENT_ANIMATION_COMPLETE, kind=kind)
