from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Set, Tuple

from esper import World

from samegame.components.board import Board, Column
from samegame.config import validate_dimensions

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

NEIGHBOR_OFFSETS: Tuple[Position, ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))


@dataclass(slots=True)
class TileFall:
    """A surviving tile of one column: its row before gravity and how far it drops."""
    y: int
    dy: int
    color: int


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    color: int


@dataclass(slots=True)
class GravityPlan:
    """Move descriptor computed on the sparse board, before any compaction.

    horizontal[x] is how many columns original column x slides left.
    vertical[x] lists every surviving tile of column x; wholly empty columns
    have no entries.
    """
    horizontal: List[int] = field(default_factory=list)
    vertical: List[List[TileFall]] = field(default_factory=list)

    def moves(self) -> List[GravityMove]:
        """Tiles whose final position differs from their current one."""
        result: List[GravityMove] = []
        for x, falls in enumerate(self.vertical):
            shift = self.horizontal[x]
            for fall in falls:
                if fall.dy == 0 and shift == 0:
                    continue
                result.append(GravityMove(source=(x, fall.y), target=(x - shift, fall.y - fall.dy), color=fall.color))
        return result

    def is_noop(self) -> bool:
        return not self.moves()


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board component not found")


def generate(board: Board, width: int, height: int, nb_colors: int, rng: random.Random | None = None) -> List[Column]:
    """Fill the board with independent uniformly random colors.

    Any previous state is discarded. No attempt is made to guarantee a
    removable region exists.
    """
    validate_dimensions(width, height, nb_colors)
    rng = rng or random.Random()
    board.columns = [[rng.randrange(nb_colors) for _ in range(height)] for _ in range(width)]
    board.nb_colors = nb_colors
    board.width = width
    board.height = height
    logger.debug("generated %dx%d board with %d colors", width, height, nb_colors)
    return board.columns


def exists(board: Board, x: int, y: int) -> bool:
    if x < 0 or y < 0 or x >= len(board.columns):
        return False
    column = board.columns[x]
    return y < len(column) and column[y] is not None


def value_equals(board: Board, x: int, y: int, color: int) -> bool:
    return exists(board, x, y) and board.columns[x][y] == color


def _has_same_neighbor(board: Board, x: int, y: int) -> bool:
    color = board.columns[x][y]
    return any(value_equals(board, x + dx, y + dy, color) for dx, dy in NEIGHBOR_OFFSETS)


def is_destroyable(board: Board, x: int, y: int) -> bool:
    """True when the tile exists and touches at least one tile of its color."""
    return exists(board, x, y) and _has_same_neighbor(board, x, y)


def no_more_destroyable(board: Board) -> bool:
    for x, column in enumerate(board.columns):
        for y, value in enumerate(column):
            if value is not None and _has_same_neighbor(board, x, y):
                return False
    return True


def compute_region(board: Board, x: int, y: int) -> FrozenSet[Position]:
    """Return the connected same-color region containing (x, y).

    Empty when the seed is absent or isolated, otherwise at least two
    positions. Iterative so large boards never hit the recursion limit.
    """
    if not is_destroyable(board, x, y):
        return frozenset()
    color = board.columns[x][y]
    visited: Set[Position] = {(x, y)}
    stack: List[Position] = [(x, y)]
    while stack:
        cx, cy = stack.pop()
        for dx, dy in NEIGHBOR_OFFSETS:
            nxt = (cx + dx, cy + dy)
            if nxt in visited or not value_equals(board, nxt[0], nxt[1], color):
                continue
            visited.add(nxt)
            stack.append(nxt)
    return frozenset(visited)


def apply_removal(board: Board, region: Iterable[Position]) -> None:
    """Mark every position of region absent without compacting."""
    for x, y in region:
        if exists(board, x, y):
            board.columns[x][y] = None


def compute_gravity(board: Board) -> GravityPlan:
    columns = board.columns
    plan = GravityPlan(horizontal=[0] * len(columns), vertical=[[] for _ in columns])
    empty_columns = 0
    for x, column in enumerate(columns):
        plan.horizontal[x] = empty_columns
        if all(value is None for value in column):
            empty_columns += 1
            continue
        gaps = 0
        for y, value in enumerate(column):
            if value is None:
                gaps += 1
            else:
                plan.vertical[x].append(TileFall(y=y, dy=gaps, color=value))
    logger.debug("gravity: %d empty columns, %d moving tiles", empty_columns, len(plan.moves()))
    return plan


def apply_vertical_gravity(board: Board) -> None:
    """Pack each column's tiles to the bottom, keeping their order."""
    board.columns = [[value for value in column if value is not None] for column in board.columns]


def apply_horizontal_gravity(board: Board) -> None:
    """Drop emptied columns so the remaining ones are packed to the left."""
    board.columns = [column for column in board.columns if any(value is not None for value in column)]


def get_columns(board: Board) -> Tuple[Tuple[Optional[int], ...], ...]:
    return tuple(tuple(column) for column in board.columns)


def get_column(board: Board, index: int) -> Tuple[Optional[int], ...]:
    if 0 <= index < len(board.columns):
        return tuple(board.columns[index])
    return ()


def get_value(board: Board, x: int, y: int) -> Optional[int]:
    if not exists(board, x, y):
        return None
    return board.columns[x][y]


def tile_count(board: Board) -> int:
    return sum(1 for column in board.columns for value in column if value is not None)


def is_cleared(board: Board) -> bool:
    return not board.columns
