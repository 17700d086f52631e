from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from samegame.systems.board_ops import GravityPlan


@dataclass(slots=True)
class PendingMove:
    """Attached to the board entity while a removal is being played out.

    phase is one of 'vanish', 'fall', 'slide'. plan is filled once the
    region has been removed.
    """
    region: FrozenSet[Tuple[int, int]]
    color: int
    phase: str = 'vanish'
    plan: Optional[GravityPlan] = None
