"""Game state resource describing the current phase of a round."""
from dataclasses import dataclass
from enum import Enum, auto


class GameMode(Enum):
    """High-level phases of a round."""
    PLAYING = auto()
    RESOLVING = auto()
    WON = auto()
    LOST = auto()


@dataclass
class GameState:
    """Singleton component storing the currently active game mode."""
    mode: GameMode = GameMode.PLAYING
