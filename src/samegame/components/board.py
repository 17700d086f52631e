from dataclasses import dataclass, field
from typing import List, Optional

Column = List[Optional[int]]


@dataclass(slots=True)
class Board:
    """Column-major tile storage.

    columns[x][y] holds a color index, or None once the tile was removed.
    y=0 is the bottom of a column. Columns shrink after vertical gravity and
    empty columns disappear after horizontal gravity.
    width/height record the size requested at generation time.
    """
    columns: List[Column] = field(default_factory=list)
    nb_colors: int = 1
    width: int = 0
    height: int = 0
