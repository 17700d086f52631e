from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from samegame.constants import (DEFAULT_GRID_HEIGHT, DEFAULT_GRID_WIDTH, DEFAULT_NB_COLORS, MAX_OPTION_COLORS,
                                 MIN_OPTION_COLORS)
from samegame.errors import InvalidConfiguration


def parse_grid_size(text: str) -> Tuple[int, int]:
    """Parse a grid size option such as ``"15x10"`` into ``(width, height)``."""
    if not isinstance(text, str):
        raise InvalidConfiguration(f"grid size must be text like '15x10', got {text!r}")
    width_text, sep, height_text = text.strip().lower().partition('x')
    if not sep:
        raise InvalidConfiguration(f"grid size {text!r} is missing the 'x' separator")
    try:
        width = int(width_text.strip())
        height = int(height_text.strip())
    except ValueError:
        raise InvalidConfiguration(f"grid size {text!r} is not of the form WIDTHxHEIGHT") from None
    validate_dimensions(width, height, 1)
    return width, height


def validate_dimensions(width: int, height: int, nb_colors: int) -> None:
    for name, value in (('width', width), ('height', height), ('nb_colors', nb_colors)):
        # bool is an int subclass but never a sensible board parameter
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
    if width < 0 or height < 0:
        raise InvalidConfiguration(f"board dimensions must be non-negative, got {width}x{height}")
    if nb_colors < 1:
        raise InvalidConfiguration(f"nb_colors must be at least 1, got {nb_colors}")


@dataclass(frozen=True)
class GameOptions:
    """Player-selectable parameters for a new round."""
    width: int = DEFAULT_GRID_WIDTH
    height: int = DEFAULT_GRID_HEIGHT
    nb_colors: int = DEFAULT_NB_COLORS
    animation: bool = True

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        validate_dimensions(self.width, self.height, self.nb_colors)

    @property
    def grid_size(self) -> str:
        return f"{self.width}x{self.height}"

    @classmethod
    def from_grid_size(cls, grid_size: str, nb_colors: int = DEFAULT_NB_COLORS, animation: bool = True) -> 'GameOptions':
        width, height = parse_grid_size(grid_size)
        return cls(width=width, height=height, nb_colors=nb_colors, animation=animation)

    def with_changes(
        self,
        *,
        grid_size: str | None = None,
        width: int | None = None,
        height: int | None = None,
        nb_colors: int | None = None,
        animation: bool | None = None,
    ) -> 'GameOptions':
        """Return a validated copy; ``None`` leaves a field unchanged."""
        changes = {}
        if grid_size is not None:
            changes['width'], changes['height'] = parse_grid_size(grid_size)
        if width is not None:
            changes['width'] = width
        if height is not None:
            changes['height'] = height
        if nb_colors is not None:
            changes['nb_colors'] = nb_colors
        if animation is not None:
            changes['animation'] = bool(animation)
        return replace(self, **changes)


def color_count_choices() -> range:
    """Color counts offered in the options menu."""
    return range(MIN_OPTION_COLORS, MAX_OPTION_COLORS + 1)
