# Defaults for callers building GameOptions; the engine itself never falls back to these.
DEFAULT_GRID_WIDTH = 15
DEFAULT_GRID_HEIGHT = 10
DEFAULT_NB_COLORS = 3

# Color index -> name. Pixel mapping lives in the presentation layer.
COLOR_NAMES = ('red', 'green', 'cyan', 'purple', 'yellow')

# Option menu ranges.
MIN_OPTION_COLORS = 3
MAX_OPTION_COLORS = len(COLOR_NAMES)
GRID_SIZE_CHOICES = ('10x8', '15x10', '20x12', '30x20')
