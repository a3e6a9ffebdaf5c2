"""Game of Life with fading cells, seeded from a library of hand-designed patterns."""

__version__ = "0.1.0"

from .core.api import (
    advance_grid_one_generation,
    cell_at,
    create_grid,
    raw_buffer_pointer,
    regenerate_grid,
    register_sink,
    subgrid_sum,
)
from .core.errors import ConfigurationError, OutOfRangeError, SinkNotificationError
from .core.game import FadingLife
from .core.grid import Grid
from .core.patterns import Pattern, PatternLibrary, default_library
from .core.rules import Cell

__all__ = [
    "Cell",
    "ConfigurationError",
    "FadingLife",
    "Grid",
    "OutOfRangeError",
    "Pattern",
    "PatternLibrary",
    "SinkNotificationError",
    "advance_grid_one_generation",
    "cell_at",
    "create_grid",
    "default_library",
    "raw_buffer_pointer",
    "regenerate_grid",
    "register_sink",
    "subgrid_sum",
]
