"""Core fading Game of Life logic."""

from .errors import ConfigurationError, FadeLifeError, OutOfRangeError, SinkNotificationError
from .rules import Cell
from .sampler import WeightedSampler
from .patterns import Pattern, PatternLibrary, default_library
from .placement import LatticeGeometry, Placement, PlacementEngine, PlacementReport
from .grid import Grid
from .game import FadingLife

__all__ = [
    "Cell",
    "ConfigurationError",
    "FadeLifeError",
    "FadingLife",
    "Grid",
    "LatticeGeometry",
    "OutOfRangeError",
    "Pattern",
    "PatternLibrary",
    "Placement",
    "PlacementEngine",
    "PlacementReport",
    "SinkNotificationError",
    "WeightedSampler",
    "default_library",
]
