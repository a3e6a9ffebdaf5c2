"""Hand-designed seed patterns and the weighted pattern library."""

import math
import threading
from typing import Dict, Iterator, List, Optional, Sequence

import numpy as np

from .errors import ConfigurationError
from .rules import Cell
from .sampler import WeightedSampler


def add_safety_border(rows: Sequence[Sequence[int]]) -> np.ndarray:
    """Surround a cell matrix with one ring of dead cells.

    Args:
        rows: Rectangular matrix of 0/1 cell codes

    Returns:
        New ``uint8`` array two cells wider and taller than ``rows``

    Raises:
        ConfigurationError: If the matrix is empty, ragged or holds codes
            other than dead/alive
    """
    if len(rows) == 0:
        raise ConfigurationError("Pattern must have at least one row")

    row_length = len(rows[0])
    if row_length == 0:
        raise ConfigurationError("Pattern rows must not be empty")
    for i, row in enumerate(rows):
        if len(row) != row_length:
            raise ConfigurationError(f"Pattern row {i} has {len(row)} cells, expected {row_length}")

    matrix = np.array(rows, dtype=np.int64)
    if not np.isin(matrix, (Cell.DEAD, Cell.ALIVE)).all():
        raise ConfigurationError("Pattern cells must be 0 (dead) or 1 (alive)")

    padded = np.zeros((len(rows) + 2, row_length + 2), dtype=np.uint8)
    padded[1:-1, 1:-1] = matrix
    return padded


class Pattern:
    """A named, weighted, border-padded cell template.

    Instances are immutable: the cell array is flagged read-only.
    """

    def __init__(
        self,
        name: str,
        weight: float,
        rows: Sequence[Sequence[int]],
        description: str = "",
    ) -> None:
        """Initialize a pattern.

        Args:
            name: Unique pattern name
            weight: Relative selection weight, must be positive
            rows: Authored cell matrix without the dead border
            description: Optional description
        """
        if not name:
            raise ConfigurationError("Pattern name must not be empty")
        if not (math.isfinite(weight) and weight > 0):
            raise ConfigurationError(f"Pattern '{name}' needs a positive weight, got {weight}")

        self._name = name
        self._weight = float(weight)
        self._cells = add_safety_border(rows)
        self._cells.setflags(write=False)
        self._description = description

    @property
    def name(self) -> str:
        return self._name

    @property
    def weight(self) -> float:
        return self._weight

    @property
    def description(self) -> str:
        return self._description

    @property
    def cells(self) -> np.ndarray:
        """Padded cell matrix, indexed ``[row, col]``."""
        return self._cells

    @property
    def width(self) -> int:
        """Padded width (authored width + 2)."""
        return int(self._cells.shape[1])

    @property
    def height(self) -> int:
        """Padded height (authored height + 2)."""
        return int(self._cells.shape[0])

    @property
    def population(self) -> int:
        """Number of alive cells."""
        return int(np.count_nonzero(self._cells == Cell.ALIVE))

    def render(self) -> str:
        """Draw the padded pattern, one line per row."""
        glyphs = {Cell.DEAD: " · ", Cell.ALIVE: " ■ "}
        return "\n".join("".join(glyphs[Cell(int(c))] for c in row) for row in self._cells)

    def __repr__(self) -> str:
        return f"Pattern({self._name!r}, weight={self._weight}, size={self.width}x{self.height})"


# name, weight, authored cells, description
_BUILTIN_PATTERNS = [
    (
        "blinker",
        0.3,
        [[0, 0, 0], [1, 1, 1], [0, 0, 0]],
        "Period-2 oscillator",
    ),
    (
        "octagon",
        0.4,
        [
            [0, 0, 0, 1, 1, 0, 0, 0],
            [0, 0, 1, 0, 0, 1, 0, 0],
            [0, 1, 0, 0, 0, 0, 1, 0],
            [1, 0, 0, 0, 0, 0, 0, 1],
            [1, 0, 0, 0, 0, 0, 0, 1],
            [0, 1, 0, 0, 0, 0, 1, 0],
            [0, 0, 1, 0, 0, 1, 0, 0],
            [0, 0, 0, 1, 1, 0, 0, 0],
        ],
        "Octagon 2, period-5 oscillator",
    ),
    (
        "beacon",
        0.2,
        [[1, 1, 0, 0], [1, 0, 0, 0], [0, 0, 0, 1], [0, 0, 1, 1]],
        "Period-2 oscillator",
    ),
    (
        "pulsar",
        0.2,
        [
            [0, 0, 1, 1, 1, 0, 0, 0, 1, 1, 1, 0, 0],
            [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
            [1, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 1],
            [1, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 1],
            [1, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 1],
            [0, 0, 1, 1, 1, 0, 0, 0, 1, 1, 1, 0, 0],
            [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
            [0, 0, 1, 1, 1, 0, 0, 0, 1, 1, 1, 0, 0],
            [1, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 1],
            [1, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 1],
            [1, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 1],
            [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
            [0, 0, 1, 1, 1, 0, 0, 0, 1, 1, 1, 0, 0],
        ],
        "Period-3 oscillator",
    ),
    (
        "pentadecathlon",
        0.2,
        [
            [0, 0, 1, 0, 0, 0, 0, 1, 0, 0],
            [1, 1, 0, 1, 1, 1, 1, 0, 1, 1],
            [0, 0, 1, 0, 0, 0, 0, 1, 0, 0],
        ],
        "Period-15 oscillator",
    ),
    (
        "unix",
        0.1,
        [
            [0, 1, 1, 0, 0, 0, 0, 0],
            [0, 1, 1, 0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0, 0, 0, 0],
            [0, 1, 0, 0, 0, 0, 0, 0],
            [1, 0, 1, 0, 0, 0, 0, 0],
            [1, 0, 0, 1, 0, 0, 1, 1],
            [0, 0, 0, 0, 1, 0, 1, 1],
            [0, 0, 1, 1, 0, 0, 0, 0],
        ],
        "Period-6 oscillator",
    ),
    (
        "clock",
        0.1,
        [[0, 0, 1, 0], [1, 0, 1, 0], [0, 1, 0, 1], [0, 1, 0, 0]],
        "Period-2 oscillator",
    ),
    (
        "bipole",
        0.2,
        [
            [1, 1, 0, 0, 0],
            [1, 0, 1, 0, 0],
            [0, 0, 0, 0, 0],
            [0, 0, 1, 0, 1],
            [0, 0, 0, 1, 1],
        ],
        "Period-2 oscillator",
    ),
    (
        "queen bee shuttle",
        0.15,
        [
            [0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
            [1, 1, 0, 0, 0, 1, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 1],
            [1, 1, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 1],
            [0, 0, 0, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
        ],
        "Period-30 oscillator",
    ),
    (
        "tumbler",
        0.1,
        [
            [0, 1, 0, 0, 0, 0, 0, 1, 0],
            [1, 0, 1, 0, 0, 0, 1, 0, 1],
            [1, 0, 0, 1, 0, 1, 0, 0, 1],
            [0, 0, 1, 0, 0, 0, 1, 0, 0],
            [0, 0, 1, 1, 0, 1, 1, 0, 0],
        ],
        "Period-14 oscillator",
    ),
]


class PatternLibrary:
    """Ordered, read-only collection of patterns with weighted picking."""

    def __init__(self, patterns: Sequence[Pattern]) -> None:
        """Initialize the library.

        Args:
            patterns: Patterns in selection order

        Raises:
            ConfigurationError: If the library is empty or names repeat
        """
        if not patterns:
            raise ConfigurationError("Pattern library must contain at least one pattern")

        self._patterns: Dict[str, Pattern] = {}
        for pattern in patterns:
            if pattern.name in self._patterns:
                raise ConfigurationError(f"Duplicate pattern name '{pattern.name}'")
            self._patterns[pattern.name] = pattern

        self._ordered = tuple(patterns)
        self._sampler = WeightedSampler([p.weight for p in self._ordered])

    @classmethod
    def load(cls) -> "PatternLibrary":
        """Build the library of built-in patterns."""
        return cls(
            [Pattern(name, weight, rows, description) for name, weight, rows, description in _BUILTIN_PATTERNS]
        )

    def __len__(self) -> int:
        return len(self._ordered)

    def __iter__(self) -> Iterator[Pattern]:
        return iter(self._ordered)

    def __getitem__(self, index: int) -> Pattern:
        return self._ordered[index]

    @property
    def sampler(self) -> WeightedSampler:
        return self._sampler

    @property
    def weights(self) -> List[float]:
        return [p.weight for p in self._ordered]

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name.

        Args:
            name: Pattern name

        Returns:
            Pattern instance or None if not found
        """
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        """Get pattern names in selection order."""
        return [p.name for p in self._ordered]

    def pick(self, rng: np.random.Generator) -> Pattern:
        """Pick a pattern with probability proportional to its weight."""
        return self._ordered[self._sampler.sample(rng)]


_default_library: Optional[PatternLibrary] = None
_default_library_lock = threading.Lock()


def default_library() -> PatternLibrary:
    """Return the process-wide built-in library, creating it on first use."""
    global _default_library
    if _default_library is None:
        with _default_library_lock:
            if _default_library is None:
                _default_library = PatternLibrary.load()
    return _default_library
