"""Packed grid data structure for the fading Game of Life."""

import logging
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np
import torch
import torch.nn.functional as F

from .errors import ConfigurationError, OutOfRangeError, SinkNotificationError
from .patterns import PatternLibrary, default_library
from .placement import LatticeGeometry, PlacementEngine, PlacementReport
from .rules import Cell, next_states

logger = logging.getLogger(__name__)

CellSink = Callable[[int, Cell], None]

GLYPHS = {
    Cell.DEAD: ".",
    Cell.ALIVE: "*",
    Cell.VANISHING_1: "o",
    Cell.VANISHING_2: "+",
    Cell.VANISHING_3: ",",
}


class Grid:
    """A bounded 2D grid of cells stored as a flat row-major buffer.

    Two buffers are kept: ``cells`` holds the current generation and
    ``previous_cells`` the generation before the last step. Edges do not
    wrap, so border cells simply have fewer neighbors.

    A new grid is seeded with randomly placed patterns unless created
    with ``populate=False``.
    """

    def __init__(
        self,
        width: int,
        height: int,
        divisions_x: Optional[int] = None,
        divisions_y: Optional[int] = None,
        *,
        library: Optional[PatternLibrary] = None,
        rng: Optional[np.random.Generator] = None,
        populate: bool = True,
        strict_sinks: bool = False,
    ) -> None:
        """Initialize a new grid.

        Args:
            width: Number of columns
            height: Number of rows
            divisions_x: Placement lattice columns (default 30)
            divisions_y: Placement lattice rows (default 60)
            library: Patterns to seed from (default: built-in library)
            rng: Random generator used for seeding
            populate: Whether to run a seeding pass right away
            strict_sinks: Raise SinkNotificationError after a step in which
                a sink failed, instead of only logging it

        Raises:
            ConfigurationError: If width or height is not positive
        """
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"Grid dimensions must be positive, got {width}x{height}")

        self.width = int(width)
        self.height = int(height)
        self.strict_sinks = strict_sinks
        self._cells = np.zeros(self.width * self.height, dtype=np.uint8)
        self._previous_cells = np.zeros_like(self._cells)
        self._library = library
        self._rng = rng if rng is not None else np.random.default_rng()
        self._sinks: List[CellSink] = []
        self.last_placement: Optional[PlacementReport] = None

        # Reused for every neighbor count
        self._torch_input = torch.zeros(1, 1, self.height, self.width, dtype=torch.float32)
        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

        if populate:
            self.regenerate(divisions_x, divisions_y)

    @property
    def cells(self) -> np.ndarray:
        """Get the current flat cell buffer."""
        return self._cells

    @property
    def previous_cells(self) -> np.ndarray:
        """Get the previous generation's flat cell buffer."""
        return self._previous_cells

    @property
    def view(self) -> np.ndarray:
        """Current cells as a writable ``(height, width)`` view."""
        return self._cells.reshape(self.height, self.width)

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (width, height)."""
        return (self.width, self.height)

    @property
    def library(self) -> PatternLibrary:
        if self._library is None:
            self._library = default_library()
        return self._library

    def index_for(self, row: int, col: int) -> int:
        """Get the buffer index of a cell.

        Raises:
            OutOfRangeError: If the coordinates are outside the grid
        """
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise OutOfRangeError(row, col, self.height, self.width)
        return row * self.width + col

    def get_cell(self, row: int, col: int) -> Cell:
        """Get the state of a cell."""
        return Cell(int(self._cells[self.index_for(row, col)]))

    def set_cell(self, row: int, col: int, state: int) -> None:
        """Set the state of a cell.

        Raises:
            OutOfRangeError: If the coordinates are outside the grid
            ValueError: If ``state`` is not a valid cell code
        """
        self._cells[self.index_for(row, col)] = Cell(state)

    def stamp(self, rows, x: int, y: int) -> None:
        """Copy a cell matrix onto the grid with its top-left corner at (x, y).

        Every cell of ``rows`` is written, dead ones included.

        Raises:
            OutOfRangeError: If the matrix does not fit inside the grid
        """
        matrix = np.asarray(rows, dtype=np.uint8)
        h, w = matrix.shape
        if x < 0 or y < 0 or x + w > self.width or y + h > self.height:
            raise OutOfRangeError(y + h - 1, x + w - 1, self.height, self.width)
        self.view[y : y + h, x : x + w] = matrix

    def clear(self) -> None:
        """Clear all cells (set all to dead)."""
        self._cells.fill(Cell.DEAD)

    def regenerate(
        self, divisions_x: Optional[int] = None, divisions_y: Optional[int] = None
    ) -> PlacementReport:
        """Clear both buffers and reseed the grid with patterns.

        Args:
            divisions_x: Placement lattice columns (default 30)
            divisions_y: Placement lattice rows (default 60)

        Returns:
            Report of the seeding pass, also kept as ``last_placement``
        """
        lattice = LatticeGeometry.for_grid(self.width, self.height, divisions_x, divisions_y)

        self.clear()
        self._previous_cells.fill(Cell.DEAD)

        self.last_placement = PlacementEngine(self.library).populate(self, lattice, self._rng)
        return self.last_placement

    def save_state(self) -> None:
        """Save current state to previous state."""
        self._previous_cells[:] = self._cells

    def step(self) -> None:
        """Advance the grid by one generation.

        The current buffer is snapshotted first, so every cell is evaluated
        against the same generation. Registered sinks are notified after
        the new generation is fully written.
        """
        self.save_state()
        neighbor_counts = self._count_alive(self._previous_cells)
        self._cells[:] = next_states(self._previous_cells, neighbor_counts.ravel())
        self._notify_sinks()

    def add_sink(self, sink: CellSink) -> None:
        """Register a callable notified with ``(index, state)`` for every cell after each step."""
        self._sinks.append(sink)

    def remove_sink(self, sink: CellSink) -> None:
        self._sinks.remove(sink)

    def _notify_sinks(self) -> None:
        if not self._sinks:
            return

        states = [Cell(value) for value in self._cells.tolist()]
        first_failure = None
        total_failures = 0

        for sink in list(self._sinks):
            failures = 0
            for index, state in enumerate(states):
                try:
                    sink(index, state)
                except Exception as exc:
                    failures += 1
                    if failures == 1:
                        logger.warning("Cell sink %r failed at index %d", sink, index, exc_info=True)
                        if first_failure is None:
                            first_failure = (index, state, exc)
            if failures > 1:
                logger.warning("Cell sink %r failed %d times this generation", sink, failures)
            total_failures += failures

        if first_failure is not None and self.strict_sinks:
            index, state, exc = first_failure
            raise SinkNotificationError(index, int(state), total_failures) from exc

    def _count_alive(self, buffer: np.ndarray) -> np.ndarray:
        self._torch_input[0, 0] = torch.from_numpy(
            (buffer.reshape(self.height, self.width) == Cell.ALIVE).astype(np.float32)
        )
        # Zero padding: positions beyond the edge count as dead
        neighbors = F.conv2d(self._torch_input, self._torch_kernel, padding=1)
        return neighbors[0, 0].numpy().astype(np.int8)

    def count_alive_neighbors(self) -> np.ndarray:
        """Count alive neighbors of every cell using a torch convolution.

        Returns:
            ``(height, width)`` array of counts in the range 0-8
        """
        return self._count_alive(self._cells)

    def get_neighbors(self, row: int, col: int) -> int:
        """Count alive neighbors of a single cell."""
        self.index_for(row, col)
        view = self.view
        count = 0
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                ny, nx = row + dy, col + dx
                if 0 <= ny < self.height and 0 <= nx < self.width and view[ny, nx] == Cell.ALIVE:
                    count += 1
        return count

    def subgrid_sum(self, gx: int, gy: int, cell_width: int, cell_height: int) -> Optional[int]:
        """Sum the cell codes of one block of a coarse lattice.

        The block starts at ``(gy * cell_height, gx * cell_width)`` and ends
        at the start of the next block, clipped to the last row/column; both
        ends are inclusive.

        Returns:
            The sum, or None if the clipped block is empty
        """
        if min(gx, gy, cell_width, cell_height) < 0:
            raise ValueError("Subgrid coordinates and sizes must be non-negative")

        start_y = gy * cell_height
        start_x = gx * cell_width
        stop_y = min((gy + 1) * cell_height, self.height - 1)
        stop_x = min((gx + 1) * cell_width, self.width - 1)

        if stop_y <= start_y or stop_x <= start_x:
            return None

        return int(self.view[start_y : stop_y + 1, start_x : stop_x + 1].sum(dtype=np.int64))

    def raw_buffer(self) -> np.ndarray:
        """Read-only view of the current flat cell buffer."""
        view = self._cells.view()
        view.setflags(write=False)
        return view

    def get_changed_cells(self) -> Iterator[Tuple[int, int]]:
        """Get coordinates of cells that changed since last save_state().

        Yields:
            Tuples of (row, col) coordinates for changed cells
        """
        for index in np.flatnonzero(self._cells != self._previous_cells):
            yield divmod(int(index), self.width)

    @property
    def population(self) -> int:
        """Get the number of alive cells."""
        return int(np.count_nonzero(self._cells == Cell.ALIVE))

    def state_counts(self) -> Dict[Cell, int]:
        """Get the number of cells in every state."""
        counts = np.bincount(self._cells, minlength=len(Cell))
        return {state: int(counts[state]) for state in Cell}

    def to_rows(self) -> List[List[int]]:
        """Convert grid to a nested list of rows."""
        return self.view.tolist()

    def from_rows(self, rows: Sequence[Sequence[int]]) -> None:
        """Load cell codes from a nested list of rows.

        Raises:
            ValueError: If data dimensions don't match grid or codes are invalid
        """
        arr = np.array(rows, dtype=np.int64)
        if arr.shape != (self.height, self.width):
            raise ValueError(f"Data shape {arr.shape} doesn't match grid {self.height}x{self.width}")
        if arr.min() < 0 or arr.max() > max(Cell):
            raise ValueError("Data contains invalid cell codes")

        self._cells[:] = arr.ravel()

    def __eq__(self, other: object) -> bool:
        """Check if two grids are equal."""
        if not isinstance(other, Grid):
            return False
        return self.shape == other.shape and np.array_equal(self._cells, other._cells)

    def __str__(self) -> str:
        """String representation with one glyph per cell state."""
        return "\n".join("".join(GLYPHS[Cell(c)] for c in row) for row in self.view.tolist())
