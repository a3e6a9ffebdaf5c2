"""Function-style entry points for hosts embedding the engine."""

from typing import Any, Optional

import numpy as np

from .grid import CellSink, Grid
from .rules import Cell


def create_grid(
    width: int,
    height: int,
    divisions_x: Optional[int] = None,
    divisions_y: Optional[int] = None,
    **kwargs: Any,
) -> Grid:
    """Create a grid and seed it with patterns.

    Extra keyword arguments are passed on to :class:`Grid`.
    """
    return Grid(width, height, divisions_x, divisions_y, **kwargs)


def regenerate_grid(grid: Grid, divisions_x: Optional[int] = None, divisions_y: Optional[int] = None) -> None:
    grid.regenerate(divisions_x, divisions_y)


def advance_grid_one_generation(grid: Grid) -> None:
    grid.step()


def cell_at(grid: Grid, row: int, col: int) -> Cell:
    return grid.get_cell(row, col)


def subgrid_sum(grid: Grid, gx: int, gy: int, cell_width: int, cell_height: int) -> Optional[int]:
    return grid.subgrid_sum(gx, gy, cell_width, cell_height)


def raw_buffer_pointer(grid: Grid) -> np.ndarray:
    """Read-only view of the packed row-major cell buffer.

    The view tracks the grid: it shows each new generation without being
    fetched again.
    """
    return grid.raw_buffer()


def register_sink(grid: Grid, sink: CellSink) -> None:
    grid.add_sink(sink)
