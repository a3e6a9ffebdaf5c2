"""Seeding a grid with non-overlapping, weighted-random patterns."""

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Set, Tuple

import numpy as np

from .errors import ConfigurationError
from .patterns import Pattern, PatternLibrary

if TYPE_CHECKING:
    from .grid import Grid

logger = logging.getLogger(__name__)

DEFAULT_DIVISIONS_X = 30
DEFAULT_DIVISIONS_Y = 60
PLACEMENT_PROBABILITY = 0.4


@dataclass(frozen=True)
class LatticeGeometry:
    """Coarse partition of a grid used to keep placed patterns apart."""

    cell_width: int
    cell_height: int
    cells_x: int
    cells_y: int

    @classmethod
    def for_grid(
        cls,
        width: int,
        height: int,
        divisions_x: Optional[int] = None,
        divisions_y: Optional[int] = None,
    ) -> "LatticeGeometry":
        """Compute the lattice for a grid.

        Raises:
            ConfigurationError: If a division count is not positive
        """
        divisions_x = DEFAULT_DIVISIONS_X if divisions_x is None else divisions_x
        divisions_y = DEFAULT_DIVISIONS_Y if divisions_y is None else divisions_y
        if divisions_x <= 0 or divisions_y <= 0:
            raise ConfigurationError(f"Lattice divisions must be positive, got {divisions_x}x{divisions_y}")

        cell_width = max(1, math.ceil(width / divisions_x))
        cell_height = max(1, math.ceil(height / divisions_y))
        return cls(
            cell_width=cell_width,
            cell_height=cell_height,
            cells_x=max(1, width // cell_width),
            cells_y=max(1, height // cell_height),
        )

    def span_for(self, gx: int, gy: int, width: int, height: int) -> Optional[Tuple[int, int]]:
        """Find the last lattice column and row covered by a footprint anchored in (gx, gy).

        Returns:
            ``(c_gx, c_gy)``, or None if the footprint runs off the lattice
        """
        c_gx = gx
        while (c_gx - gx + 1) * self.cell_width < width:
            c_gx += 1
            if c_gx >= self.cells_x:
                return None

        c_gy = gy
        while (c_gy - gy + 1) * self.cell_height < height:
            c_gy += 1
            if c_gy >= self.cells_y:
                return None

        return c_gx, c_gy


@dataclass(frozen=True)
class Placement:
    """One pattern stamped onto the grid."""

    name: str
    x: int
    y: int
    width: int
    height: int
    span: Tuple[int, int, int, int]  # gx, gy, c_gx, c_gy, all inclusive

    def lattice_cells(self) -> Set[Tuple[int, int]]:
        gx, gy, c_gx, c_gy = self.span
        return {(ix, iy) for ix in range(gx, c_gx + 1) for iy in range(gy, c_gy + 1)}


@dataclass
class PlacementReport:
    """Outcome of one seeding pass."""

    lattice: LatticeGeometry
    placements: List[Placement] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)
    attempts: int = 0

    @property
    def total_placed(self) -> int:
        return len(self.placements)

    def summary(self) -> str:
        return ", ".join(f"{name} ({count}x)" for name, count in self.counts.items())


class PlacementEngine:
    """Stamps randomly chosen patterns onto a grid without overlaps.

    Each lattice cell gets a placement attempt with probability
    ``probability``. The pattern is anchored at a random position inside
    the lattice cell and claims every lattice cell its padded footprint
    covers; attempts that would leave the grid or touch a claimed lattice
    cell are skipped.
    """

    def __init__(self, library: PatternLibrary, probability: float = PLACEMENT_PROBABILITY) -> None:
        if not 0.0 <= probability <= 1.0:
            raise ConfigurationError(f"Placement probability must be within [0, 1], got {probability}")
        self.library = library
        self.probability = probability

    def populate(self, grid: "Grid", lattice: LatticeGeometry, rng: np.random.Generator) -> PlacementReport:
        """Run one seeding pass over an empty grid.

        Args:
            grid: Grid to stamp patterns onto
            lattice: Placement lattice for the grid
            rng: Source of randomness

        Returns:
            Report listing every accepted placement
        """
        report = PlacementReport(lattice=lattice, counts={name: 0 for name in self.library.list_patterns()})
        occupied: Set[Tuple[int, int]] = set()

        for gx in range(lattice.cells_x):
            for gy in range(lattice.cells_y):
                if rng.random() > self.probability:
                    continue

                report.attempts += 1
                pattern = self.library.pick(rng)
                placement = self._try_place(grid, lattice, pattern, gx, gy, occupied, rng)
                if placement is None:
                    continue

                occupied |= placement.lattice_cells()
                grid.stamp(pattern.cells, placement.x, placement.y)
                report.placements.append(placement)
                report.counts[pattern.name] += 1

        self._log_report(report)
        return report

    def _try_place(
        self,
        grid: "Grid",
        lattice: LatticeGeometry,
        pattern: Pattern,
        gx: int,
        gy: int,
        occupied: Set[Tuple[int, int]],
        rng: np.random.Generator,
    ) -> Optional[Placement]:
        x = gx * lattice.cell_width + int(rng.integers(0, lattice.cell_width, endpoint=True))
        y = gy * lattice.cell_height + int(rng.integers(0, lattice.cell_height, endpoint=True))

        span = lattice.span_for(gx, gy, pattern.width, pattern.height)
        if span is None:
            return None

        # Strict: a pattern never touches the last row or column
        if x + pattern.width >= grid.width or y + pattern.height >= grid.height:
            return None

        placement = Placement(pattern.name, x, y, pattern.width, pattern.height, (gx, gy) + span)
        if not occupied.isdisjoint(placement.lattice_cells()):
            return None

        return placement

    def _log_report(self, report: PlacementReport) -> None:
        logger.info(
            "Grid seeded with %d patterns in %d attempts: %s",
            report.total_placed,
            report.attempts,
            report.summary(),
        )
        if logger.isEnabledFor(logging.DEBUG):
            for pattern in self.library:
                logger.debug(
                    "%s (%dx)\n%s",
                    pattern.name,
                    report.counts[pattern.name],
                    pattern.render(),
                )
