"""Simulation driver for the fading Game of Life."""

import logging
from collections import deque
from typing import Any, Deque, Dict, Optional

import numpy as np

from .grid import Grid
from .rules import Cell

logger = logging.getLogger(__name__)


class FadingLife:
    """Drives a Grid generation by generation.

    Rules (see :func:`fadelife.core.rules.next_states`):
    - Live cell with 2-3 neighbors survives
    - Non-live cell with exactly 3 neighbors becomes alive
    - Any other live cell starts vanishing and fades out over three
      generations before it is dead
    """

    def __init__(self, grid: Grid, history_size: int = 100) -> None:
        """Initialize the simulation with a grid.

        Args:
            grid: The cellular grid to simulate
            history_size: Number of population counts to remember
        """
        self.grid = grid
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=history_size)

        self._update_population_history()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of alive cells."""
        return self.grid.population

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    def step(self) -> None:
        """Advance the simulation by one generation."""
        self.grid.step()
        self._generation += 1
        self._update_population_history()

    def run(self, generations: int) -> int:
        """Advance several generations.

        Args:
            generations: Number of generations to run

        Returns:
            The generation number reached
        """
        if generations < 0:
            raise ValueError("Generations must be non-negative")

        for _ in range(generations):
            self.step()

        logger.debug("Ran %d generations, population now %d", generations, self.population)
        return self._generation

    def reset(self, divisions_x: Optional[int] = None, divisions_y: Optional[int] = None) -> None:
        """Reseed the grid and restart counting from generation 0."""
        self.grid.regenerate(divisions_x, divisions_y)
        self._generation = 0
        self._population_history.clear()
        self._update_population_history()

    def _update_population_history(self) -> None:
        self._population_history.append(self.population)

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Calculate recent population change rate.

        Args:
            window_size: Number of recent generations to consider

        Returns:
            Average population change per generation
        """
        recent_history = list(self._population_history)[-window_size:]
        if len(recent_history) < 2:
            return 0.0

        return float(np.mean(np.diff(recent_history)))

    def get_statistics(self) -> Dict[str, Any]:
        """Get simulation statistics.

        Returns:
            Dictionary with generation, population, per-state counts and
            the pattern counts of the last seeding pass
        """
        counts = self.grid.state_counts()
        report = self.grid.last_placement

        return {
            "generation": self._generation,
            "population": self.population,
            "vanishing": sum(count for state, count in counts.items() if state.is_vanishing),
            "state_counts": {state.name.lower(): count for state, count in counts.items()},
            "population_change_rate": self.get_population_change_rate(),
            "population_history": list(self._population_history),
            "grid_size": self.grid.shape,
            "population_density": self.population / (self.grid.width * self.grid.height),
            "dead_fraction": counts[Cell.DEAD] / (self.grid.width * self.grid.height),
            "placed_patterns": dict(report.counts) if report else {},
        }
