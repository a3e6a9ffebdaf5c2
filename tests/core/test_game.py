"""Tests for the FadingLife class."""

import numpy as np
import pytest

from fadelife.core.game import FadingLife
from fadelife.core.grid import Grid
from fadelife.core.rules import Cell


class TestFadingLife:
    """Test cases for the FadingLife class."""

    def test_initialization(self):
        grid = Grid(10, 10, populate=False)
        game = FadingLife(grid)

        assert game.grid is grid
        assert game.generation == 0
        assert game.population == 0
        assert game.population_history == [0]

    def test_step_counts_generations(self):
        grid = Grid(10, 10, populate=False)
        grid.stamp([[1, 1], [1, 1]], x=4, y=4)
        game = FadingLife(grid)

        for _ in range(5):
            game.step()

        assert game.generation == 5
        assert game.population == 4
        assert game.population_history == [4] * 6

    def test_run(self):
        grid = Grid(10, 10, populate=False)
        grid.set_cell(5, 5, Cell.ALIVE)
        game = FadingLife(grid)

        assert game.run(3) == 3
        assert game.population_history == [1, 0, 0, 0]
        assert grid.get_cell(5, 5) == Cell.VANISHING_3

    def test_run_negative(self):
        game = FadingLife(Grid(3, 3, populate=False))
        with pytest.raises(ValueError):
            game.run(-1)

    def test_population_change_rate(self):
        grid = Grid(10, 10, populate=False)
        grid.set_cell(5, 5, Cell.ALIVE)
        grid.set_cell(1, 1, Cell.ALIVE)
        game = FadingLife(grid)
        assert game.get_population_change_rate() == 0.0

        game.step()
        game.step()

        assert game.population_history == [2, 0, 0]
        assert game.get_population_change_rate() == pytest.approx(-1.0)

    def test_reset_reseeds(self):
        grid = Grid(150, 150, rng=np.random.default_rng(4))
        game = FadingLife(grid)
        game.run(4)

        game.reset()

        assert game.generation == 0
        assert game.population_history == [grid.population]
        assert set(np.unique(grid.cells).tolist()) <= {Cell.DEAD, Cell.ALIVE}

    def test_statistics(self):
        grid = Grid(5, 5, populate=False)
        grid.set_cell(2, 2, Cell.ALIVE)
        game = FadingLife(grid)
        game.step()

        stats = game.get_statistics()

        assert stats["generation"] == 1
        assert stats["population"] == 0
        assert stats["vanishing"] == 1
        assert stats["state_counts"]["vanishing_1"] == 1
        assert stats["state_counts"]["dead"] == 24
        assert stats["grid_size"] == (5, 5)
        assert stats["population_density"] == 0.0
        assert stats["dead_fraction"] == pytest.approx(24 / 25)
        assert stats["placed_patterns"] == {}

    def test_statistics_include_placement(self):
        grid = Grid(200, 200, rng=np.random.default_rng(6))
        stats = FadingLife(grid).get_statistics()
        assert stats["placed_patterns"] == grid.last_placement.counts
