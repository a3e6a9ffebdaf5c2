"""Basic tests for the fadelife package."""

import numpy as np

from fadelife import Cell, FadingLife, Grid, default_library


def test_grid_creation():
    """Test basic grid creation and cell operations."""
    grid = Grid(10, 10, populate=False)
    assert grid.width == 10
    assert grid.height == 10
    assert grid.get_cell(0, 0) is Cell.DEAD

    grid.set_cell(5, 5, Cell.ALIVE)
    assert grid.get_cell(5, 5) is Cell.ALIVE


def test_seeded_grid():
    """Test that a default grid is seeded with patterns."""
    grid = Grid(240, 240, rng=np.random.default_rng(0))
    assert grid.population > 0
    assert grid.last_placement.total_placed > 0


def test_pattern_library():
    """Test pattern library has the built-in patterns."""
    patterns = default_library().list_patterns()
    assert len(patterns) == 10
    assert "pulsar" in patterns


def test_blinker_pattern():
    """Test the library blinker oscillates when embedded alone."""
    grid = Grid(9, 9, populate=False)
    game = FadingLife(grid)
    grid.stamp(default_library().get_pattern("blinker").cells, x=2, y=2)

    assert game.population == 3
    assert grid.get_cell(4, 3) is Cell.ALIVE

    game.step()
    assert game.population == 3
    assert grid.get_cell(3, 4) is Cell.ALIVE
    assert grid.get_cell(5, 4) is Cell.ALIVE
    assert grid.get_cell(4, 3) is Cell.VANISHING_1

    game.step()
    assert game.population == 3
    assert grid.get_cell(4, 3) is Cell.ALIVE
    assert grid.get_cell(4, 5) is Cell.ALIVE
