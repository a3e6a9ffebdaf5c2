"""Tests for the CLI frontend."""

import argparse
from io import StringIO
from unittest.mock import patch

import numpy as np

from fadelife.core.grid import Grid
from fadelife.core.rules import Cell
from fadelife.frontends.cli import (
    ChangeCounter,
    CLIFadingLife,
    create_parser,
    main,
    print_results,
    validate_args,
)


class TestChangeCounter:
    """Test cases for the change-counting sink."""

    def test_counts_changes_per_generation(self):
        grid = Grid(4, 4, populate=False)
        grid.set_cell(1, 1, Cell.ALIVE)
        counter = ChangeCounter(16)
        counter.sync(grid)
        grid.add_sink(counter)

        for _ in range(5):
            grid.step()

        # alive -> v1 -> v2 -> v3 -> dead, then nothing left to change
        assert counter.history == [1, 1, 1, 1, 0]


class TestCLIFadingLife:
    """Test cases for the CLI fading Game of Life."""

    def test_initialization(self):
        cli = CLIFadingLife()
        assert len(cli.pattern_library) == 10

    def test_run_simulation(self):
        cli = CLIFadingLife()

        grid, stats = cli.run_simulation(width=80, height=60, generations=5, seed=3)

        assert grid.shape == (80, 60)
        assert stats["generation"] == 5
        assert len(stats["changes_per_generation"]) == 5
        assert "initial_population" in stats
        assert "duration_seconds" in stats
        assert sum(stats["placed_patterns"].values()) == grid.last_placement.total_placed

    def test_run_simulation_reproducible(self):
        cli = CLIFadingLife()
        grid1, _ = cli.run_simulation(width=60, height=60, generations=3, seed=9)
        grid2, _ = cli.run_simulation(width=60, height=60, generations=3, seed=9)
        assert np.array_equal(grid1.cells, grid2.cells)

    def test_show_grid(self):
        cli = CLIFadingLife()
        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            cli.run_simulation(width=10, height=5, generations=1, seed=0, show_grid=True)

        output = mock_stdout.getvalue()
        assert "Initial grid:" in output
        assert "Grid after 1 generations:" in output

    def test_format_large_grid(self):
        cli = CLIFadingLife()
        grid = Grid(200, 10, populate=False)
        assert cli._format_grid(grid) == "Grid too large to display (200x10)"

    def test_list_patterns(self):
        cli = CLIFadingLife()
        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            cli.list_patterns()

        output = mock_stdout.getvalue()
        assert "Available patterns:" in output
        assert "blinker: 5x5 padded, 3 cells, weight 0.3" in output
        assert "queen bee shuttle" in output


class TestArgumentHandling:
    """Test cases for parsing and validating arguments."""

    def test_parser_defaults(self):
        args = create_parser().parse_args([])
        assert args.width == 120
        assert args.height == 60
        assert args.generations == 100
        assert args.divisions_x is None
        assert args.divisions_y is None
        assert args.seed is None
        assert not args.show_grid
        assert not args.verbose

    def test_parser_options(self):
        args = create_parser().parse_args(
            ["-W", "40", "-H", "30", "--divisions-x", "8", "--divisions-y", "6", "-g", "7", "--seed", "2", "-s"]
        )
        assert (args.width, args.height) == (40, 30)
        assert (args.divisions_x, args.divisions_y) == (8, 6)
        assert args.generations == 7
        assert args.seed == 2
        assert args.show_grid

    def test_validate_args(self):
        args = argparse.Namespace(width=10, height=10, generations=0, divisions_x=None, divisions_y=3)
        assert validate_args(args)

    def test_validate_args_errors(self):
        args = argparse.Namespace(width=0, height=-1, generations=-5, divisions_x=0, divisions_y=None)
        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            assert not validate_args(args)

        output = mock_stdout.getvalue()
        assert "Width must be positive" in output
        assert "Height must be positive" in output
        assert "Generations must be non-negative" in output
        assert "Divisions X must be positive" in output


class TestMain:
    """Test cases for the CLI entry point."""

    def test_main_runs(self):
        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            exit_code = main(["-W", "40", "-H", "30", "-g", "3", "--seed", "1"])

        assert exit_code == 0
        output = mock_stdout.getvalue()
        assert "Generation 3:" in output
        assert "Seeded patterns:" in output

    def test_main_list_patterns(self):
        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            assert main(["--list-patterns"]) == 0
        assert "pulsar" in mock_stdout.getvalue()

    def test_main_invalid_args(self):
        with patch("sys.stdout", new_callable=StringIO):
            assert main(["-W", "0"]) == 1
            assert main(["--divisions-y", "0"]) == 1

    def test_print_results(self):
        stats = {
            "generation": 4,
            "population": 12,
            "vanishing": 5,
            "initial_population": 20,
            "duration_seconds": 0.01,
            "placed_patterns": {"blinker": 2, "pulsar": 0},
            "changes_per_generation": [9, 7],
        }
        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            print_results(stats)

        output = mock_stdout.getvalue()
        assert "Generation 4: 12 alive, 5 vanishing" in output
        assert "Seeded patterns: blinker (2x)" in output
        assert "pulsar" not in output
        assert "Cells changed in last generation: 7" in output
