"""Command-line interface for the fading Game of Life."""

import argparse
import logging
import sys
import time
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from ..core.errors import ConfigurationError
from ..core.game import FadingLife
from ..core.grid import Grid
from ..core.patterns import PatternLibrary, default_library
from ..core.rules import Cell

logger = logging.getLogger(__name__)


class ChangeCounter:
    """Cell sink that counts how many cells changed state in each generation.

    It keeps its own copy of the last state it was told about, the way a
    renderer would only repaint cells whose color changed.
    """

    def __init__(self, size: int) -> None:
        self._states = np.zeros(size, dtype=np.uint8)
        self._changed = 0
        self.history: List[int] = []

    def __call__(self, index: int, state: Cell) -> None:
        if self._states[index] != state:
            self._states[index] = state
            self._changed += 1
        if index == len(self._states) - 1:
            self.history.append(self._changed)
            self._changed = 0

    def sync(self, grid: Grid) -> None:
        """Take the grid's current cells as the already drawn state."""
        self._states[:] = grid.cells
        self._changed = 0


class CLIFadingLife:
    """Command-line interface for running fading Game of Life simulations."""

    def __init__(self, library: Optional[PatternLibrary] = None) -> None:
        """Initialize CLI interface."""
        self.pattern_library = library or default_library()

    def run_simulation(
        self,
        width: int,
        height: int,
        generations: int,
        divisions_x: Optional[int] = None,
        divisions_y: Optional[int] = None,
        seed: Optional[int] = None,
        show_grid: bool = False,
    ) -> Tuple[Grid, Dict[str, Any]]:
        """Seed a grid and run it for a number of generations.

        Args:
            width: Grid width
            height: Grid height
            generations: Generations to simulate
            divisions_x: Placement lattice columns
            divisions_y: Placement lattice rows
            seed: Random seed for reproducible seeding
            show_grid: Print the initial and final grid

        Returns:
            Tuple of (grid, statistics)
        """
        grid = Grid(
            width,
            height,
            divisions_x,
            divisions_y,
            library=self.pattern_library,
            rng=np.random.default_rng(seed),
        )
        game = FadingLife(grid)

        counter = ChangeCounter(width * height)
        counter.sync(grid)
        grid.add_sink(counter)

        initial_population = game.population
        logger.info("Initial population: %d cells", initial_population)

        if show_grid:
            print("Initial grid:")
            print(self._format_grid(grid))

        start_time = time.time()
        game.run(generations)
        duration = time.time() - start_time

        if show_grid:
            print(f"\nGrid after {game.generation} generations:")
            print(self._format_grid(grid))

        stats = game.get_statistics()
        stats["initial_population"] = initial_population
        stats["duration_seconds"] = duration
        stats["changes_per_generation"] = list(counter.history)

        return grid, stats

    def _format_grid(self, grid: Grid, max_size: int = 120) -> str:
        """Format grid for display, truncating if too large."""
        if grid.width > max_size or grid.height > max_size:
            return f"Grid too large to display ({grid.width}x{grid.height})"

        return str(grid)

    def list_patterns(self) -> None:
        """List available patterns with their weights."""
        print("Available patterns:")
        probabilities = self.pattern_library.sampler.probabilities
        for pattern, probability in zip(self.pattern_library, probabilities):
            print(
                f"  {pattern.name}: {pattern.width}x{pattern.height} padded, "
                f"{pattern.population} cells, weight {pattern.weight} ({probability:.1%})"
            )
            if pattern.description:
                print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run a fading Game of Life seeded with hand-designed patterns",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Seed a 120x60 grid and run 50 generations
  fadelife-cli --width 120 --height 60 --generations 50

  # Reproducible seeding with a coarser placement lattice
  fadelife-cli -W 80 -H 40 --divisions-x 10 --divisions-y 5 --seed 7 --show-grid

  # List available patterns
  fadelife-cli --list-patterns
        """,
    )

    parser.add_argument("-W", "--width", type=int, default=120, help="Grid width (default: 120)")

    parser.add_argument("-H", "--height", type=int, default=60, help="Grid height (default: 60)")

    parser.add_argument(
        "--divisions-x",
        type=int,
        default=None,
        help="Placement lattice columns (default: 30)",
    )

    parser.add_argument(
        "--divisions-y",
        type=int,
        default=None,
        help="Placement lattice rows (default: 60)",
    )

    parser.add_argument(
        "-g",
        "--generations",
        type=int,
        default=100,
        help="Generations to simulate (default: 100)",
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible pattern placement",
    )

    parser.add_argument(
        "-s",
        "--show-grid",
        action="store_true",
        help="Display initial and final grid states",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log placement details and pattern drawings",
    )

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.height <= 0:
        errors.append("Height must be positive")

    if args.generations < 0:
        errors.append("Generations must be non-negative")

    if args.divisions_x is not None and args.divisions_x <= 0:
        errors.append("Divisions X must be positive")

    if args.divisions_y is not None and args.divisions_y <= 0:
        errors.append("Divisions Y must be positive")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def print_results(stats: Dict[str, Any]) -> None:
    """Print a summary of a finished simulation."""
    print(f"Generation {stats['generation']}: {stats['population']} alive, {stats['vanishing']} vanishing")
    print(f"Population: {stats['initial_population']} → {stats['population']}, Duration: {stats['duration_seconds']:.3f}s")

    placed = {name: count for name, count in stats["placed_patterns"].items() if count}
    if placed:
        print("Seeded patterns: " + ", ".join(f"{name} ({count}x)" for name, count in placed.items()))
    else:
        print("Seeded patterns: none")

    if stats["changes_per_generation"]:
        print(f"Cells changed in last generation: {stats['changes_per_generation'][-1]}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    cli = CLIFadingLife()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    try:
        _, stats = cli.run_simulation(
            width=args.width,
            height=args.height,
            generations=args.generations,
            divisions_x=args.divisions_x,
            divisions_y=args.divisions_y,
            seed=args.seed,
            show_grid=args.show_grid,
        )
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1

    print_results(stats)
    return 0


if __name__ == "__main__":
    sys.exit(main())
