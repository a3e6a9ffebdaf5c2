#!/usr/bin/env python3
"""
Example usage of the fadelife package.
"""

import logging

import numpy as np

from fadelife import FadingLife, Grid


def main():
    """Demonstrate programmatic usage of the fadelife package."""
    logging.basicConfig(level=logging.INFO)

    # Seed a grid with patterns from the built-in library
    grid = Grid(90, 40, divisions_x=9, divisions_y=4, rng=np.random.default_rng(42))
    game = FadingLife(grid)

    print("Initial state:")
    print(grid)
    print(f"Population: {game.population}")
    print()

    # Count cells a renderer would have to repaint
    repaints = []
    grid.add_sink(lambda index, state: repaints.append(index) if grid.previous_cells[index] != state else None)

    for _ in range(10):
        game.step()
        print(f"Generation {game.generation}: {game.population} alive, {len(repaints)} repaints")
        repaints.clear()

    print()
    print(grid)

    stats = game.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
