"""Cell states and the fading Game of Life transition rule."""

from enum import IntEnum

import numpy as np


class Cell(IntEnum):
    """State of a single grid position, stored as a ``uint8`` code."""

    DEAD = 0
    ALIVE = 1
    VANISHING_1 = 2
    VANISHING_2 = 3
    VANISHING_3 = 4

    @property
    def is_vanishing(self) -> bool:
        return self in VANISHING_CHAIN


VANISHING_CHAIN = (Cell.VANISHING_1, Cell.VANISHING_2, Cell.VANISHING_3)

# Next state of every code when no birth or death applies to it.
_DECAY = np.array(
    [Cell.DEAD, Cell.ALIVE, Cell.VANISHING_2, Cell.VANISHING_3, Cell.DEAD],
    dtype=np.uint8,
)


def next_states(previous: np.ndarray, neighbor_counts: np.ndarray) -> np.ndarray:
    """Apply the transition table to a whole generation.

    Rules, first match wins:
    - Alive with fewer than 2 or more than 3 alive neighbors starts vanishing
    - Alive with 2 or 3 alive neighbors survives
    - Any non-alive cell with exactly 3 alive neighbors is born
    - Vanishing cells advance one step along the chain, the last one dies
    - Dead cells stay dead

    Args:
        previous: Cell codes of the previous generation
        neighbor_counts: Alive neighbor count for every cell, same shape

    Returns:
        New array with the next generation's cell codes
    """
    if previous.shape != neighbor_counts.shape:
        raise ValueError(f"Shape mismatch: {previous.shape} vs {neighbor_counts.shape}")

    result = _DECAY[previous]

    alive = previous == Cell.ALIVE
    result[alive & ((neighbor_counts < 2) | (neighbor_counts > 3))] = Cell.VANISHING_1
    result[~alive & (neighbor_counts == 3)] = Cell.ALIVE

    return result


def next_state(previous: Cell, neighbor_count: int) -> Cell:
    """Scalar form of :func:`next_states` for a single cell."""
    result = next_states(
        np.array([previous], dtype=np.uint8),
        np.array([neighbor_count], dtype=np.int64),
    )
    return Cell(int(result[0]))
