"""Exceptions raised by the fading Game of Life engine."""


class FadeLifeError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(FadeLifeError, ValueError):
    """Invalid grid dimensions, lattice divisions, patterns or weights."""


class OutOfRangeError(FadeLifeError, IndexError):
    """A coordinate lies outside the grid."""

    def __init__(self, row: int, col: int, height: int, width: int) -> None:
        super().__init__(f"Coordinates (row={row}, col={col}) out of bounds for {width}x{height} grid")
        self.row = row
        self.col = col


class SinkNotificationError(FadeLifeError, RuntimeError):
    """A registered cell sink failed while being notified.

    Only raised by grids created with ``strict_sinks=True``, and only after
    the generation has been fully written.
    """

    def __init__(self, index: int, state: int, failures: int) -> None:
        super().__init__(
            f"Cell sink failed for index {index} (state {state}); {failures} notification(s) failed this step"
        )
        self.index = index
        self.state = state
        self.failures = failures
