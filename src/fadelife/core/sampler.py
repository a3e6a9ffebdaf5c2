"""Weighted random selection of pattern indices."""

from typing import Sequence

import numpy as np

from .errors import ConfigurationError


class WeightedSampler:
    """Draws indices with probability proportional to their weight.

    The cumulative distribution is built once at construction, so a
    sampler can be shared read-only between grids.
    """

    def __init__(self, weights: Sequence[float]) -> None:
        """Build the distribution.

        Args:
            weights: Relative weight of each index

        Raises:
            ConfigurationError: If weights are empty, negative, non-finite
                or all zero
        """
        arr = np.array(weights, dtype=np.float64)
        if arr.ndim != 1 or arr.size == 0:
            raise ConfigurationError("Cannot sample from an empty weight vector")
        if not np.all(np.isfinite(arr)):
            raise ConfigurationError(f"Weights must be finite: {arr.tolist()}")
        if np.any(arr < 0):
            raise ConfigurationError(f"Weights must be non-negative: {arr.tolist()}")

        total = float(arr.sum())
        if total <= 0:
            raise ConfigurationError("At least one weight must be positive")

        self._weights = arr
        self._weights.setflags(write=False)
        self._total = total
        self._cumulative = np.cumsum(arr)
        self._last_positive = int(np.flatnonzero(arr > 0)[-1])

    def __len__(self) -> int:
        return int(self._weights.size)

    @property
    def weights(self) -> np.ndarray:
        """Read-only weight vector."""
        return self._weights

    @property
    def probabilities(self) -> np.ndarray:
        """Normalised selection probability of every index."""
        return self._weights / self._total

    def sample(self, rng: np.random.Generator) -> int:
        """Draw one index.

        Args:
            rng: Source of randomness; exactly one uniform draw is consumed

        Returns:
            Index in ``[0, len(self))``
        """
        target = rng.random() * self._total
        # side="right" skips zero-weight entries whose cumulative sum equals
        # their predecessor's
        index = int(np.searchsorted(self._cumulative, target, side="right"))
        return min(index, self._last_positive)
