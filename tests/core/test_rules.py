"""Tests for cell states and the transition rule."""

import numpy as np
import pytest

from fadelife.core.rules import VANISHING_CHAIN, Cell, next_state, next_states


class TestCell:
    """Test cases for the Cell enum."""

    def test_codes(self):
        """Dead and alive have fixed codes."""
        assert Cell.DEAD == 0
        assert Cell.ALIVE == 1
        assert [int(c) for c in VANISHING_CHAIN] == [2, 3, 4]

    def test_is_vanishing(self):
        assert not Cell.DEAD.is_vanishing
        assert not Cell.ALIVE.is_vanishing
        assert all(c.is_vanishing for c in VANISHING_CHAIN)


class TestTransition:
    """Test cases for the transition table."""

    @pytest.mark.parametrize("count", [0, 1, 4, 5, 8])
    def test_alive_dies_into_vanishing(self, count):
        """Under- and overpopulated cells start fading."""
        assert next_state(Cell.ALIVE, count) == Cell.VANISHING_1

    @pytest.mark.parametrize("count", [2, 3])
    def test_alive_survives(self, count):
        assert next_state(Cell.ALIVE, count) == Cell.ALIVE

    @pytest.mark.parametrize("state", [Cell.DEAD, *VANISHING_CHAIN])
    def test_birth_on_three(self, state):
        """Every non-alive state is reborn with exactly three neighbors."""
        assert next_state(state, 3) == Cell.ALIVE

    def test_vanishing_chain(self):
        """Vanishing cells advance regardless of the neighbor count."""
        assert next_state(Cell.VANISHING_1, 0) == Cell.VANISHING_2
        assert next_state(Cell.VANISHING_2, 5) == Cell.VANISHING_3
        assert next_state(Cell.VANISHING_3, 2) == Cell.DEAD

    @pytest.mark.parametrize("count", [0, 1, 2, 4, 8])
    def test_dead_stays_dead(self, count):
        assert next_state(Cell.DEAD, count) == Cell.DEAD

    def test_vectorised_matches_scalar(self):
        """The array form applies the same table cell by cell."""
        states = np.array([s for s in Cell for _ in range(9)], dtype=np.uint8)
        counts = np.array([n for _ in Cell for n in range(9)], dtype=np.int8)

        result = next_states(states, counts)

        for state, count, new in zip(states, counts, result):
            assert new == next_state(Cell(int(state)), int(count))

    def test_input_not_modified(self):
        previous = np.array([Cell.ALIVE, Cell.VANISHING_1], dtype=np.uint8)
        next_states(previous, np.array([0, 0]))
        assert previous.tolist() == [1, 2]

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            next_states(np.zeros(3, dtype=np.uint8), np.zeros(4, dtype=np.int8))
