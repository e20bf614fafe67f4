"""Shared fixtures for board tests."""
import matplotlib
import pytest

from game_logic import BoardEngine

matplotlib.use("Agg")


@pytest.fixture
def corner_board() -> BoardEngine:
    """2x2 board with its only mine at (0, 0)."""
    return BoardEngine.create(2, 2, 1, mine_positions=[(0, 0)])


@pytest.fixture
def bottom_row_board() -> BoardEngine:
    """5x5 board whose mines fill the last row."""
    return BoardEngine.create(5, 5, 5, mine_positions=[(4, c) for c in range(5)])


@pytest.fixture
def scripted():
    """Build a ``read`` callable that replays the given lines, then EOF."""
    def make(lines):
        it = iter(lines)

        def read(prompt=""):
            try:
                return next(it)
            except StopIteration:
                raise EOFError from None

        return read

    return make
