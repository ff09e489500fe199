"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Iterable, List, Tuple

# Add src (package) and the project root (main.py) to path for imports
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(0, str(ROOT))

from minesweeper import (
    Board,
    Cell,
    Difficulty,
    GameSettings,
    Minesweeper,
    make_rng,
)


# ============================================================================
# Deterministic Collaborators
# ============================================================================

class ScriptedRandom:
    """RandomSource that places mines at scripted (row, col) positions."""

    def __init__(self, positions: Iterable[Tuple[int, int]]) -> None:
        self.values: List[int] = []
        for row, col in positions:
            self.values.extend((row, col))
        self.calls: List[Tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        if not self.values:
            raise AssertionError("ScriptedRandom ran out of values")
        value = self.values.pop(0)
        assert a <= value <= b
        return value


class FakeClock:
    """Clock that advances by a fixed step every time it is read."""

    def __init__(self, start: float = 1000.0, step: float = 1.5) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> float:
        current = self.now
        self.now += self.step
        return current


def make_game(
    width: int,
    height: int,
    mines: List[Tuple[int, int]],
    clock=None,
) -> Minesweeper:
    """Create a custom game whose mines land at the given positions."""
    settings = GameSettings(width, height, len(mines))
    return Minesweeper(
        Difficulty.CUSTOM,
        settings,
        rng=ScriptedRandom(mines),
        clock=clock or FakeClock(),
    )


def mine_positions(board: Board) -> List[Tuple[int, int]]:
    """List the positions of all mines on a board."""
    return [cell.position for cell in board if cell.is_mine]


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    """Deterministic clock starting at t=1000s."""
    return FakeClock()


@pytest.fixture
def default_game(clock: FakeClock) -> Minesweeper:
    """Create a seeded beginner game (9x9, 10 mines)."""
    return Minesweeper(rng=make_rng(1234), clock=clock)


@pytest.fixture
def small_game(clock: FakeClock) -> Minesweeper:
    """3x3 board with a single mine at the bottom-right corner."""
    return make_game(3, 3, [(2, 2)], clock=clock)


@pytest.fixture
def empty_game(clock: FakeClock) -> Minesweeper:
    """Board with no mines for cascade testing."""
    return Minesweeper(
        Difficulty.CUSTOM, GameSettings(5, 5, 0), rng=make_rng(0), clock=clock
    )


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(clue=3)
    cell.reveal()
    return cell


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_settings() -> GameSettings:
    """Create valid board settings."""
    return GameSettings(9, 9, 10)
