"""
Unit tests for Cell class.

Tests cell defaults, reveal/flag behavior, and observation conversion.
"""
import pytest
from minesweeper import Cell


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_not_mine(self) -> None:
        """New cell should not be a mine by default."""
        cell = Cell()
        assert cell.is_mine is False

    def test_default_cell_is_hidden(self) -> None:
        """New cell should be hidden by default."""
        cell = Cell()
        assert cell.is_revealed is False
        assert cell.is_flagged is False
        assert cell.is_exploded is False
        assert cell.is_hidden is True

    def test_default_cell_has_zero_clue(self) -> None:
        """New cell should have a clue of 0 by default."""
        assert Cell().clue == 0

    def test_cell_keeps_coordinates(self) -> None:
        """Cell exposes its coordinates as a position tuple."""
        cell = Cell(3, 7)
        assert cell.position == (3, 7)


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_hidden_cell_returns_true(self, hidden_cell: Cell) -> None:
        """Revealing a hidden cell should succeed."""
        assert hidden_cell.reveal() is True
        assert hidden_cell.is_revealed is True

    def test_reveal_already_revealed_returns_false(
        self, hidden_cell: Cell
    ) -> None:
        """Revealing an already revealed cell should fail."""
        hidden_cell.reveal()
        assert hidden_cell.reveal() is False

    def test_reveal_flagged_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot reveal a flagged cell."""
        hidden_cell.toggle_flag()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_revealed is False


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flagging behavior."""

    def test_flag_hidden_cell_returns_true(self, hidden_cell: Cell) -> None:
        """Flagging a hidden cell should succeed."""
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.is_flagged is True
        assert hidden_cell.is_hidden is False

    def test_unflag_returns_to_hidden(self, hidden_cell: Cell) -> None:
        """Unflagging a cell should return it to hidden."""
        hidden_cell.toggle_flag()
        hidden_cell.toggle_flag()
        assert hidden_cell.is_flagged is False
        assert hidden_cell.is_hidden is True

    def test_flag_revealed_cell_returns_false(
        self, numbered_cell: Cell
    ) -> None:
        """Cannot flag a revealed cell."""
        assert numbered_cell.toggle_flag() is False
        assert numbered_cell.is_flagged is False


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test player-visible cell values."""

    def test_hidden_cell_observation_is_negative_one(
        self, hidden_cell: Cell
    ) -> None:
        """Hidden cell should return -1 for observation."""
        assert hidden_cell.to_observation() == -1

    def test_hidden_mine_is_not_disclosed(self, mine_cell: Cell) -> None:
        """An unrevealed mine looks like any other hidden cell."""
        assert mine_cell.to_observation() == -1

    def test_flagged_cell_observation_is_negative_two(
        self, hidden_cell: Cell
    ) -> None:
        """Flagged cell should return -2 for observation."""
        hidden_cell.toggle_flag()
        assert hidden_cell.to_observation() == -2

    @pytest.mark.parametrize("count", range(0, 9))
    def test_revealed_cell_observation_matches_clue(self, count: int) -> None:
        """Revealed cell returns its clue."""
        cell = Cell(clue=count)
        cell.reveal()
        assert cell.to_observation() == count

    def test_revealed_mine_observation_is_nine(self, mine_cell: Cell) -> None:
        """Revealed mine should return 9 for observation."""
        mine_cell.reveal()
        assert mine_cell.to_observation() == 9
