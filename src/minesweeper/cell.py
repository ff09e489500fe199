"""
Cell module for Minesweeper game.

Represents individual cells on the game board: their fixed coordinates,
their content (mine/clue) and their mutable play flags.
"""
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

HIDDEN = -1
FLAGGED = -2
MINE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        row: Row index, fixed for the lifetime of the board.
        col: Column index, fixed for the lifetime of the board.
        is_mine: Whether this cell contains a mine. Set once at placement.
        is_revealed: Whether the cell has been opened. Never reverts.
        is_flagged: Whether the player marked the cell as a mine.
        is_exploded: Set only on the mine that lost the game.
        clue: Count of mines in neighboring cells (0-8). Meaningless on
            mine cells.
    """

    row: int = 0
    col: int = 0
    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    is_exploded: bool = False
    clue: int = 0

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was revealed, False if already revealed or flagged.
        """
        if self.is_revealed or self.is_flagged:
            return False
        self.is_revealed = True
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.is_revealed:
            return False
        self.is_flagged = not self.is_flagged
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is neither revealed nor flagged."""
        return not self.is_revealed and not self.is_flagged

    @property
    def position(self) -> tuple:
        return self.row, self.col

    def to_observation(self) -> int:
        """
        Convert cell to the value a player is allowed to see.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.is_revealed:
            return MINE if self.is_mine else self.clue
        if self.is_flagged:
            return FLAGGED
        return HIDDEN
