"""
Board module for Minesweeper game.

Implements the grid of cells, constrained mine placement and clue
computation. Play rules (revealing, flags, win/lose) live in the engine.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell
from .rng import RandomSource
from .settings import InvalidSettingsError

logger = logging.getLogger(__name__)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Rectangular grid of cells, ``height`` rows by ``width`` columns.

    The board is created once per game and never resized; only the
    flags of its cells change.
    """

    width: int = 9
    height: int = 9
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        if not self._grid:
            self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell(row, col) for col in range(self.width)]
            for row in range(self.height)
        ]

    @classmethod
    def from_rows(cls, rows: List[List[Cell]]) -> "Board":
        """
        Build a board around an existing grid.

        Cell coordinates are rewritten to match their grid position.
        """
        for row_index, row in enumerate(rows):
            for col_index, cell in enumerate(row):
                cell.row, cell.col = row_index, col_index
        width = len(rows[0]) if rows else 0
        return cls(width=width, height=len(rows), _grid=rows)

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for valid neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def neighbors(self, cell: Cell) -> List[Cell]:
        """Get the up-to-8 cells surrounding ``cell``."""
        return [
            self._grid[row][col]
            for row, col in self._get_neighbors(cell.row, cell.col)
        ]

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.height and 0 <= col < self.width

    @staticmethod
    def in_safe_zone(origin: Cell, row: int, col: int) -> bool:
        """
        Check if a position is kept mine-free around the first click.

        The zone is the origin and its four orthogonal neighbors; diagonal
        neighbors can still hold mines.
        """
        same_row = row == origin.row and abs(col - origin.col) <= 1
        same_col = col == origin.col and abs(row - origin.row) <= 1
        return same_row or same_col

    def safe_zone(self, origin: Cell) -> List[Tuple[int, int]]:
        """List the in-bounds positions of the safe zone around ``origin``."""
        return [
            (row, col)
            for row in range(origin.row - 1, origin.row + 2)
            for col in range(origin.col - 1, origin.col + 2)
            if self.is_valid_position(row, col)
            and self.in_safe_zone(origin, row, col)
        ]

    # ========================================================================
    # Mine Placement (Mid-level)
    # ========================================================================

    def place_mines(self, origin: Cell, mines: int, rng: RandomSource) -> int:
        """
        Place mines by rejection sampling, keeping the safe zone clear.

        Draws a uniformly random position and redraws whenever it already
        holds a mine or falls inside the safe zone of ``origin``.

        Args:
            origin: First opened cell.
            mines: Number of mines to place.
            rng: Source of uniform integers.

        Returns:
            Number of rejected draws.

        Raises:
            InvalidSettingsError: Not enough cells outside the safe zone.
        """
        available = self.width * self.height - len(self.safe_zone(origin))
        if mines > available:
            raise InvalidSettingsError(
                f"Cannot place {mines} mines outside the safe zone "
                f"({available} cells available)"
            )

        rejected = 0
        for _ in range(mines):
            while True:
                row = rng.randint(0, self.height - 1)
                col = rng.randint(0, self.width - 1)
                cell = self._grid[row][col]
                if cell.is_mine or self.in_safe_zone(origin, row, col):
                    rejected += 1
                    continue
                cell.is_mine = True
                break

        self.update_clues()
        logger.debug(
            "Placed %d mines around origin %s (%d redraws)",
            mines, origin.position, rejected,
        )
        return rejected

    def update_clues(self) -> None:
        """Calculate adjacent mine counts for all non-mine cells."""
        for cell in self:
            if not cell.is_mine:
                cell.clue = sum(
                    1 for neighbor in self.neighbors(cell) if neighbor.is_mine
                )

    def reveal_all_mines(self) -> None:
        """Reveal every mine on the board, leaving flags untouched."""
        for cell in self:
            if cell.is_mine:
                cell.is_revealed = True

    # ========================================================================
    # Accessors (High-level)
    # ========================================================================

    def __iter__(self) -> Iterator[Cell]:
        """Iterate over all cells in row-major order."""
        for row in self._grid:
            yield from row

    @property
    def rows(self) -> List[List[Cell]]:
        return self._grid

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(row, col):
            return None
        return self._grid[row][col]

    @property
    def mine_count(self) -> int:
        return sum(1 for cell in self if cell.is_mine)

    @property
    def flag_count(self) -> int:
        return sum(1 for cell in self if cell.is_flagged)

    def get_observation(self) -> np.ndarray:
        """
        Get the player-visible board as a numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for cell in self:
            obs[cell.row, cell.col] = cell.to_observation()
        return obs

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can still be opened.

        Returns:
            List of (row, col) positions that are hidden and unflagged.
        """
        return [cell.position for cell in self if cell.is_hidden]
