"""
Minesweeper game engine.

Owns the game aggregate and drives the state machine:
ready -> playing -> {won, lost}. Callers open, flag and chord cells,
then call ``check_game_state`` to settle the outcome.
"""
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Union

from .board import Board
from .cell import Cell
from .rng import RandomSource, make_rng
from .settings import Difficulty, GameSettings, resolve_settings

logger = logging.getLogger(__name__)

Observer = Callable[["Minesweeper"], None]


# ============================================================================
# Constants
# ============================================================================

class GameStatus(str, Enum):
    """Possible states of the game."""

    READY = "ready"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.WON, GameStatus.LOST)


@dataclass
class GameState:
    """
    Everything that describes one game.

    Attributes:
        settings: Board dimensions and mine count.
        difficulty: Difficulty the settings came from.
        board: Grid of cells.
        status: Position in the state machine.
        start_ms: Epoch milliseconds of the first open, if any.
        end_ms: Epoch milliseconds of the win or loss, if any.
    """

    settings: GameSettings
    difficulty: Difficulty = Difficulty.BEGINNER
    board: Optional[Board] = None
    status: GameStatus = GameStatus.READY
    start_ms: Optional[int] = None
    end_ms: Optional[int] = None

    def __post_init__(self) -> None:
        if self.board is None:
            self.board = Board(self.settings.width, self.settings.height)


# ============================================================================
# Engine
# ============================================================================

class Minesweeper:
    """
    Minesweeper engine.

    Args:
        difficulty: Starting difficulty.
        settings: Explicit settings, required for custom difficulty.
        rng: Source of uniform integers for mine placement.
        clock: Returns the current time in seconds since the epoch.
    """

    def __init__(
        self,
        difficulty: Union[Difficulty, str] = Difficulty.BEGINNER,
        settings: Optional[GameSettings] = None,
        rng: Optional[RandomSource] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.rng = rng if rng is not None else make_rng()
        self.clock = clock
        self._observers: List[Observer] = []
        self.state: Optional[GameState] = None
        self.reset(difficulty, settings)

    # ========================================================================
    # Observers
    # ========================================================================

    def subscribe(self, callback: Observer) -> Callable[[], None]:
        """
        Register a callback run after every state change.

        Returns:
            A function that removes the callback again.
        """
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._observers):
            callback(self)

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def reset(
        self,
        difficulty: Union[Difficulty, str] = Difficulty.BEGINNER,
        settings: Optional[GameSettings] = None,
    ) -> None:
        """
        Start a new game, replacing any previous board and status.

        Raises:
            InvalidSettingsError: Custom difficulty without settings. The
                current game is left untouched.
        """
        resolved = resolve_settings(difficulty, settings)
        self.state = GameState(settings=resolved, difficulty=Difficulty(difficulty))
        logger.debug(
            "New %s game: %dx%d with %d mines",
            self.state.difficulty.value,
            resolved.width, resolved.height, resolved.mines,
        )
        self._notify()

    def restore(self, state: GameState) -> None:
        """Install a previously saved game verbatim."""
        self.state = state
        self._notify()

    # ========================================================================
    # Game Actions
    # ========================================================================

    def _resolve(self, cell: Optional[Cell]) -> Optional[Cell]:
        """Map a cell reference onto the live board by its coordinates."""
        if cell is None:
            return None
        return self.board.get_cell(cell.row, cell.col)

    def generate_mines(self, origin: Cell) -> None:
        """Place mines for this game, keeping the origin's safe zone clear."""
        self.board.place_mines(origin, self.settings.mines, self.rng)

    def open_cell(self, cell: Cell) -> bool:
        """
        Open a cell.

        The first open of a game places the mines around it and starts the
        clock. Opening a mine explodes it; opening a zero-clue cell floods
        into its neighbors.

        Returns:
            True if anything was opened, False if the call was absorbed.
        """
        changed = self._open(cell)
        if changed:
            self._notify()
        return changed

    def _open(self, cell: Cell) -> bool:
        cell = self._resolve(cell)
        if cell is None:
            return False

        started = False
        if self.status is GameStatus.READY:
            self.generate_mines(cell)
            self.state.status = GameStatus.PLAYING
            self.state.start_ms = self._now_ms()
            started = True

        if self.status is not GameStatus.PLAYING:
            return started
        if not cell.reveal():
            return started

        if cell.is_mine:
            cell.is_exploded = True
            return True

        self.open_safe_neighbors(cell)
        return True

    def open_safe_neighbors(self, cell: Cell) -> None:
        """
        Flood-fill outward from a revealed cell.

        Expansion continues only through zero-clue cells, so every cell it
        reaches borders no mine and is safe to reveal.
        """
        stack = [cell]
        while stack:
            current = stack.pop()
            if current.clue:
                continue
            for neighbor in self.board.neighbors(current):
                if neighbor.is_revealed or neighbor.is_flagged:
                    continue
                neighbor.is_revealed = True
                stack.append(neighbor)

    def flag_cell(self, cell: Cell) -> bool:
        """
        Toggle the flag on an unrevealed cell while playing.

        Returns:
            True if the flag was toggled, False otherwise.
        """
        if self.status is not GameStatus.PLAYING:
            return False
        cell = self._resolve(cell)
        if cell is None or not cell.toggle_flag():
            return False
        self._notify()
        return True

    def chord(self, cell: Cell) -> bool:
        """
        Open every unrevealed neighbor of a revealed cell whose flagged
        neighbors match its clue.

        The flags are trusted: a misplaced flag can open a mine and lose
        the game.

        Returns:
            True if any neighbor was opened, False otherwise.
        """
        if self.status is not GameStatus.PLAYING:
            return False
        cell = self._resolve(cell)
        if cell is None or not cell.is_revealed or cell.is_flagged:
            return False

        neighbors = self.board.neighbors(cell)
        flags = sum(1 for neighbor in neighbors if neighbor.is_flagged)
        if flags != cell.clue:
            return False

        opened = False
        for neighbor in neighbors:
            if neighbor.is_revealed:
                continue
            if self._open(neighbor):
                opened = True
                if neighbor.is_exploded:
                    break

        if opened:
            self._notify()
        return opened

    def check_game_state(self) -> bool:
        """
        Settle a win or loss after a move.

        Returns:
            True if the game just ended, False otherwise.
        """
        if self.status is not GameStatus.PLAYING:
            return False

        if any(cell.is_revealed and cell.is_mine for cell in self.board):
            self.state.status = GameStatus.LOST
            self.board.reveal_all_mines()
        elif all(cell.is_revealed or cell.is_mine for cell in self.board):
            self.state.status = GameStatus.WON
        else:
            return False

        self.state.end_ms = self._now_ms()
        logger.debug(
            "Game %s after %s ms", self.status.value, self.duration_ms
        )
        self._notify()
        return True

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def settings(self) -> GameSettings:
        return self.state.settings

    @property
    def difficulty(self) -> Difficulty:
        return self.state.difficulty

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def start_ms(self) -> Optional[int]:
        return self.state.start_ms

    @property
    def end_ms(self) -> Optional[int]:
        return self.state.end_ms

    @property
    def duration_ms(self) -> Optional[int]:
        """Milliseconds from first open to the end of the game."""
        if self.start_ms is None or self.end_ms is None:
            return None
        return self.end_ms - self.start_ms

    @property
    def flag_count(self) -> int:
        return self.board.flag_count

    @property
    def rest_mines(self) -> int:
        """Mines not yet accounted for by a flag."""
        if self.status is GameStatus.READY:
            return self.settings.mines
        if self.status is GameStatus.WON:
            return 0
        return self.settings.mines - self.flag_count

    @property
    def is_playing(self) -> bool:
        return self.status is GameStatus.PLAYING

    @property
    def is_won(self) -> bool:
        return self.status is GameStatus.WON

    @property
    def is_lost(self) -> bool:
        return self.status is GameStatus.LOST

    @property
    def is_over(self) -> bool:
        return self.status.is_terminal

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        return self.board.get_cell(row, col)
