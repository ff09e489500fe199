"""
Persistence for Minesweeper games.

Saves the whole game aggregate into a flat key-value store (one JSON
value per key) and restores it, falling back to a fresh game whenever
the stored data does not describe a valid game.
"""
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, MutableMapping, Optional, Union

from .board import Board
from .cell import Cell
from .game import GameState, GameStatus, Minesweeper
from .settings import Difficulty, GameSettings

logger = logging.getLogger(__name__)

CELL_FLAGS = ("is_mine", "is_revealed", "is_flagged", "is_exploded")
KEYS = ("settings", "difficulty", "board", "status", "start_ms", "end_ms")


# ============================================================================
# Encoding
# ============================================================================

def cell_to_dict(cell: Cell) -> Dict[str, Any]:
    """Convert a cell to a JSON-friendly dictionary."""
    data = {name: getattr(cell, name) for name in CELL_FLAGS}
    data["clue"] = cell.clue
    return data


def cell_from_dict(data: Dict[str, Any]) -> Cell:
    """
    Build a cell from its dictionary form.

    Raises:
        TypeError: A flag is not a boolean or the clue is not an integer.
        ValueError: The clue is outside 0-8.
    """
    flags = {}
    for name in CELL_FLAGS:
        value = data[name]
        if not isinstance(value, bool):
            raise TypeError(f"{name} must be a boolean, got {value!r}")
        flags[name] = value
    clue = data["clue"]
    if isinstance(clue, bool) or not isinstance(clue, int):
        raise TypeError(f"clue must be an integer, got {clue!r}")
    if not 0 <= clue <= 8:
        raise ValueError(f"clue out of range: {clue}")
    return Cell(clue=clue, **flags)


def board_from_rows(rows: List[List[Dict[str, Any]]], settings: GameSettings) -> Board:
    """Rebuild a board, checking it matches the settings' dimensions."""
    if not isinstance(rows, list) or len(rows) != settings.height:
        raise ValueError(f"Board must have {settings.height} rows")
    grid = []
    for row in rows:
        if not isinstance(row, list) or len(row) != settings.width:
            raise ValueError(f"Board rows must have {settings.width} cells")
        grid.append([cell_from_dict(data) for data in row])
    return Board.from_rows(grid)


def check_unstarted(
    board: Board, start_ms: Optional[int], end_ms: Optional[int]
) -> None:
    """
    Check a ready board is untouched, so placement can start from scratch.

    Raises:
        ValueError: A cell is already mined, opened, flagged or numbered,
            or a timestamp is set.
    """
    if start_ms is not None or end_ms is not None:
        raise ValueError("A ready game cannot have timestamps")
    for cell in board:
        if any(getattr(cell, name) for name in CELL_FLAGS) or cell.clue:
            raise ValueError(f"Cell {cell.position} is not blank in a ready game")


def check_layout(board: Board, settings: GameSettings) -> None:
    """
    Check a started board against its own mine layout.

    Flood-fill trusts zero clues, so every clue must match the mines
    around it.

    Raises:
        ValueError: Wrong mine count, a clue that disagrees with the
            layout, or an exploded cell without a mine.
    """
    if board.mine_count != settings.mines:
        raise ValueError(
            f"Board holds {board.mine_count} mines, expected {settings.mines}"
        )
    for cell in board:
        if cell.is_exploded and not cell.is_mine:
            raise ValueError(f"Cell {cell.position} exploded without a mine")
        if cell.is_mine:
            continue
        expected = sum(1 for neighbor in board.neighbors(cell) if neighbor.is_mine)
        if cell.clue != expected:
            raise ValueError(
                f"Cell {cell.position} has clue {cell.clue}, expected {expected}"
            )


def _timestamp(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Timestamp must be an integer, got {value!r}")
    return value


# ============================================================================
# Game Store
# ============================================================================

class GameStore:
    """
    Save and restore games through a flat string-to-string store.

    Args:
        store: Any mutable mapping of strings (a dict, ``JsonFileStore``, ...).
        prefix: Prepended to every key written.
    """

    def __init__(
        self,
        store: MutableMapping[str, str],
        prefix: str = "minesweeper.",
    ) -> None:
        self.store = store
        self.prefix = prefix

    def _key(self, name: str) -> str:
        return self.prefix + name

    def save(self, state: GameState) -> None:
        """Write every part of the game under its own key."""
        values = {
            "settings": state.settings.to_dict(),
            "difficulty": state.difficulty.value,
            "board": [
                [cell_to_dict(cell) for cell in row] for row in state.board.rows
            ],
            "status": state.status.value,
            "start_ms": state.start_ms,
            "end_ms": state.end_ms,
        }
        for name, value in values.items():
            key = self._key(name)
            if value is None:
                self.store.pop(key, None)
            else:
                self.store[key] = json.dumps(value)

    def _read(self, name: str) -> Any:
        raw = self.store.get(self._key(name))
        if raw is None:
            return None
        return json.loads(raw)

    def load(self) -> GameState:
        """
        Read and validate a saved game.

        Raises:
            KeyError: A required key is missing.
            TypeError, ValueError: The stored data is malformed or does not
                describe a consistent game.
        """
        settings_data = self._read("settings")
        if not isinstance(settings_data, dict):
            raise KeyError(self._key("settings"))
        settings = GameSettings(
            width=settings_data["width"],
            height=settings_data["height"],
            mines=settings_data["mines"],
        )

        difficulty = Difficulty(self._read("difficulty"))
        status = GameStatus(self._read("status"))
        board = board_from_rows(self._read("board"), settings)

        start_ms = _timestamp(self._read("start_ms"))
        end_ms = _timestamp(self._read("end_ms"))

        if status is GameStatus.READY:
            check_unstarted(board, start_ms, end_ms)
        else:
            check_layout(board, settings)

        return GameState(
            settings=settings,
            difficulty=difficulty,
            board=board,
            status=status,
            start_ms=start_ms,
            end_ms=end_ms,
        )

    def restore_or_reset(
        self,
        game: Minesweeper,
        difficulty: Union[Difficulty, str] = Difficulty.BEGINNER,
        settings: Optional[GameSettings] = None,
    ) -> bool:
        """
        Restore the saved game into ``game``, or start a new one.

        Returns:
            True if a saved game was restored, False if the game was reset.
        """
        try:
            state = self.load()
        except (KeyError, TypeError, ValueError) as error:
            logger.warning("Discarding saved game: %s", error)
            game.reset(difficulty, settings)
            return False
        game.restore(state)
        return True

    def bind(self, game: Minesweeper) -> Callable[[], None]:
        """
        Save ``game`` now and after every change.

        Returns:
            A function that stops the automatic saving.
        """
        self.save(game.state)
        return game.subscribe(lambda changed: self.save(changed.state))

    def clear(self) -> None:
        """Remove every key this store wrote."""
        for name in KEYS:
            self.store.pop(self._key(name), None)


# ============================================================================
# File-backed Store
# ============================================================================

class JsonFileStore(MutableMapping[str, str]):
    """
    String mapping persisted to a JSON file on every write.

    Args:
        path: File to read on creation and rewrite on each change.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._data: Dict[str, str] = {}
        if self.path.exists():
            self._data = self._load_file()

    def _load_file(self) -> Dict[str, str]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
            logger.warning("Ignoring unreadable store %s: %s", self.path, error)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: not a JSON object", self.path)
            return {}
        return {str(key): str(value) for key, value in data.items()}

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2)

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def __delitem__(self, key: str) -> None:
        del self._data[key]
        self._flush()

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)
