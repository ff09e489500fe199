"""
Minesweeper game engine.

Provides the board, constrained mine placement, reveal/flag/chord
operations and the ready -> playing -> won/lost state machine.
"""
from .cell import Cell
from .settings import (
    Difficulty,
    GameSettings,
    InvalidSettingsError,
    resolve_settings,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    PRESETS,
)
from .rng import RandomSource, NumpyRandom, make_rng
from .board import Board
from .game import GameState, GameStatus, Minesweeper
from .persistence import GameStore, JsonFileStore
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "Difficulty",
    "GameSettings",
    "InvalidSettingsError",
    "resolve_settings",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "RandomSource",
    "NumpyRandom",
    "make_rng",
    "Board",
    "GameState",
    "GameStatus",
    "Minesweeper",
    "GameStore",
    "JsonFileStore",
    "MinesweeperEnv",
]
