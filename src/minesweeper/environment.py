"""
Gymnasium environment wrapper for Minesweeper.

Drives the engine through the same call sequence a UI does: one
open/flag/chord per step, followed by a game state check.
"""
from typing import Any, Dict, Optional, SupportsFloat, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .cell import FLAGGED, HIDDEN, MINE
from .game import Minesweeper
from .rng import NumpyRandom
from .settings import Difficulty, GameSettings, resolve_settings

OPEN = 0
FLAG = 1
CHORD = 2
ACTION_KINDS = (OPEN, FLAG, CHORD)


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 3 * width * height.
        Action a is kind a // (width * height) (0 open, 1 flag, 2 chord)
        applied to cell index a % (width * height), in row-major order.

    Rewards:
        - +1 for an open or chord that revealed cells
        - 0 for a flag toggle
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action the engine ignored
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        difficulty: Union[Difficulty, str] = Difficulty.BEGINNER,
        settings: Optional[GameSettings] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            difficulty: Difficulty for every episode.
            settings: Explicit settings for custom difficulty.
            render_mode: How to render the environment.
        """
        super().__init__()

        self.difficulty = Difficulty(difficulty)
        self.settings = resolve_settings(self.difficulty, settings)
        self.game = Minesweeper(self.difficulty, self.settings)
        self.render_mode = render_mode

        width, height = self.settings.width, self.settings.height
        self._cells = width * height

        self.observation_space = spaces.Box(
            low=FLAGGED,
            high=MINE,
            shape=(height, width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(len(ACTION_KINDS) * self._cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducible mine layouts.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.game.rng = NumpyRandom(self.np_random)
        self.game.reset(self.difficulty, self.settings)
        self._steps = 0

        return self.game.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Encoded (kind, cell) action.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        self._steps += 1
        if self.action_space.contains(action):
            reward = self._apply(*self.decode_action(action))
        else:
            reward = -0.1
        observation = self.game.board.get_observation()
        terminated = self.game.is_over

        return observation, reward, terminated, False, self._get_info()

    def decode_action(self, action: int) -> Tuple[int, int, int]:
        """Convert a flat action index to (kind, row, col)."""
        kind, index = divmod(int(action), self._cells)
        row, col = divmod(index, self.settings.width)
        return kind, row, col

    def encode_action(self, kind: int, row: int, col: int) -> int:
        """Convert (kind, row, col) to a flat action index."""
        return kind * self._cells + row * self.settings.width + col

    def _apply(self, kind: int, row: int, col: int) -> float:
        """Run one engine operation plus the state check, and score it."""
        cell = self.game.get_cell(row, col)
        if kind == OPEN:
            changed = self.game.open_cell(cell)
        elif kind == FLAG:
            changed = self.game.flag_cell(cell)
        else:
            changed = self.game.chord(cell)
        self.game.check_game_state()

        if not changed:
            return -0.1
        if self.game.is_won:
            return 10.0
        if self.game.is_lost:
            return -10.0
        if kind == FLAG:
            return 0.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        revealed = sum(
            1 for cell in self.game.board if cell.is_revealed and not cell.is_mine
        )
        return {
            "steps": self._steps,
            "revealed": revealed,
            "total_safe": self._cells - self.settings.mines,
            "game_state": self.game.status.value,
            "rest_mines": self.game.rest_mines,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as ASCII string."""
        symbols = {HIDDEN: ".", FLAGGED: "F", MINE: "*", 0: " "}
        obs = self.game.board.get_observation()
        lines = [
            " ".join(symbols.get(int(value), str(value)) for value in row)
            for row in obs
        ]
        return "\n".join(lines)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions the engine would not ignore.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.game.is_over:
            return mask

        board = self.game.board
        for cell in board:
            index = cell.row * self.settings.width + cell.col
            if cell.is_hidden:
                mask[OPEN * self._cells + index] = True
            if not cell.is_revealed and self.game.is_playing:
                mask[FLAG * self._cells + index] = True
            if self.game.is_playing and self._can_chord(cell):
                mask[CHORD * self._cells + index] = True
        return mask

    def _can_chord(self, cell) -> bool:
        if not cell.is_revealed or cell.is_flagged:
            return False
        neighbors = self.game.board.neighbors(cell)
        flags = sum(1 for neighbor in neighbors if neighbor.is_flagged)
        return flags == cell.clue and any(
            neighbor.is_hidden for neighbor in neighbors
        )
