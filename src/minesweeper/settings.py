"""
Game settings and difficulty presets.

Settings are validated on construction so that a game can always place
its mines outside the first-click safe zone.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union


class InvalidSettingsError(ValueError):
    """Raised when board settings cannot produce a playable game."""


# ============================================================================
# Settings
# ============================================================================

def max_safe_zone(width: int, height: int) -> int:
    """
    Largest number of cells the first-click safe zone can cover.

    The zone is the origin plus its orthogonal neighbors, so it is
    widest for an origin away from the edges.
    """
    return 1 + min(2, width - 1) + min(2, height - 1)


@dataclass(frozen=True)
class GameSettings:
    """
    Dimensions and mine count for a game.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mines: Total mines to place.
    """

    width: int = 9
    height: int = 9
    mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise InvalidSettingsError("Board dimensions must be positive")
        if self.mines < 0:
            raise InvalidSettingsError("Number of mines cannot be negative")
        if self.mines >= self.cell_count:
            raise InvalidSettingsError(
                f"Too many mines (max {self.cell_count - 1})"
            )
        placeable = self.cell_count - max_safe_zone(self.width, self.height)
        if self.mines > placeable:
            raise InvalidSettingsError(
                f"Too many mines to keep the first-click safe zone clear "
                f"(max {placeable})"
            )

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def to_dict(self) -> Dict[str, int]:
        return {"width": self.width, "height": self.height, "mines": self.mines}


# ============================================================================
# Difficulty Presets
# ============================================================================

class Difficulty(str, Enum):
    """Named difficulty levels."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"
    CUSTOM = "custom"


BEGINNER = GameSettings(9, 9, 10)
INTERMEDIATE = GameSettings(16, 16, 40)
EXPERT = GameSettings(30, 16, 99)

PRESETS: Dict[Difficulty, GameSettings] = {
    Difficulty.BEGINNER: BEGINNER,
    Difficulty.INTERMEDIATE: INTERMEDIATE,
    Difficulty.EXPERT: EXPERT,
}


def resolve_settings(
    difficulty: Union[Difficulty, str],
    settings: Optional[GameSettings] = None,
) -> GameSettings:
    """
    Work out the effective settings for a difficulty.

    Args:
        difficulty: Difficulty level (enum member or its name).
        settings: Explicit settings, required for custom games and
            ignored for named presets.

    Returns:
        The settings to build the board from.

    Raises:
        InvalidSettingsError: Unknown difficulty, or custom without settings.
    """
    try:
        difficulty = Difficulty(difficulty)
    except ValueError:
        raise InvalidSettingsError(f"Unknown difficulty: {difficulty!r}")

    if difficulty is not Difficulty.CUSTOM:
        return PRESETS[difficulty]
    if settings is None:
        raise InvalidSettingsError("Custom difficulty requires explicit settings")
    return settings
