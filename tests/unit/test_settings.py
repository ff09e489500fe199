"""
Unit tests for game settings and difficulty presets.
"""
import pytest
from minesweeper import (
    BEGINNER,
    EXPERT,
    INTERMEDIATE,
    Difficulty,
    GameSettings,
    InvalidSettingsError,
    resolve_settings,
)
from minesweeper.settings import max_safe_zone


# ============================================================================
# Settings Validation Tests
# ============================================================================

class TestGameSettings:
    """Test settings validation."""

    def test_valid_settings_creation(self, valid_settings: GameSettings) -> None:
        """Valid settings should be created successfully."""
        assert valid_settings.width == 9
        assert valid_settings.height == 9
        assert valid_settings.mines == 10
        assert valid_settings.cell_count == 81

    def test_zero_width_raises_error(self) -> None:
        """Width of 0 should raise InvalidSettingsError."""
        with pytest.raises(InvalidSettingsError, match="dimensions must be positive"):
            GameSettings(0, 9, 10)

    def test_zero_height_raises_error(self) -> None:
        """Height of 0 should raise InvalidSettingsError."""
        with pytest.raises(InvalidSettingsError, match="dimensions must be positive"):
            GameSettings(9, 0, 10)

    def test_negative_mines_raises_error(self) -> None:
        """Negative mine count should raise InvalidSettingsError."""
        with pytest.raises(InvalidSettingsError, match="cannot be negative"):
            GameSettings(9, 9, -1)

    def test_mines_filling_board_raises_error(self) -> None:
        """As many mines as cells should be rejected."""
        with pytest.raises(InvalidSettingsError, match="Too many mines"):
            GameSettings(3, 3, 9)

    def test_mines_overlapping_safe_zone_raise_error(self) -> None:
        """Mines that cannot fit outside the safe zone are rejected up front."""
        # 9 cells, safe zone of up to 5, so at most 4 mines.
        with pytest.raises(InvalidSettingsError, match="safe zone"):
            GameSettings(3, 3, 5)

    def test_max_placeable_mines_is_valid(self) -> None:
        """The largest placeable mine count should be accepted."""
        assert GameSettings(3, 3, 4).mines == 4

    def test_invalid_settings_is_value_error(self) -> None:
        """InvalidSettingsError can be caught as a ValueError."""
        with pytest.raises(ValueError):
            GameSettings(-1, 2, 0)

    def test_to_dict(self, valid_settings: GameSettings) -> None:
        """Settings serialize to a plain dictionary."""
        assert valid_settings.to_dict() == {"width": 9, "height": 9, "mines": 10}

    @pytest.mark.parametrize(
        "width, height, expected",
        [(1, 1, 1), (2, 1, 2), (1, 5, 3), (2, 2, 3), (9, 9, 5)],
    )
    def test_max_safe_zone(self, width: int, height: int, expected: int) -> None:
        """Safe zone size is bounded by the board's dimensions."""
        assert max_safe_zone(width, height) == expected


# ============================================================================
# Difficulty Tests
# ============================================================================

class TestDifficulty:
    """Test difficulty presets and resolution."""

    def test_preset_table(self) -> None:
        """Named difficulties map to the classic boards."""
        assert (BEGINNER.width, BEGINNER.height, BEGINNER.mines) == (9, 9, 10)
        assert (INTERMEDIATE.width, INTERMEDIATE.height, INTERMEDIATE.mines) == (
            16, 16, 40,
        )
        assert (EXPERT.width, EXPERT.height, EXPERT.mines) == (30, 16, 99)

    @pytest.mark.parametrize(
        "difficulty, expected",
        [
            (Difficulty.BEGINNER, BEGINNER),
            (Difficulty.INTERMEDIATE, INTERMEDIATE),
            (Difficulty.EXPERT, EXPERT),
            ("expert", EXPERT),
        ],
    )
    def test_resolve_named_difficulty(self, difficulty, expected) -> None:
        """Named difficulties resolve to their preset."""
        assert resolve_settings(difficulty) == expected

    def test_named_difficulty_ignores_settings(
        self, valid_settings: GameSettings
    ) -> None:
        """Explicit settings do not override a named preset."""
        assert resolve_settings(Difficulty.EXPERT, GameSettings(4, 4, 2)) == EXPERT

    def test_custom_uses_explicit_settings(self) -> None:
        """Custom difficulty returns the given settings."""
        settings = GameSettings(12, 7, 20)
        assert resolve_settings(Difficulty.CUSTOM, settings) is settings

    def test_custom_without_settings_raises(self) -> None:
        """Custom difficulty requires settings."""
        with pytest.raises(InvalidSettingsError, match="requires explicit settings"):
            resolve_settings(Difficulty.CUSTOM)

    def test_unknown_difficulty_raises(self) -> None:
        """Unknown difficulty names are rejected."""
        with pytest.raises(InvalidSettingsError, match="Unknown difficulty"):
            resolve_settings("nightmare")
