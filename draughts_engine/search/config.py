"""
AI configuration and difficulty presets.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional

from draughts_engine.evaluation.classical import DEFAULT_WEIGHTS, EvaluationWeights


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"


@dataclass(frozen=True)
class DifficultyPreset:
    """Search budget and evaluation weights of one difficulty level."""

    max_depth: int
    time_limit: float
    use_opening_book: bool
    use_endgame_database: bool
    weights: EvaluationWeights


DIFFICULTY_PRESETS: Dict[Difficulty, DifficultyPreset] = {
    Difficulty.EASY: DifficultyPreset(
        max_depth=2,
        time_limit=0.5,
        use_opening_book=False,
        use_endgame_database=False,
        weights=replace(DEFAULT_WEIGHTS, king=120, center_control=2, mobility=1),
    ),
    Difficulty.MEDIUM: DifficultyPreset(
        max_depth=4,
        time_limit=2.0,
        use_opening_book=False,
        use_endgame_database=False,
        weights=replace(DEFAULT_WEIGHTS, king=150, center_control=5, mobility=3),
    ),
    Difficulty.HARD: DifficultyPreset(
        max_depth=6,
        time_limit=5.0,
        use_opening_book=True,
        use_endgame_database=False,
        weights=replace(DEFAULT_WEIGHTS, king=175, center_control=8, mobility=4, protection=7),
    ),
    Difficulty.EXPERT: DifficultyPreset(
        max_depth=8,
        time_limit=10.0,
        use_opening_book=True,
        use_endgame_database=True,
        weights=replace(
            DEFAULT_WEIGHTS, king=200, center_control=10, mobility=5, protection=10, tempo=2
        ),
    ),
}


@dataclass
class AIConfig:
    """Configuration of a CheckersAI instance.

    Build one from a preset with AIConfig.from_difficulty(); explicitly
    passed fields override the preset's values.
    """

    difficulty: Difficulty = Difficulty.MEDIUM
    """Difficulty level; EASY plays random moves, preferring captures"""

    max_depth: int = 4
    """Deepest iterative-deepening iteration"""

    time_limit: float = 2.0
    """Wall-clock budget per move in seconds"""

    use_opening_book: bool = False
    """Consult the opening book in the first moves of a game"""

    use_endgame_database: bool = False
    """Consult the endgame database with few pieces left"""

    weights: EvaluationWeights = field(default_factory=lambda: DEFAULT_WEIGHTS)
    """Evaluation weights"""

    tt_size: int = 200_000
    """Transposition table capacity (entries)"""

    random_seed: Optional[int] = None
    """Seed for the EASY move picker (None for random)"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.difficulty, str):
            self.difficulty = Difficulty(self.difficulty)

        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")

        if self.time_limit <= 0:
            raise ValueError(f"time_limit must be positive, got {self.time_limit}")

        if self.tt_size <= 0:
            raise ValueError(f"tt_size must be positive, got {self.tt_size}")

    @classmethod
    def from_difficulty(cls, difficulty: Difficulty | str, **overrides: Any) -> "AIConfig":
        """
        Build a configuration from a difficulty preset.

        Args:
            difficulty: Difficulty or its string value ("easy", ...)
            **overrides: Fields that replace the preset values

        Returns:
            AIConfig with preset values and the overrides applied
        """
        difficulty = Difficulty(difficulty)
        preset = DIFFICULTY_PRESETS[difficulty]
        values: Dict[str, Any] = {
            "difficulty": difficulty,
            "max_depth": preset.max_depth,
            "time_limit": preset.time_limit,
            "use_opening_book": preset.use_opening_book,
            "use_endgame_database": preset.use_endgame_database,
            "weights": preset.weights,
        }
        values.update(overrides)
        return cls(**values)
