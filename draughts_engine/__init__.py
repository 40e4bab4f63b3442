"""
Draughts Engine

A configuration-driven draughts (checkers) rules engine with a minimax AI.
Every supported variant is described by data; the move generator, applier
and draw detector contain no variant-specific branches.

## Architecture

The engine is organized into several key modules:

1. **board**: Board representation
   - numpy grid with signed piece codes
   - Piece, Position and Move value types

2. **rules**: Variant configuration and game rules
   - pydantic schema for variant definitions (camelCase JSON aliases)
   - Built-in American, Brazilian, International and Canadian variants
   - Move generation with mandatory, maximum and king-priority captures
   - Draw detection (repetition, forty-move, twenty-five-move, material)
   - GameRules façade binding one variant to all of the above

3. **evaluation**: Position evaluation functions
   - Abstract Evaluator interface (swappable design)
   - ClassicalEvaluator: material, position, mobility, protection

4. **search**: Search algorithms
   - Minimax with alpha-beta pruning
   - Transposition table (LRU)
   - Iterative deepening under a time budget
   - CheckersAI with difficulty presets and analysis helpers

5. **utils**: Logging, tactical test suite and self-play

## Quick Start

```python
from draughts_engine import CheckersAI, PieceColor, create_game_rules

rules = create_game_rules("international")
board = rules.create_initial_board()
ai = CheckersAI(rules)
move = ai.get_best_move(board, PieceColor.RED)
board = rules.make_move(board, move)
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__author__ = "Alix Muller"
__license__ = "MIT"

from draughts_engine.board import Board, Move, Piece, PieceColor, PieceType, Position
from draughts_engine.evaluation import ClassicalEvaluator, Evaluator
from draughts_engine.rules import (
    ConfigError,
    GameRules,
    InvalidConfigError,
    UnknownVariantError,
    VariantConfig,
    create_game_rules,
    load_variant,
    register_custom_variant,
)
from draughts_engine.search import AIConfig, CheckersAI, Difficulty, TranspositionTable

__all__ = [
    'Board',
    'Move',
    'Piece',
    'PieceColor',
    'PieceType',
    'Position',
    'Evaluator',
    'ClassicalEvaluator',
    'ConfigError',
    'InvalidConfigError',
    'UnknownVariantError',
    'VariantConfig',
    'GameRules',
    'create_game_rules',
    'load_variant',
    'register_custom_variant',
    'AIConfig',
    'CheckersAI',
    'Difficulty',
    'TranspositionTable',
]
