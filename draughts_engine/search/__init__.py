"""
Search Module

This module implements the AI's search: minimax with alpha-beta pruning,
iterative deepening under a time budget, and a transposition table for
caching previously searched positions.

Key Components:
    - minimax: Core search algorithm with alpha-beta pruning
    - iterative_deepening: Anytime search keeping the last completed depth
    - find_best_move: Fixed-depth root search
    - TranspositionTable: Bounded LRU position cache
    - CheckersAI: Difficulty-aware front end (best move, analysis, ranking)
"""

from draughts_engine.search.ai import CheckersAI, MoveComparison, ScoredMove
from draughts_engine.search.config import DIFFICULTY_PRESETS, AIConfig, Difficulty, DifficultyPreset
from draughts_engine.search.minimax import SearchResult, find_best_move, iterative_deepening, minimax
from draughts_engine.search.transposition import TranspositionTable, position_key

__all__ = [
    'AIConfig',
    'CheckersAI',
    'DIFFICULTY_PRESETS',
    'Difficulty',
    'DifficultyPreset',
    'MoveComparison',
    'ScoredMove',
    'SearchResult',
    'TranspositionTable',
    'find_best_move',
    'iterative_deepening',
    'minimax',
    'position_key',
]
