"""
Utilities Module

This module provides logging setup and the testing / benchmarking helpers of
the draughts engine.

Key Components:
    - setup_logger: console or file logging for the draughts_engine loggers
    - Tactical suite: positions with a known best move
    - Self-play: play_match / run_matches between two AI configurations

Success Metrics:
    Every difficulty above EASY should solve the whole tactical suite, and a
    HARD AI should beat an EASY one in self-play far more often than not.
"""

from draughts_engine.utils.log import setup_logger
from draughts_engine.utils.testing import (
    TACTICAL_POSITIONS,
    MatchResult,
    TacticalPosition,
    TacticalResult,
    board_from_pieces,
    evaluate_position,
    play_match,
    run_matches,
    run_tactics,
)

__all__ = [
    'setup_logger',
    'TACTICAL_POSITIONS',
    'TacticalPosition',
    'TacticalResult',
    'MatchResult',
    'board_from_pieces',
    'evaluate_position',
    'run_tactics',
    'play_match',
    'run_matches',
]
