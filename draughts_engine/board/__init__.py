"""
Board Representation Module

This module provides the value types shared by the rules engine and the AI.

Key Components:
    - Piece, PieceColor, PieceType: immutable piece values
    - Position, Move: coordinates and (multi-jump) moves
    - Board: numpy-backed grid with bounds-checked accessors
    - is_dark_square: playable-square test

Data Flow:
    VariantConfig → GameRules.create_initial_board() → Board → move generator
"""

from draughts_engine.board.representation import (
    Board,
    Move,
    Piece,
    PieceColor,
    PieceType,
    Position,
    is_dark_square,
)

__all__ = [
    'Board',
    'Move',
    'Piece',
    'PieceColor',
    'PieceType',
    'Position',
    'is_dark_square',
]
