"""
Abstract Evaluator Interface

This module defines the abstract base class for all position evaluators.
Because every evaluator shares this interface, the search can swap evaluators
without any change to the search code.

Key Principles:
    1. Evaluators hold weights and rules but no per-position state
    2. evaluate() scores a position from the given color's perspective
    3. Positive = that color is better, negative = its opponent is better
    4. Decided positions score ±WIN_SCORE scaled by remaining depth

Convention:
    - Material in hundredths of a regular piece (regular = 100)
    - 0 for a perfectly balanced position
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from draughts_engine.board.representation import Board, Move, PieceColor
from draughts_engine.rules.draws import check_insufficient_material
from draughts_engine.rules.schema import VariantConfig

# Evaluation constants
INFINITY = float("inf")
WIN_SCORE = 10000  # Base score for a won position


class Evaluator(ABC):
    """
    Abstract base class for position evaluation.

    Attributes:
        config: Variant rules the evaluator generates moves with
    """

    def __init__(self, config: VariantConfig):
        self.config = config

    @abstractmethod
    def evaluate(self, board: Board, color: PieceColor) -> float:
        """
        Evaluate a position from color's perspective.

        Args:
            board: Position to evaluate
            color: Side the score is relative to

        Returns:
            float: Evaluation, positive when color stands better
        """
        pass

    def evaluate_terminal(
        self,
        board: Board,
        color_to_move: PieceColor,
        legal_moves: List[Move],
        root_color: PieceColor,
        depth: int = 0,
    ) -> Optional[float]:
        """
        Score decided positions.

        A side to move without legal moves (including one with no pieces
        left) has lost. Insufficient-material endings are drawn.

        Args:
            board: Current position
            color_to_move: Side to move
            legal_moves: Legal moves of color_to_move
            root_color: Side the search is maximizing for
            depth: Remaining search depth; wins found earlier score higher

        Returns:
            float: Score if the position is decided
            None: If play continues
        """
        if not legal_moves:
            score = WIN_SCORE * (depth + 1)
            return -score if color_to_move is root_color else score

        if check_insufficient_material(board, self.config):
            return 0.0

        return None

    def __repr__(self) -> str:
        """String representation of evaluator."""
        return f"{self.__class__.__name__}(variant={self.config.metadata.name})"
