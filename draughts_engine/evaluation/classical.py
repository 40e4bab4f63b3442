"""
Classical Weighted Evaluation

This module implements a hand-tuned linear evaluation function:

    score = material + position + mobility + protection + tempo

Evaluation Components:
    - Material: regular pieces and kings at their configured values
    - Forward advancement: regular pieces earn a bonus per row advanced
    - Back row: regular pieces still guarding their own back row
    - Center control: bonus decreasing with Manhattan distance to the center
    - Mobility: own legal move count minus the opponent's
    - Protection: pieces on their back row or backed by a friendly piece
      diagonally behind them
    - Tempo: constant bonus for the side being evaluated

Every board-wide term is computed on the numpy grid at once, so the cost
barely grows with board size; only mobility calls the move generator.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from draughts_engine.board.representation import Board, PieceColor
from draughts_engine.evaluation.base import Evaluator
from draughts_engine.rules.moves import find_valid_moves
from draughts_engine.rules.schema import VariantConfig


@dataclass(frozen=True)
class EvaluationWeights:
    """Coefficients of the evaluation terms."""

    piece: float = 100
    king: float = 150
    back_row: float = 10
    center_control: float = 5
    mobility: float = 2
    forward_position: float = 3
    protection: float = 5
    tempo: float = 1


DEFAULT_WEIGHTS = EvaluationWeights()


@dataclass(frozen=True)
class EvaluationBreakdown:
    """Per-term evaluation from one color's perspective."""

    total_score: float
    material: float
    position: float
    mobility: float
    protection: float


# ============================================================================
# Square tables
# ============================================================================
# Position-only quantities depend on board size alone, so they are built once
# per size and reused.

_TABLES: Dict[int, Tuple[np.ndarray, np.ndarray]] = {}


def _square_tables(size: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Returns:
        (center bonus, row index) arrays of shape (size, size).
        Center bonus is (size - 1) - Manhattan distance to the board center,
        i.e. 7 - distance on the 8x8 board.
    """
    tables = _TABLES.get(size)
    if tables is None:
        rows, cols = np.indices((size, size), dtype=np.float64)
        center = (size - 1) / 2
        distance = np.abs(rows - center) + np.abs(cols - center)
        tables = ((size - 1) - distance, rows)
        _TABLES[size] = tables
    return tables


def _protected(own: np.ndarray, color: PieceColor) -> np.ndarray:
    """Mask of own pieces with a friendly piece on a square diagonally behind."""
    size = own.shape[0]
    padded = np.pad(own, 1)
    behind = 1 - color.forward  # padded row offset of the row behind
    behind_rows = padded[behind:behind + size]
    return own & (behind_rows[:, 0:size] | behind_rows[:, 2:size + 2])


class ClassicalEvaluator(Evaluator):
    """
    Weighted linear evaluator.

    Attributes:
        weights: EvaluationWeights in use
    """

    def __init__(self, config: VariantConfig, weights: EvaluationWeights = DEFAULT_WEIGHTS):
        super().__init__(config)
        self.weights = weights

    def evaluate(self, board: Board, color: PieceColor) -> float:
        return self.evaluate_detailed(board, color).total_score

    def evaluate_detailed(self, board: Board, color: PieceColor) -> EvaluationBreakdown:
        """
        Evaluate every term separately.

        Args:
            board: Position to evaluate
            color: Side the score is relative to

        Returns:
            EvaluationBreakdown whose total_score equals evaluate()
        """
        material = 0.0
        position = 0.0
        protection = 0.0
        for side, sign in ((color, 1.0), (color.opponent, -1.0)):
            side_material, side_position, side_protection = self._side_terms(board, side)
            material += sign * side_material
            position += sign * side_position
            protection += sign * side_protection

        mobility = 0.0
        if self.weights.mobility:
            own_moves = len(find_valid_moves(board, color, self.config))
            opponent_moves = len(find_valid_moves(board, color.opponent, self.config))
            mobility = (own_moves - opponent_moves) * self.weights.mobility

        total = material + position + mobility + protection + self.weights.tempo
        return EvaluationBreakdown(
            total_score=float(total),
            material=float(material),
            position=float(position),
            mobility=float(mobility),
            protection=float(protection),
        )

    def _side_terms(self, board: Board, color: PieceColor) -> Tuple[float, float, float]:
        weights = self.weights
        size = board.size
        signed = board.grid * color.sign
        own = signed > 0
        regular = signed == 1
        kings = signed == 2

        material = weights.piece * np.count_nonzero(regular) + weights.king * np.count_nonzero(kings)

        center_bonus, rows = _square_tables(size)
        back_row = size - 1 if color is PieceColor.RED else 0
        advancement = (size - 1) - rows if color is PieceColor.RED else rows
        position = (
            weights.forward_position * advancement[regular].sum()
            + weights.back_row * np.count_nonzero(regular[back_row])
            + weights.center_control * center_bonus[own].sum()
        )

        guarded = _protected(own, color)
        guarded[back_row] |= own[back_row]
        protection = weights.protection * np.count_nonzero(guarded)

        return float(material), float(position), float(protection)

    def __repr__(self) -> str:
        return f"ClassicalEvaluator(variant={self.config.metadata.name}, weights={self.weights})"
