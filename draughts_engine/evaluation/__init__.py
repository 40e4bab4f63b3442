"""
Evaluation Module

This module provides position evaluation for the search. Evaluators are
SWAPPABLE: the search works with any evaluator that implements the base
interface.

Key Components:
    - Evaluator (ABC): Abstract base class defining the evaluation interface
    - ClassicalEvaluator: Weighted material / position / mobility evaluation
    - EvaluationWeights, DEFAULT_WEIGHTS: evaluation coefficients

Data Flow:
    Board, PieceColor → evaluator.evaluate() → float
                                               Positive = that color is better
                                               Negative = its opponent is better
"""

from draughts_engine.evaluation.base import WIN_SCORE, Evaluator
from draughts_engine.evaluation.classical import (
    DEFAULT_WEIGHTS,
    ClassicalEvaluator,
    EvaluationBreakdown,
    EvaluationWeights,
)

__all__ = [
    'DEFAULT_WEIGHTS',
    'ClassicalEvaluator',
    'EvaluationBreakdown',
    'EvaluationWeights',
    'Evaluator',
    'WIN_SCORE',
]
