"""
Draughts AI

CheckersAI ties the evaluator, transposition table and iterative-deepening
search together behind the calls a game front end needs: pick a move, score
a position, rank candidate moves, compare two moves.

Difficulty:
    EASY skips the search and plays a random legal move, taking a capture
    whenever one is available. The other levels search with the depth, time
    budget and weights of their preset (see search/config.py).

Extension Points:
    The opening book and endgame database are hooks that currently never
    match; get_best_move falls through to the search.
"""

import logging
import random
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional

from draughts_engine.board.representation import Board, Move, PieceColor
from draughts_engine.evaluation.base import INFINITY
from draughts_engine.evaluation.classical import ClassicalEvaluator, EvaluationBreakdown
from draughts_engine.rules.game_rules import GameRules
from draughts_engine.rules.moves import find_valid_moves, make_move
from draughts_engine.search.config import AIConfig, Difficulty
from draughts_engine.search.minimax import StopCondition, iterative_deepening, minimax, search_root
from draughts_engine.search.transposition import TranspositionTable

logger = logging.getLogger(__name__)

OPENING_BOOK_MOVES = 6
ENDGAME_DATABASE_PIECES = 6
ANALYSIS_SCALE = 100.0


@dataclass(frozen=True)
class ScoredMove:
    """A candidate move with its search score and normalized evaluation."""

    move: Move
    score: float
    evaluation: float


@dataclass(frozen=True)
class MoveComparison:
    move1_score: float
    move2_score: float
    difference: float
    better_move: Optional[Move]


def normalize_score(score: float) -> float:
    """Map a raw score onto [-100, 100] (one regular piece = 1 point)."""
    return max(-100.0, min(100.0, score / ANALYSIS_SCALE))


class CheckersAI:
    """
    Game-playing AI for one variant.

    Attributes:
        rules: Initialized GameRules of the variant being played
        config: AIConfig in use
        evaluator: ClassicalEvaluator built from config.weights
        transposition_table: Search cache, cleared before each search
    """

    def __init__(self, rules: GameRules, config: Optional[AIConfig] = None):
        self.rules = rules
        self.config = config or AIConfig.from_difficulty(Difficulty.MEDIUM)
        self.evaluator = ClassicalEvaluator(rules.config, self.config.weights)
        self.transposition_table = TranspositionTable(max_size=self.config.tt_size)
        self._rng = random.Random(self.config.random_seed)
        self._stop_event = threading.Event()
        self._last_stats: Dict[str, float] = {}

    def set_difficulty(self, difficulty: Difficulty | str) -> None:
        """Switch to another preset, keeping the cache size and seed."""
        self.config = AIConfig.from_difficulty(
            difficulty,
            tt_size=self.config.tt_size,
            random_seed=self.config.random_seed,
        )
        self.evaluator = ClassicalEvaluator(self.rules.config, self.config.weights)
        self.transposition_table.clear()
        logger.info(f"AI difficulty set to {self.config.difficulty.value}")

    def stop(self) -> None:
        """Ask a running get_best_move() to return at its next polling point."""
        self._stop_event.set()

    # ------------------------------------------------------------------
    # Move selection
    # ------------------------------------------------------------------

    def get_best_move(
        self,
        board: Board,
        color: PieceColor,
        move_number: int = 0,
        should_stop: Optional[StopCondition] = None,
    ) -> Optional[Move]:
        """
        Choose a move.

        Args:
            board: Current position
            color: Side to move
            move_number: Moves played so far (gates the opening book)
            should_stop: Optional cancellation callback polled with the clock

        Returns:
            The chosen move, or None if the side has no legal moves or no
            search depth completed within the time limit
        """
        legal_moves = find_valid_moves(board, color, self.rules.config)
        if not legal_moves:
            return None

        if self.config.difficulty is Difficulty.EASY:
            return self._random_move(legal_moves)

        if len(legal_moves) == 1:
            return legal_moves[0]

        if self.config.use_opening_book and move_number < OPENING_BOOK_MOVES:
            book_move = self.get_opening_book_move(board, color, move_number)
            if book_move is not None:
                return book_move

        if self.config.use_endgame_database and board.count() <= ENDGAME_DATABASE_PIECES:
            endgame_move = self.get_endgame_move(board, color)
            if endgame_move is not None:
                return endgame_move

        self._stop_event.clear()
        self.transposition_table.clear()

        def stop_requested() -> bool:
            return self._stop_event.is_set() or (should_stop is not None and should_stop())

        result = iterative_deepening(
            board,
            color,
            self.config.max_depth,
            self.evaluator,
            time_limit=self.config.time_limit,
            transposition_table=self.transposition_table,
            should_stop=stop_requested,
        )

        self._last_stats = {
            'depth': result.depth,
            'nodes': result.nodes,
            'elapsed': result.elapsed,
            'score': result.score,
        }
        if result.best_move is None:
            logger.warning(
                f"No search depth completed within {self.config.time_limit:.2f}s "
                f"for {color.value}"
            )
        else:
            logger.info(
                f"{color.value} plays {result.best_move} (depth {result.depth}, "
                f"score {result.score:.1f}, {result.nodes} nodes, {result.elapsed:.2f}s)"
            )
        return result.best_move

    def _random_move(self, legal_moves: List[Move]) -> Move:
        captures = [move for move in legal_moves if move.is_capture]
        return self._rng.choice(captures or legal_moves)

    def get_opening_book_move(self, board: Board, color: PieceColor, move_number: int) -> Optional[Move]:
        """Opening book hook. No book is bundled, so nothing ever matches."""
        return None

    def get_endgame_move(self, board: Board, color: PieceColor) -> Optional[Move]:
        """Endgame database hook. No database is bundled, so nothing ever matches."""
        return None

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def _search_score(self, board: Board, color: PieceColor, depth: int, to_move: bool = True) -> float:
        """Minimax score from color's perspective; to_move=False scores the reply."""
        self.transposition_table.clear()
        score, _ = minimax(
            board,
            depth,
            -INFINITY,
            INFINITY,
            to_move,
            color,
            self.evaluator,
            self.transposition_table,
        )
        return score

    def analyze_position(self, board: Board, color: PieceColor, depth: int = 4) -> float:
        """
        Score a position for color on a [-100, 100] scale.

        Positive means color stands better; +-100 is a decided game. The
        position is searched with color to move.
        """
        return normalize_score(self._search_score(board, color, depth))

    def get_top_moves(
        self,
        board: Board,
        color: PieceColor,
        top_n: int = 5,
        depth: int = 4,
    ) -> List[ScoredMove]:
        """
        Rank the legal moves of color.

        Returns:
            Up to top_n ScoredMove entries, best first
        """
        self.transposition_table.clear()
        scored = search_root(board, color, depth, self.evaluator, self.transposition_table) or []
        return [
            ScoredMove(move=move, score=score, evaluation=normalize_score(score))
            for move, score in scored[:top_n]
        ]

    def compare_moves(
        self,
        board: Board,
        move1: Move,
        move2: Move,
        color: PieceColor,
        depth: int = 4,
    ) -> MoveComparison:
        """
        Compare two candidate moves of color.

        Both moves are searched to depth - 1 after being played. A positive
        difference means move1 is better.
        """
        config = self.rules.config
        score1 = self._search_score(make_move(board, move1, config), color, depth - 1, to_move=False)
        score2 = self._search_score(make_move(board, move2, config), color, depth - 1, to_move=False)
        difference = score1 - score2
        if difference > 0:
            better_move = move1
        elif difference < 0:
            better_move = move2
        else:
            better_move = None
        return MoveComparison(
            move1_score=score1,
            move2_score=score2,
            difference=difference,
            better_move=better_move,
        )

    def evaluate_position_detailed(self, board: Board, color: PieceColor) -> EvaluationBreakdown:
        return self.evaluator.evaluate_detailed(board, color)

    def get_search_stats(self) -> Dict[str, float]:
        """Statistics of the last get_best_move() search plus cache usage."""
        stats = dict(self._last_stats)
        stats.update({f"tt_{k}": v for k, v in self.transposition_table.get_stats().items()})
        return stats

    def __repr__(self) -> str:
        return (
            f"CheckersAI(variant={self.rules.name}, difficulty={self.config.difficulty.value}, "
            f"max_depth={self.config.max_depth})"
        )
