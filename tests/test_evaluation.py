"""
Unit Tests for Evaluation Module

Tests for position evaluation functions, focusing on:
    - Balanced starting positions
    - Material counting (regular pieces vs kings)
    - Perspective symmetry (red score mirrors black score)
    - Terminal position detection (no moves, insufficient material)
"""

import pytest

from draughts_engine.board import Move, PieceColor, Position
from draughts_engine.evaluation import ClassicalEvaluator, Evaluator, EvaluationWeights, WIN_SCORE
from draughts_engine.rules import create_game_rules
from draughts_engine.utils.testing import board_from_pieces


@pytest.fixture
def rules():
    return create_game_rules("american")


class TestClassicalEvaluator:
    """Tests for ClassicalEvaluator."""

    @pytest.fixture
    def evaluator(self, rules):
        """Create a ClassicalEvaluator instance."""
        return ClassicalEvaluator(rules.config)

    def test_starting_position_balanced(self, evaluator, rules):
        """Every term cancels out in the symmetric starting position."""
        breakdown = evaluator.evaluate_detailed(rules.create_initial_board(), PieceColor.RED)

        assert breakdown.material == 0
        assert breakdown.position == 0
        assert breakdown.mobility == 0
        assert breakdown.protection == 0
        assert breakdown.total_score == evaluator.weights.tempo

    @pytest.mark.parametrize("variant", ["international", "canadian"])
    def test_large_boards_balanced(self, variant):
        variant_rules = create_game_rules(variant)
        evaluator = ClassicalEvaluator(variant_rules.config)

        score = evaluator.evaluate(variant_rules.create_initial_board(), PieceColor.BLACK)

        assert score == evaluator.weights.tempo

    def test_material_advantage(self, evaluator, rules):
        board = rules.create_initial_board()
        board.set(0, 1, None)

        breakdown = evaluator.evaluate_detailed(board, PieceColor.RED)

        assert breakdown.material == evaluator.weights.piece
        assert breakdown.total_score > 50, f"Red should be ahead by about a piece, got {breakdown.total_score}"

    def test_king_worth_more_than_man(self, evaluator):
        board = board_from_pieces(8, {(4, 3): "R", (1, 4): "b"})

        breakdown = evaluator.evaluate_detailed(board, PieceColor.RED)

        assert breakdown.material == evaluator.weights.king - evaluator.weights.piece

    def test_perspective_symmetry(self, evaluator, rules):
        board = rules.create_initial_board()
        board = rules.make_move(board, Move(Position(5, 2), Position(4, 3)))
        board.set(1, 0, None)

        red = evaluator.evaluate(board, PieceColor.RED)
        black = evaluator.evaluate(board, PieceColor.BLACK)

        assert red + black == 2 * evaluator.weights.tempo, "Scores must mirror apart from tempo"

    def test_advanced_pieces_score_higher(self, evaluator):
        advanced = board_from_pieces(8, {(2, 3): "r", (0, 7): "B"})
        home = board_from_pieces(8, {(6, 3): "r", (0, 7): "B"})

        advanced_position = evaluator.evaluate_detailed(advanced, PieceColor.RED).position
        home_position = evaluator.evaluate_detailed(home, PieceColor.RED).position

        assert advanced_position > home_position

    def test_protection(self, evaluator):
        backed = board_from_pieces(8, {(4, 3): "r", (5, 2): "r", (1, 0): "b"})
        lone = board_from_pieces(8, {(4, 3): "r", (5, 0): "r", (1, 0): "b"})

        assert evaluator.evaluate_detailed(backed, PieceColor.RED).protection == evaluator.weights.protection
        assert evaluator.evaluate_detailed(lone, PieceColor.RED).protection == 0

    def test_evaluate_matches_breakdown(self, evaluator, rules):
        board = rules.create_initial_board()
        board.set(5, 0, None)

        assert evaluator.evaluate(board, PieceColor.BLACK) == evaluator.evaluate_detailed(
            board, PieceColor.BLACK
        ).total_score

    def test_custom_weights(self, rules):
        weights = EvaluationWeights(mobility=0, tempo=0)
        evaluator = ClassicalEvaluator(rules.config, weights)
        board = rules.create_initial_board()
        board.set(0, 1, None)

        breakdown = evaluator.evaluate_detailed(board, PieceColor.RED)

        assert breakdown.mobility == 0
        assert evaluator.evaluate(board, PieceColor.RED) == breakdown.material + breakdown.position + breakdown.protection

    def test_repr(self, evaluator):
        assert "american" in repr(evaluator)


class TestTerminal:
    """Tests for Evaluator.evaluate_terminal."""

    @pytest.fixture
    def evaluator(self, rules):
        return ClassicalEvaluator(rules.config)

    def test_side_without_moves_loses(self, evaluator):
        board = board_from_pieces(8, {(4, 1): "r", (3, 0): "b", (3, 2): "b", (2, 3): "b"})

        score = evaluator.evaluate_terminal(board, PieceColor.RED, [], PieceColor.RED, depth=0)
        opponent_score = evaluator.evaluate_terminal(board, PieceColor.RED, [], PieceColor.BLACK, depth=0)

        assert score == -WIN_SCORE
        assert opponent_score == WIN_SCORE

    def test_faster_wins_score_higher(self, evaluator):
        board = board_from_pieces(8, {(5, 2): "r"})

        near = evaluator.evaluate_terminal(board, PieceColor.BLACK, [], PieceColor.RED, depth=3)
        far = evaluator.evaluate_terminal(board, PieceColor.BLACK, [], PieceColor.RED, depth=1)

        assert near > far > 0

    def test_insufficient_material_is_draw(self, evaluator, rules):
        board = board_from_pieces(8, {(0, 1): "R", (7, 6): "B"})
        moves = rules.find_valid_moves(board, PieceColor.RED)

        assert evaluator.evaluate_terminal(board, PieceColor.RED, moves, PieceColor.RED) == 0.0

    def test_game_in_progress(self, evaluator, rules):
        board = rules.create_initial_board()
        moves = rules.find_valid_moves(board, PieceColor.RED)

        assert evaluator.evaluate_terminal(board, PieceColor.RED, moves, PieceColor.RED) is None

    def test_evaluator_is_abstract(self, rules):
        with pytest.raises(TypeError):
            Evaluator(rules.config)
