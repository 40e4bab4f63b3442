"""
Unit Tests for Search Module

Tests for minimax search, iterative deepening, the transposition table and
the CheckersAI front end.
"""

import pytest

from draughts_engine.board import Move, PieceColor, Position
from draughts_engine.evaluation import WIN_SCORE, ClassicalEvaluator
from draughts_engine.rules import create_game_rules
from draughts_engine.search import (
    AIConfig,
    CheckersAI,
    Difficulty,
    TranspositionTable,
    find_best_move,
    iterative_deepening,
    position_key,
)
from draughts_engine.search.minimax import order_moves
from draughts_engine.search.transposition import NodeType
from draughts_engine.utils.testing import board_from_pieces

# Red can take a man or a king with the same piece
KING_OR_MAN = {(5, 2): "r", (4, 1): "b", (4, 3): "B"}
# Red's capture removes black's last piece
LAST_PIECE = {(5, 2): "r", (4, 3): "b"}


@pytest.fixture
def rules():
    return create_game_rules("american")


@pytest.fixture
def evaluator(rules):
    return ClassicalEvaluator(rules.config)


class TestMinimax:
    """Tests for fixed-depth and iterative-deepening search."""

    def test_takes_the_king(self, rules, evaluator):
        board = board_from_pieces(8, KING_OR_MAN)

        best_move, score, nodes = find_best_move(board, PieceColor.RED, 2, evaluator)

        assert best_move.to_pos == Position(3, 4), f"Should capture the king, got {best_move}"
        assert best_move.captures == (Position(4, 3),)
        assert nodes > 0, "Should search at least one node"

    def test_winning_capture_scores_as_win(self, evaluator):
        board = board_from_pieces(8, LAST_PIECE)

        best_move, score, _ = find_best_move(board, PieceColor.RED, 2, evaluator)

        assert best_move.is_capture
        assert score >= WIN_SCORE

    def test_no_legal_moves_raises_error(self, evaluator):
        board = board_from_pieces(8, {(5, 2): "r"})

        with pytest.raises(ValueError):
            find_best_move(board, PieceColor.BLACK, 2, evaluator)

    def test_transposition_table_keeps_result(self, rules, evaluator):
        board = rules.create_initial_board()

        _, plain_score, _ = find_best_move(board, PieceColor.RED, 3, evaluator)
        _, cached_score, _ = find_best_move(
            board, PieceColor.RED, 3, evaluator, transposition_table=TranspositionTable(10_000)
        )

        assert plain_score == cached_score, "The cache must not change the search result"

    def test_deterministic(self, rules, evaluator):
        board = rules.create_initial_board()

        first = find_best_move(board, PieceColor.BLACK, 3, evaluator)
        second = find_best_move(board, PieceColor.BLACK, 3, evaluator)

        assert first == second

    def test_iterative_deepening_completes(self, rules, evaluator):
        board = rules.create_initial_board()

        result = iterative_deepening(board, PieceColor.RED, 3, evaluator)

        assert result.depth == 3
        assert result.best_move in rules.find_valid_moves(board, PieceColor.RED)
        assert len(result.scores) == 7, "Every root move should be scored"
        assert result.scores[0] == (result.best_move, result.score)
        assert result.nodes > 0

    def test_iterative_deepening_stops_on_win(self, evaluator):
        board = board_from_pieces(8, LAST_PIECE)

        result = iterative_deepening(board, PieceColor.RED, 6, evaluator)

        assert result.depth == 1, "A found win ends the search"
        assert result.score >= WIN_SCORE

    def test_stop_before_first_depth(self, rules, evaluator):
        result = iterative_deepening(
            rules.create_initial_board(), PieceColor.RED, 4, evaluator, should_stop=lambda: True
        )

        assert result.best_move is None
        assert result.depth == 0

    def test_no_moves(self, evaluator):
        board = board_from_pieces(8, {(5, 2): "r"})

        result = iterative_deepening(board, PieceColor.BLACK, 3, evaluator)

        assert result.best_move is None
        assert result.depth == 0


class TestMoveOrdering:
    """Tests for move ordering."""

    def test_captures_ordered_first(self):
        quiet = Move(Position(5, 0), Position(4, 1))
        single = Move(Position(5, 2), Position(3, 4), captures=(Position(4, 3),))
        double = Move(
            Position(5, 6),
            Position(1, 6),
            captures=(Position(4, 5), Position(2, 5)),
            path=(Position(3, 4),),
        )

        assert order_moves([quiet, single, double]) == [double, single, quiet]

    def test_stable_for_quiet_moves(self):
        moves = [Move(Position(5, 0), Position(4, 1)), Move(Position(5, 2), Position(4, 3))]

        assert order_moves(moves) == moves


class TestTranspositionTable:
    """Tests for transposition table."""

    @pytest.fixture
    def key(self, rules):
        return position_key(rules.create_initial_board(), PieceColor.RED)

    def test_store_and_lookup(self, key):
        tt = TranspositionTable(max_size=100)
        move = Move(Position(5, 2), Position(4, 3))

        tt.store(key, depth=3, value=42.0, node_type=NodeType.EXACT, best_move=move)
        entry = tt.lookup(key, depth=3)

        assert entry is not None
        assert entry.value == 42.0
        assert entry.node_type is NodeType.EXACT
        assert entry.best_move == move

    def test_insufficient_depth_returns_none(self, key):
        tt = TranspositionTable(max_size=100)
        tt.store(key, depth=2, value=1.0, node_type=NodeType.EXACT)

        assert tt.lookup(key, depth=3) is None
        assert tt.lookup(key, depth=1) is not None

    def test_depth_replacement(self, key):
        tt = TranspositionTable(max_size=100)

        tt.store(key, depth=5, value=10.0, node_type=NodeType.EXACT)
        tt.store(key, depth=2, value=-10.0, node_type=NodeType.EXACT)

        assert tt.lookup(key).value == 10.0, "Deeper entry should be kept"

        tt.store(key, depth=6, value=20.0, node_type=NodeType.LOWER_BOUND)

        assert tt.lookup(key).value == 20.0

    def test_lru_eviction(self):
        tt = TranspositionTable(max_size=2)
        a, b, c = (b"a", "red"), (b"b", "red"), (b"c", "red")

        tt.store(a, 1, 1.0, NodeType.EXACT)
        tt.store(b, 1, 2.0, NodeType.EXACT)
        tt.lookup(a)
        tt.store(c, 1, 3.0, NodeType.EXACT)

        assert len(tt) == 2
        assert tt.lookup(b) is None, "Least recently used entry should be evicted"
        assert tt.lookup(a) is not None
        assert tt.get_stats()['evictions'] == 1

    def test_stats(self, key):
        tt = TranspositionTable(max_size=100)
        tt.store(key, 1, 0.0, NodeType.EXACT)

        tt.lookup(key)
        tt.lookup((b"missing", "red"))
        stats = tt.get_stats()

        assert stats['hits'] == 1
        assert stats['misses'] == 1
        assert stats['hit_rate'] == 50.0

    def test_clear_table(self, key):
        tt = TranspositionTable(max_size=100)
        tt.store(key, 1, 0.0, NodeType.EXACT)

        tt.clear()

        assert len(tt) == 0
        assert tt.get_stats()['hits'] == 0

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            TranspositionTable(max_size=0)

    def test_key_includes_side_to_move(self, rules):
        board = rules.create_initial_board()

        assert position_key(board, PieceColor.RED) != position_key(board, PieceColor.BLACK)
        assert position_key(board, PieceColor.RED) == position_key(board.copy(), PieceColor.RED)


class TestAIConfig:
    """Tests for AIConfig and the difficulty presets."""

    def test_from_difficulty(self):
        config = AIConfig.from_difficulty(Difficulty.HARD)

        assert config.max_depth == 6
        assert config.time_limit == 5.0
        assert config.use_opening_book
        assert not config.use_endgame_database

    def test_from_difficulty_string_and_overrides(self):
        config = AIConfig.from_difficulty("expert", max_depth=3, random_seed=1)

        assert config.difficulty is Difficulty.EXPERT
        assert config.max_depth == 3
        assert config.random_seed == 1
        assert config.use_endgame_database

    def test_string_difficulty(self):
        assert AIConfig(difficulty="easy").difficulty is Difficulty.EASY

    @pytest.mark.parametrize(
        "field,value", [("max_depth", 0), ("time_limit", 0), ("tt_size", -1)]
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(ValueError):
            AIConfig(**{field: value})

    def test_unknown_difficulty(self):
        with pytest.raises(ValueError):
            AIConfig.from_difficulty("impossible")

    def test_presets_get_stronger(self):
        depths = [AIConfig.from_difficulty(level).max_depth for level in Difficulty]

        assert depths == sorted(depths)


class TestCheckersAI:
    """Tests for CheckersAI."""

    @pytest.fixture
    def ai(self, rules):
        return CheckersAI(rules, AIConfig.from_difficulty(Difficulty.MEDIUM, max_depth=2, time_limit=30.0))

    def test_takes_the_king(self, ai):
        move = ai.get_best_move(board_from_pieces(8, KING_OR_MAN), PieceColor.RED)

        assert move.to_pos == Position(3, 4)

    def test_single_legal_move(self, ai, rules):
        board = board_from_pieces(8, {(5, 0): "r", (4, 1): "b", (2, 3): "b"})

        move = ai.get_best_move(board, PieceColor.RED)

        assert move == rules.find_valid_moves(board, PieceColor.RED)[0]
        assert move.to_pos == Position(1, 4)

    def test_no_moves(self, ai):
        assert ai.get_best_move(board_from_pieces(8, {(5, 2): "r"}), PieceColor.BLACK) is None

    def test_easy_plays_captures(self, rules):
        ai = CheckersAI(rules, AIConfig.from_difficulty(Difficulty.EASY, random_seed=3))
        board = board_from_pieces(8, LAST_PIECE)

        move = ai.get_best_move(board, PieceColor.RED)

        assert move.is_capture

    def test_easy_seeded(self, rules):
        board = rules.create_initial_board()
        config = AIConfig.from_difficulty(Difficulty.EASY, random_seed=7)

        first = CheckersAI(rules, config).get_best_move(board, PieceColor.RED)
        second = CheckersAI(rules, config).get_best_move(board, PieceColor.RED)

        assert first == second
        assert first in rules.find_valid_moves(board, PieceColor.RED)

    def test_should_stop(self, ai, rules):
        move = ai.get_best_move(rules.create_initial_board(), PieceColor.RED, should_stop=lambda: True)

        assert move is None, "No depth completes when stopped immediately"
        assert ai.get_search_stats()['depth'] == 0

    def test_stop(self, ai, rules):
        def request_stop():
            ai.stop()
            return False

        move = ai.get_best_move(rules.create_initial_board(), PieceColor.RED, should_stop=request_stop)

        assert move is None

    def test_search_stats(self, ai):
        ai.get_best_move(board_from_pieces(8, KING_OR_MAN), PieceColor.RED)

        stats = ai.get_search_stats()

        assert stats['depth'] == 2
        assert stats['nodes'] > 0
        assert 'tt_entries' in stats
        assert 'tt_hit_rate' in stats

    def test_analyze_position(self, ai, rules):
        balanced = ai.analyze_position(rules.create_initial_board(), PieceColor.RED, depth=2)
        winning = ai.analyze_position(board_from_pieces(8, LAST_PIECE), PieceColor.RED, depth=2)
        blocked = board_from_pieces(8, {(4, 1): "r", (3, 0): "b", (3, 2): "b", (2, 3): "b"})
        losing = ai.analyze_position(blocked, PieceColor.RED, depth=2)

        assert -100.0 <= balanced <= 100.0
        assert winning == 100.0
        assert losing == -100.0

    def test_get_top_moves(self, ai, rules):
        top = ai.get_top_moves(rules.create_initial_board(), PieceColor.RED, top_n=3, depth=2)

        assert len(top) == 3
        scores = [entry.score for entry in top]
        assert scores == sorted(scores, reverse=True)
        assert all(-100.0 <= entry.evaluation <= 100.0 for entry in top)

    def test_top_moves_without_moves(self, ai):
        assert ai.get_top_moves(board_from_pieces(8, {(5, 2): "r"}), PieceColor.BLACK) == []

    def test_compare_moves(self, ai, rules):
        board = board_from_pieces(8, KING_OR_MAN)
        moves = {move.to_pos: move for move in rules.find_valid_moves(board, PieceColor.RED)}
        take_king, take_man = moves[Position(3, 4)], moves[Position(3, 0)]

        comparison = ai.compare_moves(board, take_king, take_man, PieceColor.RED, depth=2)

        assert comparison.better_move == take_king
        assert comparison.difference > 0
        assert comparison.difference == comparison.move1_score - comparison.move2_score

    def test_compare_equal_moves(self, ai, rules):
        board = board_from_pieces(8, KING_OR_MAN)
        move = rules.find_valid_moves(board, PieceColor.RED)[0]

        comparison = ai.compare_moves(board, move, move, PieceColor.RED, depth=2)

        assert comparison.better_move is None
        assert comparison.difference == 0

    def test_evaluate_position_detailed(self, ai, rules):
        breakdown = ai.evaluate_position_detailed(rules.create_initial_board(), PieceColor.RED)

        assert breakdown.material == 0

    def test_set_difficulty(self, rules):
        ai = CheckersAI(rules, AIConfig.from_difficulty("medium", random_seed=5))

        ai.set_difficulty("hard")

        assert ai.config.difficulty is Difficulty.HARD
        assert ai.config.max_depth == 6
        assert ai.config.random_seed == 5
        assert ai.evaluator.weights.king == 175

    def test_default_config(self, rules):
        ai = CheckersAI(rules)

        assert ai.config.difficulty is Difficulty.MEDIUM
        assert "american" in repr(ai)
