"""
Unit Tests for Utilities

Tests for the tactical suite, self-play driver and logger setup.
"""

import itertools
import logging
import random

import pytest

from draughts_engine.board import Move, PieceColor, Position
from draughts_engine.rules import create_game_rules
from draughts_engine.rules.draws import DrawReason
from draughts_engine.search import AIConfig, CheckersAI, Difficulty
from draughts_engine.utils import (
    TACTICAL_POSITIONS,
    MatchResult,
    board_from_pieces,
    play_match,
    run_matches,
    run_tactics,
    setup_logger,
)
from draughts_engine.utils.log import LOGGER_NAME


class TestTactics:
    """Tests for the tactical suite."""

    def test_positions_are_legal(self):
        for position in TACTICAL_POSITIONS:
            rules = create_game_rules(position.variant)
            board = position.board(rules)
            legal = {
                (tuple(move.from_pos), tuple(move.to_pos))
                for move in rules.find_valid_moves(board, position.to_move)
            }
            assert set(position.best_moves) <= legal, f"{position.id} best moves must be legal"

    def test_search_solves_suite(self):
        config = AIConfig.from_difficulty(Difficulty.MEDIUM, max_depth=2, time_limit=30.0)

        results = run_tactics(config)

        assert results['total'] == len(TACTICAL_POSITIONS)
        assert results['score'] == results['total'], [
            (r.position.id, str(r.found_move)) for r in results['results'] if not r.correct
        ]
        assert results['percentage'] == 100

    def test_empty_suite(self):
        results = run_tactics(AIConfig(), positions=[])

        assert results['total'] == 0
        assert results['percentage'] == 0


class TestSelfPlay:
    """Tests for play_match and run_matches."""

    @pytest.fixture
    def rules(self):
        return create_game_rules("american")

    def easy(self, rules, seed):
        return CheckersAI(rules, AIConfig.from_difficulty(Difficulty.EASY, random_seed=seed))

    def test_game_ends_or_runs_out(self, rules):
        result = play_match(rules, self.easy(rules, 1), self.easy(rules, 2), max_plies=30)

        assert result.plies <= 30
        assert len(result.moves) == result.plies
        if not result.finished:
            assert result.plies == 30

    def test_decisive_capture(self, rules):
        board = board_from_pieces(8, {(5, 2): "r", (4, 3): "b"})

        result = play_match(rules, self.easy(rules, 1), self.easy(rules, 2), board=board)

        assert result.winner is PieceColor.RED
        assert result.draw is None
        assert result.plies == 1
        assert result.finished
        assert result.final_board.count(PieceColor.BLACK) == 0

    def test_black_moves_first(self, rules):
        board = board_from_pieces(8, {(5, 2): "r", (4, 3): "b"})

        result = play_match(
            rules,
            self.easy(rules, 1),
            self.easy(rules, 2),
            board=board,
            first_player=PieceColor.BLACK,
        )

        assert result.winner is PieceColor.BLACK, "Black captures first and wins"

    def test_drawn_start(self, rules):
        board = board_from_pieces(8, {(0, 1): "R", (7, 6): "B"})

        result = play_match(rules, self.easy(rules, 1), self.easy(rules, 2), board=board)

        assert result.draw is not None
        assert result.plies == 0

    def test_timed_out_ai_falls_back(self, rules):
        class SilentAI(CheckersAI):
            def get_best_move(self, board, color, move_number=0, should_stop=None):
                return None

        silent = SilentAI(rules, AIConfig())

        result = play_match(rules, silent, silent, max_plies=4, rng=random.Random(0))

        assert result.plies == 4
        assert len(result.moves) == 4

    def test_repetition_counts_starting_position(self, rules):
        class ScriptedAI(CheckersAI):
            def __init__(self, rules, moves):
                super().__init__(rules, AIConfig())
                self.moves = itertools.cycle(moves)

            def get_best_move(self, board, color, move_number=0, should_stop=None):
                return next(self.moves)

        board = board_from_pieces(8, {(7, 0): "R", (7, 2): "R", (7, 4): "R", (0, 7): "B"})
        red = ScriptedAI(rules, [Move(Position(7, 4), Position(6, 5)), Move(Position(6, 5), Position(7, 4))])
        black = ScriptedAI(rules, [Move(Position(0, 7), Position(1, 6)), Move(Position(1, 6), Position(0, 7))])

        result = play_match(rules, red, black, board=board)

        assert result.draw is not None
        assert result.draw.reason is DrawReason.THREEFOLD_REPETITION
        assert result.plies == 8, "The starting position is its first occurrence"

    def test_unfinished_result(self):
        assert not MatchResult(winner=None, draw=None, plies=10).finished

    def test_run_matches_tally(self):
        config = AIConfig.from_difficulty(Difficulty.EASY, random_seed=4)
        seen = []

        tally = run_matches("american", config, config, games=2, max_plies=20, progress=False, on_result=seen.append)

        assert sum(tally.values()) == 2
        assert len(seen) == 2


class TestLogging:
    """Tests for setup_logger."""

    def test_single_handler(self):
        setup_logger()
        logger = setup_logger(debug=True)

        assert logger.name == LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_info_level(self):
        assert setup_logger().level == logging.INFO
