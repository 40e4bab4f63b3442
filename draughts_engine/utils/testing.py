"""
Engine Testing Utilities

This module contains a small tactical test suite and a self-play driver
used to check and benchmark the AI.

Tactical Suite:
    Hand-built positions with a known best move (forced captures, choosing
    the longest chain, taking the more valuable piece, flying-king captures).
    A position is solved when the AI plays one of its best moves.

Self-play:
    play_match() plays one game between two CheckersAI instances with full
    draw bookkeeping, the way a game server would drive the engine.
"""

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from tqdm import tqdm

from draughts_engine.board.representation import Board, Move, Piece, PieceColor, PieceType
from draughts_engine.rules.draws import DrawResult, create_draw_state, update_draw_state
from draughts_engine.rules.game_rules import GameRules, create_game_rules
from draughts_engine.search.ai import CheckersAI
from draughts_engine.search.config import AIConfig

logger = logging.getLogger(__name__)

Square = Tuple[int, int]

_PIECES = {
    "r": Piece(PieceColor.RED, PieceType.REGULAR),
    "R": Piece(PieceColor.RED, PieceType.KING),
    "b": Piece(PieceColor.BLACK, PieceType.REGULAR),
    "B": Piece(PieceColor.BLACK, PieceType.KING),
}


def board_from_pieces(size: int, pieces: Dict[Square, str]) -> Board:
    """Build a board from {(row, col): "r" | "R" | "b" | "B"}."""
    board = Board.empty(size)
    for (row, col), symbol in pieces.items():
        board.set(row, col, _PIECES[symbol])
    return board


@dataclass
class TacticalPosition:
    """A test position with its known best moves."""
    id: str
    variant: str
    pieces: Dict[Square, str]
    to_move: PieceColor
    best_moves: List[Tuple[Square, Square]]
    description: str = ""

    def board(self, rules: GameRules) -> Board:
        return board_from_pieces(rules.get_board_size(), self.pieces)


@dataclass
class TacticalResult:
    """Result of testing one position."""
    position: TacticalPosition
    found_move: Optional[Move]
    correct: bool
    time_taken: float


# ============================================================================
# Tactical Suite
# ============================================================================

TACTICAL_POSITIONS = [
    TacticalPosition(
        id="T.01",
        variant="american",
        pieces={(5, 2): "r", (4, 3): "b", (1, 6): "b"},
        to_move=PieceColor.RED,
        best_moves=[((5, 2), (3, 4))],
        description="Forced capture",
    ),
    TacticalPosition(
        id="T.02",
        variant="american",
        pieces={(5, 0): "r", (4, 1): "b", (2, 3): "b"},
        to_move=PieceColor.RED,
        best_moves=[((5, 0), (1, 4))],
        description="Double jump must be completed",
    ),
    TacticalPosition(
        id="T.03",
        variant="american",
        pieces={(5, 2): "r", (4, 1): "b", (4, 3): "B"},
        to_move=PieceColor.RED,
        best_moves=[((5, 2), (3, 4))],
        description="Capture the king rather than the man",
    ),
    TacticalPosition(
        id="T.04",
        variant="international",
        pieces={(6, 1): "r", (6, 7): "r", (5, 2): "b", (5, 6): "b", (3, 6): "b", (0, 1): "b"},
        to_move=PieceColor.RED,
        best_moves=[((6, 7), (2, 7))],
        description="Maximum capture: the two-piece chain is compulsory",
    ),
    TacticalPosition(
        id="T.05",
        variant="brazilian",
        pieces={(7, 0): "R", (4, 3): "b", (0, 1): "b"},
        to_move=PieceColor.RED,
        best_moves=[((7, 0), (3, 4)), ((7, 0), (2, 5)), ((7, 0), (1, 6)), ((7, 0), (0, 7))],
        description="Flying king captures from a distance",
    ),
]


def evaluate_position(
    position: TacticalPosition,
    config: AIConfig,
    verbose: bool = False,
) -> TacticalResult:
    """
    Search a single test position.

    Args:
        position: Test position
        config: AI configuration to search with
        verbose: If True, print detailed output

    Returns:
        TacticalResult with the AI's move and whether it was correct
    """
    rules = create_game_rules(position.variant)
    ai = CheckersAI(rules, config)
    board = position.board(rules)

    if verbose:
        print(f"\nTesting {position.id}: {position.description}")
        print(board)

    start_time = time.time()
    move = ai.get_best_move(board, position.to_move)
    time_taken = time.time() - start_time

    correct = move is not None and (tuple(move.from_pos), tuple(move.to_pos)) in position.best_moves

    if verbose:
        print(f"Engine found: {move}")
        print(f"Time: {time_taken:.2f}s")
        print(f"Result: {'CORRECT' if correct else 'WRONG'}")

    return TacticalResult(position=position, found_move=move, correct=correct, time_taken=time_taken)


def run_tactics(
    config: AIConfig,
    positions: Optional[List[TacticalPosition]] = None,
    verbose: bool = False,
) -> Dict[str, Any]:
    """
    Run the tactical suite.

    Returns:
        Dictionary with test results:
            - score: Number of correct positions
            - total: Total number of positions
            - percentage: Success percentage
            - results: List of TacticalResult objects
            - avg_time: Average time per position
    """
    positions = TACTICAL_POSITIONS if positions is None else positions
    results = [evaluate_position(position, config, verbose=verbose) for position in positions]
    correct_count = sum(1 for result in results if result.correct)
    total_time = sum(result.time_taken for result in results)

    return {
        'score': correct_count,
        'total': len(positions),
        'percentage': (correct_count / len(positions) * 100) if positions else 0,
        'results': results,
        'avg_time': total_time / len(positions) if positions else 0,
        'total_time': total_time,
    }


# ============================================================================
# Self-play
# ============================================================================

@dataclass
class MatchResult:
    """Outcome of one self-play game."""
    winner: Optional[PieceColor]
    draw: Optional[DrawResult]
    plies: int
    moves: List[Move] = field(default_factory=list)
    final_board: Optional[Board] = None

    @property
    def finished(self) -> bool:
        return self.winner is not None or self.draw is not None


def play_match(
    rules: GameRules,
    red_ai: CheckersAI,
    black_ai: CheckersAI,
    max_plies: int = 200,
    board: Optional[Board] = None,
    first_player: PieceColor = PieceColor.RED,
    rng: Optional[random.Random] = None,
) -> MatchResult:
    """
    Play one game between two AIs.

    When an AI returns no move in time, a random legal move is played.

    Args:
        rules: Initialized rules of the variant
        red_ai: AI playing red
        black_ai: AI playing black
        max_plies: Plies after which the game is stopped unfinished
        board: Starting position (default: the variant's initial board)
        first_player: Side that moves first
        rng: Random source for the fallback move

    Returns:
        MatchResult; winner and draw are both None if max_plies ran out
    """
    rng = rng or random.Random()
    board = board if board is not None else rules.create_initial_board()
    color = first_player
    state = create_draw_state(board, color)
    played: List[Move] = []

    for ply in range(max_plies + 1):
        outcome = rules.check_winner(board, state)
        if isinstance(outcome, PieceColor):
            return MatchResult(winner=outcome, draw=None, plies=ply, moves=played, final_board=board)
        if isinstance(outcome, DrawResult):
            return MatchResult(winner=None, draw=outcome, plies=ply, moves=played, final_board=board)
        if ply == max_plies:
            break

        ai = red_ai if color is PieceColor.RED else black_ai
        move = ai.get_best_move(board, color, move_number=ply // 2)
        if move is None:
            move = rng.choice(rules.find_valid_moves(board, color))
            logger.debug(f"Fallback random move {move} for {color.value}")

        promoted = rules.is_promoting_move(board, move)
        board = rules.make_move(board, move)
        played.append(move)
        color = color.opponent
        state = update_draw_state(state, board, move, color, promoted)

    return MatchResult(winner=None, draw=None, plies=max_plies, moves=played, final_board=board)


def run_matches(
    variant: str,
    red_config: AIConfig,
    black_config: AIConfig,
    games: int = 10,
    max_plies: int = 200,
    progress: bool = True,
    on_result: Optional[Callable[[MatchResult], None]] = None,
) -> Dict[str, int]:
    """
    Play a series of games and tally the results.

    Returns:
        Dictionary with 'red', 'black', 'draw' and 'unfinished' counts
    """
    rules = create_game_rules(variant)
    tally = {'red': 0, 'black': 0, 'draw': 0, 'unfinished': 0}

    for _ in tqdm(range(games), desc=f"{variant} games", disable=not progress):
        result = play_match(rules, CheckersAI(rules, red_config), CheckersAI(rules, black_config), max_plies)
        if result.winner is not None:
            tally[result.winner.value] += 1
        elif result.draw is not None:
            tally['draw'] += 1
        else:
            tally['unfinished'] += 1
        if on_result is not None:
            on_result(result)

    return tally
