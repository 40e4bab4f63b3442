"""
Minimax Search with Alpha-Beta Pruning

This module implements the core search algorithm of the AI. Minimax explores
the game tree to find the best move, alpha-beta pruning cuts branches that
cannot change the result, and iterative deepening turns the fixed-depth
search into an anytime search bounded by a wall-clock budget.

Key Concepts:
    - Minimax: Recursive algorithm that assumes optimal play by both sides
    - Alpha-Beta: Optimization that prunes branches that can't affect result
    - Move Ordering: Captures (longest chains first) are searched first
    - Transposition Table: Results cached with EXACT / bound flags
    - Iterative Deepening: depth 1, 2, ... until max_depth or time runs out

Time Control:
    The clock (and the optional should_stop callback) is polled between
    depths and between root moves. A depth interrupted part way is thrown
    away; the result of the last completed depth is returned. A single root
    subtree is never interrupted, so the budget can be overrun by the time
    that subtree takes.

Scores:
    Always from the root color's perspective: the root color maximizes.

References:
    - Minimax: https://www.chessprogramming.org/Minimax
    - Alpha-Beta: https://www.chessprogramming.org/Alpha-Beta
    - Iterative Deepening: https://www.chessprogramming.org/Iterative_Deepening
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from draughts_engine.board.representation import Board, Move, PieceColor
from draughts_engine.evaluation.base import INFINITY, WIN_SCORE, Evaluator
from draughts_engine.rules.moves import find_valid_moves, make_move
from draughts_engine.search.transposition import NodeType, TranspositionTable, position_key

logger = logging.getLogger(__name__)

StopCondition = Callable[[], bool]


@dataclass
class SearchResult:
    """
    Outcome of an iterative-deepening search.

    Attributes:
        best_move: Best move of the last completed depth (None if none completed)
        score: Score of best_move from the root color's perspective
        depth: Last completed depth (0 if none)
        nodes: Positions visited across all iterations
        elapsed: Wall-clock seconds spent
        scores: Root move scores of the last completed depth, best first
    """

    best_move: Optional[Move] = None
    score: float = 0.0
    depth: int = 0
    nodes: int = 0
    elapsed: float = 0.0
    scores: List[Tuple[Move, float]] = field(default_factory=list)


def order_moves(moves: List[Move]) -> List[Move]:
    """
    Order moves to improve alpha-beta pruning efficiency.

    Captures come first, longest chains first; the sort is stable so the
    generator order is kept otherwise.
    """
    return sorted(moves, key=lambda move: len(move.captures), reverse=True)


def minimax(
    board: Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing_player: bool,
    root_color: PieceColor,
    evaluator: Evaluator,
    transposition_table: Optional[TranspositionTable] = None,
    nodes_searched: Optional[List[int]] = None,
) -> Tuple[float, Optional[Move]]:
    """
    Minimax search with alpha-beta pruning.

    Args:
        board: Current position
        depth: Remaining search depth (decrements each recursive call)
        alpha: Best score the maximizer can already guarantee
        beta: Best score the minimizer can already guarantee
        maximizing_player: True when root_color is to move
        root_color: Side the scores are relative to
        evaluator: Position evaluation function
        transposition_table: Optional cache of previous results
        nodes_searched: Optional mutable list [count] of visited positions

    Returns:
        (score, best move at this node or None at leaves)

    Algorithm:
        1. Probe the transposition table
        2. Generate legal moves; a side without moves has lost
        3. At depth 0 return the static evaluation
        4. Search children (captures first), pruning once alpha >= beta
        5. Store the result with its bound type
    """
    if nodes_searched is not None:
        nodes_searched[0] += 1

    config = evaluator.config
    color_to_move = root_color if maximizing_player else root_color.opponent
    alpha_original, beta_original = alpha, beta

    key = None
    if transposition_table is not None:
        key = position_key(board, color_to_move)
        entry = transposition_table.lookup(key, depth)
        if entry is not None:
            if entry.node_type is NodeType.EXACT:
                return entry.value, entry.best_move
            if entry.node_type is NodeType.LOWER_BOUND:
                alpha = max(alpha, entry.value)
            else:
                beta = min(beta, entry.value)
            if alpha >= beta:
                return entry.value, entry.best_move

    legal_moves = find_valid_moves(board, color_to_move, config)
    terminal_score = evaluator.evaluate_terminal(board, color_to_move, legal_moves, root_color, depth)
    if terminal_score is not None:
        return terminal_score, None

    if depth <= 0:
        return evaluator.evaluate(board, root_color), None

    best_move = None
    if maximizing_player:
        best_score = -INFINITY
        for move in order_moves(legal_moves):
            score, _ = minimax(
                make_move(board, move, config),
                depth - 1,
                alpha,
                beta,
                False,
                root_color,
                evaluator,
                transposition_table,
                nodes_searched,
            )
            if score > best_score:
                best_score, best_move = score, move
            alpha = max(alpha, score)
            if beta <= alpha:
                break
    else:
        best_score = INFINITY
        for move in order_moves(legal_moves):
            score, _ = minimax(
                make_move(board, move, config),
                depth - 1,
                alpha,
                beta,
                True,
                root_color,
                evaluator,
                transposition_table,
                nodes_searched,
            )
            if score < best_score:
                best_score, best_move = score, move
            beta = min(beta, score)
            if beta <= alpha:
                break

    if transposition_table is not None:
        if best_score <= alpha_original:
            node_type = NodeType.UPPER_BOUND
        elif best_score >= beta_original:
            node_type = NodeType.LOWER_BOUND
        else:
            node_type = NodeType.EXACT
        transposition_table.store(key, depth, best_score, node_type, best_move)

    return best_score, best_move


def search_root(
    board: Board,
    color: PieceColor,
    depth: int,
    evaluator: Evaluator,
    transposition_table: Optional[TranspositionTable] = None,
    nodes_searched: Optional[List[int]] = None,
    should_stop: Optional[StopCondition] = None,
) -> Optional[List[Tuple[Move, float]]]:
    """
    Score every root move at one depth.

    Each root move gets a full window so the returned scores are exact and
    can be ranked.

    Returns:
        (move, score) pairs sorted best first, or None if should_stop fired
        before every root move was searched
    """
    legal_moves = order_moves(find_valid_moves(board, color, evaluator.config))
    scored = []
    for move in legal_moves:
        if should_stop is not None and should_stop():
            return None
        score, _ = minimax(
            make_move(board, move, evaluator.config),
            depth - 1,
            -INFINITY,
            INFINITY,
            False,
            color,
            evaluator,
            transposition_table,
            nodes_searched,
        )
        scored.append((move, score))
    scored.sort(key=lambda item: item[1], reverse=True)
    return scored


def find_best_move(
    board: Board,
    color: PieceColor,
    depth: int,
    evaluator: Evaluator,
    transposition_table: Optional[TranspositionTable] = None,
    verbose: bool = False,
) -> Tuple[Move, float, int]:
    """
    Find the best move at a fixed depth.

    Args:
        board: Current position
        color: Side to move
        depth: Search depth (higher = stronger but slower)
        evaluator: Position evaluation function
        transposition_table: Optional cache for position evaluations
        verbose: If True, print per-move scores

    Returns:
        Tuple of (best_move, score, nodes)

    Raises:
        ValueError: If no legal moves available (game over)
    """
    if not find_valid_moves(board, color, evaluator.config):
        raise ValueError("No legal moves available")

    nodes = [0]
    scored = search_root(board, color, depth, evaluator, transposition_table, nodes)

    if verbose:
        for move, score in scored:
            print(f"Move: {move}, Score: {score:.2f}")
        print(f"\nNodes searched: {nodes[0]}")

    best_move, best_score = scored[0]
    return best_move, best_score, nodes[0]


def iterative_deepening(
    board: Board,
    color: PieceColor,
    max_depth: int,
    evaluator: Evaluator,
    time_limit: Optional[float] = None,
    transposition_table: Optional[TranspositionTable] = None,
    should_stop: Optional[StopCondition] = None,
) -> SearchResult:
    """
    Search depth 1, 2, ... max_depth within a time budget.

    Args:
        board: Current position
        color: Side to move
        max_depth: Deepest iteration
        evaluator: Position evaluation function
        time_limit: Wall-clock budget in seconds (None = unlimited)
        transposition_table: Optional cache shared by all iterations
        should_stop: Optional external cancellation callback

    Returns:
        SearchResult of the last completed depth. best_move is None if the
        side has no legal moves or no depth completed in time.
    """
    start_time = time.perf_counter()

    def stop() -> bool:
        if time_limit is not None and time.perf_counter() - start_time >= time_limit:
            return True
        return should_stop is not None and should_stop()

    result = SearchResult()
    nodes = [0]

    for depth in range(1, max_depth + 1):
        if stop():
            break

        scored = search_root(board, color, depth, evaluator, transposition_table, nodes, stop)
        if scored is None:
            logger.debug(f"Depth {depth} aborted after {nodes[0]} nodes, keeping depth {result.depth}")
            break
        if not scored:
            break

        result.best_move, result.score = scored[0]
        result.depth = depth
        result.scores = scored
        logger.debug(
            f"Depth {depth}: best {result.best_move} score {result.score:.1f} "
            f"nodes {nodes[0]}"
        )

        if abs(result.score) >= WIN_SCORE:
            break

    result.nodes = nodes[0]
    result.elapsed = time.perf_counter() - start_time
    return result
