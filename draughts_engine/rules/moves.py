"""
Move Generation, Application and Validation

This module is the rules core: every legal move of every variant comes out
of the functions below, driven only by the VariantConfig passed in.

Key Components:
    - get_valid_directions / get_capture_directions: direction sets per piece
    - get_capture_moves: recursive multi-jump expansion for one piece
    - find_valid_moves: all legal moves for a side, with mandatory, maximum
      and king-priority capture filtering
    - make_move: copy-on-write move application with promotion
    - validate_move: independent legality check for externally proposed moves

Capture Search:
    Captures are found depth-first on a single scratch board. Before
    recursing from a landing square the captured piece is removed, and it is
    put back when the branch is exhausted, so every branch sees its own
    post-capture position without copying the grid per hop. The moving piece
    is lifted off its origin square for the whole search.

    Every maximal branch is returned; filtering by length or piece type is
    applied afterwards by find_valid_moves().

Direction Convention:
    Directions are (d_row, d_col) with d_row = -1 pointing toward row 0.
    Red moves toward row 0, black toward the last row.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from draughts_engine.board.representation import (
    EMPTY,
    Board,
    Move,
    Piece,
    PieceColor,
    Position,
    is_dark_square,
)
from draughts_engine.rules.schema import VariantConfig
from draughts_engine.rules.utils import get_promotion_rows, is_promotion_row

logger = logging.getLogger(__name__)

Direction = Tuple[int, int]

ALL_DIRECTIONS: Tuple[Direction, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))


# ============================================================================
# Directions and reach
# ============================================================================

def _directions_for(sense: str, color: PieceColor) -> Tuple[Direction, ...]:
    forward = color.forward
    if sense == "forward":
        return ((forward, -1), (forward, 1))
    if sense == "backward":
        return ((-forward, -1), (-forward, 1))
    return ALL_DIRECTIONS


def get_valid_directions(piece: Piece, config: VariantConfig) -> Tuple[Direction, ...]:
    """
    Movement directions for a piece.

    Kings always move along all four diagonals. Regular pieces use their
    color's configured base direction, widened to all four diagonals when
    can_move_backward is set.
    """
    if piece.is_king:
        return ALL_DIRECTIONS
    regular = config.movement.regular_pieces
    if regular.can_move_backward:
        return ALL_DIRECTIONS
    sense = regular.directions.red if piece.color is PieceColor.RED else regular.directions.black
    return _directions_for(sense, piece.color)


def get_capture_directions(piece: Piece, config: VariantConfig) -> Tuple[Direction, ...]:
    """
    Capture directions for a piece.

    Kings capture in all four directions unless kings.can_capture_backward
    is off. Regular pieces capture forward when capture_direction.regular is
    "forward" or "all", and backward when it is "backward" or "all" *and*
    regular_pieces.can_capture_backward is set.
    """
    if piece.is_king:
        if config.movement.kings.can_capture_backward:
            return ALL_DIRECTIONS
        return _directions_for("forward", piece.color)

    sense = config.capture.capture_direction.regular
    allow_forward = sense in ("all", "forward")
    allow_backward = (
        sense in ("all", "backward")
        and config.movement.regular_pieces.can_capture_backward
    )
    directions: Tuple[Direction, ...] = ()
    if allow_forward:
        directions += _directions_for("forward", piece.color)
    if allow_backward:
        directions += _directions_for("backward", piece.color)
    return directions


def can_fly(piece: Piece, config: VariantConfig) -> bool:
    return piece.is_king and config.movement.kings.can_fly


def _reach(piece: Piece, config: VariantConfig, size: int) -> int:
    """Longest distance the piece may travel along a diagonal in one hop."""
    if not can_fly(piece, config):
        return 1
    max_distance = config.movement.kings.max_distance
    return min(max_distance, size) if max_distance else size


# ============================================================================
# Simple moves
# ============================================================================

def get_simple_moves(board: Board, position: Position, piece: Piece, config: VariantConfig) -> List[Move]:
    """Non-capturing moves: one step, or any unobstructed distance when flying."""
    moves = []
    reach = _reach(piece, config, board.size)
    for d_row, d_col in get_valid_directions(piece, config):
        for distance in range(1, reach + 1):
            target = position.offset(d_row, d_col, distance)
            if not board.is_empty(*target):
                break
            moves.append(Move(position, target))
    return moves


# ============================================================================
# Captures
# ============================================================================

def _find_capture(
    board: Board,
    position: Position,
    piece: Piece,
    direction: Direction,
    config: VariantConfig,
) -> Optional[Tuple[Position, List[Position]]]:
    """
    Look for a capture along one diagonal.

    Returns:
        (captured square, landing squares) or None. Non-flying pieces need the
        enemy on the adjacent square and land right behind it. Flying kings
        take the first piece they meet and may land on any empty square past
        it up to the next occupied square.
    """
    d_row, d_col = direction
    reach = _reach(piece, config, board.size)
    limit = reach if can_fly(piece, config) else 2

    distance = 1
    while True:
        if distance >= limit:
            return None
        square = position.offset(d_row, d_col, distance)
        if not board.is_valid_square(*square):
            return None
        code = board.code_at(*square)
        if code != EMPTY:
            break
        if not can_fly(piece, config):
            return None
        distance += 1

    if code * piece.color.sign > 0:
        return None

    landings = []
    for step in range(distance + 1, limit + 1):
        landing = position.offset(d_row, d_col, step)
        if not board.is_empty(*landing):
            break
        landings.append(landing)
    if not landings:
        return None
    return square, landings


def _after_landing(piece: Piece, landing: Position, config: VariantConfig) -> Tuple[Piece, bool]:
    """
    State of the capturing piece after a hop.

    Returns:
        (piece to continue with, whether the chain must stop here)
    """
    if not config.capture.chain_captures:
        return piece, True
    if piece.is_king or not is_promotion_row(config, landing.row, piece.color):
        return piece, False
    promotion = config.capture.promotion
    next_piece = piece.promoted() if promotion.during_capture else piece
    return next_piece, promotion.stops_capture_chain


def _capture_sequences(
    board: Board,
    position: Position,
    piece: Piece,
    config: VariantConfig,
) -> List[Tuple[List[Position], List[Position]]]:
    """
    Expand every capture chain from position.

    Mutates board during the search and restores it before returning.

    Returns:
        List of (captured squares, landing squares) per maximal chain
    """
    sequences = []
    for direction in get_capture_directions(piece, config):
        found = _find_capture(board, position, piece, direction, config)
        if found is None:
            continue
        captured, landings = found
        captured_piece = board.get(*captured)
        board.set(*captured, None)
        for landing in landings:
            next_piece, chain_ends = _after_landing(piece, landing, config)
            continuations = [] if chain_ends else _capture_sequences(board, landing, next_piece, config)
            if continuations:
                for captures, path in continuations:
                    sequences.append(([captured] + captures, [landing] + path))
            else:
                sequences.append(([captured], [landing]))
        board.set(*captured, captured_piece)
    return sequences


def get_capture_moves(board: Board, position: Position, piece: Piece, config: VariantConfig) -> List[Move]:
    """
    All capture sequences available to one piece.

    Args:
        board: Current position (not modified)
        position: Square of the capturing piece
        piece: The capturing piece
        config: Variant rules

    Returns:
        One Move per maximal chain. captures lists the jumped squares in
        order; path lists from_pos, every landing square, and to_pos.
    """
    scratch = board.copy()
    scratch.set(*position, None)
    moves = []
    for captures, landings in _capture_sequences(scratch, position, piece, config):
        moves.append(
            Move(
                from_pos=position,
                to_pos=landings[-1],
                captures=tuple(captures),
                path=(position, *landings),
            )
        )
    return moves


def get_all_capture_moves(board: Board, color: PieceColor, config: VariantConfig) -> List[Move]:
    captures = []
    for position, piece in board.pieces(color):
        captures.extend(get_capture_moves(board, position, piece, config))
    return captures


def filter_captures(board: Board, captures: List[Move], config: VariantConfig) -> List[Move]:
    """
    Apply maximum-capture and king-priority rules.

    Maximum capture keeps only the longest chains across all pieces. King
    priority then keeps only king captures if any remain.
    """
    if not captures:
        return captures
    if config.capture.require_maximum:
        longest = max(len(move.captures) for move in captures)
        captures = [move for move in captures if len(move.captures) == longest]
    if config.capture.king_priority:
        by_kings = [move for move in captures if _is_king_move(board, move)]
        if by_kings:
            captures = by_kings
    return captures


def _is_king_move(board: Board, move: Move) -> bool:
    piece = board.get(*move.from_pos)
    return piece is not None and piece.is_king


def find_valid_moves(board: Board, color: PieceColor, config: VariantConfig) -> List[Move]:
    """
    All legal moves for a side.

    Captures are filtered by the maximum-capture and king-priority rules.
    When capturing is mandatory and any capture exists only those captures
    are returned. When capturing is optional, the filtered capture sequences
    are listed first, followed by the simple moves.

    Args:
        board: Current position
        color: Side to move
        config: Variant rules

    Returns:
        List of legal moves (empty if the side cannot move)
    """
    captures = filter_captures(board, get_all_capture_moves(board, color, config), config)
    if captures and config.capture.mandatory:
        return captures

    moves = list(captures)
    for position, piece in board.pieces(color):
        moves.extend(get_simple_moves(board, position, piece, config))
    return moves


def has_any_move(board: Board, color: PieceColor, config: VariantConfig) -> bool:
    """Cheap test for at least one legal move (no chain expansion)."""
    for position, piece in board.pieces(color):
        for d_row, d_col in get_valid_directions(piece, config):
            if board.is_empty(*position.offset(d_row, d_col)):
                return True
        for direction in get_capture_directions(piece, config):
            if _find_capture(board, position, piece, direction, config) is not None:
                return True
    return False


def is_maximum_capture_move(board: Board, move: Move, config: VariantConfig) -> bool:
    """
    Whether move captures as many pieces as the longest available chain.

    The maximum is taken over every capture sequence of the moving side.
    """
    piece = board.get(*move.from_pos)
    if piece is None:
        return False
    captures = get_all_capture_moves(board, piece.color, config)
    longest = max((len(m.captures) for m in captures), default=0)
    return len(move.captures) == longest


# ============================================================================
# Move application
# ============================================================================

def is_promoting_move(piece: Piece, move: Move, config: VariantConfig) -> bool:
    """
    Whether a regular piece ends this move as a king.

    The final square decides, unless promotion during capture is enabled, in
    which case touching the promotion row at any landing square promotes.
    """
    if piece.is_king:
        return False
    rows = get_promotion_rows(config)[piece.color]
    if move.to_pos.row in rows:
        return True
    if move.is_capture and config.capture.promotion.during_capture:
        return any(square.row in rows for square in move.waypoints[1:])
    return False


def make_move(board: Board, move: Move, config: VariantConfig) -> Board:
    """
    Apply a move and return the resulting board.

    The input board is never modified. A move from an empty square returns
    the input board unchanged.
    """
    piece = board.get(*move.from_pos)
    if piece is None:
        return board

    new_board = board.copy()
    new_board.set(*move.from_pos, None)
    for captured in move.captures:
        new_board.set(*captured, None)
    if is_promoting_move(piece, move, config):
        piece = piece.promoted()
    new_board.set(*move.to_pos, piece)
    return new_board


# ============================================================================
# Validation
# ============================================================================

def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _diagonal(start: Position, end: Position) -> Optional[Tuple[Direction, int]]:
    d_row = end.row - start.row
    d_col = end.col - start.col
    if d_row == 0 or abs(d_row) != abs(d_col):
        return None
    return (_sign(d_row), _sign(d_col)), abs(d_row)


def _path_is_clear(board: Board, start: Position, direction: Direction, first: int, last: int) -> bool:
    """Squares start+first .. start+last (inclusive) along direction are empty."""
    return all(board.is_empty(*start.offset(*direction, distance)) for distance in range(first, last + 1))


def validate_move(
    board: Board,
    move: Move,
    config: VariantConfig,
    player: Optional[PieceColor] = None,
) -> bool:
    """
    Check an externally proposed move against the rules.

    Legality is re-derived from the board and configuration rather than by
    looking the move up in find_valid_moves().

    Args:
        board: Current position
        move: Proposed move
        config: Variant rules
        player: Side to move; if given the moving piece must belong to it

    Returns:
        True if the move is legal
    """
    piece = board.get(*move.from_pos)
    if piece is None:
        return False
    if player is not None and piece.color is not player:
        return False

    target = move.to_pos
    if not board.is_valid_square(*target) or not is_dark_square(*target):
        return False
    if target != move.from_pos and not board.is_empty(*target):
        return False

    if move.is_capture:
        return _validate_capture(board, move, piece, config)
    return _validate_simple(board, move, piece, config)


def _validate_simple(board: Board, move: Move, piece: Piece, config: VariantConfig) -> bool:
    diagonal = _diagonal(move.from_pos, move.to_pos)
    if diagonal is None:
        return False
    direction, distance = diagonal
    if direction not in get_valid_directions(piece, config):
        return False
    if distance > _reach(piece, config, board.size):
        return False
    if not _path_is_clear(board, move.from_pos, direction, 1, distance):
        return False
    if config.capture.mandatory and get_all_capture_moves(board, piece.color, config):
        return False
    return True


def _validate_capture(board: Board, move: Move, piece: Piece, config: VariantConfig) -> bool:
    opponent_sign = piece.color.opponent.sign
    if len(set(move.captures)) != len(move.captures):
        return False
    for captured in move.captures:
        if board.code_at(*captured) * opponent_sign <= 0:
            return False

    waypoints = move.waypoints
    if len(waypoints) == len(move.captures) + 1 and waypoints[0] == move.from_pos and waypoints[-1] == move.to_pos:
        if not _validate_hops(board, waypoints, move.captures, piece, config):
            return False
    elif not any(_same_chain(candidate, move) for candidate in get_capture_moves(board, move.from_pos, piece, config)):
        return False

    # Maximum capture and king priority also bind optional captures
    legal = filter_captures(board, get_all_capture_moves(board, piece.color, config), config)
    if config.capture.require_maximum and legal and len(move.captures) != len(legal[0].captures):
        return False
    if config.capture.king_priority and not piece.is_king and any(_is_king_move(board, m) for m in legal):
        return False
    return True


def _same_chain(candidate: Move, move: Move) -> bool:
    return candidate.to_pos == move.to_pos and set(candidate.captures) == set(move.captures)


def _validate_hops(
    board: Board,
    waypoints: Sequence[Position],
    captures: Sequence[Position],
    piece: Piece,
    config: VariantConfig,
) -> bool:
    """Replay a capture chain hop by hop on a scratch board."""
    scratch = board.copy()
    scratch.set(*waypoints[0], None)
    current = piece
    chain_ends = False

    for index, captured in enumerate(captures):
        if chain_ends:
            return False
        start, end = waypoints[index], waypoints[index + 1]
        hop = _diagonal(start, end)
        to_captured = _diagonal(start, captured)
        if hop is None or to_captured is None:
            return False
        direction, hop_length = hop
        captured_direction, captured_distance = to_captured
        if captured_direction != direction or captured_distance >= hop_length:
            return False
        if direction not in get_capture_directions(current, config):
            return False

        if can_fly(current, config):
            if hop_length > _reach(current, config, board.size):
                return False
        elif captured_distance != 1 or hop_length != 2:
            return False

        if not _path_is_clear(scratch, start, direction, 1, captured_distance - 1):
            return False
        if not _path_is_clear(scratch, start, direction, captured_distance + 1, hop_length):
            return False

        scratch.set(*captured, None)
        current, chain_ends = _after_landing(current, end, config)

    if not chain_ends and _capture_sequences(scratch, waypoints[-1], current, config):
        logger.debug(f"Rejected incomplete capture chain ending at {tuple(waypoints[-1])}")
        return False
    return True
