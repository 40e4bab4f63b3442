"""
Terminal and Draw Detection

Decides whether a game is over: a win by elimination or blockade, or a draw
by one of the configured draw rules.

Key Components:
    - DrawState: immutable per-game counters and position history
    - update_draw_state: returns the state after one more move
    - check_draw_conditions: repetition → forty-move → twenty-five-move →
      insufficient material, first match wins
    - check_winner: win check first, draws only when nobody has won

Counting:
    All counters are in plies (half-moves). The forty-move rule fires after
    80 plies without capture *and* without promotion; the twenty-five-move
    rule after 50 plies without capture in a king-only ending.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Union

from draughts_engine.board.representation import Board, Move, PieceColor, PieceType
from draughts_engine.rules.moves import has_any_move
from draughts_engine.rules.schema import VariantConfig

FORTY_MOVE_PLY_LIMIT = 80
TWENTY_FIVE_MOVE_PLY_LIMIT = 50

# Period of a back-and-forth shuffle: two moves by each side.
REPETITION_CYCLE_PLIES = 4


class DrawReason(Enum):
    THREEFOLD_REPETITION = "threefold-repetition"
    FORTY_MOVE_RULE = "forty-move-rule"
    TWENTY_FIVE_MOVE_RULE = "twenty-five-move-rule"
    INSUFFICIENT_MATERIAL = "insufficient-material"
    STALEMATE = "stalemate"


@dataclass(frozen=True)
class DrawResult:
    """
    A drawn game.

    Attributes:
        reason: Which rule ended the game
        explanation: Human-readable description for display
    """

    reason: DrawReason
    explanation: str

    @property
    def type(self) -> str:
        return "draw"


GameOutcome = Union[PieceColor, DrawResult, None]


@dataclass(frozen=True)
class DrawState:
    """
    Draw bookkeeping for one game.

    Never mutated: update_draw_state() returns a new instance, and the
    position_counts mapping of an existing state is never written to.

    Attributes:
        moves_since_capture: Plies since the last capture
        moves_since_promotion: Plies since the last promotion
        board_positions: Serialized positions in the order they occurred
        position_counts: Occurrences of each serialized position
    """

    moves_since_capture: int = 0
    moves_since_promotion: int = 0
    board_positions: Tuple[str, ...] = ()
    position_counts: Dict[str, int] = field(default_factory=dict)


def create_draw_state(board: Optional[Board] = None, current_player: Optional[PieceColor] = None) -> DrawState:
    """
    New draw bookkeeping for a game.

    With a starting board and side to move, that position is counted as its
    first occurrence.
    """
    if board is None or current_player is None:
        return DrawState()
    position = serialize_board(board, current_player)
    return DrawState(board_positions=(position,), position_counts={position: 1})


_CELL_CODES = {0: "--", 1: "rr", 2: "rk", -1: "br", -2: "bk"}


def serialize_board(board: Board, current_player: PieceColor) -> str:
    """
    Encode a position for repetition detection.

    Each cell is color initial + type initial ("rr", "bk") or "--"; rows are
    joined with "|" and the side to move is appended after ":".
    """
    rows = "|".join("".join(_CELL_CODES[int(code)] for code in row) for row in board.grid)
    return f"{rows}:{current_player.value}"


def update_draw_state(
    state: DrawState,
    board: Board,
    move: Move,
    current_player: PieceColor,
    was_promotion: bool,
) -> DrawState:
    """
    Record one more move.

    Args:
        state: State before the move
        board: Board after the move
        move: The move just played
        current_player: Side to move in the new position
        was_promotion: Whether the move crowned a piece

    Returns:
        New DrawState
    """
    position = serialize_board(board, current_player)
    counts = dict(state.position_counts)
    counts[position] = counts.get(position, 0) + 1
    return DrawState(
        moves_since_capture=0 if move.is_capture else state.moves_since_capture + 1,
        moves_since_promotion=0 if was_promotion else state.moves_since_promotion + 1,
        board_positions=state.board_positions + (position,),
        position_counts=counts,
    )


# ============================================================================
# Individual draw rules
# ============================================================================

def _material(board: Board) -> Dict[Tuple[PieceColor, PieceType], int]:
    return {
        (color, piece_type): board.count(color, piece_type)
        for color in PieceColor
        for piece_type in PieceType
    }


def check_threefold_repetition(state: DrawState, config: VariantConfig) -> bool:
    limit = config.draws.repetition_limit
    return any(count >= limit for count in state.position_counts.values())


def check_forty_move_rule(state: DrawState, config: VariantConfig) -> bool:
    if not config.draws.forty_move_rule:
        return False
    return (
        state.moves_since_capture >= FORTY_MOVE_PLY_LIMIT
        and state.moves_since_promotion >= FORTY_MOVE_PLY_LIMIT
    )


def is_king_endgame(board: Board) -> bool:
    """Both sides have kings and no regular pieces remain."""
    material = _material(board)
    return (
        material[(PieceColor.RED, PieceType.REGULAR)] == 0
        and material[(PieceColor.BLACK, PieceType.REGULAR)] == 0
        and material[(PieceColor.RED, PieceType.KING)] > 0
        and material[(PieceColor.BLACK, PieceType.KING)] > 0
    )


def check_twenty_five_move_rule(board: Board, state: DrawState, config: VariantConfig) -> bool:
    if not config.draws.twenty_five_move_rule:
        return False
    return is_king_endgame(board) and state.moves_since_capture >= TWENTY_FIVE_MOVE_PLY_LIMIT


def check_insufficient_material(board: Board, config: VariantConfig) -> bool:
    """
    Pure-king endings that cannot be forced: 1v1, 2v1, and 3v1 on boards of
    size 10 or more. Any regular piece on the board disqualifies the rule.
    """
    if not config.draws.insufficient_material:
        return False
    material = _material(board)
    if material[(PieceColor.RED, PieceType.REGULAR)] or material[(PieceColor.BLACK, PieceType.REGULAR)]:
        return False

    kings = sorted(
        (material[(PieceColor.RED, PieceType.KING)], material[(PieceColor.BLACK, PieceType.KING)])
    )
    if kings in ([1, 1], [1, 2]):
        return True
    return config.board.size >= 10 and kings == [1, 3]


def _insufficient_material_explanation(board: Board) -> str:
    explanation = "Neither player has sufficient pieces to force a win. "
    total = board.count(piece_type=PieceType.KING)
    if total == 2:
        return explanation + "With only one king each, neither side can force a capture."
    if total == 3:
        return explanation + "Two kings cannot force a win against one king."
    return explanation + "The remaining kings cannot force a win."


def check_draw_conditions(board: Board, state: DrawState, config: VariantConfig) -> Optional[DrawResult]:
    """
    Evaluate the draw rules in their fixed order.

    Returns:
        DrawResult for the first rule satisfied, or None
    """
    if check_threefold_repetition(state, config):
        limit = config.draws.repetition_limit
        return DrawResult(
            DrawReason.THREEFOLD_REPETITION,
            f"The same position has occurred {limit} times. "
            "This results in a draw by repetition.",
        )
    if check_forty_move_rule(state, config):
        return DrawResult(
            DrawReason.FORTY_MOVE_RULE,
            "Neither player has captured a piece or promoted a checker in the last 40 moves. "
            "This results in a draw by the forty-move rule.",
        )
    if check_twenty_five_move_rule(board, state, config):
        return DrawResult(
            DrawReason.TWENTY_FIVE_MOVE_RULE,
            "In this king-only endgame, no captures have occurred in the last 25 moves. "
            "This results in a draw by the twenty-five-move rule.",
        )
    if check_insufficient_material(board, config):
        return DrawResult(DrawReason.INSUFFICIENT_MATERIAL, _insufficient_material_explanation(board))
    return None


# ============================================================================
# Game result
# ============================================================================

def check_winner(
    board: Board,
    config: VariantConfig,
    draw_state: Optional[DrawState] = None,
) -> GameOutcome:
    """
    Decide the game result.

    A side with no pieces or no legal moves loses; this takes precedence over
    every draw rule. Without a draw_state only the position-based draw rules
    (insufficient material) can apply.

    Returns:
        Winning PieceColor, DrawResult, or None if the game goes on
    """
    for color in (PieceColor.RED, PieceColor.BLACK):
        if board.count(color) == 0 or not has_any_move(board, color, config):
            return color.opponent
    return check_draw_conditions(board, draw_state or create_draw_state(), config)


def _trailing_quiet_plies(move_history: Sequence[Move]) -> int:
    count = 0
    for move in reversed(move_history):
        if move.is_capture:
            break
        count += 1
    return count


def _is_repeating(move_history: Sequence[Move], limit: int) -> bool:
    """
    Back-and-forth shuffling detected from moves alone.

    The current position has occurred `limit` times when the last
    4 * (limit - 1) plies are quiet and repeat with a period of 4 plies.
    """
    window = REPETITION_CYCLE_PLIES * (limit - 1)
    if window == 0 or len(move_history) < window:
        return False
    recent: List[Move] = list(move_history[-window:])
    if any(move.is_capture for move in recent):
        return False
    first_cycle = recent[:REPETITION_CYCLE_PLIES]
    for index, move in enumerate(recent):
        reference = first_cycle[index % REPETITION_CYCLE_PLIES]
        if (move.from_pos, move.to_pos) != (reference.from_pos, reference.to_pos):
            return False
    for index in range(2):
        ply, reply = first_cycle[index], first_cycle[index + 2]
        if (ply.from_pos, ply.to_pos) != (reply.to_pos, reply.from_pos):
            return False
    return True


def check_history_draw(
    board: Board,
    move_history: Sequence[Move],
    config: VariantConfig,
    current_player: Optional[PieceColor] = None,
) -> Optional[DrawResult]:
    """
    Draw check for callers that only keep a move list instead of a DrawState.

    Promotions are not visible in a plain move list, so the forty-move rule
    counts quiet plies only. With current_player given and stale_mate
    enabled, a side to move without legal moves is reported as a stalemate.
    """
    draws = config.draws
    if draws.stale_mate and current_player is not None and board.count(current_player) > 0:
        if not has_any_move(board, current_player, config):
            return DrawResult(
                DrawReason.STALEMATE,
                f"{current_player.value.capitalize()} has no legal moves. "
                "This variant scores a blocked position as a draw.",
            )

    if _is_repeating(move_history, draws.repetition_limit):
        return DrawResult(
            DrawReason.THREEFOLD_REPETITION,
            f"The same position has occurred {draws.repetition_limit} times. "
            "This results in a draw by repetition.",
        )

    quiet = _trailing_quiet_plies(move_history)
    state = DrawState(moves_since_capture=quiet, moves_since_promotion=quiet)
    if check_forty_move_rule(state, config):
        return DrawResult(
            DrawReason.FORTY_MOVE_RULE,
            "No piece has been captured in the last 40 moves. "
            "This results in a draw by the forty-move rule.",
        )
    if check_twenty_five_move_rule(board, state, config):
        return DrawResult(
            DrawReason.TWENTY_FIVE_MOVE_RULE,
            "In this king-only endgame, no captures have occurred in the last 25 moves. "
            "This results in a draw by the twenty-five-move rule.",
        )
    if check_insufficient_material(board, config):
        return DrawResult(DrawReason.INSUFFICIENT_MATERIAL, _insufficient_material_explanation(board))
    return None
