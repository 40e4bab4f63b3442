"""
GameRules Façade

Single entry point that binds one VariantConfig to the rules functions, for
UI, storage and network layers that should not thread the configuration
through every call themselves.

Example:
    rules = GameRules("international")
    rules.initialize()
    board = rules.create_initial_board()
    moves = rules.find_valid_moves(board, PieceColor.RED)
    board = rules.make_move(board, moves[0])
"""

import logging
from typing import List, Optional, Sequence, Tuple

from draughts_engine.board.representation import (
    Board,
    Move,
    Piece,
    PieceColor,
    PieceType,
    Position,
    is_dark_square,
)
from draughts_engine.rules import draws, moves
from draughts_engine.rules.draws import DrawResult, DrawState, GameOutcome
from draughts_engine.rules.loader import VariantRegistry, default_registry
from draughts_engine.rules.schema import VariantConfig
from draughts_engine.rules.utils import get_promotion_rows, get_starting_rows

logger = logging.getLogger(__name__)


class GameRules:
    """
    Rules of one variant.

    Attributes:
        variant_name: Name the configuration is loaded under
    """

    def __init__(
        self,
        variant_name: str,
        config: Optional[VariantConfig] = None,
        registry: Optional[VariantRegistry] = None,
    ):
        """
        Args:
            variant_name: Built-in or registered variant name
            config: Explicit configuration; skips the registry lookup
            registry: Registry to resolve variant_name from (default: shared)
        """
        self.variant_name = variant_name
        self._registry = registry or default_registry
        self._config: Optional[VariantConfig] = config

    def initialize(self) -> "GameRules":
        """
        Load the configuration.

        Raises:
            UnknownVariantError: If the variant is not known
            InvalidConfigError: If the configuration fails validation
        """
        if self._config is None:
            self._config = self._registry.load_variant(self.variant_name)
            logger.debug(f"GameRules initialized for '{self.variant_name}'")
        return self

    @property
    def config(self) -> VariantConfig:
        if self._config is None:
            raise RuntimeError(f"GameRules for '{self.variant_name}' used before initialize()")
        return self._config

    @property
    def name(self) -> str:
        return self.config.metadata.name

    @property
    def display_name(self) -> str:
        return self.config.metadata.display_name

    @property
    def description(self) -> str:
        return self.config.metadata.description

    # ------------------------------------------------------------------
    # Board
    # ------------------------------------------------------------------

    def create_initial_board(self) -> Board:
        """Place regular pieces on every dark square of each side's starting rows."""
        size = self.config.board.size
        board = Board.empty(size)
        for color in (PieceColor.BLACK, PieceColor.RED):
            for row in get_starting_rows(self.config, color):
                for col in range(size):
                    if is_dark_square(row, col):
                        board.set(row, col, Piece(color, PieceType.REGULAR))
        return board

    def is_valid_square(self, row: int, col: int) -> bool:
        size = self.config.board.size
        return 0 <= row < size and 0 <= col < size

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    def get_valid_directions(self, piece: Piece) -> Tuple[Tuple[int, int], ...]:
        return moves.get_valid_directions(piece, self.config)

    def find_valid_moves(self, board: Board, color: PieceColor) -> List[Move]:
        return moves.find_valid_moves(board, color, self.config)

    def get_capture_moves(self, board: Board, position: Position) -> List[Move]:
        piece = board.get(*position)
        if piece is None:
            return []
        return moves.get_capture_moves(board, position, piece, self.config)

    def validate_move(self, board: Board, move: Move, player: Optional[PieceColor] = None) -> bool:
        return moves.validate_move(board, move, self.config, player)

    def is_maximum_capture_move(self, board: Board, move: Move) -> bool:
        return moves.is_maximum_capture_move(board, move, self.config)

    def make_move(self, board: Board, move: Move) -> Board:
        return moves.make_move(board, move, self.config)

    def is_promoting_move(self, board: Board, move: Move) -> bool:
        piece = board.get(*move.from_pos)
        return piece is not None and moves.is_promoting_move(piece, move, self.config)

    # ------------------------------------------------------------------
    # Game end
    # ------------------------------------------------------------------

    def check_winner(self, board: Board, draw_state: Optional[DrawState] = None) -> GameOutcome:
        return draws.check_winner(board, self.config, draw_state)

    def check_draw_condition(
        self,
        board: Board,
        move_history: Sequence[Move],
        current_player: Optional[PieceColor] = None,
    ) -> Optional[DrawResult]:
        return draws.check_history_draw(board, move_history, self.config, current_player)

    # ------------------------------------------------------------------
    # Rule introspection
    # ------------------------------------------------------------------

    def can_capture_backward(self, piece: Piece) -> bool:
        backward_row = -piece.color.forward
        return any(d_row == backward_row for d_row, _ in moves.get_capture_directions(piece, self.config))

    def can_fly_as_king(self) -> bool:
        return self.config.movement.kings.can_fly

    def is_mandatory_capture(self) -> bool:
        return self.config.capture.mandatory

    def requires_maximum_capture(self) -> bool:
        return self.config.capture.require_maximum

    def requires_king_priority(self) -> bool:
        return self.config.capture.king_priority

    def get_board_size(self) -> int:
        return self.config.board.size

    def get_piece_count(self) -> int:
        return self.config.board.piece_count

    def get_promotion_row(self, color: PieceColor) -> int:
        """First promotion row of a color."""
        return get_promotion_rows(self.config)[color][0]

    def should_promote(self, piece: Piece, to_row: int) -> bool:
        if piece.is_king:
            return False
        return to_row in get_promotion_rows(self.config)[piece.color]

    def enforce_touch(self) -> bool:
        tournament = self.config.tournament
        return tournament is not None and tournament.touch_move

    def allow_undo(self) -> bool:
        return not self.enforce_touch()

    def requires_notation(self) -> bool:
        tournament = self.config.tournament
        return tournament is not None and tournament.notation.required

    def get_40_move_rule(self) -> bool:
        return self.config.draws.forty_move_rule

    def get_repetition_limit(self) -> int:
        return self.config.draws.repetition_limit

    def __repr__(self) -> str:
        state = "initialized" if self._config is not None else "uninitialized"
        return f"GameRules(variant='{self.variant_name}', {state})"


def create_game_rules(variant_name: str, config: Optional[VariantConfig] = None) -> GameRules:
    """Build and initialize a GameRules in one call."""
    return GameRules(variant_name, config).initialize()
