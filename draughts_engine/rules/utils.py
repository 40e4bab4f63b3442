"""
Derived configuration values.

Small pure helpers that compute values implied by a VariantConfig rather
than stored in it.
"""

from typing import Dict, List, Tuple

from draughts_engine.board.representation import PieceColor, Position, is_dark_square
from draughts_engine.rules.schema import VariantConfig


def get_board_square_count(config: VariantConfig) -> int:
    return config.board.size * config.board.size


def get_total_starting_pieces(config: VariantConfig) -> int:
    """Pieces per player produced by the starting rows (half of each row)."""
    return len(config.board.starting_rows.red) * (config.board.size // 2)


def get_promotion_rows(config: VariantConfig) -> Dict[PieceColor, Tuple[int, ...]]:
    """
    Promotion rows per color.

    Defaults to the far edge: row 0 for red, the last row for black. Custom
    rows replace the default for the color they are given for.
    """
    custom = config.promotion.custom_rows
    red = custom.red if custom is not None and custom.red else (0,)
    black = custom.black if custom is not None and custom.black else (config.board.size - 1,)
    return {PieceColor.RED: tuple(red), PieceColor.BLACK: tuple(black)}


def is_promotion_row(config: VariantConfig, row: int, color: PieceColor) -> bool:
    return row in get_promotion_rows(config)[color]


def get_valid_starting_squares(config: VariantConfig) -> List[Position]:
    """Every dark square of the board, row-major."""
    size = config.board.size
    return [
        Position(row, col)
        for row in range(size)
        for col in range(size)
        if is_dark_square(row, col)
    ]


def get_starting_rows(config: VariantConfig, color: PieceColor) -> Tuple[int, ...]:
    if color is PieceColor.RED:
        return config.board.starting_rows.red
    return config.board.starting_rows.black
