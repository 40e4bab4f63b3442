"""
Board Representation

This module defines the value types every other part of the engine works
with: pieces, positions, moves, and the board grid itself.

Grid Encoding:
    The board is an N*N numpy int8 array (6 <= N <= 12).

     0: empty square
     1: red regular piece      -1: black regular piece
     2: red king               -2: black king

    Positive values are red, negative values are black, and the absolute
    value is the piece type. This keeps material and position counting
    vectorizable (see evaluation/classical.py).

Board Orientation:
    - Row 0 is the top of the board, where black starts
    - Red moves toward decreasing rows, black toward increasing rows
    - Only dark squares ((row + col) % 2 == 1) are ever occupied

Copy-on-write:
    Engine operations never mutate a board they are given. Board.copy() is a
    single array copy, which is what the move generator and applier use to
    produce independent successor states.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

import numpy as np


class PieceColor(Enum):
    """Side to move / owner of a piece."""

    RED = "red"
    BLACK = "black"

    @property
    def opponent(self) -> "PieceColor":
        return PieceColor.BLACK if self is PieceColor.RED else PieceColor.RED

    @property
    def sign(self) -> int:
        """Sign of this color's pieces in the grid encoding."""
        return 1 if self is PieceColor.RED else -1

    @property
    def forward(self) -> int:
        """Row delta of a forward step for this color."""
        return -1 if self is PieceColor.RED else 1


class PieceType(Enum):
    REGULAR = "regular"
    KING = "king"


@dataclass(frozen=True)
class Piece:
    """
    A single piece. Immutable: promotion replaces the piece.

    Attributes:
        color: Owner of the piece
        piece_type: REGULAR or KING
    """

    color: PieceColor
    piece_type: PieceType = PieceType.REGULAR

    @property
    def is_king(self) -> bool:
        return self.piece_type is PieceType.KING

    def promoted(self) -> "Piece":
        return Piece(self.color, PieceType.KING)

    def to_code(self) -> int:
        magnitude = 2 if self.is_king else 1
        return magnitude * self.color.sign

    @classmethod
    def from_code(cls, code: int) -> Optional["Piece"]:
        if code == 0:
            return None
        color = PieceColor.RED if code > 0 else PieceColor.BLACK
        piece_type = PieceType.KING if abs(code) == 2 else PieceType.REGULAR
        return cls(color, piece_type)

    def to_dict(self) -> Dict[str, str]:
        return {"color": self.color.value, "type": self.piece_type.value}

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "Piece":
        return cls(PieceColor(data["color"]), PieceType(data["type"]))


EMPTY = 0
RED_REGULAR = Piece(PieceColor.RED).to_code()
RED_KING = Piece(PieceColor.RED, PieceType.KING).to_code()
BLACK_REGULAR = Piece(PieceColor.BLACK).to_code()
BLACK_KING = Piece(PieceColor.BLACK, PieceType.KING).to_code()


class Position(NamedTuple):
    """Zero-indexed (row, col) grid coordinate."""

    row: int
    col: int

    def offset(self, d_row: int, d_col: int, distance: int = 1) -> "Position":
        return Position(self.row + d_row * distance, self.col + d_col * distance)

    def to_dict(self) -> Dict[str, int]:
        return {"row": self.row, "col": self.col}

    @classmethod
    def from_dict(cls, data: Dict[str, int]) -> "Position":
        return cls(int(data["row"]), int(data["col"]))


def is_dark_square(row: int, col: int) -> bool:
    """Playable squares satisfy (row + col) % 2 == 1."""
    return (row + col) % 2 == 1


@dataclass(frozen=True)
class Move:
    """
    A move from one square to another.

    Attributes:
        from_pos: Starting square
        to_pos: Final landing square
        captures: Jumped-over enemy squares, in capture order
        path: Landing squares including from_pos and to_pos (multi-jumps only)
    """

    from_pos: Position
    to_pos: Position
    captures: Tuple[Position, ...] = field(default_factory=tuple)
    path: Tuple[Position, ...] = field(default_factory=tuple)

    @property
    def is_capture(self) -> bool:
        return len(self.captures) > 0

    @property
    def waypoints(self) -> Tuple[Position, ...]:
        """Every landing square of the move, starting with from_pos."""
        if self.path:
            return self.path
        return (self.from_pos, self.to_pos)

    def to_dict(self) -> Dict:
        data: Dict = {"from": self.from_pos.to_dict(), "to": self.to_pos.to_dict()}
        if self.captures:
            data["captures"] = [p.to_dict() for p in self.captures]
        if self.path:
            data["path"] = [p.to_dict() for p in self.path]
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "Move":
        return cls(
            from_pos=Position.from_dict(data["from"]),
            to_pos=Position.from_dict(data["to"]),
            captures=tuple(Position.from_dict(p) for p in data.get("captures") or ()),
            path=tuple(Position.from_dict(p) for p in data.get("path") or ()),
        )

    def __str__(self) -> str:
        squares = self.waypoints
        separator = "x" if self.is_capture else "-"
        return separator.join(f"({p.row},{p.col})" for p in squares)


class Board:
    """
    Square draughts board backed by a numpy int8 grid.

    All reads and writes go through bounds-checked accessors: reading off the
    board yields None and writing off the board is a no-op, so neighbour
    probes near the edges need no special casing.

    Attributes:
        size: Number of rows (and columns)
        grid: (size, size) int8 array in the encoding described above
    """

    __slots__ = ("size", "grid")

    def __init__(self, size: int, grid: Optional[np.ndarray] = None):
        self.size = size
        if grid is None:
            grid = np.zeros((size, size), dtype=np.int8)
        elif grid.shape != (size, size):
            raise ValueError(f"grid shape {grid.shape} does not match size {size}")
        self.grid = grid

    @classmethod
    def empty(cls, size: int) -> "Board":
        return cls(size)

    @classmethod
    def from_rows(cls, rows: List[List[Optional[Piece]]]) -> "Board":
        """Build a board from nested lists of Piece / None (row-major)."""
        size = len(rows)
        board = cls(size)
        for row, cells in enumerate(rows):
            for col, piece in enumerate(cells):
                if piece is not None:
                    board.grid[row, col] = piece.to_code()
        return board

    def to_rows(self) -> List[List[Optional[Piece]]]:
        return [[Piece.from_code(int(code)) for code in row] for row in self.grid]

    def is_valid_square(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, row: int, col: int) -> Optional[Piece]:
        if not self.is_valid_square(row, col):
            return None
        return Piece.from_code(int(self.grid[row, col]))

    def code_at(self, row: int, col: int) -> int:
        if not self.is_valid_square(row, col):
            return EMPTY
        return int(self.grid[row, col])

    def set(self, row: int, col: int, piece: Optional[Piece]) -> None:
        if not self.is_valid_square(row, col):
            return
        self.grid[row, col] = piece.to_code() if piece is not None else EMPTY

    def is_empty(self, row: int, col: int) -> bool:
        return self.is_valid_square(row, col) and self.grid[row, col] == EMPTY

    def copy(self) -> "Board":
        return Board(self.size, self.grid.copy())

    def pieces(self, color: Optional[PieceColor] = None) -> Iterator[Tuple[Position, Piece]]:
        """Yield (position, piece) for every occupied square, row-major."""
        if color is None:
            rows, cols = np.nonzero(self.grid)
        elif color is PieceColor.RED:
            rows, cols = np.nonzero(self.grid > 0)
        else:
            rows, cols = np.nonzero(self.grid < 0)
        for row, col in zip(rows.tolist(), cols.tolist()):
            yield Position(row, col), Piece.from_code(int(self.grid[row, col]))

    def count(
        self,
        color: Optional[PieceColor] = None,
        piece_type: Optional[PieceType] = None,
    ) -> int:
        """Count pieces, optionally filtered by color and/or type."""
        mask = self.grid != EMPTY
        if color is not None:
            mask &= (self.grid * color.sign) > 0
        if piece_type is not None:
            magnitude = 2 if piece_type is PieceType.KING else 1
            mask &= np.abs(self.grid) == magnitude
        return int(np.count_nonzero(mask))

    def key(self) -> bytes:
        """
        Compact canonical encoding of the board contents.

        One byte per dark square, row-major. Two boards have the same key iff
        they hold the same pieces on the same squares.
        """
        return self.grid[_dark_mask(self.size)].tobytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.grid, other.grid)

    def __str__(self) -> str:
        symbols = {EMPTY: ".", RED_REGULAR: "r", RED_KING: "R", BLACK_REGULAR: "b", BLACK_KING: "B"}
        return "\n".join(
            " ".join(symbols[int(code)] for code in row) for row in self.grid
        )

    def __repr__(self) -> str:
        return (
            f"Board(size={self.size}, red={self.count(PieceColor.RED)}, "
            f"black={self.count(PieceColor.BLACK)})"
        )


_DARK_MASKS: Dict[int, np.ndarray] = {}


def _dark_mask(size: int) -> np.ndarray:
    mask = _DARK_MASKS.get(size)
    if mask is None:
        rows, cols = np.indices((size, size))
        mask = (rows + cols) % 2 == 1
        _DARK_MASKS[size] = mask
    return mask
