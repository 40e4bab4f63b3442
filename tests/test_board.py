"""
Unit Tests for Board Representation

Tests for pieces, positions, moves and the numpy-backed board:
    - Grid encoding of pieces
    - Bounds-checked accessors (off-board reads and writes)
    - Copy independence and canonical keys
    - Move serialization in the {"from", "to", "captures", "path"} shape
"""

import numpy as np
import pytest

from draughts_engine.board import Board, Move, Piece, PieceColor, PieceType, Position, is_dark_square


RED = Piece(PieceColor.RED)
RED_KING = Piece(PieceColor.RED, PieceType.KING)
BLACK = Piece(PieceColor.BLACK)
BLACK_KING = Piece(PieceColor.BLACK, PieceType.KING)


class TestPieces:
    """Tests for PieceColor and Piece."""

    def test_opponent(self):
        assert PieceColor.RED.opponent is PieceColor.BLACK
        assert PieceColor.BLACK.opponent is PieceColor.RED

    def test_forward_direction(self):
        """Red moves toward row 0, black toward the last row."""
        assert PieceColor.RED.forward == -1
        assert PieceColor.BLACK.forward == 1

    def test_codes(self):
        assert RED.to_code() == 1
        assert RED_KING.to_code() == 2
        assert BLACK.to_code() == -1
        assert BLACK_KING.to_code() == -2
        assert Piece.from_code(0) is None
        assert Piece.from_code(-2) == BLACK_KING

    def test_promoted_returns_new_piece(self):
        king = RED.promoted()

        assert king.is_king, "Promoted piece should be a king"
        assert not RED.is_king, "Original piece must not change"
        assert king.color is PieceColor.RED

    def test_piece_is_immutable(self):
        with pytest.raises(AttributeError):
            RED.piece_type = PieceType.KING

    def test_dict_form(self):
        assert BLACK_KING.to_dict() == {"color": "black", "type": "king"}
        assert Piece.from_dict({"color": "red", "type": "regular"}) == RED


class TestPosition:
    """Tests for Position and dark squares."""

    def test_offset(self):
        assert Position(5, 2).offset(-1, 1) == Position(4, 3)
        assert Position(5, 2).offset(-1, 1, distance=3) == Position(2, 5)

    def test_is_tuple(self):
        row, col = Position(3, 4)
        assert (row, col) == (3, 4)
        assert Position(3, 4) == (3, 4)

    def test_dark_squares(self):
        assert is_dark_square(0, 1)
        assert is_dark_square(7, 6)
        assert not is_dark_square(0, 0)
        assert not is_dark_square(4, 4)


class TestMove:
    """Tests for Move."""

    def test_simple_move(self):
        move = Move(Position(5, 2), Position(4, 3))

        assert not move.is_capture
        assert move.waypoints == (Position(5, 2), Position(4, 3))
        assert str(move) == "(5,2)-(4,3)"

    def test_multi_jump(self):
        move = Move(
            Position(5, 0),
            Position(1, 4),
            captures=(Position(4, 1), Position(2, 3)),
            path=(Position(5, 0), Position(3, 2), Position(1, 4)),
        )

        assert move.is_capture
        assert len(move.waypoints) == 3
        assert str(move) == "(5,0)x(3,2)x(1,4)"

    def test_dict_form(self):
        move = Move(
            Position(5, 0),
            Position(3, 2),
            captures=(Position(4, 1),),
            path=(Position(5, 0), Position(3, 2)),
        )

        data = move.to_dict()

        assert data["from"] == {"row": 5, "col": 0}
        assert data["to"] == {"row": 3, "col": 2}
        assert data["captures"] == [{"row": 4, "col": 1}]
        assert Move.from_dict(data) == move

    def test_simple_move_dict_omits_captures(self):
        data = Move(Position(5, 2), Position(4, 3)).to_dict()

        assert "captures" not in data
        assert "path" not in data

    def test_moves_are_hashable(self):
        first = Move(Position(5, 2), Position(4, 3))
        second = Move(Position(5, 2), Position(4, 3))

        assert len({first, second}) == 1


class TestBoard:
    """Tests for Board."""

    @pytest.fixture
    def board(self):
        board = Board.empty(8)
        board.set(5, 2, RED)
        board.set(2, 3, BLACK_KING)
        return board

    def test_empty_board(self):
        board = Board.empty(10)

        assert board.size == 10
        assert board.grid.shape == (10, 10)
        assert board.grid.dtype == np.int8
        assert board.count() == 0

    def test_get_and_set(self, board):
        assert board.get(5, 2) == RED
        assert board.get(2, 3) == BLACK_KING
        assert board.get(4, 3) is None
        assert board.is_empty(4, 3)
        assert not board.is_empty(5, 2)

    def test_out_of_range_reads(self, board):
        assert board.get(-1, 0) is None
        assert board.get(8, 1) is None
        assert board.code_at(0, 8) == 0
        assert not board.is_empty(-1, -1), "Off-board squares are not empty landing squares"

    def test_out_of_range_write_is_ignored(self, board):
        before = board.copy()

        board.set(8, 8, RED)
        board.set(-1, 3, BLACK)

        assert board == before, "Off-board writes must be a no-op"

    def test_copy_is_independent(self, board):
        clone = board.copy()
        clone.set(5, 2, None)

        assert board.get(5, 2) == RED, "Modifying the copy must not touch the original"
        assert clone.get(5, 2) is None

    def test_count(self, board):
        board.set(6, 1, RED_KING)

        assert board.count() == 3
        assert board.count(PieceColor.RED) == 2
        assert board.count(PieceColor.BLACK) == 1
        assert board.count(PieceColor.RED, PieceType.KING) == 1
        assert board.count(piece_type=PieceType.KING) == 2

    def test_pieces_row_major(self, board):
        pieces = list(board.pieces())

        assert pieces == [(Position(2, 3), BLACK_KING), (Position(5, 2), RED)]
        assert list(board.pieces(PieceColor.RED)) == [(Position(5, 2), RED)]

    def test_key_identifies_contents(self, board):
        same = Board.empty(8)
        same.set(5, 2, RED)
        same.set(2, 3, BLACK_KING)

        assert board.key() == same.key()
        assert len(board.key()) == 32, "One byte per dark square on 8x8"

        same.set(5, 2, RED_KING)
        assert board.key() != same.key(), "Promotion must change the key"

    def test_rows_conversion(self, board):
        rows = board.to_rows()

        assert rows[5][2] == RED
        assert rows[0][0] is None
        assert Board.from_rows(rows) == board

    def test_grid_shape_checked(self):
        with pytest.raises(ValueError):
            Board(8, np.zeros((6, 6), dtype=np.int8))

    def test_str(self, board):
        lines = str(board).splitlines()

        assert len(lines) == 8
        assert lines[5].split()[2] == "r"
        assert lines[2].split()[3] == "B"
