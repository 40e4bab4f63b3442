"""
Transposition Table

This module implements a transposition table (TT): a bounded cache of search
results, so a position reached through different move orders is searched
only once per depth.

Keys:
    position_key() combines Board.key() (one byte per dark square) with the
    side to move. The key is exact, so there are no hash collisions to
    detect.

Replacement:
    Least-recently-used. Every lookup hit and every store moves the entry to
    the most recent end; once max_size is exceeded the oldest entry is
    evicted.

References:
    - Transposition Table: https://www.chessprogramming.org/Transposition_Table
"""

from collections import OrderedDict
from enum import Enum
from typing import Dict, Optional, Tuple

from draughts_engine.board.representation import Board, Move, PieceColor

PositionKey = Tuple[bytes, str]


class NodeType(Enum):
    """
    Type of node in search tree.

    This determines how we can use the cached value:
        - EXACT: The exact evaluation (all moves searched)
        - LOWER_BOUND: Beta cutoff occurred (eval is at least this good)
        - UPPER_BOUND: No move raised alpha (eval is at most this good)
    """
    EXACT = 0
    LOWER_BOUND = 1
    UPPER_BOUND = 2


class TTEntry:
    """
    Entry in the transposition table.

    Attributes:
        depth: Remaining depth the value was searched to
        value: Score from the root color's perspective
        node_type: EXACT, LOWER_BOUND, or UPPER_BOUND
        best_move: Best move found in this position
    """

    __slots__ = ("depth", "value", "node_type", "best_move")

    def __init__(
        self,
        depth: int,
        value: float,
        node_type: NodeType,
        best_move: Optional[Move] = None,
    ):
        self.depth = depth
        self.value = value
        self.node_type = node_type
        self.best_move = best_move

    def __repr__(self) -> str:
        return (
            f"TTEntry(depth={self.depth}, value={self.value:.2f}, "
            f"type={self.node_type}, move={self.best_move})"
        )


def position_key(board: Board, color_to_move: PieceColor) -> PositionKey:
    return board.key(), color_to_move.value


class TranspositionTable:
    """
    Bounded LRU cache of search results.

    Attributes:
        max_size: Maximum number of entries
        table: Ordered mapping key → TTEntry, oldest first
    """

    def __init__(self, max_size: int = 1_000_000):
        """
        Initialize transposition table.

        Args:
            max_size: Maximum number of entries

        Raises:
            ValueError: If max_size is not positive
        """
        if max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self.max_size = max_size
        self.table: "OrderedDict[PositionKey, TTEntry]" = OrderedDict()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def store(
        self,
        key: PositionKey,
        depth: int,
        value: float,
        node_type: NodeType,
        best_move: Optional[Move] = None,
    ):
        """
        Store a search result.

        An existing entry searched deeper than depth is kept.

        Args:
            key: position_key() of the position
            depth: Remaining depth this result was searched to
            value: Score
            node_type: EXACT, LOWER_BOUND, or UPPER_BOUND
            best_move: Best move found (optional)
        """
        existing = self.table.get(key)
        if existing is not None:
            self.table.move_to_end(key)
            if depth < existing.depth:
                return

        self.table[key] = TTEntry(depth, value, node_type, best_move)
        self.table.move_to_end(key)

        if len(self.table) > self.max_size:
            self.table.popitem(last=False)
            self.evictions += 1

    def lookup(self, key: PositionKey, depth: int = 0) -> Optional[TTEntry]:
        """
        Look up a position.

        Args:
            key: position_key() of the position
            depth: Requested depth (only use if cached depth >= this)

        Returns:
            TTEntry if found and deep enough, None otherwise
        """
        entry = self.table.get(key)
        if entry is not None and entry.depth >= depth:
            self.table.move_to_end(key)
            self.hits += 1
            return entry

        self.misses += 1
        return None

    def clear(self):
        """Clear all entries from the transposition table."""

        self.table.clear()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def __len__(self) -> int:
        return len(self.table)

    def get_stats(self) -> Dict[str, int | float]:
        """Get statistics about transposition table usage."""

        total_lookups = self.hits + self.misses
        hit_rate = (self.hits / total_lookups * 100) if total_lookups > 0 else 0

        return {
            'entries': len(self.table),
            'hits': self.hits,
            'misses': self.misses,
            'evictions': self.evictions,
            'hit_rate': hit_rate,
        }

    def __repr__(self) -> str:
        stats = self.get_stats()
        return (
            f"TranspositionTable(entries={stats['entries']}, "
            f"hit_rate={stats['hit_rate']:.1f}%)"
        )
