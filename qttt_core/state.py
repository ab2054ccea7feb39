from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .board import SIZE, Board
from .moves import BoardId, Mark, Placement

Revealed = Tuple[BoardId, int, int]


class MatchStatus(str, Enum):
    WAITING_TO_START = 'WAITING_TO_START'
    IN_PROGRESS = 'IN_PROGRESS'
    OVER = 'OVER'


def _sorted_revealed(items) -> Tuple[Revealed, ...]:
    return tuple(sorted(set(items), key=lambda t: (t[0].value, t[1], t[2])))


@dataclass(frozen=True)
class MatchState:
    """Immutable snapshot of a whole match: seats, scores, global log, visibility and the three boards."""
    status: MatchStatus = MatchStatus.WAITING_TO_START
    x: Optional[str] = None
    o: Optional[str] = None
    winner: Optional[str] = None
    x_score: int = 0
    o_score: int = 0
    moves: Tuple[Placement, ...] = ()
    turn: int = 0  # even: X to move, odd: O to move
    revealed: Tuple[Revealed, ...] = ()  # sorted for consistent equality
    board_a: Board = field(default_factory=lambda: Board(BoardId.A))
    board_b: Board = field(default_factory=lambda: Board(BoardId.B))
    board_c: Board = field(default_factory=lambda: Board(BoardId.C))

    def board(self, board_id: BoardId) -> Board:
        if board_id is BoardId.A:
            return self.board_a
        if board_id is BoardId.B:
            return self.board_b
        return self.board_c

    def boards(self) -> Tuple[Board, Board, Board]:
        return (self.board_a, self.board_b, self.board_c)

    def with_board(self, board: Board) -> 'MatchState':
        if board.board_id is BoardId.A:
            return replace(self, board_a=board)
        if board.board_id is BoardId.B:
            return replace(self, board_b=board)
        return replace(self, board_c=board)

    def is_visible(self, board_id: BoardId, r: int, c: int) -> bool:
        return (board_id, r, c) in set(self.revealed)

    def with_revealed(self, board_id: BoardId, r: int, c: int) -> 'MatchState':
        return replace(self, revealed=_sorted_revealed(self.revealed + ((board_id, r, c),)))

    def visibility(self) -> Dict[str, List[List[bool]]]:
        """Per-board 3x3 grid of publicly visible cells."""
        seen = set(self.revealed)
        return {
            b.value: [[(b, r, c) in seen for c in range(SIZE)] for r in range(SIZE)]
            for b in BoardId
        }

    def mark_of(self, player: str) -> Optional[Mark]:
        if player is not None and player == self.x:
            return 'X'
        if player is not None and player == self.o:
            return 'O'
        return None

    def player_for(self, mark: Mark) -> Optional[str]:
        return self.x if mark == 'X' else self.o

    def is_seated(self, player: str) -> bool:
        return self.mark_of(player) is not None

    def mark_to_move(self) -> Mark:
        """Mark whose turn it is by global turn parity."""
        return 'X' if self.turn % 2 == 0 else 'O'
