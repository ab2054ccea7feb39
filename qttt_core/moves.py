from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

Mark = str  # 'X' or 'O'

MARKS = ('X', 'O')


class BoardId(str, Enum):
    """The three fixed board labels."""
    A = 'A'
    B = 'B'
    C = 'C'


def other_mark(mark: Mark) -> Mark:
    return 'O' if mark == 'X' else 'X'


def parse_board_id(value) -> BoardId:
    """Accepts a BoardId or its label in either case."""
    if isinstance(value, BoardId):
        return value
    try:
        return BoardId(str(value).strip().upper())
    except ValueError:
        raise ValueError(f'Unknown board: {value!r}') from None


@dataclass(frozen=True)
class Placement:
    """A real mark placed (or attempted, for a collision) on a board cell."""
    board: BoardId
    row: int
    col: int
    mark: Mark

    def to_json(self) -> dict:
        return {'board': self.board.value, 'row': self.row, 'col': self.col, 'mark': self.mark}


@dataclass(frozen=True)
class Pass:
    """A consumed turn on a board that did not receive a real mark."""
    board: BoardId
    mark: Mark


@dataclass(frozen=True)
class MoveRequest:
    """A move as submitted by a caller. The mark is resolved from the player's seat."""
    player: str
    board: BoardId
    row: int
    col: int
