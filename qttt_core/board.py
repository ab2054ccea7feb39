from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union

from .errors import IllegalTarget
from .moves import BoardId, Mark, Pass, Placement, other_mark

Coord = Tuple[int, int]
Cell = Optional[Mark]  # None, 'X' or 'O'
LogEntry = Union[Placement, Pass]

SIZE = 3

WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


class BoardStatus(str, Enum):
    IN_PROGRESS = 'IN_PROGRESS'
    WON_X = 'WON_X'
    WON_O = 'WON_O'
    DRAWN = 'DRAWN'


EMPTY_GRID: Tuple[Cell, ...] = (None,) * (SIZE * SIZE)


@dataclass(frozen=True)
class Board:
    """One 3x3 grid together with its own log, terminal status and seat bookkeeping."""
    board_id: BoardId
    grid: Tuple[Cell, ...] = EMPTY_GRID  # row-major, length 9
    log: Tuple[LogEntry, ...] = ()
    status: BoardStatus = BoardStatus.IN_PROGRESS
    x: Optional[str] = None
    o: Optional[str] = None

    def index(self, r: int, c: int) -> int:
        """Calculates the 1D index for a given row and column."""
        return r * SIZE + c

    def at(self, r: int, c: int) -> Cell:
        """Gets the mark at a given row and column (None when empty)."""
        return self.grid[self.index(r, c)]

    def coords(self) -> Iterable[Coord]:
        """Iterates over all coordinates on the board."""
        for r in range(SIZE):
            for c in range(SIZE):
                yield (r, c)

    def rows(self) -> List[List[Cell]]:
        """Returns a fresh nested-list copy of the grid."""
        return [list(self.grid[r * SIZE:(r + 1) * SIZE]) for r in range(SIZE)]

    @property
    def is_terminal(self) -> bool:
        return self.status is not BoardStatus.IN_PROGRESS

    @property
    def winner(self) -> Optional[Mark]:
        if self.status is BoardStatus.WON_X:
            return 'X'
        if self.status is BoardStatus.WON_O:
            return 'O'
        return None

    def real_moves(self) -> List[Placement]:
        """Placements in the local log, passes excluded."""
        return [m for m in self.log if isinstance(m, Placement)]


def in_bounds(r: int, c: int) -> bool:
    return 0 <= r < SIZE and 0 <= c < SIZE


def check_line(grid: Tuple[Cell, ...]) -> Tuple[Optional[str], Optional[Tuple[int, int, int]]]:
    """Returns (mark, line) for a three-in-a-row, ('D', None) for a full grid, else (None, None)."""
    for a, b, c in WIN_LINES:
        if grid[a] is not None and grid[a] == grid[b] == grid[c]:
            return grid[a], (a, b, c)
    if all(cell is not None for cell in grid):
        return 'D', None
    return None, None


def _status_for(grid: Tuple[Cell, ...]) -> BoardStatus:
    result, _ = check_line(grid)
    if result == 'X':
        return BoardStatus.WON_X
    if result == 'O':
        return BoardStatus.WON_O
    if result == 'D':
        return BoardStatus.DRAWN
    return BoardStatus.IN_PROGRESS


def apply_real_move(board: Board, r: int, c: int, mark: Mark) -> Board:
    """Places a mark on an empty cell of a live board and returns the new board."""
    if board.is_terminal:
        raise IllegalTarget(f"board {board.board_id.value} is already decided")
    if not in_bounds(r, c):
        raise IllegalTarget(f"({r}, {c}) is outside the board")
    if board.at(r, c) is not None:
        raise IllegalTarget(f"cell ({r}, {c}) on board {board.board_id.value} is occupied")
    cells = list(board.grid)
    cells[board.index(r, c)] = mark
    grid = tuple(cells)
    return replace(
        board,
        grid=grid,
        log=board.log + (Placement(board.board_id, r, c, mark),),
        status=_status_for(grid),
    )


def apply_pass_move(board: Board, mark: Mark) -> Board:
    """Records a consumed turn without touching the grid. Terminal boards accept passes too."""
    return replace(board, log=board.log + (Pass(board.board_id, mark),))


def board_join(board: Board, player: str, mark: Mark) -> Board:
    if mark == 'X':
        return replace(board, x=player)
    return replace(board, o=player)


def board_leave(board: Board, player: str) -> Board:
    if board.x == player:
        return replace(board, x=None)
    if board.o == player:
        return replace(board, o=None)
    return board


def opponent_at(board: Board, r: int, c: int, mark: Mark) -> bool:
    """True if the cell already holds the mark opposing `mark`."""
    return board.at(r, c) == other_mark(mark)
