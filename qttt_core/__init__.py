"""
Quantum tic-tac-toe core Python package.

Pure rules for the three-board tic-tac-toe variant plus the thin layers
around them. Modules:
- board.py: Board (single-board engine), BoardStatus, win lines
- moves.py: BoardId, Placement, Pass, MoveRequest
- state.py: MatchState, MatchStatus
- rules.py: join / leave / apply_move / legal_moves on a MatchState
- errors.py: rejection taxonomy with wire codes
- game.py: Game base class and the per-match QuantumTicTacToeGame
- view.py: JSON snapshot, per-player redaction, text rendering
- config.py, log.py, cli.py: driver settings, logging and the `qttt` command
"""
from .board import Board, BoardStatus
from .errors import (
    AlreadySeated,
    IllegalTarget,
    MatchNotInProgress,
    NotSeated,
    OutOfTurn,
    QuantumGameError,
    SeatsFull,
)
from .game import Game, QuantumTicTacToeGame
from .moves import BoardId, MoveRequest, Pass, Placement
from .rules import apply_move, current_mark, join, leave, legal_moves, new_match
from .state import MatchState, MatchStatus

__version__ = '0.1.0'

__all__ = [
    'Board',
    'BoardStatus',
    'BoardId',
    'MoveRequest',
    'Pass',
    'Placement',
    'MatchState',
    'MatchStatus',
    'Game',
    'QuantumTicTacToeGame',
    'new_match',
    'join',
    'leave',
    'apply_move',
    'legal_moves',
    'current_mark',
    'QuantumGameError',
    'AlreadySeated',
    'SeatsFull',
    'NotSeated',
    'MatchNotInProgress',
    'IllegalTarget',
    'OutOfTurn',
]
