"""
Error hierarchy for the quantum tic-tac-toe rules.

Every error is a rejection of the requested operation: the match state is left
exactly as it was, so callers may retry with corrected input. The class-level
``code`` is what a transport layer maps onto its own wire error code.

Usage:
    from qttt_core.errors import QuantumGameError

    try:
        state = apply_move(state, request)
    except QuantumGameError as e:
        reply_error(e.code, e.message)
"""
from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = [
    'QuantumGameError',
    'AlreadySeated',
    'SeatsFull',
    'NotSeated',
    'MatchNotInProgress',
    'IllegalTarget',
    'OutOfTurn',
]


class QuantumGameError(ValueError):
    """Base class for every rejected join, leave or move.

    Attributes:
        code: Machine-readable error code
        message: Human-readable description
        context: Extra details (board, cell, player) for the caller
    """
    code: str = 'QUANTUM_GAME_ERROR'
    default_message: str = 'Invalid request'

    def __init__(self, message: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ', '.join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {'code': self.code, 'message': self.message, 'context': dict(self.context)}


class AlreadySeated(QuantumGameError):
    code = 'PLAYER_ALREADY_IN_GAME'
    default_message = 'Player is already in this game'


class SeatsFull(QuantumGameError):
    code = 'GAME_FULL'
    default_message = 'Game is full'


class NotSeated(QuantumGameError):
    code = 'PLAYER_NOT_IN_GAME'
    default_message = 'Player is not in this game'


class MatchNotInProgress(QuantumGameError):
    code = 'GAME_NOT_IN_PROGRESS'
    default_message = 'Game is not in progress'


class IllegalTarget(QuantumGameError):
    """Closed cell: publicly visible, already holding the mover's mark, or on a decided board."""
    code = 'INVALID_MOVE'
    default_message = 'Invalid move'


class OutOfTurn(QuantumGameError):
    code = 'MOVE_NOT_YOUR_TURN'
    default_message = 'Not your turn'
