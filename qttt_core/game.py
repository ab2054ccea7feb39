"""Per-match game objects.

``Game`` is the generic "enter/exit a game" capability: an opaque id, an
observable ``state`` and ``join``/``leave`` entry points. ``QuantumTicTacToeGame``
owns one immutable :class:`MatchState` and replaces it only after a call has
fully succeeded, so a rejected call never leaves a half-applied move behind.

Calls on one game must be serialized by the caller; nothing here locks.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from secrets import token_urlsafe
from typing import Any, Dict, Generic, List, Optional, TypeVar

from . import rules
from .moves import MoveRequest, Placement
from .state import MatchState
from .view import PlayerView, player_view, state_to_json

S = TypeVar('S')
M = TypeVar('M')


class Game(ABC, Generic[S, M]):
    """Base class for a two-seat game with an observable state."""

    def __init__(self, initial_state: S, game_id: Optional[str] = None) -> None:
        self._id = game_id or token_urlsafe(8)
        self._state = initial_state
        self._logger = logging.getLogger(__name__)

    @property
    def id(self) -> str:
        return self._id

    @property
    def state(self) -> S:
        return self._state

    def join(self, player: str) -> None:
        self._join(player)
        self._logger.debug("game %s: %s joined", self._id, player)

    def leave(self, player: str) -> None:
        self._leave(player)
        self._logger.debug("game %s: %s left", self._id, player)

    @abstractmethod
    def _join(self, player: str) -> None:
        ...

    @abstractmethod
    def _leave(self, player: str) -> None:
        ...

    @abstractmethod
    def apply_move(self, move: M) -> None:
        ...


class QuantumTicTacToeGame(Game[MatchState, MoveRequest]):
    """A quantum tic-tac-toe match controlling three boards."""

    def __init__(self, game_id: Optional[str] = None) -> None:
        super().__init__(rules.new_match(), game_id)

    def _join(self, player: str) -> None:
        self._state = rules.join(self._state, player)

    def _leave(self, player: str) -> None:
        self._state = rules.leave(self._state, player)

    def apply_move(self, move: MoveRequest) -> None:
        new_state = rules.apply_move(self._state, move)
        self._state = new_state
        last = new_state.moves[-1]
        self._logger.debug(
            "game %s: %s played %s (%d, %d), turn=%d, status=%s",
            self._id, last.mark, last.board.value, last.row, last.col,
            new_state.turn, new_state.status.value,
        )

    def play(self, player: str, board, row: int, col: int) -> None:
        """Convenience wrapper; `board` may be a BoardId or a label such as 'a'."""
        self.apply_move(MoveRequest(player, board, row, col))

    def legal_moves(self, player: Optional[str] = None) -> List[Placement]:
        return rules.legal_moves(self._state, player)

    def view_for(self, player: Optional[str]) -> PlayerView:
        return player_view(self._state, player)

    def to_json(self) -> Dict[str, Any]:
        return state_to_json(self._state, game_id=self._id)
