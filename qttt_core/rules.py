from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from .board import (
    BoardStatus,
    apply_pass_move,
    apply_real_move,
    board_join,
    board_leave,
    in_bounds,
    opponent_at,
)
from .errors import (
    AlreadySeated,
    IllegalTarget,
    MatchNotInProgress,
    NotSeated,
    OutOfTurn,
    SeatsFull,
)
from .moves import BoardId, Mark, MoveRequest, Placement, parse_board_id
from .state import MatchState, MatchStatus


def new_match() -> MatchState:
    """A fresh match: no seats, three empty boards."""
    return MatchState()


def current_mark(state: MatchState) -> Optional[Mark]:
    """The mark whose turn it is, or None when no turn can be played."""
    if state.status is not MatchStatus.IN_PROGRESS:
        return None
    return state.mark_to_move()


def join(state: MatchState, player: str) -> MatchState:
    """Seats the player as X if free, else as O. Both seats filled starts the match."""
    if state.is_seated(player):
        raise AlreadySeated(context={'player': player})
    if state.status is MatchStatus.OVER:
        raise MatchNotInProgress('Game is over', context={'player': player})
    if state.x is None:
        mark = 'X'
        new_state = replace(state, x=player)
    elif state.o is None:
        mark = 'O'
        new_state = replace(state, o=player)
    else:
        raise SeatsFull(context={'player': player})

    for board in new_state.boards():
        new_state = new_state.with_board(board_join(board, player, mark))

    if new_state.x is not None and new_state.o is not None:
        new_state = replace(new_state, status=MatchStatus.IN_PROGRESS)
    return new_state


def leave(state: MatchState, player: str) -> MatchState:
    """Removes the player. Mid-match the remaining player wins; before the start the match is reset."""
    mark = state.mark_of(player)
    if mark is None:
        raise NotSeated(context={'player': player})

    if state.status is MatchStatus.WAITING_TO_START:
        return new_match()

    if state.status is MatchStatus.IN_PROGRESS:
        remaining = state.o if mark == 'X' else state.x
        new_state = replace(state, status=MatchStatus.OVER, winner=remaining)
    else:
        new_state = state

    if mark == 'X':
        new_state = replace(new_state, x=None)
    else:
        new_state = replace(new_state, o=None)
    for board in new_state.boards():
        new_state = new_state.with_board(board_leave(board, player))
    return new_state


def _resolve_board(value) -> BoardId:
    try:
        return parse_board_id(value)
    except ValueError as exc:
        raise IllegalTarget(str(exc), context={'board': value}) from None


def validate_move(state: MatchState, board_id: BoardId, row: int, col: int, mark: Mark) -> None:
    """Raises the first applicable error for `mark` playing (board_id, row, col)."""
    if state.status is not MatchStatus.IN_PROGRESS:
        raise MatchNotInProgress(context={'status': state.status.value})

    target = state.board(board_id)
    # A decided board with history is closed for good.
    if target.is_terminal and len(target.log) != 0:
        raise IllegalTarget(
            f"Board {board_id.value} is already decided",
            context={'board': board_id.value},
        )

    if not in_bounds(row, col):
        raise IllegalTarget(
            f"({row}, {col}) is outside the board",
            context={'board': board_id.value, 'row': row, 'col': col},
        )

    occupant = target.at(row, col)
    if occupant is not None:
        if state.is_visible(board_id, row, col):
            raise IllegalTarget(
                'Cell is publicly visible',
                context={'board': board_id.value, 'row': row, 'col': col},
            )
        if occupant == mark:
            raise IllegalTarget(
                'Cell already holds your mark',
                context={'board': board_id.value, 'row': row, 'col': col},
            )

    # Mark is derived from the seat, so this only trips when seat and parity disagree.
    if mark != state.mark_to_move():
        raise OutOfTurn(context={'mark': mark, 'turn': state.turn})


def apply_move(state: MatchState, request: MoveRequest) -> MatchState:
    """Validates and applies a move, returning the new match state.

    A move onto the opposing mark is a collision: the cell becomes publicly
    visible, keeps its original mark, and the mover's turn is spent. Either
    way the two boards that were not targeted receive a pass.
    """
    mark = state.mark_of(request.player)
    if mark is None:
        raise NotSeated(context={'player': request.player})
    board_id = _resolve_board(request.board)
    row, col = request.row, request.col
    validate_move(state, board_id, row, col, mark)

    target = state.board(board_id)
    placement = Placement(board_id, row, col, mark)
    new_state = replace(state, moves=state.moves + (placement,), turn=state.turn + 1)

    if opponent_at(target, row, col, mark):
        new_state = new_state.with_revealed(board_id, row, col)
        new_state = new_state.with_board(apply_pass_move(target, mark))
    else:
        new_state = new_state.with_board(apply_real_move(target, row, col, mark))

    for board in new_state.boards():
        if board.board_id is not board_id:
            new_state = new_state.with_board(apply_pass_move(board, mark))

    new_state = _update_scores(new_state)
    return _check_for_game_ending(new_state)


def _update_scores(state: MatchState) -> MatchState:
    """Recounts board wins; scores are never incremented directly."""
    x_score = sum(1 for b in state.boards() if b.status is BoardStatus.WON_X)
    o_score = sum(1 for b in state.boards() if b.status is BoardStatus.WON_O)
    return replace(state, x_score=x_score, o_score=o_score)


def _check_for_game_ending(state: MatchState) -> MatchState:
    if not all(b.is_terminal for b in state.boards()):
        return state
    if state.x_score > state.o_score:
        winner = state.x
    elif state.o_score > state.x_score:
        winner = state.o
    else:
        winner = None
    return replace(state, status=MatchStatus.OVER, winner=winner)


def legal_moves(state: MatchState, player: Optional[str] = None) -> List[Placement]:
    """Every placement apply_move would accept for the side to move (or for `player`)."""
    mark = current_mark(state)
    if mark is None:
        return []
    if player is not None and state.mark_of(player) != mark:
        return []
    moves: List[Placement] = []
    for board in state.boards():
        if board.is_terminal and board.log:
            continue
        for r, c in board.coords():
            occupant = board.at(r, c)
            if occupant is None:
                moves.append(Placement(board.board_id, r, c, mark))
            elif occupant != mark and not state.is_visible(board.board_id, r, c):
                moves.append(Placement(board.board_id, r, c, mark))
    return moves


def request_for(state: MatchState, placement: Placement) -> MoveRequest:
    """Builds the MoveRequest that would submit `placement` on behalf of its seat."""
    player = state.player_for(placement.mark)
    if player is None:
        raise NotSeated(context={'mark': placement.mark})
    return MoveRequest(player, placement.board, placement.row, placement.col)
