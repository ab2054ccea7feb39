from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from .board import SIZE, Board, Cell
from .moves import BoardId
from .state import MatchState, MatchStatus

PlayerView = Dict[str, List[List[Cell]]]  # board label -> 3x3 grid


def _board_to_json(b: Board) -> Dict[str, Any]:
    return {"grid": b.rows(), "status": b.status.value}


def state_to_json(s: MatchState, game_id: Optional[str] = None) -> Dict[str, Any]:
    """Full (unredacted) snapshot for the transport layer."""
    return {
        "gameId": game_id,
        "status": s.status.value,
        "x": s.x,
        "o": s.o,
        "winner": s.winner,
        "xScore": int(s.x_score),
        "oScore": int(s.o_score),
        "turn": int(s.turn),
        "moves": [m.to_json() for m in s.moves],
        "publiclyVisible": s.visibility(),
        "boards": {b.board_id.value: _board_to_json(b) for b in s.boards()},
    }


def player_view(s: MatchState, player: Optional[str]) -> PlayerView:
    """The three grids as `player` may see them.

    Own marks and publicly visible cells are shown; the opponent's hidden marks
    read as empty. Spectators see only visible cells. A finished match reveals
    everything.
    """
    mine = s.mark_of(player) if player is not None else None
    reveal_all = s.status is MatchStatus.OVER
    out: PlayerView = {}
    for b in s.boards():
        rows: List[List[Cell]] = []
        for r in range(SIZE):
            row: List[Cell] = []
            for c in range(SIZE):
                cell = b.at(r, c)
                if cell is None or reveal_all or cell == mine or s.is_visible(b.board_id, r, c):
                    row.append(cell)
                else:
                    row.append(None)
            rows.append(row)
        out[b.board_id.value] = rows
    return out


def pretty(
    grids: Mapping[str, List[List[Cell]]],
    visible: Optional[Mapping[str, List[List[bool]]]] = None,
    statuses: Optional[Mapping[str, str]] = None,
) -> str:
    """Renders the three boards side by side. Publicly visible cells carry a '*'."""
    labels = [b.value for b in BoardId]
    header: List[str] = []
    for label in labels:
        title = label
        if statuses and statuses.get(label) and statuses[label] != 'IN_PROGRESS':
            title = f"{label} {statuses[label]}"
        header.append(title.ljust(10))
    lines: List[str] = [''.join(header).rstrip()]
    for r in range(SIZE):
        parts: List[str] = []
        for label in labels:
            cells: List[str] = []
            for c in range(SIZE):
                mark = grids[label][r][c]
                flag = '*' if visible and visible[label][r][c] else ' '
                cells.append(f"{mark or '.'}{flag}")
            parts.append(' '.join(cells).ljust(10))
        lines.append(''.join(parts).rstrip())
    return '\n'.join(lines)


def pretty_state(s: MatchState, player: Optional[str] = None, reveal: bool = False) -> str:
    """Text rendering of a match as seen by `player` (or everything when `reveal`)."""
    grids = {b.board_id.value: b.rows() for b in s.boards()} if reveal else player_view(s, player)
    statuses = {b.board_id.value: b.status.value for b in s.boards()}
    return pretty(grids, s.visibility(), statuses)
