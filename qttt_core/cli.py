from __future__ import annotations

import argparse
import logging
import random
import re
from typing import List, Optional, Sequence, Tuple

from .config import Settings
from .errors import QuantumGameError
from .game import QuantumTicTacToeGame
from .log import configure_logging
from .moves import BoardId, parse_board_id
from .rules import current_mark
from .state import MatchState, MatchStatus
from .view import pretty_state

logger = logging.getLogger(__name__)

PLAYER_X = 'player1'
PLAYER_O = 'player2'

_MOVE_RE = re.compile(r'^\s*([A-Ca-c])\s*[, ]?\s*([0-2])\s*[, ]?\s*([0-2])\s*$')


def parse_move_text(text: str) -> Tuple[BoardId, int, int]:
    """Parses 'A 0 0', 'A,0,0' or 'a00' into (board, row, col)."""
    m = _MOVE_RE.match(text)
    if not m:
        raise ValueError(f'Could not parse move: {text!r}')
    return parse_board_id(m.group(1)), int(m.group(2)), int(m.group(3))


def split_script(script: str) -> List[str]:
    """Splits a scripted move list such as 'A00 B11; c22' into move tokens."""
    return [t for t in re.split(r'[\s;]+', script.strip()) if t]


def _summary(state: MatchState) -> str:
    if state.status is not MatchStatus.OVER:
        return f"Status {state.status.value}. Score X {state.x_score} - O {state.o_score}."
    if state.winner is None:
        return f"Game over: tie at {state.x_score} - {state.o_score}."
    side = 'X' if state.winner == state.x else 'O'
    return f"Game over: {state.winner} ({side}) wins {state.x_score} - {state.o_score}."


def run_script(game: QuantumTicTacToeGame, tokens: Sequence[str], reveal: bool = True) -> int:
    """Plays tokens in order on behalf of whoever is to move. Returns 2 on the first rejection."""
    for token in tokens:
        mark = current_mark(game.state)
        if mark is None:
            print(f"Ignoring {token!r}: game is no longer in progress.")
            break
        player = game.state.player_for(mark)
        try:
            board, r, c = parse_move_text(token)
            game.play(player, board, r, c)
        except QuantumGameError as e:
            print(f"Move {token!r} by {mark} rejected: {e.message}")
            print(pretty_state(game.state, reveal=reveal))
            return 2
        except ValueError as e:
            print(f"error: {e}")
            return 2
    print(pretty_state(game.state, reveal=reveal))
    print(_summary(game.state))
    return 0


def play_interactive(
    game: QuantumTicTacToeGame,
    random_side: Optional[str] = None,
    seed: Optional[int] = None,
    reveal: bool = False,
) -> int:
    rng = random.Random(seed)
    human = PLAYER_O if random_side == 'X' else PLAYER_X
    print(pretty_state(game.state, player=human, reveal=reveal))
    while game.state.status is MatchStatus.IN_PROGRESS:
        mark = current_mark(game.state)
        player = game.state.player_for(mark)
        if random_side is not None and mark == random_side:
            choice = rng.choice(game.legal_moves(player))
            game.play(player, choice.board, choice.row, choice.col)
            print(f"Random player ({mark}) plays {choice.board.value} {choice.row} {choice.col}")
        else:
            try:
                text = input(f"{mark} to move, enter board row col (e.g. A 0 0): ")
            except EOFError:
                print()
                print('Input closed; leaving the game.')
                game.leave(player)
                break
            try:
                board, r, c = parse_move_text(text)
            except ValueError:
                print('Could not parse. Try again.')
                continue
            try:
                game.play(player, board, r, c)
            except QuantumGameError as e:
                print(f"Illegal move: {e.message}. Try again.")
                continue
            if game.state.is_visible(board, r, c):
                print(f"Collision on {board.value} {r} {c}! The cell is now public.")
        if game.state.status is not MatchStatus.IN_PROGRESS:
            break
        viewer = human if random_side is not None else game.state.player_for(current_mark(game.state))
        print(pretty_state(game.state, player=viewer, reveal=reveal))
    print(pretty_state(game.state, reveal=True))
    print(_summary(game.state))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description='Quantum tic-tac-toe on three boards')
    parser.add_argument('--vs-random', action='store_true', help='Play against a random-move opponent')
    parser.add_argument('--random-side', choices=['X', 'O'], default='O', help='Side played by the random opponent')
    parser.add_argument('--seed', type=int, default=settings.seed, help='RNG seed for the random opponent')
    parser.add_argument('--moves', default=None, help='Scripted moves, e.g. "A00 B11 A11"; plays them and exits')
    parser.add_argument('--reveal', action='store_true', help='Show hidden marks of both players')
    parser.add_argument('--log-level', default=settings.effective_log_level, help='Logging level name')
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level.upper())

    game = QuantumTicTacToeGame()
    game.join(PLAYER_X)
    game.join(PLAYER_O)
    logger.info("game %s started: X=%s O=%s", game.id, PLAYER_X, PLAYER_O)

    if args.moves is not None:
        return run_script(game, split_script(args.moves), reveal=True)

    random_side = args.random_side if args.vs_random else None
    return play_interactive(game, random_side=random_side, seed=args.seed, reveal=args.reveal)
