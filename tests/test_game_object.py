import json
import unittest

from qttt_core.errors import IllegalTarget, NotSeated, OutOfTurn, SeatsFull
from qttt_core.game import Game, QuantumTicTacToeGame
from qttt_core.moves import BoardId, MoveRequest
from qttt_core.state import MatchStatus
from qttt_core.view import player_view, pretty, pretty_state, state_to_json


class TestQuantumGameObject(unittest.TestCase):
    def setUp(self):
        self.game = QuantumTicTacToeGame()
        self.game.join('alice')
        self.game.join('bob')

    def test_given_games_when_created_then_ids_are_opaque_and_distinct(self):
        other = QuantumTicTacToeGame()
        self.assertIsInstance(self.game.id, str)
        self.assertTrue(self.game.id)
        self.assertNotEqual(self.game.id, other.id)
        self.assertEqual(QuantumTicTacToeGame(game_id='room-7').id, 'room-7')

    def test_given_base_class_when_instantiated_then_abstract(self):
        with self.assertRaises(TypeError):
            Game(None)  # type: ignore[abstract]

    def test_given_rejected_calls_then_state_object_unchanged(self):
        self.game.play('alice', 'A', 0, 0)
        before = self.game.state
        with self.assertRaises(OutOfTurn):
            self.game.play('alice', 'B', 0, 0)
        with self.assertRaises(IllegalTarget):
            self.game.play('bob', 'A', 5, 5)
        with self.assertRaises(NotSeated):
            self.game.play('carol', 'A', 1, 1)
        with self.assertRaises(SeatsFull):
            self.game.join('carol')
        self.assertIs(self.game.state, before)

    def test_given_moves_when_played_then_debug_logged(self):
        with self.assertLogs('qttt_core.game', level='DEBUG') as logs:
            self.game.apply_move(MoveRequest('alice', BoardId.C, 2, 1))
        self.assertTrue(any('C (2, 1)' in line for line in logs.output))

    def test_given_collision_when_serialized_then_snapshot_reports_it(self):
        self.game.play('alice', 'A', 0, 0)
        self.game.play('bob', 'a', 0, 0)
        data = self.game.to_json()
        json.dumps(data)  # must be JSON-ready
        self.assertEqual(data['gameId'], self.game.id)
        self.assertEqual(data['status'], 'IN_PROGRESS')
        self.assertEqual((data['x'], data['o'], data['winner']), ('alice', 'bob', None))
        self.assertEqual((data['xScore'], data['oScore'], data['turn']), (0, 0, 2))
        self.assertEqual(data['moves'], [
            {'board': 'A', 'row': 0, 'col': 0, 'mark': 'X'},
            {'board': 'A', 'row': 0, 'col': 0, 'mark': 'O'},
        ])
        self.assertTrue(data['publiclyVisible']['A'][0][0])
        self.assertFalse(data['publiclyVisible']['B'][0][0])
        self.assertEqual(data['boards']['A']['grid'][0][0], 'X')
        self.assertEqual(data['boards']['B']['status'], 'IN_PROGRESS')

    def test_given_hidden_marks_when_viewed_then_only_own_and_public_cells_shown(self):
        self.game.play('alice', 'A', 1, 1)
        self.game.play('bob', 'B', 2, 2)
        self.game.play('alice', 'C', 0, 0)
        self.game.play('bob', 'C', 0, 0)  # collision, C[0][0] now public

        alice = self.game.view_for('alice')
        self.assertEqual(alice['A'][1][1], 'X')
        self.assertIsNone(alice['B'][2][2])
        self.assertEqual(alice['C'][0][0], 'X')

        bob = self.game.view_for('bob')
        self.assertIsNone(bob['A'][1][1])
        self.assertEqual(bob['B'][2][2], 'O')
        self.assertEqual(bob['C'][0][0], 'X')

        spectator = self.game.view_for(None)
        self.assertIsNone(spectator['A'][1][1])
        self.assertIsNone(spectator['B'][2][2])
        self.assertEqual(spectator['C'][0][0], 'X')
        self.assertEqual(player_view(self.game.state, 'nobody'), spectator)

    def test_given_finished_match_when_viewed_then_everything_revealed(self):
        self.game.play('alice', 'A', 1, 1)
        self.game.play('bob', 'B', 2, 2)
        self.game.leave('alice')
        self.assertEqual(self.game.state.status, MatchStatus.OVER)
        self.assertEqual(self.game.state.winner, 'bob')
        view = self.game.view_for(None)
        self.assertEqual(view['A'][1][1], 'X')
        self.assertEqual(view['B'][2][2], 'O')

    def test_given_legal_moves_when_queried_then_for_side_to_move_only(self):
        self.assertEqual(len(self.game.legal_moves()), 27)
        self.assertEqual(len(self.game.legal_moves('alice')), 27)
        self.assertEqual(self.game.legal_moves('bob'), [])


class TestRendering(unittest.TestCase):
    def test_given_grids_when_pretty_then_marks_and_public_flags_rendered(self):
        empty = [[None] * 3 for _ in range(3)]
        grids = {'A': [['X', None, None], [None, 'O', None], [None, None, None]], 'B': empty, 'C': empty}
        visible = {k: [[False] * 3 for _ in range(3)] for k in 'ABC'}
        visible['A'][1][1] = True
        txt = pretty(grids, visible, {'A': 'IN_PROGRESS', 'B': 'WON_X', 'C': 'IN_PROGRESS'})
        lines = txt.splitlines()
        self.assertEqual(len(lines), 4)
        self.assertIn('B WON_X', lines[0])
        self.assertTrue(lines[1].startswith('X  .  . '))
        self.assertIn('O*', lines[2])

    def test_given_state_when_pretty_state_then_redaction_follows_viewer(self):
        game = QuantumTicTacToeGame()
        game.join('alice')
        game.join('bob')
        game.play('alice', 'A', 0, 0)
        self.assertTrue(pretty_state(game.state, player='alice').splitlines()[1].startswith('X'))
        self.assertTrue(pretty_state(game.state, player='bob').splitlines()[1].startswith('.'))
        self.assertTrue(pretty_state(game.state, reveal=True).splitlines()[1].startswith('X'))
        self.assertEqual(state_to_json(game.state)['gameId'], None)


if __name__ == '__main__':
    unittest.main(verbosity=2)
