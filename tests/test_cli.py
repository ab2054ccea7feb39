import io
import unittest
from contextlib import redirect_stdout
from unittest import mock

from qttt_core.cli import main, parse_move_text, split_script
from qttt_core.config import Settings
from qttt_core.moves import BoardId


def _run(argv, inputs=None):
    buf = io.StringIO()
    with redirect_stdout(buf):
        if inputs is None:
            code = main(argv)
        else:
            with mock.patch('builtins.input', side_effect=inputs):
                code = main(argv)
    return code, buf.getvalue()


class TestMoveParsing(unittest.TestCase):
    def test_given_move_spellings_when_parsed_then_same_target(self):
        for text in ['A 0 0', 'A,0,0', 'a00', '  a 0,0 ']:
            self.assertEqual(parse_move_text(text), (BoardId.A, 0, 0))
        self.assertEqual(parse_move_text('c21'), (BoardId.C, 2, 1))

    def test_given_garbage_when_parsed_then_value_error(self):
        for text in ['', 'D00', 'A3 0', 'A', 'A 0 0 0']:
            with self.assertRaises(ValueError):
                parse_move_text(text)

    def test_given_script_when_split_then_tokens(self):
        self.assertEqual(split_script(' A00 B11;c22 '), ['A00', 'B11', 'c22'])


class TestScriptedRuns(unittest.TestCase):
    def test_given_diagonal_script_when_run_then_x_leads(self):
        code, out = _run(['--moves', 'A00 B00 A11 B01 A22'])
        self.assertEqual(code, 0)
        self.assertIn('A WON_X', out)
        self.assertIn('Score X 1 - O 0', out)

    def test_given_collision_then_own_remark_when_run_then_rejected(self):
        code, out = _run(['--moves', 'A00 A00 A00'])
        self.assertEqual(code, 2)
        self.assertIn("Move 'A00' by X rejected", out)
        self.assertIn('X*', out)

    def test_given_full_match_script_when_run_then_winner_reported(self):
        code, out = _run(['--moves', 'A00 C00 A01 C01 A02 C02 B00 B10 B01 B11 B02'])
        self.assertEqual(code, 0)
        self.assertIn('player1 (X) wins 2 - 1', out)

    def test_given_tie_script_when_run_then_tie_reported(self):
        code, out = _run(['--moves', 'A00 C00 A01 C01 A02 C02 B00 B01 B02 B11 B10 B12 B21 B20 B22'])
        self.assertEqual(code, 0)
        self.assertIn('tie at 1 - 1', out)

    def test_given_unparseable_token_when_run_then_error_exit(self):
        code, out = _run(['--moves', 'A00 zz'])
        self.assertEqual(code, 2)
        self.assertIn('Could not parse move', out)


class TestInteractive(unittest.TestCase):
    def test_given_hot_seat_when_input_closes_then_other_player_wins(self):
        code, out = _run([], inputs=['nonsense', 'A 0 0', 'A 0 0', 'A 0 0', EOFError()])
        self.assertEqual(code, 0)
        self.assertIn('Could not parse. Try again.', out)
        self.assertIn('Collision on A 0 0', out)
        self.assertIn('Illegal move: Cell is publicly visible', out)
        self.assertIn('Input closed', out)
        self.assertIn('player2 (O) wins', out)

    def test_given_random_opponent_when_human_quits_then_random_side_wins(self):
        code, out = _run(['--vs-random', '--random-side', 'X', '--seed', '7'], inputs=[EOFError()])
        self.assertEqual(code, 0)
        self.assertIn('Random player (X) plays', out)
        self.assertIn('player1 (X) wins', out)


class TestSettings(unittest.TestCase):
    def test_given_empty_env_then_defaults(self):
        s = Settings.from_env({})
        self.assertEqual(s, Settings())
        self.assertEqual(s.effective_log_level, 'WARNING')
        self.assertIsNone(s.seed)

    def test_given_env_values_then_parsed(self):
        s = Settings.from_env({'QTTT_LOG_LEVEL': 'info', 'QTTT_DEBUG': 'Yes', 'QTTT_SEED': '42'})
        self.assertEqual(s.log_level, 'INFO')
        self.assertTrue(s.debug)
        self.assertEqual(s.effective_log_level, 'DEBUG')
        self.assertEqual(s.seed, 42)

    def test_given_bad_seed_then_value_error(self):
        with self.assertRaises(ValueError):
            Settings.from_env({'QTTT_SEED': 'abc'})


if __name__ == '__main__':
    unittest.main(verbosity=2)
