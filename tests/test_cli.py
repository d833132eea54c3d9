import io
import itertools
import unittest
from contextlib import redirect_stdout
from unittest import mock

from parlor_core import cli
from parlor_core.config import default_difficulty, env_flag, search_depth


class TestCli(unittest.TestCase):
    def _run(self, argv, inputs=None):
        out = io.StringIO()
        with redirect_stdout(out):
            if inputs is None:
                cli.main(argv)
            else:
                with mock.patch('builtins.input', side_effect=inputs):
                    cli.main(argv)
        return out.getvalue()

    def test_given_ai_vs_ai_easy_when_run_then_game_finishes(self):
        txt = self._run(['--ai-vs-ai', '--difficulty', 'easy', '--seed', '4'])
        self.assertIn('Initial board:', txt)
        self.assertTrue('wins!' in txt or "It's a draw." in txt)

    def test_given_same_seed_when_run_twice_then_same_transcript(self):
        argv = ['--ai-vs-ai', '--difficulty', 'medium', '--seed', '17']
        self.assertEqual(self._run(argv), self._run(argv))

    def test_given_human_input_with_garbage_when_playing_then_reprompts_until_legal(self):
        inputs = itertools.cycle(['x', '9', '0', '1', '2', '3', '4', '5', '6'])
        txt = self._run(['--difficulty', 'easy', '--seed', '1'], inputs=inputs)
        self.assertIn('Could not parse. Try again.', txt)
        self.assertIn('Illegal column. Try again.', txt)
        self.assertIn('AI (Player 2) drops in column', txt)
        self.assertTrue('wins!' in txt or "It's a draw." in txt)


class TestConfig(unittest.TestCase):
    def test_given_env_when_reading_depth_then_parsed_or_default(self):
        with mock.patch.dict('os.environ', {'PARLOR_SEARCH_DEPTH': '4'}):
            self.assertEqual(search_depth(), 4)
        with mock.patch.dict('os.environ', {'PARLOR_SEARCH_DEPTH': 'deep'}):
            self.assertEqual(search_depth(), 5)
        with mock.patch.dict('os.environ', {'PARLOR_SEARCH_DEPTH': '0'}):
            self.assertEqual(search_depth(), 5)

    def test_given_env_when_reading_flags_then_truthy_values_recognised(self):
        with mock.patch.dict('os.environ', {'PARLOR_DEBUG': 'Yes', 'PARLOR_DEFAULT_DIFFICULTY': ' HARD '}):
            self.assertTrue(env_flag('PARLOR_DEBUG'))
            self.assertEqual(default_difficulty(), 'hard')
        with mock.patch.dict('os.environ', {'PARLOR_DEBUG': 'off'}):
            self.assertFalse(env_flag('PARLOR_DEBUG'))


if __name__ == '__main__':
    unittest.main()
