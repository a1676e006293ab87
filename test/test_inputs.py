#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from c8vm.constants import DEFAULT_KEYMAP, INPUT_QUIT, INPUT_PAUSE
from c8vm.inputs.i_null import Inputs, InputsError
from c8vm.inputs import i_curses


class TerminalScreen:
    def __init__(self, chars):
        self.chars = list(chars)

    def getch(self):
        return self.chars.pop(0)


class TerminalRenderer:
    def __init__(self, chars):
        self.screen = TerminalScreen(chars)

    def get_curses_screen(self):
        return self.screen


class TestInputs(unittest.TestCase):
    def test_inputs_keymap(self):
        inputs = Inputs(DEFAULT_KEYMAP, None)
        self.assertEqual(0x0, inputs.keymap_dict[ord("x")])
        self.assertEqual(0xC, inputs.keymap_dict[ord("4")])
        self.assertEqual(0xF, inputs.keymap_dict[ord("v")])
        self.assertEqual([], inputs.process_messages())
        self.assertFalse(inputs.is_key_down(0x1))

    def test_inputs_bad_keymaps(self):
        self.assertRaises(InputsError, Inputs, "1,2,3", None)
        self.assertRaises(InputsError, Inputs, ",".join(["a"] * 16), None)
        self.assertRaises(InputsError, Inputs, ",".join(["1"] * 16), None)


class TestCursesInputs(unittest.TestCase):
    def _inputs(self, chars):
        # The reader thread stops after CTRL+C, so every sequence here ends with one
        inputs = i_curses.Inputs(DEFAULT_KEYMAP, TerminalRenderer(chars))
        inputs.thread.join(1.0)
        self.addCleanup(inputs.shutdown)
        return inputs

    def test_curses_inputs_events(self):
        inputs = self._inputs([ord("X"), 27, 3])
        self.assertFalse(inputs.thread.is_alive())
        self.assertEqual([INPUT_PAUSE, INPUT_QUIT], inputs.process_messages())
        self.assertTrue(inputs.is_key_down(0x0))
        self.assertFalse(inputs.is_key_down(0x1))
        self.assertEqual([], inputs.process_messages())

    def test_curses_inputs_unmapped_keys(self):
        inputs = self._inputs([ord("p"), 3])
        self.assertEqual([INPUT_QUIT], inputs.process_messages())
        self.assertFalse(any(inputs.is_key_down(key) for key in range(0x10)))
