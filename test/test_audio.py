#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from c8vm.audio.a_null import Audio


class TestAudio(unittest.TestCase):
    def test_audio_buzzer(self):
        audio = Audio()
        self.assertFalse(audio.buzzer_enabled)
        audio.enable_buzzer(True)
        self.assertTrue(audio.buzzer_enabled)
        audio.enable_buzzer(False)
        self.assertFalse(audio.buzzer_enabled)
        audio.shutdown()

    def test_audio_interface(self):
        # The host only switches the buzzer on and off
        public = sorted(name for name in dir(Audio) if not name.startswith("_"))
        self.assertEqual(["enable_buzzer", "shutdown"], public)
