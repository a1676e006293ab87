#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays the buzzer tone within PyGame / SDL.

The buzzer only has an 'on' or 'off' status.  While it is on, a square wave is
looped at a fixed pitch.  The wave is built once into an unsigned 8-bit buffer
holding a whole number of cycles, so it loops without clicks.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
DEFAULT_TONE_FREQUENCY = 440.0
DEFAULT_VOLUME = 0.1
TONE_CYCLES = 16


class Audio(AudioBase):
    def __init__(self):
        super().__init__()
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()
        self.sound = self._build_tone(DEFAULT_TONE_FREQUENCY)

    def _build_tone(self, frequency):
        # Square wave: half a cycle high, half low
        cycle_size = max(2, int(PLAYBACK_FREQUENCY / frequency))
        high_size = cycle_size // 2
        cycle = b"\xFF" * high_size + b"\x00" * (cycle_size - high_size)
        sound = pygame.mixer.Sound(buffer=cycle * TONE_CYCLES)
        sound.set_volume(DEFAULT_VOLUME)
        return sound

    def enable_buzzer(self, enabled):
        # Enable or disable the buzzer.  If it is already sounding, it won't be restarted.
        if enabled:
            if not self.buzzer_enabled:
                self.sound.play(-1)
        else:
            if self.buzzer_enabled:
                self.sound.stop()

        super().enable_buzzer(enabled)

    def shutdown(self):
        if self.sound:
            self.sound.stop()

        pygame.mixer.quit()
        super().shutdown()
