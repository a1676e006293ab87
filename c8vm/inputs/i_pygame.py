#!/usr/bin/env python3

"""
PyGame Input Plugin

Unlike the Curses plugin, this scans the keyboard and properly detects key
'press' and 'release' events.  Note that the check should not be called more
often than 60Hz, as constantly checking the queue is time consuming.

Closing the window quits.  ESC toggles pause.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .i_null import Inputs as InputsBase
from ..constants import INPUT_QUIT, INPUT_PAUSE


class Inputs(InputsBase):
    def __init__(self, keymap, renderer):
        self.key_down = [False] * 0x10

        self.pygame_methods = {
            pygame.QUIT:    self._pygame_quit,
            pygame.KEYDOWN: self._pygame_keydown,
            pygame.KEYUP:   self._pygame_keyup
        }

        super().__init__(keymap, renderer)

    def process_messages(self):
        # Call PyGame method based on fast dictionary lookup of event
        events = []

        for event in pygame.event.get():
            pygame_method = self.pygame_methods.get(event.type)

            if pygame_method:
                control_event = pygame_method(event)

                if control_event is not None:
                    events.append(control_event)  # Process more events, even if planning to quit

        return events

    def _pygame_quit(self, _):
        return INPUT_QUIT

    def _pygame_keydown(self, event):
        if event.key == pygame.K_ESCAPE:
            return INPUT_PAUSE

        hex_key = self.keymap_dict.get(event.key)

        if hex_key is not None:
            self.key_down[hex_key] = True

        return None

    def _pygame_keyup(self, event):
        hex_key = self.keymap_dict.get(event.key)

        if hex_key is not None:
            self.key_down[hex_key] = False

        return None

    def is_key_down(self, key):
        return self.key_down[key]
