#!/usr/bin/env python3

"""
Machine State

Everything the running program can observe or change lives here: main memory,
the V registers, the index register, the program counter, the call stack, both
timers, the keypad snapshot and the framebuffer.  The CPU and frame scheduler
are both handed the same Machine object; nothing here is global.

The host owns the run state and the keypad snapshot.  It should apply key
changes and pause/quit requests before each frame is scheduled.

A freshly built Machine already has the system font at 0x000 and starts
running at 0x200, which is where 'load_program' copies the program image.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import (
    MEM_SIZE, FONT_LOCATION, FONT_SPRITES, PROGRAM_START, PROGRAM_MAX_SIZE, STACK_DEPTH, STATE_RUNNING,
    STATE_PAUSED, STATE_HALTED
)
from .framebuffer import Framebuffer
from .ram import RAM
from .stack import Stack


class MachineError(Exception):
    pass


class ImageTooLargeError(MachineError):
    pass


class Machine:
    def __init__(self, ram=None, stack=None, framebuffer=None):
        if ram is None:
            ram = RAM(MEM_SIZE)

        self.ram = ram
        self.stack = Stack(STACK_DEPTH) if stack is None else stack
        self.framebuffer = Framebuffer() if framebuffer is None else framebuffer

        # Write the system font into RAM
        self.ram.write_block(FONT_LOCATION, FONT_SPRITES)

        # Registers
        self.v = memoryview(bytearray(16))
        self.i = 0
        self.pc = PROGRAM_START
        self.debug_pc = PROGRAM_START  # Address of the instruction currently executing

        # Timers (bytes), decremented by the frame scheduler
        self.dt = 0
        self.st = 0

        # Keypad snapshot, 0x0-0xF
        self.keys = [False] * 0x10

        # Register awaiting a keypress (LD Vx, K), or None if not waiting
        self.awaiting_key = None

        self.run_state = STATE_RUNNING
        self.redraw = False

    def load_program(self, image):
        image_size = len(image)

        if image_size > PROGRAM_MAX_SIZE:
            raise ImageTooLargeError(
                "Program image is {} bytes, but only {} bytes are available".format(image_size, PROGRAM_MAX_SIZE)
            )

        self.ram.write_block(PROGRAM_START, image)

    # Keypad

    def press_key(self, key):
        self.keys[key & 0xF] = True

    def release_key(self, key):
        self.keys[key & 0xF] = False

    def set_keys(self, key_states):
        for key, key_down in enumerate(key_states):
            self.keys[key] = bool(key_down)

    def get_lowest_key_down(self):
        for key, key_down in enumerate(self.keys):
            if key_down:
                return key

        return None

    # Run control

    def is_running(self):
        return self.run_state == STATE_RUNNING

    def is_halted(self):
        return self.run_state == STATE_HALTED

    def toggle_pause(self):
        # Halting is terminal, so pausing has no effect afterwards
        if self.run_state == STATE_RUNNING:
            self.run_state = STATE_PAUSED
        elif self.run_state == STATE_PAUSED:
            self.run_state = STATE_RUNNING

    def halt(self):
        self.run_state = STATE_HALTED

    # Timers

    def decrement_timers(self):
        if self.dt > 0:
            self.dt -= 1

        if self.st > 0:
            self.st -= 1
