#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "C8VM CHIP-8 Virtual Machine"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2024 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory layout
MEM_SIZE = 0x1000
ADDRESS_MASK = 0xFFF
FONT_LOCATION = 0x000
PROGRAM_START = 0x200
PROGRAM_MAX_SIZE = MEM_SIZE - PROGRAM_START
STACK_DEPTH = 12

# Display
DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

# Timing
DEFAULT_CLOCK_SPEED = 500  # Instructions per second
TIMER_FREQ = 60            # Timers and frames both run at 60Hz
FRAME_INTERVAL = 1.0 / TIMER_FREQ

# Run states
STATE_RUNNING = 0
STATE_PAUSED = 1
STATE_HALTED = 2

# Control events delivered by input plugins, alongside the key snapshot
INPUT_QUIT = "quit"
INPUT_PAUSE = "pause"

# Default mappings for keys 0-F.  The keyscans (on a QWERTY keyboard) and ASCII characters for these are the same code.
# Physical layout 1234/QWER/ASDF/ZXCV maps onto the keypad 123C/456D/789E/A0BF.
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# CPU quirks
CPU_QUIRKS = ["shift", "index_overflow"]

# 4x5 hexadecimal digit sprites, 5 bytes each, for 0-F
FONT_SPRITES = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))
FONT_GLYPH_SIZE = 5
