#!/usr/bin/env python3

"""
Curses Renderer Plugin

Draws the framebuffer in a standard Linux-style TTY Terminal, the Windows
Command Prompt, or PowerShell.

Each lit pixel is drawn as inverted spaces, stretched horizontally by the scale
factor so the display keeps a sensible aspect ratio in most terminal fonts.
The top line of the pad is used for the title.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
import _curses
from .r_null import Renderer as RendererBase


class Renderer(RendererBase):
    def __init__(self, scale=None, curses_cursor_mode=None, **kwargs):
        if scale is None:
            scale = 2  # Default horizontal stretch if not supplied, or set to default

        self.pixel_char = " " * scale
        self.pad = None
        self.refresh_needed = False
        self.last_screen_height = -1
        self.last_screen_width = -1
        self.cursor_mode = 0 if curses_cursor_mode is None else curses_cursor_mode
        self.screen = curses.initscr()
        curses.curs_set(self.cursor_mode)
        curses.noecho()
        curses.raw()  # CTRL+C arrives as a character rather than a signal
        super().__init__(scale)

    def set_resolution(self, width, height):
        # Allow one extra column, otherwise we can't write the furthest bottom-right pixel
        self.pad = curses.newpad(height + 1, width * self.scale + 1)
        super().set_resolution(width, height)

    def set_pixel(self, x, y, colour):
        self.pad.addstr(y + 1, x * self.scale, self.pixel_char, curses.A_REVERSE if colour else curses.A_NORMAL)

    def refresh_display(self, content_changed=False):
        if content_changed:
            self.refresh_needed = True

        screen_height, screen_width = self.screen.getmaxyx()

        if screen_height == self.last_screen_height and screen_width == self.last_screen_width:
            # Fast delta update
            if self.refresh_needed:
                self.pad.refresh(0, 0, 0, 0, screen_height - 1, screen_width - 1)
                self.refresh_needed = False
        else:
            # Screen resolution changed, redraw everything
            self.screen.clear()

            if hasattr(curses, "resizeterm"):
                # This doesn't work on Windows
                curses.resizeterm(screen_height, screen_width)

            self.screen.refresh()
            self.last_screen_height = screen_height
            self.last_screen_width = screen_width
            self.refresh_needed = True

    def set_title(self, title):
        if self.pad and self.width:
            title_width = self.width * self.scale
            self.pad.addstr(0, 0, title[:title_width].ljust(title_width), curses.A_REVERSE)
            self.refresh_needed = True

        super().set_title(title)

    def shutdown(self):
        if self.pad:
            self.pad = None

        curses.noraw()
        curses.echo()

        if self.cursor_mode != 1:
            try:
                curses.curs_set(1)
            except _curses.error:
                pass

        curses.endwin()
        super().shutdown()

    # No Superclass for this Curses-specific method

    def get_curses_screen(self):
        return self.screen
