#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and are only drawn to the actual display (the host
rendering system) when a frame reports that something changed.  Renderers are
never handed the pixel plane itself, only a read-only view or individual pixel
values pushed through 'render'.

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen using an XOR method against a single plane of
64x32 pixels.  Each pixel is stored as one byte, 0 (off) or 1 (on), in row-major
order.

Pixels that fall outside the display are clipped rather than wrapped.  Callers
are expected to wrap a sprite's starting coordinates themselves.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import DISPLAY_WIDTH, DISPLAY_HEIGHT
from .ram import RAM


class Framebuffer:
    def __init__(self, vid_width=DISPLAY_WIDTH, vid_height=DISPLAY_HEIGHT):
        self.plane = RAM()
        self.resize_vid(vid_width, vid_height)

    def resize_vid(self, vid_width, vid_height):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.plane.resize(self.vid_size)

    def clear(self):
        self.plane.clear()

    def xor_pixel(self, x, y):
        # Returns whether a lit pixel was switched off, or None if the pixel lies outside the display
        if x >= self.vid_width or y >= self.vid_height:
            return None

        vram_loc = y * self.vid_width + x
        pixel = self.plane.read(vram_loc)
        self.plane.write(vram_loc, pixel ^ 1)

        return pixel != 0

    def get_pixel(self, x, y):
        return self.plane.read(y * self.vid_width + x) != 0

    def get_pixels(self):
        return self.plane.get_view()

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def render(self, renderer):
        # Push every pixel to the renderer, then ask it to present the frame
        vid_width = self.vid_width
        plane = self.plane

        for y in range(self.vid_height):
            row_loc = y * vid_width

            for x in range(vid_width):
                renderer.set_pixel(x, y, plane.read(row_loc + x))

        renderer.refresh_display(True)
