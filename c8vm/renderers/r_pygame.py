#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws the framebuffer onto an SDL window surface via PyGame.  The surface is
allocated at the size of the emulated display, and then the contents are
stretched (using 'Nearest Neighbour' translation) to fit the window itself.
This means we don't have to draw the same pixel multiple times.

Lit pixels are drawn in the foreground colour (white by default) over the
background colour (black by default).  If outlines are enabled, each lit pixel
also gets a one-pixel border in the background colour once scaled, which makes
individual pixels easier to pick out on large windows.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME


class Renderer(RendererBase):
    def __init__(self, scale=None, pygame_palette=None, outlines=None, **kwargs):
        if scale is None:
            scale = 1280  # Default window width if not supplied, or set to default

        pygame.display.init()
        self.set_title(APP_NAME)
        self.rgb_buffer = None
        self.lit_pixels = set()
        self.scaled_size = (scale, scale // 2)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        self.outlines = True if outlines is None else outlines

        # Background, foreground
        colour_map = [0x000000, 0xFFFFFF]

        # Override one or both of the colours with a user-defined palette, if necessary
        if pygame_palette is not None:
            pygame_palette_split = pygame_palette.split(",")

            if len(pygame_palette_split) > len(colour_map):
                raise RendererError("Too many palette colours defined.")

            for pygame_colour_num, pygame_colour in enumerate(pygame_palette_split):
                if len(pygame_colour) != 6:
                    raise RendererError("Palette colours must all be 6 hex digits long.")

                try:
                    colour_map[pygame_colour_num] = int(pygame_colour, 16)
                except ValueError:
                    raise RendererError("Invalid palette colour defined.") from None

        # Split compound RGB values for faster byte-based lookup later
        self.rgb_map = [memoryview(bytearray([i >> 16, (i >> 8) & 0xFF, i & 0xFF])) for i in colour_map]
        self.background = pygame.Color(*self.rgb_map[0])

        super().__init__(scale)

    def set_resolution(self, width, height):
        total_pixels = width * height
        self.rgb_buffer = memoryview(bytearray(total_pixels * 3))  # 24-bit

        # Call superclass method so display size is known before filling
        super().set_resolution(width, height)

        # Fill the offscreen RGB buffer with the default background colour
        for y in range(height):
            for x in range(width):
                self.set_pixel(x, y, 0)

        # Force a refresh now, in case nothing else is drawn afterwards
        self.refresh_display(True)

    def set_pixel(self, x, y, colour):
        # Update RGB buffer in-place to minimise allocations and PyGame calls
        rgb_location = (y * self.width + x) * 3
        self.rgb_buffer[rgb_location:rgb_location + 3] = self.rgb_map[colour]

        if colour:
            self.lit_pixels.add((x, y))
        else:
            self.lit_pixels.discard((x, y))

    def refresh_display(self, content_changed=False):
        if content_changed and self.rgb_buffer and self.width:
            # Blit the bytearray straight to the surface, rather than drawing each pixel
            render_surface = pygame.image.frombuffer(self.rgb_buffer, (self.width, self.height), "RGB")
            scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
            self.display_surface.blit(scaled_win, (0, 0))

            if self.outlines:
                self._draw_outlines()

            pygame.display.flip()

    def _draw_outlines(self):
        pixel_width = self.scaled_size[0] / self.width
        pixel_height = self.scaled_size[1] / self.height

        for x, y in self.lit_pixels:
            rect = pygame.Rect(int(x * pixel_width), int(y * pixel_height), int(pixel_width), int(pixel_height))
            pygame.draw.rect(self.display_surface, self.background, rect, 1)

    def set_title(self, title):
        pygame.display.set_caption(title)
        super().set_title(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
