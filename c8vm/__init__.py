#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the virtual machine, replacing args with a
dictionary of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.

Problems that stop the machine from starting (a missing or oversized program
image, or no usable rendering framework) are raised as StartupError before any
instruction is executed.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_INTRO, APP_COPYRIGHT, CPU_QUIRKS, DEFAULT_KEYMAP
from .cpu import CPU
from .debugger import Debugger
from .hostio import Loader
from .hostloop import HostLoop
from .machine import Machine, ImageTooLargeError
from .scheduler import FrameScheduler


class StartupError(Exception):
    pass


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    quirk_settings = {}

    for cpu_quirk in CPU_QUIRKS:
        quirk_label = "{}_quirks".format(cpu_quirk)
        quirk_setting = args[quirk_label]
        quirk_settings[quirk_label] = None if quirk_setting is None else bool(quirk_setting)

    opt_renderer = args["renderer"]
    auto_select_renderer = opt_renderer is None  # If necessary, try PyGame first, then Curses.
    mute_audio = args["mute"]

    # flake8: noqa: F401
    if auto_select_renderer or opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            if auto_select_renderer:
                opt_renderer = "curses"
            else:
                raise StartupError(
                    "PyGame does not appear to be installed."
                )
        else:
            opt_renderer = "pygame"
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer

            if mute_audio:
                from .audio.a_null import Audio
            else:
                from .audio.a_pygame import Audio

    if opt_renderer == "curses":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import curses
        except ImportError:
            if auto_select_renderer:
                raise StartupError(
                    "Neither PyGame nor Curses (or Windows-Curses) appear to be installed."
                )

            raise StartupError(
                "Curses (or Windows-Curses) does not appear to be installed."
            )
        else:
            from .inputs.i_curses import Inputs
            from .renderers.r_curses import Renderer

            # Terminals can handle beeps, but they are muted unless asked for
            if mute_audio or mute_audio is None:
                from .audio.a_null import Audio
            else:
                from .audio.a_curses import Audio

    if opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
        from .audio.a_null import Audio

    # Read the program image and write it into RAM, after the system font
    loader = Loader()
    machine = Machine()

    try:
        machine.load_program(loader.load_binary(args["filename"]))
    except OSError as error:
        raise StartupError("Unable to read program image: {}".format(error)) from error
    except ImageTooLargeError as error:
        raise StartupError(str(error)) from error

    # Set up a new rendering system
    renderer = Renderer(
        scale=args["scale"],
        pygame_palette=args["pygame_palette"],
        outlines=(None if args["outlines"] is None else bool(args["outlines"])),
        curses_cursor_mode=args["curses_cursor_mode"]
    )

    # Set up host inputs, and link to the chosen rendering module in case it provides inputs too
    inputs = Inputs(args["keymap"] or DEFAULT_KEYMAP, renderer)
    audio = Audio()

    # Set up debugger and live output if necessary
    debugger = Debugger()
    debugger.set_live(args["debug"])

    # Create a new CPU, plug it into the machine, and drive it from the host at 60Hz
    cpu = CPU(machine, debugger, **quirk_settings)
    scheduler = FrameScheduler(cpu, clock_speed=args["clock_speed"])
    host_loop = HostLoop(scheduler, renderer, inputs, audio)

    try:
        host_loop.run()
    finally:
        # The machine has halted, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
        audio.shutdown()
        inputs.shutdown()
        renderer.shutdown()
