#!/usr/bin/env python3

"""
Host Loop

Drives the frame scheduler at 60Hz and connects it to the host plugins.  Each
frame:

    * Inputs are processed first, so pause/quit requests and the keypad
      snapshot are in place before any instruction runs
    * The scheduler runs one tick
    * The framebuffer is pushed to the renderer if the tick changed it
    * The buzzer follows the sound timer

Once a second, the frame and instruction rates are shown in the window title.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter, sleep
from .constants import APP_NAME, FRAME_INTERVAL, INPUT_QUIT, INPUT_PAUSE, STATE_PAUSED


class HostLoop:
    def __init__(self, scheduler, renderer, inputs, audio, frame_interval=FRAME_INTERVAL):
        self.scheduler = scheduler
        self.machine = scheduler.machine
        self.framebuffer = self.machine.framebuffer
        self.renderer = renderer
        self.inputs = inputs
        self.audio = audio
        self.frame_interval = frame_interval
        self.frames = 0

        # Performance-related vars
        self.perf_counter_fps = 0
        self.next_perf_report_time = 0

        self.renderer.set_resolution(*self.framebuffer.get_vid_size())
        self.report_perf()

    def run(self, max_frames=None):
        try:
            self._run(max_frames)
        except KeyboardInterrupt:
            # An interrupt from the terminal is treated as a quit request
            self.machine.halt()
            self.audio.enable_buzzer(False)

    def _run(self, max_frames):
        next_frame_time = perf_counter()

        while max_frames is None or self.frames < max_frames:
            this_time = perf_counter()

            # Performance counters
            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = int(this_time) + 1.0
                self.report_perf(self.perf_counter_fps, self.scheduler.ops_executed)
                self.perf_counter_fps = 0
                self.scheduler.ops_executed = 0

            if not self.run_frame():
                return

            # Wait for the next frame.  If the host has fallen behind, don't try to catch up.
            next_frame_time += self.frame_interval
            remaining = next_frame_time - perf_counter()

            if remaining > 0:
                sleep(remaining)
            else:
                next_frame_time = perf_counter()

    def run_frame(self):
        # Returns False once the machine has been halted
        machine = self.machine

        for event in self.inputs.process_messages():
            if event == INPUT_QUIT:
                machine.halt()
            elif event == INPUT_PAUSE:
                machine.toggle_pause()
                self.report_perf()

        if machine.is_halted():
            self.audio.enable_buzzer(False)
            return False

        machine.set_keys(self.inputs.is_key_down(key) for key in range(0x10))

        if self.scheduler.tick():
            self.framebuffer.render(self.renderer)
            self.perf_counter_fps += 1

        self.audio.enable_buzzer(self.scheduler.sound_active())
        self.frames += 1
        return True

    def report_perf(self, fps=0, ops=0):
        title = "{} - {} FPS, {} OPS".format(APP_NAME, fps, ops)

        if self.machine.run_state == STATE_PAUSED:
            title += " (Paused)"

        self.renderer.set_title(title)
