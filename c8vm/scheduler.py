#!/usr/bin/env python3

"""
Frame Scheduler

Ties the CPU to a fixed 60Hz frame rate, independently of how long any
instruction takes on the host.  For every tick:

    1. If the machine is running, execute clock_speed // 60 instructions
    2. Decrement the delay and sound timers (if above zero)
    3. Report whether the framebuffer changed, and clear that flag

Nothing here sleeps or reads the clock.  Calling 'tick' 60 times a second is
the host loop's job.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import DEFAULT_CLOCK_SPEED, TIMER_FREQ, STATE_RUNNING


class SchedulerError(Exception):
    pass


class FrameScheduler:
    def __init__(self, cpu, clock_speed=None):
        if clock_speed is None:
            clock_speed = DEFAULT_CLOCK_SPEED

        if clock_speed < 0:
            raise SchedulerError("Clock speed cannot be negative")

        self.cpu = cpu
        self.machine = cpu.machine
        self.clock_speed = clock_speed
        self.ops_per_tick = clock_speed // TIMER_FREQ
        self.ops_executed = 0  # Read and reset by the host for performance reporting

    def tick(self):
        machine = self.machine

        if machine.run_state == STATE_RUNNING:
            step = self.cpu.step

            for _ in range(self.ops_per_tick):
                step()
                self.ops_executed += 1

                if machine.run_state != STATE_RUNNING:
                    break

            # Timers only count down while the machine is still running
            if machine.run_state == STATE_RUNNING:
                machine.decrement_timers()

        redraw = machine.redraw
        machine.redraw = False
        return redraw

    def sound_active(self):
        # The buzzer should sound while the sound timer is running, but not while paused
        return self.machine.run_state == STATE_RUNNING and self.machine.st > 0
