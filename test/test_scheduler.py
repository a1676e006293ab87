#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from c8vm.cpu import CPU, CPUError
from c8vm.debugger import Debugger
from c8vm.machine import Machine
from c8vm.scheduler import FrameScheduler, SchedulerError


class TestFrameScheduler(unittest.TestCase):
    def setUp(self):
        self.machine = Machine()
        self.cpu = CPU(self.machine, Debugger())
        self.scheduler = FrameScheduler(self.cpu)

    def _load(self, *opcodes):
        self.machine.load_program(b"".join(opcode.to_bytes(2, "big") for opcode in opcodes))

    def test_scheduler_default_clock_speed(self):
        self.assertEqual(500, self.scheduler.clock_speed)
        self.assertEqual(8, self.scheduler.ops_per_tick)

    def test_scheduler_clock_speed(self):
        self.assertEqual(1, FrameScheduler(self.cpu, clock_speed=60).ops_per_tick)
        self.assertEqual(0, FrameScheduler(self.cpu, clock_speed=59).ops_per_tick)
        self.assertRaises(SchedulerError, FrameScheduler, self.cpu, -1)

    def test_scheduler_tick_runs_batch(self):
        self._load(*([0x7001] * 20))
        self.scheduler.tick()
        self.assertEqual(8, self.machine.v[0x0])
        self.assertEqual(0x210, self.machine.pc)
        self.assertEqual(8, self.scheduler.ops_executed)
        self.scheduler.tick()
        self.assertEqual(16, self.machine.v[0x0])

    def test_scheduler_timers(self):
        self.machine.dt = 2
        self.machine.st = 1
        self._load(0x1200)
        self.scheduler.tick()
        self.assertEqual((1, 0), (self.machine.dt, self.machine.st))
        self.scheduler.tick()
        self.assertEqual((0, 0), (self.machine.dt, self.machine.st))
        self.scheduler.tick()
        self.assertEqual((0, 0), (self.machine.dt, self.machine.st))

    def test_scheduler_timers_after_instructions(self):
        # LD V0, 0x03; LD DT, V0; then spin.  DT is set during the tick, then decremented once at the end.
        self._load(0x6003, 0xF015, 0x1204)
        self.scheduler.tick()
        self.assertEqual(2, self.machine.dt)

    def test_scheduler_redraw_reported_once(self):
        self._load(0x00E0, 0x1202)
        self.assertTrue(self.scheduler.tick())
        self.assertFalse(self.machine.redraw)
        self.assertFalse(self.scheduler.tick())

    def test_scheduler_paused(self):
        self._load(0x7001, 0x1200)
        self.machine.dt = 5
        self.machine.st = 5
        self.machine.toggle_pause()
        self.assertFalse(self.scheduler.tick())
        self.assertEqual(0x200, self.machine.pc)
        self.assertEqual((5, 5), (self.machine.dt, self.machine.st))
        self.assertFalse(self.scheduler.sound_active())

        self.machine.toggle_pause()
        self.scheduler.tick()
        self.assertEqual((4, 4), (self.machine.dt, self.machine.st))
        self.assertTrue(self.scheduler.sound_active())

    def test_scheduler_halted(self):
        self._load(0x7001)
        self.machine.halt()
        self.scheduler.tick()
        self.assertEqual(0x200, self.machine.pc)
        self.assertEqual(0, self.scheduler.ops_executed)

    def test_scheduler_key_wait_across_ticks(self):
        self._load(0xF50A, 0x6101, 0x1204)
        self.machine.dt = 10
        self.scheduler.tick()
        self.assertEqual(0x200, self.machine.pc)
        self.assertEqual(9, self.machine.dt)  # Timers keep running while waiting
        self.scheduler.tick()
        self.assertEqual(0x200, self.machine.pc)

        # The host applies the key before the next tick
        self.machine.press_key(0xE)
        self.scheduler.tick()
        self.assertEqual(0xE, self.machine.v[0x5])
        self.assertEqual(0x1, self.machine.v[0x1])
        self.assertEqual(0x204, self.machine.pc)

    def test_scheduler_stack_overflow(self):
        self._load(0x2200)

        with self.assertRaises(CPUError):
            self.scheduler.tick()
            self.scheduler.tick()

        self.assertTrue(self.machine.is_halted())
        self.assertEqual(12, len(self.machine.stack))

    def test_scheduler_leaving_running_mid_tick(self):
        machine = self.machine
        cpu = self.cpu

        class PausingCPU:
            # Executes one instruction, then pauses the machine
            def __init__(self):
                self.machine = machine

            def step(self):
                cpu.step()
                machine.toggle_pause()

        self._load(0x7001, 0x7001)
        machine.dt = 5
        machine.st = 5
        scheduler = FrameScheduler(PausingCPU())
        scheduler.tick()
        self.assertEqual(1, machine.v[0x0])
        self.assertEqual(1, scheduler.ops_executed)
        self.assertEqual((5, 5), (machine.dt, machine.st))
