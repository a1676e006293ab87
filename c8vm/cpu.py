#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  Each call
to 'step' runs exactly one instruction against the Machine it was given:

    1. Fetch the big-endian opcode at PC
    2. Decode it into an Instruction
    3. Advance PC past it (so jumps and calls use absolute targets)
    4. Dispatch on the top nibble, then on N or NN for grouped opcodes

Opcodes with no defined action are skipped without complaint.  Stack misuse is
the only thing that halts the CPU, since continuing would mean returning to an
address that was never pushed.

The CPU knows nothing about real time.  Timers are decremented, and the
instruction rate is decided, by the frame scheduler.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import randint
from .constants import APP_INTRO, ADDRESS_MASK, FONT_LOCATION, FONT_GLYPH_SIZE, STATE_RUNNING
from .decoder import decode
from .stack import StackError


class CPUError(Exception):
    pass


class CPU:
    def __init__(self, machine, debugger, shift_quirks=None, index_overflow_quirks=None):
        self.machine = machine
        self.ram = machine.ram
        self.stack = machine.stack
        self.framebuffer = machine.framebuffer
        self.debugger = debugger
        self.instruction = decode(0)

        """
        Quirks
        ------

        - Shift quirks          : Enabled by default.  8xy6/8xyE shift Vx in place.  If disabled, Vy is shifted into
                                  Vx, as on the original COSMAC VIP interpreter.
        - Index overflow quirks : Disabled by default.  If enabled, Fx1E sets Vf when I passes 0xFFF, as the Amiga
                                  interpreter did.
        """

        self.shift_quirks = True if shift_quirks is None else shift_quirks
        self.index_overflow_quirks = False if index_overflow_quirks is None else index_overflow_quirks

        # Initial lookup for instructions' first nibble.
        # n = Nibble
        # kk = Byte
        # nnn = address
        # x/y = register (0-15)
        self.instructions = {
            0x0: self._0nnn,
            0x1: self._1nnn,
            0x2: self._2nnn,
            0x3: self._3xkk,
            0x4: self._4xkk,
            0x5: self._5xy0,
            0x6: self._6xkk,
            0x7: self._7xkk,
            0x8: self._8nnn,
            0x9: self._9xy0,
            0xA: self._Annn,
            0xB: self._Bnnn,
            0xC: self._Cxkk,
            0xD: self._Dxyn,
            0xE: self._Ennn,
            0xF: self._Fnnn
        }

        # Instructions beginning with nibble 0x0, keyed on kk
        self.instructions_0 = {
            0xE0: self._00E0,
            0xEE: self._00EE
        }

        # Instructions beginning with nibble 0x8, keyed on n
        self.instructions_8 = {
            0x0: self._8xy0,
            0x1: self._8xy1,
            0x2: self._8xy2,
            0x3: self._8xy3,
            0x4: self._8xy4,
            0x5: self._8xy5,
            0x6: self._8xy6,
            0x7: self._8xy7,
            0xE: self._8xyE
        }

        # Instructions beginning with nibble 0xE, keyed on kk
        self.instructions_e = {
            0x9E: self._Ex9E,
            0xA1: self._ExA1
        }

        # Instructions beginning with nibble 0xF, keyed on kk
        self.instructions_f = {
            0x07: self._Fx07,
            0x0A: self._Fx0A,
            0x15: self._Fx15,
            0x18: self._Fx18,
            0x1E: self._Fx1E,
            0x29: self._Fx29,
            0x33: self._Fx33,
            0x55: self._Fx55,
            0x65: self._Fx65
        }

    def step(self):
        machine = self.machine

        if machine.run_state != STATE_RUNNING:
            return

        if machine.awaiting_key is not None:
            # Still sitting on LD Vx, K.  Don't fetch anything until a key is down.
            self._poll_key_wait()
            return

        # Keep track of the program counter before altering it in any way for debugging purposes
        machine.debug_pc = machine.pc
        instruction = decode(self.fetch())
        self.instruction = instruction
        self.inc_pc()  # Program counter updates after fetch, but before execute
        self.execute(instruction)

        if self.debugger.is_live():
            self.debugger.output(machine, instruction)

    def fetch(self):
        pc = self.machine.pc
        return (self.ram.read(pc) << 8) | self.ram.read((pc + 1) & ADDRESS_MASK)

    def execute(self, instruction):
        self.instructions[instruction.opcode >> 12](instruction)

    def inc_pc(self):
        self.machine.pc = (self.machine.pc + 2) & ADDRESS_MASK

    def dec_pc(self):
        # Only used to re-run instructions (i.e. keypress wait and stack faults)
        self.machine.pc = (self.machine.pc - 2) & ADDRESS_MASK

    def _call_grouped(self, group, key, instruction):
        handler = group.get(key)

        # Undefined opcodes are ignored.  PC has already moved past them.
        if handler is not None:
            handler(instruction)

    def _stack_fault(self, error):
        machine = self.machine
        machine.pc = machine.debug_pc
        machine.halt()

        raise CPUError(
            (
                "Emulation halted.\n\n" +
                "{}Debug info:\n" +
                "{}\n\n{} at address 0x{:03x}."
            ).format(
                APP_INTRO, self.debugger.debug(machine, self.instruction, verbose=True), error, machine.debug_pc
            )
        ) from error

    def _0nnn(self, instruction):
        self._call_grouped(self.instructions_0, instruction.byte, instruction)

    def _8nnn(self, instruction):
        self._call_grouped(self.instructions_8, instruction.nibble, instruction)

    def _Ennn(self, instruction):
        self._call_grouped(self.instructions_e, instruction.byte, instruction)

    def _Fnnn(self, instruction):
        self._call_grouped(self.instructions_f, instruction.byte, instruction)

    def _00E0(self, _):  # CLS
        self.framebuffer.clear()
        self.machine.redraw = True

    def _00EE(self, _):  # RET
        try:
            self.machine.pc = self.stack.pop()
        except StackError as error:
            self._stack_fault(error)

    def _1nnn(self, instruction):  # JP addr
        self.machine.pc = instruction.addr

    def _2nnn(self, instruction):  # CALL addr
        try:
            self.stack.push(self.machine.pc)
        except StackError as error:
            self._stack_fault(error)

        self.machine.pc = instruction.addr

    def _3xkk(self, instruction):  # SE Vx, byte
        if self.machine.v[instruction.vx] == instruction.byte:
            self.inc_pc()

    def _4xkk(self, instruction):  # SNE Vx, byte
        if self.machine.v[instruction.vx] != instruction.byte:
            self.inc_pc()

    def _5xy0(self, instruction):  # SE Vx, Vy
        v = self.machine.v

        if v[instruction.vx] == v[instruction.vy]:
            self.inc_pc()

    def _6xkk(self, instruction):  # LD Vx, byte
        self.machine.v[instruction.vx] = instruction.byte

    def _7xkk(self, instruction):  # ADD Vx, byte
        v = self.machine.v
        v[instruction.vx] = (v[instruction.vx] + instruction.byte) & 0xFF  # No carry flag

    def _8xy0(self, instruction):  # LD Vx, Vy
        v = self.machine.v
        v[instruction.vx] = v[instruction.vy]

    def _8xy1(self, instruction):  # OR Vx, Vy
        v = self.machine.v
        v[instruction.vx] |= v[instruction.vy]

    def _8xy2(self, instruction):  # AND Vx, Vy
        v = self.machine.v
        v[instruction.vx] &= v[instruction.vy]

    def _8xy3(self, instruction):  # XOR Vx, Vy
        v = self.machine.v
        v[instruction.vx] ^= v[instruction.vy]

    # For the arithmetic instructions, the flag is worked out from the original operands and written to Vf first.  If
    # Vf is also the destination, the result overwrites the flag.

    def _8xy4(self, instruction):  # ADD Vx, Vy
        v = self.machine.v
        val = v[instruction.vx] + v[instruction.vy]
        v[0xF] = int(val > 0xFF)  # Vf is set when carrying
        v[instruction.vx] = val & 0xFF

    def _8xy5(self, instruction):  # SUB Vx, Vy
        v = self.machine.v
        vx_val = v[instruction.vx]
        vy_val = v[instruction.vy]
        v[0xF] = int(vy_val <= vx_val)  # Vf is set when NOT borrowing
        v[instruction.vx] = (vx_val - vy_val) & 0xFF

    def _8xy6(self, instruction):  # SHR Vx {, Vy}
        v = self.machine.v
        val = v[instruction.vx if self.shift_quirks else instruction.vy]
        v[0xF] = val & 1
        v[instruction.vx] = val >> 1

    def _8xy7(self, instruction):  # SUBN Vx, Vy
        v = self.machine.v
        vx_val = v[instruction.vx]
        vy_val = v[instruction.vy]
        v[0xF] = int(vx_val <= vy_val)
        v[instruction.vx] = (vy_val - vx_val) & 0xFF

    def _8xyE(self, instruction):  # SHL Vx {, Vy}
        v = self.machine.v
        val = v[instruction.vx if self.shift_quirks else instruction.vy]
        v[0xF] = (val >> 7) & 1
        v[instruction.vx] = (val << 1) & 0xFF

    def _9xy0(self, instruction):  # SNE Vx, Vy
        v = self.machine.v

        if v[instruction.vx] != v[instruction.vy]:
            self.inc_pc()

    def _Annn(self, instruction):  # LD I, addr
        self.machine.i = instruction.addr

    def _Bnnn(self, instruction):  # JP V0, addr
        self.machine.pc = (self.machine.v[0x0] + instruction.addr) & ADDRESS_MASK

    def _Cxkk(self, instruction):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.machine.v[instruction.vx] = randint(0, 0xFF) & instruction.byte

    def _Dxyn(self, instruction):  # DRW Vx, Vy, nibble
        # The sprite's start always wraps, but anything past the right or bottom edge is clipped
        machine = self.machine
        v = machine.v
        ram = self.ram
        framebuffer = self.framebuffer
        vid_width, vid_height = framebuffer.get_vid_size()
        vx_pos = v[instruction.vx] % vid_width
        vy_pos = v[instruction.vy] % vid_height
        i = machine.i
        collided = False

        for y in range(instruction.nibble):
            scr_y = vy_pos + y

            if scr_y >= vid_height:
                break

            spr_data = ram.read((i + y) & ADDRESS_MASK)

            for x in range(8):
                scr_x = vx_pos + x

                if scr_x >= vid_width:
                    break

                if spr_data & (0x80 >> x) and framebuffer.xor_pixel(scr_x, scr_y):
                    # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                    collided = True

        v[0xF] = int(collided)
        machine.redraw = True

    def _Ex9E(self, instruction):  # SKP Vx
        machine = self.machine

        if machine.keys[machine.v[instruction.vx] & 0xF]:
            self.inc_pc()

    def _ExA1(self, instruction):  # SKNP Vx
        machine = self.machine

        if not machine.keys[machine.v[instruction.vx] & 0xF]:
            self.inc_pc()

    def _Fx07(self, instruction):  # LD Vx, DT
        self.machine.v[instruction.vx] = self.machine.dt

    def _Fx0A(self, instruction):  # LD Vx, K
        machine = self.machine
        key = machine.get_lowest_key_down()

        if key is None:
            # Point back at this instruction and wait.  The timers still need to expire correctly, so control returns
            # to the scheduler, which keeps calling 'step' until a key is seen.
            machine.awaiting_key = instruction.vx
            self.dec_pc()
        else:
            machine.v[instruction.vx] = key

    def _poll_key_wait(self):
        machine = self.machine
        key = machine.get_lowest_key_down()

        if key is not None:
            machine.v[machine.awaiting_key] = key
            machine.awaiting_key = None
            self.inc_pc()

    def _Fx15(self, instruction):  # LD DT, Vx
        self.machine.dt = self.machine.v[instruction.vx]

    def _Fx18(self, instruction):  # LD ST, Vx
        self.machine.st = self.machine.v[instruction.vx]

    def _Fx1E(self, instruction):  # ADD I, Vx
        machine = self.machine
        val = machine.i + machine.v[instruction.vx]
        machine.i = val & 0xFFFF  # I is only ever masked to its 16-bit width

        # Allow for Amiga CHIP-8 interpreter behaviour
        if self.index_overflow_quirks:
            machine.v[0xF] = int(val > ADDRESS_MASK)

    def _Fx29(self, instruction):  # LD F, Vx
        self.machine.i = FONT_LOCATION + (self.machine.v[instruction.vx] & 0xF) * FONT_GLYPH_SIZE

    def _Fx33(self, instruction):  # LD B, Vx
        val = self.machine.v[instruction.vx]
        i = self.machine.i
        self.ram.write(i & ADDRESS_MASK, val // 100)               # Most-significant digit
        self.ram.write((i + 1) & ADDRESS_MASK, (val // 10) % 10)  # Middle digit
        self.ram.write((i + 2) & ADDRESS_MASK, val % 10)          # Least-significant digit

    def _Fx55(self, instruction):  # LD [I], Vx
        machine = self.machine
        i = machine.i

        for reg in range(instruction.vx + 1):
            self.ram.write((i + reg) & ADDRESS_MASK, machine.v[reg])

    def _Fx65(self, instruction):  # LD Vx, [I]
        machine = self.machine
        i = machine.i

        for reg in range(instruction.vx + 1):
            machine.v[reg] = self.ram.read((i + reg) & ADDRESS_MASK)
