#!/usr/bin/env python3

"""
CPU Debugger

If enabled, this will output information after each instruction executed:
    * All 16 of the [V] registers, starting with most significant (Vf) and
      reducing to least significant (V0)
    * I  - Index register
    * DT - Delay timer
    * ST - Sound timer
    * PC - Program counter of the instruction
    * OP - OpCode number
    * IN - Decoded instruction

If a crash occurs, all of the above will be outputted, with the addition of:
    * Stack - Stack contents
    * Wait  - Register awaiting a keypress, if any

Output goes to 'print' unless another sink is supplied, e.g. a list's 'append'.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .decoder import disassemble


class Debugger:
    def __init__(self, sink=print):
        self.live = False
        self.sink = sink

    def debug(self, machine, instruction, verbose=False):
        debug_str = (
            "V: 0x" + ("{:02x}" * 16) + " I: 0x{:04x} DT: 0x{:02x} ST: 0x{:02x} PC: 0x{:03x} OP: 0x{:04x} IN: {}"
        ).format(
            *[machine.v[reg_num] for reg_num in range(15, -1, -1)] +
            [machine.i, machine.dt, machine.st, machine.debug_pc, instruction.opcode, disassemble(instruction)]
        )

        if verbose:
            stack_items = machine.stack.get_items()
            stack_str = (" 0x{:03x}" * len(stack_items)).format(*stack_items)
            debug_str += "\nStack:{}".format(stack_str or " (Empty)")

            if machine.awaiting_key is not None:
                debug_str += "\nWait: V{:01x}".format(machine.awaiting_key)

        return debug_str

    def set_live(self, enabled):
        self.live = enabled

    def is_live(self):
        return self.live

    def output(self, machine, instruction):
        self.sink(self.debug(machine, instruction))
