#!/usr/bin/env python3

"""
Instruction Decoder

Splits a raw 16-bit opcode into the fields every instruction draws from.  The
fields are always in the same opcode position, so decoding never fails: even
an opcode with no defined meaning produces an Instruction.

    nnn (addr)   = lowest 12 bits, an address or constant
    kk  (byte)   = lowest 8 bits
    n   (nibble) = lowest 4 bits
    x/y (vx/vy)  = register selectors from bits 8-11 and 4-7

'disassemble' renders an Instruction as its conventional mnemonic, for the
debugger's trace output.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple

Instruction = namedtuple("Instruction", ["opcode", "addr", "byte", "nibble", "vx", "vy"])


def decode(opcode):
    return Instruction(
        opcode=opcode & 0xFFFF,
        addr=opcode & 0xFFF,
        byte=opcode & 0xFF,
        nibble=opcode & 0xF,
        vx=(opcode & 0xF00) >> 8,
        vy=(opcode & 0xF0) >> 4
    )


# Mnemonic templates, keyed the same way the CPU dispatches
_GROUP_0 = {
    0xE0: "CLS",
    0xEE: "RET"
}

_GROUP_8 = {
    0x0: "LD V{vx:01x}, V{vy:01x}",
    0x1: "OR V{vx:01x}, V{vy:01x}",
    0x2: "AND V{vx:01x}, V{vy:01x}",
    0x3: "XOR V{vx:01x}, V{vy:01x}",
    0x4: "ADD V{vx:01x}, V{vy:01x}",
    0x5: "SUB V{vx:01x}, V{vy:01x}",
    0x6: "SHR V{vx:01x} {{, V{vy:01x}}}",
    0x7: "SUBN V{vx:01x}, V{vy:01x}",
    0xE: "SHL V{vx:01x} {{, V{vy:01x}}}"
}

_GROUP_E = {
    0x9E: "SKP V{vx:01x}",
    0xA1: "SKNP V{vx:01x}"
}

_GROUP_F = {
    0x07: "LD V{vx:01x}, DT",
    0x0A: "LD V{vx:01x}, K",
    0x15: "LD DT, V{vx:01x}",
    0x18: "LD ST, V{vx:01x}",
    0x1E: "ADD I, V{vx:01x}",
    0x29: "LD F, V{vx:01x}",
    0x33: "LD B, V{vx:01x}",
    0x55: "LD [I], V{vx:01x}",
    0x65: "LD V{vx:01x}, [I]"
}

_SINGLE = {
    0x1: "JP 0x{addr:03x}",
    0x2: "CALL 0x{addr:03x}",
    0x3: "SE V{vx:01x}, 0x{byte:02x}",
    0x4: "SNE V{vx:01x}, 0x{byte:02x}",
    0x5: "SE V{vx:01x}, V{vy:01x}",
    0x6: "LD V{vx:01x}, 0x{byte:02x}",
    0x7: "ADD V{vx:01x}, 0x{byte:02x}",
    0x9: "SNE V{vx:01x}, V{vy:01x}",
    0xA: "LD I, 0x{addr:03x}",
    0xB: "JP V0, 0x{addr:03x}",
    0xC: "RND V{vx:01x}, 0x{byte:02x}",
    0xD: "DRW V{vx:01x}, V{vy:01x}, 0x{nibble:01x}"
}


def disassemble(instruction):
    group = instruction.opcode >> 12

    if group == 0x0:
        template = _GROUP_0.get(instruction.byte)
    elif group == 0x8:
        template = _GROUP_8.get(instruction.nibble)
    elif group == 0xE:
        template = _GROUP_E.get(instruction.byte)
    elif group == 0xF:
        template = _GROUP_F.get(instruction.byte)
    else:
        template = _SINGLE[group]

    if template is None:
        return "???"

    return template.format(**instruction._asdict())
