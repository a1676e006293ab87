#!/usr/bin/env python3

"""
Stack Emulator

It is unnecessary to include the CPU call stack as part of system RAM, because
there is no specified location for it.  There is also no stack pointer (SP)
register exposed to the running program.  This means we can simply wrap a
bounded list to fully emulate it.

Original CHIP-8 interpreters reserved room for 12 return addresses.  Pushing a
13th, or returning with nothing pushed, would have corrupted the interpreter.
Here both raise a specific error so the CPU can halt cleanly and report it.
"""

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class StackOverflowError(StackError):
    pass


class StackUnderflowError(StackError):
    pass


class Stack:
    def __init__(self, size):
        self.items = []
        self.size = size

    def __len__(self):
        return len(self.items)

    def push(self, item):
        if len(self.items) >= self.size:
            raise StackOverflowError("Stack overflow")

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackUnderflowError("Stack underflow") from None

    def is_full(self):
        return len(self.items) >= self.size

    def get_items(self):
        # For debugging
        return self.items
