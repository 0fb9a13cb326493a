"""Stack machine executing programs produced by the compiler.

Execution is straight-line: the instruction pointer only moves forward, one instruction at a time, against a single
value stack owned by the machine. Programs are assumed well-formed (only ever produced by compile_expression), so a
stack underflow is a broken compiler contract and raises InternalError rather than a user-facing error.
"""

import math
from typing import List

from stackcalc.backend.compiler import BinaryOp, Push
from stackcalc.lang.error import InternalError


class StackMachine:
    """Runs one program. A StackMachine is single-use: its stack is not shared and not reset between runs."""

    def __init__(self, program):
        self.program = program
        self.stack: List[float] = []

    def run(self) -> List[float]:
        """Executes every instruction in order and returns the final stack (one element for a compiled tree)."""
        for instruction in self.program:
            self.execute(instruction)
        return self.stack

    def execute(self, instruction):
        if isinstance(instruction, Push):
            self.stack.append(instruction.value)
        elif isinstance(instruction, BinaryOp):
            right = self.pop(instruction)  # right was pushed last
            left = self.pop(instruction)
            self.stack.append(instruction.apply(left, right))
        else:
            raise InternalError(f"unknown instruction {instruction!r}")

    def pop(self, instruction):
        if not self.stack:
            raise InternalError(f"stack underflow while executing {instruction!r}")
        return self.stack.pop()


def run_stack(program):
    """Returns the final stack of program, run on a fresh machine."""
    return StackMachine(program).run()


def only_element(stack):
    """Returns the single value left by a complete program."""
    if len(stack) != 1:
        raise InternalError(f"expected exactly one value on the stack, got {stack!r}")
    return stack[0]


def same_value(left, right):
    """Whether two results agree. Two NaN results count as the same value."""
    return left == right or (math.isnan(left) and math.isnan(right))
