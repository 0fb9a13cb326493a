"""Lowers an Expression into straight-line stack machine code.

Instruction set:
  Push(n)     push n
  Add         pop right, pop left, push left + right
  Subtract    pop right, pop left, push left - right
  Multiply    pop right, pop left, push left * right

There are no jumps or labels. Recursion only happens here, at compile time, over the tree; the emitted program is a
post-order walk, so operands are evaluated left before right exactly like the interpreter does. A tree with N leaves
compiles to N pushes and N - 1 binary ops.
"""

import operator
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from stackcalc.lang.error import InternalError
from stackcalc.pure.expression import Difference, Number, Product, Sum


class StackOp(ABC):
    """Superclass of every stack machine instruction."""

    def __repr__(self):
        return type(self).__name__


@dataclass(frozen=True, repr=False)
class Push(StackOp):
    value: float

    def __repr__(self):
        return f"Push({self.value!r})"


@dataclass(frozen=True, repr=False)
class BinaryOp(StackOp):
    """Instruction consuming the two topmost values. apply gets them in push order: (left, right)."""

    @staticmethod
    @abstractmethod
    def apply(left, right):
        """Returns left <op> right."""


@dataclass(frozen=True, repr=False)
class Add(BinaryOp):
    apply = staticmethod(operator.add)


@dataclass(frozen=True, repr=False)
class Subtract(BinaryOp):
    apply = staticmethod(operator.sub)


@dataclass(frozen=True, repr=False)
class Multiply(BinaryOp):
    apply = staticmethod(operator.mul)


INSTRUCTIONS = {
    Sum: Add(),
    Difference: Subtract(),
    Product: Multiply(),
}


def compile_expression(expression) -> List[StackOp]:
    """Returns the program computing expression. Deterministic: the same tree always gives an equal program."""
    program = []

    def _compile(node):
        if isinstance(node, Number):
            program.append(Push(node.value))
            return

        try:
            instruction = INSTRUCTIONS[type(node)]
        except KeyError:
            raise InternalError(f"cannot compile {node!r}") from None

        _compile(node.left)
        _compile(node.right)
        program.append(instruction)

    _compile(expression)
    return program
