"""Abstract syntax tree for calculator expressions.

An expression is a finite binary tree: Number leaves and Sum/Difference/Product nodes with exactly two children. Nodes
are frozen after construction, so a tree can be evaluated any number of times, by either backend, from any thread.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class Expression(ABC):
    """Superclass of every syntax tree node."""

    @property
    @abstractmethod
    def nodes(self):
        """Child nodes, left to right. Empty for leaves."""

    @abstractmethod
    def __str__(self):
        """Fully parenthesized infix form."""

    def leaves(self):
        """Number of Number leaves in this tree."""
        if not self.nodes:
            return 1
        return sum(node.leaves() for node in self.nodes)

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <Expression>(
            <Expression>(...),
            Number(<value>)
        )
        """
        if not self.nodes:
            return f"{'    ' * indents}{self!r}"

        result = f"{'    ' * indents}{type(self).__name__}("
        result += ",".join("\n" + node.display(indents + 1) for node in self.nodes)
        return result + f"\n{'    ' * indents})"


@dataclass(frozen=True, repr=False)
class Number(Expression):
    value: float

    @property
    def nodes(self):
        return ()

    def __repr__(self):
        return f"Number({self.value!r})"

    def __str__(self):
        return repr(self.value)


@dataclass(frozen=True, repr=False)
class BinaryExpression(Expression):
    """Expression with two operands. Subclasses only differ by their symbol."""
    SYMBOL = None

    left: Expression
    right: Expression

    @property
    def nodes(self):
        return self.left, self.right

    def __repr__(self):
        return f"{type(self).__name__}({self.left!r}, {self.right!r})"

    def __str__(self):
        return f"({self.left} {self.SYMBOL} {self.right})"


@dataclass(frozen=True, repr=False)
class Sum(BinaryExpression):
    SYMBOL = "+"


@dataclass(frozen=True, repr=False)
class Difference(BinaryExpression):
    SYMBOL = "-"


@dataclass(frozen=True, repr=False)
class Product(BinaryExpression):
    SYMBOL = "*"
