"""Tree-walking evaluation of an Expression. Pure: the tree is only read."""

import operator

from stackcalc.lang.error import InternalError
from stackcalc.pure.expression import Difference, Number, Product, Sum


OPERATORS = {
    Sum: operator.add,
    Difference: operator.sub,
    Product: operator.mul,
}


def interpret(expression):
    """Returns the value of expression. The left operand is always evaluated before the right one."""
    if isinstance(expression, Number):
        return expression.value

    try:
        apply = OPERATORS[type(expression)]
    except KeyError:
        raise InternalError(f"cannot interpret {expression!r}") from None

    left = interpret(expression.left)
    right = interpret(expression.right)
    return apply(left, right)
