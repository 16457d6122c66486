"""
Arithmetic evaluation over the expression AST.

Only numbers, declared variables, TFT_ color constants and the four
arithmetic operators are understood; no host code is ever executed.
"""

import math
from typing import Callable, Optional, Union

from .ast import Expression, Literal, Identifier, BinaryOp, UnaryOp
from .tokens import TokenType
from .parser import parse
from .errors import error_cannot_evaluate
from ..colors import is_color_name, lookup_color_constant

Number = Union[int, float]
Lookup = Callable[[str], Optional[Number]]


def _divide(left: Number, right: Number) -> Number:
    """IEEE-style division: x/0 gives +-inf, 0/0 gives nan."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        # the sign of a zero divisor matters, as in floating point
        sign = math.copysign(1.0, left) * math.copysign(1.0, right)
        return math.inf * sign
    return left / right


class Evaluator:
    """
    Evaluates expression nodes against a name lookup.

    Usage:
        Evaluator(scope.lookup).evaluate_text("(x + 4) / 2")
    """

    def __init__(self, lookup: Lookup = None):
        self.lookup = lookup or (lambda name: None)
        self.source = ""

    def evaluate_text(self, source: str) -> Number:
        """Parse and evaluate an expression string."""
        self.source = source
        return self.evaluate(parse(source))

    def evaluate(self, expr: Expression) -> Number:
        """Evaluate an expression to a number."""
        if isinstance(expr, Literal):
            return expr.value
        elif isinstance(expr, Identifier):
            return self._eval_identifier(expr)
        elif isinstance(expr, BinaryOp):
            return self._eval_binary_op(expr)
        elif isinstance(expr, UnaryOp):
            return self._eval_unary_op(expr)
        else:
            raise error_cannot_evaluate(
                self.source, f"unknown expression type: {type(expr).__name__}")

    def _eval_identifier(self, ident: Identifier) -> Number:
        """Evaluate an identifier (variable or color constant lookup)."""
        value = self.lookup(ident.name)
        if value is None and is_color_name(ident.name):
            value = lookup_color_constant(ident.name)
        if value is None:
            raise error_cannot_evaluate(self.source, f"undefined variable '{ident.name}'")
        return value

    def _eval_binary_op(self, op: BinaryOp) -> Number:
        left = self.evaluate(op.left)
        right = self.evaluate(op.right)

        if op.operator == TokenType.PLUS:
            return left + right
        elif op.operator == TokenType.MINUS:
            return left - right
        elif op.operator == TokenType.STAR:
            return left * right
        elif op.operator == TokenType.SLASH:
            return _divide(left, right)
        raise error_cannot_evaluate(self.source, f"unknown operator: {op.operator}")

    def _eval_unary_op(self, op: UnaryOp) -> Number:
        operand = self.evaluate(op.operand)

        if op.operator == TokenType.MINUS:
            return -operand
        elif op.operator == TokenType.PLUS:
            return operand
        raise error_cannot_evaluate(self.source, f"unknown unary operator: {op.operator}")


def evaluate_expression(source: str, lookup: Lookup = None) -> Number:
    """Evaluate an arithmetic expression string."""
    return Evaluator(lookup).evaluate_text(source.strip())
