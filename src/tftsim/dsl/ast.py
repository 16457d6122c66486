"""
Abstract Syntax Tree node definitions for DSL expressions.

Only arithmetic is represented: numbers, names, unary and binary
operators. Statements are matched line by line and never become AST.
"""

from dataclasses import dataclass
from typing import Union

from .tokens import TokenType


@dataclass
class Expression:
    """Base class for all expression nodes."""
    position: int       # offset of the node's first token in the source text


@dataclass
class Literal(Expression):
    """Numeric literal: 42, 3.14, 0xF800."""
    value: Union[int, float]


@dataclass
class Identifier(Expression):
    """Variable or color constant reference."""
    name: str


@dataclass
class UnaryOp(Expression):
    """Unary operation: -x, +x."""
    operator: TokenType
    operand: Expression


@dataclass
class BinaryOp(Expression):
    """Binary operation: a + b, a * b."""
    left: Expression
    operator: TokenType
    right: Expression
