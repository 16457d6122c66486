"""
Recursive descent parser for DSL arithmetic expressions.

Converts a token stream into an expression AST.
"""

from typing import List

from .tokens import Token, TokenType
from .ast import Expression, Literal, Identifier, BinaryOp, UnaryOp
from .lexer import tokenize
from .errors import error_cannot_evaluate


class Parser:
    """
    Recursive descent parser for arithmetic expressions.

    Usage:
        parser = Parser(tokens, source)
        expr = parser.parse_expression()

    The parser implements standard precedence climbing:
        Lowest:  + -
                 * /
        Highest: unary (- +)
    All binary operators are left-associative.
    """

    # Operator precedence levels (higher = tighter binding)
    PRECEDENCE = {
        TokenType.PLUS: 1,
        TokenType.MINUS: 1,
        TokenType.STAR: 2,
        TokenType.SLASH: 2,
    }

    def __init__(self, tokens: List[Token], source: str = ""):
        self.tokens = tokens
        self.source = source
        self.pos = 0

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _current(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[self.pos]

    def _check(self, token_type: TokenType) -> bool:
        return self._current().type == token_type

    def _advance(self) -> Token:
        token = self._current()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def _error(self, expected: str):
        token = self._current()
        found = "end of expression" if token.type == TokenType.EOF else repr(token.lexeme)
        return error_cannot_evaluate(
            self.source, f"expected {expected}, found {found} at offset {token.position}")

    # =========================================================================
    # Expressions
    # =========================================================================

    def parse(self) -> Expression:
        """Parse a complete expression; trailing tokens are an error."""
        expr = self.parse_expression()
        if not self._check(TokenType.EOF):
            raise self._error("operator")
        return expr

    def parse_expression(self) -> Expression:
        return self._parse_binary_expr(1)

    def _parse_binary_expr(self, min_precedence: int) -> Expression:
        """Parse binary expressions with precedence climbing."""
        left = self._parse_unary_expr()

        while True:
            op_token = self._current()
            precedence = self.PRECEDENCE.get(op_token.type)

            if precedence is None or precedence < min_precedence:
                break

            self._advance()  # consume operator
            right = self._parse_binary_expr(precedence + 1)

            left = BinaryOp(
                position=left.position,
                left=left,
                operator=op_token.type,
                right=right,
            )

        return left

    def _parse_unary_expr(self) -> Expression:
        """Parse unary expressions (-, +)."""
        if self._check(TokenType.MINUS) or self._check(TokenType.PLUS):
            op = self._advance()
            operand = self._parse_unary_expr()
            return UnaryOp(position=op.position, operator=op.type, operand=operand)

        return self._parse_primary_expr()

    def _parse_primary_expr(self) -> Expression:
        """Parse literals, identifiers and parenthesized expressions."""
        token = self._current()

        if token.type in (TokenType.INT_LITERAL, TokenType.FLOAT_LITERAL):
            self._advance()
            return Literal(position=token.position, value=token.value)

        if token.type == TokenType.IDENTIFIER:
            self._advance()
            return Identifier(position=token.position, name=token.value)

        if token.type == TokenType.LPAREN:
            self._advance()
            expr = self.parse_expression()
            if not self._check(TokenType.RPAREN):
                raise self._error("')'")
            self._advance()
            return expr

        raise self._error("number, name or '('")


def parse(source: str) -> Expression:
    """Tokenize and parse an expression string."""
    return Parser(tokenize(source), source).parse()
