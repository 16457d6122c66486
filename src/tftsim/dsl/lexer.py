"""
Lexer for DSL arithmetic expressions.

Converts expression text such as `WIDTH - margin*2` (after dimension
substitution: `240 - margin*2`) into a list of tokens.
Supports:
- Integer and float literals (including `.5` and scientific notation)
- Hexadecimal literals (0xF800)
- Identifiers (declared variables and TFT_ color constants)
- The operators + - * / and parentheses
"""

import re
from typing import List, Optional, Iterator

from .tokens import Token, TokenType, OPERATORS
from .errors import error_cannot_evaluate


_NUMBER_RE = re.compile(r'(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
_HEX_RE = re.compile(r'0[xX][0-9a-fA-F]+')
_IDENT_RE = re.compile(r'[A-Za-z_]\w*')


class Lexer:
    """
    Tokenizer for a single arithmetic expression.

    Usage:
        tokens = Lexer("(x + 4) / 2").tokenize()
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0

    def _peek(self) -> str:
        if self.pos >= len(self.source):
            return '\0'
        return self.source[self.pos]

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _scan_token(self) -> Optional[Token]:
        """Scan one token, or return None for skipped whitespace."""
        ch = self._peek()
        start = self.pos

        if ch.isspace():
            self.pos += 1
            return None

        if ch in OPERATORS:
            self.pos += 1
            return Token(OPERATORS[ch], ch, start, ch)

        match = _HEX_RE.match(self.source, self.pos)
        if match:
            text = match.group()
            self.pos = match.end()
            return Token(TokenType.INT_LITERAL, int(text, 16), start, text)

        match = _NUMBER_RE.match(self.source, self.pos)
        if match:
            text = match.group()
            self.pos = match.end()
            if re.fullmatch(r'\d+', text):
                return Token(TokenType.INT_LITERAL, int(text), start, text)
            return Token(TokenType.FLOAT_LITERAL, float(text), start, text)

        match = _IDENT_RE.match(self.source, self.pos)
        if match:
            text = match.group()
            self.pos = match.end()
            return Token(TokenType.IDENTIFIER, text, start, text)

        raise error_cannot_evaluate(
            self.source, f"unexpected character '{ch}' at offset {start}")

    def __iter__(self) -> Iterator[Token]:
        while not self._is_at_end():
            token = self._scan_token()
            if token is not None:
                yield token
        yield Token(TokenType.EOF, None, self.pos)

    def tokenize(self) -> List[Token]:
        """Tokenize the whole expression, ending with an EOF token."""
        return list(self)


def tokenize(source: str) -> List[Token]:
    """Convenience function to tokenize an expression."""
    return Lexer(source).tokenize()
