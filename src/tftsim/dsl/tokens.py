"""
Token types and source-level constants for the TFT drawing DSL.

Programs are line oriented: a line is either a variable declaration or a
`tft.command(...)` call. Only arithmetic expressions are tokenized in the
classic sense; the rest of the grammar is matched per line.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, FrozenSet

from ..colors import COLOR_PREFIX, HEX_PREFIXES


class TokenType(Enum):
    """Token types recognized by the expression lexer."""

    # --- Literals ---
    INT_LITERAL = auto()        # 42, 0xF800
    FLOAT_LITERAL = auto()      # 3.14, .5, 1e-3

    # --- Identifiers ---
    IDENTIFIER = auto()         # declared variables, TFT_ constants

    # --- Arithmetic operators ---
    PLUS = auto()               # +
    MINUS = auto()              # -
    STAR = auto()               # *
    SLASH = auto()              # /

    # --- Delimiters ---
    LPAREN = auto()             # (
    RPAREN = auto()             # )

    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A lexical token within one expression."""
    type: TokenType
    value: Any          # parsed value for literals, name for identifiers
    position: int       # 0-based offset into the expression text
    lexeme: str = ""

    def __str__(self) -> str:
        if self.lexeme:
            return f"{self.type.name}({self.lexeme!r})"
        return self.type.name


OPERATORS = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.STAR,
    '/': TokenType.SLASH,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
}

# Characters that mark an argument as an arithmetic expression
EXPRESSION_CHARS: FrozenSet[str] = frozenset(OPERATORS)

# Declaration type keywords; the declared kind is advisory only
TYPE_KEYWORDS: FrozenSet[str] = frozenset({
    "int",
    "float",
    "double",
    "uint8_t",
    "uint16_t",
    "uint32_t",
    "long",
    "short",
    "byte",
})

# Object every drawing call is made on: tft.fillRect(...)
RECEIVER = "tft"

# Dimension symbols substituted before a program is split into lines
WIDTH_SYMBOL = "WIDTH"
HEIGHT_SYMBOL = "HEIGHT"


def is_type_keyword(word: str) -> bool:
    """Check if a word is a declaration type keyword."""
    return word in TYPE_KEYWORDS
