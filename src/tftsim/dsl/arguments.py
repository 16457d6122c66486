"""
Argument list splitting and value resolution for drawing calls.

`split_arguments` cuts the text between the parentheses of a
`tft.command(...)` call into argument tokens; `resolve_value` turns each
token into a string, a color constant name or a number.
"""

import re
from typing import Any, List, Optional, Union

from .tokens import COLOR_PREFIX, HEX_PREFIXES, EXPRESSION_CHARS
from .errors import EvaluationError
from .evaluator import Lookup, evaluate_expression

Number = Union[int, float]

_QUOTES = ('"', "'")
_DECIMAL_RE = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
_INTEGER_RE = re.compile(r'[+-]?\d+')
_HEX_DIGITS_RE = re.compile(r'[0-9a-fA-F]+')
_IDENT_RE = re.compile(r'[A-Za-z_]\w*')


def split_arguments(text: str) -> List[str]:
    """
    Split an argument list on top-level commas.

    Commas inside string literals or nested parentheses do not split.
    A quote preceded by a backslash neither opens nor closes a string.
    Each argument is trimmed; a blank list gives no arguments.
    """
    if not text.strip():
        return []

    args = []
    current = []
    quote = None
    depth = 0

    for i, ch in enumerate(text):
        if ch in _QUOTES and (i == 0 or text[i - 1] != '\\'):
            if quote is None:
                quote = ch
            elif ch == quote:
                quote = None
        elif quote is None:
            if ch == '(':
                depth += 1
            elif ch == ')':
                depth -= 1
            elif ch == ',' and depth == 0:
                args.append(''.join(current).strip())
                current = []
                continue
        current.append(ch)

    last = ''.join(current).strip()
    if last:
        args.append(last)
    return args


def parse_number(text: str) -> Optional[Number]:
    """Parse a whole token as a decimal number, or return None."""
    text = text.strip()
    if _INTEGER_RE.fullmatch(text):
        return int(text)
    if _DECIMAL_RE.fullmatch(text):
        return float(text)
    return None


def parse_hex(text: str) -> Optional[int]:
    """
    Parse the hex digits following a 0x prefix.

    Like C's strtol, parsing stops at the first non-hex character, so
    `0x10+5` gives 16. Returns None when no digits follow the prefix.
    """
    match = _HEX_DIGITS_RE.match(text, 2)
    if match is None:
        return None
    return int(match.group(), 16)


def is_quoted(token: str) -> bool:
    return token[:1] in _QUOTES


def resolve_value(token: str, lookup: Lookup = None) -> Any:
    """
    Resolve one trimmed argument token.

    Priority:
    1. quoted string: the text between the quotes
    2. TFT_ name: kept as a symbolic color name
    3. 0x literal: integer
    4. contains an operator or parenthesis: evaluated, falling back to
       a plain number, then to the raw token
    5. declared variable: its value
    6. decimal number, otherwise the raw token
    """
    if is_quoted(token):
        if len(token) > 1 and token.endswith(token[0]):
            return token[1:-1]
        return token[1:]

    if token.startswith(COLOR_PREFIX):
        return token

    if token.startswith(HEX_PREFIXES):
        value = parse_hex(token)
        return token if value is None else value

    if any(ch in EXPRESSION_CHARS for ch in token):
        try:
            return evaluate_expression(token, lookup)
        except EvaluationError:
            number = parse_number(token)
            return token if number is None else number

    if lookup is not None and _IDENT_RE.fullmatch(token):
        value = lookup(token)
        if value is not None:
            return value

    number = parse_number(token)
    return token if number is None else number


def parse_arguments(text: str, lookup: Lookup = None) -> List[Any]:
    """Split and resolve an argument list."""
    return [resolve_value(token, lookup) for token in split_arguments(text)]
