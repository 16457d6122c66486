"""
Statement splitting and classification.

A program is processed one physical line at a time. Each line that is
not blank or a comment is classified as a variable declaration, a
drawing call, or neither (in which case it is ignored).
"""

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

from .tokens import TYPE_KEYWORDS, RECEIVER, WIDTH_SYMBOL, HEIGHT_SYMBOL

Number = Union[int, float]

COMMENT_PREFIXES = ("//", "/*", "*")

_DECLARATION_RE = re.compile(
    r'^(?P<kind>' + '|'.join(sorted(TYPE_KEYWORDS, key=len, reverse=True)) + r')'
    r'\s+(?P<name>[A-Za-z_]\w*)\s*=\s*(?P<expr>.+)$'
)

_CALL_RE = re.compile(re.escape(RECEIVER) + r'\.(?P<command>\w+)\((?P<args>.*)\)')


@dataclass
class Declaration:
    """`<kind> <name> = <expression>`"""
    line: int
    kind: str
    name: str
    expression: str


@dataclass
class Call:
    """`tft.<command>(<arguments>)`"""
    line: int
    command: str
    arguments: str


Statement = Union[Declaration, Call]


def format_number(value: Number) -> str:
    """Shortest decimal text for a number: 240 rather than 240.0."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def substitute_dimensions(source: str, width: Number, height: Number) -> str:
    """
    Replace whole-word WIDTH and HEIGHT with the surface size.

    This is a raw text substitution: it also rewrites the words inside
    string literals and comments.
    """
    source = re.sub(r'\b' + WIDTH_SYMBOL + r'\b', format_number(width), source)
    source = re.sub(r'\b' + HEIGHT_SYMBOL + r'\b', format_number(height), source)
    return source


def is_skipped(line: str) -> bool:
    """Blank and comment lines are never executed."""
    return not line or line.startswith(COMMENT_PREFIXES)


def strip_trailing_comment(line: str) -> str:
    """Drop a `//` comment that follows code, leaving `//` inside
    string literals alone."""
    quote = None
    i = 0
    while i < len(line):
        ch = line[i]
        if quote:
            if ch == '\\':
                i += 1
            elif ch == quote:
                quote = None
        elif ch in ('"', "'"):
            quote = ch
        elif line.startswith('//', i):
            return line[:i].rstrip()
        i += 1
    return line


def iter_lines(source: str) -> Iterator[Tuple[int, str]]:
    """Yield (line_number, text) for every executable line, 1-based."""
    for index, raw in enumerate(source.split('\n')):
        line = raw.strip()
        if is_skipped(line):
            continue
        line = strip_trailing_comment(line)
        if line.endswith(';'):
            line = line[:-1].strip()
        yield index + 1, line


def classify(line: str, line_number: int = 0) -> Optional[Statement]:
    """Classify a trimmed line; returns None when it matches neither grammar."""
    match = _DECLARATION_RE.match(line)
    if match:
        return Declaration(
            line=line_number,
            kind=match.group('kind'),
            name=match.group('name'),
            expression=match.group('expr').strip(),
        )

    match = _CALL_RE.search(line)
    if match:
        return Call(
            line=line_number,
            command=match.group('command'),
            arguments=match.group('args'),
        )

    return None


def iter_statements(source: str) -> Iterator[Tuple[int, str, Optional[Statement]]]:
    """Yield (line_number, text, statement) for every executable line."""
    for line_number, line in iter_lines(source):
        yield line_number, line, classify(line, line_number)
