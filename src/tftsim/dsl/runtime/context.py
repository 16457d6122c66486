"""
Execution context for the DSL interpreter.

Holds everything that lives for exactly one run: declared variables,
the text cursor, the text style and the collected diagnostics.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union

from ..errors import Diagnostic, DiagnosticCollector
from ...colors import Color, WHITE

Number = Union[int, float]

# Pixel height of a size-1 glyph
BASE_FONT_SIZE = 8

# println advances the cursor by this many glyph heights
LINE_SPACING = 1.5

MIN_TEXT_SIZE = 1
MAX_TEXT_SIZE = 10


@dataclass
class Variable:
    """A declared variable. The declared kind is kept for display only."""
    name: str
    kind: str
    value: Number


@dataclass
class Scope:
    """
    Variable bindings for one run.

    Programs are straight-line, so there is a single flat scope.
    Redeclaring a name replaces its binding.
    """
    variables: Dict[str, Variable] = field(default_factory=dict)

    def declare(self, kind: str, name: str, value: Number) -> Variable:
        """Bind (or rebind) a variable."""
        var = Variable(name, kind, value)
        self.variables[name] = var
        return var

    def get(self, name: str) -> Optional[Variable]:
        """Look up a variable by name."""
        return self.variables.get(name)

    def lookup(self, name: str) -> Optional[Number]:
        """Current value of a variable, or None if undeclared."""
        var = self.variables.get(name)
        return var.value if var is not None else None

    def contains(self, name: str) -> bool:
        return name in self.variables

    def __iter__(self) -> Iterator[Variable]:
        return iter(self.variables.values())

    def __len__(self) -> int:
        return len(self.variables)


@dataclass
class ExecutionContext:
    """
    The full state of one run.

    Tracks:
    - Variable scope
    - Surface dimensions
    - Text cursor and style
    - Diagnostics
    """
    width: Number = 0
    height: Number = 0

    scope: Scope = field(default_factory=Scope)

    cursor_x: Number = 0
    cursor_y: Number = 0
    text_color: Color = WHITE
    text_size: Number = MIN_TEXT_SIZE

    diagnostics: DiagnosticCollector = field(default_factory=DiagnosticCollector)

    # Source tracking for error messages
    source_lines: List[str] = field(default_factory=list)

    def get_variable(self, name: str) -> Optional[Number]:
        return self.scope.lookup(name)

    def set_variable(self, kind: str, name: str, value: Number) -> None:
        self.scope.declare(kind, name, value)

    @property
    def font_size(self) -> Number:
        """Pixel height of glyphs at the current text size."""
        return BASE_FONT_SIZE * self.text_size

    def set_text_size(self, size: Number) -> None:
        """Set the text size, clamped to [MIN_TEXT_SIZE, MAX_TEXT_SIZE]."""
        self.text_size = max(MIN_TEXT_SIZE, min(MAX_TEXT_SIZE, size))

    def set_cursor(self, x: Number, y: Number) -> None:
        self.cursor_x = x
        self.cursor_y = y

    def advance_line(self) -> None:
        """Move the cursor down one text line."""
        self.cursor_y += self.font_size * LINE_SPACING

    def add_diagnostic(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.add(diagnostic)

    def get_source_line(self, line_num: int) -> Optional[str]:
        """Get a source line for error messages (1-indexed)."""
        if 1 <= line_num <= len(self.source_lines):
            return self.source_lines[line_num - 1]
        return None


def create_context(width: Number, height: Number, source: str = "") -> ExecutionContext:
    """Create a fresh context for one run."""
    return ExecutionContext(
        width=width,
        height=height,
        source_lines=source.split('\n') if source else [],
    )
