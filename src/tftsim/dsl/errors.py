"""
DSL-specific exceptions and error handling.

Every problem found while running a program is reported as a
line-scoped Diagnostic; exceptions only carry a diagnostic up to the
interpreter, which records it and moves on to the next line.

Error code ranges:
- E40x: Runtime errors (command dispatch, argument resolution, drawing)
"""

from dataclasses import dataclass, field
from typing import Optional, List


@dataclass
class Diagnostic:
    """A single diagnostic message tied to one source line."""
    code: str                       # E401, E402, etc.
    message: str                    # Human-readable message
    line: int = 0                   # 1-based source line, 0 if unknown
    source_line: Optional[str] = None
    hints: List[str] = field(default_factory=list)

    def format(self, verbose: bool = False) -> str:
        """
        Format the diagnostic for display.

        The default is the single `Line <n>: <message>` form returned by
        the interpreter; verbose output adds the source line and hints.
        """
        parts = [f"Line {self.line}: {self.message}"]
        if not verbose:
            return parts[0]

        if self.source_line is not None:
            parts.append(f"{self.line:>4} | {self.source_line}")

        for hint in self.hints:
            parts.append(f"     = hint: {hint}")

        return "\n".join(parts)

    def __str__(self) -> str:
        return self.format()

    def to_json(self) -> dict:
        """Convert to JSON-serializable dict for tooling integration."""
        return {
            "code": self.code,
            "message": self.message,
            "line": self.line,
            "hints": self.hints,
        }


class DslError(Exception):
    """Base exception for DSL errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    def __str__(self) -> str:
        return self.diagnostic.message


class UnknownCommandError(DslError):
    """Command name not present in the registry (E401)."""
    pass


class ArgumentCountError(DslError):
    """Fewer arguments than the command requires (E402)."""
    pass


class ArgumentTypeError(DslError):
    """Argument resolved to the wrong kind of value (E403)."""
    pass


class EvaluationError(DslError):
    """Malformed arithmetic expression (E404)."""

    def __init__(self, diagnostic: Diagnostic, expression: str = ""):
        self.expression = expression
        super().__init__(diagnostic)


# --- Runtime error codes ---

def error_unknown_command(name: str) -> UnknownCommandError:
    """E401: Unknown command."""
    diag = Diagnostic(
        code="E401",
        message=f"Unknown command: {name}",
    )
    return UnknownCommandError(diag)


def error_argument_count(name: str, required: int,
                         params: List[str]) -> ArgumentCountError:
    """E402: Too few arguments."""
    noun = "argument" if required == 1 else "arguments"
    diag = Diagnostic(
        code="E402",
        message=f"{name} requires {required} {noun}: {', '.join(params)}",
    )
    return ArgumentCountError(diag)


def error_argument_type(name: str, param: str, value) -> ArgumentTypeError:
    """E403: Argument is not a number."""
    diag = Diagnostic(
        code="E403",
        message=f"{name}: argument '{param}' must be a number, got {value!r}",
    )
    return ArgumentTypeError(diag)


def error_cannot_evaluate(expression: str, reason: str = None) -> EvaluationError:
    """E404: Expression cannot be evaluated."""
    diag = Diagnostic(
        code="E404",
        message=f"Cannot evaluate expression: {expression}",
        hints=[reason] if reason else [],
    )
    return EvaluationError(diag, expression)


def diagnostic_from_exception(exc: Exception, line: int,
                              source_line: str = None) -> Diagnostic:
    """Convert any exception raised while running a line into a Diagnostic."""
    if isinstance(exc, DslError):
        diag = exc.diagnostic
        return Diagnostic(
            code=diag.code,
            message=diag.message,
            line=line,
            source_line=source_line,
            hints=list(diag.hints),
        )

    # Surfaces reject bad geometry (negative radius, ...) with ValueError
    code = "E405" if isinstance(exc, ValueError) else "E400"
    return Diagnostic(
        code=code,
        message=str(exc) or type(exc).__name__,
        line=line,
        source_line=source_line,
    )


class DiagnosticCollector:
    """Collects diagnostics during a run. Every diagnostic is an error."""

    def __init__(self):
        self.diagnostics: List[Diagnostic] = []

    def add(self, diagnostic: Diagnostic) -> None:
        """Add a diagnostic."""
        self.diagnostics.append(diagnostic)

    def __len__(self) -> int:
        return len(self.diagnostics)

    def __iter__(self):
        return iter(self.diagnostics)

    @property
    def error_count(self) -> int:
        return len(self.diagnostics)

    @property
    def has_errors(self) -> bool:
        return bool(self.diagnostics)

    def messages(self) -> List[str]:
        """The diagnostics as `Line <n>: <message>` strings, in order."""
        return [d.format() for d in self.diagnostics]

    def format_all(self, verbose: bool = True) -> str:
        """Format all diagnostics for display, with a closing count."""
        parts = [d.format(verbose) for d in self.diagnostics]
        if self.diagnostics:
            parts.append(f"{self.error_count} error(s)")
        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert all diagnostics to JSON format."""
        return {
            "diagnostics": [d.to_json() for d in self.diagnostics],
            "error_count": self.error_count,
        }
