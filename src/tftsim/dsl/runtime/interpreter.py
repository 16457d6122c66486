"""
Line-by-line interpreter for TFT drawing programs.

Executes declarations and `tft.<command>(...)` calls against a Drawable,
collecting one diagnostic per failing line without stopping the run.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .context import ExecutionContext, create_context
from .builtins import call_builtin
from ..arguments import parse_arguments
from ..evaluator import evaluate_expression
from ..statements import Call, Declaration, Statement, iter_statements, substitute_dimensions
from ..errors import Diagnostic, diagnostic_from_exception

Number = Union[int, float]


@dataclass
class RunResult:
    """Result of running a program."""
    diagnostics: List[Diagnostic] = field(default_factory=list)
    context: Optional[ExecutionContext] = None

    @property
    def success(self) -> bool:
        return not self.diagnostics

    @property
    def messages(self) -> List[str]:
        """Diagnostics formatted as `Line <n>: <message>`."""
        return [d.format() for d in self.diagnostics]


class Interpreter:
    """
    Interpreter bound to one Drawable.

    Each call to `parse` or `run` is an independent run: variables, the
    text cursor and the text style start fresh. The drawable is not
    cleared; callers clear it when they want a blank screen.

    Usage:
        surface = RasterDrawable(240, 320)
        errors = Interpreter(surface).parse(source, 240, 320)
    """

    def __init__(self, drawable):
        self.drawable = drawable
        self.context: Optional[ExecutionContext] = None

    def parse(self, source: str, width: Number, height: Number) -> List[str]:
        """Run a program and return its diagnostics as strings."""
        return self.run(source, width, height).messages

    def run(self, source: str, width: Number, height: Number) -> RunResult:
        """Run a program and return structured diagnostics."""
        source = substitute_dimensions(source, width, height)
        ctx = create_context(width, height, source)
        self.context = ctx

        for line_number, _, statement in iter_statements(source):
            if statement is None:
                continue
            try:
                self._execute_statement(statement, ctx)
            except Exception as e:
                ctx.add_diagnostic(diagnostic_from_exception(
                    e, line_number, ctx.get_source_line(line_number)))

        return RunResult(diagnostics=list(ctx.diagnostics), context=ctx)

    def _execute_statement(self, stmt: Statement, ctx: ExecutionContext) -> None:
        if isinstance(stmt, Declaration):
            self._execute_declaration(stmt, ctx)
        elif isinstance(stmt, Call):
            self._execute_call(stmt, ctx)

    def _execute_declaration(self, decl: Declaration, ctx: ExecutionContext) -> None:
        """Evaluate the initializer and bind (or rebind) the variable."""
        value = evaluate_expression(decl.expression, ctx.get_variable)
        ctx.set_variable(decl.kind, decl.name, value)

    def _execute_call(self, call: Call, ctx: ExecutionContext) -> None:
        args = parse_arguments(call.arguments, ctx.get_variable)
        call_builtin(call.command, args, self.drawable, ctx)


def execute(source: str, width: Number, height: Number, drawable) -> List[str]:
    """Convenience function: run a program against a drawable."""
    return Interpreter(drawable).parse(source, width, height)
