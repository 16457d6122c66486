"""
DSL Runtime - line interpreter for TFT drawing programs.

This module provides:
- Interpreter: Executes programs against a Drawable
- ExecutionContext: Variables, text cursor and style for one run
- BuiltinRegistry: The drawing and text commands
"""

from .context import (
    Variable,
    Scope,
    ExecutionContext,
    create_context,
    BASE_FONT_SIZE,
    LINE_SPACING,
    MIN_TEXT_SIZE,
    MAX_TEXT_SIZE,
)

from .builtins import (
    BuiltinCommand,
    BuiltinRegistry,
    get_builtin_registry,
    call_builtin,
)

from .interpreter import (
    Interpreter,
    RunResult,
    execute,
)

__all__ = [
    # Context
    'Variable',
    'Scope',
    'ExecutionContext',
    'create_context',
    'BASE_FONT_SIZE',
    'LINE_SPACING',
    'MIN_TEXT_SIZE',
    'MAX_TEXT_SIZE',

    # Builtins
    'BuiltinCommand',
    'BuiltinRegistry',
    'get_builtin_registry',
    'call_builtin',

    # Interpreter
    'Interpreter',
    'RunResult',
    'execute',
]
