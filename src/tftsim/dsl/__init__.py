"""
TFT drawing DSL interpreter.

This module provides:
- Statement splitting and classification (declarations and tft.* calls)
- Argument splitting and value resolution
- Lexer/Parser/Evaluator for arithmetic expressions
- Interpreter: Executes a program against a Drawable

Usage:
    from tftsim import RasterDrawable
    from tftsim.dsl import Interpreter

    source = '''
    int margin = 10;
    tft.fillScreen(TFT_BLACK);
    tft.fillRect(margin, margin, WIDTH - margin*2, 50, TFT_BLUE);
    '''
    surface = RasterDrawable(240, 320)
    for error in Interpreter(surface).parse(source, 240, 320):
        print(error)
"""

from .tokens import (
    Token,
    TokenType,
    TYPE_KEYWORDS,
    RECEIVER,
    COLOR_PREFIX,
    is_type_keyword,
)

from .errors import (
    Diagnostic,
    DiagnosticCollector,
    DslError,
    UnknownCommandError,
    ArgumentCountError,
    ArgumentTypeError,
    EvaluationError,
)

from .lexer import (
    Lexer,
    tokenize,
)

from .parser import (
    Parser,
    parse,
)

from .ast import (
    Expression,
    Literal,
    Identifier,
    UnaryOp,
    BinaryOp,
)

from .evaluator import (
    Evaluator,
    evaluate_expression,
)

from .statements import (
    Declaration,
    Call,
    classify,
    iter_statements,
    substitute_dimensions,
    format_number,
)

from .arguments import (
    split_arguments,
    resolve_value,
    parse_arguments,
)

from .runtime import (
    Interpreter,
    RunResult,
    ExecutionContext,
    Scope,
    Variable,
    BuiltinRegistry,
    get_builtin_registry,
    execute,
    BASE_FONT_SIZE,
    LINE_SPACING,
)

__all__ = [
    # Tokens
    'Token',
    'TokenType',
    'TYPE_KEYWORDS',
    'RECEIVER',
    'COLOR_PREFIX',
    'is_type_keyword',

    # Errors
    'Diagnostic',
    'DiagnosticCollector',
    'DslError',
    'UnknownCommandError',
    'ArgumentCountError',
    'ArgumentTypeError',
    'EvaluationError',

    # Expressions
    'Lexer',
    'tokenize',
    'Parser',
    'parse',
    'Expression',
    'Literal',
    'Identifier',
    'UnaryOp',
    'BinaryOp',
    'Evaluator',
    'evaluate_expression',

    # Statements and arguments
    'Declaration',
    'Call',
    'classify',
    'iter_statements',
    'substitute_dimensions',
    'format_number',
    'split_arguments',
    'resolve_value',
    'parse_arguments',

    # Runtime
    'Interpreter',
    'RunResult',
    'ExecutionContext',
    'Scope',
    'Variable',
    'BuiltinRegistry',
    'get_builtin_registry',
    'execute',
    'BASE_FONT_SIZE',
    'LINE_SPACING',
]
