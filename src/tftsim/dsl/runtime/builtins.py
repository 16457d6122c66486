"""
Built-in command registry for the DSL interpreter.

Maps `tft.<command>` names to their argument signature and to an
implementation that draws on a Drawable or updates the run context.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from .context import ExecutionContext
from ..errors import error_unknown_command, error_argument_count, error_argument_type
from ..statements import format_number
from ...colors import resolve_color

# Parameter kinds
NUMBER = "number"
COLOR = "color"
TEXT = "text"


@dataclass
class BuiltinCommand:
    """
    A built-in command with its signature and implementation.

    `params` lists (name, kind) pairs; the command requires at least
    that many arguments and ignores extras.
    """
    name: str
    params: List[Tuple[str, str]]
    implementation: Callable[..., None]
    doc: str = ""

    @property
    def arity(self) -> int:
        return len(self.params)

    @property
    def param_names(self) -> List[str]:
        return [name for name, _ in self.params]

    def bind(self, args: List[Any]) -> List[Any]:
        """Check arity and convert arguments to their parameter kinds."""
        if len(args) < self.arity:
            raise error_argument_count(self.name, self.arity, self.param_names)

        bound = []
        for (param, kind), value in zip(self.params, args):
            if kind == NUMBER:
                if not _is_number(value):
                    raise error_argument_type(self.name, param, value)
                bound.append(value)
            elif kind == COLOR:
                bound.append(resolve_color(value))
            else:
                bound.append(_to_text(value))
        return bound


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_text(value: Any) -> str:
    if _is_number(value):
        return format_number(value)
    return str(value)


def _params(spec: str) -> List[Tuple[str, str]]:
    """Build a parameter list from 'x y w h color' style shorthand."""
    kinds = {"color": COLOR, "text": TEXT}
    return [(name, kinds.get(name, NUMBER)) for name in spec.split()]


class BuiltinRegistry:
    """
    Registry of all drawing and state commands.

    Implementations are called as impl(drawable, ctx, *bound_args).
    """

    def __init__(self):
        self._commands: Dict[str, BuiltinCommand] = {}
        self._register_all()

    def get_command(self, name: str) -> Optional[BuiltinCommand]:
        """Look up a command by name."""
        return self._commands.get(name)

    def register(self, command: BuiltinCommand) -> None:
        self._commands[command.name] = command

    def names(self) -> List[str]:
        return sorted(self._commands)

    def __contains__(self, name: str) -> bool:
        return name in self._commands

    def _add(self, name: str, params: str, impl: Callable[..., None], doc: str = "") -> None:
        self.register(BuiltinCommand(name, _params(params), impl, doc))

    def _register_all(self) -> None:
        self._register_shape_commands()
        self._register_text_commands()

    # --- Shapes ---

    def _register_shape_commands(self) -> None:

        def _fill_screen(d, ctx, color):
            d.fill_screen(color)

        def _fill_rect(d, ctx, x, y, w, h, color):
            d.fill_rect(x, y, w, h, color)

        def _draw_rect(d, ctx, x, y, w, h, color):
            d.draw_rect(x, y, w, h, color)

        def _fill_round_rect(d, ctx, x, y, w, h, r, color):
            d.fill_round_rect(x, y, w, h, r, color)

        def _draw_round_rect(d, ctx, x, y, w, h, r, color):
            d.draw_round_rect(x, y, w, h, r, color)

        def _fill_circle(d, ctx, x, y, r, color):
            d.fill_circle((x, y), r, color)

        def _draw_circle(d, ctx, x, y, r, color):
            d.draw_circle((x, y), r, color)

        def _draw_line(d, ctx, x0, y0, x1, y1, color):
            d.draw_line((x0, y0), (x1, y1), color)

        def _fill_triangle(d, ctx, x0, y0, x1, y1, x2, y2, color):
            d.fill_triangle((x0, y0), (x1, y1), (x2, y2), color)

        def _draw_triangle(d, ctx, x0, y0, x1, y1, x2, y2, color):
            d.draw_triangle((x0, y0), (x1, y1), (x2, y2), color)

        self._add("fillScreen", "color", _fill_screen, "Fill the whole screen")
        self._add("fillRect", "x y w h color", _fill_rect, "Filled rectangle")
        self._add("drawRect", "x y w h color", _draw_rect, "Rectangle outline")
        self._add("fillRoundRect", "x y w h r color", _fill_round_rect,
                  "Filled rectangle with rounded corners")
        self._add("drawRoundRect", "x y w h r color", _draw_round_rect,
                  "Rounded rectangle outline")
        self._add("fillCircle", "x y r color", _fill_circle, "Filled circle")
        self._add("drawCircle", "x y r color", _draw_circle, "Circle outline")
        self._add("drawLine", "x0 y0 x1 y1 color", _draw_line, "Straight line")
        self._add("fillTriangle", "x0 y0 x1 y1 x2 y2 color", _fill_triangle,
                  "Filled triangle")
        self._add("drawTriangle", "x0 y0 x1 y1 x2 y2 color", _draw_triangle,
                  "Triangle outline")

    # --- Text ---

    def _register_text_commands(self) -> None:

        def _draw_string(d, ctx, text, x, y):
            d.draw_text(text, (x, y), ctx.text_color, ctx.font_size)

        def _set_text_color(d, ctx, color):
            ctx.text_color = color

        def _set_text_size(d, ctx, size):
            ctx.set_text_size(size)

        def _set_cursor(d, ctx, x, y):
            ctx.set_cursor(x, y)

        def _println(d, ctx, text):
            d.draw_text(text, (ctx.cursor_x, ctx.cursor_y), ctx.text_color, ctx.font_size)
            ctx.advance_line()

        self._add("drawString", "text x y", _draw_string,
                  "Draw text at a position with the current style")
        self._add("setTextColor", "color", _set_text_color, "Set the text color")
        self._add("setTextSize", "size", _set_text_size, "Set the text size (1-10)")
        self._add("setCursor", "x y", _set_cursor, "Move the text cursor")
        self._add("println", "text", _println,
                  "Draw text at the cursor and move to the next line")


# Global registry instance
_registry: Optional[BuiltinRegistry] = None


def get_builtin_registry() -> BuiltinRegistry:
    """Get the global built-in command registry."""
    global _registry
    if _registry is None:
        _registry = BuiltinRegistry()
    return _registry


def call_builtin(name: str, args: List[Any], drawable, ctx: ExecutionContext) -> None:
    """
    Call a built-in command by name.

    Raises UnknownCommandError, ArgumentCountError or ArgumentTypeError.
    """
    command = get_builtin_registry().get_command(name)
    if command is None:
        raise error_unknown_command(name)
    command.implementation(drawable, ctx, *command.bind(args))
