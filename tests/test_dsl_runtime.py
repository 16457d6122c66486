"""
Tests for the DSL runtime (interpreter, context, command registry).
"""

import textwrap
from pathlib import Path

import numpy as np
import pytest

import tftsim
from tftsim.colors import Color, WHITE, BLACK
from tftsim.drawable import Drawable
from tftsim.raster_drawable import RasterDrawable
from tftsim.dsl import Interpreter, execute, get_builtin_registry, BASE_FONT_SIZE, LINE_SPACING
from tftsim.dsl.runtime import (
    ExecutionContext, create_context, Scope, call_builtin,
    MIN_TEXT_SIZE, MAX_TEXT_SIZE,
)
from tftsim.dsl.errors import UnknownCommandError, ArgumentCountError

RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)


class RecordingDrawable(Drawable):
    """Drawable that remembers every primitive it is asked to draw."""

    def __init__(self, width=240, height=320):
        super().__init__(width, height)
        self.calls = []

    def _record(self, *call):
        self.calls.append(call)

    def fill_rect(self, x, y, w, h, color):
        self._record('fill_rect', x, y, w, h, color)

    def draw_rect(self, x, y, w, h, color):
        self._record('draw_rect', x, y, w, h, color)

    def draw_line(self, p0, p1, color):
        self._record('draw_line', p0, p1, color)

    def fill_polygon(self, points, color):
        self._record('fill_polygon', len(points), color)

    def draw_polygon(self, points, color):
        self._record('draw_polygon', len(points), color)

    def fill_ellipse(self, center, rx, ry, color):
        self._record('fill_ellipse', center, rx, ry, color)

    def draw_ellipse(self, center, rx, ry, color):
        self._record('draw_ellipse', center, rx, ry, color)

    def draw_text(self, text, location, color, size):
        self._record('draw_text', text, location, color, size)


def run(source, width=240, height=320):
    surface = RecordingDrawable(width, height)
    interp = Interpreter(surface)
    errors = interp.parse(textwrap.dedent(source), width, height)
    return surface, interp, errors


# --- Context Tests ---

class TestContext:
    """Test the per-run execution context."""

    def test_scope(self):
        scope = Scope()
        scope.declare("int", "a", 1)
        assert scope.lookup("a") == 1
        assert scope.lookup("b") is None
        assert scope.contains("a")
        scope.declare("float", "a", 2.5)
        assert scope.get("a").kind == "float"
        assert len(scope) == 1

    def test_defaults(self):
        ctx = create_context(240, 320, "a\nb")
        assert (ctx.cursor_x, ctx.cursor_y) == (0, 0)
        assert ctx.text_color == WHITE
        assert ctx.text_size == 1
        assert ctx.font_size == BASE_FONT_SIZE
        assert ctx.get_source_line(2) == "b"
        assert ctx.get_source_line(3) is None

    @pytest.mark.parametrize("size,expected", [
        (0, MIN_TEXT_SIZE),
        (-4, MIN_TEXT_SIZE),
        (20, MAX_TEXT_SIZE),
        (2.5, 2.5),
        (3, 3),
    ])
    def test_text_size_clamp(self, size, expected):
        ctx = ExecutionContext()
        ctx.set_text_size(size)
        assert ctx.text_size == expected

    def test_advance_line(self):
        ctx = ExecutionContext()
        ctx.set_text_size(2)
        ctx.set_cursor(5, 10)
        ctx.advance_line()
        assert ctx.cursor_y == 10 + 8 * 2 * 1.5
        assert ctx.cursor_x == 5


# --- Registry Tests ---

class TestBuiltins:
    """Test the command registry."""

    def test_all_commands_registered(self):
        registry = get_builtin_registry()
        assert registry.names() == sorted([
            "fillScreen", "fillRect", "drawRect", "fillRoundRect", "drawRoundRect",
            "fillCircle", "drawCircle", "drawLine", "fillTriangle", "drawTriangle",
            "drawString", "setTextColor", "setTextSize", "setCursor", "println",
        ])

    def test_command_signature(self):
        cmd = get_builtin_registry().get_command("fillRect")
        assert cmd.arity == 5
        assert cmd.param_names == ["x", "y", "w", "h", "color"]

    def test_unknown(self):
        with pytest.raises(UnknownCommandError):
            call_builtin("doThing", [], RecordingDrawable(), ExecutionContext())

    def test_too_few(self):
        with pytest.raises(ArgumentCountError) as exc_info:
            call_builtin("fillCircle", [1, 2], RecordingDrawable(), ExecutionContext())
        assert str(exc_info.value) == "fillCircle requires 4 arguments: x, y, r, color"

    def test_singular_noun(self):
        with pytest.raises(ArgumentCountError) as exc_info:
            call_builtin("fillScreen", [], RecordingDrawable(), ExecutionContext())
        assert str(exc_info.value) == "fillScreen requires 1 argument: color"


# --- Interpreter Tests ---

class TestInterpreter:
    """Test running programs against a recording surface."""

    def test_empty_program(self):
        surface, _, errors = run("")
        assert errors == []
        assert surface.calls == []

    def test_fill_screen(self):
        surface, _, errors = run("tft.fillScreen(TFT_GREEN);")
        assert errors == []
        assert surface.calls == [('fill_rect', 0, 0, 240, 320, GREEN)]

    def test_declaration_then_use(self):
        surface, interp, errors = run("""
            int margin = 10;
            tft.fillRect(margin, margin, WIDTH - margin*2, 50, TFT_BLUE);
        """)
        assert errors == []
        assert interp.context.get_variable("margin") == 10
        assert surface.calls == [('fill_rect', 10, 10, 220, 50, BLUE)]

    def test_redeclaration(self):
        surface, interp, errors = run("""
            int a = 1;
            int a = a + 1;
            tft.drawLine(a, 0, 0, a, TFT_WHITE);
        """)
        assert errors == []
        assert surface.calls == [('draw_line', (2, 0), (0, 2), WHITE)]

    def test_declared_type_is_advisory(self):
        """No wrapping or truncation happens for narrow types."""
        _, interp, errors = run("uint8_t big = 300 / 4;")
        assert errors == []
        assert interp.context.get_variable("big") == 75.0

    def test_height_substitution(self):
        surface, _, errors = run("tft.drawLine(0, HEIGHT, WIDTH, 0, TFT_RED);", 100, 50)
        assert errors == []
        assert surface.calls == [('draw_line', (0, 50), (100, 0), RED)]

    def test_unknown_command(self):
        _, _, errors = run("tft.doThing(1, 2);")
        assert errors == ["Line 1: Unknown command: doThing"]

    def test_arity_message(self):
        _, _, errors = run("tft.fillRect(10, 20);")
        assert len(errors) == 1
        assert errors[0].startswith("Line 1:")
        assert "5" in errors[0]
        assert errors[0] == "Line 1: fillRect requires 5 arguments: x, y, w, h, color"

    def test_line_numbers_include_comments(self):
        _, _, errors = run("// header\n\ntft.bogus();")
        assert errors == ["Line 3: Unknown command: bogus"]

    def test_errors_do_not_stop_the_run(self):
        surface, _, errors = run("""
            tft.bogus();
            tft.fillRect(1);
            tft.fillScreen(TFT_RED);
        """)
        assert len(errors) == 2
        assert surface.calls == [('fill_rect', 0, 0, 240, 320, RED)]

    def test_at_most_one_error_per_line(self):
        src = "tft.a()\ntft.b()\nint x = y\ntft.fillRect()\nnot code"
        _, _, errors = run(src)
        assert len(errors) == 4
        assert [e.split(":")[0] for e in errors] == ["Line 1", "Line 2", "Line 3", "Line 4"]

    def test_bad_declaration(self):
        _, interp, errors = run("int a = b + 1;")
        assert errors == ["Line 1: Cannot evaluate expression: b + 1"]
        assert interp.context.get_variable("a") is None

    def test_non_numeric_argument(self):
        surface, interp, errors = run('tft.fillRect("a", 0, 1, 1, TFT_RED);')
        assert interp.context.diagnostics.diagnostics[0].code == "E403"
        assert surface.calls == []

    def test_undeclared_identifier_argument(self):
        _, interp, errors = run("tft.fillRect(nope, 0, 1, 1, TFT_RED);")
        assert len(errors) == 1
        assert "nope" in errors[0]

    def test_negative_radius(self):
        _, interp, errors = run("tft.fillCircle(10, 10, -5, TFT_RED);")
        assert errors == ["Line 1: The radius provided (-5) is negative"]
        assert interp.context.diagnostics.diagnostics[0].code == "E405"

    def test_non_finite_radius_is_ignored(self):
        surface, _, errors = run("""
            tft.fillCircle(10, 10, -1/0, TFT_RED);
            tft.drawCircle(10, 10, 1/0, TFT_RED);
        """)
        assert errors == []
        assert surface.calls == []

    def test_trailing_comment(self):
        surface, interp, errors = run("""
            int m = 10; // margin
            tft.fillScreen(TFT_RED); // background
        """)
        assert errors == []
        assert interp.context.get_variable("m") == 10
        assert surface.calls == [('fill_rect', 0, 0, 240, 320, RED)]

    def test_unknown_color_is_white(self):
        surface, _, errors = run("tft.fillScreen(TFT_NOPE);")
        assert errors == []
        assert surface.calls[0][-1] == WHITE

    def test_numeric_color(self):
        surface, _, _ = run("tft.fillScreen(0x001F);")
        assert surface.calls[0][-1] == BLUE

    def test_extra_arguments_ignored(self):
        surface, _, errors = run("tft.fillScreen(TFT_RED, 1, 2);")
        assert errors == []
        assert len(surface.calls) == 1

    def test_unclassified_lines_ignored(self):
        surface, _, errors = run("""
            #include <TFT_eSPI.h>
            void setup() {
              Serial.begin(9600);
            }
        """)
        assert errors == []
        assert surface.calls == []

    def test_shapes_dispatch(self):
        surface, _, errors = run("""
            tft.drawRect(1, 2, 3, 4, TFT_RED);
            tft.fillCircle(50, 60, 5, TFT_RED);
            tft.drawCircle(50, 60, 5, TFT_RED);
            tft.fillTriangle(0, 0, 10, 0, 0, 10, TFT_RED);
            tft.drawTriangle(0, 0, 10, 0, 0, 10, TFT_RED);
            tft.fillRoundRect(0, 0, 40, 20, 4, TFT_RED);
            tft.drawRoundRect(0, 0, 40, 20, 4, TFT_RED);
        """)
        assert errors == []
        names = [c[0] for c in surface.calls]
        assert names == [
            'draw_rect', 'fill_ellipse', 'draw_ellipse',
            'fill_polygon', 'draw_polygon', 'fill_polygon', 'draw_polygon',
        ]
        assert surface.calls[1] == ('fill_ellipse', (50, 60), 5, 5, RED)
        assert surface.calls[3][1] == 3


class TestText:
    """Test text commands and the run-scoped text state."""

    def test_draw_string_uses_style(self):
        surface, _, errors = run("""
            tft.setTextColor(TFT_YELLOW);
            tft.setTextSize(2);
            tft.drawString("Hi", 5, 6);
        """)
        assert errors == []
        assert surface.calls == [('draw_text', "Hi", (5, 6), Color(255, 255, 0), 16)]

    def test_println_advances_cursor(self):
        surface, interp, errors = run("""
            tft.setCursor(0, 0);
            tft.println("a");
        """)
        assert errors == []
        assert interp.context.cursor_y == 12.0
        assert surface.calls[0][2] == (0, 0)

    def test_println_sequence(self):
        surface, interp, _ = run("""
            tft.setTextSize(2);
            tft.setCursor(5, 10);
            tft.println("Hi");
            tft.println(42);
        """)
        assert surface.calls[0] == ('draw_text', "Hi", (5, 10), WHITE, 16)
        assert surface.calls[1] == ('draw_text', "42", (5, 34.0), WHITE, 16)
        assert interp.context.cursor_y == 10 + 2 * (BASE_FONT_SIZE * 2 * LINE_SPACING)

    def test_text_size_clamped(self):
        _, interp, _ = run("tft.setTextSize(20);")
        assert interp.context.text_size == 10
        _, interp, _ = run("tft.setTextSize(0);")
        assert interp.context.text_size == 1

    def test_number_text_is_formatted(self):
        surface, _, _ = run("tft.drawString(12.0, 0, 0);")
        assert surface.calls[0][1] == "12"

    def test_dimension_text_leak(self):
        surface, _, _ = run('tft.drawString("WIDTH", 0, 0);', 128, 64)
        assert surface.calls[0][1] == "128"


class TestRunIsolation:
    """Every run starts from fresh state."""

    def test_style_resets(self):
        surface = RecordingDrawable()
        interp = Interpreter(surface)
        interp.parse("tft.setTextSize(3);\ntft.setTextColor(TFT_RED);", 240, 320)
        interp.parse('tft.println("x");', 240, 320)
        assert surface.calls == [('draw_text', "x", (0, 0), WHITE, BASE_FONT_SIZE)]

    def test_variables_reset(self):
        surface = RecordingDrawable()
        interp = Interpreter(surface)
        assert interp.parse("int a = 5;", 240, 320) == []
        errors = interp.parse("tft.fillRect(a, 0, 1, 1, TFT_RED);", 240, 320)
        assert len(errors) == 1

    def test_execute_helper(self):
        surface = RecordingDrawable()
        assert execute("tft.fillScreen(TFT_RED);", 240, 320, surface) == []
        assert len(surface.calls) == 1


# --- Rendered output ---

DEMO = """
int margin = 10;
tft.fillScreen(TFT_BLACK);
tft.fillRect(margin, margin, WIDTH - margin*2, 50, TFT_BLUE);
tft.drawCircle(WIDTH/2, HEIGHT/2, 40, TFT_YELLOW);
tft.setTextColor(TFT_WHITE);
tft.setTextSize(2);
tft.setCursor(20, 100);
tft.println("Hello");
tft.println(margin * 3);
"""


class TestRaster:
    """Test pixels produced on the Pillow surface."""

    def test_full_red(self):
        surface = RasterDrawable(240, 320)
        errors = Interpreter(surface).parse("tft.fillRect(0, 0, WIDTH, HEIGHT, TFT_RED);", 240, 320)
        assert errors == []
        pixels = surface.to_array()
        assert pixels.shape == (320, 240, 3)
        assert (pixels == [255, 0, 0]).all()

    def test_fill_screen_green(self):
        surface, errors = tftsim.render("tft.fillScreen(TFT_GREEN);", 32, 16)
        assert errors == []
        assert surface.pixel(0, 0) == GREEN
        assert surface.pixel(31, 15) == GREEN

    def test_margin_rect(self):
        surface, errors = tftsim.render(DEMO, 240, 320)
        assert errors == []
        assert surface.pixel(10, 10) == BLUE
        assert surface.pixel(229, 59) == BLUE
        assert surface.pixel(9, 10) == BLACK
        assert surface.pixel(230, 10) == BLACK
        assert surface.pixel(10, 60) == BLACK

    def test_idempotent(self):
        """Running the same program twice yields identical pixels."""
        surface = RasterDrawable(240, 320)
        _, first_errors = tftsim.render(DEMO, 240, 320, surface)
        first = surface.to_array()
        _, second_errors = tftsim.render(DEMO, 240, 320, surface)
        assert first_errors == second_errors
        assert np.array_equal(first, surface.to_array())

    def test_render_clears_first(self):
        surface = RecordingDrawable(10, 10)
        tftsim.render("", 10, 10, surface)
        assert surface.calls == [('fill_rect', 0, 0, 10, 10, BLACK)]

    def test_bundled_example(self):
        """The example sketch runs cleanly."""
        path = Path(__file__).parent.parent / "examples" / "dashboard.ino"
        surface, errors = tftsim.render(path.read_text(), 240, 320)
        assert errors == []
        assert surface.to_array().any()

    def test_huge_radius_fills_screen(self):
        surface = RasterDrawable(50, 50)
        errors = Interpreter(surface).parse("tft.fillCircle(10, 10, 1e300, TFT_RED);", 50, 50)
        assert errors == []
        assert (surface.to_array() == [255, 0, 0]).all()
