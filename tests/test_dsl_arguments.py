"""
Tests for argument splitting and value resolution.
"""

import pytest

from tftsim.dsl import split_arguments, resolve_value, parse_arguments
from tftsim.dsl.arguments import parse_number, parse_hex


class TestSplitArguments:
    """Test top-level comma splitting."""

    def test_simple(self):
        assert split_arguments("10, 20,30") == ["10", "20", "30"]

    def test_commas_inside_strings(self):
        """Commas in a string literal do not split; quotes are kept."""
        assert split_arguments('"a, b", 5, TFT_RED') == ['"a, b"', "5", "TFT_RED"]

    def test_single_quotes(self):
        assert split_arguments("'x,y', 1") == ["'x,y'", "1"]

    def test_mixed_quotes(self):
        """A double quote inside a single-quoted string does not close it."""
        assert split_arguments("'say \"hi\", ok', 2") == ["'say \"hi\", ok'", "2"]

    def test_escaped_quote(self):
        assert split_arguments(r'"a \", b", 7') == [r'"a \", b"', "7"]

    def test_nested_parentheses(self):
        assert split_arguments("(1 + 2) * 3, (4, 5)") == ["(1 + 2) * 3", "(4, 5)"]

    def test_blank(self):
        assert split_arguments("") == []
        assert split_arguments("   ") == []

    def test_trailing_comma(self):
        """A blank final argument is dropped."""
        assert split_arguments("1, 2,") == ["1", "2"]


class TestNumbers:
    """Test number and hex parsing helpers."""

    def test_parse_number(self):
        assert parse_number("42") == 42
        assert isinstance(parse_number("42"), int)
        assert parse_number(" 1.5 ") == 1.5
        assert parse_number("1e3") == 1000.0
        assert parse_number("-7") == -7

    def test_parse_number_rejects_partial(self):
        """The whole token must be numeric."""
        assert parse_number("12px") is None
        assert parse_number("abc") is None

    def test_parse_hex(self):
        assert parse_hex("0xff") == 255
        assert parse_hex("0XF800") == 0xF800

    def test_parse_hex_stops_at_non_digit(self):
        assert parse_hex("0x10+5") == 16
        assert parse_hex("0xFFzz") == 255

    def test_parse_hex_without_digits(self):
        assert parse_hex("0x") is None
        assert parse_hex("0xg") is None


class TestResolveValue:
    """Test the resolution priority for a single argument."""

    def test_quoted_string(self):
        assert resolve_value('"Hello"') == "Hello"
        assert resolve_value("'Hi there'") == "Hi there"

    def test_unterminated_string(self):
        assert resolve_value('"abc') == "abc"

    def test_quoted_number_stays_text(self):
        assert resolve_value('"42"') == "42"

    def test_color_name_kept(self):
        """TFT_ names are left for the color resolver, known or not."""
        assert resolve_value("TFT_RED") == "TFT_RED"
        assert resolve_value("TFT_NOPE") == "TFT_NOPE"

    def test_hex(self):
        assert resolve_value("0xF800") == 0xF800

    def test_hex_before_expression(self):
        """Hex tokens are never evaluated as expressions."""
        assert resolve_value("0x10+5") == 16

    def test_hex_prefix_only(self):
        assert resolve_value("0x") == "0x"

    def test_expression(self):
        assert resolve_value("240 - 10*2") == 220
        assert resolve_value("(4 + 4) / 2") == 4.0

    def test_negative_number(self):
        assert resolve_value("-5") == -5

    def test_expression_with_variable(self):
        assert resolve_value("margin*2", {"margin": 10}.get) == 20

    def test_failed_expression_falls_back(self):
        """An expression that cannot be evaluated resolves to its text."""
        assert resolve_value("foo*2") == "foo*2"
        assert resolve_value("10 +") == "10 +"

    def test_declared_variable(self):
        assert resolve_value("margin", {"margin": 10}.get) == 10

    def test_undeclared_identifier(self):
        assert resolve_value("margin", {}.get) == "margin"
        assert resolve_value("margin") == "margin"

    def test_plain_numbers(self):
        assert resolve_value("42") == 42
        assert resolve_value("3.25") == 3.25
        assert resolve_value("1e3") == 1000.0


class TestParseArguments:

    def test_call_arguments(self):
        args = parse_arguments('"Score", WIDTH_X, 20', {"WIDTH_X": 100}.get)
        assert args == ["Score", 100, 20]

    def test_mixed(self):
        args = parse_arguments("0, 0, 240, 320, TFT_RED")
        assert args == [0, 0, 240, 320, "TFT_RED"]

    @pytest.mark.parametrize("text", ["", "  "])
    def test_empty(self, text):
        assert parse_arguments(text) == []
