"""
Color handling for the TFT simulator.

Display colors are 16-bit RGB565 values (5 bits red, 6 bits green, 5 bits
blue). They are expanded to 8 bits per channel before they reach a
Drawable, scaling each field to the full 0-255 range.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

# Prefix shared by all symbolic color constants
COLOR_PREFIX = "TFT_"

HEX_PREFIXES = ("0x", "0X")


@dataclass(frozen=True)
class Color:
    """An 8-bit-per-channel RGB color."""
    r: int
    g: int
    b: int

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @property
    def hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def __str__(self) -> str:
        return f"rgb({self.r}, {self.g}, {self.b})"


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)

# Unrecognized colors degrade to this instead of failing the statement
DEFAULT_COLOR = WHITE

TFT_COLORS: Dict[str, int] = {
    "TFT_BLACK": 0x0000,
    "TFT_NAVY": 0x000F,
    "TFT_DARKGREEN": 0x03E0,
    "TFT_DARKCYAN": 0x03EF,
    "TFT_MAROON": 0x7800,
    "TFT_PURPLE": 0x780F,
    "TFT_OLIVE": 0x7BE0,
    "TFT_LIGHTGRAY": 0xC618,
    "TFT_LIGHTGREY": 0xC618,
    "TFT_DARKGRAY": 0x7BEF,
    "TFT_DARKGREY": 0x7BEF,
    "TFT_BLUE": 0x001F,
    "TFT_GREEN": 0x07E0,
    "TFT_CYAN": 0x07FF,
    "TFT_RED": 0xF800,
    "TFT_MAGENTA": 0xF81F,
    "TFT_YELLOW": 0xFFE0,
    "TFT_WHITE": 0xFFFF,
    "TFT_ORANGE": 0xFD20,
    "TFT_GREENYELLOW": 0xAFE5,
    "TFT_PINK": 0xF81F,
    "TFT_BROWN": 0x9A60,
    "TFT_GOLD": 0xFEA0,
    "TFT_SILVER": 0xC618,
    "TFT_SKYBLUE": 0x867D,
    "TFT_VIOLET": 0x915C,
    "TFT_GRAY": 0x8410,
    "TFT_GREY": 0x8410,
}


def _to_int16(value: float) -> int:
    """Truncate a number toward zero and keep its low 16 bits."""
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        value = math.trunc(value)
    return int(value) & 0xFFFF


def rgb565_to_color(value) -> Color:
    """Expand an RGB565 value into an 8-bit-per-channel Color."""
    value = _to_int16(value)
    r = (value >> 11) & 0x1F
    g = (value >> 5) & 0x3F
    b = value & 0x1F
    return Color(round(r * 255 / 31), round(g * 255 / 63), round(b * 255 / 31))


def color_to_rgb565(color: Color) -> int:
    """Pack an 8-bit Color back into RGB565 (nearest representable value)."""
    r = round(color.r * 31 / 255)
    g = round(color.g * 63 / 255)
    b = round(color.b * 31 / 255)
    return (r << 11) | (g << 5) | b


def is_color_name(value: Any) -> bool:
    """Check if a value is a symbolic color constant name."""
    return isinstance(value, str) and value.startswith(COLOR_PREFIX)


def lookup_color_constant(name: str):
    """RGB565 value of a TFT_ constant, or None if it is not defined."""
    return TFT_COLORS.get(name)


def resolve_color(value: Any) -> Color:
    """
    Resolve an argument value to a display color.

    Accepts a TFT_ constant name, a number (RGB565), or a hex string.
    Anything unrecognized resolves to white; this never raises.
    """
    if is_color_name(value):
        code = TFT_COLORS.get(value)
        if code is not None:
            return rgb565_to_color(code)

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return rgb565_to_color(value)

    if isinstance(value, str) and value.startswith(HEX_PREFIXES):
        try:
            return rgb565_to_color(int(value, 16))
        except ValueError:
            return DEFAULT_COLOR

    return DEFAULT_COLOR
