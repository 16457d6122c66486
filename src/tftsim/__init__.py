"""tftsim: run TFT_eSPI-style drawing code on a simulated screen."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tftsim")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"


from tftsim.colors import Color, TFT_COLORS, resolve_color, rgb565_to_color
from tftsim.drawable import Drawable
from tftsim.raster_drawable import RasterDrawable
from tftsim.dsl import Interpreter


def render(source, width, height, drawable=None):
    """Run a program on a screen cleared to black.

    Returns (drawable, diagnostics); a RasterDrawable of the given size is
    created when no drawable is passed in.
    """
    if drawable is None:
        drawable = RasterDrawable(width, height)
    else:
        drawable.clear()
    diagnostics = Interpreter(drawable).parse(source, width, height)
    return drawable, diagnostics
