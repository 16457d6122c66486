## in-memory raster drawable for tftsim, rendered with Pillow
## Copyright (c) 2025 tftsim contributors
## All rights reserved

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from tftsim.colors import Color, BLACK
import tftsim.drawable as drawable
from tftsim.drawable import all_finite, points_finite, normalize_rect

## grid overlay used by the preview: 10 pixel cells, 30% gray
GRID_SPACING = 10
GRID_COLOR = (100, 100, 100)
GRID_ALPHA = 0.3

## coordinates are clamped to this range before they reach Pillow
_COORD_LIMIT = 1 << 20

## ellipses reaching further than this many screen sizes past the edge
## are rasterized from a per-pixel mask instead of by Pillow
_RASTER_REACH = 4


def _px(v):
    """nearest pixel coordinate, clamped to a range Pillow accepts"""
    return int(round(max(-_COORD_LIMIT, min(_COORD_LIMIT, v))))


def _pt(p):
    return (_px(p[0]), _px(p[1]))


class RasterDrawable(drawable.Drawable):
    """Drawable backed by a Pillow RGB image, the simulated TFT screen"""

    def __init__(self, width, height, background: Color = BLACK):
        super().__init__(int(width), int(height))
        self.__image = Image.new("RGB", (self.width, self.height), background.rgb)
        self.__draw = ImageDraw.Draw(self.__image)
        self.__fonts = {}

    def __repr__(self):
        return 'RasterDrawable({}, {})'.format(self.width, self.height)

    @property
    def image(self):
        return self.__image

    def _font(self, size):
        size = max(1, int(round(size)))
        font = self.__fonts.get(size)
        if font is None:
            font = ImageFont.load_default(size=size)
            self.__fonts[size] = font
        return font

    ## Overload virtual tftsim.drawable base class drawing methods

    def fill_rect(self, x, y, w, h, color):
        if not all_finite(x, y, w, h):
            return
        x0, y0, x1, y1 = normalize_rect(x, y, w, h)
        # pixels whose centers fall inside the rectangle
        px0 = max(_px(x0), 0)
        py0 = max(_px(y0), 0)
        px1 = min(_px(x1), self.width) - 1
        py1 = min(_px(y1), self.height) - 1
        if px1 < px0 or py1 < py0:
            return
        self.__draw.rectangle([px0, py0, px1, py1], fill=color.rgb)

    def draw_rect(self, x, y, w, h, color):
        if not all_finite(x, y, w, h) or w == 0 or h == 0:
            return
        x0, y0, x1, y1 = normalize_rect(x, y, w, h)
        px0, py0 = _px(x0), _px(y0)
        px1 = max(_px(x1) - 1, px0)
        py1 = max(_px(y1) - 1, py0)
        self.__draw.rectangle([px0, py0, px1, py1], outline=color.rgb, width=1)

    def draw_line(self, p0, p1, color):
        if not points_finite([p0, p1]):
            return
        self.__draw.line([_pt(p0), _pt(p1)], fill=color.rgb, width=1)

    def fill_polygon(self, points, color):
        if not points_finite(points):
            return
        self.__draw.polygon([_pt(p) for p in points], fill=color.rgb)

    def draw_polygon(self, points, color):
        if not points_finite(points):
            return
        self.__draw.polygon([_pt(p) for p in points], outline=color.rgb)

    def _ellipse_box(self, center, rx, ry):
        cx, cy = center
        return [_px(cx - rx), _px(cy - ry), _px(cx + rx), _px(cy + ry)]

    def _near_screen(self, center, rx, ry):
        """True if the ellipse's bounding box stays within reach of the
        screen, so Pillow can rasterize it at a cost bounded by the screen"""
        reach = _RASTER_REACH * max(self.width, self.height)
        cx, cy = center
        return (cx - rx >= -reach and cy - ry >= -reach and
                cx + rx <= self.width + reach and cy + ry <= self.height + reach)

    def _off_screen(self, center, rx, ry):
        cx, cy = center
        return (cx + rx < 0 or cy + ry < 0 or
                cx - rx > self.width or cy - ry > self.height)

    def _ellipse_mask(self, center, rx, ry):
        """(height, width) mask of the pixels whose centers lie inside
        the ellipse"""
        cx, cy = center
        ys, xs = np.mgrid[0:self.height, 0:self.width]
        with np.errstate(over='ignore'):
            dx = (xs + 0.5 - cx) / rx
            dy = (ys + 0.5 - cy) / ry
            return dx * dx + dy * dy <= 1.0

    def _paint(self, mask, color):
        if mask.any():
            stencil = Image.fromarray(mask.astype(np.uint8) * 255)
            self.__image.paste(color.rgb, (0, 0, self.width, self.height), stencil)

    def fill_ellipse(self, center, rx, ry, color):
        if not all_finite(center[0], center[1], rx, ry) or rx <= 0 or ry <= 0:
            return
        if self._off_screen(center, rx, ry):
            return
        if self._near_screen(center, rx, ry):
            self.__draw.ellipse(self._ellipse_box(center, rx, ry), fill=color.rgb)
        else:
            self._paint(self._ellipse_mask(center, rx, ry), color)

    def draw_ellipse(self, center, rx, ry, color):
        if not all_finite(center[0], center[1], rx, ry) or rx <= 0 or ry <= 0:
            return
        if self._off_screen(center, rx, ry):
            return
        if self._near_screen(center, rx, ry):
            self.__draw.ellipse(self._ellipse_box(center, rx, ry),
                                outline=color.rgb, width=1)
            return
        # boundary pixels: inside, with a 4-neighbour outside; the screen
        # edge does not count as outside
        inside = self._ellipse_mask(center, rx, ry)
        edge = np.pad(inside, 1, mode='edge')
        interior = (edge[:-2, 1:-1] & edge[2:, 1:-1] &
                    edge[1:-1, :-2] & edge[1:-1, 2:])
        self._paint(inside & ~interior, color)

    def draw_text(self, text, location, color, size):
        if not all_finite(location[0], location[1], size) or not text:
            return
        self.__draw.text((_px(location[0]), _px(location[1])), text,
                         fill=color.rgb, font=self._font(size))

    ## raster access

    def pixel(self, x, y):
        """color of the pixel at (x, y)"""
        r, g, b = self.__image.getpixel((x, y))
        return Color(r, g, b)

    def to_array(self):
        """copy of the screen as a (height, width, 3) uint8 array"""
        return np.array(self.__image, dtype=np.uint8)

    def with_grid(self, spacing=GRID_SPACING, color=GRID_COLOR, alpha=GRID_ALPHA):
        """copy of the screen with a translucent grid composited on top;
        the screen itself is left untouched"""
        overlay = Image.new("RGBA", self.__image.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay)
        ink = tuple(color) + (int(round(alpha * 255)),)
        for x in range(0, self.width + 1, spacing):
            draw.line([(x, 0), (x, self.height)], fill=ink, width=1)
        for y in range(0, self.height + 1, spacing):
            draw.line([(0, y), (self.width, y)], fill=ink, width=1)
        base = self.__image.convert("RGBA")
        return Image.alpha_composite(base, overlay).convert("RGB")

    def save(self, path, grid=False):
        image = self.with_grid() if grid else self.__image
        image.save(path)
