## base class of drawable surfaces for tftsim
## Copyright (c) 2025 tftsim contributors
## All rights reserved

import math
from abc import ABC, abstractmethod

from tftsim.colors import Color, BLACK

## number of straight segments used to flatten each rounded corner
ROUND_RECT_SEGMENTS = 8


## geometry helpers
## ----------------

def all_finite(*values):
    """True if every value is a finite number"""
    return all(math.isfinite(v) for v in values)


def points_finite(points):
    return all(all_finite(*p) for p in points)


def normalize_rect(x, y, w, h):
    """Return (x0, y0, x1, y1) with x0 <= x1, y0 <= y1 for a possibly
    negative width or height, as a canvas does"""
    x1 = x + w
    y1 = y + h
    return (min(x, x1), min(y, y1), max(x, x1), max(y, y1))


def quad_bezier(p0, c, p1, segments=ROUND_RECT_SEGMENTS):
    """Flatten a quadratic Bezier from p0 to p1 with control point c.
    Returns the points after p0, ending with p1."""
    pts = []
    for i in range(1, segments + 1):
        t = i / segments
        u = 1.0 - t
        pts.append((u * u * p0[0] + 2 * u * t * c[0] + t * t * p1[0],
                    u * u * p0[1] + 2 * u * t * c[1] + t * t * p1[1]))
    return pts


def round_rect_points(x, y, w, h, r, segments=ROUND_RECT_SEGMENTS):
    """Closed outline of a rectangle whose corners are quadratic curves
    of radius r, starting at the top edge tangent point (x+r, y)"""
    pts = [(x + r, y), (x + w - r, y)]
    pts += quad_bezier(pts[-1], (x + w, y), (x + w, y + r), segments)
    pts.append((x + w, y + h - r))
    pts += quad_bezier(pts[-1], (x + w, y + h), (x + w - r, y + h), segments)
    pts.append((x + r, y + h))
    pts += quad_bezier(pts[-1], (x, y + h), (x, y + h - r), segments)
    pts.append((x, y + r))
    # the last curve closes the outline back at the start point
    pts += quad_bezier(pts[-1], (x, y), (x + r, y), segments)[:-1]
    return pts


def _check_radius(r):
    if r < 0:
        raise ValueError("The radius provided ({}) is negative".format(r))


## Generic drawing surface -- all coordinates are screen pixels with the
## origin at the top left corner and y growing downward

class Drawable(ABC):
    """Base class for tftsim drawing surfaces"""

    def __init__(self, width, height):
        self.__width = width
        self.__height = height

    @property
    def width(self):
        return self.__width

    @property
    def height(self):
        return self.__height

    ## pure virtual functions -- override for specific rendering
    ## system.  Implementations treat non-finite coordinates as a no-op.

    @abstractmethod
    def fill_rect(self, x, y, w, h, color: Color):
        """filled axis-aligned rectangle"""

    @abstractmethod
    def draw_rect(self, x, y, w, h, color: Color):
        """one pixel rectangle outline"""

    @abstractmethod
    def draw_line(self, p0, p1, color: Color):
        """straight line from p0 to p1"""

    @abstractmethod
    def fill_polygon(self, points, color: Color):
        """filled closed polygon"""

    @abstractmethod
    def draw_polygon(self, points, color: Color):
        """closed polygon outline"""

    @abstractmethod
    def fill_ellipse(self, center, rx, ry, color: Color):
        """filled axis-aligned ellipse"""

    @abstractmethod
    def draw_ellipse(self, center, rx, ry, color: Color):
        """axis-aligned ellipse outline"""

    @abstractmethod
    def draw_text(self, text, location, color: Color, size):
        """text whose top left corner is at location, glyphs size
        pixels high"""

    ## non-virtual utility drawing functions

    def clear(self, color: Color = BLACK):
        self.fill_screen(color)

    def fill_screen(self, color: Color):
        self.fill_rect(0, 0, self.width, self.height, color)

    def fill_circle(self, center, r, color: Color):
        if not math.isfinite(r):
            return
        _check_radius(r)
        self.fill_ellipse(center, r, r, color)

    def draw_circle(self, center, r, color: Color):
        if not math.isfinite(r):
            return
        _check_radius(r)
        self.draw_ellipse(center, r, r, color)

    def fill_triangle(self, p0, p1, p2, color: Color):
        self.fill_polygon([p0, p1, p2], color)

    def draw_triangle(self, p0, p1, p2, color: Color):
        self.draw_polygon([p0, p1, p2], color)

    def fill_round_rect(self, x, y, w, h, r, color: Color):
        self.fill_polygon(round_rect_points(x, y, w, h, r), color)

    def draw_round_rect(self, x, y, w, h, r, color: Color):
        self.draw_polygon(round_rect_points(x, y, w, h, r), color)
