## dxf export of tftsim drawings using the ezdxf package
## Copyright (c) 2025 tftsim contributors
## All rights reserved

import math

import ezdxf
from ezdxf import colors as dxfcolors
from ezdxf.enums import TextEntityAlignment

import tftsim.drawable as drawable
from tftsim.drawable import all_finite, points_finite, normalize_rect

## segments used to approximate a filled ellipse boundary
ELLIPSE_SEGMENTS = 64


class EzdxfDrawable(drawable.Drawable):
    """Drawable that records every primitive as DXF entities.

    DXF's y axis points up, so screen coordinates are flipped about the
    screen height; the drawing reads the same way it does on the TFT.
    Outlines go on the SHAPES layer, fills on FILLS, text on TEXT.
    """

    def __init__(self, width, height):
        super().__init__(width, height)

        # setup=False avoids creating default blocks that contain SOLID
        # entities unsupported by some CAD programs
        self.__doc = ezdxf.new(dxfversion='R2010', setup=False)
        self.__doc.header['$INSUNITS'] = 0  # unitless: one unit per pixel
        self.__doc.layers.new('SHAPES', dxfattribs={'color': 7})
        self.__doc.layers.new('FILLS', dxfattribs={'color': 8})
        self.__doc.layers.new('TEXT', dxfattribs={'color': 2})
        self.__msp = self.__doc.modelspace()

    def __repr__(self):
        return 'EzdxfDrawable({}, {})'.format(self.width, self.height)

    @property
    def document(self):
        return self.__doc

    @property
    def modelspace(self):
        return self.__msp

    def _xy(self, p):
        return (p[0], self.height - p[1])

    def _attribs(self, layer, color):
        return {'layer': layer, 'true_color': dxfcolors.rgb2int(color.rgb)}

    def _hatch(self, points, color):
        hatch = self.__msp.add_hatch(dxfattribs={'layer': 'FILLS'})
        hatch.set_solid_fill(rgb=color.rgb)
        hatch.paths.add_polyline_path([self._xy(p) for p in points], is_closed=True)
        return hatch

    ## Overload virtual tftsim.drawable base class drawing methods

    def fill_rect(self, x, y, w, h, color):
        if not all_finite(x, y, w, h) or w == 0 or h == 0:
            return
        x0, y0, x1, y1 = normalize_rect(x, y, w, h)
        self._hatch([(x0, y0), (x1, y0), (x1, y1), (x0, y1)], color)

    def draw_rect(self, x, y, w, h, color):
        if not all_finite(x, y, w, h) or w == 0 or h == 0:
            return
        x0, y0, x1, y1 = normalize_rect(x, y, w, h)
        self.draw_polygon([(x0, y0), (x1, y0), (x1, y1), (x0, y1)], color)

    def draw_line(self, p0, p1, color):
        if not points_finite([p0, p1]):
            return
        self.__msp.add_line(self._xy(p0), self._xy(p1),
                            dxfattribs=self._attribs('SHAPES', color))

    def fill_polygon(self, points, color):
        if not points_finite(points):
            return
        self._hatch(points, color)

    def draw_polygon(self, points, color):
        if not points_finite(points):
            return
        self.__msp.add_lwpolyline([self._xy(p) for p in points], close=True,
                                  dxfattribs=self._attribs('SHAPES', color))

    def fill_ellipse(self, center, rx, ry, color):
        if not all_finite(center[0], center[1], rx, ry) or rx <= 0 or ry <= 0:
            return
        pts = []
        for i in range(ELLIPSE_SEGMENTS):
            a = math.tau * i / ELLIPSE_SEGMENTS
            pts.append((center[0] + rx * math.cos(a), center[1] + ry * math.sin(a)))
        self._hatch(pts, color)

    def draw_ellipse(self, center, rx, ry, color):
        if not all_finite(center[0], center[1], rx, ry) or rx <= 0 or ry <= 0:
            return
        attribs = self._attribs('SHAPES', color)
        if rx == ry:
            self.__msp.add_circle(self._xy(center), rx, dxfattribs=attribs)
        elif rx > ry:
            self.__msp.add_ellipse(self._xy(center), major_axis=(rx, 0, 0),
                                   ratio=ry / rx, dxfattribs=attribs)
        else:
            self.__msp.add_ellipse(self._xy(center), major_axis=(0, ry, 0),
                                   ratio=rx / ry, dxfattribs=attribs)

    def draw_text(self, text, location, color, size):
        if not all_finite(location[0], location[1], size) or not text:
            return
        attribs = self._attribs('TEXT', color)
        attribs['height'] = size
        self.__msp.add_text(text, dxfattribs=attribs).set_placement(
            self._xy(location), align=TextEntityAlignment.TOP_LEFT)

    def save(self, path):
        self.__doc.saveas(path)
