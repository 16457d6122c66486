## simple tftsim preview window using the pyglet package
## Copyright (c) 2025 tftsim contributors
## All rights reserved

import pyglet
import pyglet.gl as gl
from pyglet.window import key

## instructions for user interaction, printed when the window opens
tftsim_legend = """tftsim preview
  g: toggle 10px grid overlay
  up-arrow / down-arrow: zoom in / out
  ESC: close viewer"""

MAX_SCALE = 8


def _texture(image):
    """pyglet texture from a Pillow image; rows are flipped because
    pyglet's origin is the bottom left corner"""
    image = image.convert("RGB")
    w, h = image.size
    data = pyglet.image.ImageData(w, h, 'RGB', image.tobytes(), pitch=-w * 3)
    return data.get_texture()


class Viewer:
    """Window showing a RasterDrawable at an integer zoom factor"""

    def __init__(self, surface, title="tftsim", scale=2):
        self.surface = surface
        self.scale = max(1, min(MAX_SCALE, int(scale)))
        self.show_grid = False

        # keep pixels crisp when zoomed
        pyglet.image.Texture.default_mag_filter = gl.GL_NEAREST
        pyglet.image.Texture.default_min_filter = gl.GL_NEAREST

        self.__plain = _texture(surface.image)
        self.__grid = _texture(surface.with_grid())
        self.window = pyglet.window.Window(surface.width * self.scale,
                                           surface.height * self.scale,
                                           caption=title)
        self.window.push_handlers(self)

    def on_draw(self):
        self.window.clear()
        texture = self.__grid if self.show_grid else self.__plain
        texture.blit(0, 0, width=self.surface.width * self.scale,
                     height=self.surface.height * self.scale)

    def on_key_press(self, symbol, modifiers):
        if symbol == key.G:
            self.show_grid = not self.show_grid
        elif symbol == key.UP and self.scale < MAX_SCALE:
            self._rescale(self.scale + 1)
        elif symbol == key.DOWN and self.scale > 1:
            self._rescale(self.scale - 1)

    def _rescale(self, scale):
        self.scale = scale
        self.window.set_size(self.surface.width * scale,
                             self.surface.height * scale)


def show(surface, title="tftsim", scale=2):
    """open a preview window and block until it is closed"""
    print(tftsim_legend)
    Viewer(surface, title, scale)
    pyglet.app.run()
