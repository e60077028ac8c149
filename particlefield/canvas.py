"""Drawing surfaces for the particle field.

A canvas exposes the small slice of a 2D context the field needs:
``clear``, ``stroke_line``, ``fill_circle`` and a ``global_alpha`` that
multiplies every subsequent draw until it is reset.
"""
import math
from collections import namedtuple

import pygame


def _alpha_byte(alpha):
    return max(0, min(255, int(round(alpha * 255))))


class Canvas:
    def __init__(self):
        self.global_alpha = 1.0

    @property
    def size(self):
        return (0, 0)

    def clear(self, color):
        """
        Placeholder for clearing the whole surface to `color`.
        """
        pass

    def stroke_line(self, start, end, color, alpha, width):
        """
        Placeholder for stroking a segment with `color` at opacity `alpha`.
        """
        pass

    def fill_circle(self, center, radius, color):
        """
        Placeholder for filling a circle, using the current global_alpha.
        """
        pass

    def resize(self, width, height):
        pass

    def present(self):
        pass

    def __repr__(self):
        return f"<{self.__class__.__name__} size={self.size} global_alpha={self.global_alpha}>"


LineCall = namedtuple('LineCall', ['start', 'end', 'color', 'alpha', 'width', 'global_alpha'])
CircleCall = namedtuple('CircleCall', ['center', 'radius', 'color', 'global_alpha'])


class RecordingCanvas(Canvas):
    """Canvas that keeps every draw call of the current frame instead of rasterizing."""

    def __init__(self, width=0, height=0):
        super().__init__()
        self.width = width
        self.height = height
        self.clears = 0
        self.background = None
        self.lines = []
        self.circles = []

    @property
    def size(self):
        return (self.width, self.height)

    def resize(self, width, height):
        self.width = width
        self.height = height

    def clear(self, color):
        self.clears += 1
        self.background = color
        self.lines = []
        self.circles = []

    def stroke_line(self, start, end, color, alpha, width):
        self.lines.append(LineCall(tuple(start), tuple(end), tuple(color), alpha, width, self.global_alpha))

    def fill_circle(self, center, radius, color):
        self.circles.append(CircleCall(tuple(center), radius, tuple(color), self.global_alpha))


class PygameCanvas(Canvas):
    """
    Canvas backed by a pygame Surface.

    Lines are collected on a transparent layer and composited once, before
    the first circle of the frame, so they always sit behind the particles.
    pygame cannot stroke sub-pixel widths; a 0.3px line is drawn 1px wide
    with its opacity scaled by the width instead.
    """

    def __init__(self, surface):
        super().__init__()
        self.surface = surface
        self._lines = None
        self._lines_dirty = False
        self._make_line_layer()

    def _make_line_layer(self):
        w, h = self.surface.get_size()
        self._lines = pygame.Surface((max(1, w), max(1, h)), pygame.SRCALPHA)
        self._lines_dirty = False

    def resize(self, width, height):
        # follow the display surface when it was reallocated, else keep an offscreen one
        surface = pygame.display.get_surface() if pygame.display.get_init() else None
        if surface is None or surface.get_size() != (width, height):
            surface = pygame.Surface((width, height))
        self.surface = surface
        self._make_line_layer()

    @property
    def size(self):
        return self.surface.get_size()

    def clear(self, color):
        self.surface.fill(color)
        if self._lines_dirty:
            self._lines.fill((0, 0, 0, 0))
            self._lines_dirty = False

    def stroke_line(self, start, end, color, alpha, width):
        a = _alpha_byte(alpha * self.global_alpha * min(width, 1.0))
        if a == 0:
            return
        pygame.draw.line(self._lines, (color[0], color[1], color[2], a), start, end, max(1, int(round(width))))
        self._lines_dirty = True

    def fill_circle(self, center, radius, color):
        self._flush_lines()
        a = _alpha_byte(self.global_alpha)
        if a == 0:
            return
        # radii under 1px would rasterize to nothing
        radius = max(1.0, radius)
        if a == 255:
            pygame.draw.circle(self.surface, color, center, radius)
            return
        size = int(math.ceil(radius * 2)) + 2
        sprite = pygame.Surface((size, size), pygame.SRCALPHA)
        pygame.draw.circle(sprite, (color[0], color[1], color[2], a), (size / 2, size / 2), radius)
        self.surface.blit(sprite, (int(center[0] - size / 2), int(center[1] - size / 2)))

    def _flush_lines(self):
        if self._lines_dirty:
            self.surface.blit(self._lines, (0, 0))
            self._lines.fill((0, 0, 0, 0))
            self._lines_dirty = False

    def present(self):
        self._flush_lines()
